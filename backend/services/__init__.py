"""Per-resource wrappers over the Attio REST API."""
