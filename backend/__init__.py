"""Backend for the Attio TUI: REST client, record models and per-resource services."""

from backend.client import AttioClient
from backend.errors import AttioApiError, extract_error_message
from backend.models import Page

__all__ = [
    "AttioApiError",
    "AttioClient",
    "Page",
    "extract_error_message",
]
