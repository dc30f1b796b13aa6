"""Backend configuration for the Attio TUI."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# Project-local .env wins over one in the home directory.
for _env_path in (Path.cwd() / ".env", Path.home() / ".attio-tui.env"):
    if _env_path.exists():
        load_dotenv(_env_path)
        break


def _env_flag(name: str, default: bool = False) -> bool:
    """Return True if the environment variable is set to a truthy value."""
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_float(name: str, default: float) -> float:
    """Parse a float env var, falling back to default on garbage."""
    try:
        return float(os.getenv(name, str(default)))
    except ValueError:
        return default


def _env_int(name: str, default: int) -> int:
    """Parse an int env var, falling back to default on garbage."""
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


ATTIO_API_KEY = os.getenv("ATTIO_API_KEY") or None
ATTIO_BASE_URL = os.getenv("ATTIO_BASE_URL", "https://api.attio.com").rstrip("/")

# Request timeout for a single HTTP call. The controller itself imposes none.
REQUEST_TIMEOUT_SECONDS = _env_float("ATTIO_REQUEST_TIMEOUT_SECONDS", 30.0)

# Pagination
PAGE_SIZE = _env_int("ATTIO_PAGE_SIZE", 25)
PREFETCH_THRESHOLD = _env_int("ATTIO_PREFETCH_THRESHOLD", 5)

# After a failed fetch, automatic load-more/prefetch attempts are suppressed
# for this long. An explicit refresh always bypasses it.
LOAD_MORE_COOLDOWN_SECONDS = _env_float("ATTIO_LOAD_MORE_COOLDOWN_SECONDS", 1.5)

# Debug panel
DEBUG_ENABLED_BY_DEFAULT = _env_flag("ATTIO_DEBUG", False)
REQUEST_LOG_LIMIT = _env_int("ATTIO_REQUEST_LOG_LIMIT", 50)

# Objects shown in the navigator alongside the fixed categories.
DEFAULT_OBJECT_SLUGS = tuple(
    slug.strip()
    for slug in os.getenv("ATTIO_OBJECT_SLUGS", "companies,people").split(",")
    if slug.strip()
)
