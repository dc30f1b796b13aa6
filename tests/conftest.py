"""Test configuration.

## Known test warnings

RuntimeWarning about unawaited coroutines from Textual (Header._on_mount, Screen._watch_selections):
These warnings appear during Python interpreter shutdown and cannot be suppressed via
pytest's filterwarnings. They are emitted by Textual's internal async cleanup and do not
indicate test failures.
"""
from pathlib import Path
import sys

# Ensure project root is importable before backend imports.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

import backend.settings as backend_settings

# Tests never talk to the real API, whatever the developer's .env says.
backend_settings.ATTIO_API_KEY = None

# Patch Textual's Header._on_mount to handle NoMatches exception
# The original code only catches NoScreen but not NoMatches, causing test failures
# when HeaderTitle hasn't been composed yet.
try:
    from textual.widgets._header import Header
    from textual.css.query import NoMatches

    def patched_on_mount(self, event):
        async def set_title():
            try:
                self.query_one("HeaderTitle").update(self.format_title())
            except (NoMatches, Exception):
                pass

        self.watch(self.app, "title", set_title)
        self.watch(self.app, "sub_title", set_title)
        self.watch(self.screen, "title", set_title)
        self.watch(self.screen, "sub_title", set_title)

    Header._on_mount = patched_on_mount
except (ImportError, AttributeError):
    pass


@pytest.fixture(autouse=True)
def clear_default_cache():
    """Every test starts and ends with an empty process-wide category cache."""
    from frontend.state.cache_store import clear_category_cache

    clear_category_cache()
    yield
    clear_category_cache()


def assert_worker_running(screen, worker_name):
    """Return True if a worker with this name is running on the screen."""
    return any(w.name == worker_name and w.is_running for w in screen.workers)
