"""Frontend test fixtures."""

import pytest

from frontend.state.cache_store import CacheStore
from frontend.state.paginated_data import PaginatedDataController


@pytest.fixture
def controller():
    """Data controller with its own cache, isolated from the shared store."""
    return PaginatedDataController(cache_store=CacheStore())
