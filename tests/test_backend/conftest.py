"""Shared fixtures for backend API tests."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest


@pytest.fixture
def mock_client():
    """AttioClient stand-in whose HTTP verbs are AsyncMocks returning empty bodies."""
    client = MagicMock(name="AttioClient")
    client.get = AsyncMock(return_value={"data": []})
    client.post = AsyncMock(return_value={"data": []})
    client.patch = AsyncMock(return_value={"data": {}})
    client.delete = AsyncMock(return_value={})
    return client
