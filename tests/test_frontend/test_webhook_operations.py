"""Tests for WebhookOperations."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from backend.errors import AttioApiError
from frontend.webhook_operations import WebhookOperations


class TestWebhookOperations:
    """Test create, update and delete outcomes."""

    @pytest.mark.asyncio
    async def test_without_client(self):
        ops = WebhookOperations(None)
        assert await ops.create("https://example.com", ["record.created"]) is False
        assert ops.error == "No client available"

    @pytest.mark.asyncio
    async def test_create_success(self):
        client = MagicMock()
        with patch("frontend.webhook_operations.create_webhook", new=AsyncMock()) as create:
            ops = WebhookOperations(client)
            ok = await ops.create("https://example.com", ("record.created",))

        assert ok is True
        assert ops.error is None
        assert ops.is_submitting is False
        create.assert_awaited_once_with(client, "https://example.com", ["record.created"])

    @pytest.mark.asyncio
    async def test_update_passes_fields(self):
        client = MagicMock()
        with patch("frontend.webhook_operations.update_webhook", new=AsyncMock()) as update:
            ok = await WebhookOperations(client).update("wh-1", "https://example.com", ["note.created"])

        assert ok is True
        update.assert_awaited_once_with(
            client, "wh-1", target_url="https://example.com", event_types=["note.created"]
        )

    @pytest.mark.asyncio
    async def test_failure_keeps_message(self):
        """API failures are reported through ``error`` instead of raising."""
        error = AttioApiError("invalid target", status=400)
        with patch("frontend.webhook_operations.delete_webhook", new=AsyncMock(side_effect=error)):
            ops = WebhookOperations(MagicMock())
            ok = await ops.delete("wh-1")

        assert ok is False
        assert ops.error == "Bad Request: invalid target"
        assert ops.is_submitting is False

    @pytest.mark.asyncio
    async def test_blank_failure_uses_fallback(self):
        with patch("frontend.webhook_operations.create_webhook", new=AsyncMock(side_effect=RuntimeError())):
            ops = WebhookOperations(MagicMock())
            await ops.create("https://example.com", [])
        assert ops.error == "Failed to create webhook"

    @pytest.mark.asyncio
    async def test_clear_error(self):
        ops = WebhookOperations(None)
        await ops.delete("wh-1")
        ops.clear_error()
        assert ops.error is None
