"""Create, update and delete webhooks on behalf of the webhook modal."""

import logging
from typing import Iterable

from backend.client import AttioClient
from backend.errors import extract_error_message
from backend.services.webhooks import create_webhook, delete_webhook, update_webhook

logger = logging.getLogger("attio_tui")


class WebhookOperations:
    """Runs one webhook mutation at a time and remembers the last error.

    Each operation returns True on success. On failure it returns False and
    leaves a display-ready message in ``error``; nothing is raised.
    """

    def __init__(self, client: AttioClient | None):
        self.client = client
        self.is_submitting = False
        self.error: str | None = None

    def clear_error(self) -> None:
        self.error = None

    async def create(self, target_url: str, event_types: Iterable[str]) -> bool:
        return await self._run(
            "create",
            "Failed to create webhook",
            lambda client: create_webhook(client, target_url, list(event_types)),
        )

    async def update(self, webhook_id: str, target_url: str, event_types: Iterable[str]) -> bool:
        return await self._run(
            "update",
            "Failed to update webhook",
            lambda client: update_webhook(
                client, webhook_id, target_url=target_url, event_types=list(event_types)
            ),
        )

    async def delete(self, webhook_id: str) -> bool:
        return await self._run(
            "delete",
            "Failed to delete webhook",
            lambda client: delete_webhook(client, webhook_id),
        )

    async def _run(self, name: str, fallback: str, operation) -> bool:
        if self.client is None:
            self.error = "No client available"
            return False

        self.is_submitting = True
        self.error = None
        try:
            await operation(self.client)
        except Exception as exc:
            message = extract_error_message(exc)
            self.error = message if message != "Unknown error" else fallback
            logger.error("Webhook %s failed: %s", name, self.error, exc_info=True)
            return False
        finally:
            self.is_submitting = False
        logger.info("Webhook %s succeeded", name)
        return True
