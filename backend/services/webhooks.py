"""Webhooks: listing plus create, update and delete."""

from __future__ import annotations

from typing import Any, Iterable

from backend.client import AttioClient
from backend.models import Page, WebhookInfo, WebhookSubscription
from backend.pagination import next_offset_cursor, parse_cursor_offset
from backend.settings import PAGE_SIZE


def _to_webhook(payload: dict[str, Any]) -> WebhookInfo:
    return WebhookInfo(
        id=(payload.get("id") or {}).get("webhook_id", ""),
        target_url=payload.get("target_url") or "",
        status=payload.get("status") or "active",
        subscriptions=[
            WebhookSubscription(event_type=s.get("event_type", ""), filter=s.get("filter"))
            for s in payload.get("subscriptions") or []
        ],
        created_at=payload.get("created_at") or "",
    )


def _subscriptions_body(event_types: Iterable[str]) -> list[dict[str, Any]]:
    return [{"event_type": event_type, "filter": None} for event_type in event_types]


async def fetch_webhooks(
    client: AttioClient,
    cursor: str | None = None,
    limit: int = PAGE_SIZE,
) -> Page[WebhookInfo]:
    params: dict[str, Any] = {"limit": limit}
    offset = parse_cursor_offset(cursor)
    if offset is not None:
        params["offset"] = offset

    response = await client.get("/v2/webhooks", params=params)
    webhooks = tuple(_to_webhook(w) for w in response.get("data") or [])
    return Page(items=webhooks, next_cursor=next_offset_cursor(cursor, len(webhooks), limit))


async def create_webhook(
    client: AttioClient, target_url: str, event_types: Iterable[str]
) -> WebhookInfo:
    response = await client.post(
        "/v2/webhooks",
        json={
            "data": {
                "target_url": target_url,
                "subscriptions": _subscriptions_body(event_types),
            }
        },
    )
    if not response.get("data"):
        raise ValueError("No webhook data returned")
    return _to_webhook(response["data"])


async def update_webhook(
    client: AttioClient,
    webhook_id: str,
    target_url: str | None = None,
    event_types: Iterable[str] | None = None,
    status: str | None = None,
) -> WebhookInfo:
    """Patch only the fields that were given."""
    data: dict[str, Any] = {}
    if target_url:
        data["target_url"] = target_url
    if status:
        data["status"] = status
    if event_types is not None:
        data["subscriptions"] = _subscriptions_body(event_types)

    response = await client.patch(f"/v2/webhooks/{webhook_id}", json={"data": data})
    if not response.get("data"):
        raise ValueError("No webhook data returned")
    return _to_webhook(response["data"])


async def delete_webhook(client: AttioClient, webhook_id: str) -> None:
    await client.delete(f"/v2/webhooks/{webhook_id}")
