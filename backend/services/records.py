"""Objects and their records."""

from __future__ import annotations

from typing import Any

from backend.client import AttioClient
from backend.models import ObjectInfo, Page, RecordInfo
from backend.pagination import next_offset_cursor, parse_cursor_offset
from backend.settings import PAGE_SIZE


def _to_record(payload: dict[str, Any]) -> RecordInfo:
    ids = payload.get("id") or {}
    return RecordInfo(
        id=ids.get("record_id", ""),
        object_id=ids.get("object_id", ""),
        values=payload.get("values") or {},
        created_at=payload.get("created_at") or "",
    )


async def fetch_objects(client: AttioClient) -> list[ObjectInfo]:
    """Fetch every object in the workspace, skipping ones without an API slug."""
    body = await client.get("/v2/objects")
    objects = []
    for obj in body.get("data") or []:
        if not obj.get("api_slug"):
            continue
        objects.append(
            ObjectInfo(
                id=(obj.get("id") or {}).get("object_id", ""),
                api_slug=obj["api_slug"],
                singular_noun=obj.get("singular_noun") or "",
                plural_noun=obj.get("plural_noun") or "",
            )
        )
    return objects


async def query_records(
    client: AttioClient,
    object_slug: str,
    cursor: str | None = None,
    limit: int = PAGE_SIZE,
) -> Page[RecordInfo]:
    """Query one page of records for an object."""
    body: dict[str, Any] = {"limit": limit}
    offset = parse_cursor_offset(cursor)
    if offset is not None:
        body["offset"] = offset

    response = await client.post(f"/v2/objects/{object_slug}/records/query", json=body)
    records = tuple(_to_record(r) for r in response.get("data") or [])
    return Page(items=records, next_cursor=next_offset_cursor(cursor, len(records), limit))

