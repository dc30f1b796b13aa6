"""Lists, list statuses and list entries."""

from __future__ import annotations

import weakref
from typing import Any

from backend.client import AttioClient
from backend.models import ListEntryInfo, ListInfo, Page, StatusInfo
from backend.pagination import parse_cursor_offset
from backend.settings import PAGE_SIZE

# The lists endpoint is unpaginated; it is fetched once per initial page and
# sliced locally for subsequent cursors.
_list_cache: "weakref.WeakKeyDictionary[AttioClient, list[ListInfo]]" = (
    weakref.WeakKeyDictionary()
)


def _normalize_limit(limit: int | None) -> int:
    if limit is not None and limit > 0:
        return limit
    return PAGE_SIZE


def _to_list(payload: dict[str, Any]) -> ListInfo:
    parent = payload.get("parent_object") or []
    if isinstance(parent, str):
        parent = [parent]
    return ListInfo(
        id=(payload.get("id") or {}).get("list_id", ""),
        api_slug=payload.get("api_slug") or "",
        name=payload.get("name") or "",
        parent_object=parent[0] if parent else "",
    )


async def _fetch_all_lists(client: AttioClient) -> list[ListInfo]:
    response = await client.get("/v2/lists")
    lists = [_to_list(item) for item in response.get("data") or []]
    _list_cache[client] = lists
    return lists


async def fetch_lists(
    client: AttioClient,
    cursor: str | None = None,
    limit: int | None = None,
) -> Page[ListInfo]:
    """Page through the workspace's lists.

    The first page (no valid cursor) always refetches so a refresh picks up
    new lists; later pages slice the cached copy.
    """
    page_size = _normalize_limit(limit)
    offset = parse_cursor_offset(cursor)

    if offset is None or client not in _list_cache:
        lists = await _fetch_all_lists(client)
    else:
        lists = _list_cache[client]

    start = offset or 0
    page = tuple(lists[start : start + page_size])
    next_cursor = str(start + page_size) if start + page_size < len(lists) else None
    return Page(items=page, next_cursor=next_cursor)


def build_status_filter(attribute_slug: str, status_id: str) -> dict[str, Any]:
    """Filter expression matching entries whose status attribute equals status_id."""
    return {attribute_slug: {"status": {"$eq": status_id}}}


async def query_list_entries(
    client: AttioClient,
    list_id: str,
    cursor: str | None = None,
    limit: int | None = None,
    filter: dict[str, Any] | None = None,
) -> Page[ListEntryInfo]:
    """Query one page of entries, asking for one extra row to detect more."""
    page_size = _normalize_limit(limit)
    offset = parse_cursor_offset(cursor)

    body: dict[str, Any] = {"limit": page_size + 1}
    if offset is not None:
        body["offset"] = offset
    if filter:
        body["filter"] = filter

    response = await client.post(f"/v2/lists/{list_id}/entries/query", json=body)
    data = response.get("data") or []
    has_more = len(data) > page_size

    entries = tuple(
        ListEntryInfo(
            id=(entry.get("id") or {}).get("entry_id", ""),
            list_id=(entry.get("id") or {}).get("list_id", list_id),
            parent_record_id=entry.get("parent_record_id") or "",
            values=entry.get("entry_values") or {},
            created_at=entry.get("created_at") or "",
        )
        for entry in data[:page_size]
    )
    next_cursor = str((offset or 0) + page_size) if has_more else None
    return Page(items=entries, next_cursor=next_cursor)


async def find_list_status_attribute(client: AttioClient, list_id: str) -> dict[str, str] | None:
    """Return slug/title/attribute_id of the list's first status attribute, if any."""
    response = await client.get(f"/v2/lists/{list_id}/attributes")
    for attr in response.get("data") or []:
        if attr.get("type") == "status":
            return {
                "slug": attr.get("api_slug") or "",
                "title": attr.get("title") or "",
                "attribute_id": (attr.get("id") or {}).get("attribute_id", ""),
            }
    return None


async def fetch_list_statuses(
    client: AttioClient, list_id: str, attribute_slug: str
) -> list[StatusInfo]:
    response = await client.get(
        f"/v2/lists/{list_id}/attributes/{attribute_slug}/statuses"
    )
    return [
        StatusInfo(
            status_id=(status.get("id") or {}).get("status_id", ""),
            attribute_id=(status.get("id") or {}).get("attribute_id", ""),
            title=status.get("title") or "",
            is_archived=bool(status.get("is_archived")),
            celebration_enabled=bool(status.get("celebration_enabled")),
            target_time_in_status=status.get("target_time_in_status"),
        )
        for status in response.get("data") or []
    ]
