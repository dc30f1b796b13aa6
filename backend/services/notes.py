"""Notes."""

from __future__ import annotations

from typing import Any

from backend.client import AttioClient
from backend.models import NoteInfo, Page
from backend.pagination import next_offset_cursor, parse_cursor_offset
from backend.settings import PAGE_SIZE


def _to_note(payload: dict[str, Any]) -> NoteInfo:
    actor = payload.get("created_by_actor") or {}
    return NoteInfo(
        id=(payload.get("id") or {}).get("note_id", ""),
        parent_object=payload.get("parent_object") or "",
        parent_record_id=payload.get("parent_record_id") or "",
        title=payload.get("title") or "",
        content_plaintext=payload.get("content_plaintext") or "",
        created_at=payload.get("created_at") or "",
        created_by_type=actor.get("type") or "unknown",
        created_by_id=actor.get("id") or "",
    )


async def fetch_notes(
    client: AttioClient,
    cursor: str | None = None,
    limit: int = PAGE_SIZE,
    parent_object: str | None = None,
    parent_record_id: str | None = None,
) -> Page[NoteInfo]:
    """Fetch one page of notes, optionally scoped to a parent record."""
    params: dict[str, Any] = {"limit": limit}
    offset = parse_cursor_offset(cursor)
    if offset is not None:
        params["offset"] = offset
    if parent_object:
        params["parent_object"] = parent_object
    if parent_record_id:
        params["parent_record_id"] = parent_record_id

    response = await client.get("/v2/notes", params=params)
    notes = tuple(_to_note(n) for n in response.get("data") or [])
    return Page(items=notes, next_cursor=next_offset_cursor(cursor, len(notes), limit))
