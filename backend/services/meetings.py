"""Meetings. Unlike most endpoints these paginate with an opaque cursor."""

from __future__ import annotations

from typing import Any

from backend.client import AttioClient
from backend.models import MeetingInfo, MeetingParticipant, Page
from backend.settings import PAGE_SIZE


def _datetime_of(value: dict[str, Any] | None) -> str:
    """Start/end are either {"datetime": ...} or all-day {"date": ...}."""
    if not value:
        return ""
    return value.get("datetime") or value.get("date") or ""


def _to_meeting(payload: dict[str, Any]) -> MeetingInfo:
    return MeetingInfo(
        id=(payload.get("id") or {}).get("meeting_id", ""),
        title=payload.get("title") or "",
        description=payload.get("description") or "",
        start_at=_datetime_of(payload.get("start")),
        end_at=_datetime_of(payload.get("end")),
        participants=[
            MeetingParticipant(
                email_address=p.get("email_address"),
                is_organizer=bool(p.get("is_organizer")),
                status=p.get("status") or "",
            )
            for p in payload.get("participants") or []
        ],
    )


async def fetch_meetings(
    client: AttioClient,
    cursor: str | None = None,
    limit: int = PAGE_SIZE,
) -> Page[MeetingInfo]:
    params: dict[str, Any] = {"limit": limit}
    if cursor:
        params["cursor"] = cursor

    response = await client.get("/v2/meetings", params=params)
    meetings = tuple(_to_meeting(m) for m in response.get("data") or [])
    next_cursor = (response.get("pagination") or {}).get("next_cursor")
    return Page(items=meetings, next_cursor=next_cursor or None)
