"""Offset-cursor helpers for endpoints that paginate by offset."""

from __future__ import annotations


def parse_cursor_offset(cursor: str | None) -> int | None:
    """Parse a cursor string as a non-negative integer offset.

    Returns None for missing, empty, non-integer or negative cursors.
    """
    if not cursor:
        return None
    try:
        parsed = int(cursor, 10)
    except ValueError:
        return None
    if parsed < 0:
        return None
    return parsed


def next_offset_cursor(cursor: str | None, received: int, limit: int) -> str | None:
    """Cursor for the page after ``cursor`` when a full page came back."""
    if received < limit:
        return None
    return str((parse_cursor_offset(cursor) or 0) + limit)
