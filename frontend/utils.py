"""Utility functions for Attio TUI display formatting."""

import json
from datetime import datetime, timezone
from typing import Any

TITLE_ATTRIBUTES = ("name", "full_name", "title", "first_name", "company_name")
SUBTITLE_ATTRIBUTES = ("email_addresses", "domains", "description", "job_title")


def truncate_text(text: str | None, max_chars: int) -> str:
    """Trim text to max_chars, ending in "..." when anything was cut."""
    text = text or ""
    if len(text) <= max_chars:
        return text
    return text[: max(0, max_chars - 3)] + "..."


def _parse_datetime(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    return _normalize_datetime(parsed)


def _normalize_datetime(dt: datetime) -> datetime:
    """Ensure datetime is timezone-aware (UTC if naive)."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def format_date(value: str | None) -> str:
    if not value:
        return "-"
    parsed = _parse_datetime(value)
    return parsed.strftime("%Y-%m-%d") if parsed else value


def format_datetime(value: str | None) -> str:
    if not value:
        return "-"
    parsed = _parse_datetime(value)
    return parsed.strftime("%Y-%m-%d %H:%M") if parsed else value


def format_relative_time(value: datetime | str | None, now: datetime | None = None) -> str:
    """Describe how long ago ``value`` was ("just now", "5m ago", "3d ago").

    Anything a week or older falls back to the date.
    """
    if value is None or value == "":
        return "-"
    parsed = value if isinstance(value, datetime) else _parse_datetime(value)
    if parsed is None:
        return str(value)
    parsed = _normalize_datetime(parsed)
    now = _normalize_datetime(now or datetime.now(timezone.utc))

    seconds = int((now - parsed).total_seconds())
    if seconds < 60:
        return "just now"
    minutes = seconds // 60
    if minutes < 60:
        return f"{minutes}m ago"
    hours = minutes // 60
    if hours < 24:
        return f"{hours}h ago"
    days = hours // 24
    if days < 7:
        return f"{days}d ago"
    return parsed.strftime("%Y-%m-%d")


def format_meeting_time(start_at: str | None, end_at: str | None) -> str:
    """Format a meeting as "2026-01-22 09:00 - 10:00"."""
    start = _parse_datetime(start_at)
    if start is None:
        return start_at or ""
    end = _parse_datetime(end_at)
    text = start.strftime("%Y-%m-%d %H:%M")
    if end is None:
        return text
    if end.date() == start.date():
        return f"{text} - {end.strftime('%H:%M')}"
    return f"{text} - {end.strftime('%Y-%m-%d %H:%M')}"


def get_task_subtitle(is_completed: bool, deadline_at: str | None) -> str:
    if is_completed:
        return "Completed"
    if deadline_at:
        return f"Due: {format_date(deadline_at)}"
    return "No deadline"


def format_value(value: Any) -> str:
    """Render an Attio attribute value (or list of values) as plain text."""
    if value is None:
        return "-"
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, (str, int, float)):
        return str(value)
    if isinstance(value, (list, tuple)):
        return ", ".join(format_value(v) for v in value)
    if isinstance(value, dict):
        return _format_mapping(value)
    return str(value)


def _format_mapping(obj: dict) -> str:
    if "value" in obj:
        return format_value(obj["value"])
    for key in ("email_address", "phone_number", "domain"):
        if key in obj:
            return str(obj[key])
    if "currency_value" in obj:
        amount = obj["currency_value"]
        code = obj.get("currency_code")
        formatted = f"{amount:,}" if isinstance(amount, (int, float)) else str(amount)
        return f"{code} {formatted}" if code else formatted
    if "option" in obj:
        return (obj.get("option") or {}).get("title") or "-"
    if "status" in obj:
        return (obj.get("status") or {}).get("title") or "-"
    if "person" in obj:
        person = obj.get("person") or {}
        name = " ".join(p for p in (person.get("first_name"), person.get("last_name")) if p)
        return name or person.get("email_address") or "-"
    if "target_object" in obj and "target_record_id" in obj:
        return f"{obj['target_object']}/{obj['target_record_id']}"
    if any(key in obj for key in ("line_1", "city", "country_code")):
        parts = [
            obj.get(key)
            for key in ("line_1", "line_2", "city", "state", "postcode", "country_code")
        ]
        return ", ".join(p for p in parts if p) or "-"
    return json.dumps(obj, default=str)


def _extract_text(value: dict) -> str | None:
    """Pull a display string out of a single attribute value."""
    if isinstance(value.get("value"), str):
        return value["value"]
    if isinstance(value.get("full_name"), str):
        return value["full_name"]
    if "first_name" in value or "last_name" in value:
        name = " ".join(p for p in (value.get("first_name"), value.get("last_name")) if p)
        return name or None
    for key in ("email_address", "domain"):
        if isinstance(value.get(key), str):
            return value[key]
    if "option" in value:
        return (value.get("option") or {}).get("title") or None
    if "status" in value:
        return (value.get("status") or {}).get("title") or None
    return None


def _first_text(values: dict[str, Any], attributes: tuple[str, ...]) -> str | None:
    for attribute in attributes:
        entries = values.get(attribute) or []
        if entries and isinstance(entries[0], dict):
            text = _extract_text(entries[0])
            if text:
                return text
    return None


def get_record_title(values: dict[str, Any]) -> str:
    return _first_text(values, TITLE_ATTRIBUTES) or "Unnamed"


def get_record_subtitle(values: dict[str, Any]) -> str:
    return _first_text(values, SUBTITLE_ATTRIBUTES) or ""
