"""Default columns per entity kind, shown by the column picker."""

from dataclasses import dataclass
from typing import Any, Callable

from frontend.state.navigation import NavigatorCategory, ResultItem
from frontend.utils import (
    format_date,
    format_datetime,
    format_meeting_time,
    format_value,
    get_record_subtitle,
    get_record_title,
    get_task_subtitle,
    truncate_text,
)


@dataclass(frozen=True)
class Column:
    id: str
    label: str
    getter: Callable[[Any], str]

    def value_for(self, item: ResultItem | None) -> str:
        if item is None or item.data is None:
            return "-"
        try:
            return self.getter(item.data)
        except (AttributeError, KeyError, TypeError):
            return "-"


DEFAULT_COLUMNS: dict[str, tuple[Column, ...]] = {
    "object": (
        Column("name", "Name", lambda r: get_record_title(r.values)),
        Column("detail", "Detail", lambda r: get_record_subtitle(r.values) or "-"),
        Column("created", "Created", lambda r: format_date(r.created_at)),
    ),
    "objects": (
        Column("slug", "Slug", lambda o: o.api_slug),
        Column("singular", "Singular", lambda o: o.singular_noun or "-"),
        Column("plural", "Plural", lambda o: o.plural_noun or "-"),
    ),
    "list": (
        Column("name", "Name", lambda lst: lst.name),
        Column("parent", "Parent", lambda lst: lst.parent_object or "-"),
        Column("slug", "Slug", lambda lst: lst.api_slug or "-"),
    ),
    "list-status": (
        Column("title", "Status", lambda s: s.title),
        Column("celebration", "Celebration", lambda s: format_value(s.celebration_enabled)),
        Column("target", "Target time", lambda s: s.target_time_in_status or "-"),
    ),
    "list-entry": (
        Column("record", "Record", lambda e: e.parent_record_id or "-"),
        Column("values", "Values", lambda e: str(len(e.values))),
        Column("created", "Created", lambda e: format_date(e.created_at)),
    ),
    "notes": (
        Column("title", "Title", lambda n: n.title or "Untitled Note"),
        Column("parent", "Parent", lambda n: n.parent_object or "-"),
        Column("preview", "Preview", lambda n: truncate_text(n.content_plaintext, 40) or "-"),
        Column("created", "Created", lambda n: format_datetime(n.created_at)),
    ),
    "tasks": (
        Column("content", "Content", lambda t: truncate_text(t.content, 40)),
        Column("status", "Status", lambda t: get_task_subtitle(t.is_completed, t.deadline_at)),
        Column("assignees", "Assignees", lambda t: str(len(t.assignees))),
    ),
    "meetings": (
        Column("title", "Title", lambda m: m.title or "Untitled Meeting"),
        Column("when", "When", lambda m: format_meeting_time(m.start_at, m.end_at)),
        Column("participants", "Participants", lambda m: str(len(m.participants))),
    ),
    "webhooks": (
        Column("url", "Target URL", lambda w: w.target_url),
        Column("status", "Status", lambda w: w.status),
        Column("events", "Events", lambda w: str(len(w.subscriptions))),
    ),
}


def entity_key_for(category: NavigatorCategory | None, item: ResultItem | None = None) -> str:
    """Column set for an item, falling back to the category type."""
    if item is not None and item.type in DEFAULT_COLUMNS:
        return item.type
    if category is None:
        return "object"
    return category.type


def columns_for(entity_key: str) -> tuple[Column, ...]:
    return DEFAULT_COLUMNS.get(entity_key, ())
