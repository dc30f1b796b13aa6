"""Bind a navigator category to a fetch function for the data controller.

``build_fetch_fn`` picks the service call for a category and drill level,
maps the returned models onto ``ResultItem`` rows, and records each request
(label, timing, outcome) for the debug panel.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Literal

from backend.client import AttioClient
from backend.errors import extract_error_message
from backend.models import Page
from backend.services.lists import (
    build_status_filter,
    fetch_list_statuses,
    fetch_lists,
    query_list_entries,
)
from backend.services.meetings import fetch_meetings
from backend.services.notes import fetch_notes
from backend.services.records import fetch_objects, query_records
from backend.services.tasks import fetch_tasks
from backend.services.webhooks import fetch_webhooks
from frontend.state.category_key import request_label
from frontend.state.navigation import (
    ListDrillEntries,
    ListDrillState,
    ListDrillStatuses,
    NavigatorCategory,
    ObjectDrillRecords,
    ObjectDrillState,
    ResultItem,
)
from frontend.utils import (
    format_meeting_time,
    get_record_subtitle,
    get_record_title,
    get_task_subtitle,
    truncate_text,
)

logger = logging.getLogger("attio_tui")


class CategoryFetchError(Exception):
    """A category fetch failed; the message is ready for display."""


@dataclass(frozen=True)
class RequestLogEntry:
    label: str
    status: Literal["success", "error"]
    started_at: datetime
    duration_ms: int
    detail: str
    error_message: str | None = None


RequestLogger = Callable[[RequestLogEntry], None]


def _safe_log(on_request_log: RequestLogger | None, entry: RequestLogEntry) -> None:
    if on_request_log is None:
        return
    try:
        on_request_log(entry)
    except Exception:
        logger.debug("Request log callback failed", exc_info=True)


# Row mapping


def _list_rows(page) -> tuple[ResultItem, ...]:
    return tuple(
        ResultItem(
            type="list",
            id=lst.id,
            title=lst.name,
            subtitle=f"Parent: {lst.parent_object}",
            data=lst,
        )
        for lst in page.items
    )


def _entry_rows(page, list_name: str | None = None) -> tuple[ResultItem, ...]:
    return tuple(
        ResultItem(
            type="list-entry",
            id=entry.id,
            title=entry.parent_record_id or entry.id,
            subtitle=f"Entry in {list_name}" if list_name else None,
            data=entry,
        )
        for entry in page.items
    )


def _record_rows(page) -> tuple[ResultItem, ...]:
    return tuple(
        ResultItem(
            type="object",
            id=record.id,
            title=get_record_title(record.values),
            subtitle=get_record_subtitle(record.values),
            data=record,
        )
        for record in page.items
    )


# Per-category fetchers


async def _fetch_object_records(client, slug, cursor) -> Page[ResultItem]:
    page = await query_records(client, slug, cursor=cursor)
    return Page(items=_record_rows(page), next_cursor=page.next_cursor)


async def _fetch_lists_level(client, list_drill, cursor) -> Page[ResultItem]:
    if isinstance(list_drill, ListDrillStatuses):
        statuses = await fetch_list_statuses(
            client, list_drill.list_id, list_drill.status_attribute_slug
        )
        items = tuple(
            ResultItem(
                type="list-status",
                id=status.status_id,
                title=status.title,
                subtitle="Celebration enabled" if status.celebration_enabled else None,
                data=status,
            )
            for status in statuses
            if not status.is_archived
        )
        return Page(items=items, next_cursor=None)

    if isinstance(list_drill, ListDrillEntries):
        status_filter = None
        if list_drill.status_id and list_drill.status_attribute_slug:
            status_filter = build_status_filter(
                list_drill.status_attribute_slug, list_drill.status_id
            )
        page = await query_list_entries(
            client, list_drill.list_id, cursor=cursor, filter=status_filter
        )
        return Page(items=_entry_rows(page, list_drill.list_name), next_cursor=page.next_cursor)

    page = await fetch_lists(client, cursor=cursor)
    return Page(items=_list_rows(page), next_cursor=page.next_cursor)


async def _fetch_objects_level(client, object_drill, cursor) -> Page[ResultItem]:
    if isinstance(object_drill, ObjectDrillRecords):
        return await _fetch_object_records(client, object_drill.object_slug, cursor)

    objects = await fetch_objects(client)
    items = tuple(
        ResultItem(
            type="objects",
            id=obj.id,
            title=obj.plural_noun or obj.api_slug,
            subtitle=obj.api_slug,
            data=obj,
        )
        for obj in objects
    )
    return Page(items=items, next_cursor=None)


async def _fetch_notes(client, cursor) -> Page[ResultItem]:
    page = await fetch_notes(client, cursor=cursor)
    items = tuple(
        ResultItem(
            type="notes",
            id=note.id,
            title=note.title or "Untitled Note",
            subtitle=truncate_text(note.content_plaintext, 50),
            data=note,
        )
        for note in page.items
    )
    return Page(items=items, next_cursor=page.next_cursor)


async def _fetch_tasks(client, cursor) -> Page[ResultItem]:
    page = await fetch_tasks(client, cursor=cursor)
    items = tuple(
        ResultItem(
            type="tasks",
            id=task.id,
            title=truncate_text(task.content, 50),
            subtitle=get_task_subtitle(task.is_completed, task.deadline_at),
            data=task,
        )
        for task in page.items
    )
    return Page(items=items, next_cursor=page.next_cursor)


async def _fetch_meetings(client, cursor) -> Page[ResultItem]:
    page = await fetch_meetings(client, cursor=cursor)
    items = tuple(
        ResultItem(
            type="meetings",
            id=meeting.id,
            title=meeting.title or "Untitled Meeting",
            subtitle=format_meeting_time(meeting.start_at, meeting.end_at),
            data=meeting,
        )
        for meeting in page.items
    )
    return Page(items=items, next_cursor=page.next_cursor)


async def _fetch_webhooks(client, cursor) -> Page[ResultItem]:
    page = await fetch_webhooks(client, cursor=cursor)
    items = tuple(
        ResultItem(
            type="webhooks",
            id=webhook.id,
            title=webhook.target_url,
            subtitle=f"{webhook.status} - {len(webhook.subscriptions)} subscriptions",
            data=webhook,
        )
        for webhook in page.items
    )
    return Page(items=items, next_cursor=page.next_cursor)


async def _dispatch(client, category, list_drill, object_drill, cursor) -> Page[ResultItem]:
    category_type = category.type
    if category_type == "object":
        return await _fetch_object_records(client, category.object_slug, cursor)
    if category_type == "list":
        page = await query_list_entries(client, category.list_id, cursor=cursor)
        return Page(items=_entry_rows(page), next_cursor=page.next_cursor)
    if category_type == "lists":
        return await _fetch_lists_level(client, list_drill, cursor)
    if category_type == "objects":
        return await _fetch_objects_level(client, object_drill, cursor)
    if category_type == "notes":
        return await _fetch_notes(client, cursor)
    if category_type == "tasks":
        return await _fetch_tasks(client, cursor)
    if category_type == "meetings":
        return await _fetch_meetings(client, cursor)
    if category_type == "webhooks":
        return await _fetch_webhooks(client, cursor)
    return Page()


def build_fetch_fn(
    client: AttioClient | None,
    category: NavigatorCategory,
    list_drill: ListDrillState | None = None,
    object_drill: ObjectDrillState | None = None,
    on_request_log: RequestLogger | None = None,
):
    """Return ``async fetch(cursor=None) -> Page[ResultItem]`` for a category.

    Failures are logged, recorded through ``on_request_log`` and re-raised as
    CategoryFetchError carrying a display-ready message. Without a client
    every fetch returns an empty, exhausted page.
    """
    label = request_label(
        category.type,
        slug=category.object_slug,
        list_drill=list_drill,
        object_drill=object_drill,
        list_id=category.list_id,
    )

    async def fetch(cursor: str | None = None) -> Page[ResultItem]:
        if client is None:
            return Page()

        started_at = datetime.now(timezone.utc)
        start = time.perf_counter()
        detail = f"cursor {cursor}" if cursor else "initial"
        logger.debug('request start label="%s" detail=%s', label, detail)

        try:
            page = await _dispatch(client, category, list_drill, object_drill, cursor)
        except Exception as exc:
            message = extract_error_message(exc)
            duration_ms = int((time.perf_counter() - start) * 1000)
            _safe_log(
                on_request_log,
                RequestLogEntry(
                    label=label,
                    status="error",
                    started_at=started_at,
                    duration_ms=duration_ms,
                    detail=detail,
                    error_message=message,
                ),
            )
            logger.debug(
                'request error label="%s" duration_ms=%d message="%s"',
                label,
                duration_ms,
                message,
            )
            raise CategoryFetchError(message) from exc

        duration_ms = int((time.perf_counter() - start) * 1000)
        _safe_log(
            on_request_log,
            RequestLogEntry(
                label=label,
                status="success",
                started_at=started_at,
                duration_ms=duration_ms,
                detail=detail,
            ),
        )
        logger.debug('request success label="%s" duration_ms=%d', label, duration_ms)
        return page

    return fetch
