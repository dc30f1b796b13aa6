"""Tasks."""

from __future__ import annotations

from typing import Any

from backend.client import AttioClient
from backend.models import LinkedRecord, Page, TaskAssignee, TaskInfo
from backend.pagination import next_offset_cursor, parse_cursor_offset
from backend.settings import PAGE_SIZE


def _to_task(payload: dict[str, Any]) -> TaskInfo:
    return TaskInfo(
        id=(payload.get("id") or {}).get("task_id", ""),
        content=payload.get("content_plaintext") or "",
        deadline_at=payload.get("deadline_at"),
        is_completed=bool(payload.get("is_completed")),
        assignees=[
            TaskAssignee(
                actor_type=a.get("referenced_actor_type") or "",
                actor_id=a.get("referenced_actor_id") or "",
            )
            for a in payload.get("assignees") or []
        ],
        linked_records=[
            LinkedRecord(
                target_object=r.get("target_object_id") or "",
                target_record_id=r.get("target_record_id") or "",
            )
            for r in payload.get("linked_records") or []
        ],
        created_at=payload.get("created_at") or "",
    )


async def fetch_tasks(
    client: AttioClient,
    cursor: str | None = None,
    limit: int = PAGE_SIZE,
    is_completed: bool | None = None,
) -> Page[TaskInfo]:
    """Fetch one page of tasks."""
    params: dict[str, Any] = {"limit": limit}
    offset = parse_cursor_offset(cursor)
    if offset is not None:
        params["offset"] = offset
    if is_completed is not None:
        params["is_completed"] = "true" if is_completed else "false"

    response = await client.get("/v2/tasks", params=params)
    tasks = tuple(_to_task(t) for t in response.get("data") or [])
    return Page(items=tasks, next_cursor=next_offset_cursor(cursor, len(tasks), limit))
