"""Local record shapes for Attio resources.

Services map remote payloads onto these models; the UI only ever sees these.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of a cursor-paginated collection.

    A ``next_cursor`` of None means the collection is exhausted.
    """

    items: tuple[T, ...] = field(default_factory=tuple)
    next_cursor: str | None = None


class ObjectInfo(BaseModel):
    id: str
    api_slug: str
    singular_noun: str = ""
    plural_noun: str = ""


class RecordInfo(BaseModel):
    id: str
    object_id: str = ""
    values: dict[str, Any] = Field(default_factory=dict)
    created_at: str = ""


class ListInfo(BaseModel):
    id: str
    api_slug: str = ""
    name: str
    parent_object: str = ""


class StatusInfo(BaseModel):
    status_id: str
    attribute_id: str = ""
    title: str
    is_archived: bool = False
    celebration_enabled: bool = False
    target_time_in_status: str | None = None


class ListEntryInfo(BaseModel):
    id: str
    list_id: str
    parent_record_id: str = ""
    values: dict[str, Any] = Field(default_factory=dict)
    created_at: str = ""


class NoteInfo(BaseModel):
    id: str
    parent_object: str = ""
    parent_record_id: str = ""
    title: str = ""
    content_plaintext: str = ""
    created_at: str = ""
    created_by_type: str = "unknown"
    created_by_id: str = ""


class TaskAssignee(BaseModel):
    actor_type: str = ""
    actor_id: str = ""


class LinkedRecord(BaseModel):
    target_object: str = ""
    target_record_id: str = ""


class TaskInfo(BaseModel):
    id: str
    content: str = ""
    deadline_at: str | None = None
    is_completed: bool = False
    assignees: list[TaskAssignee] = Field(default_factory=list)
    linked_records: list[LinkedRecord] = Field(default_factory=list)
    created_at: str = ""


class MeetingParticipant(BaseModel):
    email_address: str | None = None
    is_organizer: bool = False
    status: str = ""


class MeetingInfo(BaseModel):
    id: str
    title: str = ""
    description: str = ""
    start_at: str = ""
    end_at: str = ""
    participants: list[MeetingParticipant] = Field(default_factory=list)


class WebhookSubscription(BaseModel):
    event_type: str
    filter: Any = None


class WebhookInfo(BaseModel):
    id: str
    target_url: str
    status: Literal["active", "paused", "degraded"] = "active"
    subscriptions: list[WebhookSubscription] = Field(default_factory=list)
    created_at: str = ""
