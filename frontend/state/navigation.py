"""Navigation state types for the three-pane browser.

Every value here is immutable. The reducer in ``app_state`` replaces them
wholesale; nothing mutates them in place. Tagged variants are modelled as
separate frozen dataclasses sharing a discriminator field (``type``,
``level`` or ``mode``) so callers can branch on either the class or the tag.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Union

PaneId = Literal["navigator", "results", "detail"]
PANE_ORDER: tuple[PaneId, ...] = ("navigator", "results", "detail")

DetailTab = Literal["summary", "json", "sdk", "actions"]
DETAIL_TABS: tuple[DetailTab, ...] = ("summary", "json", "sdk", "actions")

WebhookFormStep = Literal["url", "subscriptions", "review"]
WEBHOOK_FORM_STEPS: tuple[WebhookFormStep, ...] = ("url", "subscriptions", "review")

CategoryType = Literal["object", "list", "lists", "objects", "notes", "tasks", "meetings", "webhooks"]
SIMPLE_CATEGORY_TYPES: tuple[CategoryType, ...] = (
    "lists",
    "objects",
    "notes",
    "tasks",
    "meetings",
    "webhooks",
)

COMMAND_PALETTE_MAX_VISIBLE = 10


@dataclass(frozen=True)
class NavigatorCategory:
    """One entry in the navigator pane.

    ``object`` categories carry an object slug and ``list`` categories a list
    id; every other type carries nothing.
    """

    type: CategoryType
    object_slug: str | None = None
    list_id: str | None = None

    def __post_init__(self):
        if self.type == "object" and not self.object_slug:
            raise ValueError("object category requires an object_slug")
        if self.type == "list" and not self.list_id:
            raise ValueError("list category requires a list_id")

    @classmethod
    def for_object(cls, object_slug: str) -> "NavigatorCategory":
        return cls(type="object", object_slug=object_slug)

    @classmethod
    def for_list(cls, list_id: str) -> "NavigatorCategory":
        return cls(type="list", list_id=list_id)

    @property
    def key(self) -> str:
        """Stable identity used for widget ids and command targets."""
        if self.type == "object":
            return f"object-{self.object_slug}"
        if self.type == "list":
            return f"list-{self.list_id}"
        return self.type

    @property
    def label(self) -> str:
        if self.type == "object":
            return (self.object_slug or "").replace("_", " ").title()
        if self.type == "list":
            return "List"
        return self.type.title()


# List drill-down: lists -> statuses -> entries


@dataclass(frozen=True)
class ListDrillRoot:
    level: Literal["lists"] = "lists"


@dataclass(frozen=True)
class ListDrillStatuses:
    list_id: str
    list_name: str
    status_attribute_slug: str
    level: Literal["statuses"] = "statuses"


@dataclass(frozen=True)
class ListDrillEntries:
    list_id: str
    list_name: str
    status_id: str | None = None
    status_title: str | None = None
    status_attribute_slug: str | None = None
    level: Literal["entries"] = "entries"


ListDrillState = Union[ListDrillRoot, ListDrillStatuses, ListDrillEntries]


# Object drill-down: objects -> records


@dataclass(frozen=True)
class ObjectDrillRoot:
    level: Literal["objects"] = "objects"


@dataclass(frozen=True)
class ObjectDrillRecords:
    object_slug: str
    object_name: str
    level: Literal["records"] = "records"


ObjectDrillState = Union[ObjectDrillRoot, ObjectDrillRecords]

INITIAL_LIST_DRILL = ListDrillRoot()
INITIAL_OBJECT_DRILL = ObjectDrillRoot()


@dataclass(frozen=True)
class ResultItem:
    """A row in the results pane, backed by one of the backend models."""

    type: str
    id: str
    title: str
    subtitle: str | None = None
    data: Any = None


@dataclass(frozen=True)
class NavigatorState:
    categories: tuple[NavigatorCategory, ...] = ()
    selected_index: int = 0
    loading: bool = True


@dataclass(frozen=True)
class ResultsState:
    items: tuple[ResultItem, ...] = ()
    selected_index: int = 0
    loading: bool = False
    has_next_page: bool = False
    search_query: str = ""


@dataclass(frozen=True)
class DetailState:
    active_tab: DetailTab = "summary"
    item: ResultItem | None = None


@dataclass(frozen=True)
class CommandPaletteState:
    is_open: bool = False
    query: str = ""
    selected_index: int = 0


# Webhook modal: closed | create | edit | delete


@dataclass(frozen=True)
class WebhookModalClosed:
    mode: Literal["closed"] = "closed"


@dataclass(frozen=True)
class WebhookModalCreate:
    step: WebhookFormStep = "url"
    target_url: str = ""
    selected_events: tuple[str, ...] = ()
    mode: Literal["create"] = "create"


@dataclass(frozen=True)
class WebhookModalEdit:
    webhook_id: str
    step: WebhookFormStep = "url"
    target_url: str = ""
    selected_events: tuple[str, ...] = ()
    mode: Literal["edit"] = "edit"


@dataclass(frozen=True)
class WebhookModalDelete:
    webhook_id: str
    webhook_url: str
    mode: Literal["delete"] = "delete"


WebhookModalState = Union[WebhookModalClosed, WebhookModalCreate, WebhookModalEdit, WebhookModalDelete]


# Column picker: closed | open


@dataclass(frozen=True)
class ColumnPickerClosed:
    mode: Literal["closed"] = "closed"


@dataclass(frozen=True)
class ColumnPickerOpen:
    entity_key: str
    title: str
    mode: Literal["open"] = "open"


ColumnPickerState = Union[ColumnPickerClosed, ColumnPickerOpen]


@dataclass(frozen=True)
class NavigationState:
    focused_pane: PaneId = "navigator"
    navigator: NavigatorState = field(default_factory=NavigatorState)
    results: ResultsState = field(default_factory=ResultsState)
    detail: DetailState = field(default_factory=DetailState)
    command_palette: CommandPaletteState = field(default_factory=CommandPaletteState)
    webhook_modal: WebhookModalState = field(default_factory=WebhookModalClosed)
    column_picker: ColumnPickerState = field(default_factory=ColumnPickerClosed)
    list_drill: ListDrillState = INITIAL_LIST_DRILL
    object_drill: ObjectDrillState = INITIAL_OBJECT_DRILL

    @property
    def selected_category(self) -> NavigatorCategory | None:
        categories = self.navigator.categories
        index = self.navigator.selected_index
        if 0 <= index < len(categories):
            return categories[index]
        return None

    @property
    def selected_result(self) -> ResultItem | None:
        items = self.results.items
        index = self.results.selected_index
        if 0 <= index < len(items):
            return items[index]
        return None


def create_initial_navigation_state() -> NavigationState:
    return NavigationState()
