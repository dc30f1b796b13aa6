"""Actions consumed by the navigation reducer.

One frozen dataclass per action. ``type`` is a class-level tag carrying the
action's wire name, which is what the request log and debug panel print.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Literal, Union

from frontend.state.navigation import DetailTab, NavigatorCategory, PaneId, ResultItem

VerticalDirection = Literal["up", "down"]
StepDirection = Literal["previous", "next"]


# Pane focus


@dataclass(frozen=True)
class FocusPane:
    pane_id: PaneId
    type: ClassVar[str] = "FOCUS_PANE"


@dataclass(frozen=True)
class FocusNextPane:
    type: ClassVar[str] = "FOCUS_NEXT_PANE"


@dataclass(frozen=True)
class FocusPreviousPane:
    type: ClassVar[str] = "FOCUS_PREVIOUS_PANE"


# Debug


@dataclass(frozen=True)
class ToggleDebug:
    type: ClassVar[str] = "TOGGLE_DEBUG"


@dataclass(frozen=True)
class SetDebugEnabled:
    enabled: bool
    type: ClassVar[str] = "SET_DEBUG_ENABLED"


# Navigator


@dataclass(frozen=True)
class SetCategories:
    categories: tuple[NavigatorCategory, ...]
    type: ClassVar[str] = "SET_CATEGORIES"


@dataclass(frozen=True)
class SelectCategory:
    index: int
    type: ClassVar[str] = "SELECT_CATEGORY"


@dataclass(frozen=True)
class NavigateCategory:
    direction: VerticalDirection
    type: ClassVar[str] = "NAVIGATE_CATEGORY"


@dataclass(frozen=True)
class NavigateCategoryByOffset:
    offset: int
    type: ClassVar[str] = "NAVIGATE_CATEGORY_BY_OFFSET"


@dataclass(frozen=True)
class SetNavigatorLoading:
    loading: bool
    type: ClassVar[str] = "SET_NAVIGATOR_LOADING"


# Results


@dataclass(frozen=True)
class SetResults:
    items: tuple[ResultItem, ...]
    has_next_page: bool
    type: ClassVar[str] = "SET_RESULTS"


@dataclass(frozen=True)
class AppendResults:
    items: tuple[ResultItem, ...]
    has_next_page: bool
    type: ClassVar[str] = "APPEND_RESULTS"


@dataclass(frozen=True)
class SelectResult:
    index: int
    type: ClassVar[str] = "SELECT_RESULT"


@dataclass(frozen=True)
class NavigateResult:
    direction: VerticalDirection
    type: ClassVar[str] = "NAVIGATE_RESULT"


@dataclass(frozen=True)
class NavigateResultByOffset:
    offset: int
    type: ClassVar[str] = "NAVIGATE_RESULT_BY_OFFSET"


@dataclass(frozen=True)
class SetResultsLoading:
    loading: bool
    type: ClassVar[str] = "SET_RESULTS_LOADING"


@dataclass(frozen=True)
class SetSearchQuery:
    query: str
    type: ClassVar[str] = "SET_SEARCH_QUERY"


# Detail


@dataclass(frozen=True)
class SetDetailTab:
    tab: DetailTab
    type: ClassVar[str] = "SET_DETAIL_TAB"


@dataclass(frozen=True)
class NavigateTab:
    direction: StepDirection
    type: ClassVar[str] = "NAVIGATE_TAB"


@dataclass(frozen=True)
class SetDetailItem:
    item: ResultItem | None
    type: ClassVar[str] = "SET_DETAIL_ITEM"


# Command palette


@dataclass(frozen=True)
class OpenCommandPalette:
    type: ClassVar[str] = "OPEN_COMMAND_PALETTE"


@dataclass(frozen=True)
class CloseCommandPalette:
    type: ClassVar[str] = "CLOSE_COMMAND_PALETTE"


@dataclass(frozen=True)
class SetCommandQuery:
    query: str
    type: ClassVar[str] = "SET_COMMAND_QUERY"


@dataclass(frozen=True)
class NavigateCommand:
    """Move the palette cursor; ``max_index`` comes from the filtered command count."""

    direction: VerticalDirection
    max_index: int
    type: ClassVar[str] = "NAVIGATE_COMMAND"


@dataclass(frozen=True)
class SelectCommand:
    type: ClassVar[str] = "SELECT_COMMAND"


# Column picker


@dataclass(frozen=True)
class OpenColumnPicker:
    entity_key: str
    title: str
    type: ClassVar[str] = "OPEN_COLUMN_PICKER"


@dataclass(frozen=True)
class CloseColumnPicker:
    type: ClassVar[str] = "CLOSE_COLUMN_PICKER"


# Webhook modal


@dataclass(frozen=True)
class OpenWebhookCreate:
    type: ClassVar[str] = "OPEN_WEBHOOK_CREATE"


@dataclass(frozen=True)
class OpenWebhookEdit:
    webhook_id: str
    target_url: str
    selected_events: tuple[str, ...]
    type: ClassVar[str] = "OPEN_WEBHOOK_EDIT"


@dataclass(frozen=True)
class OpenWebhookDelete:
    webhook_id: str
    webhook_url: str
    type: ClassVar[str] = "OPEN_WEBHOOK_DELETE"


@dataclass(frozen=True)
class CloseWebhookModal:
    type: ClassVar[str] = "CLOSE_WEBHOOK_MODAL"


@dataclass(frozen=True)
class WebhookSetUrl:
    url: str
    type: ClassVar[str] = "WEBHOOK_SET_URL"


@dataclass(frozen=True)
class WebhookToggleEvent:
    event_type: str
    type: ClassVar[str] = "WEBHOOK_TOGGLE_EVENT"


@dataclass(frozen=True)
class WebhookNavigateStep:
    direction: StepDirection
    type: ClassVar[str] = "WEBHOOK_NAVIGATE_STEP"


# Drill-down


@dataclass(frozen=True)
class ListDrillIntoStatuses:
    list_id: str
    list_name: str
    status_attribute_slug: str
    type: ClassVar[str] = "LIST_DRILL_INTO_STATUSES"


@dataclass(frozen=True)
class ListDrillIntoEntries:
    list_id: str
    list_name: str
    status_id: str | None = None
    status_title: str | None = None
    status_attribute_slug: str | None = None
    type: ClassVar[str] = "LIST_DRILL_INTO_ENTRIES"


@dataclass(frozen=True)
class ListDrillBack:
    type: ClassVar[str] = "LIST_DRILL_BACK"


@dataclass(frozen=True)
class ObjectDrillIntoRecords:
    object_slug: str
    object_name: str
    type: ClassVar[str] = "OBJECT_DRILL_INTO_RECORDS"


@dataclass(frozen=True)
class ObjectDrillBack:
    type: ClassVar[str] = "OBJECT_DRILL_BACK"


AppAction = Union[
    FocusPane,
    FocusNextPane,
    FocusPreviousPane,
    ToggleDebug,
    SetDebugEnabled,
    SetCategories,
    SelectCategory,
    NavigateCategory,
    NavigateCategoryByOffset,
    SetNavigatorLoading,
    SetResults,
    AppendResults,
    SelectResult,
    NavigateResult,
    NavigateResultByOffset,
    SetResultsLoading,
    SetSearchQuery,
    SetDetailTab,
    NavigateTab,
    SetDetailItem,
    OpenCommandPalette,
    CloseCommandPalette,
    SetCommandQuery,
    NavigateCommand,
    SelectCommand,
    OpenColumnPicker,
    CloseColumnPicker,
    OpenWebhookCreate,
    OpenWebhookEdit,
    OpenWebhookDelete,
    CloseWebhookModal,
    WebhookSetUrl,
    WebhookToggleEvent,
    WebhookNavigateStep,
    ListDrillIntoStatuses,
    ListDrillIntoEntries,
    ListDrillBack,
    ObjectDrillIntoRecords,
    ObjectDrillBack,
]
