import asyncio
import logging
from collections import deque
from datetime import datetime
from typing import Callable, Iterable

from rich.markup import escape
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal
from textual.screen import Screen
from textual.widgets import Footer, Header, ListItem, ListView, Static

from backend.client import AttioClient
from backend.services.lists import find_list_status_attribute
from backend.settings import (
    DEBUG_ENABLED_BY_DEFAULT,
    DEFAULT_OBJECT_SLUGS,
    REQUEST_LOG_LIMIT,
)
from frontend.category_data import RequestLogEntry, build_fetch_fn
from frontend.columns import entity_key_for
from frontend.commands import DEFAULT_COMMANDS, Command
from frontend.screens.column_picker import ColumnPickerScreen
from frontend.screens.command_palette import CommandPaletteScreen
from frontend.screens.log_screen import LogScreen
from frontend.screens.webhook_form import WebhookFormScreen
from frontend.state.actions import (
    AppAction,
    AppendResults,
    CloseColumnPicker,
    CloseWebhookModal,
    FocusNextPane,
    FocusPane,
    FocusPreviousPane,
    ListDrillBack,
    ListDrillIntoEntries,
    ListDrillIntoStatuses,
    NavigateCategory,
    NavigateCategoryByOffset,
    NavigateResult,
    NavigateResultByOffset,
    NavigateTab,
    ObjectDrillBack,
    ObjectDrillIntoRecords,
    OpenColumnPicker,
    OpenCommandPalette,
    OpenWebhookCreate,
    OpenWebhookDelete,
    OpenWebhookEdit,
    SelectCategory,
    SelectResult,
    SetCategories,
    SetDetailItem,
    SetResults,
    SetResultsLoading,
    ToggleDebug,
)
from frontend.state.app_state import AppState, create_initial_app_state, reduce
from frontend.state.category_key import category_key_for
from frontend.state.navigation import (
    SIMPLE_CATEGORY_TYPES,
    ListDrillEntries,
    ListDrillStatuses,
    NavigationState,
    NavigatorCategory,
    ObjectDrillRecords,
    ResultItem,
    WebhookModalCreate,
    WebhookModalEdit,
)
from frontend.state.paginated_data import PaginatedDataController, PaginatedSnapshot
from frontend.utils import format_relative_time
from frontend.webhook_operations import WebhookOperations
from frontend.widgets.confirmation_modal import ConfirmationModal
from frontend.widgets.debug_panel import DebugPanel
from frontend.widgets.detail_pane import DetailPane
from frontend.widgets.result_list_item import CategoryListItem, PaneListView, ResultListItem

logger = logging.getLogger("attio_tui")

PAGE_JUMP = 10

HELP_TEXT = (
    "tab/shift+tab switch pane · j/k move · pgup/pgdn jump · enter open\n"
    "backspace back · [ ] detail tabs · : commands · ctrl+r refresh\n"
    "ctrl+d debug · c columns · n/e/x webhook create/edit/delete · l logs · q quit"
)


def default_categories(
    object_slugs: Iterable[str] = DEFAULT_OBJECT_SLUGS,
) -> tuple[NavigatorCategory, ...]:
    """Navigator entries: one per configured object, then the fixed categories."""
    objects = tuple(NavigatorCategory.for_object(slug) for slug in object_slugs)
    return objects + tuple(NavigatorCategory(type=kind) for kind in SIMPLE_CATEGORY_TYPES)


def breadcrumb(navigation: NavigationState) -> str:
    """Human-readable location, including any drill-down."""
    category = navigation.selected_category
    if category is None:
        return "Results"
    parts = [category.label]
    if category.type == "lists":
        drill = navigation.list_drill
        if isinstance(drill, (ListDrillStatuses, ListDrillEntries)):
            parts.append(drill.list_name)
        if isinstance(drill, ListDrillEntries):
            parts.append(drill.status_title or "All")
    elif category.type == "objects" and isinstance(navigation.object_drill, ObjectDrillRecords):
        parts.append(navigation.object_drill.object_name)
    return " › ".join(parts)


def format_status(
    navigation: NavigationState,
    snapshot: PaginatedSnapshot,
    now: datetime | None = None,
) -> str:
    results = navigation.results
    parts = [escape(breadcrumb(navigation))]
    if results.loading:
        parts.append("loading…")
    else:
        count = f"{len(results.items)} items"
        if results.has_next_page:
            count += "+"
        parts.append(count)
    if snapshot.is_prefetching:
        parts.append("loading more…")
    if snapshot.last_updated_at is not None:
        parts.append(f"updated {format_relative_time(snapshot.last_updated_at, now=now)}")
    if snapshot.error:
        parts.append(f"[red]{escape(snapshot.error)}[/red]")
    return " · ".join(parts)


class ListBinding:
    """Keeps a ListView's children in step with a tuple of values.

    Appends only the new tail when the old values are a prefix of the new
    ones, otherwise rebuilds. Syncs are serialised so overlapping calls
    cannot interleave their mounts.
    """

    def __init__(self, make_item: Callable[[object], ListItem]):
        self._make_item = make_item
        self._rendered: tuple = ()
        self._lock = asyncio.Lock()

    async def sync(self, list_view: ListView, read: Callable[[], tuple[tuple, int]]) -> None:
        async with self._lock:
            values, index = read()
            if values != self._rendered:
                rendered = self._rendered
                if rendered and values[: len(rendered)] == rendered:
                    await list_view.extend(self._make_item(v) for v in values[len(rendered) :])
                else:
                    self._rendered = ()
                    await list_view.clear()
                    if values:
                        await list_view.extend(self._make_item(v) for v in values)
                self._rendered = values
            list_view.index = index if values else None


class BrowserScreen(Screen):
    """Three-pane browser: navigator, results and detail.

    All navigation lives in an immutable ``AppState`` changed only through
    ``dispatch``. After each state change the screen derives the category key
    and points the data controller at it; controller snapshots come back in
    as results actions.
    """

    AUTO_FOCUS = None

    DEFAULT_CSS = """
    BrowserScreen #panes {
        height: 1fr;
    }

    BrowserScreen .pane {
        border: solid $panel;
        border-title-align: left;
    }

    BrowserScreen .pane.focused {
        border: solid $accent;
    }

    BrowserScreen #navigator-pane {
        width: 24;
    }

    BrowserScreen #results-pane {
        width: 2fr;
    }

    BrowserScreen #detail-pane {
        width: 3fr;
        padding: 0 1;
    }

    BrowserScreen ListView {
        height: 100%;
        scrollbar-size: 0 0;
    }

    BrowserScreen ListView > ListItem {
        height: 1;
        padding: 0 1;
    }

    BrowserScreen #results-empty {
        padding: 0 1;
        color: $text-muted;
    }

    BrowserScreen #status-bar {
        height: 1;
        padding: 0 1;
        color: $text-muted;
    }
    """

    BINDINGS = [
        Binding("tab", "focus_next_pane", "Next pane", show=False, priority=True),
        Binding("shift+tab", "focus_previous_pane", "Previous pane", show=False, priority=True),
        Binding("1", "focus_pane('navigator')", "Navigator", show=False),
        Binding("2", "focus_pane('results')", "Results", show=False),
        Binding("3", "focus_pane('detail')", "Detail", show=False),
        Binding("j", "cursor_down", "Down", show=False),
        Binding("k", "cursor_up", "Up", show=False),
        Binding("down", "cursor_down", "Down", show=False),
        Binding("up", "cursor_up", "Up", show=False),
        Binding("pagedown", "page_down", "Page down", show=False),
        Binding("pageup", "page_up", "Page up", show=False),
        Binding("enter", "select", "Open", show=True),
        Binding("backspace", "back", "Back", show=False),
        Binding("escape", "back", "Back", show=False),
        Binding("left_square_bracket", "tab('previous')", "Prev tab", show=False),
        Binding("right_square_bracket", "tab('next')", "Next tab", show=False),
        Binding("colon", "command_palette", "Commands", show=True),
        Binding("ctrl+p", "command_palette", "Commands", show=False),
        Binding("ctrl+r", "refresh", "Refresh", show=True),
        Binding("ctrl+d", "toggle_debug", "Debug", show=True),
        Binding("c", "columns", "Columns", show=False),
        Binding("n", "webhook_create", "New webhook", show=False),
        Binding("e", "webhook_edit", "Edit webhook", show=False),
        Binding("x", "webhook_delete", "Delete webhook", show=False),
        Binding("l", "logs", "Logs", show=True),
        Binding("question_mark", "help", "Help", show=False),
        Binding("q", "quit", "Quit", show=True),
    ]

    def __init__(
        self,
        client: AttioClient | None = None,
        controller: PaginatedDataController | None = None,
        categories: tuple[NavigatorCategory, ...] | None = None,
        debug_enabled: bool = DEBUG_ENABLED_BY_DEFAULT,
    ):
        super().__init__()
        self.client = client
        self.controller = controller or PaginatedDataController()
        self.webhooks = WebhookOperations(client)
        self.requests: deque[RequestLogEntry] = deque(maxlen=REQUEST_LOG_LIMIT)
        self._categories = categories if categories is not None else default_categories()
        self._state = create_initial_app_state(debug_enabled=debug_enabled)
        self._queued_actions: deque[AppAction] = deque()
        self._dispatching = False
        self._last_action: str | None = None
        self._shown_error: str | None = None
        self._unsubscribe: Callable[[], None] | None = None
        self._navigator_binding = ListBinding(CategoryListItem)
        self._results_binding = ListBinding(ResultListItem)

    @property
    def state(self) -> AppState:
        return self._state

    @property
    def navigation(self) -> NavigationState:
        return self._state.navigation

    def compose(self) -> ComposeResult:
        yield Header(show_clock=False, icon="")

        navigator_pane = Container(
            PaneListView(id="navigator-list"),
            id="navigator-pane",
            classes="pane",
        )
        navigator_pane.border_title = "Navigator [dim](1)[/dim]"

        results_pane = Container(
            Static("", id="results-empty"),
            PaneListView(id="results-list"),
            id="results-pane",
            classes="pane",
        )
        results_pane.border_title = "Results [dim](2)[/dim]"

        detail_pane = DetailPane(id="detail-pane", classes="pane")
        detail_pane.border_title = "Detail [dim](3)[/dim]"

        yield Horizontal(navigator_pane, results_pane, detail_pane, id="panes")
        yield Static("", id="status-bar")
        yield DebugPanel(id="debug-panel")
        yield Footer()

    def on_mount(self) -> None:
        # Keys drive the reducer; no widget inside the panes holds focus.
        self.set_focus(None)
        self._unsubscribe = self.controller.subscribe(self._apply_snapshot)
        self._render_state(None, self._state)
        self.dispatch(SetCategories(self._categories))

    def on_unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    # State

    def dispatch(self, action: AppAction) -> None:
        """Apply an action through the reducer and sync the view.

        Actions dispatched while another is being applied (from controller
        callbacks, for example) are queued and applied in order.
        """
        self._queued_actions.append(action)
        if self._dispatching:
            return
        self._dispatching = True
        try:
            while self._queued_actions:
                action = self._queued_actions.popleft()
                old = self._state
                new = reduce(old, action)
                self._last_action = action.type
                if new is old:
                    continue
                self._state = new
                self._sync_controller(old, new)
                self._render_state(old, new)
        finally:
            self._dispatching = False

    def _sync_controller(self, old: AppState, new: AppState) -> None:
        navigation = new.navigation
        key = category_key_for(navigation)
        if key != self.controller.active_key:
            category = navigation.selected_category
            fetch_fn = None
            if category is not None:
                fetch_fn = build_fetch_fn(
                    self.client,
                    category,
                    list_drill=navigation.list_drill,
                    object_drill=navigation.object_drill,
                    on_request_log=self._record_request,
                )
            self.controller.activate(key, fetch_fn)
        elif navigation.results.loading and not self.controller.loading:
            # Results were reset without a key change; restore from the controller.
            self._apply_snapshot(self.controller.snapshot)

        selected = navigation.selected_result
        if selected != navigation.detail.item:
            self.dispatch(SetDetailItem(selected))

        if navigation.results.selected_index != old.navigation.results.selected_index:
            self.controller.check_prefetch(navigation.results.selected_index)

    def _apply_snapshot(self, snapshot: PaginatedSnapshot) -> None:
        if snapshot.key != category_key_for(self.navigation):
            return
        results = self.navigation.results
        if snapshot.loading:
            self.dispatch(SetResultsLoading(True))
        else:
            items = results.items
            data = tuple(snapshot.data)
            if items and len(data) > len(items) and data[: len(items)] == items:
                self.dispatch(AppendResults(data[len(items) :], snapshot.has_next_page))
            elif (
                data != items
                or results.loading
                or results.has_next_page != snapshot.has_next_page
            ):
                self.dispatch(SetResults(data, snapshot.has_next_page))

        if snapshot.error and snapshot.error != self._shown_error:
            self.notify(snapshot.error, title="Request failed", severity="error")
        self._shown_error = snapshot.error
        self._refresh_status_bar()
        self._refresh_debug_panel()

    def _record_request(self, entry: RequestLogEntry) -> None:
        self.requests.append(entry)
        self._refresh_debug_panel()

    # Rendering

    def _render_state(self, old: AppState | None, new: AppState) -> None:
        if not self.is_mounted:
            return
        navigation = new.navigation
        previous = old.navigation if old is not None else None

        try:
            if previous is None or previous.focused_pane != navigation.focused_pane:
                for pane_id in ("navigator", "results", "detail"):
                    pane = self.query_one(f"#{pane_id}-pane")
                    pane.set_class(pane_id == navigation.focused_pane, "focused")

            if previous is None or previous.navigator != navigation.navigator:
                self.run_worker(
                    self._navigator_binding.sync(
                        self.query_one("#navigator-list", ListView),
                        lambda: (
                            self.navigation.navigator.categories,
                            self.navigation.navigator.selected_index,
                        ),
                    ),
                    group="render-navigator",
                )

            if previous is None or previous.results != navigation.results:
                self._render_results(navigation)

            if (
                previous is None
                or previous.detail != navigation.detail
                or previous.selected_category != navigation.selected_category
            ):
                self.query_one(DetailPane).show_item(
                    navigation.detail.item,
                    navigation.detail.active_tab,
                    navigation.selected_category,
                )

            if old is None or old.debug_enabled != new.debug_enabled:
                self.query_one(DebugPanel).display = new.debug_enabled
        except Exception as e:
            logger.debug("Failed to render browser state: %s", e)

        self._refresh_status_bar()
        self._refresh_debug_panel()

    def _render_results(self, navigation: NavigationState) -> None:
        results = navigation.results
        self.query_one("#results-pane", Container).border_title = (
            f"{escape(breadcrumb(navigation))} [dim](2)[/dim]"
        )
        empty = self.query_one("#results-empty", Static)
        if results.loading and not results.items:
            empty.update("Loading…")
            empty.display = True
        elif not results.items:
            empty.update("No results")
            empty.display = True
        else:
            empty.display = False

        self.run_worker(
            self._results_binding.sync(
                self.query_one("#results-list", ListView),
                lambda: (self.navigation.results.items, self.navigation.results.selected_index),
            ),
            group="render-results",
        )

    def _refresh_status_bar(self) -> None:
        if not self.is_mounted:
            return
        try:
            self.query_one("#status-bar", Static).update(
                format_status(self.navigation, self.controller.snapshot)
            )
        except Exception as e:
            logger.debug("Failed to update status bar: %s", e)

    def _refresh_debug_panel(self) -> None:
        if not self.is_mounted or not self._state.debug_enabled:
            return
        try:
            self.query_one(DebugPanel).show_state(
                self.controller.snapshot,
                self.requests,
                len(self.controller.cache_store),
                last_action=self._last_action,
            )
        except Exception as e:
            logger.debug("Failed to update debug panel: %s", e)

    # Mouse

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        index = event.list_view.index
        if index is None:
            return
        if event.list_view.id == "navigator-list":
            self.dispatch(FocusPane("navigator"))
            self.dispatch(SelectCategory(index))
        elif event.list_view.id == "results-list":
            self.dispatch(FocusPane("results"))
            self.dispatch(SelectResult(index))

    # Pane navigation

    def action_focus_next_pane(self) -> None:
        self.dispatch(FocusNextPane())

    def action_focus_previous_pane(self) -> None:
        self.dispatch(FocusPreviousPane())

    def action_focus_pane(self, pane_id: str) -> None:
        self.dispatch(FocusPane(pane_id))

    def _move_cursor(self, direction: str) -> None:
        pane = self.navigation.focused_pane
        if pane == "navigator":
            self.dispatch(NavigateCategory(direction))
        elif pane == "results":
            self.dispatch(NavigateResult(direction))
        else:
            scroll = self.query_one("#detail-scroll")
            if direction == "down":
                scroll.scroll_down(animate=False)
            else:
                scroll.scroll_up(animate=False)

    def _jump_cursor(self, offset: int) -> None:
        pane = self.navigation.focused_pane
        if pane == "navigator":
            self.dispatch(NavigateCategoryByOffset(offset))
        elif pane == "results":
            self.dispatch(NavigateResultByOffset(offset))
        else:
            scroll = self.query_one("#detail-scroll")
            if offset > 0:
                scroll.scroll_page_down(animate=False)
            else:
                scroll.scroll_page_up(animate=False)

    def action_cursor_down(self) -> None:
        self._move_cursor("down")

    def action_cursor_up(self) -> None:
        self._move_cursor("up")

    def action_page_down(self) -> None:
        self._jump_cursor(PAGE_JUMP)

    def action_page_up(self) -> None:
        self._jump_cursor(-PAGE_JUMP)

    def action_tab(self, direction: str) -> None:
        self.dispatch(NavigateTab(direction))

    # Drill-down

    def action_select(self) -> None:
        navigation = self.navigation
        if navigation.focused_pane == "navigator":
            self.dispatch(FocusPane("results"))
            return
        if navigation.focused_pane != "results":
            return

        item = navigation.selected_result
        if item is None:
            return
        drill = navigation.list_drill
        if item.type == "list":
            self.run_worker(self._drill_into_list(item), exclusive=True, group="drill")
        elif item.type == "list-status" and isinstance(drill, ListDrillStatuses):
            self.dispatch(
                ListDrillIntoEntries(
                    list_id=drill.list_id,
                    list_name=drill.list_name,
                    status_id=item.id,
                    status_title=item.title,
                    status_attribute_slug=drill.status_attribute_slug,
                )
            )
        elif item.type == "objects":
            slug = getattr(item.data, "api_slug", None) or item.subtitle or item.id
            self.dispatch(ObjectDrillIntoRecords(slug, item.title))
        else:
            self.dispatch(FocusPane("detail"))

    async def _drill_into_list(self, item: ResultItem) -> None:
        """Open a list at its status stage, or straight at its entries."""
        attribute = None
        if self.client is not None:
            try:
                attribute = await find_list_status_attribute(self.client, item.id)
            except Exception as e:
                logger.error("Failed to find status attribute for list %s: %s", item.id, e, exc_info=True)
        if attribute:
            self.dispatch(ListDrillIntoStatuses(item.id, item.title, attribute["slug"]))
        else:
            self.dispatch(ListDrillIntoEntries(item.id, item.title))

    def action_back(self) -> None:
        navigation = self.navigation
        category = navigation.selected_category
        if navigation.focused_pane != "detail" and category is not None:
            before = self._state
            if category.type == "lists":
                self.dispatch(ListDrillBack())
            elif category.type == "objects":
                self.dispatch(ObjectDrillBack())
            if self._state is not before:
                return
        if navigation.focused_pane != "navigator":
            self.dispatch(FocusPreviousPane())

    # Data

    def action_refresh(self) -> None:
        self.run_worker(self.controller.refresh(), group="refresh")

    def action_clear_cache(self) -> None:
        self.controller.clear_cache()
        self.notify("Cache cleared")
        self.action_refresh()

    def action_toggle_debug(self) -> None:
        self.dispatch(ToggleDebug())

    # Overlays

    def action_command_palette(self) -> None:
        self.dispatch(OpenCommandPalette())
        self.app.push_screen(CommandPaletteScreen(self, DEFAULT_COMMANDS), self._run_command)

    def _run_command(self, command: Command | None) -> None:
        if command is None:
            return
        logger.debug("Running command %s", command.id)
        if command.kind == "navigation":
            self._go_to(command.target)
        elif command.kind == "toggle":
            self.action_toggle_debug()
        elif command.kind == "webhook":
            getattr(self, f"action_webhook_{command.target}")()
        else:
            getattr(self, f"action_{command.target}")()

    def _go_to(self, target: str) -> None:
        for index, category in enumerate(self.navigation.navigator.categories):
            if category.type == target or category.object_slug == target:
                self.dispatch(SelectCategory(index))
                self.dispatch(FocusPane("results"))
                return
        self.notify(f"No category for {target}", severity="warning")

    def action_columns(self) -> None:
        navigation = self.navigation
        item = navigation.selected_result
        entity_key = entity_key_for(navigation.selected_category, item)
        title = f"Columns · {breadcrumb(navigation)}"
        self.dispatch(OpenColumnPicker(entity_key, title))
        self.app.push_screen(
            ColumnPickerScreen(entity_key, title, item),
            lambda _: self.dispatch(CloseColumnPicker()),
        )

    def action_logs(self) -> None:
        self.app.push_screen(LogScreen())

    def action_help(self) -> None:
        self.notify(HELP_TEXT, title="Keys", timeout=8)

    def action_quit(self) -> None:
        self.app.exit()

    # Webhooks

    def _in_webhooks(self) -> bool:
        category = self.navigation.selected_category
        if category is None or category.type != "webhooks":
            self.notify("Open Webhooks to manage webhooks", severity="warning")
            return False
        return True

    def _selected_webhook(self) -> ResultItem | None:
        if not self._in_webhooks():
            return None
        item = self.navigation.selected_result
        if item is None or item.type != "webhooks":
            self.notify("Select a webhook first", severity="warning")
            return None
        return item

    def action_webhook_create(self) -> None:
        if not self._in_webhooks():
            return
        self.webhooks.clear_error()
        self.dispatch(OpenWebhookCreate())
        self.app.push_screen(WebhookFormScreen(self), self._on_webhook_form_closed)

    def action_webhook_edit(self) -> None:
        item = self._selected_webhook()
        if item is None:
            return
        subscriptions = getattr(item.data, "subscriptions", [])
        self.webhooks.clear_error()
        self.dispatch(
            OpenWebhookEdit(
                webhook_id=item.id,
                target_url=getattr(item.data, "target_url", item.title),
                selected_events=tuple(sub.event_type for sub in subscriptions),
            )
        )
        self.app.push_screen(WebhookFormScreen(self), self._on_webhook_form_closed)

    def action_webhook_delete(self) -> None:
        item = self._selected_webhook()
        if item is None:
            return
        url = getattr(item.data, "target_url", item.title)
        self.dispatch(OpenWebhookDelete(item.id, url))
        self.app.push_screen(
            ConfirmationModal(
                "Delete webhook?",
                "This stops all deliveries to the target URL.",
                detail=url,
            ),
            self._on_delete_confirmed,
        )

    async def submit_webhook(self, modal: WebhookModalCreate | WebhookModalEdit) -> str | None:
        """Create or update from the wizard's state; returns an error message on failure."""
        if isinstance(modal, WebhookModalEdit):
            ok = await self.webhooks.update(modal.webhook_id, modal.target_url, modal.selected_events)
        else:
            ok = await self.webhooks.create(modal.target_url, modal.selected_events)
        return None if ok else self.webhooks.error

    def _on_webhook_form_closed(self, saved: bool | None) -> None:
        self.dispatch(CloseWebhookModal())
        if saved:
            self.notify("Webhook saved")
            self.action_refresh()

    def _on_delete_confirmed(self, confirmed: bool | None) -> None:
        modal = self.navigation.webhook_modal
        self.dispatch(CloseWebhookModal())
        if confirmed and modal.mode == "delete":
            self.run_worker(self._delete_webhook(modal.webhook_id), group="webhook")

    async def _delete_webhook(self, webhook_id: str) -> None:
        if await self.webhooks.delete(webhook_id):
            self.notify("Webhook deleted")
            await self.controller.refresh()
        else:
            self.notify(self.webhooks.error or "Failed to delete webhook", severity="error")
