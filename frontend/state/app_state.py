"""Pure reducer for the browser's navigation state.

``reduce(state, action)`` never raises and never performs I/O. Each action
class maps to one handler below. Handlers that decide nothing changed return
the state they were given, so callers can detect no-ops with ``is``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Callable

from frontend.state import actions as a
from frontend.state.navigation import (
    DETAIL_TABS,
    INITIAL_LIST_DRILL,
    INITIAL_OBJECT_DRILL,
    PANE_ORDER,
    WEBHOOK_FORM_STEPS,
    ColumnPickerClosed,
    ColumnPickerOpen,
    DetailTab,
    ListDrillEntries,
    ListDrillRoot,
    ListDrillStatuses,
    NavigationState,
    ObjectDrillRecords,
    ObjectDrillRoot,
    PaneId,
    ResultsState,
    WebhookFormStep,
    WebhookModalClosed,
    WebhookModalCreate,
    WebhookModalDelete,
    WebhookModalEdit,
    create_initial_navigation_state,
)

logger = logging.getLogger("attio_tui")


@dataclass(frozen=True)
class AppState:
    navigation: NavigationState = field(default_factory=create_initial_navigation_state)
    debug_enabled: bool = False


def create_initial_app_state(debug_enabled: bool = False) -> AppState:
    return AppState(debug_enabled=debug_enabled)


# Index helpers


def navigate_index(current: int, direction: str, max_index: int) -> int:
    """Step one row up or down, clamped to [0, max_index].

    An empty list has ``max_index == -1``; the result is still 0.
    """
    if direction == "up":
        return max(0, current - 1)
    return max(0, min(max_index, current + 1))


def navigate_by_offset(current: int, offset: int, max_index: int) -> int:
    return max(0, min(max_index, current + offset))


def _cycle(options: tuple, current, direction: str):
    index = options.index(current) if current in options else 0
    step = -1 if direction == "previous" else 1
    return options[(index + step) % len(options)]


def navigate_tab(current: DetailTab, direction: str) -> DetailTab:
    return _cycle(DETAIL_TABS, current, direction)


def navigate_pane(current: PaneId, direction: str) -> PaneId:
    return _cycle(PANE_ORDER, current, direction)


def navigate_webhook_step(current: WebhookFormStep, direction: str) -> WebhookFormStep:
    """Move through the wizard steps, stopping at both ends."""
    index = WEBHOOK_FORM_STEPS.index(current) if current in WEBHOOK_FORM_STEPS else 0
    if direction == "previous":
        return WEBHOOK_FORM_STEPS[max(0, index - 1)]
    return WEBHOOK_FORM_STEPS[min(len(WEBHOOK_FORM_STEPS) - 1, index + 1)]


def reset_results(results: ResultsState) -> ResultsState:
    """Empty the results pane ahead of a fetch for a new category or drill level."""
    return replace(results, items=(), selected_index=0, loading=True, has_next_page=False)


# Handler plumbing


def _nav(state: AppState, **changes) -> AppState:
    return replace(state, navigation=replace(state.navigation, **changes))


def _with_category_index(state: AppState, index: int, force_reset: bool = False) -> AppState:
    navigation = state.navigation
    navigator = replace(navigation.navigator, selected_index=index)
    if not force_reset and index == navigation.navigator.selected_index:
        return _nav(state, navigator=navigator)
    return _nav(
        state,
        navigator=navigator,
        results=reset_results(navigation.results),
        list_drill=INITIAL_LIST_DRILL,
        object_drill=INITIAL_OBJECT_DRILL,
    )


# Debug


def _toggle_debug(state: AppState, action: a.ToggleDebug) -> AppState:
    return replace(state, debug_enabled=not state.debug_enabled)


def _set_debug_enabled(state: AppState, action: a.SetDebugEnabled) -> AppState:
    return replace(state, debug_enabled=action.enabled)


# Pane focus


def _focus_pane(state: AppState, action: a.FocusPane) -> AppState:
    return _nav(state, focused_pane=action.pane_id)


def _focus_next_pane(state: AppState, action: a.FocusNextPane) -> AppState:
    return _nav(state, focused_pane=navigate_pane(state.navigation.focused_pane, "next"))


def _focus_previous_pane(state: AppState, action: a.FocusPreviousPane) -> AppState:
    return _nav(state, focused_pane=navigate_pane(state.navigation.focused_pane, "previous"))


# Navigator


def _set_categories(state: AppState, action: a.SetCategories) -> AppState:
    navigator = replace(
        state.navigation.navigator,
        categories=tuple(action.categories),
        selected_index=0,
        loading=False,
    )
    return _nav(state, navigator=navigator)


def _select_category(state: AppState, action: a.SelectCategory) -> AppState:
    return _with_category_index(state, action.index, force_reset=True)


def _navigate_category(state: AppState, action: a.NavigateCategory) -> AppState:
    navigator = state.navigation.navigator
    index = navigate_index(navigator.selected_index, action.direction, len(navigator.categories) - 1)
    return _with_category_index(state, index)


def _navigate_category_by_offset(state: AppState, action: a.NavigateCategoryByOffset) -> AppState:
    navigator = state.navigation.navigator
    index = navigate_by_offset(navigator.selected_index, action.offset, len(navigator.categories) - 1)
    return _with_category_index(state, index)


def _set_navigator_loading(state: AppState, action: a.SetNavigatorLoading) -> AppState:
    return _nav(state, navigator=replace(state.navigation.navigator, loading=action.loading))


# Results


def _set_results(state: AppState, action: a.SetResults) -> AppState:
    results = replace(
        state.navigation.results,
        items=tuple(action.items),
        has_next_page=action.has_next_page,
        selected_index=0,
        loading=False,
    )
    return _nav(state, results=results)


def _append_results(state: AppState, action: a.AppendResults) -> AppState:
    current = state.navigation.results
    results = replace(
        current,
        items=current.items + tuple(action.items),
        has_next_page=action.has_next_page,
        loading=False,
    )
    return _nav(state, results=results)


def _select_result(state: AppState, action: a.SelectResult) -> AppState:
    return _nav(state, results=replace(state.navigation.results, selected_index=action.index))


def _navigate_result(state: AppState, action: a.NavigateResult) -> AppState:
    results = state.navigation.results
    index = navigate_index(results.selected_index, action.direction, len(results.items) - 1)
    return _nav(state, results=replace(results, selected_index=index))


def _navigate_result_by_offset(state: AppState, action: a.NavigateResultByOffset) -> AppState:
    results = state.navigation.results
    index = navigate_by_offset(results.selected_index, action.offset, len(results.items) - 1)
    return _nav(state, results=replace(results, selected_index=index))


def _set_results_loading(state: AppState, action: a.SetResultsLoading) -> AppState:
    return _nav(state, results=replace(state.navigation.results, loading=action.loading))


def _set_search_query(state: AppState, action: a.SetSearchQuery) -> AppState:
    return _nav(state, results=replace(state.navigation.results, search_query=action.query))


# Detail


def _set_detail_tab(state: AppState, action: a.SetDetailTab) -> AppState:
    return _nav(state, detail=replace(state.navigation.detail, active_tab=action.tab))


def _navigate_tab(state: AppState, action: a.NavigateTab) -> AppState:
    detail = state.navigation.detail
    return _nav(state, detail=replace(detail, active_tab=navigate_tab(detail.active_tab, action.direction)))


def _set_detail_item(state: AppState, action: a.SetDetailItem) -> AppState:
    return _nav(state, detail=replace(state.navigation.detail, item=action.item))


# Command palette


def _open_command_palette(state: AppState, action: a.OpenCommandPalette) -> AppState:
    palette = replace(state.navigation.command_palette, is_open=True, query="", selected_index=0)
    return _nav(state, command_palette=palette)


def _close_command_palette(state: AppState, action) -> AppState:
    palette = replace(state.navigation.command_palette, is_open=False, query="", selected_index=0)
    return _nav(state, command_palette=palette)


def _set_command_query(state: AppState, action: a.SetCommandQuery) -> AppState:
    palette = replace(state.navigation.command_palette, query=action.query, selected_index=0)
    return _nav(state, command_palette=palette)


def _navigate_command(state: AppState, action: a.NavigateCommand) -> AppState:
    palette = state.navigation.command_palette
    index = navigate_index(palette.selected_index, action.direction, action.max_index)
    return _nav(state, command_palette=replace(palette, selected_index=index))


# Column picker


def _open_column_picker(state: AppState, action: a.OpenColumnPicker) -> AppState:
    return _nav(state, column_picker=ColumnPickerOpen(entity_key=action.entity_key, title=action.title))


def _close_column_picker(state: AppState, action: a.CloseColumnPicker) -> AppState:
    return _nav(state, column_picker=ColumnPickerClosed())


# Webhook modal


def _open_webhook_create(state: AppState, action: a.OpenWebhookCreate) -> AppState:
    return _nav(state, webhook_modal=WebhookModalCreate())


def _open_webhook_edit(state: AppState, action: a.OpenWebhookEdit) -> AppState:
    modal = WebhookModalEdit(
        webhook_id=action.webhook_id,
        target_url=action.target_url,
        selected_events=tuple(action.selected_events),
    )
    return _nav(state, webhook_modal=modal)


def _open_webhook_delete(state: AppState, action: a.OpenWebhookDelete) -> AppState:
    modal = WebhookModalDelete(webhook_id=action.webhook_id, webhook_url=action.webhook_url)
    return _nav(state, webhook_modal=modal)


def _close_webhook_modal(state: AppState, action: a.CloseWebhookModal) -> AppState:
    return _nav(state, webhook_modal=WebhookModalClosed())


def _editable_modal(state: AppState):
    modal = state.navigation.webhook_modal
    if isinstance(modal, (WebhookModalCreate, WebhookModalEdit)):
        return modal
    return None


def _webhook_set_url(state: AppState, action: a.WebhookSetUrl) -> AppState:
    modal = _editable_modal(state)
    if modal is None:
        return state
    return _nav(state, webhook_modal=replace(modal, target_url=action.url))


def _webhook_toggle_event(state: AppState, action: a.WebhookToggleEvent) -> AppState:
    modal = _editable_modal(state)
    if modal is None:
        return state
    if action.event_type in modal.selected_events:
        events = tuple(e for e in modal.selected_events if e != action.event_type)
    else:
        events = modal.selected_events + (action.event_type,)
    return _nav(state, webhook_modal=replace(modal, selected_events=events))


def _webhook_navigate_step(state: AppState, action: a.WebhookNavigateStep) -> AppState:
    modal = _editable_modal(state)
    if modal is None:
        return state
    step = navigate_webhook_step(modal.step, action.direction)
    return _nav(state, webhook_modal=replace(modal, step=step))


# Drill-down


def _list_drill_into_statuses(state: AppState, action: a.ListDrillIntoStatuses) -> AppState:
    drill = ListDrillStatuses(
        list_id=action.list_id,
        list_name=action.list_name,
        status_attribute_slug=action.status_attribute_slug,
    )
    return _nav(state, results=reset_results(state.navigation.results), list_drill=drill)


def _list_drill_into_entries(state: AppState, action: a.ListDrillIntoEntries) -> AppState:
    drill = ListDrillEntries(
        list_id=action.list_id,
        list_name=action.list_name,
        status_id=action.status_id,
        status_title=action.status_title,
        status_attribute_slug=action.status_attribute_slug,
    )
    return _nav(state, results=reset_results(state.navigation.results), list_drill=drill)


def _list_drill_back(state: AppState, action: a.ListDrillBack) -> AppState:
    drill = state.navigation.list_drill
    if isinstance(drill, ListDrillRoot):
        return state
    if isinstance(drill, ListDrillEntries) and drill.status_attribute_slug:
        previous = ListDrillStatuses(
            list_id=drill.list_id,
            list_name=drill.list_name,
            status_attribute_slug=drill.status_attribute_slug,
        )
    else:
        previous = INITIAL_LIST_DRILL
    return _nav(state, results=reset_results(state.navigation.results), list_drill=previous)


def _object_drill_into_records(state: AppState, action: a.ObjectDrillIntoRecords) -> AppState:
    drill = ObjectDrillRecords(object_slug=action.object_slug, object_name=action.object_name)
    return _nav(state, results=reset_results(state.navigation.results), object_drill=drill)


def _object_drill_back(state: AppState, action: a.ObjectDrillBack) -> AppState:
    if isinstance(state.navigation.object_drill, ObjectDrillRoot):
        return state
    return _nav(
        state,
        results=reset_results(state.navigation.results),
        object_drill=INITIAL_OBJECT_DRILL,
    )


_HANDLERS: dict[type, Callable[[AppState, object], AppState]] = {
    a.ToggleDebug: _toggle_debug,
    a.SetDebugEnabled: _set_debug_enabled,
    a.FocusPane: _focus_pane,
    a.FocusNextPane: _focus_next_pane,
    a.FocusPreviousPane: _focus_previous_pane,
    a.SetCategories: _set_categories,
    a.SelectCategory: _select_category,
    a.NavigateCategory: _navigate_category,
    a.NavigateCategoryByOffset: _navigate_category_by_offset,
    a.SetNavigatorLoading: _set_navigator_loading,
    a.SetResults: _set_results,
    a.AppendResults: _append_results,
    a.SelectResult: _select_result,
    a.NavigateResult: _navigate_result,
    a.NavigateResultByOffset: _navigate_result_by_offset,
    a.SetResultsLoading: _set_results_loading,
    a.SetSearchQuery: _set_search_query,
    a.SetDetailTab: _set_detail_tab,
    a.NavigateTab: _navigate_tab,
    a.SetDetailItem: _set_detail_item,
    a.OpenCommandPalette: _open_command_palette,
    a.CloseCommandPalette: _close_command_palette,
    a.SetCommandQuery: _set_command_query,
    a.NavigateCommand: _navigate_command,
    # The command itself is executed by the screen; the palette just closes.
    a.SelectCommand: _close_command_palette,
    a.OpenColumnPicker: _open_column_picker,
    a.CloseColumnPicker: _close_column_picker,
    a.OpenWebhookCreate: _open_webhook_create,
    a.OpenWebhookEdit: _open_webhook_edit,
    a.OpenWebhookDelete: _open_webhook_delete,
    a.CloseWebhookModal: _close_webhook_modal,
    a.WebhookSetUrl: _webhook_set_url,
    a.WebhookToggleEvent: _webhook_toggle_event,
    a.WebhookNavigateStep: _webhook_navigate_step,
    a.ListDrillIntoStatuses: _list_drill_into_statuses,
    a.ListDrillIntoEntries: _list_drill_into_entries,
    a.ListDrillBack: _list_drill_back,
    a.ObjectDrillIntoRecords: _object_drill_into_records,
    a.ObjectDrillBack: _object_drill_back,
}


def reduce(state: AppState, action: a.AppAction) -> AppState:
    """Return the state that results from applying ``action`` to ``state``."""
    handler = _HANDLERS.get(type(action))
    if handler is None:
        logger.debug("Ignoring unknown action %r", action)
        return state
    return handler(state, action)
