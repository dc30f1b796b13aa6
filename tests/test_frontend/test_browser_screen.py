"""Tests for BrowserScreen.

These tests use a lightweight test app that mounts BrowserScreen directly
with canned fetch functions, avoiding the real AttioApp and any HTTP.
"""

import asyncio
from contextlib import asynccontextmanager
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import pytest
from textual.app import App

from backend.models import Page, WebhookInfo
from frontend.screens.browser_screen import (
    BrowserScreen,
    breadcrumb,
    default_categories,
    format_status,
)
from frontend.screens.command_palette import CommandPaletteScreen
from frontend.state.navigation import (
    ListDrillEntries,
    NavigationState,
    NavigatorCategory,
    NavigatorState,
    ObjectDrillRecords,
    ResultItem,
    ResultsState,
)
from frontend.state.paginated_data import PaginatedSnapshot
from frontend.widgets.confirmation_modal import ConfirmationModal

TEST_CATEGORIES = (
    NavigatorCategory.for_object("companies"),
    NavigatorCategory(type="notes"),
    NavigatorCategory(type="webhooks"),
)

NOW = datetime(2026, 1, 22, 12, 0, tzinfo=timezone.utc)


def make_items(count: int, kind: str = "object") -> tuple[ResultItem, ...]:
    return tuple(ResultItem(type=kind, id=f"{kind}-{i}", title=f"Item {i}") for i in range(count))


def make_snapshot(**overrides) -> PaginatedSnapshot:
    fields = dict(
        key=None,
        data=(),
        loading=False,
        error=None,
        has_next_page=False,
        last_updated_at=None,
        is_prefetching=False,
        generation=0,
    )
    fields.update(overrides)
    return PaginatedSnapshot(**fields)


def fake_fetch_builder(pages: dict[str, Page]):
    """Stand-in for build_fetch_fn serving one canned page per category type."""

    def build(client, category, list_drill=None, object_drill=None, on_request_log=None):
        async def fetch(cursor=None):
            return pages.get(category.type, Page())

        return fetch

    return build


class BrowserTestApp(App):
    """Lightweight test app hosting BrowserScreen."""

    ENABLE_COMMAND_PALETTE = False

    def __init__(self, controller):
        super().__init__()
        self.controller = controller

    def on_mount(self):
        self.push_screen(
            BrowserScreen(client=None, controller=self.controller, categories=TEST_CATEGORIES)
        )


@asynccontextmanager
async def browser_test_context(app):
    """Run the app and cancel BrowserScreen workers before cleanup."""
    try:
        async with app.run_test() as pilot:
            await pilot.pause()
            yield pilot
            for screen in app.screen_stack:
                if isinstance(screen, BrowserScreen):
                    screen.workers.cancel_node(screen)
                    for _ in range(10):
                        await pilot.pause()
                        if not any(w.is_running for w in screen.workers):
                            break
    except asyncio.CancelledError:
        pass


async def settle(pilot, rounds: int = 5):
    for _ in range(rounds):
        await pilot.pause()


def browser(app) -> BrowserScreen:
    for screen in app.screen_stack:
        if isinstance(screen, BrowserScreen):
            return screen
    raise AssertionError("BrowserScreen not mounted")


@pytest.fixture
def canned_pages():
    pages = {
        "object": Page(items=make_items(3), next_cursor=None),
        "notes": Page(items=make_items(2, kind="notes"), next_cursor="2"),
        "webhooks": Page(
            items=(
                ResultItem(
                    type="webhooks",
                    id="wh-1",
                    title="https://example.com/hook",
                    data=WebhookInfo(id="wh-1", target_url="https://example.com/hook"),
                ),
            )
        ),
    }
    with patch(
        "frontend.screens.browser_screen.build_fetch_fn",
        side_effect=fake_fetch_builder(pages),
    ):
        yield pages


class TestHelpers:
    """Test the module-level helpers."""

    def test_default_categories_order(self):
        """Objects come first, then the fixed categories."""
        categories = default_categories(["companies"])
        assert categories[0] == NavigatorCategory.for_object("companies")
        assert [c.type for c in categories[1:]] == [
            "lists",
            "objects",
            "notes",
            "tasks",
            "meetings",
            "webhooks",
        ]

    def test_breadcrumb_without_selection(self):
        assert breadcrumb(NavigationState()) == "Results"

    def test_breadcrumb_list_drill(self):
        navigation = NavigationState(
            navigator=NavigatorState(categories=(NavigatorCategory(type="lists"),)),
            list_drill=ListDrillEntries(list_id="l1", list_name="Deals", status_title="Won"),
        )
        assert breadcrumb(navigation) == "Lists › Deals › Won"

    def test_breadcrumb_list_entries_without_status(self):
        navigation = NavigationState(
            navigator=NavigatorState(categories=(NavigatorCategory(type="lists"),)),
            list_drill=ListDrillEntries(list_id="l1", list_name="Deals"),
        )
        assert breadcrumb(navigation) == "Lists › Deals › All"

    def test_breadcrumb_object_drill(self):
        navigation = NavigationState(
            navigator=NavigatorState(categories=(NavigatorCategory(type="objects"),)),
            object_drill=ObjectDrillRecords(object_slug="deals", object_name="Deals"),
        )
        assert breadcrumb(navigation) == "Objects › Deals"

    def test_status_counts_and_more_marker(self):
        """The status line shows item count, a + when more pages exist, and freshness."""
        navigation = NavigationState(
            navigator=NavigatorState(categories=(NavigatorCategory(type="notes"),)),
            results=ResultsState(items=make_items(2, kind="notes"), has_next_page=True),
        )
        snapshot = make_snapshot(
            key="notes",
            data=make_items(2, kind="notes"),
            has_next_page=True,
            last_updated_at=NOW - timedelta(minutes=3),
        )
        assert format_status(navigation, snapshot, now=NOW) == "Notes · 2 items+ · updated 3m ago"

    def test_status_loading_and_error(self):
        navigation = NavigationState(results=ResultsState(loading=True))
        snapshot = make_snapshot(error="Boom")
        text = format_status(navigation, snapshot, now=NOW)
        assert "loading…" in text
        assert "[red]Boom[/red]" in text


class TestBrowserScreen:
    """Test BrowserScreen key handling against the navigation state."""

    @pytest.mark.asyncio
    async def test_mount_selects_first_category(self, controller, canned_pages):
        """On mount the first category is selected and its results load."""
        app = BrowserTestApp(controller)
        async with browser_test_context(app) as pilot:
            await settle(pilot)
            screen = browser(app)
            assert screen.navigation.navigator.categories == TEST_CATEGORIES
            assert screen.navigation.navigator.selected_index == 0
            assert controller.active_key == "object:companies"
            assert [item.id for item in screen.navigation.results.items] == [
                "object-0",
                "object-1",
                "object-2",
            ]
            assert screen.navigation.detail.item == screen.navigation.results.items[0]

    @pytest.mark.asyncio
    async def test_navigator_cursor_switches_category(self, controller, canned_pages):
        """j moves the navigator and loads the next category."""
        app = BrowserTestApp(controller)
        async with browser_test_context(app) as pilot:
            await settle(pilot)
            await pilot.press("j")
            await settle(pilot)

            screen = browser(app)
            assert screen.navigation.selected_category == NavigatorCategory(type="notes")
            assert controller.active_key == "notes"
            assert len(screen.navigation.results.items) == 2
            assert screen.navigation.results.has_next_page is True

            await pilot.press("k")
            await settle(pilot)
            assert screen.navigation.navigator.selected_index == 0

    @pytest.mark.asyncio
    async def test_arrow_keys_and_enter_reach_the_screen(self, controller, canned_pages):
        """down moves the navigator through state; enter focuses results without reselecting."""
        app = BrowserTestApp(controller)
        async with browser_test_context(app) as pilot:
            await settle(pilot)
            screen = browser(app)
            assert app.focused is None

            await pilot.press("down")
            await settle(pilot)
            assert screen.navigation.navigator.selected_index == 1
            assert controller.active_key == "notes"
            assert screen.query_one("#navigator-list").index == 1

            await pilot.press("enter")
            await settle(pilot)
            assert screen.navigation.focused_pane == "results"
            assert screen.navigation.selected_category == NavigatorCategory(type="notes")
            assert len(screen.navigation.results.items) == 2
            assert app.focused is None

    @pytest.mark.asyncio
    async def test_tab_cycles_panes(self, controller, canned_pages):
        """tab and shift+tab move focus between the three panes."""
        app = BrowserTestApp(controller)
        async with browser_test_context(app) as pilot:
            screen = browser(app)
            assert screen.navigation.focused_pane == "navigator"
            await pilot.press("tab")
            assert screen.navigation.focused_pane == "results"
            await pilot.press("tab")
            assert screen.navigation.focused_pane == "detail"
            await pilot.press("tab")
            assert screen.navigation.focused_pane == "navigator"
            await pilot.press("shift+tab")
            assert screen.navigation.focused_pane == "detail"
            await pilot.press("2")
            assert screen.navigation.focused_pane == "results"

    @pytest.mark.asyncio
    async def test_results_cursor_updates_detail(self, controller, canned_pages):
        """Moving through results shows the selected item in the detail pane."""
        app = BrowserTestApp(controller)
        async with browser_test_context(app) as pilot:
            await settle(pilot)
            await pilot.press("enter")
            await pilot.press("j")
            await settle(pilot)

            screen = browser(app)
            assert screen.navigation.focused_pane == "results"
            assert screen.navigation.results.selected_index == 1
            assert screen.navigation.detail.item.id == "object-1"

    @pytest.mark.asyncio
    async def test_detail_tabs(self, controller, canned_pages):
        """] and [ cycle the detail tabs."""
        app = BrowserTestApp(controller)
        async with browser_test_context(app) as pilot:
            screen = browser(app)
            await pilot.press("right_square_bracket")
            assert screen.navigation.detail.active_tab == "json"
            await pilot.press("left_square_bracket")
            await pilot.press("left_square_bracket")
            assert screen.navigation.detail.active_tab == "actions"

    @pytest.mark.asyncio
    async def test_toggle_debug(self, controller, canned_pages):
        """ctrl+d shows and hides the debug panel."""
        app = BrowserTestApp(controller)
        async with browser_test_context(app) as pilot:
            screen = browser(app)
            assert screen.state.debug_enabled is False
            await pilot.press("ctrl+d")
            await pilot.pause()
            assert screen.state.debug_enabled is True
            assert screen.query_one("#debug-panel").display is True

    @pytest.mark.asyncio
    async def test_command_palette_opens_and_closes(self, controller, canned_pages):
        """: opens the palette; escape closes it and clears its state."""
        app = BrowserTestApp(controller)
        async with browser_test_context(app) as pilot:
            screen = browser(app)
            await pilot.press("colon")
            await pilot.pause()
            assert isinstance(app.screen, CommandPaletteScreen)
            assert screen.navigation.command_palette.is_open is True

            await pilot.press("escape")
            await pilot.pause()
            assert app.screen is screen
            assert screen.navigation.command_palette.is_open is False

    @pytest.mark.asyncio
    async def test_command_palette_navigates(self, controller, canned_pages):
        """Running a navigation command selects that category."""
        app = BrowserTestApp(controller)
        async with browser_test_context(app) as pilot:
            screen = browser(app)
            await pilot.press("colon")
            await pilot.pause()
            await pilot.press(*"notes")
            await pilot.press("enter")
            await settle(pilot)

            assert app.screen is screen
            assert screen.navigation.selected_category == NavigatorCategory(type="notes")
            assert screen.navigation.focused_pane == "results"

    @pytest.mark.asyncio
    async def test_webhook_create_requires_webhooks_category(self, controller, canned_pages):
        """n outside the webhooks category leaves the modal closed."""
        app = BrowserTestApp(controller)
        async with browser_test_context(app) as pilot:
            screen = browser(app)
            await pilot.press("n")
            await pilot.pause()
            assert app.screen is screen
            assert screen.navigation.webhook_modal.mode == "closed"

    @pytest.mark.asyncio
    async def test_clear_cache_empties_store(self, controller, canned_pages):
        """ctrl+r after clearing the cache refetches the current category."""
        app = BrowserTestApp(controller)
        async with browser_test_context(app) as pilot:
            await settle(pilot)
            assert len(controller.cache_store) == 1

            screen = browser(app)
            screen.action_clear_cache()
            await settle(pilot)

            assert controller.active_key == "object:companies"
            assert len(screen.navigation.results.items) == 3

    @pytest.mark.asyncio
    async def test_webhook_delete_confirmation(self, controller, canned_pages):
        """x asks for confirmation; cancelling closes the delete modal state."""
        app = BrowserTestApp(controller)
        async with browser_test_context(app) as pilot:
            screen = browser(app)
            await settle(pilot)
            await pilot.press("j", "j")
            await settle(pilot)
            await pilot.press("tab")
            assert screen.navigation.selected_result.id == "wh-1"

            await pilot.press("x")
            await pilot.pause()
            assert isinstance(app.screen, ConfirmationModal)
            assert screen.navigation.webhook_modal.mode == "delete"
            assert screen.navigation.webhook_modal.webhook_id == "wh-1"

            await pilot.press("escape")
            await pilot.pause()
            assert app.screen is screen
            assert screen.navigation.webhook_modal.mode == "closed"
