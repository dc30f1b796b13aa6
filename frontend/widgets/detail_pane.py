"""Detail pane: tab strip plus the active tab's content."""

from rich.markup import escape
from textual.app import ComposeResult
from textual.containers import Vertical, VerticalScroll
from textual.widgets import Static

from frontend.detail import render_actions, render_json, render_sdk, render_summary
from frontend.state.navigation import DETAIL_TABS, DetailTab, NavigatorCategory, ResultItem


def format_tab_strip(active: DetailTab) -> str:
    return "  ".join(
        f"[reverse] {tab} [/reverse]" if tab == active else f" {tab} " for tab in DETAIL_TABS
    )


class DetailScroll(VerticalScroll, can_focus=False):
    pass


class DetailPane(Vertical):
    DEFAULT_CSS = """
    DetailPane #detail-tabs {
        height: 1;
        color: $text-muted;
    }

    DetailPane #detail-scroll {
        height: 1fr;
    }
    """

    def compose(self) -> ComposeResult:
        yield Static(format_tab_strip("summary"), id="detail-tabs")
        with DetailScroll(id="detail-scroll"):
            yield Static("Nothing selected", id="detail-content")

    def show_item(
        self,
        item: ResultItem | None,
        tab: DetailTab,
        category: NavigatorCategory | None,
    ) -> None:
        if tab == "json":
            content = escape(render_json(item))
        elif tab == "sdk":
            content = escape(render_sdk(item, category))
        elif tab == "actions":
            content = render_actions(item)
        else:
            content = render_summary(item)
        self.query_one("#detail-tabs", Static).update(format_tab_strip(tab))
        self.query_one("#detail-content", Static).update(content)
