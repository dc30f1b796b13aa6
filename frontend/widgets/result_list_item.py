"""List views and items for the navigator and results panes."""

from rich.markup import escape
from textual.app import ComposeResult
from textual.widgets import Label, ListItem, ListView

from frontend.state.navigation import NavigatorCategory, ResultItem


class PaneListView(ListView, can_focus=False):
    """ListView whose cursor is driven by the screen's bindings, never by focus."""


class ResultListItem(ListItem):
    """List item showing a result's title with its subtitle dimmed."""

    def __init__(self, item: ResultItem, **kwargs):
        super().__init__(**kwargs)
        self.item = item

    def compose(self) -> ComposeResult:
        text = escape(self.item.title)
        if self.item.subtitle:
            text += f"  [dim]{escape(self.item.subtitle)}[/dim]"
        yield Label(text)


class CategoryListItem(ListItem):
    """List item for a navigator category."""

    def __init__(self, category: NavigatorCategory, **kwargs):
        super().__init__(**kwargs)
        self.category = category

    def compose(self) -> ComposeResult:
        yield Label(escape(self.category.label))
