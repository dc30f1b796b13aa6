"""Column overview for the current entity kind."""

from rich.markup import escape
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Label, Static

from frontend.columns import columns_for
from frontend.state.navigation import ResultItem


class ColumnPickerScreen(ModalScreen[None]):
    """Lists the columns defined for an entity kind with the selected item's values."""

    BINDINGS = [
        Binding("escape", "close", "Close", show=False),
        Binding("c", "close", "Close", show=False),
        Binding("q", "close", "Close", show=False),
    ]

    DEFAULT_CSS = """
    ColumnPickerScreen {
        align: center middle;
    }

    #columns-dialog {
        width: 70;
        height: auto;
        border: thick $accent 60%;
        background: $surface;
        padding: 1 2;
    }

    #columns-title {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    def __init__(self, entity_key: str, title: str, item: ResultItem | None = None):
        super().__init__()
        self.entity_key = entity_key
        self._title = title
        self._item = item

    def compose(self) -> ComposeResult:
        columns = columns_for(self.entity_key)
        if columns:
            body = "\n".join(
                f"[bold]{escape(col.label)}[/bold]  {escape(col.value_for(self._item))}"
                for col in columns
            )
        else:
            body = "[dim]No columns for this view[/dim]"
        with Vertical(id="columns-dialog"):
            yield Label(escape(self._title), id="columns-title")
            yield Static(body, id="columns-body")

    def action_close(self) -> None:
        self.dismiss(None)
