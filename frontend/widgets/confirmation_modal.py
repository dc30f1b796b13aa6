"""Confirmation dialog for destructive actions such as deleting a webhook."""

from rich.markup import escape
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Label


class ConfirmationModal(ModalScreen[bool]):
    """Ask a yes/no question. Dismisses with True only on explicit confirmation."""

    BINDINGS = [
        Binding("left", "focus_previous", show=False),
        Binding("right", "focus_next", show=False),
        Binding("y", "confirm", "Yes", show=False),
        Binding("n", "cancel", "No", show=False),
        Binding("escape", "cancel", "Cancel", show=False),
    ]

    DEFAULT_CSS = """
    ConfirmationModal {
        align: center middle;
    }

    #confirm-dialog {
        width: 80;
        height: auto;
        max-height: 17;
        border: thick $error 60%;
        background: $surface;
        padding: 1 3;
    }

    #confirm-title {
        text-style: bold;
        margin-bottom: 1;
    }

    #confirm-detail {
        color: $warning;
        margin-bottom: 1;
    }

    #confirm-hint {
        color: $text-muted;
        margin-bottom: 1;
    }

    #confirm-buttons {
        height: auto;
        align: center middle;
    }

    #confirm-dialog Button {
        margin-right: 2;
    }
    """

    def __init__(
        self,
        title: str,
        hint: str,
        detail: str | None = None,
        confirm_label: str = "Delete",
        confirm_variant: str = "error",
    ):
        super().__init__()
        self._title = title
        self._hint = hint
        self._detail = detail
        self._confirm_label = confirm_label
        self._confirm_variant = confirm_variant

    def compose(self) -> ComposeResult:
        with Vertical(id="confirm-dialog"):
            yield Label(escape(self._title), id="confirm-title")
            if self._detail:
                yield Label(escape(self._detail), id="confirm-detail")
            yield Label(escape(self._hint), id="confirm-hint")
            with Horizontal(id="confirm-buttons"):
                yield Button("Cancel", id="cancel", variant="default")
                yield Button(self._confirm_label, id="confirm", variant=self._confirm_variant)

    def on_mount(self) -> None:
        self.query_one("#cancel", Button).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "confirm")

    def action_confirm(self) -> None:
        self.dismiss(True)

    def action_cancel(self) -> None:
        self.dismiss(False)
