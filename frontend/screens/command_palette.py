"""Command palette overlay."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Input, Static

from frontend.commands import DEFAULT_COMMANDS, Command, filter_commands
from frontend.state.actions import (
    CloseCommandPalette,
    NavigateCommand,
    SelectCommand,
    SetCommandQuery,
)
from frontend.state.navigation import COMMAND_PALETTE_MAX_VISIBLE

if TYPE_CHECKING:
    from frontend.screens.browser_screen import BrowserScreen


class CommandPaletteScreen(ModalScreen[Command | None]):
    """Filterable command list.

    Query and cursor live in the browser's navigation state; this screen only
    dispatches actions and renders what the state says. Dismisses with the
    chosen command, or None when cancelled.
    """

    BINDINGS = [
        Binding("escape", "cancel", "Close", show=False),
        Binding("up", "cursor_up", show=False, priority=True),
        Binding("down", "cursor_down", show=False, priority=True),
    ]

    DEFAULT_CSS = """
    CommandPaletteScreen {
        align: center top;
    }

    #palette {
        width: 70;
        height: auto;
        margin-top: 3;
        border: thick $accent 60%;
        background: $surface;
        padding: 0 1;
    }

    #palette-commands {
        height: auto;
        padding: 1 0 0 0;
    }

    #palette-hint {
        color: $text-muted;
    }
    """

    def __init__(self, owner: "BrowserScreen", commands: tuple[Command, ...] = DEFAULT_COMMANDS):
        super().__init__()
        self._owner = owner
        self._commands = commands

    def compose(self) -> ComposeResult:
        with Vertical(id="palette"):
            yield Input(placeholder="Type a command...", id="palette-input")
            yield Static("", id="palette-commands")
            yield Static("↑↓ select · enter run · esc close", id="palette-hint")

    def on_mount(self) -> None:
        self.query_one("#palette-input", Input).focus()
        self._render_commands()

    @property
    def filtered(self) -> tuple[Command, ...]:
        query = self._owner.navigation.command_palette.query
        return filter_commands(self._commands, query)

    def _render_commands(self) -> None:
        commands = self.filtered
        selected = self._owner.navigation.command_palette.selected_index
        if not commands:
            self.query_one("#palette-commands", Static).update("[dim]No matching commands[/dim]")
            return

        start = max(0, selected - COMMAND_PALETTE_MAX_VISIBLE + 1)
        lines = []
        for index, command in enumerate(
            commands[start : start + COMMAND_PALETTE_MAX_VISIBLE], start=start
        ):
            shortcut = f" [dim]{escape(command.shortcut)}[/dim]" if command.shortcut else ""
            line = f"{escape(command.label)}{shortcut}  [dim]{escape(command.description)}[/dim]"
            lines.append(f"[reverse]{line}[/reverse]" if index == selected else line)
        self.query_one("#palette-commands", Static).update("\n".join(lines))

    def on_input_changed(self, event: Input.Changed) -> None:
        self._owner.dispatch(SetCommandQuery(event.value))
        self._render_commands()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        commands = self.filtered
        index = self._owner.navigation.command_palette.selected_index
        chosen = commands[index] if 0 <= index < len(commands) else None
        self._owner.dispatch(SelectCommand())
        self.dismiss(chosen)

    def _navigate(self, direction: str) -> None:
        self._owner.dispatch(NavigateCommand(direction, max_index=len(self.filtered) - 1))
        self._render_commands()

    def action_cursor_up(self) -> None:
        self._navigate("up")

    def action_cursor_down(self) -> None:
        self._navigate("down")

    def action_cancel(self) -> None:
        self._owner.dispatch(CloseCommandPalette())
        self.dismiss(None)
