"""Command palette catalogue."""

from dataclasses import dataclass
from typing import Literal

CommandKind = Literal["navigation", "action", "toggle", "webhook"]


@dataclass(frozen=True)
class Command:
    id: str
    label: str
    description: str
    kind: CommandKind
    target: str
    """Category type/slug for navigation, otherwise the action, toggle or webhook id."""
    shortcut: str | None = None


DEFAULT_COMMANDS: tuple[Command, ...] = (
    # Navigation
    Command("goto-companies", "Go to Companies", "Navigate to companies list", "navigation", "companies"),
    Command("goto-people", "Go to People", "Navigate to people list", "navigation", "people"),
    Command("goto-objects", "Go to Objects", "Browse all workspace objects", "navigation", "objects"),
    Command("goto-lists", "Go to Lists", "Navigate to workspace lists", "navigation", "lists"),
    Command("goto-notes", "Go to Notes", "Navigate to notes", "navigation", "notes"),
    Command("goto-tasks", "Go to Tasks", "Navigate to tasks", "navigation", "tasks"),
    Command("goto-meetings", "Go to Meetings", "Navigate to meetings", "navigation", "meetings"),
    Command("goto-webhooks", "Go to Webhooks", "Navigate to webhook management", "navigation", "webhooks"),
    # Actions
    Command("refresh", "Refresh", "Refresh current data", "action", "refresh", "Ctrl+R"),
    Command("clear-cache", "Clear Cache", "Forget every cached category and refetch", "action", "clear_cache"),
    Command("columns", "Columns", "Show columns for the current results", "action", "columns"),
    Command("logs", "View Logs", "Open the application log", "action", "logs", "l"),
    Command("help", "Help", "Show keyboard shortcuts and help", "action", "help", "?"),
    Command("quit", "Quit", "Exit the application", "action", "quit", "q"),
    # Toggles
    Command("toggle-debug", "Toggle Debug Panel", "Show/hide debug information", "toggle", "debug", "Ctrl+D"),
    # Webhooks
    Command("webhook-create", "Webhook Create", "Create a new webhook", "webhook", "create"),
    Command("webhook-edit", "Webhook Edit", "Edit selected webhook", "webhook", "edit"),
    Command("webhook-delete", "Webhook Delete", "Delete selected webhook", "webhook", "delete"),
)


def filter_commands(commands: tuple[Command, ...], query: str) -> tuple[Command, ...]:
    """Case-insensitive substring match on label or description.

    A blank query returns every command.
    """
    if not query.strip():
        return tuple(commands)
    needle = query.lower()
    return tuple(
        cmd
        for cmd in commands
        if needle in cmd.label.lower() or needle in cmd.description.lower()
    )
