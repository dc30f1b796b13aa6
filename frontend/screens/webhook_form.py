"""Webhook create/edit wizard: url -> subscriptions -> review."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape
from textual import work
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, SelectionList, Static
from textual.widgets.selection_list import Selection

from frontend.state.actions import (
    CloseWebhookModal,
    WebhookNavigateStep,
    WebhookSetUrl,
    WebhookToggleEvent,
)
from frontend.state.navigation import (
    WEBHOOK_FORM_STEPS,
    WebhookModalCreate,
    WebhookModalEdit,
)
from frontend.webhook_events import WEBHOOK_EVENT_CATEGORIES, is_valid_event_type

if TYPE_CHECKING:
    from frontend.screens.browser_screen import BrowserScreen


def validate_target_url(url: str) -> str | None:
    """Return a warning for an unusable URL, or None when it looks fine."""
    if not url.strip():
        return "Enter a target URL"
    if not (url.startswith("http://") or url.startswith("https://")):
        return "URL should start with http:// or https://"
    return None


def validate_events(events: tuple[str, ...]) -> str | None:
    """Return a warning when nothing is selected or an event is not subscribable."""
    if not events:
        return "Select at least one event"
    unknown = [event for event in events if not is_valid_event_type(event)]
    if unknown:
        return f"Unsupported events: {', '.join(unknown)}"
    return None


def format_review(modal: WebhookModalCreate | WebhookModalEdit) -> str:
    lines = [f"[bold]Target URL[/bold]  {escape(modal.target_url)}", "", "[bold]Events[/bold]"]
    lines.extend(f"  • {escape(event)}" for event in modal.selected_events)
    if not modal.selected_events:
        lines.append("  [dim]none selected[/dim]")
    return "\n".join(lines)


class WebhookFormScreen(ModalScreen[bool]):
    """Three-step webhook wizard.

    Form contents live in the browser's webhook modal state. Submitting hands
    the state back to the browser, which runs the API call; the wizard stays
    open and shows the error when the call fails.
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", show=False),
    ]

    DEFAULT_CSS = """
    WebhookFormScreen {
        align: center middle;
    }

    #webhook-dialog {
        width: 80;
        height: auto;
        max-height: 90%;
        border: thick $accent 60%;
        background: $surface;
        padding: 1 2;
    }

    #webhook-title {
        text-style: bold;
    }

    #webhook-steps {
        color: $text-muted;
        margin-bottom: 1;
    }

    #webhook-events {
        height: 16;
    }

    #webhook-warning {
        color: $warning;
        height: auto;
    }

    #webhook-error {
        color: $error;
        height: auto;
    }

    #webhook-buttons {
        height: auto;
        margin-top: 1;
        align: right middle;
    }

    #webhook-buttons Button {
        margin-left: 2;
    }
    """

    def __init__(self, owner: "BrowserScreen"):
        super().__init__()
        self._owner = owner

    @property
    def form_state(self) -> WebhookModalCreate | WebhookModalEdit | None:
        modal = self._owner.navigation.webhook_modal
        if isinstance(modal, (WebhookModalCreate, WebhookModalEdit)):
            return modal
        return None

    def compose(self) -> ComposeResult:
        modal = self.form_state
        selected = set(modal.selected_events) if modal else set()
        title = "Edit webhook" if isinstance(modal, WebhookModalEdit) else "Create webhook"

        options: list[Selection] = []
        for category in WEBHOOK_EVENT_CATEGORIES:
            for event in category.events:
                options.append(
                    Selection(
                        f"{category.name}: {event.label}",
                        event.value,
                        event.value in selected,
                    )
                )
        # Subscriptions from an existing webhook that are not in the catalog stay deselectable.
        if modal:
            for value in modal.selected_events:
                if not is_valid_event_type(value):
                    options.append(Selection(f"Other: {escape(value)}", value, True))

        with Vertical(id="webhook-dialog"):
            yield Label(title, id="webhook-title")
            yield Static("", id="webhook-steps")
            yield Input(
                value=modal.target_url if modal else "",
                placeholder="https://example.com/webhook",
                id="webhook-url",
            )
            yield SelectionList[str](*options, id="webhook-events")
            yield Static("", id="webhook-review")
            yield Static("", id="webhook-warning")
            yield Static("", id="webhook-error")
            with Horizontal(id="webhook-buttons"):
                yield Button("Back", id="back")
                yield Button("Next", id="next", variant="primary")
                yield Button("Submit", id="submit", variant="success")

    def on_mount(self) -> None:
        self._render_step()

    def _render_step(self) -> None:
        modal = self.form_state
        if modal is None:
            return
        step = modal.step
        self.query_one("#webhook-steps", Static).update(
            "  →  ".join(f"[bold]{s}[/bold]" if s == step else s for s in WEBHOOK_FORM_STEPS)
        )
        url_input = self.query_one("#webhook-url", Input)
        events = self.query_one("#webhook-events", SelectionList)
        review = self.query_one("#webhook-review", Static)

        url_input.display = step == "url"
        events.display = step == "subscriptions"
        review.display = step == "review"
        if step == "review":
            review.update(format_review(modal))

        self.query_one("#back", Button).disabled = step == WEBHOOK_FORM_STEPS[0]
        self.query_one("#next", Button).display = step != "review"
        self.query_one("#submit", Button).display = step == "review"
        self.query_one("#webhook-warning", Static).update("")

        if step == "url":
            url_input.focus()
        elif step == "subscriptions":
            events.focus()
        else:
            self.query_one("#submit", Button).focus()

    def _step_warning(self) -> str | None:
        modal = self.form_state
        if modal is None:
            return None
        if modal.step == "url":
            return validate_target_url(modal.target_url)
        if modal.step == "subscriptions":
            return validate_events(modal.selected_events)
        return None

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "webhook-url":
            self._owner.dispatch(WebhookSetUrl(event.value))

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self._next()

    def on_selection_list_selection_toggled(
        self, event: SelectionList.SelectionToggled
    ) -> None:
        self._owner.dispatch(WebhookToggleEvent(event.selection.value))

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "back":
            self._owner.dispatch(WebhookNavigateStep("previous"))
            self._render_step()
        elif event.button.id == "next":
            self._next()
        elif event.button.id == "submit":
            self._submit()

    def _next(self) -> None:
        warning = self._step_warning()
        if warning:
            self.query_one("#webhook-warning", Static).update(escape(warning))
            return
        self._owner.dispatch(WebhookNavigateStep("next"))
        self._render_step()

    @work(exclusive=True, group="webhook_submit")
    async def _submit(self) -> None:
        modal = self.form_state
        if modal is None:
            return
        submit_button = self.query_one("#submit", Button)
        submit_button.disabled = True
        error_label = self.query_one("#webhook-error", Static)
        error_label.update("")
        try:
            error = await self._owner.submit_webhook(modal)
        finally:
            submit_button.disabled = False
        if error:
            error_label.update(escape(error))
            return
        self.dismiss(True)

    def action_cancel(self) -> None:
        self._owner.dispatch(CloseWebhookModal())
        self.dismiss(False)
