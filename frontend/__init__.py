"""Frontend package for the Attio TUI."""

from frontend.screens.browser_screen import BrowserScreen
from frontend.screens.log_screen import LogScreen
from frontend.widgets.confirmation_modal import ConfirmationModal
from frontend.utils import get_record_title

__all__ = [
    "BrowserScreen",
    "ConfirmationModal",
    "LogScreen",
    "get_record_title",
]
