"""Custom Textual widgets for the Attio TUI."""

from .confirmation_modal import ConfirmationModal
from .debug_panel import DebugPanel
from .detail_pane import DetailPane
from .result_list_item import CategoryListItem, PaneListView, ResultListItem

__all__ = [
    "CategoryListItem",
    "ConfirmationModal",
    "DebugPanel",
    "DetailPane",
    "PaneListView",
    "ResultListItem",
]
