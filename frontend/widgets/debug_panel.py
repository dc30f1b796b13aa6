"""Debug panel: controller state and the most recent API requests."""

from collections.abc import Sequence

from rich.markup import escape
from textual.widgets import Static

from frontend.category_data import RequestLogEntry
from frontend.state.paginated_data import PaginatedSnapshot

VISIBLE_REQUESTS = 6


def format_request_line(entry: RequestLogEntry) -> str:
    marker = "[green]ok[/green]" if entry.status == "success" else "[red]err[/red]"
    line = f"{entry.started_at:%H:%M:%S} {marker} {escape(entry.label)} ({escape(entry.detail)}) {entry.duration_ms}ms"
    if entry.error_message:
        line += f" [red]{escape(entry.error_message)}[/red]"
    return line


class DebugPanel(Static):
    """Docked panel shown while debug mode is on."""

    DEFAULT_CSS = """
    DebugPanel {
        dock: bottom;
        height: auto;
        max-height: 10;
        padding: 0 1;
        border-top: solid $warning;
        color: $text-muted;
    }
    """

    def show_state(
        self,
        snapshot: PaginatedSnapshot,
        requests: Sequence[RequestLogEntry],
        cached_keys: int,
        last_action: str | None = None,
    ) -> None:
        flags = []
        if snapshot.loading:
            flags.append("loading")
        if snapshot.is_prefetching:
            flags.append("prefetching")
        if snapshot.has_next_page:
            flags.append("more")
        lines = [
            f"key={escape(snapshot.key or '-')} gen={snapshot.generation} "
            f"items={len(snapshot.data)} cached={cached_keys} "
            f"state={'/'.join(flags) or 'idle'}"
        ]
        if last_action:
            lines.append(f"last action: {last_action}")
        if snapshot.error:
            lines.append(f"[red]error: {escape(snapshot.error)}[/red]")
        lines.extend(format_request_line(entry) for entry in list(requests)[-VISIBLE_REQUESTS:])
        self.update("\n".join(lines))
