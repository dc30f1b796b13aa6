"""Application log viewer with optional debug filtering and follow mode."""

import asyncio
import logging
import os
from collections import deque
from dataclasses import dataclass
from pathlib import Path

from textual.app import ComposeResult
from textual.binding import Binding
from textual.screen import Screen
from textual.timer import Timer
from textual.widgets import Footer, Header, Log

LOGS_DIR = Path(__file__).parent.parent.parent / "logs"
LOG_FILE_NAME = "attio-tui.log"
MAX_LINES = 2000
FOLLOW_INTERVAL_SECONDS = 1.0

logger = logging.getLogger("attio_tui")


def default_log_path() -> Path:
    """Log file written by the app; TEXTUAL_LOG overrides the location."""
    return Path(os.environ.get("TEXTUAL_LOG", LOGS_DIR / LOG_FILE_NAME))


@dataclass(frozen=True)
class LogTail:
    lines: tuple[str, ...]
    total_lines: int


def read_log_tail(path: Path, max_lines: int = MAX_LINES) -> LogTail:
    total = 0
    tail: deque[str] = deque(maxlen=max_lines)
    with path.open("r", encoding="utf-8", errors="replace") as f:
        for line in f:
            total += 1
            tail.append(line.rstrip("\n"))
    return LogTail(lines=tuple(tail), total_lines=total)


def is_debug_line(line: str) -> bool:
    """True for records written at DEBUG level by the app's log format."""
    return " - DEBUG - " in line


def visible_lines(tail: LogTail, show_debug: bool) -> tuple[str, ...]:
    if show_debug:
        return tail.lines
    return tuple(line for line in tail.lines if not is_debug_line(line))


class LogScreen(Screen):
    """Tail of the application log.

    Request timings are logged at DEBUG level; ``d`` hides them. ``f`` re-reads
    the file every second until toggled off.
    """

    BINDINGS = [
        Binding("r", "reload", "Reload", show=True),
        Binding("f", "toggle_follow", "Follow", show=True),
        Binding("d", "toggle_debug_lines", "Debug lines", show=True),
        Binding("G", "scroll_bottom", "End", show=False),
        Binding("g", "scroll_top", "Top", show=False),
        Binding("l", "close", "Close", show=True),
        Binding("escape", "close", "Close", show=False),
        Binding("q", "close", "Close", show=False),
    ]

    DEFAULT_CSS = """
    LogScreen #log-view {
        scrollbar-size-vertical: 0;
        scrollbar-size-horizontal: 0;
    }
    """

    def __init__(self, log_path: Path | None = None, max_lines: int = MAX_LINES):
        super().__init__()
        self.log_path = log_path or default_log_path()
        self.max_lines = max_lines
        self.show_debug = True
        self.tail: LogTail | None = None
        self._follow_timer: Timer | None = None

    @property
    def following(self) -> bool:
        return self._follow_timer is not None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=False, icon="")
        yield Log(id="log-view", auto_scroll=True, max_lines=self.max_lines)
        yield Footer()

    async def on_mount(self) -> None:
        await self.refresh_tail()

    def on_unmount(self) -> None:
        self._stop_following()

    async def refresh_tail(self) -> None:
        view = self.query_one("#log-view", Log)
        view.clear()
        self.tail = None

        if not self.log_path.exists():
            view.write_line("Log file has not been created yet.")
            self._show_tail_summary()
            return

        try:
            self.tail = await asyncio.to_thread(read_log_tail, self.log_path, self.max_lines)
        except OSError as exc:
            view.write_line(f"Failed to load log: {exc}")
            logger.error("Failed to read %s: %s", self.log_path, exc, exc_info=True)
        else:
            view.write_lines(visible_lines(self.tail, self.show_debug))
            view.scroll_end(animate=False)
        self._show_tail_summary()

    def _show_tail_summary(self) -> None:
        parts = [str(self.log_path)]
        if self.tail is not None:
            shown = len(visible_lines(self.tail, self.show_debug))
            parts.append(f"{shown} of {self.tail.total_lines} lines")
        if not self.show_debug:
            parts.append("debug hidden")
        if self.following:
            parts.append("following")
        self.sub_title = " · ".join(parts)

    def _stop_following(self) -> None:
        if self._follow_timer is not None:
            self._follow_timer.stop()
            self._follow_timer = None

    async def action_reload(self) -> None:
        await self.refresh_tail()

    async def action_toggle_debug_lines(self) -> None:
        self.show_debug = not self.show_debug
        await self.refresh_tail()

    def action_toggle_follow(self) -> None:
        if self.following:
            self._stop_following()
        else:
            self._follow_timer = self.set_interval(FOLLOW_INTERVAL_SECONDS, self.refresh_tail)
        self._show_tail_summary()

    def action_scroll_bottom(self) -> None:
        self.query_one("#log-view", Log).scroll_end(animate=False)

    def action_scroll_top(self) -> None:
        self.query_one("#log-view", Log).scroll_home(animate=False)

    def action_close(self) -> None:
        self.app.pop_screen()
