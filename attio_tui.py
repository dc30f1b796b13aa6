import asyncio
import logging
import os
import signal
from pathlib import Path

from textual.app import App
from textual.logging import TextualHandler

from backend.client import AttioClient
from backend.settings import ATTIO_API_KEY, DEBUG_ENABLED_BY_DEFAULT
from frontend.screens.browser_screen import BrowserScreen

LOGS_DIR = Path(__file__).parent / "logs"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger("attio_tui")


def _configure_logging(debug: bool = DEBUG_ENABLED_BY_DEFAULT) -> None:
    """Route all logging through Textual, with a file copy for the log screen."""
    LOGS_DIR.mkdir(exist_ok=True)
    os.environ.setdefault("TEXTUAL_LOG", str(LOGS_DIR / "attio-tui.log"))
    log_path = Path(os.environ["TEXTUAL_LOG"])

    textual_handler = TextualHandler(stderr=False, stdout=False)
    textual_handler.setFormatter(logging.Formatter(LOG_FORMAT))

    file_handler = logging.FileHandler(log_path, encoding="utf-8")
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        handlers=[textual_handler, file_handler],
        force=True,
    )

    # aiohttp logs every connection at debug; keep warnings/errors.
    logging.getLogger("aiohttp").setLevel(logging.WARNING)


class AttioApp(App):
    """Terminal browser for an Attio workspace."""

    TITLE = "Attio"
    ENABLE_COMMAND_PALETTE = False

    CSS = """
    Screen {
        background: $surface;
    }

    Footer {
        background: $panel;
    }

    Footer .footer--key {
        color: $text-muted;
    }

    #log-view {
        height: 100%;
    }
    """

    def __init__(self, client: AttioClient | None = None, api_key: str | None = ATTIO_API_KEY):
        super().__init__()
        if client is None and api_key:
            client = AttioClient(api_key=api_key)
        self.client = client
        self._shutting_down = False

    async def on_mount(self):
        self.theme = "catppuccin-mocha"
        if self.client is None:
            self.notify(
                "Set ATTIO_API_KEY to load workspace data",
                title="No API key",
                severity="warning",
                timeout=10,
            )
        self.push_screen(BrowserScreen(client=self.client))

        try:
            loop = asyncio.get_running_loop()
            for sig in (signal.SIGINT, signal.SIGTERM):
                loop.add_signal_handler(
                    sig, lambda: asyncio.create_task(self._async_shutdown())
                )
        except (NotImplementedError, RuntimeError):
            logger.debug("Signal handlers unavailable on this platform")

    async def _async_shutdown(self):
        """Close the HTTP session, then exit. Safe to call twice."""
        if self._shutting_down:
            return
        self._shutting_down = True
        await self._close_client()
        self.exit()

    async def _close_client(self):
        if self.client is None:
            return
        try:
            await self.client.close()
        except Exception as exc:
            logger.warning("Client shutdown encountered an error: %s", exc, exc_info=True)

    async def on_unmount(self):
        """Fallback for exits outside the signal path."""
        await self._close_client()


def main() -> None:
    _configure_logging()
    logger.info("Starting Attio TUI")
    AttioApp().run()


if __name__ == "__main__":
    main()
