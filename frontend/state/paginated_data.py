"""Paginated data controller for the active category.

The controller serves one category key at a time. It hydrates from the cache
store when it can, otherwise starts a fetch, and handles cursor-based
load-more, refresh and prefetch-on-approach.

Every asynchronous operation captures the generation current when it
started. The generation changes whenever the active key changes or a refresh
starts, and a result arriving for an older generation is dropped without
touching state or cache. In-flight requests are never cancelled; they simply
run to completion and are ignored.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Coroutine

from backend.errors import extract_error_message
from backend.models import Page
from backend.settings import LOAD_MORE_COOLDOWN_SECONDS, PREFETCH_THRESHOLD
from frontend.state.cache_store import CacheEntry, CacheStore, default_cache_store
from frontend.state.fetch_state_machine import FetchStateMachine

logger = logging.getLogger("attio_tui")

FetchFn = Callable[[str | None], Awaitable[Page]]
Listener = Callable[["PaginatedSnapshot"], None]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class PaginatedSnapshot:
    """Everything the view needs from the controller at one instant."""

    key: str | None
    data: tuple[Any, ...]
    loading: bool
    error: str | None
    has_next_page: bool
    last_updated_at: datetime | None
    is_prefetching: bool
    generation: int


class PaginatedDataController:
    """Fetch lifecycle for the active category key.

    ``activate`` is synchronous and must be called from inside a running
    event loop whenever it may need to start a fetch. ``load_more`` and
    ``refresh`` never raise for fetch failures; the failure is recorded in
    ``error`` and, for automatic retries, starts a cooldown window.
    """

    def __init__(
        self,
        cache_store: CacheStore | None = None,
        prefetch_threshold: int = PREFETCH_THRESHOLD,
        load_more_cooldown: float = LOAD_MORE_COOLDOWN_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        now: Callable[[], datetime] = utc_now,
    ):
        self._store = cache_store if cache_store is not None else default_cache_store
        self._prefetch_threshold = prefetch_threshold
        self._load_more_cooldown = load_more_cooldown
        self._clock = clock
        self._now = now

        self._machine = FetchStateMachine()
        self._generation = 0
        self._key: str | None = None
        self._fetch_fn: FetchFn | None = None

        self._pages: tuple[tuple[Any, ...], ...] = ()
        self._data: tuple[Any, ...] = ()
        self._next_cursor: str | None = None
        self._error: str | None = None
        self._last_updated_at: datetime | None = None
        self._cooldown_until = 0.0

        self._initial_task: asyncio.Task | None = None
        self._load_more_task: asyncio.Task | None = None
        self._tasks: set[asyncio.Task] = set()
        self._listeners: list[Listener] = []

    # Read-only state

    @property
    def data(self) -> tuple[Any, ...]:
        return self._data

    @property
    def loading(self) -> bool:
        return self._machine.output.loading

    @property
    def is_prefetching(self) -> bool:
        return self._machine.output.is_prefetching

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def has_next_page(self) -> bool:
        return bool(self._next_cursor)

    @property
    def last_updated_at(self) -> datetime | None:
        return self._last_updated_at

    @property
    def active_key(self) -> str | None:
        return self._key

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def cache_store(self) -> CacheStore:
        return self._store

    @property
    def in_cooldown(self) -> bool:
        return self._clock() < self._cooldown_until

    @property
    def snapshot(self) -> PaginatedSnapshot:
        output = self._machine.output
        return PaginatedSnapshot(
            key=self._key,
            data=self._data,
            loading=output.loading,
            error=self._error,
            has_next_page=self.has_next_page,
            last_updated_at=self._last_updated_at,
            is_prefetching=output.is_prefetching,
            generation=self._generation,
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with a snapshot after every effective state change.

        Returns a function that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # Operations

    def activate(self, key: str | None, fetch_fn: FetchFn | None = None) -> None:
        """Serve ``key``, hydrating from cache or starting the first fetch.

        Re-activating the current key only swaps in the new fetch function.
        ``activate(None)`` empties the controller.
        """
        if key == self._key:
            if fetch_fn is not None:
                self._fetch_fn = fetch_fn
            return
        if key is not None and fetch_fn is None:
            raise ValueError(f"activate({key!r}) requires a fetch function")

        self._bump_generation()
        self._key = key
        self._fetch_fn = fetch_fn
        self._error = None
        self._cooldown_until = 0.0

        if key is None:
            self._reset_pages()
            self._machine.apply_event("deactivate")
            self._notify()
            return

        entry = self._store.get(key)
        if entry is not None:
            logger.debug("Cache hit for %s (%d pages)", key, len(entry.pages))
            self._adopt(entry)
            self._machine.apply_event("hydrate")
            self._notify()
            return

        self._reset_pages()
        self._machine.apply_event("start_loading")
        self._initial_task = self._spawn(self._run_initial(self._generation, key, fetch_fn))
        self._notify()

    async def refresh(self) -> None:
        """Refetch the first page, replacing the cached pages for this key.

        Bypasses the cache and any cooldown. Joins an initial fetch that is
        still in flight instead of issuing a second request.
        """
        if self._key is None or self._fetch_fn is None:
            return
        if self._initial_task is not None and not self._initial_task.done():
            await asyncio.shield(self._initial_task)
            return

        self._bump_generation()
        self._cooldown_until = 0.0
        self._machine.apply_event("start_loading")
        task = self._spawn(self._run_initial(self._generation, self._key, self._fetch_fn))
        self._initial_task = task
        self._notify()
        await asyncio.shield(task)

    async def load_more(self) -> None:
        """Fetch the next page and append it.

        Concurrent callers share one request. Does nothing when the key is
        exhausted, a request is already running, or a cooldown is active.
        """
        task = self._start_load_more()
        if task is not None:
            await asyncio.shield(task)

    def check_prefetch(self, selected_index: int) -> None:
        """Start loading the next page when the selection nears the end."""
        remaining = len(self._data) - selected_index - 1
        if remaining > self._prefetch_threshold:
            return
        self._start_load_more()

    def clear_cache(self) -> None:
        """Empty the cache store; the next activation of any key fetches again."""
        self._store.clear()

    # Internals

    def _bump_generation(self) -> None:
        self._generation += 1
        self._initial_task = None
        self._load_more_task = None

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation

    def _adopt(self, entry: CacheEntry) -> None:
        self._pages = entry.pages
        self._data = entry.items
        self._next_cursor = entry.next_cursor
        self._last_updated_at = entry.fetched_at

    def _reset_pages(self) -> None:
        self._pages = ()
        self._data = ()
        self._next_cursor = None
        self._last_updated_at = None

    def _can_load_more(self) -> bool:
        if self._key is None or self._fetch_fn is None:
            return False
        if not self._next_cursor or self._machine.busy:
            return False
        return not self.in_cooldown

    def _start_load_more(self) -> asyncio.Task | None:
        if self._load_more_task is not None and not self._load_more_task.done():
            return self._load_more_task
        if not self._can_load_more():
            return None

        self._machine.apply_event("start_prefetch")
        task = self._spawn(
            self._run_load_more(self._generation, self._key, self._fetch_fn, self._next_cursor)
        )
        self._load_more_task = task
        self._notify()
        return task

    def _spawn(self, coro: Coroutine[Any, Any, None]) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)
        return task

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Fetch task crashed", exc_info=exc)

    async def _run_initial(self, generation: int, key: str, fetch_fn: FetchFn) -> None:
        try:
            page = await fetch_fn(None)
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            if self._is_current(generation):
                self._initial_task = None
                self._fail(key, exc, "load_failed")
            return

        if not self._is_current(generation):
            return

        self._initial_task = None
        fetched_at = self._now()
        if self._last_updated_at is not None and fetched_at < self._last_updated_at:
            fetched_at = self._last_updated_at
        self._error = None
        self._adopt(self._store.set(key, (page.items,), page.next_cursor, fetched_at))
        self._machine.apply_event("load_succeeded")
        self._notify()

    async def _run_load_more(
        self, generation: int, key: str, fetch_fn: FetchFn, cursor: str
    ) -> None:
        try:
            page = await fetch_fn(cursor)
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            if self._is_current(generation):
                self._load_more_task = None
                self._fail(key, exc, "prefetch_failed")
            return

        if not self._is_current(generation):
            return

        self._load_more_task = None
        fetched_at = self._last_updated_at or self._now()
        self._adopt(self._store.set(key, self._pages + (page.items,), page.next_cursor, fetched_at))
        self._machine.apply_event("prefetch_succeeded")
        self._notify()

    def _fail(self, key: str, exc: Exception, event: str) -> None:
        self._error = extract_error_message(exc)
        self._cooldown_until = self._clock() + self._load_more_cooldown
        logger.error("Fetch failed for %s: %s", key, self._error, exc_info=exc)
        self._machine.apply_event(event)
        self._notify()

    def _notify(self) -> None:
        if not self._listeners:
            return
        snapshot = self.snapshot
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Paginated data listener failed")
