"""Process-wide cache of fetched pages, keyed by category key."""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable

logger = logging.getLogger("attio_tui")


@dataclass(frozen=True)
class CacheEntry:
    """Pages fetched for one category key, in arrival order."""

    pages: tuple[tuple[Any, ...], ...]
    next_cursor: str | None
    fetched_at: datetime
    generation: int

    @property
    def items(self) -> tuple[Any, ...]:
        return tuple(itertools.chain.from_iterable(self.pages))


class CacheStore:
    """Mapping of category key to CacheEntry.

    Entries are replaced wholesale on every ``set``; each write is stamped with
    a store-wide generation so a reader can tell two writes apart even when
    their contents compare equal. Entries are only ever removed by ``clear``.
    """

    def __init__(self):
        self._entries: dict[str, CacheEntry] = {}
        self._generations = itertools.count(1)

    def get(self, key: str) -> CacheEntry | None:
        return self._entries.get(key)

    def set(
        self,
        key: str,
        pages: Iterable[Iterable[Any]],
        next_cursor: str | None,
        fetched_at: datetime,
    ) -> CacheEntry:
        entry = CacheEntry(
            pages=tuple(tuple(page) for page in pages),
            next_cursor=next_cursor,
            fetched_at=fetched_at,
            generation=next(self._generations),
        )
        self._entries[key] = entry
        return entry

    def clear(self) -> None:
        if self._entries:
            logger.debug("Clearing %d cached categories", len(self._entries))
        self._entries.clear()

    def keys(self) -> list[str]:
        return list(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)


default_cache_store = CacheStore()


def clear_category_cache() -> None:
    """Drop every cached category in the application's shared store."""
    default_cache_store.clear()
