from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

__all__ = [
    "SourceCache",
]

logger = logging.getLogger(__name__)

Rows = list[list[Any]]


class SourceCache:
    """Explicit in-memory cache of fetched row sets, keyed by source label.

    Owned by the caller and passed into the pipeline; nothing is cached unless
    a SourceCache is supplied. Entries live until ``invalidate``.
    """

    def __init__(self) -> None:
        self._entries: dict[str, Rows] = {}

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: str) -> Rows | None:
        return self._entries.get(key)

    def put(self, key: str, rows: Rows) -> None:
        self._entries[key] = rows

    def get_or_load(self, key: str, loader: Callable[[], Rows]) -> Rows:
        cached = self._entries.get(key)
        if cached is not None:
            logger.debug(f"cache hit: {key}")
            return cached
        rows = loader()
        self._entries[key] = rows
        return rows

    def invalidate(self, key: str | None = None) -> None:
        """Drop one entry, or everything when ``key`` is None."""
        if key is None:
            self._entries.clear()
        else:
            self._entries.pop(key, None)
