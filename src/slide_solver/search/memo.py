"""Bounded memo table for search results."""

from __future__ import annotations

from typing import Dict, Hashable, Optional

DEFAULT_MAX_ENTRIES = 50_000


class MemoTable:
    """
    Score cache with a hard entry ceiling.

    No per-entry eviction: once an insert pushes the table past
    `max_entries` the whole table is dropped.
    """

    def __init__(self, max_entries: int = DEFAULT_MAX_ENTRIES) -> None:
        if max_entries < 1:
            raise ValueError(f"max_entries must be positive, got {max_entries}")
        self._table: Dict[Hashable, float] = {}
        self.max_entries = max_entries
        self.hits = 0
        self.misses = 0
        self.clears = 0

    def get(self, key: Hashable) -> Optional[float]:
        value = self._table.get(key)
        if value is None:
            self.misses += 1
        else:
            self.hits += 1
        return value

    def put(self, key: Hashable, value: float) -> None:
        if len(self._table) >= self.max_entries and key not in self._table:
            self._table.clear()
            self.clears += 1
        self._table[key] = value

    def __contains__(self, key: Hashable) -> bool:
        return key in self._table

    def __len__(self) -> int:
        return len(self._table)

    def clear(self) -> None:
        """Drop all entries and reset stats."""
        self._table.clear()
        self.hits = 0
        self.misses = 0
        self.clears = 0

    def stats(self) -> dict:
        total_lookups = self.hits + self.misses
        return {
            "entries": len(self._table),
            "max_entries": self.max_entries,
            "hits": self.hits,
            "misses": self.misses,
            "clears": self.clears,
            "hit_rate": self.hits / total_lookups if total_lookups > 0 else 0.0,
        }
