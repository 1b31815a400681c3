"""Bounded, newest-first history of submission attempts."""

from __future__ import annotations

from collections import deque
from typing import Deque, Iterator, Optional, Tuple

from .models import LogEntry

DEFAULT_HISTORY_LIMIT = 15


class HistoryLog:
    """Keep the most recent ``limit`` entries; older ones fall off the end."""

    def __init__(self, limit: int = DEFAULT_HISTORY_LIMIT) -> None:
        if limit < 1:
            raise ValueError("History limit must be at least 1")
        self._entries: Deque[LogEntry] = deque(maxlen=limit)

    @property
    def limit(self) -> int:
        return self._entries.maxlen or 0

    @property
    def entries(self) -> Tuple[LogEntry, ...]:
        return tuple(self._entries)

    @property
    def latest(self) -> Optional[LogEntry]:
        return self._entries[0] if self._entries else None

    def record(self, entry: LogEntry) -> Tuple[LogEntry, ...]:
        self._entries.appendleft(entry)
        return self.entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[LogEntry]:
        return iter(tuple(self._entries))


__all__ = ["DEFAULT_HISTORY_LIMIT", "HistoryLog"]
