from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import datetime
from typing import Iterator, List, Optional

DEFAULT_HISTORY_LIMIT = 10


@dataclass(frozen=True)
class QueryHistoryEntry:
    query: str
    timestamp: float
    result_count: int

    def display_time(self) -> str:
        return datetime.fromtimestamp(self.timestamp).strftime("%H:%M:%S")


class QueryHistory:
    """Recent successful queries, newest first, capped at `limit` entries."""

    def __init__(self, limit: int = DEFAULT_HISTORY_LIMIT):
        if limit < 1:
            raise ValueError("History limit must be at least 1.")
        self.limit = limit
        self._entries: List[QueryHistoryEntry] = []

    def record(self, query: str, result_count: int, timestamp: Optional[float] = None) -> QueryHistoryEntry:
        entry = QueryHistoryEntry(
            query=query,
            timestamp=time.time() if timestamp is None else timestamp,
            result_count=result_count,
        )
        self._entries = [entry] + self._entries[: self.limit - 1]
        return entry

    @property
    def entries(self) -> List[QueryHistoryEntry]:
        return list(self._entries)

    @property
    def latest(self) -> Optional[QueryHistoryEntry]:
        return self._entries[0] if self._entries else None

    def clear(self) -> None:
        self._entries = []

    def to_rows(self) -> List[List[object]]:
        return [[e.query, e.result_count, e.display_time()] for e in self._entries]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[QueryHistoryEntry]:
        return iter(list(self._entries))
