from __future__ import annotations

import time
from collections.abc import Callable, Hashable
from dataclasses import dataclass

from ..models.processing_result import LoadResult

"""Memoization of pipeline results keyed by a stable source identifier.

Entries are immutable (result + store time) and replaced as a whole, so a
concurrent reader sees either the old entry or the new one, never a mix.
Two callers that miss at the same time both load and the last write wins.
"""

__all__ = [
    "CacheEntry",
    "ForecastCache",
]


@dataclass(frozen=True)
class CacheEntry:
    result: LoadResult
    stored_at: float


class ForecastCache:
    """TTL cache for LoadResult values.

    Keys are typically ``(source, PipelineConfig)``; anything hashable works.
    """

    def __init__(self, ttl_seconds: float = 300.0, clock: Callable[[], float] = time.monotonic) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[Hashable, CacheEntry] = {}

    def get(self, key: Hashable) -> LoadResult | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry.stored_at >= self.ttl_seconds:
            # 期限切れは捨てる (別の呼び出しが差し替えた新しいエントリは残す)
            if self._entries.get(key) is entry:
                self._entries.pop(key, None)
            return None
        return entry.result

    def put(self, key: Hashable, result: LoadResult) -> None:
        self._entries[key] = CacheEntry(result=result, stored_at=self._clock())

    def get_or_load(self, key: Hashable, loader: Callable[[], LoadResult]) -> LoadResult:
        cached = self.get(key)
        if cached is not None:
            return cached
        result = loader()
        self.put(key, result)
        return result

    def clear(self) -> None:
        self._entries = {}

    def __len__(self) -> int:
        return len(self._entries)
