from __future__ import annotations

import threading
from typing import Literal

from pydantic import BaseModel

Counter = Literal[
    "reads",
    "writes",
    "cache_reads",
    "cache_writes",
    "removes",
    "renames",
    "existence_checks",
]


class StatisticsSnapshot(BaseModel):
    reads: int = 0
    writes: int = 0
    cache_reads: int = 0
    cache_writes: int = 0
    removes: int = 0
    renames: int = 0
    existence_checks: int = 0


class Statistics:
    """
    Monotonic operation counters.

    Each increment is atomic; there is no ordering between different
    counters. Stores share one instance unless given their own.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._counts: dict[str, int] = dict.fromkeys(StatisticsSnapshot.model_fields, 0)

    def increment(self, counter: Counter, amount: int = 1) -> None:
        with self._lock:
            self._counts[counter] += amount

    def snapshot(self) -> StatisticsSnapshot:
        with self._lock:
            return StatisticsSnapshot(**self._counts)

    def _read(self, counter: Counter) -> int:
        with self._lock:
            return self._counts[counter]

    @property
    def reads(self) -> int:
        return self._read("reads")

    @property
    def writes(self) -> int:
        return self._read("writes")

    @property
    def cache_reads(self) -> int:
        return self._read("cache_reads")

    @property
    def cache_writes(self) -> int:
        return self._read("cache_writes")

    @property
    def removes(self) -> int:
        return self._read("removes")

    @property
    def renames(self) -> int:
        return self._read("renames")

    @property
    def existence_checks(self) -> int:
        return self._read("existence_checks")


GLOBAL_STATISTICS = Statistics()
