from __future__ import annotations

import asyncio
import contextlib
import threading
from dataclasses import dataclass
from typing import AsyncIterator, Callable, Generic, Iterator, TypeVar

from .paths import StrPath, path_key

L = TypeVar("L")


@dataclass
class _Entry(Generic[L]):
    lock: L
    users: int = 0


class _RefCountedLocks(Generic[L]):
    """
    Provides a stable lock per normalized file path.

    An entry lives only while some caller holds or waits on it, so the table
    never grows past the number of paths currently in use.
    """

    def __init__(self, factory: Callable[[], L]) -> None:
        self._factory = factory
        self._guard = threading.Lock()
        self._entries: dict[str, _Entry[L]] = {}

    def __len__(self) -> int:
        with self._guard:
            return len(self._entries)

    def _checkout(self, key: str) -> _Entry[L]:
        with self._guard:
            entry = self._entries.get(key)
            if entry is None:
                entry = _Entry(self._factory())
                self._entries[key] = entry
            entry.users += 1
            return entry

    def _checkin(self, key: str, entry: _Entry[L]) -> None:
        with self._guard:
            entry.users -= 1
            if entry.users == 0 and self._entries.get(key) is entry:
                del self._entries[key]


class PathLockRegistry(_RefCountedLocks[threading.Lock]):
    """Blocking per-path locks."""

    def __init__(self) -> None:
        super().__init__(threading.Lock)

    @contextlib.contextmanager
    def hold(self, path: StrPath) -> Iterator[None]:
        key = path_key(path)
        entry = self._checkout(key)
        try:
            with entry.lock:
                yield
        finally:
            self._checkin(key, entry)


class AsyncPathLockRegistry(_RefCountedLocks[asyncio.Lock]):
    """Per-path locks that suspend the waiting task instead of its thread."""

    def __init__(self) -> None:
        super().__init__(asyncio.Lock)

    @contextlib.asynccontextmanager
    async def hold(self, path: StrPath) -> AsyncIterator[None]:
        key = path_key(path)
        entry = self._checkout(key)
        try:
            async with entry.lock:
                yield
        finally:
            self._checkin(key, entry)
