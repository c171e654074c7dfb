from __future__ import annotations

import asyncio
from typing import Any, Callable, TypeVar, overload

from .document import Document
from .engine import DocumentEngine
from .interfaces import Codec, FileSystem
from .locks import AsyncPathLockRegistry
from .lru import LruCache
from .paths import StrPath, path_key
from .settings import Settings
from .stats import Statistics
from .trace import Tracer

T = TypeVar("T")
R = TypeVar("R")


class AsyncDocumentStore:
    """
    Asyncio document store with the same semantics as `DocumentStore`.

    Waiting for a path lock suspends the task, not the event loop thread.
    Once the lock is held the operation body runs via asyncio.to_thread so
    file I/O never blocks the loop.

    Keeps its own cache and locks: do not mix it with a `DocumentStore` on
    the same files inside one process.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        filesystem: FileSystem | None = None,
        codec: Codec | None = None,
        statistics: Statistics | None = None,
    ) -> None:
        settings = settings or Settings()
        self._engine = DocumentEngine(
            cache_capacity=settings.cache_capacity,
            filesystem=filesystem,
            codec=codec,
            statistics=statistics,
            tracer=Tracer(settings.debug),
        )
        self._locks = AsyncPathLockRegistry()

    @property
    def cache(self) -> LruCache[str, Document]:
        return self._engine.cache

    @property
    def statistics(self) -> Statistics:
        return self._engine.statistics

    @property
    def locks(self) -> AsyncPathLockRegistry:
        return self._locks

    async def _run_locked(self, path: StrPath, label: str, body: Callable[..., R], *args: Any) -> R:
        """
        Run one engine body in a worker thread while holding the path lock.

        If the calling task is cancelled the lock is kept until the body has
        finished in its thread, then the cancellation propagates.
        """
        async with self._locks.hold(path):
            self._engine.trace("async lock acquired %s (%s)", path, label)
            fut = asyncio.ensure_future(asyncio.to_thread(body, *args))
            try:
                return await asyncio.shield(fut)
            except asyncio.CancelledError:
                await _finish(fut)
                raise
            finally:
                self._engine.trace("async lock released %s", path)

    async def create_database(self, path: StrPath) -> bool:
        return await self._run_locked(path, "create", self._engine.create_database, path)

    async def save(self, path: StrPath, key: str, value: Any) -> None:
        await self._run_locked(path, f"save {key!r}", self._engine.save, path, key, value)

    @overload
    async def get(self, path: StrPath, key: str) -> Any: ...
    @overload
    async def get(self, path: StrPath, key: str, type_: type[T], default: T | None = None) -> T | None: ...

    async def get(self, path: StrPath, key: str, type_: Any = Any, default: Any = None) -> Any:
        return await self._run_locked(path, f"get {key!r}", self._engine.get, path, key, type_, default)

    async def delete_key(self, path: StrPath, key: str) -> bool:
        return await self._run_locked(path, f"delete {key!r}", self._engine.delete_key, path, key)

    async def rename_key(self, path: StrPath, old_key: str, new_key: str) -> bool:
        return await self._run_locked(
            path, f"rename {old_key!r} -> {new_key!r}", self._engine.rename_key, path, old_key, new_key
        )

    def invalidate(self, path: StrPath) -> None:
        self._engine.cache.invalidate(path_key(path))

    def clear_cache(self) -> None:
        self._engine.cache.clear()


async def _finish(fut: asyncio.Future[Any]) -> None:
    """Wait for `fut` to complete, ignoring further cancellation of the waiter."""
    while not fut.done():
        try:
            await asyncio.wait({fut})
        except asyncio.CancelledError:
            continue
    if not fut.cancelled():
        # The caller was cancelled, so the body's outcome has nowhere to go;
        # mark it retrieved so asyncio does not report it as lost.
        fut.exception()
