from __future__ import annotations

from typing import Any, TypeVar, overload

from .document import Document
from .engine import DocumentEngine
from .interfaces import Codec, FileSystem
from .locks import PathLockRegistry
from .lru import LruCache
from .paths import StrPath, path_key
from .settings import Settings
from .stats import Statistics
from .trace import Tracer

T = TypeVar("T")


class DocumentStore:
    """
    Blocking document store.

    Each database file holds one JSON object used as a key/value table.
    Operations on the same path run one at a time (a thread waiting for the
    path lock blocks); operations on different paths run in parallel.
    Documents are cached in memory and re-read only when the file's
    fingerprint changes.
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
        self._locks = PathLockRegistry()

    @property
    def cache(self) -> LruCache[str, Document]:
        return self._engine.cache

    @property
    def statistics(self) -> Statistics:
        return self._engine.statistics

    @property
    def locks(self) -> PathLockRegistry:
        return self._locks

    def create_database(self, path: StrPath) -> bool:
        """Write an empty database at `path` unless a file is already there."""
        with self._locks.hold(path):
            self._engine.trace("lock acquired %s (create)", path)
            created = self._engine.create_database(path)
        self._engine.trace("lock released %s", path)
        return created

    def save(self, path: StrPath, key: str, value: Any) -> None:
        with self._locks.hold(path):
            self._engine.trace("lock acquired %s (save %r)", path, key)
            self._engine.save(path, key, value)
        self._engine.trace("lock released %s", path)

    @overload
    def get(self, path: StrPath, key: str) -> Any: ...
    @overload
    def get(self, path: StrPath, key: str, type_: type[T], default: T | None = None) -> T | None: ...

    def get(self, path: StrPath, key: str, type_: Any = Any, default: Any = None) -> Any:
        """
        Return the value stored under `key`, decoded as `type_`.

        A missing key returns `default`. A stored value that does not fit
        `type_` raises DocumentDecodeError.
        """
        with self._locks.hold(path):
            self._engine.trace("lock acquired %s (get %r)", path, key)
            value = self._engine.get(path, key, type_, default)
        self._engine.trace("lock released %s", path)
        return value

    def delete_key(self, path: StrPath, key: str) -> bool:
        """Remove `key`; returns False (and writes nothing) when it was absent."""
        with self._locks.hold(path):
            self._engine.trace("lock acquired %s (delete %r)", path, key)
            removed = self._engine.delete_key(path, key)
        self._engine.trace("lock released %s", path)
        return removed

    def rename_key(self, path: StrPath, old_key: str, new_key: str) -> bool:
        """Move the value at `old_key` to `new_key`, replacing any value already there."""
        with self._locks.hold(path):
            self._engine.trace("lock acquired %s (rename %r -> %r)", path, old_key, new_key)
            renamed = self._engine.rename_key(path, old_key, new_key)
        self._engine.trace("lock released %s", path)
        return renamed

    def invalidate(self, path: StrPath) -> None:
        """Forget the cached document for `path`; the file is untouched."""
        self._engine.cache.invalidate(path_key(path))

    def clear_cache(self) -> None:
        self._engine.cache.clear()
