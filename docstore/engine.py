from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from .codec import JsonCodec
from .document import Document
from .errors import DocumentDecodeError
from .interfaces import Codec, FileSystem
from .json_store import EMPTY_DATABASE, LocalFileSystem, dump_document, parse_document
from .lru import LruCache
from .paths import StrPath, as_path, path_key
from .settings import DEFAULT_CACHE_CAPACITY
from .stats import GLOBAL_STATISTICS, Statistics
from .trace import Tracer

logger = logging.getLogger(__name__)


class DocumentEngine:
    """
    The load / mutate / persist protocol shared by the blocking and the
    asyncio stores.

    Nothing here takes a path lock: each public method is the body of one
    store operation and must run while the caller holds the lock for `path`.
    All methods block on disk I/O.
    """

    def __init__(
        self,
        *,
        cache_capacity: int = DEFAULT_CACHE_CAPACITY,
        filesystem: FileSystem | None = None,
        codec: Codec | None = None,
        statistics: Statistics | None = None,
        tracer: Tracer | None = None,
    ) -> None:
        self.cache: LruCache[str, Document] = LruCache(cache_capacity)
        self.fs: FileSystem = filesystem or LocalFileSystem()
        self.codec: Codec = codec or JsonCodec()
        self.statistics = statistics if statistics is not None else GLOBAL_STATISTICS
        self.trace = tracer or Tracer()

    # -- shared steps ------------------------------------------------------

    def load(self, path: Path) -> Document:
        """Return the cached document for `path` if still current, else read it from disk."""
        key = path_key(path)
        current = self.fs.last_modified(path)
        self.statistics.increment("existence_checks")

        cached, found = self.cache.try_get(key)
        if found and cached.fingerprint == current:
            self.statistics.increment("cache_reads")
            self.trace("cache hit %s %s", path, current)
            return cached

        if current.exists:
            raw = self.fs.read_all(path)
            try:
                data = parse_document(raw)
            except ValueError as e:
                self.cache.invalidate(key)
                logger.warning("Could not decode database file %s: %s", path, e)
                raise DocumentDecodeError(path, str(e)) from e
        else:
            data = {}

        doc = Document(data=data, fingerprint=current)
        self.cache.add_or_update(key, doc)
        self.statistics.increment("reads")
        self.trace("disk read %s %s (%d keys)", path, current, len(data))
        return doc

    def persist(self, path: Path, doc: Document) -> Document:
        """Overwrite `path` with `doc` and cache the result under its new fingerprint."""
        self.fs.write_all(path, dump_document(doc.data))
        stored = doc.stamped(self.fs.last_modified(path))
        self.cache.add_or_update(path_key(path), stored)
        self.statistics.increment("writes")
        self.statistics.increment("cache_writes")
        self.trace("persisted %s %s", path, stored.fingerprint)
        return stored

    # -- operation bodies --------------------------------------------------

    def create_database(self, path: StrPath) -> bool:
        p = as_path(path)
        exists = self.fs.exists(p)
        self.statistics.increment("existence_checks")
        if exists:
            return False
        self.fs.write_all(p, EMPTY_DATABASE)
        self.statistics.increment("writes")
        self.trace("created database %s", p)
        return True

    def save(self, path: StrPath, key: str, value: Any) -> None:
        p = as_path(path)
        element = self.codec.encode(value)
        doc = self.load(p)
        self.persist(p, doc.with_entry(key, element))

    def get(self, path: StrPath, key: str, type_: Any = Any, default: Any = None) -> Any:
        p = as_path(path)
        doc = self.load(p)
        if key not in doc:
            return default
        try:
            return self.codec.decode(doc.data[key], type_)
        except ValueError as e:
            logger.warning("Could not decode key %r in %s: %s", key, p, e)
            raise DocumentDecodeError(p, str(e), key=key) from e

    def delete_key(self, path: StrPath, key: str) -> bool:
        p = as_path(path)
        doc = self.load(p)
        if key not in doc:
            return False
        self.persist(p, doc.without_entry(key))
        self.statistics.increment("removes")
        return True

    def rename_key(self, path: StrPath, old_key: str, new_key: str) -> bool:
        p = as_path(path)
        doc = self.load(p)
        if old_key not in doc:
            return False
        self.persist(p, doc.with_renamed_entry(old_key, new_key))
        self.statistics.increment("renames")
        return True
