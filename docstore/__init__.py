from __future__ import annotations

from .codec import JsonCodec
from .disk_store import DocumentStore
from .document import Document, Fingerprint
from .errors import ConfigurationError, DocumentDecodeError, DocumentStoreError
from .json_store import LocalFileSystem
from .locks import AsyncPathLockRegistry, PathLockRegistry
from .lru import LruCache
from .repositories import AsyncDocumentStore
from .settings import Settings, get_settings
from .stats import GLOBAL_STATISTICS, Statistics, StatisticsSnapshot

__all__ = [
    "DocumentStore",
    "AsyncDocumentStore",
    "LruCache",
    "Document",
    "Fingerprint",
    "JsonCodec",
    "LocalFileSystem",
    "PathLockRegistry",
    "AsyncPathLockRegistry",
    "Settings",
    "get_settings",
    "Statistics",
    "StatisticsSnapshot",
    "GLOBAL_STATISTICS",
    "DocumentStoreError",
    "DocumentDecodeError",
    "ConfigurationError",
]
