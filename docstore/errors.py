from __future__ import annotations

from pathlib import Path


class DocumentStoreError(Exception):
    """Base class for errors raised by the document store."""


class DocumentDecodeError(DocumentStoreError, ValueError):
    """
    Raised when a database file is not a JSON object, or when a stored value
    cannot be decoded as the requested type.

    `key` is None when the whole file failed to parse.
    """

    def __init__(self, path: Path | str, message: str, *, key: str | None = None) -> None:
        self.path = str(path)
        self.key = key
        where = self.path if key is None else f"{self.path}[{key!r}]"
        super().__init__(f"{where}: {message}")


class ConfigurationError(DocumentStoreError):
    """Invalid settings value."""
