from __future__ import annotations

from pathlib import Path
from typing import Any, Protocol

from .document import Fingerprint


class FileSystem(Protocol):
    """
    Filesystem primitives used by the document store.
    """

    def exists(self, path: Path) -> bool:
        ...

    def read_all(self, path: Path) -> bytes:
        """Return the full file contents."""
        ...

    def write_all(self, path: Path, payload: bytes) -> None:
        """Replace the file contents in one atomic step."""
        ...

    def last_modified(self, path: Path) -> Fingerprint:
        """Return `Fingerprint.MISSING` when the file does not exist."""
        ...


class Codec(Protocol):
    """
    Converts values to and from the JSON elements stored in a document.
    """

    def encode(self, value: Any) -> Any:
        ...

    def decode(self, element: Any, target_type: Any) -> Any:
        """Raise `ValueError` when `element` does not fit `target_type`."""
        ...
