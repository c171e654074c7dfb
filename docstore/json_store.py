from __future__ import annotations

import json
import os
import threading
from pathlib import Path
from typing import Any

from .document import Fingerprint
from .interfaces import FileSystem

EMPTY_DATABASE = b"{}"


def parse_document(raw: bytes) -> dict[str, Any]:
    """
    Parse the bytes of a database file.

    Raises ValueError if the content is not a JSON object. An empty file is
    read as an empty object.
    """
    if not raw.strip():
        return {}
    doc = json.loads(raw)
    if not isinstance(doc, dict):
        raise ValueError(f"expected a JSON object, got {type(doc).__name__}")
    return doc


def dump_document(doc: dict[str, Any]) -> bytes:
    return json.dumps(doc, ensure_ascii=False, separators=(",", ":")).encode("utf-8")


class LocalFileSystem(FileSystem):
    """
    Local disk implementation.

    - Writes atomically: temp file in the same directory, then os.replace.
    - Errors from the OS propagate unchanged.
    """

    def exists(self, path: Path) -> bool:
        return path.exists()

    def read_all(self, path: Path) -> bytes:
        return path.read_bytes()

    def write_all(self, path: Path, payload: bytes) -> None:
        tmp_path = path.with_name(f"{path.name}.{os.getpid()}.{threading.get_ident()}.tmp")
        try:
            with tmp_path.open("wb") as f:
                f.write(payload)
            tmp_path.replace(path)
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise

    def last_modified(self, path: Path) -> Fingerprint:
        try:
            st = path.stat()
        except FileNotFoundError:
            return Fingerprint.MISSING
        return Fingerprint(mtime_ns=st.st_mtime_ns, size=st.st_size)
