from __future__ import annotations

import os
from pathlib import Path

StrPath = str | os.PathLike[str]


def as_path(path: StrPath) -> Path:
    return path if isinstance(path, Path) else Path(path)


def path_key(path: StrPath) -> str:
    # Cache entries and path locks are keyed by the resolved path so that
    # "db.json" and "./db.json" share state.
    return str(as_path(path).resolve())
