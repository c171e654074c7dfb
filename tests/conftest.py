from __future__ import annotations

import sys
import threading
from pathlib import Path

import pytest

# Ensure the repository root (parent of ./tests) is importable during pytest collection
# when the package has not been installed.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from docstore.json_store import LocalFileSystem  # noqa: E402
from docstore.stats import Statistics  # noqa: E402


class RecordingFileSystem(LocalFileSystem):
    """
    Local filesystem that counts reads/writes per path and can hold reads of
    one path until released, and likewise for writes.
    """

    def __init__(self) -> None:
        self.reads: dict[Path, int] = {}
        self.writes: dict[Path, int] = {}
        self.hold_reads_of: Path | None = None
        self.read_started = threading.Event()
        self.release_reads = threading.Event()
        self.hold_writes_of: Path | None = None
        self.write_started = threading.Event()
        self.release_writes = threading.Event()

    def read_all(self, path: Path) -> bytes:
        self.reads[path] = self.reads.get(path, 0) + 1
        if self.hold_reads_of is not None and path == self.hold_reads_of:
            self.read_started.set()
            self.release_reads.wait(timeout=10)
        return super().read_all(path)

    def write_all(self, path: Path, payload: bytes) -> None:
        self.writes[path] = self.writes.get(path, 0) + 1
        if self.hold_writes_of is not None and path == self.hold_writes_of:
            self.write_started.set()
            self.release_writes.wait(timeout=10)
        super().write_all(path, payload)


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "db.json"


@pytest.fixture
def stats() -> Statistics:
    return Statistics()


@pytest.fixture
def recording_fs() -> RecordingFileSystem:
    return RecordingFileSystem()
