from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar


@dataclass(frozen=True)
class Fingerprint:
    """
    Staleness marker for a database file: modification time in nanoseconds
    plus size in bytes. Size catches rewrites that land inside one tick of a
    coarse filesystem clock.
    """

    mtime_ns: int
    size: int

    MISSING: ClassVar["Fingerprint"]

    @property
    def exists(self) -> bool:
        return self.size >= 0


Fingerprint.MISSING = Fingerprint(mtime_ns=0, size=-1)


@dataclass(frozen=True)
class Document:
    """
    Decoded contents of one database file.

    `data` maps keys to already-encoded JSON elements; values are decoded per
    key when read. A cached Document is never mutated: writes go through
    `with_entry` / `without_entry` / `with_renamed_entry`, and the result is
    only cached once it has been persisted.
    """

    data: dict[str, Any] = field(default_factory=dict)
    fingerprint: Fingerprint = Fingerprint.MISSING

    def __contains__(self, key: object) -> bool:
        return key in self.data

    def with_entry(self, key: str, element: Any) -> "Document":
        data = dict(self.data)
        data[key] = element
        return Document(data=data, fingerprint=self.fingerprint)

    def without_entry(self, key: str) -> "Document":
        data = dict(self.data)
        data.pop(key, None)
        return Document(data=data, fingerprint=self.fingerprint)

    def with_renamed_entry(self, old_key: str, new_key: str) -> "Document":
        data = dict(self.data)
        data[new_key] = data.pop(old_key)
        return Document(data=data, fingerprint=self.fingerprint)

    def stamped(self, fingerprint: Fingerprint) -> "Document":
        return Document(data=self.data, fingerprint=fingerprint)
