"""Backup subsystem public types."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path

from tickoff.config.paths import BACKUP_PREFIX, BACKUP_SUFFIX
from tickoff.todos.types import Todo


@dataclass(frozen=True)
class Snapshot:
    """A timestamp-keyed copy of the store file."""

    timestamp: int
    path: Path

    @property
    def created_at(self) -> datetime:
        return datetime.fromtimestamp(self.timestamp, UTC)

    @staticmethod
    def file_name(timestamp: int) -> str:
        return f"{BACKUP_PREFIX}{timestamp}{BACKUP_SUFFIX}"

    @classmethod
    def from_path(cls, path: Path) -> Snapshot | None:
        """Parse a snapshot file path; None if the name doesn't match."""
        name = path.name
        if not (name.startswith(BACKUP_PREFIX) and name.endswith(BACKUP_SUFFIX)):
            return None
        key = name[len(BACKUP_PREFIX) : -len(BACKUP_SUFFIX)]
        if not (key.isascii() and key.isdecimal()):
            return None
        return cls(timestamp=int(key), path=path)


@dataclass
class RestoreResult:
    """Outcome of restoring todos from a snapshot.

    ``restored`` holds the new live todos (with freshly allocated ids);
    ``missing`` holds requested ids the snapshot did not contain.
    """

    restored: list[Todo] = field(default_factory=list)
    missing: list[int] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.missing
