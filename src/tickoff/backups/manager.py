"""Snapshot creation, listing, and restore for the todo store file."""

from __future__ import annotations

import logging
import time
from builtins import list as builtin_list
from collections.abc import Callable, Iterable
from pathlib import Path

from tickoff.backups.types import RestoreResult, Snapshot
from tickoff.config.paths import BACKUP_PREFIX
from tickoff.errors import (
    NotFoundError,
    SnapshotExistsError,
    SourceMissingError,
    StoreIOError,
)
from tickoff.todos.persistence import load_store, write_text_atomic
from tickoff.todos.store import TodoStore

logger = logging.getLogger(__name__)


class BackupManager:
    """Manages ``todos_backup_<epoch-seconds>.json`` files in one directory.

    Snapshots are copies of the store file as it is on disk, so a snapshot
    always matches the last saved state, never unsaved in-memory changes.
    """

    def __init__(
        self,
        store_path: Path,
        backup_dir: Path,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._store_path = store_path
        self._backup_dir = backup_dir
        self._clock = clock

    def create(self) -> Snapshot:
        """Copy the store file into a new snapshot keyed by the current second.

        Raises:
            SourceMissingError: If the store file does not exist.
            SnapshotExistsError: If a snapshot for this second already exists.
            StoreIOError: If reading the store or writing the snapshot fails.
        """
        if not self._store_path.exists():
            raise SourceMissingError("Todo file does not exist")

        timestamp = int(self._clock())
        snapshot = Snapshot(
            timestamp=timestamp,
            path=self._backup_dir / Snapshot.file_name(timestamp),
        )
        if snapshot.path.exists():
            raise SnapshotExistsError(
                f"Backup with timestamp {timestamp} already exists"
            )

        try:
            content = self._store_path.read_text(encoding="utf-8")
            write_text_atomic(snapshot.path, content)
        except (OSError, UnicodeDecodeError) as e:
            raise StoreIOError(f"Error creating backup: {e}") from e

        logger.info("backup_created", extra={"timestamp": timestamp})
        return snapshot

    def list(self) -> builtin_list[Snapshot]:
        """Every snapshot on disk, oldest first."""
        if not self._backup_dir.exists():
            return []

        try:
            entries = builtin_list(self._backup_dir.iterdir())
        except OSError as e:
            raise StoreIOError(f"Failed to read backup directory: {e}") from e

        snapshots: builtin_list[Snapshot] = []
        for path in entries:
            if not path.is_file() or not path.name.startswith(BACKUP_PREFIX):
                continue
            snapshot = Snapshot.from_path(path)
            if snapshot is None:
                logger.warning(
                    "backup_name_unparsable", extra={"file_name": path.name}
                )
                continue
            snapshots.append(snapshot)

        snapshots.sort(key=lambda s: s.timestamp)
        return snapshots

    def get(self, timestamp: int | str) -> Snapshot:
        """Resolve a timestamp key to an existing snapshot.

        Raises:
            NotFoundError: If the key is not a number or no such file exists.
        """
        key = str(timestamp).strip()
        if not (key.isascii() and key.isdecimal()):
            raise NotFoundError(f"Backup with timestamp {timestamp} does not exist")

        snapshot = Snapshot(
            timestamp=int(key),
            path=self._backup_dir / Snapshot.file_name(int(key)),
        )
        if not snapshot.path.is_file():
            raise NotFoundError(f"Backup with timestamp {timestamp} does not exist")
        return snapshot

    def open(self, timestamp: int | str) -> TodoStore:
        """Load a snapshot as a read-only store."""
        return load_store(self.get(timestamp).path)

    def restore(
        self,
        timestamp: int | str,
        ids: Iterable[int],
        into: TodoStore,
    ) -> RestoreResult:
        """Copy todos from a snapshot into ``into`` under fresh ids.

        A missing snapshot fails the whole call with NotFoundError. A
        requested id absent from the snapshot is recorded in
        ``RestoreResult.missing`` and the remaining ids are still restored.
        """
        source = self.open(timestamp)
        result = RestoreResult()

        for todo_id in ids:
            try:
                original = source.get(todo_id)
            except NotFoundError:
                logger.warning(
                    "backup_item_missing",
                    extra={"timestamp": str(timestamp), "todo_id": todo_id},
                )
                result.missing.append(todo_id)
                continue
            result.restored.append(into.insert_copy(original))

        logger.info(
            "backup_restored",
            extra={
                "timestamp": str(timestamp),
                "restored": len(result.restored),
                "missing": len(result.missing),
            },
        )
        return result

    def delete_one(self, timestamp: int | str) -> Snapshot:
        snapshot = self.get(timestamp)
        try:
            snapshot.path.unlink()
        except OSError as e:
            raise StoreIOError(
                f"Failed to remove backup file {snapshot.path}: {e}"
            ) from e
        logger.info("backup_deleted", extra={"timestamp": snapshot.timestamp})
        return snapshot

    def delete_all(self) -> int:
        """Remove every snapshot and return how many were deleted."""
        deleted = 0
        for snapshot in self.list():
            try:
                snapshot.path.unlink()
            except OSError as e:
                raise StoreIOError(
                    f"Failed to remove backup file {snapshot.path}: {e}"
                ) from e
            deleted += 1
        logger.info("backups_deleted", extra={"count": deleted})
        return deleted
