"""Shared runtime bootstrap helpers for CLI entrypoints."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from tickoff.backups import BackupManager, Snapshot
from tickoff.config import TickoffConfig, load_config
from tickoff.config.paths import ensure_tickoff_home, get_backups_path, get_store_path
from tickoff.todos import TodoStore, load_store, save_store

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class TodoSession:
    """Everything one command invocation works on."""

    config: TickoffConfig
    store: TodoStore
    store_path: Path
    backups: BackupManager

    def save(self) -> None:
        save_store(self.store, self.store_path)

    def reset(self) -> Snapshot | None:
        """Clear the store, snapshotting the store file first if configured.

        The snapshot is written before anything is cleared; if it fails the
        store is left as it was.
        """
        backup = self.backups.create if self.config.backup_on_reset else None
        return self.store.reset(backup)


def open_session() -> TodoSession:
    """Load config and the live store from $TICKOFF_HOME.

    Raises:
        OSError: If the home directory cannot be created.
        StoreIOError: If the store file exists but cannot be read.
    """
    ensure_tickoff_home()
    config = load_config()
    store_path = get_store_path()
    store = load_store(store_path)
    logger.debug(
        "session_opened",
        extra={"path": str(store_path), "count": len(store)},
    )
    return TodoSession(
        config=config,
        store=store,
        store_path=store_path,
        backups=BackupManager(store_path, get_backups_path()),
    )
