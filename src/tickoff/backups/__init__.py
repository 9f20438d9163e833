"""Backup subsystem public API.

Public API:
- BackupManager: create/list/open/restore/delete snapshots

Types:
- Snapshot, RestoreResult
"""

from tickoff.backups.manager import BackupManager
from tickoff.backups.types import RestoreResult, Snapshot

__all__ = [
    "BackupManager",
    "RestoreResult",
    "Snapshot",
]
