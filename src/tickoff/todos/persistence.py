"""JSON load/save for the todo store file.

Writes are atomic (tempfile + fsync + os.replace()) so an interrupted save
never leaves a half-written store behind. No file locking is done: two
invocations running at once can still lose each other's changes.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from tickoff.errors import StoreIOError
from tickoff.todos.store import TodoStore

logger = logging.getLogger(__name__)


def load_store(path: Path) -> TodoStore:
    """Load a store from ``path``. A missing file is an empty store.

    Raises:
        StoreIOError: If the file cannot be read or parsed.
    """
    if not path.exists():
        logger.debug("store_missing", extra={"path": str(path)})
        return TodoStore()

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise StoreIOError(f"Failed to read todo file {path}: {e}") from e
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise StoreIOError(f"Failed to parse todo file {path}: {e}") from e

    if not isinstance(data, dict):
        raise StoreIOError(f"Failed to parse todo file {path}: expected an object")

    return TodoStore.from_dict(data)


def save_store(store: TodoStore, path: Path) -> None:
    """Serialize ``store`` to ``path`` as pretty-printed JSON.

    Raises:
        StoreIOError: If the file cannot be written.
    """
    content = json.dumps(store.to_dict(), indent=2) + "\n"
    try:
        write_text_atomic(path, content)
    except OSError as e:
        raise StoreIOError(f"Failed to write todo file {path}: {e}") from e
    logger.info("store_saved", extra={"path": str(path), "count": len(store)})


def write_text_atomic(path: Path, content: str) -> None:
    """Write text atomically via tempfile + fsync + os.replace()."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        Path(tmp).replace(path)
    except BaseException:
        try:
            Path(tmp).unlink()
        except OSError:
            pass
        raise
