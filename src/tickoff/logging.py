"""Centralized logging configuration for tickoff.

The CLI calls configure_logging() once per invocation, before any command runs.

Logging Levels:
- DEBUG: File paths touched, allocator decisions
- INFO: Store saved, snapshot created/deleted/restored
- WARNING: Recoverable issues (bad config, unparsable snapshot names)
- ERROR: Failures that abort a command

The console handler defaults to WARNING so command output stays readable.
Set TICKOFF_LOG_LEVEL to change it, and TICKOFF_LOG_FILE=1 to also write
JSONL logs under $TICKOFF_HOME/logs/.
"""

import json
import logging
import os
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import TextIO

# Default retention period for log files
DEFAULT_LOG_RETENTION_DAYS = 7

LEVEL_ENV_VAR = "TICKOFF_LOG_LEVEL"
FILE_ENV_VAR = "TICKOFF_LOG_FILE"

# Attributes every LogRecord carries; anything else came in via ``extra=``
_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__
) | {"message", "asctime", "component"}


def prune_old_logs(
    logs_dir: Path,
    retention_days: int = DEFAULT_LOG_RETENTION_DAYS,
    suffix: str = ".jsonl",
) -> int:
    """Delete log files older than retention period.

    Returns:
        Number of files deleted.
    """
    if not logs_dir.exists():
        return 0

    cutoff = datetime.now(UTC) - timedelta(days=retention_days)
    deleted = 0

    for entry in logs_dir.iterdir():
        if not entry.is_file() or not entry.name.endswith(suffix):
            continue
        try:
            mtime = datetime.fromtimestamp(entry.stat().st_mtime, UTC)
            if mtime < cutoff:
                entry.unlink()
                deleted += 1
        except OSError:
            pass  # Ignore errors on individual files

    return deleted


def _component(name: str) -> str:
    parts = name.split(".")
    if len(parts) >= 2 and parts[0] == "tickoff":
        return parts[1]
    return parts[0]


class JSONLHandler(logging.Handler):
    """Handler that writes structured log entries to a JSONL file.

    Logs are written to ~/.tickoff/logs/YYYY-MM-DD.jsonl with one JSON object
    per line, rotated daily and pruned after the retention period.
    """

    def __init__(
        self,
        logs_dir: Path,
        retention_days: int = DEFAULT_LOG_RETENTION_DAYS,
    ):
        super().__init__()
        self._logs_dir = logs_dir
        self._logs_dir.mkdir(parents=True, exist_ok=True)
        self._retention_days = retention_days
        self._current_date: str | None = None
        self._file: TextIO | None = None

    def _get_log_file(self) -> TextIO:
        """Get the current log file, rotating daily."""
        today = datetime.now(UTC).strftime("%Y-%m-%d")
        if self._current_date != today or self._file is None:
            if self._file:
                self._file.close()
            self._current_date = today
            log_path = self._logs_dir / f"{today}.jsonl"
            self._file = log_path.open("a", encoding="utf-8")

            prune_old_logs(self._logs_dir, self._retention_days)

        return self._file

    def emit(self, record: logging.LogRecord) -> None:
        """Write a log record as one JSON line."""
        try:
            entry = {
                "ts": datetime.now(UTC).isoformat(),
                "level": record.levelname,
                "component": _component(record.name),
                "logger": record.name,
                "message": record.getMessage(),
            }

            if record.exc_info:
                formatter = self.formatter or logging.Formatter()
                entry["exception"] = formatter.formatException(record.exc_info)

            extra = {
                key: value
                for key, value in record.__dict__.items()
                if key not in _RESERVED_ATTRS and not key.startswith("_")
            }
            if extra:
                entry["extra"] = extra

            log_file = self._get_log_file()
            log_file.write(json.dumps(entry, default=str) + "\n")
            log_file.flush()
        except Exception:
            self.handleError(record)

    def close(self) -> None:
        """Close the log file."""
        if self._file:
            self._file.close()
            self._file = None
        super().close()


class ComponentFormatter(logging.Formatter):
    """Formatter that extracts component name from logger path.

    - tickoff.todos.store -> todos
    - tickoff.backups.manager -> backups
    """

    def format(self, record: logging.LogRecord) -> str:
        record.component = _component(record.name)
        return super().format(record)


def configure_logging(
    level: str | None = None,
    log_to_file: bool | None = None,
) -> None:
    """Configure logging for tickoff.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR).
            If None, uses TICKOFF_LOG_LEVEL env var or WARNING.
        log_to_file: Also write logs to JSONL files in ~/.tickoff/logs/.
            If None, enabled when TICKOFF_LOG_FILE is set to 1/true.
    """
    from tickoff.config.paths import get_logs_path

    if level is None:
        level = os.environ.get(LEVEL_ENV_VAR, "WARNING").upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR"):
            level = "WARNING"

    if log_to_file is None:
        log_to_file = os.environ.get(FILE_ENV_VAR, "").lower() in ("1", "true", "yes")

    log_level = getattr(logging, level)

    handlers: list[logging.Handler] = []

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(
        ComponentFormatter(
            "%(asctime)s | %(levelname)-8s | %(component)s | %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    handlers.append(console_handler)

    if log_to_file:
        # File logs always capture INFO so snapshot history is traceable
        file_handler = JSONLHandler(get_logs_path())
        file_handler.setLevel(min(log_level, logging.INFO))
        handlers.append(file_handler)
        log_level = min(log_level, logging.INFO)
        console_handler.setLevel(getattr(logging, level))

    logging.basicConfig(
        level=log_level,
        handlers=handlers,
        force=True,
    )
