"""Tests for logging configuration and utilities."""

import json
import logging
import os
import time

import pytest

from tickoff.logging import (
    ComponentFormatter,
    JSONLHandler,
    configure_logging,
    prune_old_logs,
)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)


class TestPruneOldLogs:
    def test_missing_directory(self, tmp_path):
        assert prune_old_logs(tmp_path / "nope") == 0

    def test_deletes_only_old_jsonl(self, tmp_path):
        old = tmp_path / "2020-01-01.jsonl"
        fresh = tmp_path / "2026-01-01.jsonl"
        other = tmp_path / "notes.txt"
        for path in (old, fresh, other):
            path.write_text("")
        stale = time.time() - 30 * 86400
        os.utime(old, (stale, stale))
        os.utime(other, (stale, stale))

        assert prune_old_logs(tmp_path, retention_days=7) == 1
        assert not old.exists()
        assert fresh.exists()
        assert other.exists()


class TestJSONLHandler:
    def test_writes_structured_entries(self, tmp_path):
        handler = JSONLHandler(tmp_path)
        logger = logging.getLogger("tickoff.backups.manager")
        record = logger.makeRecord(
            logger.name,
            logging.INFO,
            __file__,
            1,
            "backup_created",
            (),
            None,
            extra={"timestamp": 42},
        )

        handler.emit(record)
        handler.close()

        (log_file,) = tmp_path.glob("*.jsonl")
        entry = json.loads(log_file.read_text().strip())
        assert entry["message"] == "backup_created"
        assert entry["component"] == "backups"
        assert entry["level"] == "INFO"
        assert entry["extra"] == {"timestamp": 42}


class TestComponentFormatter:
    def test_short_component_name(self):
        formatter = ComponentFormatter("%(component)s | %(message)s")
        record = logging.LogRecord(
            "tickoff.todos.store", logging.INFO, __file__, 1, "hi", (), None
        )
        assert formatter.format(record) == "todos | hi"

    def test_foreign_logger(self):
        formatter = ComponentFormatter("%(component)s")
        record = logging.LogRecord(
            "typer.main", logging.INFO, __file__, 1, "", (), None
        )
        assert formatter.format(record) == "typer"


class TestConfigureLogging:
    def test_level_from_env(self, monkeypatch, restore_root_logger):
        monkeypatch.setenv("TICKOFF_LOG_LEVEL", "debug")
        monkeypatch.delenv("TICKOFF_LOG_FILE", raising=False)

        configure_logging()

        assert logging.getLogger().level == logging.DEBUG

    def test_invalid_level_falls_back_to_warning(
        self, monkeypatch, restore_root_logger
    ):
        monkeypatch.setenv("TICKOFF_LOG_LEVEL", "chatty")
        monkeypatch.delenv("TICKOFF_LOG_FILE", raising=False)

        configure_logging()

        assert logging.getLogger().level == logging.WARNING

    def test_file_logging(self, monkeypatch, tickoff_home, restore_root_logger):
        monkeypatch.delenv("TICKOFF_LOG_LEVEL", raising=False)
        monkeypatch.setenv("TICKOFF_LOG_FILE", "1")

        configure_logging()
        logging.getLogger("tickoff.todos.store").info("todos_reset")
        for handler in logging.getLogger().handlers:
            handler.flush()

        (log_file,) = (tickoff_home / "logs").glob("*.jsonl")
        assert "todos_reset" in log_file.read_text()
