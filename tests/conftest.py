"""Shared test fixtures and factories."""

from collections.abc import Iterator
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from tickoff.backups import BackupManager
from tickoff.config.paths import ENV_VAR, get_tickoff_home
from tickoff.todos import TodoStore

# =============================================================================
# Environment Fixtures
# =============================================================================


@pytest.fixture
def tickoff_home(monkeypatch, tmp_path: Path) -> Iterator[Path]:
    """Point TICKOFF_HOME at a fresh temporary directory."""
    home = tmp_path / "tickoff-home"
    monkeypatch.setenv(ENV_VAR, str(home))
    get_tickoff_home.cache_clear()
    yield home.resolve()
    get_tickoff_home.cache_clear()


@pytest.fixture
def cli_runner():
    """Create a Typer CLI test runner with colors disabled."""
    from typer.testing import CliRunner

    return CliRunner(env={"NO_COLOR": "1", "COLUMNS": "200"})


# =============================================================================
# Store Fixtures
# =============================================================================


class FakeClock:
    """Deterministic clock: each call advances by ``step``."""

    def __init__(self, start: datetime, step: timedelta = timedelta(minutes=1)):
        self.now = start
        self.step = step

    def __call__(self) -> datetime:
        current = self.now
        self.now += self.step
        return current


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2026, 1, 1, 9, 0, tzinfo=UTC))


@pytest.fixture
def store(clock: FakeClock) -> TodoStore:
    """Empty store with a deterministic clock."""
    return TodoStore(clock=clock)


@pytest.fixture
def backup_manager(tmp_path: Path) -> BackupManager:
    """Backup manager over a temp store path, keyed by a fixed epoch second."""
    return BackupManager(
        tmp_path / "todos.json",
        tmp_path / "backups",
        clock=lambda: 1_767_258_000.75,
    )
