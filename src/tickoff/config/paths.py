"""Centralized path management for tickoff.

All state (config, todo store, backups, logs) lives under a single base
directory. The base directory can be overridden with the TICKOFF_HOME
environment variable.

Default locations:
- Linux/macOS: ~/.tickoff
- Windows: %USERPROFILE%\\.tickoff
"""

import os
from functools import lru_cache
from pathlib import Path

ENV_VAR = "TICKOFF_HOME"

BACKUP_PREFIX = "todos_backup_"
BACKUP_SUFFIX = ".json"


@lru_cache(maxsize=1)
def get_tickoff_home() -> Path:
    """Get the base directory for all tickoff data.

    Resolution order:
    1. TICKOFF_HOME environment variable (if set)
    2. Platform default (~/.tickoff)
    """
    if env_home := os.environ.get(ENV_VAR):
        return Path(env_home).expanduser().resolve()

    return Path.home() / ".tickoff"


def get_config_path() -> Path:
    """Get the default config file path."""
    return get_tickoff_home() / "config.toml"


def get_store_path() -> Path:
    """Get the live todo store file path."""
    return get_tickoff_home() / "todos.json"


def get_backups_path() -> Path:
    """Get the snapshot directory path."""
    return get_tickoff_home() / "backups"


def get_logs_path() -> Path:
    """Get the default logs directory path."""
    return get_tickoff_home() / "logs"


def ensure_tickoff_home() -> Path:
    """Ensure the tickoff home directory exists.

    Returns:
        Path to the tickoff home directory.
    """
    home = get_tickoff_home()
    home.mkdir(parents=True, exist_ok=True)
    return home
