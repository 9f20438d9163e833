"""Configuration module."""

from tickoff.config.loader import load_config, read_config
from tickoff.config.models import TickoffConfig
from tickoff.config.paths import (
    ensure_tickoff_home,
    get_backups_path,
    get_config_path,
    get_store_path,
    get_tickoff_home,
)
from tickoff.config.writer import ConfigWriter
from tickoff.errors import ConfigError

__all__ = [
    "ConfigError",
    "ConfigWriter",
    "TickoffConfig",
    "ensure_tickoff_home",
    "get_backups_path",
    "get_config_path",
    "get_store_path",
    "get_tickoff_home",
    "load_config",
    "read_config",
]
