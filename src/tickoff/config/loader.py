"""Configuration loading from TOML files."""

import logging
import tomllib
from pathlib import Path

from pydantic import ValidationError

from tickoff.config.models import TickoffConfig
from tickoff.config.paths import get_config_path
from tickoff.errors import ConfigError

logger = logging.getLogger(__name__)


def read_config(path: Path) -> TickoffConfig:
    """Read and validate a config file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigError: If the file is unreadable, not TOML, or fails validation.
    """
    try:
        with path.open("rb") as f:
            raw_config = tomllib.load(f)
    except FileNotFoundError:
        raise
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e

    try:
        return TickoffConfig.model_validate(raw_config)
    except ValidationError as e:
        raise ConfigError(f"Invalid config file {path}: {e}") from e


def load_config(path: Path | None = None, *, create: bool = True) -> TickoffConfig:
    """Load configuration, writing a default file when none exists.

    Args:
        path: Explicit path to config file. Defaults to $TICKOFF_HOME/config.toml.
        create: Write a default config file if the file is missing.

    Returns:
        Validated TickoffConfig. Falls back to defaults if the file is
        malformed or cannot be created.
    """
    config_path = Path(path).expanduser() if path else get_config_path()

    if not config_path.exists():
        defaults = TickoffConfig()
        if create:
            from tickoff.config.writer import ConfigWriter

            try:
                ConfigWriter(config_path).write_defaults(defaults)
            except OSError:
                logger.warning(
                    "config_default_write_failed",
                    extra={"path": str(config_path)},
                    exc_info=True,
                )
        return defaults

    try:
        return read_config(config_path)
    except ConfigError as e:
        logger.warning(
            "config_invalid_using_defaults",
            extra={"path": str(config_path), "error": str(e)},
        )
        return TickoffConfig()
