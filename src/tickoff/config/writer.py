"""Configuration writer for modifying config.toml while preserving formatting.

Uses tomlkit to preserve comments, formatting, and ordering in TOML files.
"""

import logging
from pathlib import Path
from typing import Any

import tomlkit
from tomlkit import TOMLDocument, comment, nl
from tomlkit.exceptions import TOMLKitError

from tickoff.config.models import TickoffConfig
from tickoff.config.paths import get_config_path
from tickoff.errors import ConfigError

logger = logging.getLogger(__name__)

# Human-readable notes written above each default key
_KEY_COMMENTS: dict[str, str] = {
    "backup_on_reset": "Snapshot the todo list into backups/ before `tickoff reset`",
}


class ConfigWriter:
    """Writer for modifying config.toml while preserving formatting."""

    def __init__(self, config_path: Path | None = None):
        self.config_path = config_path or get_config_path()
        self._doc: TOMLDocument | None = None

    def _load(self) -> TOMLDocument:
        """Load the config file, starting an empty document if it doesn't exist."""
        if self._doc is not None:
            return self._doc

        if self.config_path.exists():
            try:
                self._doc = tomlkit.parse(self.config_path.read_text(encoding="utf-8"))
            except (OSError, UnicodeDecodeError, TOMLKitError) as e:
                raise ConfigError(
                    f"Cannot read config file {self.config_path}: {e}"
                ) from e
        else:
            self._doc = tomlkit.document()

        return self._doc

    def _save(self) -> None:
        """Save the config file."""
        if self._doc is None:
            return

        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        self.config_path.write_text(tomlkit.dumps(self._doc), encoding="utf-8")
        logger.debug("config_saved", extra={"path": str(self.config_path)})

    def write_defaults(self, config: TickoffConfig | None = None) -> None:
        """Write a fresh config file holding every option with its default."""
        config = config or TickoffConfig()
        doc = tomlkit.document()
        doc.add(comment("tickoff configuration"))
        doc.add(nl())
        for key, value in config.model_dump().items():
            if note := _KEY_COMMENTS.get(key):
                doc.add(comment(note))
            doc.add(key, value)
        self._doc = doc
        self._save()
        logger.info("config_defaults_written", extra={"path": str(self.config_path)})

    def set_value(self, key: str, value: Any) -> None:
        """Set a top-level option, validating it against TickoffConfig.

        Raises:
            ConfigError: If the key is unknown or the value is invalid.
        """
        if key not in TickoffConfig.model_fields:
            raise ConfigError(f"Unknown config option: {key}")

        doc = self._load()
        candidate = {**doc.unwrap(), key: value}
        try:
            validated = TickoffConfig.model_validate(candidate)
        except ValueError as e:
            raise ConfigError(f"Invalid value for {key}: {value!r}") from e

        doc[key] = getattr(validated, key)
        self._save()
        logger.info("config_value_set", extra={"key": key})
