"""CLI command modules."""

from tickoff.cli.commands import backup, config, todo

__all__ = [
    "backup",
    "config",
    "todo",
]
