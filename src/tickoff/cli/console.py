"""Console output for tickoff commands.

Styles are named in ``THEME`` so commands and the list renderer refer to
``todo.done`` or ``msg.error`` instead of raw colors.
"""

from __future__ import annotations

from rich.console import Console
from rich.table import Table
from rich.theme import Theme

THEME = Theme(
    {
        "msg.error": "red",
        "msg.warning": "yellow",
        "msg.success": "green",
        "msg.note": "dim",
        "todo.id": "dim",
        "todo.star": "yellow",
        "todo.done": "dim strike",
        "todo.age": "dim",
    }
)

console = Console(highlight=False, theme=THEME)


def _say(style: str, msg: str) -> None:
    console.print(msg, style=style, markup=False)


def error(msg: str) -> None:
    _say("msg.error", msg)


def warning(msg: str) -> None:
    _say("msg.warning", msg)


def success(msg: str) -> None:
    _say("msg.success", msg)


def dim(msg: str) -> None:
    _say("msg.note", msg)


def create_table(title: str, columns: list[tuple[str, dict]]) -> Table:
    """Build a left-titled table; each column is ``(header, add_column kwargs)``."""
    table = Table(title=title, title_justify="left")
    for header, options in columns:
        table.add_column(header, **options)
    return table
