"""Rich rendering of todo lists."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime

from rich.markup import escape
from rich.text import Text

from tickoff.cli.console import console, create_table, dim
from tickoff.todos.types import Todo


def completion_rate(todos: Sequence[Todo]) -> int:
    """Whole-number percentage of completed todos (0 for an empty list)."""
    if not todos:
        return 0
    done = sum(1 for todo in todos if todo.is_complete)
    return 100 * done // len(todos)


def status_summary(todos: Sequence[Todo]) -> str:
    done = sum(1 for todo in todos if todo.is_complete)
    return f"[{done}/{len(todos)}]"


def days_since(timestamp: datetime, now: datetime | None = None) -> str:
    now = now or datetime.now(UTC)
    return f"{(now - timestamp).days}d"


def render_todo_list(todos: Sequence[Todo], title: str = "Your todos") -> None:
    """Print todos as a table with a status summary and completion footer."""
    if not todos:
        dim("No todos")
        return

    table = create_table(
        f"{title} {escape(status_summary(todos))}",
        [
            ("ID", {"style": "todo.id", "justify": "right"}),
            ("", {}),
            ("", {"style": "todo.star"}),
            ("Todo", {}),
            ("Age", {"style": "todo.age"}),
        ],
    )

    for todo in todos:
        star = "*" if todo.is_starred else ""
        if todo.is_complete:
            table.add_row(
                f"{todo.id}.",
                Text("[X]", style="todo.done"),
                star,
                Text(todo.desc, style="todo.done"),
                "",
            )
        else:
            table.add_row(
                f"{todo.id}.",
                Text("[ ]"),
                star,
                Text(todo.desc),
                days_since(todo.timestamp),
            )

    console.print(table)
    dim(f"{completion_rate(todos)}% of all todos complete!")
