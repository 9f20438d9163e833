"""Backup commands: list, create, open, restore, delete."""

from __future__ import annotations

from typing import Annotated

import typer

from tickoff.cli.commands.todo import todo_session
from tickoff.cli.console import console, create_table, dim, error, success, warning
from tickoff.cli.render import render_todo_list

app = typer.Typer(
    name="backup",
    help="Manage todo list backups.",
    invoke_without_command=True,
)


def register(root: typer.Typer) -> None:
    root.add_typer(app, name="backup")


@app.callback()
def _default(ctx: typer.Context) -> None:
    """Manage backups. Run without a subcommand to list them."""
    if ctx.invoked_subcommand is None:
        _backup_list()


@app.command("list")
def list_cmd() -> None:
    """List all backups."""
    _backup_list()


@app.command("create")
def create_cmd() -> None:
    """Back up the saved todo list."""
    with todo_session(save=False) as session:
        snapshot = session.backups.create()
    success(f"Created backup {snapshot.timestamp}")


@app.command("open")
def open_cmd(
    timestamp: Annotated[str, typer.Argument(metavar="TIMESTAMP")],
) -> None:
    """Show the contents of a backup."""
    with todo_session(save=False) as session:
        snapshot_store = session.backups.open(timestamp)
    render_todo_list(snapshot_store.todos, title=f"Backup {timestamp}")


@app.command("restore")
def restore_cmd(
    timestamp: Annotated[str, typer.Argument(metavar="TIMESTAMP")],
    ids: Annotated[list[int], typer.Argument(metavar="TODO_ID")],
) -> None:
    """Copy todos from a backup into the current list under new ids."""
    with todo_session() as session:
        result = session.backups.restore(timestamp, ids, session.store)

    for todo in result.restored:
        success(f"Restored as {todo.id}: {todo.desc}")
    for todo_id in result.missing:
        error(f"Todo item with ID {todo_id} not found in backup {timestamp}")
    if result.restored:
        render_todo_list(session.store.todos)
    if not result.ok:
        raise typer.Exit(1)


@app.command("delete")
def delete_cmd(
    target: Annotated[
        str,
        typer.Argument(metavar="all|TIMESTAMP", help="'all' or a backup timestamp"),
    ],
) -> None:
    """Delete one backup, or all of them."""
    with todo_session(save=False) as session:
        if target == "all":
            deleted = session.backups.delete_all()
            if deleted:
                success(f"Deleted {deleted} backup(s)")
            else:
                warning("No backups found")
            return
        snapshot = session.backups.delete_one(target)
    success(f"Deleted backup {snapshot.timestamp}")


def _backup_list() -> None:
    with todo_session(save=False) as session:
        snapshots = session.backups.list()

    if not snapshots:
        warning("No backups found")
        dim("Create one with: tickoff backup create")
        return

    table = create_table(
        "Backups",
        [
            ("Timestamp", {"style": "cyan"}),
            ("Created (UTC)", {}),
        ],
    )
    for snapshot in snapshots:
        table.add_row(
            str(snapshot.timestamp),
            snapshot.created_at.strftime("%Y-%m-%d %H:%M:%S"),
        )
    console.print(table)
    dim(f"Total: {len(snapshots)} backup(s)")
