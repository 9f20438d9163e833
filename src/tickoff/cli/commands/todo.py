"""Todo list commands: add, list, edit, filter, done, undone, star, rm, reset, sort."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Annotated

import typer

from tickoff.cli.console import dim, error, success, warning
from tickoff.cli.render import render_todo_list
from tickoff.cli.runtime import TodoSession, open_session
from tickoff.errors import SourceMissingError, TickoffError
from tickoff.todos.types import SortKey

logger = logging.getLogger(__name__)


@contextmanager
def todo_session(*, save: bool = True) -> Iterator[TodoSession]:
    """Open the live store, run a command against it, and persist the result.

    On a TickoffError or ValueError the store is still saved, so mutations that
    happened before the failure are kept, then the command exits with status 1.
    Nothing is saved if the store could not be loaded in the first place.
    """
    try:
        session = open_session()
    except OSError as e:
        error(f"Cannot prepare data directory: {e}")
        raise typer.Exit(1) from None
    except TickoffError as e:
        error(str(e))
        raise typer.Exit(1) from None

    try:
        yield session
    except (TickoffError, ValueError) as e:
        if save:
            _save(session)
        logger.debug("command_failed", exc_info=True)
        error(str(e))
        raise typer.Exit(1) from None

    if save:
        _save(session)


def _save(session: TodoSession) -> None:
    try:
        session.save()
    except TickoffError as e:
        error(str(e))
        raise typer.Exit(1) from None


def _join(words: list[str] | None) -> str:
    return " ".join(words or [])


def register(app: typer.Typer) -> None:
    """Register the todo list commands on the root app."""

    @app.command("list")
    def list_cmd() -> None:
        """List all todos."""
        with todo_session(save=False) as session:
            render_todo_list(session.store.todos)

    @app.command("add")
    def add_cmd(
        text: Annotated[
            list[str],
            typer.Argument(
                metavar="TODO_DESCRIPTION",
                help="Todo text; separate several todos with '::'",
            ),
        ],
    ) -> None:
        """Add one or more todos."""
        with todo_session() as session:
            added = session.store.add(_join(text))
            if not added:
                warning("Nothing to add")
        render_todo_list(session.store.todos)

    @app.command("edit")
    def edit_cmd(
        todo_id: Annotated[int, typer.Argument(metavar="TODO_ID")],
        description: Annotated[
            list[str], typer.Argument(metavar="NEW_DESCRIPTION")
        ],
    ) -> None:
        """Replace the description of a todo."""
        with todo_session() as session:
            session.store.edit(todo_id, _join(description))
        render_todo_list(session.store.todos)

    @app.command("filter")
    def filter_cmd(
        query: Annotated[
            list[str] | None,
            typer.Argument(help="Text to search for; separate alternatives with '::'"),
        ] = None,
    ) -> None:
        """Show todos whose description contains any of the queries."""
        with todo_session(save=False) as session:
            matches = session.store.filter(_join(query))
        if not matches:
            dim(f"No results found for query: {_join(query)!r}")
            return
        render_todo_list(matches, title="Matching todos")

    @app.command("done")
    def done_cmd(
        ids: Annotated[list[int], typer.Argument(metavar="TODO_ID")],
    ) -> None:
        """Mark todos as complete."""
        with todo_session() as session:
            session.store.set_complete(ids, True)
        render_todo_list(session.store.todos)

    @app.command("undone")
    def undone_cmd(
        ids: Annotated[list[int], typer.Argument(metavar="TODO_ID")],
    ) -> None:
        """Mark todos as not complete."""
        with todo_session() as session:
            session.store.set_complete(ids, False)
        render_todo_list(session.store.todos)

    @app.command("star")
    def star_cmd(
        ids: Annotated[list[int], typer.Argument(metavar="TODO_ID")],
    ) -> None:
        """Toggle the star on todos."""
        with todo_session() as session:
            session.store.toggle_star(ids)
        render_todo_list(session.store.todos)

    @app.command("rm")
    def rm_cmd(
        ids: Annotated[list[int], typer.Argument(metavar="TODO_ID")],
    ) -> None:
        """Remove todos. Their ids are reused by later additions."""
        with todo_session() as session:
            session.store.remove(ids)
        render_todo_list(session.store.todos)

    @app.command("reset")
    def reset_cmd() -> None:
        """Remove every todo, taking a backup first if backup_on_reset is set."""
        with todo_session(save=False) as session:
            try:
                snapshot = session.reset()
            except TickoffError as e:
                error(f"Backup failed, reset aborted: {e}")
                if isinstance(e, SourceMissingError):
                    dim(
                        "Disable backups with: "
                        "tickoff config set backup_on_reset false"
                    )
                raise typer.Exit(1) from None
            session.save()

        if snapshot is not None:
            success(f"Backed up to {snapshot.timestamp}")
        success("Todo list reset")

    @app.command("sort")
    def sort_cmd(
        sort_by: Annotated[
            SortKey,
            typer.Argument(metavar="SORT_BY", help="id, date, or done"),
        ] = SortKey.DONE,
    ) -> None:
        """Sort todos by id, creation date, or completion (default)."""
        with todo_session() as session:
            session.store.sort(sort_by)
        render_todo_list(session.store.todos)
