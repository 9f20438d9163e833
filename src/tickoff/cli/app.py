"""Main CLI application."""

import typer

from tickoff.cli.commands import backup, config, todo

app = typer.Typer(
    name="tickoff",
    help="tickoff - a small todo list for the terminal",
    invoke_without_command=True,
    add_completion=False,
)


@app.callback()
def main(ctx: typer.Context) -> None:
    """Keep a todo list. Run without a command to list todos."""
    from tickoff.logging import configure_logging

    configure_logging()

    if ctx.invoked_subcommand is None:
        from tickoff.cli.render import render_todo_list

        with todo.todo_session(save=False) as session:
            render_todo_list(session.store.todos)


todo.register(app)
backup.register(app)
config.register(app)


if __name__ == "__main__":
    app()
