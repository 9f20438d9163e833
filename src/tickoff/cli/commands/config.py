"""Configuration management commands."""

from pathlib import Path
from typing import Annotated

import typer

from tickoff.cli.console import console, create_table, error, success

app = typer.Typer(
    name="config",
    help="Show or change configuration.",
    no_args_is_help=True,
)

PathOption = Annotated[
    Path | None,
    typer.Option(
        "--path",
        "-p",
        help="Path to config file (default: $TICKOFF_HOME/config.toml)",
    ),
]


def register(root: typer.Typer) -> None:
    root.add_typer(app, name="config")


@app.command("show")
def show_cmd(path: PathOption = None) -> None:
    """Print the config file and the effective settings."""
    from rich.syntax import Syntax

    from tickoff.config import ConfigError, read_config
    from tickoff.config.paths import get_config_path

    expanded_path = path.expanduser() if path else get_config_path()

    if not expanded_path.exists():
        error(f"Config file not found: {expanded_path}")
        console.print("It is created with defaults on the next todo command")
        raise typer.Exit(1)

    try:
        config = read_config(expanded_path)
    except ConfigError as e:
        error(str(e))
        raise typer.Exit(1) from None

    console.print(f"[bold]Config file: {expanded_path}[/bold]\n")
    console.print(Syntax(expanded_path.read_text(), "toml", line_numbers=True))

    table = create_table(
        "Effective settings", [("Setting", {"style": "cyan"}), ("Value", {})]
    )
    for key, value in config.model_dump().items():
        shown = str(value).lower() if isinstance(value, bool) else str(value)
        table.add_row(key, shown)
    console.print(table)


@app.command("set")
def set_cmd(
    key: Annotated[str, typer.Argument(help="Option name, e.g. backup_on_reset")],
    value: Annotated[str, typer.Argument(help="New value, e.g. true or false")],
    path: PathOption = None,
) -> None:
    """Change one configuration option."""
    from tickoff.config import ConfigError, ConfigWriter, load_config

    expanded_path = path.expanduser() if path else None
    # Make sure a commented default file exists before editing it
    load_config(expanded_path)

    try:
        ConfigWriter(expanded_path).set_value(key, value)
    except ConfigError as e:
        error(str(e))
        raise typer.Exit(1) from None
    success(f"Set {key} = {value}")
