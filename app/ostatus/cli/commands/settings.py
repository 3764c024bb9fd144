"""Settings command implementation.

Displays and initializes the application settings file.
"""

from typing import Annotated

import typer

from ostatus.core.errors import ConfigError
from ostatus.core.paths import get_settings_path
from ostatus.core.settings import Settings, load_settings, save_settings, settings_to_dict
from ostatus.utils.formatting import (
    console,
    create_key_value_table,
    print_error,
    print_info,
    print_success,
)

app = typer.Typer(
    help="Show or initialize the settings file.",
    invoke_without_command=True,
    no_args_is_help=True,
)


@app.command()
def show() -> None:
    """Show the effective settings."""
    path = get_settings_path()
    try:
        current = load_settings(path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    table = create_key_value_table(f"Settings ({path})")
    for key, value in settings_to_dict(current).items():
        if isinstance(value, list):
            value = " ".join(value)
        table.add_row(key, str(value))
    if current.status_dir is None:
        table.add_row("status_dir", "[muted](system default)[/muted]")
    console.print(table)

    if not path.exists():
        print_info("No settings file, defaults are in effect.")


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Overwrite an existing settings file.",
        ),
    ] = False,
) -> None:
    """Write a settings file with the default values."""
    path = get_settings_path()
    if path.exists() and not force:
        print_error(f"Settings file already exists: {path}")
        print_info("Use --force to overwrite.")
        raise typer.Exit(code=1)

    try:
        saved = save_settings(Settings(), path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    print_success(f"Settings written to {saved}")
