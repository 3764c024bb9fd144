"""Main CLI application entry point.

Defines the Typer application and global options.
"""

from pathlib import Path
from typing import Annotated

import typer

from ostatus import __version__
from ostatus.cli.commands import cfg, role, settings, show, update
from ostatus.utils.formatting import configure_logging

# Create main Typer app
app = typer.Typer(
    name="ostatus",
    help="Role detection and status reporting for openSUSE systems.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"ostatus version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
    root: Annotated[
        Path | None,
        typer.Option(
            "--root",
            "-r",
            help="Inspect the system installed below this directory.",
            envvar="OSTATUS_ROOT",
        ),
    ] = None,
) -> None:
    """ostatus - Detect the role of a system and report how it drifted.

    Compares the installed patterns with the configured system roles,
    resolves the canonical installation of the closest role and writes
    manifests and a status file describing the system.
    """
    configure_logging(verbose)

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["root"] = root


# Register commands
app.add_typer(update.app, name="update")
app.add_typer(show.app, name="show")
app.add_typer(role.app, name="role")
app.add_typer(cfg.app, name="cfg")
app.add_typer(settings.app, name="settings")


if __name__ == "__main__":
    app()
