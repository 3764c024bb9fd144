"""Show command implementation.

Displays the status file written by the last update.
"""

import json
from pathlib import Path
from typing import Annotated

import typer

from ostatus.cli.display import create_status_table
from ostatus.cli.types import get_paths
from ostatus.core.errors import OstatusError
from ostatus.core.settings import load_settings
from ostatus.core.status import read_status
from ostatus.utils.formatting import console, print_error, print_info

app = typer.Typer(
    help="Show the status of the last update.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def show_status(
    ctx: typer.Context,
    directory: Annotated[
        Path | None,
        typer.Option(
            "--directory",
            "-d",
            help="Directory holding the status files.",
            file_okay=False,
        ),
    ] = None,
    as_json: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Print the status as JSON.",
        ),
    ] = False,
) -> None:
    """Show the status file of the system.

    Examples:
        ostatus show                 # Table of the current status
        ostatus show --json          # Same as JSON
    """
    if ctx.invoked_subcommand is not None:
        return

    try:
        status_dir = directory or load_settings().status_dir or get_paths(ctx).status_dir
        report = read_status(status_dir)
    except OstatusError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if as_json:
        console.print_json(json.dumps(report.to_dict()))
        return

    console.print(create_status_table(report))
    if not report.has_drift:
        print_info("The system matches its role.")
