"""Update command implementation.

Detects the role of the system and writes its manifests and status file.
"""

from pathlib import Path
from typing import Annotated

import typer

from ostatus.cli.display import create_status_table
from ostatus.cli.types import get_paths, is_quiet, load_roles
from ostatus.core.errors import OstatusError, SolveError
from ostatus.core.settings import load_settings
from ostatus.core.status import StatusUpdater, reset_status_dir
from ostatus.scanners.rpm import RpmDatabase
from ostatus.solver.testsolv import TestsolvSolver
from ostatus.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Detect the system role and write the status files.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def update_status(
    ctx: typer.Context,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Extra role config, read after the system configs.",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    control: Annotated[
        Path | None,
        typer.Option(
            "--control",
            "-x",
            help="Read the roles from a product definition (control XML).",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    directory: Annotated[
        Path | None,
        typer.Option(
            "--directory",
            "-d",
            help="Directory for the status files.",
            file_okay=False,
        ),
    ] = None,
) -> None:
    """Update the status of the system.

    Reads the installed patterns, picks the closest role, resolves the
    packages a fresh installation of that role would have and writes
    base.manifest.gz, system.manifest.gz and the ostatus file.

    The status directory is emptied first.

    Examples:
        ostatus update                          # Use the system role configs
        ostatus update --config extra.cfg       # Add a config on top
        ostatus update --control control.xml    # Use the installer roles
        ostatus update --directory /tmp/status  # Write somewhere else
    """
    if ctx.invoked_subcommand is not None:
        return

    paths = get_paths(ctx)

    try:
        settings = load_settings()
        roles = load_roles(paths, config=config, control=control)
        status_dir = directory or settings.status_dir or paths.status_dir

        updater = StatusUpdater(
            paths,
            solver=TestsolvSolver(settings.testsolv_command),
            system_buildtimes=RpmDatabase.configure(root=paths.root, command=settings.rpm_command),
            added_packages_exclude=settings.added_packages_exclude,
            dumpsolv_command=settings.dumpsolv_command,
        )

        if not is_quiet(ctx):
            print_info(f"Updating status in {status_dir}")
        reset_status_dir(status_dir)
        report = updater.update(roles, status_dir)
    except SolveError as e:
        print_error(str(e))
        for problem in e.problems:
            console.print(f"  [muted]-[/muted] {problem}")
        raise typer.Exit(code=1) from e
    except OstatusError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if is_quiet(ctx):
        return

    console.print(create_status_table(report))
    print_success(f"Status of role '{report.role}' written to {status_dir}")
