"""Role command implementation.

Shows which role the installed system is closest to.
"""

from pathlib import Path
from typing import Annotated

import typer

from ostatus.cli.display import create_scores_table
from ostatus.cli.types import get_paths, is_quiet, load_roles
from ostatus.core.errors import OstatusError
from ostatus.core.matcher import closest_role, role_scores
from ostatus.scanners.system import SystemScanner
from ostatus.utils.formatting import console, print_error

app = typer.Typer(
    help="Detect the role of the installed system.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def detect_role(
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
) -> None:
    """Print the detected role and the similarity of every role.

    The similarity is the Jaccard index between the installed patterns
    and the patterns of the role.
    """
    if ctx.invoked_subcommand is not None:
        return

    paths = get_paths(ctx)
    try:
        roles = load_roles(paths, config=config, control=control)
        installation = SystemScanner(paths).scan()
    except OstatusError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    selected = closest_role(roles, installation)
    if selected is None:
        print_error("Role cannot be detected: no roles configured")
        raise typer.Exit(code=1)

    if is_quiet(ctx):
        typer.echo(selected)
        return

    console.print(create_scores_table(role_scores(roles, installation), selected))
    console.print(f"Detected role: [role]{selected}[/role]")
