"""Cfg command implementation.

Generates role configs from installer product definitions.
"""

from pathlib import Path
from typing import Annotated

import typer

from ostatus.cli.types import is_quiet
from ostatus.core.errors import ConfigError
from ostatus.core.roles import load_roles_from_control, roles_to_config
from ostatus.core.upstream import fetch_configs
from ostatus.utils.formatting import print_error, print_info, print_success

app = typer.Typer(
    help="Generate role configs from product definitions.",
    invoke_without_command=True,
    no_args_is_help=True,
)


@app.command()
def generate(
    control: Annotated[
        Path,
        typer.Option(
            "--control",
            "-x",
            help="Product definition (control XML) to convert.",
            exists=True,
            dir_okay=False,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Write the config to this file instead of stdout.",
            dir_okay=False,
        ),
    ] = None,
) -> None:
    """Convert a product definition into a role config.

    Examples:
        ostatus cfg generate --control control.openSUSE.xml
        ostatus cfg generate -x control.openSUSE.xml -o opensuse-tumbleweed.cfg
    """
    try:
        config = roles_to_config(load_roles_from_control(control))
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if output is None:
        typer.echo(config, nl=False)
        return

    try:
        output.write_text(config, encoding="utf-8")
    except OSError as e:
        print_error(f"Failed to write {output}: {e}")
        raise typer.Exit(code=1) from e
    print_success(f"Created {output}")


@app.command()
def fetch(
    ctx: typer.Context,
    output_dir: Annotated[
        Path,
        typer.Option(
            "--output-dir",
            "-o",
            help="Directory receiving the generated configs.",
            file_okay=False,
        ),
    ] = Path("."),
) -> None:
    """Generate the role configs of the known upstream products.

    Clones the skelcd-control repositories and writes one
    <id>-<version>.cfg per product release.
    """
    quiet = is_quiet(ctx)

    def announce(project: str, branch: str) -> None:
        if not quiet:
            print_info(f"Configuration for {project}/{branch}")

    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        written = fetch_configs(output_dir, on_branch=announce)
    except (ConfigError, OSError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if not quiet:
        for path in written:
            print_success(f"Created {path}")
