"""CLI package for ostatus.

This package contains the Typer application and all subcommands.
"""

from ostatus.cli.main import app

__all__ = ["app"]
