"""CLI commands for ostatus.

This package contains all subcommand implementations.
"""

from ostatus.cli.commands import cfg, role, settings, show, update

__all__ = ["cfg", "role", "settings", "show", "update"]
