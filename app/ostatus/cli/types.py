"""Shared helpers for CLI commands.

Commands read the global options stored in the Typer context and load
roles the same way, so both live here.
"""

from pathlib import Path

import typer

from ostatus.core.errors import ConfigError
from ostatus.core.paths import SystemPaths, get_system_paths
from ostatus.core.roles import find_configs, load_roles_from_config, load_roles_from_control
from ostatus.models.role import Roles


def get_paths(ctx: typer.Context) -> SystemPaths:
    """Get the system paths selected by the global --root option."""
    root = ctx.obj.get("root") if ctx.obj else None
    return get_system_paths(root)


def is_quiet(ctx: typer.Context) -> bool:
    """Check if the global --quiet option is set."""
    return bool(ctx.obj and ctx.obj.get("quiet"))


def load_roles(
    paths: SystemPaths,
    config: Path | None = None,
    control: Path | None = None,
) -> Roles:
    """Load the roles of the system with the default role applied.

    A product definition replaces the config files. Otherwise the
    discovered config files are read, followed by the extra config.

    Args:
        paths: System paths to search for configs.
        config: Extra config file read last.
        control: Product definition XML to read the roles from.

    Returns:
        Roles without the default role, the others filled from it.

    Raises:
        ConfigError: If no config is found or a config cannot be read.
        InventoryError: If os-release cannot be read.
    """
    if control is not None:
        return load_roles_from_control(control).apply_default()

    configs = find_configs(paths)
    if config is not None:
        configs.append(config)
    if not configs:
        msg = "No role config found (use --config or --control)"
        raise ConfigError(msg)

    return load_roles_from_config(configs).apply_default()
