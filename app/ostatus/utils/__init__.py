"""Utility modules for ostatus.

This module exports commonly used utility functions.
"""

from ostatus.utils.formatting import (
    configure_logging,
    console,
    create_key_value_table,
    err_console,
    print_error,
    print_info,
    print_success,
)
from ostatus.utils.shell import CommandResult, command_exists, run_command

__all__ = [
    "CommandResult",
    "command_exists",
    "configure_logging",
    "console",
    "create_key_value_table",
    "err_console",
    "print_error",
    "print_info",
    "print_success",
    "run_command",
]
