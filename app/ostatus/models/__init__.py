"""Data models for ostatus.

This module exports the core data structures used throughout the application.
"""

from ostatus.models.package import Installation, Package, SolvableKind, split_kind
from ostatus.models.repo import SolverConf, ZypperRepo
from ostatus.models.role import DEFAULT_ROLE, ReferenceInstallation, Roles
from ostatus.models.status import StatusReport

__all__ = [
    "DEFAULT_ROLE",
    "Installation",
    "Package",
    "ReferenceInstallation",
    "Roles",
    "SolvableKind",
    "SolverConf",
    "StatusReport",
    "ZypperRepo",
    "split_kind",
]
