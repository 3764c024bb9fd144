"""System inventory readers.

This module exports the readers for the installed system, the
repositories and the buildtime sources.
"""

from ostatus.scanners.base import BuildtimeSource
from ostatus.scanners.dumpsolv import RepositoryBuildtimes
from ostatus.scanners.release import OsRelease, read_baseproduct, read_os_release
from ostatus.scanners.repos import read_repos, read_solver_conf
from ostatus.scanners.rpm import RpmDatabase
from ostatus.scanners.system import SystemScanner

__all__ = [
    "BuildtimeSource",
    "OsRelease",
    "RepositoryBuildtimes",
    "RpmDatabase",
    "SystemScanner",
    "read_baseproduct",
    "read_os_release",
    "read_repos",
    "read_solver_conf",
]
