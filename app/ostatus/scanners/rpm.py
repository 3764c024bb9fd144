"""Installed package buildtimes from the rpm database.

Queries rpm for every installed package. The database handle is
configured once, explicitly, and then passed to whoever needs it.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from ostatus.core.errors import InventoryError
from ostatus.scanners.base import BuildtimeSource
from ostatus.utils.shell import command_exists, run_command

logger = logging.getLogger(__name__)


class RpmDatabase(BuildtimeSource):
    """Buildtimes of the packages recorded in the rpm database.

    This source is lenient: a role package that is not installed is
    recorded in the manifest without a buildtime.

    Example:
        >>> rpmdb = RpmDatabase.configure()
        >>> rpmdb.buildtimes()["bash-5.2.15-1.1.x86_64"]
        1690000000
    """

    # Full name with libsolv's evr layout (epoch only when set), then buildtime
    _QUERY_FORMAT = "%{NAME}-%|EPOCH?{%{EPOCH}:}:{}|%{VERSION}-%{RELEASE}.%{ARCH} %{BUILDTIME}\\n"

    def __init__(self, root: Path | None = None, command: str = "rpm") -> None:
        """Initialize the handle without touching the database.

        Args:
            root: System root holding the database. None means the running system.
            command: rpm executable.
        """
        self._root = root
        self._command = command

    @classmethod
    def configure(cls, root: Path | None = None, command: str = "rpm") -> RpmDatabase:
        """Create a handle, checking that rpm can be used.

        Args:
            root: System root holding the database. None means the running system.
            command: rpm executable.

        Returns:
            Configured RpmDatabase.

        Raises:
            InventoryError: If the rpm executable is not available.
        """
        database = cls(root=root, command=command)
        if not database.is_available():
            msg = f"{command} is not available on this system"
            raise InventoryError(msg)
        return database

    @property
    def name(self) -> str:
        return "rpm database"

    @property
    def strict(self) -> bool:
        return False

    def is_available(self) -> bool:
        """Check if rpm is available."""
        return command_exists(self._command)

    def buildtimes(self) -> dict[str, int]:
        """Read the buildtime of every installed package.

        Returns:
            Mapping of full package name to buildtime in seconds since epoch.

        Raises:
            InventoryError: If the rpm query fails.
        """
        args = [self._command]
        if self._root is not None and self._root != Path("/"):
            args += ["--root", str(self._root)]
        args += ["-qa", "--queryformat", self._QUERY_FORMAT]

        try:
            result = run_command(args)
        except (OSError, subprocess.SubprocessError) as e:
            raise InventoryError(f"Failed to run rpm query: {e}") from e
        if not result.success:
            msg = f"rpm query failed: {result.stderr.strip() or 'unknown error'}"
            raise InventoryError(msg)

        buildtimes: dict[str, int] = {}
        for line in result.stdout.splitlines():
            parts = line.split()
            if len(parts) != 2 or not parts[1].isdigit():
                logger.debug("Skipping malformed rpm line: %r", line[:100])
                continue
            buildtimes[parts[0]] = int(parts[1])

        logger.debug("Read %d installed buildtimes", len(buildtimes))
        return buildtimes
