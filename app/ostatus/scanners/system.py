"""Installed system scanner.

Reads the installed products, patterns and packages from the index of
the @System solver cache, optionally leaving out everything zypper
recorded as automatically installed.
"""

import logging
from collections.abc import Iterator

from ostatus.core.errors import InventoryError
from ostatus.core.paths import SystemPaths
from ostatus.models.package import Installation

logger = logging.getLogger(__name__)


class SystemScanner:
    """Scanner for the installed solvables of a zypper system.

    Example:
        >>> scanner = SystemScanner(SystemPaths())
        >>> installation = scanner.scan()
        >>> user_installation = scanner.scan(exclude_auto_installed=True)
    """

    def __init__(self, paths: SystemPaths) -> None:
        self._paths = paths

    def scan(self, exclude_auto_installed: bool = False) -> Installation:
        """Read the installed system.

        Args:
            exclude_auto_installed: Leave out names listed in the
                auto-installed marker file.

        Returns:
            Installation with the installed products, patterns and packages.

        Raises:
            InventoryError: If the installed index cannot be read.
        """
        auto_installed = self.auto_installed() if exclude_auto_installed else set()
        return Installation.from_solvables(
            (name, version, arch)
            for name, version, arch in self._read_index()
            if name not in auto_installed
        )

    def auto_installed(self) -> set[str]:
        """Get the names zypper marked as automatically installed.

        The marker file is optional: when it does not exist nothing counts
        as auto-installed.

        Returns:
            Set of solvable names, comment lines excluded.

        Raises:
            InventoryError: If the file exists but cannot be read.
        """
        path = self._paths.auto_installed
        if not path.exists():
            logger.debug("No auto-installed marker file at %s", path)
            return set()

        try:
            lines = path.read_text(encoding="utf-8").splitlines()
        except (OSError, UnicodeDecodeError) as e:
            raise InventoryError(f"Cannot read {path}: {e}") from e

        return {line for line in lines if line and not line.startswith("#")}

    def _read_index(self) -> Iterator[tuple[str, str, str]]:
        """Yield (name, version, arch) triples of the installed index."""
        path = self._paths.system_index
        try:
            lines = path.read_text(encoding="utf-8").splitlines()
        except (OSError, UnicodeDecodeError) as e:
            raise InventoryError(f"Cannot read installed index {path}: {e}") from e

        for line in lines:
            parts = line.split()
            if len(parts) != 3:
                logger.debug("Skipping malformed index line: %r", line[:100])
                continue
            name, version, arch = parts
            yield name, version, arch
