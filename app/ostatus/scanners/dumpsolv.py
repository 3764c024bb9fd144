"""Repository buildtimes from the libsolv solver caches.

Dumps the solv file of each repository with dumpsolv and collects the
solvable:buildtime attribute of every solvable.
"""

import logging
import re
import subprocess
from collections.abc import Iterator

from ostatus.core.errors import InventoryError
from ostatus.core.paths import SystemPaths
from ostatus.models.repo import ZypperRepo
from ostatus.scanners.base import BuildtimeSource
from ostatus.utils.shell import command_exists, run_command

logger = logging.getLogger(__name__)

# "solvable 12 (345):" opens the attribute block of one solvable
_SOLVABLE_RE = re.compile(r"^solvable \d+ \(\d+\):$")

# "solvable:buildtime: 1690000000" and friends, possibly indented
_ATTR_RE = re.compile(r"^solvable:(?P<key>name|evr|arch|buildtime):\s*(?P<value>\S+)")


def parse_dumpsolv(output: str) -> Iterator[tuple[str, int]]:
    """Parse dumpsolv output into (full name, buildtime) pairs.

    Solvables without a buildtime (or with a malformed one) are skipped.

    Args:
        output: Standard output of dumpsolv.

    Yields:
        Tuples of (name-evr.arch, buildtime).
    """
    attrs: dict[str, str] = {}

    def flush() -> Iterator[tuple[str, int]]:
        if {"name", "evr", "arch", "buildtime"} <= attrs.keys():
            if attrs["buildtime"].isdigit():
                yield f"{attrs['name']}-{attrs['evr']}.{attrs['arch']}", int(attrs["buildtime"])
            else:
                logger.debug("Skipping %s: malformed buildtime", attrs["name"])

    for raw_line in output.splitlines():
        line = raw_line.strip()
        if _SOLVABLE_RE.match(line):
            yield from flush()
            attrs = {}
            continue
        match = _ATTR_RE.match(line)
        if match is not None:
            attrs.setdefault(match.group("key"), match.group("value"))

    yield from flush()


class RepositoryBuildtimes(BuildtimeSource):
    """Buildtimes recorded in the repository metadata.

    This source is strict: a package of the role that no repository
    knows means the role cannot be described from the repositories.
    """

    def __init__(
        self,
        paths: SystemPaths,
        repos: list[ZypperRepo],
        command: str = "dumpsolv",
    ) -> None:
        self._paths = paths
        self._repos = repos
        self._command = command

    @property
    def name(self) -> str:
        return "repository metadata"

    @property
    def strict(self) -> bool:
        return True

    def is_available(self) -> bool:
        """Check if dumpsolv is available."""
        return command_exists(self._command)

    def buildtimes(self) -> dict[str, int]:
        """Collect the buildtimes of all repositories.

        Repositories are read in priority order; the first repository
        providing a full name wins.

        Returns:
            Mapping of full package name to buildtime.

        Raises:
            InventoryError: If dumpsolv is missing or fails on a cache.
        """
        if not self.is_available():
            msg = f"{self._command} is not available on this system"
            raise InventoryError(msg)

        buildtimes: dict[str, int] = {}
        for repo in self._repos:
            solv = self._paths.solv_file(repo.alias)
            try:
                result = run_command([self._command, str(solv)])
            except (OSError, subprocess.SubprocessError) as e:
                raise InventoryError(f"Failed to run {self._command} on {solv}: {e}") from e
            if not result.success:
                detail = result.stderr.strip() or "unknown error"
                msg = f"{self._command} failed on {solv}: {detail}"
                raise InventoryError(msg)

            for full_name, buildtime in parse_dumpsolv(result.stdout):
                buildtimes.setdefault(full_name, buildtime)

        logger.debug("Read %d repository buildtimes", len(buildtimes))
        return buildtimes
