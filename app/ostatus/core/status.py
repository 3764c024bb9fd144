"""Status file creation and reading.

This module runs the whole pipeline of an update: read the installed
system, detect its role, resolve the canonical installation of that role,
write both manifests and the status file with the drift of the system.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Sequence
from datetime import UTC, datetime
from pathlib import Path

from ostatus.core.diff import Drift
from ostatus.core.errors import InventoryError, ManifestError, RoleNotFoundError
from ostatus.core.manifest import BASE_MANIFEST, SYSTEM_MANIFEST, build_manifest, write_manifest
from ostatus.core.matcher import closest_role
from ostatus.core.paths import SystemPaths
from ostatus.core.resolver import CanonicalResolver
from ostatus.core.settings import DEFAULT_ADDED_PACKAGES_EXCLUDE
from ostatus.models.package import Installation
from ostatus.models.role import Roles
from ostatus.models.status import StatusReport
from ostatus.scanners.base import BuildtimeSource
from ostatus.scanners.dumpsolv import RepositoryBuildtimes
from ostatus.scanners.release import read_baseproduct, read_os_release
from ostatus.scanners.repos import read_repos, read_solver_conf
from ostatus.scanners.system import SystemScanner
from ostatus.solver.base import DependencySolver

logger = logging.getLogger(__name__)

STATUS_FILE = "ostatus"


def _build_manifest(installation: Installation, source: BuildtimeSource) -> str:
    """Build a manifest with the buildtimes of one source."""
    try:
        return build_manifest(installation, source.buildtimes(), source.strict)
    except ManifestError as e:
        raise ManifestError(f"{e} in the {source.name}") from e


def reset_status_dir(status_dir: Path) -> None:
    """Remove the status directory with all its content and create it empty.

    Args:
        status_dir: Status directory.

    Raises:
        InventoryError: If the directory cannot be removed or created.
    """
    try:
        if status_dir.exists():
            shutil.rmtree(status_dir)
        status_dir.mkdir(parents=True)
    except OSError as e:
        raise InventoryError(f"Cannot recreate status directory {status_dir}: {e}") from e


def read_status(status_dir: Path) -> StatusReport:
    """Read the status file of a status directory.

    Args:
        status_dir: Status directory.

    Returns:
        Parsed StatusReport.

    Raises:
        InventoryError: If the status file is missing, unreadable or incomplete.
    """
    path = status_dir / STATUS_FILE
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise InventoryError(f"Status file not found: {path}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise InventoryError(f"Cannot read status file {path}: {e}") from e

    try:
        return StatusReport.from_text(text)
    except ValueError as e:
        raise InventoryError(f"Invalid status file {path}: {e}") from e


class StatusUpdater:
    """Creates the status files of a system.

    Example:
        >>> updater = StatusUpdater(paths, TestsolvSolver(), RpmDatabase.configure())
        >>> report = updater.update(roles, paths.status_dir)
        >>> print(report.role)
    """

    def __init__(
        self,
        paths: SystemPaths,
        solver: DependencySolver,
        system_buildtimes: BuildtimeSource,
        repo_buildtimes: BuildtimeSource | None = None,
        added_packages_exclude: Sequence[str] = DEFAULT_ADDED_PACKAGES_EXCLUDE,
        dumpsolv_command: str = "dumpsolv",
    ) -> None:
        """Initialize the updater.

        Args:
            paths: System paths to read from.
            solver: Dependency solver for the canonical installation.
            system_buildtimes: Buildtimes of the installed packages (rpm database).
            repo_buildtimes: Buildtimes from repository metadata. None reads
                them with dumpsolv from the eligible repositories.
            added_packages_exclude: Name prefixes never reported as added packages.
            dumpsolv_command: dumpsolv executable, used when repo_buildtimes is None.
        """
        self._paths = paths
        self._solver = solver
        self._system_buildtimes = system_buildtimes
        self._repo_buildtimes = repo_buildtimes
        self._added_packages_exclude = tuple(added_packages_exclude)
        self._dumpsolv_command = dumpsolv_command
        self._scanner = SystemScanner(paths)

    def detect_role(self, roles: Roles, installation: Installation | None = None) -> str:
        """Detect the role of the installed system.

        Args:
            roles: Configured roles (default already applied).
            installation: Installed system. None scans it.

        Returns:
            Name of the closest role.

        Raises:
            RoleNotFoundError: If no role can be detected.
        """
        if installation is None:
            installation = self._scanner.scan()
        role = closest_role(roles, installation)
        if role is None:
            raise RoleNotFoundError("Role cannot be detected: no roles configured")
        return role

    def update(self, roles: Roles, status_dir: Path) -> StatusReport:
        """Create the manifests and the status file.

        The status directory must exist. Both manifests are built before
        anything is written, so a failing solve or a package without
        repository buildtime leaves no manifest behind.

        Args:
            roles: Configured roles (default already applied).
            status_dir: Directory receiving the files.

        Returns:
            The StatusReport written to the status file.

        Raises:
            OstatusError: Any failure of the pipeline.
        """
        product = read_baseproduct(self._paths)
        release = read_os_release(self._paths)

        inst_system = self._scanner.scan()
        role = self.detect_role(roles, inst_system)

        repos = read_repos(self._paths)
        resolver = CanonicalResolver(
            self._solver,
            repos,
            product=product,
            solver_conf=read_solver_conf(self._paths),
            solv_cache_dir=self._paths.solv_cache_dir,
        )
        inst_role = resolver.resolve(role, roles)

        repo_buildtimes = self._repo_buildtimes or RepositoryBuildtimes(
            self._paths, repos, command=self._dumpsolv_command
        )
        # The system manifest lists the packages expected for the role,
        # with the buildtimes of the rpm database
        system_text = _build_manifest(inst_role, self._system_buildtimes)
        base_text = _build_manifest(inst_role, repo_buildtimes)

        system_digest = write_manifest(status_dir / SYSTEM_MANIFEST, system_text)
        base_digest = write_manifest(status_dir / BASE_MANIFEST, base_text)

        inst_user = self._scanner.scan(exclude_auto_installed=True)
        drift = Drift.compute(
            user=inst_user,
            role=inst_role,
            system=inst_system,
            added_packages_exclude=self._added_packages_exclude,
        )

        report = StatusReport(
            date=datetime.now(UTC).isoformat(),
            product=product,
            version_id=release.version_id,
            role=role,
            base_manifest_digest=base_digest,
            system_manifest_digest=system_digest,
            added_patterns=drift.added_patterns,
            removed_patterns=drift.removed_patterns,
            added_packages=drift.added_packages,
            removed_packages=drift.removed_packages,
        )

        status_path = status_dir / STATUS_FILE
        try:
            status_path.write_text(report.to_text(), encoding="utf-8")
        except OSError as e:
            raise InventoryError(f"Failed to write status file {status_path}: {e}") from e

        logger.info("Wrote status of role %s to %s", role, status_path)
        return report
