"""Role configs generated from the upstream product definitions.

The installer product definitions live in the skelcd-control-<project>
git repositories, one branch per product release. Each branch carries
control/control.<project>.xml, which is turned into a role config named
after the os-release ID and VERSION_ID of the release.
"""

import logging
import subprocess
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from tempfile import TemporaryDirectory

from ostatus.core.errors import ConfigError
from ostatus.core.roles import load_roles_from_control, roles_to_config
from ostatus.utils.shell import command_exists, run_command

logger = logging.getLogger(__name__)

UPSTREAM_URL = "https://github.com/yast/skelcd-control-{project}.git"

# Time allowed for a clone, which downloads the whole history
CLONE_TIMEOUT = 300.0


@dataclass(frozen=True, slots=True)
class UpstreamBranch:
    """A product release of an upstream project.

    Attributes:
        branch: Git branch holding the release.
        config_name: Config basename, <ID>-<VERSION_ID> (or <ID> for rolling releases).
    """

    branch: str
    config_name: str


PROJECTS: dict[str, tuple[UpstreamBranch, ...]] = {
    "openSUSE": (
        UpstreamBranch("openSUSE-15_3", "opensuse-leap-15.3"),
        UpstreamBranch("openSUSE-15_4", "opensuse-leap-15.4"),
        UpstreamBranch("master", "opensuse-tumbleweed"),
    ),
    "MicroOS": (UpstreamBranch("master", "opensuse-microos"),),
    "SMO": (
        UpstreamBranch("SLE-Micro-5.1", "suse-microos-5.1"),
        UpstreamBranch("SLE-Micro-5.2", "suse-microos-5.2"),
    ),
}


def control_path(checkout: Path, project: str) -> Path:
    """Path of the product definition inside a project checkout."""
    return checkout / "control" / f"control.{project}.xml"


def _git(args: list[str], cwd: Path | None = None, timeout: float = 60.0) -> None:
    """Run a git command, raising ConfigError on failure."""
    try:
        result = run_command(
            ["git", *args],
            timeout=timeout,
            cwd=str(cwd) if cwd is not None else None,
        )
    except (OSError, subprocess.SubprocessError) as e:
        raise ConfigError(f"Failed to run git {args[0]}: {e}") from e
    if not result.success:
        msg = f"git {' '.join(args)} failed: {result.stderr.strip() or 'unknown error'}"
        raise ConfigError(msg)


def fetch_configs(
    output_dir: Path,
    projects: dict[str, tuple[UpstreamBranch, ...]] | None = None,
    on_branch: Callable[[str, str], None] | None = None,
) -> list[Path]:
    """Clone the upstream projects and write one role config per branch.

    Args:
        output_dir: Directory receiving the <config_name>.cfg files.
        projects: Branches per project. None uses PROJECTS.
        on_branch: Called with (project, branch) before each branch is read.

    Returns:
        Paths of the written configs, in project and branch order.

    Raises:
        ConfigError: If git is missing, a clone or checkout fails, or a
            product definition cannot be read or the config written.
    """
    if not command_exists("git"):
        raise ConfigError("git is not available on this system")

    projects = PROJECTS if projects is None else projects
    written: list[Path] = []

    for project, branches in projects.items():
        url = UPSTREAM_URL.format(project=project)
        with TemporaryDirectory(prefix="ostatus-") as tmp:
            checkout = Path(tmp)
            logger.info("Cloning %s", url)
            _git(["clone", "--quiet", url, str(checkout)], timeout=CLONE_TIMEOUT)

            for upstream in branches:
                if on_branch is not None:
                    on_branch(project, upstream.branch)
                _git(["checkout", "--quiet", f"origin/{upstream.branch}"], cwd=checkout)

                config = roles_to_config(load_roles_from_control(control_path(checkout, project)))
                target = output_dir / f"{upstream.config_name}.cfg"
                try:
                    target.write_text(config, encoding="utf-8")
                except OSError as e:
                    raise ConfigError(f"Failed to write {target}: {e}") from e
                logger.info("Created %s from %s/%s", target, project, upstream.branch)
                written.append(target)

    return written
