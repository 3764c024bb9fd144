"""Readers for the zypper repository and solver configuration.

Lists the enabled repositories that have a local solver cache and reads
the solver flags from zypp.conf.
"""

import configparser
import logging
import re

from ostatus.core.errors import InventoryError
from ostatus.core.paths import SystemPaths
from ostatus.models.repo import SolverConf, ZypperRepo

logger = logging.getLogger(__name__)

# Priority of a repository that does not declare one
DEFAULT_PRIORITY = 99

_ONLY_REQUIRES_RE = re.compile(r"^solver\.onlyRequires\s*=\s*true", re.MULTILINE)
_ALLOW_VENDOR_CHANGE_RE = re.compile(r"^solver\.allowVendorChange\s*=\s*true", re.MULTILINE)


def read_repos(paths: SystemPaths) -> list[ZypperRepo]:
    """Read the repositories eligible for solving.

    A repository is eligible when it is enabled and its solver cache
    exists. Repositories sharing a base URL are listed once, the first
    one seen wins. The result is sorted by ascending priority, keeping
    the discovery order for equal priorities.

    Args:
        paths: System paths to read from.

    Returns:
        List of ZypperRepo sorted by priority.

    Raises:
        InventoryError: If the repository directory or a .repo file cannot be read.
    """
    repos_dir = paths.repos_dir
    if not repos_dir.is_dir():
        raise InventoryError(f"Repository directory not found: {repos_dir}")
    try:
        repo_files = sorted(repos_dir.glob("*.repo"))
    except OSError as e:
        raise InventoryError(f"Cannot list {repos_dir}: {e}") from e

    repos: list[ZypperRepo] = []
    urls: set[str] = set()

    for repo_file in repo_files:
        try:
            text = repo_file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise InventoryError(f"Cannot read repository file {repo_file}: {e}") from e

        config = configparser.ConfigParser(interpolation=None)
        try:
            config.read_string(text, source=str(repo_file))
        except configparser.Error as e:
            raise InventoryError(f"Malformed repository file {repo_file}: {e}") from e

        for alias in config.sections():
            if not paths.solv_file(alias).exists():
                logger.debug("Skipping repository %s: no solver cache", alias)
                continue

            section = config[alias]
            try:
                priority = section.getint("priority", fallback=DEFAULT_PRIORITY)
                enabled = section.getboolean("enabled", fallback=True)
            except ValueError as e:
                raise InventoryError(f"Invalid value in {repo_file} [{alias}]: {e}") from e

            if not enabled:
                logger.debug("Skipping disabled repository %s", alias)
                continue

            url = section.get("baseurl", fallback="")
            if url in urls:
                logger.debug("Skipping repository %s: duplicate URL %s", alias, url)
                continue
            urls.add(url)
            repos.append(ZypperRepo(alias=alias, priority=priority))

    # sorted() is stable, first seen wins on equal priorities
    return sorted(repos, key=lambda repo: repo.priority)


def read_solver_conf(paths: SystemPaths) -> SolverConf:
    """Read the solver flags from zypp.conf.

    Args:
        paths: System paths to read from.

    Returns:
        SolverConf with the flags enabled in zypp.conf.

    Raises:
        InventoryError: If zypp.conf cannot be read.
    """
    path = paths.zypp_conf
    try:
        conf = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise InventoryError(f"Cannot read {path}: {e}") from e

    return SolverConf(
        only_requires=_ONLY_REQUIRES_RE.search(conf) is not None,
        allow_vendor_change=_ALLOW_VENDOR_CHANGE_RE.search(conf) is not None,
    )
