"""Solver query builder.

Renders an installability question as a libsolv testcase: the system
architecture, the repositories to resolve against, the solver flags and
one install job per product, pattern and package.
"""

import platform
from collections.abc import Sequence
from pathlib import Path

from ostatus.models.repo import ZypperRepo

# Default location of the per-repository solver caches
DEFAULT_SOLV_CACHE_DIR = Path("/var/cache/zypp/solv")


def host_arch() -> str:
    """Get the native architecture of the host (e.g. 'x86_64', 'aarch64')."""
    return platform.machine()


def build_query(
    repos: Sequence[ZypperRepo],
    products: Sequence[str],
    patterns: Sequence[str],
    packages: Sequence[str],
    solver_flags: Sequence[str] = (),
    arch: str | None = None,
    solv_cache_dir: Path = DEFAULT_SOLV_CACHE_DIR,
) -> str:
    """Build the solver query for installing products, patterns and packages.

    Layout::

        system <arch> rpm
        <blank>
        repo <alias> <priority> solv <cache>/<alias>/solv
        <blank>
        solverflags <flag> ...        (only when there are flags)
        job install name product:<product>
        job install name pattern:<pattern>
        job install name <package>

    Args:
        repos: Repositories in priority order.
        products: Product names to install.
        patterns: Pattern names to install.
        packages: Package names to install.
        solver_flags: Solver flag tokens (e.g. 'ignorerecommended').
        arch: System architecture. None uses the host architecture.
        solv_cache_dir: Directory holding <alias>/solv caches.

    Returns:
        Query text, without a trailing newline.
    """
    repo_lines = "".join(
        f"repo {repo.alias} {repo.priority} solv {solv_cache_dir / repo.alias / 'solv'}\n"
        for repo in repos
    )

    # Flag tokens are followed by a single space before the newline
    flags = f"solverflags {' '.join(solver_flags)} \n" if solver_flags else ""

    jobs = [f"job install name product:{product}" for product in products]
    jobs += [f"job install name pattern:{pattern}" for pattern in patterns]
    jobs += [f"job install name {package}" for package in packages]

    return f"system {arch or host_arch()} rpm\n\n{repo_lines}\n{flags}" + "\n".join(jobs)
