"""Canonical installation of a role.

Asks the dependency solver what a fresh installation of the base
product plus the required patterns of a role would contain.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from pathlib import Path

from ostatus.core.errors import RoleNotFoundError, SolveError, UnexpectedTransactionError
from ostatus.core.query import DEFAULT_SOLV_CACHE_DIR, build_query
from ostatus.models.package import Installation
from ostatus.models.repo import SolverConf, ZypperRepo
from ostatus.models.role import ReferenceInstallation, Roles
from ostatus.solver.base import DependencySolver, TransactionStep, TransactionType

logger = logging.getLogger(__name__)


def installation_from_steps(steps: Iterable[TransactionStep]) -> Installation:
    """Extract the installed solvables of a transaction.

    The query only ever asks for installs, so any other transaction
    class means the solver answered a different question.

    Args:
        steps: Classified transaction steps.

    Returns:
        Installation of the installed products, patterns and packages.

    Raises:
        UnexpectedTransactionError: If a step is not a plain install.
    """
    solvables: list[tuple[str, str, str]] = []
    for step in steps:
        if step.kind is not TransactionType.INSTALL:
            msg = f"Expected only installations, got {step.kind.value} of {step.package.full_name}"
            raise UnexpectedTransactionError(msg)
        logger.debug("Role installs %s from %s", step.package.full_name, step.repo or "?")
        solvables.append((step.package.name, step.package.version, step.package.arch))
    return Installation.from_solvables(solvables)


class CanonicalResolver:
    """Resolver of the installation a role prescribes.

    Example:
        >>> resolver = CanonicalResolver(TestsolvSolver(), repos, product="openSUSE")
        >>> installation = resolver.resolve("server", roles)
    """

    def __init__(
        self,
        solver: DependencySolver,
        repos: Sequence[ZypperRepo],
        product: str,
        solver_conf: SolverConf | None = None,
        arch: str | None = None,
        solv_cache_dir: Path = DEFAULT_SOLV_CACHE_DIR,
    ) -> None:
        """Initialize the resolver.

        Args:
            solver: Dependency solver answering the queries.
            repos: Repositories in priority order.
            product: Base product installed by every query.
            solver_conf: Solver flags. None means no flags.
            arch: System architecture. None uses the host architecture.
            solv_cache_dir: Directory holding the repository solver caches.
        """
        self._solver = solver
        self._repos = tuple(repos)
        self._product = product
        self._solver_conf = solver_conf or SolverConf()
        self._arch = arch
        self._solv_cache_dir = solv_cache_dir

    def query_for(self, installation: ReferenceInstallation) -> str:
        """Build the solver query for a reference installation.

        Only the required patterns are asked for; packages come in as
        their dependencies.

        Args:
            installation: Reference installation of a role.

        Returns:
            Query text.
        """
        return build_query(
            self._repos,
            products=[self._product],
            patterns=installation.patterns,
            packages=[],
            solver_flags=self._solver_conf.flags,
            arch=self._arch,
            solv_cache_dir=self._solv_cache_dir,
        )

    def resolve(self, role: str, roles: Roles) -> Installation:
        """Compute the canonical installation of a role.

        Args:
            role: Name of the role to resolve.
            roles: Configured roles.

        Returns:
            Installation the role prescribes.

        Raises:
            RoleNotFoundError: If the role is not configured.
            SolveError: If the solver reports any problem.
            UnexpectedTransactionError: If the transaction holds anything but installs.
        """
        if role not in roles:
            raise RoleNotFoundError(f"Role not found: {role}")

        query = self.query_for(roles[role])
        logger.debug("Solver query for role %s:\n%s", role, query)

        result = self._solver.solve(query)
        if result.problem_count > 0:
            for problem in result.problems:
                logger.error("Solver problem: %s", problem)
            msg = f"Found {result.problem_count} problem(s) resolving role {role}"
            raise SolveError(msg, problems=result.problems)

        installation = installation_from_steps(result.steps)
        logger.info(
            "Role %s resolves to %d products, %d patterns, %d packages",
            role,
            len(installation.products),
            len(installation.patterns),
            len(installation.packages),
        )
        return installation
