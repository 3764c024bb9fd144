"""Dependency solver interface.

The solver is an opaque service: it receives the query text built by
ostatus.core.query and answers with the problems it found and the
classified transaction that would satisfy the jobs.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from ostatus.models.package import Package


class TransactionType(Enum):
    """Class of a transaction step.

    Obsoletions are folded into upgrades, the way libsolv classifies
    them with SOLVER_TRANSACTION_OBSOLETE_IS_UPGRADE.
    """

    INSTALL = "install"
    MULTIINSTALL = "multiinstall"
    REINSTALL = "reinstall"
    REINSTALLED = "reinstalled"
    UPGRADE = "upgrade"
    UPGRADED = "upgraded"
    DOWNGRADE = "downgrade"
    DOWNGRADED = "downgraded"
    CHANGE = "change"
    CHANGED = "changed"
    ERASE = "erase"
    IGNORE = "ignore"

    @classmethod
    def from_token(cls, token: str) -> TransactionType:
        """Map a solver result token to its transaction class.

        Args:
            token: First word of a transaction line (e.g. 'install').

        Returns:
            The matching TransactionType.

        Raises:
            ValueError: If the token is not a known transaction class.
        """
        if token == "obsoletes":
            return cls.UPGRADE
        if token == "obsoleted":
            return cls.UPGRADED
        return cls(token)


@dataclass(frozen=True, slots=True)
class TransactionStep:
    """One step of a solver transaction.

    Attributes:
        kind: Transaction class of the step.
        package: Package the step acts on; the prefixed solvable name
            (e.g. 'pattern:base') is kept in package.name.
        repo: Repository the package comes from.
    """

    kind: TransactionType
    package: Package
    repo: str = ""


@dataclass(frozen=True, slots=True)
class SolverResult:
    """Answer of the solver to one query.

    Attributes:
        problems: Descriptions of the unsatisfiable jobs.
        steps: Classified transaction, empty when there are problems.
    """

    problems: tuple[str, ...] = ()
    steps: tuple[TransactionStep, ...] = ()

    @property
    def problem_count(self) -> int:
        """Number of problems reported by the solver."""
        return len(self.problems)


class DependencySolver(ABC):
    """Abstract base class for dependency solvers.

    Example:
        >>> solver = TestsolvSolver()
        >>> result = solver.solve(build_query(repos, ["openSUSE"], ["base"], []))
        >>> if result.problem_count == 0:
        ...     installs = [s.package for s in result.steps]
    """

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the solver can be used on this system.

        Returns:
            True if the solver can be invoked, False otherwise.
        """

    @abstractmethod
    def solve(self, query: str) -> SolverResult:
        """Resolve a query.

        Args:
            query: Problem description in the solver query language.

        Returns:
            SolverResult with problems and the classified transaction.

        Raises:
            SolveError: If the solver cannot be run or its answer cannot be read.
        """
