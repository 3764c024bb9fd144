"""Dependency solver backed by libsolv's testsolv tool.

The query is written to a temporary testcase file and handed to
``testsolv -r``, which prints the solver result in testcase result
format::

    result transaction,problems <inline>
    #>install bash-5.2.15-1.1.x86_64@repo-oss
    #>upgrade foo-1-1.noarch@@System foo-2-1.noarch@repo-oss
    #>problem 4d4de423 info nothing provides bar needed by foo-2-1.noarch
"""

import logging
import subprocess
from pathlib import Path
from tempfile import NamedTemporaryFile

from ostatus.core.errors import SolveError
from ostatus.models.package import Package
from ostatus.solver.base import DependencySolver, SolverResult, TransactionStep, TransactionType
from ostatus.utils.shell import command_exists, run_command

logger = logging.getLogger(__name__)

# Prefix testsolv puts in front of inline result lines
_INLINE_PREFIX = "#>"

# Testcase statements that may be echoed around the result
_TESTCASE_KEYWORDS = frozenset(
    {"system", "repo", "solverflags", "poolflags", "job", "namespace", "disable", "result"}
)


def _parse_solvable(solvable: str) -> tuple[Package, str]:
    """Split 'name-evr.arch@repo' into a Package and the repository name."""
    nevra, _, repo = solvable.partition("@")
    return Package.from_nevra(nevra), repo


def parse_result(output: str) -> SolverResult:
    """Parse testsolv result output.

    Problem lines are grouped by problem id; their 'info' text becomes
    the problem description. For steps naming two solvables (upgrades)
    the second one, the package being installed, is kept.

    Args:
        output: Standard output of ``testsolv -r``.

    Returns:
        SolverResult with problems and transaction steps.

    Raises:
        SolveError: If a transaction line cannot be understood.
    """
    problems: dict[str, str] = {}
    steps: list[TransactionStep] = []

    for raw_line in output.splitlines():
        line = raw_line.strip()
        if line.startswith(_INLINE_PREFIX):
            line = line[len(_INLINE_PREFIX) :].strip()
        words = line.split()
        if not words or words[0] in _TESTCASE_KEYWORDS:
            continue

        if words[0] == "problem":
            if len(words) < 2:
                raise SolveError(f"Malformed problem line: {line!r}")
            problem_id = words[1]
            if len(words) > 3 and words[2] == "info":
                problems[problem_id] = " ".join(words[3:])
            else:
                problems.setdefault(problem_id, f"problem {problem_id}")
            continue
        if words[0] == "transaction":
            words = words[1:]

        if len(words) < 2:
            raise SolveError(f"Malformed transaction line: {line!r}")
        try:
            kind = TransactionType.from_token(words[0])
            package, repo = _parse_solvable(words[-1])
        except ValueError as e:
            raise SolveError(f"Cannot read solver result line {line!r}: {e}") from e
        steps.append(TransactionStep(kind=kind, package=package, repo=repo))

    if problems:
        return SolverResult(problems=tuple(problems.values()))
    return SolverResult(steps=tuple(steps))


class TestsolvSolver(DependencySolver):
    """Solver running libsolv's testsolv on a temporary testcase.

    There is no timeout: a solver that never answers stalls the run.
    """

    __test__ = False  # not a pytest test class despite its name

    def __init__(self, command: str = "testsolv") -> None:
        self._command = command

    def is_available(self) -> bool:
        """Check if testsolv is available."""
        return command_exists(self._command)

    def solve(self, query: str) -> SolverResult:
        """Run testsolv on the query.

        The temporary testcase file is removed whether the solver
        succeeds or not.

        Args:
            query: Query text built by build_query().

        Returns:
            Parsed SolverResult.

        Raises:
            SolveError: If testsolv is missing, fails, or prints an unreadable result.
        """
        if not self.is_available():
            msg = f"{self._command} is not available on this system"
            raise SolveError(msg)

        tmp_path: Path | None = None
        try:
            with NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                prefix="ostatus-",
                suffix=".testcase",
                delete=False,
            ) as f:
                tmp_path = Path(f.name)
                f.write(query)

            logger.debug("Running %s on %s", self._command, tmp_path)
            result = run_command([self._command, "-r", str(tmp_path)], timeout=None)
        except (OSError, subprocess.SubprocessError) as e:
            raise SolveError(f"Failed to run {self._command}: {e}") from e
        finally:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)

        solver_result = parse_result(result.stdout)
        if not result.success and not solver_result.problems:
            msg = f"{self._command} failed: {result.stderr.strip() or 'unknown error'}"
            raise SolveError(msg)
        return solver_result
