"""Exception hierarchy for ostatus.

Every failure that aborts a run derives from OstatusError so the CLI can
report it with a single line and a non-zero exit code.
"""


class OstatusError(Exception):
    """Base exception for all ostatus errors."""


class ConfigError(OstatusError):
    """Raised when a role config or product definition cannot be read or parsed."""


class InventoryError(OstatusError):
    """Raised when a required system file cannot be read."""


class SolveError(OstatusError):
    """Raised when the dependency solver reports unsatisfiable jobs.

    Attributes:
        problems: Problem descriptions reported by the solver.
    """

    def __init__(self, message: str, problems: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.problems = problems


class UnexpectedTransactionError(SolveError):
    """Raised when a solver transaction contains something other than installs."""


class RoleNotFoundError(OstatusError):
    """Raised when no role can be detected or a role is not configured."""


class ManifestError(OstatusError):
    """Raised when a manifest cannot be built or written."""
