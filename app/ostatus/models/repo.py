"""Repository and solver configuration models."""

from dataclasses import dataclass

# Solver flags understood by the query language
FLAG_IGNORE_RECOMMENDED = "ignorerecommended"
FLAG_ALLOW_VENDOR_CHANGE = "allowvendorchange"


@dataclass(frozen=True, slots=True)
class ZypperRepo:
    """An enabled repository with a local solver cache.

    Attributes:
        alias: Repository alias (section name of the .repo file).
        priority: Repository priority, lower number wins.
    """

    alias: str
    priority: int = 99


@dataclass(frozen=True, slots=True)
class SolverConf:
    """Solver settings taken from zypp.conf.

    Attributes:
        only_requires: Install only required dependencies, no recommends.
        allow_vendor_change: Allow vendor changes during install or upgrade.
    """

    only_requires: bool = False
    allow_vendor_change: bool = False

    @property
    def flags(self) -> tuple[str, ...]:
        """Solver flags for the query, in query order."""
        flags: list[str] = []
        if self.only_requires:
            flags.append(FLAG_IGNORE_RECOMMENDED)
        if self.allow_vendor_change:
            flags.append(FLAG_ALLOW_VENDOR_CHANGE)
        return tuple(flags)
