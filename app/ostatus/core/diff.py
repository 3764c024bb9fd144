"""Drift computation between installations.

Compares what the user installed, what the role prescribes and what is
on the system, by name only: version changes are the manifests' business.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from ostatus.models.package import Installation, Package


def diff_names(
    packages_a: Iterable[Package],
    packages_b: Iterable[Package],
    exclude_prefixes: Sequence[str] = (),
) -> str:
    """List the names of a that are not in b.

    Args:
        packages_a: Packages to report.
        packages_b: Packages to subtract.
        exclude_prefixes: Names starting with any of these are never reported.

    Returns:
        Sorted names joined by single spaces ('' when nothing differs).
    """
    names_b = {package.name for package in packages_b}
    prefixes = tuple(exclude_prefixes)
    difference = {
        package.name
        for package in packages_a
        if package.name not in names_b and not (prefixes and package.name.startswith(prefixes))
    }
    return " ".join(sorted(difference))


@dataclass(frozen=True, slots=True)
class Drift:
    """Differences between the user, role and system installations.

    Every field is a space separated, sorted list of names.

    Attributes:
        added_patterns: Patterns the user installed beyond the role.
        removed_patterns: Role patterns missing from the system.
        added_packages: Packages the user installed beyond the role.
        removed_packages: Role packages missing from the system.
    """

    added_patterns: str
    removed_patterns: str
    added_packages: str
    removed_packages: str

    @classmethod
    def compute(
        cls,
        user: Installation,
        role: Installation,
        system: Installation,
        added_packages_exclude: Sequence[str] = (),
    ) -> Drift:
        """Compute the drift of a system from its role.

        Additions compare the user installation (auto-installed packages
        left out) with the role; removals compare the role with the full
        system. The exclusion list only applies to added packages.

        Args:
            user: Installed system without auto-installed packages.
            role: Canonical installation of the role.
            system: Installed system.
            added_packages_exclude: Name prefixes never reported as added packages.

        Returns:
            Drift with the four difference lists.
        """
        return cls(
            added_patterns=diff_names(user.patterns, role.patterns),
            removed_patterns=diff_names(role.patterns, system.patterns),
            added_packages=diff_names(user.packages, role.packages, added_packages_exclude),
            removed_packages=diff_names(role.packages, system.packages),
        )
