"""Package and installation models.

This module defines the resolved package unit and the installation,
a snapshot of products, patterns and packages that is either read from
the system or computed for a role.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

# Separator between the solvable kind and its name ("pattern:base")
KIND_SEPARATOR = ":"


class SolvableKind(Enum):
    """Kind of a solvable, derived from the prefix of its name."""

    PRODUCT = "product"
    PATTERN = "pattern"
    PACKAGE = "package"


@dataclass(frozen=True, slots=True)
class Package:
    """A resolved package, pattern or product.

    Identity is the full formatted name, so two packages are equal when
    name, version and architecture all match.

    Attributes:
        name: Name without any kind prefix (e.g. 'bash', 'base').
        version: Version including the release (e.g. '5.2.15-1.1').
        arch: Architecture (e.g. 'x86_64', 'noarch').
    """

    name: str
    version: str
    arch: str

    def __post_init__(self) -> None:
        """Validate package data after initialization."""
        if not self.name:
            msg = "Package name cannot be empty"
            raise ValueError(msg)

    @property
    def full_name(self) -> str:
        """Formatted name as name-version.arch."""
        return f"{self.name}-{self.version}.{self.arch}"

    @classmethod
    def from_nevra(cls, nevra: str) -> Package:
        """Split a name-version-release.arch string into a Package.

        Args:
            nevra: String as printed by libsolv (e.g. 'bash-5.2-1.1.x86_64').

        Returns:
            Package whose version holds 'version-release'.

        Raises:
            ValueError: If the string lacks an architecture or a release.
        """
        nevr, dot, arch = nevra.rpartition(".")
        parts = nevr.rsplit("-", 2)
        if not dot or len(parts) != 3:
            msg = f"Malformed package identifier: {nevra!r}"
            raise ValueError(msg)
        name, version, release = parts
        return cls(name=name, version=f"{version}-{release}", arch=arch)


def split_kind(name: str) -> tuple[SolvableKind, str] | None:
    """Split a solvable name into its kind and bare name.

    'product:' and 'pattern:' prefixes select those kinds, a name without
    separator is a plain package. Any other shape is not classifiable.

    Args:
        name: Solvable name as found in indexes and solver results.

    Returns:
        Tuple of (kind, bare name), or None if the name is not classifiable.
    """
    parts = name.split(KIND_SEPARATOR)
    if len(parts) == 1:
        return SolvableKind.PACKAGE, name
    if len(parts) == 2:
        prefix, bare = parts
        if prefix == SolvableKind.PRODUCT.value:
            return SolvableKind.PRODUCT, bare
        if prefix == SolvableKind.PATTERN.value:
            return SolvableKind.PATTERN, bare
    return None


@dataclass(frozen=True, slots=True)
class Installation:
    """Products, patterns and packages of one installation.

    Depending on where it comes from, an Installation describes what is
    on the system, what a role prescribes, or what the user installed.

    Attributes:
        products: Installed or expected products.
        patterns: Installed or expected patterns.
        packages: Installed or expected plain packages.
    """

    products: tuple[Package, ...] = field(default=())
    patterns: tuple[Package, ...] = field(default=())
    packages: tuple[Package, ...] = field(default=())

    @classmethod
    def from_solvables(cls, solvables: Iterable[tuple[str, str, str]]) -> Installation:
        """Build an installation from (name, version, arch) triples.

        Names are routed by their kind prefix. Names that cannot be
        classified are dropped.

        Args:
            solvables: Iterable of (prefixed name, version, arch).

        Returns:
            Installation with products, patterns and packages split apart.
        """
        buckets: dict[SolvableKind, list[Package]] = {kind: [] for kind in SolvableKind}
        for name, version, arch in solvables:
            split = split_kind(name)
            if split is None:
                continue
            kind, bare = split
            buckets[kind].append(Package(name=bare, version=version, arch=arch))

        return cls(
            products=tuple(buckets[SolvableKind.PRODUCT]),
            patterns=tuple(buckets[SolvableKind.PATTERN]),
            packages=tuple(buckets[SolvableKind.PACKAGE]),
        )

    @property
    def pattern_names(self) -> set[str]:
        """Names of the patterns in this installation."""
        return {pattern.name for pattern in self.patterns}
