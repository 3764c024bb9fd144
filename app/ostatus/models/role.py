"""Role models for the reference installations.

This module defines the Pydantic models describing what a system role
(server, desktop, minimal image, ...) is expected to contain.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

# Name of the role whose fields fill in the gaps of all other roles
DEFAULT_ROLE = "default"

# Fields of a reference installation, in config file order
INSTALLATION_FIELDS: tuple[str, ...] = ("patterns", "packages", "patterns_opt", "packages_opt")


class ReferenceInstallation(BaseModel):
    """Installation of reference for one role.

    Attributes:
        patterns: Patterns the role requires.
        packages: Packages the role requires.
        patterns_opt: Recommended patterns.
        packages_opt: Recommended packages.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    patterns: Annotated[tuple[str, ...], Field(description="Required patterns")] = ()
    packages: Annotated[tuple[str, ...], Field(description="Required packages")] = ()
    patterns_opt: Annotated[tuple[str, ...], Field(description="Optional patterns")] = ()
    packages_opt: Annotated[tuple[str, ...], Field(description="Optional packages")] = ()

    def inherit(self, default: ReferenceInstallation) -> ReferenceInstallation:
        """Fill every empty field from another installation.

        Non-empty fields are kept as they are; lists are never merged.

        Args:
            default: Installation providing the fallback values.

        Returns:
            New ReferenceInstallation with the gaps filled.
        """
        updates = {
            name: getattr(default, name) for name in INSTALLATION_FIELDS if not getattr(self, name)
        }
        return self.model_copy(update=updates)


class Roles(Mapping[str, ReferenceInstallation]):
    """Read-only mapping of role name to reference installation.

    Example:
        >>> roles = Roles({"default": ReferenceInstallation(packages_opt=("grub2",)),
        ...                "web": ReferenceInstallation(patterns=("http",))})
        >>> roles.apply_default()["web"].packages_opt
        ('grub2',)
    """

    def __init__(self, roles: Mapping[str, ReferenceInstallation] | None = None) -> None:
        self._roles: dict[str, ReferenceInstallation] = dict(roles or {})

    def __getitem__(self, role: str) -> ReferenceInstallation:
        return self._roles[role]

    def __iter__(self) -> Iterator[str]:
        return iter(self._roles)

    def __len__(self) -> int:
        return len(self._roles)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Roles):
            return self._roles == other._roles
        return NotImplemented

    def __repr__(self) -> str:
        return f"Roles({self._roles!r})"

    def apply_default(self) -> Roles:
        """Merge the default role into every other role and drop it.

        Any empty field of a role is replaced by the default role's field.
        The result holds no default role, so a second call is a no-op.

        Returns:
            New Roles without the default role.
        """
        default = self._roles.get(DEFAULT_ROLE)
        if default is None:
            return Roles(self._roles)
        return Roles(
            {
                name: installation.inherit(default)
                for name, installation in self._roles.items()
                if name != DEFAULT_ROLE
            }
        )
