"""Abstract base class for buildtime sources.

A buildtime source maps the full name of a package (name-version.arch)
to its build time. Manifests use it as a cheap proxy of package identity.
"""

from abc import ABC, abstractmethod


class BuildtimeSource(ABC):
    """Abstract base class for all buildtime sources.

    Sources differ in how a package missing from the lookup is treated:
    a strict source makes the manifest fail, a lenient one lets it
    record the bare package name.

    Example:
        >>> source = RpmDatabase.configure()
        >>> if source.is_available():
        ...     buildtimes = source.buildtimes()
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name of the source."""

    @property
    @abstractmethod
    def strict(self) -> bool:
        """Whether a package missing from the lookup is an error."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the tool behind this source can be used.

        Returns:
            True if the source can be queried, False otherwise.
        """

    @abstractmethod
    def buildtimes(self) -> dict[str, int]:
        """Read the buildtime of every package the source knows.

        Returns:
            Mapping of full package name to buildtime in seconds.

        Raises:
            InventoryError: If the source cannot be queried.
        """
