"""Status report model.

The status report is a flat KEY="value" document summarising the
detected role, the manifest digests and the drift of the system.
"""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass, fields

# KEY="value" line of the status file
_LINE_RE = re.compile(r'^(?P<key>[A-Z_]+)="(?P<value>.*)"$')


@dataclass(frozen=True, slots=True)
class StatusReport:
    """Status of the system at the time of the last update.

    Field order is the order of the lines in the status file.

    Attributes:
        date: ISO timestamp (UTC) of the update.
        product: Base product name.
        version_id: VERSION_ID from os-release.
        role: Detected system role.
        base_manifest_digest: SHA-256 of the role manifest (repository buildtimes).
        system_manifest_digest: SHA-256 of the role manifest (rpmdb buildtimes).
        added_patterns: Patterns installed by the user but not in the role.
        removed_patterns: Role patterns not installed on the system.
        added_packages: Packages installed by the user but not in the role.
        removed_packages: Role packages not installed on the system.
    """

    date: str
    product: str
    version_id: str
    role: str
    base_manifest_digest: str
    system_manifest_digest: str
    added_patterns: str = ""
    removed_patterns: str = ""
    added_packages: str = ""
    removed_packages: str = ""

    def to_text(self) -> str:
        """Render the report as KEY="value" lines without a trailing newline."""
        return "\n".join(
            f'{field.name.upper()}="{getattr(self, field.name)}"' for field in fields(self)
        )

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)

    @property
    def has_drift(self) -> bool:
        """Check if any of the four drift fields is non-empty."""
        return any(
            (self.added_patterns, self.removed_patterns, self.added_packages, self.removed_packages)
        )

    @classmethod
    def from_text(cls, text: str) -> StatusReport:
        """Parse a status document.

        Unknown keys and lines that are not KEY="value" are ignored.

        Args:
            text: Content of a status file.

        Returns:
            Parsed StatusReport.

        Raises:
            ValueError: If a mandatory key is missing.
        """
        known = {field.name for field in fields(cls)}
        values: dict[str, str] = {}
        for line in text.splitlines():
            match = _LINE_RE.match(line.strip())
            if match is None:
                continue
            key = match.group("key").lower()
            if key in known:
                values[key] = match.group("value")

        try:
            return cls(**values)
        except TypeError as e:
            msg = f"Incomplete status document: {e}"
            raise ValueError(msg) from e
