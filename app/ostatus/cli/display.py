"""Shared Rich display functions for status reports and role scores."""

from rich.table import Table

from ostatus.models.status import StatusReport
from ostatus.utils.formatting import create_key_value_table

_DRIFT_FIELDS = {
    "added_patterns": "added",
    "added_packages": "added",
    "removed_patterns": "removed",
    "removed_packages": "removed",
}

_DIGEST_FIELDS = ("base_manifest_digest", "system_manifest_digest")


def create_status_table(report: StatusReport, title: str = "System Status") -> Table:
    """Create a Rich table displaying a status report.

    Drift fields are styled as additions or removals and shown as '-'
    when empty.

    Args:
        report: Status report to display.
        title: Table title.

    Returns:
        Rich Table with one row per status key.
    """
    table = create_key_value_table(title)
    for key, value in report.to_dict().items():
        label = key.upper()
        if key in _DRIFT_FIELDS:
            style = _DRIFT_FIELDS[key]
            table.add_row(label, f"[{style}]{value}[/{style}]" if value else "[muted]-[/muted]")
        elif key in _DIGEST_FIELDS:
            table.add_row(label, f"[digest]{value}[/digest]")
        elif key == "role":
            table.add_row(label, f"[role]{value}[/role]")
        else:
            table.add_row(label, value)
    return table


def create_scores_table(scores: dict[str, float], selected: str | None) -> Table:
    """Create a Rich table displaying the similarity score of each role.

    Args:
        scores: Score per role name.
        selected: Role picked by the matcher, highlighted.

    Returns:
        Rich Table sorted by descending score, then name.
    """
    table = Table(
        title="Role Scores",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Role", no_wrap=True)
    table.add_column("Score", justify="right")

    for name, score in sorted(scores.items(), key=lambda item: (-item[1], item[0])):
        if name == selected:
            table.add_row(f"[role]{name}[/role]", f"[role]{score:.3f}[/role]")
        else:
            table.add_row(name, f"{score:.3f}")
    return table
