"""Role detection by pattern similarity.

The role of a system is the configured role whose required patterns are
the most similar to the patterns installed on the system, scored with
the Jaccard index.
"""

import logging
from collections.abc import Set

from ostatus.models.package import Installation
from ostatus.models.role import Roles

logger = logging.getLogger(__name__)


def jaccard(set1: Set[str], set2: Set[str]) -> float:
    """Compute the Jaccard similarity index of two sets.

    Args:
        set1: First set.
        set2: Second set.

    Returns:
        |set1 & set2| / |set1 | set2|, or 0.0 when both sets are empty.
    """
    union = len(set1 | set2)
    if union == 0:
        return 0.0
    return len(set1 & set2) / union


def role_scores(roles: Roles, installation: Installation) -> dict[str, float]:
    """Score every role against the installed patterns.

    Args:
        roles: Configured roles.
        installation: Installed system.

    Returns:
        Mapping of role name to similarity, in role name order.
    """
    installed = installation.pattern_names
    return {role: jaccard(installed, set(roles[role].patterns)) for role in sorted(roles)}


def closest_role(roles: Roles, installation: Installation) -> str | None:
    """Find the role closest to an installation.

    Roles are compared in name order and only a strictly better score
    replaces the current best, so ties go to the smallest role name.
    There is no minimum similarity: a poor match is still a match.

    Args:
        roles: Configured roles.
        installation: Installed system.

    Returns:
        Name of the best matching role, or None if there are no roles.
    """
    best_role: str | None = None
    best_score = -1.0
    for role, score in role_scores(roles, installation).items():
        if score > best_score:
            best_role, best_score = role, score

    if best_role is not None:
        logger.info("Detected role %s (similarity %.3f)", best_role, best_score)
    return best_role
