"""Cleanliness scoring heuristic.

The score starts at 100 and loses points for clutter, staleness and old
files. Penalties are capped individually so a single factor can never
drive the score to zero on its own.
"""

import math
from collections.abc import Sequence

from deskctl.desktop.models import CleanlinessLevel, CleanlinessScore, DesktopItem

# Offset added to the minimum age to get the old-file threshold
DEFAULT_OLD_FILE_OFFSET_DAYS = 14

_MAX_CLUTTER_PENALTY = 30
_MAX_STALENESS_PENALTY = 30
_MAX_OLD_FILE_PENALTY = 40


def _finite(value: float) -> float:
    return value if math.isfinite(value) else 0.0


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def compute_score(file_count: int, old_file_count: int, average_age_days: float) -> int:
    """Compute the 0-100 cleanliness score.

    Args:
        file_count: Number of actionable items.
        old_file_count: Number of actionable items past the old threshold.
        average_age_days: Mean age of the actionable items.

    Returns:
        Score clamped to [0, 100].
    """
    average_age_days = _finite(average_age_days)
    score = 100

    if old_file_count > 0:
        score -= min(file_count * 2, _MAX_CLUTTER_PENALTY)
        score -= min(_round_half_up(average_age_days * 1.2), _MAX_STALENESS_PENALTY)

    score -= min(old_file_count * 3, _MAX_OLD_FILE_PENALTY)
    return max(0, min(score, 100))


def derive_level(
    score: int,
    file_count: int,
    old_file_count: int,
    average_age_days: float,
) -> CleanlinessLevel:
    """Derive the qualitative level from a score and its inputs."""
    average_age_days = _finite(average_age_days)

    if score >= 80 and old_file_count <= 5 and average_age_days <= 14:
        return CleanlinessLevel.GOOD

    old_ratio = old_file_count / file_count if file_count > 0 else 0.0
    if score < 30 or old_ratio >= 0.85 or average_age_days >= 90:
        return CleanlinessLevel.BAD

    return CleanlinessLevel.MEDIUM


def build_score(file_count: int, old_file_count: int, average_age_days: float) -> CleanlinessScore:
    """Build a complete CleanlinessScore from the three inputs."""
    average_age_days = _finite(average_age_days)
    score = compute_score(file_count, old_file_count, average_age_days)
    return CleanlinessScore(
        file_count=file_count,
        old_file_count=old_file_count,
        average_age_days=average_age_days,
        score=score,
        level=derive_level(score, file_count, old_file_count, average_age_days),
    )


def score_items(items: Sequence[DesktopItem], old_age_threshold: int) -> CleanlinessScore:
    """Score a set of actionable items.

    An empty set is maximally clean.

    Args:
        items: Actionable items.
        old_age_threshold: Age in days from which an item counts as old.

    Returns:
        CleanlinessScore over the items.
    """
    if not items:
        return build_score(0, 0, 0.0)

    old_file_count = sum(1 for item in items if item.age_days >= old_age_threshold)
    average_age = sum(item.age_days for item in items) / len(items)
    return build_score(len(items), old_file_count, average_age)
