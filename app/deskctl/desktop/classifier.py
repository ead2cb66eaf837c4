"""Age and ignore-list classification of desktop items."""

from collections.abc import Iterable, Set
from dataclasses import dataclass

from deskctl.desktop.models import DesktopItem

# Allowed range for the minimum age filter, in days (inclusive)
MIN_AGE_RANGE: tuple[int, int] = (1, 2000)

DEFAULT_MIN_AGE_DAYS = 7


@dataclass(frozen=True, slots=True)
class Classification:
    """Result of splitting a snapshot.

    Attributes:
        actionable: Items old enough and not ignored (cleanup candidates).
        ignored: Items whose path is in the ignore set, whatever their age.
    """

    actionable: tuple[DesktopItem, ...]
    ignored: tuple[DesktopItem, ...]


def clamp_min_age(value: int) -> int:
    """Clamp a minimum age into MIN_AGE_RANGE.

    Out-of-range values are clamped, never rejected.
    """
    low, high = MIN_AGE_RANGE
    return max(low, min(value, high))


def classify(
    items: Iterable[DesktopItem],
    min_age_days: int,
    ignored_paths: Set[str],
) -> Classification:
    """Split items into actionable and ignored sets.

    Items younger than min_age_days that are not ignored land in neither
    set. The two sets are always disjoint.

    Args:
        items: Items from one snapshot.
        min_age_days: Inclusive age threshold for actionable items.
        ignored_paths: Exact path strings the user excluded.

    Returns:
        Classification with both sets in input order.
    """
    actionable: list[DesktopItem] = []
    ignored: list[DesktopItem] = []

    for item in items:
        if str(item.path) in ignored_paths:
            ignored.append(item)
        elif item.age_days >= min_age_days:
            actionable.append(item)

    return Classification(actionable=tuple(actionable), ignored=tuple(ignored))
