"""Ordering of desktop item lists."""

from collections.abc import Callable, Iterable
from typing import Any

from deskctl.desktop.models import DesktopItem, SortKey, SortOption

_PRIMARY_KEYS: dict[SortKey, Callable[[DesktopItem], Any]] = {
    SortKey.NAME: lambda item: item.name.casefold(),
    SortKey.DATE: lambda item: item.last_modified,
    SortKey.AGE: lambda item: item.age_days,
    SortKey.SIZE: lambda item: item.size_bytes,
    SortKey.TYPE: lambda item: item.extension.casefold(),
}


def sort_items(items: Iterable[DesktopItem], option: SortOption) -> list[DesktopItem]:
    """Return items ordered by the given sort option.

    Ties on the primary key are broken by path, so the order is total
    and a descending sort is the exact reverse of the ascending one.

    Args:
        items: Items to order.
        option: Sort option to apply.

    Returns:
        New list in sorted order.
    """
    primary = _PRIMARY_KEYS[option.key]
    return sorted(
        items,
        key=lambda item: (primary(item), str(item.path).casefold(), str(item.path)),
        reverse=option.descending,
    )
