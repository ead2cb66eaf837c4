"""Unit tests for age and ignore-list classification."""

from collections.abc import Callable

import pytest
from deskctl.desktop.classifier import MIN_AGE_RANGE, clamp_min_age, classify
from deskctl.desktop.models import DesktopItem


class TestClampMinAge:
    """Tests for clamp_min_age."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(0, 1), (-5, 1), (1, 1), (7, 7), (2000, 2000), (2001, 2000), (10**9, 2000)],
    )
    def test_clamps_into_range(self, value: int, expected: int) -> None:
        """Out-of-range values are clamped, never rejected."""
        assert clamp_min_age(value) == expected

    def test_range(self) -> None:
        """The allowed range is 1 to 2000 days."""
        assert MIN_AGE_RANGE == (1, 2000)


class TestClassify:
    """Tests for classify."""

    def test_age_boundary_is_inclusive(self, make_item: Callable[..., DesktopItem]) -> None:
        """An item exactly min_age_days old is actionable."""
        young = make_item("/d/young", age_days=6)
        boundary = make_item("/d/boundary", age_days=7)
        old = make_item("/d/old", age_days=8)

        result = classify([young, boundary, old], 7, frozenset())

        assert result.actionable == (boundary, old)
        assert result.ignored == ()

    def test_ignored_regardless_of_age(self, make_item: Callable[..., DesktopItem]) -> None:
        """Ignored paths are reported as ignored even when young."""
        young = make_item("/d/young", age_days=0)
        old = make_item("/d/old", age_days=100)

        result = classify([young, old], 7, {"/d/young", "/d/old"})

        assert result.actionable == ()
        assert result.ignored == (young, old)

    def test_ignore_match_is_exact(self, make_item: Callable[..., DesktopItem]) -> None:
        """Ignore entries compare whole path strings."""
        item = make_item("/d/report.pdf", age_days=30)

        result = classify([item], 7, {"/d/report", "/D/report.pdf"})

        assert result.actionable == (item,)

    def test_sets_are_disjoint(self, make_item: Callable[..., DesktopItem]) -> None:
        """No item is both actionable and ignored."""
        items = [make_item(f"/d/{i}", age_days=i * 3) for i in range(20)]
        ignored = {f"/d/{i}" for i in range(0, 20, 3)}

        result = classify(items, 10, ignored)

        actionable_ids = {i.id for i in result.actionable}
        ignored_ids = {i.id for i in result.ignored}
        assert not actionable_ids & ignored_ids
        assert all(i.age_days >= 10 for i in result.actionable)
        assert all(str(i.path) in ignored for i in result.ignored)

    def test_empty_input(self) -> None:
        """No items yield empty sets."""
        result = classify([], 7, frozenset())

        assert result.actionable == ()
        assert result.ignored == ()
