"""Desktop domain models.

This module defines the immutable data structures shared by the scan,
classify, score and sort stages: items found on the desktop, the
snapshot a directory read produces, the cleanliness score, the sort
options and the published coordinator state.
"""

import math
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path

# Placeholder shown for files without an extension
NO_EXTENSION = "—"


@dataclass(frozen=True, slots=True)
class DesktopItem:
    """A regular file found directly inside the watched directory.

    Items are created fresh by every snapshot and never mutated. The ID
    is random, so a renamed or moved file becomes a new item.

    Attributes:
        path: Absolute path of the file.
        last_modified: Last modification time (timezone-aware, UTC).
        size_bytes: File size in bytes.
        age_days: Whole days between last_modified and the snapshot time.
        id: Opaque identity, unique per snapshot.
    """

    path: Path
    last_modified: datetime
    size_bytes: int
    age_days: int
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    def __post_init__(self) -> None:
        """Validate item data after initialization."""
        if not str(self.path):
            msg = "Path cannot be empty"
            raise ValueError(msg)
        if self.size_bytes < 0:
            msg = f"Size cannot be negative, got {self.size_bytes}"
            raise ValueError(msg)
        if self.age_days < 0:
            msg = f"Age cannot be negative, got {self.age_days}"
            raise ValueError(msg)

    @property
    def name(self) -> str:
        """Base name of the file."""
        return self.path.name

    @property
    def extension(self) -> str:
        """Upper-case extension without the dot, empty when there is none."""
        return self.path.suffix[1:].upper()

    @property
    def display_type(self) -> str:
        """Extension for display, with a dash for extension-less files."""
        return self.extension or NO_EXTENSION


@dataclass(frozen=True, slots=True)
class Snapshot:
    """One full enumeration of the watched directory.

    Attributes:
        directory: The directory that was read.
        taken_at: Clock reading used to compute item ages.
        items: Regular files found in the directory.
        skipped: Paths whose metadata could not be read.
    """

    directory: Path
    taken_at: datetime
    items: tuple[DesktopItem, ...]
    skipped: tuple[str, ...] = ()


class CleanlinessLevel(str, Enum):
    """Qualitative desktop health.

    Attributes:
        GOOD: Tidy, nothing urgent.
        MEDIUM: Starting to fill up.
        BAD: Cluttered with old files.
    """

    GOOD = "good"
    MEDIUM = "medium"
    BAD = "bad"


_LEVEL_LABELS: dict[CleanlinessLevel, str] = {
    CleanlinessLevel.GOOD: "Clean Desktop",
    CleanlinessLevel.MEDIUM: "Needs Attention",
    CleanlinessLevel.BAD: "Cluttered Desktop",
}

_LEVEL_DESCRIPTIONS: dict[CleanlinessLevel, str] = {
    CleanlinessLevel.GOOD: "Your desktop looks tidy overall and nothing seems urgent.",
    CleanlinessLevel.MEDIUM: "Your desktop is starting to fill up. Consider a quick cleanup.",
    CleanlinessLevel.BAD: (
        "Your desktop is heavily cluttered and packed with old files. It's time to tidy up."
    ),
}


@dataclass(frozen=True, slots=True)
class CleanlinessScore:
    """Cleanliness metric derived from the actionable items.

    Built by :func:`deskctl.desktop.scoring.score_items`; never updated
    partially.

    Attributes:
        file_count: Number of actionable items.
        old_file_count: Actionable items at or past the old-file threshold.
        average_age_days: Mean age of the actionable items.
        score: Health score between 0 and 100.
        level: Qualitative level derived from the score and its inputs.
    """

    file_count: int
    old_file_count: int
    average_age_days: float
    score: int
    level: CleanlinessLevel

    def __post_init__(self) -> None:
        """Validate score data after initialization."""
        if not (0 <= self.score <= 100):
            msg = f"Score must be between 0 and 100, got {self.score}"
            raise ValueError(msg)

    @property
    def percentage(self) -> str:
        """Score formatted as a percentage."""
        return f"{self.score}%"

    @property
    def formatted_average_age(self) -> str:
        """Average age with one decimal below 10 days, at most one above."""
        age = self.average_age_days
        if not math.isfinite(age):
            return "0"
        if age < 10:
            return f"{age:.1f}"
        text = f"{age:.1f}"
        return text[:-2] if text.endswith(".0") else text

    @property
    def label(self) -> str:
        """Short qualitative label."""
        return _LEVEL_LABELS[self.level]

    @property
    def description(self) -> str:
        """One-sentence advice for the current level."""
        return _LEVEL_DESCRIPTIONS[self.level]


class SortKey(str, Enum):
    """Attribute an item list can be ordered by."""

    NAME = "name"
    DATE = "date"
    AGE = "age"
    SIZE = "size"
    TYPE = "type"


class SortOption(str, Enum):
    """The ten supported (key, direction) combinations."""

    NAME_ASC = "name-asc"
    NAME_DESC = "name-desc"
    DATE_OLDEST = "date-oldest"
    DATE_NEWEST = "date-newest"
    AGE_DESC = "age-desc"
    AGE_ASC = "age-asc"
    SIZE_ASC = "size-asc"
    SIZE_DESC = "size-desc"
    TYPE_ASC = "type-asc"
    TYPE_DESC = "type-desc"

    @property
    def key(self) -> SortKey:
        """Attribute this option sorts by."""
        return _SORT_SPECS[self][0]

    @property
    def descending(self) -> bool:
        """Whether the primary key is compared in reverse."""
        return _SORT_SPECS[self][1]

    @property
    def label(self) -> str:
        """Human-readable name of the option."""
        return _SORT_SPECS[self][2]

    @classmethod
    def parse(cls, value: str) -> "SortOption":
        """Parse an option value such as ``name-asc`` (case-insensitive).

        Raises:
            ValueError: If the value names no known option.
        """
        normalized = value.strip().lower().replace("_", "-")
        try:
            return cls(normalized)
        except ValueError:
            choices = ", ".join(o.value for o in cls)
            msg = f"Unknown sort option '{value}' (choose from: {choices})"
            raise ValueError(msg) from None


_SORT_SPECS: dict[SortOption, tuple[SortKey, bool, str]] = {
    SortOption.NAME_ASC: (SortKey.NAME, False, "Name (A-Z)"),
    SortOption.NAME_DESC: (SortKey.NAME, True, "Name (Z-A)"),
    SortOption.DATE_OLDEST: (SortKey.DATE, False, "Oldest first"),
    SortOption.DATE_NEWEST: (SortKey.DATE, True, "Newest first"),
    SortOption.AGE_DESC: (SortKey.AGE, True, "Age (descending)"),
    SortOption.AGE_ASC: (SortKey.AGE, False, "Age (ascending)"),
    SortOption.SIZE_ASC: (SortKey.SIZE, False, "Size (ascending)"),
    SortOption.SIZE_DESC: (SortKey.SIZE, True, "Size (descending)"),
    SortOption.TYPE_ASC: (SortKey.TYPE, False, "Type (A-Z)"),
    SortOption.TYPE_DESC: (SortKey.TYPE, True, "Type (Z-A)"),
}

DEFAULT_SORT_OPTION = SortOption.DATE_OLDEST


@dataclass(frozen=True, slots=True)
class ScanState:
    """Everything the coordinator publishes after a refresh or a change.

    Attributes:
        directory: The watched directory.
        items: Actionable items, sorted with sort_option.
        ignored_items: Ignored items, sorted with sort_option.
        ignored_paths: Current ignore set.
        selected_ids: IDs of selected actionable items.
        score: Cleanliness score over the actionable items.
        sort_option: Active sort option.
        min_age_days: Active age threshold.
        refreshed_at: Time of the snapshot, None before the first refresh.
        skipped: Paths skipped by the last snapshot.
    """

    directory: Path
    items: tuple[DesktopItem, ...]
    ignored_items: tuple[DesktopItem, ...]
    ignored_paths: frozenset[str]
    selected_ids: frozenset[uuid.UUID]
    score: CleanlinessScore
    sort_option: SortOption
    min_age_days: int
    refreshed_at: datetime | None = None
    skipped: tuple[str, ...] = ()

    @property
    def item_count(self) -> int:
        """Number of actionable items."""
        return len(self.items)

    @property
    def ignored_count(self) -> int:
        """Number of ignored items present on the desktop."""
        return len(self.ignored_items)

    @property
    def total_size(self) -> int:
        """Total size of the actionable items in bytes."""
        return sum(item.size_bytes for item in self.items)

    @property
    def selected_items(self) -> tuple[DesktopItem, ...]:
        """Selected actionable items, in display order."""
        return tuple(item for item in self.items if item.id in self.selected_ids)

    @property
    def selected_count(self) -> int:
        """Number of selected items."""
        return len(self.selected_ids)

    @property
    def selected_size(self) -> int:
        """Total size of the selected items in bytes."""
        return sum(item.size_bytes for item in self.selected_items)

    @property
    def is_all_selected(self) -> bool:
        """True when every actionable item is selected."""
        return bool(self.items) and len(self.selected_ids) == len(self.items)

    @property
    def oldest_age_description(self) -> str | None:
        """Age of the oldest actionable item, None when there are none."""
        if not self.items:
            return None
        max_days = max(item.age_days for item in self.items)
        if max_days == 0:
            return "Today"
        if max_days == 1:
            return "1 day"
        return f"{max_days} days"
