"""Desktop scanning and cleanup engine.

This package reads the watched directory, classifies its files by age
and ignore status, scores how cluttered it is, and runs bulk trash and
move operations on a selection.
"""

from deskctl.desktop.classifier import MIN_AGE_RANGE, Classification, clamp_min_age, classify
from deskctl.desktop.coordinator import ScanCoordinator
from deskctl.desktop.errors import (
    BulkOperationError,
    DeskctlError,
    DirectoryUnavailableError,
    FolderCreationError,
    IgnoreStoreError,
    MoveError,
    RescanFailedError,
    TrashError,
)
from deskctl.desktop.ignore import IgnoreStore
from deskctl.desktop.models import (
    CleanlinessLevel,
    CleanlinessScore,
    DesktopItem,
    ScanState,
    Snapshot,
    SortKey,
    SortOption,
)
from deskctl.desktop.operator import BulkActionResult, BulkFileOperator
from deskctl.desktop.scanner import DirectorySnapshotReader, FixtureSnapshotSource, SnapshotSource
from deskctl.desktop.scoring import compute_score, derive_level, score_items
from deskctl.desktop.sorting import sort_items

__all__ = [
    "MIN_AGE_RANGE",
    "BulkActionResult",
    "BulkFileOperator",
    "BulkOperationError",
    "Classification",
    "CleanlinessLevel",
    "CleanlinessScore",
    "DeskctlError",
    "DesktopItem",
    "DirectoryUnavailableError",
    "DirectorySnapshotReader",
    "FixtureSnapshotSource",
    "FolderCreationError",
    "IgnoreStore",
    "IgnoreStoreError",
    "MoveError",
    "RescanFailedError",
    "ScanCoordinator",
    "ScanState",
    "Snapshot",
    "SnapshotSource",
    "SortKey",
    "SortOption",
    "TrashError",
    "clamp_min_age",
    "classify",
    "compute_score",
    "derive_level",
    "score_items",
    "sort_items",
]
