"""Owner of the desktop engine's mutable state.

The ScanCoordinator runs the scan -> classify -> score -> sort cycle,
keeps the current item lists, selection and settings, and publishes an
immutable ScanState to subscribers whenever any of them change. Bulk
file operations go through the coordinator so that every mutation is
followed by a fresh scan.
"""

import logging
import threading
from collections.abc import Callable, Iterable
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import replace
from datetime import date
from pathlib import Path
from types import TracebackType
from uuid import UUID

from deskctl.desktop.classifier import DEFAULT_MIN_AGE_DAYS, clamp_min_age, classify
from deskctl.desktop.errors import (
    DirectoryUnavailableError,
    FolderCreationError,
    RescanFailedError,
)
from deskctl.desktop.ignore import IgnoreStore
from deskctl.desktop.models import (
    DEFAULT_SORT_OPTION,
    DesktopItem,
    ScanState,
    SortOption,
)
from deskctl.desktop.notifier import Notifier, NullNotifier
from deskctl.desktop.operator import BulkActionResult, BulkFileOperator
from deskctl.desktop.scanner import Clock, SnapshotSource, utc_now
from deskctl.desktop.scoring import DEFAULT_OLD_FILE_OFFSET_DAYS, build_score, score_items
from deskctl.desktop.sorting import sort_items

logger = logging.getLogger(__name__)

# Actionable item count above which the notifier is called
DEFAULT_NOTIFY_THRESHOLD = 15

Subscriber = Callable[[ScanState], None]


class ScanCoordinator:
    """Serializes all access to the desktop state.

    Scans run on a single background worker so two scans never overlap.
    A refresh requested while another one is still waiting to start is
    merged into the waiting one. State reads and writes go through one
    re-entrant lock, and subscribers are called under that lock in
    publication order; they must not wait on another refresh.

    Args:
        source: Snapshot source for the watched directory.
        ignore_store: Ignore list persistence, loaded once here.
        min_age_days: Minimum age for actionable items (clamped).
        old_file_offset_days: Days past min_age_days from which an item
            counts as old for scoring.
        sort_option: Initial sort option.
        operator: Bulk file operator. Defaults to the platform trash.
        notifier: Receiver of "too many files" alerts.
        notify_threshold: Actionable count above which to alert.
        clock: Callable returning the current aware datetime.

    Example:
        >>> with ScanCoordinator(DirectorySnapshotReader(desktop), IgnoreStore()) as c:
        ...     state = c.refresh()
        ...     c.select_all()
        ...     result = c.move_selected_to_trash()
    """

    def __init__(
        self,
        source: SnapshotSource,
        ignore_store: IgnoreStore,
        *,
        min_age_days: int = DEFAULT_MIN_AGE_DAYS,
        old_file_offset_days: int = DEFAULT_OLD_FILE_OFFSET_DAYS,
        sort_option: SortOption = DEFAULT_SORT_OPTION,
        operator: BulkFileOperator | None = None,
        notifier: Notifier | None = None,
        notify_threshold: int = DEFAULT_NOTIFY_THRESHOLD,
        clock: Clock | None = None,
    ) -> None:
        self._source = source
        self._ignore_store = ignore_store
        self._operator = operator if operator is not None else BulkFileOperator()
        self._notifier = notifier if notifier is not None else NullNotifier()
        self._notify_threshold = notify_threshold
        self._old_file_offset_days = max(0, old_file_offset_days)
        self._clock = clock or utc_now

        self._lock = threading.RLock()
        self._action_lock = threading.Lock()
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="deskctl-scan")
        self._queued: Future[ScanState] | None = None
        self._subscribers: list[Subscriber] = []
        self._last_notified: date | None = None
        self._closed = False

        self._min_age_days = clamp_min_age(min_age_days)
        self._sort_option = sort_option
        self._ignored_paths = frozenset(ignore_store.load())
        self._state = ScanState(
            directory=source.directory,
            items=(),
            ignored_items=(),
            ignored_paths=self._ignored_paths,
            selected_ids=frozenset(),
            score=build_score(0, 0, 0.0),
            sort_option=self._sort_option,
            min_age_days=self._min_age_days,
        )

    def __enter__(self) -> "ScanCoordinator":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    # =========================================================================
    # State access
    # =========================================================================

    @property
    def state(self) -> ScanState:
        """The most recently published state."""
        with self._lock:
            return self._state

    @property
    def directory(self) -> Path:
        """The watched directory."""
        return self._source.directory

    @property
    def min_age_days(self) -> int:
        with self._lock:
            return self._min_age_days

    @property
    def sort_option(self) -> SortOption:
        with self._lock:
            return self._sort_option

    @property
    def old_file_offset_days(self) -> int:
        return self._old_file_offset_days

    @property
    def old_age_threshold(self) -> int:
        """Age in days from which an actionable item counts as old."""
        with self._lock:
            return self._min_age_days + self._old_file_offset_days

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a listener for published states.

        Args:
            callback: Called with every newly published ScanState.

        Returns:
            Function that removes the listener again.
        """
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    # =========================================================================
    # Refresh
    # =========================================================================

    def refresh_async(self) -> "Future[ScanState]":
        """Schedule a refresh on the scan worker.

        Returns:
            Future resolving to the published state, or raising
            DirectoryUnavailableError if the directory could not be read.

        Raises:
            RuntimeError: If the coordinator has been closed.
        """
        with self._lock:
            if self._closed:
                msg = "Coordinator is closed"
                raise RuntimeError(msg)
            if self._queued is not None:
                logger.debug("Refresh already queued, coalescing request")
                return self._queued
            future = self._executor.submit(self._run_refresh)
            self._queued = future
            return future

    def refresh(self) -> ScanState:
        """Rescan the directory and wait for the result.

        On failure the item lists and score are left as they were.

        Returns:
            The newly published state.

        Raises:
            DirectoryUnavailableError: If the directory cannot be read.
        """
        return self.refresh_async().result()

    def _run_refresh(self) -> ScanState:
        with self._lock:
            # Later requests must queue a new scan from here on
            self._queued = None
            # Stale IDs never survive into a new snapshot
            if self._state.selected_ids:
                self._publish(replace(self._state, selected_ids=frozenset()))
            min_age = self._min_age_days
            ignored_paths = self._ignored_paths

        try:
            snapshot = self._source.read()
        except DirectoryUnavailableError as e:
            logger.error("Refresh failed: %s", e)
            raise

        classification = classify(snapshot.items, min_age, ignored_paths)
        score = score_items(classification.actionable, min_age + self._old_file_offset_days)

        with self._lock:
            state = ScanState(
                directory=snapshot.directory,
                items=tuple(sort_items(classification.actionable, self._sort_option)),
                ignored_items=tuple(sort_items(classification.ignored, self._sort_option)),
                ignored_paths=self._ignored_paths,
                selected_ids=frozenset(),
                score=score,
                sort_option=self._sort_option,
                min_age_days=min_age,
                refreshed_at=snapshot.taken_at,
                skipped=snapshot.skipped,
            )
            self._publish(state)
            self._maybe_notify(state)

        logger.debug(
            "Refreshed %s: %d actionable, %d ignored, score %d",
            snapshot.directory,
            state.item_count,
            state.ignored_count,
            score.score,
        )
        return state

    def _publish(self, state: ScanState) -> None:
        """Replace the current state and notify subscribers. Caller holds the lock."""
        self._state = state
        for callback in list(self._subscribers):
            try:
                callback(state)
            except Exception:
                logger.exception("State subscriber %r failed", callback)

    def _maybe_notify(self, state: ScanState) -> None:
        count = state.item_count
        if count <= self._notify_threshold:
            return
        today = self._clock().astimezone().date()
        if self._last_notified == today:
            return
        self._last_notified = today
        try:
            self._notifier.notify_too_many_files(count, self._notify_threshold)
        except Exception:
            logger.exception("Notifier failed")

    # =========================================================================
    # Settings
    # =========================================================================

    def set_min_age_days(self, value: int) -> int:
        """Change the age threshold, clamping it into the allowed range.

        Triggers a refresh when the clamped value differs.

        Returns:
            The clamped value now in effect.
        """
        clamped = clamp_min_age(value)
        with self._lock:
            if clamped == self._min_age_days:
                return clamped
            self._min_age_days = clamped
        self.refresh()
        return clamped

    def set_sort_option(self, option: SortOption) -> None:
        """Change the active sort and reorder both lists without rescanning."""
        with self._lock:
            self._sort_option = option
            state = self._state
            self._publish(
                replace(
                    state,
                    items=tuple(sort_items(state.items, option)),
                    ignored_items=tuple(sort_items(state.ignored_items, option)),
                    sort_option=option,
                )
            )

    # =========================================================================
    # Selection
    # =========================================================================

    def _set_selection(self, ids: Iterable[UUID]) -> None:
        with self._lock:
            live = {item.id for item in self._state.items}
            selected = frozenset(i for i in ids if i in live)
            if selected != self._state.selected_ids:
                self._publish(replace(self._state, selected_ids=selected))

    def toggle_selection(self, item_id: UUID) -> None:
        """Select the item if unselected, unselect it otherwise."""
        with self._lock:
            current = set(self._state.selected_ids)
            current.symmetric_difference_update({item_id})
            self._set_selection(current)

    def select(self, ids: Iterable[UUID]) -> None:
        """Replace the selection. IDs outside the actionable list are dropped."""
        self._set_selection(ids)

    def select_paths(self, paths: Iterable[str | Path]) -> int:
        """Select the actionable items with the given paths.

        Returns:
            Number of items selected.
        """
        wanted = {str(p) for p in paths}
        with self._lock:
            ids = [item.id for item in self._state.items if str(item.path) in wanted]
            self._set_selection(ids)
            return len(self._state.selected_ids)

    def select_all(self) -> None:
        with self._lock:
            self._set_selection(item.id for item in self._state.items)

    def deselect_all(self) -> None:
        self._set_selection(())

    # =========================================================================
    # Ignore list
    # =========================================================================

    def is_ignored(self, path: str | Path) -> bool:
        with self._lock:
            return str(path) in self._ignored_paths

    def toggle_ignored(self, path: str | Path) -> bool:
        """Flip the ignore status of a path, persist it and refresh.

        Returns:
            True if the path is now ignored.

        Raises:
            IgnoreStoreError: If the ignore list cannot be saved.
            DirectoryUnavailableError: If the follow-up refresh fails.
        """
        return self.set_ignored(path, not self.is_ignored(path))

    def set_ignored(self, path: str | Path, ignored: bool) -> bool:
        """Set the ignore status of a path, persist it and refresh.

        Returns:
            The ignore status now in effect.

        Raises:
            IgnoreStoreError: If the ignore list cannot be saved.
            DirectoryUnavailableError: If the follow-up refresh fails.
        """
        key = str(path)
        with self._lock:
            paths = set(self._ignored_paths)
            if (key in paths) == ignored:
                return ignored
            if ignored:
                paths.add(key)
            else:
                paths.discard(key)
            self._ignore_store.save(paths)
            self._ignored_paths = frozenset(paths)

        self.refresh()
        return ignored

    # =========================================================================
    # Bulk actions
    # =========================================================================
    # A failed rescan after a bulk action raises RescanFailedError, which
    # carries the processed count of the action that already ran.

    def _after_mutation(self, result: BulkActionResult) -> BulkActionResult:
        if not result.success:
            logger.warning(
                "Bulk action stopped after %d item(s): %s", result.processed, result.error
            )
        try:
            self.refresh()
        except DirectoryUnavailableError as e:
            raise RescanFailedError(e, result.processed, result.error) from e
        return result

    def _live_selection(self) -> tuple[DesktopItem, ...]:
        with self._lock:
            return self._state.selected_items

    def move_selected_to_trash(self) -> BulkActionResult:
        """Trash the selected items, then refresh."""
        with self._action_lock:
            result = self._operator.move_to_trash(self._live_selection())
            return self._after_mutation(result)

    def move_all_to_trash(self) -> BulkActionResult:
        """Trash every actionable item, then refresh."""
        with self._action_lock:
            items = self.state.items
            if not items:
                return BulkActionResult(processed=0)
            result = self._operator.move_to_trash(items)
            return self._after_mutation(result)

    def move_selected_to_folder(self, destination_dir: Path) -> BulkActionResult:
        """Move the selected items into destination_dir, then refresh."""
        with self._action_lock:
            result = self._operator.move_to_folder(self._live_selection(), destination_dir)
            return self._after_mutation(result)

    def create_folder_and_move(
        self,
        folder_name: str,
        parent_dir: Path | None = None,
    ) -> BulkActionResult:
        """Create a folder (default: inside the watched directory) and move
        the selected items into it, then refresh.

        Skips the refresh when the folder could not be created.
        """
        parent = parent_dir if parent_dir is not None else self.directory
        with self._action_lock:
            result = self._operator.create_folder_and_move(
                folder_name, parent, self._live_selection()
            )
            if isinstance(result.error, FolderCreationError):
                logger.warning("Folder creation failed: %s", result.error)
                return result
            return self._after_mutation(result)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def close(self) -> None:
        """Stop the scan worker after pending scans finish."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
        self._executor.shutdown(wait=True)
