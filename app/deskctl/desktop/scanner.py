"""Snapshot sources for the watched directory.

A snapshot source produces the list of desktop items at a point in
time. The real source reads the file system; the fixture source builds
items from fixed entries so the coordinator can be exercised without
touching disk.
"""

import logging
import stat
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from datetime import UTC, datetime, timedelta
from pathlib import Path

from deskctl.desktop.errors import DirectoryUnavailableError
from deskctl.desktop.models import DesktopItem, Snapshot

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

_ONE_DAY = timedelta(days=1)


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(UTC)


def age_in_days(last_modified: datetime, now: datetime) -> int:
    """Whole days elapsed between last_modified and now.

    Modification times in the future count as zero days old.
    """
    elapsed = now - last_modified
    if elapsed < timedelta(0):
        return 0
    return elapsed // _ONE_DAY


class SnapshotSource(ABC):
    """Abstract provider of directory snapshots.

    Example:
        >>> source = DirectorySnapshotReader(Path.home() / "Desktop")
        >>> for item in source.read().items:
        ...     print(item.name, item.age_days)
    """

    @property
    @abstractmethod
    def directory(self) -> Path:
        """Return the directory this source describes."""

    @abstractmethod
    def read(self) -> Snapshot:
        """Take a fresh snapshot.

        Returns:
            Snapshot with newly created items.

        Raises:
            DirectoryUnavailableError: If the directory cannot be listed.
        """


class DirectorySnapshotReader(SnapshotSource):
    """Reads regular files directly inside a directory.

    Hidden entries (names starting with a dot), subdirectories and
    symbolic links are left out. Metadata failures on a single entry
    are logged and the entry is skipped.

    Args:
        directory: Directory to read.
        clock: Callable returning the current aware datetime.
    """

    def __init__(self, directory: Path, clock: Clock | None = None) -> None:
        self._directory = directory
        self._clock = clock or utc_now

    @property
    def directory(self) -> Path:
        return self._directory

    def read(self) -> Snapshot:
        """Enumerate the directory and build items.

        Returns:
            Snapshot of the directory's regular files.

        Raises:
            DirectoryUnavailableError: If the directory is missing, is not a
                directory, or cannot be listed.
        """
        try:
            entries = list(self._directory.iterdir())
        except FileNotFoundError as e:
            raise DirectoryUnavailableError(self._directory, "directory does not exist") from e
        except NotADirectoryError as e:
            raise DirectoryUnavailableError(self._directory, "not a directory") from e
        except PermissionError as e:
            raise DirectoryUnavailableError(self._directory, "permission denied") from e
        except OSError as e:
            raise DirectoryUnavailableError(self._directory, str(e)) from e

        now = self._clock()
        items: list[DesktopItem] = []
        skipped: list[str] = []

        for entry in entries:
            if entry.name.startswith("."):
                continue

            try:
                st = entry.lstat()
            except OSError as e:
                logger.warning("Skipping unreadable entry %s: %s", entry, e)
                skipped.append(str(entry))
                continue

            if not stat.S_ISREG(st.st_mode):
                continue

            last_modified = datetime.fromtimestamp(st.st_mtime, tz=UTC)
            items.append(
                DesktopItem(
                    path=entry.absolute(),
                    last_modified=last_modified,
                    size_bytes=st.st_size,
                    age_days=age_in_days(last_modified, now),
                )
            )

        logger.debug(
            "Read %d items from %s (%d skipped)", len(items), self._directory, len(skipped)
        )
        return Snapshot(
            directory=self._directory,
            taken_at=now,
            items=tuple(items),
            skipped=tuple(skipped),
        )


class FixtureSnapshotSource(SnapshotSource):
    """Builds snapshots from fixed in-memory entries.

    Every read creates new items with fresh IDs, matching the behaviour
    of the real reader.

    Args:
        directory: Directory the entries pretend to live in.
        entries: Iterable of (name or path, last_modified, size_bytes).
            Relative names are placed inside directory.
        clock: Callable returning the current aware datetime.
    """

    def __init__(
        self,
        directory: Path,
        entries: Iterable[tuple[str | Path, datetime, int]] = (),
        clock: Clock | None = None,
    ) -> None:
        self._directory = directory
        self._entries = [(self._resolve(p), mtime, size) for p, mtime, size in entries]
        self._clock = clock or utc_now
        self.unavailable = False

    @property
    def directory(self) -> Path:
        return self._directory

    def set_entries(self, entries: Iterable[tuple[str | Path, datetime, int]]) -> None:
        """Replace the fixture contents."""
        self._entries = [(self._resolve(p), mtime, size) for p, mtime, size in entries]

    def read(self) -> Snapshot:
        if self.unavailable:
            raise DirectoryUnavailableError(self._directory, "fixture marked unavailable")

        now = self._clock()
        items = tuple(
            DesktopItem(
                path=path,
                last_modified=mtime,
                size_bytes=size,
                age_days=age_in_days(mtime, now),
            )
            for path, mtime, size in self._entries
        )
        return Snapshot(directory=self._directory, taken_at=now, items=items)

    def _resolve(self, path: str | Path) -> Path:
        candidate = Path(path)
        return candidate if candidate.is_absolute() else self._directory / candidate
