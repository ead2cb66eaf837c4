"""Collaborators told when the desktop holds too many files."""

import logging
import os
from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import date
from pathlib import Path
from tempfile import NamedTemporaryFile

from deskctl.core.paths import get_last_notified_path
from deskctl.utils.formatting import print_warning

logger = logging.getLogger(__name__)


class Notifier(ABC):
    """Receives "too many files" alerts from the coordinator.

    The coordinator calls at most once per calendar day; how the alert
    is shown is up to the implementation.
    """

    @abstractmethod
    def notify_too_many_files(self, count: int, threshold: int) -> None:
        """Report that count actionable files exceed threshold."""


class NullNotifier(Notifier):
    """Drops every alert."""

    def notify_too_many_files(self, count: int, threshold: int) -> None:
        logger.debug("Suppressed notification: %d files (threshold %d)", count, threshold)


class ConsoleNotifier(Notifier):
    """Prints alerts on the terminal, at most once per local calendar day.

    The date of the last alert is kept in a small state file so that
    separate runs on the same day stay quiet.

    Args:
        state_path: Optional override for the last-alert file.
        today: Returns the current local date.
    """

    def __init__(
        self,
        state_path: Path | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._state_path = state_path if state_path is not None else get_last_notified_path()
        self._today = today

    def _last_sent(self) -> date | None:
        try:
            return date.fromisoformat(self._state_path.read_text(encoding="utf-8").strip())
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable notification state %s: %s", self._state_path, e)
            return None

    def _record_sent(self, day: date) -> None:
        tmp_path: Path | None = None
        try:
            self._state_path.parent.mkdir(parents=True, exist_ok=True)
            with NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                dir=self._state_path.parent,
                delete=False,
                suffix=".tmp",
            ) as f:
                tmp_path = Path(f.name)
                f.write(day.isoformat() + "\n")
            os.replace(str(tmp_path), str(self._state_path))
        except OSError as e:
            if tmp_path is not None and tmp_path.exists():
                tmp_path.unlink()
            logger.warning("Could not save notification state %s: %s", self._state_path, e)

    def notify_too_many_files(self, count: int, threshold: int) -> None:
        if count <= threshold:
            return
        today = self._today()
        if self._last_sent() == today:
            logger.debug("Already warned about clutter on %s", today)
            return
        print_warning(
            f"Your desktop is getting cluttered: {count} files waiting for cleanup "
            f"(threshold {threshold})."
        )
        self._record_sent(today)
