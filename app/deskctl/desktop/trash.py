"""Platform trash implementations.

On freedesktop systems files go to the home trash described by the
freedesktop.org Trash specification: the file itself under ``files/``
and a ``.trashinfo`` record under ``info/`` holding the original path
and deletion date. On macOS files are moved into ``~/.Trash``.
"""

import logging
import os
import shutil
import sys
from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from urllib.parse import quote

from deskctl.core.paths import get_trash_dir
from deskctl.desktop.naming import candidate_names, resolve_collision

logger = logging.getLogger(__name__)


class Trash(ABC):
    """Abstract destination for trashed files."""

    @abstractmethod
    def trash(self, path: Path) -> Path:
        """Move a file into the trash.

        Args:
            path: File to trash.

        Returns:
            Location of the file inside the trash.

        Raises:
            OSError: If the file cannot be moved.
        """


class FreedesktopTrash(Trash):
    """Home trash following the freedesktop.org Trash specification.

    Args:
        trash_dir: Trash root. Defaults to $XDG_DATA_HOME/Trash.
        clock: Callable returning the local deletion time.
    """

    def __init__(
        self,
        trash_dir: Path | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._trash_dir = trash_dir if trash_dir is not None else get_trash_dir()
        self._clock = clock or datetime.now

    @property
    def files_dir(self) -> Path:
        """Directory holding trashed files."""
        return self._trash_dir / "files"

    @property
    def info_dir(self) -> Path:
        """Directory holding .trashinfo records."""
        return self._trash_dir / "info"

    def trash(self, path: Path) -> Path:
        if not path.exists() and not path.is_symlink():
            msg = f"No such file: {path}"
            raise FileNotFoundError(msg)

        self.files_dir.mkdir(parents=True, exist_ok=True, mode=0o700)
        self.info_dir.mkdir(parents=True, exist_ok=True, mode=0o700)

        original = path.absolute()
        info_path, target = self._reserve(original.name)
        info_path.write_text(self._trashinfo(original), encoding="utf-8")

        try:
            shutil.move(str(original), str(target))
        except OSError:
            info_path.unlink(missing_ok=True)
            raise

        logger.debug("Trashed %s -> %s", original, target)
        return target

    def _reserve(self, name: str) -> tuple[Path, Path]:
        """Claim a trash name by creating its info file exclusively."""
        for candidate in candidate_names(name):
            info_path = self.info_dir / f"{candidate}.trashinfo"
            try:
                fd = os.open(info_path, os.O_CREAT | os.O_EXCL | os.O_WRONLY, 0o600)
            except FileExistsError:
                continue
            os.close(fd)

            target = self.files_dir / candidate
            if target.exists() or target.is_symlink():
                info_path.unlink(missing_ok=True)
                continue
            return info_path, target
        raise AssertionError("unreachable")  # pragma: no cover

    def _trashinfo(self, original: Path) -> str:
        deleted_at = self._clock().strftime("%Y-%m-%dT%H:%M:%S")
        return f"[Trash Info]\nPath={quote(str(original))}\nDeletionDate={deleted_at}\n"


class DirectoryTrash(Trash):
    """Trash that is a plain directory, such as ``~/.Trash`` on macOS.

    Args:
        trash_dir: Directory receiving trashed files.
    """

    def __init__(self, trash_dir: Path) -> None:
        self._trash_dir = trash_dir

    def trash(self, path: Path) -> Path:
        if not path.exists() and not path.is_symlink():
            msg = f"No such file: {path}"
            raise FileNotFoundError(msg)
        self._trash_dir.mkdir(parents=True, exist_ok=True)
        target = resolve_collision(self._trash_dir, path.name)
        shutil.move(str(path), str(target))
        return target


def default_trash() -> Trash:
    """Return the trash implementation for the running platform."""
    if sys.platform == "darwin":
        return DirectoryTrash(Path.home() / ".Trash")
    return FreedesktopTrash()
