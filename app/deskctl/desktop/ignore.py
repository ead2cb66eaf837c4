"""Persistence of the ignore list.

This module provides the IgnoreStore class for loading and saving the
set of paths the user never wants suggested for cleanup.
"""

import json
import logging
import os
from pathlib import Path
from tempfile import NamedTemporaryFile

from deskctl.core.paths import get_ignore_list_path
from deskctl.desktop.errors import IgnoreStoreError

logger = logging.getLogger(__name__)


class IgnoreStore:
    """Manages the ignore list in a JSON file.

    Storage location: ~/.local/state/deskctl/ignored.json

    The file holds a flat JSON array of absolute path strings. Order is
    irrelevant and duplicates are dropped on load.

    Args:
        path: Optional override for the ignore list file.
    """

    def __init__(self, path: Path | None = None) -> None:
        self._path = path if path is not None else get_ignore_list_path()

    @property
    def path(self) -> Path:
        """Path to the ignore list file."""
        return self._path

    def load(self) -> set[str]:
        """Read the ignore set.

        Returns:
            Set of ignored path strings. Empty if the file is missing or
            cannot be parsed.
        """
        if not self._path.exists():
            return set()

        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable ignore list %s: %s", self._path, e)
            return set()

        if not isinstance(data, list):
            logger.warning("Ignore list %s is not a JSON array, ignoring it", self._path)
            return set()

        paths = {entry for entry in data if isinstance(entry, str) and entry}
        if len(paths) != len(data):
            logger.debug("Dropped %d invalid or duplicate entries", len(data) - len(paths))
        return paths

    def save(self, paths: set[str] | frozenset[str]) -> None:
        """Write the ignore set atomically.

        Args:
            paths: Path strings to persist.

        Raises:
            IgnoreStoreError: If the file cannot be written.
        """
        payload = json.dumps(sorted(paths), indent=2)

        tmp_path: Path | None = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                dir=self._path.parent,
                delete=False,
                suffix=".tmp",
            ) as f:
                tmp_path = Path(f.name)
                f.write(payload + "\n")
            os.replace(str(tmp_path), str(self._path))
        except OSError as e:
            if tmp_path is not None and tmp_path.exists():
                tmp_path.unlink()
            raise IgnoreStoreError(f"Failed to write ignore list {self._path}: {e}") from e
