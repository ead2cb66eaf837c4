"""Bulk file operations on desktop items.

Handles trashing, moving into a folder with name-collision resolution,
and creating a folder before moving. Items are processed one at a time
and the first failure stops the batch; the result reports how many
items were processed before it.
"""

import logging
import shutil
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from deskctl.desktop.errors import (
    BulkOperationError,
    FolderCreationError,
    MoveError,
    TrashError,
)
from deskctl.desktop.models import DesktopItem
from deskctl.desktop.naming import resolve_collision
from deskctl.desktop.trash import Trash, default_trash

logger = logging.getLogger(__name__)

__all__ = ["BulkActionResult", "BulkFileOperator", "resolve_collision"]


@dataclass(frozen=True, slots=True)
class BulkActionResult:
    """Outcome of a bulk file operation.

    Attributes:
        processed: Number of items handled before the batch stopped.
        error: First failure, None if every item was handled.
        destination: Target folder for move operations, None for trash.
    """

    processed: int
    error: BulkOperationError | None = None
    destination: Path | None = None

    @property
    def success(self) -> bool:
        """True when the whole batch completed."""
        return self.error is None


class BulkFileOperator:
    """Moves desktop items to the trash or into folders.

    Operations are sequential on purpose: collision resolution checks
    the destination namespace before every move.

    Args:
        trash: Trash implementation. Defaults to the platform trash.
    """

    def __init__(self, trash: Trash | None = None) -> None:
        self._trash = trash if trash is not None else default_trash()

    def move_to_trash(self, items: Sequence[DesktopItem]) -> BulkActionResult:
        """Move every item to the trash, stopping at the first failure.

        Args:
            items: Items to trash.

        Returns:
            BulkActionResult with the processed count and any TrashError.
        """
        processed = 0
        for item in items:
            try:
                self._trash.trash(item.path)
            except OSError as e:
                logger.error("Error moving %s to the trash: %s", item.name, e)
                return BulkActionResult(
                    processed=processed,
                    error=TrashError(item.path, f"Cannot move {item.name} to the trash: {e}"),
                )
            processed += 1

        logger.info("Moved %d item(s) to the trash", processed)
        return BulkActionResult(processed=processed)

    def move_to_folder(
        self,
        items: Sequence[DesktopItem],
        destination_dir: Path,
    ) -> BulkActionResult:
        """Move every item into destination_dir.

        An existing file with the same name is never overwritten: the
        moved file gets `` 1``, `` 2``, ... appended before its extension.

        Args:
            items: Items to move.
            destination_dir: Existing directory receiving the files.

        Returns:
            BulkActionResult with the processed count and any MoveError.
        """
        if not destination_dir.is_dir():
            error = MoveError(destination_dir, f"Destination is not a directory: {destination_dir}")
            return BulkActionResult(processed=0, error=error, destination=destination_dir)

        processed = 0
        for item in items:
            target = resolve_collision(destination_dir, item.name)
            try:
                if not item.path.exists():
                    msg = f"No such file: {item.path}"
                    raise FileNotFoundError(msg)
                shutil.move(str(item.path), str(target))
            except OSError as e:
                logger.error("Error while moving %s: %s", item.name, e)
                return BulkActionResult(
                    processed=processed,
                    error=MoveError(item.path, f"Cannot move {item.name}: {e}"),
                    destination=destination_dir,
                )
            if target.name != item.name:
                logger.info("Renamed %s to %s to avoid a name collision", item.name, target.name)
            processed += 1

        logger.info("Moved %d item(s) to %s", processed, destination_dir)
        return BulkActionResult(processed=processed, destination=destination_dir)

    def create_folder_and_move(
        self,
        folder_name: str,
        parent_dir: Path,
        items: Sequence[DesktopItem],
    ) -> BulkActionResult:
        """Create parent_dir/folder_name if needed, then move items into it.

        Args:
            folder_name: Name of the folder to create or reuse.
            parent_dir: Directory the folder lives in.
            items: Items to move.

        Returns:
            BulkActionResult whose destination is the folder. A
            FolderCreationError means no item was moved.
        """
        folder = parent_dir / folder_name

        name = folder_name.strip()
        if not name or name in (".", "..") or "/" in folder_name or "\\" in folder_name:
            error = FolderCreationError(folder, f"Invalid folder name: {folder_name!r}")
            return BulkActionResult(processed=0, error=error, destination=folder)

        if folder.exists() or folder.is_symlink():
            if not folder.is_dir():
                error = FolderCreationError(folder, f"Not a directory: {folder}")
                return BulkActionResult(processed=0, error=error, destination=folder)
        else:
            try:
                folder.mkdir()
            except OSError as e:
                logger.error("Cannot create folder %s: %s", folder, e)
                error = FolderCreationError(folder, f"Cannot create folder {folder}: {e}")
                return BulkActionResult(processed=0, error=error, destination=folder)
            logger.info("Created folder %s", folder)

        return self.move_to_folder(items, folder)
