"""Exception hierarchy for the desktop engine."""

from pathlib import Path


class DeskctlError(Exception):
    """Base exception for desktop engine errors."""


class DirectoryUnavailableError(DeskctlError):
    """Raised when the watched directory cannot be listed."""

    def __init__(self, directory: Path, reason: str) -> None:
        self.directory = directory
        self.reason = reason
        super().__init__(f"Cannot read directory {directory}: {reason}")


class BulkOperationError(DeskctlError):
    """Base exception for failures inside a bulk file operation.

    Attributes:
        path: The item path that could not be processed.
    """

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        super().__init__(message)


class TrashError(BulkOperationError):
    """Raised when an item cannot be moved to the trash."""


class MoveError(BulkOperationError):
    """Raised when an item cannot be moved to a folder."""


class FolderCreationError(BulkOperationError):
    """Raised when the destination folder cannot be created."""


class IgnoreStoreError(DeskctlError):
    """Raised when the ignore list cannot be persisted."""


class RescanFailedError(DirectoryUnavailableError):
    """Raised when a bulk action ran but the rescan afterwards failed.

    Attributes:
        processed: Number of items the action handled before the rescan.
        action_error: The error that stopped the action early, if any.
    """

    def __init__(
        self,
        cause: DirectoryUnavailableError,
        processed: int,
        action_error: BulkOperationError | None = None,
    ) -> None:
        super().__init__(cause.directory, cause.reason)
        self.processed = processed
        self.action_error = action_error
