"""Shared types and utilities for CLI commands.

This module provides common enums and helper functions used across
multiple CLI command modules to avoid code duplication.
"""

from enum import Enum
from pathlib import Path

import typer

from deskctl.core.config import ConfigError, DeskConfig, load_config_or_default
from deskctl.desktop.coordinator import ScanCoordinator
from deskctl.desktop.errors import DirectoryUnavailableError
from deskctl.desktop.ignore import IgnoreStore
from deskctl.desktop.models import ScanState, SortOption
from deskctl.desktop.notifier import ConsoleNotifier, Notifier
from deskctl.desktop.scanner import DirectorySnapshotReader
from deskctl.utils.formatting import print_error


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


def load_settings() -> DeskConfig:
    """Load the settings file, exiting with an error message if it is invalid."""
    try:
        return load_config_or_default()
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def build_coordinator(
    config: DeskConfig,
    *,
    directory: Path | None = None,
    min_age_days: int | None = None,
    sort_option: SortOption | None = None,
    notifier: Notifier | None = None,
) -> ScanCoordinator:
    """Create a coordinator from settings and command-line overrides.

    Args:
        config: Loaded settings.
        directory: Watched directory override.
        min_age_days: Age threshold override (clamped).
        sort_option: Sort override.
        notifier: Alert receiver. Defaults to the console.

    Returns:
        A coordinator that has not scanned yet.
    """
    watched = (directory or config.effective_desktop_dir).expanduser().absolute()
    return ScanCoordinator(
        DirectorySnapshotReader(watched),
        IgnoreStore(),
        min_age_days=min_age_days if min_age_days is not None else config.min_age_days,
        old_file_offset_days=config.old_file_offset_days,
        sort_option=sort_option or config.sort,
        notifier=notifier if notifier is not None else ConsoleNotifier(),
        notify_threshold=config.notify_threshold,
    )


def refresh_or_exit(coordinator: ScanCoordinator) -> ScanState:
    """Refresh the coordinator, exiting with code 1 if the directory is unavailable."""
    try:
        return coordinator.refresh()
    except DirectoryUnavailableError as e:
        print_error(str(e))
        coordinator.close()
        raise typer.Exit(code=1) from e


def resolve_item_path(value: str | Path, directory: Path) -> Path:
    """Turn a user-supplied path into the absolute path the scanner reports.

    Relative paths are taken relative to the watched directory, so a bare
    file name refers to a file on the desktop.
    """
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = directory / path
    return path.absolute()
