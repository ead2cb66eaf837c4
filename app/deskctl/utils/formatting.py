"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from deskctl.core.theme import get_theme

if TYPE_CHECKING:
    from deskctl.desktop.models import CleanlinessScore, DesktopItem


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances (theme loaded once at import)
console = Console(theme=get_theme(), color_system=_detect_color_system())
err_console = Console(theme=get_theme(), stderr=True, color_system=_detect_color_system())


def format_size(size_bytes: int | None) -> str:
    """Format byte count as human-readable string."""
    if size_bytes is None or size_bytes == 0:
        return "0 B"
    size = float(size_bytes)
    for unit in ("B", "KB", "MB", "GB"):
        if abs(size) < 1024:
            return f"{size:.1f} {unit}" if unit != "B" else f"{int(size)} B"
        size /= 1024
    return f"{size:.1f} TB"


def format_age(age_days: int) -> str:
    """Format an age in days for display."""
    if age_days == 0:
        return "today"
    if age_days == 1:
        return "1 day"
    return f"{age_days} days"


def level_style(score: CleanlinessScore) -> str:
    """Theme style name for a score's level."""
    return f"level_{score.level.value}"


def create_items_table(title: str = "Desktop Items") -> Table:
    """Create a pre-configured table for displaying desktop items.

    Args:
        title: Table title.

    Returns:
        Rich Table configured for item display.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
        row_styles=["", "on grey7"],  # Zebra striping for readability
    )
    table.add_column("Name", no_wrap=True)
    table.add_column("Type", style="muted", width=6)
    table.add_column("Age", justify="right")
    table.add_column("Size", style="info", justify="right")
    table.add_column("Modified", style="muted")
    return table


def format_item_row(
    item: DesktopItem,
    old_age_threshold: int | None = None,
    ignored: bool = False,
) -> tuple[str, str, str, str, str]:
    """Format an item as a table row with proper styling.

    Old items are highlighted; ignored items are dimmed.

    Args:
        item: The desktop item to format.
        old_age_threshold: Age from which the item is highlighted as old.
        ignored: Whether the item is on the ignore list.

    Returns:
        Tuple of (name, type, age, size, modified) with Rich markup.
    """
    if ignored:
        name = f"[item_ignored]{item.name}[/]"
    else:
        name = f"[item.name]{item.name}[/]"

    age = format_age(item.age_days)
    if old_age_threshold is not None and item.age_days >= old_age_threshold and not ignored:
        age = f"[item_old]{age}[/]"

    modified = item.last_modified.astimezone().strftime("%Y-%m-%d %H:%M")
    return (name, item.display_type, age, format_size(item.size_bytes), modified)


def format_score_line(score: CleanlinessScore) -> str:
    """One-line summary of a cleanliness score with Rich markup."""
    style = level_style(score)
    return (
        f"[{style}]{score.percentage} {score.label}[/] "
        f"[muted]({score.file_count} files, {score.old_file_count} old, "
        f"avg {score.formatted_average_age} days)[/]"
    )


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{escape(message)}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {escape(message)}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {escape(message)}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{escape(message)}[/]")
