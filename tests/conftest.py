"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import logging
import os
from collections.abc import Callable, Iterator
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest
from deskctl.desktop.models import DesktopItem

FIXED_NOW = datetime(2026, 3, 15, 12, 0, tzinfo=UTC)


@pytest.fixture(autouse=True)
def isolated_xdg(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point every XDG location at a hidden temp directory.

    Keeps tests away from the real config, ignore list and trash.
    """
    root = tmp_path / ".xdg"
    for env_var, subdir in (
        ("XDG_CONFIG_HOME", "config"),
        ("XDG_STATE_HOME", "state"),
        ("XDG_DATA_HOME", "data"),
    ):
        (root / subdir).mkdir(parents=True)
        monkeypatch.setenv(env_var, str(root / subdir))
    monkeypatch.delenv("XDG_DESKTOP_DIR", raising=False)
    monkeypatch.setenv("COLUMNS", "200")
    return root


@pytest.fixture(autouse=True)
def restore_root_logger() -> Iterator[None]:
    """Undo logging.basicConfig calls made by CLI invocations."""
    root = logging.getLogger()
    level, handlers = root.level, list(root.handlers)
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def fixed_now() -> datetime:
    """A fixed point in time used as "now"."""
    return FIXED_NOW


@pytest.fixture
def clock(fixed_now: datetime) -> Callable[[], datetime]:
    """Clock that always returns fixed_now."""
    return lambda: fixed_now


@pytest.fixture
def desktop(tmp_path: Path) -> Path:
    """An empty watched directory."""
    path = tmp_path / "Desktop"
    path.mkdir()
    return path


def _write_file(
    directory: Path,
    name: str,
    age_days: int,
    now: datetime | None = None,
    content: str = "x",
) -> Path:
    """Create a file whose mtime lies age_days (plus one hour) before now."""
    now = now or datetime.now(UTC)
    path = directory / name
    path.write_text(content)
    mtime = (now - timedelta(days=age_days, hours=1)).timestamp()
    os.utime(path, (mtime, mtime))
    return path


@pytest.fixture
def make_file(fixed_now: datetime) -> Callable[..., Path]:
    """Factory creating files aged relative to fixed_now."""

    def _make(directory: Path, name: str, age_days: int, content: str = "x") -> Path:
        return _write_file(directory, name, age_days, now=fixed_now, content=content)

    return _make


@pytest.fixture
def make_recent_file() -> Callable[..., Path]:
    """Factory creating files aged relative to the real current time."""

    def _make(directory: Path, name: str, age_days: int, content: str = "x") -> Path:
        return _write_file(directory, name, age_days, content=content)

    return _make


@pytest.fixture
def make_item(fixed_now: datetime) -> Callable[..., DesktopItem]:
    """Factory creating DesktopItems without touching disk."""

    def _make(path: str | Path, age_days: int = 10, size_bytes: int = 100) -> DesktopItem:
        return DesktopItem(
            path=Path(path),
            last_modified=fixed_now - timedelta(days=age_days),
            size_bytes=size_bytes,
            age_days=age_days,
        )

    return _make
