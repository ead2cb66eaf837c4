"""deskctl settings.

This module provides the configuration model and I/O functions for the
desktop monitor: which directory to watch, how old a file must be to be
suggested for cleanup, how the list is sorted, and when to alert.

Configuration is stored in ~/.config/deskctl/config.toml
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from deskctl.core.paths import get_config_path, get_desktop_dir
from deskctl.desktop.classifier import DEFAULT_MIN_AGE_DAYS, clamp_min_age
from deskctl.desktop.coordinator import DEFAULT_NOTIFY_THRESHOLD
from deskctl.desktop.models import DEFAULT_SORT_OPTION, SortOption
from deskctl.desktop.scoring import DEFAULT_OLD_FILE_OFFSET_DAYS

logger = logging.getLogger(__name__)

DEFAULT_WATCH_INTERVAL_SECONDS = 300


class DeskConfig(BaseModel):
    """Settings for the desktop monitor.

    Attributes:
        desktop_dir: Directory to watch. None means the platform desktop.
        min_age_days: Minimum age for cleanup suggestions, clamped to 1-2000.
        old_file_offset_days: Extra days past min_age_days from which a
            file counts as old when scoring.
        notify_threshold: Alert when more actionable files than this exist.
        sort: Default sort option for listings.
        watch_interval_seconds: Delay between rescans in watch mode.
    """

    model_config = ConfigDict(extra="forbid")

    desktop_dir: Annotated[
        Path | None,
        Field(description="Watched directory (None = platform desktop)"),
    ] = None
    min_age_days: Annotated[
        int,
        Field(description="Minimum file age in days (clamped to 1-2000)"),
    ] = DEFAULT_MIN_AGE_DAYS
    old_file_offset_days: Annotated[
        int,
        Field(ge=0, le=3650, description="Days past min_age_days for an old file"),
    ] = DEFAULT_OLD_FILE_OFFSET_DAYS
    notify_threshold: Annotated[
        int,
        Field(ge=1, description="Actionable file count that triggers an alert"),
    ] = DEFAULT_NOTIFY_THRESHOLD
    sort: Annotated[
        SortOption,
        Field(description="Default sort option"),
    ] = DEFAULT_SORT_OPTION
    watch_interval_seconds: Annotated[
        int,
        Field(ge=5, le=86400, description="Seconds between rescans in watch mode"),
    ] = DEFAULT_WATCH_INTERVAL_SECONDS

    @field_validator("min_age_days", mode="after")
    @classmethod
    def clamp_age(cls, v: int) -> int:
        """Clamp the age threshold instead of rejecting it."""
        return clamp_min_age(v)

    @field_validator("sort", mode="before")
    @classmethod
    def parse_sort(cls, v: object) -> object:
        """Accept sort option values in any case."""
        if isinstance(v, str):
            return SortOption.parse(v)
        return v

    @field_validator("desktop_dir", mode="after")
    @classmethod
    def expand_desktop_dir(cls, v: Path | None) -> Path | None:
        """Expand ~ in the watched directory."""
        return v.expanduser() if v is not None else None

    @property
    def effective_desktop_dir(self) -> Path:
        """The configured directory, or the platform desktop."""
        return self.desktop_dir if self.desktop_dir is not None else get_desktop_dir()


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when the config file is not found."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def load_config(path: Path | None = None) -> DeskConfig:
    """Load configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default path.

    Returns:
        Validated DeskConfig object.

    Raises:
        ConfigNotFoundError: If the config file doesn't exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        raise ConfigNotFoundError(f"Config not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return DeskConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid config content: {e}") from e


def load_config_or_default(path: Path | None = None) -> DeskConfig:
    """Load configuration, falling back to defaults when no file exists.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    try:
        return load_config(path)
    except ConfigNotFoundError:
        logger.debug("No config file, using defaults")
        return DeskConfig()


def save_config(config: DeskConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The DeskConfig object to save.
        path: Path to save the config. If None, uses the default path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()

    data = _config_to_dict(config)

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def _config_to_dict(config: DeskConfig) -> dict[str, object]:
    """Convert DeskConfig to a dictionary for TOML serialization.

    desktop_dir is omitted when unset, since TOML has no null.
    """
    result: dict[str, object] = {
        "min_age_days": config.min_age_days,
        "old_file_offset_days": config.old_file_offset_days,
        "notify_threshold": config.notify_threshold,
        "sort": config.sort.value,
        "watch_interval_seconds": config.watch_interval_seconds,
    }
    if config.desktop_dir is not None:
        result["desktop_dir"] = str(config.desktop_dir)
    return result


def update_config(config: DeskConfig, key: str, value: str) -> DeskConfig:
    """Return a copy of config with one key set from a string value.

    Raises:
        ConfigError: If the key is unknown or the value is invalid.
    """
    if key not in DeskConfig.model_fields:
        choices = ", ".join(DeskConfig.model_fields)
        raise ConfigError(f"Unknown config key '{key}' (choose from: {choices})")

    data = config.model_dump()
    data[key] = None if key == "desktop_dir" and value == "" else value
    try:
        return DeskConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid value for {key}: {e}") from e
