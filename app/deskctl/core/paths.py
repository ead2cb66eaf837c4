"""Filesystem locations used by deskctl.

Settings and state follow the XDG Base Directory layout:

- settings: ``$XDG_CONFIG_HOME/deskctl`` (``~/.config/deskctl``)
- ignore list: ``$XDG_STATE_HOME/deskctl`` (``~/.local/state/deskctl``)
- trash: ``$XDG_DATA_HOME/Trash`` (``~/.local/share/Trash``)

The watched directory defaults to ``$XDG_DESKTOP_DIR`` or ``~/Desktop``.
"""

import os
from pathlib import Path

APP_NAME = "deskctl"


def _xdg_base(env_var: str, *fallback: str) -> Path:
    """Base directory from an XDG variable; empty values count as unset."""
    value = os.environ.get(env_var)
    return Path(value) if value else Path.home().joinpath(*fallback)


def get_config_dir() -> Path:
    """Directory holding ``config.toml`` and the optional ``theme.toml``."""
    return _xdg_base("XDG_CONFIG_HOME", ".config") / APP_NAME


def get_state_dir() -> Path:
    """Directory for data that outlives a run but is not configuration."""
    return _xdg_base("XDG_STATE_HOME", ".local", "state") / APP_NAME


def get_config_path() -> Path:
    return get_config_dir() / "config.toml"


def get_ignore_list_path() -> Path:
    return get_state_dir() / "ignored.json"


def get_desktop_dir() -> Path:
    """Directory watched when neither settings nor ``--dir`` name one."""
    override = os.environ.get("XDG_DESKTOP_DIR")
    if override:
        return Path(override).expanduser()
    return Path.home() / "Desktop"


def get_trash_dir() -> Path:
    """The user's freedesktop.org home trash."""
    return _xdg_base("XDG_DATA_HOME", ".local", "share") / "Trash"


def get_last_notified_path() -> Path:
    return get_state_dir() / "last_notified"
