"""Console color theme.

The palette ships in ``deskctl/data/theme.toml``. A ``theme.toml`` next to
the user's ``config.toml`` may override any subset of its ``[colors]`` keys.
Rich style names are derived from the palette through ``STYLE_TEMPLATES``.
"""

import logging
import re
import tomllib
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from rich.theme import Theme

from deskctl.core.paths import get_config_dir

logger = logging.getLogger(__name__)

_HEX_COLOR = re.compile(r"#(?:[0-9a-fA-F]{3}){1,2}")

# Rich style name -> style definition, with palette keys in braces
STYLE_TEMPLATES: dict[str, str] = {
    "text": "{text}",
    "muted": "{muted}",
    "dim": "{muted}",
    "header": "{header}",
    "bold_header": "bold {header}",
    "border": "{border}",
    "success": "{success}",
    "warning": "{warning}",
    "error": "bold {error}",
    "info": "{info}",
    "level_good": "bold {level_good}",
    "level_medium": "bold {level_medium}",
    "level_bad": "bold {level_bad}",
    "item_old": "{item_old}",
    "item_ignored": "italic {item_ignored}",
    "item.name": "bold {text}",
    "item.size": "{info}",
    "item.age": "{muted}",
}


class ThemeColors(BaseModel):
    """Palette used by the console output.

    Every value must be a ``#RGB`` or ``#RRGGBB`` hex code.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    text: str = "#ffffff"
    muted: str = "#b2bec3"
    header: str = "#69B9A1"
    border: str = "#29526d"

    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"
    info: str = "#0ec1c8"

    level_good: str = "#03b971"
    level_medium: str = "#faf870"
    level_bad: str = "#f53263"

    item_old: str = "#d44ebc"
    item_ignored: str = "#226666"

    @field_validator("*", mode="before")
    @classmethod
    def check_hex(cls, v: object, info: Any) -> str:
        """Accept only hex color strings."""
        if not isinstance(v, str) or not _HEX_COLOR.fullmatch(v.strip()):
            msg = f"{info.field_name}: expected #RGB or #RRGGBB, got {v!r}"
            raise ValueError(msg)
        return v.strip()


def get_user_theme_path() -> Path:
    """Location of the optional user theme override."""
    return get_config_dir() / "theme.toml"


def get_bundled_theme_path() -> Path:
    """Location of the palette shipped with the package."""
    return Path(str(resources.files("deskctl.data").joinpath("theme.toml")))


def _read_palette(path: Path) -> dict[str, str]:
    """Read the ``[colors]`` table of a theme file.

    Missing, unreadable or malformed files yield an empty mapping; the
    problem is logged unless the file simply does not exist. Non-string
    values are dropped.
    """
    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return {}
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return {}

    table = data.get("colors", {})
    if not isinstance(table, dict):
        logger.warning("Ignoring theme file %s: 'colors' is not a table", path)
        return {}
    return {key: value for key, value in table.items() if isinstance(value, str)}


def load_theme() -> ThemeColors:
    """Load the palette, layering the user override on the bundled file.

    An override that fails validation is discarded as a whole so the
    bundled palette is used unchanged.
    """
    bundled = _read_palette(get_bundled_theme_path())
    if not bundled:
        logger.error("Bundled theme missing or empty, using built-in colors")

    user_path = get_user_theme_path()
    overrides = _read_palette(user_path)
    if not overrides:
        return ThemeColors(**bundled)

    logger.debug("Applying theme overrides from %s", user_path)
    try:
        return ThemeColors(**{**bundled, **overrides})
    except ValidationError as e:
        logger.warning("Invalid theme overrides in %s: %s", user_path, e)
        return ThemeColors(**bundled)


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Build a Rich theme from a palette.

    Args:
        colors: Palette to use; loaded from disk when omitted.

    Returns:
        Rich Theme with one style per entry of ``STYLE_TEMPLATES``.
    """
    palette = (colors or load_theme()).model_dump()
    return Theme({name: template.format(**palette) for name, template in STYLE_TEMPLATES.items()})


@lru_cache(maxsize=1)
def get_theme() -> Theme:
    """Rich theme for the shared consoles, built once per process."""
    return get_rich_theme()


def reload_theme() -> Theme:
    """Drop the cached theme and rebuild it from disk."""
    get_theme.cache_clear()
    return get_theme()
