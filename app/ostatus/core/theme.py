"""Color theme of the ostatus console output.

The colors ship with the package in data/theme.toml. Each color backs a
rich style: drift fields use the added and removed styles, the detected
role and the manifest digests have styles of their own.
"""

import logging
import tomllib
from importlib import resources
from importlib.resources.abc import Traversable
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from rich.theme import Theme

logger = logging.getLogger(__name__)

HexColor = Annotated[str, Field(pattern=r"^#([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")]


class ThemeColors(BaseModel):
    """Colors of the console styles, as #RGB or #RRGGBB codes."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    text: HexColor = "#ffffff"
    muted: HexColor = "#b2bec3"
    header: HexColor = "#69B9A1"
    border: HexColor = "#29526d"

    success: HexColor = "#03b971"
    warning: HexColor = "#f5b332"
    error: HexColor = "#f53263"
    info: HexColor = "#0ec1c8"

    added: HexColor = "#c1ff62"
    removed: HexColor = "#f53263"
    role: HexColor = "#69B9A1"
    digest: HexColor = "#226666"

    def styles(self) -> dict[str, str]:
        """Rich style definitions keyed by style name."""
        styles = self.model_dump()
        styles["error"] = f"bold {self.error}"
        styles["role"] = f"bold {self.role}"
        styles["bold_header"] = f"bold {self.header}"
        return styles


def load_theme_colors(source: Traversable | None = None) -> ThemeColors:
    """Read the [colors] table of a theme file.

    An unreadable or invalid file leaves the console with the built-in
    colors of ThemeColors.

    Args:
        source: Theme file. None reads the bundled data/theme.toml.

    Returns:
        Validated ThemeColors.
    """
    if source is None:
        source = resources.files("ostatus.data").joinpath("theme.toml")

    try:
        data = tomllib.loads(source.read_text(encoding="utf-8"))
        return ThemeColors.model_validate(data.get("colors", {}))
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError, ValidationError) as e:
        logger.warning("Ignoring theme %s: %s", source, e)
        return ThemeColors()


_theme: Theme | None = None


def get_theme() -> Theme:
    """Rich theme shared by the ostatus consoles, loaded on first use."""
    global _theme
    if _theme is None:
        _theme = Theme(load_theme_colors().styles())
    return _theme
