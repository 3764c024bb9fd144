"""Unit tests for the console color theme."""

from pathlib import Path

import pytest
from ostatus.core.theme import ThemeColors, get_theme, load_theme_colors
from pydantic import ValidationError
from rich.theme import Theme


class TestThemeColors:
    """Tests for ThemeColors model."""

    def test_default_values(self) -> None:
        """ThemeColors has defaults for the status colors."""
        colors = ThemeColors()
        assert colors.added == "#c1ff62"
        assert colors.removed == "#f53263"
        assert colors.role == "#69B9A1"

    @pytest.mark.parametrize("color", ["226666", "#ff", "#gggggg", "red"])
    def test_rejects_non_hex(self, color: str) -> None:
        """Colors must be #RGB or #RRGGBB codes."""
        with pytest.raises(ValidationError):
            ThemeColors(digest=color)

    def test_accepts_short_form(self) -> None:
        """#RGB codes are accepted."""
        assert ThemeColors(digest="#abc").digest == "#abc"

    def test_styles(self) -> None:
        """Role and error styles are bold, the others plain colors."""
        styles = ThemeColors().styles()
        assert styles["added"] == "#c1ff62"
        assert styles["role"] == "bold #69B9A1"
        assert styles["error"] == "bold #f53263"
        assert styles["bold_header"] == "bold #69B9A1"


class TestLoadThemeColors:
    """Tests for load_theme_colors function."""

    def test_bundled_theme(self) -> None:
        """The bundled theme carries the default colors."""
        assert load_theme_colors() == ThemeColors()

    def test_reads_colors_table(self, tmp_path: Path) -> None:
        """Colors missing from the file keep their defaults."""
        theme_file = tmp_path / "theme.toml"
        theme_file.write_text('[colors]\nrole = "#000000"\n')
        colors = load_theme_colors(theme_file)
        assert colors.role == "#000000"
        assert colors.digest == "#226666"

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing file gives the built-in colors."""
        assert load_theme_colors(tmp_path / "missing.toml") == ThemeColors()

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Malformed TOML gives the built-in colors."""
        theme_file = tmp_path / "theme.toml"
        theme_file.write_text("not valid [ toml syntax")
        assert load_theme_colors(theme_file) == ThemeColors()

    def test_invalid_color(self, tmp_path: Path) -> None:
        """An invalid color gives the built-in colors."""
        theme_file = tmp_path / "theme.toml"
        theme_file.write_text('[colors]\nrole = "red"\n')
        assert load_theme_colors(theme_file) == ThemeColors()

    def test_unknown_color(self, tmp_path: Path) -> None:
        """An unknown color name gives the built-in colors."""
        theme_file = tmp_path / "theme.toml"
        theme_file.write_text('[colors]\nsparkle = "#ffffff"\n')
        assert load_theme_colors(theme_file) == ThemeColors()


class TestGetTheme:
    """Tests for get_theme function."""

    def test_defines_cli_styles(self) -> None:
        """The rich theme defines the styles used by the tables."""
        theme = get_theme()
        assert isinstance(theme, Theme)
        for name in ("added", "removed", "role", "digest", "bold_header", "muted"):
            assert name in theme.styles

    def test_cached(self) -> None:
        """The theme is loaded once."""
        assert get_theme() is get_theme()
