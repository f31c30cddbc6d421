"""
Tests for theme resolution.
"""

import pytest

from pdf_instructions.engine.theme import (
    DEFAULT_CHART_COLORS,
    DEFAULT_THEME,
    heading_style,
    resolve_theme,
    series_color,
)
from pdf_instructions.models import Theme


class TestResolveTheme:
    """Test cases for resolve_theme()."""

    def test_defaults(self):
        """Test that a missing theme resolves to the defaults."""
        theme = resolve_theme(None)

        assert theme.primary_color == DEFAULT_THEME["primary_color"]
        assert theme.font_family == "Helvetica"

    def test_partial_override(self):
        """Test that only set fields override the defaults."""
        theme = resolve_theme(Theme(primary_color="#ff0000"))

        assert theme.primary_color == "#ff0000"
        assert theme.text_color == DEFAULT_THEME["text_color"]

    def test_resolved_theme_is_frozen(self):
        """Test immutability of the resolved theme."""
        theme = resolve_theme()

        with pytest.raises(AttributeError):
            theme.primary_color = "#000000"


class TestHeadingStyle:
    """Test cases for heading_style()."""

    @pytest.mark.parametrize("level, size, bold", [(1, 28, True), (2, 22, True), (3, 18, False), (6, 12, False)])
    def test_scale(self, level, size, bold):
        """Test the heading size scale."""
        style = heading_style(level, resolve_theme())

        assert style.font_size == size
        assert style.bold is bold

    def test_uses_theme_color(self):
        """Test heading color follows the theme."""
        assert heading_style(2, resolve_theme(Theme(primary_color="#123456"))).color == "#123456"


class TestSeriesColor:
    """Test cases for series_color()."""

    def test_explicit_color_wins(self):
        """Test that an item color overrides the palette."""
        assert series_color(0, "#abcdef") == "#abcdef"

    def test_palette_cycles(self):
        """Test cycling past the end of the palette."""
        count = len(DEFAULT_CHART_COLORS)

        assert series_color(count + 1) == DEFAULT_CHART_COLORS[1]
        assert series_color(5, palette=["#111111", "#222222"]) == "#222222"
