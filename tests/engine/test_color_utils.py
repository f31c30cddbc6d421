"""
Tests for color normalization and the color sanitizer.
"""

import logging

import pytest

from pdf_instructions.utils.color_utils import (
    DEFAULT_COLOR,
    hsl_to_rgb,
    is_color_key,
    rgb_to_hex,
    sanitize_colors,
    to_hex,
)


class TestToHex:
    """Test cases for to_hex()."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("#abc", "#abc"),
            ("#1a365d", "#1a365d"),
            ("red", "#ff0000"),
            ("White", "#ffffff"),
            ("transparent", "#ffffff"),
            ("rgb(255, 0, 0)", "#ff0000"),
            ("rgba(0, 128, 255, 0.5)", "#0080ff"),
            ("hsl(0, 100%, 50%)", "#ff0000"),
            ("hsl(120, 100%, 25%)", "#008000"),
            ("hsla(240, 100%, 50%, 0.3)", "#0000ff"),
        ],
    )
    def test_supported_formats(self, value, expected):
        """Test every supported notation."""
        assert to_hex(value) == expected

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_empty_input(self, value):
        """Test that empty input gives the default color."""
        assert to_hex(value) == DEFAULT_COLOR

    def test_unsupported_color_space_warns(self, caplog):
        """Test that advanced color spaces fall back with a warning."""
        with caplog.at_level(logging.WARNING):
            assert to_hex("oklch(70% 0.1 200)") == DEFAULT_COLOR

        assert "Unsupported color format" in caplog.text

    def test_garbage_falls_back(self, caplog):
        """Test unparseable input."""
        with caplog.at_level(logging.WARNING):
            assert to_hex("not-a-color") == DEFAULT_COLOR

        assert "Could not parse color" in caplog.text


class TestConversions:
    """Test cases for the channel helpers."""

    def test_rgb_to_hex_clamps(self):
        """Test that channels are clamped to 0-255."""
        assert rgb_to_hex(300, -5, 16) == "#ff0010"

    def test_hsl_to_rgb_gray(self):
        """Test zero saturation."""
        assert hsl_to_rgb(200, 0, 0.5) == (128, 128, 128)


class TestSanitizeColors:
    """Test cases for sanitize_colors()."""

    def test_color_keys(self):
        """Test detection of color-bearing keys."""
        assert is_color_key("backgroundColor")
        assert is_color_key("border")
        assert is_color_key("colors")
        assert not is_color_key("align")

    def test_rewrites_nested_color_values(self):
        """Test a deep tree with color and non-color strings."""
        value = {
            "theme": {"primaryColor": "rgb(0, 0, 255)", "fontFamily": "Helvetica"},
            "content": [
                {"type": "heading", "content": "red", "color": "red", "align": "center"},
                {"type": "barChart", "data": [], "colors": ["hsl(0, 100%, 50%)", "#00ff00"]},
                {"type": "section", "children": [], "border": {"color": "blue", "style": "dashed"}},
            ],
        }

        result = sanitize_colors(value)

        assert result["theme"] == {"primaryColor": "#0000ff", "fontFamily": "Helvetica"}
        assert result["content"][0] == {"type": "heading", "content": "red", "color": "#ff0000", "align": "center"}
        assert result["content"][1]["colors"] == ["#ff0000", "#00ff00"]
        assert result["content"][2]["border"] == {"color": "#0000ff", "style": "dashed"}

    def test_transparent_background_dropped(self):
        """Test that transparent colors are removed instead of painted white."""
        result = sanitize_colors({"type": "section", "backgroundColor": "transparent", "children": []})

        assert "backgroundColor" not in result

    def test_input_not_mutated(self):
        """Test that the input tree is left untouched."""
        value = {"color": "red"}

        sanitize_colors(value)

        assert value == {"color": "red"}
