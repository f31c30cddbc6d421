"""Utility helpers shared by the model, engines and renderers."""

from .color_utils import (
    DEFAULT_COLOR,
    NAMED_COLORS,
    hsl_to_rgb,
    is_color_key,
    rgb_to_hex,
    sanitize_colors,
    to_hex,
)
from .rich_logger import setup_logging

__all__ = [
    "DEFAULT_COLOR",
    "NAMED_COLORS",
    "hsl_to_rgb",
    "is_color_key",
    "rgb_to_hex",
    "sanitize_colors",
    "to_hex",
    "setup_logging",
]
