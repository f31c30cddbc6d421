"""Color utilities for the print back-end.

The print target only understands hex colors, so every CSS-like color
expression is folded to ``#rgb`` / ``#rrggbb`` before a tree reaches it.
"""

import logging
import re
from typing import Any, Optional

logger = logging.getLogger(__name__)

DEFAULT_COLOR = "#000000"

NAMED_COLORS = {
    "black": "#000000",
    "white": "#ffffff",
    "red": "#ff0000",
    "green": "#008000",
    "blue": "#0000ff",
    "yellow": "#ffff00",
    "cyan": "#00ffff",
    "magenta": "#ff00ff",
    # No alpha channel in the print target; paper white is the closest match.
    "transparent": "#ffffff",
}

COLOR_KEY_MARKERS = ("color", "background", "border")

_HEX_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
_RGB_RE = re.compile(
    r"^rgba?\(\s*(\d+(?:\.\d+)?)\s*,\s*(\d+(?:\.\d+)?)\s*,\s*(\d+(?:\.\d+)?)\s*(?:,\s*[\d.]+%?\s*)?\)$",
    re.IGNORECASE,
)
_HSL_RE = re.compile(
    r"^hsla?\(\s*(\d+(?:\.\d+)?)(?:deg)?\s*,\s*(\d+(?:\.\d+)?)%\s*,\s*(\d+(?:\.\d+)?)%\s*(?:,\s*[\d.]+%?\s*)?\)$",
    re.IGNORECASE,
)
_UNSUPPORTED_RE = re.compile(r"^(?:lab|oklab|oklch|lch|hwb|color)\(", re.IGNORECASE)


def _channel(value: float) -> int:
    return max(0, min(255, int(round(value))))


def rgb_to_hex(red: float, green: float, blue: float) -> str:
    """Convert RGB channels (0-255) to a ``#rrggbb`` string."""
    return "#" + "".join(f"{_channel(c):02x}" for c in (red, green, blue))


def hsl_to_rgb(hue: float, saturation: float, lightness: float) -> tuple:
    """Standard HSL to RGB conversion.

    Args:
        hue: Hue in degrees (wrapped into 0-360)
        saturation: Saturation in 0-1
        lightness: Lightness in 0-1

    Returns:
        Tuple of (r, g, b) integer channels in 0-255
    """
    h = (hue % 360) / 360
    s = max(0.0, min(1.0, saturation))
    l = max(0.0, min(1.0, lightness))

    c = (1 - abs(2 * l - 1)) * s
    x = c * (1 - abs(((h * 6) % 2) - 1))
    m = l - c / 2

    if h < 1 / 6:
        r, g, b = c, x, 0.0
    elif h < 2 / 6:
        r, g, b = x, c, 0.0
    elif h < 3 / 6:
        r, g, b = 0.0, c, x
    elif h < 4 / 6:
        r, g, b = 0.0, x, c
    elif h < 5 / 6:
        r, g, b = x, 0.0, c
    else:
        r, g, b = c, 0.0, x

    return (
        _channel((r + m) * 255),
        _channel((g + m) * 255),
        _channel((b + m) * 255),
    )


def to_hex(color: Optional[str]) -> str:
    """Normalize a CSS-like color expression to hex.

    Recognizes hex (passed through), a small named-color table,
    ``rgb()``/``rgba()`` and ``hsl()``/``hsla()``; alpha is dropped.
    Anything else falls back to ``#000000`` with a warning.

    Args:
        color: Color expression, may be ``None`` or empty

    Returns:
        A 3- or 6-digit hex color string
    """
    if not color or not isinstance(color, str):
        return DEFAULT_COLOR

    token = color.strip()
    if not token:
        return DEFAULT_COLOR

    if _HEX_RE.match(token):
        return token

    named = NAMED_COLORS.get(token.lower())
    if named:
        return named

    match = _RGB_RE.match(token)
    if match:
        return rgb_to_hex(*(float(part) for part in match.groups()))

    match = _HSL_RE.match(token)
    if match:
        hue, saturation, lightness = (float(part) for part in match.groups())
        return rgb_to_hex(*hsl_to_rgb(hue, saturation / 100, lightness / 100))

    if _UNSUPPORTED_RE.match(token):
        logger.warning(
            f'Unsupported color format "{token}" converted to default. Use hex, rgb, or hsl instead.'
        )
        return DEFAULT_COLOR

    logger.warning(f'Could not parse color "{token}", using default.')
    return DEFAULT_COLOR


def is_color_key(key: str) -> bool:
    """Return True if an object key names a color-bearing property."""
    lowered = key.lower()
    return any(marker in lowered for marker in COLOR_KEY_MARKERS)


def sanitize_colors(value: Any, _color_context: bool = False) -> Any:
    """Recursively rewrite every color-keyed value through :func:`to_hex`.

    Only values reached through a key containing ``color``, ``background``
    or ``border`` are rewritten; any other string (alignment keywords,
    text content) is returned untouched. A ``transparent`` color is
    removed so that optional backgrounds stay unset. Returns new
    containers and never mutates the input.
    """
    if value is None:
        return None

    if isinstance(value, str):
        return to_hex(value) if _color_context else value

    if isinstance(value, list):
        return [sanitize_colors(item, _color_context) for item in value]

    if isinstance(value, dict):
        sanitized = {}
        for key, item in value.items():
            color_key = isinstance(key, str) and is_color_key(key)
            if color_key and isinstance(item, str) and item.strip().lower() == "transparent":
                continue
            sanitized[key] = sanitize_colors(item, color_key)
        return sanitized

    return value
