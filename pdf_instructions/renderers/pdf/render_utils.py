"""Utility helpers shared across print renderer components."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Dict, NamedTuple, Optional, Tuple

from reportlab.lib.colors import Color, HexColor
from reportlab.lib.pagesizes import A4, LEGAL, LETTER, landscape, portrait
from reportlab.lib.units import inch

from ...models import PageSettings, Spacing
from ...utils.color_utils import DEFAULT_COLOR, to_hex

logger = logging.getLogger(__name__)

PAGE_SIZES = {
    "A4": A4,
    "LETTER": LETTER,
    "LEGAL": LEGAL,
    "TABLOID": (11 * inch, 17 * inch),
}


class Margins(NamedTuple):
    top: float
    right: float
    bottom: float
    left: float


DEFAULT_MARGINS = Margins(top=40.0, right=40.0, bottom=60.0, left=40.0)

# Built-in PDF font families: regular, bold, italic, bold italic
FONT_FAMILIES: Dict[str, Tuple[str, str, str, str]] = {
    "helvetica": ("Helvetica", "Helvetica-Bold", "Helvetica-Oblique", "Helvetica-BoldOblique"),
    "times": ("Times-Roman", "Times-Bold", "Times-Italic", "Times-BoldItalic"),
    "times-roman": ("Times-Roman", "Times-Bold", "Times-Italic", "Times-BoldItalic"),
    "courier": ("Courier", "Courier-Bold", "Courier-Oblique", "Courier-BoldOblique"),
}

MONO_FONT = "Courier"


def ensure_page_size(page_settings: Optional[PageSettings]) -> Tuple[float, float]:
    """Page (width, height) in points for the preset and orientation."""
    size = page_settings.size if page_settings and page_settings.size else "A4"
    preset = PAGE_SIZES.get(size.upper())
    if preset is None:
        raise ValueError(f"Unsupported page size preset: {size}")
    if page_settings and page_settings.orientation == "landscape":
        return landscape(preset)
    return portrait(preset)


def ensure_margins(margins: Optional[Spacing]) -> Margins:
    if margins is None:
        return DEFAULT_MARGINS
    return Margins(
        top=margins.top if margins.top is not None else DEFAULT_MARGINS.top,
        right=margins.right if margins.right is not None else DEFAULT_MARGINS.right,
        bottom=margins.bottom if margins.bottom is not None else DEFAULT_MARGINS.bottom,
        left=margins.left if margins.left is not None else DEFAULT_MARGINS.left,
    )


def padding_box(spacing: Optional[Spacing], default: float = 0.0) -> Margins:
    if spacing is None:
        return Margins(default, default, default, default)
    return Margins(
        *(value if value is not None else default for value in (spacing.top, spacing.right, spacing.bottom, spacing.left))
    )


def to_color(value: Optional[str], fallback: str = DEFAULT_COLOR) -> Color:
    """Convert any supported color expression into a reportlab color."""
    hex_value = to_hex(value) if value else fallback
    if len(hex_value) == 4:
        hex_value = "#" + "".join(ch * 2 for ch in hex_value[1:])
    return HexColor(hex_value)


@lru_cache(maxsize=None)
def font_family(name: Optional[str]) -> Tuple[str, str, str, str]:
    family = FONT_FAMILIES.get((name or "").strip().lower())
    if family is None:
        logger.warning(f"Font family {name!r} is not a built-in PDF font; using Helvetica")
        return FONT_FAMILIES["helvetica"]
    return family


def resolve_font_variant(base_name: Optional[str], *, bold: bool = False, italic: bool = False) -> str:
    regular, bold_name, italic_name, bold_italic = font_family(base_name)
    if bold and italic:
        return bold_italic
    if bold:
        return bold_name
    if italic:
        return italic_name
    return regular
