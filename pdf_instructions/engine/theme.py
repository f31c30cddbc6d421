"""
Theme resolution and shared style tables.

Both back-ends resolve the document theme exactly once per render pass
and pass the resulting :class:`ResolvedTheme` down to every renderer.
"""

from dataclasses import dataclass, fields
from typing import Dict, NamedTuple, Optional

from ..models import Theme

DEFAULT_THEME: Dict[str, str] = {
    "primary_color": "#1a365d",
    "secondary_color": "#2d3748",
    "accent_color": "#3182ce",
    "text_color": "#1a202c",
    "muted_color": "#718096",
    "background_color": "#ffffff",
    "font_family": "Helvetica",
}

DEFAULT_CHART_COLORS = (
    "#3182ce",
    "#38a169",
    "#d69e2e",
    "#e53e3e",
    "#805ad5",
    "#dd6b20",
    "#319795",
    "#d53f8c",
)

BORDER_COLOR = "#e2e8f0"
TRACK_COLOR = "#f1f5f9"
GRID_COLOR = "#e2e8f0"
LINK_COLOR = "#3182ce"
CODE_BACKGROUND = "#f1f5f9"

CODE_BLOCK_COLORS = {
    "background": "#1e293b",
    "header": "#334155",
    "header_text": "#94a3b8",
    "line_number": "#64748b",
    "code": "#e2e8f0",
}


class CalloutColors(NamedTuple):
    background: str
    border: str
    title: str


CALLOUT_VARIANTS: Dict[str, CalloutColors] = {
    "info": CalloutColors("#eff6ff", "#3b82f6", "#1d4ed8"),
    "warning": CalloutColors("#fffbeb", "#f59e0b", "#b45309"),
    "success": CalloutColors("#f0fdf4", "#22c55e", "#15803d"),
    "error": CalloutColors("#fef2f2", "#ef4444", "#b91c1c"),
    "quote": CalloutColors("#f8fafc", "#94a3b8", "#475569"),
}


@dataclass(frozen=True)
class ResolvedTheme:
    """Theme with every field filled in."""

    primary_color: str
    secondary_color: str
    accent_color: str
    text_color: str
    muted_color: str
    background_color: str
    font_family: str


def resolve_theme(theme: Optional[Theme] = None) -> ResolvedTheme:
    """Merge a document theme over :data:`DEFAULT_THEME`; unset fields keep defaults."""
    merged = dict(DEFAULT_THEME)
    if theme is not None:
        for field in fields(ResolvedTheme):
            value = getattr(theme, field.name, None)
            if value:
                merged[field.name] = value
    return ResolvedTheme(**merged)


class HeadingStyle(NamedTuple):
    font_size: float
    bold: bool
    color: str
    margin_bottom: float
    line_height: float


# level -> (font size, bold (else semibold), theme color role, margin bottom, line height)
_HEADING_SCALE = {
    1: (28, True, "primary_color", 20, 1.3),
    2: (22, True, "primary_color", 15, 1.3),
    3: (18, False, "primary_color", 10, 1.3),
    4: (16, False, "primary_color", 10, 1.3),
    5: (14, False, "primary_color", 10, 1.3),
    6: (12, False, "primary_color", 10, 1.3),
}


def heading_style(level: int, theme: ResolvedTheme) -> HeadingStyle:
    """Typography for a heading level, colored from the resolved theme."""
    font_size, bold, role, margin_bottom, line_height = _HEADING_SCALE.get(level, _HEADING_SCALE[1])
    return HeadingStyle(font_size, bold, getattr(theme, role), margin_bottom, line_height)


def series_color(index: int, explicit: Optional[str] = None, palette=None) -> str:
    """Color for the ``index``-th chart item; palettes cycle indefinitely."""
    if explicit:
        return explicit
    colors = palette or DEFAULT_CHART_COLORS
    return colors[index % len(colors)]
