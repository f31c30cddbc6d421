"""
Engines shared by both render back-ends: rich-text tokenizing, chart
geometry and theme resolution.
"""

from .charts import (
    BAR_CHART_PADDING,
    LINE_CHART_PADDING,
    NO_DATA_MESSAGE,
    HorizontalBar,
    LineChartLayout,
    PieSlice,
    PlotArea,
    SeriesGeometry,
    VerticalBar,
    VerticalBarLayout,
    bar_scale,
    column_fractions,
    horizontal_bars,
    horizontal_track_length,
    line_chart_layout,
    pie_slices,
    vertical_bar_metrics,
    vertical_bars,
    wedge_path,
)
from .rich_text import RichTextNode, has_markup, plain_text, tokenize
from .theme import DEFAULT_THEME, ResolvedTheme, heading_style, resolve_theme, series_color

__all__ = [
    "BAR_CHART_PADDING",
    "LINE_CHART_PADDING",
    "NO_DATA_MESSAGE",
    "HorizontalBar",
    "LineChartLayout",
    "PieSlice",
    "PlotArea",
    "SeriesGeometry",
    "VerticalBar",
    "VerticalBarLayout",
    "bar_scale",
    "column_fractions",
    "horizontal_bars",
    "horizontal_track_length",
    "line_chart_layout",
    "pie_slices",
    "vertical_bar_metrics",
    "vertical_bars",
    "wedge_path",
    "RichTextNode",
    "has_markup",
    "plain_text",
    "tokenize",
    "DEFAULT_THEME",
    "ResolvedTheme",
    "heading_style",
    "resolve_theme",
    "series_color",
]
