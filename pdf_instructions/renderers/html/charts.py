"""Inline SVG renderers for chart elements."""

import logging
from typing import List

from ...engine.charts import (
    BAR_CHART_SIZE,
    HORIZONTAL_BAR_HEIGHT,
    HORIZONTAL_LABEL_WIDTH,
    HORIZONTAL_ROW_GAP,
    LINE_CHART_SIZE,
    NO_DATA_MESSAGE,
    PIE_BOX,
    PIE_CHART_SIZE,
    PIE_RADIUS,
    fmt,
    horizontal_bars,
    horizontal_track_length,
    line_chart_layout,
    pie_slices,
    vertical_bars,
)
from ...engine.theme import GRID_COLOR, TRACK_COLOR, ResolvedTheme
from ...models import BarChartElement, LineChartElement, PieChartElement
from .markup import escape, style_attr

logger = logging.getLogger(__name__)


def _container(element, body: str, theme: ResolvedTheme) -> str:
    margin = element.margin_bottom if element.margin_bottom is not None else 20
    parts = [f'<div class="pi-chart pi-{element.type}"{style_attr({"margin": f"0 0 {margin:g}px 0"})}>']
    if element.title:
        title_css = {
            "font-size": "12px",
            "font-weight": "700",
            "color": theme.primary_color,
            "text-align": "center",
            "margin": "0 0 10px 0",
        }
        parts.append(f'<div class="pi-chart-title"{style_attr(title_css)}>{escape(element.title)}</div>')
    parts.append(body)
    parts.append("</div>")
    return "".join(parts)


def _no_data(theme: ResolvedTheme) -> str:
    css = {"font-size": "10px", "color": theme.muted_color, "text-align": "center", "padding": "20px"}
    return f'<div class="pi-chart-empty"{style_attr(css)}>{NO_DATA_MESSAGE}</div>'


def _legend(entries: List[tuple], vertical: bool = False, line: bool = False) -> str:
    container_css = {
        "display": "flex",
        "flex-direction": "column" if vertical else "row",
        "flex-wrap": "wrap",
        "justify-content": "center",
        "margin-top": "0" if vertical else "10px",
    }
    items = []
    for color, label in entries:
        swatch = style_attr(
            {
                "display": "inline-block",
                "width": "20px" if line else "10px",
                "height": "3px" if line else "10px",
                "background-color": color,
                "margin-right": "5px",
            }
        )
        item_css = {"display": "flex", "align-items": "center", "margin": "0 15px 5px 0", "font-size": "8px"}
        items.append(f'<div class="pi-legend-item"{style_attr(item_css)}><span{swatch}></span>{escape(label)}</div>')
    return f'<div class="pi-legend"{style_attr(container_css)}>{"".join(items)}</div>'


def _format_value(value: float) -> str:
    return f"{value:,.10g}"


def _svg(width: float, height: float, body: str) -> str:
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{fmt(width)}" height="{fmt(height)}" '
        f'viewBox="0 0 {fmt(width)} {fmt(height)}">{body}</svg>'
    )


def _grid(plot, color: str = GRID_COLOR) -> str:
    return "".join(
        f'<rect x="{fmt(plot.left)}" y="{fmt(y)}" width="{fmt(plot.width)}" height="0.5" fill="{color}"/>'
        for y in plot.grid_lines()
    )


def render_bar_chart(element: BarChartElement, theme: ResolvedTheme) -> str:
    if not element.data:
        logger.warning("Bar chart has no data; rendering placeholder")
        return _container(element, _no_data(theme), theme)

    width = element.width or BAR_CHART_SIZE[0]
    height = element.height or BAR_CHART_SIZE[1]
    show_values = element.show_values is not False

    if element.orientation == "vertical":
        layout = vertical_bars(element.data, width, height, element.colors)
        rects = "".join(
            f'<rect x="{fmt(bar.x)}" y="{fmt(bar.y)}" width="{fmt(bar.width)}" height="{fmt(bar.height)}" '
            f'fill="{escape(bar.color)}"><title>{escape(bar.label)}: {_format_value(bar.value)}</title></rect>'
            for bar in layout.bars
        )
        chart = f'<div{style_attr({"text-align": "center"})}>{_svg(width, height, _grid(layout.plot) + rects)}</div>'
        legend = ""
        if element.show_legend is not False:
            legend = _legend(
                [
                    (bar.color, f"{bar.label}: {_format_value(bar.value)}" if show_values else bar.label)
                    for bar in layout.bars
                ]
            )
        return _container(element, chart + legend, theme)

    track = horizontal_track_length(width, show_values)
    rows = []
    for bar in horizontal_bars(element.data, track, element.colors):
        row_css = {"display": "flex", "align-items": "center", "margin-bottom": f"{HORIZONTAL_ROW_GAP:g}px"}
        label_css = {
            "width": f"{HORIZONTAL_LABEL_WIDTH:g}px",
            "font-size": "9px",
            "color": theme.text_color,
            "overflow": "hidden",
            "text-overflow": "ellipsis",
            "white-space": "nowrap",
        }
        track_css = {
            "flex": "1",
            "height": f"{HORIZONTAL_BAR_HEIGHT:g}px",
            "background-color": TRACK_COLOR,
            "border-radius": "2px",
            "margin": f"0 {HORIZONTAL_ROW_GAP:g}px",
        }
        bar_css = {
            "width": f"{bar.fraction * 100:g}%",
            "height": "100%",
            "background-color": bar.color,
            "border-radius": "2px",
        }
        value_html = ""
        if show_values:
            value_css = {"width": "50px", "font-size": "9px", "color": theme.text_color, "text-align": "right"}
            value_html = f'<span class="pi-bar-value"{style_attr(value_css)}>{_format_value(bar.value)}</span>'
        rows.append(
            f'<div class="pi-bar-row"{style_attr(row_css)}>'
            f'<span class="pi-bar-label"{style_attr(label_css)}>{escape(bar.label)}</span>'
            f'<div class="pi-bar-track"{style_attr(track_css)}><div class="pi-bar"{style_attr(bar_css)}></div></div>'
            f"{value_html}</div>"
        )
    body = f'<div class="pi-bars"{style_attr({"max-width": f"{width:g}px", "margin": "0 auto"})}>{"".join(rows)}</div>'
    return _container(element, body, theme)


def render_pie_chart(element: PieChartElement, theme: ResolvedTheme) -> str:
    if not element.data:
        logger.warning("Pie chart has no data; rendering placeholder")
        return _container(element, _no_data(theme), theme)

    center = PIE_BOX / 2
    slices = pie_slices(element.data, center, center, PIE_RADIUS, bool(element.donut), element.colors)
    paths = "".join(
        f'<path d="{slice_.path}" fill="{escape(slice_.color)}" fill-rule="evenodd">'
        f"<title>{escape(slice_.label)}: {slice_.percentage:.1f}%</title></path>"
        for slice_ in slices
    )
    chart = _svg(PIE_BOX, PIE_BOX, paths)

    legend = ""
    if element.show_labels is not False:
        show_percentages = element.show_percentages is not False
        legend = _legend(
            [
                (slice_.color, f"{slice_.label} ({slice_.percentage:.1f}%)" if show_percentages else slice_.label)
                for slice_ in slices
            ],
            vertical=True,
        )
    width = element.width or PIE_CHART_SIZE[0]
    row_css = {
        "display": "flex",
        "align-items": "center",
        "justify-content": "center",
        "gap": "20px",
        "max-width": f"{width:g}px",
        "margin": "0 auto",
    }
    return _container(element, f'<div{style_attr(row_css)}>{chart}{legend}</div>', theme)


def render_line_chart(element: LineChartElement, theme: ResolvedTheme) -> str:
    width = element.width or LINE_CHART_SIZE[0]
    height = element.height or LINE_CHART_SIZE[1]
    layout = line_chart_layout(element.data, width, height)

    body = ""
    if element.show_grid is not False:
        body += _grid(layout.plot)
    for series in layout.series:
        if not series.points:
            continue
        body += f'<path d="{series.path}" stroke="{escape(series.color)}" stroke-width="2" fill="none"/>'
        if element.show_dots is not False:
            body += "".join(
                f'<circle cx="{fmt(x)}" cy="{fmt(y)}" r="3" fill="{escape(series.color)}"/>'
                for x, y in series.points
            )
    label_y = layout.plot.bottom + 15
    for index, label in enumerate(layout.x_labels):
        x = layout.x_for(index)
        body += (
            f'<text x="{fmt(x)}" y="{fmt(label_y)}" font-size="8" text-anchor="middle" '
            f'fill="{escape(theme.muted_color)}">{escape(label)}</text>'
        )

    content = f'<div{style_attr({"text-align": "center"})}>{_svg(width, height, body)}</div>'
    if not layout.has_data:
        logger.warning("Line chart has no data; rendering placeholder")
        content += _no_data(theme)
    if len(element.data) > 1:
        content += _legend([(series.color, series.label) for series in layout.series], line=True)
    return _container(element, content, theme)
