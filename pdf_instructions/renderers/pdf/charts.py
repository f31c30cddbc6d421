"""Chart renderers drawing engine geometry with ``reportlab.graphics``."""

from __future__ import annotations

import logging
from typing import List, Sequence, Tuple

from reportlab.graphics.shapes import Circle, Drawing, PolyLine, Rect, String, Wedge
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.platypus import Flowable, Paragraph, Spacer, Table, TableStyle

from ...engine.charts import (
    BAR_CHART_SIZE,
    HORIZONTAL_BAR_HEIGHT,
    HORIZONTAL_LABEL_WIDTH,
    HORIZONTAL_ROW_GAP,
    HORIZONTAL_VALUE_WIDTH,
    LINE_CHART_SIZE,
    NO_DATA_MESSAGE,
    PIE_BOX,
    PIE_RADIUS,
    horizontal_bars,
    horizontal_track_length,
    line_chart_layout,
    pie_slices,
    vertical_bars,
)
from ...engine.theme import GRID_COLOR, TRACK_COLOR, ResolvedTheme
from ...models import BarChartElement, LineChartElement, PieChartElement
from .markup import escape, paragraph_style
from .render_utils import resolve_font_variant, to_color

logger = logging.getLogger(__name__)

LEGEND_FONT_SIZE = 8
LEGEND_ITEM_GAP = 15
LEGEND_ROW_HEIGHT = 15


class FittedDrawing(Flowable):
    """
    A drawing that scales down uniformly when the frame is narrower than it.

    A drawing taller than a whole frame is shrunk to fit once reportlab has
    postponed it to a fresh frame.
    """

    def __init__(self, drawing: Drawing, h_align: str = "CENTER"):
        super().__init__()
        self.drawing = drawing
        self.hAlign = h_align
        self._scale = 1.0
        self._max_height = None
        self.width = drawing.width
        self.height = drawing.height

    def wrap(self, avail_width, avail_height):
        width, height = self.drawing.width, self.drawing.height
        self._scale = min(1.0, avail_width / width) if width > 0 else 1.0
        if self._max_height is not None and height * self._scale > self._max_height:
            self._scale = self._max_height / height
        self.width = width * self._scale
        self.height = height * self._scale
        return self.width, self.height

    def split(self, avail_width, avail_height):
        if not getattr(self, "_postponed", False) or self.drawing.height <= 0 or avail_height <= 0:
            return []
        logger.warning(f"Chart of height {self.drawing.height:g}pt does not fit the frame; scaling down")
        self._max_height = avail_height
        return [self]

    def draw(self):
        self.canv.saveState()
        self.canv.scale(self._scale, self._scale)
        self.drawing.drawOn(self.canv, 0, 0)
        self.canv.restoreState()


def _flip(height: float, y: float) -> float:
    """Top-left engine coordinates to bottom-left drawing coordinates."""
    return height - y


def _title(element, theme: ResolvedTheme) -> List[Flowable]:
    if not element.title:
        return []
    style = paragraph_style(
        "chart-title", theme.font_family, 12, theme.primary_color, bold=True, align="center", space_after=10
    )
    style.keepWithNext = 1
    return [Paragraph(escape(element.title), style)]


def _no_data(theme: ResolvedTheme) -> Flowable:
    style = paragraph_style(
        "chart-empty", theme.font_family, 10, theme.muted_color, align="center", space_before=20, space_after=20
    )
    return Paragraph(NO_DATA_MESSAGE, style)


def _finish(element, flowables: List[Flowable]) -> List[Flowable]:
    margin = element.margin_bottom if element.margin_bottom is not None else 20
    if margin > 0:
        flowables.append(Spacer(1, margin))
    return flowables


def _format_value(value: float) -> str:
    return f"{value:,.10g}"


def legend_drawing(
    entries: Sequence[Tuple[str, str]],
    max_width: float,
    theme: ResolvedTheme,
    line_swatch: bool = False,
    stacked: bool = False,
) -> Drawing:
    """
    Lay out (color, label) legend entries left to right, wrapping into
    centered rows, or one per row when ``stacked``.
    """
    font = resolve_font_variant(theme.font_family)
    swatch_width = 20.0 if line_swatch else 10.0
    items = [(color, label, swatch_width + 5 + stringWidth(label, font, LEGEND_FONT_SIZE)) for color, label in entries]

    rows: List[List[Tuple[str, str, float]]] = []
    for item in items:
        if rows and not stacked and sum(width + LEGEND_ITEM_GAP for *_, width in rows[-1]) + item[2] <= max_width:
            rows[-1].append(item)
        else:
            rows.append([item])

    width = max_width if not stacked else max((item[2] for item in items), default=0.0)
    height = len(rows) * LEGEND_ROW_HEIGHT
    drawing = Drawing(width, height)
    for row_index, row in enumerate(rows):
        row_width = sum(w for *_, w in row) + LEGEND_ITEM_GAP * (len(row) - 1)
        x = 0.0 if stacked else (width - row_width) / 2
        baseline = height - (row_index + 1) * LEGEND_ROW_HEIGHT + 4
        for color, label, item_width in row:
            swatch_height = 3.0 if line_swatch else 10.0
            drawing.add(
                Rect(x, baseline + 3 - swatch_height / 2, swatch_width, swatch_height, fillColor=to_color(color), strokeColor=None)
            )
            drawing.add(
                String(x + swatch_width + 5, baseline, label, fontName=font, fontSize=LEGEND_FONT_SIZE, fillColor=to_color(theme.text_color))
            )
            x += item_width + LEGEND_ITEM_GAP
    return drawing


def _grid(drawing: Drawing, plot, height: float) -> None:
    for y in plot.grid_lines():
        drawing.add(Rect(plot.left, _flip(height, y) - 0.5, plot.width, 0.5, fillColor=to_color(GRID_COLOR), strokeColor=None))


def render_bar_chart(element: BarChartElement, theme: ResolvedTheme) -> List[Flowable]:
    flowables = _title(element, theme)
    if not element.data:
        logger.warning("Bar chart has no data; rendering placeholder")
        return _finish(element, flowables + [_no_data(theme)])

    width = element.width or BAR_CHART_SIZE[0]
    height = element.height or BAR_CHART_SIZE[1]
    show_values = element.show_values is not False
    font = resolve_font_variant(theme.font_family)
    text_color = to_color(theme.text_color)

    if element.orientation == "vertical":
        layout = vertical_bars(element.data, width, height, element.colors)
        drawing = Drawing(width, height)
        _grid(drawing, layout.plot, height)
        for bar in layout.bars:
            drawing.add(
                Rect(bar.x, _flip(height, bar.y + bar.height), bar.width, bar.height, fillColor=to_color(bar.color), strokeColor=None)
            )
        flowables.append(FittedDrawing(drawing))
        if element.show_legend is not False:
            legend = [
                (bar.color, f"{bar.label}: {_format_value(bar.value)}" if show_values else bar.label)
                for bar in layout.bars
            ]
            flowables.append(FittedDrawing(legend_drawing(legend, width, theme)))
        return _finish(element, flowables)

    track = horizontal_track_length(width, show_values)
    bars = horizontal_bars(element.data, track, element.colors)
    row_height = HORIZONTAL_BAR_HEIGHT + HORIZONTAL_ROW_GAP
    drawing_height = row_height * len(bars)
    drawing = Drawing(width, drawing_height)
    track_x = HORIZONTAL_LABEL_WIDTH + HORIZONTAL_ROW_GAP
    for index, bar in enumerate(bars):
        top = index * row_height
        bar_y = _flip(drawing_height, top + HORIZONTAL_BAR_HEIGHT)
        text_y = bar_y + (HORIZONTAL_BAR_HEIGHT - 9) / 2 + 1
        drawing.add(String(0, text_y, bar.label, fontName=font, fontSize=9, fillColor=text_color))
        drawing.add(Rect(track_x, bar_y, track, HORIZONTAL_BAR_HEIGHT, rx=2, ry=2, fillColor=to_color(TRACK_COLOR), strokeColor=None))
        if bar.length > 0:
            drawing.add(Rect(track_x, bar_y, bar.length, HORIZONTAL_BAR_HEIGHT, rx=2, ry=2, fillColor=to_color(bar.color), strokeColor=None))
        if show_values:
            drawing.add(
                String(
                    track_x + track + HORIZONTAL_ROW_GAP + HORIZONTAL_VALUE_WIDTH,
                    text_y,
                    _format_value(bar.value),
                    fontName=font,
                    fontSize=9,
                    fillColor=text_color,
                    textAnchor="end",
                )
            )
    flowables.append(FittedDrawing(drawing))
    return _finish(element, flowables)


def render_pie_chart(element: PieChartElement, theme: ResolvedTheme) -> List[Flowable]:
    flowables = _title(element, theme)
    if not element.data:
        logger.warning("Pie chart has no data; rendering placeholder")
        return _finish(element, flowables + [_no_data(theme)])

    center = PIE_BOX / 2
    inner_radius = PIE_RADIUS * 0.5 if element.donut else 0.0
    slices = pie_slices(element.data, center, center, PIE_RADIUS, bool(element.donut), element.colors)
    drawing = Drawing(PIE_BOX, PIE_BOX)
    for slice_ in slices:
        if slice_.sweep <= 0:
            continue
        wedge = Wedge(
            center,
            center,
            PIE_RADIUS,
            -slice_.end_angle,
            -slice_.start_angle,
            radius1=inner_radius or None,
            annular=bool(inner_radius),
            fillColor=to_color(slice_.color),
            strokeColor=None,
        )
        drawing.add(wedge)

    cells: list = [FittedDrawing(drawing)]
    if element.show_labels is not False:
        show_percentages = element.show_percentages is not False
        legend = [
            (slice_.color, f"{slice_.label} ({slice_.percentage:.1f}%)" if show_percentages else slice_.label)
            for slice_ in slices
        ]
        cells.append(
            [FittedDrawing(legend_drawing([entry], 200, theme, stacked=True), h_align="LEFT") for entry in legend]
        )

    row = Table([cells], hAlign="CENTER", splitInRow=1)
    row.setStyle(
        TableStyle(
            [
                ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
                ("LEFTPADDING", (0, 0), (-1, -1), 0),
                ("RIGHTPADDING", (0, 0), (-1, -1), 20),
                ("RIGHTPADDING", (-1, 0), (-1, -1), 0),
            ]
        )
    )
    flowables.append(row)
    return _finish(element, flowables)


def render_line_chart(element: LineChartElement, theme: ResolvedTheme) -> List[Flowable]:
    flowables = _title(element, theme)
    width = element.width or LINE_CHART_SIZE[0]
    height = element.height or LINE_CHART_SIZE[1]
    layout = line_chart_layout(element.data, width, height)
    font = resolve_font_variant(theme.font_family)

    drawing = Drawing(width, height)
    if element.show_grid is not False:
        _grid(drawing, layout.plot, height)
    for series in layout.series:
        if not series.points:
            continue
        color = to_color(series.color)
        points = []
        for x, y in series.points:
            points.extend([x, _flip(height, y)])
        if len(series.points) > 1:
            drawing.add(PolyLine(points, strokeColor=color, strokeWidth=2, fillColor=None))
        if element.show_dots is not False:
            for x, y in series.points:
                drawing.add(Circle(x, _flip(height, y), 3, fillColor=color, strokeColor=None))
    label_y = _flip(height, layout.plot.bottom + 15)
    for index, label in enumerate(layout.x_labels):
        drawing.add(
            String(layout.x_for(index), label_y, label, fontName=font, fontSize=8, fillColor=to_color(theme.muted_color), textAnchor="middle")
        )
    flowables.append(FittedDrawing(drawing))

    if not layout.has_data:
        logger.warning("Line chart has no data; rendering placeholder")
        flowables.append(_no_data(theme))
    if len(element.data) > 1:
        legend = [(series.color, series.label) for series in layout.series]
        flowables.append(FittedDrawing(legend_drawing(legend, width, theme, line_swatch=True)))
    return _finish(element, flowables)
