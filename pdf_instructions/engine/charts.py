"""
Chart geometry engine.

Pure functions turning chart data plus target dimensions into
coordinates. Coordinates use a top-left origin with y growing downward;
the print back-end flips them into its bottom-left coordinate system.
Every function tolerates empty data and zero denominators, so no
computed coordinate is ever NaN or infinite.
"""

import math
from dataclasses import dataclass
from typing import List, NamedTuple, Optional, Sequence, Tuple

from .theme import series_color

MAX_BAR_WIDTH = 40.0
BAR_GAP = 10.0
GRID_RATIOS = (0.0, 0.25, 0.5, 0.75, 1.0)

# (width, height) when a chart element leaves them unset
BAR_CHART_SIZE = (500.0, 200.0)
PIE_CHART_SIZE = (300.0, 200.0)
LINE_CHART_SIZE = (500.0, 200.0)

HORIZONTAL_LABEL_WIDTH = 80.0
HORIZONTAL_VALUE_WIDTH = 50.0
HORIZONTAL_BAR_HEIGHT = 16.0
HORIZONTAL_ROW_GAP = 8.0

PIE_BOX = 160.0
PIE_RADIUS = 70.0

NO_DATA_MESSAGE = "No data available"


class Padding(NamedTuple):
    top: float
    right: float
    bottom: float
    left: float


BAR_CHART_PADDING = Padding(20, 20, 40, 50)
LINE_CHART_PADDING = Padding(20, 20, 30, 40)


@dataclass(frozen=True)
class PlotArea:
    left: float
    top: float
    width: float
    height: float

    @property
    def bottom(self) -> float:
        return self.top + self.height

    def grid_lines(self) -> List[float]:
        """Y coordinates of the horizontal grid at 0/25/50/75/100 %."""
        return [self.top + self.height * (1 - ratio) for ratio in GRID_RATIOS]


def plot_area(width: float, height: float, padding: Padding) -> PlotArea:
    return PlotArea(
        left=padding.left,
        top=padding.top,
        width=max(0.0, width - padding.left - padding.right),
        height=max(0.0, height - padding.top - padding.bottom),
    )


def _denominator(value: float) -> float:
    return value if value > 0 else 1.0


# ----------------------------------------------------------------------
# Bar charts
# ----------------------------------------------------------------------
@dataclass(frozen=True)
class HorizontalBar:
    label: str
    value: float
    color: str
    fraction: float
    length: float


@dataclass(frozen=True)
class VerticalBar:
    label: str
    value: float
    color: str
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class VerticalBarLayout:
    plot: PlotArea
    bar_width: float
    bar_gap: float
    bars: List[VerticalBar]


def bar_scale(values: Sequence[float]) -> float:
    """Denominator for bar lengths: ``max(values)``, or 1 when that is not positive."""
    if not values:
        return 1.0
    return _denominator(max(values))


def horizontal_bars(data, track_length: float, colors: Optional[Sequence[str]] = None) -> List[HorizontalBar]:
    """
    Compute horizontal bar lengths.

    Args:
        data: Sequence of chart data points (``label``, ``value``, ``color``)
        track_length: Length of a full-scale bar
        colors: Palette cycled for points without their own color

    Returns:
        One bar per data point, in input order
    """
    scale = bar_scale([point.value for point in data])
    bars = []
    for index, point in enumerate(data):
        fraction = min(1.0, max(0.0, point.value / scale))
        bars.append(
            HorizontalBar(
                label=point.label,
                value=point.value,
                color=series_color(index, point.color, colors),
                fraction=fraction,
                length=fraction * track_length,
            )
        )
    return bars


def horizontal_track_length(width: float, show_values: bool = True) -> float:
    """Length of a full-scale horizontal bar once the label and value columns are laid out."""
    value_width = HORIZONTAL_VALUE_WIDTH if show_values else 0.0
    return max(0.0, width - HORIZONTAL_LABEL_WIDTH - value_width - 2 * HORIZONTAL_ROW_GAP)


def vertical_bar_metrics(count: int, available_width: float) -> Tuple[float, float]:
    """
    Even column layout for ``count`` vertical bars.

    Bar width is ``min(40, W / n - 10)`` and the remaining space is split
    into ``n + 1`` equal gaps, so few categories give capped-width bars
    spread evenly instead of very wide ones.

    Returns:
        Tuple of (bar width, gap)
    """
    if count <= 0:
        return 0.0, available_width
    bar_width = max(0.0, min(MAX_BAR_WIDTH, available_width / count - BAR_GAP))
    gap = (available_width - bar_width * count) / (count + 1)
    return bar_width, gap


def vertical_bars(
    data,
    width: float,
    height: float,
    colors: Optional[Sequence[str]] = None,
    padding: Padding = BAR_CHART_PADDING,
) -> VerticalBarLayout:
    """Compute bar rectangles for a vertical bar chart inside a ``width`` x ``height`` box."""
    plot = plot_area(width, height, padding)
    bar_width, gap = vertical_bar_metrics(len(data), plot.width)
    scale = bar_scale([point.value for point in data])

    bars = []
    for index, point in enumerate(data):
        bar_height = min(1.0, max(0.0, point.value / scale)) * plot.height
        bars.append(
            VerticalBar(
                label=point.label,
                value=point.value,
                color=series_color(index, point.color, colors),
                x=plot.left + gap + index * (bar_width + gap),
                y=plot.top + plot.height - bar_height,
                width=bar_width,
                height=bar_height,
            )
        )
    return VerticalBarLayout(plot=plot, bar_width=bar_width, bar_gap=gap, bars=bars)


# ----------------------------------------------------------------------
# Pie charts
# ----------------------------------------------------------------------
PIE_START_ANGLE = -90.0
DONUT_RATIO = 0.5


@dataclass(frozen=True)
class PieSlice:
    label: str
    value: float
    color: str
    percentage: float
    start_angle: float
    end_angle: float
    path: str

    @property
    def sweep(self) -> float:
        return self.end_angle - self.start_angle


def fmt(value: float) -> str:
    """Compact, deterministic number formatting for path data."""
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def _point(cx: float, cy: float, radius: float, angle: float) -> Tuple[float, float]:
    radians = math.radians(angle)
    return cx + radius * math.cos(radians), cy + radius * math.sin(radians)


def _circle_path(cx: float, cy: float, radius: float, clockwise: bool = True) -> str:
    sweep = 1 if clockwise else 0
    return (
        f"M {fmt(cx - radius)} {fmt(cy)} "
        f"A {fmt(radius)} {fmt(radius)} 0 1 {sweep} {fmt(cx + radius)} {fmt(cy)} "
        f"A {fmt(radius)} {fmt(radius)} 0 1 {sweep} {fmt(cx - radius)} {fmt(cy)} Z"
    )


def wedge_path(
    cx: float,
    cy: float,
    radius: float,
    start_angle: float,
    end_angle: float,
    inner_radius: float = 0.0,
) -> str:
    """
    SVG path for one pie wedge, or a ring segment when ``inner_radius`` > 0.

    A full 360 degree sweep cannot be drawn with a single arc, so it is
    emitted as a full circle (with an inner hole for donuts).
    """
    sweep = end_angle - start_angle
    if sweep >= 360 - 1e-9:
        path = _circle_path(cx, cy, radius)
        if inner_radius > 0:
            path += " " + _circle_path(cx, cy, inner_radius, clockwise=False)
        return path

    large_arc = 1 if sweep > 180 else 0
    x1, y1 = _point(cx, cy, radius, start_angle)
    x2, y2 = _point(cx, cy, radius, end_angle)

    if inner_radius > 0:
        ix1, iy1 = _point(cx, cy, inner_radius, start_angle)
        ix2, iy2 = _point(cx, cy, inner_radius, end_angle)
        return (
            f"M {fmt(x1)} {fmt(y1)} "
            f"A {fmt(radius)} {fmt(radius)} 0 {large_arc} 1 {fmt(x2)} {fmt(y2)} "
            f"L {fmt(ix2)} {fmt(iy2)} "
            f"A {fmt(inner_radius)} {fmt(inner_radius)} 0 {large_arc} 0 {fmt(ix1)} {fmt(iy1)} Z"
        )

    return (
        f"M {fmt(cx)} {fmt(cy)} L {fmt(x1)} {fmt(y1)} "
        f"A {fmt(radius)} {fmt(radius)} 0 {large_arc} 1 {fmt(x2)} {fmt(y2)} Z"
    )


def pie_slices(
    data,
    cx: float,
    cy: float,
    radius: float,
    donut: bool = False,
    colors: Optional[Sequence[str]] = None,
) -> List[PieSlice]:
    """
    Compute pie slices in input order, starting at 12 o'clock and going clockwise.

    Args:
        data: Sequence of chart data points
        cx: Center x
        cy: Center y
        radius: Outer radius
        donut: Cut an inner hole of half the radius
        colors: Palette cycled for points without their own color

    Returns:
        One slice per data point
    """
    total = sum(point.value for point in data)
    if total == 0:
        total = 1.0
    inner_radius = radius * DONUT_RATIO if donut else 0.0

    slices = []
    current = PIE_START_ANGLE
    for index, point in enumerate(data):
        angle = point.value / total * 360.0
        start, end = current, current + angle
        current = end
        slices.append(
            PieSlice(
                label=point.label,
                value=point.value,
                color=series_color(index, point.color, colors),
                percentage=point.value / total * 100.0,
                start_angle=start,
                end_angle=end,
                path=wedge_path(cx, cy, radius, start, end, inner_radius),
            )
        )
    return slices


# ----------------------------------------------------------------------
# Line charts
# ----------------------------------------------------------------------
@dataclass(frozen=True)
class SeriesGeometry:
    label: str
    color: str
    points: List[Tuple[float, float]]

    @property
    def path(self) -> str:
        return " ".join(
            f"{'M' if index == 0 else 'L'} {fmt(x)} {fmt(y)}" for index, (x, y) in enumerate(self.points)
        )


@dataclass(frozen=True)
class LineChartLayout:
    plot: PlotArea
    min_value: float
    max_value: float
    x_labels: List[str]
    x_step: float
    series: List[SeriesGeometry]

    @property
    def has_data(self) -> bool:
        return any(series.points for series in self.series)

    def x_for(self, index: int) -> float:
        return self.plot.left + index * self.x_step

    def y_for(self, value: float) -> float:
        value_range = (self.max_value - self.min_value) or 1.0
        return self.plot.top + self.plot.height - (value - self.min_value) / value_range * self.plot.height


def line_chart_layout(
    data,
    width: float,
    height: float,
    colors: Optional[Sequence[str]] = None,
    padding: Padding = LINE_CHART_PADDING,
) -> LineChartLayout:
    """
    Compute polyline points for every series.

    X positions are spaced evenly by index across the plot width (the x
    values are only labels). The y scale runs from ``min(0, min(y))`` to
    ``max(0, max(y))`` so that zero is always on the axis.
    """
    plot = plot_area(width, height, padding)
    all_values = [point.y for series in data for point in series.values]
    if all_values:
        min_value = min(0.0, min(all_values))
        max_value = max(0.0, max(all_values))
    else:
        min_value, max_value = 0.0, 100.0

    longest = max((series.values for series in data), key=len, default=[])
    x_labels = [str(point.x) for point in longest]
    count = len(longest)
    x_step = plot.width / (count - 1) if count > 1 else plot.width

    layout = LineChartLayout(
        plot=plot, min_value=min_value, max_value=max_value, x_labels=x_labels, x_step=x_step, series=[]
    )
    for index, series in enumerate(data):
        points = [(layout.x_for(i), layout.y_for(point.y)) for i, point in enumerate(series.values)]
        layout.series.append(
            SeriesGeometry(label=series.label, color=series_color(index, series.color, colors), points=points)
        )
    return layout


def column_fractions(weights: Sequence[float]) -> List[float]:
    """
    Normalize proportional column weights to fractions of the row width.

    ``[1, 2, 1]`` gives ``[0.25, 0.5, 0.25]``; a non-positive total splits
    the row evenly.
    """
    if not weights:
        return []
    total = sum(weights)
    if total <= 0:
        return [1.0 / len(weights)] * len(weights)
    return [weight / total for weight in weights]
