"""Chart elements sharing the numeric data shapes used by the geometry engine."""

from typing import List, Literal, Optional, Union

from .base import InstructionModel, NonNegativeNumber


class ChartDataPoint(InstructionModel):
    label: str
    value: float
    color: Optional[str] = None


class LinePoint(InstructionModel):
    x: Union[int, float, str]
    y: float


class LineSeries(InstructionModel):
    label: str
    values: List[LinePoint]
    color: Optional[str] = None


class BarChartElement(InstructionModel):
    type: Literal["barChart"] = "barChart"
    title: Optional[str] = None
    data: List[ChartDataPoint]
    width: Optional[NonNegativeNumber] = None
    height: Optional[NonNegativeNumber] = None
    show_values: Optional[bool] = None
    show_legend: Optional[bool] = None
    orientation: Optional[Literal["horizontal", "vertical"]] = None
    colors: Optional[List[str]] = None
    margin_bottom: Optional[NonNegativeNumber] = None


class PieChartElement(InstructionModel):
    type: Literal["pieChart"] = "pieChart"
    title: Optional[str] = None
    data: List[ChartDataPoint]
    width: Optional[NonNegativeNumber] = None
    height: Optional[NonNegativeNumber] = None
    show_labels: Optional[bool] = None
    show_percentages: Optional[bool] = None
    donut: Optional[bool] = None
    colors: Optional[List[str]] = None
    margin_bottom: Optional[NonNegativeNumber] = None


class LineChartElement(InstructionModel):
    type: Literal["lineChart"] = "lineChart"
    title: Optional[str] = None
    data: List[LineSeries]
    width: Optional[NonNegativeNumber] = None
    height: Optional[NonNegativeNumber] = None
    show_grid: Optional[bool] = None
    show_dots: Optional[bool] = None
    margin_bottom: Optional[NonNegativeNumber] = None
