"""
Instruction document models.

The schema is a recursive tagged union: every element carries a ``type``
tag selecting a fixed field set, and ``section``/``columns`` nest further
elements.
"""

from .base import Border, FontWeight, InstructionModel, Spacing, TextAlign
from .charts import (
    BarChartElement,
    ChartDataPoint,
    LineChartElement,
    LinePoint,
    LineSeries,
    PieChartElement,
)
from .data import CellStyle, HeaderStyle, KeyStyle, KeyValueElement, KeyValueItem, TableElement, ValueStyle
from .document import Footer, Header, InstructionDocument, Metadata, PageSettings, Theme
from .elements import (
    CHART_TYPES,
    COMPOSITE_TYPES,
    ELEMENT_TYPES,
    ColumnSpec,
    ColumnsElement,
    Element,
    SectionElement,
)
from .layout import DividerElement, PageBreakElement, SpacerElement
from .media import ImageElement
from .typography import (
    CalloutElement,
    CaptionElement,
    CodeBlockElement,
    HeadingElement,
    ListElement,
    ParagraphElement,
)

__all__ = [
    "InstructionModel",
    "Spacing",
    "Border",
    "FontWeight",
    "TextAlign",
    "HeadingElement",
    "ParagraphElement",
    "ListElement",
    "CaptionElement",
    "CalloutElement",
    "CodeBlockElement",
    "SectionElement",
    "ColumnSpec",
    "ColumnsElement",
    "SpacerElement",
    "DividerElement",
    "PageBreakElement",
    "TableElement",
    "HeaderStyle",
    "CellStyle",
    "KeyValueElement",
    "KeyValueItem",
    "KeyStyle",
    "ValueStyle",
    "ChartDataPoint",
    "LinePoint",
    "LineSeries",
    "BarChartElement",
    "PieChartElement",
    "LineChartElement",
    "ImageElement",
    "Element",
    "ELEMENT_TYPES",
    "COMPOSITE_TYPES",
    "CHART_TYPES",
    "Metadata",
    "PageSettings",
    "Theme",
    "Header",
    "Footer",
    "InstructionDocument",
]
