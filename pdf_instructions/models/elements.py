"""
Element union for the instruction content tree.

``section`` and ``columns`` nest further elements, so the union refers to
itself. The composite models name ``"Element"`` as a forward reference
and are rebuilt once the union exists.
"""

from typing import Annotated, List, Literal, Optional, Union

from pydantic import Field

from .base import Border, InstructionModel, NonNegativeNumber, Spacing
from .charts import BarChartElement, LineChartElement, PieChartElement
from .data import KeyValueElement, TableElement
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


class SectionElement(InstructionModel):
    type: Literal["section"] = "section"
    title: Optional[str] = None
    children: List["Element"]
    background_color: Optional[str] = None
    padding: Optional[Spacing] = None
    margin_bottom: Optional[NonNegativeNumber] = None
    border: Optional[Border] = None


class ColumnSpec(InstructionModel):
    """One column of a ``columns`` row; ``width`` is a proportional weight."""

    width: float = Field(gt=0)
    children: List["Element"]


class ColumnsElement(InstructionModel):
    type: Literal["columns"] = "columns"
    columns: List[ColumnSpec]
    gap: Optional[NonNegativeNumber] = None
    margin_bottom: Optional[NonNegativeNumber] = None


Element = Annotated[
    Union[
        HeadingElement,
        ParagraphElement,
        ListElement,
        CaptionElement,
        CalloutElement,
        CodeBlockElement,
        SectionElement,
        ColumnsElement,
        SpacerElement,
        DividerElement,
        PageBreakElement,
        TableElement,
        KeyValueElement,
        BarChartElement,
        LineChartElement,
        PieChartElement,
        ImageElement,
    ],
    Field(discriminator="type"),
]

SectionElement.model_rebuild()
ColumnSpec.model_rebuild()
ColumnsElement.model_rebuild()

ELEMENT_TYPES = (
    "heading",
    "paragraph",
    "list",
    "caption",
    "callout",
    "codeBlock",
    "section",
    "columns",
    "spacer",
    "divider",
    "pageBreak",
    "table",
    "keyValue",
    "barChart",
    "lineChart",
    "pieChart",
    "image",
)

COMPOSITE_TYPES = ("section", "columns")
CHART_TYPES = ("barChart", "pieChart", "lineChart")
