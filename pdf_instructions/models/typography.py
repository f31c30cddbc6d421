"""Typography elements: headings, paragraphs, lists, captions, callouts, code."""

from typing import List, Literal, Optional

from pydantic import Field

from .base import FontWeight, InstructionModel, NonNegativeNumber, TextAlign

CalloutVariant = Literal["info", "warning", "success", "error", "quote"]


class HeadingElement(InstructionModel):
    type: Literal["heading"] = "heading"
    level: int = Field(ge=1, le=6)
    content: str
    color: Optional[str] = None
    align: Optional[TextAlign] = None
    margin_bottom: Optional[NonNegativeNumber] = None


class ParagraphElement(InstructionModel):
    type: Literal["paragraph"] = "paragraph"
    content: str
    font_size: Optional[NonNegativeNumber] = None
    line_height: Optional[NonNegativeNumber] = None
    color: Optional[str] = None
    align: Optional[TextAlign] = None
    font_weight: Optional[FontWeight] = None
    margin_bottom: Optional[NonNegativeNumber] = None


class ListElement(InstructionModel):
    type: Literal["list"] = "list"
    variant: Literal["ordered", "unordered"]
    items: List[str]
    font_size: Optional[NonNegativeNumber] = None
    color: Optional[str] = None
    spacing: Optional[NonNegativeNumber] = None
    margin_bottom: Optional[NonNegativeNumber] = None


class CaptionElement(InstructionModel):
    type: Literal["caption"] = "caption"
    content: str
    color: Optional[str] = None
    align: Optional[TextAlign] = None


class CalloutElement(InstructionModel):
    type: Literal["callout"] = "callout"
    content: str
    variant: Optional[CalloutVariant] = None
    title: Optional[str] = None
    margin_bottom: Optional[NonNegativeNumber] = None


class CodeBlockElement(InstructionModel):
    type: Literal["codeBlock"] = "codeBlock"
    code: str
    language: Optional[str] = None
    show_line_numbers: Optional[bool] = None
    margin_bottom: Optional[NonNegativeNumber] = None
