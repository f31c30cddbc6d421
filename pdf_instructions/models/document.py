"""Root aggregate of the instruction model."""

from typing import List, Literal, Optional

from .base import InstructionModel, NonNegativeNumber, Spacing
from .elements import Element

PaperSize = Literal["A4", "LETTER", "LEGAL", "TABLOID"]


class Metadata(InstructionModel):
    title: str
    author: Optional[str] = None
    subject: Optional[str] = None
    keywords: Optional[List[str]] = None
    created_at: Optional[str] = None


class PageSettings(InstructionModel):
    size: Optional[PaperSize] = None
    orientation: Optional[Literal["portrait", "landscape"]] = None
    margins: Optional[Spacing] = None


class Theme(InstructionModel):
    """Document palette; every field is optional and defaulted per render pass."""

    primary_color: Optional[str] = None
    secondary_color: Optional[str] = None
    accent_color: Optional[str] = None
    text_color: Optional[str] = None
    muted_color: Optional[str] = None
    background_color: Optional[str] = None
    font_family: Optional[str] = None


class Header(InstructionModel):
    enabled: bool
    content: Optional[List[Element]] = None
    height: Optional[NonNegativeNumber] = None


class Footer(InstructionModel):
    enabled: bool
    content: Optional[List[Element]] = None
    show_page_numbers: Optional[bool] = None
    page_number_format: Optional[str] = None
    height: Optional[NonNegativeNumber] = None


class InstructionDocument(InstructionModel):
    """A whole document: metadata, page setup, theme, header/footer and content.

    ``content`` order is the only ordering signal for rendering.
    """

    metadata: Metadata
    page_settings: Optional[PageSettings] = None
    theme: Optional[Theme] = None
    header: Optional[Header] = None
    footer: Optional[Footer] = None
    content: List[Element]
