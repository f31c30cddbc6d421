"""Leaf layout elements. The composite ones live in :mod:`.elements`."""

from typing import Literal, Optional

from .base import InstructionModel, NonNegativeNumber


class SpacerElement(InstructionModel):
    type: Literal["spacer"] = "spacer"
    height: NonNegativeNumber


class DividerElement(InstructionModel):
    type: Literal["divider"] = "divider"
    color: Optional[str] = None
    thickness: Optional[NonNegativeNumber] = None
    margin_y: Optional[NonNegativeNumber] = None


class PageBreakElement(InstructionModel):
    type: Literal["pageBreak"] = "pageBreak"
