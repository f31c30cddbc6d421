"""Media elements."""

from typing import Literal, Optional

from .base import InstructionModel, NonNegativeNumber


class ImageElement(InstructionModel):
    type: Literal["image"] = "image"
    src: str
    alt: Optional[str] = None
    width: Optional[NonNegativeNumber] = None
    height: Optional[NonNegativeNumber] = None
    align: Optional[Literal["left", "center", "right"]] = None
    margin_bottom: Optional[NonNegativeNumber] = None
