"""
Base model configuration for instruction document models.

All models accept and emit camelCase keys (``marginBottom``) while
exposing snake_case attributes (``margin_bottom``) to Python code.
"""

from typing import Annotated, Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

NonNegativeNumber = Annotated[float, Field(ge=0)]

FontWeight = Literal["normal", "bold", "light", "medium", "semibold"]
TextAlign = Literal["left", "center", "right", "justify"]
BorderStyle = Literal["solid", "dashed", "dotted", "none"]


class InstructionModel(BaseModel):
    """Base class for every node of the instruction schema."""

    model_config = ConfigDict(
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_instructions(self) -> Dict[str, Any]:
        """Dump to the JSON-like camelCase form, omitting unset optionals."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class Spacing(InstructionModel):
    """Padding or margin box, each side optional."""

    top: Optional[NonNegativeNumber] = None
    right: Optional[NonNegativeNumber] = None
    bottom: Optional[NonNegativeNumber] = None
    left: Optional[NonNegativeNumber] = None


class Border(InstructionModel):
    """Border around a composite element; style ``none`` suppresses it."""

    width: Optional[NonNegativeNumber] = None
    color: Optional[str] = None
    style: Optional[BorderStyle] = None
    radius: Optional[NonNegativeNumber] = None

    @property
    def visible(self) -> bool:
        return self.style != "none" and (self.width or 0) > 0
