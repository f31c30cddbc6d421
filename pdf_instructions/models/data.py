"""Data elements: tables and key/value lists."""

from typing import List, Literal, Optional

from pydantic import ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

from .base import FontWeight, InstructionModel, NonNegativeNumber

# Error type whose context carries the index of the offending row.
ROW_LENGTH_ERROR = "row_length"


class HeaderStyle(InstructionModel):
    background_color: Optional[str] = None
    color: Optional[str] = None
    font_weight: Optional[FontWeight] = None


class CellStyle(InstructionModel):
    padding: Optional[NonNegativeNumber] = None
    border_color: Optional[str] = None
    font_size: Optional[NonNegativeNumber] = None


class TableElement(InstructionModel):
    """Table with one header row; every body row has exactly one cell per header."""

    type: Literal["table"] = "table"
    headers: List[str]
    rows: List[List[str]]
    column_widths: Optional[List[NonNegativeNumber]] = None
    header_style: Optional[HeaderStyle] = None
    cell_style: Optional[CellStyle] = None
    alternate_row_color: Optional[str] = None
    margin_bottom: Optional[NonNegativeNumber] = None

    @field_validator("rows")
    @classmethod
    def _rows_match_headers(cls, rows: List[List[str]], info: ValidationInfo) -> List[List[str]]:
        headers = info.data.get("headers")
        if headers is None:
            return rows
        for index, row in enumerate(rows):
            if len(row) != len(headers):
                raise PydanticCustomError(
                    ROW_LENGTH_ERROR,
                    "row {row} has {cells} cells, expected {expected} (one per header)",
                    {"row": index, "cells": len(row), "expected": len(headers)},
                )
        return rows


class KeyValueItem(InstructionModel):
    key: str
    value: str


class KeyStyle(InstructionModel):
    font_weight: Optional[FontWeight] = None
    color: Optional[str] = None
    width: Optional[NonNegativeNumber] = None


class ValueStyle(InstructionModel):
    color: Optional[str] = None


class KeyValueElement(InstructionModel):
    type: Literal["keyValue"] = "keyValue"
    items: List[KeyValueItem]
    layout: Optional[Literal["horizontal", "vertical", "grid"]] = None
    key_style: Optional[KeyStyle] = None
    value_style: Optional[ValueStyle] = None
    margin_bottom: Optional[NonNegativeNumber] = None
