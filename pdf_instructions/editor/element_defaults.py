"""
Default element and document factory.

Every default is a valid instance of its tag, so an interactively built
tree validates at every step.
"""

import copy
import logging
from typing import Any, Dict

from ..models import Element, InstructionDocument
from ..validator import validate_element, validate_instructions

logger = logging.getLogger(__name__)

_DEFAULT_ELEMENTS: Dict[str, Dict[str, Any]] = {
    "heading": {"type": "heading", "level": 1, "content": "New Heading", "align": "left"},
    "paragraph": {
        "type": "paragraph",
        "content": "Enter your text here. Use **bold**, *italic*, `code`, or [links](https://example.com).",
        "align": "left",
    },
    "list": {"type": "list", "variant": "unordered", "items": ["Item 1", "Item 2", "Item 3"]},
    "caption": {"type": "caption", "content": "Caption text", "align": "center"},
    "callout": {
        "type": "callout",
        "content": "This is an important note or quote.",
        "variant": "info",
        "title": "Note",
    },
    "codeBlock": {
        "type": "codeBlock",
        "code": 'def hello():\n    print("Hello, world!")',
        "language": "python",
        "showLineNumbers": True,
    },
    "section": {
        "type": "section",
        "title": "Section Title",
        "children": [],
        "backgroundColor": "#f7fafc",
        "padding": {"top": 15, "right": 15, "bottom": 15, "left": 15},
    },
    "columns": {
        "type": "columns",
        "columns": [{"width": 1, "children": []}, {"width": 1, "children": []}],
        "gap": 16,
    },
    "spacer": {"type": "spacer", "height": 20},
    "divider": {"type": "divider", "thickness": 1, "marginY": 15},
    "pageBreak": {"type": "pageBreak"},
    "table": {
        "type": "table",
        "headers": ["Column 1", "Column 2", "Column 3"],
        "rows": [
            ["Row 1 Cell 1", "Row 1 Cell 2", "Row 1 Cell 3"],
            ["Row 2 Cell 1", "Row 2 Cell 2", "Row 2 Cell 3"],
        ],
    },
    "keyValue": {
        "type": "keyValue",
        "items": [{"key": "Label 1", "value": "Value 1"}, {"key": "Label 2", "value": "Value 2"}],
        "layout": "horizontal",
    },
    "barChart": {
        "type": "barChart",
        "title": "Bar Chart",
        "data": [
            {"label": "Category A", "value": 100},
            {"label": "Category B", "value": 75},
            {"label": "Category C", "value": 50},
        ],
        "showValues": True,
    },
    "pieChart": {
        "type": "pieChart",
        "title": "Pie Chart",
        "data": [
            {"label": "Segment A", "value": 40},
            {"label": "Segment B", "value": 35},
            {"label": "Segment C", "value": 25},
        ],
        "showPercentages": True,
    },
    "lineChart": {
        "type": "lineChart",
        "title": "Line Chart",
        "data": [
            {
                "label": "Series 1",
                "values": [
                    {"x": "Jan", "y": 10},
                    {"x": "Feb", "y": 25},
                    {"x": "Mar", "y": 15},
                    {"x": "Apr", "y": 30},
                ],
            }
        ],
        "showDots": True,
        "showGrid": True,
    },
    "image": {"type": "image", "src": "", "alt": "Image", "align": "center"},
}

ELEMENT_LABELS: Dict[str, str] = {
    "heading": "Heading",
    "paragraph": "Paragraph",
    "list": "List",
    "caption": "Caption",
    "callout": "Callout",
    "codeBlock": "Code Block",
    "section": "Section",
    "columns": "Columns",
    "spacer": "Spacer",
    "divider": "Divider",
    "pageBreak": "Page Break",
    "table": "Table",
    "keyValue": "Key-Value",
    "barChart": "Bar Chart",
    "pieChart": "Pie Chart",
    "lineChart": "Line Chart",
    "image": "Image",
}

DEFAULT_DOCUMENT: Dict[str, Any] = {
    "metadata": {"title": "Untitled Document"},
    "pageSettings": {
        "size": "A4",
        "orientation": "portrait",
        "margins": {"top": 40, "right": 40, "bottom": 60, "left": 40},
    },
    "theme": {
        "primaryColor": "#1a365d",
        "secondaryColor": "#2d3748",
        "accentColor": "#3182ce",
        "textColor": "#1a202c",
        "mutedColor": "#718096",
        "backgroundColor": "#ffffff",
    },
    "footer": {"enabled": True, "showPageNumbers": True, "pageNumberFormat": "Page {current} of {total}"},
    "content": [],
}


def create_default_element(element_type: str) -> Element:
    """
    Build a default instance of an element tag.

    Args:
        element_type: Element tag, e.g. ``"heading"``

    Returns:
        Validated element model

    Raises:
        ValueError: If the tag is unknown
    """
    if element_type not in _DEFAULT_ELEMENTS:
        raise ValueError(f"Unknown element type: {element_type}")
    return validate_element(copy.deepcopy(_DEFAULT_ELEMENTS[element_type]))


def create_default_instructions() -> InstructionDocument:
    """Blank A4 document with page-numbered footer and the default palette."""
    return validate_instructions(copy.deepcopy(DEFAULT_DOCUMENT))


def get_element_label(element_type: str) -> str:
    return ELEMENT_LABELS.get(element_type, element_type)


def _truncate(text: str, limit: int) -> str:
    return text[:limit] + ("..." if len(text) > limit else "")


def get_element_summary(element: Element) -> str:
    """One-line description of an element for element lists."""
    kind = element.type
    if kind == "heading":
        return f"H{element.level}: {_truncate(element.content, 30)}"
    if kind == "paragraph":
        return _truncate(element.content, 40)
    if kind == "list":
        return f"{element.variant} list ({len(element.items)} items)"
    if kind == "table":
        return f"{len(element.headers)} columns, {len(element.rows)} rows"
    if kind == "keyValue":
        return f"{len(element.items)} items"
    if kind in ("barChart", "pieChart", "lineChart"):
        return element.title or f"{len(element.data)} data points"
    if kind == "section":
        return element.title or f"{len(element.children)} elements"
    if kind == "divider":
        return "Horizontal line"
    if kind == "spacer":
        return f"{element.height:g}px spacing"
    if kind == "pageBreak":
        return "Page break"
    if kind == "caption":
        return _truncate(element.content, 30)
    if kind == "callout":
        return f"{element.variant or 'info'}: {_truncate(element.content, 30)}"
    if kind == "codeBlock":
        return f"{element.language or 'code'} ({len(element.code.splitlines()) or 1} lines)"
    if kind == "image":
        return element.alt or "Image"
    if kind == "columns":
        return f"{len(element.columns)} columns"
    return ""
