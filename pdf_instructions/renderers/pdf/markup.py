"""Paragraph markup and styles for the print renderers."""

from __future__ import annotations

from typing import Optional
from xml.sax.saxutils import escape as xml_escape

from reportlab.lib.enums import TA_CENTER, TA_JUSTIFY, TA_LEFT, TA_RIGHT
from reportlab.lib.styles import ParagraphStyle

from ...engine.rich_text import BOLD, CODE, ITALIC, LINK, STRIKETHROUGH, tokenize
from ...engine.theme import CODE_BACKGROUND, LINK_COLOR
from .render_utils import MONO_FONT, resolve_font_variant, to_color

ALIGNMENTS = {
    "left": TA_LEFT,
    "center": TA_CENTER,
    "right": TA_RIGHT,
    "justify": TA_JUSTIFY,
}

BOLD_WEIGHTS = {"bold", "semibold"}


def escape(text: str) -> str:
    return xml_escape(str(text))


def _attr(value: str) -> str:
    return xml_escape(value, {'"': "&quot;"})


def rich_text_markup(text: str) -> str:
    """Tokenize inline markup into reportlab paragraph mini-markup."""
    parts = []
    for node in tokenize(text):
        content = escape(node.content)
        if node.type == BOLD:
            parts.append(f"<b>{content}</b>")
        elif node.type == ITALIC:
            parts.append(f"<i>{content}</i>")
        elif node.type == STRIKETHROUGH:
            parts.append(f"<strike>{content}</strike>")
        elif node.type == CODE:
            parts.append(f'<font face="{MONO_FONT}" backColor="{CODE_BACKGROUND}">{content}</font>')
        elif node.type == LINK:
            parts.append(f'<a href="{_attr(node.href or "")}" color="{LINK_COLOR}"><u>{content}</u></a>')
        else:
            parts.append(content)
    return "".join(parts)


def paragraph_style(
    name: str,
    font_family: str,
    font_size: float,
    color: str,
    *,
    line_height: float = 1.3,
    align: Optional[str] = None,
    bold: bool = False,
    italic: bool = False,
    space_before: float = 0.0,
    space_after: float = 0.0,
) -> ParagraphStyle:
    """
    Build a paragraph style.

    Args:
        name: Style name
        font_family: Theme font family (built-in PDF family name)
        font_size: Size in points
        color: Any supported color expression
        line_height: Leading as a multiple of the font size
        align: left/center/right/justify
        bold: Use the family's bold face
        italic: Use the family's italic face
        space_before: Space above in points
        space_after: Space below in points

    Returns:
        Configured ``ParagraphStyle``
    """
    return ParagraphStyle(
        name,
        fontName=resolve_font_variant(font_family, bold=bold, italic=italic),
        fontSize=font_size,
        leading=font_size * line_height,
        textColor=to_color(color),
        alignment=ALIGNMENTS.get(align or "left", TA_LEFT),
        spaceBefore=space_before,
        spaceAfter=space_after,
    )
