"""Interactive (HTML) renderers for text, layout, data and media elements."""

import logging
from typing import List

from ...engine.charts import column_fractions
from ...engine.theme import (
    BORDER_COLOR,
    CALLOUT_VARIANTS,
    CODE_BLOCK_COLORS,
    ResolvedTheme,
    heading_style,
)
from ...models import (
    CalloutElement,
    CaptionElement,
    CodeBlockElement,
    ColumnsElement,
    DividerElement,
    HeadingElement,
    ImageElement,
    KeyValueElement,
    ListElement,
    PageBreakElement,
    ParagraphElement,
    SectionElement,
    SpacerElement,
    TableElement,
)
from .markup import FONT_WEIGHTS, escape, px, render_rich_text, style_attr

logger = logging.getLogger(__name__)

MONO_FONT = "'Courier New', Courier, monospace"


def render_heading(element: HeadingElement, theme: ResolvedTheme) -> str:
    style = heading_style(element.level, theme)
    margin_bottom = element.margin_bottom if element.margin_bottom is not None else style.margin_bottom
    css = {
        "font-size": px(style.font_size),
        "font-weight": "700" if style.bold else "600",
        "color": element.color or style.color,
        "text-align": element.align or "left",
        "line-height": f"{style.line_height:g}",
        "margin": f"0 0 {margin_bottom:g}px 0",
    }
    return f'<h{element.level} class="pi-heading"{style_attr(css)}>{escape(element.content)}</h{element.level}>'


def render_paragraph(element: ParagraphElement, theme: ResolvedTheme) -> str:
    css = {
        "font-size": px(element.font_size or 11),
        "line-height": f"{element.line_height or 1.6:g}",
        "color": element.color or theme.text_color,
        "text-align": element.align or "left",
        "font-weight": FONT_WEIGHTS[element.font_weight or "normal"],
        "margin": f"0 0 {_margin(element.margin_bottom, 10)} 0",
    }
    return f'<p class="pi-paragraph"{style_attr(css)}>{render_rich_text(element.content)}</p>'


def render_list(element: ListElement, theme: ResolvedTheme) -> str:
    tag = "ol" if element.variant == "ordered" else "ul"
    list_css = {
        "font-size": px(element.font_size or 11),
        "color": element.color or theme.text_color,
        "line-height": "1.5",
        "margin": f"0 0 {_margin(element.margin_bottom, 15)} 0",
        "padding-left": "20px",
    }
    item_css = style_attr({"margin-bottom": px(element.spacing if element.spacing is not None else 4)})
    items = "".join(f"<li{item_css}>{render_rich_text(item)}</li>" for item in element.items)
    return f'<{tag} class="pi-list"{style_attr(list_css)}>{items}</{tag}>'


def render_caption(element: CaptionElement, theme: ResolvedTheme) -> str:
    css = {
        "font-size": "9px",
        "color": element.color or theme.muted_color,
        "text-align": element.align or "left",
        "line-height": "1.4",
        "margin": "4px 0 0 0",
    }
    return f'<p class="pi-caption"{style_attr(css)}>{render_rich_text(element.content)}</p>'


def render_callout(element: CalloutElement, theme: ResolvedTheme) -> str:
    variant = element.variant or "info"
    colors = CALLOUT_VARIANTS[variant]
    container_css = {
        "background-color": colors.background,
        "border-left": f"4px solid {colors.border}",
        "padding": "10px 14px",
        "margin": f"0 0 {_margin(element.margin_bottom, 12)} 0",
    }
    parts = [f'<div class="pi-callout pi-callout-{variant}"{style_attr(container_css)}>']
    if element.title:
        title_css = {"font-weight": "700", "font-size": "11px", "color": colors.title, "margin-bottom": "4px"}
        parts.append(f'<div class="pi-callout-title"{style_attr(title_css)}>{escape(element.title)}</div>')
    content_css = {
        "font-size": "10px",
        "line-height": "1.5",
        "color": theme.text_color,
        "font-style": "italic" if variant == "quote" else "normal",
    }
    parts.append(f'<div class="pi-callout-content"{style_attr(content_css)}>{render_rich_text(element.content)}</div>')
    parts.append("</div>")
    return "".join(parts)


def render_code_block(element: CodeBlockElement, theme: ResolvedTheme) -> str:
    container_css = {
        "background-color": CODE_BLOCK_COLORS["background"],
        "border-radius": "4px",
        "overflow": "hidden",
        "margin": f"0 0 {_margin(element.margin_bottom, 12)} 0",
    }
    parts = [f'<div class="pi-code-block"{style_attr(container_css)}>']
    if element.language:
        header_css = {
            "background-color": CODE_BLOCK_COLORS["header"],
            "color": CODE_BLOCK_COLORS["header_text"],
            "font-family": MONO_FONT,
            "font-size": "9px",
            "padding": "6px 12px",
        }
        parts.append(f'<div class="pi-code-language"{style_attr(header_css)}>{escape(element.language)}</div>')

    pre_css = {
        "margin": "0",
        "padding": "12px",
        "color": CODE_BLOCK_COLORS["code"],
        "font-family": MONO_FONT,
        "font-size": "9px",
        "line-height": "1.5",
        "white-space": "pre",
        "overflow-x": "auto",
    }
    if element.show_line_numbers:
        number_css = style_attr(
            {
                "display": "inline-block",
                "width": "30px",
                "padding-right": "12px",
                "text-align": "right",
                "color": CODE_BLOCK_COLORS["line_number"],
                "user-select": "none",
            }
        )
        lines = element.code.split("\n")
        body = "\n".join(
            f'<span class="pi-line"><span class="pi-line-number"{number_css}>{number}</span>{escape(line)}</span>'
            for number, line in enumerate(lines, start=1)
        )
    else:
        body = escape(element.code)
    parts.append(f"<pre{style_attr(pre_css)}><code>{body}</code></pre>")
    parts.append("</div>")
    return "".join(parts)


def render_spacer(element: SpacerElement, theme: ResolvedTheme) -> str:
    return f'<div class="pi-spacer"{style_attr({"height": px(element.height)})}></div>'


def render_divider(element: DividerElement, theme: ResolvedTheme) -> str:
    thickness = element.thickness if element.thickness is not None else 1
    margin_y = element.margin_y if element.margin_y is not None else 15
    css = {
        "border": "none",
        "border-bottom": f"{thickness:g}px solid {element.color or theme.muted_color}",
        "margin": f"{margin_y:g}px 0",
    }
    return f'<hr class="pi-divider"{style_attr(css)}>'


def render_table(element: TableElement, theme: ResolvedTheme) -> str:
    header_style = element.header_style
    cell_style = element.cell_style
    padding = px(cell_style.padding if cell_style and cell_style.padding is not None else 8)
    font_size = px(cell_style.font_size if cell_style and cell_style.font_size is not None else 10)
    border_color = (cell_style.border_color if cell_style else None) or BORDER_COLOR
    widths = _table_column_widths(element)

    table_css = {
        "width": "100%",
        "border-collapse": "collapse",
        "margin": f"0 0 {_margin(element.margin_bottom, 20)} 0",
    }
    header_row_css = style_attr(
        {"background-color": (header_style.background_color if header_style else None) or theme.primary_color}
    )
    header_cells = []
    for index, header in enumerate(element.headers):
        css = {
            "width": widths[index],
            "padding": padding,
            "color": (header_style.color if header_style else None) or "#ffffff",
            "font-weight": FONT_WEIGHTS[(header_style.font_weight if header_style else None) or "bold"],
            "font-size": font_size,
            "text-align": "left",
        }
        header_cells.append(f"<th{style_attr(css)}>{escape(header)}</th>")

    body_rows = []
    for row_index, row in enumerate(element.rows):
        row_css = {"border-bottom": f"1px solid {border_color}"}
        if element.alternate_row_color and row_index % 2 == 1:
            row_css["background-color"] = element.alternate_row_color
        cell_css = style_attr({"padding": padding, "font-size": font_size, "color": theme.text_color})
        cells = "".join(f"<td{cell_css}>{escape(cell)}</td>" for cell in row)
        body_rows.append(f"<tr{style_attr(row_css)}>{cells}</tr>")

    return (
        f'<table class="pi-table"{style_attr(table_css)}>'
        f"<thead><tr{header_row_css}>{''.join(header_cells)}</tr></thead>"
        f"<tbody>{''.join(body_rows)}</tbody></table>"
    )


def _table_column_widths(element: TableElement) -> List[str]:
    count = len(element.headers) or 1
    widths = element.column_widths or []
    return [f"{widths[i]:g}%" if i < len(widths) and widths[i] else f"{100 / count:g}%" for i in range(count)]


def render_key_value(element: KeyValueElement, theme: ResolvedTheme) -> str:
    layout = element.layout or "horizontal"
    key_style = element.key_style
    key_css = {
        "font-size": "10px",
        "font-weight": FONT_WEIGHTS[(key_style.font_weight if key_style else None) or "medium"],
        "color": (key_style.color if key_style else None) or theme.muted_color,
    }
    if layout == "horizontal":
        key_css["width"] = px(key_style.width if key_style and key_style.width is not None else 120)
        key_css["flex-shrink"] = "0"
    else:
        key_css["margin-bottom"] = "2px"
    value_css = {
        "font-size": "11px",
        "font-weight": "700",
        "color": (element.value_style.color if element.value_style else None) or theme.text_color,
    }

    if layout == "grid":
        container_css = {"display": "flex", "flex-wrap": "wrap"}
        item_css = {"width": "50%", "box-sizing": "border-box", "padding-right": "10px", "margin-bottom": "12px"}
    elif layout == "vertical":
        container_css = {"display": "flex", "flex-direction": "column"}
        item_css = {"margin-bottom": "8px"}
    else:
        container_css = {"display": "flex", "flex-direction": "column"}
        item_css = {"display": "flex", "margin-bottom": "6px"}
    container_css["margin"] = f"0 0 {_margin(element.margin_bottom, 15)} 0"

    items = "".join(
        f'<div class="pi-kv-item"{style_attr(item_css)}>'
        f'<div class="pi-kv-key"{style_attr(key_css)}>{escape(item.key)}</div>'
        f'<div class="pi-kv-value"{style_attr(value_css)}>{escape(item.value)}</div>'
        "</div>"
        for item in element.items
    )
    return f'<div class="pi-key-value pi-kv-{layout}"{style_attr(container_css)}>{items}</div>'


def render_image(element: ImageElement, theme: ResolvedTheme) -> str:
    align = element.align or "left"
    container_css = {"text-align": align, "margin": f"0 0 {_margin(element.margin_bottom, 12)} 0"}
    if not element.src.strip():
        placeholder_css = {
            "border": f"1px dashed {BORDER_COLOR}",
            "color": theme.muted_color,
            "font-size": "10px",
            "padding": "20px",
            "text-align": "center",
        }
        return (
            f'<div class="pi-image"{style_attr(container_css)}>'
            f'<div class="pi-image-placeholder"{style_attr(placeholder_css)}>'
            f"{escape(element.alt or 'No image source')}</div></div>"
        )
    image_css = {
        "max-width": px(element.width or 400),
        "width": "100%",
        "height": px(element.height) or "auto",
        "object-fit": "contain",
    }
    return (
        f'<div class="pi-image"{style_attr(container_css)}>'
        f'<img src="{escape(element.src)}" alt="{escape(element.alt or "")}"{style_attr(image_css)}></div>'
    )


def render_section(element: SectionElement, children: List[str], theme: ResolvedTheme) -> str:
    padding = element.padding
    css = {
        "background-color": element.background_color,
        "padding": _box(padding),
        "margin": f"0 0 {_margin(element.margin_bottom, 20)} 0",
    }
    border = element.border
    if border is not None and border.visible:
        css["border"] = f"{border.width:g}px {border.style or 'solid'} {border.color or BORDER_COLOR}"
        css["border-radius"] = px(border.radius or 0)
    parts = [f'<div class="pi-section"{style_attr(css)}>']
    if element.title:
        title_css = {"font-size": "14px", "font-weight": "700", "color": theme.primary_color, "margin": "0 0 12px 0"}
        parts.append(f'<h4 class="pi-section-title"{style_attr(title_css)}>{escape(element.title)}</h4>')
    parts.extend(children)
    parts.append("</div>")
    return "".join(parts)


def render_columns(element: ColumnsElement, columns: List[List[str]], theme: ResolvedTheme) -> str:
    gap = element.gap if element.gap is not None else 10
    fractions = column_fractions([column.width for column in element.columns])
    container_css = {
        "display": "flex",
        "width": "100%",
        "margin": f"0 0 {_margin(element.margin_bottom, 15)} 0",
    }
    parts = [f'<div class="pi-columns"{style_attr(container_css)}>']
    for index, (fraction, children) in enumerate(zip(fractions, columns)):
        last = index == len(fractions) - 1
        column_css = {
            "width": f"{fraction * 100:g}%",
            "box-sizing": "border-box",
            "padding-right": "0" if last else px(gap),
            "min-width": "0",
        }
        parts.append(f'<div class="pi-column"{style_attr(column_css)}>{"".join(children)}</div>')
    parts.append("</div>")
    return "".join(parts)


def render_page_break(element: PageBreakElement, theme: ResolvedTheme) -> str:
    css = {
        "border-top": f"2px dashed {BORDER_COLOR}",
        "margin": "16px 0",
        "padding": "8px 0",
        "text-align": "center",
        "font-size": "10px",
        "color": theme.muted_color,
    }
    return f'<div class="pi-page-break"{style_attr(css)}>Page Break</div>'


def render_unknown(tag: str, reason: str, theme: ResolvedTheme) -> str:
    css = {
        "background-color": "#f1f5f9",
        "color": theme.muted_color,
        "font-size": "10px",
        "padding": "12px",
        "border-radius": "4px",
        "margin": "0 0 12px 0",
    }
    return (
        f'<div class="pi-unknown" data-element-type="{escape(tag)}" title="{escape(reason)}"{style_attr(css)}>'
        f"Unknown element type: {escape(tag)}</div>"
    )


def _margin(value, default: float) -> str:
    return f"{value if value is not None else default:g}px"


def _box(spacing) -> str:
    if spacing is None:
        return "0"
    return " ".join(
        f"{side if side is not None else 0:g}px"
        for side in (spacing.top, spacing.right, spacing.bottom, spacing.left)
    )
