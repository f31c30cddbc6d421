"""Print (reportlab) renderers for text, layout, data and media elements."""

from __future__ import annotations

import base64
import logging
from io import BytesIO
from typing import List, Optional

from PIL import Image as PILImage
from reportlab.lib.utils import ImageReader
from reportlab.platypus import (
    Flowable,
    HRFlowable,
    Image,
    ListFlowable,
    ListItem,
    PageBreak,
    Paragraph,
    Preformatted,
    Spacer,
    Table,
    TableStyle,
)

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
from .markup import BOLD_WEIGHTS, escape, paragraph_style, rich_text_markup
from .render_utils import MONO_FONT, padding_box, to_color

logger = logging.getLogger(__name__)

Flowables = List[Flowable]

DEFAULT_IMAGE_WIDTH = 400.0
UNKNOWN_BACKGROUND = "#f1f5f9"


class FrameSpacer(Spacer):
    """Vertical space that never asks for more than the frame has left."""

    def wrap(self, avail_width, avail_height):
        return self.width, min(self.height, max(avail_height, 0))

    def split(self, avail_width, avail_height):
        if avail_height <= 0 or avail_height >= self.height:
            return []
        return [FrameSpacer(self.width, avail_height), FrameSpacer(self.width, self.height - avail_height)]


class FittedImage(Image):
    """
    An image that shrinks to the frame instead of failing the layout.

    Reportlab marks a flowable ``_postponed`` after it failed to fit once
    and moves it to a fresh frame; a second failure there is fatal. At
    that point the image is scaled down to the space it was offered.
    """

    def split(self, avail_width, avail_height):
        if not getattr(self, "_postponed", False):
            return []
        width, height = self.drawWidth, self.drawHeight
        scale = min(1.0, avail_width / width if width else 1.0, avail_height / height if height else 1.0)
        if scale <= 0:
            return []
        logger.warning(f"Image of {width:g}x{height:g}pt does not fit the frame; scaling by {scale:.2f}")
        self.drawWidth = width * scale
        self.drawHeight = height * scale
        return [self]


def _margin(value: Optional[float], default: float) -> float:
    return value if value is not None else default


def _with_spacing(flowables: Flowables, margin_bottom: float) -> Flowables:
    if margin_bottom > 0:
        flowables.append(Spacer(1, margin_bottom))
    return flowables


def render_heading(element: HeadingElement, theme: ResolvedTheme) -> Flowables:
    style = heading_style(element.level, theme)
    paragraph = Paragraph(
        escape(element.content),
        paragraph_style(
            f"heading{element.level}",
            theme.font_family,
            style.font_size,
            element.color or style.color,
            line_height=style.line_height,
            align=element.align,
            bold=True,
        ),
    )
    return _with_spacing([paragraph], _margin(element.margin_bottom, style.margin_bottom))


def render_paragraph(element: ParagraphElement, theme: ResolvedTheme) -> Flowables:
    style = paragraph_style(
        "paragraph",
        theme.font_family,
        element.font_size or 11,
        element.color or theme.text_color,
        line_height=element.line_height or 1.6,
        align=element.align,
        bold=element.font_weight in BOLD_WEIGHTS,
    )
    return _with_spacing([Paragraph(rich_text_markup(element.content), style)], _margin(element.margin_bottom, 10))


def render_list(element: ListElement, theme: ResolvedTheme) -> Flowables:
    font_size = element.font_size or 11
    color = element.color or theme.text_color
    style = paragraph_style(
        "list-item",
        theme.font_family,
        font_size,
        color,
        line_height=1.5,
        space_after=_margin(element.spacing, 4),
    )
    items = [ListItem(Paragraph(rich_text_markup(item), style)) for item in element.items]
    ordered = element.variant == "ordered"
    flowable = ListFlowable(
        items,
        bulletType="1" if ordered else "bullet",
        start=1 if ordered else "•",
        bulletFormat="%s." if ordered else None,
        leftIndent=20,
        bulletFontName=style.fontName,
        bulletFontSize=font_size,
        bulletColor=to_color(color),
    )
    return _with_spacing([flowable], _margin(element.margin_bottom, 15))


def render_caption(element: CaptionElement, theme: ResolvedTheme) -> Flowables:
    style = paragraph_style(
        "caption",
        theme.font_family,
        9,
        element.color or theme.muted_color,
        line_height=1.4,
        align=element.align,
        space_before=4,
    )
    return [Paragraph(rich_text_markup(element.content), style)]


def render_callout(element: CalloutElement, theme: ResolvedTheme) -> Flowables:
    variant = element.variant or "info"
    colors = CALLOUT_VARIANTS[variant]
    cell: Flowables = []
    if element.title:
        title_style = paragraph_style(
            "callout-title", theme.font_family, 11, colors.title, bold=True, space_after=4
        )
        cell.append(Paragraph(escape(element.title), title_style))
    content_style = paragraph_style(
        "callout-content",
        theme.font_family,
        10,
        theme.text_color,
        line_height=1.5,
        italic=variant == "quote",
    )
    cell.append(Paragraph(rich_text_markup(element.content), content_style))

    table = Table([[cell]], colWidths=["100%"], splitInRow=1)
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, -1), to_color(colors.background)),
                ("LINEBEFORE", (0, 0), (0, -1), 4, to_color(colors.border)),
                ("TOPPADDING", (0, 0), (-1, -1), 10),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 10),
                ("LEFTPADDING", (0, 0), (-1, -1), 14),
                ("RIGHTPADDING", (0, 0), (-1, -1), 14),
            ]
        )
    )
    return _with_spacing([table], _margin(element.margin_bottom, 12))


def render_code_block(element: CodeBlockElement, theme: ResolvedTheme) -> Flowables:
    code_style = paragraph_style("code", MONO_FONT, 9, CODE_BLOCK_COLORS["code"], line_height=1.5)
    lines = element.code.split("\n")

    if element.show_line_numbers:
        number_style = paragraph_style(
            "code-line-number", MONO_FONT, 9, CODE_BLOCK_COLORS["line_number"], line_height=1.5, align="right"
        )
        numbers = Preformatted("\n".join(str(number) for number in range(1, len(lines) + 1)), number_style)
        code_cell = Table(
            [[numbers, Preformatted("\n".join(lines), code_style)]],
            colWidths=[30, "*"],
            splitInRow=1,
            style=[
                ("VALIGN", (0, 0), (-1, -1), "TOP"),
                ("LEFTPADDING", (0, 0), (-1, -1), 0),
                ("RIGHTPADDING", (0, 0), (0, -1), 12),
                ("RIGHTPADDING", (1, 0), (1, -1), 0),
                ("TOPPADDING", (0, 0), (-1, -1), 0),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 0),
            ],
        )
    else:
        code_cell = Preformatted(element.code, code_style)

    rows = [[code_cell]]
    commands = [
        ("BACKGROUND", (0, 0), (-1, -1), to_color(CODE_BLOCK_COLORS["background"])),
        ("LEFTPADDING", (0, 0), (-1, -1), 12),
        ("RIGHTPADDING", (0, 0), (-1, -1), 12),
        ("TOPPADDING", (0, -1), (-1, -1), 12),
        ("BOTTOMPADDING", (0, -1), (-1, -1), 12),
        ("ROUNDEDCORNERS", [4, 4, 4, 4]),
    ]
    if element.language:
        header_style = paragraph_style("code-language", MONO_FONT, 9, CODE_BLOCK_COLORS["header_text"])
        rows.insert(0, [Paragraph(escape(element.language), header_style)])
        commands.extend(
            [
                ("BACKGROUND", (0, 0), (-1, 0), to_color(CODE_BLOCK_COLORS["header"])),
                ("TOPPADDING", (0, 0), (-1, 0), 6),
                ("BOTTOMPADDING", (0, 0), (-1, 0), 6),
            ]
        )
    table = Table(rows, colWidths=["100%"], splitInRow=1)
    table.setStyle(TableStyle(commands))
    return _with_spacing([table], _margin(element.margin_bottom, 12))


def render_spacer(element: SpacerElement, theme: ResolvedTheme) -> Flowables:
    return [FrameSpacer(1, element.height)]


def render_divider(element: DividerElement, theme: ResolvedTheme) -> Flowables:
    margin_y = _margin(element.margin_y, 15)
    return [
        HRFlowable(
            width="100%",
            thickness=_margin(element.thickness, 1),
            color=to_color(element.color or theme.muted_color),
            spaceBefore=margin_y,
            spaceAfter=margin_y,
        )
    ]


def render_page_break(element: PageBreakElement, theme: ResolvedTheme) -> Flowables:
    return [PageBreak()]


def render_table(element: TableElement, theme: ResolvedTheme) -> Flowables:
    header_style = element.header_style
    cell_style = element.cell_style
    padding = cell_style.padding if cell_style and cell_style.padding is not None else 8
    font_size = cell_style.font_size if cell_style and cell_style.font_size is not None else 10
    border_color = (cell_style.border_color if cell_style else None) or BORDER_COLOR
    header_weight = (header_style.font_weight if header_style else None) or "bold"

    head_para = paragraph_style(
        "table-header",
        theme.font_family,
        font_size,
        (header_style.color if header_style else None) or "#ffffff",
        bold=header_weight in BOLD_WEIGHTS,
    )
    cell_para = paragraph_style("table-cell", theme.font_family, font_size, theme.text_color)

    data = [[Paragraph(escape(header), head_para) for header in element.headers]]
    data.extend([Paragraph(escape(cell), cell_para) for cell in row] for row in element.rows)

    commands = [
        ("BACKGROUND", (0, 0), (-1, 0), to_color((header_style.background_color if header_style else None) or theme.primary_color)),
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ("LEFTPADDING", (0, 0), (-1, -1), padding),
        ("RIGHTPADDING", (0, 0), (-1, -1), padding),
        ("TOPPADDING", (0, 0), (-1, -1), padding),
        ("BOTTOMPADDING", (0, 0), (-1, -1), padding),
    ]
    if element.rows:
        commands.append(("LINEBELOW", (0, 1), (-1, -1), 1, to_color(border_color)))
    if element.alternate_row_color:
        for row_index in range(1, len(element.rows), 2):
            commands.append(("BACKGROUND", (0, row_index + 1), (-1, row_index + 1), to_color(element.alternate_row_color)))

    table = Table(data, colWidths=_table_column_widths(element), repeatRows=1, splitInRow=1)
    table.setStyle(TableStyle(commands))
    return _with_spacing([table], _margin(element.margin_bottom, 20))


def _table_column_widths(element: TableElement) -> List[str]:
    count = len(element.headers) or 1
    widths = element.column_widths or []
    return [f"{widths[i]:g}%" if i < len(widths) and widths[i] else f"{100 / count:g}%" for i in range(count)]


def render_key_value(element: KeyValueElement, theme: ResolvedTheme) -> Flowables:
    layout = element.layout or "horizontal"
    key_style = element.key_style
    key_para = paragraph_style(
        "kv-key",
        theme.font_family,
        10,
        (key_style.color if key_style else None) or theme.muted_color,
        bold=((key_style.font_weight if key_style else None) or "medium") in BOLD_WEIGHTS,
        space_after=0 if layout == "horizontal" else 2,
    )
    value_para = paragraph_style(
        "kv-value",
        theme.font_family,
        11,
        (element.value_style.color if element.value_style else None) or theme.text_color,
        bold=True,
    )
    pairs = [(Paragraph(escape(item.key), key_para), Paragraph(escape(item.value), value_para)) for item in element.items]
    margin_bottom = _margin(element.margin_bottom, 15)
    if not pairs:
        return _with_spacing([], margin_bottom)

    no_padding = [
        ("LEFTPADDING", (0, 0), (-1, -1), 0),
        ("TOPPADDING", (0, 0), (-1, -1), 0),
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
    ]
    if layout == "horizontal":
        key_width = key_style.width if key_style and key_style.width is not None else 120
        table = Table([list(pair) for pair in pairs], colWidths=[key_width, "*"], splitInRow=1)
        table.setStyle(TableStyle(no_padding + [("RIGHTPADDING", (0, 0), (-1, -1), 0), ("BOTTOMPADDING", (0, 0), (-1, -1), 6)]))
        return _with_spacing([table], margin_bottom)

    if layout == "grid":
        cells = [[key, value] for key, value in pairs]
        rows = [cells[index:index + 2] for index in range(0, len(cells), 2)]
        if len(rows[-1]) == 1:
            rows[-1].append("")
        table = Table(rows, colWidths=["50%", "50%"], splitInRow=1)
        table.setStyle(TableStyle(no_padding + [("RIGHTPADDING", (0, 0), (-1, -1), 10), ("BOTTOMPADDING", (0, 0), (-1, -1), 12)]))
        return _with_spacing([table], margin_bottom)

    flowables: Flowables = []
    for key, value in pairs:
        flowables.extend([key, value, Spacer(1, 8)])
    return _with_spacing(flowables, margin_bottom)


def _image_source(src: str):
    """Resolve a file path, URL or data URI into (flowable source, size probe)."""
    if src.startswith("data:"):
        header, _, payload = src.partition(",")
        raw = base64.b64decode(payload) if ";base64" in header else payload.encode("utf-8")
        with PILImage.open(BytesIO(raw)) as probe:
            probe.verify()
        return BytesIO(raw), ImageReader(BytesIO(raw))
    return src, ImageReader(src)


def render_image(element: ImageElement, theme: ResolvedTheme) -> Flowables:
    if not element.src.strip():
        logger.debug("Skipping image without a source")
        return []

    try:
        source, reader = _image_source(element.src.strip())
        intrinsic_width, intrinsic_height = reader.getSize()
    except (OSError, ValueError) as exc:
        logger.warning(f"Could not load image {element.src[:60]!r}: {exc}")
        return _with_spacing(
            [_placeholder_box(f"Image unavailable: {element.alt or element.src[:60]}", theme)],
            _margin(element.margin_bottom, 12),
        )

    max_width = element.width or DEFAULT_IMAGE_WIDTH
    if element.height:
        height = element.height
        width = min(max_width, intrinsic_width * height / intrinsic_height if intrinsic_height else max_width)
    else:
        width = min(max_width, float(intrinsic_width))
        height = intrinsic_height * width / intrinsic_width if intrinsic_width else width

    image = FittedImage(source, width=width, height=height)
    image.hAlign = (element.align or "left").upper()
    return _with_spacing([image], _margin(element.margin_bottom, 12))


def _drop_page_breaks(flowables: Flowables) -> Flowables:
    kept = [flowable for flowable in flowables if not isinstance(flowable, PageBreak)]
    if len(kept) != len(flowables):
        logger.debug("Ignoring page breaks nested inside a composite element")
    return kept


def render_section(element: SectionElement, children: List[Flowables], theme: ResolvedTheme) -> Flowables:
    cell: Flowables = []
    if element.title:
        title_style = paragraph_style(
            "section-title", theme.font_family, 14, theme.primary_color, bold=True, space_after=12
        )
        cell.append(Paragraph(escape(element.title), title_style))
    for child in children:
        cell.extend(_drop_page_breaks(child))
    if not cell:
        cell.append(Spacer(1, 0))

    padding = padding_box(element.padding)
    commands = [
        ("LEFTPADDING", (0, 0), (-1, -1), padding.left),
        ("RIGHTPADDING", (0, 0), (-1, -1), padding.right),
        ("TOPPADDING", (0, 0), (-1, -1), padding.top),
        ("BOTTOMPADDING", (0, 0), (-1, -1), padding.bottom),
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
    ]
    if element.background_color:
        commands.append(("BACKGROUND", (0, 0), (-1, -1), to_color(element.background_color)))
    border = element.border
    if border is not None and border.visible:
        dashes = {"dashed": (6, 3), "dotted": (1, 2)}.get(border.style or "solid")
        commands.append(("BOX", (0, 0), (-1, -1), border.width, to_color(border.color or BORDER_COLOR), None, dashes))
        if border.radius:
            commands.append(("ROUNDEDCORNERS", [border.radius] * 4))

    table = Table([[cell]], colWidths=["100%"], splitInRow=1)
    table.setStyle(TableStyle(commands))
    return _with_spacing([table], _margin(element.margin_bottom, 20))


def render_columns(element: ColumnsElement, columns: List[List[Flowables]], theme: ResolvedTheme) -> Flowables:
    if not columns:
        return []
    gap = _margin(element.gap, 10)
    fractions = column_fractions([column.width for column in element.columns])
    cells = []
    for rendered in columns:
        cell: Flowables = []
        for child in rendered:
            cell.extend(_drop_page_breaks(child))
        cells.append(cell or [Spacer(1, 0)])

    commands = [
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ("LEFTPADDING", (0, 0), (-1, -1), 0),
        ("TOPPADDING", (0, 0), (-1, -1), 0),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 0),
        ("RIGHTPADDING", (0, 0), (-1, -1), gap),
        ("RIGHTPADDING", (-1, 0), (-1, -1), 0),
    ]
    table = Table([cells], colWidths=[f"{fraction * 100:g}%" for fraction in fractions], splitInRow=1)
    table.setStyle(TableStyle(commands))
    return _with_spacing([table], _margin(element.margin_bottom, 15))


def _placeholder_box(message: str, theme: ResolvedTheme) -> Table:
    style = paragraph_style("placeholder", theme.font_family, 10, theme.muted_color, align="center")
    table = Table([[Paragraph(escape(message), style)]], colWidths=["100%"])
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, -1), to_color(UNKNOWN_BACKGROUND)),
                ("TOPPADDING", (0, 0), (-1, -1), 12),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 12),
            ]
        )
    )
    return table


def render_unknown(tag: str, reason: str, theme: ResolvedTheme) -> Flowables:
    return _with_spacing([_placeholder_box(f"Unknown element type: {tag}", theme)], 12)
