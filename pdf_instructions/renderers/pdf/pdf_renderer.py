"""
Print render back-end.

Projects an instruction tree into reportlab flowables and lays them out
with ``SimpleDocTemplate``. Header and footer content, the page number
line and the theme background are painted on every page by the page
callback, outside the content frame.
"""

from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path
from typing import Any, BinaryIO, Dict, List, Optional, Union

from reportlab.platypus import Flowable, Frame, SimpleDocTemplate
from reportlab.platypus.doctemplate import LayoutError

from ...engine.theme import ResolvedTheme, resolve_theme
from ...exceptions import RenderingError
from ...models import Element, InstructionDocument
from ...validator import validate_instructions
from ..dispatcher import Backend, project_tree
from . import charts
from . import elements as element_renderers
from .render_utils import Margins, ensure_margins, ensure_page_size, resolve_font_variant, to_color

logger = logging.getLogger(__name__)

PDF_BACKEND = Backend(
    name="pdf",
    leaf_renderers={
        "heading": element_renderers.render_heading,
        "paragraph": element_renderers.render_paragraph,
        "list": element_renderers.render_list,
        "caption": element_renderers.render_caption,
        "callout": element_renderers.render_callout,
        "codeBlock": element_renderers.render_code_block,
        "spacer": element_renderers.render_spacer,
        "divider": element_renderers.render_divider,
        "table": element_renderers.render_table,
        "keyValue": element_renderers.render_key_value,
        "barChart": charts.render_bar_chart,
        "pieChart": charts.render_pie_chart,
        "lineChart": charts.render_line_chart,
        "image": element_renderers.render_image,
    },
    render_section=element_renderers.render_section,
    render_columns=element_renderers.render_columns,
    render_page_break=element_renderers.render_page_break,
    render_unknown=element_renderers.render_unknown,
)

DEFAULT_PAGE_NUMBER_FORMAT = "Page {current} of {total}"
DEFAULT_PRODUCER = "pdf-instructions"
HEADER_TOP_OFFSET = 15.0
PAGE_NUMBER_BASELINE = 20.0
PAGE_NUMBER_FONT_SIZE = 9

OutputTarget = Union[str, Path, BinaryIO]


def flatten(parts: List[List[Flowable]]) -> List[Flowable]:
    return [flowable for part in parts for flowable in part]


def format_page_number(template: str, current: int, total: Optional[int]) -> str:
    text = template.replace("{current}", str(current))
    return text.replace("{total}", str(total) if total is not None else "?")


class PdfRenderer:
    """
    Render a whole instruction document to PDF.

    Options:
        producer: PDF producer string (default ``pdf-instructions``)
        creator: PDF creator string
    """

    def __init__(
        self,
        document: Union[InstructionDocument, Dict[str, Any]],
        options: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.document = validate_instructions(document)
        self.options = options or {}
        self.theme: ResolvedTheme = resolve_theme(self.document.theme)
        self.page_size = ensure_page_size(self.document.page_settings)
        page = self.document.page_settings
        self.margins: Margins = ensure_margins(page.margins if page else None)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def render(self, output: OutputTarget) -> None:
        """
        Lay out the document and write it to ``output``.

        Args:
            output: File path or writable binary stream

        Raises:
            RenderingError: If reportlab cannot lay out the story
        """
        total_pages = None
        if self._needs_page_total():
            total_pages = self._count_pages()
            logger.debug(f"Document spans {total_pages} pages")

        target = str(output) if isinstance(output, Path) else output
        self._build(target, total_pages)

    def render_bytes(self) -> bytes:
        buffer = BytesIO()
        self.render(buffer)
        return buffer.getvalue()

    def build_story(self) -> List[Flowable]:
        """Fresh flowables for the content tree; reportlab consumes them on build."""
        return flatten(project_tree(self.document.content, self.theme, PDF_BACKEND))

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------
    def _doc_template(self, target) -> SimpleDocTemplate:
        metadata = self.document.metadata
        return SimpleDocTemplate(
            target,
            pagesize=self.page_size,
            topMargin=self.margins.top,
            rightMargin=self.margins.right,
            bottomMargin=self.margins.bottom,
            leftMargin=self.margins.left,
            title=metadata.title,
            author=metadata.author or "",
            subject=metadata.subject or "",
            keywords=", ".join(metadata.keywords or []),
            creator=self.options.get("creator", DEFAULT_PRODUCER),
            producer=self.options.get("producer", DEFAULT_PRODUCER),
        )

    def _build(self, target, total_pages: Optional[int]) -> int:
        doc = self._doc_template(target)
        pages: List[int] = []

        def on_page(canvas, page_doc):
            pages.append(canvas.getPageNumber())
            self._draw_page(canvas, canvas.getPageNumber(), total_pages)

        try:
            doc.build(self.build_story(), onFirstPage=on_page, onLaterPages=on_page)
        except LayoutError as exc:
            raise RenderingError("PDF layout failed", str(exc)) from exc
        return len(pages)

    def _count_pages(self) -> int:
        return self._build(BytesIO(), None)

    def _needs_page_total(self) -> bool:
        footer = self.document.footer
        if not (footer and footer.enabled and footer.show_page_numbers):
            return False
        return "{total}" in (footer.page_number_format or DEFAULT_PAGE_NUMBER_FORMAT)

    # ------------------------------------------------------------------
    # Page chrome
    # ------------------------------------------------------------------
    def _draw_page(self, canvas, page_number: int, total_pages: Optional[int]) -> None:
        width, height = self.page_size
        canvas.saveState()
        if self.theme.background_color.lower() not in ("#fff", "#ffffff"):
            canvas.setFillColor(to_color(self.theme.background_color))
            canvas.rect(0, 0, width, height, stroke=0, fill=1)

        header = self.document.header
        if header and header.enabled and header.content:
            band = header.height or max(self.margins.top - HEADER_TOP_OFFSET, 0.0)
            self._draw_band(canvas, header.content, height - HEADER_TOP_OFFSET - band, band)

        footer = self.document.footer
        if footer and footer.enabled:
            if footer.content:
                bottom = PAGE_NUMBER_BASELINE + PAGE_NUMBER_FONT_SIZE + 4
                band = footer.height or max(self.margins.bottom - bottom, 0.0)
                self._draw_band(canvas, footer.content, bottom, band)
            if footer.show_page_numbers:
                template = footer.page_number_format or DEFAULT_PAGE_NUMBER_FORMAT
                canvas.setFont(resolve_font_variant(self.theme.font_family), PAGE_NUMBER_FONT_SIZE)
                canvas.setFillColor(to_color(self.theme.muted_color))
                canvas.drawCentredString(
                    width / 2, PAGE_NUMBER_BASELINE, format_page_number(template, page_number, total_pages)
                )
        canvas.restoreState()

    def _draw_band(self, canvas, content: List[Element], y: float, band_height: float) -> None:
        if band_height <= 0:
            return
        frame_width = self.page_size[0] - self.margins.left - self.margins.right
        frame = Frame(
            self.margins.left,
            y,
            frame_width,
            band_height,
            leftPadding=0,
            rightPadding=0,
            topPadding=0,
            bottomPadding=0,
            showBoundary=0,
        )
        flowables = flatten(project_tree(content, self.theme, PDF_BACKEND))
        frame.addFromList(flowables, canvas)
        if flowables:
            logger.warning(f"{len(flowables)} header/footer flowables did not fit in a {band_height:g}pt band")

    def save_to_file(self, output_path: Union[str, Path]) -> bool:
        self.render(Path(output_path))
        return True
