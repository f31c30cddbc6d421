"""
Interactive render back-end.

Projects an instruction tree into styled HTML. In editable mode every
top-level element is wrapped in a clickable container carrying its
external element id, so selection can follow a node across re-renders.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from ...engine.theme import ResolvedTheme, resolve_theme
from ...models import Element, InstructionDocument, Theme
from ...validator import validate_instructions
from ..dispatcher import Backend, project_element, project_tree
from . import charts
from . import elements as element_renderers
from .markup import escape, style_attr

logger = logging.getLogger(__name__)

HTML_BACKEND = Backend(
    name="html",
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

EDITABLE_CSS = """
.pi-element { position: relative; padding: 4px; margin: 0 -4px; border: 1px solid transparent; border-radius: 4px; cursor: pointer; }
.pi-element:hover { border-color: #cbd5e0; }
.pi-element.pi-selected { border-color: #3182ce; box-shadow: 0 0 0 2px rgba(49, 130, 206, 0.25); }
"""

EDITABLE_JS = """
document.addEventListener("click", function (event) {
  var target = event.target.closest("[data-element-id]");
  document.querySelectorAll(".pi-element.pi-selected").forEach(function (node) {
    node.classList.remove("pi-selected");
  });
  if (!target) { return; }
  target.classList.add("pi-selected");
  window.parent.postMessage({ type: "pi-select", elementId: target.dataset.elementId }, "*");
});
"""


def render_surface(
    elements: Sequence[Union[Element, Dict[str, Any]]],
    theme: Optional[Union[Theme, ResolvedTheme]] = None,
    element_ids: Optional[Sequence[str]] = None,
    selected_id: Optional[str] = None,
) -> str:
    """
    Render top-level elements as a clickable editing surface.

    Args:
        elements: Top-level elements in document order
        theme: Document theme (resolved once here)
        element_ids: External per-element ids, one per element; positional
            ids (``element-0``...) are used when omitted
        selected_id: Id of the element to highlight

    Returns:
        HTML fragment with one ``data-element-id`` container per element
    """
    resolved = theme if isinstance(theme, ResolvedTheme) else resolve_theme(theme)
    if element_ids is None:
        element_ids = [f"element-{index}" for index in range(len(elements))]
    if len(element_ids) != len(elements):
        raise ValueError(f"Got {len(element_ids)} element ids for {len(elements)} elements")

    parts = []
    for element_id, element in zip(element_ids, elements):
        rendered = project_element(element, resolved, HTML_BACKEND)
        classes = "pi-element pi-selected" if element_id == selected_id else "pi-element"
        tag = getattr(element, "type", None) or (element.get("type") if isinstance(element, dict) else None)
        parts.append(
            f'<div class="{classes}" data-element-id="{escape(element_id)}" '
            f'data-element-type="{escape(tag or "unknown")}">{rendered}</div>'
        )
    return "".join(parts)


class HtmlRenderer:
    """
    Render a whole instruction document to HTML.

    Options:
        standalone: Emit a full ``<!DOCTYPE html>`` page (default True)
        include_css: Include the editing surface stylesheet (default True)
        selected_id: Element id highlighted in editable mode
    """

    def __init__(
        self,
        document: Union[InstructionDocument, Dict[str, Any]],
        editable: bool = False,
        options: Optional[Dict[str, Any]] = None,
        element_ids: Optional[Sequence[str]] = None,
    ) -> None:
        self.document = validate_instructions(document)
        self.editable = editable
        self.options = options or {}
        self.element_ids = element_ids
        self.theme = resolve_theme(self.document.theme)

    def render(self) -> str:
        body = self._render_page()
        if not self.options.get("standalone", True):
            return body

        title = escape(self.document.metadata.title)
        head = [f'<meta charset="utf-8"><title>{title}</title>']
        if self.editable and self.options.get("include_css", True):
            head.append(f"<style>{EDITABLE_CSS}</style>")
        script = f"<script>{EDITABLE_JS}</script>" if self.editable else ""
        body_css = {"margin": "0", "background-color": "#e2e8f0", "padding": "24px 0"}
        return (
            "<!DOCTYPE html>\n"
            f"<html><head>{''.join(head)}</head>"
            f"<body{style_attr(body_css)}>\n{body}\n{script}</body></html>"
        )

    def render_elements(self) -> List[str]:
        """Rendered fragments for the top-level content, one per element."""
        return project_tree(self.document.content, self.theme, HTML_BACKEND)

    def save_to_file(self, html: str, output_path: Union[str, Path]) -> bool:
        Path(output_path).write_text(html, encoding="utf-8")
        return True

    def _render_page(self) -> str:
        theme = self.theme
        page = self.document.page_settings
        margins = page.margins if page and page.margins else None
        padding = " ".join(
            f"{value:g}px"
            for value in (
                margins.top if margins and margins.top is not None else 40,
                margins.right if margins and margins.right is not None else 40,
                margins.bottom if margins and margins.bottom is not None else 60,
                margins.left if margins and margins.left is not None else 40,
            )
        )
        page_css = {
            "background-color": theme.background_color,
            "color": theme.text_color,
            "font-family": f"{theme.font_family}, Arial, sans-serif",
            "font-size": "11px",
            "max-width": "794px" if not page or page.orientation != "landscape" else "1123px",
            "margin": "0 auto",
            "padding": padding,
            "box-sizing": "border-box",
            "box-shadow": "0 1px 3px rgba(0, 0, 0, 0.12)",
        }

        parts = [f'<div class="pi-page"{style_attr(page_css)}>']
        header = self.document.header
        if header and header.enabled and header.content:
            parts.append(f'<header class="pi-header">{"".join(project_tree(header.content, theme, HTML_BACKEND))}</header>')

        if self.editable:
            parts.append(
                render_surface(self.document.content, theme, self.element_ids, self.options.get("selected_id"))
            )
        else:
            parts.extend(self.render_elements())

        footer = self.document.footer
        if footer and footer.enabled:
            footer_parts = []
            if footer.content:
                footer_parts.extend(project_tree(footer.content, theme, HTML_BACKEND))
            if footer.show_page_numbers:
                template = footer.page_number_format or "Page {current} of {total}"
                number_css = {"font-size": "9px", "color": theme.muted_color, "text-align": "center"}
                footer_parts.append(
                    f'<div class="pi-page-number"{style_attr(number_css)}>'
                    f'{escape(template.replace("{current}", "1").replace("{total}", "1"))}</div>'
                )
            parts.append(f'<footer class="pi-footer">{"".join(footer_parts)}</footer>')
        parts.append("</div>")
        return "".join(parts)
