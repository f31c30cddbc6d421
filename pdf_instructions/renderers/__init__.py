"""Render back-ends sharing one element dispatcher."""

from .dispatcher import Backend, project_element, project_tree, render
from .html import HTML_BACKEND, HtmlRenderer, render_surface
from .pdf import PDF_BACKEND, PdfProducer, PdfRenderer

__all__ = [
    "Backend",
    "project_element",
    "project_tree",
    "render",
    "HTML_BACKEND",
    "HtmlRenderer",
    "render_surface",
    "PDF_BACKEND",
    "PdfProducer",
    "PdfRenderer",
]
