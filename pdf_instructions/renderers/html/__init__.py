"""Interactive (HTML) render back-end."""

from .html_renderer import HTML_BACKEND, HtmlRenderer, render_surface
from .markup import render_rich_text

__all__ = ["HTML_BACKEND", "HtmlRenderer", "render_surface", "render_rich_text"]
