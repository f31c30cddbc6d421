"""
Tree projection dispatcher.

Walks an element sequence and routes each node to the leaf renderer
registered for its tag in the active back-end. Composite nodes
(``section``, ``columns``) have their children projected first; the
composite renderer only receives the already-rendered output.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Mapping, Optional, Sequence, Union

from ..engine.theme import ResolvedTheme, resolve_theme
from ..exceptions import ValidationError
from ..models import ColumnsElement, Element, SectionElement, Theme
from ..validator import validate_element

logger = logging.getLogger(__name__)

RenderedNode = Any
LeafRenderer = Callable[[Element, ResolvedTheme], RenderedNode]
SectionRenderer = Callable[[SectionElement, List[RenderedNode], ResolvedTheme], RenderedNode]
ColumnsRenderer = Callable[[ColumnsElement, List[List[RenderedNode]], ResolvedTheme], RenderedNode]
UnknownRenderer = Callable[[str, str, ResolvedTheme], RenderedNode]

ElementLike = Union[Element, Mapping[str, Any]]


@dataclass(frozen=True)
class Backend:
    """
    One render target: a fixed tag -> leaf renderer table plus the
    composite, page break and placeholder renderers.

    Args:
        name: Back-end name used in log messages
        leaf_renderers: Tag -> function(element, theme)
        render_section: function(section, rendered_children, theme)
        render_columns: function(columns, rendered_children_per_column, theme)
        render_page_break: function(element, theme); the back-end's pagination primitive
        render_unknown: function(tag, reason, theme) for unknown or malformed nodes
    """

    name: str
    leaf_renderers: Mapping[str, LeafRenderer]
    render_section: SectionRenderer
    render_columns: ColumnsRenderer
    render_page_break: LeafRenderer
    render_unknown: UnknownRenderer


def project_element(node: ElementLike, theme: ResolvedTheme, backend: Backend) -> RenderedNode:
    """Render one element (recursing into composites) with ``backend``."""
    element = node
    if isinstance(node, Mapping):
        tag = str(node.get("type") or "unknown")
        try:
            element = validate_element(dict(node))
        except ValidationError as exc:
            logger.warning(f"[{backend.name}] Skipping malformed {tag} element: {exc}")
            return backend.render_unknown(tag, str(exc), theme)

    tag = getattr(element, "type", None)
    if tag == "section":
        children = project_tree(element.children, theme, backend)
        return backend.render_section(element, children, theme)
    if tag == "columns":
        rendered_columns = [project_tree(column.children, theme, backend) for column in element.columns]
        return backend.render_columns(element, rendered_columns, theme)
    if tag == "pageBreak":
        return backend.render_page_break(element, theme)

    renderer = backend.leaf_renderers.get(tag)
    if renderer is None:
        logger.warning(f"[{backend.name}] No renderer for element type {tag!r}")
        return backend.render_unknown(str(tag), "unsupported element type", theme)
    try:
        return renderer(element, theme)
    except (ValueError, TypeError, KeyError, OSError) as exc:
        logger.warning(f"[{backend.name}] Failed to render {tag} element: {exc}")
        return backend.render_unknown(str(tag), str(exc), theme)


def project_tree(elements: Sequence[ElementLike], theme: ResolvedTheme, backend: Backend) -> List[RenderedNode]:
    """Render an element sequence in order; one bad node never aborts the rest."""
    return [project_element(element, theme, backend) for element in elements]


def render(
    tree: Sequence[ElementLike],
    theme: Optional[Union[Theme, ResolvedTheme]],
    backend: Backend,
) -> List[RenderedNode]:
    """
    Project an element tree onto a back-end.

    Args:
        tree: Top-level elements (models or JSON-like dicts)
        theme: Document theme; resolved against the defaults once here
        backend: Target back-end

    Returns:
        Rendered nodes, one per top-level element
    """
    resolved = theme if isinstance(theme, ResolvedTheme) else resolve_theme(theme)
    return project_tree(tree, resolved, backend)
