"""HTML fragment helpers shared by the interactive renderers."""

import html
import re
from typing import Dict, Optional, Union

from ...engine.rich_text import BOLD, CODE, ITALIC, LINK, STRIKETHROUGH, tokenize
from ...engine.theme import CODE_BACKGROUND, LINK_COLOR

CssValue = Optional[Union[str, int, float]]

FONT_WEIGHTS = {
    "light": "300",
    "normal": "400",
    "medium": "500",
    "semibold": "600",
    "bold": "700",
}

_SAFE_SCHEMES = {"http", "https", "mailto", "tel"}
_SCHEME = re.compile(r"^([a-zA-Z][a-zA-Z0-9+.-]*):")


def escape(text: object) -> str:
    return html.escape(str(text), quote=True)


def px(value: Optional[float]) -> Optional[str]:
    if value is None:
        return None
    return f"{value:g}px"


def style_attr(declarations: Dict[str, CssValue]) -> str:
    """Build a ``style="..."`` attribute, skipping unset declarations."""
    parts = [f"{name}: {value}" for name, value in declarations.items() if value is not None and value != ""]
    if not parts:
        return ""
    return f' style="{escape("; ".join(parts))}"'


def safe_href(href: str) -> str:
    """Keep link targets to web, mail and relative URLs."""
    stripped = href.strip()
    match = _SCHEME.match(stripped)
    if match and match.group(1).lower() not in _SAFE_SCHEMES:
        return "#"
    return stripped


def render_rich_text(text: str) -> str:
    """Tokenize inline markup and emit the matching inline HTML."""
    parts = []
    for node in tokenize(text):
        content = escape(node.content)
        if node.type == BOLD:
            parts.append(f"<strong>{content}</strong>")
        elif node.type == ITALIC:
            parts.append(f"<em>{content}</em>")
        elif node.type == STRIKETHROUGH:
            parts.append(f"<del>{content}</del>")
        elif node.type == CODE:
            parts.append(
                f'<code class="pi-code"{style_attr({"background-color": CODE_BACKGROUND, "font-family": "monospace"})}>'
                f"{content}</code>"
            )
        elif node.type == LINK:
            parts.append(
                f'<a href="{escape(safe_href(node.href or ""))}" target="_blank" rel="noopener noreferrer"'
                f'{style_attr({"color": LINK_COLOR})}>{content}</a>'
            )
        else:
            parts.append(content)
    return "".join(parts)
