"""
Inline rich-text tokenizer.

Parses the constrained inline markup used in text-bearing elements:
``**bold**``/``__bold__``, ``~~strike~~``, ``*italic*``/``_italic_``,
```code``` and ``[text](url)``. The scan is single-pass and leftmost-match;
matched spans are never tokenized again, so both back-ends get the same
flat node list for the same input.
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Pattern, Tuple

TEXT = "text"
BOLD = "bold"
ITALIC = "italic"
CODE = "code"
LINK = "link"
STRIKETHROUGH = "strikethrough"


@dataclass(frozen=True)
class RichTextNode:
    """One inline run of text."""

    type: str
    content: str
    href: Optional[str] = None


# Order matters: on equal start positions the earlier pattern wins.
PATTERNS: Tuple[Tuple[str, Pattern[str]], ...] = (
    (BOLD, re.compile(r"\*\*(.+?)\*\*|__(.+?)__")),
    (STRIKETHROUGH, re.compile(r"~~(.+?)~~")),
    (ITALIC, re.compile(r"\*([^*]+)\*|(?<![a-zA-Z])_([^_]+)_(?![a-zA-Z])")),
    (CODE, re.compile(r"`([^`]+)`")),
    (LINK, re.compile(r"\[([^\]]+)\]\(([^)]+)\)")),
)


def _node_from_match(node_type: str, match: "re.Match[str]") -> RichTextNode:
    if node_type == LINK:
        return RichTextNode(LINK, match.group(1), href=match.group(2))
    groups = [group for group in match.groups() if group]
    return RichTextNode(node_type, groups[0] if groups else "")


def tokenize(text: str) -> List[RichTextNode]:
    """
    Split text into a flat list of rich-text nodes.

    Args:
        text: Source string with inline markup

    Returns:
        Nodes in source order; plain spans become ``text`` nodes
    """
    nodes: List[RichTextNode] = []
    remaining = text or ""

    while remaining:
        earliest: Optional[Tuple[int, int, RichTextNode]] = None
        for node_type, pattern in PATTERNS:
            match = pattern.search(remaining)
            if match is None:
                continue
            if earliest is None or match.start() < earliest[0]:
                earliest = (match.start(), match.end(), _node_from_match(node_type, match))

        if earliest is None:
            nodes.append(RichTextNode(TEXT, remaining))
            break

        start, end, node = earliest
        if start > 0:
            nodes.append(RichTextNode(TEXT, remaining[:start]))
        nodes.append(node)
        remaining = remaining[end:]

    return nodes


def has_markup(text: str) -> bool:
    """Return True if any inline pattern matches."""
    return any(pattern.search(text or "") for _, pattern in PATTERNS)


def plain_text(text: str) -> str:
    """Strip inline markup, keeping the visible text only."""
    return "".join(node.content for node in tokenize(text))
