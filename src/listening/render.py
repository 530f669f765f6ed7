"""Render node trees as Rich text or HTML."""

from __future__ import annotations

import html
from typing import TYPE_CHECKING

from rich.text import Text

from listening.markup import MarkupKind, TextNode

if TYPE_CHECKING:
    from collections.abc import Iterable

    from listening.markup import RenderNode, StyledNode

# Terminals cannot scale glyphs, so size changes map to emphasis / dimming.
RICH_STYLES: dict[MarkupKind, str] = {
    MarkupKind.DELETION: "strike",
    MarkupKind.UNDERLINE: "underline",
    MarkupKind.STRONG: "bold",
    MarkupKind.EMPHASIS: "italic",
    MarkupKind.SIZE_UP: "bold bright_white",
    MarkupKind.SIZE_DOWN: "dim",
}


def _append_rich(text: Text, nodes: Iterable[RenderNode]) -> None:
    for node in nodes:
        if isinstance(node, TextNode):
            text.append(node.text)
            continue
        start = len(text)
        _append_rich(text, node.children)
        text.stylize(RICH_STYLES[node.kind], start, len(text))


def to_rich(nodes: Iterable[RenderNode]) -> Text:
    """Build a Rich ``Text`` from render nodes; nested containers stack their styles."""
    text = Text()
    _append_rich(text, nodes)
    return text


def _tags(node: StyledNode) -> tuple[str, str]:
    rule = node.rule
    if rule.tag is not None:
        return f"<{rule.tag}>", f"</{rule.tag}>"
    return f'<span style="font-size: {rule.scale}em;">', "</span>"


def to_html(nodes: Iterable[RenderNode]) -> str:
    """Serialize render nodes to an HTML fragment with escaped text."""
    parts: list[str] = []
    for node in nodes:
        if isinstance(node, TextNode):
            parts.append(html.escape(node.text, quote=False))
            continue
        opening, closing = _tags(node)
        parts.append(opening)
        parts.append(to_html(node.children))
        parts.append(closing)
    return "".join(parts)
