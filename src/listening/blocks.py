"""Listening blocks: find them in Markdown and render them line by line."""

from __future__ import annotations

import html
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from rich.text import Text

from listening.fonts import FontError, load_font_face
from listening.markup import resolve
from listening.render import to_html, to_rich

if TYPE_CHECKING:
    from listening.config import Settings

logger = logging.getLogger(__name__)

BLOCK_LANGUAGE = "listening"
BLOCK_CLASS = "listening-code-block"
BLOCK_FRAME_CSS = "border: 1px solid var(--text-accent); padding: 10px; border-radius: 5px;"

_FENCE = "```"


@dataclass(frozen=True)
class BlockStyle:
    """Ambient styling applied around every block, orthogonal to the markup."""

    font_family: str | None = None
    font_size: int | None = None
    font_css: str | None = None  # @font-face rule for font_family
    font_error: str | None = None  # why the configured font could not be used

    def css(self) -> str:
        """Inline style for the block container."""
        parts = [BLOCK_FRAME_CSS]
        if self.font_family:
            parts.append(f'font-family: "{self.font_family}";')
        if self.font_size:
            parts.append(f"font-size: {self.font_size}px;")
        return " ".join(parts)


def block_style(settings: Settings) -> BlockStyle:
    """Resolve settings into a BlockStyle, falling back to the default font on error."""
    if not settings.uses_custom_font:
        return BlockStyle(font_size=settings.font_size)
    try:
        face = load_font_face(settings.font_folder, settings.selected_font)
    except FontError as e:
        logger.warning("Error loading custom font, using default: %s", e)
        return BlockStyle(font_size=settings.font_size, font_error=str(e))
    if face is None:
        return BlockStyle(font_size=settings.font_size)
    return BlockStyle(font_family=face.family, font_size=settings.font_size, font_css=face.css)


def extract_blocks(markdown: str) -> list[str]:
    """Return the source of every ```listening fenced block, in order.

    An unclosed fence runs to the end of the document.
    """
    blocks: list[str] = []
    current: list[str] | None = None
    for line in markdown.split("\n"):
        if current is not None:
            if line.startswith(_FENCE):
                blocks.append("\n".join(current))
                current = None
            else:
                current.append(line)
            continue
        if line.startswith(_FENCE) and line[len(_FENCE) :].strip() == BLOCK_LANGUAGE:
            current = []
    # Unclosed block — flush remaining
    if current is not None:
        blocks.append("\n".join(current))
    return blocks


def document_blocks(document: str) -> list[str]:
    """Blocks of a document; a document without listening fences is one block."""
    blocks = extract_blocks(document)
    if blocks:
        return blocks
    return [document.rstrip("\n")]


def render_block_html(source: str, style: BlockStyle) -> str:
    """Render one block as a styled <div> holding one <p> per line."""
    paragraphs = "".join(f"<p>{to_html(resolve(line))}</p>" for line in source.split("\n"))
    css = html.escape(style.css())
    return f'<div class="{BLOCK_CLASS}" style="{css}">{paragraphs}</div>'


def render_block_text(source: str) -> Text:
    """Render one block as Rich text, one resolved line per source line."""
    return Text("\n").join(to_rich(resolve(line)) for line in source.split("\n"))


def render_document_html(document: str, settings: Settings) -> str:
    """Render every block of ``document`` into a standalone HTML page."""
    style = block_style(settings)
    head = f"<style>\n{style.font_css}</style>\n" if style.font_css else ""
    body = "\n".join(render_block_html(block, style) for block in document_blocks(document))
    return (
        "<!DOCTYPE html>\n"
        '<html>\n<head>\n<meta charset="utf-8">\n'
        f"{head}</head>\n<body>\n{body}\n</body>\n</html>\n"
    )
