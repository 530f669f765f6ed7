"""Block view widget: one rendered listening block."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.text import Text
from textual.widgets import Static

from listening.blocks import render_block_text

if TYPE_CHECKING:
    from listening.blocks import BlockStyle


class BlockView(Static):
    """Bordered pane showing one block with its markup resolved."""

    DEFAULT_CSS = """
    BlockView {
        border: round $accent;
        padding: 1 2;
        margin: 0 0 1 0;
        height: auto;
    }
    """

    def __init__(self, source: str, style: BlockStyle, *, id: str | None = None) -> None:  # noqa: A002
        super().__init__("", id=id)
        self.block_source = source
        self.block_style = style
        self.rendered = Text()

    def on_mount(self) -> None:
        self.show_block(self.block_source, self.block_style)

    def show_block(self, source: str, style: BlockStyle) -> None:
        """Re-render with new source text and ambient style."""
        self.block_source = source
        self.block_style = style
        self.rendered = render_block_text(source)
        self.border_subtitle = _style_label(style)
        self.update(self.rendered)


def _style_label(style: BlockStyle) -> str:
    parts = [style.font_family or "default font"]
    if style.font_size:
        parts.append(f"{style.font_size}px")
    return " · ".join(parts)
