"""Textual App — live viewer for the listening blocks of one file."""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from rich.markup import escape
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import VerticalScroll
from textual.widgets import Footer, Header, Static

from listening.blocks import BlockStyle, block_style, document_blocks
from listening.config import ConfigError, Settings, get_config_path, load_settings
from listening.tui.block_view import BlockView
from listening.tui.help_screen import HelpScreen

if TYPE_CHECKING:
    from pathlib import Path

    from textual.binding import BindingType


class ListeningApp(App[None]):
    """Viewer rendering every listening block of a Markdown file."""

    TITLE = "listening"

    CSS = """
    #blocks {
        height: 1fr;
        padding: 1 2;
    }
    #empty-message {
        width: 100%;
        content-align: center middle;
        text-style: dim;
    }
    """

    BINDINGS: ClassVar[list[BindingType]] = [
        Binding("q", "quit", "Quit", show=True),
        Binding("question_mark", "show_help", "Help", show=True),
        Binding("r", "reload", "Reload", show=True),
    ]

    def __init__(self, path: Path, settings_path: Path | None = None) -> None:
        super().__init__()
        self._doc_path = path
        self._settings_path = settings_path if settings_path is not None else get_config_path()
        self.block_style = BlockStyle()

    def compose(self) -> ComposeResult:
        """Create the scrolling block list."""
        yield Header()
        yield VerticalScroll(id="blocks")
        yield Footer()

    async def on_mount(self) -> None:
        """Render the file on startup."""
        self.sub_title = str(self._doc_path)
        await self._render_blocks()

    def _load_settings(self) -> Settings:
        try:
            return load_settings(self._settings_path)
        except ConfigError as e:
            self.notify(str(e), severity="error")
            return Settings()

    def _read_document(self) -> str:
        try:
            return self._doc_path.read_text()
        except OSError as e:
            self.notify(f"Cannot read {self._doc_path}: {e.strerror}", severity="error")
            return ""

    async def _render_blocks(self) -> None:
        """(Re)load settings and file, then re-apply them to the block views.

        Existing views are updated in place when the block count is unchanged.
        """
        self.block_style = block_style(self._load_settings())
        if self.block_style.font_error:
            self.notify(self.block_style.font_error, severity="error")

        document = self._read_document()
        sources = document_blocks(document) if document.strip() else []

        container = self.query_one("#blocks", VerticalScroll)
        views = list(container.query(BlockView))
        if views and len(views) == len(sources):
            for view, source in zip(views, sources, strict=True):
                view.show_block(source, self.block_style)
            return

        await container.remove_children()
        if not sources:
            name = escape(self._doc_path.name)
            await container.mount(
                Static(f"Nothing to show in [bold]{name}[/bold].", id="empty-message")
            )
            return
        await container.mount_all(BlockView(source, self.block_style) for source in sources)

    # === Actions ===

    async def action_reload(self) -> None:
        """Reload settings and file, re-rendering every block."""
        await self._render_blocks()
        self.notify("Reloaded")

    def action_show_help(self) -> None:
        """Show the help overlay."""
        self.push_screen(HelpScreen())
