"""CLI entry point and subcommand definitions."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.panel import Panel

from listening.blocks import document_blocks, render_block_text, render_document_html
from listening.config import ConfigError, Settings, get_config_path, load_settings
from listening.fonts import scan_font_files


def _settings(args: argparse.Namespace) -> Settings:
    """Load settings from --config or the default location, exiting on error."""
    path: Path = args.config if args.config is not None else get_config_path()
    try:
        return load_settings(path)
    except ConfigError as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)


def _read_source(path: str) -> str:
    """Read a document from a path, or from stdin when path is '-'."""
    if path == "-":
        return sys.stdin.read()
    try:
        return Path(path).read_text()
    except OSError as e:
        print(f"Error: cannot read {path}: {e.strerror}", file=sys.stderr)
        sys.exit(1)


def _cmd_render(args: argparse.Namespace) -> None:
    """Render every listening block of a document to the terminal or to HTML."""
    document = _read_source(args.path)
    if args.html:
        page = render_document_html(document, _settings(args))
        if args.output is not None:
            Path(args.output).write_text(page)
        else:
            sys.stdout.write(page)
        return

    console = Console()
    for block in document_blocks(document):
        console.print(Panel(render_block_text(block), border_style="blue", expand=False))


def _cmd_fonts(args: argparse.Namespace) -> None:
    """List fonts available in the configured font folder."""
    settings = _settings(args)
    fonts = scan_font_files(settings.font_folder)
    print(f"Font folder: {settings.font_folder}")
    for key, label in fonts.items():
        marker = "*" if key == settings.selected_font else " "
        print(f"{marker} {label}")


def _cmd_view(args: argparse.Namespace) -> None:
    """Launch the Textual viewer.

    Imports are deferred to avoid loading Textual for CLI-only commands.
    """
    from listening.tui.app import ListeningApp  # noqa: PLC0415

    path = Path(args.path)
    if not path.is_file():
        print(f"Error: {path} is not a file", file=sys.stderr)
        sys.exit(1)
    ListeningApp(path, settings_path=args.config).run()


def main(argv: list[str] | None = None) -> None:
    """Parse arguments and dispatch to the appropriate subcommand."""
    parser = argparse.ArgumentParser(
        prog="listening",
        description="Render listening blocks written in a small inline markup dialect",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help=f"Settings file (default: {get_config_path()})",
    )
    subparsers = parser.add_subparsers(dest="command")

    # render
    render_parser = subparsers.add_parser("render", help="Render blocks of a file")
    render_parser.add_argument("path", help="Markdown or plain text file, '-' for stdin")
    render_parser.add_argument("--html", action="store_true", help="Output a standalone HTML page")
    render_parser.add_argument("-o", "--output", help="Write HTML to this file instead of stdout")

    # fonts
    subparsers.add_parser("fonts", help="List fonts in the configured font folder")

    # view
    view_parser = subparsers.add_parser("view", help="Open a file in the interactive viewer")
    view_parser.add_argument("path", help="Markdown or plain text file")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    dispatch = {
        "render": _cmd_render,
        "fonts": _cmd_fonts,
        "view": _cmd_view,
    }
    dispatch[args.command](args)
