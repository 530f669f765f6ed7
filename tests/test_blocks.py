"""Tests for block extraction and block rendering."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from listening.blocks import (
    BLOCK_FRAME_CSS,
    BlockStyle,
    block_style,
    document_blocks,
    extract_blocks,
    render_block_html,
    render_block_text,
    render_document_html,
)
from listening.config import Settings
from tests.conftest import SAMPLE_DOCUMENT

if TYPE_CHECKING:
    from pathlib import Path

# === extract_blocks() ===


def test_extract_only_listening_fences() -> None:
    """Other fenced languages and prose outside fences are ignored."""
    assert extract_blocks(SAMPLE_DOCUMENT) == [
        "**bold** and *italic*\n~~gone~~ __kept__",
        "++loud++ --quiet--",
    ]


def test_extract_unclosed_fence_runs_to_end() -> None:
    assert extract_blocks("intro\n```listening\nfirst\nsecond") == ["first\nsecond"]


def test_extract_info_string_must_match_exactly() -> None:
    md = "```listening  \na\n```\n```listeningx\nb\n```"
    assert extract_blocks(md) == ["a"]


def test_extract_empty_block() -> None:
    assert extract_blocks("```listening\n```") == [""]


def test_document_without_fences_is_one_block() -> None:
    assert document_blocks("**a**\nb\n") == ["**a**\nb"]


# === block_style() ===


def test_block_style_default_font(tmp_path: Path) -> None:
    style = block_style(Settings(font_folder=tmp_path, font_size=18))
    assert style == BlockStyle(font_size=18)


def test_block_style_default_font_skips_font_loading(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Without a custom font selected the font folder is never read."""

    def _fail(*_args: object) -> None:
        msg = "font loading must not run for the default font"
        raise AssertionError(msg)

    monkeypatch.setattr("listening.blocks.load_font_face", _fail)
    settings = Settings(font_folder=tmp_path / "missing", selected_font="")
    assert not settings.uses_custom_font
    assert block_style(settings) == BlockStyle()


def test_block_style_custom_font(font_dir: Path) -> None:
    style = block_style(Settings(font_folder=font_dir, selected_font="My Font.ttf"))
    assert style.font_family == "listening-custom-My_Font"
    assert style.font_css is not None
    assert "@font-face" in style.font_css
    assert style.font_error is None


def test_block_style_missing_font_falls_back(
    font_dir: Path, caplog: pytest.LogCaptureFixture
) -> None:
    """A missing font is logged and the block keeps the default font."""
    with caplog.at_level(logging.WARNING, logger="listening.blocks"):
        style = block_style(Settings(font_folder=font_dir, selected_font="Gone.ttf"))
    assert style.font_family is None
    assert style.font_error is not None
    assert "Gone.ttf" in style.font_error
    assert "Error loading custom font" in caplog.text


def test_block_style_css() -> None:
    assert BlockStyle().css() == BLOCK_FRAME_CSS
    assert BlockStyle(font_family="fam", font_size=20).css() == (
        f'{BLOCK_FRAME_CSS} font-family: "fam"; font-size: 20px;'
    )


# === Rendering ===


def test_render_block_html_one_paragraph_per_line() -> None:
    html = render_block_html("**a**\n\nb", BlockStyle())
    assert html == (
        f'<div class="listening-code-block" style="{BLOCK_FRAME_CSS}">'
        "<p><strong>a</strong></p><p></p><p>b</p></div>"
    )


def test_render_block_html_escapes_font_family() -> None:
    html = render_block_html("x", BlockStyle(font_family="listening-custom-F"))
    assert 'font-family: &quot;listening-custom-F&quot;;' in html


def test_render_block_text_joins_lines() -> None:
    text = render_block_text("**a**\n*b*")
    assert text.plain == "a\nb"
    assert [(s.start, s.end, str(s.style)) for s in text.spans] == [
        (0, 1, "bold"),
        (2, 3, "italic"),
    ]


def test_render_document_html_embeds_font(font_dir: Path) -> None:
    settings = Settings(font_folder=font_dir, selected_font="My Font.ttf", font_size=16)
    page = render_document_html(SAMPLE_DOCUMENT, settings)
    assert page.startswith("<!DOCTYPE html>")
    assert "<style>\n@font-face" in page
    assert page.count('class="listening-code-block"') == 2
    assert "<strong>bold</strong> and <em>italic</em>" in page
    assert "font-size: 16px;" in page
    assert "not a block" not in page


def test_render_document_html_without_font(tmp_path: Path) -> None:
    page = render_document_html("~~x~~", Settings(font_folder=tmp_path))
    assert "<style>" not in page
    assert "<del>x</del>" in page
