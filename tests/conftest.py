"""Shared fixtures: font folders, settings files, sample documents."""

from __future__ import annotations

import textwrap
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

SAMPLE_DOCUMENT = textwrap.dedent("""\
    # Session notes

    ```listening
    **bold** and *italic*
    ~~gone~~ __kept__
    ```

    Some prose with **markers** outside any block.

    ```python
    print("**not a block**")
    ```

    ```listening
    ++loud++ --quiet--
    ```
    """)

FONT_BYTES = b"\x00\x01\x00\x00fake-font"


@pytest.fixture
def font_dir(tmp_path: Path) -> Path:
    """A font folder with supported, unsupported and nested entries."""
    folder = tmp_path / "fonts"
    folder.mkdir()
    (folder / "My Font.ttf").write_bytes(FONT_BYTES)
    (folder / "Other.WOFF2").write_bytes(FONT_BYTES)
    (folder / "readme.txt").write_text("not a font")
    (folder / "nested.otf").mkdir()
    return folder


@pytest.fixture
def write_settings(tmp_path: Path) -> Callable[[str], Path]:
    """Return a helper writing settings.toml into tmp_path."""

    def _write(body: str) -> Path:
        path = tmp_path / "settings.toml"
        path.write_text(textwrap.dedent(body))
        return path

    return _write


@pytest.fixture
def sample_document(tmp_path: Path) -> Path:
    """A Markdown file with two listening blocks."""
    path = tmp_path / "notes.md"
    path.write_text(SAMPLE_DOCUMENT)
    return path
