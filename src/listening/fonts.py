"""Custom font discovery and @font-face generation."""

from __future__ import annotations

import base64
import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from listening.config import DEFAULT_FONT

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

FONT_FAMILY_PREFIX = "listening-custom-"
DEFAULT_FONT_LABEL = "Default"

FONT_MIME_TYPES: dict[str, str] = {
    "ttf": "font/truetype",
    "otf": "font/opentype",
    "woff": "font/woff",
    "woff2": "font/woff2",
}

_UNSAFE_FAMILY_CHARS = re.compile(r"[^a-zA-Z0-9\-]")


class FontError(Exception):
    """Raised when the selected font file is missing or of an unsupported type."""


@dataclass(frozen=True)
class FontFace:
    """A loaded custom font: its CSS family name and embeddable @font-face rule."""

    family: str
    css: str


def _extension(filename: str) -> str:
    return filename.rsplit(".", 1)[-1].lower() if "." in filename else ""


def font_family_name(filename: str) -> str:
    """Derive a CSS-safe family name from a font file name."""
    stem = filename.rsplit(".", 1)[0] if "." in filename else filename
    return FONT_FAMILY_PREFIX + _UNSAFE_FAMILY_CHARS.sub("_", stem)


def scan_font_files(folder: Path) -> dict[str, str]:
    """Map selectable font keys to display labels.

    Always contains the default entry; a missing folder yields nothing else.
    """
    fonts = {DEFAULT_FONT: DEFAULT_FONT_LABEL}
    if not folder.is_dir():
        logger.debug("Font folder %s does not exist, nothing to scan", folder)
        return fonts
    for path in sorted(folder.iterdir()):
        if path.is_file() and _extension(path.name) in FONT_MIME_TYPES:
            fonts[path.name] = path.name
    return fonts


def load_font_face(folder: Path, filename: str) -> FontFace | None:
    """Embed ``folder/filename`` as a base64 @font-face rule.

    Returns None when the default font is selected.
    Raises FontError if the file is missing or its extension is unsupported.
    """
    if not filename or filename == DEFAULT_FONT:
        return None

    path = folder / filename
    if not path.is_file():
        msg = f"Font file not found at {path}"
        raise FontError(msg)

    mime_type = FONT_MIME_TYPES.get(_extension(filename))
    if mime_type is None:
        msg = f"Unsupported font type: {_extension(filename) or filename}"
        raise FontError(msg)

    encoded = base64.b64encode(path.read_bytes()).decode("ascii")
    family = font_family_name(filename)
    css = (
        "@font-face {\n"
        f'  font-family: "{family}";\n'
        f"  src: url(data:{mime_type};base64,{encoded});\n"
        "}\n"
    )
    logger.info("Loaded font %s as %s", filename, family)
    return FontFace(family=family, css=css)
