"""User settings: load and validate settings.toml."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_FONT = "DEFAULT"


class ConfigError(Exception):
    """Raised when settings.toml is malformed or has fields of the wrong type."""


def get_config_path() -> Path:
    """Return the path to settings.toml, respecting XDG_CONFIG_HOME."""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg) if xdg else Path.home() / ".config"
    return base / "listening" / "settings.toml"


def default_font_folder() -> Path:
    """Fonts live in a ``fonts`` folder next to settings.toml unless configured."""
    return get_config_path().parent / "fonts"


@dataclass
class Settings:
    """Font settings applied to every rendered block."""

    font_folder: Path = field(default_factory=default_font_folder)
    selected_font: str = DEFAULT_FONT  # file name inside font_folder, or "DEFAULT"
    font_size: int | None = None  # base size in px; None keeps the host default

    @property
    def uses_custom_font(self) -> bool:
        return bool(self.selected_font) and self.selected_font != DEFAULT_FONT


def load_settings(path: Path) -> Settings:
    """Load and validate settings from a TOML file.

    Returns defaults if the file does not exist.
    Raises ConfigError on parse errors or wrongly typed fields.
    """
    if not path.exists():
        return Settings()

    try:
        data = tomllib.loads(path.read_text())
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {path}: {e}"
        raise ConfigError(msg) from e

    settings = Settings()

    folder = data.get("font_folder")
    if folder is not None:
        if not isinstance(folder, str):
            msg = f"'font_folder' in {path} must be a string"
            raise ConfigError(msg)
        folder_path = Path(folder.strip()).expanduser()
        # Relative folders are resolved against the settings file
        settings.font_folder = folder_path if folder_path.is_absolute() else path.parent / folder_path

    font = data.get("selected_font", DEFAULT_FONT)
    if not isinstance(font, str):
        msg = f"'selected_font' in {path} must be a string"
        raise ConfigError(msg)
    settings.selected_font = font or DEFAULT_FONT

    size = data.get("font_size")
    if size is not None:
        # bool is an int subclass
        if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
            msg = f"'font_size' in {path} must be a positive integer"
            raise ConfigError(msg)
        settings.font_size = size

    return settings
