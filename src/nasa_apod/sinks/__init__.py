"""Sinks consuming fetched pictures.

- wallpaper: downloads the picture, validates it and applies it as background
- setters: per-platform strategies used by the wallpaper sink
"""

from .setters import (
    COMMAND_DEFAULTS,
    CommandWallpaperSetter,
    WindowsWallpaperSetter,
    select_wallpaper_setter,
)
from .wallpaper import WallpaperSink, sniff_image_type

__all__ = [
    "COMMAND_DEFAULTS",
    "CommandWallpaperSetter",
    "WallpaperSink",
    "WindowsWallpaperSetter",
    "select_wallpaper_setter",
    "sniff_image_type",
]
