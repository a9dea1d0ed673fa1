"""Wallpaper setter protocol."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class WallpaperSetter(Protocol):
    """Applies an image file as the desktop background."""

    @property
    def name(self) -> str:
        """Short name of the strategy, used in logs."""
        ...

    def apply(self, path: str) -> None:
        """Set the file at ``path`` as wallpaper.

        Raises:
            SinkFailureError: If the platform command fails
        """
        ...
