"""Platform specific wallpaper setters.

One strategy is selected at startup, which keeps the update loop and the
wallpaper sink platform agnostic.
"""

import logging
import os
import shlex
import subprocess
import sys

from nasa_apod.errors import ConfigInvalidError, SinkFailureError

logger = logging.getLogger(__name__)

PATH_PLACEHOLDER = "%s"

COMMAND_DEFAULTS = {
    "gnome": "gsettings set org.gnome.desktop.background picture-uri file://%s",
    "kde": "dcop kdesktop KBackgroundIface setWallpaper %s 1",
    "gnome2": "gconftool-2 --set /desktop/gnome/background/picture_filename --type=string %s",
    "xfce": "xfconf-query -c xfce4-desktop -p /backdrop/screen0/monitor0/image-path -s %s",
    "mate": 'dconf write /org/mate/desktop/background/picture-filename "\'%s\'"',
    "lxde": "pcmanfm -w %s --wallpaper-mode=fit",
    "feh": "feh --bg-scale %s",
    "setroot": "setroot %s",
}

COMMAND_TIMEOUT_SECONDS = 30


def _run(args: list[str]) -> None:
    try:
        subprocess.run(args, capture_output=True, check=True, timeout=COMMAND_TIMEOUT_SECONDS)
    except subprocess.CalledProcessError as e:
        output = (e.stderr or e.stdout or b"").decode(errors="replace").strip()
        raise SinkFailureError(f"{args[0]} exited with {e.returncode}: {output}") from e
    except subprocess.TimeoutExpired as e:
        raise SinkFailureError(f"{args[0]} did not finish in {COMMAND_TIMEOUT_SECONDS}s") from e
    except OSError as e:
        raise SinkFailureError(f"unable to run {args[0]}: {e}") from e


class CommandWallpaperSetter:
    """Runs a command template where ``%s`` stands for the image path.

    Example:
        ```python
        setter = CommandWallpaperSetter("feh --bg-scale %s")
        setter.apply("/tmp/apod.jpg")  # runs: feh --bg-scale /tmp/apod.jpg
        ```
    """

    def __init__(self, template: str, name: str = "command") -> None:
        if PATH_PLACEHOLDER not in template:
            raise ConfigInvalidError(f"wallpaper command {template!r} has no %s placeholder")
        try:
            self._tokens = shlex.split(template)
        except ValueError as e:
            raise ConfigInvalidError(f"invalid wallpaper command {template!r}: {e}") from e
        self._template = template
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    @property
    def template(self) -> str:
        return self._template

    def command_for(self, path: str) -> list[str]:
        """Argument list for ``path``. Substitution happens per token, so
        paths containing spaces stay a single argument."""
        return [token.replace(PATH_PLACEHOLDER, path) for token in self._tokens]

    def apply(self, path: str) -> None:
        if not os.path.exists(path):
            raise SinkFailureError("file for new wallpaper does not exist")
        args = self.command_for(path)
        logger.debug("Setting wallpaper with: %s", shlex.join(args))
        _run(args)


class WindowsWallpaperSetter:
    """Updates the desktop wallpaper through the registry."""

    name = "windows"

    def commands_for(self, path: str) -> list[list[str]]:
        desktop = r"HKCU\control panel\desktop"
        return [
            ["reg", "add", desktop, "/v", "wallpaper", "/t", "REG_SZ", "/d", "", "/f"],
            ["reg", "add", desktop, "/v", "wallpaper", "/t", "REG_SZ", "/d", path, "/f"],
            ["reg", "add", desktop, "/v", "WallpaperStyle", "/t", "REG_SZ", "/d", "2", "/f"],
            ["RUNDLL32.EXE", "user32.dll,UpdatePerUserSystemParameters"],
        ]

    def apply(self, path: str) -> None:
        if not os.path.exists(path):
            raise SinkFailureError("file for new wallpaper does not exist")
        for args in self.commands_for(path):
            _run(args)


def select_wallpaper_setter(
    command: str | None = None,
    command_default: str | None = None,
    platform: str = sys.platform,
) -> CommandWallpaperSetter | WindowsWallpaperSetter:
    """Pick the wallpaper strategy for this platform.

    An explicit ``command`` template wins, then a named default from
    ``COMMAND_DEFAULTS``. Windows uses the registry when no command is given.

    Raises:
        ConfigInvalidError: If no usable command can be determined
    """
    if command:
        return CommandWallpaperSetter(command)
    if platform.startswith("win"):
        return WindowsWallpaperSetter()
    if command_default:
        template = COMMAND_DEFAULTS.get(command_default)
        if template is None:
            choices = ", ".join(sorted(COMMAND_DEFAULTS))
            raise ConfigInvalidError(
                f"unknown default wallpaper command {command_default!r}, choose one of: {choices}"
            )
        return CommandWallpaperSetter(template, name=command_default)
    raise ConfigInvalidError("wallpaper change command not found, set a custom one with --cmd")
