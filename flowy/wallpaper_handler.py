"""
Desktop Wallpaper Handler

This module gets and sets the desktop background by dropping into the settings tool of
the running desktop environment:

- GNOME (and GNOME-compatible Unity / Pantheon): gsettings, org.gnome.desktop.background
- Cinnamon, Deepin: dconf
- MATE: dconf, which takes a plain file path instead of a file:// uri
- XFCE: xfconf-query
- KDE Plasma: a plasmashell script evaluated over qdbus
- macOS: AppleScript through osascript

The desktop environment is read from XDG_CURRENT_DESKTOP on Linux.

subprocess.CalledProcessError is raised by subprocess.run if a non-zero exit status is
returned; this and a missing executable are both reported as WallpaperUpdateError.
"""

import os
import sys
import logging
import subprocess
from enum import Enum
from pathlib import Path
from typing import Union

from flowy import image_handler

logger = logging.getLogger(__name__)


class WallpaperUpdateError(Exception):
    """
    Raised when an attempt to get or update the desktop background fails.
    """

    pass


class DesktopEnvironment(Enum):
    GNOME = "GNOME"
    CINNAMON = "X-Cinnamon"
    MATE = "MATE"
    XFCE = "XFCE"
    DEEPIN = "Deepin"
    KDE = "KDE"
    MACOS = "macOS"


XFCE_BACKDROP = "/backdrop/screen0/monitor0/workspace0/last-image"

KDE_SET_SCRIPT = """
const monitors = desktops()
for (var i = 0; i < monitors.length; i++) {{
    monitors[i].wallpaperPlugin = "org.kde.image"
    monitors[i].currentConfigGroup = ["Wallpaper", "org.kde.image", "General"]
    monitors[i].writeConfig("Image", "{uri}")
}}
"""

KDE_APPLET_CONFIG = Path("~/.config/plasma-org.kde.plasma.desktop-appletsrc")


def is_gnome_compliant(desktop: str) -> bool:
    return "GNOME" in desktop or desktop in ("Unity", "Pantheon")


def detect_desktop() -> DesktopEnvironment:
    """
    Determine the running desktop environment. Raise WallpaperUpdateError if it is not
    one flowy knows how to talk to.
    """

    if sys.platform == "darwin":
        return DesktopEnvironment.MACOS

    desktop = os.environ.get("XDG_CURRENT_DESKTOP", "")

    if is_gnome_compliant(desktop):
        return DesktopEnvironment.GNOME

    # XDG_CURRENT_DESKTOP may be a colon separated list, e.g. "KDE" or "XFCE:X-Generic"
    for name in desktop.split(":"):
        try:
            return DesktopEnvironment(name)
        except ValueError:
            continue

    raise WallpaperUpdateError(
        f"Unsupported desktop environment: '{desktop or 'unknown'}'."
    )


def _run(cmd: list[str]) -> subprocess.CompletedProcess:
    """Run cmd, converting any failure into a WallpaperUpdateError."""

    logger.debug("running %s", cmd)

    try:
        return subprocess.run(cmd, check=True, text=True, capture_output=True)

    except subprocess.CalledProcessError as error:
        raise WallpaperUpdateError(
            f"'{cmd[0]}' failed with exit status {error.returncode}: {(error.stderr or '').strip()}"
        )

    except FileNotFoundError:
        raise WallpaperUpdateError(f"'{cmd[0]}' is not installed.")


def _clean(output: str) -> str:
    """Strip whitespace and GVariant string quotes from settings output."""

    return output.strip().strip("'\"")


def resolve_wallpaper(img_path: Union[str, Path]) -> Path:
    """
    Turn a path or file:// uri into an absolute Path to an existing image. Raise
    WallpaperUpdateError otherwise.
    """

    img_path = str(img_path)
    if not img_path:
        raise WallpaperUpdateError("Invalid path provided for image location: empty path.")

    wallpaper_location = (
        Path(img_path.removeprefix("file://")).expanduser().resolve().absolute()
    )

    # subsequent operations will fail if path does not exist or is not a file, so catch this.
    if not wallpaper_location.is_file():
        raise WallpaperUpdateError(
            f"Invalid path provided for image location: {img_path} does not exist."
        )

    try:
        image_handler.validate_image(wallpaper_location)

    except image_handler.InvalidImageError:
        raise WallpaperUpdateError(
            f"Invalid image type provided. {wallpaper_location.name} is not a valid image."
        )

    return wallpaper_location


def applescript_string(text: str) -> str:
    """Quote text as an AppleScript string literal."""

    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def set_wallpaper_commands(
    desktop: DesktopEnvironment, wallpaper: Path
) -> list[list[str]]:
    """The command line(s) that set wallpaper as the background on desktop."""

    uri = wallpaper.as_uri()

    if desktop is DesktopEnvironment.GNOME:
        return [["gsettings", "set", "org.gnome.desktop.background", "picture-uri", uri]]

    if desktop is DesktopEnvironment.CINNAMON:
        return [["dconf", "write", "/org/cinnamon/desktop/background/picture-uri", f"'{uri}'"]]

    if desktop is DesktopEnvironment.MATE:
        return [
            ["dconf", "write", "/org/mate/desktop/background/picture-filename", f"'{wallpaper}'"]
        ]

    if desktop is DesktopEnvironment.XFCE:
        return [["xfconf-query", "-c", "xfce4-desktop", "-p", XFCE_BACKDROP, "-s", str(wallpaper)]]

    if desktop is DesktopEnvironment.DEEPIN:
        return [
            [
                "dconf",
                "write",
                "/com/deepin/wrap/gnome/desktop/background/picture-uri",
                f"'{uri}'",
            ]
        ]

    if desktop is DesktopEnvironment.KDE:
        return [
            [
                "qdbus",
                "org.kde.plasmashell",
                "/PlasmaShell",
                "org.kde.PlasmaShell.evaluateScript",
                KDE_SET_SCRIPT.format(uri=uri),
            ]
        ]

    if desktop is DesktopEnvironment.MACOS:
        script = (
            'tell application "Finder" to set desktop picture to POSIX file '
            + applescript_string(str(wallpaper))
        )
        return [["osascript", "-e", script]]

    raise WallpaperUpdateError(f"Unsupported desktop environment: {desktop}.")


def get_wallpaper_command(desktop: DesktopEnvironment) -> list[str]:
    """The command line that prints the current background on desktop (not KDE)."""

    if desktop is DesktopEnvironment.GNOME:
        return ["gsettings", "get", "org.gnome.desktop.background", "picture-uri"]

    if desktop is DesktopEnvironment.CINNAMON:
        return ["dconf", "read", "/org/cinnamon/desktop/background/picture-uri"]

    if desktop is DesktopEnvironment.MATE:
        return ["dconf", "read", "/org/mate/desktop/background/picture-filename"]

    if desktop is DesktopEnvironment.XFCE:
        return ["xfconf-query", "-c", "xfce4-desktop", "-p", XFCE_BACKDROP]

    if desktop is DesktopEnvironment.DEEPIN:
        return ["dconf", "read", "/com/deepin/wrap/gnome/desktop/background/picture-uri"]

    if desktop is DesktopEnvironment.MACOS:
        script = 'tell application "Finder" to get POSIX path of (get desktop picture as alias)'
        return ["osascript", "-e", script]

    raise WallpaperUpdateError(f"Unsupported desktop environment: {desktop}.")


def _kde_get(applet_config: Path = None) -> str:
    """Read the wallpaper from the plasma desktop applet config file."""

    applet_config = applet_config or KDE_APPLET_CONFIG

    try:
        with applet_config.expanduser().open("r") as file:
            for line in file:
                if line.startswith("Image="):
                    return line.removeprefix("Image=").strip()

    except OSError as error:
        raise WallpaperUpdateError(f"Could not read KDE wallpaper settings: {error}")

    raise WallpaperUpdateError("KDE wallpaper not found in plasma settings.")


def get_current_wallpaper(desktop: DesktopEnvironment = None) -> Path:
    """
    Retrieve the current desktop background as a Path.
    """

    desktop = desktop or detect_desktop()

    if desktop is DesktopEnvironment.KDE:
        wallpaper = _kde_get()
    else:
        wallpaper = _clean(_run(get_wallpaper_command(desktop)).stdout)

    if not wallpaper:
        raise WallpaperUpdateError("Could not retrieve current background: no wallpaper set.")

    return Path(wallpaper.removeprefix("file://"))


def update_wallpaper(img_path: Union[str, Path], desktop: DesktopEnvironment = None) -> Path:
    """
    Update the background image to the one at img_path (a path or file:// uri). Raise
    WallpaperUpdateError if issues are encountered during the update. Returns the
    resolved path of the new wallpaper.
    """

    wallpaper = resolve_wallpaper(img_path)
    desktop = desktop or detect_desktop()

    for cmd in set_wallpaper_commands(desktop, wallpaper):
        _run(cmd)

    logger.info("wallpaper set to %s", wallpaper)
    return wallpaper
