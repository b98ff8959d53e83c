"""
Gnome Wallpaper Handler

This module reads and updates the Gnome desktop background and lock screen background by dropping
into the gsettings command line tool, which avoids depending on PyGObject.

Settings for desktop backgrounds are defined under the schema: org.gnome.desktop.background
More information on this schema can be found at:
https://github.com/GNOME/gsettings-desktop-schemas/blob/master/schemas/org.gnome.desktop.background.gschema.xml.in

The lock screen uses the same keys under org.gnome.desktop.screensaver. wallshow treats the lock
screen picture as the "login background".
"""

import logging
import shutil
import subprocess
from enum import Enum
from pathlib import Path
from urllib.parse import unquote, urlparse

from wallshow import image_handler
from wallshow.config import config

logger = logging.getLogger(__name__)

GSETTINGS = "gsettings"
BACKGROUND_SCHEMA = "org.gnome.desktop.background"
SCREENSAVER_SCHEMA = "org.gnome.desktop.screensaver"

# Gnome 42+ shows picture-uri-dark instead of picture-uri when the dark style is on
DARK_PICTURE_URI_KEY = "picture-uri-dark"

LOGIN_BACKGROUND_NAME = "backgroundDefault.jpg"
LOGIN_BACKGROUND_MAX_BYTES = 244 * 1024


class WallpaperUpdateError(OSError):
    """
    Raised when an attempt to read or update the Gnome desktop background fails.
    """

    pass


class PicturePosition(Enum):
    """
    Sizing options for desktop backgrounds. Values are the matching Gnome 'picture-options'.

    SPAN and NONE are only ever read back from Gnome (a picture spanned across monitors, or no
    picture at all) so that a slideshow can keep them. They are not offered to the user.
    """

    CENTER = "centered"
    TILE = "wallpaper"
    STRETCH = "stretched"
    FIT = "scaled"
    FILL = "zoom"
    SPAN = "spanned"
    NONE = "none"

    def __str__(self):
        return self.name.capitalize()

    @classmethod
    def selectable(cls) -> list["PicturePosition"]:
        return [position for position in cls if position not in (cls.SPAN, cls.NONE)]

    @classmethod
    def parse(cls, name: str) -> "PicturePosition":
        """Look up a selectable position by name, ignoring case, e.g. 'fill' or 'Fill'."""

        for position in cls.selectable():
            if position.name == name.strip().upper():
                return position

        raise ValueError(
            f"Invalid position '{name}'. Expected one of {', '.join(cls.names())}."
        )

    @classmethod
    def names(cls) -> list[str]:
        return [str(position) for position in cls.selectable()]


def gsettings_get(schema: str, key: str) -> str:
    """
    Return the raw value of a gsettings key with GVariant quoting removed, e.g. 'zoom' -> zoom.
    """

    try:
        process = subprocess.run(
            [GSETTINGS, "get", schema, key],
            text=True,
            check=True,
            capture_output=True,
        )

    except (subprocess.CalledProcessError, FileNotFoundError) as error:
        raise WallpaperUpdateError(f"Could not read {schema} {key}: {error}")

    return process.stdout.strip().removeprefix("'").removesuffix("'")


def gsettings_set(schema: str, key: str, value: str) -> None:

    logger.debug("gsettings set %s %s %r", schema, key, value)

    try:
        subprocess.run(
            [GSETTINGS, "set", schema, key, value],
            text=True,
            check=True,
            capture_output=True,
        )

    except (subprocess.CalledProcessError, FileNotFoundError) as error:
        raise WallpaperUpdateError(f"Could not set {schema} {key}: {error}")


def gsettings_keys(schema: str) -> list[str]:

    try:
        process = subprocess.run(
            [GSETTINGS, "list-keys", schema],
            text=True,
            check=True,
            capture_output=True,
        )

    except (subprocess.CalledProcessError, FileNotFoundError) as error:
        raise WallpaperUpdateError(f"Could not list keys of {schema}: {error}")

    return process.stdout.split()


def set_picture_uri(uri: str) -> None:
    """
    Write uri to picture-uri and, where the installed Gnome has it, to picture-uri-dark so the
    picture shows in both the light and the dark style.
    """

    gsettings_set(BACKGROUND_SCHEMA, "picture-uri", uri)

    if DARK_PICTURE_URI_KEY in gsettings_keys(BACKGROUND_SCHEMA):
        gsettings_set(BACKGROUND_SCHEMA, DARK_PICTURE_URI_KEY, uri)


def uri_to_path(uri: str) -> Path | None:
    """Convert a picture-uri value to a Path. An empty value means no picture is set."""

    if not uri:
        return None

    if uri.startswith("file:"):
        return Path(unquote(urlparse(uri).path))

    return Path(uri)


def get_current_wallpaper() -> Path | None:
    """
    Retrieve the current wallpaper from the Gnome settings for desktop background.
    """

    return uri_to_path(gsettings_get(BACKGROUND_SCHEMA, "picture-uri"))


def get_wallpaper_position() -> PicturePosition:

    value = gsettings_get(BACKGROUND_SCHEMA, "picture-options")

    try:
        return PicturePosition(value)
    except ValueError:
        raise WallpaperUpdateError(
            f"Unsupported wallpaper position '{value}' is currently set."
        )


def resolve_image(img_path) -> Path:
    """
    Return the absolute path of img_path after checking it is an existing, readable image.
    """

    img_path = Path(str(img_path).removeprefix("file://")).expanduser()

    # Path("") is ".", which is_file() rejects along with missing paths
    if not img_path.is_file():
        raise WallpaperUpdateError(
            f"Invalid path provided for image location: {img_path} does not exist."
        )

    try:
        image_handler.validate_image(img_path)
    except image_handler.InvalidImageError as error:
        raise WallpaperUpdateError(str(error))

    return img_path.resolve()


def copy_to(img_path: Path, dest_dir: Path, name: str = None) -> Path:

    dest_path = dest_dir / (name or img_path.name)

    try:
        dest_dir.mkdir(parents=True, exist_ok=True)
        # note: copy2 attempts to preserve file metadata. other copy functions in shutil do not do so
        shutil.copy2(img_path, dest_path)
        logger.info("copied %s to %s", img_path, dest_path)

    except shutil.SameFileError:
        logger.debug("%s is already located at %s", img_path.name, dest_dir)

    return dest_path


def update_wallpaper(
    img_path, position: PicturePosition = PicturePosition.FILL, copy: bool = False
) -> Path:
    """
    Update the background image to the one specified by img_path, displayed with position. When
    copy is set, the image is first copied to the wallpaper directory from config and the copy is
    used. Returns the path now set as the wallpaper. Raise WallpaperUpdateError if issues are
    encountered during the attempt.
    """

    """
    Gnome does no path validation on picture-uri: an invalid value silently results in no picture.
    Check the path here so that errors reach the user.
    """

    wallpaper_location = resolve_image(img_path)

    if copy:
        wallpaper_location = copy_to(wallpaper_location, config.WALLSHOW_WALLPAPER_DIR)

    gsettings_set(BACKGROUND_SCHEMA, "picture-options", position.value)
    set_picture_uri(wallpaper_location.as_uri())

    return wallpaper_location


def clear_wallpaper() -> None:
    """Remove the desktop picture, leaving the background color."""

    gsettings_set(BACKGROUND_SCHEMA, "picture-options", PicturePosition.CENTER.value)
    set_picture_uri("")


def get_login_background() -> Path | None:
    """
    Path to the current lock screen picture, or None if there is none or the file is gone.
    """

    path = uri_to_path(gsettings_get(SCREENSAVER_SCHEMA, "picture-uri"))

    if path is None or not path.exists():
        return None

    return path


def update_login_background(img_path) -> Path:
    """
    Set the login (lock screen) background to a copy of the JPEG image at img_path. The image must be
    smaller than 244KiB.
    """

    img_path = resolve_image(img_path)

    if img_path.stat().st_size > LOGIN_BACKGROUND_MAX_BYTES:
        raise WallpaperUpdateError(
            "Image filesize must be less than 244KiB to set as login background."
        )

    if image_handler.validate_image(img_path) != "JPEG":
        raise WallpaperUpdateError(
            "Image must be in JPEG (JFIF) format to set as login background."
        )

    dest_path = copy_to(img_path, config.WALLSHOW_LOGIN_DIR, LOGIN_BACKGROUND_NAME)
    gsettings_set(SCREENSAVER_SCHEMA, "picture-uri", dest_path.as_uri())

    return dest_path


class GnomeDesktop:
    """
    The desktop as seen by the slideshow controller and the CLI. Each method maps to one of the
    module level functions above.
    """

    def get_background(self) -> Path | None:
        return get_current_wallpaper()

    def get_position(self) -> PicturePosition:
        return get_wallpaper_position()

    def set_background(
        self, path: Path, position: PicturePosition, copy: bool = False
    ) -> Path:
        return update_wallpaper(path, position=position, copy=copy)

    def clear_background(self) -> None:
        clear_wallpaper()

    def get_login_background(self) -> Path | None:
        return get_login_background()

    def set_login_background(self, path: Path) -> Path:
        return update_login_background(path)
