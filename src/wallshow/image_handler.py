"""
Image Handler

Utilities for finding and validating the images wallshow puts on the desktop.

Listing images: a slideshow folder is re-read on every tick and the stored slideshow index is an
offset into that listing, so the listing order must be reproducible. Files are sorted by name,
case-insensitively, with the exact name as a tie breaker.

Validating images: Pillow reads only the header of a file to identify it, so validation is cheap
enough to run before every wallpaper change.
"""

from pathlib import Path

from PIL import Image, UnidentifiedImageError


# eligible slideshow/background extensions, matched case-insensitively
IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".bmp", ".tiff")


class InvalidImageError(Exception):
    """
    Raised when a provided file is not an image. Wrapper around the PIL UnidentifiedImageError
    for custom error messaging.
    """

    pass


def is_eligible(path: Path) -> bool:
    return path.suffix.lower() in IMAGE_EXTENSIONS


def sort_key(path: Path) -> tuple[str, str]:
    return (path.name.casefold(), path.name)


def list_images(directory: Path) -> list[Path]:
    """
    Return every eligible image file directly inside directory, in listing order. Subdirectories
    are not searched. Raise FileNotFoundError if directory does not exist or is not a directory.
    """

    directory = Path(directory).expanduser()

    if not directory.is_dir():
        raise FileNotFoundError(f"Directory {directory} does not exist.")

    images = [
        path for path in directory.iterdir() if path.is_file() and is_eligible(path)
    ]

    return sorted(images, key=sort_key)


def validate_image(input) -> str:
    """
    Determine whether input is a valid image and return its format name (e.g. "JPEG"). PIL open
    accepts a Path object, string, or file object. See the PIL docs on identifying images:
    https://pillow.readthedocs.io/en/stable/handbook/tutorial.html#identify-image-files
    """

    try:
        with Image.open(input) as image:

            return image.format

    except UnidentifiedImageError:
        raise InvalidImageError(f"Input {str(input)} does not appear to be an image.")

    except (FileNotFoundError, IsADirectoryError):
        raise InvalidImageError(f"Input {str(input)} could not be found.")
