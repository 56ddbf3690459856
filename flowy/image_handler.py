"""
Image Handler

Check that wallpaper files are images before handing them to the desktop. The desktop
settings backends accept any string without complaint and fall back to a blank
background, so a bad path would otherwise go unnoticed.
"""

from pathlib import Path
from typing import Union

from PIL import Image, UnidentifiedImageError


class InvalidImageError(Exception):
    """
    Raised when a provided file is not an image. Wrapper around the PIL
    UnidentifiedImageError for custom error messaging.
    """

    pass


def validate_image(input: Union[str, Path]) -> str:
    """
    Determine whether input is a valid image and return its format (e.g. "JPEG").

    PIL reads the content header to determine the file type but doesn't load the image
    data, so this is cheap enough to call before every wallpaper change. See
    https://pillow.readthedocs.io/en/stable/handbook/tutorial.html#identify-image-files
    """

    try:
        with Image.open(input) as image:
            return image.format

    except UnidentifiedImageError:
        raise InvalidImageError(f"Input {str(input)} does not appear to be an image.")

    except (FileNotFoundError, IsADirectoryError):
        raise InvalidImageError(f"Input {str(input)} could not be found.")
