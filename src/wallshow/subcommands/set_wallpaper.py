"""
wallshow set

This module defines the 'set' subcommand, which sets the desktop wallpaper to an image, to a random
image from a folder, or starts a slideshow through a folder.

A slideshow is started by any of --slideshow, --interval or --index. It always links to the images
in place and never copies them.
"""

import logging
from pathlib import Path
from random import sample

import click
from rich.markup import escape

from wallshow import image_handler
from wallshow.wallpaper_handler import PicturePosition
from wallshow.WallshowContext import WallshowContext
from wallshow.cli_utils.console import confirm_success
from wallshow.cli_utils.console import describe
from wallshow.cli_utils.decorators import catch_errors

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 60


@click.command(name="set")
@click.argument("path", type=click.Path(path_type=Path))
@click.option(
    "--link",
    "-L",
    is_flag=True,
    help="Do not create a copy, just link to the image.",
)
@click.option(
    "--position",
    "-P",
    type=click.Choice(PicturePosition.names(), case_sensitive=False),
    default=str(PicturePosition.FILL),
    show_default=True,
    help="Wallpaper position.",
)
@click.option(
    "--directory",
    "-D",
    is_flag=True,
    help="PATH is a directory. Without --slideshow a random image from it is used.",
)
@click.option(
    "--slideshow",
    "-S",
    is_flag=True,
    help="Begin a new slideshow through the images in PATH. Implies --directory and --link.",
)
@click.option(
    "--interval",
    "-I",
    type=click.IntRange(min=0),
    help=f"Minutes between slideshow images. Defaults to {DEFAULT_INTERVAL}, max is 44640. Implies --slideshow.",
)
@click.option(
    "--index",
    "-i",
    type=click.IntRange(min=0),
    help="Index of the image in PATH to begin the slideshow with. Defaults to 0. Implies --slideshow.",
)
@click.option(
    "--endshow",
    is_flag=True,
    help="End the current slideshow first.",
)
@click.pass_obj
@catch_errors
def cli(
    obj: WallshowContext,
    path: Path,
    link: bool,
    position: str,
    directory: bool,
    slideshow: bool,
    interval: int,
    index: int,
    endshow: bool,
):
    """
    Set the wallpaper to a copy of the image at PATH, or rotate through the images in a folder.
    """

    position = PicturePosition.parse(position)

    if endshow:
        if obj.slideshow.cancel():
            describe("'set' ended the current slideshow")

    if slideshow or interval is not None or index is not None:

        interval = DEFAULT_INTERVAL if interval is None else interval
        shown = obj.slideshow.start(path, position, interval, index or 0)

        logger.info("started slideshow of %s every %d minutes", path, interval)
        confirm_success(
            f"'set' started a slideshow of {escape(str(path))} every {interval} minutes"
        )

    else:

        if directory:
            images = image_handler.list_images(path)
            if not images:
                raise FileNotFoundError(f"No images found in {path}.")
            path = sample(images, 1)[0]

        shown = obj.desktop.set_background(path, position, copy=not link)

    if shown is None:
        confirm_success("'set' cleared the wallpaper, the folder has no images")
    else:
        confirm_success(f"'set' updated wallpaper to {escape(str(shown))} ({position})")
