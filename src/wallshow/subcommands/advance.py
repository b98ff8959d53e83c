"""
wallshow next

Advance the current slideshow to the next image in its folder. This is the command the slideshow
timer runs on every tick; it can also be run by hand.
"""

import logging

import click
from rich.markup import escape

from wallshow.WallshowContext import WallshowContext
from wallshow.cli_utils.console import confirm_success
from wallshow.cli_utils.decorators import catch_errors

logger = logging.getLogger(__name__)


@click.command(name="next")
@click.pass_obj
@catch_errors
def cli(obj: WallshowContext):
    """Advance the current slideshow."""

    shown = obj.slideshow.advance()

    if shown is None:
        logger.info("slideshow folder is empty, wallpaper cleared")
        confirm_success("'next' cleared the wallpaper, the folder has no images")
    else:
        logger.info("slideshow advanced to %s", shown)
        confirm_success(f"'next' updated wallpaper to {escape(str(shown))}")
