"""
wallshow endshow

Ends the current slideshow by removing its timer. The slideshow record is kept unless --forget is
given, so 'wallshow next' still works against the old folder after a plain endshow.
"""

import click

from wallshow.WallshowContext import WallshowContext
from wallshow.cli_utils.console import confirm_success
from wallshow.cli_utils.console import describe
from wallshow.cli_utils.decorators import catch_errors


@click.command(name="endshow")
@click.option(
    "--forget",
    is_flag=True,
    help="Also delete the stored slideshow so that 'next' fails until a new one is started.",
)
@click.pass_obj
@catch_errors
def cli(obj: WallshowContext, forget: bool):
    """End the current slideshow."""

    if obj.slideshow.cancel(forget=forget):
        confirm_success("'endshow' ended the current slideshow")
    else:
        describe("'endshow' found no slideshow to end")
