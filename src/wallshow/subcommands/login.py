"""
wallshow login

Sets the login (Gnome lock screen) background to a copy of a JPEG image smaller than 244KiB.
This is separate from the desktop wallpaper and from slideshows.
"""

from pathlib import Path

import click
from rich.markup import escape

from wallshow.WallshowContext import WallshowContext
from wallshow.cli_utils.console import confirm_success
from wallshow.cli_utils.decorators import catch_errors


@click.command(name="login")
@click.argument("path", type=click.Path(path_type=Path))
@click.pass_obj
@catch_errors
def cli(obj: WallshowContext, path: Path):
    """Set the login background to a copy of the JPEG image at PATH."""

    dest = obj.desktop.set_login_background(path)
    confirm_success(f"'login' updated login background to {escape(str(dest))}")
