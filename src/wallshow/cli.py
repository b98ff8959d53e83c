"""
wallshow

Set, report and rotate your Gnome desktop wallpaper from the command line.

This module defines the entry point to the wallshow CLI: a 'cli' command group that sets up console
output and logging, then hands over to one of the subcommands found in wallshow/subcommands. Run
with no subcommand, it prints the current wallpaper, login background and stored slideshow.

A slideshow is driven from outside the process: 'wallshow set --slideshow' stores the slideshow and
installs a systemd user timer which runs 'wallshow next' on every tick.
"""

from sys import exit

import click

from wallshow import __version__
from wallshow.config import config

from wallshow.cli_utils.console import console
from wallshow.cli_utils.console import describe
from wallshow.cli_utils.console import fail
from wallshow.cli_utils.console import setup_logging
from wallshow.cli_utils.decorators import catch_errors
from wallshow.cli_utils.utils import import_commands
from wallshow.cli_utils.utils import attach_commands

from wallshow.WallshowContext import WallshowContext


class WallshowGroup(click.Group):
    """
    Command group that reports click's own usage errors the same way as every other failure:
    "[ERROR] <message>" on stderr and exit status 1.
    """

    def main(self, *args, **kwargs):

        kwargs["standalone_mode"] = False

        try:
            return super().main(*args, **kwargs)

        except click.ClickException as error:
            fail(error.format_message())
            exit(1)

        except click.Abort:
            fail("Aborted!")
            exit(1)


@click.group(
    cls=WallshowGroup,
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "-?", "--help"]},
)
@click.option(
    "--verbose",
    "verbosity",
    flag_value="verbose",
    default="verbose",
    help="Print all output to stdout or the terminal",
)
@click.option(
    "--quiet",
    "verbosity",
    flag_value="quiet",
    help="Silence all output printed to stdout or the terminal.",
)
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Log diagnostic messages to stderr.",
)
@click.version_option(version=__version__, prog_name="wallshow")
@click.pass_context
def cli(ctx: click.Context, verbosity, debug):
    """
    wallshow

    set, report and rotate your Gnome desktop wallpaper.


    ====================
    Quickstart
    ====================

    Print the current wallpaper, login background and slideshow:

        $ wallshow

    Set the wallpaper to a copy of an image, stretched to the screen:

        $ wallshow set ~/Pictures/beach.jpg --position Stretch

    Rotate through a folder every 30 minutes, starting at the third image:

        $ wallshow set ~/Pictures/walls --interval 30 --index 2

    Skip to the next image, or end the slideshow:

        $ wallshow next

        $ wallshow endshow


    ====================
    Help
    ====================

    For detailed help text add --help to the specified command, e.g.

        $ wallshow set --help
    """

    console.quiet = verbosity == "quiet"
    setup_logging(config.log_file, debug=debug)

    # tests supply their own context object
    if ctx.obj is None:
        ctx.obj = WallshowContext.from_config(config)

    if ctx.invoked_subcommand is None:
        show_current(ctx.obj)


@catch_errors
def show_current(obj: WallshowContext):
    """Print details of the current wallpaper, login background and stored slideshow."""

    wallpaper = obj.desktop.get_background()
    position = obj.desktop.get_position()
    login_background = obj.desktop.get_login_background()
    slideshow = obj.slideshow.current()

    describe("Current wallpaper", markup=False)
    describe(f'\t Filepath: "{wallpaper or ""}"', markup=False)
    describe(f"\t Position: {position}", markup=False)
    describe("Current login background", markup=False)
    describe(f'\t Filepath: "{login_background or ""}"', markup=False)

    if slideshow is not None:
        describe("Current slideshow", markup=False)
        describe(f'\t Directory: "{slideshow.directory}"', markup=False)
        describe(f"\t Index: {slideshow.current_index}", markup=False)
        describe(f"\t Interval: {slideshow.interval} minutes", markup=False)


def main():

    commands = import_commands()
    attach_commands(cli, commands)
    cli()


if __name__ == "__main__":
    main()
