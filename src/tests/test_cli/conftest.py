"""
conftest.py

Test configuration for CLI and entrypoint tests.

Defines pytest fixtures specifically related to CLI and click operations. The fakes the commands
run against come from the top level conftest.py.
"""


import pytest
import click
from click.testing import CliRunner

from wallshow.cli import cli
from wallshow.cli_utils.utils import import_commands
from wallshow.cli_utils.utils import attach_commands
from wallshow.WallshowContext import WallshowContext


@pytest.fixture(scope="session")
def subcommands():
    """
    Import all of the commands found in the subcommands package *without* invoking the
    entrypoint (main).
    """

    return import_commands()


@pytest.fixture(autouse=True)
def setup(subcommands, reset_commands, entry_point: click.Group = cli):
    attach_commands(entry_point, subcommands)
    yield
    reset_commands(entry_point=entry_point)


@pytest.fixture
def reset_commands():
    def inner(entry_point: click.Group = cli):
        # teardown the commands that may have been added to clean the test environment.
        entry_point.commands = {}

    return inner


@pytest.fixture
def context(desktop, slideshow) -> WallshowContext:
    return WallshowContext(desktop=desktop, slideshow=slideshow)


@pytest.fixture
def invoke(context):
    """Run the wallshow CLI against the fakes, e.g. invoke("set", "--link", path)."""

    runner = CliRunner()

    def inner(*args):
        return runner.invoke(cli, [str(arg) for arg in args], obj=context)

    return inner
