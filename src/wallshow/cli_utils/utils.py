"""
wallshow CLI Utilities

This module contains utilities for working across Click subcommands: collecting the built-in
subcommands and attaching them to a group.
"""

import importlib
import pkgutil
from collections.abc import Iterable

import click

import wallshow.subcommands

from wallshow.cli_utils.console import warn


def import_commands(
    package=wallshow.subcommands,
) -> list[click.Command]:
    """
    Retrieve the click Commands defined by the modules of package. The default package is the built
    in subcommands package for commands that come pre-installed with wallshow.

    A valid wallshow command module defines a "cli" function that is wrapped as a click Command
    object. Set the 'name' keyword argument in the @click.command decorator to set the name of the
    command intended for the end user.
    """

    commands = []

    for module_info in pkgutil.iter_modules(package.__path__):

        module = importlib.import_module(f"{package.__name__}.{module_info.name}")

        try:
            commands.append(getattr(module, "cli"))

        except AttributeError:
            warn(f"Cannot add command {module_info.name}: no 'cli' function found.")

    return commands


def attach_commands(group: click.Group, commands: Iterable[click.Command]):
    """
    Attach each command in a list of click Command objects to a provided group. Useful when
    retrieving a dynamic list of subcommands with import_commands().
    """

    for command in commands:
        group.add_command(command)
