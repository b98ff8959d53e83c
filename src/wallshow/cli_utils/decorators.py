"""
wallshow Decorators

Decorators shared by the wallshow subcommands. Every subcommand body is wrapped with
@catch_errors so that any error raised in the core reaches the user the same way: a single
"[ERROR] <message>" line on stderr and a non-zero exit status.

Here's a sample of how this looks for a subcommand:

    @click.command(name="next")
    @click.pass_obj
    @catch_errors
    def cli(obj):
        '''Advance the current slideshow'''

        obj.slideshow.advance()
"""

from sys import exit
from functools import wraps

from wallshow.cli_utils.console import fail
from wallshow.cli_utils.console import logger


def catch_errors(func):
    """
    Catch and format errors with the "fail" console template and gracefully
    exit the application with an error code.
    """

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except Exception as error:
            logger.debug("'%s' failed", func.__module__, exc_info=True)
            fail(str(error) or type(error).__name__)
            exit(1)

    return wrapper
