"""
wallshow console utilities

This module provides application-wide access to Rich Console objects for writing to stdout
and stderr, plus the logging setup used for diagnostics. Scheduled ticks run with no terminal
attached, so anything worth keeping from them is also written to the log file.
"""

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

wallshow_theme = Theme(
    {"warning": "orange_red1", "fail": "bold red", "confirm": "", "describe": ""}
)

# soft_wrap keeps long file paths on one line regardless of terminal width
console = Console(theme=wallshow_theme, soft_wrap=True)
error_console = Console(theme=wallshow_theme, stderr=True, soft_wrap=True)

logger = logging.getLogger("wallshow")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


"""
Formatting helpers
"""


def warn(msg: str):
    """
    Format msg and print to stderr.
    """

    error_console.print(f"[bold]warning: [/] {msg}", style="warning")


def describe(msg: str, **kwargs):
    """
    Format descriptive msg and print to stdout.
    """

    console.print(f"{msg}", style="describe", **kwargs)


def confirm_success(msg: str, **kwargs):
    """
    Format confirmation msg and print to stdout. Accept any additional kwargs that console.print from
    rich module exposes.
    """

    console.print(f"{msg}", style="confirm", **kwargs)


def fail(msg: str):
    """
    Print a single "[ERROR] msg" line to stderr. Markup and emoji are disabled so that paths and
    messages containing brackets or colons come through untouched.
    """

    error_console.print(
        f"[ERROR] {msg}", style="fail", markup=False, emoji=False, highlight=False
    )


def setup_logging(log_file: Path = None, debug: bool = False) -> logging.Logger:
    """
    Attach a RichHandler on stderr and, when log_file is given, a plain file handler. Safe to call
    more than once per process: handlers from a previous call are replaced.
    """

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    rich_handler = RichHandler(
        console=error_console, show_path=False, rich_tracebacks=False
    )
    rich_handler.setLevel(logging.DEBUG if debug else logging.WARNING)
    logger.addHandler(rich_handler)

    if log_file is not None:
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file, encoding="utf-8")

        except OSError as error:
            warn(f"cannot write log file {log_file}: {error}")

        else:
            file_handler.setLevel(logging.DEBUG if debug else logging.INFO)
            file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
            logger.addHandler(file_handler)

    return logger
