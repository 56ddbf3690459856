"""
flowy console utilities

This module provides application-wide access to Rich Console objects for writing to
stdout and stderr, plus the logging setup that routes the "flowy" logger through Rich.
"""

import logging

from rich.console import Console
from rich.theme import Theme
from rich.logging import RichHandler

flowy_theme = Theme(
    {"warning": "orange_red1", "fail": "bold red", "confirm": "", "describe": ""}
)

console = Console(theme=flowy_theme)
error_console = Console(theme=flowy_theme, stderr=True)

logger = logging.getLogger("flowy")


"""
Formatting helpers
"""


def warn(msg: str):
    """
    Format msg and print to stderr.
    """

    error_console.print(
        f":exclamation_mark-emoji: [bold]warning: [/] {msg}", style="warning"
    )


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
    Format failure msg as a single "Error: ..." line on stderr.
    """

    error_console.print(f"Error: {msg}", style="fail", markup=False, emoji=False)


def setup_logging(level: int = logging.INFO):
    """
    Send records from the flowy logger to stderr through Rich. Safe to call more than once.
    """

    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        handler = RichHandler(console=error_console, show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
        logger.addHandler(handler)

    logger.setLevel(level)


def log(msg: str, level: int = logging.INFO):
    """
    Format msg and send it to the flowy log.
    """

    logger.log(level, msg)
