"""
flowy dir

This module defines the 'dir' subcommand, which gives every wallpaper in a folder an equal
share of the day, starting at midnight, and saves the result as the active schedule.
"""

from pathlib import Path

import click

from flowy.schedule import generate_schedule
from flowy.FlowyState import FlowyState
from flowy.cli_utils.utils import save_schedule
from flowy.cli_utils.console import describe
from flowy.cli_utils.decorators import callback
from flowy.cli_utils.decorators import catch_errors


@click.command(name="dir")
@click.argument(
    "directory",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
@callback
@catch_errors
def cli(state: FlowyState, directory: Path):
    """Spread the wallpapers in DIRECTORY evenly over the day."""

    describe(f":clock3-emoji: 'dir' scheduling wallpapers from {directory}")

    state.schedule = generate_schedule(directory)
    save_schedule(state.schedule)

    return state
