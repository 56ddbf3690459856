"""
flowy run

This module defines the 'run' command, which starts the daemon that keeps the wallpaper of
the current slot on the desktop. It never returns; put it last in a chain of commands.
"""

import click

from flowy.config import config
from flowy.daemon import Daemon
from flowy.FlowyState import FlowyState
from flowy.cli_utils.console import describe
from flowy.cli_utils.decorators import callback
from flowy.cli_utils.decorators import catch_errors
from flowy.cli_utils.decorators import require_schedule


@click.command(name="run")
@click.option(
    "--interval",
    "-i",
    type=click.IntRange(min=1),
    help="Seconds between checks of the clock (default: FLOWY_POLL_INTERVAL from config.json).",
)
@callback
@catch_errors
@require_schedule
def cli(state: FlowyState, interval: int = None):
    """Run the wallpaper daemon on the active schedule."""

    interval = interval or config.FLOWY_POLL_INTERVAL
    describe(
        f":arrows_counterclockwise-emoji: 'run' daemon listening, checking every {interval}s"
    )

    Daemon(state.schedule, interval=interval).run()
    return state
