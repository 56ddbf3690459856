"""
flowy show

This module defines the 'show' subcommand, which prints the active schedule and marks the
slot showing right now.
"""

import click

from flowy.FlowyState import FlowyState
from flowy.cli_utils.utils import print_schedule
from flowy.cli_utils.decorators import callback
from flowy.cli_utils.decorators import catch_errors
from flowy.cli_utils.decorators import require_schedule


@click.command(name="show")
@callback
@catch_errors
@require_schedule
def cli(state: FlowyState):
    """Show the active wallpaper schedule."""

    print_schedule(state.schedule)
    return state
