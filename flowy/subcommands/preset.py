"""
flowy preset

This module defines the 'preset' subcommand, which downloads a ready-made wallpaper set
and schedules it evenly over the day.
"""

import click

from flowy import presets
from flowy.schedule import generate_schedule
from flowy.FlowyState import FlowyState
from flowy.cli_utils.utils import save_schedule
from flowy.cli_utils.console import describe, confirm_success
from flowy.cli_utils.decorators import callback
from flowy.cli_utils.decorators import catch_errors


@click.command(name="preset")
@click.argument("name", type=click.Choice(sorted(presets.PRESETS)))
@callback
@catch_errors
def cli(state: FlowyState, name: str):
    """Download the wallpaper preset NAME and schedule it."""

    describe(f":earth_asia-emoji: 'preset' downloading {name} ...")

    preset_dir = presets.install_preset(name)
    confirm_success(f":white_check_mark-emoji: 'preset' installed {name} to {preset_dir}")

    state.schedule = generate_schedule(preset_dir)
    save_schedule(state.schedule)

    return state
