"""
flowy solar

This module defines the 'solar' subcommand. Wallpapers whose file name contains DAY are
spread between today's sunrise and sunset at the given location, and those containing
NIGHT between sunset and the following sunrise.
"""

from pathlib import Path

import click

from flowy.schedule import generate_schedule_solar
from flowy.FlowyState import FlowyState
from flowy.cli_utils.utils import save_schedule
from flowy.cli_utils.console import describe
from flowy.cli_utils.decorators import callback
from flowy.cli_utils.decorators import catch_errors


@click.command(name="solar", context_settings={"ignore_unknown_options": True})
@click.argument(
    "directory",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
@click.argument("lat", type=float)
@click.argument("lon", type=float)
@callback
@catch_errors
def cli(state: FlowyState, directory: Path, lat: float, lon: float):
    """
    Schedule DAY and NIGHT wallpapers in DIRECTORY around sunrise and sunset at LAT LON.

    Longitude is east positive, e.g. flowy solar ~/walls -33.87 151.21
    """

    describe(f":sunrise-emoji: 'solar' latitude {lat}, longitude {lon}")

    state.schedule = generate_schedule_solar(directory, lat, lon)
    save_schedule(state.schedule)

    return state
