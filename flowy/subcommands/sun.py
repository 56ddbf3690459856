"""
flowy sun

This module defines the 'sun' subcommand, which prints the solar timetable for a location:
twilight, sunrise, noon and sunset in local time, and where the sun is right now.
"""

import time
from datetime import datetime

import click
from rich.table import Table

from flowy.solar import (
    DAY_ORDER,
    Timetable,
    local_noon,
    solar_elevation,
    unix_to_local,
)
from flowy.FlowyState import FlowyState
from flowy.cli_utils.console import console
from flowy.cli_utils.decorators import callback
from flowy.cli_utils.decorators import catch_errors


def timetable_table(timetable: Timetable) -> Table:

    table = Table(title=f"Sun at {timetable.lat}, {timetable.lon}")
    table.add_column("Event")
    table.add_column("Local time")

    for event in DAY_ORDER:
        epoch = timetable.get(event)
        table.add_row(
            event.value.replace("_", " "),
            unix_to_local(epoch) if epoch is not None else "does not occur",
        )

    return table


@click.command(name="sun")
@click.option("--lat", type=float, required=True, help="Latitude in degrees, north positive.")
@click.option("--lon", type=float, required=True, help="Longitude in degrees, east positive.")
@click.option(
    "--date",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    help="Day to compute, in local time (default: today).",
)
@callback
@catch_errors
def cli(state: FlowyState, lat: float, lon: float, date: datetime = None):
    """Print sunrise, sunset and twilight times at a location."""

    now = time.time()
    date_epoch = local_noon(date) if date else now

    timetable = Timetable(date_epoch, lat, lon)
    console.print(timetable_table(timetable))

    elevation = solar_elevation(now, lat, lon)
    console.print(f":sun-emoji: the sun is {elevation:.1f}° above the horizon right now")

    return state
