"""
flowy

Rotate your desktop wallpaper through the day, following the sun.

This module defines the entry point to the flowy CLI. It defines a 'cli' command group
which collects global options. Subcommands are chained: each one returns a callback, and
once all of them have been parsed, process_pipeline runs the callbacks in order over a
shared FlowyState. That lets a single line generate a schedule and start the daemon on it.
"""

import logging
from io import StringIO

import click

from flowy.FlowyState import FlowyState
from flowy.cli_utils.decorators import catch_errors
from flowy.cli_utils.console import console, setup_logging
from flowy.cli_utils.utils import import_commands, attach_commands


@click.group(chain=True)
@catch_errors
@click.pass_context
@click.option(
    "--verbose",
    "verbosity",
    flag_value="verbose",
    help="Print debug output, including the commands used to change the wallpaper.",
)
@click.option(
    "--quiet",
    "verbosity",
    flag_value="quiet",
    help="Silence all output except errors.",
)
@click.version_option(package_name="flowy")
def cli(ctx: click.Context, verbosity):
    """
    flowy

    rotate your desktop wallpaper through the day, following the sun.


    ====================
    Quickstart
    ====================

    Spread the wallpapers in a folder evenly over the day and start changing them:

        $ flowy dir ~/Pictures/walls run

    Follow sunrise and sunset at your location (latitude, longitude, east positive).
    Wallpapers with DAY in the name are shown between sunrise and sunset, those with
    NIGHT in the name for the rest of the day, in file name order:

        $ flowy solar ~/Pictures/walls 51.5 -0.13 run

    Grab a ready-made wallpaper set:

        $ flowy preset lake run


    ====================
    More commands
    ====================

    See the active schedule, or today's sunrise and sunset:

        $ flowy show

        $ flowy sun --lat 51.5 --lon -0.13

    To see detailed help text add --help to a command, e.g.

        $ flowy solar --help
    """

    ctx.obj = FlowyState(quiet=verbosity == "quiet")

    if verbosity == "quiet":
        # capture all regular output to a junk stream. errors still go to stderr.
        console.file = StringIO()
        setup_logging(logging.WARNING)

    elif verbosity == "verbose":
        setup_logging(logging.DEBUG)

    else:
        setup_logging(logging.INFO)

    return ctx.obj


@cli.result_callback()
@click.pass_obj
@catch_errors
def process_pipeline(obj: FlowyState, callbacks, *args, **kwargs):
    """
    Receives the callbacks returned by the invoked subcommands, in command line order,
    and runs each of them on the shared state.

    Commands that produce a schedule (dir, solar, preset) have to come before the
    commands that consume one (show, run); a consumer with nothing before it loads
    the schedule persisted by an earlier invocation.
    """

    state: FlowyState = obj

    for callback in callbacks:
        state = callback(state)

    return state


def main():

    commands = import_commands()
    attach_commands(cli, commands)
    cli()


if __name__ == "__main__":
    main()
