"""
flowy CLI Utilities

Utilities shared by the click subcommands: importing subcommands from the subcommands
directory, persisting schedules and rendering them for the terminal.
"""

import sys
import inspect
import logging
import importlib.util
from pathlib import Path
from datetime import datetime
from collections.abc import Iterable

import click
from rich.table import Table

import flowy

from flowy.config import config
from flowy.schedule import Schedule
from flowy.cli_utils.console import console, confirm_success, warn, log


def import_commands(module_paths: Iterable = None) -> list[click.Command]:
    """
    Retrieve a list of click Commands from module_paths. Default is the built in
    subcommands directory for commands that come pre-installed with flowy.

    A valid flowy command module defines a "cli" function wrapped as a click Command.
    Set the 'name' keyword argument in the @click.command decorator to choose the
    command name shown to the user.
    """

    if module_paths is None:
        module_paths = sorted(Path(flowy.__file__).parent.glob("subcommands/*.py"))

    commands = []

    for path in module_paths:
        name = inspect.getmodulename(path)
        if name is None or name == "__init__":
            continue

        # Recipe for loading and executing modules from a given filepath comes from the importlib docs:
        # https://docs.python.org/3/library/importlib.html#importing-a-source-file-directly
        module_name = f"flowy.subcommands.{name}"
        spec = importlib.util.spec_from_file_location(module_name, path)
        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        spec.loader.exec_module(module)

        try:
            commands.append(getattr(module, "cli"))

        except AttributeError:
            warn(f"Cannot add command {name}: no 'cli' function found.")

    return commands


def attach_commands(group: click.Group, commands: list[click.Command]):
    """
    Attach each command in a list of click Command objects to a provided group.
    """

    for command in commands:
        group.add_command(command)


def save_schedule(schedule: Schedule) -> Path:
    """Persist schedule as the active schedule and report where it went."""

    path = schedule.save(config.FLOWY_SCHEDULE_FILE)
    log(f"schedule times: {', '.join(schedule.times)}", logging.DEBUG)
    confirm_success(
        f":floppy_disk-emoji: saved a schedule of {len(schedule)} wallpapers to {path}"
    )
    return path


def schedule_table(schedule: Schedule, now: datetime = None) -> Table:
    """Render schedule as a rich Table, marking the slot that is active at now."""

    current = schedule.current_index(now)

    table = Table(title="flowy schedule")
    table.add_column("", width=1)
    table.add_column("Time")
    table.add_column("Wallpaper", overflow="fold")

    for index, (time_str, wall) in enumerate(schedule.pairs()):
        table.add_row(
            "*" if index == current else "",
            time_str,
            wall,
            style="bold" if index == current else None,
        )

    return table


def print_schedule(schedule: Schedule, now: datetime = None):
    console.print(schedule_table(schedule, now))
