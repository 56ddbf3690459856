"""
FlowyState

This module defines the FlowyState dataclass, which is passed from one chained subcommand
to the next. Commands that generate a schedule store it here so later commands in the
same invocation (show, run) use it without reading it back from disk.
"""

from dataclasses import dataclass
from typing import Optional

from flowy.schedule import Schedule


@dataclass
class FlowyState:
    """
    Application data shared between the subcommands of one invocation.
    """

    schedule: Optional[Schedule] = None
    quiet: bool = False
