"""
flowy Daemon

Keep the wallpaper of the current slot on the desktop. The daemon wakes up every poll
interval, works out which slot of the schedule the current local time falls in and only
touches the desktop when that slot has changed since the last check.
"""

import logging
from time import sleep
from datetime import datetime

from flowy import wallpaper_handler
from flowy.schedule import Schedule
from flowy.wallpaper_handler import DesktopEnvironment, WallpaperUpdateError

logger = logging.getLogger(__name__)


class Daemon:
    """
    Poll the clock and apply the schedule's wallpapers as their slots come up.
    """

    def __init__(
        self,
        schedule: Schedule,
        desktop: DesktopEnvironment = None,
        interval: int = 60,
    ):

        self.schedule = schedule
        self.desktop = desktop
        self.interval = interval
        self.last_index = None

    def tick(self, now: datetime = None):
        """
        Set the wallpaper if the slot for now differs from the one last applied.
        Returns the new slot index, or None when nothing changed.
        """

        index = self.schedule.current_index(now)
        if index == self.last_index:
            return None

        wall = self.schedule.walls[index]
        logger.info(
            "slot %s (%s) is now active: %s", index, self.schedule.times[index], wall
        )
        wallpaper_handler.update_wallpaper(wall, desktop=self.desktop)

        # only remember the slot once the desktop accepted it, so a failed update is retried
        self.last_index = index
        return index

    def run(self):
        """Run forever."""

        for time_str, wall in self.schedule.pairs():
            logger.info("%s = %s", time_str, wall)

        logger.info("daemon listening, checking every %ss", self.interval)

        while True:
            try:
                self.tick()
            except WallpaperUpdateError as error:
                # the slot stays pending and is tried again on the next tick
                logger.warning("could not change wallpaper: %s", error)

            sleep(self.interval)
