"""
flowy Schedules

A schedule pairs wall-clock times (HH:MM, local time) with wallpaper paths. The image of a
slot is shown from its time until the time of the next slot, wrapping around midnight.

Two generators are provided:

- solar mode: images whose file name contains "DAY" are spread evenly between sunrise and
  sunset, images containing "NIGHT" evenly between sunset and the next sunrise. File names
  must use uppercase DAY / NIGHT and sort into the intended display order, e.g.
  00-DAY.jpg, 01-DAY.jpg, 00-NIGHT.jpg.
- even mode: every file in the folder gets an equal share of the 24 hours.

Schedules are persisted as JSON with exactly two equal-length lists, "times" and "walls".
"""

import re
import json
import time
from pathlib import Path
from dataclasses import dataclass, field, asdict
from datetime import datetime, tzinfo
from collections.abc import Iterable, Iterator
from typing import Union

from flowy.solar import Timetable, InvalidCoordinateError, unix_to_local_hm

SECONDS_PER_DAY = 86400

TIME_FORMAT = re.compile(r"^([01][0-9]|2[0-3]):[0-5][0-9]$")


class EmptyWallSetError(ValueError):
    """Raise when there are no wallpapers to build a schedule from."""

    pass


class ScheduleError(ValueError):
    """Raise when a schedule is malformed or cannot be read or written."""

    pass


@dataclass
class Schedule:
    """
    Ordered (HH:MM, wallpaper path) slots. Times are not required to be sorted.
    """

    times: list[str] = field(default_factory=list)
    walls: list[str] = field(default_factory=list)

    def __post_init__(self):

        self.times = list(self.times)
        self.walls = [str(wall) for wall in self.walls]

        if len(self.times) != len(self.walls):
            raise ScheduleError(
                f"schedule has {len(self.times)} times but {len(self.walls)} wallpapers."
            )

        for slot in self.times:
            if not isinstance(slot, str) or not TIME_FORMAT.match(slot):
                raise ScheduleError(f"'{slot}' is not a valid HH:MM time.")

        if any(not wall for wall in self.walls):
            raise ScheduleError("schedule contains an empty wallpaper path.")

    def __len__(self):
        return len(self.times)

    def pairs(self) -> Iterator[tuple[str, str]]:
        return zip(self.times, self.walls)

    def current_index(self, now: datetime = None) -> int:
        """Index of the slot that should be showing at now (default: local time now)."""

        now = now or datetime.now()
        return current_slot(self.times, now.strftime("%H:%M"))

    def save(self, path: Path) -> Path:
        """
        Serialize the schedule to JSON at path, creating parent directories as needed.
        Overwrites any existing schedule.
        """

        path = Path(path).expanduser()

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(asdict(self), sort_keys=True, indent=4))

        except OSError as error:
            raise ScheduleError(f"There was an error saving the schedule: {error}")

        return path

    @classmethod
    def load(cls, path: Path) -> "Schedule":
        """Read a schedule saved with Schedule.save()."""

        path = Path(path).expanduser()

        try:
            from_json = json.loads(path.read_text())

        except FileNotFoundError:
            raise ScheduleError(
                f"No schedule found at {path}. Run 'flowy dir' or 'flowy solar' first."
            )

        except (OSError, json.JSONDecodeError) as error:
            raise ScheduleError(f"There was an issue reading the schedule: {error}")

        if not isinstance(from_json, dict):
            raise ScheduleError(f"{path} does not contain a schedule.")

        return cls(times=from_json.get("times", []), walls=from_json.get("walls", []))


def current_slot(times: list[str], now_hm: str) -> int:
    """
    Return the index of the slot showing at now_hm: the latest time that isn't later than
    now_hm. When every slot is later than now_hm, the latest slot of all (from the
    previous evening) is still showing.

    E.g. with times 06:00, 12:00, 18:00 the first image shows from 06:00 to 11:59, and
    at 05:00 the third image is still showing. Times don't need to be sorted, so a night
    slot at 02:00 listed after 22:00 is handled too. Of equal times the later entry wins.
    """

    if not times:
        raise ScheduleError("Cannot select a slot from an empty schedule.")

    # HH:MM strings compare in the same order as the times they represent
    started = [index for index, slot in enumerate(times) if slot <= now_hm]

    return max(started or range(len(times)), key=lambda index: (times[index], index))


def get_dir(path: Union[str, Path], solar_filter: str = "") -> list[str]:
    """
    Return the sorted absolute paths of the files in path whose file name contains
    solar_filter. Directory listings come back in arbitrary order; sorting by name
    lets users control the display order (00, 01, 02 ...).
    """

    folder = Path(path).expanduser().resolve()

    if not folder.is_dir():
        raise NotADirectoryError(f"{folder} is not a directory.")

    return sorted(
        str(file)
        for file in folder.iterdir()
        if file.is_file() and solar_filter in file.name
    )


def build_solar_schedule(
    day_walls: list[str],
    night_walls: list[str],
    sunrise: int,
    sunset: int,
    tz: tzinfo = None,
) -> Schedule:
    """
    Spread day_walls evenly over [sunrise, sunset) and night_walls evenly over the rest
    of the 24 hours. sunrise and sunset are Unix seconds; slots are formatted as local
    time (or in tz, if given).
    """

    if not day_walls or not night_walls:
        raise EmptyWallSetError(
            f"solar mode needs at least one DAY and one NIGHT wallpaper "
            f"(found {len(day_walls)} DAY, {len(night_walls)} NIGHT)."
        )

    day_len = sunset - sunrise
    if not 0 < day_len < SECONDS_PER_DAY:
        raise InvalidCoordinateError(
            f"sunset must come after sunrise on the same day (day length {day_len}s)."
        )

    night_len = SECONDS_PER_DAY - day_len

    # offset in seconds between each wallpaper change
    day_div = day_len // len(day_walls)
    night_div = night_len // len(night_walls)

    times = [unix_to_local_hm(sunrise + i * day_div, tz) for i in range(len(day_walls))]
    times += [
        unix_to_local_hm(sunset + i * night_div, tz) for i in range(len(night_walls))
    ]

    return Schedule(times=times, walls=[*day_walls, *night_walls])


def generate_schedule_solar(
    path: Union[str, Path],
    lat: float,
    lon: float,
    now: float = None,
    tz: tzinfo = None,
) -> Schedule:
    """
    Build a schedule from the DAY and NIGHT wallpapers in path, using today's sunrise and
    sunset at (lat, lon).
    """

    day_walls = get_dir(path, "DAY")
    night_walls = get_dir(path, "NIGHT")

    now = time.time() if now is None else now
    sunrise, sunset = Timetable(now, lat, lon).sunrise_sunset()

    return build_solar_schedule(day_walls, night_walls, sunrise, sunset, tz)


def build_even_schedule(walls: Iterable[str]) -> Schedule:
    """Give each wallpaper an equal share of the day, starting at midnight."""

    walls = list(walls)
    if not walls:
        raise EmptyWallSetError("no wallpapers to schedule.")

    div = SECONDS_PER_DAY // len(walls)
    times = [
        f"{(div * i) // 3600:02}:{((div * i) // 60) % 60:02}" for i in range(len(walls))
    ]

    return Schedule(times=times, walls=walls)


def generate_schedule(path: Union[str, Path]) -> Schedule:
    """Build an even schedule from every file in path."""

    walls = get_dir(path)
    if not walls:
        raise EmptyWallSetError(f"{path} does not contain any wallpapers.")

    return build_even_schedule(walls)
