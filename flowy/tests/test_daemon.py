"""
Tests for daemon.py

The daemon should touch the desktop only when the active slot changes, and keep running
when it can't.

*** Fixtures ***
- solar_walls (defined in conftest.py)
- caplog (defined by Pytest)
"""

from datetime import datetime
from unittest.mock import patch

import pytest

from flowy.daemon import Daemon
from flowy.schedule import Schedule, generate_schedule
from flowy.wallpaper_handler import DesktopEnvironment, WallpaperUpdateError


@pytest.fixture
def schedule() -> Schedule:
    return Schedule(times=["06:00", "12:00", "18:00"], walls=["/w/a.jpg", "/w/b.jpg", "/w/c.jpg"])


def at(hour: int, minute: int = 0) -> datetime:
    return datetime(2021, 3, 25, hour, minute)


@patch("flowy.daemon.wallpaper_handler.update_wallpaper", autospec=True)
def test_tick_sets_wallpaper_once_per_slot(fake_update, schedule):

    daemon = Daemon(schedule, desktop=DesktopEnvironment.GNOME)

    assert daemon.tick(at(13, 30)) == 1
    assert daemon.tick(at(13, 31)) is None
    assert daemon.tick(at(17, 59)) is None

    fake_update.assert_called_once_with("/w/b.jpg", desktop=DesktopEnvironment.GNOME)


@patch("flowy.daemon.wallpaper_handler.update_wallpaper", autospec=True)
def test_tick_follows_slot_boundaries(fake_update, schedule):

    daemon = Daemon(schedule)

    assert daemon.tick(at(5)) == 2  # wraps to the evening slot
    assert daemon.tick(at(6)) == 0
    assert daemon.tick(at(12)) == 1
    assert daemon.tick(at(18)) == 2

    assert [call.args[0] for call in fake_update.call_args_list] == [
        "/w/c.jpg",
        "/w/a.jpg",
        "/w/b.jpg",
        "/w/c.jpg",
    ]


@patch("flowy.daemon.wallpaper_handler.update_wallpaper", autospec=True)
def test_tick_retries_after_failure(fake_update, schedule):

    fake_update.side_effect = [WallpaperUpdateError("gsettings failed"), None]
    daemon = Daemon(schedule)

    with pytest.raises(WallpaperUpdateError):
        daemon.tick(at(7))

    assert daemon.last_index is None
    assert daemon.tick(at(7)) == 0


@patch("flowy.daemon.sleep", autospec=True)
@patch("flowy.daemon.wallpaper_handler.update_wallpaper", autospec=True)
def test_run_sleeps_between_ticks(fake_update, fake_sleep, schedule):

    # break out of the endless loop on the third nap
    fake_sleep.side_effect = [None, None, KeyboardInterrupt]

    with pytest.raises(KeyboardInterrupt):
        Daemon(schedule, interval=30).run()

    assert fake_sleep.call_count == 3
    fake_sleep.assert_called_with(30)
    fake_update.assert_called_once()


@patch("flowy.daemon.sleep", autospec=True)
@patch("flowy.daemon.wallpaper_handler.update_wallpaper", autospec=True)
def test_run_survives_failed_update(fake_update, fake_sleep, schedule):

    fake_update.side_effect = [WallpaperUpdateError("gsettings failed"), None]
    fake_sleep.side_effect = [None, None, KeyboardInterrupt]

    with pytest.raises(KeyboardInterrupt):
        Daemon(schedule).run()

    # failed on the first tick, applied on the second, nothing left to do on the third
    assert fake_update.call_count == 2
    assert fake_sleep.call_count == 3


@patch("flowy.schedule.datetime")
@patch("flowy.daemon.sleep", autospec=True)
@patch("flowy.wallpaper_handler.subprocess.run", autospec=True)
def test_run_keeps_going_on_non_image_slot(fake_run, fake_sleep, fake_datetime, solar_walls, caplog):
    """
    Even schedules take every file in the folder. A slot holding something that isn't an
    image is logged and skipped, not fatal.
    """

    # 00:00 00-DAY.jpg, 06:00 00-NIGHT.jpg, 12:00 01-DAY.jpg, 18:00 README.txt
    schedule = generate_schedule(solar_walls)
    fake_datetime.now.return_value = datetime(2021, 3, 25, 19, 0)
    fake_sleep.side_effect = [None, None, KeyboardInterrupt]

    with pytest.raises(KeyboardInterrupt):
        Daemon(schedule, desktop=DesktopEnvironment.GNOME).run()

    assert fake_sleep.call_count == 3
    fake_run.assert_not_called()
    assert "README.txt is not a valid image" in caplog.text
