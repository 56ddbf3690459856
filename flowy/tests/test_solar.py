"""
Tests for solar.py

Validate the solar equations against known values and the Timetable against real
sunrise / sunset times. Times are compared in UTC to stay independent of the machine's
time zone.
"""

import math
from datetime import date, datetime, timedelta, timezone

import pytest

from flowy.julian import JulianDay
from flowy.solar import (
    DAY_ORDER,
    SolarEvent,
    Timetable,
    InvalidCoordinateError,
    EventDoesNotOccurError,
    equation_of_time,
    solar_declination,
    solar_elevation,
    hour_angle_from_elevation,
    elevation_from_hour_angle,
    local_noon,
    unix_to_local,
    unix_to_local_hm,
)

# 2021-03-25 00:00 UTC, a few days after the March equinox
EQUINOX = 1616630400
# 2021-06-24 00:00 UTC, a few days after the June solstice
SOLSTICE = 1624492800

HOUR = 3600


def century(jd: float) -> float:
    return JulianDay(jd).century()


@pytest.mark.parametrize(
    "jd, minutes",
    [
        (2459257.0, -14.2),  # 2021-02-11, near the minimum
        (2459522.0, 16.4),  # 2021-11-03, near the maximum
    ],
)
def test_equation_of_time_extremes(jd, minutes):
    assert equation_of_time(century(jd)) == pytest.approx(minutes, abs=0.5)


def test_declination_at_june_solstice():
    # 2021-06-21 12:00 UTC
    assert math.degrees(solar_declination(century(2459387.0))) == pytest.approx(
        23.44, abs=0.05
    )


def test_hour_angle_round_trip():
    angle = math.radians(-90.833)
    ha = hour_angle_from_elevation(0.0, 0.0, angle)

    # the sign of the hour angle is opposite to the sign of the angle
    assert ha > 0
    assert math.degrees(ha) == pytest.approx(90.833, abs=1e-6)
    assert math.degrees(elevation_from_hour_angle(0.0, 0.0, ha)) == pytest.approx(
        -0.833, abs=1e-6
    )
    assert hour_angle_from_elevation(0.0, 0.0, -angle) == pytest.approx(-ha)


def test_hour_angle_unreachable_elevation_is_nan():
    # at 80N in midsummer the sun never gets within 6 degrees of the horizon
    assert math.isnan(
        hour_angle_from_elevation(80.0, math.radians(23.4), math.radians(-96.0))
    )


def test_equator_at_equinox():
    sunrise, sunset = Timetable(EQUINOX, 0.0, 0.0).sunrise_sunset()

    assert EQUINOX + 6 * HOUR <= sunrise <= EQUINOX + 6 * HOUR + 15 * 60
    assert EQUINOX + 18 * HOUR <= sunset <= EQUINOX + 18 * HOUR + 15 * 60
    # twelve hours plus about 3.3 minutes of refraction on each side
    assert sunset - sunrise == pytest.approx(43200, abs=600)


def test_london_summer_day_is_long():
    sunrise, sunset = Timetable(SOLSTICE, 51.5, -0.13).sunrise_sunset()

    assert sunset - sunrise >= 58000


def test_sydney_winter_day_is_short():
    sunrise, sunset = Timetable(SOLSTICE, -33.87, 151.21).sunrise_sunset()

    assert 0 < sunset - sunrise <= 36000


@pytest.mark.parametrize(
    "lat, lon",
    [(0.0, 0.0), (40.0, -75.0), (-33.87, 151.21), (35.68, 139.69)],
)
def test_day_and_night_fill_a_day(lat, lon):
    sunrise, sunset = Timetable(EQUINOX, lat, lon).sunrise_sunset()

    day_len = sunset - sunrise
    night_len = 86400 - day_len

    assert day_len > 0 and night_len > 0
    assert abs(day_len + night_len - 86400) <= 2


@pytest.mark.parametrize(
    "date_epoch, lat, lon",
    [(EQUINOX, 40.0, -75.0), (EQUINOX, -33.87, 151.21), (SOLSTICE, 35.0, 10.0)],
)
def test_event_ordering(date_epoch, lat, lon):
    timetable = Timetable(date_epoch, lat, lon)
    times = [timetable.get(event) for event in DAY_ORDER]

    assert None not in times
    assert times == sorted(times)
    assert len(set(times)) == len(times)


def test_elevation_increases_until_noon():
    timetable = Timetable(EQUINOX, 40.0, 0.0)
    sunrise, _ = timetable.sunrise_sunset()
    noon = timetable.get(SolarEvent.NOON)

    elevations = [
        solar_elevation(instant, 40.0, 0.0)
        for instant in range(sunrise + 600, int(noon) - 600, 600)
    ]

    assert len(elevations) > 10
    assert all(a < b for a, b in zip(elevations, elevations[1:]))


def test_elevation_at_events():
    timetable = Timetable(EQUINOX, 40.0, 0.0)

    # about 90 - (40 - 1.8) at noon, a few days after the equinox
    assert solar_elevation(timetable.get(SolarEvent.NOON), 40.0, 0.0) == pytest.approx(
        51.8, abs=1.0
    )
    assert solar_elevation(
        timetable.get(SolarEvent.SUNRISE), 40.0, 0.0
    ) == pytest.approx(-0.833, abs=0.5)
    assert solar_elevation(
        timetable.get(SolarEvent.CIVIL_DUSK), 40.0, 0.0
    ) == pytest.approx(-6.0, abs=0.5)


def test_midnight_is_twelve_hours_after_noon():
    timetable = Timetable(EQUINOX, 40.0, -75.0)

    assert timetable.get(SolarEvent.MIDNIGHT) - timetable.get(
        SolarEvent.NOON
    ) == pytest.approx(12 * HOUR)


def test_missing_events_at_high_latitude():
    # London midsummer: the sun never gets 18 degrees below the horizon
    timetable = Timetable(SOLSTICE, 51.5, -0.13)

    assert timetable.get(SolarEvent.ASTRO_DAWN) is None
    assert timetable.get(SolarEvent.ASTRO_DUSK) is None
    assert timetable.get(SolarEvent.NAUT_DAWN) is not None
    assert timetable.get(SolarEvent.SUNRISE) is not None


def test_polar_day_has_no_sunrise():
    # Svalbard, midnight sun
    timetable = Timetable(SOLSTICE, 78.22, 15.65)

    assert timetable.get(SolarEvent.SUNRISE) is None
    assert timetable.get(SolarEvent.SUNSET) is None
    assert timetable.get(SolarEvent.NOON) is not None

    with pytest.raises(EventDoesNotOccurError):
        timetable.sunrise_sunset()


@pytest.mark.parametrize(
    "lat, lon",
    [(90.1, 0.0), (-91.0, 0.0), (0.0, 180.5), (0.0, -181.0), (math.nan, 0.0), (0.0, math.inf)],
)
def test_invalid_coordinates(lat, lon):
    with pytest.raises(InvalidCoordinateError):
        Timetable(EQUINOX, lat, lon)

    with pytest.raises(InvalidCoordinateError):
        solar_elevation(EQUINOX, lat, lon)


def test_angles_exclude_midnight():
    timetable = Timetable(EQUINOX, 0.0, 0.0)

    assert len(timetable.angles) == 9
    assert SolarEvent.MIDNIGHT not in timetable.angles
    assert timetable.angles[SolarEvent.SUNRISE] == pytest.approx(math.radians(-90.833))
    assert timetable.angles[SolarEvent.ASTRO_DUSK] == pytest.approx(math.radians(108.0))


def test_set_date_regenerates_times():
    timetable = Timetable(EQUINOX, 51.5, -0.13)
    angles = dict(timetable.angles)

    timetable.set_date(SOLSTICE)

    assert timetable.date_epoch == SOLSTICE
    assert timetable.angles == angles
    assert timetable.times == Timetable(SOLSTICE, 51.5, -0.13).times


def test_minutes_since_midnight():
    timetable = Timetable(EQUINOX, 40.0, -75.0)

    # solar noon of the same day is twelve hours after solar midnight
    timetable.set_date(timetable.get(SolarEvent.NOON))

    assert timetable.minutes_since_midnight() == 720


def test_unix_to_local_in_given_zone():
    instant = EQUINOX + 6 * HOUR + 30 * 60 + 5

    assert unix_to_local(instant, tz=timezone.utc) == "06:30:05"
    assert unix_to_local_hm(instant, tz=timezone.utc) == "06:30"


def test_local_noon():
    tokyo = timezone(timedelta(hours=9))

    assert local_noon(date(2021, 6, 24), tokyo) == SOLSTICE + 3 * HOUR
    assert local_noon(datetime(2021, 6, 24), timezone.utc) == SOLSTICE + 12 * HOUR


@pytest.mark.parametrize(
    "lat, lon, offset",
    [
        (35.68, 139.69, 9),  # Tokyo
        (-33.87, 151.21, 10),  # Sydney
        (40.71, -74.01, -4),  # New York
        (51.5, -0.13, 1),  # London
    ],
)
def test_timetable_for_local_day(lat, lon, offset):
    tz = timezone(timedelta(hours=offset))

    timetable = Timetable(local_noon(date(2021, 6, 24), tz), lat, lon)
    noon = datetime.fromtimestamp(timetable.get(SolarEvent.NOON), tz)

    assert noon.date() == date(2021, 6, 24)
    assert 11 <= noon.hour <= 13
