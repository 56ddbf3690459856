"""
Solar Timetable

Sunrise, sunset and twilight times for a date and location on Earth.

The equations follow the NOAA solar calculator, which is itself based on "Astronomical
Algorithms" by Jean Meeus:
https://gml.noaa.gov/grad/solcalc/calcdetails.html

Every function here is a plain function of a Julian century t (see flowy.julian) and
returns radians unless noted otherwise. Latitudes and longitudes are always in degrees,
east positive.

Events that do not happen on a given day (the sun never reaching -18 degrees on a
midsummer night in London, for example) come out of acos() as NaN. They are left out of
the Timetable rather than raised, so callers can skip that band of the day.
"""

import math
from enum import Enum
from datetime import date, datetime, tzinfo
from typing import Optional

from flowy.julian import JulianDay

# Model of atmospheric refraction near the horizon (degrees)
ATM_REFRAC = 0.833

ASTRO_TWILIGHT_ELEV = -18.0
NAUT_TWILIGHT_ELEV = -12.0
CIVIL_TWILIGHT_ELEV = -6.0
DAYTIME_ELEV = 0.0 - ATM_REFRAC

MINUTES_PER_DAY = 1440.0


class InvalidCoordinateError(ValueError):
    """Raise when a latitude or longitude is out of range or gives an impossible day."""

    pass


class EventDoesNotOccurError(ValueError):
    """Raise when a required solar event does not happen on the requested day."""

    pass


class SolarEvent(Enum):
    """Times of day in the solar cycle."""

    NOON = "noon"
    MIDNIGHT = "midnight"
    ASTRO_DAWN = "astro_dawn"
    NAUT_DAWN = "naut_dawn"
    CIVIL_DAWN = "civil_dawn"
    SUNRISE = "sunrise"
    SUNSET = "sunset"
    CIVIL_DUSK = "civil_dusk"
    NAUT_DUSK = "naut_dusk"
    ASTRO_DUSK = "astro_dusk"


# chronological order of the events within one solar day
DAY_ORDER = (
    SolarEvent.ASTRO_DAWN,
    SolarEvent.NAUT_DAWN,
    SolarEvent.CIVIL_DAWN,
    SolarEvent.SUNRISE,
    SolarEvent.NOON,
    SolarEvent.SUNSET,
    SolarEvent.CIVIL_DUSK,
    SolarEvent.NAUT_DUSK,
    SolarEvent.ASTRO_DUSK,
    SolarEvent.MIDNIGHT,
)


def sun_geom_mean_lon(t: float) -> float:
    """
    Geometric mean longitude of the sun: the ecliptic longitude it would have
    if its orbit were perfectly circular.
    """

    ret = 280.46646 + t * (36000.76983 + t * 0.0003032)
    return math.radians(ret % 360.0)


def sun_geom_mean_anomaly(t: float) -> float:
    """
    Geometric mean anomaly of the sun, the fraction of its period elapsed since
    periapsis. Not reduced modulo 2 pi.
    """

    return math.radians(357.52911 + t * (35999.05029 - t * 0.0001537))


def earth_orbit_eccentricity(t: float) -> float:
    """Eccentricity of Earth's orbit (unitless, 0 is a circle)."""

    return 0.016708634 - t * (0.000042037 + t * 0.0000001267)


def sun_equation_of_center(t: float) -> float:
    """Difference between the true anomaly and the mean anomaly of the sun."""

    ma = sun_geom_mean_anomaly(t)
    center = (
        math.sin(ma) * (1.914602 - t * (0.004817 + 0.000014 * t))
        + math.sin(2.0 * ma) * (0.019993 - 0.000101 * t)
        + math.sin(3.0 * ma) * 0.000289
    )

    return math.radians(center)


def sun_true_lon(t: float) -> float:
    return sun_geom_mean_lon(t) + sun_equation_of_center(t)


def sun_apparent_lon(t: float) -> float:
    """True longitude corrected for nutation and aberration."""

    omega = 125.04 - 1934.136 * t
    ret = math.degrees(sun_true_lon(t)) - 0.00569 - 0.00478 * math.sin(math.radians(omega))

    return math.radians(ret)


def mean_ecliptic_obliquity(t: float) -> float:
    """Mean axial tilt of the Earth."""

    sec = 21.448 - t * (46.815 + t * (0.00059 - t * 0.001813))
    return math.radians(23.0 + (26.0 + sec / 60.0) / 60.0)


def obliquity_corrected(t: float) -> float:
    e_0 = mean_ecliptic_obliquity(t)
    omega = 125.04 - t * 1934.136

    return math.radians(math.degrees(e_0) + 0.00256 * math.cos(math.radians(omega)))


def solar_declination(t: float) -> float:
    e = obliquity_corrected(t)
    lam = sun_apparent_lon(t)

    return math.asin(math.sin(e) * math.sin(lam))


def equation_of_time(t: float) -> float:
    """
    Difference between apparent solar time and mean solar time, in minutes.
    """

    epsilon = obliquity_corrected(t)
    l_0 = sun_geom_mean_lon(t)
    e = earth_orbit_eccentricity(t)
    m = sun_geom_mean_anomaly(t)
    y = math.tan(epsilon / 2.0) ** 2

    eq_result = (
        y * math.sin(2.0 * l_0)
        - 2.0 * e * math.sin(m)
        + 4.0 * e * y * math.sin(m) * math.cos(2.0 * l_0)
        - 0.5 * y**2 * math.sin(4.0 * l_0)
        - 1.25 * e**2 * math.sin(2.0 * m)
    )

    return 4.0 * math.degrees(eq_result)


def hour_angle_from_elevation(lat: float, decl: float, elev: float) -> float:
    """
    Hour angle for the given angle from the zenith (radians). The sign of elev picks
    the side of noon; NaN when the sun never reaches that elevation.
    """

    lat = math.radians(lat)
    term = (math.cos(abs(elev)) - math.sin(lat) * math.sin(decl)) / (
        math.cos(lat) * math.cos(decl)
    )

    # acos raises outside [-1, 1]; an unreachable elevation is NaN instead
    omega = math.acos(term) if -1.0 <= term <= 1.0 else math.nan

    return math.copysign(omega, -elev)


def elevation_from_hour_angle(lat: float, decl: float, ha: float) -> float:
    lat = math.radians(lat)
    ret = math.cos(ha) * math.cos(lat) * math.cos(decl) + math.sin(lat) * math.sin(decl)

    return math.asin(ret)


def time_of_solar_noon(t: float, lon: float) -> float:
    """
    Time of apparent solar noon, in minutes from mean solar midnight.
    """

    # first pass uses approximate solar noon to calculate the equation of time
    t_noon = JulianDay.from_century(t).sub(lon / 360.0).century()
    eq_time = equation_of_time(t_noon)
    sol_noon = 720.0 - 4.0 * lon - eq_time

    # recalculate using the new solar noon
    t_noon = JulianDay.from_century(t).sub(0.5).add(sol_noon / MINUTES_PER_DAY).century()
    eq_time = equation_of_time(t_noon)

    return 720.0 - 4.0 * lon - eq_time


def time_of_solar_elevation(
    t: float, t_noon: float, lat: float, lon: float, elev: float
) -> float:
    """
    Time at which the sun reaches the given angle, in minutes from mean solar midnight.
    """

    # first pass evaluates the sun at noon
    eq_time = equation_of_time(t_noon)
    sol_decl = solar_declination(t_noon)
    ha = hour_angle_from_elevation(lat, sol_decl, elev)
    sol_offset = 720.0 - 4.0 * (lon + math.degrees(ha)) - eq_time

    # second pass evaluates the sun at the approximate event time
    t_rise = JulianDay.from_century(t).add(sol_offset / MINUTES_PER_DAY).century()
    eq_time = equation_of_time(t_rise)
    sol_decl = solar_declination(t_rise)
    ha = hour_angle_from_elevation(lat, sol_decl, elev)

    return 720.0 - 4.0 * (lon + math.degrees(ha)) - eq_time


def solar_elevation_from_time(t: float, lat: float, lon: float) -> float:
    """Solar elevation (radians) at the instant t."""

    jd = JulianDay.from_century(t)
    offset = (jd.diff(round(jd)) - 0.5) * MINUTES_PER_DAY

    eq_time = equation_of_time(t)
    decl = solar_declination(t)
    ha = math.radians((720.0 - offset - eq_time) / 4.0 - lon)

    return elevation_from_hour_angle(lat, decl, ha)


def solar_elevation(date_epoch: float, lat: float, lon: float) -> float:
    """
    Degrees of the sun above the horizon at a Unix time and location. Negative below it.
    """

    validate_coordinates(lat, lon)
    t = JulianDay.from_epoch(date_epoch).century()

    return math.degrees(solar_elevation_from_time(t, lat, lon))


def validate_coordinates(lat: float, lon: float) -> None:
    """Raise InvalidCoordinateError unless lat is in [-90, 90] and lon in [-180, 180]."""

    if not (math.isfinite(lat) and -90.0 <= lat <= 90.0):
        raise InvalidCoordinateError(f"latitude {lat} is outside [-90, 90].")

    if not (math.isfinite(lon) and -180.0 <= lon <= 180.0):
        raise InvalidCoordinateError(f"longitude {lon} is outside [-180, 180].")


def generate_time_angles() -> dict[SolarEvent, float]:
    """
    Angle of the sun from the zenith (radians) for every event except midnight.
    Negative angles are on the dawn side of noon, positive on the dusk side.
    """

    return {
        SolarEvent.ASTRO_DAWN: math.radians(-90.0 + ASTRO_TWILIGHT_ELEV),
        SolarEvent.NAUT_DAWN: math.radians(-90.0 + NAUT_TWILIGHT_ELEV),
        SolarEvent.CIVIL_DAWN: math.radians(-90.0 + CIVIL_TWILIGHT_ELEV),
        SolarEvent.SUNRISE: math.radians(-90.0 + DAYTIME_ELEV),
        SolarEvent.NOON: 0.0,
        SolarEvent.SUNSET: math.radians(90.0 - DAYTIME_ELEV),
        SolarEvent.CIVIL_DUSK: math.radians(90.0 - CIVIL_TWILIGHT_ELEV),
        SolarEvent.NAUT_DUSK: math.radians(90.0 - NAUT_TWILIGHT_ELEV),
        SolarEvent.ASTRO_DUSK: math.radians(90.0 - ASTRO_TWILIGHT_ELEV),
    }


class Timetable:
    """
    Unix epoch times of every solar event on the day of date_epoch at (lat, lon).

    Events that do not occur that day (polar day or night) are absent from times.
    """

    def __init__(self, date_epoch: float, lat: float, lon: float):

        validate_coordinates(lat, lon)

        self.angles: dict[SolarEvent, float] = generate_time_angles()
        self.date_epoch = float(date_epoch)
        self.lat = float(lat)
        self.lon = float(lon)
        self.times: dict[SolarEvent, float] = self.generate_timetable()

    def __repr__(self):
        return f"Timetable(date_epoch={self.date_epoch}, lat={self.lat}, lon={self.lon})"

    def generate_timetable(self) -> dict[SolarEvent, float]:
        """
        Compute the epoch of each event for the current date, latitude and longitude.
        """

        times = {}

        jdn = round(JulianDay.from_epoch(self.date_epoch))
        t = jdn.century()

        # apparent solar noon
        sol_noon = time_of_solar_noon(t, self.lon)
        j_noon = jdn.sub(0.5).add(sol_noon / MINUTES_PER_DAY)
        t_noon = j_noon.century()

        for event, angle in self.angles.items():
            offset = time_of_solar_elevation(t, t_noon, self.lat, self.lon, angle)
            if math.isnan(offset):
                continue
            times[event] = jdn.sub(0.5).add(offset / MINUTES_PER_DAY).epoch()

        times[SolarEvent.NOON] = j_noon.epoch()
        times[SolarEvent.MIDNIGHT] = j_noon.add(0.5).epoch()

        return times

    def get(self, event: SolarEvent) -> Optional[float]:
        """Epoch of event, or None when it does not occur on this day."""

        return self.times.get(event)

    def sunrise_sunset(self) -> tuple[int, int]:
        """Sunrise and sunset epochs, rounded to the second."""

        sunrise = self.get(SolarEvent.SUNRISE)
        sunset = self.get(SolarEvent.SUNSET)

        if sunrise is None or sunset is None:
            raise EventDoesNotOccurError(
                f"the sun does not rise and set on this day at latitude {self.lat}."
            )

        return round(sunrise), round(sunset)

    def set_date(self, epoch: float) -> None:
        """Move the timetable to another date, keeping the same location."""

        self.date_epoch = float(epoch)
        self.times = self.generate_timetable()

    def minutes_since_midnight(self) -> int:
        """Rough number of minutes since the last solar midnight."""

        past_midnight = self.times[SolarEvent.MIDNIGHT] - 86400.0
        return round((self.date_epoch - past_midnight) / 60.0)


def local_noon(day: date, tz: tzinfo = None) -> float:
    """
    Unix time of 12:00 on day in the process time zone (or tz, if given).

    A Timetable computes the UTC day nearest its date_epoch. Local noon is less than 12
    hours from UTC noon of the same calendar day, while local midnight east of Greenwich
    falls nearer the UTC day before.
    """

    return datetime(day.year, day.month, day.day, 12, tzinfo=tz).timestamp()


def unix_to_local(seconds: float, fmt: str = "%H:%M:%S", tz: tzinfo = None) -> str:
    """
    Format a Unix time as wall-clock time in the process time zone (or tz, if given).
    """

    return datetime.fromtimestamp(seconds, tz).strftime(fmt)


def unix_to_local_hm(seconds: float, tz: tzinfo = None) -> str:
    return unix_to_local(seconds, "%H:%M", tz)
