"""
Julian Day arithmetic

The solar equations work on a continuous, real-valued time axis: the Julian Day, a
fractional count of days since noon on 1 January 4713 BCE. This module provides the
JulianDay value type and its conversions to and from Unix epoch seconds and Julian
centuries since J2000.0.

More info: https://en.wikipedia.org/wiki/Julian_day
"""

import math
from dataclasses import dataclass

# Julian Day of the Unix epoch (1970-01-01 00:00 UTC)
UNIX_EPOCH_JD = 2440587.5

# Julian Day of J2000.0 (2000-01-01 12:00 TT)
J2000_JD = 2451545.0

SECONDS_PER_DAY = 86400.0
DAYS_PER_CENTURY = 36525.0


@dataclass(frozen=True)
class JulianDay:
    """
    A calendar instant as a fractional number of days since the Julian epoch.
    """

    jd: float

    @classmethod
    def from_epoch(cls, seconds: float) -> "JulianDay":
        """Convert Unix epoch seconds to a Julian Day."""

        return cls(seconds / SECONDS_PER_DAY + UNIX_EPOCH_JD)

    @classmethod
    def from_century(cls, t: float) -> "JulianDay":
        """Convert Julian centuries since J2000.0 to a Julian Day."""

        return cls(DAYS_PER_CENTURY * t + J2000_JD)

    def epoch(self) -> float:
        """Unix epoch seconds of this Julian Day."""

        return SECONDS_PER_DAY * (self.jd - UNIX_EPOCH_JD)

    def century(self) -> float:
        """Julian centuries elapsed since J2000.0."""

        return (self.jd - J2000_JD) / DAYS_PER_CENTURY

    def add(self, days: float) -> "JulianDay":
        return JulianDay(self.jd + days)

    def sub(self, days: float) -> "JulianDay":
        return JulianDay(self.jd - days)

    def diff(self, other: "JulianDay") -> float:
        """Number of days from other to self."""

        return self.jd - other.jd

    def __round__(self, ndigits=None) -> "JulianDay":
        """
        Round to the nearest whole day, halfway cases away from zero.

        Midnight UTC always lands on a .5 Julian Day, so the builtin round-half-to-even
        would send alternate days in opposite directions.
        """

        return JulianDay(math.copysign(math.floor(abs(self.jd) + 0.5), self.jd))

    def __add__(self, days: float) -> "JulianDay":
        return self.add(days)

    def __sub__(self, other):
        if isinstance(other, JulianDay):
            return self.diff(other)
        return self.sub(other)

    def __float__(self) -> float:
        return self.jd
