"""
astrotime.core.julian_day

Calendar date/time <-> continuous Julian Day.

Conventions
-----------
- JDN (Julian Day Number) is the integer label of a civil day; it is the JD
  at noon of that day. JD 0 is noon of -4712-01-01 in the proleptic Julian
  calendar (4713 BC).
- JD is continuous and changes its integer part at noon:
    JD = JDN - 1/2 + (seconds since midnight) / 86400
- Everything here is exact: JD values are Fractions and the seconds form is
  a Duration counted from JD 0.0.

This module knows nothing about time standards; the caller decides which
standard the fields (and therefore the JD) are expressed in.
"""

from __future__ import annotations

import math
from fractions import Fraction
from typing import Tuple, Union

from .calendar import YEAR_MAX, YEAR_MIN, validate_date, validate_time
from .duration import ATTOS_PER_SECOND, SECONDS_PER_DAY, Duration
from .errors import TimeOverflowError
from .types import Calendar, CalendarFields

HALF_DAY = SECONDS_PER_DAY // 2

JulianDayLike = Union[int, Fraction, float, str]


# ============================================================
# Calendar date <-> JDN  (Fliegel–Van Flandern, both calendars)
# ============================================================

def day_number(calendar: Calendar, year: int, month: int, day: int) -> int:
    """
    Calendar date -> JDN (proleptic). Floor division keeps the formula valid
    for year 0 and negative years.
    """
    a = (14 - month) // 12
    y2 = year + 4800 - a
    m2 = month + 12 * a - 3

    jdn = day + (153 * m2 + 2) // 5 + 365 * y2 + y2 // 4
    if calendar is Calendar.GREGORIAN:
        return jdn - y2 // 100 + y2 // 400 - 32045
    return jdn - 32083


def from_day_number(calendar: Calendar, jdn: int) -> Tuple[int, int, int]:
    """JDN -> (year, month, day), inverse of day_number."""
    if calendar is Calendar.GREGORIAN:
        a = jdn + 32044
        b = (4 * a + 3) // 146097
        c = a - (146097 * b) // 4
    else:
        b = 0
        c = jdn + 32082

    d = (4 * c + 3) // 1461
    e = c - (1461 * d) // 4
    m = (5 * e + 2) // 153

    day = e - (153 * m + 2) // 5 + 1
    month = m + 3 - 12 * (m // 10)
    year = 100 * b + d - 4800 + (m // 10)

    if not (YEAR_MIN <= year <= YEAR_MAX):
        raise TimeOverflowError(f"year out of 32-bit range: {year}")
    return year, month, day


def weekday(jdn: int) -> int:
    """ISO weekday of a JDN, 1 = Monday .. 7 = Sunday (JDN 0 was a Monday)."""
    return jdn % 7 + 1


# ============================================================
# Fields <-> seconds since JD 0.0
# ============================================================

def to_seconds(
    calendar: Calendar,
    year: int,
    month: int,
    day: int,
    hour: int = 0,
    minute: int = 0,
    second: int = 0,
    attosecond: int = 0,
) -> Duration:
    """Elapsed time from JD 0.0 to the given fields, counting 86400 s per day."""
    validate_date(calendar, year, month, day)
    validate_time(hour, minute, second, attosecond)

    jdn = day_number(calendar, year, month, day)
    secs = jdn * SECONDS_PER_DAY - HALF_DAY + hour * 3600 + minute * 60 + second
    return Duration(secs, attosecond)


def from_seconds(calendar: Calendar, since_jd0: Duration) -> CalendarFields:
    jdn, sod = divmod(since_jd0.seconds + HALF_DAY, SECONDS_PER_DAY)
    year, month, day = from_day_number(calendar, jdn)
    hour, rem = divmod(sod, 3600)
    minute, second = divmod(rem, 60)
    return CalendarFields(year, month, day, hour, minute, second, since_jd0.attoseconds)


# ============================================================
# Fields <-> JD (exact Fraction)
# ============================================================

def to_julian_day(
    calendar: Calendar,
    year: int,
    month: int,
    day: int,
    hour: int = 0,
    minute: int = 0,
    second: int = 0,
    attosecond: int = 0,
) -> Fraction:
    since = to_seconds(calendar, year, month, day, hour, minute, second, attosecond)
    return since.as_fraction() / SECONDS_PER_DAY


def julian_day_to_seconds(jd: JulianDayLike) -> Duration:
    """JD -> Duration since JD 0.0, floored to the attosecond grid."""
    attos = math.floor(Fraction(jd) * SECONDS_PER_DAY * ATTOS_PER_SECOND)
    return Duration.from_attoseconds(attos)


def from_julian_day(calendar: Calendar, jd: JulianDayLike) -> CalendarFields:
    """
    JD -> calendar fields. The fraction of the day is distributed into
    hour/minute/second/attosecond, truncating below one attosecond so a
    value never rolls into the following second.
    """
    return from_seconds(calendar, julian_day_to_seconds(jd))


def format_julian_day(jd: JulianDayLike, *, places: int = 16) -> str:
    """
    'JD 2451545', 'JD 2448349.0625'. Non-terminating fractions are rounded
    to `places` decimals.
    """
    scaled = round(Fraction(jd) * 10**places)
    sign = "-" if scaled < 0 else ""
    whole, frac = divmod(abs(scaled), 10**places)
    text = f"{whole}.{frac:0{places}d}".rstrip("0").rstrip(".")
    return f"JD {sign}{text}"
