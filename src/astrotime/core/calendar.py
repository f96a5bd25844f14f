from __future__ import annotations

from .errors import InvalidCalendarDateError
from .duration import ATTOS_PER_SECOND
from .types import Calendar

# Astronomical year numbering (ISO 8601): year 0 is 1 BC, year -1 is 2 BC.
YEAR_MIN = -(2**31)
YEAR_MAX = 2**31 - 1

_MONTH_DAYS = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def is_leap_year(calendar: Calendar, year: int) -> bool:
    """
    Gregorian: divisible by 4, except centuries not divisible by 400.
    Julian: divisible by 4.

    Python's modulo is non-negative for a positive divisor, so this holds
    for year 0 and negative years as well.
    """
    if calendar is Calendar.GREGORIAN:
        return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)
    return year % 4 == 0


def days_in_month(calendar: Calendar, year: int, month: int) -> int:
    if not (1 <= month <= 12):
        raise InvalidCalendarDateError(f"month out of range 1..12: {month}")
    if month == 2 and is_leap_year(calendar, year):
        return 29
    return _MONTH_DAYS[month - 1]


def days_in_year(calendar: Calendar, year: int) -> int:
    return 366 if is_leap_year(calendar, year) else 365


def validate_date(calendar: Calendar, year: int, month: int, day: int) -> None:
    if not (YEAR_MIN <= year <= YEAR_MAX):
        raise InvalidCalendarDateError(f"year out of 32-bit range: {year}")
    n = days_in_month(calendar, year, month)
    if not (1 <= day <= n):
        raise InvalidCalendarDateError(
            f"day out of range 1..{n} for {calendar.title} {year:04d}-{month:02d}: {day}"
        )


def validate_time(
    hour: int,
    minute: int,
    second: int,
    attosecond: int,
    *,
    allow_leap_second: bool = False,
) -> None:
    if not (0 <= hour <= 23):
        raise InvalidCalendarDateError(f"hour out of range 0..23: {hour}")
    if not (0 <= minute <= 59):
        raise InvalidCalendarDateError(f"minute out of range 0..59: {minute}")
    top = 60 if allow_leap_second else 59
    if not (0 <= second <= top):
        raise InvalidCalendarDateError(f"second out of range 0..{top}: {second}")
    if not (0 <= attosecond < ATTOS_PER_SECOND):
        raise InvalidCalendarDateError(f"attosecond out of range 0..{ATTOS_PER_SECOND - 1}: {attosecond}")
