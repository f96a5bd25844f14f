"""
astrotime.core.date_time

DateTime: broken-down calendar fields tagged with a (Calendar, Standard) pair.

Field ranges
------------
- year: signed 32-bit, astronomical numbering (year 0 = 1 BC)
- month 1..12, day 1..days_in_month, hour 0..23, minute 0..59
- second 0..59, or 60 for a UTC value that is a recorded leap second
- attosecond 0..10**18 - 1

Out-of-range fields are rejected, never normalized; use DateTime.normalized
for rolled-up arithmetic on raw fields.

Every conversion goes through Instant:

    fields --(JulianDayCodec)--> label in own standard
           --(StandardConverter)--> TT Instant
           --> label in target standard --> fields in target calendar
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from fractions import Fraction
from typing import Any, Dict, Optional, Tuple

from .calendar import validate_date, validate_time
from .duration import SECONDS_PER_DAY, Duration
from .errors import AmbiguousOrUnrepresentableError, InvalidCalendarDateError
from .instant import Instant
from .julian_day import (
    HALF_DAY,
    day_number,
    from_day_number,
    from_seconds,
    to_julian_day,
    to_seconds,
    weekday,
)
from .types import Calendar, CalendarFields, Standard, parse_calendar, parse_standard


def _converter():
    from ..reference.standards import default_converter
    return default_converter()


def _current_table():
    from ..reference.leap_seconds import current_table
    return current_table()


# 128-bit packed layout: high word holds the fields, low word the attoseconds.
# Day and month are stored zero-based.
_YEAR_OFFSET = 32
_SECOND_OFFSET = 26
_MINUTE_OFFSET = 20
_HOUR_OFFSET = 15
_DAY0_OFFSET = 10
_MONTH0_OFFSET = 0

_MASK64 = (1 << 64) - 1

_ISO_RE = re.compile(
    r"""^\s*
    (?P<year>[+-]?\d+)-(?P<month>\d{1,2})-(?P<day>\d{1,2})
    (?:[T\s](?P<hour>\d{1,2}):(?P<minute>\d{2}):(?P<second>\d{2})(?:\.(?P<frac>\d{1,18}))?)?
    (?:\s+(?P<calendar>[A-Za-z]+)\s+(?P<standard>[A-Za-z]+))?
    \s*$""",
    re.VERBOSE,
)


@dataclass(frozen=True)
class DateTime:
    calendar: Calendar
    standard: Standard
    year: int
    month: int
    day: int
    hour: int = 0
    minute: int = 0
    second: int = 0
    attosecond: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "calendar", parse_calendar(self.calendar))
        object.__setattr__(self, "standard", parse_standard(self.standard))
        for name in ("year", "month", "day", "hour", "minute", "second", "attosecond"):
            v = getattr(self, name)
            if isinstance(v, bool) or not isinstance(v, int):
                raise TypeError(f"{name} must be int, got {type(v).__name__}")

        validate_date(self.calendar, self.year, self.month, self.day)
        validate_time(self.hour, self.minute, self.second, self.attosecond, allow_leap_second=True)

        if self.second == 60:
            if self.standard is not Standard.UTC:
                raise InvalidCalendarDateError(
                    f"second 60 only exists in UTC, not {self.standard.abbrev}"
                )
            if not _current_table().is_leap_second(self._label()):
                raise AmbiguousOrUnrepresentableError(
                    f"{self.isoformat()} is not a recorded UTC leap second"
                )

    # ------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------

    @classmethod
    def from_bc_year(
        cls,
        calendar: Calendar,
        standard: Standard,
        bc_year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        attosecond: int = 0,
    ) -> "DateTime":
        """1 BC is year 0, 2 BC is year -1, and so on."""
        return cls(calendar, standard, 1 - bc_year, month, day, hour, minute, second, attosecond)

    @classmethod
    def normalized(
        cls,
        calendar: Calendar,
        standard: Standard,
        year: int,
        month: int = 1,
        day: int = 1,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        attosecond: int = 0,
    ) -> "DateTime":
        """
        Build from fields that may be out of range or negative, rolling them
        up into a valid date (e.g. month 13 -> January of the next year,
        day 0 -> last day of the previous month). No leap seconds are inserted
        by the roll-up, even in UTC.
        """
        calendar = parse_calendar(calendar)
        year += (month - 1) // 12
        month = (month - 1) % 12 + 1

        first = day_number(calendar, year, month, 1)
        secs = (first + day - 1) * SECONDS_PER_DAY - HALF_DAY + hour * 3600 + minute * 60 + second
        f = from_seconds(calendar, Duration(secs, attosecond))
        return cls(calendar, standard, *f.as_tuple())

    @classmethod
    def from_fields(cls, calendar: Calendar, standard: Standard, fields: CalendarFields) -> "DateTime":
        return cls(calendar, standard, *fields.as_tuple())

    @classmethod
    def from_instant(
        cls,
        instant: Instant,
        calendar: Calendar = Calendar.GREGORIAN,
        standard: Standard = Standard.UTC,
    ) -> "DateTime":
        calendar = parse_calendar(calendar)
        standard = parse_standard(standard)
        reading = _converter().from_tt(standard, instant)
        f = from_seconds(calendar, reading.label.jd0_seconds())
        second = 60 if reading.leap_second else f.second
        return cls(calendar, standard, f.year, f.month, f.day, f.hour, f.minute, second, f.attosecond)

    @classmethod
    def parse(
        cls,
        text: str,
        calendar: Optional[Calendar] = None,
        standard: Optional[Standard] = None,
    ) -> "DateTime":
        """
        Accepts '[-]YYYY-MM-DD', optionally followed by 'THH:MM:SS[.fraction]'
        (a space also separates), and optionally by '<Calendar> <Standard>'
        as written by str(). Defaults: Gregorian UTC.
        """
        m = _ISO_RE.match(text)
        if m is None:
            raise ValueError(f"unrecognized date/time: {text!r}")

        cal = parse_calendar(m["calendar"]) if m["calendar"] else None
        std = parse_standard(m["standard"]) if m["standard"] else None
        if cal is not None and calendar is not None and cal is not parse_calendar(calendar):
            raise ValueError(f"calendar mismatch: text says {cal.title}, caller asked for {calendar}")
        if std is not None and standard is not None and std is not parse_standard(standard):
            raise ValueError(f"standard mismatch: text says {std.abbrev}, caller asked for {standard}")
        cal = cal or (parse_calendar(calendar) if calendar is not None else Calendar.GREGORIAN)
        std = std or (parse_standard(standard) if standard is not None else Standard.UTC)

        frac = m["frac"] or ""
        return cls(
            cal,
            std,
            int(m["year"]),
            int(m["month"]),
            int(m["day"]),
            int(m["hour"] or 0),
            int(m["minute"] or 0),
            int(m["second"] or 0),
            int(frac.ljust(18, "0")) if frac else 0,
        )

    # ------------------------------------------------------------
    # Field views
    # ------------------------------------------------------------

    @property
    def year_bc(self) -> int:
        return 1 - self.year

    @property
    def date(self) -> Tuple[int, int, int]:
        return (self.year, self.month, self.day)

    @property
    def time(self) -> Tuple[int, int, int, int]:
        return (self.hour, self.minute, self.second, self.attosecond)

    @property
    def fields(self) -> CalendarFields:
        return CalendarFields(*self.date, *self.time)

    @property
    def day_number(self) -> int:
        """Julian Day Number of the civil date."""
        return day_number(self.calendar, self.year, self.month, self.day)

    @property
    def weekday(self) -> int:
        """ISO weekday, 1 = Monday."""
        return weekday(self.day_number)

    @property
    def day_of_year(self) -> int:
        return self.day_number - day_number(self.calendar, self.year, 1, 1) + 1

    @property
    def is_leap_second(self) -> bool:
        return self.second == 60

    def _label(self) -> Instant:
        # second 60 is carried by the label of :59 plus the leap flag
        since = to_seconds(
            self.calendar, self.year, self.month, self.day,
            self.hour, self.minute, min(self.second, 59), self.attosecond,
        )
        return Instant.from_jd0_seconds(since)

    def julian_day(self) -> Fraction:
        """Julian Day in this value's own standard (exact)."""
        if self.is_leap_second:
            raise AmbiguousOrUnrepresentableError("a UTC leap second has no UTC Julian Day")
        return to_julian_day(self.calendar, *self.date, *self.time)

    # ------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------

    def to_instant(self) -> Instant:
        return _converter().to_tt(self.standard, self._label(), self.is_leap_second)

    def to_calendar(self, calendar: Calendar) -> "DateTime":
        """Same day and time of day, relabelled in another calendar."""
        calendar = parse_calendar(calendar)
        if calendar is self.calendar:
            return self
        y, m, d = from_day_number(calendar, self.day_number)
        return DateTime(calendar, self.standard, y, m, d, *self.time)

    def to_standard(self, standard: Standard) -> "DateTime":
        standard = parse_standard(standard)
        if standard is self.standard:
            return self
        return DateTime.from_instant(self.to_instant(), self.calendar, standard)

    def convert(self, calendar: Calendar, standard: Standard) -> "DateTime":
        return self.to_standard(standard).to_calendar(calendar)

    # ------------------------------------------------------------
    # Arithmetic and ordering
    # ------------------------------------------------------------

    def __add__(self, other: Any) -> "DateTime":
        if not isinstance(other, Duration):
            return NotImplemented
        return DateTime.from_instant(self.to_instant() + other, self.calendar, self.standard)

    __radd__ = __add__

    def __sub__(self, other: Any):
        if isinstance(other, DateTime):
            return self.to_instant() - other.to_instant()
        if isinstance(other, Duration):
            return DateTime.from_instant(self.to_instant() - other, self.calendar, self.standard)
        return NotImplemented

    def _key(self, other: Any) -> Tuple[Tuple[int, ...], Tuple[int, ...]]:
        if not isinstance(other, DateTime):
            raise TypeError(f"cannot compare DateTime with {type(other).__name__}")
        if (self.calendar, self.standard) != (other.calendar, other.standard):
            raise TypeError(
                f"cannot order {self.calendar.title} {self.standard.abbrev} against "
                f"{other.calendar.title} {other.standard.abbrev}; convert first"
            )
        return self.date + self.time, other.date + other.time

    def __lt__(self, other: Any) -> bool:
        a, b = self._key(other)
        return a < b

    def __le__(self, other: Any) -> bool:
        a, b = self._key(other)
        return a <= b

    def __gt__(self, other: Any) -> bool:
        a, b = self._key(other)
        return a > b

    def __ge__(self, other: Any) -> bool:
        a, b = self._key(other)
        return a >= b

    # ------------------------------------------------------------
    # Formatting / encoding
    # ------------------------------------------------------------

    def isoformat(self) -> str:
        sign = "-" if self.year < 0 else ""
        out = (
            f"{sign}{abs(self.year):04d}-{self.month:02d}-{self.day:02d}"
            f"T{self.hour:02d}:{self.minute:02d}:{self.second:02d}"
        )
        if self.attosecond:
            out += "." + f"{self.attosecond:018d}".rstrip("0")
        return out

    def __str__(self) -> str:
        return (
            f"{self.year:04d}-{self.month:02d}-{self.day:02d} "
            f"{self.hour:02d}:{self.minute:02d}:{self.second:02d}.{self.attosecond:018d} "
            f"{self.calendar.title} {self.standard.abbrev}"
        )

    def to_packed(self) -> int:
        """128-bit packed form: fields in the high 64 bits, attoseconds in the low 64."""
        word = (
            (self.year & 0xFFFF_FFFF) << _YEAR_OFFSET
            | self.second << _SECOND_OFFSET
            | self.minute << _MINUTE_OFFSET
            | self.hour << _HOUR_OFFSET
            | (self.day - 1) << _DAY0_OFFSET
            | (self.month - 1) << _MONTH0_OFFSET
        )
        return word << 64 | self.attosecond

    @classmethod
    def from_packed(cls, packed: int, calendar: Calendar, standard: Standard) -> "DateTime":
        if not (0 <= packed < 1 << 128):
            raise ValueError("packed DateTime must be an unsigned 128-bit integer")
        word, attos = packed >> 64, packed & _MASK64
        year = word >> _YEAR_OFFSET
        if year >= 1 << 31:
            year -= 1 << 32
        return cls(
            calendar,
            standard,
            year,
            (word & 0xF) + 1,
            ((word >> _DAY0_OFFSET) & 0x1F) + 1,
            (word >> _HOUR_OFFSET) & 0x1F,
            (word >> _MINUTE_OFFSET) & 0x3F,
            (word >> _SECOND_OFFSET) & 0x3F,
            attos,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "calendar": self.calendar.value,
            "standard": self.standard.value,
            "year": self.year,
            "month": self.month,
            "day": self.day,
            "hour": self.hour,
            "minute": self.minute,
            "second": self.second,
            "attosecond": self.attosecond,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DateTime":
        return cls(
            data["calendar"],
            data["standard"],
            int(data["year"]),
            int(data["month"]),
            int(data["day"]),
            int(data.get("hour", 0)),
            int(data.get("minute", 0)),
            int(data.get("second", 0)),
            int(data.get("attosecond", 0)),
        )
