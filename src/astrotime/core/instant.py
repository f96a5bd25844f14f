"""
astrotime.core.instant

An Instant is an absolute point in time, stored as the TT duration elapsed
since an internal reference:

    1977-01-01 00:00:32.184 TT  (JD 2443144.5003725 TT)

This is the moment at which TT, TCG and TCB read the same, and it sits near
the middle of the Duration range. Instants carry no calendar or standard of
their own; those are applied when converting to a DateTime or a Julian Day.

Conversions that need a time standard go through the StandardConverter
bound to the currently active leap-second table (see
astrotime.reference.leap_seconds.use_table).
"""

from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction
from typing import TYPE_CHECKING, Any, Dict, Tuple

from .duration import ATTOS_PER_SECOND, SECONDS_PER_DAY, Duration
from .errors import AmbiguousOrUnrepresentableError
from .julian_day import format_julian_day, julian_day_to_seconds, to_seconds
from .types import Calendar, Standard

if TYPE_CHECKING:
    from .date_time import DateTime

# Internal reference expressed as a duration from JD 0.0
REFERENCE_FROM_JD0 = to_seconds(Calendar.GREGORIAN, 1977, 1, 1, 0, 0, 32, 184 * 10**15)

# Naive (leap-free) UTC label of the POSIX epoch, measured from JD 0.0
_UNIX_FROM_JD0 = to_seconds(Calendar.GREGORIAN, 1970, 1, 1)


def _converter():
    from ..reference.standards import default_converter
    return default_converter()


@dataclass(frozen=True, order=True)
class Instant:
    """
    An absolute point in time. Only the TT offset is stored; the same type is
    also used internally as a *label* (the reading of some other standard,
    measured from the same reference) by the standard converters.
    """
    offset: Duration = Duration()

    # ------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------

    def __add__(self, other: Any) -> "Instant":
        if not isinstance(other, Duration):
            return NotImplemented
        return Instant(self.offset + other)

    __radd__ = __add__

    def __sub__(self, other: Any):
        if isinstance(other, Instant):
            return self.offset - other.offset
        if isinstance(other, Duration):
            return Instant(self.offset - other)
        return NotImplemented

    # ------------------------------------------------------------
    # Labels <-> seconds since JD 0.0
    # ------------------------------------------------------------

    @classmethod
    def from_jd0_seconds(cls, since_jd0: Duration) -> "Instant":
        return cls(since_jd0 - REFERENCE_FROM_JD0)

    def jd0_seconds(self) -> Duration:
        return self.offset + REFERENCE_FROM_JD0

    # ------------------------------------------------------------
    # Julian Day
    # ------------------------------------------------------------

    @classmethod
    def from_julian_day(cls, jd, standard: Standard = Standard.TT) -> "Instant":
        """
        Exact for int/Fraction/str input (floored to the attosecond).
        A UTC Julian Day counts 86400 s per day and never names a leap second.
        """
        label = cls.from_jd0_seconds(julian_day_to_seconds(jd))
        return _converter().to_tt(standard, label)

    @classmethod
    def from_julian_day_parts(
        cls,
        day: int,
        seconds: int,
        attoseconds: int = 0,
        standard: Standard = Standard.TT,
    ) -> "Instant":
        """`seconds` counts from noon (the start of the Julian day)."""
        if not (0 <= seconds < SECONDS_PER_DAY):
            raise ValueError(f"seconds out of range 0..{SECONDS_PER_DAY - 1}: {seconds}")
        if not (0 <= attoseconds < ATTOS_PER_SECOND):
            raise ValueError(f"attoseconds out of range: {attoseconds}")
        label = cls.from_jd0_seconds(Duration(day * SECONDS_PER_DAY + seconds, attoseconds))
        return _converter().to_tt(standard, label)

    def _label(self, standard: Standard) -> Duration:
        reading = _converter().from_tt(standard, self)
        if reading.leap_second:
            raise AmbiguousOrUnrepresentableError(
                "instant falls inside a UTC leap second; it has no UTC Julian Day"
            )
        return reading.label.jd0_seconds()

    def julian_day(self, standard: Standard = Standard.TT) -> Fraction:
        return self._label(standard).as_fraction() / SECONDS_PER_DAY

    def julian_day_parts(self, standard: Standard = Standard.TT) -> Tuple[int, int, int]:
        """(day, seconds since noon, attoseconds)"""
        since = self._label(standard)
        day, secs = divmod(since.seconds, SECONDS_PER_DAY)
        return day, secs, since.attoseconds

    def julian_day_formatted(self, standard: Standard = Standard.TT) -> str:
        return format_julian_day(self.julian_day(standard))

    # ------------------------------------------------------------
    # POSIX time
    # ------------------------------------------------------------

    @classmethod
    def from_unix_time(cls, seconds: int, nanoseconds: int = 0) -> "Instant":
        """
        POSIX time ignores leap seconds, so it is a naive UTC label; the
        elapsed leap seconds are restored from the table.
        """
        label = cls.from_jd0_seconds(_UNIX_FROM_JD0 + Duration(seconds, nanoseconds * 10**9))
        return _converter().to_tt(Standard.UTC, label)

    def unix_time(self) -> Fraction:
        """
        Seconds since 1970-01-01T00:00:00 UTC, POSIX style. During an inserted
        leap second the value repeats the preceding second.
        """
        reading = _converter().from_tt(Standard.UTC, self)
        return (reading.label.jd0_seconds() - _UNIX_FROM_JD0).as_fraction()

    # ------------------------------------------------------------
    # DateTime
    # ------------------------------------------------------------

    def to_datetime(
        self,
        calendar: Calendar = Calendar.GREGORIAN,
        standard: Standard = Standard.UTC,
    ) -> "DateTime":
        from .date_time import DateTime
        return DateTime.from_instant(self, calendar, standard)

    @classmethod
    def from_datetime(cls, dt: "DateTime") -> "Instant":
        return dt.to_instant()

    # ------------------------------------------------------------
    # Encoding
    # ------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        return {"tt_since_reference": self.offset.to_dict()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Instant":
        return cls(Duration.from_dict(data["tt_since_reference"]))

    def __str__(self) -> str:
        return f"{self.julian_day_formatted(Standard.TT)} TT"
