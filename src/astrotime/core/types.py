from __future__ import annotations
from dataclasses import dataclass
from enum import Enum


class Calendar(Enum):
    GREGORIAN = "gregorian"
    JULIAN = "julian"

    @property
    def title(self) -> str:
        return self.value.capitalize()


class Standard(Enum):
    """Time standards. UTC is the only discontinuous one."""
    UTC = "UTC"
    TAI = "TAI"
    TT = "TT"
    TCG = "TCG"
    TCB = "TCB"

    @property
    def abbrev(self) -> str:
        return self.value

    @property
    def is_continuous(self) -> bool:
        return self is not Standard.UTC


@dataclass(frozen=True)
class CalendarFields:
    year: int
    month: int
    day: int
    hour: int = 0
    minute: int = 0
    second: int = 0
    attosecond: int = 0

    def as_tuple(self):
        return (self.year, self.month, self.day, self.hour, self.minute, self.second, self.attosecond)


def parse_calendar(value) -> Calendar:
    """Accept a Calendar or its name in any case ('Gregorian', 'julian')."""
    if isinstance(value, Calendar):
        return value
    try:
        return Calendar(str(value).strip().lower())
    except ValueError:
        raise ValueError(f"unknown calendar: {value!r}") from None


def parse_standard(value) -> Standard:
    """Accept a Standard or its abbreviation in any case ('tt', 'UTC')."""
    if isinstance(value, Standard):
        return value
    try:
        return Standard(str(value).strip().upper())
    except ValueError:
        raise ValueError(f"unknown time standard: {value!r}") from None
