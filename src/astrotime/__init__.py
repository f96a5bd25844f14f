"""astrotime public API.

Keep this surface small: users should mostly interact with the types re-exported here.
Epoch constants live in astrotime.core.epochs (importing them loads the leap-second table).
"""

from .core.duration import Duration
from .core.instant import Instant
from .core.date_time import DateTime
from .core.types import Calendar, Standard, CalendarFields
from .core.errors import (
    AstrotimeError,
    TimeOverflowError,
    InvalidCalendarDateError,
    BeforeLeapSecondEpochError,
    AmbiguousOrUnrepresentableError,
)
from .reference.leap_seconds import LeapSecond, LeapSecondTable, current_table, use_table
from .reference.standards import StandardConverter

__version__ = "0.1.0"

__all__ = [
    "Duration",
    "Instant",
    "DateTime",
    "Calendar",
    "Standard",
    "CalendarFields",
    "AstrotimeError",
    "TimeOverflowError",
    "InvalidCalendarDateError",
    "BeforeLeapSecondEpochError",
    "AmbiguousOrUnrepresentableError",
    "LeapSecond",
    "LeapSecondTable",
    "current_table",
    "use_table",
    "StandardConverter",
]
