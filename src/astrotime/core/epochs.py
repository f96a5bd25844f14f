"""
Well-known epochs as Instants.

Importing this module evaluates the UTC epochs against the active
leap-second table.
"""

from __future__ import annotations

from fractions import Fraction
from typing import Dict

from .date_time import DateTime
from .instant import Instant
from .types import Calendar, Standard

_G = Calendar.GREGORIAN
_J = Calendar.JULIAN
_TT = Standard.TT

# JD 0.0 TT: noon, 1 January 4713 BC (proleptic Julian)
JULIAN_PERIOD = DateTime(_J, _TT, -4712, 1, 1, 12).to_instant()

# Start of year 1 in each calendar
JULIAN_CALENDAR = DateTime(_J, _TT, 1, 1, 1).to_instant()
GREGORIAN_CALENDAR = DateTime(_G, _TT, 1, 1, 1).to_instant()

J1900_0 = Instant.from_julian_day(2415020, _TT)
# Start of 1900 (ephemeris-time era); half a day after J1900.0
E1900_0 = DateTime(_G, _TT, 1900, 1, 1).to_instant()

UNIX = DateTime(_G, Standard.UTC, 1970, 1, 1).to_instant()

# TT, TCG and TCB coincide here; also the internal reference
TIME_STANDARD = DateTime(_G, _TT, 1977, 1, 1, 0, 0, 32, 184 * 10**15).to_instant()

# Hipparcos catalogue epoch
J1991_25 = Instant.from_julian_day(Fraction("2448349.0625"), _TT)

Y2K = DateTime(_G, Standard.UTC, 2000, 1, 1).to_instant()

J2000_0 = Instant.from_julian_day(2451545, _TT)
J2100_0 = Instant.from_julian_day(2488070, _TT)
J2200_0 = Instant.from_julian_day(2524595, _TT)

ALL_EPOCHS: Dict[str, Instant] = {
    "JulianPeriod": JULIAN_PERIOD,
    "JulianCalendar": JULIAN_CALENDAR,
    "GregorianCalendar": GREGORIAN_CALENDAR,
    "J1900.0": J1900_0,
    "E1900.0": E1900_0,
    "Unix": UNIX,
    "TimeStandard": TIME_STANDARD,
    "J1991.25": J1991_25,
    "Y2k": Y2K,
    "J2000.0": J2000_0,
    "J2100.0": J2100_0,
    "J2200.0": J2200_0,
}
