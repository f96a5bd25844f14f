"""
astrotime.reference.leap_seconds

Leap-second schedule (TAI - UTC) and the process-wide table accessor.

Source
------
The table is read from an IANA/NTP `leap-seconds.list`:

    2272060800 10 # 1 Jan 1972

The first column is the NTP timestamp (seconds since 1900-01-01 00:00:00,
counting 86400 s per day) of the UTC midnight at which the new TAI - UTC
value (second column) takes effect. Lines starting with '#' are comments,
except '#@' which carries the expiry timestamp of the list.

Search order for the builtin table:
  1) ASTROTIME_LEAP_SECONDS environment variable (path to a list file)
  2) packaged data (astrotime/reference/data/leap-seconds.list)

A baseline entry for 1970-01-01 (TAI - UTC = 9 s) is prepended to the builtin
table so that UTC is defined from the POSIX epoch onward.

Labels
------
Lookups take *labels*: Instant-shaped values whose offset is a UTC (or TAI)
reading measured from the internal reference. An inserted leap second is
represented by the label of the 23:59:59 second that precedes the insertion
together with a separate flag.
"""

from __future__ import annotations

import contextvars
import logging
import os
from bisect import bisect_right
from contextlib import contextmanager
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple, Union

import importlib.resources

from ..core.calendar import validate_date
from ..core.duration import SECONDS_PER_DAY, Duration
from ..core.errors import BeforeLeapSecondEpochError
from ..core.instant import Instant
from ..core.julian_day import day_number, from_day_number, to_seconds
from ..core.types import Calendar

log = logging.getLogger(__name__)

ENV_VAR = "ASTROTIME_LEAP_SECONDS"

ONE_SECOND = Duration(1)

# JDN of 1900-01-01, the NTP day zero
_NTP_EPOCH_JDN = day_number(Calendar.GREGORIAN, 1900, 1, 1)


def _utc_label(year: int, month: int, day: int) -> Instant:
    return Instant.from_jd0_seconds(to_seconds(Calendar.GREGORIAN, year, month, day))


def ntp_to_date(ntp: int) -> Tuple[int, int, int]:
    days, rem = divmod(ntp, SECONDS_PER_DAY)
    if rem:
        raise ValueError(f"NTP timestamp is not a UTC midnight: {ntp}")
    return from_day_number(Calendar.GREGORIAN, _NTP_EPOCH_JDN + days)


# ---------------------------------------------------------------------------
# Table model
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class LeapSecond:
    """TAI - UTC (whole seconds) in effect from UTC midnight of the given Gregorian date."""
    year: int
    month: int
    day: int
    tai_minus_utc: int

    def __post_init__(self) -> None:
        validate_date(Calendar.GREGORIAN, self.year, self.month, self.day)

    @property
    def offset(self) -> Duration:
        return Duration(self.tai_minus_utc)

    @property
    def utc(self) -> Instant:
        return _utc_label(self.year, self.month, self.day)

    @property
    def tai(self) -> Instant:
        return self.utc + self.offset


UNIX_BASELINE = LeapSecond(1970, 1, 1, 9)


@dataclass(frozen=True)
class LeapSecondTable:
    """
    Immutable leap-second schedule, sorted by date.

    Every entry after the first must raise TAI - UTC by exactly one second;
    negative leap seconds are reserved and rejected here.
    """
    entries: Tuple[LeapSecond, ...]
    expires: Optional[Tuple[int, int, int]] = None
    source: str = "<memory>"

    _utc_keys: Tuple[Instant, ...] = field(init=False, repr=False, compare=False)
    _tai_keys: Tuple[Instant, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        entries = tuple(self.entries)
        if not entries:
            raise ValueError("leap-second table is empty")
        for prev, cur in zip(entries, entries[1:]):
            if (cur.year, cur.month, cur.day) <= (prev.year, prev.month, prev.day):
                raise ValueError(
                    f"leap-second dates not strictly increasing: "
                    f"{prev.year:04d}-{prev.month:02d}-{prev.day:02d} -> "
                    f"{cur.year:04d}-{cur.month:02d}-{cur.day:02d}"
                )
            step = cur.tai_minus_utc - prev.tai_minus_utc
            if step != 1:
                raise ValueError(
                    f"unsupported TAI-UTC step {step:+d} s at "
                    f"{cur.year:04d}-{cur.month:02d}-{cur.day:02d} (only +1 s insertions are supported)"
                )
        object.__setattr__(self, "entries", entries)
        object.__setattr__(self, "_utc_keys", tuple(e.utc for e in entries))
        object.__setattr__(self, "_tai_keys", tuple(e.tai for e in entries))

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[LeapSecond]:
        return iter(self.entries)

    @property
    def first(self) -> LeapSecond:
        return self.entries[0]

    @property
    def last(self) -> LeapSecond:
        return self.entries[-1]

    # ------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------

    def _index(self, keys: Tuple[Instant, ...], label: Instant, what: str) -> int:
        i = bisect_right(keys, label) - 1
        if i < 0:
            first = self.first
            raise BeforeLeapSecondEpochError(
                f"{what} precedes the first leap-second entry "
                f"({first.year:04d}-{first.month:02d}-{first.day:02d})"
            )
        return i

    def index_for_utc(self, label: Instant) -> int:
        return self._index(self._utc_keys, label, "UTC")

    def index_for_tai(self, label: Instant) -> int:
        return self._index(self._tai_keys, label, "TAI")

    def entry_for_utc(self, label: Instant) -> LeapSecond:
        return self.entries[self.index_for_utc(label)]

    def entry_for_tai(self, label: Instant) -> LeapSecond:
        return self.entries[self.index_for_tai(label)]

    def tai_minus_utc(self, label: Instant) -> Duration:
        """TAI - UTC in effect at a (non-leap) UTC label."""
        return self.entry_for_utc(label).offset

    def is_leap_second(self, label: Instant) -> bool:
        """
        True if `label` lies in the 23:59:59 UTC second directly followed by
        an inserted 23:59:60.
        """
        j = bisect_right(self._utc_keys, label)
        if j < 1 or j >= len(self._utc_keys):
            return False
        return label >= self._utc_keys[j] - ONE_SECOND

    def is_tai_in_leap_second(self, label: Instant) -> bool:
        i = self.index_for_tai(label)
        return i + 1 < len(self._tai_keys) and label >= self._tai_keys[i + 1] - ONE_SECOND

    def leap_instants(self) -> List[Instant]:
        """TT instants directly after each inserted leap second."""
        from .standards import TT_MINUS_TAI
        return [k + TT_MINUS_TAI for k in self._tai_keys[1:]]

    def leap_seconds_elapsed_at(self, instant: Instant) -> int:
        """Number of leap seconds fully elapsed at a TT instant."""
        return bisect_right(self.leap_instants(), instant)

    # ------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------

    @classmethod
    def from_iana(
        cls,
        text: str,
        *,
        baseline: Optional[LeapSecond] = None,
        source: str = "<text>",
    ) -> "LeapSecondTable":
        """
        Parse IANA leap-seconds.list text. Malformed data lines raise
        ValueError naming the line number.
        """
        entries: List[LeapSecond] = []
        expires: Optional[Tuple[int, int, int]] = None

        for lineno, raw in enumerate(text.splitlines(), start=1):
            line = raw.strip()
            if not line:
                continue
            if line.startswith("#@"):
                try:
                    expires = ntp_to_date(int(line[2:].split()[0]))
                except (ValueError, IndexError) as e:
                    raise ValueError(f"{source}:{lineno}: bad expiry line: {raw!r}") from e
                continue
            if line.startswith("#"):
                continue

            data = line.split("#", 1)[0].split()
            if len(data) != 2:
                raise ValueError(f"{source}:{lineno}: expected '<ntp> <tai-utc>', got {raw!r}")
            try:
                ntp, offset = int(data[0]), int(data[1])
                y, m, d = ntp_to_date(ntp)
            except ValueError as e:
                raise ValueError(f"{source}:{lineno}: {e}") from e
            entries.append(LeapSecond(y, m, d, offset))

        if not entries:
            raise ValueError(f"{source}: no leap-second entries found")
        if baseline is not None and (baseline.year, baseline.month, baseline.day) < (
            entries[0].year, entries[0].month, entries[0].day
        ):
            entries.insert(0, baseline)
        return cls(tuple(entries), expires, source)

    @classmethod
    def from_file(
        cls,
        path: Union[str, Path],
        *,
        baseline: Optional[LeapSecond] = None,
    ) -> "LeapSecondTable":
        p = Path(path).expanduser()
        with p.open("r", encoding="utf-8") as f:
            return cls.from_iana(f.read(), baseline=baseline, source=str(p))

    @classmethod
    def from_entries(
        cls,
        entries: Iterable[Tuple[int, int, int, int]],
        *,
        expires: Optional[Tuple[int, int, int]] = None,
        source: str = "<memory>",
    ) -> "LeapSecondTable":
        return cls(tuple(LeapSecond(*e) for e in entries), expires, source)

    def truncated(self, n: int) -> "LeapSecondTable":
        """First `n` entries only (for what-if and boundary checks)."""
        return LeapSecondTable(self.entries[:n], None, f"{self.source}[:{n}]")


# ---------------------------------------------------------------------------
# Builtin table and scoped accessor
# ---------------------------------------------------------------------------

@lru_cache(maxsize=1)
def builtin_table() -> LeapSecondTable:
    """
    Load the process-wide leap-second table.

    Search order:
      1) ASTROTIME_LEAP_SECONDS environment variable (path to leap-seconds.list)
      2) packaged data (astrotime/reference/data/leap-seconds.list)

    A named file that cannot be read or parsed is an error.
    """
    p = os.environ.get(ENV_VAR, "").strip()
    if p:
        table = LeapSecondTable.from_file(p, baseline=UNIX_BASELINE)
    else:
        res = importlib.resources.files("astrotime.reference").joinpath("data").joinpath("leap-seconds.list")
        with res.open("r", encoding="utf-8") as f:
            table = LeapSecondTable.from_iana(
                f.read(), baseline=UNIX_BASELINE, source="astrotime:leap-seconds.list"
            )
    log.debug(
        "loaded leap-second table from %s: %d entries, TAI-UTC %d..%d s, expires %s",
        table.source, len(table), table.first.tai_minus_utc, table.last.tai_minus_utc, table.expires,
    )
    return table


_ACTIVE: contextvars.ContextVar[Optional[LeapSecondTable]] = contextvars.ContextVar(
    "astrotime_leap_seconds", default=None
)


def current_table() -> LeapSecondTable:
    table = _ACTIVE.get()
    return table if table is not None else builtin_table()


@contextmanager
def use_table(table: LeapSecondTable) -> Iterator[LeapSecondTable]:
    """Scope an alternate leap-second table for the current context."""
    if not isinstance(table, LeapSecondTable):
        raise TypeError(f"expected LeapSecondTable, got {type(table).__name__}")
    token = _ACTIVE.set(table)
    try:
        yield table
    finally:
        _ACTIVE.reset(token)
