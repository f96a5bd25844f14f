"""
astrotime.reference.standards

Conversions between the readings of the supported time standards.

All functions act on *labels* (Instant values whose offset is the reading of
a given standard measured from the internal reference) and are exact apart
from a final rounding to the nearest attosecond.

    TAI = UTC + (TAI - UTC)              leap-second table
    TT  = TAI + 32.184 s                 exact
    TT  = TCG * (1 - L_G)                offsets from 1977-01-01 00:00:32.184 TT
    TT  = TCB * (1 - L_B)                same reference; periodic TDB terms omitted

TT, TCG and TCB read the same at the internal reference, so the rate
relations are plain scalings of the label offset.
"""

from __future__ import annotations

from fractions import Fraction
from functools import lru_cache
from typing import NamedTuple, Optional

from ..core.duration import Duration
from ..core.errors import AmbiguousOrUnrepresentableError
from ..core.instant import Instant
from ..core.types import Standard
from .leap_seconds import ONE_SECOND, LeapSecondTable, current_table

TT_MINUS_TAI = Duration(32, 184 * 10**15)

# IAU 2000 Resolution B1.9 (defining constant)
L_G = Fraction("6.969290134e-10")
# IAU 2006 Resolution B3 (TCB - TT rate, TDB0 excluded)
L_B = Fraction("1.550519768e-8")

_TT_PER_TCG = 1 - L_G
_TCG_PER_TT = 1 / _TT_PER_TCG
_TT_PER_TCB = 1 - L_B
_TCB_PER_TT = 1 / _TT_PER_TCB


class Reading(NamedTuple):
    """A standard's label, plus whether it names an inserted UTC leap second."""
    label: Instant
    leap_second: bool = False


class StandardConverter:
    """
    Conversions bound to one leap-second table. Only UTC needs the table;
    the others are closed-form.
    """

    def __init__(self, leap_seconds: LeapSecondTable):
        self.leap_seconds = leap_seconds

    def __repr__(self) -> str:
        return f"StandardConverter(leap_seconds={self.leap_seconds.source!r})"

    # ------------------------------------------------------------
    # UTC <-> TAI
    # ------------------------------------------------------------

    def utc_to_tai(self, label: Instant, leap_second: bool = False) -> Instant:
        """
        `label` is the UTC reading; an inserted 23:59:60 is passed as the
        label of 23:59:59 with leap_second=True.
        """
        table = self.leap_seconds
        if not leap_second:
            return label + table.tai_minus_utc(label)
        if not table.is_leap_second(label):
            raise AmbiguousOrUnrepresentableError("second 60 is not a recorded UTC leap second")
        return label + table.tai_minus_utc(label) + ONE_SECOND

    def tai_to_utc(self, label: Instant) -> Reading:
        table = self.leap_seconds
        offset = table.entry_for_tai(label).offset
        if table.is_tai_in_leap_second(label):
            return Reading(label - offset - ONE_SECOND, True)
        return Reading(label - offset, False)

    # ------------------------------------------------------------
    # TAI <-> TT
    # ------------------------------------------------------------

    @staticmethod
    def tai_to_tt(label: Instant) -> Instant:
        return label + TT_MINUS_TAI

    @staticmethod
    def tt_to_tai(label: Instant) -> Instant:
        return label - TT_MINUS_TAI

    # ------------------------------------------------------------
    # TT <-> TCG / TCB
    # ------------------------------------------------------------

    @staticmethod
    def tt_to_tcg(label: Instant) -> Instant:
        return Instant(label.offset.scale(_TCG_PER_TT))

    @staticmethod
    def tcg_to_tt(label: Instant) -> Instant:
        return Instant(label.offset.scale(_TT_PER_TCG))

    @staticmethod
    def tt_to_tcb(label: Instant) -> Instant:
        return Instant(label.offset.scale(_TCB_PER_TT))

    @staticmethod
    def tcb_to_tt(label: Instant) -> Instant:
        return Instant(label.offset.scale(_TT_PER_TCB))

    # ------------------------------------------------------------
    # Any <-> any, through TT
    # ------------------------------------------------------------

    def to_tt(self, standard: Standard, label: Instant, leap_second: bool = False) -> Instant:
        if leap_second and standard is not Standard.UTC:
            raise ValueError(f"leap_second only applies to UTC, not {standard.abbrev}")
        if standard is Standard.UTC:
            return self.tai_to_tt(self.utc_to_tai(label, leap_second))
        if standard is Standard.TAI:
            return self.tai_to_tt(label)
        if standard is Standard.TT:
            return label
        if standard is Standard.TCG:
            return self.tcg_to_tt(label)
        if standard is Standard.TCB:
            return self.tcb_to_tt(label)
        raise ValueError(f"unknown standard: {standard!r}")

    def from_tt(self, standard: Standard, instant: Instant) -> Reading:
        if standard is Standard.UTC:
            return self.tai_to_utc(self.tt_to_tai(instant))
        if standard is Standard.TAI:
            return Reading(self.tt_to_tai(instant))
        if standard is Standard.TT:
            return Reading(instant)
        if standard is Standard.TCG:
            return Reading(self.tt_to_tcg(instant))
        if standard is Standard.TCB:
            return Reading(self.tt_to_tcb(instant))
        raise ValueError(f"unknown standard: {standard!r}")

    def convert(
        self,
        source: Standard,
        target: Standard,
        label: Instant,
        leap_second: bool = False,
    ) -> Reading:
        if source is target:
            if leap_second:
                # validates the leap flag against the table
                self.to_tt(source, label, True)
            return Reading(label, leap_second)
        return self.from_tt(target, self.to_tt(source, label, leap_second))


@lru_cache(maxsize=8)
def converter_for(table: LeapSecondTable) -> StandardConverter:
    return StandardConverter(table)


def default_converter(table: Optional[LeapSecondTable] = None) -> StandardConverter:
    """Converter over `table`, or over the currently active table."""
    return converter_for(table if table is not None else current_table())
