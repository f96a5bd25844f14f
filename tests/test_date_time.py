#!/usr/bin/env python3
from __future__ import annotations

import random

import pytest

from astrotime import (
    AmbiguousOrUnrepresentableError,
    Calendar,
    DateTime,
    Duration,
    InvalidCalendarDateError,
    Standard,
    TimeOverflowError,
)
from astrotime.core.calendar import YEAR_MAX, days_in_month

G = Calendar.GREGORIAN
J = Calendar.JULIAN
ATTOS = 10**18


def random_datetime(rng, cal, std, y0, y1):
    y = rng.randint(y0, y1)
    m = rng.randint(1, 12)
    return DateTime(
        cal, std, y, m, rng.randint(1, days_in_month(cal, y, m)),
        rng.randint(0, 23), rng.randint(0, 59), rng.randint(0, 59), rng.randrange(ATTOS),
    )


def test_construction_rejects_out_of_range_fields():
    with pytest.raises(InvalidCalendarDateError):
        DateTime(G, Standard.TT, 2021, 2, 30)
    with pytest.raises(InvalidCalendarDateError):
        DateTime(G, Standard.TT, 2021, 1, 1, 24)
    with pytest.raises(InvalidCalendarDateError):
        DateTime(G, Standard.TT, 2021, 1, 1, 0, 0, 0, ATTOS)
    with pytest.raises(InvalidCalendarDateError):
        DateTime(G, Standard.TT, YEAR_MAX + 1, 1, 1)
    with pytest.raises(TypeError):
        DateTime(G, Standard.TT, 2021.0, 1, 1)


def test_second_60():
    # recorded leap second, in either calendar
    leap = DateTime(G, Standard.UTC, 2016, 12, 31, 23, 59, 60)
    assert leap.is_leap_second
    assert DateTime(J, Standard.UTC, 2016, 12, 18, 23, 59, 60).to_instant() == leap.to_instant()
    # not a leap second
    with pytest.raises(AmbiguousOrUnrepresentableError):
        DateTime(G, Standard.UTC, 2016, 12, 30, 23, 59, 60)
    with pytest.raises(AmbiguousOrUnrepresentableError):
        DateTime(G, Standard.UTC, 2017, 1, 1, 0, 0, 60)
    # second 60 never exists outside UTC
    with pytest.raises(InvalidCalendarDateError):
        DateTime(G, Standard.TAI, 2016, 12, 31, 23, 59, 60)


def test_unix_epoch_counts_as_first_leap_era():
    # 1971-12-31T23:59:60 is the step from the 1970 baseline (9 s) to 10 s
    DateTime(G, Standard.UTC, 1971, 12, 31, 23, 59, 60)


@pytest.mark.parametrize("cal", [G, J])
@pytest.mark.parametrize("std", list(Standard))
def test_roundtrip_same_pair(cal, std):
    rng = random.Random(1234)
    y0, y1 = (1972, 2200) if std is Standard.UTC else (-10000, 10000)
    for _ in range(300):
        dt = random_datetime(rng, cal, std, y0, y1)
        assert DateTime.from_instant(dt.to_instant(), cal, std) == dt


def test_roundtrip_extreme_years():
    for cal in (G, J):
        for std in (Standard.TT, Standard.TAI):
            for dt in (
                DateTime(cal, std, -(2**31), 1, 1),
                DateTime(cal, std, 2**31 - 1, 12, 31, 23, 59, 59, ATTOS - 1),
            ):
                assert DateTime.from_instant(dt.to_instant(), cal, std) == dt


def test_roundtrip_through_leap_seconds():
    for y, m in [(1972, 6), (1972, 12), (1985, 6), (2005, 12), (2016, 12)]:
        d = days_in_month(G, y, m)
        for s in (58, 59, 60):
            dt = DateTime(G, Standard.UTC, y, m, d, 23, 59, s, 123)
            assert DateTime.from_instant(dt.to_instant(), G, Standard.UTC) == dt


def test_overflow_past_last_year():
    top = DateTime(G, Standard.TT, 2**31 - 1, 12, 31, 23, 59, 59)
    with pytest.raises(TimeOverflowError):
        top + Duration(1)


def test_calendar_conversion():
    reform = DateTime(G, Standard.UTC, 1582, 10, 15, 6, 30)
    assert reform.to_calendar(J) == DateTime(J, Standard.UTC, 1582, 10, 5, 6, 30)
    assert reform.to_calendar(J).to_calendar(G) == reform
    assert DateTime(J, Standard.TT, 2000, 1, 1).to_calendar(G) == DateTime(G, Standard.TT, 2000, 1, 14)


def test_standard_conversion():
    tt = DateTime(G, Standard.TT, 2000, 1, 1, 12)
    assert tt.to_standard(Standard.TAI) == DateTime(G, Standard.TAI, 2000, 1, 1, 11, 59, 27, 816 * 10**15)
    assert tt.to_standard(Standard.UTC) == DateTime(G, Standard.UTC, 2000, 1, 1, 11, 58, 55, 816 * 10**15)
    assert tt.convert(J, Standard.UTC) == DateTime(J, Standard.UTC, 1999, 12, 19, 11, 58, 55, 816 * 10**15)


def test_field_views():
    dt = DateTime(G, Standard.TT, 2000, 12, 31, 1, 2, 3, 4)
    assert dt.date == (2000, 12, 31)
    assert dt.time == (1, 2, 3, 4)
    assert dt.day_of_year == 366
    assert dt.weekday == 7  # Sunday
    assert DateTime(G, Standard.TT, 2000, 1, 1).weekday == 6
    assert dt.day_number == 2451910
    assert DateTime(G, Standard.TT, 2000, 1, 1, 12).julian_day() == 2451545


def test_bc_years():
    dt = DateTime.from_bc_year(J, Standard.TT, 4713, 1, 1, 12)
    assert dt.year == -4712
    assert dt.year_bc == 4713
    assert dt.julian_day() == 0
    assert DateTime.from_bc_year(G, Standard.TT, 1, 1, 1).year == 0


def test_arithmetic_across_leap_second():
    before = DateTime(G, Standard.UTC, 2016, 12, 31, 23, 59, 59)
    assert before + Duration(1) == DateTime(G, Standard.UTC, 2016, 12, 31, 23, 59, 60)
    assert before + Duration(2) == DateTime(G, Standard.UTC, 2017, 1, 1)
    assert DateTime(G, Standard.UTC, 2017, 1, 1) - Duration(2) == before
    day = DateTime(G, Standard.UTC, 2017, 1, 1) - DateTime(G, Standard.UTC, 2016, 12, 31)
    assert day == Duration(86401)
    # TT has no leap seconds
    assert DateTime(G, Standard.TT, 2017, 1, 1) - DateTime(G, Standard.TT, 2016, 12, 31) == Duration(86400)


def test_ordering_within_one_pair_only():
    a = DateTime(G, Standard.TT, 2000, 1, 1)
    b = DateTime(G, Standard.TT, 2000, 1, 1, 0, 0, 0, 1)
    assert a < b and b > a and a <= a and b >= a
    assert a != DateTime(G, Standard.TAI, 2000, 1, 1)
    with pytest.raises(TypeError):
        a < DateTime(G, Standard.TAI, 2000, 1, 2)
    with pytest.raises(TypeError):
        a < DateTime(J, Standard.TT, 2000, 1, 2)
    # negative years order before positive ones
    assert DateTime(G, Standard.TT, -1, 12, 31) < DateTime(G, Standard.TT, 0, 1, 1)


def test_text_forms():
    dt = DateTime(G, Standard.TT, 2000, 1, 1, 12)
    assert str(dt) == "2000-01-01 12:00:00.000000000000000000 Gregorian TT"
    assert dt.isoformat() == "2000-01-01T12:00:00"
    assert DateTime.parse(str(dt)) == dt

    frac = DateTime.parse("2016-12-31T23:59:60.25")
    assert frac == DateTime(G, Standard.UTC, 2016, 12, 31, 23, 59, 60, 250 * 10**15)
    assert frac.isoformat() == "2016-12-31T23:59:60.25"

    old = DateTime.parse("-0044-03-15", J, Standard.TT)
    assert old == DateTime(J, Standard.TT, -44, 3, 15)
    assert old.isoformat() == "-0044-03-15T00:00:00"
    assert DateTime.parse(old.isoformat(), "julian", "tt") == old

    with pytest.raises(ValueError):
        DateTime.parse("yesterday")
    with pytest.raises(ValueError):
        DateTime.parse("2000-01-01 00:00:00 Gregorian TT", J)


def test_normalized_fields():
    assert DateTime.normalized(G, Standard.TT, 2000, 13, 1) == DateTime(G, Standard.TT, 2001, 1, 1)
    assert DateTime.normalized(G, Standard.TT, 2000, 3, 0) == DateTime(G, Standard.TT, 2000, 2, 29)
    assert DateTime.normalized(G, Standard.TT, 2000, 1, 1, -1) == DateTime(G, Standard.TT, 1999, 12, 31, 23)
    assert DateTime.normalized(J, Standard.TT, 2000, 0, 1, 0, 0, 0, -1) == \
        DateTime(J, Standard.TT, 1999, 11, 30, 23, 59, 59, ATTOS - 1)


def test_packed_layout():
    dt = DateTime(G, Standard.UTC, 2016, 12, 31, 23, 59, 60, 7)
    packed = dt.to_packed()
    word = packed >> 64
    assert packed & (2**64 - 1) == 7
    assert word >> 32 == 2016
    assert (word >> 26) & 0x3F == 60
    assert (word >> 10) & 0x1F == 30  # day stored zero-based
    assert word & 0xF == 11           # month stored zero-based
    assert DateTime.from_packed(packed, G, Standard.UTC) == dt

    neg = DateTime(J, Standard.TT, -4712, 1, 1, 12)
    assert DateTime.from_packed(neg.to_packed(), J, Standard.TT) == neg
    with pytest.raises(ValueError):
        DateTime.from_packed(-1, G, Standard.TT)


def test_dict_hooks():
    dt = DateTime(J, Standard.TCB, -100, 2, 29, 1, 2, 3, 4)
    d = dt.to_dict()
    assert d["calendar"] == "julian" and d["standard"] == "TCB"
    assert DateTime.from_dict(d) == dt
