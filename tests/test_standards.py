# tests/test_standards.py

import random

import pytest

from astrotime import (
    AmbiguousOrUnrepresentableError,
    BeforeLeapSecondEpochError,
    Calendar,
    DateTime,
    Duration,
    Instant,
    Standard,
)
from astrotime.core.julian_day import to_seconds
from astrotime.reference.standards import L_B, L_G, TT_MINUS_TAI, Reading, default_converter

G = Calendar.GREGORIAN


def dt(standard, *fields):
    return DateTime(G, standard, *fields)


def test_tt_is_tai_plus_32_184():
    tai = dt(Standard.TAI, 2000, 1, 1)
    tt = tai.to_standard(Standard.TT)
    assert tt == dt(Standard.TT, 2000, 1, 1, 0, 0, 32, 184_000_000_000_000_000)
    assert TT_MINUS_TAI == Duration(32, 184_000_000_000_000_000)


def test_utc_to_tai_uses_table_offset():
    assert dt(Standard.UTC, 1993, 6, 30).to_standard(Standard.TAI) == dt(Standard.TAI, 1993, 6, 30, 0, 0, 27)
    assert dt(Standard.TAI, 1993, 6, 30, 0, 0, 27).to_standard(Standard.UTC) == dt(Standard.UTC, 1993, 6, 30)
    assert dt(Standard.UTC, 2000, 1, 1).to_standard(Standard.TAI) == dt(Standard.TAI, 2000, 1, 1, 0, 0, 32)


def test_leap_second_maps_to_its_own_tai_second():
    before = dt(Standard.UTC, 2016, 12, 31, 23, 59, 59)
    leap = dt(Standard.UTC, 2016, 12, 31, 23, 59, 60)
    after = dt(Standard.UTC, 2017, 1, 1)

    assert before.to_standard(Standard.TAI) == dt(Standard.TAI, 2017, 1, 1, 0, 0, 35)
    assert leap.to_standard(Standard.TAI) == dt(Standard.TAI, 2017, 1, 1, 0, 0, 36)
    assert after.to_standard(Standard.TAI) == dt(Standard.TAI, 2017, 1, 1, 0, 0, 37)

    # continuity: UTC gains a second across the insertion
    assert leap.to_instant() - before.to_instant() == Duration(1)
    assert after.to_instant() - leap.to_instant() == Duration(1)

    # and back, with the fraction preserved
    back = dt(Standard.TAI, 2017, 1, 1, 0, 0, 36, 500_000_000_000_000_000).to_standard(Standard.UTC)
    assert back == dt(Standard.UTC, 2016, 12, 31, 23, 59, 60, 500_000_000_000_000_000)
    assert back.is_leap_second


def test_reading_flag_comes_from_table():
    conv = default_converter()
    tai = dt(Standard.TAI, 2017, 1, 1, 0, 0, 36).to_instant()
    r = conv.from_tt(Standard.UTC, tai)
    assert isinstance(r, Reading)
    assert r.leap_second
    r = conv.from_tt(Standard.UTC, tai + Duration(1))
    assert not r.leap_second


def test_second_60_must_be_recorded():
    with pytest.raises(AmbiguousOrUnrepresentableError):
        dt(Standard.UTC, 2015, 12, 31, 23, 59, 60)
    conv = default_converter()
    label = Instant.from_jd0_seconds(to_seconds(G, 2015, 12, 31, 23, 59, 59))
    with pytest.raises(AmbiguousOrUnrepresentableError):
        conv.utc_to_tai(label, leap_second=True)
    with pytest.raises(ValueError):
        conv.to_tt(Standard.TAI, label, leap_second=True)


def test_utc_before_table_is_refused():
    with pytest.raises(BeforeLeapSecondEpochError):
        dt(Standard.UTC, 1960, 1, 1).to_instant()
    with pytest.raises(BeforeLeapSecondEpochError):
        DateTime.from_instant(dt(Standard.TT, 1960, 1, 1).to_instant(), G, Standard.UTC)
    # but the Unix epoch is covered
    unix = dt(Standard.UTC, 1970, 1, 1).to_instant()
    assert DateTime.from_instant(unix, G, Standard.TAI) == dt(Standard.TAI, 1970, 1, 1, 0, 0, 9)


def test_tt_tcg_tcb_agree_at_reference():
    conv = default_converter()
    t0 = Instant()
    assert conv.tt_to_tcg(t0) == t0
    assert conv.tt_to_tcb(t0) == t0
    assert dt(Standard.TT, 1977, 1, 1, 0, 0, 32, 184_000_000_000_000_000).to_standard(Standard.TCB) == \
        dt(Standard.TCB, 1977, 1, 1, 0, 0, 32, 184_000_000_000_000_000)


def test_tcg_tcb_rates():
    j2000 = Instant.from_julian_day(2451545)
    conv = default_converter()
    tcg_tt = float(conv.tt_to_tcg(j2000) - j2000)
    tcb_tt = float(conv.tt_to_tcb(j2000) - j2000)
    elapsed = float(j2000.offset)
    assert tcg_tt == pytest.approx(elapsed * float(L_G / (1 - L_G)), rel=1e-12)
    assert tcg_tt == pytest.approx(0.5058, abs=1e-3)
    assert tcb_tt == pytest.approx(11.2536, abs=1e-3)
    # both run fast relative to TT after the reference, slow before it
    past = Instant.from_julian_day(2400000)
    assert conv.tt_to_tcg(past) < past
    assert conv.tt_to_tcb(past) < past


def test_tcg_tcb_exact_on_10s_grid():
    # (1 - L) has a power-of-ten denominator, so multiples of 10 s scale exactly
    conv = default_converter()
    for k in (-7_000_000_001, -3, 1, 72_580_316, 10**12):
        label = Instant(Duration(10 * k))
        assert conv.tt_to_tcg(conv.tcg_to_tt(label)) == label
        assert conv.tt_to_tcb(conv.tcb_to_tt(label)) == label


def test_tcg_tcb_roundtrip_within_one_attosecond():
    random.seed(42)
    conv = default_converter()
    one = Duration(0, 1)
    for _ in range(2000):
        x = Instant(Duration.from_attoseconds(random.randint(-10**36, 10**36)))
        for fwd, back in ((conv.tt_to_tcg, conv.tcg_to_tt), (conv.tt_to_tcb, conv.tcb_to_tt)):
            assert abs(back(fwd(x)) - x) <= one


def test_convert_chains_through_tt():
    conv = default_converter()
    label = dt(Standard.UTC, 2012, 6, 30, 23, 59, 59).to_instant()
    # the same instant expressed in every standard and back again
    utc = conv.from_tt(Standard.UTC, label)
    for std in Standard:
        r = conv.convert(Standard.UTC, std, utc.label, utc.leap_second)
        back = conv.convert(std, Standard.UTC, r.label, r.leap_second)
        if std in (Standard.TCG, Standard.TCB):
            assert abs(back.label - utc.label) <= Duration(0, 1)
        else:
            assert back == utc
