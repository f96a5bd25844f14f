import random

import pytest

from astrotime import Calendar, DateTime, Standard

pytest.importorskip("skyfield")

from astrotime.diagnostics import validate_skyfield as vs  # noqa: E402


@pytest.fixture(scope="module")
def ts():
    return vs.load_timescale()


@pytest.mark.parametrize(
    "fields",
    [
        (1972, 1, 1),
        (1993, 6, 30, 12),
        (2000, 1, 1, 12),
        (2016, 12, 31, 23, 59, 59),
        (2017, 1, 1),
        (2024, 2, 29, 6, 30, 15),
    ],
)
def test_known_dates_match_skyfield(ts, fields):
    dt = DateTime(Calendar.GREGORIAN, Standard.UTC, *fields)
    e_tai, e_tt = vs.compare_utc(ts, dt)
    assert abs(e_tai) < 1e-3
    assert abs(e_tt) < 1e-3


def test_random_dates_match_skyfield(ts):
    rng = random.Random(2024)
    for _ in range(200):
        dt = vs.random_utc(rng, 1972, 2016)
        e_tai, e_tt = vs.compare_utc(ts, dt)
        assert abs(e_tai) < 1e-3, dt
        assert abs(e_tt) < 1e-3, dt
