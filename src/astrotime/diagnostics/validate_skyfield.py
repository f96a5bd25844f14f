#!/usr/bin/env python3
"""
Cross-check UTC -> TAI/TT against skyfield's builtin timescale.

skyfield keeps Julian dates as floats, so agreement is only expected to
about 1e-5 s. Dates before 1972 are skipped: skyfield models the pre-1972
rubber-second era, which astrotime does not.
"""
from __future__ import annotations

import argparse
import random
from fractions import Fraction
from typing import List, Optional, Tuple

from astrotime import Calendar, DateTime, Standard

SECONDS_PER_DAY = 86400.0


def _need_skyfield():
    try:
        from skyfield.api import load
        return load
    except ImportError as e:
        raise RuntimeError('Need skyfield. Install: pip install "astrotime[validation]"') from e


def load_timescale():
    load = _need_skyfield()
    return load.timescale(builtin=True)


def compare_utc(ts, dt: DateTime) -> Tuple[float, float]:
    """(TAI error, TT error) in seconds for one Gregorian UTC value."""
    sec = dt.second + dt.attosecond / 1e18
    t = ts.utc(dt.year, dt.month, dt.day, dt.hour, dt.minute, sec)
    inst = dt.to_instant()
    tai = inst.julian_day(Standard.TAI)
    tt = inst.julian_day(Standard.TT)
    # skyfield splits JDs into whole + fraction; compare fractions only
    whole = Fraction(float(t.whole))
    err_tai = (float(tai - whole) - float(t.tai_fraction)) * SECONDS_PER_DAY
    err_tt = (float(tt - whole) - float(t.tt_fraction)) * SECONDS_PER_DAY
    return err_tai, err_tt


def random_utc(rng: random.Random, y0: int, y1: int) -> DateTime:
    y = rng.randint(y0, y1)
    m = rng.randint(1, 12)
    d = rng.randint(1, 28)
    return DateTime(
        Calendar.GREGORIAN, Standard.UTC, y, m, d,
        rng.randint(0, 23), rng.randint(0, 59), rng.randint(0, 59), rng.randrange(10**18),
    )


def run(N: int, y0: int, y1: int, seed: int, tol: float) -> List[Tuple[DateTime, float, float]]:
    ts = load_timescale()
    rng = random.Random(seed)
    bad = []
    for _ in range(N):
        dt = random_utc(rng, max(y0, 1972), y1)
        e_tai, e_tt = compare_utc(ts, dt)
        if abs(e_tai) > tol or abs(e_tt) > tol:
            bad.append((dt, e_tai, e_tt))
    return bad


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Compare astrotime UTC->TAI/TT with skyfield.")
    p.add_argument("--N", type=int, default=500)
    p.add_argument("--start-year", type=int, default=1972)
    p.add_argument("--end-year", type=int, default=2025)
    p.add_argument("--seed", type=int, default=7)
    p.add_argument("--tol", type=float, default=1e-4, help="Tolerance in seconds.")
    args = p.parse_args(argv)

    bad = run(args.N, args.start_year, args.end_year, args.seed, args.tol)
    for dt, e_tai, e_tt in bad[:20]:
        print(f"MISMATCH {dt}: dTAI={e_tai:+.3e} s  dTT={e_tt:+.3e} s")
    print(f"checked={args.N}  mismatches={len(bad)}  tol={args.tol:g} s")
    return 1 if bad else 0


if __name__ == "__main__":
    raise SystemExit(main())
