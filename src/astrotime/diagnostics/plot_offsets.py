#!/usr/bin/env python3
from __future__ import annotations

import argparse
from typing import List, Optional, Tuple

from astrotime import Calendar, DateTime, Duration, Instant, Standard, current_table
from astrotime.reference.standards import default_converter


def _need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise RuntimeError('Need numpy. Install: pip install "astrotime[diagnostics]"') from e


def _need_matplotlib():
    try:
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "astrotime[diagnostics]"') from e


def sample_instants(y0: int, y1: int, step_days: int) -> List[Instant]:
    start = DateTime(Calendar.GREGORIAN, Standard.TT, y0, 1, 1).to_instant()
    end = DateTime(Calendar.GREGORIAN, Standard.TT, y1, 1, 1).to_instant()
    step = Duration(step_days * 86400)
    out = []
    t = start
    while t < end:
        out.append(t)
        t = t + step
    return out


def build_series(np, instants: List[Instant]) -> Tuple["np.ndarray", "np.ndarray", "np.ndarray", "np.ndarray"]:
    conv = default_converter()
    first = current_table().first.tai
    years = np.empty(len(instants), dtype=float)
    tai_utc = np.full(len(instants), np.nan)
    tcg_tt = np.empty(len(instants), dtype=float)
    tcb_tt = np.empty(len(instants), dtype=float)

    for i, t in enumerate(instants):
        years[i] = 2000.0 + float(t.julian_day() - 2451545) / 365.25
        tai = conv.tt_to_tai(t)
        # NaN before the table starts
        if tai >= first:
            tai_utc[i] = float(tai - conv.tai_to_utc(tai).label)
        tcg_tt[i] = float(conv.tt_to_tcg(t) - t)
        tcb_tt[i] = float(conv.tt_to_tcb(t) - t)
    return years, tai_utc, tcg_tt, tcb_tt


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Plot TAI-UTC, TCG-TT and TCB-TT over a range of years.")
    p.add_argument("--start-year", type=int, default=1960)
    p.add_argument("--end-year", type=int, default=2030)
    p.add_argument("--step-days", type=int, default=30)
    p.add_argument("--outbase", default="standard_offsets", help="Output base name (writes .png)")
    args = p.parse_args(argv)

    np = _need_numpy()
    plt = _need_matplotlib()

    instants = sample_instants(args.start_year, args.end_year, args.step_days)
    years, tai_utc, tcg_tt, tcb_tt = build_series(np, instants)

    fig, axes = plt.subplots(2, 1, figsize=(9.2, 6.4), sharex=True, constrained_layout=True)

    ax = axes[0]
    ax.grid(True, color="0.88", linewidth=0.7)
    ax.step(years, tai_utc, where="post", color="tab:blue", linewidth=1.4)
    ax.set_ylabel("TAI - UTC [s]")
    ax.set_title(f"Leap-second schedule ({current_table().source})")

    ax = axes[1]
    ax.grid(True, color="0.88", linewidth=0.7)
    ax.plot(years, tcg_tt, color="tab:green", linewidth=1.4, label="TCG - TT")
    ax.plot(years, tcb_tt, color="tab:red", linewidth=1.4, label="TCB - TT")
    ax.axvline(1977.0, color="0.45", linewidth=0.8, linestyle="--")
    ax.set_ylabel("offset [s]")
    ax.set_xlabel("year (TT)")
    ax.legend(loc="upper left", frameon=False)

    outbase = args.outbase
    fig.savefig(outbase + ".png", dpi=200)
    print(f"Saved: {outbase}.png")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
