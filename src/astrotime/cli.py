from __future__ import annotations

import argparse
import importlib
import inspect
import logging
import sys
import time
from fractions import Fraction

from .core.errors import AstrotimeError

log = logging.getLogger(__name__)


def _run_module_main(modpath: str, argv: list[str]) -> int:
    """
    Import module and run its main().

    Supports:
      - main(argv: list[str] | None = None) -> int|None
      - main() -> int|None
    """
    mod = importlib.import_module(modpath)
    if not hasattr(mod, "main"):
        raise SystemExit(f"Module {modpath} has no main()")
    fn = getattr(mod, "main")

    sig = inspect.signature(fn)
    if len(sig.parameters) == 0:
        rv = fn()
    else:
        rv = fn(argv)
    return int(rv or 0)


def _add_frame_args(p: argparse.ArgumentParser, *, prefix: str = "", default_standard: str = "UTC") -> None:
    p.add_argument(f"--{prefix}calendar", default=None, choices=["gregorian", "julian"],
                   help="Calendar (default: from the text, else gregorian)")
    p.add_argument(f"--{prefix}standard", default=None, type=str.upper,
                   choices=["UTC", "TAI", "TT", "TCG", "TCB"],
                   help=f"Time standard (default: from the text, else {default_standard})")


def cmd_convert(argv: list[str]) -> int:
    from .core.date_time import DateTime

    p = argparse.ArgumentParser(prog="astrotime convert",
                                description="Convert a date/time between calendars and time standards.")
    p.add_argument("datetime", help="[-]YYYY-MM-DD[THH:MM:SS[.f]] [Calendar Standard]")
    _add_frame_args(p)
    p.add_argument("--to-calendar", default=None, choices=["gregorian", "julian"])
    p.add_argument("--to-standard", default=None, type=str.upper, choices=["UTC", "TAI", "TT", "TCG", "TCB"])
    p.add_argument("--iso", action="store_true", help="Print ISO 8601 instead of the long form")
    args = p.parse_args(argv)

    dt = DateTime.parse(args.datetime, args.calendar, args.standard)
    out = dt.convert(args.to_calendar or dt.calendar, args.to_standard or dt.standard)
    print(out.isoformat() if args.iso else out)
    return 0


def cmd_jd(argv: list[str]) -> int:
    from .core.date_time import DateTime
    from .core.instant import Instant
    from .core.types import Calendar, Standard

    p = argparse.ArgumentParser(prog="astrotime jd",
                                description="Date/time -> Julian Day, or Julian Day -> date/time (--reverse).")
    p.add_argument("value", help="date/time text, or a Julian Day with --reverse (e.g. 2451545 or 2448349.0625)")
    _add_frame_args(p)
    p.add_argument("--reverse", action="store_true", help="Interpret value as a Julian Day")
    args = p.parse_args(argv)

    if args.reverse:
        std = Standard(args.standard or "TT")
        cal = Calendar(args.calendar or "gregorian")
        inst = Instant.from_julian_day(Fraction(args.value), std)
        print(DateTime.from_instant(inst, cal, std))
        return 0

    dt = DateTime.parse(args.value, args.calendar, args.standard)
    print(f"{dt.to_instant().julian_day_formatted(dt.standard)} {dt.standard.abbrev}")
    return 0


def cmd_epochs(argv: list[str]) -> int:
    from .core.date_time import DateTime
    from .core.epochs import ALL_EPOCHS
    from .core.types import Calendar, Standard

    p = argparse.ArgumentParser(prog="astrotime epochs", description="List well-known epochs.")
    p.add_argument("--standard", default="TT", type=str.upper, choices=["UTC", "TAI", "TT", "TCG", "TCB"],
                   help="Standard for the date column (default: TT)")
    args = p.parse_args(argv)

    std = Standard(args.standard)
    print(f"{'epoch':<18} {'since reference':<32} {'JD (TT)':<32} date ({std.abbrev})")
    for name, inst in ALL_EPOCHS.items():
        try:
            shown = str(DateTime.from_instant(inst, Calendar.GREGORIAN, std))
        except AstrotimeError as e:
            shown = f"n/a ({e.__class__.__name__})"
        print(f"{name:<18} {str(inst.offset):<32} {inst.julian_day_formatted():<32} {shown}")
    return 0


def cmd_leaps(argv: list[str]) -> int:
    from .core.date_time import DateTime
    from .reference.leap_seconds import current_table

    p = argparse.ArgumentParser(prog="astrotime leaps", description="Show the leap-second table.")
    p.add_argument("--at", default=None, help="UTC date/time: print TAI-UTC and leap seconds elapsed there")
    args = p.parse_args(argv)

    table = current_table()
    if args.at:
        dt = DateTime.parse(args.at, None, "UTC")
        inst = dt.to_instant()
        # inside a leap second the previous offset still applies
        offset = table.entry_for_tai(_tai_label(inst)).tai_minus_utc
        print(f"{dt}: TAI-UTC = {offset} s, leap seconds elapsed = {table.leap_seconds_elapsed_at(inst)}")
        return 0

    print(f"source:  {table.source}")
    if table.expires:
        y, m, d = table.expires
        print(f"expires: {y:04d}-{m:02d}-{d:02d}")
    for e in table:
        print(f"  {e.year:04d}-{e.month:02d}-{e.day:02d}  TAI-UTC = {e.tai_minus_utc:2d} s")
    return 0


def _tai_label(inst):
    from .reference.standards import default_converter
    return default_converter().tt_to_tai(inst)


def cmd_now(argv: list[str]) -> int:
    from .core.instant import Instant
    from .core.types import Calendar, Standard

    p = argparse.ArgumentParser(prog="astrotime now", description="Print the current time in every standard.")
    p.add_argument("--calendar", default="gregorian", choices=["gregorian", "julian"])
    args = p.parse_args(argv)

    ns = time.time_ns()
    inst = Instant.from_unix_time(ns // 10**9, ns % 10**9)
    cal = Calendar(args.calendar)
    for std in Standard:
        print(inst.to_datetime(cal, std))
    print(inst.julian_day_formatted(Standard.TT), "TT")
    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    p = argparse.ArgumentParser(prog="astrotime", description="High-precision astronomical time toolkit.")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("convert", help="Convert between calendars and time standards")
    sub.add_parser("jd", help="Date/time <-> Julian Day")
    sub.add_parser("epochs", help="List well-known epochs")
    sub.add_parser("leaps", help="Show the leap-second table")
    sub.add_parser("now", help="Current time in every standard")

    p_diag = sub.add_parser("diag", help="Diagnostics tools")
    p_diag.add_argument(
        "tool",
        choices=["round-trip", "plot-offsets", "validate-skyfield"],
        help="Which diagnostic to run",
    )

    args, rest = p.parse_known_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    commands = {
        "convert": cmd_convert,
        "jd": cmd_jd,
        "epochs": cmd_epochs,
        "leaps": cmd_leaps,
        "now": cmd_now,
    }

    try:
        if args.cmd == "diag":
            tool_map = {
                "round-trip": "astrotime.diagnostics.round_trip",
                "plot-offsets": "astrotime.diagnostics.plot_offsets",
                "validate-skyfield": "astrotime.diagnostics.validate_skyfield",
            }
            return _run_module_main(tool_map[args.tool], rest)
        return commands[args.cmd](rest)
    except (AstrotimeError, ValueError) as e:
        log.debug("command failed", exc_info=True)
        print(f"astrotime {args.cmd}: error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
