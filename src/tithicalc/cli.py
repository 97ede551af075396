from __future__ import annotations

import argparse
import logging
import re
import sys
from datetime import date, datetime


_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _parse_ymd(s: str) -> date:
    y, m, d = map(int, s.split("-"))
    return date(y, m, d)


def _parse_instant(s: str) -> datetime:
    """YYYY-MM-DD or ISO 8601 date-time; naive values are UTC."""
    if _DATE_RE.match(s):
        d = _parse_ymd(s)
        return datetime(d.year, d.month, d.day)
    return datetime.fromisoformat(s)


def _add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument("--ephemeris", default="reference", help="angle oracle name (reference, de422)")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging")


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def cmd_range(argv: list[str]) -> int:
    import tithicalc

    p = argparse.ArgumentParser(prog="tithicalc range", description="List tithi beginning between two dates (UTC)")
    p.add_argument("start", help="YYYY-MM-DD or ISO date-time")
    p.add_argument("end", help="YYYY-MM-DD or ISO date-time")
    p.add_argument("--index", type=int, action="append", default=None, help="keep only this tithi index (repeatable)")
    p.add_argument("--precision", type=float, default=0.001, help="angular tolerance in degrees")
    _add_common(p)
    args = p.parse_args(argv)
    _setup_logging(args.verbose)

    result = tithicalc.find_tithi_in_range(
        _parse_instant(args.start),
        _parse_instant(args.end),
        args.index,
        args.precision,
        ephemeris=args.ephemeris,
    )
    for t in result:
        print(f"{t.index:>2}  {t.timestamp.isoformat(timespec='seconds')}  {t.angle:>3}")
    return 0


def cmd_day(argv: list[str]) -> int:
    import tithicalc

    p = argparse.ArgumentParser(prog="tithicalc day", description="Tithi boundary instants found on one civil day (UTC)")
    p.add_argument("date", help="YYYY-MM-DD")
    p.add_argument("--precision", type=float, default=0.001, help="angular tolerance in degrees")
    _add_common(p)
    args = p.parse_args(argv)
    _setup_logging(args.verbose)

    for instant in tithicalc.find_tithi_by_day(_parse_ymd(args.date), args.precision, ephemeris=args.ephemeris):
        print(instant.isoformat(timespec="seconds"))
    return 0


def cmd_angle(argv: list[str]) -> int:
    import tithicalc

    p = argparse.ArgumentParser(prog="tithicalc angle", description="Moon–Sun separation at an instant (UTC)")
    p.add_argument("instant", help="YYYY-MM-DD or ISO date-time")
    _add_common(p)
    args = p.parse_args(argv)
    _setup_logging(args.verbose)

    t = _parse_instant(args.instant)
    angle = tithicalc.angle_between(t, ephemeris=args.ephemeris)
    index, adjusted = tithicalc.tithi_at(t, ephemeris=args.ephemeris)

    print(f"Separation (deg, 0..180) = {angle:.6f}")
    print(f"Direction-adjusted angle = {adjusted}")
    print(f"Tithi index              = {index}")
    return 0


def main(argv: list[str] | None = None) -> int:
    from tithicalc.core.errors import TithiCalcError

    if argv is None:
        argv = sys.argv[1:]

    p = argparse.ArgumentParser(prog="tithicalc", description="Tithi boundary finder.")
    sub = p.add_subparsers(dest="cmd", required=True)
    sub.add_parser("range", help="List tithi beginning between two dates")
    sub.add_parser("day", help="Tithi boundary instants on one day")
    sub.add_parser("angle", help="Moon–Sun separation at an instant")

    args, rest = p.parse_known_args(argv)
    commands = {"range": cmd_range, "day": cmd_day, "angle": cmd_angle}

    try:
        return commands[args.cmd](rest)
    except (TithiCalcError, KeyError) as e:
        print(f"tithicalc {args.cmd}: error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
