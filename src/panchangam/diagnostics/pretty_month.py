from __future__ import annotations

from datetime import date, timedelta
import calendar as pycal
import argparse

import panchangam
from panchangam import Location


def dow_header() -> str:
    return "Su     Mo     Tu     We     Th     Fr     Sa"


def cell(top: str, bot: str, w: int = 6) -> tuple[str, str]:
    return (top[:w].ljust(w), bot[:w].ljust(w))


def print_grid(title: str, weeks: list[list[tuple[str, str]]]) -> None:
    print(title)
    print(dow_header())
    print("-" * len(dow_header()))
    for wk in weeks:
        print(" ".join(c[0] for c in wk))
        print(" ".join(c[1] for c in wk))
    print()


def tithi_label(day) -> str:
    """S1..S15 / K1..K15, with '-' marking a kshaya and '+' a vriddhi tithi."""
    i = day.tithi.index
    tag = {"kshaya": "-", "vriddhi": "+"}.get(day.tithi.status, "")
    return f"{'S' if i < 15 else 'K'}{i % 15 + 1}{tag}"


def gregorian_month_calendar(engine: str, gy: int, gm: int, loc: Location, tz: float) -> None:
    first = date(gy, gm, 1)
    last = date(gy, gm, pycal.monthrange(gy, gm)[1])

    weeks: list[list[tuple[str, str]]] = []
    wk: list[tuple[str, str]] = []
    pad = (first.weekday() + 1) % 7  # Sunday=0
    for _ in range(pad):
        wk.append(cell("", ""))

    months = []
    ny = panchangam.new_year_day(gy, loc, engine=engine)
    d = first
    while d <= last:
        day = panchangam.day_panchangam(d, loc, tz_offset=tz, engine=engine, new_year=ny)
        m = day.lunar_masa
        if m is not None and (m.name, m.is_leap) not in months:
            months.append((m.name, m.is_leap))
        wk.append(cell(f"{d.day:2d}", tithi_label(day)))
        if len(wk) == 7:
            weeks.append(wk)
            wk = []
        d += timedelta(days=1)
    if wk:
        while len(wk) < 7:
            wk.append(cell("", ""))
        weeks.append(wk)

    masas = " / ".join(("Adhika " if leap else "") + name for name, leap in months)
    print_grid(f"{engine} Gregorian month  {gy}-{gm:02d}   ({masas})", weeks)


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Print a Gregorian month calendar with the sunrise tithi of each day.")
    p.add_argument("--engine", default="drik", help="drik|surya_siddhanta (default: drik)")
    p.add_argument("--greg", nargs=2, type=int, metavar=("GY", "GM"),
                   help="Gregorian month to print: GY GM (e.g. 2025 3)")
    p.add_argument("--lat", type=float, default=17.385)
    p.add_argument("--lng", type=float, default=78.4867)
    p.add_argument("--tz", type=float, default=5.5)
    args = p.parse_args(argv)

    loc = Location(lat=args.lat, lng=args.lng)
    if not args.greg:
        today = date.today()
        gregorian_month_calendar(args.engine, today.year, today.month, loc, args.tz)
        return 0

    gy, gm = args.greg
    gregorian_month_calendar(args.engine, gy, gm, loc, args.tz)
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
