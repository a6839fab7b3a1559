from __future__ import annotations

from datetime import date
import argparse
from typing import List, Tuple

import panchangam
from panchangam import Location


DEFAULT_ENGINES: List[Tuple[str, str]] = [
    ("Drik", "drik"),
    ("Surya", "surya_siddhanta"),
]


def mmdd(d: date) -> str:
    return f"{d.month:02d}-{d.day:02d}"


def parse_engines(arg: str) -> List[Tuple[str, str]]:
    """
    Parse engine list from CLI.
    Example:
      --engines "Drik=drik,Surya=surya_siddhanta"
    If you pass just engines, names will be capitalized engines:
      --engines "drik"
    """
    items = [x.strip() for x in arg.split(",") if x.strip()]
    out: List[Tuple[str, str]] = []
    for it in items:
        if "=" in it:
            name, eng = it.split("=", 1)
            out.append((name.strip(), eng.strip()))
        else:
            out.append((it.capitalize(), it))
    return out


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(
        description="Print Ugadi (Chaitra Shukla Padyami) dates for several engines."
    )
    p.add_argument("--from-year", type=int, default=2020)
    p.add_argument("--to-year", type=int, default=2030)
    p.add_argument("--engines", type=str, default="", help='Comma list like "Drik=drik,Surya=surya_siddhanta".')
    p.add_argument("--dates", choices=("mmdd", "iso"), default="mmdd")
    p.add_argument("--lat", type=float, default=17.385)
    p.add_argument("--lng", type=float, default=78.4867)
    p.add_argument("--names", action="store_true", help="Append the samvatsara name of the first engine.")
    args = p.parse_args(argv)

    engines = parse_engines(args.engines) if args.engines else DEFAULT_ENGINES
    loc = Location(lat=args.lat, lng=args.lng)

    def fmt(d) -> str:
        if d is None:
            return "-"
        return mmdd(d) if args.dates == "mmdd" else d.isoformat()

    Y0, Y1 = args.from_year, args.to_year
    if Y1 < Y0:
        raise SystemExit("--to-year must be >= --from-year")

    headers = ["Year"] + [name for name, _ in engines]
    colw = [5] + [max(10 if args.dates == "iso" else 6, len(h)) for h in headers[1:]]
    line = "  ".join(h.ljust(w) for h, w in zip(headers, colw))
    print(line)
    print("-" * len(line))

    disagreements = 0
    for Y in range(Y0, Y1 + 1):
        row = [str(Y).ljust(colw[0])]
        found = []
        for (_, eng), w in zip(engines, colw[1:]):
            d = panchangam.new_year_day(Y, loc, engine=eng)
            found.append(d)
            row.append(fmt(d).ljust(w))
        if len(set(found)) > 1:
            disagreements += 1
        if args.names and found[0] is not None:
            row.append(panchangam.cycle_year_name(found[0], loc, engine=engines[0][1], new_year=found[0]) or "")
        print("  ".join(row))

    print(f"\nYears where engines disagree: {disagreements}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
