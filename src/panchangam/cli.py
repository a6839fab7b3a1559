from __future__ import annotations

import argparse
import importlib
import inspect
import logging
import re
import sys
from datetime import date, datetime, timezone
from typing import Optional


_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

# Hyderabad
DEFAULT_LAT = 17.385
DEFAULT_LNG = 78.4867
DEFAULT_TZ = 5.5


def _parse_ymd(s: str) -> date:
    y, m, d = map(int, s.split("-"))
    return date(y, m, d)


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


def add_location_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--lat", type=float, default=DEFAULT_LAT, help="Latitude in degrees (north positive)")
    p.add_argument("--lng", type=float, default=DEFAULT_LNG, help="Longitude in degrees (east positive)")
    p.add_argument("--elevation", type=float, default=0.0, help="Elevation in metres")
    p.add_argument("--tz", type=float, default=DEFAULT_TZ, help="UTC offset in hours for printed times")


def _location(args):
    from panchangam import Location
    return Location(lat=args.lat, lng=args.lng, elevation=args.elevation)


def _hm(dt: Optional[datetime]) -> str:
    return dt.strftime("%Y-%m-%d %H:%M") if dt is not None else "-"


def _print_anga(label: str, ev) -> None:
    flag = "" if ev.status == "normal" else f"  [{ev.status}]"
    print(f"  {label:<10}{ev.name:<14}{_hm(ev.start)} -> {_hm(ev.end)}{flag}")


def cmd_day(argv: list[str]) -> int:
    import panchangam

    p = argparse.ArgumentParser(prog="panchangam day", description="Gregorian date -> panchangam of the day")
    p.add_argument("date", help="YYYY-MM-DD")
    p.add_argument("--engine", default=None)
    p.add_argument("--attr", action="append", default=[], help="attribute name (repeatable)")
    add_location_args(p)
    args = p.parse_args(argv)

    day = panchangam.day_panchangam(
        _parse_ymd(args.date), _location(args),
        tz_offset=args.tz, engine=args.engine, attributes=tuple(args.attr),
    )
    masa = day.lunar_masa
    masa_label = "-" if masa is None else (("Adhika " if masa.is_leap else "") + masa.name)

    print(f"{day.civil_date.isoformat()}  {day.weekday_name}  (engine: {day.engine})")
    print(f"  Sunrise   {_hm(day.sun.sunrise)}   Sunset {_hm(day.sun.sunset)}")
    print(f"  Moonrise  {_hm(day.moon.rise)}   Moonset {_hm(day.moon.set)}")
    print(f"  Samvatsara {day.cycle_year or '-'}  Ayana {day.ayana}  Ritu {day.ritu or '-'} (drik {day.drik_ritu})")
    print(f"  Masa      {masa_label}  Paksha {day.paksha}  Solar month {day.solar_masa}")
    _print_anga("Tithi", day.tithi)
    _print_anga("Nakshatra", day.nakshatra)
    _print_anga("Yoga", day.yoga)
    _print_anga("Karana", day.karana)
    print(f"  Raasi     {day.raasi}")
    print(f"  Sun {day.sun_longitude:.4f}  Moon {day.moon_longitude:.4f}  Ayanamsa {day.ayanamsa:.4f}")
    for k, v in (day.attributes or {}).items():
        print(f"  {k}: {v}")
    return 0


def cmd_sun(argv: list[str]) -> int:
    import panchangam

    p = argparse.ArgumentParser(prog="panchangam sun", description="Sunrise, sunset and twilight times")
    p.add_argument("date", help="YYYY-MM-DD")
    add_location_args(p)
    args = p.parse_args(argv)

    st = panchangam.sun_times(_parse_ymd(args.date), _location(args), tz_offset=args.tz)
    for field in ("night_end", "nautical_dawn", "dawn", "sunrise", "sunrise_end", "solar_noon",
                  "sunset_start", "sunset", "dusk", "nautical_dusk", "night", "nadir"):
        print(f"  {field:<14}{_hm(getattr(st, field))}")
    return 0


def cmd_moon(argv: list[str]) -> int:
    import panchangam

    p = argparse.ArgumentParser(prog="panchangam moon", description="Moonrise and moonset")
    p.add_argument("date", help="YYYY-MM-DD")
    add_location_args(p)
    args = p.parse_args(argv)

    mt = panchangam.moon_times(_parse_ymd(args.date), _location(args), tz_offset=args.tz)
    print(f"  rise  {_hm(mt.rise)}")
    print(f"  set   {_hm(mt.set)}")
    if mt.always_up:
        print("  (moon above the horizon all day)")
    if mt.always_down:
        print("  (moon below the horizon all day)")
    return 0


def cmd_lookup(argv: list[str]) -> int:
    import panchangam

    p = argparse.ArgumentParser(prog="panchangam lookup", description="Masa/paksha/tithi -> Gregorian date(s)")
    p.add_argument("year", type=int)
    p.add_argument("masa", help='e.g. "Chaitra", "Adhika Shravana"')
    p.add_argument("paksha", help="Shukla or Krishna")
    p.add_argument("tithi", help='e.g. "Vidhiya", "Pournami"')
    p.add_argument("--engine", default=None)
    p.add_argument("--strict", action="store_true", help="drop matches resolved from the solar month")
    add_location_args(p)
    args = p.parse_args(argv)

    dates = panchangam.find_dates(
        args.year, args.masa, args.paksha, args.tithi, _location(args),
        engine=args.engine, include_provisional=not args.strict,
    )
    if not dates:
        print("no match")
        return 1
    for d in dates:
        print(d.isoformat())
    return 0


def cmd_new_year(argv: list[str]) -> int:
    import panchangam

    p = argparse.ArgumentParser(prog="panchangam new-year", description="Ugadi date and samvatsara name")
    p.add_argument("year", type=int)
    p.add_argument("--engine", default=None)
    add_location_args(p)
    args = p.parse_args(argv)

    loc = _location(args)
    d = panchangam.new_year_day(args.year, loc, engine=args.engine)
    if d is None:
        print("not found")
        return 1
    print(f"{d.isoformat()}  {panchangam.cycle_year_name(d, loc, engine=args.engine, new_year=d)}")
    return 0


def cmd_eclipses(argv: list[str]) -> int:
    import panchangam
    from panchangam.eclipses import eclipse_title

    p = argparse.ArgumentParser(prog="panchangam eclipses", description="Solar and lunar eclipses")
    g = p.add_mutually_exclusive_group(required=True)
    g.add_argument("--year", type=int)
    g.add_argument("--after", help="YYYY-MM-DD; print the next eclipse after this UT date")
    args = p.parse_args(argv)

    if args.after:
        d = _parse_ymd(args.after)
        events = [panchangam.next_eclipse(datetime(d.year, d.month, d.day, tzinfo=timezone.utc))]
    else:
        events = panchangam.eclipses_in_year(args.year)
    for ev in events:
        print(f"{ev.peak.strftime('%Y-%m-%d %H:%M:%S')} UT  {eclipse_title(ev)}")
    return 0


def cmd_engines(argv: list[str]) -> int:
    import panchangam

    p = argparse.ArgumentParser(prog="panchangam engines", description="List registered engines")
    p.add_argument("--info", action="store_true")
    args = p.parse_args(argv)

    for name in panchangam.list_engines():
        print(name)
        if args.info:
            for k, v in panchangam.engine_info(name).items():
                print(f"    {k}: {v}")
    return 0


def cmd_positions(argv: list[str]) -> int:
    from panchangam.reference import astro_args as aa
    from panchangam.reference import lunar, solar
    from panchangam.reference.deltat import delta_t_seconds, decimal_year_from_jd
    from panchangam.reference.time_scales import jd_ut_to_jd_tt

    p = argparse.ArgumentParser(prog="panchangam positions", description="Apparent Sun/Moon positions at a JD(UT).")
    p.add_argument("--jd-ut", type=float, default=2451545.0, help="Julian Date in UT (default: J2000.0)")
    args = p.parse_args(argv)

    jd_ut = args.jd_ut
    jd_tt = jd_ut_to_jd_tt(jd_ut)
    sun = solar.solar_longitude(jd_tt)
    moon = lunar.lunar_position(jd_tt)

    print(f"JD_UT = {jd_ut:.6f}")
    print(f"JD_TT = {jd_tt:.6f}  (Delta T = {delta_t_seconds(decimal_year_from_jd(jd_ut)):.2f} s)")
    print()
    print("Sun (tropical, degrees)")
    print(f"  Apparent longitude = {sun.L_app_deg:.6f}")
    print(f"  Speed (deg/day)    = {sun.speed_deg_per_day:.6f}")
    print()
    print("Moon (tropical, degrees)")
    print(f"  Apparent longitude = {moon.L_app_deg:.6f}")
    print(f"  Latitude           = {moon.B_deg:.6f}")
    print(f"  Distance (km)      = {moon.distance_km:.1f}")
    print(f"  Speed (deg/day)    = {moon.speed_deg_per_day:.6f}")
    print()
    print(f"Elongation = {(moon.L_app_deg - sun.L_app_deg) % 360.0:.6f}")
    print(f"Mean obliquity = {aa.mean_obliquity_deg(aa.T_centuries(jd_tt)):.6f}")
    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    # Shorthand: `panchangam YYYY-MM-DD ...`
    if argv and _DATE_RE.match(argv[0]):
        return cmd_day(argv)

    p = argparse.ArgumentParser(prog="panchangam", description="Hindu panchangam toolkit CLI.")
    p.add_argument("--verbose", "-v", action="count", default=0, help="log to stderr (-vv for debug)")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("day", help="Gregorian date -> panchangam of the day")
    sub.add_parser("sun", help="Sunrise, sunset and twilight times")
    sub.add_parser("moon", help="Moonrise and moonset")
    sub.add_parser("lookup", help="Masa/paksha/tithi -> Gregorian date(s)")
    sub.add_parser("new-year", help="Ugadi date and samvatsara name")
    sub.add_parser("eclipses", help="Solar and lunar eclipses (needs pyswisseph)")
    sub.add_parser("engines", help="List registered engines")
    sub.add_parser("positions", help="Apparent Sun/Moon positions at a JD(UT)")

    # diagnostics
    sub.add_parser("pretty-month", help="Print a Gregorian month with its tithis (diagnostics)")
    sub.add_parser("new-years", help="Print Ugadi table per engine (diagnostics)")
    p_diag = sub.add_parser("diag", help="Diagnostics tools")
    p_diag.add_argument("tool", choices=["compare-models"], help="Which diagnostic to run")
    p_ephem = sub.add_parser("ephem", help="Ephemeris-based diagnostics")
    p_ephem.add_argument("tool", choices=["validate-positions"], help="Which ephemeris diagnostic to run")

    args, rest = p.parse_known_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG if args.verbose > 1 else logging.INFO,
            format="%(levelname)s %(name)s: %(message)s",
        )

    commands = {
        "day": cmd_day,
        "sun": cmd_sun,
        "moon": cmd_moon,
        "lookup": cmd_lookup,
        "new-year": cmd_new_year,
        "eclipses": cmd_eclipses,
        "engines": cmd_engines,
        "positions": cmd_positions,
    }
    if args.cmd in commands:
        return commands[args.cmd](rest)

    if args.cmd == "pretty-month":
        return _run_module_main("panchangam.diagnostics.pretty_month", rest)

    if args.cmd == "new-years":
        return _run_module_main("panchangam.diagnostics.new_years_table", rest)

    if args.cmd == "diag":
        tool_map = {
            "compare-models": "panchangam.diagnostics.compare_models",
        }
        return _run_module_main(tool_map[args.tool], rest)

    if args.cmd == "ephem":
        tool_map = {
            "validate-positions": "panchangam.diagnostics.ephem.validate_positions",
        }
        return _run_module_main(tool_map[args.tool], rest)

    raise RuntimeError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
