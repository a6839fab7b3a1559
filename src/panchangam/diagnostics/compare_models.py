#!/usr/bin/env python3
"""
Compare the classical (Surya Siddhanta) position model with the drik model:
longitude residuals over a span of years, and how often the sunrise tithi
of a civil day differs between the two engines.
"""
from __future__ import annotations

import argparse
from datetime import date, timedelta
from typing import List, Optional

import panchangam
from panchangam import Location
from panchangam.core.time import to_julian, wrap180
from panchangam.engines.classical import ClassicalModel, ClassicalParams
from panchangam.engines.drik import DrikModel, DrikParams


def _need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise RuntimeError('Need numpy. Install: pip install "panchangam[diagnostics]"') from e


def _need_matplotlib():
    try:
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "panchangam[diagnostics]"') from e


def tithi_disagreement(year: int, loc: Location) -> float:
    """Fraction of days in `year` whose sunrise tithi differs between the engines."""
    d = date(year, 1, 1)
    n = diff = 0
    ny = {e: panchangam.new_year_day(year, loc, engine=e) for e in ("drik", "surya_siddhanta")}
    while d.year == year:
        a = panchangam.day_panchangam(d, loc, engine="drik", new_year=ny["drik"]).sunrise_tithi_index
        b = panchangam.day_panchangam(d, loc, engine="surya_siddhanta", new_year=ny["surya_siddhanta"]).sunrise_tithi_index
        diff += int(a != b)
        n += 1
        d += timedelta(days=1)
    return diff / n


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Residuals of the classical model against the drik model.")
    p.add_argument("--year-start", type=int, default=1900)
    p.add_argument("--year-end", type=int, default=2100)
    p.add_argument("--step-days", type=float, default=3.7)
    p.add_argument("--tithi-year", type=int, default=None, help="also count sunrise tithi disagreements in this year")
    p.add_argument("--out-png", default="model_comparison.png")
    args = p.parse_args(argv)

    np = _need_numpy()
    plt = _need_matplotlib()

    drik = DrikModel(DrikParams())
    classical = ClassicalModel(ClassicalParams())

    jds = np.arange(to_julian(1, 1, args.year_start), to_julian(1, 1, args.year_end), args.step_days)
    years = args.year_start + (jds - jds[0]) / 365.2425

    d_sun = np.empty_like(jds)
    d_moon = np.empty_like(jds)
    d_ayan = np.empty_like(jds)
    for i, jd in enumerate(jds):
        a = drik.state(float(jd))
        b = classical.state(float(jd))
        d_sun[i] = wrap180(b.sun_sidereal - a.sun_sidereal)
        d_moon[i] = wrap180(b.moon_sidereal - a.moon_sidereal)
        d_ayan[i] = b.ayanamsa - a.ayanamsa

    print(f"Sun  (sidereal): mean {np.mean(d_sun):+.3f} deg, max |d| {np.max(np.abs(d_sun)):.3f}")
    print(f"Moon (sidereal): mean {np.mean(d_moon):+.3f} deg, max |d| {np.max(np.abs(d_moon)):.3f}")
    print(f"Ayanamsa       : {d_ayan[0]:+.3f} .. {d_ayan[-1]:+.3f} deg")

    if args.tithi_year is not None:
        frac = tithi_disagreement(args.tithi_year, Location(lat=17.385, lng=78.4867))
        print(f"Sunrise tithi differs on {100.0 * frac:.1f}% of days in {args.tithi_year}")

    fig, axs = plt.subplots(3, 1, figsize=(12, 10), sharex=True)
    for ax, y, title, color in (
        (axs[0], d_sun, "Sidereal Sun: classical - drik", "orange"),
        (axs[1], d_moon, "Sidereal Moon: classical - drik", "blue"),
        (axs[2], d_ayan, "Ayanamsa: classical - drik", "green"),
    ):
        ax.scatter(years, y, s=1, alpha=0.5, color=color)
        ax.set_title(title)
        ax.set_ylabel("deg")
        ax.grid(True, alpha=0.3)
    axs[2].set_xlabel("Year")

    plt.tight_layout()
    plt.savefig(args.out_png, dpi=200)
    print(f"Plot saved to {args.out_png}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
