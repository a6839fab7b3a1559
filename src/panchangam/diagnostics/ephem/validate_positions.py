#!/usr/bin/env python3
from __future__ import annotations

import argparse
from typing import List, Optional

from panchangam.reference import astro_args as aa
from panchangam.reference import lunar, solar
from panchangam.ephemeris.skyfield_positions import SkyfieldPositions

# de421 coverage
MIN_JD = 2414864.5
MAX_JD = 2471184.5


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


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Validate the analytical Sun/Moon longitudes against a JPL kernel.")
    p.add_argument("--year-start", type=int, default=1900)
    p.add_argument("--year-end", type=int, default=2050)
    p.add_argument("--step-days", type=float, default=7.3)
    p.add_argument("--kernel", default="de421.bsp")
    p.add_argument("--out-png", default="position_validation.png")
    args = p.parse_args(argv)

    np = _need_numpy()
    plt = _need_matplotlib()

    print(f"Loading {args.kernel}...")
    sky = SkyfieldPositions.load(args.kernel)

    jd_start = max(aa.J2000_TT + (args.year_start - 2000) * 365.25, MIN_JD + 1.0)
    jd_end = min(aa.J2000_TT + (args.year_end - 2000) * 365.25, MAX_JD - 1.0)
    if jd_start >= jd_end:
        raise ValueError(f"Requested range is outside the kernel range [{MIN_JD}, {MAX_JD}]")

    jds = np.arange(jd_start, jd_end, args.step_days)
    years = 2000 + (jds - aa.J2000_TT) / 365.25
    print(f"Validating {len(jds)} points from {years[0]:.0f} to {years[-1]:.0f}...")

    ref_sun, ref_moon = sky.sun_moon(jds)
    sun = np.array([solar.solar_longitude(float(jd)).L_app_deg for jd in jds])
    moon = np.array([lunar.lunar_position(float(jd)).L_app_deg for jd in jds])

    err_sun = ((sun - ref_sun + 180.0) % 360.0 - 180.0) * 3600.0
    err_moon = ((moon - ref_moon + 180.0) % 360.0 - 180.0) * 3600.0
    # a tithi boundary moves by ~2 minutes per arcminute of elongation error
    err_elong_min = (err_moon - err_sun) / 3600.0 / 12.19 * 1440.0

    print(f"Sun  : max |err| = {np.max(np.abs(err_sun)):.1f} arcsec, rms = {np.sqrt(np.mean(err_sun ** 2)):.1f}")
    print(f"Moon : max |err| = {np.max(np.abs(err_moon)):.1f} arcsec, rms = {np.sqrt(np.mean(err_moon ** 2)):.1f}")
    print(f"Tithi timing: max |err| = {np.max(np.abs(err_elong_min)):.2f} min")

    fig, axs = plt.subplots(3, 1, figsize=(12, 10), sharex=True)

    axs[0].scatter(years, err_sun, s=1, alpha=0.5, color="orange")
    axs[0].set_title("Solar Apparent Longitude Error (Analytical - JPL)")
    axs[0].set_ylabel("Error (arcsec)")
    axs[0].grid(True, alpha=0.3)

    axs[1].scatter(years, err_moon, s=1, alpha=0.5, color="blue")
    axs[1].set_title("Lunar Apparent Longitude Error (Analytical - JPL)")
    axs[1].set_ylabel("Error (arcsec)")
    axs[1].grid(True, alpha=0.3)

    axs[2].scatter(years, err_elong_min, s=1, alpha=0.5, color="green")
    axs[2].set_title("Implied tithi timing error")
    axs[2].set_ylabel("Error (minutes)")
    axs[2].set_xlabel("Year")
    axs[2].grid(True, alpha=0.3)

    plt.suptitle(f"Position Model Validation ({years[0]:.0f} to {years[-1]:.0f})", fontsize=14)
    plt.tight_layout()
    plt.savefig(args.out_png, dpi=200)
    print(f"Validation complete. Plot saved to {args.out_png}")

    return 0

if __name__ == "__main__":
    raise SystemExit(main())
