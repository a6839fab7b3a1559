"""
panchangam.engines.astro.moonrise
---------------------------------
Moonrise/moonset for a local civil day.

The Moon's geocentric apparent ecliptic position comes from the lunar series;
it is rotated to equatorial coordinates and turned into an altitude through
local sidereal time. The standard altitude h0 = 0.7275*parallax - 0.5667 deg
absorbs topocentric parallax, refraction and semi-diameter. The day is scanned
hourly for sign changes of (altitude - h0), each of which is refined by
bisection to about a minute.
"""

from __future__ import annotations

import math
from datetime import date
from typing import Optional, Tuple

from ...core.time import local_midnight_jd
from ...core.types import Location, MoonTimes
from ...reference import astro_args as aa
from ...reference.lunar import lunar_position
from ...reference.time_scales import jd_ut_to_jd_tt, maybe_datetime
from .sunrise import observer_dip

SCAN_STEP_DAYS = 1.0 / 24.0
TIME_TOL_DAYS = 1.0 / 1440.0


def moon_altitude(jd_ut: float, loc: Location) -> Tuple[float, float]:
    """Geocentric altitude of the Moon and the rise/set threshold h0, both in degrees."""
    jd_tt = jd_ut_to_jd_tt(jd_ut)
    moon = lunar_position(jd_tt)
    eps = math.radians(aa.mean_obliquity_deg(aa.T_centuries(jd_tt)))
    lam = math.radians(moon.L_app_deg)
    beta = math.radians(moon.B_deg)

    ra = math.atan2(
        math.sin(lam) * math.cos(eps) - math.tan(beta) * math.sin(eps),
        math.cos(lam),
    )
    dec = math.asin(
        math.sin(beta) * math.cos(eps) + math.cos(beta) * math.sin(eps) * math.sin(lam)
    )
    lst = math.radians(aa.gmst_deg(jd_ut) + loc.lng)
    H = lst - ra
    phi = math.radians(loc.lat)
    alt = math.degrees(math.asin(
        math.sin(phi) * math.sin(dec) + math.cos(phi) * math.cos(dec) * math.cos(H)
    ))
    h0 = 0.7275 * moon.parallax_deg - 0.5667 + observer_dip(loc.elevation)
    return alt, h0


def _f(jd_ut: float, loc: Location) -> float:
    alt, h0 = moon_altitude(jd_ut, loc)
    return alt - h0


def _bisect(a: float, fa: float, b: float, loc: Location) -> float:
    while b - a > TIME_TOL_DAYS:
        m = 0.5 * (a + b)
        fm = _f(m, loc)
        if (fm > 0) == (fa > 0):
            a, fa = m, fm
        else:
            b = m
    return 0.5 * (a + b)


def moon_events_jd(d: date, loc: Location, tz_offset: float = 0.0) -> Tuple[Optional[float], Optional[float], bool]:
    """
    (rise, set, above) for the local civil day d: JD(UT) of the first rise and
    first set within the day (None when absent) and whether the Moon was above
    the horizon at local midnight.
    """
    t0 = local_midnight_jd(d, tz_offset)
    rise: Optional[float] = None
    set_: Optional[float] = None

    a = t0
    fa = _f(a, loc)
    above = fa > 0
    for i in range(1, 25):
        b = t0 + i * SCAN_STEP_DAYS
        fb = _f(b, loc)
        if (fa > 0) != (fb > 0):
            t = _bisect(a, fa, b, loc)
            if fb > 0 and rise is None:
                rise = t
            elif fb <= 0 and set_ is None:
                set_ = t
        if rise is not None and set_ is not None:
            break
        a, fa = b, fb
    return rise, set_, above


def moon_times(d: date, loc: Location, tz_offset: float = 0.0) -> MoonTimes:
    rise, set_, above = moon_events_jd(d, loc, tz_offset)
    no_event = rise is None and set_ is None
    return MoonTimes(
        rise=maybe_datetime(rise, tz_offset),
        set=maybe_datetime(set_, tz_offset),
        always_up=no_event and above,
        always_down=no_event and not above,
    )
