"""
panchangam.engines.astro.sunrise
--------------------------------
Low-precision sunrise/sunset and twilight times for a civil day.

A one-shot Julian-cycle algorithm: mean anomaly -> equation of centre ->
ecliptic longitude -> declination -> hour angle -> transit. Rise times are
reflections of set times about solar noon, so no fixed-point iteration is
needed. Accuracy is about a minute at moderate latitudes.

When the hour-angle cosine leaves [-1, 1] (polar day/night at that altitude)
the event is reported as None.
"""

from __future__ import annotations

import math
from datetime import date
from typing import Dict, Optional, Tuple

from ...core.time import to_jdn
from ...core.types import Location, SunTimes
from ...reference.time_scales import maybe_datetime, jd_to_datetime

RAD = math.pi / 180.0
J0 = 0.0009
J2000 = 2451545.0
OBLIQUITY = 23.4397 * RAD
PERIHELION = 102.9372 * RAD

# (altitude in degrees, rising event, setting event)
ALTITUDES: Tuple[Tuple[float, str, str], ...] = (
    (-0.833, "sunrise", "sunset"),
    (-0.3, "sunrise_end", "sunset_start"),
    (-6.0, "dawn", "dusk"),
    (-12.0, "nautical_dawn", "nautical_dusk"),
    (-18.0, "night_end", "night"),
)


def _mean_anomaly(d: float) -> float:
    return RAD * (357.5291 + 0.98560028 * d)


def _ecliptic_longitude(M: float) -> float:
    C = RAD * (1.9148 * math.sin(M) + 0.02 * math.sin(2 * M) + 0.0003 * math.sin(3 * M))
    return M + C + PERIHELION + math.pi


def _declination(L: float) -> float:
    return math.asin(math.sin(OBLIQUITY) * math.sin(L))


def _approx_transit(ht: float, lw: float, n: float) -> float:
    return J0 + (ht + lw) / (2 * math.pi) + n


def _solar_transit_j(ds: float, M: float, L: float) -> float:
    return J2000 + ds + 0.0053 * math.sin(M) - 0.0069 * math.sin(2 * L)


def hour_angle(h: float, phi: float, dec: float) -> Optional[float]:
    """Hour angle (radians) at which the Sun reaches altitude h, or None if it never does."""
    cos_w = (math.sin(h) - math.sin(phi) * math.sin(dec)) / (math.cos(phi) * math.cos(dec))
    if cos_w < -1.0 or cos_w > 1.0:
        return None
    return math.acos(cos_w)


def observer_dip(elevation_m: float) -> float:
    """Horizon dip correction (degrees) for an observer above sea level."""
    return -2.076 * math.sqrt(max(elevation_m, 0.0)) / 60.0


def sun_events_jd(d: date, loc: Location) -> Dict[str, Optional[float]]:
    """
    JD(UT) of solar noon, nadir and the rise/set pairs of ALTITUDES for civil day d
    (the solar day whose transit is nearest local mean noon).
    """
    lw = RAD * -loc.lng
    phi = RAD * loc.lat
    dh = observer_dip(loc.elevation)

    # days since J2000 at local mean noon
    days = (to_jdn(d) - loc.lng / 360.0) - J2000
    n = round(days - J0 - lw / (2 * math.pi))
    ds = _approx_transit(0.0, lw, n)
    M = _mean_anomaly(ds)
    L = _ecliptic_longitude(M)
    dec = _declination(L)
    j_noon = _solar_transit_j(ds, M, L)

    out: Dict[str, Optional[float]] = {"solar_noon": j_noon, "nadir": j_noon - 0.5}
    for alt, rise_name, set_name in ALTITUDES:
        w = hour_angle((alt + dh) * RAD, phi, dec)
        if w is None:
            out[rise_name] = None
            out[set_name] = None
            continue
        j_set = _solar_transit_j(_approx_transit(w, lw, n), M, L)
        out[set_name] = j_set
        out[rise_name] = j_noon - (j_set - j_noon)
    return out


def sun_times(d: date, loc: Location, tz_offset: float = 0.0) -> SunTimes:
    ev = sun_events_jd(d, loc)
    return SunTimes(
        solar_noon=jd_to_datetime(ev["solar_noon"], tz_offset),
        nadir=jd_to_datetime(ev["nadir"], tz_offset),
        **{name: maybe_datetime(ev[name], tz_offset) for _, r, s in ALTITUDES for name in (r, s)},
    )


def sunrise_jd(d: date, loc: Location) -> Optional[float]:
    return sun_events_jd(d, loc)["sunrise"]
