# reference/lunar.py

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

from . import astro_args as aa
from ..core.time import normalize360


@dataclass(frozen=True)
class LunarCoordinates:
    """Apparent lunar longitude, latitude (degrees), distance (km), speed (degrees/day)."""
    L_app_deg: float
    B_deg: float
    distance_km: float
    speed_deg_per_day: float

    @property
    def parallax_deg(self) -> float:
        """Equatorial horizontal parallax."""
        return math.degrees(math.asin(6378.14 / self.distance_km))


# (d, m, m', f, coefficient in microdegrees), Meeus table 47.A plus a few ELP2000 terms
LUNAR_LON_TERMS = (
    (0, 0, 1, 0, 6288774),
    (2, 0, -1, 0, 1274027),
    (2, 0, 0, 0, 658314),
    (0, 0, 2, 0, 213618),
    (0, 1, 0, 0, -185116),
    (0, 0, 0, 2, -114332),
    (2, 0, -2, 0, 58793),
    (2, -1, -1, 0, 57066),
    (2, 0, 1, 0, 53322),
    (2, -1, 0, 0, 45758),
    (0, 1, -1, 0, -40923),
    (1, 0, 0, 0, -34720),
    (0, 1, 1, 0, -30383),
    (2, 0, 0, -2, 15327),
    (0, 0, 1, 2, -12528),
    (0, 0, 1, -2, 10980),
    (4, 0, -1, 0, 10675),
    (0, 0, 3, 0, 10034),
    (4, 0, -2, 0, 8548),
    (2, 1, -1, 0, -7888),
    (2, 1, 0, 0, -6766),
    (1, 0, -1, 0, -5163),
    (1, 1, 0, 0, 4987),
    (2, -1, 1, 0, 4036),

    (2, 0, 2, 0, 3994),
    (4, 0, 0, 0, 3861),
    (2, 0, -3, 0, 3665),
    (0, 1, -2, 0, -2689),
    (2, 0, -1, 2, -2602),
    (2, -1, -2, 0, 2390),
    (1, 0, 1, 0, -2348),
    (2, -2, 0, 0, 2236),
    (0, 1, 2, 0, -2120),
    (0, 2, 0, 0, -2069),
    (2, -2, -1, 0, 2011),
    (2, 0, 1, -2, -1977),
    (4, 0, -3, 0, -1736),
    (4, -1, -1, 0, -1671),
    (2, 1, 1, 0, -1557),
    (1, 1, -2, 0, 1492),
    (2, 0, -4, 0, -1422),
    (4, -1, -2, 0, -1205),
    (2, 1, 0, -2, -1111),
    (2, -1, 1, -2, -1100),
    (2, -1, 2, 0, -811),
    (0, 0, 4, 0, 769),
    (2, 0, -2, 2, 717),
    (0, 0, 2, 2, -712),
    (1, 0, 2, 0, -663),
    (1, 1, -1, 0, -565),
    (1, 0, -2, 0, -523),
    (4, 0, -4, 0, 492),
    (4, -2, -1, 0, -488),
    (2, 2, -1, 0, -469),
    (2, 2, 0, 0, -440),
    (0, 1, 3, 0, -425),
    (4, 0, 1, 0, -418),
    (0, 0, 2, -2, 386),
    (2, 0, -5, 0, 371),
    (2, 2, -2, 0, 362),
    (1, 1, 1, 0, 317),
    (2, 0, -3, 2, -310),
    (0, 2, -1, 0, -307),
    (2, 0, 3, 0, -293),

    (1, -1, 0, 0, 275),
    (2, 0, 0, 2, 212),
    (2, 0, 2, -2, -165),
    (1, -1, 1, 0, 148),
    (1, 0, 0, -2, -125),
)

LUNAR_LAT_TERMS = (
    (0, 0, 0, 1, 5128122),
    (0, 0, 1, 1, 280602),
    (0, 0, 1, -1, 277693),
    (2, 0, 0, -1, 173237),
    (2, 0, -1, 1, 55413),
    (2, 0, -1, -1, 46271),
    (2, 0, 0, 1, 32573),
    (0, 0, 2, 1, 17198),
    (2, 0, 1, -1, 9266),
    (0, 0, 2, -1, 8822),
    (2, -1, 0, -1, 8216),
    (2, 0, -2, -1, 4324),
    (2, 0, 1, 1, 4200),
    (2, 1, 0, -1, -3359),
    (2, -1, -1, 1, 2463),
    (2, -1, 0, 1, 2211),
    (2, -1, -1, -1, 2065),
    (0, 1, -1, -1, -1870),
    (4, 0, -1, -1, 1828),
    (0, 1, 0, 1, -1794),
    (0, 0, 0, 3, -1153),
)

# Distance terms (d, m, m', f, coefficient in metres); the leading part of table 47.A
# is ample for parallax at arc-second level.
LUNAR_DIST_TERMS = (
    (0, 0, 1, 0, -20905355),
    (2, 0, -1, 0, -3699111),
    (2, 0, 0, 0, -2955968),
    (0, 0, 2, 0, -569925),
    (0, 1, 0, 0, 48888),
    (0, 0, 0, 2, -3149),
    (2, 0, -2, 0, 246158),
    (2, -1, -1, 0, -152138),
    (2, 0, 1, 0, -170733),
    (2, -1, 0, 0, -204586),
    (0, 1, -1, 0, -129620),
    (1, 0, 0, 0, 108743),
    (0, 1, 1, 0, 104755),
    (2, 0, 0, -2, 10321),
    (0, 0, 1, -2, 79661),
    (4, 0, -1, 0, -34782),
    (0, 0, 3, 0, -23210),
    (4, 0, -2, 0, -21636),
    (2, 1, -1, 0, 24208),
    (2, 1, 0, 0, 30824),
    (1, 0, -1, 0, -8379),
    (1, 1, 0, 0, -16675),
    (2, -1, 1, 0, -12831),
    (2, 0, 2, 0, -10445),
    (4, 0, 0, 0, -11650),
    (2, 0, -3, 0, 14403),
)

_RATES = (aa.D_RATE, aa.M_RATE, aa.MP_RATE, aa.F_RATE)


def _series(terms, args: Tuple[float, float, float, float], E: float, fn):
    """Σ coef·E^|m|·fn(arg) and the matching Σ coef·E^|m|·d(arg)/dT·fn'(arg)."""
    total = 0.0
    d_total = 0.0
    for d, m, mp, f, coef in terms:
        c = coef * (E ** abs(m))
        arg = d * args[0] + m * args[1] + mp * args[2] + f * args[3]
        rate = math.radians(d * _RATES[0] + m * _RATES[1] + mp * _RATES[2] + f * _RATES[3])
        if fn is math.sin:
            total += c * math.sin(arg)
            d_total += c * rate * math.cos(arg)
        else:
            total += c * math.cos(arg)
            d_total -= c * rate * math.sin(arg)
    return total, d_total


def lunar_position(jd_tt: float) -> LunarCoordinates:
    """
    Apparent geocentric lunar longitude, latitude and distance for a JD(TT),
    together with the longitude rate from the analytic derivative of the series.
    """
    T = aa.T_centuries(jd_tt)
    fa = aa.fundamental_args(T)
    E = aa.eccentricity_factor(T)
    args = (
        math.radians(fa.D_deg),
        math.radians(fa.M_deg),
        math.radians(fa.Mp_deg),
        math.radians(fa.F_deg),
    )

    lon_sum, dlon_sum = _series(LUNAR_LON_TERMS, args, E, math.sin)
    lat_sum, _ = _series(LUNAR_LAT_TERMS, args, E, math.sin)
    dist_sum, _ = _series(LUNAR_DIST_TERMS, args, E, math.cos)

    nutation_lon = -0.00478 * math.sin(math.radians(fa.Omega_deg))
    L_app = normalize360(fa.Lp_deg + lon_sum * 1e-6 + nutation_lon)
    speed = (aa.LP_RATE + dlon_sum * 1e-6) / aa.DAYS_PER_CENTURY

    return LunarCoordinates(
        L_app_deg=L_app,
        B_deg=lat_sum * 1e-6,
        distance_km=385000.56 + dist_sum / 1000.0,
        speed_deg_per_day=speed,
    )
