# reference/solar.py

from __future__ import annotations

import math
from dataclasses import dataclass

from . import astro_args as aa
from ..core.time import normalize360


@dataclass(frozen=True)
class SolarCoordinates:
    """True and apparent solar longitude (degrees) and speed (degrees/day)."""
    L_true_deg: float
    L_app_deg: float
    speed_deg_per_day: float


def solar_longitude(jd_tt: float) -> SolarCoordinates:
    """
    True and apparent geocentric solar longitude for a JD(TT), using the Meeus
    equation of centre (accurate to ~0.01 deg).
    """
    T = aa.T_centuries(jd_tt)
    sm = aa.solar_mean_elements(T)
    fa = aa.fundamental_args(T)

    M_rad = math.radians(sm.M_deg)
    c1 = 1.914602 - 0.004817 * T - 0.000014 * T * T
    c2 = 0.019993 - 0.000101 * T
    c3 = 0.000289

    # Equation of centre
    C_sun = c1 * math.sin(M_rad) + c2 * math.sin(2.0 * M_rad) + c3 * math.sin(3.0 * M_rad)
    L_true = normalize360(sm.L0_deg + C_sun)

    # aberration and leading nutation term
    Omega_rad = math.radians(fa.Omega_deg)
    L_app = normalize360(L_true - 0.00569 - 0.00478 * math.sin(Omega_rad))

    # d/dt of (L0 + C) with dM/dt the mean-anomaly rate; the sine terms are in degrees,
    # so their derivative picks up a factor of pi/180 from dM in radians
    dC_dM = math.radians(1.0) * (
        c1 * math.cos(M_rad) + 2.0 * c2 * math.cos(2.0 * M_rad) + 3.0 * c3 * math.cos(3.0 * M_rad)
    )
    speed = (aa.SUN_L0_RATE + dC_dM * aa.M_RATE) / aa.DAYS_PER_CENTURY

    return SolarCoordinates(L_true_deg=L_true, L_app_deg=L_app, speed_deg_per_day=speed)
