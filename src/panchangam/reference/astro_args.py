from __future__ import annotations

import math
from dataclasses import dataclass

from ..core.time import normalize360


# ------------------------------------------------------------
# Time variable (TT)
# ------------------------------------------------------------

J2000_TT = 2451545.0  # JD(TT) at J2000.0
DAYS_PER_CENTURY = 36525.0


def T_centuries(jd_tt: float) -> float:
    """Julian centuries from J2000.0 in TT."""
    return (jd_tt - J2000_TT) / DAYS_PER_CENTURY


# ------------------------------------------------------------
# Fundamental arguments (Meeus / ELP2000-style; degrees)
# ------------------------------------------------------------

@dataclass(frozen=True)
class FundamentalArgs:
    """Mean lunar/solar arguments in degrees, wrapped to [0,360)."""
    Lp_deg: float     # Moon mean longitude
    D_deg: float      # mean elongation
    M_deg: float      # Sun mean anomaly
    Mp_deg: float     # Moon mean anomaly
    F_deg: float      # Moon argument of latitude
    Omega_deg: float  # ascending node


# Linear rates (degrees per Julian century), used for analytic derivatives.
LP_RATE = 481267.88123421
D_RATE = 445267.1114034
M_RATE = 35999.0502909
MP_RATE = 477198.8675055
F_RATE = 483202.0175233


def fundamental_args(T: float) -> FundamentalArgs:
    """
    Fundamental arguments (mean elements), Meeus ch. 47 polynomials:
      L' = 218.3164477 + 481267.88123421 T - 0.0015786 T^2 + T^3/538841 - T^4/65194000
      D  = 297.8501921 + 445267.1114034  T - 0.0018819 T^2 + T^3/545868  - T^4/113065000
      M  = 357.5291092 + 35999.0502909  T - 0.0001536 T^2 + T^3/24490000
      M' = 134.9633964 + 477198.8675055 T + 0.0087414 T^2 + T^3/69699   - T^4/14712000
      F  = 93.2720950  + 483202.0175233 T - 0.0036539 T^2 - T^3/3526000 + T^4/863310000
      Ω  = 125.04452   - 1934.136261 T    + 0.0020708 T^2 + T^3/450000
    """
    T2 = T * T
    T3 = T2 * T
    T4 = T2 * T2

    Lp = 218.3164477 + LP_RATE * T - 0.0015786 * T2 + T3 / 538841.0 - T4 / 65194000.0
    D = 297.8501921 + D_RATE * T - 0.0018819 * T2 + T3 / 545868.0 - T4 / 113065000.0
    M = 357.5291092 + M_RATE * T - 0.0001536 * T2 + T3 / 24490000.0
    Mp = 134.9633964 + MP_RATE * T + 0.0087414 * T2 + T3 / 69699.0 - T4 / 14712000.0
    F = 93.2720950 + F_RATE * T - 0.0036539 * T2 - T3 / 3526000.0 + T4 / 863310000.0
    Omega = 125.04452 - 1934.136261 * T + 0.0020708 * T2 + T3 / 450000.0

    return FundamentalArgs(
        Lp_deg=normalize360(Lp),
        D_deg=normalize360(D),
        M_deg=normalize360(M),
        Mp_deg=normalize360(Mp),
        F_deg=normalize360(F),
        Omega_deg=normalize360(Omega),
    )


def eccentricity_factor(T: float) -> float:
    """
    Eccentricity factor E for the Earth's orbit.
    Scales lunar perturbations that depend on the Sun's mean anomaly.
    """
    return 1.0 - 0.002516 * T - 0.0000074 * (T * T)


# ------------------------------------------------------------
# Sun mean elements (Meeus ch. 25)
# ------------------------------------------------------------

@dataclass(frozen=True)
class SolarMean:
    L0_deg: float  # geometric mean longitude
    M_deg: float   # mean anomaly


SUN_L0_RATE = 36000.76983  # deg / century


def solar_mean_elements(T: float) -> SolarMean:
    T2 = T * T
    L0 = 280.46646 + SUN_L0_RATE * T + 0.0003032 * T2
    M = 357.52911 + 35999.05029 * T - 0.0001537 * T2
    return SolarMean(L0_deg=normalize360(L0), M_deg=normalize360(M))


# ------------------------------------------------------------
# Obliquity, nutation, precession
# ------------------------------------------------------------

def mean_obliquity_deg(T: float) -> float:
    """
    Mean obliquity of the ecliptic (IAU 2006 form), degrees:
      84381.406" - 46.836769"T - 0.0001831"T^2 + 0.00200340"T^3
    """
    eps_arcsec = 84381.406 - 46.836769 * T - 0.0001831 * T * T + 0.00200340 * T * T * T
    return eps_arcsec / 3600.0


def nutation_longitude_deg(T: float) -> float:
    """Leading terms of nutation in longitude Δψ (degrees)."""
    fa = fundamental_args(T)
    sm = solar_mean_elements(T)
    om = math.radians(fa.Omega_deg)
    two_l_sun = math.radians(2.0 * sm.L0_deg)
    two_l_moon = math.radians(2.0 * fa.Lp_deg)
    arcsec = (
        -17.20 * math.sin(om)
        - 1.32 * math.sin(two_l_sun)
        - 0.23 * math.sin(two_l_moon)
        + 0.21 * math.sin(2.0 * om)
    )
    return arcsec / 3600.0


def general_precession_deg(T: float) -> float:
    """Accumulated general precession in longitude since J2000 (degrees)."""
    return (5029.0966 * T + 1.11113 * T * T) / 3600.0


def gmst_deg(jd_ut: float) -> float:
    """Greenwich mean sidereal time (degrees) for a JD in UT (Meeus 12.4)."""
    T = (jd_ut - J2000_TT) / DAYS_PER_CENTURY
    theta = (
        280.46061837
        + 360.98564736629 * (jd_ut - J2000_TT)
        + 0.000387933 * T * T
        - T * T * T / 38710000.0
    )
    return normalize360(theta)


# ------------------------------------------------------------
# Mean new moon (Meeus mean phases)
# ------------------------------------------------------------

SYNODIC_MONTH = 29.530588861


def jde_mean_new_moon(k: float) -> float:
    """
    Mean Julian Ephemeris Day (TT) of the k-th new moon relative to 2000 (Meeus 49.1).
    """
    T = k / 1236.85
    T2 = T * T
    return (
        2451550.09766
        + SYNODIC_MONTH * k
        + 0.00015437 * T2
        - 0.000000150 * T2 * T
        + 0.00000000073 * T2 * T2
    )
