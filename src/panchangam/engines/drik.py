"""
panchangam.engines.drik
-----------------------
Ephemeris-style ("drik") position model: truncated Meeus/ELP2000 series for the
Sun and Moon with aberration and nutation, and a Lahiri-type ayanamsa built from
the general precession in longitude plus nutation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from ..core.types import CelestialState
from ..reference import astro_args as aa
from ..reference.lunar import lunar_position
from ..reference.solar import solar_longitude


@dataclass(frozen=True)
class DrikParams:
    # Lahiri (Chitrapaksha) ayanamsa at J2000.0, degrees
    ayanamsa_j2000: float = 23.85306
    true_ayanamsa: bool = True  # add nutation in longitude


@dataclass(frozen=True)
class DrikModel:
    p: DrikParams = DrikParams()
    name: str = "drik"

    def ayanamsa(self, jd_tt: float) -> float:
        """Signed correction: sidereal = tropical + ayanamsa (about -24 deg today)."""
        T = aa.T_centuries(jd_tt)
        mag = self.p.ayanamsa_j2000 + aa.general_precession_deg(T)
        if self.p.true_ayanamsa:
            mag += aa.nutation_longitude_deg(T)
        return -mag

    def state(self, jd_tt: float) -> CelestialState:
        sun = solar_longitude(jd_tt)
        moon = lunar_position(jd_tt)
        return CelestialState(
            jd_tt=jd_tt,
            sun_tropical=sun.L_app_deg,
            moon_tropical=moon.L_app_deg,
            sun_speed=sun.speed_deg_per_day,
            moon_speed=moon.speed_deg_per_day,
            ayanamsa=self.ayanamsa(jd_tt),
            moon_latitude=moon.B_deg,
        )

    def info(self) -> Dict[str, Any]:
        return {
            "model": self.name,
            "kind": "ephemeris",
            "ayanamsa": "lahiri",
            "ayanamsa_j2000": self.p.ayanamsa_j2000,
            "true_ayanamsa": self.p.true_ayanamsa,
        }
