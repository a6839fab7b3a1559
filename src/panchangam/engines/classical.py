"""
panchangam.engines.classical
----------------------------
Classical mean-motion ("Surya Siddhanta") position model.

Mean sidereal longitudes grow linearly from the Kali Yuga epoch at the rates
implied by the Mahayuga revolution counts. A short table of sinusoidal
corrections, with anomalies measured from the apogee as in the siddhantic
manda correction, turns them into true longitudes. Ayanamsa is a single linear
precession rate; tropical longitudes are recovered as sidereal - ayanamsa.

The model is not tuned to modern observations (no bija corrections), so its
Moon drifts by a few degrees from the drik model in the modern era. This is the
expected behaviour of the tradition, not a defect.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Tuple

from ..core.time import normalize360
from ..core.types import CelestialState

J2000 = 2451545.0

# A correction term: (multiple of D, multiple of M, multiple of M', amplitude in degrees)
Term = Tuple[int, int, int, float]


@dataclass(frozen=True)
class ClassicalParams:
    epoch_jd: float = 588465.5             # start of Kali Yuga
    mahayuga_days: int = 1577917828        # civil days in a Mahayuga
    sun_revolutions: int = 4320000
    moon_revolutions: int = 57753336
    moon_apogee_revolutions: int = 488203
    moon_apogee_epoch_deg: float = 90.0
    sun_apogee_deg: float = 77.0           # nearly fixed over historical time
    sun_terms: Tuple[Term, ...] = (
        (0, 1, 0, -2.1753),                # manda phala, 13 deg 40' epicycle
    )
    moon_terms: Tuple[Term, ...] = (
        (0, 0, 1, -5.0458),                # manda phala, 32 deg epicycle
        (2, 0, -1, -1.2740),               # evection
        (2, 0, 0, 0.6583),                 # variation
        (0, 1, 0, 0.1851),                 # annual equation
    )
    ayanamsa_j2000: float = 23.85
    precession_arcsec_per_year: float = 50.2564


def _rate(revolutions: int, days: int) -> float:
    return revolutions * 360.0 / days


@dataclass(frozen=True)
class ClassicalModel:
    p: ClassicalParams = ClassicalParams()
    name: str = "surya_siddhanta"

    def mean_longitudes(self, jd: float) -> Tuple[float, float, float]:
        """Mean sidereal longitudes of Sun, Moon and lunar apogee."""
        p = self.p
        t = jd - p.epoch_jd
        sun = normalize360(_rate(p.sun_revolutions, p.mahayuga_days) * t)
        moon = normalize360(_rate(p.moon_revolutions, p.mahayuga_days) * t)
        apogee = normalize360(p.moon_apogee_epoch_deg + _rate(p.moon_apogee_revolutions, p.mahayuga_days) * t)
        return sun, moon, apogee

    def ayanamsa(self, jd: float) -> float:
        """Signed correction: sidereal = tropical + ayanamsa."""
        years = (jd - J2000) / 365.25
        return -(self.p.ayanamsa_j2000 + years * self.p.precession_arcsec_per_year / 3600.0)

    def _apply(self, terms: Tuple[Term, ...], D: float, M: float, Mp: float,
               rates: Tuple[float, float, float]) -> Tuple[float, float]:
        corr = 0.0
        d_corr = 0.0
        for kd, km, kmp, amp in terms:
            arg = math.radians(kd * D + km * M + kmp * Mp)
            arg_rate = math.radians(kd * rates[0] + km * rates[1] + kmp * rates[2])
            corr += amp * math.sin(arg)
            d_corr += amp * math.cos(arg) * arg_rate
        return corr, d_corr

    def state(self, jd_tt: float) -> CelestialState:
        p = self.p
        sun_mean, moon_mean, apogee = self.mean_longitudes(jd_tt)
        n_sun = _rate(p.sun_revolutions, p.mahayuga_days)
        n_moon = _rate(p.moon_revolutions, p.mahayuga_days)
        n_apogee = _rate(p.moon_apogee_revolutions, p.mahayuga_days)

        D = moon_mean - sun_mean
        M = sun_mean - p.sun_apogee_deg
        Mp = moon_mean - apogee
        rates = (n_moon - n_sun, n_sun, n_moon - n_apogee)

        sun_corr, sun_dcorr = self._apply(p.sun_terms, D, M, Mp, rates)
        moon_corr, moon_dcorr = self._apply(p.moon_terms, D, M, Mp, rates)

        ayan = self.ayanamsa(jd_tt)
        sun_sid = normalize360(sun_mean + sun_corr)
        moon_sid = normalize360(moon_mean + moon_corr)
        return CelestialState(
            jd_tt=jd_tt,
            sun_tropical=normalize360(sun_sid - ayan),
            moon_tropical=normalize360(moon_sid - ayan),
            sun_speed=n_sun + sun_dcorr,
            moon_speed=n_moon + moon_dcorr,
            ayanamsa=ayan,
        )

    def info(self) -> Dict[str, Any]:
        return {
            "model": self.name,
            "kind": "classical",
            "epoch_jd": self.p.epoch_jd,
            "ayanamsa_j2000": self.p.ayanamsa_j2000,
            "precession_arcsec_per_year": self.p.precession_arcsec_per_year,
        }
