"""
panchangam.engines.solver
-------------------------
Angular event solver: finds the instant at which an anga function
(tithi, nakshatra, yoga, karana) crosses a target angle.

Newton steps use Δt = Δangle / rate with the relative angular speed of the
function; once a sign change brackets the root, steps that would leave the
bracket are replaced by bisection. All times are JD(UT); a timezone is applied
only when the caller turns a root into a wall-clock datetime.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from ..core.errors import NumericNonConvergence
from ..core.time import normalize360, wrap180, wrap_index
from ..core.types import AngaKind, CelestialState
from ..reference.time_scales import jd_ut_to_jd_tt
from .interfaces import PositionModel

log = logging.getLogger(__name__)

BAND_WIDTH: Dict[str, float] = {
    "tithi": 12.0,
    "karana": 6.0,
    "nakshatra": 360.0 / 27.0,
    "yoga": 360.0 / 27.0,
}

CYCLE: Dict[str, int] = {"tithi": 30, "karana": 60, "nakshatra": 27, "yoga": 27}

# mean relative speeds (deg/day), only used to seed guesses far from the instant
MEAN_ELONGATION_RATE = 12.190749


@dataclass(frozen=True)
class SolverParams:
    angle_tol: float = 0.01          # degrees
    time_tol: float = 1.0 / 1440.0   # days (1 minute)
    max_iter: int = 60
    max_step_days: float = 20.0


def state_ut(model: PositionModel, jd_ut: float) -> CelestialState:
    return model.state(jd_ut_to_jd_tt(jd_ut))


def anga_value(kind: AngaKind, st: CelestialState) -> float:
    if kind in ("tithi", "karana"):
        return normalize360(st.moon_tropical - st.sun_tropical)
    if kind == "nakshatra":
        return normalize360(st.moon_tropical + st.ayanamsa)
    if kind == "yoga":
        return normalize360(st.sun_tropical + st.moon_tropical + 2.0 * st.ayanamsa)
    raise ValueError(f"Unknown anga kind '{kind}'")


def anga_rate(kind: AngaKind, st: CelestialState) -> float:
    """Angular speed of the anga function (deg/day)."""
    if kind in ("tithi", "karana"):
        return st.moon_speed - st.sun_speed
    if kind == "nakshatra":
        return st.moon_speed
    return st.moon_speed + st.sun_speed


def band_index(kind: AngaKind, st: CelestialState) -> int:
    """Raw band number of the anga function (karana: 0..59 half-tithis)."""
    width = BAND_WIDTH[kind]
    return wrap_index(int(math.floor(anga_value(kind, st) / width)), CYCLE[kind])


def karana_index(band: int) -> int:
    """Map a half-tithi band 0..59 to the karana name index 0..10."""
    band = wrap_index(band, 60)
    if band == 0:
        return 10  # Kimstughna
    if band >= 57:
        return band - 50  # Shakuni, Chatushpada, Naga
    return (band - 1) % 7


def solve_crossing(
    model: PositionModel,
    kind: AngaKind,
    target: float,
    jd_ut_guess: float,
    params: SolverParams = SolverParams(),
) -> float:
    """
    JD(UT) at which the anga function of `kind` equals `target` (degrees),
    taking the crossing nearest to `jd_ut_guess` in angle.

    Raises NumericNonConvergence after params.max_iter evaluations.
    """
    t = jd_ut_guess
    lo: Optional[float] = None  # f(lo) < 0
    hi: Optional[float] = None  # f(hi) > 0

    for _ in range(params.max_iter):
        st = state_ut(model, t)
        f = wrap180(anga_value(kind, st) - target)
        if abs(f) < params.angle_tol:
            return t

        if f < 0:
            lo = t
        else:
            hi = t

        rate = anga_rate(kind, st)
        step = -f / rate
        if abs(step) > params.max_step_days:
            step = math.copysign(params.max_step_days, step)
        t_next = t + step

        if lo is not None and hi is not None and lo < hi:
            if hi - lo < params.time_tol:
                return 0.5 * (lo + hi)
            if not (lo < t_next < hi):
                t_next = 0.5 * (lo + hi)
        t = t_next

    raise NumericNonConvergence(
        f"{kind} crossing of {target:.4f} deg not found within {params.max_iter} iterations "
        f"(guess JD {jd_ut_guess:.5f})"
    )


def anga_bounds(
    model: PositionModel,
    kind: AngaKind,
    jd_ut: float,
    params: SolverParams = SolverParams(),
) -> Tuple[float, float]:
    """
    Start and end JD(UT) of the band of `kind` in force at jd_ut.
    """
    st = state_ut(model, jd_ut)
    width = BAND_WIDTH[kind]
    value = anga_value(kind, st)
    idx = math.floor(value / width)
    rate = anga_rate(kind, st)

    start_target = normalize360(idx * width)
    end_target = normalize360((idx + 1) * width)
    start_guess = jd_ut - (value - idx * width) / rate
    end_guess = jd_ut + ((idx + 1) * width - value) / rate

    start = solve_crossing(model, kind, start_target, start_guess, params)
    end = solve_crossing(model, kind, end_target, end_guess, params)
    return start, end


def new_moon_before(model: PositionModel, jd_ut: float, params: SolverParams = SolverParams()) -> float:
    """JD(UT) of the last conjunction at or before jd_ut."""
    st = state_ut(model, jd_ut)
    elong = anga_value("tithi", st)
    t = solve_crossing(model, "tithi", 0.0, jd_ut - elong / MEAN_ELONGATION_RATE, params)
    if t > jd_ut:
        # rounding put us on the conjunction just ahead; step back one lunation
        t = solve_crossing(model, "tithi", 0.0, t - 29.53, params)
    return t


def new_moon_after(model: PositionModel, jd_ut: float, params: SolverParams = SolverParams()) -> float:
    """JD(UT) of the first conjunction after jd_ut."""
    st = state_ut(model, jd_ut)
    elong = anga_value("tithi", st)
    t = solve_crossing(model, "tithi", 0.0, jd_ut + (360.0 - elong) / MEAN_ELONGATION_RATE, params)
    if t <= jd_ut:
        t = solve_crossing(model, "tithi", 0.0, t + 29.53, params)
    return t
