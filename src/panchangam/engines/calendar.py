"""
panchangam.engines.calendar
---------------------------
The orchestrator. Binds a position model to the solver and the rise/set
routines and resolves the sunrise-anchored almanac of a civil day: angas with
kshaya/vriddhi flags, lunar month with adhika detection, seasons and the
60-year cycle.
"""

from __future__ import annotations

import logging
import math
from datetime import date, timedelta
from typing import Any, Dict, List, NamedTuple, Optional, Tuple

from ..core import names
from ..core.errors import NumericNonConvergence
from ..core.names import lookup
from ..core.time import local_midnight_jd, to_julian, weekday, wrap_index
from ..core.types import (
    AngaEvent,
    AngaKind,
    AngaStatus,
    CelestialState,
    Location,
    LunarMonth,
    PanchangamDay,
    SearchParams,
)
from ..reference.time_scales import maybe_datetime
from .astro.moonrise import moon_times
from .astro.sunrise import sun_events_jd, sun_times
from .interfaces import PositionModel
from .solver import (
    BAND_WIDTH,
    CYCLE,
    SolverParams,
    anga_bounds,
    anga_rate,
    band_index,
    karana_index,
    new_moon_after,
    new_moon_before,
    solve_crossing,
    state_ut,
)

log = logging.getLogger(__name__)

# how far into a kshaya tithi its month is read (days); a tithi never lasts less than ~19h
KSHAYA_MONTH_OFFSET = 0.1

_TABLES = {
    "tithi": names.TITHI_NAMES,
    "nakshatra": names.NAKSHATRA_NAMES,
    "yoga": names.YOGA_NAMES,
    "karana": names.KARANA_NAMES,
}


class SunriseAnga(NamedTuple):
    """Sunrise-anchored anga of one civil day."""
    sunrise: float       # JD(UT) of the anchoring sunrise
    at_sunrise: int      # band index in force at sunrise
    official: int        # index assigned to the day
    status: AngaStatus


class PanchangamEngine:
    """
    Resolves civil days for one position model.

    The engine holds parameters only; every method is a pure function of its
    arguments, so one instance can serve concurrent callers.
    """

    def __init__(
        self,
        id: str,
        model: PositionModel,
        solver: SolverParams = SolverParams(),
        search: SearchParams = SearchParams(),
    ):
        self.id = id
        self.model = model
        self.solver = solver
        self.search = search

    def info(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "model": self.model.info(),
            "solver": self.solver,
            "search": self.search,
        }

    def state_at(self, jd_ut: float) -> CelestialState:
        return state_ut(self.model, jd_ut)

    # ---------------------------------------------------------
    # Sunrise anchoring
    # ---------------------------------------------------------

    def sunrise_anchor(self, d: date, loc: Location) -> float:
        """
        JD(UT) of sunrise on civil day d. On days without a sunrise (polar
        conditions) the day is anchored six hours before solar noon.
        """
        ev = sun_events_jd(d, loc)
        sr = ev["sunrise"]
        if sr is None:
            log.debug("No sunrise on %s at %s; anchoring at noon - 6h", d, loc)
            return ev["solar_noon"] - 0.25
        return sr

    def sunrise_anga(self, kind: AngaKind, d: date, loc: Location) -> SunriseAnga:
        sr = self.sunrise_anchor(d, loc)
        i0 = band_index(kind, self.state_at(sr))
        i1 = band_index(kind, self.state_at(self.sunrise_anchor(d + timedelta(days=1), loc)))
        n = CYCLE[kind]

        if wrap_index(i1 - i0, n) > 1:
            return SunriseAnga(sr, i0, wrap_index(i0 + 1, n), "kshaya")

        ip = band_index(kind, self.state_at(self.sunrise_anchor(d - timedelta(days=1), loc)))
        status: AngaStatus = "vriddhi" if ip == i0 else "normal"
        return SunriseAnga(sr, i0, i0, status)

    def _event(self, kind: AngaKind, anchor: SunriseAnga, tz_offset: float) -> AngaEvent:
        start: Optional[float] = None
        end: Optional[float] = None
        try:
            start, end = anga_bounds(self.model, kind, anchor.sunrise, self.solver)
            if anchor.status == "kshaya":
                # the skipped anga starts where the sunrise one ends
                width = BAND_WIDTH[kind]
                st = self.state_at(end)
                start = end
                end = solve_crossing(
                    self.model, kind, ((anchor.official + 1) * width) % 360.0,
                    end + width / anga_rate(kind, st), self.solver,
                )
        except NumericNonConvergence as e:
            log.warning("%s boundaries indeterminate near JD %.5f: %s", kind, anchor.sunrise, e)
            start = end = None

        index = karana_index(anchor.official) if kind == "karana" else anchor.official
        return AngaEvent(
            kind=kind,
            name=lookup(_TABLES[kind], index),
            index=index,
            start=maybe_datetime(start, tz_offset),
            end=maybe_datetime(end, tz_offset),
            status=anchor.status,
        )

    def anga_periods(self, kind: AngaKind, d: date, tz_offset: float) -> Tuple[AngaEvent, ...]:
        """Every band of `kind` overlapping local civil day d, in order."""
        day_end = local_midnight_jd(d, tz_offset) + 1.0
        jd = local_midnight_jd(d, tz_offset)
        out: List[AngaEvent] = []
        try:
            while jd < day_end:
                start, end = anga_bounds(self.model, kind, jd, self.solver)
                band = band_index(kind, self.state_at(0.5 * (start + end)))
                index = karana_index(band) if kind == "karana" else band
                out.append(AngaEvent(
                    kind=kind,
                    name=lookup(_TABLES[kind], index),
                    index=index,
                    start=maybe_datetime(start, tz_offset),
                    end=maybe_datetime(end, tz_offset),
                ))
                # step clear of the solver tolerance so the next band is picked up
                jd = max(end, jd) + 2.0 * self.solver.time_tol
        except NumericNonConvergence as e:
            log.warning("%s periods of %s cut short: %s", kind, d, e)
        return tuple(out)

    # ---------------------------------------------------------
    # Months, seasons, years
    # ---------------------------------------------------------

    def lunar_month(self, jd_ut: float) -> Optional[LunarMonth]:
        """
        Amanta lunar month containing jd_ut, or None when it cannot be resolved.

        The month is named after the sidereal solar sign at the new moon that
        opens it (Sun in Meena -> Chaitra). If the Sun is still in the same sign
        at the closing new moon, no sankranti fell in the month and it is adhika;
        an adhika month shares its name with the regular month that follows.
        """
        try:
            nm0 = new_moon_before(self.model, jd_ut, self.solver)
            nm1 = new_moon_after(self.model, jd_ut, self.solver)
        except NumericNonConvergence as e:
            log.warning("Lunar month unresolved near JD %.5f: %s", jd_ut, e)
            return None

        sun0 = self.state_at(nm0).sun_sidereal
        sun1 = self.state_at(nm1).sun_sidereal
        s0 = int(math.floor(sun0 / 30.0))
        s1 = int(math.floor(sun1 / 30.0))

        # a sankranti inside the solver's tolerance makes the sign ambiguous
        tol = self.solver.angle_tol
        if min(sun0 % 30.0, 30.0 - sun0 % 30.0) < tol:
            log.info("Sankranti coincides with new moon near JD %.5f; month unresolved", nm0)
            return None

        idx = wrap_index(s0 + 1, 12)
        return LunarMonth(index=idx, name=lookup(names.MASA_NAMES, idx), is_leap=(s0 == s1))

    def month_of(self, anchor: SunriseAnga, index: Optional[int] = None) -> Optional[LunarMonth]:
        """
        Lunar month of tithi `index` (default: the one assigned to the day) on an
        anchored day. A kshaya tithi begins after sunrise, possibly after the new
        moon, so its month is read just inside it rather than at sunrise.
        """
        index = anchor.official if index is None else index
        if index == anchor.at_sunrise:
            return self.lunar_month(anchor.sunrise)
        try:
            _, end = anga_bounds(self.model, "tithi", anchor.sunrise, self.solver)
        except NumericNonConvergence as e:
            log.warning("Kshaya tithi start unresolved near JD %.5f: %s", anchor.sunrise, e)
            return None
        return self.lunar_month(end + KSHAYA_MONTH_OFFSET)

    def solar_month_index(self, st: CelestialState) -> int:
        return wrap_index(int(math.floor(st.sun_sidereal / 30.0)), 12)

    @staticmethod
    def ritu_for(masa: LunarMonth) -> str:
        masa_no = masa.index + 1
        return lookup(names.RITU_NAMES, (masa_no - 1) // 2)

    @staticmethod
    def ayana_for(sun_sidereal: float) -> str:
        # 90 degree quadrants: Makara..Mithuna north, Karka..Dhanu south
        quadrant = wrap_index(int(math.floor(sun_sidereal / 90.0)), 4)
        return names.AYANA_NAMES[(0, 1, 1, 0)[quadrant]]

    @staticmethod
    def drik_ritu_for(sun_sidereal: float) -> str:
        return lookup(names.RITU_NAMES, int(math.floor(sun_sidereal / 60.0)))

    def new_year_day(self, year: int, loc: Location) -> Optional[date]:
        """
        First day of Chaitra Shukla paksha (Ugadi) in Gregorian `year`: the first
        sunrise in the scan window falling in a Shukla tithi of the regular (nija) Chaitra.
        """
        sp = self.search
        start = date(year, *sp.new_year_window_start)
        for i in range(0, sp.new_year_window_days, sp.step_days):
            d = start + timedelta(days=i)
            sr = self.sunrise_anchor(d, loc)
            ti = band_index("tithi", self.state_at(sr))
            # the first waxing day shows Padyami, or Vidhiya when Padyami is kshaya
            if ti > 1:
                continue
            m = self.lunar_month(sr)
            if m is not None and m.index == 0 and not m.is_leap:
                return d
        log.warning("No Chaitra Shukla Padyami found for %d in %d-day window", year, sp.new_year_window_days)
        return None

    def cycle_year(self, d: date, loc: Location, new_year: Optional[date] = None) -> Optional[str]:
        """
        Samvatsara name of day d. `new_year` is Ugadi of d.year when the caller
        already has it; otherwise it is searched for.
        """
        ny = new_year if new_year is not None else self.new_year_day(d.year, loc)
        if ny is None:
            return None
        y = d.year if d >= ny else d.year - 1
        return lookup(names.CYCLE_YEAR_NAMES, y - names.CYCLE_EPOCH_YEAR)

    # ---------------------------------------------------------
    # Full day
    # ---------------------------------------------------------

    def day(
        self, d: date, loc: Location, *, tz_offset: float = 0.0, new_year: Optional[date] = None
    ) -> PanchangamDay:
        tithi_anchor = self.sunrise_anga("tithi", d, loc)
        sr = tithi_anchor.sunrise
        st = self.state_at(sr)

        tithi = self._event("tithi", tithi_anchor, tz_offset)
        nakshatra = self._event("nakshatra", self.sunrise_anga("nakshatra", d, loc), tz_offset)
        yoga = self._event("yoga", self.sunrise_anga("yoga", d, loc), tz_offset)
        karana_band = band_index("karana", st)
        karana = self._event("karana", SunriseAnga(sr, karana_band, karana_band, "normal"), tz_offset)

        masa = self.month_of(tithi_anchor)
        wd = weekday(to_julian(d.month, d.day, d.year))

        return PanchangamDay(
            civil_date=d,
            engine=self.id,
            location=loc,
            tz_offset=tz_offset,
            weekday=wd,
            weekday_name=lookup(names.WEEKDAY_NAMES, wd),
            sun=sun_times(d, loc, tz_offset),
            moon=moon_times(d, loc, tz_offset),
            tithi=tithi,
            paksha=names.PAKSHA_NAMES[0 if tithi.index < 15 else 1],
            nakshatra=nakshatra,
            yoga=yoga,
            karana=karana,
            raasi=lookup(names.RAASI_NAMES, int(math.floor(st.moon_sidereal / 30.0))),
            solar_masa=lookup(names.RAASI_NAMES, self.solar_month_index(st)),
            lunar_masa=masa,
            ritu=self.ritu_for(masa) if masa is not None else None,
            drik_ritu=self.drik_ritu_for(st.sun_sidereal),
            ayana=self.ayana_for(st.sun_sidereal),
            cycle_year=self.cycle_year(d, loc, new_year),
            sun_longitude=st.sun_sidereal,
            moon_longitude=st.moon_sidereal,
            ayanamsa=st.ayanamsa,
            sunrise_tithi_index=tithi_anchor.at_sunrise,
            nakshatra_periods=self.anga_periods("nakshatra", d, tz_offset),
        )
