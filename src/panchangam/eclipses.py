"""
panchangam.eclipses
-------------------
Solar and lunar eclipses for a year, and the next eclipse after an instant.

The global search is delegated to an `EclipseSearch` primitive. The default
one wraps the Swiss Ephemeris (pyswisseph) with the built-in Moshier
ephemeris, so no data files are needed. Results are computed per call and
never cached.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional, Protocol, Tuple

from .core.errors import EngineUnavailableError
from .core.time import to_julian
from .core.types import EclipseEvent, Location
from .reference.time_scales import datetime_to_jd, jd_to_datetime

log = logging.getLogger(__name__)


class EclipseSearch(Protocol):
    """Global eclipse search: next peak (JD UT) and type strictly after jd_ut."""
    def next_solar(self, jd_ut: float) -> Tuple[float, str]: ...
    def next_lunar(self, jd_ut: float) -> Tuple[float, str]: ...


def require_swisseph():
    """Import pyswisseph or raise a clear error."""
    try:
        import swisseph as swe
    except ImportError as e:
        raise EngineUnavailableError('Eclipse search requires: pip install pyswisseph') from e
    return swe


class SwissEclipseSearch:
    """EclipseSearch backed by swe.sol_eclipse_when_glob / swe.lun_eclipse_when."""

    def __init__(self) -> None:
        self.swe = require_swisseph()
        self.flags = self.swe.FLG_MOSEPH

    def _solar_type(self, retflag: int) -> str:
        swe = self.swe
        if retflag & swe.ECL_ANNULAR_TOTAL:
            return "hybrid"
        if retflag & swe.ECL_TOTAL:
            return "total"
        if retflag & swe.ECL_ANNULAR:
            return "annular"
        return "partial"

    def _lunar_type(self, retflag: int) -> str:
        swe = self.swe
        if retflag & swe.ECL_TOTAL:
            return "total"
        if retflag & swe.ECL_PARTIAL:
            return "partial"
        return "penumbral"

    def next_solar(self, jd_ut: float) -> Tuple[float, str]:
        retflag, tret = self.swe.sol_eclipse_when_glob(jd_ut, self.flags)
        return float(tret[0]), self._solar_type(retflag)

    def next_lunar(self, jd_ut: float) -> Tuple[float, str]:
        retflag, tret = self.swe.lun_eclipse_when(jd_ut, self.flags)
        return float(tret[0]), self._lunar_type(retflag)

    def visible(self, event: EclipseEvent, loc: Location) -> bool:
        """Whether the eclipse at event.peak_jd is visible from loc."""
        swe = self.swe
        geopos = (loc.lng, loc.lat, loc.elevation)
        start = event.peak_jd - 0.5
        if event.kind == "solar":
            retflag, tret, _ = swe.sol_eclipse_when_loc(start, geopos, self.flags)
        else:
            retflag, tret, _ = swe.lun_eclipse_when_loc(start, geopos, self.flags)
        if retflag == 0 or abs(float(tret[0]) - event.peak_jd) > 1.0:
            return False
        return bool(retflag & swe.ECL_VISIBLE)


def _make_event(kind: str, peak_jd: float, type_: str) -> EclipseEvent:
    peak = jd_to_datetime(peak_jd)
    return EclipseEvent(
        id=f"{kind}-{peak.strftime('%Y-%m-%dT%H:%M:%SZ')}",
        kind=kind,  # type: ignore[arg-type]
        type=type_,
        peak=peak,
        peak_jd=peak_jd,
    )


def _year_bounds(year: int) -> Tuple[float, float]:
    return to_julian(1, 1, year), to_julian(1, 1, year + 1)


def _enumerate(step, kind: str, jd0: float, jd1: float) -> List[EclipseEvent]:
    out: List[EclipseEvent] = []
    jd = jd0
    while True:
        peak, type_ = step(jd)
        if peak >= jd1:
            break
        if peak >= jd0:
            out.append(_make_event(kind, peak, type_))
        jd = peak + 1.0
    return out


def eclipses_in_year(year: int, search: Optional[EclipseSearch] = None) -> List[EclipseEvent]:
    """All solar and lunar eclipses whose peak falls in Gregorian `year` (UT), by peak."""
    search = search or SwissEclipseSearch()
    jd0, jd1 = _year_bounds(year)
    events = _enumerate(search.next_solar, "solar", jd0, jd1) + _enumerate(search.next_lunar, "lunar", jd0, jd1)
    events.sort(key=lambda e: e.peak_jd)
    log.debug("%d eclipses in %d", len(events), year)
    return events


def next_eclipse(after: datetime, search: Optional[EclipseSearch] = None) -> EclipseEvent:
    """The first solar or lunar eclipse peaking after `after` (timezone-aware)."""
    search = search or SwissEclipseSearch()
    jd = datetime_to_jd(after)
    solar = search.next_solar(jd)
    lunar = search.next_lunar(jd)
    if solar[0] <= lunar[0]:
        return _make_event("solar", *solar)
    return _make_event("lunar", *lunar)


def find_eclipse(event_id: str, search: Optional[EclipseSearch] = None) -> Optional[EclipseEvent]:
    """Look an event up by its id ("solar-2024-04-08T18:17:16Z")."""
    try:
        kind, stamp = event_id.split("-", 1)
        year = int(stamp[:4])
    except ValueError:
        log.info("Malformed eclipse id %r", event_id)
        return None
    for ev in eclipses_in_year(year, search):
        if ev.id == event_id or (ev.kind == kind and ev.id[:len(kind) + 17] == event_id[:len(kind) + 17]):
            return ev
    return None


def is_visible(event: EclipseEvent, loc: Location) -> bool:
    return SwissEclipseSearch().visible(event, loc)


def eclipse_title(event: EclipseEvent) -> str:
    """Display name, e.g. "Total Solar Eclipse"."""
    return f"{event.type.capitalize()} {event.kind.capitalize()} Eclipse"
