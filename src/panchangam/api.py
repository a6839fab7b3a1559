from __future__ import annotations

import os
from dataclasses import replace
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Sequence

from .attributes import standard as _standard  # noqa: F401  (registers built-in attributes)
from .attributes.registry import compute_attributes
from .core.engine import CalendarEngine, EngineRegistry
from .core.types import EclipseEvent, EngineSpec, Location, MoonTimes, PanchangamDay, SearchParams, SunTimes
from .engines.astro.moonrise import moon_times as _moon_times
from .engines.astro.sunrise import sun_times as _sun_times
from .engines.factory import make_engine as _make_engine
from . import eclipses as _eclipses
from . import lookup as _lookup

_registry: Optional[EngineRegistry] = None

def default_engine() -> str:
    """Engine used when none is named; override with PANCHANGAM_ENGINE."""
    return os.environ.get("PANCHANGAM_ENGINE", "").strip() or "drik"

def set_registry(reg: EngineRegistry) -> None:
    global _registry
    _registry = reg

def _reg() -> EngineRegistry:
    if _registry is None:
        raise RuntimeError("Engine registry not initialized")
    return _registry

def _engine(name: Optional[str]) -> CalendarEngine:
    return _reg().get(name or default_engine())

def list_engines() -> List[str]:
    return _reg().list()

def engine_info(engine: str) -> Dict[str, Any]:
    return _reg().get(engine).info()

def make_engine(spec: EngineSpec) -> CalendarEngine:
    return _make_engine(spec)

def register_engine(name: str, engine: CalendarEngine, *, overwrite: bool = False) -> None:
    _reg().register(name, engine, overwrite=overwrite)

# ============================================================
# Almanac
# ============================================================

def day_panchangam(
    d: date,
    location: Location,
    *,
    tz_offset: float = 0.0,
    engine: Optional[str] = None,
    attributes: Sequence[str] = (),
    new_year: Optional[date] = None,
) -> PanchangamDay:
    """
    Sunrise-anchored almanac of civil day d at location. Pass `new_year` (Ugadi of
    d.year) when resolving many days of one year to skip its search on every call.
    """
    day = _engine(engine).day(d, location, tz_offset=tz_offset, new_year=new_year)
    if attributes:
        day = replace(day, attributes=compute_attributes(day, attributes))
    return day

def sun_times(d: date, location: Location, *, tz_offset: float = 0.0) -> SunTimes:
    return _sun_times(d, location, tz_offset)

def moon_times(d: date, location: Location, *, tz_offset: float = 0.0) -> MoonTimes:
    return _moon_times(d, location, tz_offset)

def new_year_day(year: int, location: Location, *, engine: Optional[str] = None) -> Optional[date]:
    """Chaitra Shukla Padyami (Ugadi) in Gregorian `year`."""
    return _engine(engine).new_year_day(year, location)

def cycle_year_name(
    d: date, location: Location, *, engine: Optional[str] = None, new_year: Optional[date] = None
) -> Optional[str]:
    return _engine(engine).cycle_year(d, location, new_year)

# ============================================================
# Reverse lookup
# ============================================================

def find_dates(
    year: int,
    masa: str,
    paksha: str,
    tithi: str,
    location: Location,
    *,
    engine: Optional[str] = None,
    params: Optional[SearchParams] = None,
    include_provisional: bool = True,
) -> List[date]:
    return _lookup.find_dates(
        _engine(engine), year, masa, paksha, tithi, location,
        params=params, include_provisional=include_provisional,
    )

def find_date(
    year: int,
    masa: str,
    paksha: str,
    tithi: str,
    location: Location,
    *,
    engine: Optional[str] = None,
    params: Optional[SearchParams] = None,
) -> Optional[date]:
    return _lookup.find_date(_engine(engine), year, masa, paksha, tithi, location, params=params)

# ============================================================
# Eclipses
# ============================================================

def eclipses_in_year(year: int) -> List[EclipseEvent]:
    return _eclipses.eclipses_in_year(year)

def next_eclipse(after: datetime) -> EclipseEvent:
    return _eclipses.next_eclipse(after)
