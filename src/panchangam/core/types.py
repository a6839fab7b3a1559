from __future__ import annotations
from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Any, Dict, Literal, Optional, Tuple

AngaKind = Literal["tithi", "nakshatra", "yoga", "karana"]
AngaStatus = Literal["normal", "kshaya", "vriddhi"]

@dataclass(frozen=True)
class Location:
    lat: float
    lng: float  # degrees east
    elevation: float = 0.0  # metres

@dataclass(frozen=True)
class CelestialState:
    """
    Geocentric Sun/Moon state at one instant (JD in TT).

    Returned by every position-model call and threaded explicitly through the
    solver and resolver; nothing about "the current longitude" lives anywhere else.
    Longitudes are tropical; ayanamsa is signed so that sidereal = tropical + ayanamsa.
    """
    jd_tt: float
    sun_tropical: float
    moon_tropical: float
    sun_speed: float   # deg/day
    moon_speed: float  # deg/day
    ayanamsa: float
    moon_latitude: float = 0.0

    @property
    def sun_sidereal(self) -> float:
        return (self.sun_tropical + self.ayanamsa) % 360.0

    @property
    def moon_sidereal(self) -> float:
        return (self.moon_tropical + self.ayanamsa) % 360.0

@dataclass(frozen=True)
class AngaEvent:
    kind: AngaKind
    name: str
    index: int
    start: Optional[datetime]
    end: Optional[datetime]
    status: AngaStatus = "normal"

@dataclass(frozen=True)
class LunarMonth:
    index: int  # 0=Chaitra .. 11=Phalguna
    name: str
    is_leap: bool = False

@dataclass(frozen=True)
class SunTimes:
    solar_noon: datetime
    nadir: datetime
    sunrise: Optional[datetime] = None
    sunset: Optional[datetime] = None
    sunrise_end: Optional[datetime] = None
    sunset_start: Optional[datetime] = None
    dawn: Optional[datetime] = None
    dusk: Optional[datetime] = None
    nautical_dawn: Optional[datetime] = None
    nautical_dusk: Optional[datetime] = None
    night_end: Optional[datetime] = None
    night: Optional[datetime] = None

@dataclass(frozen=True)
class MoonTimes:
    rise: Optional[datetime]
    set: Optional[datetime]
    always_up: bool = False
    always_down: bool = False

@dataclass(frozen=True)
class PanchangamDay:
    civil_date: date
    engine: str
    location: Location
    tz_offset: float
    weekday: int  # 0=Sunday
    weekday_name: str
    sun: SunTimes
    moon: MoonTimes
    tithi: AngaEvent
    paksha: str
    nakshatra: AngaEvent
    yoga: AngaEvent
    karana: AngaEvent
    raasi: str
    solar_masa: str
    lunar_masa: Optional[LunarMonth]
    ritu: Optional[str]
    drik_ritu: str
    ayana: str
    cycle_year: Optional[str]
    sun_longitude: float   # sidereal, at sunrise
    moon_longitude: float  # sidereal, at sunrise
    ayanamsa: float
    sunrise_tithi_index: int
    nakshatra_periods: Tuple[AngaEvent, ...] = ()  # every nakshatra overlapping the civil day
    attributes: Optional[Dict[str, Any]] = None

    @property
    def paksha_index(self) -> int:
        return 0 if self.tithi.index < 15 else 1

@dataclass(frozen=True)
class EclipseEvent:
    id: str
    kind: Literal["solar", "lunar"]
    type: str
    peak: datetime
    peak_jd: float

@dataclass(frozen=True)
class TithiMatch:
    date: date
    provisional: bool = False

@dataclass(frozen=True)
class SearchParams:
    """Bounds for the day-by-day scans (new year, reverse lookup)."""
    step_days: int = 1
    new_year_window_start: Tuple[int, int] = (3, 1)  # (month, day)
    new_year_window_days: int = 62
    min_gap_days: int = 15
    window_pad_days: int = 10

@dataclass(frozen=True)
class EngineSpec:
    """Pure data payload for constructing a panchangam engine."""
    id: str
    kind: Literal["ephemeris", "classical"]
    model_params: Any  # DrikParams | ClassicalParams
    solver: Any        # SolverParams
    search: SearchParams = SearchParams()
    description: str = ""

    def tweak(self, **changes: Any) -> "EngineSpec":
        return replace(self, **changes)
