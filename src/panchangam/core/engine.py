from __future__ import annotations
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Optional, Protocol

from .types import Location, LunarMonth, PanchangamDay

class CalendarEngine(Protocol):
    def info(self) -> Dict[str, Any]: ...
    def day(self, d: date, loc: Location, *, tz_offset: float = 0.0, new_year: Optional[date] = None) -> PanchangamDay: ...
    def lunar_month(self, jd_ut: float) -> Optional[LunarMonth]: ...
    def new_year_day(self, year: int, loc: Location) -> Optional[date]: ...
    def cycle_year(self, d: date, loc: Location, new_year: Optional[date] = None) -> Optional[str]: ...

@dataclass
class EngineRegistry:
    _engines: Dict[str, CalendarEngine]

    def get(self, name: str) -> CalendarEngine:
        if name not in self._engines:
            raise KeyError(f"Unknown engine '{name}'. Available: {sorted(self._engines)}")
        return self._engines[name]

    def list(self) -> List[str]:
        return sorted(self._engines.keys())

    def register(self, name: str, engine: CalendarEngine, *, overwrite: bool = False) -> None:
        if (not overwrite) and (name in self._engines):
            raise KeyError(f"Engine '{name}' already exists. Use overwrite=True to replace.")
        self._engines[name] = engine
