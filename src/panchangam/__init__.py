"""panchangam public API.

Keep this surface small: users should mostly interact with functions re-exported here.
"""

# Initialize registry on import
from . import api_init as _api_init  # noqa: F401

from .api import (
    day_panchangam,
    sun_times,
    moon_times,
    new_year_day,
    cycle_year_name,
    find_dates,
    find_date,
    eclipses_in_year,
    next_eclipse,
    list_engines,
    engine_info,
    make_engine,
    register_engine,
)
from .core.time import to_julian, from_julian, weekday, normalize360, wrap_index, delta_t_hours
from .core.types import Location, PanchangamDay, AngaEvent, LunarMonth, EclipseEvent

__all__ = [
    "day_panchangam",
    "sun_times",
    "moon_times",
    "new_year_day",
    "cycle_year_name",
    "find_dates",
    "find_date",
    "eclipses_in_year",
    "next_eclipse",
    "list_engines",
    "engine_info",
    "make_engine",
    "register_engine",
    "to_julian",
    "from_julian",
    "weekday",
    "normalize360",
    "wrap_index",
    "delta_t_hours",
    "Location",
    "PanchangamDay",
    "AngaEvent",
    "LunarMonth",
    "EclipseEvent",
]
