"""
panchangam.lookup
-----------------
Reverse lookup: Gregorian date(s) on which a named masa/paksha/tithi falls in
a given year at a given place.

Candidate days are scanned at sunrise over the Gregorian months in which the
lunar month can occur (padded for adhika shifts), or over the whole year when
that range would wrap the year end. A day matches when the tithi at sunrise,
or the tithi skipped (kshaya) during that day, is the target, and the day's
lunar month has the target name. After a hit the scan jumps ahead by
`min_gap_days` so that a tithi spanning two sunrises is reported once.

Days whose lunar month cannot be resolved fall back to the solar month and are
reported as provisional matches.
"""

from __future__ import annotations

import calendar
import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, List, Optional, Tuple

from .core.errors import InvalidInputName
from .core.names import parse_masa, parse_paksha, parse_tithi, normalize_name
from .core.time import wrap_index
from .core.types import Location, SearchParams, TithiMatch
from .engines.calendar import PanchangamEngine

log = logging.getLogger(__name__)

# Gregorian months (first, last) over which each lunar month can run.
# Margashira and Pushya straddle the year end and are searched over the whole year.
MASA_MONTH_RANGE: Dict[int, Optional[Tuple[int, int]]] = {
    0: (3, 5),    # Chaitra
    1: (4, 6),    # Vaishakha
    2: (5, 7),    # Jyeshtha
    3: (6, 8),    # Ashadha
    4: (7, 9),    # Shravana
    5: (8, 10),   # Bhadrapada
    6: (9, 11),   # Ashvayuja
    7: (10, 12),  # Kartika
    8: None,      # Margashira
    9: None,      # Pushya
    10: (1, 3),   # Magha
    11: (2, 4),   # Phalguna
}


@dataclass(frozen=True)
class LunarTarget:
    masa: int
    paksha: int
    tithi: int                  # absolute 0..29
    leap: Optional[bool] = None  # None: either adhika or nija


def parse_target(masa: str, paksha: str, tithi: str) -> LunarTarget:
    """Parse permissively spelled names; raises InvalidInputName."""
    m = parse_masa(masa)
    p = parse_paksha(paksha)
    t = parse_tithi(tithi, p)
    key = normalize_name(masa)
    leap = True if key.startswith("adhika") else (False if key.startswith("nija") else None)
    return LunarTarget(masa=m, paksha=p, tithi=t, leap=leap)


def candidate_window(year: int, masa: int, pad_days: int) -> Tuple[date, date]:
    rng = MASA_MONTH_RANGE.get(wrap_index(masa, 12))
    first, last = date(year, 1, 1), date(year, 12, 31)
    if rng is None:
        return first, last
    m0, m1 = rng
    lo = date(year, m0, 1) - timedelta(days=pad_days)
    hi = date(year, m1, calendar.monthrange(year, m1)[1]) + timedelta(days=pad_days)
    return max(lo, first), min(hi, last)


def match_day(eng: PanchangamEngine, d: date, loc: Location, target: LunarTarget) -> Optional[bool]:
    """
    None if d does not match; otherwise whether the match is provisional.
    """
    a = eng.sunrise_anga("tithi", d, loc)
    if target.tithi not in (a.at_sunrise, a.official):
        return None

    # a kshaya tithi may open the next month, so read the month of the tithi that matched
    m = eng.month_of(a, target.tithi)
    if m is None:
        solar = wrap_index(eng.solar_month_index(eng.state_at(a.sunrise)) + 1, 12)
        return True if solar == target.masa else None
    if m.index != target.masa:
        return None
    if target.leap is not None and m.is_leap != target.leap:
        return None
    return False


def search(
    eng: PanchangamEngine,
    year: int,
    target: LunarTarget,
    loc: Location,
    params: Optional[SearchParams] = None,
) -> List[TithiMatch]:
    sp = params or eng.search
    start, end = candidate_window(year, target.masa, sp.window_pad_days)
    log.debug("Scanning %s..%s for %s", start, end, target)

    hits: Dict[date, TithiMatch] = {}
    d = start
    while d <= end:
        provisional = match_day(eng, d, loc, target)
        if provisional is not None:
            hits[d] = TithiMatch(date=d, provisional=provisional)
            d += timedelta(days=sp.min_gap_days)
            continue
        d += timedelta(days=sp.step_days)
    return [hits[k] for k in sorted(hits)]


def find_dates(
    eng: PanchangamEngine,
    year: int,
    masa: str,
    paksha: str,
    tithi: str,
    loc: Location,
    *,
    params: Optional[SearchParams] = None,
    include_provisional: bool = True,
) -> List[date]:
    """
    Ascending list of dates in `year` matching masa/paksha/tithi. Unrecognized
    names give an empty list.
    """
    try:
        target = parse_target(masa, paksha, tithi)
    except InvalidInputName as e:
        log.info("Reverse lookup skipped: %s", e)
        return []
    return [
        m.date for m in search(eng, year, target, loc, params)
        if include_provisional or not m.provisional
    ]


def find_date(
    eng: PanchangamEngine,
    year: int,
    masa: str,
    paksha: str,
    tithi: str,
    loc: Location,
    **kwargs,
) -> Optional[date]:
    dates = find_dates(eng, year, masa, paksha, tithi, loc, **kwargs)
    return dates[0] if dates else None
