from __future__ import annotations
import math
from datetime import date

from ..reference.deltat import delta_t_hours  # noqa: F401  (re-export)


def to_jdn(d: date) -> int:
    """Convert Gregorian date to Julian Day Number (JDN)."""
    y, m, day = d.year, d.month, d.day
    a = (14 - m) // 12
    y2 = y + 4800 - a
    m2 = m + 12 * a - 3
    jdn = day + (153 * m2 + 2) // 5 + 365 * y2 + y2 // 4 - y2 // 100 + y2 // 400 - 32045
    return jdn

def from_jdn(jdn: int) -> date:
    """Fliegel-Van Flandern inverse of to_jdn (Gregorian)."""
    a = jdn + 32044
    b = (4 * a + 3) // 146097
    c = a - (146097 * b) // 4
    d = (4 * c + 3) // 1461
    e = c - (1461 * d) // 4
    m = (5 * e + 2) // 153
    day = e - (153 * m + 2) // 5 + 1
    month = m + 3 - 12 * (m // 10)
    year = 100 * b + d - 4800 + (m // 10)
    return date(year, month, day)

def to_julian(month: int, day: float, year: int) -> float:
    """
    Proleptic Gregorian date -> Julian Date.

    The integer part of `day` selects the civil day; its fractional part is the
    time of day (UT), so to_julian(1, 1.5, 2000) == 2451545.0 (J2000.0 noon).
    """
    iday = int(math.floor(day))
    frac = day - iday
    jdn = to_jdn(date(year, month, 1)) + (iday - 1)
    return jdn - 0.5 + frac

def from_julian(jd: float) -> date:
    """Julian Date -> Gregorian civil date (month, day, year available as attributes)."""
    return from_jdn(int(math.floor(jd + 0.5)))

def normalize360(angle: float) -> float:
    """Wrap degrees to [0,360)."""
    y = math.fmod(angle, 360.0)
    if y < 0:
        y += 360.0
    # fmod of a tiny negative number can round up to exactly 360
    if y >= 360.0:
        y -= 360.0
    return y

def wrap180(angle: float) -> float:
    """Wrap degrees to (-180, 180]."""
    y = normalize360(angle)
    if y > 180.0:
        y -= 360.0
    return y

def wrap_index(i: int, n: int) -> int:
    """Reduce a table index into [0, n). All name-table lookups go through here."""
    if n <= 0:
        raise ValueError("table size must be positive")
    return int(i) % n

def weekday(jd: float) -> int:
    """Day of week for a Julian Date, 0=Sunday .. 6=Saturday."""
    return int(math.floor(jd + 1.5)) % 7

def local_midnight_jd(d: date, tz_offset: float) -> float:
    """JD(UT) of 00:00 local civil time on date d."""
    return to_jdn(d) - 0.5 - tz_offset / 24.0
