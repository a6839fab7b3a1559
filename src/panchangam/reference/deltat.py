"""
panchangam.reference.deltat
---------------------------
ΔT (= TT − UT) used to move between civil time and the dynamical time the
position models are evaluated in.

The default is the Espenak–Meeus (NASA Five Millennium Canon) piecewise
polynomial, good to well under a minute in the modern era and coarse in
antiquity. For higher fidelity a tabulated ΔT can be supplied as a CSV file
(columns: decimal_year, delta_t_seconds) through the PANCHANGAM_DELTAT_TABLE
environment variable; the polynomial is used outside the table range.
"""

from __future__ import annotations

import bisect
import csv
import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional, Tuple

log = logging.getLogger(__name__)

J2000 = 2451545.0
DAYS_PER_JULIAN_YEAR = 365.25


def decimal_year_from_jd(jd: float) -> float:
    """Decimal year of a Julian Date (Julian-year approximation around J2000)."""
    return 2000.0 + (jd - J2000) / DAYS_PER_JULIAN_YEAR


# ---------------------------------------------------------------------------
# Espenak–Meeus piecewise polynomial
# ---------------------------------------------------------------------------

def _poly(u: float, coeffs: Tuple[float, ...]) -> float:
    """Horner evaluation for Σ coeffs[k] u^k."""
    acc = 0.0
    for c in reversed(coeffs):
        acc = acc * u + c
    return acc


# (upper bound of y, origin, scale, coefficients in powers of (y-origin)/scale)
_BRANCHES: Tuple[Tuple[float, float, float, Tuple[float, ...]], ...] = (
    (-500.0, 1820.0, 100.0, (-20.0, 0.0, 32.0)),
    (500.0, 0.0, 100.0, (10583.6, -1014.41, 33.78311, -5.952053, -0.1798452, 0.022174192, 0.0090316521)),
    (1600.0, 1000.0, 100.0, (1574.2, -556.01, 71.23472, 0.319781, -0.8503463, -0.005050998, 0.0083572073)),
    (1700.0, 1600.0, 1.0, (120.0, -0.9808, -0.01532, 1.0 / 7129.0)),
    (1800.0, 1700.0, 1.0, (8.83, 0.1603, -0.0059285, 0.00013336, -1.0 / 1174000.0)),
    (1860.0, 1800.0, 1.0, (13.72, -0.332447, 0.0068612, 0.0041116, -0.00037436,
                           0.0000121272, -0.0000001699, 0.000000000875)),
    (1900.0, 1860.0, 1.0, (7.62, 0.5737, -0.251754, 0.01680668, -0.0004473624, 1.0 / 233174.0)),
    (1920.0, 1900.0, 1.0, (-2.79, 1.494119, -0.0598939, 0.0061966, -0.000197)),
    (1941.0, 1920.0, 1.0, (21.20, 0.84493, -0.076100, 0.0020936)),
    (1961.0, 1950.0, 1.0, (29.07, 0.407, -1.0 / 233.0, 1.0 / 2547.0)),
    (1986.0, 1975.0, 1.0, (45.45, 1.067, -1.0 / 260.0, -1.0 / 718.0)),
    (2005.0, 2000.0, 1.0, (63.86, 0.3345, -0.060374, 0.0017275, 0.000651814, 0.00002373599)),
    (2050.0, 2000.0, 1.0, (62.92, 0.32217, 0.005589)),
)


def delta_t_em2006(y: float) -> float:
    """
    Espenak–Meeus piecewise polynomial ΔT(y) in seconds; y is a decimal year.
    """
    for upper, origin, scale, coeffs in _BRANCHES:
        if y < upper:
            return _poly((y - origin) / scale, coeffs)

    u = (y - 1820.0) / 100.0
    dt = -20.0 + 32.0 * u * u
    if y < 2150.0:
        # joins the 2005-2050 branch to the long-term parabola
        dt -= 0.5628 * (2150.0 - y)
    return dt


# ---------------------------------------------------------------------------
# Optional user table
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DeltaTTable:
    """Piecewise-linear ΔT table over decimal-year coordinate."""
    x: Tuple[float, ...]
    y: Tuple[float, ...]

    @property
    def range(self) -> Tuple[float, float]:
        return (self.x[0], self.x[-1])

    def eval(self, xq: float) -> float:
        if not (self.x[0] <= xq <= self.x[-1]):
            raise ValueError(f"x out of range [{self.x[0]}, {self.x[-1]}]: {xq}")
        hi = bisect.bisect_right(self.x, xq)
        if hi >= len(self.x):
            return self.y[-1]
        lo = hi - 1
        x0, x1 = self.x[lo], self.x[hi]
        t = (xq - x0) / (x1 - x0)
        return self.y[lo] + t * (self.y[hi] - self.y[lo])


def read_table(path: Path) -> DeltaTTable:
    xs: list[float] = []
    ys: list[float] = []
    with path.open("r", encoding="utf-8", newline="") as f:
        for row in csv.DictReader(f):
            xs.append(float(row["decimal_year"]))
            ys.append(float(row["delta_t_seconds"]))
    if len(xs) < 2:
        raise ValueError(f"ΔT table {path} needs at least two rows")
    for i in range(1, len(xs)):
        if not (xs[i] > xs[i - 1]):
            raise ValueError("ΔT table x is not strictly increasing")
    return DeltaTTable(tuple(xs), tuple(ys))


@lru_cache(maxsize=1)
def load_user_table() -> Optional[DeltaTTable]:
    """Load the table named by PANCHANGAM_DELTAT_TABLE, if any."""
    p = os.environ.get("PANCHANGAM_DELTAT_TABLE", "").strip()
    if not p:
        return None
    path = Path(p).expanduser()
    if not path.is_file():
        log.warning("PANCHANGAM_DELTAT_TABLE=%s is not a file; using polynomial ΔT", p)
        return None
    try:
        return read_table(path)
    except (OSError, KeyError, ValueError) as e:
        log.warning("Could not read ΔT table %s (%s); using polynomial ΔT", path, e)
        return None


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def delta_t_seconds(y: float) -> float:
    """ΔT in seconds for decimal year y."""
    tbl = load_user_table()
    if tbl is not None:
        a, b = tbl.range
        if a <= y <= b:
            return tbl.eval(y)
    return delta_t_em2006(y)


def delta_t_hours(jd: float) -> float:
    """ΔT in hours at Julian Date jd."""
    return delta_t_seconds(decimal_year_from_jd(jd)) / 3600.0
