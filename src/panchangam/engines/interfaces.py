"""
panchangam.engines.interfaces
-----------------------------
The capability boundary between position models and everything that consumes
them (solver, resolver, rise/set).

Standard reference frame: position models are evaluated at JD in TT and return
geocentric ecliptic-of-date longitudes in degrees. Callers convert to/from UT.
"""

from __future__ import annotations

from typing import Any, Dict, Protocol

from ..core.types import CelestialState


class PositionModel(Protocol):
    """Sun/Moon longitude, lunar speed and ayanamsa at an instant."""

    name: str

    def state(self, jd_tt: float) -> CelestialState:
        """Immutable snapshot of Sun/Moon at jd_tt. Must be a pure function of jd_tt."""
        ...

    def info(self) -> Dict[str, Any]:
        ...
