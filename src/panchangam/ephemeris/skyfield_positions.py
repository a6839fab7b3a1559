#ephemeris/skyfield_positions.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from . import ephemeris_dir, require_ephemeris

DEFAULT_KERNEL = "de421.bsp"


@dataclass
class SkyfieldPositions:
    """
    Apparent geocentric ecliptic longitudes (true equinox of date) from a JPL
    kernel via Skyfield. The kernel is downloaded into `directory` on first use.

    Requires optional deps:
      pip install "panchangam[ephemeris]"
    """
    ts: object
    eph: object

    @classmethod
    def load(cls, kernel: str = DEFAULT_KERNEL, directory: Optional[str] = None) -> "SkyfieldPositions":
        Loader = require_ephemeris()
        load = Loader(ephemeris_dir(directory))
        return cls(ts=load.timescale(), eph=load(kernel))

    def ecliptic_lon_deg(self, jd_tt, body: str):
        """Longitude of body ("sun" or "moon") at JD(TT); scalar or numpy array."""
        from skyfield.framelib import ecliptic_frame

        t = self.ts.tt_jd(jd_tt)
        earth = self.eph["earth"]
        apparent = earth.at(t).observe(self.eph[body]).apparent()
        _lat, lon, _dist = apparent.frame_latlon(ecliptic_frame)
        return lon.degrees

    def sun_moon(self, jd_tt) -> Tuple[object, object]:
        return self.ecliptic_lon_deg(jd_tt, "sun"), self.ecliptic_lon_deg(jd_tt, "moon")
