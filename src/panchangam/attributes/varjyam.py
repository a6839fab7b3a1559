"""
Varjyam: the inauspicious 4-ghati window inside each nakshatra.

Its start lies a fixed number of ghatis (1/60 of the nakshatra's span) after the
nakshatra begins; its length is 4/60 of the span, i.e. 96 minutes for a
nakshatra lasting exactly one day.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Tuple

from ..core.time import wrap_index
from ..core.types import AngaEvent

# start ghati of varjyam for each nakshatra, Ashwini..Revati
VARJYAM_START_GHATI: Tuple[int, ...] = (
    50, 24, 30, 40, 14, 21, 30, 20, 32, 30, 20, 18, 21, 20,
    14, 14, 10, 14, 20, 24, 20, 10, 10, 18, 16, 24, 30,
)
VARJYAM_GHATIS = 4


def varjyam_window(nakshatra: AngaEvent) -> Optional[Tuple[datetime, datetime]]:
    """(start, end) of varjyam in the given nakshatra, or None if its bounds are unknown."""
    if nakshatra.start is None or nakshatra.end is None:
        return None
    span = nakshatra.end - nakshatra.start
    ghati = VARJYAM_START_GHATI[wrap_index(nakshatra.index, 27)]
    start = nakshatra.start + span * ghati / 60
    end = min(start + span * VARJYAM_GHATIS / 60, nakshatra.end)
    return start, end
