"""JPL-kernel positions for validating the analytic Sun and Moon series.

Needs the optional extras:
  pip install "panchangam[ephemeris]"

Kernels are cached under $PANCHANGAM_EPHEM_DIR (default ~/.panchangam).
"""
from __future__ import annotations

import os
from typing import Optional


def ephemeris_dir(directory: Optional[str] = None) -> str:
    return directory or os.environ.get("PANCHANGAM_EPHEM_DIR") or os.path.expanduser("~/.panchangam")


def require_ephemeris():
    """Return skyfield's `Loader`, or fail with an install hint if the extras are missing."""
    try:
        import jplephem  # noqa: F401  (skyfield reads .bsp segments through it)
        from skyfield.api import Loader
    except ImportError as e:
        raise RuntimeError('Kernel positions need skyfield and jplephem: pip install "panchangam[ephemeris]"') from e
    return Loader
