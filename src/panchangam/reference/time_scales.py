from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

from .deltat import delta_t_seconds, decimal_year_from_jd


# ============================================================
# datetime <-> JD(UT)
# ============================================================

_JD_UNIX_EPOCH = 2440587.5  # JD at 1970-01-01 00:00:00 UTC


def fixed_zone(tz_offset_hours: float) -> timezone:
    """A fixed-offset tzinfo for a timezone offset given in hours."""
    if tz_offset_hours == 0:
        return timezone.utc
    return timezone(timedelta(hours=tz_offset_hours))


def datetime_to_jd(dt: datetime) -> float:
    """
    datetime -> JD (UT). Requires a timezone-aware datetime.
    """
    if dt.tzinfo is None:
        raise ValueError("datetime must be timezone-aware")
    delta = dt.astimezone(timezone.utc) - datetime(1970, 1, 1, tzinfo=timezone.utc)
    return _JD_UNIX_EPOCH + delta / timedelta(days=1)


def jd_to_datetime(jd_ut: float, tz_offset_hours: float = 0.0) -> datetime:
    """
    JD (UT) -> timezone-aware datetime in the fixed zone `tz_offset_hours`.

    This is the only place where a timezone offset touches a resolved instant;
    all solving happens on the UT axis.
    """
    utc = datetime(1970, 1, 1, tzinfo=timezone.utc) + timedelta(days=jd_ut - _JD_UNIX_EPOCH)
    # microsecond noise from float days is meaningless at almanac precision
    utc = utc.replace(microsecond=0)
    return utc.astimezone(fixed_zone(tz_offset_hours))


def maybe_datetime(jd_ut: Optional[float], tz_offset_hours: float = 0.0) -> Optional[datetime]:
    return None if jd_ut is None else jd_to_datetime(jd_ut, tz_offset_hours)


# ============================================================
# UT <-> TT
# ============================================================

def jd_ut_to_jd_tt(jd_ut: float) -> float:
    """TT = UT + ΔT."""
    return jd_ut + delta_t_seconds(decimal_year_from_jd(jd_ut)) / 86400.0


def jd_tt_to_jd_ut(jd_tt: float) -> float:
    """
    Inverse of jd_ut_to_jd_tt.

    Two fixed-point iterations suffice since ΔT varies slowly.
    """
    jd_ut = jd_tt
    for _ in range(2):
        jd_ut = jd_tt - delta_t_seconds(decimal_year_from_jd(jd_ut)) / 86400.0
    return jd_ut
