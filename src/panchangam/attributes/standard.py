from __future__ import annotations
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

from ..core import names
from ..core.names import lookup
from .registry import register_attribute
from .varjyam import varjyam_window

def gana(day) -> Dict[str, Any]:
    return {"gana": lookup(names.GANA_NAMES, names.NAKSHATRA_GANA[day.nakshatra.index])}

def guna(day) -> Dict[str, Any]:
    # movable / fixed / dual sign of the Moon
    raasi = names.RAASI_NAMES.index(day.raasi)
    return {"guna": lookup(names.GUNA_NAMES, raasi % 3)}

def trinity(day) -> Dict[str, Any]:
    # nine nakshatras to each deity
    return {"trinity": lookup(names.TRINITY_NAMES, day.nakshatra.index // 9)}

def saka_year(day) -> Dict[str, Any]:
    d = day.civil_date
    # the national Saka year turns on Chaitra 1 = March 22
    before = (d.month, d.day) < (3, 22)
    return {"saka_year": d.year - 79 if before else d.year - 78}

def ayanamsa_dms(day) -> Dict[str, Any]:
    a = abs(day.ayanamsa)
    deg = int(a)
    minutes = int((a - deg) * 60)
    seconds = (a - deg - minutes / 60) * 3600
    return {"ayanamsa_dms": f"{deg}°{minutes:02d}'{seconds:04.1f}\""}

def varjyam(day) -> Dict[str, Any]:
    """Varjyam windows of every nakshatra period that overlap the local civil day."""
    tz = timezone(timedelta(hours=day.tz_offset))
    day_start = datetime(day.civil_date.year, day.civil_date.month, day.civil_date.day, tzinfo=tz)
    day_end = day_start + timedelta(days=1)

    windows = []
    for nak in day.nakshatra_periods or (day.nakshatra,):
        w = varjyam_window(nak)
        if w is None or w[1] <= day_start or w[0] >= day_end:
            continue
        windows.append({"start": w[0], "end": w[1], "nakshatra": nak.name})
    return {"varjyam": windows}

register_attribute("gana", gana)
register_attribute("guna", guna)
register_attribute("trinity", trinity)
register_attribute("saka_year", saka_year)
register_attribute("ayanamsa_dms", ayanamsa_dms)
register_attribute("varjyam", varjyam)
