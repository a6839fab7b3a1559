"""
panchangam.core.names
---------------------
Fixed name tables and the permissive name parser used by reverse lookup.

Every table is indexed through `lookup`, which wraps the index into range first.
"""

from __future__ import annotations

import re
from typing import Dict, Optional, Sequence, Tuple

from .errors import InvalidInputName
from .time import wrap_index

TITHI_NAMES: Tuple[str, ...] = (
    "Padyami", "Vidhiya", "Thadiya", "Chaviti", "Panchami",
    "Shasti", "Saptami", "Ashtami", "Navami", "Dasami",
    "Ekadasi", "Dvadasi", "Trayodasi", "Chaturdasi", "Pournami",
    "Padyami", "Vidhiya", "Thadiya", "Chaviti", "Panchami",
    "Shasti", "Saptami", "Ashtami", "Navami", "Dasami",
    "Ekadasi", "Dvadasi", "Trayodasi", "Chaturdasi", "Amavasya",
)

PAKSHA_NAMES: Tuple[str, ...] = ("Shukla", "Krishna")

NAKSHATRA_NAMES: Tuple[str, ...] = (
    "Ashwini", "Bharani", "Krittika", "Rohini", "Mrigashira", "Ardra",
    "Punarvasu", "Pushya", "Ashlesha", "Magha", "Purva Phalguni", "Uttara Phalguni",
    "Hasta", "Chitra", "Swati", "Vishakha", "Anuradha", "Jyeshtha",
    "Mula", "Purva Ashadha", "Uttara Ashadha", "Shravana", "Dhanishta", "Shatabhisha",
    "Purva Bhadrapada", "Uttara Bhadrapada", "Revati",
)

YOGA_NAMES: Tuple[str, ...] = (
    "Vishkambha", "Priti", "Ayushman", "Saubhagya", "Shobhana", "Atiganda",
    "Sukarma", "Dhriti", "Shula", "Ganda", "Vriddhi", "Dhruva",
    "Vyaghata", "Harshana", "Vajra", "Siddhi", "Vyatipata", "Variyan",
    "Parigha", "Shiva", "Siddha", "Sadhya", "Shubha", "Shukla",
    "Brahma", "Indra", "Vaidhriti",
)

KARANA_NAMES: Tuple[str, ...] = (
    "Bava", "Balava", "Kaulava", "Taitila", "Garaja", "Vanija", "Vishti",
    "Shakuni", "Chatushpada", "Naga", "Kimstughna",
)

RAASI_NAMES: Tuple[str, ...] = (
    "Mesha", "Vrishabha", "Mithuna", "Karka", "Simha", "Kanya",
    "Tula", "Vrischika", "Dhanu", "Makara", "Kumbha", "Meena",
)

MASA_NAMES: Tuple[str, ...] = (
    "Chaitra", "Vaishakha", "Jyeshtha", "Ashadha", "Shravana", "Bhadrapada",
    "Ashvayuja", "Kartika", "Margashira", "Pushya", "Magha", "Phalguna",
)

RITU_NAMES: Tuple[str, ...] = ("Vasanta", "Grishma", "Varsha", "Sharad", "Hemanta", "Shishira")

AYANA_NAMES: Tuple[str, ...] = ("Uttarayana", "Dakshinayana")

WEEKDAY_NAMES: Tuple[str, ...] = (
    "Ravivara", "Somavara", "Mangalavara", "Budhavara", "Guruvara", "Shukravara", "Shanivara",
)

# Index 0 = Prabhava = 1867 (and every 60 years after).
CYCLE_YEAR_NAMES: Tuple[str, ...] = (
    "Prabhava", "Vibhava", "Shukla", "Pramoda", "Prajothpatti", "Aangirasa",
    "Shrimukha", "Bhava", "Yuva", "Dhathu", "Eeshwara", "Bahudhanya",
    "Pramathi", "Vikrama", "Vrisha", "Chitrabhanu", "Subhanu", "Taarana",
    "Paarthiva", "Vyaya", "Sarvajit", "Sarvadhari", "Virodhi", "Vikruti",
    "Khara", "Nandana", "Vijaya", "Jaya", "Manmatha", "Durmukhi",
    "Hevilambi", "Vilambi", "Vikaari", "Shaarvari", "Plava", "Shubhakrit",
    "Shobhakrith", "Krodhi", "Vishwavasu", "Parabhava", "Plavanga", "Keelaka",
    "Saumya", "Sadharana", "Virodhikrith", "Paridhavi", "Pramadicha", "Aananda",
    "Rakshasa", "Nala", "Pingala", "Kalayukthi", "Siddharthi", "Raudra",
    "Durmathi", "Dundubhi", "Rudhirodgaari", "Raktakshi", "Krodhana", "Akshaya",
)
CYCLE_EPOCH_YEAR = 1867

GANA_NAMES: Tuple[str, ...] = ("Deva", "Manushya", "Rakshasa")
# gana of each nakshatra
NAKSHATRA_GANA: Tuple[int, ...] = (
    0, 1, 2, 1, 0, 1, 0, 0, 2, 2, 1, 1, 0, 2, 0, 2, 0, 2, 2, 1, 1, 0, 2, 2, 1, 1, 0,
)
GUNA_NAMES: Tuple[str, ...] = ("Chara", "Sthira", "Dvisvabhava")
TRINITY_NAMES: Tuple[str, ...] = ("Brahma", "Vishnu", "Maheshwara")


def lookup(table: Sequence[str], i: int) -> str:
    return table[wrap_index(i, len(table))]


# ============================================================
# Permissive name parsing
# ============================================================

def normalize_name(s: str) -> str:
    """Lower-case and drop everything that is not a letter or digit."""
    return re.sub(r"[^0-9a-z]", "", s.lower())


_MASA_ALIASES: Dict[str, int] = {
    "chaitra": 0, "chaitramu": 0,
    "vaishakha": 1, "vaisakha": 1, "vaishakh": 1, "baisakh": 1,
    "jyeshtha": 2, "jyaistha": 2, "jyeshta": 2, "jyaishtha": 2, "jeshta": 2,
    "ashadha": 3, "asadha": 3, "aashadha": 3, "ashada": 3,
    "shravana": 4, "sravana": 4, "shravan": 4, "sravanam": 4,
    "bhadrapada": 5, "badhrapada": 5, "bhadrapadam": 5, "bhadra": 5,
    "ashvayuja": 6, "ashwayuja": 6, "aswija": 6, "asvayuja": 6, "ashwin": 6, "ashvin": 6, "aswayuja": 6,
    "kartika": 7, "karthika": 7, "kartik": 7, "karthikam": 7,
    "margashira": 8, "margasira": 8, "margashirsha": 8, "margasirsha": 8, "agrahayana": 8,
    "pushya": 9, "pausha": 9, "pusya": 9, "paush": 9,
    "magha": 10, "maagha": 10, "magh": 10,
    "phalguna": 11, "phalgun": 11, "palguna": 11, "phalgunam": 11,
}

_PAKSHA_ALIASES: Dict[str, int] = {
    "shukla": 0, "sukla": 0, "shuddha": 0, "suddha": 0, "waxing": 0, "bright": 0,
    "krishna": 1, "krushna": 1, "bahula": 1, "vadi": 1, "waning": 1, "dark": 1,
}

# Position within a paksha (0..14); 14 is resolved to Pournami/Amavasya by paksha.
_TITHI_ALIASES: Dict[str, int] = {
    "padyami": 0, "pratipada": 0, "prathama": 0, "pratipat": 0, "paadyami": 0,
    "vidhiya": 1, "dwitiya": 1, "dvitiya": 1, "vidiya": 1, "dwithiya": 1,
    "thadiya": 2, "tritiya": 2, "trithiya": 2, "tadiya": 2, "thritiya": 2,
    "chaviti": 3, "chaturthi": 3, "chavithi": 3, "chauthi": 3,
    "panchami": 4,
    "shasti": 5, "shashthi": 5, "shashti": 5, "sashti": 5,
    "saptami": 6, "sapthami": 6,
    "ashtami": 7, "astami": 7,
    "navami": 8,
    "dasami": 9, "dashami": 9,
    "ekadasi": 10, "ekadashi": 10,
    "dvadasi": 11, "dwadasi": 11, "dwadashi": 11, "dvadashi": 11,
    "trayodasi": 12, "trayodashi": 12, "thrayodasi": 12,
    "chaturdasi": 13, "chaturdashi": 13, "chathurdasi": 13,
    "pournami": 14, "purnima": 14, "poornima": 14, "punnami": 14, "pournima": 14,
    "amavasya": 14, "amavasai": 14, "amavasi": 14,
}
_FULL_MOON = {"pournami", "purnima", "poornima", "punnami", "pournima"}
_NEW_MOON = {"amavasya", "amavasai", "amavasi"}


def _strip_suffix(key: str, suffixes: Tuple[str, ...]) -> str:
    for s in suffixes:
        if key.endswith(s) and len(key) > len(s):
            return key[: -len(s)]
    return key


def parse_masa(name: str) -> int:
    key = _strip_suffix(normalize_name(name), ("masam", "masa", "maasam", "maasa", "month"))
    if key.startswith("adhika") or key.startswith("nija"):
        key = key[6:] if key.startswith("adhika") else key[4:]
    if key not in _MASA_ALIASES:
        raise InvalidInputName(f"Unknown masa name {name!r}")
    return _MASA_ALIASES[key]


def parse_paksha(name: str) -> int:
    key = _strip_suffix(normalize_name(name), ("paksham", "paksha", "paksh"))
    if key not in _PAKSHA_ALIASES:
        raise InvalidInputName(f"Unknown paksha name {name!r}")
    return _PAKSHA_ALIASES[key]


def parse_tithi(name: str, paksha: Optional[int] = None) -> int:
    """
    Resolve a tithi name to an absolute index 0..29.

    Names within a fortnight are shared between pakshas, so `paksha` (0/1) picks
    the half; Pournami and Amavasya determine their paksha themselves and must not
    contradict an explicit one.
    """
    key = _strip_suffix(normalize_name(name), ("tithi", "thithi"))
    if key not in _TITHI_ALIASES:
        raise InvalidInputName(f"Unknown tithi name {name!r}")
    pos = _TITHI_ALIASES[key]
    if key in _FULL_MOON:
        if paksha == 1:
            raise InvalidInputName(f"{name!r} does not occur in Krishna paksha")
        return 14
    if key in _NEW_MOON:
        if paksha == 0:
            raise InvalidInputName(f"{name!r} does not occur in Shukla paksha")
        return 29
    return pos + 15 * (paksha or 0)
