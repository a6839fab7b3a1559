# tests/test_lookup.py

import pytest
from datetime import date
from unittest.mock import patch

from panchangam import lookup
from panchangam.core.types import Location, SearchParams
from panchangam.engines.factory import make_engine
from panchangam.engines.specs import DRIK

HYDERABAD = Location(lat=17.385, lng=78.4867)

@pytest.fixture(scope="module")
def eng():
    return make_engine(DRIK)

@pytest.fixture
def no_lunar_month(eng):
    """Pretend the lunar month can never be resolved."""
    with patch.object(eng, "lunar_month", return_value=None) as mock:
        yield mock

def test_chaitra_shukla_vidhiya_2025(eng):
    assert lookup.find_dates(eng, 2025, "Chaitra", "Shukla", "Vidhiya", HYDERABAD) == [date(2025, 3, 31)]
    assert lookup.find_date(eng, 2025, "Chaitra", "Shukla", "Vidhiya", HYDERABAD) == date(2025, 3, 31)

def test_permissive_spelling(eng):
    assert lookup.find_dates(eng, 2025, "chaitra masam", "sukla", "dwitiya", HYDERABAD) == [date(2025, 3, 31)]

def test_unknown_name_gives_empty(eng):
    assert lookup.find_dates(eng, 2025, "Smarch", "Shukla", "Vidhiya", HYDERABAD) == []
    assert lookup.find_date(eng, 2025, "Chaitra", "Shukla", "Amavasya", HYDERABAD) is None

def test_adhika_and_nija(eng):
    adhika = lookup.find_dates(eng, 2023, "Adhika Shravana", "Shukla", "Panchami", HYDERABAD)
    nija = lookup.find_dates(eng, 2023, "Nija Shravana", "Shukla", "Panchami", HYDERABAD)
    both = lookup.find_dates(eng, 2023, "Shravana", "Shukla", "Panchami", HYDERABAD)
    assert len(adhika) == 1 and date(2023, 7, 18) < adhika[0] < date(2023, 8, 1)
    assert len(nija) == 1 and date(2023, 8, 16) < nija[0] < date(2023, 8, 31)
    assert both == adhika + nija

def test_parse_target():
    t = lookup.parse_target("Adhika Shravana", "Krishna", "Amavasya")
    assert (t.masa, t.paksha, t.tithi, t.leap) == (4, 1, 29, True)
    assert lookup.parse_target("Chaitra", "Shukla", "Padyami").leap is None

def test_candidate_window():
    assert lookup.candidate_window(2025, 0, 10) == (date(2025, 2, 19), date(2025, 6, 10))
    assert lookup.candidate_window(2025, 8, 10) == (date(2025, 1, 1), date(2025, 12, 31))
    # clipped to the year
    assert lookup.candidate_window(2025, 10, 10) == (date(2025, 1, 1), date(2025, 4, 10))

def test_provisional_solar_fallback(eng, no_lunar_month):
    target = lookup.parse_target("Chaitra", "Shukla", "Vidhiya")
    matches = lookup.search(eng, 2025, target, HYDERABAD, SearchParams())
    assert [m.date for m in matches] == [date(2025, 3, 31)]
    assert all(m.provisional for m in matches)

    assert lookup.find_dates(eng, 2025, "Chaitra", "Shukla", "Vidhiya", HYDERABAD) == [date(2025, 3, 31)]
    assert lookup.find_dates(
        eng, 2025, "Chaitra", "Shukla", "Vidhiya", HYDERABAD, include_provisional=False
    ) == []

def test_kshaya_padyami_counts_for_the_new_month(eng):
    # 2025-05-27 opens Jyeshtha with a kshaya Padyami; sunrise still falls in Vaishakha Amavasya
    assert lookup.find_dates(eng, 2025, "Jyeshtha", "Shukla", "Padyami", HYDERABAD) == [date(2025, 5, 27)]
    assert lookup.find_dates(eng, 2025, "Vaishakha", "Shukla", "Padyami", HYDERABAD) == [date(2025, 4, 28)]
    assert lookup.find_dates(eng, 2025, "Vaishakha", "Krishna", "Amavasya", HYDERABAD) == [date(2025, 5, 27)]
