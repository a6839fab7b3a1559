# tests/test_eclipses.py

import pytest
from datetime import datetime, timezone

from panchangam import eclipses
from panchangam.core.time import to_julian

class FakeSearch:
    """EclipseSearch over fixed peak lists."""

    def __init__(self, solar, lunar):
        self.solar = sorted(solar)
        self.lunar = sorted(lunar)

    @staticmethod
    def _next(peaks, jd):
        for peak, type_ in peaks:
            if peak > jd:
                return peak, type_
        return float("inf"), "none"

    def next_solar(self, jd_ut):
        return self._next(self.solar, jd_ut)

    def next_lunar(self, jd_ut):
        return self._next(self.lunar, jd_ut)

@pytest.fixture
def fake():
    return FakeSearch(
        solar=[(to_julian(4, 8.75, 2024), "total"), (to_julian(10, 2.75, 2024), "annular"),
               (to_julian(3, 29.45, 2025), "partial")],
        lunar=[(to_julian(3, 25.3, 2024), "penumbral"), (to_julian(9, 18.125, 2024), "partial")],
    )

def test_year_listing_sorted(fake):
    events = eclipses.eclipses_in_year(2024, fake)
    assert [(e.kind, e.type) for e in events] == [
        ("lunar", "penumbral"), ("solar", "total"), ("lunar", "partial"), ("solar", "annular"),
    ]
    assert all(e.peak.year == 2024 for e in events)
    assert [e.peak_jd for e in events] == sorted(e.peak_jd for e in events)

def test_event_id_and_title(fake):
    ev = eclipses.eclipses_in_year(2024, fake)[1]
    assert ev.id == "solar-2024-04-08T18:00:00Z"
    assert ev.peak.tzinfo is not None
    assert eclipses.eclipse_title(ev) == "Total Solar Eclipse"

def test_next_eclipse_picks_earliest(fake):
    ev = eclipses.next_eclipse(datetime(2024, 4, 1, tzinfo=timezone.utc), fake)
    assert (ev.kind, ev.type) == ("solar", "total")
    ev = eclipses.next_eclipse(datetime(2024, 9, 1, tzinfo=timezone.utc), fake)
    assert (ev.kind, ev.type) == ("lunar", "partial")

def test_find_eclipse(fake):
    ev = eclipses.find_eclipse("lunar-2024-09-18T03:00:00Z", fake)
    assert ev is not None and ev.type == "partial"
    assert eclipses.find_eclipse("garbage", fake) is None

def test_empty_year(fake):
    assert eclipses.eclipses_in_year(2030, fake) == []

def test_swiss_ephemeris_2024():
    pytest.importorskip("swisseph")
    events = eclipses.eclipses_in_year(2024)
    kinds = [(e.kind, e.type, e.peak.strftime("%m-%d")) for e in events]
    assert kinds == [
        ("lunar", "penumbral", "03-25"),
        ("solar", "total", "04-08"),
        ("lunar", "partial", "09-18"),
        ("solar", "annular", "10-02"),
    ]

@pytest.mark.parametrize("year", [2019, 2025, 2029])
def test_swiss_ephemeris_counts(year):
    pytest.importorskip("swisseph")
    events = eclipses.eclipses_in_year(year)
    assert 4 <= len(events) <= 7

def test_local_visibility():
    pytest.importorskip("swisseph")
    from panchangam.core.types import Location

    total = eclipses.next_eclipse(datetime(2024, 4, 1, tzinfo=timezone.utc))
    assert eclipses.is_visible(total, Location(lat=32.78, lng=-96.80))
    assert not eclipses.is_visible(total, Location(lat=17.385, lng=78.4867))
