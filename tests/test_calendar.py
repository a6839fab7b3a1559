# tests/test_calendar.py

import pytest
from unittest.mock import patch
from datetime import date, timedelta

from panchangam.core.types import Location
from panchangam.engines.astro.sunrise import sun_events_jd
from panchangam.engines.factory import make_engine
from panchangam.engines.solver import SolverParams, karana_index
from panchangam.engines.specs import DRIK, SURYA_SIDDHANTA

BANGALORE = Location(lat=12.9716, lng=77.5946)
HYDERABAD = Location(lat=17.385, lng=78.4867)
IST = 5.5

@pytest.fixture(scope="module")
def eng():
    return make_engine(DRIK)

@pytest.fixture(scope="module")
def vijayadashami(eng):
    return eng.day(date(2025, 10, 2), BANGALORE, tz_offset=IST)

def test_vijayadashami_tithi(vijayadashami):
    day = vijayadashami
    assert day.tithi.name == "Dasami"
    assert day.tithi.index == 9
    assert day.paksha == "Shukla"
    assert day.paksha_index == 0
    # Dashami ends around 19:10 IST
    assert day.tithi.end.date() == date(2025, 10, 2)
    assert 18.0 < day.tithi.end.hour + day.tithi.end.minute / 60.0 < 20.5
    assert day.tithi.start < day.sun.sunrise < day.tithi.end

def test_vijayadashami_month_and_year(vijayadashami):
    day = vijayadashami
    assert day.lunar_masa is not None
    assert day.lunar_masa.name == "Ashvayuja"
    assert not day.lunar_masa.is_leap
    assert day.ritu == "Sharad"
    assert day.ayana == "Dakshinayana"
    assert day.solar_masa == "Kanya"
    assert day.cycle_year == "Vishwavasu"
    assert day.weekday_name == "Guruvara"
    assert day.weekday == 4

def test_day_fields_in_range(vijayadashami):
    day = vijayadashami
    assert 0 <= day.nakshatra.index < 27
    assert 0 <= day.yoga.index < 27
    assert 0 <= day.karana.index < 11
    assert 0 <= day.lunar_masa.index < 12
    for x in (day.sun_longitude, day.moon_longitude):
        assert 0.0 <= x < 360.0
    t = day.sunrise_tithi_index
    assert day.karana.index in (karana_index(2 * t), karana_index(2 * t + 1))
    for ev in (day.tithi, day.nakshatra, day.yoga, day.karana):
        assert ev.status in ("normal", "kshaya", "vriddhi")
        assert ev.start.utcoffset().total_seconds() == IST * 3600

def test_consecutive_sunrise_tithis(eng):
    d = date(2025, 1, 1)
    prev = eng.sunrise_anga("tithi", d, HYDERABAD)
    for _ in range(60):
        d += timedelta(days=1)
        cur = eng.sunrise_anga("tithi", d, HYDERABAD)
        step = (cur.at_sunrise - prev.at_sunrise) % 30
        assert step in (0, 1, 2)
        if step == 2:
            assert prev.status == "kshaya"
            assert prev.official == (prev.at_sunrise + 1) % 30
        if step == 0:
            assert cur.status == "vriddhi"
        prev = cur

def test_adhika_shravana_2023(eng):
    jd_adhika = 2460150.5   # 2023-07-25
    jd_nija = 2460181.5     # 2023-08-25
    m1 = eng.lunar_month(jd_adhika)
    m2 = eng.lunar_month(jd_nija)
    assert (m1.name, m1.is_leap) == ("Shravana", True)
    assert (m2.name, m2.is_leap) == ("Shravana", False)

@pytest.mark.parametrize("year, expected", [
    (2023, date(2023, 3, 22)),
    (2024, date(2024, 4, 9)),
    (2025, date(2025, 3, 30)),
])
def test_new_year(eng, year, expected):
    assert eng.new_year_day(year, HYDERABAD) == expected

def test_cycle_year_turns_at_ugadi(eng):
    assert eng.cycle_year(date(2025, 3, 29), HYDERABAD) == "Krodhi"
    assert eng.cycle_year(date(2025, 3, 30), HYDERABAD) == "Vishwavasu"

def test_polar_anchor(eng):
    loc = Location(lat=80.0, lng=15.0)
    d = date(2025, 12, 21)
    assert eng.sunrise_anchor(d, loc) == sun_events_jd(d, loc)["solar_noon"] - 0.25

def test_polar_day_resolves(eng):
    day = eng.day(date(2025, 12, 21), Location(lat=78.2, lng=15.6), tz_offset=1.0)
    assert day.sun.sunrise is None
    assert 0 <= day.tithi.index < 30

def test_classical_engine_agrees_roughly():
    ss = make_engine(SURYA_SIDDHANTA)
    a = ss.sunrise_anga("tithi", date(2025, 10, 2), BANGALORE)
    # the classical tithi may be off by one near a boundary
    assert (a.official - 9) % 30 in (0, 1, 29)
    m = ss.lunar_month(a.sunrise)
    assert m is not None and m.index in (5, 6)

def test_info(eng):
    info = eng.info()
    assert info["id"] == "drik"
    assert info["model"]["ayanamsa"] == "lahiri"

def test_kshaya_padyami_takes_new_month(eng):
    # Padyami starts after sunrise on 2025-05-27 and ends before the next one
    d = date(2025, 5, 27)
    a = eng.sunrise_anga("tithi", d, HYDERABAD)
    assert (a.at_sunrise, a.official, a.status) == (29, 0, "kshaya")
    assert eng.month_of(a, a.at_sunrise).name == "Vaishakha"

    day = eng.day(d, HYDERABAD, tz_offset=IST)
    assert day.tithi.name == "Padyami" and day.paksha == "Shukla"
    assert (day.lunar_masa.name, day.lunar_masa.is_leap) == ("Jyeshtha", False)
    assert day.ritu == "Grishma"

def test_nakshatra_periods_cover_the_day(vijayadashami):
    periods = vijayadashami.nakshatra_periods
    assert len(periods) >= 2
    midnight = vijayadashami.tithi.end.replace(hour=0, minute=0, second=0, microsecond=0)
    assert periods[0].start <= midnight
    assert periods[-1].end >= midnight + timedelta(days=1)
    for a, b in zip(periods, periods[1:]):
        assert abs((b.start - a.end).total_seconds()) < 180
        assert b.index == (a.index + 1) % 27
    assert vijayadashami.nakshatra.index in [p.index for p in periods]

def test_precomputed_new_year(eng):
    ny = eng.new_year_day(2025, HYDERABAD)
    with patch.object(eng, "new_year_day") as scan:
        assert eng.cycle_year(date(2025, 3, 29), HYDERABAD, ny) == "Krodhi"
        assert eng.day(date(2025, 4, 2), HYDERABAD, tz_offset=IST, new_year=ny).cycle_year == "Vishwavasu"
    scan.assert_not_called()

def test_unconverged_solver_degrades_to_none():
    eng = make_engine(DRIK.tweak(solver=SolverParams(max_iter=1)))
    day = eng.day(date(2025, 10, 2), BANGALORE, tz_offset=IST)
    assert day.tithi.name == "Dasami"
    assert day.tithi.start is None and day.tithi.end is None
    assert day.lunar_masa is None
    assert day.ritu is None
    assert day.cycle_year is None
    assert day.nakshatra_periods == ()
    assert day.solar_masa == "Kanya"

def test_unresolved_month_leaves_ritu_empty(eng):
    with patch.object(eng, "lunar_month", return_value=None):
        day = eng.day(date(2025, 10, 2), BANGALORE, tz_offset=IST)
    assert day.lunar_masa is None
    assert day.ritu is None
    assert day.drik_ritu == "Varsha"
    assert day.tithi.name == "Dasami"

def test_sankranti_at_new_moon_is_unresolved():
    # with a 30 degree tolerance every new moon sits "on" a sankranti
    eng = make_engine(DRIK.tweak(solver=SolverParams(angle_tol=30.0)))
    assert eng.lunar_month(2460950.5) is None
