# tests/test_deltat.py

import pytest

from panchangam.reference import deltat
from panchangam.core.time import delta_t_hours

@pytest.fixture
def clear_table_cache():
    deltat.load_user_table.cache_clear()
    yield
    deltat.load_user_table.cache_clear()

def test_known_values():
    assert deltat.delta_t_em2006(2000.0) == pytest.approx(63.86, abs=1e-9)
    assert deltat.delta_t_em2006(1900.0) == pytest.approx(-2.79, abs=1e-9)
    assert deltat.delta_t_em2006(2025.0) == pytest.approx(74.47, abs=0.05)

@pytest.mark.parametrize("y", [1600.0, 1700.0, 1800.0, 1900.0, 1920.0, 2005.0, 2050.0, 2150.0])
def test_branches_join(y):
    # Espenak-Meeus branches meet to within a couple of seconds
    assert deltat.delta_t_em2006(y - 1e-6) == pytest.approx(deltat.delta_t_em2006(y), abs=2.5)

def test_hours_at_j2000():
    assert delta_t_hours(2451545.0) == pytest.approx(63.86 / 3600.0, abs=1e-6)

def test_no_table_by_default(monkeypatch, clear_table_cache):
    monkeypatch.delenv("PANCHANGAM_DELTAT_TABLE", raising=False)
    assert deltat.load_user_table() is None

def test_user_table(tmp_path, monkeypatch, clear_table_cache):
    p = tmp_path / "dt.csv"
    p.write_text("decimal_year,delta_t_seconds\n2000.0,60.0\n2001.0,70.0\n", encoding="utf-8")
    monkeypatch.setenv("PANCHANGAM_DELTAT_TABLE", str(p))

    assert deltat.delta_t_seconds(2000.5) == pytest.approx(65.0)
    # outside the table the polynomial takes over
    assert deltat.delta_t_seconds(1990.0) == pytest.approx(deltat.delta_t_em2006(1990.0))

def test_bad_table_falls_back(tmp_path, monkeypatch, clear_table_cache, caplog):
    p = tmp_path / "dt.csv"
    p.write_text("decimal_year,delta_t_seconds\n2001.0,60.0\n2000.0,70.0\n", encoding="utf-8")
    monkeypatch.setenv("PANCHANGAM_DELTAT_TABLE", str(p))

    with caplog.at_level("WARNING", logger="panchangam.reference.deltat"):
        assert deltat.delta_t_seconds(2000.5) == pytest.approx(deltat.delta_t_em2006(2000.5))
    assert "Could not read" in caplog.text

def test_missing_table_file(tmp_path, monkeypatch, clear_table_cache):
    monkeypatch.setenv("PANCHANGAM_DELTAT_TABLE", str(tmp_path / "nope.csv"))
    assert deltat.load_user_table() is None
