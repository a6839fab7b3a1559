# tests/test_cli.py

from panchangam.cli import main

def test_engines(capsys):
    assert main(["engines"]) == 0
    out = capsys.readouterr().out.split()
    assert "drik" in out and "surya_siddhanta" in out

def test_lookup(capsys):
    assert main(["lookup", "2025", "Chaitra", "Shukla", "Vidhiya"]) == 0
    assert capsys.readouterr().out.strip() == "2025-03-31"

def test_lookup_no_match(capsys):
    assert main(["lookup", "2025", "Smarch", "Shukla", "Vidhiya"]) == 1
    assert "no match" in capsys.readouterr().out

def test_day_shorthand(capsys):
    assert main(["2025-10-02", "--lat", "12.9716", "--lng", "77.5946", "--attr", "saka_year"]) == 0
    out = capsys.readouterr().out
    assert "Dasami" in out
    assert "Ashvayuja" in out
    assert "saka_year: 1947" in out

def test_sun(capsys):
    assert main(["sun", "2025-03-30"]) == 0
    out = capsys.readouterr().out
    assert "sunrise" in out and "2025-03-30 06:" in out

def test_new_year(capsys):
    assert main(["new-year", "2025"]) == 0
    assert capsys.readouterr().out.strip() == "2025-03-30  Vishwavasu"

def test_positions(capsys):
    assert main(["positions", "--jd-ut", "2451545.0"]) == 0
    out = capsys.readouterr().out
    assert "Apparent longitude" in out
