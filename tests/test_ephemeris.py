# tests/test_ephemeris.py

import os

import pytest

from panchangam.ephemeris import ephemeris_dir


def test_ephemeris_dir_explicit_wins(monkeypatch):
    monkeypatch.setenv("PANCHANGAM_EPHEM_DIR", "/tmp/from-env")
    assert ephemeris_dir("/tmp/explicit") == "/tmp/explicit"


def test_ephemeris_dir_env_then_home(monkeypatch):
    monkeypatch.setenv("PANCHANGAM_EPHEM_DIR", "/tmp/from-env")
    assert ephemeris_dir() == "/tmp/from-env"
    monkeypatch.delenv("PANCHANGAM_EPHEM_DIR")
    assert ephemeris_dir() == os.path.expanduser("~/.panchangam")


def test_require_ephemeris_returns_loader():
    pytest.importorskip("jplephem")
    pytest.importorskip("skyfield")
    from skyfield.api import Loader

    from panchangam.ephemeris import require_ephemeris

    assert require_ephemeris() is Loader
