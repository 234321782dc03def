from __future__ import annotations

from datetime import UTC, datetime

import pytest

from panchangam.ephemeris import OracleError, ecliptic_longitudes, sidereal_longitudes
from panchangam.ephemeris.sidereal import SUPPORTED_AYANAMSHAS, normalize_ayanamsha_name
from panchangam.ephemeris.swisseph_adapter import EPHEMERIS_ENV_KEYS, resolve_ephemeris_path

from .helpers.oracles import EPOCH, LinearOracle


def test_sidereal_longitudes_subtract_ayanamsa() -> None:
    oracle = LinearOracle(sun0=355.0, moon0=5.0, ayanamsa=24.0)
    sun, moon = sidereal_longitudes(oracle, EPOCH)
    assert sun == pytest.approx(355.0)
    assert moon == pytest.approx(5.0)


def test_tropical_longitudes_do_not_ask_for_ayanamsa() -> None:
    oracle = LinearOracle(failing={"ayanamsa"})
    sun, moon = ecliptic_longitudes(oracle, EPOCH, sidereal=False)
    assert sun == pytest.approx(34.0)
    assert moon == pytest.approx(124.0)


def test_oracle_error_carries_context() -> None:
    moment = datetime(2024, 1, 1, tzinfo=UTC)
    error = OracleError("no data", operation="position", body="Moon", moment=moment)
    assert str(error) == "no data"
    assert (error.operation, error.body, error.moment) == ("position", "Moon", moment)
    assert error.context == {}
    assert isinstance(error, RuntimeError)


def test_ayanamsa_name_normalisation() -> None:
    assert normalize_ayanamsha_name(" Fagan-Bradley ") == "fagan_bradley"
    assert normalize_ayanamsha_name("Lahiri") in SUPPORTED_AYANAMSHAS


def test_ephemeris_path_from_environment(tmp_path, monkeypatch) -> None:
    for key in EPHEMERIS_ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("PANCHANGAM_SE_EPHE_PATH", str(tmp_path))
    assert resolve_ephemeris_path() == str(tmp_path)


def test_explicit_ephemeris_path_wins(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("SE_EPHE_PATH", str(tmp_path))
    assert resolve_ephemeris_path("/data/sweph") == "/data/sweph"


def test_missing_ephemeris_directory_is_skipped(tmp_path, monkeypatch) -> None:
    for key in EPHEMERIS_ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("SE_EPHE_PATH", str(tmp_path / "absent"))
    assert resolve_ephemeris_path() != str(tmp_path / "absent")
