from __future__ import annotations

import json
from datetime import UTC, datetime, timedelta

import pytest
from prometheus_client import CollectorRegistry

from panchangam.atlas import Location
from panchangam.config import PanchangCfg, Settings
from panchangam.engine import PanchangComputationError, compute_panchang
from panchangam.ephemeris import OracleError
from panchangam.observability import ensure_metrics_registered

from ..helpers.oracles import EPOCH, LinearOracle

DELHI = Location(latitude=28.6139, longitude=77.2090, timezone="Asia/Kolkata", name="Delhi")
MORNING = EPOCH + timedelta(hours=3)
IST = timedelta(hours=5, minutes=30)


def test_elements_are_anchored_to_sunrise() -> None:
    record = compute_panchang(MORNING, DELHI, LinearOracle())

    assert record.anchor == EPOCH
    assert record.sun_longitude == pytest.approx(10.0)
    assert record.moon_longitude == pytest.approx(100.0)
    assert record.ayanamsa == pytest.approx(24.0)
    assert record.ayanamsa_system == "lahiri"
    assert (record.tithi.index, record.tithi.name) == (8, "Ashtami")
    assert record.tithi.percentage == pytest.approx(50.0)
    assert record.nakshatra.name == "Pushya"
    assert record.yoga.index == 9
    assert record.karana.index == 16


def test_end_times_are_estimated_from_the_anchor() -> None:
    record = compute_panchang(MORNING, DELHI, LinearOracle())
    expected = EPOCH + timedelta(days=6.0 / 13.2)
    assert record.tithi.end_time is not None
    assert abs((record.tithi.end_time - expected).total_seconds()) < 1.0
    assert record.nakshatra.end_time == EPOCH + timedelta(hours=13)
    assert record.yoga.end_time is not None and record.yoga.end_time > MORNING
    assert record.karana.end_time is not None and record.karana.end_time > MORNING


def test_end_times_follow_elements_read_at_a_later_sunrise() -> None:
    # Elongation crosses 96 degrees between the instant and sunrise.
    before_dawn = EPOCH - timedelta(hours=6)
    record = compute_panchang(before_dawn, DELHI, LinearOracle(moon0=106.5))

    assert record.anchor == EPOCH
    assert record.tithi.index == 9
    for element in (record.tithi, record.nakshatra, record.yoga, record.karana):
        assert element.end_time is not None
        assert element.end_time > record.anchor
    expected = EPOCH + timedelta(days=(108.0 - 96.5) / 13.2)
    assert abs((record.tithi.end_time - expected).total_seconds()) < 1.0
    assert record.nakshatra.end_time == EPOCH + timedelta(hours=1)


def test_output_instants_are_localised() -> None:
    record = compute_panchang(MORNING, DELHI, LinearOracle())

    assert record.moment == MORNING
    assert record.moment.utcoffset() == IST
    for value in (
        record.sunrise,
        record.sunset,
        record.moonrise,
        record.moonset,
        record.madhyahna,
        record.tithi.end_time,
        record.nakshatra.end_time,
    ):
        assert value is not None
        assert value.utcoffset() == IST
    assert record.sunrise == EPOCH
    assert record.kalam.rahu is not None
    assert record.kalam.rahu.start.utcoffset() == IST


def test_windows_use_the_input_weekday() -> None:
    record = compute_panchang(MORNING, DELHI, LinearOracle())
    assert record.vaar.english == "Sunday"
    assert record.kalam.rahu.start == datetime(2024, 1, 7, 12, 0, tzinfo=UTC)
    assert record.kalam.rahu.end == datetime(2024, 1, 7, 13, 30, tzinfo=UTC)
    assert record.muhurat.abhijit.start == datetime(2024, 1, 7, 11, 36, tzinfo=UTC)
    assert record.day_lengths is not None
    assert record.day_lengths.day == timedelta(hours=12)


def test_calendar_supplements() -> None:
    record = compute_panchang(MORNING, DELHI, LinearOracle())
    assert record.moon_phase == "First Quarter"
    assert record.paksha == "Shukla"
    assert record.lunar_month.amanta == "Vaisakha"
    assert record.lunar_month.purnimanta == "Vaisakha"
    assert record.samvat.shaka == 2024 - 78
    assert record.sun_rashi == "Aries"
    assert record.moon_rashi == "Cancer"
    assert record.surya_nakshatra.name == "Ashwini"
    assert record.ritu == "Vasanta"
    assert record.ayana == "Uttarayana"


def test_anchor_can_be_disabled() -> None:
    settings = Settings(panchang=PanchangCfg(anchor_to_sunrise=False))
    record = compute_panchang(MORNING, DELHI, LinearOracle(), settings=settings)
    assert record.anchor == MORNING
    assert record.moon_longitude == pytest.approx(100.0 + 13.2 * 3 / 24)


def test_distant_sunrise_is_not_used_as_anchor() -> None:
    oracle = LinearOracle(sunrise=EPOCH - timedelta(days=3))
    record = compute_panchang(MORNING, DELHI, oracle)
    assert record.anchor == MORNING


def test_polar_day_has_no_windows() -> None:
    oracle = LinearOracle(sunrise=None, sunset=None)
    record = compute_panchang(MORNING, DELHI, oracle)

    assert record.anchor == MORNING
    assert record.sunrise is None and record.sunset is None
    assert all(window is None for _, window in record.kalam.items())
    assert all(window is None for _, window in record.muhurat.items())
    assert record.madhyahna is None
    assert record.day_lengths is None
    assert record.tithi.index >= 1


def test_rise_set_failures_become_absent_fields() -> None:
    oracle = LinearOracle(failing={"moonrise", "sunset"})
    record = compute_panchang(MORNING, DELHI, oracle)
    assert record.moonrise is None
    assert record.sunset is None
    assert record.moonset is not None
    assert record.kalam.rahu is None


def test_baseline_failure_raises_single_error() -> None:
    oracle = LinearOracle(failing={"position"})
    with pytest.raises(PanchangComputationError) as info:
        compute_panchang(MORNING, DELHI, oracle)
    assert isinstance(info.value.__cause__, OracleError)
    assert info.value.location is DELHI


def test_naive_datetime_is_rejected() -> None:
    with pytest.raises(ValueError):
        compute_panchang(datetime(2024, 1, 7, 9, 0), DELHI, LinearOracle())


def test_record_serialises_to_json() -> None:
    record = compute_panchang(MORNING, DELHI, LinearOracle())
    payload = json.loads(json.dumps(record.to_dict()))
    assert payload["location"]["name"] == "Delhi"
    assert payload["tithi"]["name"] == "Ashtami"
    assert payload["sunrise"] == "2024-01-07T11:30:00+05:30"
    assert payload["kalam"]["rahu"]["start"] == "2024-01-07T17:30:00+05:30"
    assert payload["muhurat"]["sarvartha_siddhi"]["end"] == "2024-01-08T11:30:00+05:30"
    assert payload["samvat"] == {"shaka": 1946, "vikrama": 2081, "gujarati": 2080}


def test_failures_are_counted() -> None:
    registry = CollectorRegistry()
    ensure_metrics_registered(registry)
    sunset = {"operation": "sunset"}
    errors = {"component": "panchang", "error": "PanchangComputationError"}
    sunset_before = registry.get_sample_value("panchangam_oracle_failures_total", sunset) or 0.0
    errors_before = registry.get_sample_value("panchangam_compute_errors_total", errors) or 0.0

    compute_panchang(MORNING, DELHI, LinearOracle(failing={"sunset"}))
    with pytest.raises(PanchangComputationError):
        compute_panchang(MORNING, DELHI, LinearOracle(failing={"position"}))

    assert registry.get_sample_value("panchangam_oracle_failures_total", sunset) == sunset_before + 1
    assert registry.get_sample_value("panchangam_compute_errors_total", errors) == errors_before + 1
    assert registry.get_sample_value(
        "panchangam_compute_duration_seconds_count", {"oracle": "linear"}
    )


def test_tropical_mode_drops_the_ayanamsa() -> None:
    oracle = LinearOracle()
    sidereal = compute_panchang(MORNING, DELHI, oracle)
    settings = Settings(panchang=PanchangCfg(sidereal=False))
    tropical = compute_panchang(MORNING, DELHI, oracle, settings=settings)

    assert tropical.ayanamsa == 0.0
    assert tropical.ayanamsa_system == "tropical"
    assert tropical.sun_longitude - sidereal.sun_longitude == pytest.approx(oracle.ayanamsa)
    assert tropical.moon_longitude - sidereal.moon_longitude == pytest.approx(oracle.ayanamsa)
    assert tropical.tithi.index == sidereal.tithi.index
    assert (sidereal.nakshatra.name, tropical.nakshatra.name) == ("Pushya", "Magha")
    assert (sidereal.yoga.index, tropical.yoga.index) == (9, 12)
    assert tropical.to_dict()["ayanamsa"] == {"system": "tropical", "degrees": 0.0}
