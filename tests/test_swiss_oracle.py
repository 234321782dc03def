from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from panchangam.atlas import Location
from panchangam.config import PanchangCfg, Settings
from panchangam.engine import compute_panchang
from panchangam.ephemeris import SwissPositionOracle, sidereal_longitudes

DELHI = Location(latitude=28.6139, longitude=77.2090, timezone="Asia/Kolkata")
MOMENT = datetime(2023, 10, 24, 18, 0, tzinfo=UTC)


@pytest.mark.swiss
def test_swiss_oracle_positions_and_ayanamsa() -> None:
    oracle = SwissPositionOracle(ayanamsa="lahiri")
    ayanamsa = oracle.sidereal_correction_at(MOMENT)
    assert 23.5 < ayanamsa < 24.5

    sun, moon = sidereal_longitudes(oracle, MOMENT)
    assert 180.0 < sun < 210.0
    assert 0.0 <= moon < 360.0


@pytest.mark.swiss
def test_swiss_oracle_rise_and_set_for_delhi() -> None:
    oracle = SwissPositionOracle()
    sunrise = oracle.sunrise_of(MOMENT, DELHI)
    sunset = oracle.sunset_of(MOMENT, DELHI)
    assert sunrise is not None and sunset is not None
    assert sunrise < sunset
    assert timedelta(hours=10) < sunset - sunrise < timedelta(hours=13)


@pytest.mark.swiss
def test_swiss_polar_night_has_no_sunrise() -> None:
    tromso = Location(latitude=78.22, longitude=15.65, timezone="Arctic/Longyearbyen")
    oracle = SwissPositionOracle()
    winter = datetime(2023, 12, 21, 12, 0, tzinfo=UTC)
    assert oracle.sunrise_of(winter, tromso) is None


@pytest.mark.swiss
def test_compute_panchang_with_swiss_backend() -> None:
    settings = Settings(panchang=PanchangCfg(anchor_to_sunrise=False))
    record = compute_panchang(MOMENT, DELHI, settings=settings)

    assert (record.tithi.index, record.tithi.name, record.tithi.paksha) == (
        11,
        "Ekadashi",
        "Shukla",
    )
    assert record.nakshatra.name == "Shatabhisha"
    assert (record.yoga.index, record.yoga.name) == (11, "Vriddhi")
    assert record.karana.index == 21
    assert record.vaar.english == "Tuesday"
    assert record.moment.utcoffset() == timedelta(hours=5, minutes=30)
    assert record.kalam.rahu is not None
    assert record.tithi.end_time is not None and record.tithi.end_time > MOMENT
