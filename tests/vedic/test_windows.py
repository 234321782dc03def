from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from panchangam.engine.vedic.windows import (
    KalamWindows,
    MuhuratWindows,
    Window,
    day_night_lengths,
    kalam_windows,
    madhyahna,
    muhurat_windows,
    weekday_index,
)

SUNRISE = datetime(2024, 1, 7, 6, 0, tzinfo=UTC)
SUNSET = datetime(2024, 1, 7, 18, 0, tzinfo=UTC)


def _at(hour: int, minute: int = 0, day: int = 7) -> datetime:
    return datetime(2024, 1, day, hour, minute, tzinfo=UTC)


def test_sunday_rahu_kalam_scenario() -> None:
    kalam = kalam_windows(0, SUNRISE, SUNSET)
    assert kalam.rahu == Window(_at(12), _at(13, 30))
    assert kalam.gulika == Window(_at(15), _at(16, 30))
    assert kalam.yamaganda == Window(_at(13, 30), _at(15))


@pytest.mark.parametrize(
    ("weekday", "rahu_start"),
    [(1, (7, 30)), (2, (15, 0)), (3, (10, 30)), (4, (9, 0)), (5, (13, 30)), (6, (6, 0))],
)
def test_rahu_kalam_by_weekday(weekday: int, rahu_start: tuple[int, int]) -> None:
    kalam = kalam_windows(weekday, SUNRISE, SUNSET)
    assert kalam.rahu is not None
    assert kalam.rahu.start == _at(*rahu_start)


def test_kalam_width_is_an_eighth_of_daylight() -> None:
    sunrise = datetime(2024, 6, 21, 5, 23, 17, tzinfo=UTC)
    sunset = datetime(2024, 6, 21, 19, 11, 3, tzinfo=UTC)
    kalam = kalam_windows(3, sunrise, sunset)
    for _, window in kalam.items():
        assert window is not None
        assert window.duration == (sunset - sunrise) / 8
    assert kalam_windows(3, sunrise, sunset) == kalam


def test_muhurat_windows_for_twelve_hour_day() -> None:
    muhurat = muhurat_windows(SUNRISE, SUNSET)
    assert muhurat.abhijit == Window(_at(11, 36), _at(12, 24))
    assert muhurat.amrit_kalam == Window(_at(10, 48), _at(11, 36))
    assert muhurat.amrit_siddhi_yoga == Window(_at(7, 36), _at(8, 24))
    assert muhurat.vijaya == Window(_at(14, 48), _at(15, 36))
    assert muhurat.godhuli == Window(_at(17, 36), _at(18, 24))
    assert muhurat.sayahna_sandhya == Window(_at(17, 48), _at(18, 12))
    assert muhurat.nishita == Window(_at(23, 36), _at(0, 24, day=8))
    assert muhurat.brahma == Window(_at(4, 24), _at(5, 12))
    assert muhurat.pratah_sandhya == Window(_at(5, 12), _at(6))
    assert muhurat.sarvartha_siddhi == Window(_at(6), _at(6, day=8))


def test_missing_sunrise_or_sunset_yields_no_windows() -> None:
    assert kalam_windows(0, None, SUNSET) == KalamWindows()
    assert muhurat_windows(SUNRISE, None) == MuhuratWindows()
    assert all(value is None for value in muhurat_windows(None, None).to_dict().values())
    assert madhyahna(None, SUNSET) is None


def test_sunset_before_sunrise_is_rejected() -> None:
    with pytest.raises(ValueError):
        kalam_windows(0, SUNSET, SUNRISE)
    with pytest.raises(ValueError):
        day_night_lengths(SUNRISE, SUNRISE)


def test_day_night_lengths_and_madhyahna() -> None:
    lengths = day_night_lengths(SUNRISE, _at(17, 30))
    assert lengths.day == timedelta(hours=11, minutes=30)
    assert lengths.night == timedelta(hours=12, minutes=30)
    assert lengths.to_dict() == {"dinamana_seconds": 41400.0, "ratrimana_seconds": 45000.0}
    assert madhyahna(SUNRISE, SUNSET) == _at(12)


def test_window_helpers() -> None:
    window = Window(_at(12), _at(13, 30))
    assert window.duration == timedelta(minutes=90)
    local = window.localized("Asia/Kolkata")
    assert local == window
    assert local.to_dict()["start"] == "2024-01-07T17:30:00+05:30"
    assert local.to_dict()["duration_seconds"] == 5400.0


def test_weekday_index_sunday_is_zero() -> None:
    assert weekday_index(_at(0)) == 0
    assert weekday_index(_at(0, day=8)) == 1
    assert weekday_index(_at(23, 59, day=13)) == 6
