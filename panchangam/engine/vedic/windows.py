"""Kalam and muhurat windows derived from sunrise, sunset and weekday.

Kalam windows split the daylight interval into eight equal segments and
select one per weekday.  Muhurat windows split daylight and night into
fifteen equal parts each and sit at fixed offsets from sunrise or sunset.
When either sunrise or sunset is unknown no window is produced at all.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, fields, replace
from datetime import datetime, timedelta
from typing import Any

from ...atlas.tz import localize

__all__ = [
    "DAY",
    "GULIKA_SEGMENTS",
    "RAHU_SEGMENTS",
    "YAMAGANDA_SEGMENTS",
    "DayNightLengths",
    "KalamWindows",
    "MuhuratWindows",
    "Window",
    "day_night_lengths",
    "kalam_windows",
    "madhyahna",
    "muhurat_windows",
    "weekday_index",
]


DAY = timedelta(hours=24)

# Segment (0-7) of the daylight interval, indexed by weekday with 0 = Sunday.
RAHU_SEGMENTS: Sequence[int] = (4, 1, 6, 3, 2, 5, 0)
GULIKA_SEGMENTS: Sequence[int] = (6, 5, 4, 3, 2, 1, 0)
YAMAGANDA_SEGMENTS: Sequence[int] = (5, 4, 3, 2, 1, 0, 6)


@dataclass(frozen=True)
class Window:
    """Closed-open interval ``[start, end)``."""

    start: datetime
    end: datetime

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    def localized(self, tzid: str) -> Window:
        return Window(localize(self.start, tzid), localize(self.end, tzid))  # type: ignore[arg-type]

    def to_dict(self) -> dict[str, Any]:
        return {
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "duration_seconds": self.duration.total_seconds(),
        }


class _WindowGroup:
    """Mixin giving window records a uniform ``to_dict``/``items`` view."""

    def items(self) -> list[tuple[str, Window | None]]:
        return [(f.name, getattr(self, f.name)) for f in fields(self)]  # type: ignore[arg-type]

    def localized(self, tzid: str):
        updates = {
            name: window.localized(tzid) if window is not None else None
            for name, window in self.items()
        }
        return replace(self, **updates)  # type: ignore[type-var]

    def to_dict(self) -> dict[str, Any]:
        return {
            name: window.to_dict() if window is not None else None
            for name, window in self.items()
        }


@dataclass(frozen=True)
class KalamWindows(_WindowGroup):
    """Inauspicious daylight windows."""

    rahu: Window | None = None
    gulika: Window | None = None
    yamaganda: Window | None = None


@dataclass(frozen=True)
class MuhuratWindows(_WindowGroup):
    """Auspicious windows anchored on sunrise or sunset."""

    abhijit: Window | None = None
    amrit_kalam: Window | None = None
    amrit_siddhi_yoga: Window | None = None
    vijaya: Window | None = None
    godhuli: Window | None = None
    sayahna_sandhya: Window | None = None
    nishita: Window | None = None
    brahma: Window | None = None
    pratah_sandhya: Window | None = None
    sarvartha_siddhi: Window | None = None


@dataclass(frozen=True)
class DayNightLengths:
    """Dinamana (daylight) and ratrimana (night) durations."""

    day: timedelta
    night: timedelta

    def to_dict(self) -> dict[str, float]:
        return {
            "dinamana_seconds": self.day.total_seconds(),
            "ratrimana_seconds": self.night.total_seconds(),
        }


def weekday_index(moment: datetime) -> int:
    """Return the weekday of ``moment`` with 0 = Sunday.

    The wall-clock fields of ``moment`` are used as given; no timezone
    conversion happens here.
    """

    return (moment.weekday() + 1) % 7


def day_night_lengths(sunrise: datetime, sunset: datetime) -> DayNightLengths:
    """Return daylight and night lengths for a sunrise/sunset pair."""

    day = sunset - sunrise
    if day <= timedelta(0):
        raise ValueError("sunset must be after sunrise")
    if day > DAY:
        raise ValueError("daylight cannot exceed 24 hours")
    return DayNightLengths(day=day, night=DAY - day)


def madhyahna(sunrise: datetime | None, sunset: datetime | None) -> datetime | None:
    """Return local apparent noon as the midpoint of sunrise and sunset."""

    if sunrise is None or sunset is None:
        return None
    return sunrise + day_night_lengths(sunrise, sunset).day / 2


def _segment(table: Sequence[int], weekday: int) -> int:
    return table[max(0, min(int(weekday), len(table) - 1))]


def kalam_windows(
    weekday: int, sunrise: datetime | None, sunset: datetime | None
) -> KalamWindows:
    """Return Rahu, Gulika and Yamaganda kalam for ``weekday`` (0 = Sunday)."""

    if sunrise is None or sunset is None:
        return KalamWindows()
    width = day_night_lengths(sunrise, sunset).day / 8

    def _window(table: Sequence[int]) -> Window:
        start = sunrise + width * _segment(table, weekday)
        return Window(start, start + width)

    return KalamWindows(
        rahu=_window(RAHU_SEGMENTS),
        gulika=_window(GULIKA_SEGMENTS),
        yamaganda=_window(YAMAGANDA_SEGMENTS),
    )


def muhurat_windows(sunrise: datetime | None, sunset: datetime | None) -> MuhuratWindows:
    """Return the ten muhurat windows for a sunrise/sunset pair."""

    if sunrise is None or sunset is None:
        return MuhuratWindows()
    lengths = day_night_lengths(sunrise, sunset)
    d = lengths.day / 15
    n = lengths.night / 15

    def _day(first: int) -> Window:
        return Window(sunrise + d * first, sunrise + d * (first + 1))

    def _around_sunset(minutes: int) -> Window:
        pad = timedelta(minutes=minutes)
        return Window(sunset - pad, sunset + pad)

    return MuhuratWindows(
        abhijit=_day(7),
        amrit_kalam=_day(6),
        amrit_siddhi_yoga=_day(2),
        vijaya=_day(11),
        godhuli=_around_sunset(24),
        sayahna_sandhya=_around_sunset(12),
        nishita=Window(sunset + n * 7, sunset + n * 8),
        brahma=Window(sunrise - n * 2, sunrise - n),
        pratah_sandhya=Window(sunrise - n, sunrise),
        sarvartha_siddhi=Window(sunrise, sunrise + DAY),
    )
