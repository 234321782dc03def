"""Pañchānga element calculators for sidereal Sun and Moon longitudes.

Every function in this module is pure: it takes the sidereal longitudes
of the Sun and Moon (degrees, any real value) and returns a frozen
snapshot.  End times are attached later by
:mod:`panchangam.engine.vedic.transitions`, so the ``end_time`` fields
default to ``None`` here.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, TypeVar

from ...core.angles import normalize_degrees, quantize
from .nakshatra import (
    NAKSHATRA_ARC_DEGREES,
    NAKSHATRA_COUNT,
    NakshatraPosition,
)
from .nakshatra import (
    position_for as nakshatra_position_for,
)

__all__ = [
    "TITHI_ARC_DEGREES",
    "YOGA_ARC_DEGREES",
    "KARANA_ARC_DEGREES",
    "MOVABLE_KARANA_SLOTS",
    "Tithi",
    "NakshatraStatus",
    "Yoga",
    "Karana",
    "Vaar",
    "tithi_from_longitudes",
    "nakshatra_from_longitude",
    "yoga_from_longitudes",
    "karana_for_cycle_index",
    "karana_from_longitudes",
    "vaar_from_datetime",
    "with_end_time",
]


TITHI_ARC_DEGREES: float = 360.0 / 30.0
"""Angular span of a single tithi in degrees."""

YOGA_ARC_DEGREES: float = 360.0 / 27.0
"""Angular span of a single yoga in degrees."""

KARANA_ARC_DEGREES: float = TITHI_ARC_DEGREES / 2.0
"""Angular span of a single karana (half tithi) in degrees."""

MOVABLE_KARANA_SLOTS: int = 57
"""Number of leading karana slots filled by the seven movable names."""

_T = TypeVar("_T")


@dataclass(frozen=True)
class Tithi:
    """Lunar day derived from the Moon-Sun elongation.

    ``index`` is the raw position in the lunar month (1-30) while
    ``number`` is the display value within the paksha (1-15).
    """

    index: int
    number: int
    name: str
    paksha: str
    waxing: bool
    percentage: float
    longitude_delta: float
    end_time: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "index": self.index,
            "number": self.number,
            "name": self.name,
            "paksha": self.paksha,
            "waxing": self.waxing,
            "percentage": self.percentage,
            "longitude_delta": self.longitude_delta,
            "end_time": _iso(self.end_time),
        }


@dataclass(frozen=True)
class NakshatraStatus:
    """Nakshatra placement of the Moon along with its completion."""

    position: NakshatraPosition
    percentage: float
    end_time: datetime | None = None

    @property
    def number(self) -> int:
        return self.position.nakshatra.number

    @property
    def name(self) -> str:
        return self.position.nakshatra.name

    @property
    def pada(self) -> int:
        return self.position.pada

    def to_dict(self) -> dict[str, Any]:
        nakshatra = self.position.nakshatra
        return {
            "number": self.number,
            "name": nakshatra.name,
            "ruler": nakshatra.ruler,
            "deity": nakshatra.deity,
            "symbol": nakshatra.symbol,
            "pada": self.position.pada,
            "degree_in_nakshatra": self.position.degree_in_nakshatra,
            "degree_in_pada": self.position.degree_in_pada,
            "longitude": self.position.longitude,
            "percentage": self.percentage,
            "end_time": _iso(self.end_time),
        }


@dataclass(frozen=True)
class Yoga:
    """Sum of luminary longitudes divided into 27 yogas."""

    index: int
    name: str
    longitude_sum: float
    percentage: float
    end_time: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "index": self.index,
            "name": self.name,
            "longitude_sum": self.longitude_sum,
            "percentage": self.percentage,
            "end_time": _iso(self.end_time),
        }


@dataclass(frozen=True)
class Karana:
    """Half-tithi segment metadata.

    ``index`` is the serial within the lunar month (1-60) and
    ``name_index`` points into the eleven-entry name table.  The two are
    tracked independently because the movable names repeat.
    """

    index: int
    name: str
    name_index: int
    movable: bool
    longitude_delta: float
    percentage: float
    end_time: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "index": self.index,
            "name": self.name,
            "name_index": self.name_index,
            "movable": self.movable,
            "longitude_delta": self.longitude_delta,
            "percentage": self.percentage,
            "end_time": _iso(self.end_time),
        }


@dataclass(frozen=True)
class Vaar:
    """Weekday name; ``index`` 0 is Sunday."""

    index: int
    name: str
    english: str

    def to_dict(self) -> dict[str, Any]:
        return {"index": self.index, "name": self.name, "english": self.english}


_TITHI_NAMES: Sequence[str] = (
    "Pratipada",
    "Dwitiya",
    "Tritiya",
    "Chaturthi",
    "Panchami",
    "Shashthi",
    "Saptami",
    "Ashtami",
    "Navami",
    "Dashami",
    "Ekadashi",
    "Dwadashi",
    "Trayodashi",
    "Chaturdashi",
)

_YOGA_NAMES: Sequence[str] = (
    "Vishkumbha",
    "Preeti",
    "Ayushman",
    "Saubhagya",
    "Shobhana",
    "Atiganda",
    "Sukarman",
    "Dhriti",
    "Shoola",
    "Ganda",
    "Vriddhi",
    "Dhruva",
    "Vyaghata",
    "Harshana",
    "Vajra",
    "Siddhi",
    "Vyatipata",
    "Variyan",
    "Parigha",
    "Shiva",
    "Siddha",
    "Sadhya",
    "Shubha",
    "Shukla",
    "Brahma",
    "Indra",
    "Vaidhriti",
)

_CHARA_KARANAS: Sequence[str] = (
    "Bava",
    "Balava",
    "Kaulava",
    "Taitila",
    "Gara",
    "Vanija",
    "Vishti",
)

_STHIRA_KARANAS: Sequence[str] = ("Shakuni", "Chatushpada", "Naga", "Kimstughna")

_KARANA_NAMES: Sequence[str] = (*_CHARA_KARANAS, *_STHIRA_KARANAS)

_VAAR_NAMES: Sequence[tuple[str, str]] = (
    ("Ravivara", "Sunday"),
    ("Somavara", "Monday"),
    ("Mangalavara", "Tuesday"),
    ("Budhavara", "Wednesday"),
    ("Guruvara", "Thursday"),
    ("Shukravara", "Friday"),
    ("Shanivara", "Saturday"),
)


def _clamped(table: Sequence[_T], index: int) -> _T:
    return table[max(0, min(int(index), len(table) - 1))]


def _iso(moment: datetime | None) -> str | None:
    return moment.isoformat() if moment is not None else None


def tithi_from_longitudes(sun_longitude: float, moon_longitude: float) -> Tithi:
    """Return the current tithi for the provided sidereal longitudes."""

    delta = normalize_degrees(moon_longitude - sun_longitude)
    index_zero, offset = quantize(delta, TITHI_ARC_DEGREES, 30)
    raw = index_zero + 1
    percentage = offset / TITHI_ARC_DEGREES * 100.0
    if raw <= 15:
        number = raw
        name = "Purnima" if number == 15 else _clamped(_TITHI_NAMES, number - 1)
        paksha, waxing = "Shukla", True
    else:
        number = raw - 15
        name = "Amavasya" if number == 15 else _clamped(_TITHI_NAMES, number - 1)
        paksha, waxing = "Krishna", False
    return Tithi(
        index=raw,
        number=number,
        name=name,
        paksha=paksha,
        waxing=waxing,
        percentage=percentage,
        longitude_delta=delta,
    )


def nakshatra_from_longitude(longitude: float) -> NakshatraStatus:
    """Return nakshatra placement and percentage complete for ``longitude``."""

    position = nakshatra_position_for(longitude)
    percentage = position.degree_in_nakshatra / NAKSHATRA_ARC_DEGREES * 100.0
    return NakshatraStatus(position=position, percentage=percentage)


def yoga_from_longitudes(sun_longitude: float, moon_longitude: float) -> Yoga:
    """Return the current yoga for the provided sidereal longitudes."""

    total = normalize_degrees(sun_longitude + moon_longitude)
    index_zero, offset = quantize(total, YOGA_ARC_DEGREES, NAKSHATRA_COUNT)
    return Yoga(
        index=index_zero + 1,
        name=_clamped(_YOGA_NAMES, index_zero),
        longitude_sum=total,
        percentage=offset / YOGA_ARC_DEGREES * 100.0,
    )


def karana_for_cycle_index(cycle: int) -> tuple[int, int, bool]:
    """Return ``(serial, name_index, movable)`` for a zero-based karana slot.

    The first 57 slots cycle through the seven movable names; the last
    slots map onto the four fixed names.  Slots past the end of the month
    stay on the final fixed name and the final serial.
    """

    cycle = max(0, int(cycle))
    if cycle < MOVABLE_KARANA_SLOTS:
        return cycle + 1, cycle % len(_CHARA_KARANAS), True
    offset = min(len(_STHIRA_KARANAS) - 1, cycle - MOVABLE_KARANA_SLOTS)
    name_index = min(len(_CHARA_KARANAS) + offset, len(_KARANA_NAMES) - 1)
    serial = min(MOVABLE_KARANA_SLOTS + 1 + offset, 60)
    return serial, name_index, False


def karana_from_longitudes(sun_longitude: float, moon_longitude: float) -> Karana:
    """Return the current karana for the provided sidereal longitudes."""

    delta = normalize_degrees(moon_longitude - sun_longitude)
    cycle, offset = quantize(delta, KARANA_ARC_DEGREES, 60)
    serial, name_index, movable = karana_for_cycle_index(cycle)
    return Karana(
        index=serial,
        name=_clamped(_KARANA_NAMES, name_index),
        name_index=name_index,
        movable=movable,
        longitude_delta=delta,
        percentage=offset / KARANA_ARC_DEGREES * 100.0,
    )


def vaar_from_datetime(moment: datetime) -> Vaar:
    """Return the weekday metadata for ``moment``.

    The weekday is read from ``moment``'s own wall clock; callers wanting
    a different zone must convert before calling.
    """

    index = (moment.weekday() + 1) % 7
    name, english = _clamped(_VAAR_NAMES, index)
    return Vaar(index=index, name=name, english=english)


def with_end_time(element: _T, end_time: datetime | None) -> _T:
    """Return a copy of ``element`` carrying ``end_time``."""

    return replace(element, end_time=end_time)  # type: ignore[type-var]
