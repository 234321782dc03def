"""Nakshatra and pada calculations for sidereal longitudes."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ...core.angles import normalize_degrees, quantize

__all__ = [
    "NAKSHATRA_ARC_DEGREES",
    "PADA_ARC_DEGREES",
    "NAKSHATRA_COUNT",
    "Nakshatra",
    "NakshatraPosition",
    "nakshatra_info",
    "nakshatra_of",
    "pada_of",
    "position_for",
]

NAKSHATRA_COUNT = 27
NAKSHATRA_ARC_DEGREES = 360.0 / NAKSHATRA_COUNT
PADA_ARC_DEGREES = NAKSHATRA_ARC_DEGREES / 4.0

# (name, ruler, deity, symbol)
NAKSHATRA_DATA: Sequence[tuple[str, str, str, str]] = (
    ("Ashwini", "Ketu", "Ashwini Kumaras", "Horse's head"),
    ("Bharani", "Venus", "Yama", "Yoni"),
    ("Krittika", "Sun", "Agni", "Razor/flame"),
    ("Rohini", "Moon", "Brahma", "Cart/chariot"),
    ("Mrigashira", "Mars", "Soma", "Deer's head"),
    ("Ardra", "Rahu", "Rudra", "Teardrop"),
    ("Punarvasu", "Jupiter", "Aditi", "Quiver of arrows"),
    ("Pushya", "Saturn", "Brihaspati", "Cow's udder"),
    ("Ashlesha", "Mercury", "Nagas", "Serpent"),
    ("Magha", "Ketu", "Pitrs", "Throne"),
    ("Purva Phalguni", "Venus", "Bhaga", "Hammock"),
    ("Uttara Phalguni", "Sun", "Aryaman", "Bed"),
    ("Hasta", "Moon", "Savitar", "Hand"),
    ("Chitra", "Mars", "Vishvakarma", "Pearl"),
    ("Swati", "Rahu", "Vayu", "Sword"),
    ("Vishakha", "Jupiter", "Indragni", "Triumphal arch"),
    ("Anuradha", "Saturn", "Mitra", "Lotus"),
    ("Jyeshtha", "Mercury", "Indra", "Earring"),
    ("Mula", "Ketu", "Nirriti", "Bunch of roots"),
    ("Purva Ashadha", "Venus", "Apah", "Fan"),
    ("Uttara Ashadha", "Sun", "Vishvedevas", "Elephant tusk"),
    ("Shravana", "Moon", "Vishnu", "Ear"),
    ("Dhanishtha", "Mars", "Vasus", "Drum"),
    ("Shatabhisha", "Rahu", "Varuna", "Circle"),
    ("Purva Bhadrapada", "Jupiter", "Ajaikapat", "Front legs of bed"),
    ("Uttara Bhadrapada", "Saturn", "Ahirbudhnya", "Back legs of bed"),
    ("Revati", "Mercury", "Pushan", "Fish"),
)


@dataclass(frozen=True)
class Nakshatra:
    """Metadata describing a nakshatra (``index`` is zero-based)."""

    index: int
    name: str
    ruler: str
    deity: str
    symbol: str

    @property
    def number(self) -> int:
        return self.index + 1


@dataclass(frozen=True)
class NakshatraPosition:
    """Detailed placement of a longitude within a nakshatra."""

    nakshatra: Nakshatra
    pada: int
    degree_in_nakshatra: float
    degree_in_pada: float
    longitude: float


_NAKSHATRAS: Sequence[Nakshatra] = tuple(
    Nakshatra(index=idx, name=name, ruler=ruler, deity=deity, symbol=symbol)
    for idx, (name, ruler, deity, symbol) in enumerate(NAKSHATRA_DATA)
)


def nakshatra_of(longitude: float) -> int:
    """Return the zero-based nakshatra index (0-26) for ``longitude``."""

    index, _ = quantize(longitude, NAKSHATRA_ARC_DEGREES, NAKSHATRA_COUNT)
    return index


def nakshatra_info(index: int) -> Nakshatra:
    """Return the :class:`Nakshatra` metadata for zero-based ``index``.

    Indices outside ``0..26`` are clamped to the table.
    """

    return _NAKSHATRAS[max(0, min(int(index), NAKSHATRA_COUNT - 1))]


def pada_of(longitude: float) -> int:
    """Return the zero-based pada index (0-3) for ``longitude``."""

    _, offset = quantize(longitude, NAKSHATRA_ARC_DEGREES, NAKSHATRA_COUNT)
    pada, _ = quantize(offset, PADA_ARC_DEGREES, 4)
    return pada


def position_for(longitude: float) -> NakshatraPosition:
    """Return a :class:`NakshatraPosition` for ``longitude``."""

    lon = normalize_degrees(longitude)
    idx, offset = quantize(lon, NAKSHATRA_ARC_DEGREES, NAKSHATRA_COUNT)
    pada_idx = pada_of(lon)
    return NakshatraPosition(
        nakshatra=nakshatra_info(idx),
        pada=pada_idx + 1,
        degree_in_nakshatra=offset,
        degree_in_pada=max(offset - (pada_idx * PADA_ARC_DEGREES), 0.0),
        longitude=lon,
    )
