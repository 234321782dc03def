"""Calendar labels that accompany the five pañchānga limbs.

These are light-weight derivations of the same sidereal longitudes:
lunar phase buckets, paksha, lunar month names, era years, rashi of the
luminaries, ritu (season) and ayana (solar half-year).
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Literal

from ...core.angles import normalize_degrees, quantize

__all__ = [
    "MASA_SEQUENCE",
    "MOON_PHASES",
    "RASHI_NAMES",
    "RITU_SEQUENCE",
    "LunarMonth",
    "Samvat",
    "ayana_from_longitude",
    "lunar_month_from_longitudes",
    "moon_phase_from_longitudes",
    "paksha_from_longitudes",
    "rashi_of",
    "ritu_from_longitude",
    "samvat_for_moment",
    "samvat_for_year",
]


MASA_SEQUENCE: Sequence[str] = (
    "Chaitra",
    "Vaisakha",
    "Jyeshtha",
    "Ashadha",
    "Shravana",
    "Bhadrapada",
    "Ashvina",
    "Kartika",
    "Margashirsha",
    "Pausha",
    "Magha",
    "Phalguna",
)

RASHI_NAMES: Sequence[str] = (
    "Aries",
    "Taurus",
    "Gemini",
    "Cancer",
    "Leo",
    "Virgo",
    "Libra",
    "Scorpio",
    "Sagittarius",
    "Capricorn",
    "Aquarius",
    "Pisces",
)

MOON_PHASES: Sequence[str] = (
    "New Moon",
    "Waxing Crescent",
    "First Quarter",
    "Waxing Gibbous",
    "Full Moon",
    "Waning Gibbous",
    "Last Quarter",
    "Waning Crescent",
)

# Sixty degrees of sidereal solar longitude per season, starting at Aries.
RITU_SEQUENCE: Sequence[str] = (
    "Vasanta",
    "Grishma",
    "Varsha",
    "Sharad",
    "Hemanta",
    "Shishira",
)

Paksha = Literal["Shukla", "Krishna"]
Ayana = Literal["Uttarayana", "Dakshinayana"]


@dataclass(frozen=True)
class LunarMonth:
    """Month names under the amanta and purnimanta conventions."""

    amanta: str
    purnimanta: str

    def to_dict(self) -> dict[str, str]:
        return {"amanta": self.amanta, "purnimanta": self.purnimanta}


@dataclass(frozen=True)
class Samvat:
    """Era year numbers for a Gregorian year."""

    shaka: int
    vikrama: int
    gujarati: int

    def to_dict(self) -> dict[str, int]:
        return {"shaka": self.shaka, "vikrama": self.vikrama, "gujarati": self.gujarati}


def rashi_of(longitude: float) -> str:
    """Return the sidereal sign name containing ``longitude``."""

    index, _ = quantize(longitude, 30.0, len(RASHI_NAMES))
    return RASHI_NAMES[index]


def moon_phase_from_longitudes(sun_longitude: float, moon_longitude: float) -> str:
    """Return one of eight 45° phase labels for the Moon-Sun elongation."""

    index, _ = quantize(moon_longitude - sun_longitude, 45.0, len(MOON_PHASES))
    return MOON_PHASES[index]


def paksha_from_longitudes(sun_longitude: float, moon_longitude: float) -> Paksha:
    delta = normalize_degrees(moon_longitude - sun_longitude)
    return "Shukla" if delta < 180.0 else "Krishna"


def lunar_month_from_longitudes(sun_longitude: float, moon_longitude: float) -> LunarMonth:
    """Return amanta and purnimanta month names.

    The amanta month is named from the Sun's sidereal sign (Sun in Pisces
    gives Chaitra).  Purnimanta months begin at full moon, so during the
    Krishna paksha they run one name ahead of amanta.
    """

    sign, _ = quantize(sun_longitude, 30.0, len(RASHI_NAMES))
    amanta = (sign + 1) % len(MASA_SEQUENCE)
    purnimanta = amanta
    if paksha_from_longitudes(sun_longitude, moon_longitude) == "Krishna":
        purnimanta = (amanta + 1) % len(MASA_SEQUENCE)
    return LunarMonth(amanta=MASA_SEQUENCE[amanta], purnimanta=MASA_SEQUENCE[purnimanta])


def samvat_for_year(year: int) -> Samvat:
    """Return approximate Shaka, Vikrama and Gujarati years for ``year``.

    The offsets ignore the new-year date of each era.
    """

    return Samvat(shaka=year - 78, vikrama=year + 57, gujarati=year + 56)


def samvat_for_moment(moment: datetime) -> Samvat:
    return samvat_for_year(moment.year)


def ritu_from_longitude(sun_longitude: float) -> str:
    index, _ = quantize(sun_longitude, 60.0, len(RITU_SEQUENCE))
    return RITU_SEQUENCE[index]


def ayana_from_longitude(tropical_sun_longitude: float) -> Ayana:
    """Return the solar half-year for a **tropical** Sun longitude.

    Uttarayana runs from the winter solstice (270°) to the summer solstice
    (90°).
    """

    lon = normalize_degrees(tropical_sun_longitude)
    if lon >= 270.0 or lon < 90.0:
        return "Uttarayana"
    return "Dakshinayana"
