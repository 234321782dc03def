"""Shared helpers for configuring sidereal zodiac modes."""

from __future__ import annotations

from typing import Final

SUPPORTED_AYANAMSHAS: Final[set[str]] = {
    "lahiri",
    "fagan_bradley",
    "krishnamurti",
    "raman",
    "deluce",
    "yukteshwar",
}
DEFAULT_SIDEREAL_AYANAMSHA: Final[str] = "lahiri"

# Swiss Ephemeris ``SIDM_*`` attribute for each supported ayanamsha.
SWISS_SIDEREAL_MODES: Final[dict[str, str]] = {
    "lahiri": "SIDM_LAHIRI",
    "fagan_bradley": "SIDM_FAGAN_BRADLEY",
    "krishnamurti": "SIDM_KRISHNAMURTI",
    "raman": "SIDM_RAMAN",
    "deluce": "SIDM_DELUCE",
    "yukteshwar": "SIDM_YUKTESHWAR",
}


def normalize_ayanamsha_name(value: str) -> str:
    """Return a canonical key for the provided ayanamsha name."""

    return value.strip().lower().replace("-", "_").replace("/", "_").replace(" ", "_")
