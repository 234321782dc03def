"""Ephemeris access: the oracle contract and its Swiss Ephemeris backend."""

from __future__ import annotations

from .oracle import (
    Body,
    EclipticPosition,
    OracleError,
    PositionOracle,
    SwissPositionOracle,
    ecliptic_longitudes,
    sidereal_longitudes,
)
from .sidereal import (
    DEFAULT_SIDEREAL_AYANAMSHA,
    SUPPORTED_AYANAMSHAS,
    normalize_ayanamsha_name,
)
from .swisseph_adapter import BodyPosition, RiseTransitResult, SwissEphemerisAdapter

__all__ = [
    "Body",
    "BodyPosition",
    "DEFAULT_SIDEREAL_AYANAMSHA",
    "EclipticPosition",
    "OracleError",
    "PositionOracle",
    "RiseTransitResult",
    "SUPPORTED_AYANAMSHAS",
    "SwissEphemerisAdapter",
    "SwissPositionOracle",
    "ecliptic_longitudes",
    "normalize_ayanamsha_name",
    "sidereal_longitudes",
]
