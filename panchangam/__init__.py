"""Panchangam: Hindu calendar elements from Sun and Moon longitudes."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version as _get_version

from .atlas import Location
from .engine import PanchangComputationError, PanchangRecord, compute_panchang
from .ephemeris import OracleError, PositionOracle, SwissPositionOracle

try:
    __version__ = _get_version("panchangam")
except PackageNotFoundError:  # pragma: no cover - running from a source checkout
    __version__ = "0.0.0"


def get_version() -> str:
    """Return the resolved package version."""

    return __version__


__all__ = [
    "Location",
    "OracleError",
    "PanchangComputationError",
    "PanchangRecord",
    "PositionOracle",
    "SwissPositionOracle",
    "__version__",
    "compute_panchang",
    "get_version",
]
