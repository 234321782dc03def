"""Swiss Ephemeris adapter with sidereal awareness and convenience helpers."""

from __future__ import annotations

import importlib
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from functools import lru_cache
from pathlib import Path
from types import ModuleType

from .sidereal import (
    DEFAULT_SIDEREAL_AYANAMSHA,
    SUPPORTED_AYANAMSHAS,
    SWISS_SIDEREAL_MODES,
    normalize_ayanamsha_name,
)

logger = logging.getLogger(__name__)

__all__ = [
    "EPHEMERIS_ENV_KEYS",
    "BodyPosition",
    "RiseTransitResult",
    "SwissEphemerisAdapter",
    "resolve_ephemeris_path",
    "swe_calc",
]


EPHEMERIS_ENV_KEYS: tuple[str, ...] = (
    "SE_EPHE_PATH",
    "SWE_EPH_PATH",
    "PANCHANGAM_SE_EPHE_PATH",
)

_EPHEMERIS_HINTS: tuple[Path, ...] = (
    Path.home() / ".sweph",
    Path("/usr/share/sweph"),
    Path("/usr/share/libswisseph"),
)


@lru_cache(maxsize=1)
def _swe() -> ModuleType:
    """Import :mod:`swisseph` on first use so the engine imports without it."""

    try:
        return importlib.import_module("swisseph")
    except ImportError as exc:  # pragma: no cover - import errors depend on env
        raise RuntimeError(
            "Swiss Ephemeris not available. Install pyswisseph and optionally "
            "set SE_EPHE_PATH to your ephemeris data directory."
        ) from exc


def resolve_ephemeris_path(
    explicit: str | os.PathLike[str] | None = None,
) -> str | None:
    """Return the ephemeris data directory to use, or ``None``.

    An explicit path wins.  Otherwise the first existing directory named by
    :data:`EPHEMERIS_ENV_KEYS` or found among the usual install locations is
    returned.  ``None`` lets Swiss Ephemeris fall back to its built-in
    Moshier theory, which is ample for calendar work.
    """

    if explicit is not None:
        return str(explicit)
    candidates = [os.environ.get(key) for key in EPHEMERIS_ENV_KEYS]
    candidates.extend(str(hint) for hint in _EPHEMERIS_HINTS)
    for candidate in candidates:
        if candidate and Path(candidate).expanduser().is_dir():
            return str(Path(candidate).expanduser())
    return None


@lru_cache(maxsize=1)
def _body_codes() -> Mapping[str, int]:
    swe = _swe()
    return {"Sun": int(swe.SUN), "Moon": int(swe.MOON)}


@lru_cache(maxsize=1)
def _rise_transit_events() -> Mapping[str, int]:
    swe = _swe()
    return {
        "rise": swe.CALC_RISE,
        "set": swe.CALC_SET,
    }


@dataclass(frozen=True, slots=True)
class BodyPosition:
    """Structured tropical ephemeris output for a single body."""

    body: str
    julian_day: float
    longitude: float
    latitude: float
    distance_au: float
    speed_longitude: float


@dataclass(frozen=True, slots=True)
class RiseTransitResult:
    """Rise/set metadata returned by Swiss Ephemeris."""

    body: str
    event: str
    julian_day: float | None
    datetime: datetime | None
    status: int
    rsmi: int
    flags: int


class SwissEphemerisAdapter:
    """High level wrapper around :mod:`pyswisseph` with sane defaults.

    Positions are always tropical; the configured ayanamsha is only used by
    :meth:`ayanamsa` so callers can subtract it explicitly.
    """

    def __init__(
        self,
        ephemeris_path: str | os.PathLike[str] | None = None,
        *,
        ayanamsha: str | None = None,
    ) -> None:
        normalized = normalize_ayanamsha_name(ayanamsha or DEFAULT_SIDEREAL_AYANAMSHA)
        if normalized not in SUPPORTED_AYANAMSHAS:
            options = ", ".join(sorted(SUPPORTED_AYANAMSHAS))
            raise ValueError(
                f"Unsupported ayanamsha '{ayanamsha}'. Supported options: {options}"
            )
        self.ayanamsha = normalized

        swe = _swe()
        try:
            self._sidereal_mode = int(getattr(swe, SWISS_SIDEREAL_MODES[normalized]))
        except AttributeError as exc:  # pragma: no cover - depends on pyswisseph build
            raise ValueError(
                f"Swiss Ephemeris does not expose SIDM constant for '{normalized}'"
            ) from exc
        self._calc_flags = swe.FLG_SWIEPH | swe.FLG_SPEED
        self._fallback_flags = swe.FLG_MOSEPH | swe.FLG_SPEED
        self._rise_flags = swe.FLG_SWIEPH

        self.ephemeris_path = self._configure_ephemeris_path(ephemeris_path)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _configure_ephemeris_path(
        self, ephemeris_path: str | os.PathLike[str] | None
    ) -> str | None:
        path = resolve_ephemeris_path(ephemeris_path)
        if path is None:
            logger.debug("No Swiss ephemeris files found; using built-in Moshier theory")
            return None
        _swe().set_ephe_path(path)
        return path

    def _apply_sidereal_mode(self) -> None:
        swe = _swe()
        swe.set_sid_mode(self._sidereal_mode, 0.0, 0.0)

    # ------------------------------------------------------------------
    # Core public API
    # ------------------------------------------------------------------
    @staticmethod
    def julian_day(moment: datetime) -> float:
        """Return the Julian day (UT) for a timezone-aware :class:`datetime`."""

        if moment.tzinfo is None or moment.tzinfo.utcoffset(moment) is None:
            raise ValueError(
                "datetime must be timezone-aware in UTC or convertible to UTC"
            )
        moment_utc = moment.astimezone(UTC)
        hour = (
            moment_utc.hour
            + moment_utc.minute / 60.0
            + moment_utc.second / 3600.0
            + moment_utc.microsecond / 3.6e9
        )
        swe = _swe()
        return swe.julday(moment_utc.year, moment_utc.month, moment_utc.day, hour)

    @staticmethod
    def from_julian_day(jd_ut: float) -> datetime:
        """Convert a Julian Day in UT back to a timezone-aware datetime."""

        swe = _swe()
        year, month, day, hour = swe.revjul(jd_ut, swe.GREG_CAL)
        base = datetime(year, month, day, tzinfo=UTC)
        return base + timedelta(seconds=hour * 3600.0)

    @staticmethod
    def body_code(body: str) -> int:
        """Return the Swiss body index for ``"Sun"`` or ``"Moon"``."""

        try:
            return _body_codes()[body]
        except KeyError as exc:
            raise ValueError(f"Unsupported body '{body}'") from exc

    def body_position(self, jd_ut: float, body: str) -> BodyPosition:
        """Compute tropical longitude/latitude/speed data for ``body``."""

        code = self.body_code(body)
        try:
            xx, _, _ = swe_calc(jd_ut=jd_ut, planet_index=code, flag=self._calc_flags)
        except RuntimeError:
            xx, _, _ = swe_calc(
                jd_ut=jd_ut, planet_index=code, flag=self._fallback_flags
            )

        lon, lat, dist, speed_lon = xx[0], xx[1], xx[2], xx[3]
        return BodyPosition(
            body=body,
            julian_day=jd_ut,
            longitude=lon % 360.0,
            latitude=lat,
            distance_au=dist,
            speed_longitude=speed_lon,
        )

    def ayanamsa(self, jd_ut: float) -> float:
        """Return the configured ayanamsa value for ``jd_ut`` in degrees."""

        self._apply_sidereal_mode()
        swe = _swe()
        return float(swe.get_ayanamsa_ut(jd_ut))

    def rise_transit(
        self,
        jd_ut: float,
        body: str,
        *,
        latitude: float,
        longitude: float,
        elevation: float = 0.0,
        event: str = "rise",
        pressure_hpa: float = 0.0,
        temperature_c: float = 0.0,
    ) -> RiseTransitResult:
        """Compute the next rise or set of ``body`` after ``jd_ut``."""

        event_key = (event or "rise").lower()
        try:
            rsmi = _rise_transit_events()[event_key]
        except KeyError as exc:
            options = ", ".join(sorted(_rise_transit_events()))
            raise ValueError(f"Unknown rise/set event '{event}'. Options: {options}") from exc

        swe = _swe()
        geopos = (float(longitude), float(latitude), float(elevation))
        status, tret = swe.rise_trans(
            jd_ut,
            self.body_code(body),
            rsmi,
            geopos,
            pressure_hpa,
            temperature_c,
            self._rise_flags,
        )

        event_jd = tret[0] if tret else None
        event_dt: datetime | None = None
        if status == 0 and event_jd is not None and event_jd != 0.0:
            event_dt = self.from_julian_day(event_jd)
        else:
            event_jd = None

        return RiseTransitResult(
            body=body,
            event=event_key,
            julian_day=event_jd,
            datetime=event_dt,
            status=status,
            rsmi=rsmi,
            flags=self._rise_flags,
        )


def swe_calc(
    *, jd_ut: float, planet_index: int, flag: int
) -> tuple[tuple[float, ...], int, str]:
    """Invoke Swiss Ephemeris core calculation with normalized arguments."""

    swe = _swe()
    try:
        xx, ret_flag = swe.calc_ut(jd_ut, planet_index, flag)
    except Exception as exc:  # pragma: no cover - pass through detailed context
        raise RuntimeError(
            f"Swiss ephemeris failed for body index {planet_index} at JD {jd_ut}: {exc}"
        ) from exc

    # pyswisseph surfaces the return flag directly; negative values mean the
    # error text was only visible through an exception.
    if ret_flag < 0:
        raise RuntimeError(f"Swiss ephemeris returned error code {ret_flag}")
    return tuple(xx), ret_flag, ""
