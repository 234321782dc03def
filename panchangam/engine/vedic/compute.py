"""Assemble a complete pañchānga record for an instant and location."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta
from time import perf_counter
from typing import Any, TypeVar

from ...atlas.location import Location
from ...atlas.tz import ensure_utc, localize, resolve_zone
from ...config.settings import Settings, default_settings
from ...core.angles import normalize_degrees
from ...ephemeris.oracle import OracleError, PositionOracle, SwissPositionOracle
from ...observability.metrics import (
    COMPUTE_ERRORS,
    ORACLE_FAILURES,
    PANCHANG_COMPUTE_DURATION,
    ensure_metrics_registered,
)
from .calendar import (
    LunarMonth,
    Samvat,
    ayana_from_longitude,
    lunar_month_from_longitudes,
    moon_phase_from_longitudes,
    paksha_from_longitudes,
    rashi_of,
    ritu_from_longitude,
    samvat_for_moment,
)
from .nakshatra import Nakshatra, nakshatra_info, nakshatra_of
from .panchang import (
    Karana,
    NakshatraStatus,
    Tithi,
    Vaar,
    Yoga,
    karana_from_longitudes,
    nakshatra_from_longitude,
    tithi_from_longitudes,
    vaar_from_datetime,
    with_end_time,
    yoga_from_longitudes,
)
from .transitions import ElementTransitions, TransitionRates, estimate_transitions
from .windows import (
    DayNightLengths,
    KalamWindows,
    MuhuratWindows,
    day_night_lengths,
    kalam_windows,
    madhyahna,
    muhurat_windows,
    weekday_index,
)

logger = logging.getLogger(__name__)

__all__ = [
    "PanchangComputationError",
    "PanchangRecord",
    "compute_panchang",
]

_T = TypeVar("_T")

_ANCHOR_HORIZON = timedelta(hours=24)


class PanchangComputationError(RuntimeError):
    """Raised when the baseline Sun/Moon positions cannot be resolved."""

    def __init__(
        self,
        message: str,
        *,
        moment: datetime,
        location: Location,
    ) -> None:
        super().__init__(message)
        self.moment = moment
        self.location = location


@dataclass(frozen=True)
class PanchangRecord:
    """Pañchānga snapshot with every instant in the location's timezone."""

    moment: datetime
    location: Location
    anchor: datetime
    ayanamsa_system: str
    ayanamsa: float
    sun_longitude: float
    moon_longitude: float
    tithi: Tithi
    nakshatra: NakshatraStatus
    yoga: Yoga
    karana: Karana
    vaar: Vaar
    sunrise: datetime | None
    sunset: datetime | None
    moonrise: datetime | None
    moonset: datetime | None
    kalam: KalamWindows
    muhurat: MuhuratWindows
    moon_phase: str
    paksha: str
    lunar_month: LunarMonth
    samvat: Samvat
    sun_rashi: str
    moon_rashi: str
    surya_nakshatra: Nakshatra
    ritu: str
    ayana: str
    madhyahna: datetime | None
    day_lengths: DayNightLengths | None

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serialisable representation."""

        def _iso(value: datetime | None) -> str | None:
            return value.isoformat() if value is not None else None

        return {
            "moment": self.moment.isoformat(),
            "location": self.location.to_dict(),
            "anchor": self.anchor.isoformat(),
            "ayanamsa": {"system": self.ayanamsa_system, "degrees": self.ayanamsa},
            "sun_longitude": self.sun_longitude,
            "moon_longitude": self.moon_longitude,
            "tithi": self.tithi.to_dict(),
            "nakshatra": self.nakshatra.to_dict(),
            "yoga": self.yoga.to_dict(),
            "karana": self.karana.to_dict(),
            "vaar": self.vaar.to_dict(),
            "sunrise": _iso(self.sunrise),
            "sunset": _iso(self.sunset),
            "moonrise": _iso(self.moonrise),
            "moonset": _iso(self.moonset),
            "kalam": self.kalam.to_dict(),
            "muhurat": self.muhurat.to_dict(),
            "moon_phase": self.moon_phase,
            "paksha": self.paksha,
            "lunar_month": self.lunar_month.to_dict(),
            "samvat": self.samvat.to_dict(),
            "sun_rashi": self.sun_rashi,
            "moon_rashi": self.moon_rashi,
            "surya_nakshatra": {
                "number": self.surya_nakshatra.number,
                "name": self.surya_nakshatra.name,
            },
            "ritu": self.ritu,
            "ayana": self.ayana,
            "madhyahna": _iso(self.madhyahna),
            "day_lengths": self.day_lengths.to_dict() if self.day_lengths else None,
        }


def _optional(operation: str, moment: datetime, query: Callable[[], _T]) -> _T | None:
    try:
        return query()
    except OracleError as exc:
        logger.debug("Oracle %s unavailable for %s: %s", operation, moment.isoformat(), exc)
        ORACLE_FAILURES.labels(operation=operation).inc()
        return None


def _choose_anchor(start: datetime, sunrise: datetime | None, enabled: bool) -> datetime:
    if not enabled:
        return start
    if sunrise is None:
        logger.debug("No sunrise near %s; anchoring elements at the instant", start.isoformat())
        return start
    if abs(ensure_utc(sunrise) - start) > _ANCHOR_HORIZON:
        return start
    return ensure_utc(sunrise)


def _daylight(
    sunrise: datetime | None, sunset: datetime | None
) -> tuple[datetime | None, datetime | None]:
    """Return the pair unchanged, or ``(None, None)`` when it does not form a day."""

    if sunrise is None or sunset is None:
        return None, None
    try:
        day_night_lengths(sunrise, sunset)
    except ValueError as exc:
        logger.debug("Ignoring sunrise/sunset pair %s/%s: %s", sunrise, sunset, exc)
        return None, None
    return sunrise, sunset


def _baseline(
    oracle: PositionOracle, at: datetime, sidereal: bool
) -> tuple[float, float, float]:
    ayanamsa = float(oracle.sidereal_correction_at(at)) if sidereal else 0.0
    sun = oracle.position_of("Sun", at).longitude
    moon = oracle.position_of("Moon", at).longitude
    return ayanamsa, float(sun), float(moon)


def _anchored_baseline(
    oracle: PositionOracle, start: datetime, anchor: datetime, sidereal: bool
) -> tuple[datetime, float, float, float]:
    try:
        ayanamsa, sun_tropical, moon_tropical = _baseline(oracle, anchor, sidereal)
    except OracleError as exc:
        if anchor == start:
            raise
        logger.debug("Sunrise anchor %s unusable: %s", anchor.isoformat(), exc)
        anchor = start
        ayanamsa, sun_tropical, moon_tropical = _baseline(oracle, anchor, sidereal)
    return anchor, ayanamsa, sun_tropical, moon_tropical


def _compute(
    moment: datetime,
    start: datetime,
    location: Location,
    oracle: PositionOracle,
    settings: Settings,
) -> PanchangRecord:
    cfg = settings.panchang
    tz = location.timezone

    sunrise = _optional("sunrise", start, lambda: oracle.sunrise_of(start, location))
    anchor = _choose_anchor(start, sunrise, cfg.anchor_to_sunrise)

    try:
        anchor, ayanamsa, sun_tropical, moon_tropical = _anchored_baseline(
            oracle, start, anchor, cfg.sidereal
        )
    except OracleError as exc:
        logger.warning(
            "Baseline positions unavailable for %s at %s: %s",
            start.isoformat(),
            location.name or f"{location.latitude},{location.longitude}",
            exc,
        )
        raise PanchangComputationError(
            f"baseline positions unavailable for {start.isoformat()}: {exc}",
            moment=moment,
            location=location,
        ) from exc
    sun = normalize_degrees(sun_tropical - ayanamsa)
    moon = normalize_degrees(moon_tropical - ayanamsa)

    # End times run from the instant the elements were read at.
    ends: ElementTransitions = estimate_transitions(
        oracle,
        anchor,
        rates=TransitionRates.from_settings(settings),
        step=timedelta(minutes=cfg.sweep_step_minutes),
        max_steps=cfg.sweep_max_steps,
        sidereal=cfg.sidereal,
    )

    sunset = _optional("sunset", start, lambda: oracle.sunset_of(start, location))
    moonrise = _optional("moonrise", start, lambda: oracle.moonrise_of(start, location))
    moonset = _optional("moonset", start, lambda: oracle.moonset_of(start, location))

    day_start, day_end = _daylight(sunrise, sunset)
    weekday = weekday_index(moment)
    kalam = kalam_windows(weekday, day_start, day_end)
    muhurat = muhurat_windows(day_start, day_end)
    lengths = day_night_lengths(day_start, day_end) if day_start and day_end else None

    zone = resolve_zone(tz)
    local_moment = start.astimezone(zone)
    return PanchangRecord(
        moment=local_moment,
        location=location,
        anchor=anchor.astimezone(zone),
        ayanamsa_system=cfg.ayanamsa if cfg.sidereal else "tropical",
        ayanamsa=ayanamsa,
        sun_longitude=sun,
        moon_longitude=moon,
        tithi=with_end_time(tithi_from_longitudes(sun, moon), localize(ends.tithi, tz)),
        nakshatra=with_end_time(
            nakshatra_from_longitude(moon), localize(ends.nakshatra, tz)
        ),
        yoga=with_end_time(yoga_from_longitudes(sun, moon), localize(ends.yoga, tz)),
        karana=with_end_time(karana_from_longitudes(sun, moon), localize(ends.karana, tz)),
        vaar=vaar_from_datetime(moment),
        sunrise=localize(sunrise, tz),
        sunset=localize(sunset, tz),
        moonrise=localize(moonrise, tz),
        moonset=localize(moonset, tz),
        kalam=kalam.localized(tz),
        muhurat=muhurat.localized(tz),
        moon_phase=moon_phase_from_longitudes(sun, moon),
        paksha=paksha_from_longitudes(sun, moon),
        lunar_month=lunar_month_from_longitudes(sun, moon),
        samvat=samvat_for_moment(local_moment),
        sun_rashi=rashi_of(sun),
        moon_rashi=rashi_of(moon),
        surya_nakshatra=nakshatra_info(nakshatra_of(sun)),
        ritu=ritu_from_longitude(sun),
        ayana=ayana_from_longitude(sun_tropical),
        madhyahna=localize(madhyahna(day_start, day_end), tz),
        day_lengths=lengths,
    )


def compute_panchang(
    moment: datetime,
    location: Location,
    oracle: PositionOracle | None = None,
    *,
    settings: Settings | None = None,
) -> PanchangRecord:
    """Return the pañchānga for ``moment`` at ``location``.

    ``moment`` must be timezone-aware.  When ``oracle`` is omitted a
    :class:`SwissPositionOracle` is built from ``settings``.  Every
    failure other than the baseline Sun/Moon query is recovered into an
    absent field; the baseline failure raises
    :class:`PanchangComputationError`.
    """

    start = ensure_utc(moment)
    settings = settings or default_settings()
    if settings.observability.metrics_enabled:
        ensure_metrics_registered()
    if oracle is None:
        oracle = SwissPositionOracle.from_settings(settings)
    oracle_label = getattr(oracle, "name", oracle.__class__.__name__)

    began = perf_counter()
    try:
        return _compute(moment, start, location, oracle, settings)
    except Exception as exc:
        COMPUTE_ERRORS.labels(component="panchang", error=exc.__class__.__name__).inc()
        raise
    finally:
        PANCHANG_COMPUTE_DURATION.labels(oracle=oracle_label).observe(perf_counter() - began)
