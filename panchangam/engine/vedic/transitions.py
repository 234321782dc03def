"""End-time estimation for tithi, nakshatra, yoga and karana.

Two strategies are used:

* tithi, yoga and karana extrapolate linearly with mean daily motions of
  the luminaries.  The result is a single-shot approximation that can be
  off by tens of minutes when the Moon runs fast or slow.
* nakshatra samples the Moon's longitude at fixed forward steps
  and reports the first sample that lands in a different nakshatra, so
  its accuracy is bounded by the step size.

Every estimator degrades to ``None`` instead of raising when the oracle
cannot answer.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Any

from ...atlas.tz import ensure_utc
from ...core.angles import forward_gap, normalize_degrees, quantize
from ...ephemeris.oracle import OracleError, PositionOracle, ecliptic_longitudes
from ...observability.metrics import TRANSITION_FAILURES
from .nakshatra import NAKSHATRA_COUNT, nakshatra_of
from .panchang import KARANA_ARC_DEGREES, TITHI_ARC_DEGREES, YOGA_ARC_DEGREES

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ...config.settings import Settings

logger = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_SWEEP_STEP",
    "DEFAULT_SWEEP_MAX_STEPS",
    "ElementTransitions",
    "TransitionRates",
    "estimate_karana_end",
    "estimate_nakshatra_end",
    "estimate_tithi_end",
    "estimate_transitions",
    "estimate_yoga_end",
]


DEFAULT_SWEEP_STEP = timedelta(hours=1)
DEFAULT_SWEEP_MAX_STEPS = 48


@dataclass(frozen=True)
class TransitionRates:
    """Mean daily motions (degrees/day) used for linear extrapolation."""

    moon: float = 13.2
    sun: float = 0.985

    @property
    def elongation(self) -> float:
        return self.moon - self.sun

    @property
    def combined(self) -> float:
        return self.moon + self.sun

    @classmethod
    def from_settings(cls, settings: Settings) -> TransitionRates:
        return cls(
            moon=settings.panchang.moon_daily_motion,
            sun=settings.panchang.sun_daily_motion,
        )


@dataclass(frozen=True)
class ElementTransitions:
    """Estimated end instants (UTC) for the four lunar elements."""

    tithi: datetime | None = None
    nakshatra: datetime | None = None
    yoga: datetime | None = None
    karana: datetime | None = None


def _record_failure(element: str, reason: str, moment: datetime, exc: Exception) -> None:
    logger.debug(
        "End time for %s at %s unavailable (%s): %s",
        element,
        moment.isoformat(),
        reason,
        exc,
    )
    TRANSITION_FAILURES.labels(element=element, reason=reason).inc()


def _guarded(
    element: str, moment: datetime, func: Callable[[], datetime | None]
) -> datetime | None:
    try:
        return func()
    except OracleError as exc:
        _record_failure(element, "oracle", moment, exc)
    except (ArithmeticError, ValueError) as exc:
        _record_failure(element, "arithmetic", moment, exc)
    return None


def _linear_end(
    moment: datetime, quantity: float, arc: float, count: int, rate: float
) -> datetime:
    index, _ = quantize(quantity, arc, count)
    target = normalize_degrees((index + 1) * arc)
    gap = forward_gap(quantity, target)
    if rate <= 0.0:
        raise ZeroDivisionError(f"non-positive rate {rate!r}")
    return moment + timedelta(days=gap / rate)


def _tithi_end(moment: datetime, sun: float, moon: float, rates: TransitionRates) -> datetime:
    elongation = normalize_degrees(moon - sun)
    return _linear_end(moment, elongation, TITHI_ARC_DEGREES, 30, rates.moon)


def _karana_end(moment: datetime, sun: float, moon: float, rates: TransitionRates) -> datetime:
    elongation = normalize_degrees(moon - sun)
    return _linear_end(moment, elongation, KARANA_ARC_DEGREES, 60, rates.elongation)


def _yoga_end(moment: datetime, sun: float, moon: float, rates: TransitionRates) -> datetime:
    total = normalize_degrees(sun + moon)
    return _linear_end(moment, total, YOGA_ARC_DEGREES, NAKSHATRA_COUNT, rates.combined)


def _rate_based(
    element: str,
    solver: Callable[[datetime, float, float, TransitionRates], datetime],
    oracle: PositionOracle,
    moment: datetime,
    rates: TransitionRates | None,
    sidereal: bool,
) -> datetime | None:
    start = ensure_utc(moment)
    active = rates or TransitionRates()

    def _run() -> datetime:
        sun, moon = ecliptic_longitudes(oracle, start, sidereal=sidereal)
        return solver(start, sun, moon, active)

    return _guarded(element, start, _run)


def estimate_tithi_end(
    oracle: PositionOracle,
    moment: datetime,
    *,
    rates: TransitionRates | None = None,
    sidereal: bool = True,
) -> datetime | None:
    """Return the approximate instant the current tithi ends."""

    return _rate_based("tithi", _tithi_end, oracle, moment, rates, sidereal)


def estimate_karana_end(
    oracle: PositionOracle,
    moment: datetime,
    *,
    rates: TransitionRates | None = None,
    sidereal: bool = True,
) -> datetime | None:
    """Return the approximate instant the current karana ends."""

    return _rate_based("karana", _karana_end, oracle, moment, rates, sidereal)


def estimate_yoga_end(
    oracle: PositionOracle,
    moment: datetime,
    *,
    rates: TransitionRates | None = None,
    sidereal: bool = True,
) -> datetime | None:
    """Return the approximate instant the current yoga ends."""

    return _rate_based("yoga", _yoga_end, oracle, moment, rates, sidereal)


def _sweep(
    oracle: PositionOracle,
    start: datetime,
    step: timedelta,
    max_steps: int,
    sidereal: bool,
) -> datetime | None:
    _, moon = ecliptic_longitudes(oracle, start, sidereal=sidereal)
    initial = nakshatra_of(moon)
    for k in range(1, max_steps + 1):
        sample = start + step * k
        _, moon = ecliptic_longitudes(oracle, sample, sidereal=sidereal)
        if nakshatra_of(moon) != initial:
            return sample
    logger.debug(
        "No nakshatra change within %d steps of %s from %s",
        max_steps,
        step,
        start.isoformat(),
    )
    TRANSITION_FAILURES.labels(element="nakshatra", reason="exhausted").inc()
    return None


def estimate_nakshatra_end(
    oracle: PositionOracle,
    moment: datetime,
    *,
    step: timedelta = DEFAULT_SWEEP_STEP,
    max_steps: int = DEFAULT_SWEEP_MAX_STEPS,
    sidereal: bool = True,
) -> datetime | None:
    """Return the first sampled instant at which the Moon's nakshatra changes.

    The Moon is sampled at ``moment + k * step`` for ``k`` in
    ``1..max_steps``.  ``None`` is returned when no change is seen within
    that horizon.
    """

    if step <= timedelta(0):
        raise ValueError("step must be positive")
    if max_steps < 1:
        raise ValueError("max_steps must be at least 1")
    start = ensure_utc(moment)
    return _guarded(
        "nakshatra", start, lambda: _sweep(oracle, start, step, max_steps, sidereal)
    )


def estimate_transitions(
    oracle: PositionOracle,
    moment: datetime,
    *,
    rates: TransitionRates | None = None,
    step: timedelta = DEFAULT_SWEEP_STEP,
    max_steps: int = DEFAULT_SWEEP_MAX_STEPS,
    sidereal: bool = True,
) -> ElementTransitions:
    """Return end-time estimates for all four elements starting at ``moment``.

    With ``sidereal`` off the elements are taken from tropical longitudes.
    """

    start = ensure_utc(moment)
    active = rates or TransitionRates()
    ends: dict[str, Any] = {}
    try:
        sun, moon = ecliptic_longitudes(oracle, start, sidereal=sidereal)
    except OracleError as exc:
        for element in ("tithi", "yoga", "karana"):
            _record_failure(element, "oracle", start, exc)
    else:
        solvers = {"tithi": _tithi_end, "yoga": _yoga_end, "karana": _karana_end}
        for element, solver in solvers.items():
            ends[element] = _guarded(
                element,
                start,
                lambda solver=solver: solver(start, sun, moon, active),
            )
    ends["nakshatra"] = estimate_nakshatra_end(
        oracle, start, step=step, max_steps=max_steps, sidereal=sidereal
    )
    return ElementTransitions(**ends)
