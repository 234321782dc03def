"""Position oracle contract consumed by the pañchānga engine.

The engine never talks to an ephemeris directly.  It asks a
:class:`PositionOracle` for tropical body positions, the sidereal
correction (ayanamsa) and rise/set instants.  Any implementation that can
answer those questions works; :class:`SwissPositionOracle` is the bundled
Swiss Ephemeris backed one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Any, Literal, Mapping, Protocol

from ..atlas.location import Location
from ..atlas.tz import ensure_utc, local_midnight
from ..core.angles import normalize_degrees
from .swisseph_adapter import SwissEphemerisAdapter

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..config.settings import Settings

logger = logging.getLogger(__name__)

__all__ = [
    "Body",
    "EclipticPosition",
    "OracleError",
    "PositionOracle",
    "SwissPositionOracle",
    "ecliptic_longitudes",
    "sidereal_longitudes",
]


Body = Literal["Sun", "Moon"]


class OracleError(RuntimeError):
    """Raised when the oracle cannot answer for the requested instant/location."""

    def __init__(
        self,
        message: str,
        *,
        operation: str,
        body: str | None = None,
        moment: datetime | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.operation = operation
        self.body = body
        self.moment = moment
        self.context = dict(context or {})


@dataclass(frozen=True, slots=True)
class EclipticPosition:
    """Tropical ecliptic coordinates in degrees."""

    longitude: float
    latitude: float


class PositionOracle(Protocol):
    """Provider contract answering position and rise/set questions."""

    def position_of(self, body: Body, moment: datetime) -> EclipticPosition:
        """Return the tropical ecliptic position of ``body`` at ``moment``."""
        ...

    def sidereal_correction_at(self, moment: datetime) -> float:
        """Return the ayanamsa in degrees at ``moment``."""
        ...

    def sunrise_of(self, moment: datetime, location: Location) -> datetime | None:
        ...

    def sunset_of(self, moment: datetime, location: Location) -> datetime | None:
        ...

    def moonrise_of(self, moment: datetime, location: Location) -> datetime | None:
        ...

    def moonset_of(self, moment: datetime, location: Location) -> datetime | None:
        ...


def ecliptic_longitudes(
    oracle: PositionOracle, moment: datetime, *, sidereal: bool = True
) -> tuple[float, float]:
    """Return ``(sun, moon)`` longitudes at ``moment``.

    With ``sidereal`` the oracle's ayanamsa is subtracted from the tropical
    positions; otherwise the tropical values are returned as they are and
    no ayanamsa is requested.
    """

    ayanamsa = float(oracle.sidereal_correction_at(moment)) if sidereal else 0.0
    sun = oracle.position_of("Sun", moment)
    moon = oracle.position_of("Moon", moment)
    return (
        normalize_degrees(sun.longitude - ayanamsa),
        normalize_degrees(moon.longitude - ayanamsa),
    )


def sidereal_longitudes(oracle: PositionOracle, moment: datetime) -> tuple[float, float]:
    return ecliptic_longitudes(oracle, moment, sidereal=True)


class SwissPositionOracle:
    """:class:`PositionOracle` backed by :class:`SwissEphemerisAdapter`.

    Rise and set events are searched forward from local midnight of the
    instant's calendar day in ``location.timezone``.  Circumpolar days
    (no rise or no set) yield ``None``.
    """

    name = "swiss"

    def __init__(
        self,
        adapter: SwissEphemerisAdapter | None = None,
        *,
        ayanamsa: str | None = None,
        ephemeris_path: str | None = None,
    ) -> None:
        self.adapter = adapter or SwissEphemerisAdapter(
            ephemeris_path, ayanamsha=ayanamsa
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> SwissPositionOracle:
        return cls(
            ayanamsa=settings.panchang.ayanamsa,
            ephemeris_path=settings.ephemeris.path,
        )

    def _julian_day(self, moment: datetime, operation: str) -> float:
        try:
            return self.adapter.julian_day(ensure_utc(moment))
        except ValueError as exc:
            raise OracleError(str(exc), operation=operation, moment=moment) from exc

    def position_of(self, body: Body, moment: datetime) -> EclipticPosition:
        jd_ut = self._julian_day(moment, "position")
        try:
            position = self.adapter.body_position(jd_ut, body)
        except (RuntimeError, ValueError) as exc:
            raise OracleError(
                f"position of {body} unavailable: {exc}",
                operation="position",
                body=body,
                moment=moment,
            ) from exc
        return EclipticPosition(longitude=position.longitude, latitude=position.latitude)

    def sidereal_correction_at(self, moment: datetime) -> float:
        jd_ut = self._julian_day(moment, "ayanamsa")
        try:
            return self.adapter.ayanamsa(jd_ut)
        except (RuntimeError, ValueError) as exc:
            raise OracleError(
                f"ayanamsa unavailable: {exc}", operation="ayanamsa", moment=moment
            ) from exc

    def _event(
        self,
        body: Body,
        event: str,
        moment: datetime,
        location: Location,
        *,
        start: datetime | None = None,
    ) -> datetime | None:
        operation = f"{body.lower()}{event}"
        search_from = start or local_midnight(moment, location.timezone)
        jd_ut = self._julian_day(search_from, operation)
        try:
            result = self.adapter.rise_transit(
                jd_ut,
                body,
                latitude=location.latitude,
                longitude=location.longitude,
                elevation=location.altitude,
                event=event,
            )
        except (RuntimeError, ValueError) as exc:
            raise OracleError(
                f"{operation} unavailable: {exc}",
                operation=operation,
                body=body,
                moment=moment,
            ) from exc
        if result.datetime is None:
            logger.debug(
                "No %s for %s at lat=%s (status=%s)",
                operation,
                moment.isoformat(),
                location.latitude,
                result.status,
            )
            return None
        # Events beyond the local day belong to the next calendar day.
        if result.datetime - search_from > timedelta(days=1) and start is None:
            return None
        return result.datetime

    def sunrise_of(self, moment: datetime, location: Location) -> datetime | None:
        return self._event("Sun", "rise", moment, location)

    def sunset_of(self, moment: datetime, location: Location) -> datetime | None:
        sunrise = self.sunrise_of(moment, location)
        if sunrise is None:
            return self._event("Sun", "set", moment, location)
        return self._event("Sun", "set", moment, location, start=sunrise)

    def moonrise_of(self, moment: datetime, location: Location) -> datetime | None:
        return self._event("Moon", "rise", moment, location)

    def moonset_of(self, moment: datetime, location: Location) -> datetime | None:
        return self._event("Moon", "set", moment, location)
