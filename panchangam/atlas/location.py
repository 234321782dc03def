"""Observer location used for rise/set lookups and output localisation."""

from __future__ import annotations

from dataclasses import dataclass

from .tz import resolve_zone

__all__ = ["Location"]


@dataclass(frozen=True, slots=True)
class Location:
    """Geographic observer location with its display timezone.

    Attributes
    ----------
    latitude:
        Geodetic latitude in degrees, positive north.
    longitude:
        Geodetic longitude in degrees, positive east.
    timezone:
        IANA timezone identifier used only to localise output instants.
    altitude:
        Elevation above sea level in metres.
    name:
        Optional display label.
    """

    latitude: float
    longitude: float
    timezone: str = "UTC"
    altitude: float = 0.0
    name: str | None = None

    def __post_init__(self) -> None:
        if not -90.0 <= float(self.latitude) <= 90.0:
            raise ValueError(f"latitude must be within [-90, 90], got {self.latitude}")
        if not -180.0 <= float(self.longitude) <= 180.0:
            raise ValueError(
                f"longitude must be within [-180, 180], got {self.longitude}"
            )
        resolve_zone(self.timezone)

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {
            "latitude": self.latitude,
            "longitude": self.longitude,
            "timezone": self.timezone,
            "altitude": self.altitude,
        }
        if self.name is not None:
            payload["name"] = self.name
        return payload
