"""Timezone conversion helpers for pañchānga output.

All computation happens on UTC instants.  Localisation is a final,
representation-only step: the localised value compares equal to the UTC
instant it was derived from.
"""

from __future__ import annotations

from datetime import UTC, datetime
from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

__all__ = [
    "ensure_utc",
    "localize",
    "local_midnight",
    "resolve_zone",
]


@lru_cache(maxsize=64)
def resolve_zone(tzid: str) -> ZoneInfo:
    """Return the :class:`ZoneInfo` for ``tzid`` or raise :class:`ValueError`."""

    if not tzid or not isinstance(tzid, str):
        raise ValueError("timezone identifier must be a non-empty string")
    try:
        return ZoneInfo(tzid)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"Unknown timezone identifier '{tzid}'") from exc


def ensure_utc(moment: datetime) -> datetime:
    """Return ``moment`` converted to UTC, rejecting naive datetimes."""

    if moment.tzinfo is None or moment.tzinfo.utcoffset(moment) is None:
        raise ValueError("datetime must be timezone-aware")
    return moment.astimezone(UTC)


def localize(moment: datetime | None, tzid: str) -> datetime | None:
    """Return ``moment`` expressed in ``tzid`` wall-clock time.

    ``None`` passes through so optional fields can be localised without
    guards at every call site.
    """

    if moment is None:
        return None
    return ensure_utc(moment).astimezone(resolve_zone(tzid))


def local_midnight(moment: datetime, tzid: str) -> datetime:
    """Return the UTC instant of local midnight on ``moment``'s local date."""

    local = ensure_utc(moment).astimezone(resolve_zone(tzid))
    midnight = datetime(local.year, local.month, local.day, tzinfo=resolve_zone(tzid))
    return midnight.astimezone(UTC)
