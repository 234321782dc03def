"""Location and timezone helpers."""

from __future__ import annotations

from .location import Location
from .tz import ensure_utc, local_midnight, localize, resolve_zone

__all__ = ["Location", "ensure_utc", "local_midnight", "localize", "resolve_zone"]
