"""Angular utilities shared across the pañchānga calculators.

Every calendar element is a quantised view of an ecliptic longitude, a
longitude difference (Moon − Sun) or a longitude sum (Sun + Moon).  Raw
modulo arithmetic invites subtle bugs around the 0°/360° boundary, so the
helpers in this module centralise degree normalisation.  Callers must pass
the result of every addition or subtraction of longitudes through
:func:`normalize_degrees` before quantising it.
"""

from __future__ import annotations

import math
from typing import Final

__all__ = [
    "EPSILON_DEG",
    "normalize_degrees",
    "signed_delta",
    "forward_gap",
    "quantize",
]


EPSILON_DEG: Final[float] = 1e-9


def normalize_degrees(angle: float) -> float:
    """Return ``angle`` normalised to the ``[0, 360)`` interval.

    Parameters
    ----------
    angle:
        Value in **degrees**. Inputs outside the canonical range are
        wrapped by multiples of 360°.

    Returns
    -------
    float
        A degree value in ``[0, 360)``. Values within ``1e-9`` of ``360``
        are coerced to ``0`` so arc quantisation never yields an index one
        past the end of a name table.
    """

    wrapped = float(angle) % 360.0
    if wrapped >= 360.0 - EPSILON_DEG:
        wrapped = 0.0
    return wrapped if wrapped >= 0.0 else wrapped + 360.0


def signed_delta(angle: float) -> float:
    """Return ``angle`` wrapped to the ``[-180, 180)`` interval."""

    wrapped = normalize_degrees(angle)
    if wrapped >= 180.0:
        return wrapped - 360.0
    return wrapped


def forward_gap(current: float, target: float) -> float:
    """Return the forward angular distance from ``current`` to ``target``.

    Both values are treated as points on the circle; the result lies in
    ``[0, 360)``.
    """

    return normalize_degrees(float(target) - float(current))


def quantize(angle: float, arc: float, count: int) -> tuple[int, float]:
    """Split ``angle`` into a zero-based arc index and the offset within it.

    The index is clamped to ``0..count-1`` and the offset to ``[0, arc]``.
    True division is used instead of ``//`` because float floor division of
    exact multiples of ``360/27`` lands one arc short.
    """

    lon = normalize_degrees(angle)
    index = min(max(int(math.floor(lon / arc)), 0), count - 1)
    offset = min(max(lon - index * arc, 0.0), arc)
    return index, offset
