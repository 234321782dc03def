"""Runtime observability primitives for pañchānga modules."""

from __future__ import annotations

from .metrics import (
    COMPUTE_ERRORS,
    ORACLE_FAILURES,
    PANCHANG_COMPUTE_DURATION,
    TRANSITION_FAILURES,
    ensure_metrics_registered,
)

__all__ = [
    "COMPUTE_ERRORS",
    "ORACLE_FAILURES",
    "PANCHANG_COMPUTE_DURATION",
    "TRANSITION_FAILURES",
    "ensure_metrics_registered",
]
