"""Prometheus metric definitions shared across pañchānga components."""

from __future__ import annotations

from collections.abc import Iterable

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Histogram

__all__ = [
    "COMPUTE_ERRORS",
    "ORACLE_FAILURES",
    "PANCHANG_COMPUTE_DURATION",
    "TRANSITION_FAILURES",
    "ensure_metrics_registered",
]


PANCHANG_COMPUTE_DURATION = Histogram(
    "panchangam_compute_duration_seconds",
    "Duration of full pañchānga record computations.",
    ("oracle",),
    registry=None,
)

COMPUTE_ERRORS = Counter(
    "panchangam_compute_errors_total",
    "Count of pañchānga computations that failed as a whole.",
    ("component", "error"),
    registry=None,
)

ORACLE_FAILURES = Counter(
    "panchangam_oracle_failures_total",
    "Oracle queries that could not be answered and were recovered as absent data.",
    ("operation",),
    registry=None,
)

TRANSITION_FAILURES = Counter(
    "panchangam_transition_failures_total",
    "Element end-time estimates that degraded to an unknown value.",
    ("element", "reason"),
    registry=None,
)


def _iter_metrics() -> Iterable[Counter | Histogram]:
    yield PANCHANG_COMPUTE_DURATION
    yield COMPUTE_ERRORS
    yield ORACLE_FAILURES
    yield TRANSITION_FAILURES


def ensure_metrics_registered(
    registry: CollectorRegistry | None = None,
) -> None:
    """Register shared metrics with ``registry`` if not already present."""

    target = registry or REGISTRY
    for metric in _iter_metrics():
        try:
            target.register(metric)
        except ValueError:
            # Prometheus raises when a metric name already exists in the registry.
            continue
