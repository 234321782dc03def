"""Pañchānga computation engine."""

from __future__ import annotations

from .vedic import PanchangComputationError, PanchangRecord, compute_panchang

__all__ = ["PanchangComputationError", "PanchangRecord", "compute_panchang"]
