"""Core numeric helpers."""

from __future__ import annotations

from .angles import EPSILON_DEG, forward_gap, normalize_degrees, quantize, signed_delta

__all__ = ["EPSILON_DEG", "forward_gap", "normalize_degrees", "quantize", "signed_delta"]
