from __future__ import annotations

import pytest

from panchangam.core.angles import forward_gap, normalize_degrees, quantize, signed_delta


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (0.0, 0.0),
        (-30.0, 330.0),
        (720.0, 0.0),
        (725.5, 5.5),
        (-725.5, 354.5),
        (360.0 - 1e-12, 0.0),
    ],
)
def test_normalize_degrees(value: float, expected: float) -> None:
    assert normalize_degrees(value) == pytest.approx(expected)


def test_signed_delta_wraps_to_half_open_interval() -> None:
    assert signed_delta(190.0) == pytest.approx(-170.0)
    assert signed_delta(-190.0) == pytest.approx(170.0)
    assert signed_delta(180.0) == pytest.approx(-180.0)


def test_forward_gap_crosses_zero() -> None:
    assert forward_gap(350.0, 10.0) == pytest.approx(20.0)
    assert forward_gap(10.0, 350.0) == pytest.approx(340.0)


def test_quantize_exact_multiple_of_inexact_arc() -> None:
    index, offset = quantize(200.0, 360.0 / 27.0, 27)
    assert index == 15
    assert offset == pytest.approx(0.0, abs=1e-9)


def test_quantize_clamps_index_to_table() -> None:
    index, offset = quantize(359.999999, 12.0, 30)
    assert index == 29
    assert 0.0 <= offset <= 12.0
