from __future__ import annotations

import pytest

from panchangam.core.angles import normalize_degrees

hypothesis = pytest.importorskip("hypothesis")
given = hypothesis.given
st = hypothesis.strategies
settings = hypothesis.settings

FLOATS = st.floats(
    min_value=-1e6,
    max_value=1e6,
    allow_nan=False,
    allow_infinity=False,
)


@settings(deadline=None)
@given(value=FLOATS)
def test_normalize_is_idempotent_and_in_range(value: float) -> None:
    once = normalize_degrees(value)
    assert 0.0 <= once < 360.0
    assert normalize_degrees(once) == once
