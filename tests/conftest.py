from __future__ import annotations

import importlib.util
import warnings

import pytest

if importlib.util.find_spec("swisseph") is None:
    warnings.warn(
        "pyswisseph not installed; Swiss-marked tests will be skipped.",
        RuntimeWarning,
        stacklevel=1,
    )


def _have_pyswisseph() -> bool:
    try:
        import swisseph as _swe  # noqa: F401
    except Exception:
        return False
    return True


def pytest_collection_modifyitems(config, items):
    """Skip Swiss-marked tests when the ephemeris backend is unavailable."""

    if _have_pyswisseph():
        return
    skip_swiss = pytest.mark.skip(reason="Swiss Ephemeris unavailable (no pyswisseph).")
    for item in items:
        if "swiss" in item.keywords:
            item.add_marker(skip_swiss)


@pytest.fixture
def config_home(tmp_path, monkeypatch):
    home = tmp_path / "panchangam-home"
    monkeypatch.setenv("PANCHANGAM_HOME", str(home))
    return home
