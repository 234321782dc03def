"""Configuration models and helpers for pañchānga settings."""

from __future__ import annotations

import os
from copy import deepcopy
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from ..ephemeris.sidereal import (
    DEFAULT_SIDEREAL_AYANAMSHA,
    SUPPORTED_AYANAMSHAS,
    normalize_ayanamsha_name,
)

__all__ = [
    "CONFIG_FILENAME",
    "CURRENT_SETTINGS_SCHEMA_VERSION",
    "EphemerisCfg",
    "ObservabilityCfg",
    "PanchangCfg",
    "Settings",
    "config_path",
    "default_settings",
    "get_config_home",
    "load_settings",
    "save_settings",
]


CURRENT_SETTINGS_SCHEMA_VERSION = 1

# -------------------- Settings Schema --------------------


class EphemerisCfg(BaseModel):
    """Ephemeris source configuration."""

    path: Optional[str] = None


class PanchangCfg(BaseModel):
    """Element, transition and anchoring options for pañchānga computations."""

    ayanamsa: str = DEFAULT_SIDEREAL_AYANAMSHA
    sidereal: bool = True
    anchor_to_sunrise: bool = True
    moon_daily_motion: float = 13.2
    sun_daily_motion: float = 0.985
    sweep_step_minutes: float = 60.0
    sweep_max_steps: int = 48

    @field_validator("ayanamsa", mode="before")
    @classmethod
    def _normalize_ayanamsa(cls, value: str) -> str:
        normalized = normalize_ayanamsha_name(str(value))
        if normalized not in SUPPORTED_AYANAMSHAS:
            options = ", ".join(sorted(SUPPORTED_AYANAMSHAS))
            raise ValueError(f"Unknown ayanamsa '{value}'. Valid options: {options}")
        return normalized

    @field_validator("moon_daily_motion", "sun_daily_motion", mode="before")
    @classmethod
    def _positive_motion(cls, value: float) -> float:
        numeric = float(value)
        if numeric <= 0.0:
            raise ValueError("daily motion must be positive")
        return numeric

    @field_validator("sweep_step_minutes", mode="before")
    @classmethod
    def _cap_sweep_step(cls, value: float) -> float:
        numeric = float(value)
        return max(1.0, min(360.0, numeric))

    @field_validator("sweep_max_steps", mode="before")
    @classmethod
    def _cap_sweep_steps(cls, value: int) -> int:
        return max(1, min(10_000, int(value)))


class ObservabilityCfg(BaseModel):
    """Observability controls."""

    metrics_enabled: bool = False


class Settings(BaseModel):
    """Top-level settings model persisted on disk."""

    schema_version: int = Field(
        default=CURRENT_SETTINGS_SCHEMA_VERSION,
        ge=1,
        description="Version marker for persisted configuration payloads.",
    )
    ephemeris: EphemerisCfg = Field(default_factory=EphemerisCfg)
    panchang: PanchangCfg = Field(default_factory=PanchangCfg)
    observability: ObservabilityCfg = Field(default_factory=ObservabilityCfg)


# -------------------- I/O Helpers --------------------

CONFIG_FILENAME = "config.yaml"


def get_config_home() -> Path:
    """Return the directory where settings should be stored."""

    return Path(os.environ.get("PANCHANGAM_HOME", str(Path.home() / ".panchangam")))


def config_path() -> Path:
    """Return the full path to the configuration file."""

    return get_config_home() / CONFIG_FILENAME


def default_settings() -> Settings:
    """Instantiate a Settings object populated with defaults."""

    return Settings()


def save_settings(settings: Settings, path: Optional[Path] = None) -> Path:
    """Persist the given settings to disk as YAML."""

    target_path = Path(path) if path else config_path()
    target_path.parent.mkdir(parents=True, exist_ok=True)
    data = settings.model_dump()
    with target_path.open("w", encoding="utf-8") as handle:
        yaml.safe_dump(data, handle, sort_keys=False, allow_unicode=True)
    return target_path


def _coerce_schema_version(raw: object) -> int:
    try:
        value = int(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 1
    return max(1, value)


def _upgrade_settings_payload(
    data: dict[str, object], *, schema_version: int
) -> dict[str, object]:
    upgraded = deepcopy(data)
    upgraded["schema_version"] = max(schema_version, CURRENT_SETTINGS_SCHEMA_VERSION)
    return upgraded


def load_settings(path: Optional[Path] = None) -> Settings:
    """Load settings from disk, falling back to defaults when missing.

    Unlike :func:`save_settings` this never writes: a missing file simply
    yields :func:`default_settings`.
    """

    source_path = Path(path) if path else config_path()
    if not source_path.exists():
        return default_settings()
    with source_path.open("r", encoding="utf-8") as handle:
        raw = yaml.safe_load(handle) or {}
    if not isinstance(raw, dict):
        raw = {}
    schema_version = _coerce_schema_version(raw.get("schema_version"))
    data = _upgrade_settings_payload(raw, schema_version=schema_version)
    return Settings(**data)
