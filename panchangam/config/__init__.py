"""Configuration helpers exposed at :mod:`panchangam.config`."""

from __future__ import annotations

from .settings import (
    EphemerisCfg,
    ObservabilityCfg,
    PanchangCfg,
    Settings,
    config_path,
    default_settings,
    get_config_home,
    load_settings,
    save_settings,
)

__all__ = [
    "Settings",
    "EphemerisCfg",
    "ObservabilityCfg",
    "PanchangCfg",
    "config_path",
    "get_config_home",
    "default_settings",
    "load_settings",
    "save_settings",
]
