"""Jyotish pañchānga calculators: elements, end times, daily windows."""

from __future__ import annotations

from .calendar import (
    LunarMonth,
    Samvat,
    ayana_from_longitude,
    lunar_month_from_longitudes,
    moon_phase_from_longitudes,
    paksha_from_longitudes,
    rashi_of,
    ritu_from_longitude,
    samvat_for_year,
)
from .compute import PanchangComputationError, PanchangRecord, compute_panchang
from .nakshatra import (
    NAKSHATRA_ARC_DEGREES,
    PADA_ARC_DEGREES,
    Nakshatra,
    NakshatraPosition,
    nakshatra_info,
    nakshatra_of,
    pada_of,
    position_for,
)
from .panchang import (
    Karana,
    NakshatraStatus,
    Tithi,
    Vaar,
    Yoga,
    karana_for_cycle_index,
    karana_from_longitudes,
    nakshatra_from_longitude,
    tithi_from_longitudes,
    vaar_from_datetime,
    yoga_from_longitudes,
)
from .transitions import (
    ElementTransitions,
    TransitionRates,
    estimate_karana_end,
    estimate_nakshatra_end,
    estimate_tithi_end,
    estimate_transitions,
    estimate_yoga_end,
)
from .windows import (
    DayNightLengths,
    KalamWindows,
    MuhuratWindows,
    Window,
    day_night_lengths,
    kalam_windows,
    madhyahna,
    muhurat_windows,
    weekday_index,
)

__all__ = [
    "DayNightLengths",
    "ElementTransitions",
    "KalamWindows",
    "Karana",
    "LunarMonth",
    "MuhuratWindows",
    "NAKSHATRA_ARC_DEGREES",
    "Nakshatra",
    "NakshatraPosition",
    "NakshatraStatus",
    "PADA_ARC_DEGREES",
    "PanchangComputationError",
    "PanchangRecord",
    "Samvat",
    "Tithi",
    "TransitionRates",
    "Vaar",
    "Window",
    "Yoga",
    "ayana_from_longitude",
    "compute_panchang",
    "day_night_lengths",
    "estimate_karana_end",
    "estimate_nakshatra_end",
    "estimate_tithi_end",
    "estimate_transitions",
    "estimate_yoga_end",
    "kalam_windows",
    "karana_for_cycle_index",
    "karana_from_longitudes",
    "lunar_month_from_longitudes",
    "madhyahna",
    "moon_phase_from_longitudes",
    "muhurat_windows",
    "nakshatra_from_longitude",
    "nakshatra_info",
    "nakshatra_of",
    "pada_of",
    "paksha_from_longitudes",
    "position_for",
    "rashi_of",
    "ritu_from_longitude",
    "samvat_for_year",
    "tithi_from_longitudes",
    "vaar_from_datetime",
    "weekday_index",
    "yoga_from_longitudes",
]
