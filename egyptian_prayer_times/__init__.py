"""Offline Islamic prayer times (Egyptian General Authority of Survey method)."""

from egyptian_prayer_times.calculator import PrayerCalculator, calculate
from egyptian_prayer_times.params import AsrMethod, CalculationParams, InvalidArgumentError
from egyptian_prayer_times.times import Prayer, PrayerTimes

__all__ = [
    "AsrMethod",
    "CalculationParams",
    "InvalidArgumentError",
    "Prayer",
    "PrayerCalculator",
    "PrayerTimes",
    "calculate",
]
