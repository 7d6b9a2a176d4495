"""
Agronomic Calculations
======================
Pure helpers over environmental readings: unit conversion, growing degree
days, period averages and precipitation totals, sustained humidity checks,
seasonal nitrogen totals and the soil temperature trend.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, Optional, Sequence

from turfops.domain.application import Application
from turfops.domain.environmental import EnvironmentalReading
from turfops.enums import ApplicationType, Trend

logger = logging.getLogger(__name__)

TREND_WINDOW_SAMPLES = 24
TREND_THRESHOLD_F = 2.0


def celsius_to_fahrenheit(temp_c: float) -> float:
    return temp_c * 9.0 / 5.0 + 32.0


def fahrenheit_to_celsius(temp_f: float) -> float:
    return (temp_f - 32.0) * 5.0 / 9.0


def _mean(values: Sequence[float]) -> Optional[float]:
    if not values:
        return None
    return sum(values) / len(values)


def calculate_gdd(readings: Iterable[EnvironmentalReading], base_temp_f: float = 50.0) -> float:
    """
    Growing Degree Days from hourly ambient readings.

    GDD = Σ max(T - base, 0) / 24

    Readings without an ambient temperature are skipped.
    """
    total = 0.0
    for reading in readings:
        if reading.ambient_temp_f is None:
            continue
        total += max(reading.ambient_temp_f - base_temp_f, 0.0)
    return total / 24.0


def average_soil_temp(readings: Iterable[EnvironmentalReading], depth_cm: int = 10) -> Optional[float]:
    """Mean soil temperature (°F) at ``depth_cm``; unknown depths read 10 cm."""
    return _mean([t for t in (r.soil_temp_at(depth_cm) for r in readings) if t is not None])


def average_soil_moisture(readings: Iterable[EnvironmentalReading], depth_cm: int = 10) -> Optional[float]:
    if depth_cm not in (5, 10, 20, 50, 100):
        depth_cm = 10
    attr = f"soil_moisture_{depth_cm}"
    return _mean([m for m in (getattr(r, attr) for r in readings) if m is not None])


def average_ambient_temp(readings: Iterable[EnvironmentalReading]) -> Optional[float]:
    return _mean([r.ambient_temp_f for r in readings if r.ambient_temp_f is not None])


def average_humidity(readings: Iterable[EnvironmentalReading]) -> Optional[float]:
    return _mean([r.humidity_percent for r in readings if r.humidity_percent is not None])


def total_precipitation(readings: Iterable[EnvironmentalReading]) -> float:
    """Sum of non-negative precipitation values (mm)."""
    return sum(r.precipitation_mm for r in readings if r.precipitation_mm is not None and r.precipitation_mm >= 0)


def sustained_high_humidity(
    readings: Sequence[EnvironmentalReading],
    threshold: float,
    hours: int,
) -> bool:
    """
    True when every humidity value in the first ``hours`` readings is at or
    above ``threshold``.

    At least half of those readings must carry a humidity value.
    """
    recent = [r.humidity_percent for r in readings[:hours] if r.humidity_percent is not None]
    if not recent or len(recent) < hours // 2:
        return False
    return all(h >= threshold for h in recent)


def nitrogen_this_season(applications: Iterable[Application], season_start: date) -> float:
    """Pounds of N per 1000 sqft applied as fertilizer on/after ``season_start``."""
    return sum(
        a.rate_per_1000sqft
        for a in applications
        if a.application_type == ApplicationType.FERTILIZER
        and a.application_date >= season_start
        and a.rate_per_1000sqft is not None
    )


def soil_temp_trend(temps_f: Sequence[Optional[float]]) -> Trend:
    """
    Trend of chronological 10 cm soil temperature samples.

    The newest 24 samples are compared with the 24 before them. Fewer than
    48 samples, or a window with no values, gives ``Trend.UNKNOWN``.
    """
    if len(temps_f) < TREND_WINDOW_SAMPLES * 2:
        return Trend.UNKNOWN

    newer = _mean([t for t in temps_f[-TREND_WINDOW_SAMPLES:] if t is not None])
    older = _mean([t for t in temps_f[-2 * TREND_WINDOW_SAMPLES : -TREND_WINDOW_SAMPLES] if t is not None])
    if newer is None or older is None:
        return Trend.UNKNOWN

    diff = newer - older
    if diff >= TREND_THRESHOLD_F:
        return Trend.RISING
    if diff <= -TREND_THRESHOLD_F:
        return Trend.FALLING
    return Trend.STABLE
