"""
Environmental Summary Builder
=============================
Rolls a window of hourly readings up into the :class:`EnvironmentalSummary`
the rules evaluate against: current conditions, 7-day averages, 7-day
precipitation total, 10 cm soil temperature trend and an optional forecast.

Soil readings and patio readings come from different sources.
:func:`merge_current` fuses them into one current reading: soil values from
the soil station, ambient temperature and humidity from the patio sensor when
it reports them.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timedelta
from typing import Iterable

from turfops.domain import agronomics
from turfops.domain.environmental import SOIL_DEPTHS_CM, EnvironmentalReading, EnvironmentalSummary
from turfops.domain.forecast import WeatherForecast
from turfops.enums import DataSource
from turfops.utils.time import ensure_utc, utc_now

logger = logging.getLogger(__name__)

SUMMARY_WINDOW = timedelta(days=7)


def merge_current(
    soil: EnvironmentalReading | None,
    ambient: EnvironmentalReading | None,
    *,
    now: datetime | None = None,
) -> EnvironmentalReading | None:
    """
    Combine a soil-station reading with a patio-sensor reading.

    Returns:
        A cached reading stamped ``now``, or None when both inputs are None
    """
    if soil is None and ambient is None:
        return None

    values: dict = {}
    if soil is not None:
        for depth in SOIL_DEPTHS_CM:
            values[f"soil_temp_{depth}_f"] = getattr(soil, f"soil_temp_{depth}_f")
            values[f"soil_moisture_{depth}"] = getattr(soil, f"soil_moisture_{depth}")
        values["precipitation_mm"] = soil.precipitation_mm
        values["ambient_temp_f"] = soil.ambient_temp_f
        values["humidity_percent"] = soil.humidity_percent

    if ambient is not None:
        if ambient.ambient_temp_f is not None:
            values["ambient_temp_f"] = ambient.ambient_temp_f
        if ambient.humidity_percent is not None:
            values["humidity_percent"] = ambient.humidity_percent

    return EnvironmentalReading(timestamp=ensure_utc(now) if now else utc_now(), source=DataSource.CACHED, **values)


def build_summary(
    readings: Iterable[EnvironmentalReading],
    *,
    current: EnvironmentalReading | None = None,
    forecast: WeatherForecast | None = None,
    now: datetime | None = None,
) -> EnvironmentalSummary:
    """
    Build a summary from hourly readings.

    Readings older than seven days before ``now`` (or later than ``now``) are
    ignored. When ``current`` is omitted the newest reading in the window is
    used. The trend compares the newest 24 samples with the 24 before them.

    Args:
        readings: Hourly readings in any order
        current: Explicit current reading (e.g. from :func:`merge_current`)
        forecast: Forecast to embed
        now: Evaluation time (defaults to current UTC time)
    """
    now = ensure_utc(now) if now else utc_now()
    start = now - SUMMARY_WINDOW
    window = sorted(
        (r for r in readings if start <= ensure_utc(r.timestamp) <= now),
        key=lambda r: ensure_utc(r.timestamp),
    )

    if current is None and window:
        current = window[-1]

    if not window:
        logger.debug("No readings in the 7-day window ending %s", now.isoformat())
        return EnvironmentalSummary(current=current, last_updated=now, forecast=forecast)

    summary = EnvironmentalSummary(
        current=current,
        soil_temp_7day_avg_f=agronomics.average_soil_temp(window, 10),
        ambient_temp_7day_avg_f=agronomics.average_ambient_temp(window),
        humidity_7day_avg=agronomics.average_humidity(window),
        precipitation_7day_total_mm=agronomics.total_precipitation(window),
        soil_temp_trend=agronomics.soil_temp_trend([r.soil_temp_10_f for r in window]),
        last_updated=now,
        forecast=forecast,
    )
    logger.debug(
        "Built summary from %d readings: soil avg=%s trend=%s",
        len(window),
        summary.soil_temp_7day_avg_f,
        summary.soil_temp_trend.value,
    )
    return summary


def with_forecast(summary: EnvironmentalSummary, forecast: WeatherForecast | None) -> EnvironmentalSummary:
    return replace(summary, forecast=forecast)
