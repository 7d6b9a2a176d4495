"""
Weather Forecast
================
Multi-day forecast model: a 3-hourly point series, the daily aggregates
derived from it, and the windowed queries the forecast-driven rules use.

Windows are half-open ``[now, now + n)``. Every query takes an explicit
``now`` (defaults to the current UTC time) so that callers can evaluate
against a fixed clock.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from itertools import groupby
from typing import Any, Iterable, Sequence

from turfops.enums import WeatherCondition
from turfops.utils.time import ensure_utc, utc_now

logger = logging.getLogger(__name__)

# A point with more than this much precipitation (mm) or probability counts
# as the first expected rain.
_RAIN_POINT_MM = 0.1
_RAIN_POINT_PROBABILITY = 0.5
_RAIN_LIKELY_PROBABILITY = 0.5


@dataclass(frozen=True)
class ForecastLocation:
    city: str
    country: str
    latitude: float
    longitude: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "city": self.city,
            "country": self.country,
            "latitude": self.latitude,
            "longitude": self.longitude,
        }


@dataclass(frozen=True)
class ForecastPoint:
    """
    One forecast step (3-hour granularity).

    Attributes:
        timestamp: Start of the step (UTC)
        temp_f / feels_like_f: Temperatures in °F
        humidity_percent: Relative humidity (0-100)
        precipitation_mm: Rain plus snow for the step
        precipitation_prob: Probability of precipitation (0.0-1.0)
        wind_speed_mph / wind_gust_mph: Wind in mph (gust optional)
        cloud_cover_percent: Cloud cover (0-100)
        weather_condition: Condition category
    """

    timestamp: datetime
    temp_f: float
    feels_like_f: float
    humidity_percent: float
    precipitation_mm: float = 0.0
    precipitation_prob: float = 0.0
    wind_speed_mph: float = 0.0
    wind_gust_mph: float | None = None
    cloud_cover_percent: float = 0.0
    weather_condition: WeatherCondition = WeatherCondition.CLEAR

    def __post_init__(self):
        object.__setattr__(self, "timestamp", ensure_utc(self.timestamp))
        if not (0 <= self.humidity_percent <= 100):
            raise ValueError(f"Humidity must be between 0 and 100%, got {self.humidity_percent}")
        if not (0 <= self.precipitation_prob <= 1):
            raise ValueError(f"Precipitation probability must be between 0 and 1, got {self.precipitation_prob}")
        if self.precipitation_mm < 0:
            raise ValueError(f"Precipitation must not be negative, got {self.precipitation_mm}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp.isoformat(),
            "temp_f": self.temp_f,
            "feels_like_f": self.feels_like_f,
            "humidity_percent": self.humidity_percent,
            "precipitation_mm": self.precipitation_mm,
            "precipitation_prob": self.precipitation_prob,
            "wind_speed_mph": self.wind_speed_mph,
            "wind_gust_mph": self.wind_gust_mph,
            "cloud_cover_percent": self.cloud_cover_percent,
            "weather_condition": self.weather_condition.value,
        }


@dataclass(frozen=True)
class DailyForecast:
    """Per-day aggregate of the forecast points falling on one UTC date."""

    date: date
    high_temp_f: float
    low_temp_f: float
    avg_humidity: float
    total_precipitation_mm: float
    max_precipitation_prob: float
    dominant_condition: WeatherCondition
    avg_wind_speed_mph: float
    max_wind_gust_mph: float | None = None

    @property
    def avg_temp_f(self) -> float:
        return (self.high_temp_f + self.low_temp_f) / 2.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "high_temp_f": self.high_temp_f,
            "low_temp_f": self.low_temp_f,
            "avg_humidity": self.avg_humidity,
            "total_precipitation_mm": self.total_precipitation_mm,
            "max_precipitation_prob": self.max_precipitation_prob,
            "dominant_condition": self.dominant_condition.value,
            "avg_wind_speed_mph": self.avg_wind_speed_mph,
            "max_wind_gust_mph": self.max_wind_gust_mph,
        }


@dataclass(frozen=True)
class RainForecast:
    """Result of a positive rain query."""

    expected_mm: float
    max_probability: float
    first_expected: datetime | None = None


def _aggregate_day(day: date, points: Sequence[ForecastPoint]) -> DailyForecast:
    temps = [p.temp_f for p in points]
    gusts = [p.wind_gust_mph for p in points if p.wind_gust_mph is not None]
    # Counter keeps first-insertion order, so most_common breaks ties by first encounter
    dominant = Counter(p.weather_condition for p in points).most_common(1)[0][0]
    return DailyForecast(
        date=day,
        high_temp_f=max(temps),
        low_temp_f=min(temps),
        avg_humidity=sum(p.humidity_percent for p in points) / len(points),
        total_precipitation_mm=sum(p.precipitation_mm for p in points),
        max_precipitation_prob=max(p.precipitation_prob for p in points),
        dominant_condition=dominant,
        avg_wind_speed_mph=sum(p.wind_speed_mph for p in points) / len(points),
        max_wind_gust_mph=max(gusts) if gusts else None,
    )


def aggregate_daily(points: Iterable[ForecastPoint]) -> list[DailyForecast]:
    """
    Group forecast points by UTC calendar date and aggregate each day.

    Returns:
        Daily forecasts sorted ascending by date
    """
    ordered = sorted(points, key=lambda p: p.timestamp)
    return [_aggregate_day(day, list(group)) for day, group in groupby(ordered, key=lambda p: p.timestamp.date())]


@dataclass(frozen=True)
class WeatherForecast:
    """
    Hourly series plus derived daily series.

    Build with :meth:`from_points` so the daily series is derived from the
    hourly one. The plain constructor only checks that the daily series is
    strictly ascending by date.
    """

    fetched_at: datetime
    location: ForecastLocation
    hourly: tuple[ForecastPoint, ...] = ()
    daily_summary: tuple[DailyForecast, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "hourly", tuple(self.hourly))
        object.__setattr__(self, "daily_summary", tuple(self.daily_summary))
        dates = [d.date for d in self.daily_summary]
        if any(later <= earlier for earlier, later in zip(dates, dates[1:])):
            raise ValueError("Daily forecast must be sorted by date with one entry per day")

    @classmethod
    def from_points(
        cls,
        points: Iterable[ForecastPoint],
        *,
        location: ForecastLocation,
        fetched_at: datetime | None = None,
    ) -> WeatherForecast:
        hourly = tuple(sorted(points, key=lambda p: p.timestamp))
        daily = aggregate_daily(hourly)
        logger.debug("Built forecast for %s: %d points, %d days", location.city, len(hourly), len(daily))
        return cls(
            fetched_at=fetched_at or utc_now(),
            location=location,
            hourly=hourly,
            daily_summary=tuple(daily),
        )

    def next_hours(self, hours: int, now: datetime | None = None) -> list[ForecastPoint]:
        start = ensure_utc(now) if now else utc_now()
        cutoff = start + timedelta(hours=hours)
        return [p for p in self.hourly if start <= p.timestamp < cutoff]

    def next_days(self, days: int, now: datetime | None = None) -> list[DailyForecast]:
        today = (ensure_utc(now) if now else utc_now()).date()
        cutoff = today + timedelta(days=days)
        return [d for d in self.daily_summary if today <= d.date < cutoff]

    def rain_expected_within(
        self,
        hours: int,
        threshold_mm: float,
        now: datetime | None = None,
    ) -> RainForecast | None:
        """
        Check for rain in the next ``hours``.

        Positive when total precipitation reaches ``threshold_mm`` or any point
        carries a probability of at least 0.5, even under the threshold.
        """
        total = 0.0
        max_prob = 0.0
        first_rain: datetime | None = None
        for point in self.next_hours(hours, now):
            total += point.precipitation_mm
            max_prob = max(max_prob, point.precipitation_prob)
            if first_rain is None and (
                point.precipitation_mm > _RAIN_POINT_MM or point.precipitation_prob > _RAIN_POINT_PROBABILITY
            ):
                first_rain = point.timestamp

        if total >= threshold_mm or max_prob >= _RAIN_LIKELY_PROBABILITY:
            return RainForecast(expected_mm=total, max_probability=max_prob, first_expected=first_rain)
        return None

    def max_temp_next_days(self, days: int, now: datetime | None = None) -> float | None:
        highs = [d.high_temp_f for d in self.next_days(days, now)]
        return max(highs) if highs else None

    def consecutive_high_humidity_days(self, threshold: float) -> int:
        """Leading run of days, from the start of the series, at or above ``threshold``."""
        count = 0
        for day in self.daily_summary:
            if day.avg_humidity < threshold:
                break
            count += 1
        return count

    def to_dict(self) -> dict[str, Any]:
        return {
            "fetched_at": self.fetched_at.isoformat(),
            "location": self.location.to_dict(),
            "hourly": [p.to_dict() for p in self.hourly],
            "daily_summary": [d.to_dict() for d in self.daily_summary],
        }
