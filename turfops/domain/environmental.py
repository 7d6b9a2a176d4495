"""
Environmental Readings
======================
Point-in-time soil and ambient measurements, and the rolled-up summary the
recommendation rules evaluate against.

Temperatures are °F, soil moisture is a volumetric fraction (0.0-1.0),
humidity is relative humidity in percent and precipitation is millimetres.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any

from turfops.enums import DataSource, Trend
from turfops.utils.time import utc_now

if TYPE_CHECKING:
    from turfops.domain.forecast import WeatherForecast

SOIL_DEPTHS_CM = (5, 10, 20, 50, 100)


@dataclass(frozen=True)
class EnvironmentalReading:
    """
    A single environmental observation. Every measurement is optional.

    Attributes:
        timestamp: Observation time (UTC)
        source: Where the reading came from
        soil_temp_<depth>_f: Soil temperature at depth (cm) in °F
        soil_moisture_<depth>: Soil moisture fraction at depth (cm)
        ambient_temp_f: Air temperature in °F
        humidity_percent: Relative humidity (0-100)
        precipitation_mm: Precipitation since the previous reading
    """

    timestamp: datetime = field(default_factory=utc_now)
    source: DataSource = DataSource.CACHED
    soil_temp_5_f: float | None = None
    soil_temp_10_f: float | None = None
    soil_temp_20_f: float | None = None
    soil_temp_50_f: float | None = None
    soil_temp_100_f: float | None = None
    soil_moisture_5: float | None = None
    soil_moisture_10: float | None = None
    soil_moisture_20: float | None = None
    soil_moisture_50: float | None = None
    soil_moisture_100: float | None = None
    ambient_temp_f: float | None = None
    humidity_percent: float | None = None
    precipitation_mm: float | None = None

    def __post_init__(self):
        if self.humidity_percent is not None and not (0 <= self.humidity_percent <= 100):
            raise ValueError(f"Humidity must be between 0 and 100%, got {self.humidity_percent}")
        for depth in SOIL_DEPTHS_CM:
            moisture = getattr(self, f"soil_moisture_{depth}")
            if moisture is not None and not (0 <= moisture <= 1):
                raise ValueError(f"Soil moisture at {depth}cm must be between 0 and 1, got {moisture}")

    def soil_temp_at(self, depth_cm: int) -> float | None:
        """Soil temperature at a standard depth; unknown depths read 10 cm."""
        if depth_cm not in SOIL_DEPTHS_CM:
            depth_cm = 10
        return getattr(self, f"soil_temp_{depth_cm}_f")

    def primary_soil_moisture(self) -> float | None:
        """Root-zone moisture: 10 cm, falling back to 5 cm then 20 cm."""
        for value in (self.soil_moisture_10, self.soil_moisture_5, self.soil_moisture_20):
            if value is not None:
                return value
        return None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "timestamp": self.timestamp.isoformat(),
            "source": self.source.value,
        }
        for depth in SOIL_DEPTHS_CM:
            data[f"soil_temp_{depth}_f"] = getattr(self, f"soil_temp_{depth}_f")
        for depth in SOIL_DEPTHS_CM:
            data[f"soil_moisture_{depth}"] = getattr(self, f"soil_moisture_{depth}")
        data["ambient_temp_f"] = self.ambient_temp_f
        data["humidity_percent"] = self.humidity_percent
        data["precipitation_mm"] = self.precipitation_mm
        return data


@dataclass(frozen=True)
class EnvironmentalSummary:
    """
    Current conditions plus 7-day rollups and an optional forecast.

    An entirely empty summary is valid; rules treat missing values as
    insufficient data.
    """

    current: EnvironmentalReading | None = None
    soil_temp_7day_avg_f: float | None = None
    ambient_temp_7day_avg_f: float | None = None
    humidity_7day_avg: float | None = None
    precipitation_7day_total_mm: float | None = None
    soil_temp_trend: Trend = Trend.UNKNOWN
    last_updated: datetime | None = None
    forecast: WeatherForecast | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "current": self.current.to_dict() if self.current else None,
            "soil_temp_7day_avg_f": self.soil_temp_7day_avg_f,
            "ambient_temp_7day_avg_f": self.ambient_temp_7day_avg_f,
            "humidity_7day_avg": self.humidity_7day_avg,
            "precipitation_7day_total_mm": self.precipitation_7day_total_mm,
            "soil_temp_trend": self.soil_temp_trend.value,
            "last_updated": self.last_updated.isoformat() if self.last_updated else None,
            "forecast": self.forecast.to_dict() if self.forecast else None,
        }
