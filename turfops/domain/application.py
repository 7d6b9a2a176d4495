"""
Application History
===================
Immutable records of lawn-care applications (fertilizer, pre-emergent,
overseeding, ...). Rules read history but never change it; the ``with_*``
helpers return modified copies.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from datetime import date, datetime
from typing import Any

from turfops.enums import ApplicationType
from turfops.utils.time import utc_now


@dataclass(frozen=True)
class WeatherSnapshot:
    """Conditions recorded at the time of an application."""

    soil_temp_10cm_f: float | None = None
    ambient_temp_f: float | None = None
    humidity_percent: float | None = None
    soil_moisture: float | None = None

    def __post_init__(self):
        if self.humidity_percent is not None and not (0 <= self.humidity_percent <= 100):
            raise ValueError(f"Humidity must be between 0 and 100%, got {self.humidity_percent}")
        if self.soil_moisture is not None and not (0 <= self.soil_moisture <= 1):
            raise ValueError(f"Soil moisture must be between 0 and 1, got {self.soil_moisture}")

    def to_dict(self) -> dict[str, float | None]:
        return asdict(self)


@dataclass(frozen=True)
class Application:
    """
    A single lawn-care application.

    Attributes:
        lawn_profile_id: Owning lawn profile
        application_type: What was applied
        application_date: Calendar date of the application
        rate_per_1000sqft: Product rate (lb N / 1000 sqft for fertilizer)
    """

    lawn_profile_id: int
    application_type: ApplicationType
    application_date: date
    product_name: str | None = None
    rate_per_1000sqft: float | None = None
    coverage_sqft: float | None = None
    notes: str | None = None
    weather_snapshot: WeatherSnapshot | None = None
    id: int | None = None
    created_at: datetime = field(default_factory=utc_now)

    def __post_init__(self):
        if isinstance(self.application_date, datetime):
            object.__setattr__(self, "application_date", self.application_date.date())
        if self.rate_per_1000sqft is not None and self.rate_per_1000sqft < 0:
            raise ValueError(f"Application rate must not be negative, got {self.rate_per_1000sqft}")
        if self.coverage_sqft is not None and self.coverage_sqft < 0:
            raise ValueError(f"Coverage must not be negative, got {self.coverage_sqft}")

    def with_product(self, product_name: str) -> Application:
        return replace(self, product_name=product_name)

    def with_rate(self, rate_per_1000sqft: float) -> Application:
        return replace(self, rate_per_1000sqft=rate_per_1000sqft)

    def with_coverage(self, coverage_sqft: float) -> Application:
        return replace(self, coverage_sqft=coverage_sqft)

    def with_notes(self, notes: str) -> Application:
        return replace(self, notes=notes)

    def with_weather(self, snapshot: WeatherSnapshot) -> Application:
        return replace(self, weather_snapshot=snapshot)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "lawn_profile_id": self.lawn_profile_id,
            "application_type": self.application_type.value,
            "product_name": self.product_name,
            "application_date": self.application_date.isoformat(),
            "rate_per_1000sqft": self.rate_per_1000sqft,
            "coverage_sqft": self.coverage_sqft,
            "notes": self.notes,
            "weather_snapshot": self.weather_snapshot.to_dict() if self.weather_snapshot else None,
            "created_at": self.created_at.isoformat(),
        }
