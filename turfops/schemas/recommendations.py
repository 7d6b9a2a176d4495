"""
Recommendation Schemas
======================

Request/response schemas for the recommendation endpoints. Inbound models
validate JSON payloads and convert to domain objects with ``to_domain()``.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from turfops.domain import (
    Application,
    EnvironmentalReading,
    EnvironmentalSummary,
    ForecastLocation,
    ForecastPoint,
    LawnProfile,
    WeatherForecast,
    WeatherSnapshot,
)
from turfops.enums import (
    ApplicationType,
    DataSource,
    GrassType,
    IrrigationType,
    SoilType,
    Trend,
    WeatherCondition,
)
from turfops.services.environmental_summary import build_summary
from turfops.utils.time import coerce_date


def _parse_enum(enum_cls, value: Any, label: str):
    if value is None or isinstance(value, enum_cls):
        return value
    parsed = enum_cls.parse(str(value))
    if parsed is None:
        raise ValueError(f"Unknown {label}: {value}")
    return parsed


class LawnProfileIn(BaseModel):
    """Lawn profile payload. Vocabulary fields accept values, names or labels."""

    name: str = Field(default="Main Lawn", min_length=1, max_length=200)
    grass_type: GrassType = Field(default=GrassType.TALL_FESCUE, description="e.g. 'tall_fescue', 'KBG'")
    usda_zone: str = Field(default="7a", max_length=8)
    soil_type: Optional[SoilType] = None
    lawn_size_sqft: Optional[float] = Field(default=None, gt=0, description="Lawn area in square feet")
    irrigation_type: Optional[IrrigationType] = None
    id: Optional[int] = None

    @field_validator("grass_type", mode="before")
    @classmethod
    def parse_grass_type(cls, v):
        return _parse_enum(GrassType, v, "grass type")

    @field_validator("soil_type", mode="before")
    @classmethod
    def parse_soil_type(cls, v):
        return _parse_enum(SoilType, v, "soil type")

    @field_validator("irrigation_type", mode="before")
    @classmethod
    def parse_irrigation_type(cls, v):
        return _parse_enum(IrrigationType, v, "irrigation type")

    def to_domain(self) -> LawnProfile:
        return LawnProfile(
            name=self.name,
            grass_type=self.grass_type,
            usda_zone=self.usda_zone,
            soil_type=self.soil_type,
            lawn_size_sqft=self.lawn_size_sqft,
            irrigation_type=self.irrigation_type,
            id=self.id,
        )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"name": "Front Yard", "grass_type": "tall_fescue", "usda_zone": "7a", "lawn_size_sqft": 5000}
        }
    )


class WeatherSnapshotIn(BaseModel):
    soil_temp_10cm_f: Optional[float] = None
    ambient_temp_f: Optional[float] = None
    humidity_percent: Optional[float] = Field(default=None, ge=0, le=100)
    soil_moisture: Optional[float] = Field(default=None, ge=0, le=1)

    def to_domain(self) -> WeatherSnapshot:
        return WeatherSnapshot(**self.model_dump())


class ApplicationIn(BaseModel):
    """One application history entry."""

    lawn_profile_id: int = Field(default=1, ge=0)
    application_type: ApplicationType = Field(..., description="e.g. 'pre_emergent', 'Fertilizer'")
    application_date: date = Field(..., description="Calendar date (YYYY-MM-DD)")
    product_name: Optional[str] = None
    rate_per_1000sqft: Optional[float] = Field(default=None, ge=0)
    coverage_sqft: Optional[float] = Field(default=None, ge=0)
    notes: Optional[str] = None
    weather_snapshot: Optional[WeatherSnapshotIn] = None
    id: Optional[int] = None

    @field_validator("application_type", mode="before")
    @classmethod
    def parse_application_type(cls, v):
        return _parse_enum(ApplicationType, v, "application type")

    @field_validator("application_date", mode="before")
    @classmethod
    def parse_application_date(cls, v):
        parsed = coerce_date(v)
        if parsed is None:
            raise ValueError(f"Invalid application date: {v}")
        return parsed

    def to_domain(self) -> Application:
        return Application(
            lawn_profile_id=self.lawn_profile_id,
            application_type=self.application_type,
            application_date=self.application_date,
            product_name=self.product_name,
            rate_per_1000sqft=self.rate_per_1000sqft,
            coverage_sqft=self.coverage_sqft,
            notes=self.notes,
            weather_snapshot=self.weather_snapshot.to_domain() if self.weather_snapshot else None,
            id=self.id,
        )


class ReadingIn(BaseModel):
    """Environmental reading. Moisture is a fraction (0-1), humidity a percent."""

    timestamp: datetime
    source: DataSource = DataSource.CACHED
    soil_temp_5_f: Optional[float] = None
    soil_temp_10_f: Optional[float] = None
    soil_temp_20_f: Optional[float] = None
    soil_temp_50_f: Optional[float] = None
    soil_temp_100_f: Optional[float] = None
    soil_moisture_5: Optional[float] = Field(default=None, ge=0, le=1)
    soil_moisture_10: Optional[float] = Field(default=None, ge=0, le=1)
    soil_moisture_20: Optional[float] = Field(default=None, ge=0, le=1)
    soil_moisture_50: Optional[float] = Field(default=None, ge=0, le=1)
    soil_moisture_100: Optional[float] = Field(default=None, ge=0, le=1)
    ambient_temp_f: Optional[float] = None
    humidity_percent: Optional[float] = Field(default=None, ge=0, le=100)
    precipitation_mm: Optional[float] = None

    def to_domain(self) -> EnvironmentalReading:
        return EnvironmentalReading(**self.model_dump())


class ForecastPointIn(BaseModel):
    """One 3-hour forecast step. ``weather_condition`` also accepts OpenWeatherMap codes."""

    timestamp: datetime
    temp_f: float
    feels_like_f: Optional[float] = None
    humidity_percent: float = Field(..., ge=0, le=100)
    precipitation_mm: float = Field(default=0.0, ge=0)
    precipitation_prob: float = Field(default=0.0, ge=0, le=1)
    wind_speed_mph: float = Field(default=0.0, ge=0)
    wind_gust_mph: Optional[float] = Field(default=None, ge=0)
    cloud_cover_percent: float = Field(default=0.0, ge=0, le=100)
    weather_condition: WeatherCondition = WeatherCondition.CLEAR

    @field_validator("weather_condition", mode="before")
    @classmethod
    def parse_condition(cls, v):
        if isinstance(v, int) and not isinstance(v, bool):
            return WeatherCondition.from_owm_id(v)
        if isinstance(v, str):
            return v.strip().lower()
        return v

    def to_domain(self) -> ForecastPoint:
        data = self.model_dump()
        if data["feels_like_f"] is None:
            data["feels_like_f"] = self.temp_f
        return ForecastPoint(**data)


class ForecastLocationIn(BaseModel):
    city: str = "Unknown"
    country: str = ""
    latitude: float = Field(default=0.0, ge=-90, le=90)
    longitude: float = Field(default=0.0, ge=-180, le=180)

    def to_domain(self) -> ForecastLocation:
        return ForecastLocation(**self.model_dump())


class ForecastIn(BaseModel):
    """Forecast payload; the daily series is always derived from ``hourly``."""

    fetched_at: Optional[datetime] = None
    location: ForecastLocationIn = Field(default_factory=ForecastLocationIn)
    hourly: list[ForecastPointIn] = Field(default_factory=list)

    def to_domain(self) -> WeatherForecast:
        return WeatherForecast.from_points(
            [p.to_domain() for p in self.hourly],
            location=self.location.to_domain(),
            fetched_at=self.fetched_at,
        )


class SummaryIn(BaseModel):
    """
    Environmental summary payload.

    Either supply the rollups directly, or supply ``readings`` and let the
    server compute them. Explicit rollup fields win over computed ones.
    """

    current: Optional[ReadingIn] = None
    soil_temp_7day_avg_f: Optional[float] = None
    ambient_temp_7day_avg_f: Optional[float] = None
    humidity_7day_avg: Optional[float] = Field(default=None, ge=0, le=100)
    precipitation_7day_total_mm: Optional[float] = Field(default=None, ge=0)
    soil_temp_trend: Optional[Trend] = None
    last_updated: Optional[datetime] = None
    forecast: Optional[ForecastIn] = None
    readings: list[ReadingIn] = Field(default_factory=list)

    @field_validator("soil_temp_trend", mode="before")
    @classmethod
    def normalize_trend(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v

    def to_domain(self, now: Optional[datetime] = None) -> EnvironmentalSummary:
        current = self.current.to_domain() if self.current else None
        forecast = self.forecast.to_domain() if self.forecast else None

        if self.readings:
            base = build_summary(
                [r.to_domain() for r in self.readings],
                current=current,
                forecast=forecast,
                now=now,
            )
        else:
            base = EnvironmentalSummary(current=current, forecast=forecast)

        return EnvironmentalSummary(
            current=base.current,
            soil_temp_7day_avg_f=_first(self.soil_temp_7day_avg_f, base.soil_temp_7day_avg_f),
            ambient_temp_7day_avg_f=_first(self.ambient_temp_7day_avg_f, base.ambient_temp_7day_avg_f),
            humidity_7day_avg=_first(self.humidity_7day_avg, base.humidity_7day_avg),
            precipitation_7day_total_mm=_first(self.precipitation_7day_total_mm, base.precipitation_7day_total_mm),
            soil_temp_trend=self.soil_temp_trend or base.soil_temp_trend,
            last_updated=_first(self.last_updated, base.last_updated),
            forecast=base.forecast,
        )


def _first(*values):
    for value in values:
        if value is not None:
            return value
    return None


class EvaluateRequest(BaseModel):
    """Request schema for evaluating recommendations."""

    profile: LawnProfileIn = Field(default_factory=LawnProfileIn)
    history: list[ApplicationIn] = Field(default_factory=list)
    summary: SummaryIn = Field(default_factory=SummaryIn)
    now: Optional[datetime] = Field(default=None, description="Evaluation time (ISO-8601); defaults to server time")
    rule_id: Optional[str] = Field(default=None, min_length=1, description="Evaluate a single rule")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "profile": {"grass_type": "tall_fescue"},
                "history": [{"application_type": "pre_emergent", "application_date": "2026-03-10"}],
                "summary": {"soil_temp_7day_avg_f": 57.0, "soil_temp_trend": "rising"},
                "now": "2026-03-15T12:00:00Z",
            }
        }
    )


class RuleInfo(BaseModel):
    id: str
    name: str


class RuleListResponse(BaseModel):
    rules: list[RuleInfo]


class EvaluateResponse(BaseModel):
    recommendations: list[dict[str, Any]]
    count: int
