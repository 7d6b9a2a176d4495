"""
Schemas Module
==============

Pydantic models for request/response validation of the HTTP surface.
"""

from turfops.schemas.recommendations import (
    ApplicationIn,
    EvaluateRequest,
    EvaluateResponse,
    ForecastIn,
    ForecastLocationIn,
    ForecastPointIn,
    LawnProfileIn,
    ReadingIn,
    RuleInfo,
    RuleListResponse,
    SummaryIn,
    WeatherSnapshotIn,
)

__all__ = [
    "ApplicationIn",
    "EvaluateRequest",
    "EvaluateResponse",
    "ForecastIn",
    "ForecastLocationIn",
    "ForecastPointIn",
    "LawnProfileIn",
    "ReadingIn",
    "RuleInfo",
    "RuleListResponse",
    "SummaryIn",
    "WeatherSnapshotIn",
]
