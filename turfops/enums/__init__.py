"""
Enums Module
============

This module provides enumeration types for the TurfOps application.
Enums ensure type safety and consistency across the codebase.
"""

from turfops.enums.common import DataSource, RecommendationCategory, Severity, Trend
from turfops.enums.lawn import (
    ApplicationType,
    GrassType,
    IrrigationType,
    SoilType,
    WeatherCondition,
)

__all__ = [
    "ApplicationType",
    "DataSource",
    "GrassType",
    "IrrigationType",
    "RecommendationCategory",
    "Severity",
    "SoilType",
    "Trend",
    "WeatherCondition",
]
