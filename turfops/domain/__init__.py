"""
Domain Value Objects Package
=============================
Lawn profile, application history, environmental readings, forecasts and
recommendations. Everything here is plain data plus the pure calculations
the rules build on.
"""

from .application import Application, WeatherSnapshot
from .environmental import EnvironmentalReading, EnvironmentalSummary
from .forecast import (
    DailyForecast,
    ForecastLocation,
    ForecastPoint,
    RainForecast,
    WeatherForecast,
    aggregate_daily,
)
from .lawn_profile import LawnProfile
from .recommendation import DataPoint, Recommendation

__all__ = [
    # History
    "Application",
    "WeatherSnapshot",
    # Environment
    "EnvironmentalReading",
    "EnvironmentalSummary",
    # Forecast
    "DailyForecast",
    "ForecastLocation",
    "ForecastPoint",
    "RainForecast",
    "WeatherForecast",
    "aggregate_daily",
    # Profile
    "LawnProfile",
    # Output
    "DataPoint",
    "Recommendation",
]
