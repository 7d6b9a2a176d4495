"""
Shared test fixtures for the TurfOps test suite.

Provides:
- A fixed evaluation clock
- Cool- and warm-season lawn profiles
- Factories for summaries, readings, applications and forecasts
- A Flask test client wired to a fresh app

Usage:
    def test_example(profile, summary_factory, now):
        env = summary_factory(soil_temp_7day_avg_f=57.0)
        ...
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta, timezone
from typing import Any

import pytest

from turfops.domain import (
    Application,
    EnvironmentalReading,
    EnvironmentalSummary,
    ForecastLocation,
    ForecastPoint,
    LawnProfile,
    WeatherForecast,
)
from turfops.enums import ApplicationType, DataSource, GrassType

# ---------------------------------------------------------------------------
# Logging - keep test output clean
# ---------------------------------------------------------------------------
logging.getLogger("turfops").setLevel(logging.WARNING)

TEST_LOCATION = ForecastLocation(city="Raleigh", country="US", latitude=35.78, longitude=-78.64)


# ============================ Clock & Profiles ==============================


@pytest.fixture()
def now() -> datetime:
    """Mid-March, midday UTC."""
    return datetime(2026, 3, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture()
def at():
    """Build a UTC noon timestamp for a calendar date: ``at(2026, 6, 1)``."""

    def _at(year: int, month: int, day: int, hour: int = 12) -> datetime:
        return datetime(year, month, day, hour, 0, tzinfo=timezone.utc)

    return _at


@pytest.fixture()
def profile() -> LawnProfile:
    return LawnProfile(name="Front Yard", grass_type=GrassType.TALL_FESCUE)


@pytest.fixture()
def warm_profile() -> LawnProfile:
    return LawnProfile(name="Bermuda Patch", grass_type=GrassType.BERMUDA)


# ============================ Factories =====================================


@pytest.fixture()
def reading_factory():
    def _make(**overrides: Any) -> EnvironmentalReading:
        values: dict[str, Any] = {"source": DataSource.SOIL_DATA}
        values.update(overrides)
        return EnvironmentalReading(**values)

    return _make


@pytest.fixture()
def summary_factory():
    def _make(**overrides: Any) -> EnvironmentalSummary:
        return EnvironmentalSummary(**overrides)

    return _make


@pytest.fixture()
def application_factory():
    def _make(application_type: ApplicationType, application_date: date, **overrides: Any) -> Application:
        return Application(
            lawn_profile_id=1,
            application_type=application_type,
            application_date=application_date,
            **overrides,
        )

    return _make


@pytest.fixture()
def forecast_factory():
    """
    Build a forecast from per-day settings starting on ``start``.

    Each entry accepts ``high``, ``low``, ``humidity``, ``precip_mm``, ``prob``
    and ``wind``. A day is eight 3-hour points: the 00:00 point carries the
    low, the 12:00 point the high, the rest the midpoint. Precipitation and
    its probability sit on the 15:00 point.
    """

    def _make(start: date, days: list[dict[str, float]]) -> WeatherForecast:
        points = []
        for offset, entry in enumerate(days):
            high = entry.get("high", 70.0)
            low = entry.get("low", 50.0)
            day = start + timedelta(days=offset)
            for step in range(8):
                hour = step * 3
                temp = low if step == 0 else high if step == 4 else (high + low) / 2.0
                points.append(
                    ForecastPoint(
                        timestamp=datetime(day.year, day.month, day.day, hour, tzinfo=timezone.utc),
                        temp_f=temp,
                        feels_like_f=temp,
                        humidity_percent=entry.get("humidity", 60.0),
                        precipitation_mm=entry.get("precip_mm", 0.0) if step == 5 else 0.0,
                        precipitation_prob=entry.get("prob", 0.0) if step == 5 else 0.0,
                        wind_speed_mph=entry.get("wind", 3.0),
                    )
                )
        fetched_at = datetime(start.year, start.month, start.day, tzinfo=timezone.utc)
        return WeatherForecast.from_points(points, location=TEST_LOCATION, fetched_at=fetched_at)

    return _make


@pytest.fixture()
def hourly_forecast():
    """Build a forecast from (hours after ``start``, precip_mm, probability) tuples."""

    def _make(start: datetime, entries: list[tuple[int, float, float]]) -> WeatherForecast:
        points = [
            ForecastPoint(
                timestamp=start + timedelta(hours=hours),
                temp_f=65.0,
                feels_like_f=65.0,
                humidity_percent=60.0,
                precipitation_mm=mm,
                precipitation_prob=prob,
            )
            for hours, mm, prob in entries
        ]
        return WeatherForecast.from_points(points, location=TEST_LOCATION, fetched_at=start)

    return _make


# ============================ Flask =========================================


@pytest.fixture()
def app(tmp_path):
    from turfops import create_app

    flask_app = create_app({"log_dir": str(tmp_path / "logs"), "TESTING": True})
    return flask_app


@pytest.fixture()
def client(app):
    return app.test_client()
