"""
Unit tests for turfops.services.environmental_summary.

Tests the hourly-reading rollup and the soil/patio merge.
"""

from datetime import timedelta

import pytest

from turfops.domain import EnvironmentalSummary
from turfops.enums import DataSource, Trend
from turfops.services import build_summary, merge_current, with_forecast


@pytest.fixture()
def hourly(now, reading_factory):
    """48 hourly readings ending at ``now``: 50°F soil the first day, 53°F the second."""
    readings = []
    for hours_ago in range(47, -1, -1):
        readings.append(
            reading_factory(
                timestamp=now - timedelta(hours=hours_ago),
                soil_temp_10_f=53.0 if hours_ago < 24 else 50.0,
                ambient_temp_f=60.0,
                humidity_percent=70.0 if hours_ago % 2 else 80.0,
                precipitation_mm=0.5 if hours_ago % 12 == 0 else 0.0,
            )
        )
    return readings


class TestBuildSummary:
    def test_rollups(self, now, hourly):
        summary = build_summary(hourly, now=now)
        assert summary.soil_temp_7day_avg_f == pytest.approx(51.5)
        assert summary.ambient_temp_7day_avg_f == pytest.approx(60.0)
        assert summary.humidity_7day_avg == pytest.approx(75.0)
        assert summary.precipitation_7day_total_mm == pytest.approx(2.0)
        assert summary.soil_temp_trend is Trend.RISING
        assert summary.last_updated == now

    def test_current_defaults_to_newest_reading(self, now, hourly):
        summary = build_summary(reversed(hourly), now=now)
        assert summary.current.timestamp == now
        assert summary.current.soil_temp_10_f == 53.0

    def test_explicit_current_wins(self, now, hourly, reading_factory):
        current = reading_factory(timestamp=now, soil_temp_10_f=61.0)
        assert build_summary(hourly, current=current, now=now).current is current

    def test_readings_outside_window_ignored(self, now, hourly, reading_factory):
        stale = reading_factory(timestamp=now - timedelta(days=8), soil_temp_10_f=10.0, precipitation_mm=40.0)
        future = reading_factory(timestamp=now + timedelta(hours=1), soil_temp_10_f=90.0)
        summary = build_summary(hourly + [stale, future], now=now)
        assert summary.soil_temp_7day_avg_f == pytest.approx(51.5)
        assert summary.precipitation_7day_total_mm == pytest.approx(2.0)
        assert summary.current.timestamp == now

    def test_short_history_has_unknown_trend(self, now, hourly):
        assert build_summary(hourly[-30:], now=now).soil_temp_trend is Trend.UNKNOWN

    def test_empty_window(self, now, forecast_factory):
        forecast = forecast_factory(now.date(), [{}])
        summary = build_summary([], forecast=forecast, now=now)
        assert summary.current is None
        assert summary.soil_temp_7day_avg_f is None
        assert summary.precipitation_7day_total_mm is None
        assert summary.soil_temp_trend is Trend.UNKNOWN
        assert summary.forecast is forecast
        assert summary.last_updated == now

    def test_with_forecast(self, now, forecast_factory):
        forecast = forecast_factory(now.date(), [{}])
        summary = with_forecast(EnvironmentalSummary(soil_temp_7day_avg_f=55.0), forecast)
        assert summary.forecast is forecast
        assert summary.soil_temp_7day_avg_f == 55.0


class TestMergeCurrent:
    def test_patio_overrides_ambient_and_humidity(self, now, reading_factory):
        soil = reading_factory(soil_temp_10_f=55.0, soil_moisture_10=0.22, ambient_temp_f=58.0, humidity_percent=50.0)
        patio = reading_factory(source=DataSource.HOME_ASSISTANT, ambient_temp_f=64.0, humidity_percent=72.0)
        merged = merge_current(soil, patio, now=now)
        assert merged.source is DataSource.CACHED
        assert merged.timestamp == now
        assert merged.soil_temp_10_f == 55.0
        assert merged.soil_moisture_10 == 0.22
        assert merged.ambient_temp_f == 64.0
        assert merged.humidity_percent == 72.0

    def test_patio_gaps_keep_soil_values(self, now, reading_factory):
        soil = reading_factory(soil_temp_10_f=55.0, ambient_temp_f=58.0, humidity_percent=50.0)
        patio = reading_factory(source=DataSource.HOME_ASSISTANT, ambient_temp_f=64.0)
        merged = merge_current(soil, patio, now=now)
        assert merged.ambient_temp_f == 64.0
        assert merged.humidity_percent == 50.0

    def test_single_source(self, now, reading_factory):
        patio = reading_factory(ambient_temp_f=64.0, humidity_percent=72.0)
        merged = merge_current(None, patio, now=now)
        assert merged.soil_temp_10_f is None
        assert merged.ambient_temp_f == 64.0

    def test_no_sources(self, now):
        assert merge_current(None, None, now=now) is None
