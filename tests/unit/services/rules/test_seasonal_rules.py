"""
Unit tests for the calendar-window rules.

Covers pre-emergent, spring nitrogen, grub control, fall overseeding and
fall fertilization: temperature bands, window boundaries and suppression by
application history.
"""

from datetime import date

import pytest

from turfops.domain import EnvironmentalReading, EnvironmentalSummary, LawnProfile
from turfops.enums import ApplicationType, RecommendationCategory, Severity, Trend
from turfops.services.rules import (
    FallFertilizationRule,
    FallOverseedingRule,
    GrubControlRule,
    PreEmergentRule,
    SpringNitrogenRule,
)


def _soil(avg, **kwargs) -> EnvironmentalSummary:
    return EnvironmentalSummary(soil_temp_7day_avg_f=avg, **kwargs)


class TestPreEmergentRule:
    rule = PreEmergentRule()

    def test_optimal_band_warning(self, profile, now):
        rec = self.rule.evaluate(_soil(57.0, soil_temp_trend=Trend.RISING), profile, [], now=now)
        assert rec is not None
        assert rec.id == "pre_emergent_2026"
        assert rec.severity is Severity.WARNING
        assert rec.category is RecommendationCategory.PRE_EMERGENT
        assert rec.data_point("7-Day Avg Soil Temp") == "57.0°F"
        assert rec.data_point("Trend") == "↑ Rising"
        assert rec.created_at == now

    def test_lower_band_advisory(self, profile, now):
        rec = self.rule.evaluate(_soil(52.0), profile, [], now=now)
        assert rec.severity is Severity.ADVISORY

    @pytest.mark.parametrize("avg, severity", [(50.0, Severity.ADVISORY), (55.0, Severity.WARNING), (60.0, Severity.WARNING)])
    def test_band_edges(self, profile, now, avg, severity):
        assert self.rule.evaluate(_soil(avg), profile, [], now=now).severity is severity

    def test_window_closing_critical(self, profile, now):
        rec = self.rule.evaluate(_soil(65.0), profile, [], now=now)
        assert rec.id == "pre_emergent_late_2026"
        assert rec.severity is Severity.CRITICAL
        assert rec.title == "Pre-Emergent Window Closing"

    @pytest.mark.parametrize("avg", [45.0, 49.9, 70.1, 80.0])
    def test_outside_bands(self, profile, now, avg):
        assert self.rule.evaluate(_soil(avg), profile, [], now=now) is None

    def test_current_soil_temp_included_when_present(self, profile, now):
        env = _soil(56.0, current=EnvironmentalReading(soil_temp_10_f=58.4))
        rec = self.rule.evaluate(env, profile, [], now=now)
        assert rec.data_point("Current Soil Temp (10cm)") == "58.4°F"

    def test_current_soil_temp_optional(self, profile, now):
        rec = self.rule.evaluate(_soil(56.0), profile, [], now=now)
        assert rec.data_point("Current Soil Temp (10cm)") is None

    @pytest.mark.parametrize(
        "month, day, expected",
        [(1, 31, False), (2, 1, True), (5, 31, True), (6, 1, False)],
    )
    def test_season_boundaries(self, profile, at, month, day, expected):
        rec = self.rule.evaluate(_soil(57.0), profile, [], now=at(2026, month, day))
        assert (rec is not None) is expected

    def test_suppressed_by_application_this_year(self, profile, now, application_factory):
        history = [application_factory(ApplicationType.PRE_EMERGENT, date(2026, 3, 1))]
        assert self.rule.evaluate(_soil(57.0), profile, history, now=now) is None

    def test_last_year_application_does_not_suppress(self, profile, now, application_factory):
        history = [application_factory(ApplicationType.PRE_EMERGENT, date(2025, 3, 20))]
        assert self.rule.evaluate(_soil(57.0), profile, history, now=now) is not None

    def test_warm_season_and_missing_data(self, profile, warm_profile, now):
        assert self.rule.evaluate(_soil(57.0), warm_profile, [], now=now) is None
        assert self.rule.evaluate(EnvironmentalSummary(), profile, [], now=now) is None


class TestSpringNitrogenRule:
    rule = SpringNitrogenRule()

    def test_cold_soil_wait(self, profile, now):
        rec = self.rule.evaluate(_soil(45.0), profile, [], now=now)
        assert rec.id == "spring_n_wait"
        assert rec.severity is Severity.INFO

    def test_cold_soil_with_spring_fertilizer_warns(self, profile, now, application_factory):
        history = [application_factory(ApplicationType.FERTILIZER, date(2026, 3, 1))]
        rec = self.rule.evaluate(_soil(45.0), profile, history, now=now)
        assert rec.id == "spring_n_too_early"
        assert rec.severity is Severity.WARNING

    def test_winter_fertilizer_is_not_spring(self, profile, now, application_factory):
        history = [application_factory(ApplicationType.FERTILIZER, date(2026, 1, 20))]
        assert self.rule.evaluate(_soil(45.0), profile, history, now=now).id == "spring_n_wait"

    def test_almost_ready(self, profile, now, application_factory):
        assert self.rule.evaluate(_soil(52.0), profile, [], now=now).id == "spring_n_almost"
        history = [application_factory(ApplicationType.FERTILIZER, date(2026, 3, 1))]
        assert self.rule.evaluate(_soil(52.0), profile, history, now=now) is None

    def test_ready_uses_default_lawn_size(self, profile, now):
        rec = self.rule.evaluate(_soil(60.0), profile, [], now=now)
        assert rec.id == "spring_n_ready"
        assert rec.severity is Severity.ADVISORY
        assert "~2.5 lbs" in rec.suggested_action
        assert "5000 sqft" in rec.suggested_action

    def test_ready_uses_profile_size(self, now):
        profile = LawnProfile(lawn_size_sqft=8000.0)
        rec = self.rule.evaluate(_soil(60.0), profile, [], now=now)
        assert "~4.0 lbs" in rec.suggested_action
        assert "8000 sqft" in rec.suggested_action

    def test_configured_default_lawn_size(self, profile, now):
        rec = SpringNitrogenRule(default_lawn_sqft=10000.0).evaluate(_soil(60.0), profile, [], now=now)
        assert "~5.0 lbs" in rec.suggested_action

    def test_invalid_default_lawn_size(self):
        with pytest.raises(ValueError):
            SpringNitrogenRule(default_lawn_sqft=0)

    def test_already_applied_or_too_warm(self, profile, now, application_factory):
        history = [application_factory(ApplicationType.FERTILIZER, date(2026, 3, 1))]
        assert self.rule.evaluate(_soil(60.0), profile, history, now=now) is None
        assert self.rule.evaluate(_soil(66.0), profile, [], now=now) is None

    @pytest.mark.parametrize(
        "month, day, expected",
        [(1, 31, False), (2, 1, True), (5, 31, True), (6, 1, False)],
    )
    def test_season_boundaries(self, profile, at, month, day, expected):
        rec = self.rule.evaluate(_soil(60.0), profile, [], now=at(2026, month, day))
        assert (rec is not None) is expected


class TestGrubControlRule:
    rule = GrubControlRule()

    def test_late_window_warning(self, profile, at):
        rec = self.rule.evaluate(_soil(65.0), profile, [], now=at(2026, 6, 25))
        assert rec.id == "grub_control_2026"
        assert rec.severity is Severity.WARNING
        assert "9 days remaining" in rec.description
        assert rec.data_point("Window Closes") == "July 04"

    def test_early_window_advisory(self, profile, at):
        rec = self.rule.evaluate(_soil(65.0), profile, [], now=at(2026, 5, 20))
        assert rec.severity is Severity.ADVISORY

    def test_fourteen_days_is_urgent(self, profile, at):
        assert self.rule.evaluate(_soil(65.0), profile, [], now=at(2026, 6, 20)).severity is Severity.WARNING
        assert self.rule.evaluate(_soil(65.0), profile, [], now=at(2026, 6, 19)).severity is Severity.ADVISORY

    def test_warm_soil_info(self, profile, at):
        rec = self.rule.evaluate(_soil(80.0), profile, [], now=at(2026, 6, 1))
        assert rec.id == "grub_control_late_2026"
        assert rec.severity is Severity.INFO

    def test_cool_soil_none(self, profile, at):
        assert self.rule.evaluate(_soil(58.0), profile, [], now=at(2026, 6, 1)) is None

    @pytest.mark.parametrize(
        "month, day, expected",
        [(5, 14, False), (5, 15, True), (7, 4, True), (7, 5, False)],
    )
    def test_window_boundaries(self, profile, at, month, day, expected):
        rec = self.rule.evaluate(_soil(65.0), profile, [], now=at(2026, month, day))
        assert (rec is not None) is expected

    @pytest.mark.parametrize("app_type", [ApplicationType.GRUB_CONTROL, ApplicationType.INSECTICIDE])
    def test_suppressed_by_treatment_in_window(self, profile, at, application_factory, app_type):
        history = [application_factory(app_type, date(2026, 5, 20))]
        assert self.rule.evaluate(_soil(65.0), profile, history, now=at(2026, 6, 1)) is None

    def test_treatment_before_window_does_not_suppress(self, profile, at, application_factory):
        history = [application_factory(ApplicationType.INSECTICIDE, date(2026, 5, 1))]
        assert self.rule.evaluate(_soil(65.0), profile, history, now=at(2026, 6, 1)) is not None

    def test_applies_to_warm_season_lawns(self, warm_profile, at):
        assert self.rule.evaluate(_soil(65.0), warm_profile, [], now=at(2026, 6, 1)) is not None


class TestFallOverseedingRule:
    rule = FallOverseedingRule()

    def test_open_window_advisory(self, profile, at):
        rec = self.rule.evaluate(_soil(58.0), profile, [], now=at(2026, 9, 20))
        assert rec.id == "fall_overseeding_2026"
        assert rec.severity is Severity.ADVISORY
        assert rec.data_point("Days Remaining") == "41"
        assert "~20 lbs" in rec.suggested_action

    def test_peak_band_escalates_under_21_days(self, profile, at):
        assert self.rule.evaluate(_soil(58.0), profile, [], now=at(2026, 10, 15)).severity is Severity.WARNING

    def test_outer_band_escalates_under_14_days(self, profile, at):
        assert self.rule.evaluate(_soil(63.0), profile, [], now=at(2026, 10, 15)).severity is Severity.ADVISORY
        assert self.rule.evaluate(_soil(63.0), profile, [], now=at(2026, 10, 20)).severity is Severity.WARNING

    def test_warm_soil_before_mid_september(self, profile, at):
        rec = self.rule.evaluate(_soil(70.0), profile, [], now=at(2026, 9, 1))
        assert rec.id == "fall_overseeding_wait_2026"
        assert rec.severity is Severity.INFO

    def test_warm_soil_after_mid_september(self, profile, at):
        rec = self.rule.evaluate(_soil(70.0), profile, [], now=at(2026, 9, 15))
        assert rec.id == "fall_overseeding_late_2026"
        assert rec.severity is Severity.WARNING

    def test_cold_soil(self, profile, at):
        rec = self.rule.evaluate(_soil(45.0), profile, [], now=at(2026, 9, 20))
        assert rec.id == "fall_overseeding_cold_2026"
        assert self.rule.evaluate(_soil(45.0), profile, [], now=at(2026, 10, 20)) is None

    def test_hot_forecast_note(self, profile, at, forecast_factory):
        forecast = forecast_factory(date(2026, 9, 20), [{"high": 90.0, "low": 70.0}] * 14)
        rec = self.rule.evaluate(_soil(58.0, forecast=forecast), profile, [], now=at(2026, 9, 20))
        assert rec.data_point("Forecast Note") == "Hot weather ahead - monitor seedlings"

    def test_mild_forecast_no_note(self, profile, at, forecast_factory):
        forecast = forecast_factory(date(2026, 9, 20), [{"high": 75.0, "low": 55.0}] * 14)
        rec = self.rule.evaluate(_soil(58.0, forecast=forecast), profile, [], now=at(2026, 9, 20))
        assert rec.data_point("Forecast Note") is None

    @pytest.mark.parametrize(
        "month, day, expected",
        [(8, 14, False), (8, 15, True), (10, 31, True), (11, 1, False)],
    )
    def test_window_boundaries(self, profile, at, month, day, expected):
        rec = self.rule.evaluate(_soil(58.0), profile, [], now=at(2026, month, day))
        assert (rec is not None) is expected

    def test_suppressed_by_overseed(self, profile, at, application_factory):
        history = [application_factory(ApplicationType.OVERSEED, date(2026, 8, 20))]
        assert self.rule.evaluate(_soil(58.0), profile, history, now=at(2026, 9, 20)) is None


class TestFallFertilizationRule:
    rule = FallFertilizationRule()

    def test_early_fall(self, profile, at):
        rec = self.rule.evaluate(_soil(60.0), profile, [], now=at(2026, 9, 10))
        assert rec.id == "fall_fert_early"
        assert rec.severity is Severity.ADVISORY
        assert "~2.5 lbs" in rec.suggested_action
        assert rec.data_point("Phase") == "Early Fall (Recovery)"

    def test_phase_suppressed_after_application(self, profile, at, application_factory):
        history = [application_factory(ApplicationType.FERTILIZER, date(2026, 9, 2))]
        assert self.rule.evaluate(_soil(60.0), profile, history, now=at(2026, 9, 10)) is None

    def test_mid_fall_missed_early_warns(self, profile, at):
        rec = self.rule.evaluate(_soil(55.0), profile, [], now=at(2026, 10, 10))
        assert rec.id == "fall_fert_mid"
        assert rec.severity is Severity.WARNING
        assert "Don't Miss" in rec.title
        assert "~3.8 lbs" in rec.suggested_action

    def test_mid_fall_after_early(self, profile, at, application_factory):
        history = [application_factory(ApplicationType.FERTILIZER, date(2026, 9, 5))]
        rec = self.rule.evaluate(_soil(55.0), profile, history, now=at(2026, 10, 10))
        assert rec.severity is Severity.ADVISORY
        assert rec.data_point("Fall Apps So Far") == "1"

    def test_mid_fall_requires_spacing(self, profile, at, application_factory):
        history = [application_factory(ApplicationType.FERTILIZER, date(2026, 9, 25))]
        assert self.rule.evaluate(_soil(55.0), profile, history, now=at(2026, 10, 10)) is None

    def test_winterizer(self, profile, at, application_factory):
        history = [
            application_factory(ApplicationType.FERTILIZER, date(2026, 9, 5)),
            application_factory(ApplicationType.FERTILIZER, date(2026, 10, 5)),
        ]
        rec = self.rule.evaluate(_soil(42.0), profile, history, now=at(2026, 11, 10))
        assert rec.id == "fall_fert_winterizer"
        assert rec.severity is Severity.ADVISORY
        assert rec.data_point("Fall Apps So Far") == "2"
        assert "(1 lb N/1000 sqft)" in rec.suggested_action

    def test_winterizer_without_fall_feeding_warns(self, profile, at):
        rec = self.rule.evaluate(_soil(42.0), profile, [], now=at(2026, 11, 10))
        assert rec.severity is Severity.WARNING
        assert "~5.0 lbs" in rec.suggested_action

    def test_winterizer_frozen_soil(self, profile, at):
        assert self.rule.evaluate(_soil(38.0), profile, [], now=at(2026, 11, 10)) is None

    def test_soil_out_of_band(self, profile, at):
        assert self.rule.evaluate(_soil(70.0), profile, [], now=at(2026, 9, 10)) is None

    @pytest.mark.parametrize(
        "month, day, expected",
        [(8, 31, False), (9, 1, True), (11, 30, True), (12, 1, False)],
    )
    def test_season_boundaries(self, profile, at, month, day, expected):
        rec = self.rule.evaluate(_soil(50.0), profile, [], now=at(2026, month, day))
        assert (rec is not None) is expected
