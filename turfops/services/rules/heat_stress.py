"""
Heat Stress Forecast
====================
Cool-season grass stops growing roots above 85°F and may go dormant above
90°F. Warns ahead of forecast heat.
"""

from __future__ import annotations

from datetime import datetime
from typing import Sequence

from turfops.domain.application import Application
from turfops.domain.environmental import EnvironmentalSummary
from turfops.domain.lawn_profile import LawnProfile
from turfops.domain.recommendation import Recommendation
from turfops.enums import RecommendationCategory, Severity
from turfops.services.rules.base import SOURCE_FORECAST, Rule

HEAT_STRESS_F = 85.0

_TITLES = {
    Severity.CRITICAL: "Extreme Heat Stress Expected",
    Severity.WARNING: "Heat Stress Warning",
    Severity.ADVISORY: "Warm Weather Ahead",
}

_ACTIONS = {
    Severity.CRITICAL: (
        "Avoid ALL fertilizer applications. Raise mowing height to 4+ inches. "
        "Water early morning (before 8 AM) only. Do not mow during peak heat. "
        "Accept some dormancy as natural protection."
    ),
    Severity.WARNING: (
        "Avoid fertilizer applications, especially high-nitrogen. Raise mowing "
        "height to 3.5-4 inches. Water deeply in early morning. "
        "Consider skipping mowing to reduce stress."
    ),
    Severity.ADVISORY: (
        "Consider raising mowing height. Water early morning if needed. "
        "Avoid fertilizer applications until temps moderate."
    ),
}


class HeatStressForecastRule(Rule):
    id = "heat_stress_forecast"
    name = "Heat Stress Forecast"

    def evaluate(
        self,
        env: EnvironmentalSummary,
        profile: LawnProfile,
        history: Sequence[Application],
        *,
        now: datetime,
    ) -> Recommendation | None:
        if not profile.is_cool_season or env.forecast is None:
            return None

        max_temp = env.forecast.max_temp_next_days(3, now)
        if max_temp is None or max_temp < HEAT_STRESS_F:
            return None

        hot_days = 0
        for day in env.forecast.next_days(5, now):
            if day.high_temp_f < HEAT_STRESS_F:
                break
            hot_days += 1

        if max_temp >= 95.0:
            severity = Severity.CRITICAL
        elif max_temp >= 90.0:
            severity = Severity.WARNING
        else:
            severity = Severity.ADVISORY

        return (
            Recommendation(
                id="heat_stress_forecast",
                category=RecommendationCategory.HEAT_STRESS,
                severity=severity,
                title=_TITLES[severity],
                description=(
                    f"Temperatures up to {max_temp:.0f}°F expected over the next {max(hot_days, 1)} days. "
                    "Cool-season grasses experience stress above 85°F."
                ),
                created_at=now,
            )
            .with_explanation(
                "Tall Fescue and other cool-season grasses evolved for temperatures between "
                "60-75°F. Above 85°F, photosynthesis slows and root growth stops. Above 90°F, "
                "the grass may enter summer dormancy. Taller grass shades the crown and soil, "
                "reducing heat stress."
            )
            .with_data_point("Max Forecast Temp", f"{max_temp:.0f}°F", SOURCE_FORECAST)
            .with_data_point("Hot Days", hot_days, SOURCE_FORECAST)
            .with_action(_ACTIONS[severity])
        )
