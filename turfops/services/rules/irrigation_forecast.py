"""
Irrigation Forecast
===================
Recommends supplemental watering when root-zone moisture is low and the
next five days look dry.
"""

from __future__ import annotations

from datetime import datetime
from typing import Sequence

from turfops.domain.application import Application
from turfops.domain.environmental import EnvironmentalSummary
from turfops.domain.lawn_profile import LawnProfile
from turfops.domain.recommendation import Recommendation
from turfops.enums import RecommendationCategory, Severity
from turfops.services.rules.base import SOURCE_FORECAST, SOURCE_SOIL, Rule

ADEQUATE_MOISTURE = 0.20
DRY_DAY_MM = 2.5
DRY_DAY_PROBABILITY = 0.5

_TITLES = {
    Severity.CRITICAL: "Irrigation Urgently Needed",
    Severity.WARNING: "Irrigation Recommended Soon",
    Severity.ADVISORY: "Consider Irrigation",
}

_ACTIONS = {
    Severity.CRITICAL: (
        "Water immediately. Apply 1-1.5 inches over the next 2-3 days to prevent "
        "drought stress. Water early morning (5-9 AM) to minimize evaporation and disease."
    ),
    Severity.WARNING: (
        "Plan to irrigate within the next 1-2 days. Apply 0.5-1 inch of water. "
        "Deep, infrequent watering is better than shallow daily watering."
    ),
    Severity.ADVISORY: (
        "Monitor soil moisture and plan irrigation if conditions don't change. "
        "Consider a deep watering session in early morning."
    ),
}


class IrrigationForecastRule(Rule):
    id = "irrigation_forecast"
    name = "Irrigation Forecast"

    def evaluate(
        self,
        env: EnvironmentalSummary,
        profile: LawnProfile,
        history: Sequence[Application],
        *,
        now: datetime,
    ) -> Recommendation | None:
        forecast = env.forecast
        if forecast is None or env.current is None:
            return None
        moisture = env.current.primary_soil_moisture()
        if moisture is None or moisture >= ADEQUATE_MOISTURE:
            return None

        if forecast.rain_expected_within(120, 0.1, now) is not None:
            return None
        if sum(d.total_precipitation_mm for d in forecast.next_days(5, now)) > DRY_DAY_MM:
            return None

        if moisture < 0.10:
            severity = Severity.CRITICAL
        elif moisture < 0.15:
            severity = Severity.WARNING
        else:
            severity = Severity.ADVISORY

        dry_days = 0
        for day in forecast.daily_summary:
            if day.total_precipitation_mm >= DRY_DAY_MM or day.max_precipitation_prob >= DRY_DAY_PROBABILITY:
                break
            dry_days += 1

        return (
            Recommendation(
                id="irrigation_forecast",
                category=RecommendationCategory.IRRIGATION,
                severity=severity,
                title=_TITLES[severity],
                description=(
                    f"Soil moisture is low ({moisture * 100:.0f}%) and no significant rain is "
                    f"forecasted for {dry_days} days. Cool-season grasses need consistent moisture."
                ),
                created_at=now,
            )
            .with_explanation(
                "Tall Fescue requires 1-1.5 inches of water per week during the growing season. "
                "When soil moisture drops below 10-15% and no rain is expected, supplemental "
                "irrigation prevents drought stress and thinning. Water deeply (to 6 inches) "
                "to encourage deep root growth."
            )
            .with_data_point("Soil Moisture", f"{moisture * 100:.0f}%", SOURCE_SOIL)
            .with_data_point("Dry Days Forecast", f"{dry_days} days", SOURCE_FORECAST)
            .with_action(_ACTIONS[severity])
        )
