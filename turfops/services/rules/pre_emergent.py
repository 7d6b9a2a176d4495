"""
Pre-Emergent Timing
===================
Crabgrass germinates once soil at 2-4 inches holds 55°F for several days.
Pre-emergent herbicide has to be down before that point, so the rule tracks
the 7-day average soil temperature at 10 cm through the 50-70°F band.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Sequence

from turfops.domain.application import Application
from turfops.domain.environmental import EnvironmentalSummary
from turfops.domain.lawn_profile import LawnProfile
from turfops.domain.recommendation import Recommendation
from turfops.enums import ApplicationType, RecommendationCategory, Severity
from turfops.services.rules.base import (
    SOURCE_CALCULATED,
    SOURCE_SOIL,
    Rule,
    applications_since,
    fmt_temp,
    in_window,
)

SEASON_START = (2, 1)
SEASON_END = (5, 31)


class PreEmergentRule(Rule):
    id = "pre_emergent"
    name = "Pre-Emergent Timing"

    def evaluate(
        self,
        env: EnvironmentalSummary,
        profile: LawnProfile,
        history: Sequence[Application],
        *,
        now: datetime,
    ) -> Recommendation | None:
        if not profile.is_cool_season:
            return None

        today = now.date()
        if not in_window(today, SEASON_START, SEASON_END):
            return None

        # One pre-emergent per calendar year
        year_start, year_end = date(today.year, 1, 1), date(today.year, 12, 31)
        if applications_since(history, [ApplicationType.PRE_EMERGENT], year_start, year_end):
            return None

        soil_avg = env.soil_temp_7day_avg_f
        if soil_avg is None:
            return None

        if 50.0 <= soil_avg <= 60.0:
            severity = Severity.WARNING if soil_avg >= 55.0 else Severity.ADVISORY
            rec = (
                Recommendation(
                    id=f"pre_emergent_{today.year}",
                    category=RecommendationCategory.PRE_EMERGENT,
                    severity=severity,
                    title="Pre-Emergent Application Window",
                    description=(
                        "Soil temperature is in the optimal range for pre-emergent application. "
                        f"7-day average: {soil_avg:.1f}°F"
                    ),
                    created_at=now,
                )
                .with_explanation(
                    "Crabgrass germinates when soil temperature at 2-4 inch depth reaches 55°F "
                    "for 3+ consecutive days. Apply pre-emergent (prodiamine or dithiopyr) "
                    "before germination begins for best results."
                )
                .with_data_point("7-Day Avg Soil Temp", fmt_temp(soil_avg), SOURCE_SOIL)
            )
            current_soil = env.current.soil_temp_10_f if env.current else None
            if current_soil is not None:
                rec.with_data_point("Current Soil Temp (10cm)", fmt_temp(current_soil), SOURCE_SOIL)
            return rec.with_data_point("Trend", env.soil_temp_trend.label, SOURCE_CALCULATED).with_action(
                "Apply pre-emergent herbicide (prodiamine, dithiopyr, or pendimethalin) "
                "at label rate. Water in within 24 hours if no rain."
            )

        if 60.0 < soil_avg <= 70.0:
            return (
                Recommendation(
                    id=f"pre_emergent_late_{today.year}",
                    category=RecommendationCategory.PRE_EMERGENT,
                    severity=Severity.CRITICAL,
                    title="Pre-Emergent Window Closing",
                    description=(
                        "Soil temperature is above optimal range. Crabgrass may have begun germinating. "
                        f"7-day average: {soil_avg:.1f}°F"
                    ),
                    created_at=now,
                )
                .with_explanation(
                    "If pre-emergent hasn't been applied, do so immediately. Consider a split "
                    "application or use a product with post-emergent properties. After 70°F soil "
                    "temp, pre-emergent efficacy drops significantly."
                )
                .with_data_point("7-Day Avg Soil Temp", fmt_temp(soil_avg), SOURCE_SOIL)
                .with_action(
                    "Apply pre-emergent immediately if not yet done. Consider products with "
                    "post-emergent activity like quinclorac combinations."
                )
            )

        return None
