"""
Spring Nitrogen Timing
======================
Cool-season grass breaks dormancy on stored carbohydrates, not soil
nutrients. Nitrogen applied before the soil reaches 55°F pushes blade growth
at the expense of roots. This rule discourages early feeding and opens the
window once the soil is warm enough.
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
    SOURCE_AGRONOMIC,
    SOURCE_SOIL,
    Rule,
    applications_since,
    fmt_temp,
    in_window,
)

SEASON_START = (2, 1)
SEASON_END = (5, 31)
SPRING_RATE_LB_N = 0.5


class SpringNitrogenRule(Rule):
    id = "spring_nitrogen"
    name = "Spring Nitrogen Timing"

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

        soil_avg = env.soil_temp_7day_avg_f
        if soil_avg is None:
            return None

        spring_start = date(today.year, *SEASON_START)
        has_spring_fert = bool(
            applications_since(history, [ApplicationType.FERTILIZER], spring_start, date(today.year, 12, 31))
        )

        if soil_avg < 50.0:
            if has_spring_fert:
                return _too_early_warning(soil_avg, now)
            return _patience_advisory(soil_avg, now)
        if soil_avg < 55.0:
            return None if has_spring_fert else _almost_ready(soil_avg, now)
        if soil_avg <= 65.0:
            return None if has_spring_fert else _ready_to_fertilize(soil_avg, self.lawn_size(profile), now)
        return None


def _too_early_warning(soil_temp: float, now: datetime) -> Recommendation:
    return (
        Recommendation(
            id="spring_n_too_early",
            category=RecommendationCategory.FERTILIZER,
            severity=Severity.WARNING,
            title="Spring Fertilizer Applied Too Early",
            description=(
                f"Fertilizer was applied while soil temp ({soil_temp:.1f}°F) is still below 55°F. "
                "This can weaken the lawn heading into summer."
            ),
            created_at=now,
        )
        .with_explanation(
            "Applying nitrogen before the lawn is ready forces top (blade) growth while roots "
            "are still dormant. This depletes the plant's carbohydrate reserves and creates "
            "a shallow root system. The grass needs to wake up naturally first."
        )
        .with_data_point("Soil Temp", fmt_temp(soil_temp), SOURCE_SOIL)
        .with_data_point("Target Temp", "55°F minimum", SOURCE_AGRONOMIC)
        .with_action(
            "Avoid additional nitrogen applications until soil consistently reaches 55°F. "
            "Focus on other spring tasks: clean up debris, sharpen mower blades, "
            "check irrigation system. The pre-emergent window comes before fertilization."
        )
    )


def _patience_advisory(soil_temp: float, now: datetime) -> Recommendation:
    return (
        Recommendation(
            id="spring_n_wait",
            category=RecommendationCategory.FERTILIZER,
            severity=Severity.INFO,
            title="Spring Fertilizer - Wait for Warmer Soil",
            description=(
                f"Soil temperature ({soil_temp:.1f}°F) is still too cold for spring fertilization. "
                "Patience now pays off with a stronger lawn later."
            ),
            created_at=now,
        )
        .with_explanation(
            "Cool-season grass breaks dormancy from stored carbohydrates, not from soil "
            "nutrients. Wait until soil reaches 55°F and you've mowed 2-3 times so roots "
            "are active and ready to absorb nutrients."
        )
        .with_data_point("Current Soil Temp", fmt_temp(soil_temp), SOURCE_SOIL)
        .with_data_point("Target Soil Temp", "55°F", SOURCE_AGRONOMIC)
        .with_action(
            "Focus on spring prep: rake leaves/debris, check for disease damage, "
            "plan pre-emergent timing (that window comes first!). "
            "First fertilization should wait until after 2-3 mowings."
        )
    )


def _almost_ready(soil_temp: float, now: datetime) -> Recommendation:
    return (
        Recommendation(
            id="spring_n_almost",
            category=RecommendationCategory.FERTILIZER,
            severity=Severity.INFO,
            title="Spring Fertilizer - Almost Time",
            description=(
                f"Soil temperature ({soil_temp:.1f}°F) is approaching the 55°F threshold. "
                "Spring fertilization window opening soon."
            ),
            created_at=now,
        )
        .with_explanation(
            "Wait for soil to consistently reach 55°F and complete 2-3 mowing cycles. "
            "This confirms the grass is actively growing and roots are ready for nutrients. "
            "Pre-emergent timing (50-55°F soil) comes before fertilization."
        )
        .with_data_point("Current Soil Temp", fmt_temp(soil_temp), SOURCE_SOIL)
        .with_data_point("Target", "55°F + 2-3 mowings", SOURCE_AGRONOMIC)
        .with_action(
            "Continue monitoring soil temperature. After your second or third mowing "
            "AND soil is 55°F+, apply light spring nitrogen."
        )
    )


def _ready_to_fertilize(soil_temp: float, size: float, now: datetime) -> Recommendation:
    n_needed = size / 1000.0 * SPRING_RATE_LB_N

    return (
        Recommendation(
            id="spring_n_ready",
            category=RecommendationCategory.FERTILIZER,
            severity=Severity.ADVISORY,
            title="Spring Fertilization Window Open",
            description=(
                f"Soil temperature ({soil_temp:.1f}°F) indicates spring fertilization is appropriate. "
                "If you've mowed 2-3 times, light nitrogen is now beneficial."
            ),
            created_at=now,
        )
        .with_explanation(
            "With soil at 55°F+, roots are active and can utilize applied nitrogen. "
            "Spring feeding should be light compared to fall: a 0.5 lb N/1000 sqft "
            "application supports growth without pushing excessive top growth."
        )
        .with_data_point("Soil Temp", fmt_temp(soil_temp), SOURCE_SOIL)
        .with_data_point("Recommended Rate", "0.5 lb N/1000 sqft", SOURCE_AGRONOMIC)
        .with_action(
            f"Apply ~{n_needed:.1f} lbs of nitrogen for your {size:.0f} sqft lawn (0.5 lb N/1000 sqft). "
            "Use slow-release nitrogen and save the heavy feeding for fall."
        )
    )
