"""
Fall Overseeding Window
=======================
Tall Fescue does not spread by rhizomes or stolons, so overseeding is the
only way to thicken it. Seed too early and seedlings cook; too late and they
do not establish before winter. Window: Aug 15 - Oct 31, soil 50-65°F.
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
    SOURCE_FORECAST,
    SOURCE_SOIL,
    Rule,
    applications_since,
    fmt_temp,
)

WINDOW_START = (8, 15)
WINDOW_END = (10, 31)
WARM_SOIL_CUTOFF = (9, 15)
SEED_LB_PER_1000SQFT = 4.0
HOT_FORECAST_HIGH_F = 85.0


class FallOverseedingRule(Rule):
    id = "fall_overseeding"
    name = "Fall Overseeding Window"

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
        window_start = date(today.year, *WINDOW_START)
        window_end = date(today.year, *WINDOW_END)
        if today < window_start or today > window_end:
            return None

        if applications_since(history, [ApplicationType.OVERSEED], window_start, date(today.year, 12, 31)):
            return None

        soil_avg = env.soil_temp_7day_avg_f
        if soil_avg is None:
            return None

        days_remaining = (window_end - today).days

        if 50.0 <= soil_avg <= 65.0:
            return self._open_window(env, profile, soil_avg, days_remaining, now)

        if 65.0 < soil_avg <= 75.0:
            if today < date(today.year, *WARM_SOIL_CUTOFF):
                return (
                    Recommendation(
                        id=f"fall_overseeding_wait_{today.year}",
                        category=RecommendationCategory.OVERSEEDING,
                        severity=Severity.INFO,
                        title="Overseeding Window Approaching",
                        description=(
                            f"Soil temperature ({soil_avg:.1f}°F) is still warm. "
                            "Wait for temps to drop below 65°F for best germination."
                        ),
                        created_at=now,
                    )
                    .with_explanation(
                        "TTTF germinates best when soil is 50-65°F. Seeding when soil is too warm "
                        "can stress seedlings. The window typically opens mid-September in Zone 7a."
                    )
                    .with_data_point("Soil Temp", fmt_temp(soil_avg), SOURCE_SOIL)
                    .with_action(
                        "Prepare for overseeding: order seed, plan aeration, "
                        "gather supplies. Monitor soil temps weekly."
                    )
                )
            return (
                Recommendation(
                    id=f"fall_overseeding_late_{today.year}",
                    category=RecommendationCategory.OVERSEEDING,
                    severity=Severity.WARNING,
                    title="Overseeding - Soil Warm but Window Closing",
                    description=(
                        f"Soil ({soil_avg:.1f}°F) is warmer than ideal, but {days_remaining} days "
                        "remain in window. Consider seeding soon despite conditions."
                    ),
                    created_at=now,
                )
                .with_data_point("Soil Temp", fmt_temp(soil_avg), SOURCE_SOIL)
                .with_action(
                    "Seed soon if you haven't already. Water more frequently to keep "
                    "seedlings cool. Soil temps will drop as nights get cooler."
                )
            )

        if soil_avg < 50.0 and days_remaining > 14:
            return (
                Recommendation(
                    id=f"fall_overseeding_cold_{today.year}",
                    category=RecommendationCategory.OVERSEEDING,
                    severity=Severity.WARNING,
                    title="Overseeding Window Narrowing - Cool Soil",
                    description=(
                        f"Soil temperature ({soil_avg:.1f}°F) is below optimal. "
                        "Germination will be slow. Seed immediately if planned."
                    ),
                    created_at=now,
                )
                .with_data_point("Soil Temp", fmt_temp(soil_avg), SOURCE_SOIL)
                .with_action(
                    "If overseeding, do it NOW. Germination slows significantly below 50°F. "
                    "Seedlings need 4-6 weeks before hard frost to establish."
                )
            )

        return None

    def _open_window(
        self,
        env: EnvironmentalSummary,
        profile: LawnProfile,
        soil_avg: float,
        days_remaining: int,
        now: datetime,
    ) -> Recommendation:
        # Peak germination band tolerates less remaining time before escalating
        urgent_days = 21 if 55.0 <= soil_avg <= 62.0 else 14
        severity = Severity.WARNING if days_remaining < urgent_days else Severity.ADVISORY

        rec = (
            Recommendation(
                id=f"fall_overseeding_{now.year}",
                category=RecommendationCategory.OVERSEEDING,
                severity=severity,
                title="Fall Overseeding Window Open",
                description=(
                    f"Soil temperature ({soil_avg:.1f}°F) is ideal for TTTF seed germination. "
                    f"{days_remaining} days remaining in optimal window."
                ),
                created_at=now,
            )
            .with_explanation(
                "Tall Fescue doesn't spread on its own, so overseeding is the only way to "
                "thicken your lawn and fill bare spots. Fall soil is warm for germination "
                "while cool air reduces seedling stress and weed competition is minimal. "
                "Seeds need 10-14 days of consistent moisture to germinate."
            )
            .with_data_point("7-Day Avg Soil Temp", fmt_temp(soil_avg), SOURCE_SOIL)
        )
        current_soil = env.current.soil_temp_10_f if env.current else None
        if current_soil is not None:
            rec.with_data_point("Current Soil Temp", fmt_temp(current_soil), SOURCE_SOIL)
        rec.with_data_point("Days Remaining", days_remaining, "Calendar")

        if env.forecast is not None:
            highs = [d.high_temp_f for d in env.forecast.next_days(14, now)]
            if highs and sum(highs) / len(highs) >= HOT_FORECAST_HIGH_F:
                rec.with_data_point("Forecast Note", "Hot weather ahead - monitor seedlings", SOURCE_FORECAST)

        sqft = self.lawn_size(profile)
        lbs_needed = sqft / 1000.0 * SEED_LB_PER_1000SQFT
        return rec.with_action(
            f"For your {sqft:.0f} sqft lawn: ~{lbs_needed:.0f} lbs of TTTF seed (4 lbs/1000 sqft for overseeding). "
            'Mow low (2"), dethatch or aerate first for seed-to-soil contact. '
            "Keep soil moist (light watering 2-3x daily) for 14 days. "
            "Avoid foot traffic for 3-4 weeks."
        )
