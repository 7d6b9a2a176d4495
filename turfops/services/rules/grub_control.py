"""
Grub Control Timing
===================
Japanese beetle larvae are most vulnerable to preventative products while
adults lay eggs and larvae feed near the surface (May 15 - July 4, soil
60-75°F). Applies to every grass type.
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
)

WINDOW_START = (5, 15)
WINDOW_END = (7, 4)
URGENT_DAYS_REMAINING = 14


class GrubControlRule(Rule):
    id = "grub_control"
    name = "Grub Control Timing"

    def evaluate(
        self,
        env: EnvironmentalSummary,
        profile: LawnProfile,
        history: Sequence[Application],
        *,
        now: datetime,
    ) -> Recommendation | None:
        today = now.date()
        window_start = date(today.year, *WINDOW_START)
        window_end = date(today.year, *WINDOW_END)
        if today < window_start or today > window_end:
            return None

        treated = applications_since(
            history,
            [ApplicationType.GRUB_CONTROL, ApplicationType.INSECTICIDE],
            window_start,
            date(today.year, 12, 31),
        )
        if treated:
            return None

        soil_avg = env.soil_temp_7day_avg_f
        if soil_avg is None:
            return None

        if 60.0 <= soil_avg <= 75.0:
            days_remaining = (window_end - today).days
            severity = Severity.WARNING if days_remaining <= URGENT_DAYS_REMAINING else Severity.ADVISORY
            rec = (
                Recommendation(
                    id=f"grub_control_{today.year}",
                    category=RecommendationCategory.GRUB_CONTROL,
                    severity=severity,
                    title="Grub Preventative Window",
                    description=(
                        "Conditions are optimal for preventative grub control application. "
                        f"{days_remaining} days remaining in window."
                    ),
                    created_at=now,
                )
                .with_explanation(
                    "Japanese beetle larvae (grubs) are most vulnerable to preventative treatments "
                    "when adults are laying eggs and larvae are feeding near the surface. "
                    "Chlorantraniliprole (GrubEx) provides season-long control when applied now."
                )
                .with_data_point("7-Day Avg Soil Temp", fmt_temp(soil_avg), SOURCE_SOIL)
            )
            current_soil = env.current.soil_temp_10_f if env.current else None
            if current_soil is not None:
                rec.with_data_point("Current Soil Temp (10cm)", fmt_temp(current_soil), SOURCE_SOIL)
            return rec.with_data_point("Window Closes", window_end.strftime("%B %d"), SOURCE_AGRONOMIC).with_action(
                "Apply chlorantraniliprole (GrubEx) or imidacloprid at label rate. "
                'Water in with 0.5" of irrigation or rain within 24 hours.'
            )

        if soil_avg > 75.0:
            return (
                Recommendation(
                    id=f"grub_control_late_{today.year}",
                    category=RecommendationCategory.GRUB_CONTROL,
                    severity=Severity.INFO,
                    title="Grub Control - Soil Warm",
                    description=(
                        "Soil temperature is elevated. Grub control may still be effective "
                        "but optimal window is passing."
                    ),
                    created_at=now,
                )
                .with_data_point("7-Day Avg Soil Temp", fmt_temp(soil_avg), SOURCE_SOIL)
                .with_action(
                    "If grub control hasn't been applied, do so soon. "
                    "Effectiveness decreases as larvae move deeper into soil."
                )
            )

        return None
