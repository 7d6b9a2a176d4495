"""
Fungicide Disease Risk
======================
Brown patch (Rhizoctonia solani) thrives in hot, humid weather. Flags risk
from the current reading and the 7-day humidity average.
"""

from __future__ import annotations

from datetime import datetime
from typing import Sequence

from turfops.domain.application import Application
from turfops.domain.environmental import EnvironmentalSummary
from turfops.domain.lawn_profile import LawnProfile
from turfops.domain.recommendation import Recommendation
from turfops.enums import RecommendationCategory, Severity
from turfops.services.rules.base import SOURCE_CALCULATED, SOURCE_PATIO, Rule, fmt_percent, fmt_temp


class FungicideRiskRule(Rule):
    id = "fungicide_risk"
    name = "Fungicide Disease Risk"

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

        current = env.current
        if current is None:
            return None
        humidity = current.humidity_percent
        ambient = current.ambient_temp_f
        humidity_avg = env.humidity_7day_avg
        if humidity is None or ambient is None or humidity_avg is None:
            return None

        if humidity <= 80.0 or ambient <= 70.0:
            return None

        sustained = humidity_avg > 75.0
        if humidity > 90.0 and ambient > 80.0 and sustained:
            severity = Severity.CRITICAL
        elif sustained:
            severity = Severity.WARNING
        else:
            severity = Severity.ADVISORY

        return (
            Recommendation(
                id="fungicide_risk",
                category=RecommendationCategory.FUNGICIDE,
                severity=severity,
                title="Brown Patch Risk Elevated",
                description=(
                    "Current conditions favor brown patch disease. "
                    f"Humidity: {humidity:.0f}%, Temp: {ambient:.1f}°F"
                ),
                created_at=now,
            )
            .with_explanation(
                "Brown patch (Rhizoctonia solani) thrives in hot, humid conditions with night "
                "temperatures above 65°F. Tall Fescue is particularly susceptible. Symptoms include "
                "circular patches of tan/brown turf with a dark 'smoke ring' border in morning dew."
            )
            .with_data_point("Current Humidity", fmt_percent(humidity), SOURCE_PATIO)
            .with_data_point("Ambient Temp", fmt_temp(ambient), SOURCE_PATIO)
            .with_data_point("7-Day Avg Humidity", fmt_percent(humidity_avg), SOURCE_CALCULATED)
            .with_action(
                "Consider preventive fungicide application (azoxystrobin, propiconazole, or "
                "thiophanate-methyl). Avoid evening irrigation - water early morning. "
                "Reduce nitrogen applications during high-risk periods."
            )
        )
