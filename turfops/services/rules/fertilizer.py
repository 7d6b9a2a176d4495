"""
Fertilizer Stress Avoidance
===========================
Cool-season grass goes semi-dormant in heat; nitrogen applied under heat or
moisture stress burns turf or leaches away. Blocks fertilizer while the
current reading shows either stress.
"""

from __future__ import annotations

from datetime import datetime
from typing import Sequence

from turfops.domain.application import Application
from turfops.domain.environmental import EnvironmentalSummary
from turfops.domain.lawn_profile import LawnProfile
from turfops.domain.recommendation import Recommendation
from turfops.enums import RecommendationCategory, Severity
from turfops.services.rules.base import SOURCE_PATIO, SOURCE_SOIL, Rule, fmt_temp

HEAT_STRESS_F = 85.0
EXTREME_HEAT_F = 90.0
DROUGHT_MOISTURE = 0.10
SEVERE_DROUGHT_MOISTURE = 0.05
SATURATED_MOISTURE = 0.40


class FertilizerBlockRule(Rule):
    id = "fertilizer_block"
    name = "Fertilizer Stress Avoidance"

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
        if current is None or current.ambient_temp_f is None:
            return None

        ambient = current.ambient_temp_f
        moisture = current.primary_soil_moisture()
        warnings: list[str] = []
        data_points: list[tuple[str, str, str]] = []

        heat = ambient > HEAT_STRESS_F
        if heat:
            warnings.append(f"Ambient temperature ({ambient:.1f}°F) exceeds 85°F heat stress threshold")
            data_points.append(("Ambient Temp", fmt_temp(ambient), SOURCE_PATIO))

        moisture_breach = False
        if moisture is not None:
            if moisture < DROUGHT_MOISTURE:
                moisture_breach = True
                warnings.append(f"Soil moisture ({moisture:.2f}) indicates drought stress (below 0.10)")
            elif moisture > SATURATED_MOISTURE:
                moisture_breach = True
                warnings.append(
                    f"Soil moisture ({moisture:.2f}) indicates saturation (above 0.40) - fertilizer may leach"
                )
            if moisture_breach:
                data_points.append(("Soil Moisture", f"{moisture:.2f}", SOURCE_SOIL))

        if not warnings:
            return None

        critical = (
            ambient > EXTREME_HEAT_F
            or (moisture is not None and moisture < SEVERE_DROUGHT_MOISTURE)
            or (heat and moisture_breach)
        )

        rec = Recommendation(
            id="fertilizer_block",
            category=RecommendationCategory.FERTILIZER,
            severity=Severity.CRITICAL if critical else Severity.WARNING,
            title="Avoid Fertilizer Application",
            description=". ".join(warnings),
            created_at=now,
        ).with_explanation(
            "Cool-season grasses like Tall Fescue experience heat stress above 85°F and may "
            "go partially dormant. Applying nitrogen during stress can cause fertilizer burn "
            "and damage the lawn. Wait for cooler temperatures or improved soil moisture."
        )
        for label, value, source in data_points:
            rec.with_data_point(label, value, source)
        if current.soil_temp_10_f is not None:
            rec.with_data_point("Soil Temp (10cm)", fmt_temp(current.soil_temp_10_f), SOURCE_SOIL)

        return rec.with_action(
            "Delay fertilizer application until ambient temperature drops below 85°F "
            "and soil moisture is between 0.10-0.40. Consider irrigation if drought-stressed."
        )
