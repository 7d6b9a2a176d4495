"""
Rain Delay
==========
Holds off fertilizer, herbicide and fungicide when rain would wash product
away. Horizons are checked shortest first and the first qualifying one is
reported; longer horizons are not considered once a shorter one matches.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Sequence

from turfops.domain.application import Application
from turfops.domain.environmental import EnvironmentalSummary
from turfops.domain.lawn_profile import LawnProfile
from turfops.domain.recommendation import Recommendation
from turfops.enums import RecommendationCategory, Severity
from turfops.services.rules.base import SOURCE_FORECAST, Rule, fmt_probability

MM_PER_INCH = 25.4
RAIN_QUERY_THRESHOLD_MM = 0.1


@dataclass(frozen=True)
class RainHorizon:
    hours: int
    severity: Severity
    min_probability: float
    min_mm: float
    title: str
    action: str


HORIZONS = (
    RainHorizon(
        12,
        Severity.CRITICAL,
        0.7,
        2.5,
        "Rain Imminent - Delay Applications",
        "Do NOT apply fertilizer, herbicide, or fungicide. "
        "Wait for dry conditions and at least 24 hours of no rain forecast.",
    ),
    RainHorizon(
        24,
        Severity.WARNING,
        0.5,
        2.5,
        "Rain Expected - Plan Applications Carefully",
        "Delay chemical applications if possible. "
        "If application is critical, ensure product has time to dry (4-6 hours).",
    ),
    RainHorizon(
        48,
        Severity.ADVISORY,
        0.3,
        5.0,
        "Rain in Forecast - Consider Timing",
        "Monitor forecast before planning applications. "
        "Consider applying in early morning if afternoon rain expected.",
    ),
)


class RainDelayRule(Rule):
    id = "rain_delay"
    name = "Rain Delay"

    def evaluate(
        self,
        env: EnvironmentalSummary,
        profile: LawnProfile,
        history: Sequence[Application],
        *,
        now: datetime,
    ) -> Recommendation | None:
        forecast = env.forecast
        if forecast is None:
            return None

        for horizon in HORIZONS:
            rain = forecast.rain_expected_within(horizon.hours, RAIN_QUERY_THRESHOLD_MM, now)
            if rain is None:
                continue
            if rain.max_probability >= horizon.min_probability or rain.expected_mm >= horizon.min_mm:
                return _build(horizon, rain.expected_mm, rain.max_probability, now)
        return None


def _build(horizon: RainHorizon, expected_mm: float, probability: float, now: datetime) -> Recommendation:
    inches = expected_mm / MM_PER_INCH
    return (
        Recommendation(
            id="rain_delay",
            category=RecommendationCategory.APPLICATION_TIMING,
            severity=horizon.severity,
            title=horizon.title,
            description=(
                f'Rain expected within {horizon.hours} hours: {inches:.2f}" '
                f"({probability * 100:.0f}% probability). "
                "Fertilizer and herbicide applications should be delayed."
            ),
            created_at=now,
        )
        .with_explanation(
            "Chemical lawn products need time to be absorbed by plants or soil before rain. "
            "Rain within 24-48 hours of application can wash products away, reducing "
            "effectiveness and potentially polluting waterways."
        )
        .with_data_point("Expected Rain", f'{inches:.2f}"', SOURCE_FORECAST)
        .with_data_point("Rain Probability", fmt_probability(probability), SOURCE_FORECAST)
        .with_data_point("Forecast Window", f"{horizon.hours}h", SOURCE_FORECAST)
        .with_action(horizon.action)
    )
