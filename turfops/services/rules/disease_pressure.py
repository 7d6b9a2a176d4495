"""
Disease Pressure Forecast
=========================
Combines current conditions with the next five forecast days into a
discrete fungal-disease risk score for cool-season turf (brown patch,
dollar spot, pythium).

Current risk: humidity >= 90 (+2) or >= 80 (+1), ambient 75-90°F (+1),
7-day rain > 25 mm (+1), 7-day humidity >= 80 (+1).
Forecast risk per day, capped at 6: warm humid night (+1), warm humid day
(+1), rain on a warm day (+1).
"""

from __future__ import annotations

from datetime import datetime
from typing import Sequence

from turfops.domain.application import Application
from turfops.domain.environmental import EnvironmentalSummary
from turfops.domain.lawn_profile import LawnProfile
from turfops.domain.recommendation import Recommendation
from turfops.enums import RecommendationCategory, Severity
from turfops.services.rules.base import SOURCE_CALCULATED, SOURCE_FORECAST, SOURCE_PATIO, Rule, fmt_percent

FORECAST_RISK_CAP = 6
HIGH_HUMIDITY = 80.0

_ACTIONS = {
    Severity.CRITICAL: (
        "Apply preventative fungicide immediately (azoxystrobin, propiconazole). "
        "Water ONLY in early morning (5-7 AM). Avoid evening irrigation. "
        "Reduce nitrogen. Monitor for circular brown patches."
    ),
    Severity.WARNING: (
        "Consider preventative fungicide if lawn is valuable or has history of disease. "
        "Switch to early morning watering only. Avoid high-nitrogen fertilizer. "
        "Inspect lawn for early symptoms."
    ),
    Severity.ADVISORY: (
        "Monitor conditions. Water early morning only. "
        "Prepare fungicide for application if conditions worsen. "
        "Avoid fertilizer during high-risk period."
    ),
}


def current_risk(env: EnvironmentalSummary) -> int:
    risk = 0
    if env.current is not None:
        humidity = env.current.humidity_percent
        if humidity is not None:
            if humidity >= 90.0:
                risk += 2
            elif humidity >= HIGH_HUMIDITY:
                risk += 1
        temp = env.current.ambient_temp_f
        if temp is not None and 75.0 <= temp <= 90.0:
            risk += 1
    if env.precipitation_7day_total_mm is not None and env.precipitation_7day_total_mm > 25.0:
        risk += 1
    if env.humidity_7day_avg is not None and env.humidity_7day_avg >= HIGH_HUMIDITY:
        risk += 1
    return risk


def forecast_risk(env: EnvironmentalSummary, now: datetime) -> int:
    if env.forecast is None:
        return 0
    risk = 0
    for day in env.forecast.next_days(5, now):
        humid = day.avg_humidity >= HIGH_HUMIDITY
        warm_nights = day.low_temp_f >= 65.0
        warm_days = 75.0 <= day.high_temp_f <= 90.0
        has_rain = day.total_precipitation_mm >= 2.5 or day.max_precipitation_prob >= 0.5
        if warm_nights and humid:
            risk += 1
        if warm_days and humid:
            risk += 1
        if has_rain and warm_days:
            risk += 1
    return min(risk, FORECAST_RISK_CAP)


def likely_disease(env: EnvironmentalSummary, now: datetime) -> str:
    days = env.forecast.next_days(3, now) if env.forecast else []
    warm_nights = any(d.low_temp_f >= 68.0 for d in days)
    very_warm_days = any(d.high_temp_f >= 85.0 for d in days)
    humidity = env.current.humidity_percent if env.current else None
    current_humid = humidity is not None and humidity >= 85.0

    if warm_nights and very_warm_days and current_humid:
        return "Brown Patch"
    if warm_nights and not very_warm_days:
        return "Dollar Spot"
    return "Fungal Disease"


class DiseasePressureForecastRule(Rule):
    id = "disease_pressure_forecast"
    name = "Disease Pressure Forecast"

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

        current = current_risk(env)
        ahead = forecast_risk(env, now)
        combined = current + ahead
        if combined < 2:
            return None

        if combined >= 5 or (current >= 2 and ahead >= 3):
            severity = Severity.CRITICAL
        elif combined >= 3:
            severity = Severity.WARNING
        else:
            severity = Severity.ADVISORY

        disease = likely_disease(env, now)
        humid_days = env.forecast.consecutive_high_humidity_days(HIGH_HUMIDITY)
        return _build(severity, disease, humid_days, current > 0, env, now)


def _build(
    severity: Severity,
    disease: str,
    humid_days: int,
    current_conditions_bad: bool,
    env: EnvironmentalSummary,
    now: datetime,
) -> Recommendation:
    if severity is Severity.CRITICAL:
        title = f"High {disease} Risk - Act Now"
    elif severity is Severity.WARNING:
        title = f"{disease} Risk Elevated"
    else:
        title = f"{disease} Conditions Developing"
    current_note = "Current conditions already favor disease. " if current_conditions_bad else ""

    rec = (
        Recommendation(
            id="disease_pressure_forecast",
            category=RecommendationCategory.DISEASE_PRESSURE,
            severity=severity,
            title=title,
            description=(
                f"{current_note}Forecast shows {humid_days} days of disease-favorable conditions "
                f"(high humidity, warm temps). {disease} thrives in these conditions."
            ),
            created_at=now,
        )
        .with_explanation(
            f"{disease} is caused by fungal pathogens that thrive in warm, humid conditions. "
            "Night temperatures above 65°F combined with humidity above 80% create ideal "
            "infection conditions. Preventative fungicide is more effective than curative treatment."
        )
        .with_action(_ACTIONS[severity])
    )
    humidity = env.current.humidity_percent if env.current else None
    if humidity is not None:
        rec.with_data_point("Current Humidity", fmt_percent(humidity), SOURCE_PATIO)
    rec.with_data_point("High-Risk Days", humid_days, SOURCE_FORECAST)
    if env.humidity_7day_avg is not None:
        rec.with_data_point("7-Day Avg Humidity", fmt_percent(env.humidity_7day_avg), SOURCE_CALCULATED)
    return rec
