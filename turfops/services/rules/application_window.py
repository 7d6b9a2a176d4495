"""
Optimal Application Window
==========================
Finds the best day in the first five forecast days for fertilizer, herbicide
or fungicide: dry the day before, dry that day and the next, moderate
temperature, light wind and moderate humidity.

Day scoring (fixed weights):

=====================  ======
Condition              Points
=====================  ======
temperature ok         10
wind < 10 mph          5
humidity < 85%         3
dry day before         10
dry day and day after  15
avg temp 55-75°F       5
=====================  ======
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Sequence

from turfops.domain.application import Application
from turfops.domain.environmental import EnvironmentalSummary
from turfops.domain.forecast import DailyForecast
from turfops.domain.lawn_profile import LawnProfile
from turfops.domain.recommendation import Recommendation
from turfops.enums import RecommendationCategory, Severity
from turfops.services.rules.base import SOURCE_FORECAST, Rule

WINDOW_DAYS = 5
DRY_DAY_MM = 2.5
DRY_DAY_PROBABILITY = 0.5
RECENT_RAIN_LIMIT_MM = 25.0


def is_dry(day: DailyForecast) -> bool:
    return day.total_precipitation_mm < DRY_DAY_MM and day.max_precipitation_prob < DRY_DAY_PROBABILITY


@dataclass(frozen=True)
class WindowQuality:
    day: date
    temp_ok: bool
    wind_ok: bool
    humidity_ok: bool
    no_rain_before: bool
    no_rain_after: bool
    temp: float
    wind: float
    humidity: float

    @property
    def ideal_temp(self) -> bool:
        return 55.0 <= self.temp <= 75.0

    def is_good(self) -> bool:
        return self.no_rain_before and self.no_rain_after and self.temp_ok

    def score(self) -> int:
        score = 0
        if self.temp_ok:
            score += 10
        if self.wind_ok:
            score += 5
        if self.humidity_ok:
            score += 3
        if self.no_rain_before:
            score += 10
        if self.no_rain_after:
            score += 15
        if self.ideal_temp:
            score += 5
        return score

    def describe(self) -> str:
        conditions = []
        if self.ideal_temp:
            conditions.append("ideal temps")
        elif self.temp_ok:
            conditions.append("acceptable temps")
        if self.wind_ok:
            conditions.append("calm winds" if self.wind < 5.0 else "light winds")
        if self.humidity_ok:
            conditions.append("low humidity" if self.humidity < 70.0 else "moderate humidity")
        return ", ".join(conditions) if conditions else "marginal conditions"


def assess_day(
    days: Sequence[DailyForecast],
    index: int,
    recent_precip_mm: float | None,
) -> WindowQuality:
    """Score ``days[index]`` against its neighbours in the daily series."""
    day = days[index]
    avg_temp = day.avg_temp_f
    if index > 0:
        no_rain_before = is_dry(days[index - 1])
    else:
        no_rain_before = (recent_precip_mm or 0.0) < RECENT_RAIN_LIMIT_MM
    next_dry = is_dry(days[index + 1]) if index + 1 < len(days) else True

    return WindowQuality(
        day=day.date,
        temp_ok=avg_temp >= 50.0 and day.high_temp_f <= 85.0,
        wind_ok=day.avg_wind_speed_mph < 10.0,
        humidity_ok=day.avg_humidity < 85.0,
        no_rain_before=no_rain_before,
        no_rain_after=is_dry(day) and next_dry,
        temp=avg_temp,
        wind=day.avg_wind_speed_mph,
        humidity=day.avg_humidity,
    )


class ApplicationWindowRule(Rule):
    id = "application_window"
    name = "Optimal Application Window"

    def evaluate(
        self,
        env: EnvironmentalSummary,
        profile: LawnProfile,
        history: Sequence[Application],
        *,
        now: datetime,
    ) -> Recommendation | None:
        if env.forecast is None:
            return None

        days = env.forecast.daily_summary
        candidates = [assess_day(days, i, env.precipitation_7day_total_mm) for i in range(min(WINDOW_DAYS, len(days)))]
        good_days = [q for q in candidates if q.is_good()]
        if not good_days:
            return None

        # max() keeps the first of equal scores, so ties go to the earliest day
        best = max(good_days, key=lambda q: q.score())
        day_name = best.day.strftime("%A")

        return (
            Recommendation(
                id="application_window",
                category=RecommendationCategory.APPLICATION_TIMING,
                severity=Severity.INFO,
                title=f"Good Application Window: {day_name}",
                description=(
                    f"{day_name} ({best.day.strftime('%b %d')}) shows {best.describe()} for lawn product "
                    f"applications. {len(good_days)} good day(s) in the next 5-day forecast."
                ),
                created_at=now,
            )
            .with_explanation(
                "Optimal conditions for fertilizer, herbicide, and fungicide applications include "
                "dry conditions (no rain 24h before, 48h after), moderate temperatures (50-80°F), "
                "low wind (<10mph to prevent drift), and moderate humidity (<85%). "
                "Early morning applications are often best."
            )
            .with_data_point("Expected Temp", f"{best.temp:.0f}°F", SOURCE_FORECAST)
            .with_data_point("Wind Speed", f"{best.wind:.1f}mph", SOURCE_FORECAST)
            .with_data_point("Humidity", f"{best.humidity:.0f}%", SOURCE_FORECAST)
            .with_action(
                f"Plan applications for {day_name} if weather holds. "
                "Check forecast morning-of to confirm conditions. "
                "Apply in early morning for best results."
            )
        )
