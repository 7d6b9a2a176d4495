"""
Fall Fertilization Program
==========================
Fall is the most important feeding window for cool-season grass: top growth
slows while roots grow and store carbohydrates. The season runs in three
phases, each with its own nitrogen rate:

- Early (September): recovery feeding, 0.5 lb N / 1000 sqft
- Mid (October): primary feeding, 0.75 lb N / 1000 sqft
- Late (November): winterizer, 1.0 lb N / 1000 sqft

Each phase is offered at most once; a fertilizer already logged inside the
current phase suppresses it.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Sequence

from turfops.domain.application import Application
from turfops.domain.environmental import EnvironmentalSummary
from turfops.domain.lawn_profile import LawnProfile
from turfops.domain.recommendation import Recommendation
from turfops.enums import ApplicationType, RecommendationCategory, Severity
from turfops.services.rules.base import (
    SOURCE_CALCULATED,
    SOURCE_HISTORY,
    SOURCE_SOIL,
    Rule,
    applications_since,
    fmt_temp,
)

MIN_DAYS_BETWEEN_APPS = 21


@dataclass(frozen=True)
class FallPhase:
    key: str
    month: int
    rate_lb_n: float
    label: str


EARLY = FallPhase("early", 9, 0.5, "Early Fall (Recovery)")
MID = FallPhase("mid", 10, 0.75, "Mid-Fall (Primary)")
LATE = FallPhase("late", 11, 1.0, "Late Fall (Winterizer)")
PHASES = {phase.month: phase for phase in (EARLY, MID, LATE)}


def phase_for(today: date) -> FallPhase | None:
    return PHASES.get(today.month)


def _phase_bounds(phase: FallPhase, year: int) -> tuple[date, date]:
    start = date(year, phase.month, 1)
    end = date(year, phase.month + 1, 1)
    return start, date.fromordinal(end.toordinal() - 1)


class FallFertilizationRule(Rule):
    id = "fall_fertilization"
    name = "Fall Fertilization Program"

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
        phase = phase_for(today)
        if phase is None:
            return None

        soil_avg = env.soil_temp_7day_avg_f
        if soil_avg is None:
            return None

        season_start = date(today.year, EARLY.month, 1)
        fall_apps = applications_since(history, [ApplicationType.FERTILIZER], season_start, date(today.year, 12, 31))

        phase_start, phase_end = _phase_bounds(phase, today.year)
        if any(phase_start <= app.application_date <= phase_end for app in fall_apps):
            return None

        app_count = len(fall_apps)
        if fall_apps:
            days_since_last = (today - max(app.application_date for app in fall_apps)).days
        else:
            days_since_last = None
        spaced = days_since_last is None or days_since_last >= MIN_DAYS_BETWEEN_APPS
        soil_ok = 45.0 <= soil_avg <= 65.0
        size = self.lawn_size(profile)

        if phase is EARLY:
            if app_count == 0 and soil_ok:
                return _early_fall(soil_avg, size, env, now)
            return None
        if phase is MID:
            if app_count < 2 and spaced and soil_ok:
                return _mid_fall(soil_avg, app_count, size, env, now)
            return None
        if app_count < 3 and spaced and soil_avg >= 40.0:
            return _winterizer(soil_avg, app_count, size, now)
        return None


def _nitrogen_action(size: float, phase: FallPhase, advice: str) -> str:
    n_needed = size / 1000.0 * phase.rate_lb_n
    return (
        f"Apply ~{n_needed:.1f} lbs of nitrogen for your {size:.0f} sqft lawn "
        f"({phase.rate_lb_n:g} lb N/1000 sqft). {advice}"
    )


def _early_fall(soil_temp: float, size: float, env: EnvironmentalSummary, now: datetime) -> Recommendation:
    return (
        Recommendation(
            id="fall_fert_early",
            category=RecommendationCategory.FERTILIZER,
            severity=Severity.ADVISORY,
            title="Early Fall Fertilization",
            description=(
                f"Soil temperature ({soil_temp:.1f}°F) is ideal for fall fertilization. "
                "Time to begin fall nitrogen program."
            ),
            created_at=now,
        )
        .with_explanation(
            "Early fall feeding helps TTTF recover from summer stress. Apply light nitrogen "
            "(0.5 lb N per 1000 sqft) to support recovery without pushing excessive top growth."
        )
        .with_data_point("Soil Temp", fmt_temp(soil_temp), SOURCE_SOIL)
        .with_data_point("Phase", EARLY.label, "Calendar")
        .with_data_point("Trend", env.soil_temp_trend.label, SOURCE_CALCULATED)
        .with_action(
            _nitrogen_action(
                size,
                EARLY,
                "Use a balanced fertilizer or slow-release nitrogen. Water in lightly if no rain expected.",
            )
        )
    )


def _mid_fall(
    soil_temp: float,
    app_count: int,
    size: float,
    env: EnvironmentalSummary,
    now: datetime,
) -> Recommendation:
    missed_early = app_count == 0
    return (
        Recommendation(
            id="fall_fert_mid",
            category=RecommendationCategory.FERTILIZER,
            severity=Severity.WARNING if missed_early else Severity.ADVISORY,
            title="Mid-Fall Fertilization - Don't Miss Fall Feeding!" if missed_early else "Mid-Fall Fertilization",
            description=(
                f"Prime time for fall fertilization. Soil temp {soil_temp:.1f}°F is optimal "
                "for root uptake and carbohydrate storage."
            ),
            created_at=now,
        )
        .with_explanation(
            "Mid-fall (October) is the most important fertilization of the year for TTTF. "
            "Roots are actively growing while top growth slows, and nitrogen applied now is "
            "stored as carbohydrates for winter hardiness and spring green-up."
        )
        .with_data_point("Soil Temp", fmt_temp(soil_temp), SOURCE_SOIL)
        .with_data_point("Phase", MID.label, "Calendar")
        .with_data_point("Fall Apps So Far", app_count, SOURCE_HISTORY)
        .with_data_point("Trend", env.soil_temp_trend.label, SOURCE_CALCULATED)
        .with_action(
            _nitrogen_action(
                size,
                MID,
                "A slow-release or balanced fertilizer works well. "
                "This is the most important feeding of the year - don't skip it!",
            )
        )
    )


def _winterizer(soil_temp: float, app_count: int, size: float, now: datetime) -> Recommendation:
    return (
        Recommendation(
            id="fall_fert_winterizer",
            category=RecommendationCategory.FERTILIZER,
            severity=Severity.WARNING if app_count == 0 else Severity.ADVISORY,
            title="Winterizer Application",
            description=(
                f"Time for final fall fertilization. Soil temp {soil_temp:.1f}°F - grass is slowing "
                "but roots are still active."
            ),
            created_at=now,
        )
        .with_explanation(
            "The winterizer application provides nitrogen that the grass stores over winter. "
            "Applied when growth has slowed but before the ground freezes, it is available "
            "immediately when spring arrives. Roots keep working even if grass appears dormant."
        )
        .with_data_point("Soil Temp", fmt_temp(soil_temp), SOURCE_SOIL)
        .with_data_point("Phase", LATE.label, "Calendar")
        .with_data_point("Fall Apps So Far", app_count, SOURCE_HISTORY)
        .with_action(
            _nitrogen_action(
                size,
                LATE,
                "Quick-release nitrogen is fine for winterizer since you want immediate uptake. "
                "Apply before ground freezes, even if grass looks dormant.",
            )
        )
    )
