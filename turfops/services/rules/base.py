"""
Rule Interface
==============
Abstract contract shared by every agronomic rule, plus the history and
formatting helpers the rules have in common.

Rules are stateless: one instance may be evaluated concurrently from several
threads. They never mutate the summary, profile or history they receive and
they read the clock only through the explicit ``now`` argument.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Iterable, Sequence

from turfops.domain.application import Application
from turfops.domain.environmental import EnvironmentalSummary
from turfops.domain.lawn_profile import LawnProfile
from turfops.domain.recommendation import Recommendation
from turfops.enums import ApplicationType

logger = logging.getLogger(__name__)

SOURCE_SOIL = "NOAA USCRN"
SOURCE_PATIO = "Patio Sensor"
SOURCE_FORECAST = "OpenWeatherMap"
SOURCE_AGRONOMIC = "Agronomic"
SOURCE_CALCULATED = "Calculated"
SOURCE_HISTORY = "History"

DEFAULT_LAWN_SQFT = 5000.0


class Rule(ABC):
    """
    Base class for agronomic rules.

    Subclasses set ``id`` and ``name`` and implement :meth:`evaluate`.
    ``default_lawn_sqft`` sizes product amounts when the profile has no area.
    """

    id: str = ""
    name: str = ""

    def __init__(self, *, default_lawn_sqft: float = DEFAULT_LAWN_SQFT) -> None:
        if default_lawn_sqft <= 0:
            raise ValueError(f"Default lawn size must be positive, got {default_lawn_sqft}")
        self.default_lawn_sqft = float(default_lawn_sqft)

    def lawn_size(self, profile: LawnProfile) -> float:
        if profile.lawn_size_sqft is not None:
            return profile.lawn_size_sqft
        return self.default_lawn_sqft

    @abstractmethod
    def evaluate(
        self,
        env: EnvironmentalSummary,
        profile: LawnProfile,
        history: Sequence[Application],
        *,
        now: datetime,
    ) -> Recommendation | None:
        """
        Evaluate the rule.

        Args:
            env: Environmental summary (may be entirely empty)
            profile: Lawn profile snapshot
            history: Application history snapshot
            now: Evaluation time; "today" is ``now.date()``

        Returns:
            A new Recommendation, or None when the rule does not apply or
            data is insufficient
        """
        ...

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.id!r}>"


def in_window(today: date, start: tuple[int, int], end: tuple[int, int]) -> bool:
    """True when ``today`` falls in the inclusive (month, day) range."""
    return start <= (today.month, today.day) <= end


def days_until(today: date, month: int, day: int) -> int:
    return (date(today.year, month, day) - today).days


def applications_since(
    history: Iterable[Application],
    types: Iterable[ApplicationType],
    since: date,
    until: date | None = None,
) -> list[Application]:
    """Applications of ``types`` dated on/after ``since`` (and on/before ``until``)."""
    wanted = frozenset(types)
    return [
        app
        for app in history
        if app.application_type in wanted
        and app.application_date >= since
        and (until is None or app.application_date <= until)
    ]


def fmt_temp(value: float) -> str:
    return f"{value:.1f}°F"


def fmt_percent(value: float) -> str:
    return f"{value:.0f}%"


def fmt_mm(value: float) -> str:
    return f"{value:.1f}mm"


def fmt_probability(value: float) -> str:
    return f"{value * 100:.0f}%"
