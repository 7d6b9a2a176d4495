"""
Common Enumerations
====================

Enums shared by the recommendation engine, the domain models and the API.
"""

from __future__ import annotations

from enum import Enum


class Severity(str, Enum):
    """
    Recommendation urgency tiers, ordered Info < Advisory < Warning < Critical.
    Used by: every rule, recommendation sorting, API serialization
    """
    INFO = "info"
    ADVISORY = "advisory"
    WARNING = "warning"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @property
    def symbol(self) -> str:
        return _SEVERITY_SYMBOLS[self]

    def __lt__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank >= other.rank

    def __str__(self) -> str:
        return self.value


_SEVERITY_RANK = {
    Severity.INFO: 0,
    Severity.ADVISORY: 1,
    Severity.WARNING: 2,
    Severity.CRITICAL: 3,
}

_SEVERITY_SYMBOLS = {
    Severity.INFO: "ℹ",
    Severity.ADVISORY: "→",
    Severity.WARNING: "⚠",
    Severity.CRITICAL: "!",
}


class RecommendationCategory(str, Enum):
    """
    Recommendation categories.
    Used by: rules, display grouping
    """
    PRE_EMERGENT = "pre_emergent"
    GRUB_CONTROL = "grub_control"
    FERTILIZER = "fertilizer"
    FUNGICIDE = "fungicide"
    OVERSEEDING = "overseeding"
    IRRIGATION = "irrigation"
    MOWING = "mowing"
    FROST_WARNING = "frost_warning"
    HEAT_STRESS = "heat_stress"
    DISEASE_PRESSURE = "disease_pressure"
    APPLICATION_TIMING = "application_timing"
    GENERAL = "general"

    @property
    def label(self) -> str:
        return _CATEGORY_LABELS[self]

    def __str__(self) -> str:
        return self.value


_CATEGORY_LABELS = {
    RecommendationCategory.PRE_EMERGENT: "Pre-Emergent",
    RecommendationCategory.GRUB_CONTROL: "Grub Control",
    RecommendationCategory.FERTILIZER: "Fertilizer",
    RecommendationCategory.FUNGICIDE: "Fungicide",
    RecommendationCategory.OVERSEEDING: "Overseeding",
    RecommendationCategory.IRRIGATION: "Irrigation",
    RecommendationCategory.MOWING: "Mowing",
    RecommendationCategory.FROST_WARNING: "Frost Warning",
    RecommendationCategory.HEAT_STRESS: "Heat Stress",
    RecommendationCategory.DISEASE_PRESSURE: "Disease Pressure",
    RecommendationCategory.APPLICATION_TIMING: "Application Timing",
    RecommendationCategory.GENERAL: "General",
}


class Trend(str, Enum):
    """
    Direction of a rolling average.
    Used by: environmental summary builder, seasonal rules
    """
    RISING = "rising"
    FALLING = "falling"
    STABLE = "stable"
    UNKNOWN = "unknown"

    @property
    def label(self) -> str:
        return _TREND_LABELS[self]

    def __str__(self) -> str:
        return self.value


_TREND_LABELS = {
    Trend.RISING: "↑ Rising",
    Trend.FALLING: "↓ Falling",
    Trend.STABLE: "→ Stable",
    Trend.UNKNOWN: "? Unknown",
}


class DataSource(str, Enum):
    """
    Origin of an environmental reading.
    Used by: environmental readings, recommendation data points
    """
    SOIL_DATA = "soil_data"
    HOME_ASSISTANT = "home_assistant"
    CACHED = "cached"
    MANUAL = "manual"

    @property
    def label(self) -> str:
        return _SOURCE_LABELS[self]

    def __str__(self) -> str:
        return self.value


_SOURCE_LABELS = {
    DataSource.SOIL_DATA: "NOAA USCRN",
    DataSource.HOME_ASSISTANT: "Patio Sensor",
    DataSource.CACHED: "Cached",
    DataSource.MANUAL: "Manual",
}
