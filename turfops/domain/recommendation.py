"""
Recommendation
==============
Output of a rule evaluation: an explainable, prioritized lawn-care advice
item with the data points that triggered it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from turfops.enums import RecommendationCategory, Severity
from turfops.utils.time import utc_now


@dataclass(frozen=True)
class DataPoint:
    label: str
    value: str
    source: str

    def to_dict(self) -> dict[str, str]:
        return {"label": self.label, "value": self.value, "source": self.source}


@dataclass
class Recommendation:
    """
    A recommendation produced by a rule.

    ``dismissed`` and ``addressed`` belong to the user workflow; the engine
    never sets them.
    """

    id: str
    category: RecommendationCategory
    severity: Severity
    title: str
    description: str
    explanation: str = ""
    data_points: list[DataPoint] = field(default_factory=list)
    suggested_action: str | None = None
    created_at: datetime = field(default_factory=utc_now)
    dismissed: bool = False
    addressed: bool = False

    def with_explanation(self, explanation: str) -> Recommendation:
        self.explanation = explanation
        return self

    def with_data_point(self, label: str, value: Any, source: str) -> Recommendation:
        self.data_points.append(DataPoint(label, str(value), source))
        return self

    def with_action(self, action: str) -> Recommendation:
        self.suggested_action = action
        return self

    def is_active(self) -> bool:
        return not self.dismissed and not self.addressed

    def data_point(self, label: str) -> str | None:
        """Value of the first data point with ``label``."""
        for point in self.data_points:
            if point.label == label:
                return point.value
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "category": self.category.value,
            "category_label": self.category.label,
            "severity": self.severity.value,
            "title": self.title,
            "description": self.description,
            "explanation": self.explanation,
            "data_points": [p.to_dict() for p in self.data_points],
            "suggested_action": self.suggested_action,
            "created_at": self.created_at.isoformat(),
            "dismissed": self.dismissed,
            "addressed": self.addressed,
        }
