"""
Services Package
================
Rule evaluation and environmental summary construction.
"""

from turfops.services.environmental_summary import build_summary, merge_current, with_forecast
from turfops.services.rules import RulesEngine, build_default_rules

__all__ = [
    "RulesEngine",
    "build_default_rules",
    "build_summary",
    "merge_current",
    "with_forecast",
]
