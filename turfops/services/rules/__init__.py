"""
Agronomic Rules
===============
Twelve independent decision rules and the engine that runs them in a fixed
order.
"""

from turfops.services.rules.application_window import ApplicationWindowRule
from turfops.services.rules.base import Rule
from turfops.services.rules.disease_pressure import DiseasePressureForecastRule
from turfops.services.rules.engine import DEFAULT_RULE_TYPES, RulesEngine, build_default_rules
from turfops.services.rules.fall_fertilization import FallFertilizationRule
from turfops.services.rules.fall_overseeding import FallOverseedingRule
from turfops.services.rules.fertilizer import FertilizerBlockRule
from turfops.services.rules.fungicide import FungicideRiskRule
from turfops.services.rules.grub_control import GrubControlRule
from turfops.services.rules.heat_stress import HeatStressForecastRule
from turfops.services.rules.irrigation_forecast import IrrigationForecastRule
from turfops.services.rules.pre_emergent import PreEmergentRule
from turfops.services.rules.rain_delay import RainDelayRule
from turfops.services.rules.spring_nitrogen import SpringNitrogenRule

__all__ = [
    "DEFAULT_RULE_TYPES",
    "ApplicationWindowRule",
    "DiseasePressureForecastRule",
    "FallFertilizationRule",
    "FallOverseedingRule",
    "FertilizerBlockRule",
    "FungicideRiskRule",
    "GrubControlRule",
    "HeatStressForecastRule",
    "IrrigationForecastRule",
    "PreEmergentRule",
    "RainDelayRule",
    "Rule",
    "RulesEngine",
    "SpringNitrogenRule",
    "build_default_rules",
]
