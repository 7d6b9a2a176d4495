"""
Rules Engine
============
Fixed, ordered registry of agronomic rules.

``evaluate_all`` runs every rule once and returns the recommendations in
registry order. A rule that raises is logged with its traceback and counted
as "no recommendation"; the pass continues with the remaining rules.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import Iterable, Sequence

from turfops.domain.application import Application
from turfops.domain.environmental import EnvironmentalSummary
from turfops.domain.exceptions import ConfigurationError, RuleNotFoundError
from turfops.domain.lawn_profile import LawnProfile
from turfops.domain.recommendation import Recommendation
from turfops.services.rules.application_window import ApplicationWindowRule
from turfops.services.rules.base import DEFAULT_LAWN_SQFT, Rule
from turfops.services.rules.disease_pressure import DiseasePressureForecastRule
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
from turfops.utils.time import ensure_utc, utc_now

logger = logging.getLogger(__name__)

DEFAULT_RULE_TYPES: tuple[type[Rule], ...] = (
    PreEmergentRule,
    SpringNitrogenRule,
    GrubControlRule,
    FertilizerBlockRule,
    FungicideRiskRule,
    FallOverseedingRule,
    FallFertilizationRule,
    RainDelayRule,
    IrrigationForecastRule,
    HeatStressForecastRule,
    ApplicationWindowRule,
    DiseasePressureForecastRule,
)


def build_default_rules(*, default_lawn_sqft: float = DEFAULT_LAWN_SQFT) -> list[Rule]:
    """Instantiate the standard rule set in registry order."""
    return [rule_type(default_lawn_sqft=default_lawn_sqft) for rule_type in DEFAULT_RULE_TYPES]


class RulesEngine:
    """
    Immutable ordered rule registry.

    Args:
        rules: Rules in evaluation order; ids must be unique
        max_workers: Default thread count for :meth:`evaluate_all`
            (1 evaluates sequentially on the calling thread)
    """

    def __init__(self, rules: Iterable[Rule], *, max_workers: int = 1) -> None:
        self._rules: tuple[Rule, ...] = tuple(rules)
        if max_workers < 1:
            raise ConfigurationError(f"max_workers must be at least 1, got {max_workers}")
        self._max_workers = max_workers

        seen: set[str] = set()
        for rule in self._rules:
            if not rule.id:
                raise ConfigurationError(f"Rule {type(rule).__name__} has no id")
            if rule.id in seen:
                raise ConfigurationError(f"Duplicate rule id: {rule.id}", detail={"rule_id": rule.id})
            seen.add(rule.id)
        self._by_id = {rule.id: rule for rule in self._rules}

        logger.debug("Rules engine initialized with %d rules", len(self._rules))

    @classmethod
    def default(cls, *, default_lawn_sqft: float = DEFAULT_LAWN_SQFT, max_workers: int = 1) -> RulesEngine:
        return cls(build_default_rules(default_lawn_sqft=default_lawn_sqft), max_workers=max_workers)

    @property
    def rules(self) -> tuple[Rule, ...]:
        return self._rules

    def __len__(self) -> int:
        return len(self._rules)

    def list_rules(self) -> list[tuple[str, str]]:
        """(id, name) pairs in registry order."""
        return [(rule.id, rule.name) for rule in self._rules]

    def get_rule(self, rule_id: str) -> Rule:
        try:
            return self._by_id[rule_id]
        except KeyError:
            raise RuleNotFoundError(rule_id) from None

    def evaluate_all(
        self,
        env: EnvironmentalSummary,
        profile: LawnProfile,
        history: Sequence[Application],
        now: datetime | None = None,
        max_workers: int | None = None,
    ) -> list[Recommendation]:
        """
        Run every rule once.

        Returns:
            Non-empty results in registry order, regardless of worker count
        """
        now = ensure_utc(now) if now else utc_now()
        history = tuple(history)
        workers = max_workers if max_workers is not None else self._max_workers

        if workers <= 1 or len(self._rules) <= 1:
            results = [self._run(rule, env, profile, history, now) for rule in self._rules]
        else:
            with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="turfops-rule") as executor:
                futures = [executor.submit(self._run, rule, env, profile, history, now) for rule in self._rules]
                results = [future.result() for future in futures]

        recommendations = [rec for rec in results if rec is not None]
        logger.debug(
            "Evaluated %d rules for '%s' at %s: %d recommendation(s)",
            len(self._rules),
            profile.name,
            now.isoformat(),
            len(recommendations),
        )
        return recommendations

    def evaluate_one(
        self,
        rule_id: str,
        env: EnvironmentalSummary,
        profile: LawnProfile,
        history: Sequence[Application],
        now: datetime | None = None,
    ) -> Recommendation | None:
        """Run a single rule by id. Raises RuleNotFoundError for unknown ids."""
        rule = self.get_rule(rule_id)
        now = ensure_utc(now) if now else utc_now()
        return self._run(rule, env, profile, tuple(history), now)

    @staticmethod
    def _run(
        rule: Rule,
        env: EnvironmentalSummary,
        profile: LawnProfile,
        history: Sequence[Application],
        now: datetime,
    ) -> Recommendation | None:
        try:
            return rule.evaluate(env, profile, history, now=now)
        except Exception:
            logger.exception("Rule %s failed; skipping", rule.id)
            return None
