"""Recommendation API endpoints.

Runs the agronomic rules engine against a caller-supplied lawn profile,
application history and environmental summary. Nothing is persisted.
"""

from __future__ import annotations

import logging

from flask import Blueprint, Response, current_app, request
from pydantic import ValidationError

from turfops.domain.exceptions import ConfigurationError
from turfops.domain.exceptions import ValidationError as DomainValidationError
from turfops.schemas import EvaluateRequest, EvaluateResponse, RuleInfo, RuleListResponse
from turfops.services.rules import RulesEngine
from turfops.utils.http import error_response, safe_route, success_response
from turfops.utils.time import ensure_utc, utc_now

logger = logging.getLogger(__name__)

recommendations_api = Blueprint("recommendations_api", __name__)


def get_engine() -> RulesEngine:
    """Rules engine from Flask app config."""
    engine = current_app.config.get("RULES_ENGINE")
    if engine is None:
        raise ConfigurationError("RulesEngine not found in app config")
    return engine


@recommendations_api.get("/rules")
@safe_route("Failed to list rules")
def list_rules() -> Response:
    """List registered rules in evaluation order."""
    engine = get_engine()
    body = RuleListResponse(rules=[RuleInfo(id=rule_id, name=name) for rule_id, name in engine.list_rules()])
    return success_response(body.model_dump())


@recommendations_api.post("/evaluate")
@safe_route("Failed to evaluate recommendations")
def evaluate() -> Response:
    """
    Evaluate recommendations.

    Request body:
    - profile: Lawn profile (defaults to a tall fescue lawn)
    - history: Application history entries
    - summary: Environmental summary, or raw ``readings`` to summarize
    - now: Optional evaluation time (ISO-8601)
    - rule_id: Optional single rule to run
    """
    raw = request.get_json(silent=True)
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        return error_response("Request body must be a JSON object", 400)

    try:
        body = EvaluateRequest.model_validate(raw)
    except ValidationError as ve:
        return error_response(
            "Invalid request",
            400,
            details=ve.errors(include_url=False, include_context=False),
        )

    now = ensure_utc(body.now) if body.now else utc_now()
    try:
        profile = body.profile.to_domain()
        history = [entry.to_domain() for entry in body.history]
        summary = body.summary.to_domain(now=now)
    except ValueError as exc:
        raise DomainValidationError(str(exc)) from exc

    engine = get_engine()
    if body.rule_id:
        result = engine.evaluate_one(body.rule_id, summary, profile, history, now=now)
        recommendations = [result] if result is not None else []
    else:
        recommendations = engine.evaluate_all(summary, profile, history, now=now)

    logger.info(
        "Evaluated %s for '%s': %d recommendation(s)",
        body.rule_id or "all rules",
        profile.name,
        len(recommendations),
    )
    response = EvaluateResponse(
        recommendations=[rec.to_dict() for rec in recommendations],
        count=len(recommendations),
    )
    return success_response(response.model_dump())
