"""Centralized exception hierarchy for TurfOps.

All domain and service exceptions inherit from :class:`TurfOpsError` so that
callers can catch a single base class when they need a broad safety net, yet
still match on specific subclasses where narrower handling is appropriate.

Blueprint-level error handling (see ``turfops/utils/http.safe_route``) maps
these to the correct HTTP status codes automatically.

Missing or insufficient environmental data is never an error: rules simply
return no recommendation.

Hierarchy
---------
::

    TurfOpsError (base - maps to 500)
    ├── ValidationError          (400 - bad input from caller)
    ├── NotFoundError            (404 - entity does not exist)
    │   └── RuleNotFoundError    (404 - unknown rule id)
    └── ConfigurationError       (500 - invalid config / rule registry)
"""

from __future__ import annotations


class TurfOpsError(Exception):
    """Base exception for all TurfOps application errors.

    Parameters
    ----------
    message:
        Human-readable description.
    detail:
        Optional machine-readable context dict attached to the error for
        structured logging.
    """

    http_status: int = 500

    def __init__(self, message: str = "", *, detail: dict | None = None) -> None:
        super().__init__(message)
        self.detail = detail or {}


# ── Client errors (4xx) ──────────────────────────────────────────────


class ValidationError(TurfOpsError):
    """Caller supplied invalid or incomplete input (HTTP 400)."""

    http_status: int = 400


class NotFoundError(TurfOpsError):
    """Requested entity does not exist (HTTP 404)."""

    http_status: int = 404


class RuleNotFoundError(NotFoundError):
    """No rule with the requested id is registered (HTTP 404)."""

    def __init__(self, rule_id: str) -> None:
        super().__init__(f"Unknown rule: {rule_id}", detail={"rule_id": rule_id})
        self.rule_id = rule_id


# ── Server errors (5xx) ──────────────────────────────────────────────


class ConfigurationError(TurfOpsError):
    """Missing or invalid application configuration (HTTP 500)."""

    http_status: int = 500
