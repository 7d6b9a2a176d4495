from __future__ import annotations

import logging
from typing import Any

from flask import Flask, request
from werkzeug.exceptions import HTTPException

from turfops.blueprints.api import recommendations_api
from turfops.config import load_config, setup_logging
from turfops.services.rules import RulesEngine

logger = logging.getLogger(__name__)


def create_app(config_overrides: dict[str, Any] | None = None) -> Flask:
    config = load_config()
    # Keys that are not AppConfig fields go straight to Flask (e.g. TESTING)
    flask_overrides: dict[str, Any] = {}
    if config_overrides:
        for key, value in config_overrides.items():
            if hasattr(config, key):
                setattr(config, key, value)
            elif hasattr(config, key.lower()):
                setattr(config, key.lower(), value)
            else:
                flask_overrides[key] = value
        config.__post_init__()

    setup_logging(debug=config.DEBUG, level=config.effective_log_level, log_dir=config.log_dir)

    flask_app = Flask(__name__)
    flask_app.config.update(config.as_flask_config())
    flask_app.config.update(flask_overrides)
    flask_app.config["TURFOPS_CONFIG"] = config
    flask_app.config["RULES_ENGINE"] = RulesEngine.default(
        default_lawn_sqft=config.default_lawn_sqft,
        max_workers=config.rule_workers,
    )

    # Global JSON error handler for /api/ routes; domain exceptions carry
    # their own ``http_status``.
    @flask_app.errorhandler(Exception)
    def _handle_unhandled(exc):
        if not request.path.startswith("/api/"):
            raise exc
        from turfops.domain.exceptions import TurfOpsError
        from turfops.utils.http import error_response, safe_error

        if isinstance(exc, HTTPException):
            status = int(exc.code or 500)
            if status >= 500:
                return safe_error(exc, status, context="http-exception")
            return error_response(exc.description or "Request failed", status)

        if isinstance(exc, TurfOpsError):
            status = exc.http_status
            if status >= 500:
                return safe_error(exc, status, context=type(exc).__name__)
            return error_response(str(exc) or "Request failed", status)

        return safe_error(exc, 500, context="unhandled")

    flask_app.register_blueprint(recommendations_api, url_prefix="/api/recommendations")

    logger.info(
        "TurfOps app created (env=%s, rules=%d, workers=%d)",
        config.environment,
        len(flask_app.config["RULES_ENGINE"]),
        config.rule_workers,
    )
    return flask_app
