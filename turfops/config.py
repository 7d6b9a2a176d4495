"""
Configuration for TurfOps
=========================
Runtime settings loaded from environment variables.
Sets up the logging configuration as well.
"""

import os
from contextlib import suppress
from dataclasses import dataclass, field
from typing import Any

from turfops.domain.exceptions import ConfigurationError

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.lower() in {"1", "true", "t", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"Environment variable {name} must be an integer.") from None


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"Environment variable {name} must be a number.") from None


@dataclass
class AppConfig:
    """Runtime configuration loaded from environment variables."""

    environment: str = field(default_factory=lambda: os.getenv("TURFOPS_ENV", "development"))
    DEBUG: bool = field(default_factory=lambda: _env_bool("TURFOPS_DEBUG", False))
    log_level: str = field(default_factory=lambda: os.getenv("TURFOPS_LOG_LEVEL", "").upper())
    log_dir: str = field(default_factory=lambda: os.getenv("TURFOPS_LOG_DIR", "logs"))

    # Rules run sequentially on the request thread when 1
    rule_workers: int = field(default_factory=lambda: _env_int("TURFOPS_RULE_WORKERS", 1))
    # Used for product amounts when a profile has no lawn size
    default_lawn_sqft: float = field(default_factory=lambda: _env_float("TURFOPS_DEFAULT_LAWN_SQFT", 5000.0))

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.rule_workers < 1:
            raise ConfigurationError(f"TURFOPS_RULE_WORKERS must be at least 1, got {self.rule_workers}")
        if self.default_lawn_sqft <= 0:
            raise ConfigurationError(f"TURFOPS_DEFAULT_LAWN_SQFT must be positive, got {self.default_lawn_sqft}")
        if self.log_level and self.log_level not in _LOG_LEVELS:
            raise ConfigurationError(f"TURFOPS_LOG_LEVEL must be one of {sorted(_LOG_LEVELS)}, got {self.log_level}")

    @property
    def effective_log_level(self) -> str:
        if self.log_level:
            return self.log_level
        return "DEBUG" if self.DEBUG else "INFO"

    def as_flask_config(self) -> dict[str, Any]:
        """Render configuration values for Flask application."""
        return {
            "ENV": self.environment,
            "DEBUG": self.DEBUG,
            "RULE_WORKERS": self.rule_workers,
            "DEFAULT_LAWN_SQFT": self.default_lawn_sqft,
        }


def setup_logging(debug: bool = False, *, level: str | None = None, log_dir: str = "logs") -> None:
    """Setup logging configuration."""
    import logging
    import sys
    from logging.handlers import RotatingFileHandler

    log_level = logging.getLevelName(level) if level else (logging.DEBUG if debug else logging.INFO)

    root = logging.getLogger()
    root.setLevel(log_level)

    # Keep existing handlers but avoid adding duplicates when create_app is called multiple times
    has_console = any(getattr(h, "name", "") == "turfops_console" for h in root.handlers)
    has_file = any(getattr(h, "name", "") == "turfops_file" for h in root.handlers)
    added_handler = False

    # Console handler (force UTF-8; recommendation text carries °F)
    stream = sys.stdout
    with suppress(AttributeError, ValueError):
        stream.reconfigure(encoding="utf-8", errors="replace")
    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    if not has_console:
        console_handler = logging.StreamHandler(stream=stream)
        console_handler.name = "turfops_console"
        console_handler.setLevel(log_level)
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)
        added_handler = True

    if not has_file:
        os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(
            os.path.join(log_dir, "turfops.log"),
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.name = "turfops_file"
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
        added_handler = True

    for handler in root.handlers:
        if getattr(handler, "name", "") in {"turfops_console", "turfops_file"}:
            handler.setLevel(log_level)

    if added_handler:
        root.info(f"Logging initialized at level: {logging.getLevelName(log_level)}")

    if _env_bool("TURFOPS_SILENCE_WERKZEUG", True):
        logging.getLogger("werkzeug").setLevel(logging.WARNING)


def load_config() -> AppConfig:
    """Helper for callers to load and validate configuration."""
    return AppConfig()
