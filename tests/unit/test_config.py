"""
Unit tests for turfops.config.

Environment-driven settings, validation and logging setup.
"""

import logging

import pytest

from turfops.config import AppConfig, _env_bool, _env_float, _env_int, load_config, setup_logging
from turfops.domain.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in (
        "TURFOPS_ENV",
        "TURFOPS_DEBUG",
        "TURFOPS_LOG_LEVEL",
        "TURFOPS_LOG_DIR",
        "TURFOPS_RULE_WORKERS",
        "TURFOPS_DEFAULT_LAWN_SQFT",
    ):
        monkeypatch.delenv(name, raising=False)


class TestEnvHelpers:
    @pytest.mark.parametrize("raw", ["1", "true", "T", "yes", "on"])
    def test_truthy(self, monkeypatch, raw):
        monkeypatch.setenv("TURFOPS_TEST_FLAG", raw)
        assert _env_bool("TURFOPS_TEST_FLAG") is True

    def test_falsy_and_default(self, monkeypatch):
        assert _env_bool("TURFOPS_TEST_FLAG", True) is True
        monkeypatch.setenv("TURFOPS_TEST_FLAG", "off")
        assert _env_bool("TURFOPS_TEST_FLAG", True) is False

    def test_int_parse_error(self, monkeypatch):
        monkeypatch.setenv("TURFOPS_TEST_INT", "four")
        with pytest.raises(ValueError, match="TURFOPS_TEST_INT must be an integer"):
            _env_int("TURFOPS_TEST_INT", 1)

    def test_float(self, monkeypatch):
        assert _env_float("TURFOPS_TEST_FLOAT", 2.5) == 2.5
        monkeypatch.setenv("TURFOPS_TEST_FLOAT", "7500.5")
        assert _env_float("TURFOPS_TEST_FLOAT", 2.5) == 7500.5
        monkeypatch.setenv("TURFOPS_TEST_FLOAT", "lots")
        with pytest.raises(ValueError, match="must be a number"):
            _env_float("TURFOPS_TEST_FLOAT", 2.5)


class TestAppConfig:
    def test_defaults(self):
        config = load_config()
        assert config.environment == "development"
        assert config.DEBUG is False
        assert config.rule_workers == 1
        assert config.default_lawn_sqft == 5000.0
        assert config.effective_log_level == "INFO"

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("TURFOPS_ENV", "production")
        monkeypatch.setenv("TURFOPS_DEBUG", "1")
        monkeypatch.setenv("TURFOPS_RULE_WORKERS", "4")
        monkeypatch.setenv("TURFOPS_DEFAULT_LAWN_SQFT", "8000")
        monkeypatch.setenv("TURFOPS_LOG_LEVEL", "warning")
        config = AppConfig()
        assert config.environment == "production"
        assert config.DEBUG is True
        assert config.rule_workers == 4
        assert config.default_lawn_sqft == 8000.0
        assert config.effective_log_level == "WARNING"

    def test_debug_log_level(self, monkeypatch):
        monkeypatch.setenv("TURFOPS_DEBUG", "true")
        assert AppConfig().effective_log_level == "DEBUG"

    @pytest.mark.parametrize(
        "name, value",
        [
            ("TURFOPS_RULE_WORKERS", "0"),
            ("TURFOPS_DEFAULT_LAWN_SQFT", "-10"),
            ("TURFOPS_LOG_LEVEL", "LOUD"),
        ],
    )
    def test_invalid_values(self, monkeypatch, name, value):
        monkeypatch.setenv(name, value)
        with pytest.raises(ConfigurationError):
            AppConfig()

    def test_flask_config(self):
        flask_config = AppConfig(rule_workers=2).as_flask_config()
        assert flask_config["ENV"] == "development"
        assert flask_config["RULE_WORKERS"] == 2
        assert flask_config["DEFAULT_LAWN_SQFT"] == 5000.0


class TestSetupLogging:
    def test_idempotent_named_handlers(self, tmp_path):
        root = logging.getLogger()
        before = list(root.handlers)
        level = root.level
        try:
            setup_logging(debug=True, log_dir=str(tmp_path))
            setup_logging(debug=True, log_dir=str(tmp_path))
            names = [getattr(h, "name", "") for h in root.handlers]
            assert names.count("turfops_console") == 1
            assert names.count("turfops_file") == 1
            assert logging.getLogger("werkzeug").level == logging.WARNING
        finally:
            for handler in list(root.handlers):
                if handler not in before:
                    root.removeHandler(handler)
                    handler.close()
            root.setLevel(level)


class TestCreateApp:
    def test_overrides_split_between_config_and_flask(self, tmp_path):
        from turfops import create_app

        app = create_app({"log_dir": str(tmp_path), "rule_workers": 2, "TESTING": True, "CUSTOM_FLAG": 1})
        config = app.config["TURFOPS_CONFIG"]
        assert config.rule_workers == 2
        assert app.config["RULE_WORKERS"] == 2
        assert app.config["TESTING"] is True
        assert app.config["CUSTOM_FLAG"] == 1
        assert not hasattr(config, "testing")
        assert not hasattr(config, "custom_flag")

    def test_upper_case_config_field_override(self, tmp_path):
        from turfops import create_app

        app = create_app({"log_dir": str(tmp_path), "RULE_WORKERS": 3})
        assert app.config["TURFOPS_CONFIG"].rule_workers == 3
        assert app.config["RULE_WORKERS"] == 3
