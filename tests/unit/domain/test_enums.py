"""Unit tests for the tolerant vocabulary parsers and enum metadata."""

import pytest

from turfops.enums import (
    ApplicationType,
    DataSource,
    GrassType,
    IrrigationType,
    RecommendationCategory,
    Severity,
    SoilType,
    Trend,
    WeatherCondition,
)


class TestGrassType:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("tall_fescue", GrassType.TALL_FESCUE),
            ("Tall Fescue", GrassType.TALL_FESCUE),
            ("TTTF", GrassType.TALL_FESCUE),
            ("kbg", GrassType.KENTUCKY_BLUEGRASS),
            ("Perennial-Ryegrass", GrassType.PERENNIAL_RYEGRASS),
            ("st. augustine", GrassType.ST_AUGUSTINE),
        ],
    )
    def test_parse(self, text, expected):
        assert GrassType.parse(text) is expected

    def test_parse_unknown(self):
        assert GrassType.parse("astroturf") is None
        assert GrassType.parse("") is None

    def test_cool_season_split(self):
        assert GrassType.FINE_FESCUE.is_cool_season
        assert not GrassType.BERMUDA.is_cool_season
        assert not GrassType.MIXED.is_cool_season


class TestOtherVocabularies:
    def test_soil_type(self):
        assert SoilType.parse("Clay Loam") is SoilType.CLAY_LOAM
        assert SoilType.parse("gravel") is None
        assert SoilType.SANDY_LOAM.label == "Sandy Loam"

    def test_irrigation_type(self):
        assert IrrigationType.parse("in-ground") is IrrigationType.IN_GROUND
        assert IrrigationType.parse("Sprinkler") is IrrigationType.HOSE
        assert IrrigationType.parse("none") is IrrigationType.NONE
        assert IrrigationType.HOSE.label == "Hose/Sprinkler"

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("pre-emergent", ApplicationType.PRE_EMERGENT),
            ("PreEmergent", ApplicationType.PRE_EMERGENT),
            ("Grub Control", ApplicationType.GRUB_CONTROL),
            ("wetting", ApplicationType.WETTING_AGENT),
            ("FERTILIZER", ApplicationType.FERTILIZER),
        ],
    )
    def test_application_type(self, text, expected):
        assert ApplicationType.parse(text) is expected

    def test_application_type_unknown(self):
        assert ApplicationType.parse("compost tea") is None


class TestWeatherCondition:
    @pytest.mark.parametrize(
        "code, expected",
        [
            (211, WeatherCondition.THUNDERSTORM),
            (301, WeatherCondition.DRIZZLE),
            (502, WeatherCondition.RAIN),
            (601, WeatherCondition.SNOW),
            (701, WeatherCondition.MIST),
            (741, WeatherCondition.FOG),
            (800, WeatherCondition.CLEAR),
            (803, WeatherCondition.CLOUDS),
            (771, WeatherCondition.OTHER),
        ],
    )
    def test_from_owm_id(self, code, expected):
        assert WeatherCondition.from_owm_id(code) is expected

    def test_precipitation_flag(self):
        assert WeatherCondition.DRIZZLE.has_precipitation
        assert not WeatherCondition.FOG.has_precipitation

    def test_labels(self):
        assert WeatherCondition.CLOUDS.label == "Cloudy"
        assert WeatherCondition.RAIN.label == "Rain"


class TestCommonEnums:
    def test_severity_ordering(self):
        assert Severity.INFO < Severity.ADVISORY < Severity.WARNING < Severity.CRITICAL
        assert max([Severity.ADVISORY, Severity.CRITICAL, Severity.INFO]) is Severity.CRITICAL
        assert Severity.WARNING.label == "Warning"

    def test_labels(self):
        assert Trend.RISING.label == "↑ Rising"
        assert Trend.UNKNOWN.label == "? Unknown"
        assert DataSource.HOME_ASSISTANT.label == "Patio Sensor"
        assert RecommendationCategory.APPLICATION_TIMING.label == "Application Timing"

    def test_str_is_value(self):
        assert str(Severity.CRITICAL) == "critical"
        assert str(GrassType.ZOYSIA) == "zoysia"
