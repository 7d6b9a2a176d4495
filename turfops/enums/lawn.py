"""
Lawn-related Enumerations
==========================

Closed vocabularies for lawn profiles, application history and forecast
conditions. Each enum offers a tolerant ``parse`` classmethod that accepts
enum names, values and display labels in any case.
"""

from __future__ import annotations

import re
from enum import Enum


def _normalize(text: str) -> str:
    return re.sub(r"[\s\-_./]", "", str(text).strip().lower())


class GrassType(str, Enum):
    """Turfgrass species of a lawn profile"""

    KENTUCKY_BLUEGRASS = "kentucky_bluegrass"
    TALL_FESCUE = "tall_fescue"
    PERENNIAL_RYEGRASS = "perennial_ryegrass"
    FINE_FESCUE = "fine_fescue"
    BERMUDA = "bermuda"
    ZOYSIA = "zoysia"
    ST_AUGUSTINE = "st_augustine"
    MIXED = "mixed"

    @property
    def label(self) -> str:
        return _GRASS_LABELS[self]

    @property
    def is_cool_season(self) -> bool:
        return self in _COOL_SEASON

    @classmethod
    def parse(cls, value: str) -> GrassType | None:
        """Resolve a grass type from free text ("tall fescue", "TTTF", "kbg")."""
        if isinstance(value, cls):
            return value
        key = _normalize(value)
        if not key:
            return None
        for member in cls:
            if key in (_normalize(member.value), _normalize(member.label)):
                return member
        return _GRASS_ALIASES.get(key)

    def __str__(self):
        return self.value


_GRASS_LABELS = {
    GrassType.KENTUCKY_BLUEGRASS: "Kentucky Bluegrass",
    GrassType.TALL_FESCUE: "Tall Fescue",
    GrassType.PERENNIAL_RYEGRASS: "Perennial Ryegrass",
    GrassType.FINE_FESCUE: "Fine Fescue",
    GrassType.BERMUDA: "Bermuda",
    GrassType.ZOYSIA: "Zoysia",
    GrassType.ST_AUGUSTINE: "St. Augustine",
    GrassType.MIXED: "Mixed",
}

_COOL_SEASON = frozenset(
    {
        GrassType.KENTUCKY_BLUEGRASS,
        GrassType.TALL_FESCUE,
        GrassType.PERENNIAL_RYEGRASS,
        GrassType.FINE_FESCUE,
    }
)

_GRASS_ALIASES = {
    "kbg": GrassType.KENTUCKY_BLUEGRASS,
    "tttf": GrassType.TALL_FESCUE,
    "prg": GrassType.PERENNIAL_RYEGRASS,
}


class SoilType(str, Enum):
    """Soil texture classes"""

    CLAY = "clay"
    LOAM = "loam"
    SANDY = "sandy"
    SILT_LOAM = "silt_loam"
    CLAY_LOAM = "clay_loam"
    SANDY_LOAM = "sandy_loam"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()

    @classmethod
    def parse(cls, value: str) -> SoilType | None:
        if isinstance(value, cls):
            return value
        key = _normalize(value)
        for member in cls:
            if key and key == _normalize(member.value):
                return member
        return None

    def __str__(self):
        return self.value


class IrrigationType(str, Enum):
    """How the lawn is watered"""

    IN_GROUND = "in_ground"
    HOSE = "hose"
    NONE = "none"

    @property
    def label(self) -> str:
        return _IRRIGATION_LABELS[self]

    @classmethod
    def parse(cls, value: str) -> IrrigationType | None:
        if isinstance(value, cls):
            return value
        key = _normalize(value)
        if not key:
            return None
        for member in cls:
            if key in (_normalize(member.value), _normalize(member.label)):
                return member
        if key == "sprinkler":
            return cls.HOSE
        return None

    def __str__(self):
        return self.value


_IRRIGATION_LABELS = {
    IrrigationType.IN_GROUND: "In-Ground",
    IrrigationType.HOSE: "Hose/Sprinkler",
    IrrigationType.NONE: "None",
}


class ApplicationType(str, Enum):
    """Lawn-care actions recorded in the application history"""

    PRE_EMERGENT = "pre_emergent"
    POST_EMERGENT = "post_emergent"
    FERTILIZER = "fertilizer"
    FUNGICIDE = "fungicide"
    INSECTICIDE = "insecticide"
    GRUB_CONTROL = "grub_control"
    OVERSEED = "overseed"
    AERATION = "aeration"
    DETHATCHING = "dethatching"
    LIME = "lime"
    SULFUR = "sulfur"
    WETTING_AGENT = "wetting_agent"
    OTHER = "other"

    @property
    def label(self) -> str:
        return _APPLICATION_LABELS[self]

    @classmethod
    def parse(cls, value: str) -> ApplicationType | None:
        """Resolve an application type ("pre-emergent", "PreEmergent", "wetting")."""
        if isinstance(value, cls):
            return value
        key = _normalize(value)
        if not key:
            return None
        for member in cls:
            if key in (_normalize(member.value), _normalize(member.label)):
                return member
        if key == "wetting":
            return cls.WETTING_AGENT
        return None

    def __str__(self):
        return self.value


_APPLICATION_LABELS = {
    ApplicationType.PRE_EMERGENT: "Pre-Emergent",
    ApplicationType.POST_EMERGENT: "Post-Emergent",
    ApplicationType.FERTILIZER: "Fertilizer",
    ApplicationType.FUNGICIDE: "Fungicide",
    ApplicationType.INSECTICIDE: "Insecticide",
    ApplicationType.GRUB_CONTROL: "Grub Control",
    ApplicationType.OVERSEED: "Overseed",
    ApplicationType.AERATION: "Aeration",
    ApplicationType.DETHATCHING: "Dethatching",
    ApplicationType.LIME: "Lime",
    ApplicationType.SULFUR: "Sulfur",
    ApplicationType.WETTING_AGENT: "Wetting Agent",
    ApplicationType.OTHER: "Other",
}


class WeatherCondition(str, Enum):
    """Forecast weather categories (OpenWeatherMap condition groups)"""

    CLEAR = "clear"
    CLOUDS = "clouds"
    RAIN = "rain"
    DRIZZLE = "drizzle"
    THUNDERSTORM = "thunderstorm"
    SNOW = "snow"
    MIST = "mist"
    FOG = "fog"
    OTHER = "other"

    @classmethod
    def from_owm_id(cls, condition_id: int) -> WeatherCondition:
        """Map an OpenWeatherMap condition code to a category."""
        if 200 <= condition_id <= 232:
            return cls.THUNDERSTORM
        if 300 <= condition_id <= 321:
            return cls.DRIZZLE
        if 500 <= condition_id <= 531:
            return cls.RAIN
        if 600 <= condition_id <= 622:
            return cls.SNOW
        if condition_id == 701:
            return cls.MIST
        if condition_id == 741:
            return cls.FOG
        if condition_id == 800:
            return cls.CLEAR
        if 801 <= condition_id <= 804:
            return cls.CLOUDS
        return cls.OTHER

    @property
    def label(self) -> str:
        return "Cloudy" if self is WeatherCondition.CLOUDS else self.value.capitalize()

    @property
    def symbol(self) -> str:
        return _CONDITION_SYMBOLS[self]

    @property
    def has_precipitation(self) -> bool:
        return self in (
            WeatherCondition.RAIN,
            WeatherCondition.DRIZZLE,
            WeatherCondition.THUNDERSTORM,
            WeatherCondition.SNOW,
        )

    def __str__(self):
        return self.value


_CONDITION_SYMBOLS = {
    WeatherCondition.CLEAR: "☀",
    WeatherCondition.CLOUDS: "☁",
    WeatherCondition.RAIN: "🌧",
    WeatherCondition.DRIZZLE: "🌦",
    WeatherCondition.THUNDERSTORM: "⛈",
    WeatherCondition.SNOW: "❄",
    WeatherCondition.MIST: "🌫",
    WeatherCondition.FOG: "🌫",
    WeatherCondition.OTHER: "?",
}
