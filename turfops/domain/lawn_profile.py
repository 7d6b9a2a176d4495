"""
Lawn Profile
============
Description of the lawn recommendations are computed for.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from turfops.enums import GrassType, IrrigationType, SoilType
from turfops.utils.time import utc_now


@dataclass(frozen=True)
class LawnProfile:
    """
    Immutable lawn profile snapshot.

    Attributes:
        name: Display name of the lawn
        grass_type: Dominant turfgrass species
        usda_zone: USDA hardiness zone, e.g. "7a"
        soil_type: Soil texture (optional)
        lawn_size_sqft: Lawn area in square feet (optional)
        irrigation_type: Watering method (optional)
    """

    name: str = "Main Lawn"
    grass_type: GrassType = GrassType.TALL_FESCUE
    usda_zone: str = "7a"
    soil_type: SoilType | None = None
    lawn_size_sqft: float | None = None
    irrigation_type: IrrigationType | None = None
    id: int | None = None
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError("Lawn profile name must not be empty")
        if self.lawn_size_sqft is not None and self.lawn_size_sqft <= 0:
            raise ValueError(f"Lawn size must be positive, got {self.lawn_size_sqft}")

    @property
    def is_cool_season(self) -> bool:
        return self.grass_type.is_cool_season

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "grass_type": self.grass_type.value,
            "usda_zone": self.usda_zone,
            "soil_type": self.soil_type.value if self.soil_type else None,
            "lawn_size_sqft": self.lawn_size_sqft,
            "irrigation_type": self.irrigation_type.value if self.irrigation_type else None,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }
