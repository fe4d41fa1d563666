"""
Planet nodes of the galaxy graph.

Planets are the nodes of the galactic map. They carry the mutable state that
political and logistical systems read and write (ownership, status,
development), while their identifier and sector never change.
"""

from __future__ import annotations

from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEVELOPMENT_RANGE = (1, 10)
FORTIFICATION_RANGE = (0, 5)


class PlanetStatus(str, Enum):
    """Operational state of a planet."""

    NORMAL = "Normal"
    BESIEGED = "Besieged"
    REBELLIOUS = "Rebellious"
    DEVASTATED = "Devastated"


class ResourceSpecialization(str, Enum):
    """Primary economic or logistical focus of a planet."""

    AGRICULTURE = "Agriculture"
    INDUSTRY = "Industry"
    COMMERCE = "Commerce"
    MILITARY = "Military"


class Continent(BaseModel):
    """A named sub-region of a planet. Opaque to the generation core."""

    name: str = Field(description="Continent name")
    features: List[str] = Field(
        default_factory=list, description="Names of geographical features"
    )


def _clamp(value: float, bounds: tuple) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"level must be a number, got {type(value).__name__}")
    low, high = bounds
    return min(max(int(round(value)), low), high)


class Planet(BaseModel):
    """A planet node in the galaxy graph."""

    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(min_length=1, frozen=True, description="Unique node identifier")
    name: str = Field(min_length=1, description="Display name")
    sector_id: str = Field(
        min_length=1, frozen=True, description="Identifier of the owning sector"
    )
    ownership: str = Field(default="", description="Controlling faction or realm")
    status: PlanetStatus = Field(default=PlanetStatus.NORMAL)
    development_level: int = Field(default=1, description="Infrastructure (1-10)")
    fortification_level: int = Field(default=0, description="Defences (0-5)")
    resource_specialization: ResourceSpecialization = Field(
        default=ResourceSpecialization.AGRICULTURE
    )
    continents: List[Continent] = Field(default_factory=list)

    @field_validator("development_level", mode="before")
    @classmethod
    def _clamp_development(cls, value: float) -> int:
        return _clamp(value, DEVELOPMENT_RANGE)

    @field_validator("fortification_level", mode="before")
    @classmethod
    def _clamp_fortification(cls, value: float) -> int:
        return _clamp(value, FORTIFICATION_RANGE)

    def add_continent(self, continent: Continent) -> None:
        """Attach a continent to the planet."""
        self.continents.append(continent)
