"""
Generation options for galaxy layout and realm partitioning.

These models validate configuration at construction time so that the
generators never run with impossible parameters.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


class SpatialDistribution(str, Enum):
    """How seed planets are spread across the galaxy."""

    RANDOM = "random"
    DISTRIBUTED = "distributed"
    SECTORED = "sectored"


class GalaxyGenOptions(BaseModel):
    """Galaxy layout options."""

    model_config = ConfigDict(frozen=True)

    sector_count: int = Field(default=10, gt=0, description="Number of sectors")
    galaxy_radius: float = Field(
        default=50.0, gt=0, allow_inf_nan=False, description="Galaxy radius in light years"
    )
    planets_per_sector: int = Field(default=6, ge=0, description="Planets chained per sector")
    continents_per_planet: int = Field(
        default=0, ge=0, description="Named continents generated on each planet"
    )


class RealmOptions(BaseModel):
    """Realm generation options."""

    model_config = ConfigDict(frozen=True)

    realm_count: int = Field(default=6, ge=0, description="Target number of realms")
    min_planets_per_realm: int = Field(default=3, description="Minimum planets per realm")
    max_planets_per_realm: int = Field(default=5, description="Maximum planets per realm")
    ensure_player_realm: bool = Field(
        default=False, description="Reserved for the calling layer; not enforced"
    )
    spatial_distribution: SpatialDistribution = Field(default=SpatialDistribution.RANDOM)

    @model_validator(mode="after")
    def _check_bounds(self) -> RealmOptions:
        if self.min_planets_per_realm < 1:
            raise ValueError("min_planets_per_realm must be at least 1.")
        if self.max_planets_per_realm < self.min_planets_per_realm:
            raise ValueError("max_planets_per_realm must be >= min_planets_per_realm.")
        return self


class GenerationConfig(BaseModel):
    """Everything needed to reproduce one generation pass."""

    seed: str = Field(min_length=1, description="Random seed string")
    galaxy: GalaxyGenOptions = Field(default_factory=GalaxyGenOptions)
    realms: RealmOptions = Field(default_factory=RealmOptions)
    founding_year: int = Field(default=0, description="Founding year stamped on realms")

    @classmethod
    def from_json_file(cls, path: Union[str, Path]) -> GenerationConfig:
        """Load and validate a configuration file."""
        return cls.model_validate_json(Path(path).read_text(encoding="utf-8"))
