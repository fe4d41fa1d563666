"""
Single-pass galaxy generation.

Layout always completes before realms are generated, and both steps draw from
one RandomSource owned by the pass.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

import structlog

from ..config.options import GenerationConfig
from .galaxy_generator import GalaxyGenerator
from .galaxy_map import GalaxyMap
from .name_generator import NameGenerator
from .realm_generator import RealmGenerator
from .seeded_random import RandomSource, RandomState
from .territory import TerritoryLedger

logger = structlog.get_logger()


@dataclass
class GenerationResult:
    """Output of one generation pass."""

    config: GenerationConfig
    galaxy_map: GalaxyMap
    ledger: TerritoryLedger
    realm_ids: List[str]
    random_state: RandomState

    def to_dict(self) -> dict:
        data = self.galaxy_map.to_dict()
        data["planets"] = [
            planet.model_dump(mode="json") for planet in self.galaxy_map.planets.values()
        ]
        data["lanes"] = [list(lane) for lane in self.galaxy_map.get_lanes()]
        data.update(self.ledger.to_dict())
        data["random_state"] = self.random_state.model_dump()
        return data


def generate_galaxy(
    config: GenerationConfig,
    random_source: Optional[RandomSource] = None,
    name_generator: Optional[NameGenerator] = None,
) -> GenerationResult:
    """
    Run layout then realm generation for a configuration.

    Args:
        config: Seed and generation options
        random_source: Source to continue from; a fresh one seeded from
            config.seed is used if omitted
        name_generator: Name generator drawing from the same random source

    Returns:
        GenerationResult with the map, claims and final random state
    """
    random_source = random_source or RandomSource(config.seed)
    name_generator = name_generator or NameGenerator(random_source)

    galaxy_map = GalaxyGenerator(random_source, name_generator, config.galaxy).generate()

    realm_generator = RealmGenerator(name_generator, config.realms)
    realm_ids = realm_generator.generate(
        galaxy_map, random_source, founding_year=config.founding_year
    )

    logger.info(
        "Generation pass complete",
        seed=config.seed,
        planets=galaxy_map.planet_count,
        realms=len(realm_ids),
        draws=random_source.call_count,
    )

    return GenerationResult(
        config=config,
        galaxy_map=galaxy_map,
        ledger=realm_generator.ledger,
        realm_ids=realm_ids,
        random_state=random_source.get_state(),
    )
