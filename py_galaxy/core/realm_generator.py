"""
Realm generation over a populated galaxy map.

Each realm grows from a seed planet by breadth-first expansion over space
lanes until it reaches a target size drawn from the configured bounds. Planets
are claimed as soon as a realm is accepted, so realms generated in the same
pass never share a Core planet.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Set, Union

import structlog

from ..config.options import RealmOptions, SpatialDistribution
from .galaxy_map import GalaxyMap
from .name_generator import NameGenerator
from .seeded_random import RandomSource
from .territory import ClaimStatus, TerritoryLedger

logger = structlog.get_logger()


class TerritoryError(RuntimeError):
    """Raised when realm bookkeeping meets a planet the galaxy map does not know."""


class RealmPhase(str, Enum):
    """Lifecycle of a realm draft. Phases are only ever entered in this order."""

    UNSEEDED = "unseeded"
    SEEDED = "seeded"
    EXPANDING = "expanding"
    FINALIZED = "finalized"


@dataclass
class RealmDraft:
    """A realm under construction."""

    phase: RealmPhase = RealmPhase.UNSEEDED
    seed_planet_id: Optional[str] = None
    target_size: int = 0
    planet_ids: List[str] = field(default_factory=list)
    realm_id: Optional[str] = None
    history: List[RealmPhase] = field(default_factory=lambda: [RealmPhase.UNSEEDED])

    def advance(self, phase: RealmPhase) -> None:
        """Move to the next phase, recording it in the draft's history."""
        order = list(RealmPhase)
        if order.index(phase) != order.index(self.phase) + 1:
            raise TerritoryError(
                f"Realm draft cannot move from {self.phase.value} to {phase.value}"
            )
        self.phase = phase
        self.history.append(phase)


class RealmGenerator:
    """Partitions a galaxy map into contiguous, non-overlapping realms."""

    def __init__(
        self,
        name_generator: NameGenerator,
        options: Optional[Union[RealmOptions, Dict[str, Any]]] = None,
    ):
        """
        Initialize realm generator.

        Args:
            name_generator: Name generator for realm names
            options: Realm options; a plain dict is validated into RealmOptions

        Raises:
            pydantic.ValidationError: If the options are inconsistent
        """
        if options is None:
            options = RealmOptions()
        elif not isinstance(options, RealmOptions):
            options = RealmOptions.model_validate(options)

        self.name_generator = name_generator
        self.options = options
        self.ledger = TerritoryLedger()
        self.drafts: List[RealmDraft] = []

    def generate(
        self,
        galaxy_map: GalaxyMap,
        random_source: RandomSource,
        ledger: Optional[TerritoryLedger] = None,
        founding_year: int = 0,
    ) -> List[str]:
        """
        Generate realms and record their Core claims.

        Args:
            galaxy_map: Fully laid out galaxy map
            random_source: Random source shared with the layout step
            ledger: Ledger to record realms in; a fresh one is used if omitted
            founding_year: Year stamped on every generated realm

        Returns:
            Identifiers of the realms created, in creation order
        """
        self.ledger = ledger if ledger is not None else TerritoryLedger()
        self.drafts = []

        min_size = self.options.min_planets_per_realm
        max_size = self.options.max_planets_per_realm

        # Planets claimed in an earlier pass are off limits
        claimed: Set[str] = set(self.ledger.claimed_planet_ids())
        unclaimed_count = sum(
            1 for planet_id in galaxy_map.get_planet_ids() if planet_id not in claimed
        )

        max_possible = unclaimed_count // min_size
        realms_to_create = min(self.options.realm_count, max_possible)

        if realms_to_create == 0:
            logger.warning(
                "Not enough planets to create any realms",
                planets=unclaimed_count,
                min_planets_per_realm=min_size,
            )
            return []

        if self.options.spatial_distribution is not SpatialDistribution.RANDOM:
            logger.warning(
                "Spatial distribution not implemented, using random seeds",
                spatial_distribution=self.options.spatial_distribution.value,
            )

        logger.info("Starting realm generation", realms=realms_to_create)
        realm_ids: List[str] = []

        for _ in range(realms_to_create):
            draft = RealmDraft()
            self.drafts.append(draft)

            seed_planet_id = self._select_seed_planet(galaxy_map, claimed, random_source)
            if seed_planet_id is None:
                logger.warning("No eligible seed planets remain", created=len(realm_ids))
                break

            draft.seed_planet_id = seed_planet_id
            draft.advance(RealmPhase.SEEDED)
            draft.target_size = random_source.next_int(min_size, max_size)

            draft.advance(RealmPhase.EXPANDING)
            draft.planet_ids = self._expand_territory(
                seed_planet_id, draft.target_size, galaxy_map, claimed, random_source
            )

            if not draft.planet_ids:
                logger.debug("Seed planet already claimed", seed=seed_planet_id)
                continue

            if len(draft.planet_ids) < min_size:
                logger.debug(
                    "Territory below minimum size",
                    seed=seed_planet_id,
                    size=len(draft.planet_ids),
                )
                continue

            claimed.update(draft.planet_ids)

            realm_name = self.name_generator.generate_syllable_name("REALM")
            draft.realm_id = self._materialize_realm(
                realm_name, draft.planet_ids, founding_year, galaxy_map
            )
            draft.advance(RealmPhase.FINALIZED)
            realm_ids.append(draft.realm_id)

        logger.info("Realm generation complete", realms=len(realm_ids))
        return realm_ids

    def _select_seed_planet(
        self,
        galaxy_map: GalaxyMap,
        claimed: Set[str],
        random_source: RandomSource,
    ) -> Optional[str]:
        """
        Pick a seed uniformly among unclaimed planets that can still grow a
        realm of the minimum size.

        Seeds are drawn one per realm after the previous realm has claimed its
        planets, not sampled up front from every unclaimed planet, so a seed
        never lands on a planet or pocket that could only yield an undersized
        realm.
        """
        eligible = self._eligible_seed_planets(galaxy_map, claimed)
        if not eligible:
            return None
        return random_source.next_choice(eligible)

    def _eligible_seed_planets(self, galaxy_map: GalaxyMap, claimed: Set[str]) -> List[str]:
        """Unclaimed planets lying in an unclaimed component of at least min size."""
        min_size = self.options.min_planets_per_realm
        component_of: Dict[str, int] = {}
        component_sizes: List[int] = []

        for start in galaxy_map.get_planet_ids():
            if start in claimed or start in component_of:
                continue

            component_id = len(component_sizes)
            component_of[start] = component_id
            size = 0
            queue = deque([start])
            while queue:
                current = queue.popleft()
                size += 1
                for neighbour in galaxy_map.get_connected_planets(current):
                    if neighbour not in claimed and neighbour not in component_of:
                        component_of[neighbour] = component_id
                        queue.append(neighbour)
            component_sizes.append(size)

        return [
            planet_id
            for planet_id in galaxy_map.get_planet_ids()
            if planet_id in component_of and component_sizes[component_of[planet_id]] >= min_size
        ]

    def _expand_territory(
        self,
        seed_planet_id: str,
        target_size: int,
        galaxy_map: GalaxyMap,
        claimed: Set[str],
        random_source: RandomSource,
    ) -> List[str]:
        """
        Grow a territory from a seed planet using breadth-first search.

        Returns:
            Planet ids in the order they joined the territory; empty if the
            seed is already claimed
        """
        if seed_planet_id in claimed:
            return []

        territory = [seed_planet_id]
        visited = {seed_planet_id}
        queue = deque([seed_planet_id])

        while queue and len(territory) < target_size:
            current = queue.popleft()
            neighbours = random_source.shuffled(galaxy_map.get_connected_planets(current))

            for neighbour in neighbours:
                if len(territory) >= target_size:
                    break
                if neighbour not in visited and neighbour not in claimed:
                    visited.add(neighbour)
                    territory.append(neighbour)
                    queue.append(neighbour)

        return territory

    def _materialize_realm(
        self,
        name: str,
        planet_ids: List[str],
        founding_year: int,
        galaxy_map: GalaxyMap,
    ) -> str:
        """Create the realm record and its Core claims."""
        missing = [planet_id for planet_id in planet_ids if not galaxy_map.has_planet(planet_id)]
        if missing:
            logger.error("Territory references unknown planets", realm=name, planets=missing)
            raise TerritoryError(f"Realm {name} references unknown planets: {', '.join(missing)}")

        territory = self.ledger.create_territory(name, founding_year)
        for planet_id in planet_ids:
            self.ledger.add_claim(territory.realm_id, planet_id, ClaimStatus.CORE)

        logger.debug(
            "Realm created",
            realm_id=territory.realm_id,
            name=name,
            planets=len(planet_ids),
        )
        return territory.realm_id
