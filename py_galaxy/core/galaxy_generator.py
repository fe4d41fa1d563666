"""
Galaxy layout generation.

Sectors are laid out on a flat disc in concentric rings around a central
sector. Each sector is filled with a chain of planets, and the first planet of
every sector (its gateway) is linked to the next sector's gateway so that the
whole graph is connected.
"""

from __future__ import annotations

import math
from typing import List, Optional

import structlog

from ..config.options import GalaxyGenOptions
from .galaxy_map import GalaxyMap, Position, Sector
from .name_generator import NameGenerator
from .planet import Continent, Planet, PlanetStatus, ResourceSpecialization
from .seeded_random import RandomSource

logger = structlog.get_logger()

SECTORS_PER_RING_STEP = 6


def sector_id_for(index: int) -> str:
    return f"sector-{index}"


def planet_id_for(sector_id: str, index: int) -> str:
    return f"{sector_id}-planet-{index}"


class GalaxyGenerator:
    """Generates sectors, planets and space lanes into a GalaxyMap."""

    def __init__(
        self,
        random_source: RandomSource,
        name_generator: Optional[NameGenerator] = None,
        options: Optional[GalaxyGenOptions] = None,
    ):
        """
        Initialize galaxy generator.

        Args:
            random_source: Random source shared with the rest of the pipeline
            name_generator: Name generator for sectors, planets and continents
            options: Galaxy layout options
        """
        self.random_source = random_source
        self.name_generator = name_generator or NameGenerator(random_source)
        self.options = options or GalaxyGenOptions()

    def generate(self, galaxy_map: Optional[GalaxyMap] = None) -> GalaxyMap:
        """
        Generate the complete galaxy graph.

        An existing map is reset before being filled.

        Returns:
            The populated GalaxyMap
        """
        galaxy_map = galaxy_map if galaxy_map is not None else GalaxyMap()
        galaxy_map.reset()

        logger.info(
            "Starting galaxy generation",
            seed=self.random_source.seed,
            sectors=self.options.sector_count,
            radius=self.options.galaxy_radius,
        )

        # Step 1: Lay out sectors in rings
        for sector in self.generate_sectors():
            galaxy_map.add_sector(sector)

        # Step 2: Fill each sector with a chain of planets
        for sector in galaxy_map.get_sectors():
            self._populate_sector(galaxy_map, sector)

        # Step 3: Link sector gateways into a ring
        self._link_sectors(galaxy_map)

        logger.info(
            "Galaxy generation complete",
            sectors=galaxy_map.sector_count,
            planets=galaxy_map.planet_count,
            lanes=galaxy_map.lane_count,
        )
        return galaxy_map

    def generate_sectors(self) -> List[Sector]:
        """
        Place sectors across the galactic disc.

        The first sector sits at the origin. The rest go on
        ceil(sqrt(n - 1)) rings, ring r holding up to 6r sectors at equal
        angular steps.
        """
        total = self.options.sector_count
        radius_max = self.options.galaxy_radius

        sectors = [self._make_sector(1, Position(x=0.0, y=0.0, z=0.0))]

        remaining = total - 1
        if remaining <= 0:
            return sectors

        ring_count = math.ceil(math.sqrt(remaining))
        sector_index = 2

        for ring in range(1, ring_count + 1):
            if sector_index > total:
                break

            radius = (ring / ring_count) * radius_max
            sectors_in_ring = min(
                math.ceil(ring * SECTORS_PER_RING_STEP), total - sector_index + 1
            )
            angle_step = (2 * math.pi) / sectors_in_ring

            for i in range(sectors_in_ring):
                angle = i * angle_step
                position = Position(
                    x=radius * math.cos(angle), y=radius * math.sin(angle), z=0.0
                )
                sectors.append(self._make_sector(sector_index, position))
                sector_index += 1

            logger.debug("Placed ring", ring=ring, radius=radius, sectors=sectors_in_ring)

        return sectors

    def _make_sector(self, index: int, position: Position) -> Sector:
        name = self.name_generator.generate_syllable_name("SECTOR")
        return Sector(sector_id_for(index), name, position)

    def _populate_sector(self, galaxy_map: GalaxyMap, sector: Sector) -> None:
        """Create the sector's planets and chain them together."""
        previous_id: Optional[str] = None

        for i in range(1, self.options.planets_per_sector + 1):
            planet = self._make_planet(sector.id, planet_id_for(sector.id, i))
            galaxy_map.register_planet(planet)

            if previous_id is not None:
                galaxy_map.connect_planets(previous_id, planet.id)
            previous_id = planet.id

    def _make_planet(self, sector_id: str, planet_id: str) -> Planet:
        rng = self.random_source
        planet = Planet(
            id=planet_id,
            name=self.name_generator.generate_syllable_name("PLANET"),
            sector_id=sector_id,
            status=PlanetStatus.NORMAL,
            development_level=rng.next_int(1, 10),
            fortification_level=rng.next_int(0, 5),
            resource_specialization=rng.next_choice(list(ResourceSpecialization)),
        )

        for _ in range(self.options.continents_per_planet):
            planet.add_continent(
                Continent(name=self.name_generator.generate_syllable_name("GENERIC"))
            )
        return planet

    def _link_sectors(self, galaxy_map: GalaxyMap) -> None:
        """Connect each sector's gateway planet to the next sector's, wrapping around."""
        gateways = [
            sector.gateway_planet_id
            for sector in galaxy_map.get_sectors()
            if sector.gateway_planet_id is not None
        ]

        if len(gateways) < 2:
            return

        for i, gateway in enumerate(gateways):
            next_gateway = gateways[(i + 1) % len(gateways)]
            galaxy_map.connect_planets(gateway, next_gateway)
