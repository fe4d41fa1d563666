"""
Database export pipeline for generated galaxies.

Every row carries an ordinal so a saved galaxy reloads with the same
registration and lane order it was generated with. Iteration order feeds the
random source, so a reloaded galaxy resumed from its saved random state
continues exactly as the unsaved pass would have.
"""

from __future__ import annotations

import json
from typing import Optional

import structlog
from sqlalchemy.orm import Session

from ..config.options import GenerationConfig
from ..core.galaxy_map import GalaxyMap, Position
from ..core.galaxy_map import Sector as MapSector
from ..core.pipeline import GenerationResult
from ..core.planet import Continent
from ..core.planet import Planet as MapPlanet
from ..core.seeded_random import RandomState
from ..core.territory import ClaimStatus, Territory, TerritoryLedger
from .models import Claim, Galaxy, Lane, Planet, Realm, Sector

logger = structlog.get_logger()


class GalaxyExporter:
    """
    Export generated galaxies to the database.

    Writes the galaxy record first, then sectors, planets, lanes, realms and
    claims, all keyed to the galaxy id.
    """

    def __init__(self, session: Session):
        """Initialize exporter with database session."""
        self.session = session
        self.galaxy_id: Optional[str] = None

    def export_galaxy(
        self,
        galaxy_name: str,
        result: GenerationResult,
        generation_time: Optional[float] = None,
    ) -> str:
        """
        Export a complete generation pass.

        Args:
            galaxy_name: Human-readable galaxy name
            result: Output of generate_galaxy
            generation_time: Wall-clock seconds the pass took, if measured

        Returns:
            Identifier of the created galaxy record
        """
        logger.info("Starting galaxy export", galaxy_name=galaxy_name)

        try:
            # Step 1: Create galaxy record
            self.galaxy_id = self._export_galaxy_metadata(galaxy_name, result, generation_time)

            # Step 2: Export sectors and planets
            self._export_sectors(result.galaxy_map)
            self._export_planets(result.galaxy_map)

            # Step 3: Export space lanes
            self._export_lanes(result.galaxy_map)

            # Step 4: Export realms and their claims
            self._export_realms(result.ledger)
            self._export_claims(result.ledger)

            self.session.commit()
            logger.info("Galaxy export completed successfully", galaxy_id=self.galaxy_id)

            return self.galaxy_id

        except Exception as e:
            logger.error("Galaxy export failed", error=str(e))
            self.session.rollback()
            raise

    def _export_galaxy_metadata(
        self,
        galaxy_name: str,
        result: GenerationResult,
        generation_time: Optional[float],
    ) -> str:
        """Create the main galaxy record."""
        config = result.config
        state = result.random_state

        galaxy_record = Galaxy(
            name=galaxy_name,
            seed=config.seed,
            sector_count=config.galaxy.sector_count,
            galaxy_radius=config.galaxy.galaxy_radius,
            planets_per_sector=config.galaxy.planets_per_sector,
            planet_count=result.galaxy_map.planet_count,
            lane_count=result.galaxy_map.lane_count,
            realm_count=len(result.realm_ids),
            generation_time_seconds=generation_time,
            config_json=config.model_dump_json(),
            rng_seed=state.seed,
            rng_internal_state=state.internal_state,
            rng_call_count=state.call_count,
        )

        self.session.add(galaxy_record)
        self.session.flush()  # Get the ID

        logger.info("Galaxy record created", galaxy_id=galaxy_record.id)
        return galaxy_record.id

    def _export_sectors(self, galaxy_map: GalaxyMap) -> None:
        logger.info("Exporting sectors", count=galaxy_map.sector_count)
        self.session.add_all(
            [
                Sector(
                    galaxy_id=self.galaxy_id,
                    ordinal=ordinal,
                    sector_key=sector.id,
                    name=sector.name,
                    x=sector.position.x,
                    y=sector.position.y,
                    z=sector.position.z,
                )
                for ordinal, sector in enumerate(galaxy_map.get_sectors())
            ]
        )

    def _export_planets(self, galaxy_map: GalaxyMap) -> None:
        logger.info("Exporting planets", count=galaxy_map.planet_count)
        self.session.add_all(
            [
                Planet(
                    galaxy_id=self.galaxy_id,
                    ordinal=ordinal,
                    planet_key=planet.id,
                    sector_key=planet.sector_id,
                    name=planet.name,
                    ownership=planet.ownership,
                    status=planet.status.value,
                    development_level=planet.development_level,
                    fortification_level=planet.fortification_level,
                    resource_specialization=planet.resource_specialization.value,
                    continents_json=json.dumps(
                        [continent.model_dump() for continent in planet.continents]
                    ),
                )
                for ordinal, planet in enumerate(galaxy_map.planets.values())
            ]
        )

    def _export_lanes(self, galaxy_map: GalaxyMap) -> None:
        logger.info("Exporting space lanes", count=galaxy_map.lane_count)
        self.session.add_all(
            [
                Lane(galaxy_id=self.galaxy_id, ordinal=ordinal, planet_a=a, planet_b=b)
                for ordinal, (a, b) in enumerate(galaxy_map.get_lanes())
            ]
        )

    def _export_realms(self, ledger: TerritoryLedger) -> None:
        logger.info("Exporting realms", count=len(ledger.territories))
        self.session.add_all(
            [
                Realm(
                    galaxy_id=self.galaxy_id,
                    ordinal=ordinal,
                    realm_key=territory.realm_id,
                    name=territory.name,
                    founding_year=territory.founding_year,
                )
                for ordinal, territory in enumerate(ledger.territories.values())
            ]
        )

    def _export_claims(self, ledger: TerritoryLedger) -> None:
        records = []
        for realm_id in ledger.realm_ids():
            for planet_id, status in ledger.planets_of(realm_id).items():
                records.append(
                    Claim(
                        galaxy_id=self.galaxy_id,
                        ordinal=len(records),
                        realm_key=realm_id,
                        planet_key=planet_id,
                        status=status.value,
                    )
                )

        logger.info("Exporting claims", count=len(records))
        self.session.add_all(records)


def export_galaxy_to_db(
    session: Session,
    galaxy_name: str,
    result: GenerationResult,
    generation_time: Optional[float] = None,
) -> str:
    """
    Convenience function to export a generated galaxy.

    Args:
        session: Database session
        galaxy_name: Human-readable galaxy name
        result: Output of generate_galaxy
        generation_time: Wall-clock seconds the pass took, if measured

    Returns:
        Identifier of the created galaxy record
    """
    exporter = GalaxyExporter(session)
    return exporter.export_galaxy(galaxy_name, result, generation_time)


def load_galaxy(session: Session, galaxy_id: str) -> Optional[GenerationResult]:
    """
    Rebuild a generation result from the database.

    Returns:
        The stored GenerationResult, or None if no galaxy has that id
    """
    galaxy_record = session.get(Galaxy, galaxy_id)
    if galaxy_record is None:
        return None

    galaxy_map = GalaxyMap()
    for row in galaxy_record.sectors:
        galaxy_map.add_sector(
            MapSector(row.sector_key, row.name, Position(x=row.x, y=row.y, z=row.z))
        )

    for row in galaxy_record.planets:
        galaxy_map.register_planet(
            MapPlanet(
                id=row.planet_key,
                name=row.name,
                sector_id=row.sector_key,
                ownership=row.ownership or "",
                status=row.status,
                development_level=row.development_level,
                fortification_level=row.fortification_level,
                resource_specialization=row.resource_specialization,
                continents=[
                    Continent.model_validate(item)
                    for item in json.loads(row.continents_json or "[]")
                ],
            )
        )

    for row in galaxy_record.lanes:
        galaxy_map.connect_planets(row.planet_a, row.planet_b)

    ledger = TerritoryLedger()
    for row in galaxy_record.realms:
        ledger.add_territory(
            Territory(realm_id=row.realm_key, name=row.name, founding_year=row.founding_year)
        )
    for row in galaxy_record.claims:
        ledger.add_claim(row.realm_key, row.planet_key, ClaimStatus(row.status))

    logger.info(
        "Galaxy loaded",
        galaxy_id=galaxy_id,
        planets=galaxy_map.planet_count,
        realms=len(ledger.territories),
    )

    return GenerationResult(
        config=GenerationConfig.model_validate_json(galaxy_record.config_json),
        galaxy_map=galaxy_map,
        ledger=ledger,
        realm_ids=list(ledger.realm_ids()),
        random_state=RandomState(
            seed=galaxy_record.rng_seed,
            internal_state=galaxy_record.rng_internal_state,
            call_count=galaxy_record.rng_call_count,
        ),
    )
