"""
Realm territories and territorial claims.

Realms and planets reference each other through claims. Both directions live
in TerritoryLedger and are only ever changed together by add_claim and
remove_claim, so a realm's planet list and a planet's claim map cannot drift
apart.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class ClaimStatus(str, Enum):
    """Status of a realm's claim on a planet."""

    CORE = "Core"  # integral part of the realm
    CLAIMED = "Claimed"  # recently acquired, not yet integrated
    CONTESTED = "Contested"  # claimed by several realms at once


class Territory(BaseModel):
    """A realm's identity record."""

    model_config = ConfigDict(frozen=True)

    realm_id: str = Field(min_length=1, description="Realm identifier")
    name: str = Field(min_length=1, description="Realm display name")
    founding_year: int = Field(description="Year the realm was established")


class TerritoryLedger:
    """Indexed store of realms and their claims over planets."""

    def __init__(self):
        self._territories: Dict[str, Territory] = {}
        self._realm_planets: Dict[str, Dict[str, ClaimStatus]] = {}
        self._planet_claims: Dict[str, Dict[str, ClaimStatus]] = {}

    # Realms

    def create_territory(self, name: str, founding_year: int) -> Territory:
        """Create a realm with the next free identifier."""
        territory = Territory(
            realm_id=f"realm-{len(self._territories) + 1}",
            name=name,
            founding_year=founding_year,
        )
        self.add_territory(territory)
        return territory

    def add_territory(self, territory: Territory) -> None:
        """Register an existing realm record, e.g. when loading a saved galaxy."""
        if territory.realm_id in self._territories:
            raise ValueError(f"Realm {territory.realm_id} already exists")
        self._territories[territory.realm_id] = territory
        self._realm_planets[territory.realm_id] = {}

    def get_territory(self, realm_id: str) -> Optional[Territory]:
        return self._territories.get(realm_id)

    @property
    def territories(self) -> Mapping[str, Territory]:
        return MappingProxyType(self._territories)

    def realm_ids(self) -> Tuple[str, ...]:
        return tuple(self._territories)

    # Claims

    def add_claim(self, realm_id: str, planet_id: str, status: ClaimStatus) -> None:
        """Record a claim on both the realm side and the planet side."""
        if realm_id not in self._territories:
            raise KeyError(f"Unknown realm {realm_id}")
        if not planet_id:
            raise ValueError("Planet ID must be a non-empty string.")
        status = ClaimStatus(status)

        self._realm_planets[realm_id][planet_id] = status
        self._planet_claims.setdefault(planet_id, {})[realm_id] = status

    def remove_claim(self, realm_id: str, planet_id: str) -> None:
        self._realm_planets.get(realm_id, {}).pop(planet_id, None)
        claims = self._planet_claims.get(planet_id)
        if claims is not None:
            claims.pop(realm_id, None)
            if not claims:
                del self._planet_claims[planet_id]

    def planets_of(self, realm_id: str) -> Mapping[str, ClaimStatus]:
        """Planets claimed by a realm with their claim status."""
        return MappingProxyType(self._realm_planets.get(realm_id, {}))

    def core_planets(self, realm_id: str) -> List[str]:
        return [
            planet_id
            for planet_id, status in self._realm_planets.get(realm_id, {}).items()
            if status is ClaimStatus.CORE
        ]

    def claims_on(self, planet_id: str) -> Mapping[str, ClaimStatus]:
        """Realms claiming a planet with their claim status."""
        return MappingProxyType(self._planet_claims.get(planet_id, {}))

    def claim_status(self, realm_id: str, planet_id: str) -> Optional[ClaimStatus]:
        return self._realm_planets.get(realm_id, {}).get(planet_id)

    def has_contesting_claims(self, planet_id: str) -> bool:
        return len(self._planet_claims.get(planet_id, {})) > 1

    def controlling_realm(self, planet_id: str) -> Optional[str]:
        """The single realm holding a Core claim, or None if there is not exactly one."""
        core = [
            realm_id
            for realm_id, status in self._planet_claims.get(planet_id, {}).items()
            if status is ClaimStatus.CORE
        ]
        return core[0] if len(core) == 1 else None

    def claimed_planet_ids(self) -> Tuple[str, ...]:
        return tuple(self._planet_claims)

    def to_dict(self) -> dict:
        return {
            "realms": {
                realm_id: {
                    "name": territory.name,
                    "founding_year": territory.founding_year,
                    "planets": [
                        {"id": planet_id, "claim_status": status.value}
                        for planet_id, status in self._realm_planets[realm_id].items()
                    ],
                }
                for realm_id, territory in self._territories.items()
            },
            "claims": {
                planet_id: {realm_id: status.value for realm_id, status in claims.items()}
                for planet_id, claims in self._planet_claims.items()
            },
        }
