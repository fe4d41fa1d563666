"""
Galaxy map graph model.

The galaxy is a graph of planets (nodes) connected by space lanes (edges).
Planets are grouped into sectors for regional play. All collections are kept
in insertion order: iteration order feeds the random source during territory
generation, so it must not depend on string hashing.
"""

from __future__ import annotations

import math
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, Mapping, Optional, Tuple

import structlog
from pydantic import BaseModel, ConfigDict, Field

from .planet import Planet
from .seeded_random import RandomSource

logger = structlog.get_logger()


class GraphError(ValueError):
    """Raised when an operation would break the structure of the galaxy graph."""


class Position(BaseModel):
    """A point in the galaxy, measured in light years."""

    model_config = ConfigDict(frozen=True)

    x: float = Field(allow_inf_nan=False)
    y: float = Field(allow_inf_nan=False)
    z: float = Field(default=0.0, allow_inf_nan=False)

    def distance_from(self, other: Position) -> float:
        """Euclidean distance to another position in light years."""
        dx = self.x - other.x
        dy = self.y - other.y
        dz = self.z - other.z
        return math.sqrt(dx * dx + dy * dy + dz * dz)

    def magnitude(self) -> float:
        """Distance from the galactic origin."""
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)


class Sector:
    """
    A named region of the galaxy and the planets registered in it.

    Once a sector is added to a GalaxyMap its membership belongs to the map:
    planets join through GalaxyMap.register_planet, and add_planet and
    remove_planet raise GraphError.
    """

    def __init__(
        self,
        sector_id: str,
        name: str,
        position: Optional[Position] = None,
        planet_ids: Iterable[str] = (),
    ):
        if not sector_id:
            raise ValueError("Sector id must be a non-empty string.")
        if not name:
            raise ValueError("Sector name must be a non-empty string.")

        self._id = sector_id
        self._name = name
        self._position = position or Position(x=0.0, y=0.0, z=0.0)
        # dict keys as an ordered set
        self._planet_ids: Dict[str, None] = {}
        self._galaxy_map: Optional[GalaxyMap] = None
        for planet_id in planet_ids:
            self.add_planet(planet_id)

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def position(self) -> Position:
        return self._position

    @property
    def planet_ids(self) -> Tuple[str, ...]:
        """Member planet ids in registration order."""
        return tuple(self._planet_ids)

    @property
    def gateway_planet_id(self) -> Optional[str]:
        """The first planet registered in the sector, if any."""
        return next(iter(self._planet_ids), None)

    @property
    def is_bound(self) -> bool:
        """Whether the sector belongs to a GalaxyMap."""
        return self._galaxy_map is not None

    def add_planet(self, planet_id: str) -> None:
        self._check_unbound()
        self._add_member(planet_id)

    def has_planet(self, planet_id: str) -> bool:
        return planet_id in self._planet_ids

    def remove_planet(self, planet_id: str) -> None:
        self._check_unbound()
        self._planet_ids.pop(planet_id, None)

    def _check_unbound(self) -> None:
        if self._galaxy_map is not None:
            raise GraphError(
                f"Sector {self._id} membership is managed by its galaxy map; "
                "register planets through GalaxyMap.register_planet."
            )

    def _add_member(self, planet_id: str) -> None:
        if not planet_id:
            raise ValueError("Planet identifier must be a non-empty string.")
        self._planet_ids.setdefault(planet_id, None)

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "name": self._name,
            "position": self._position.model_dump(),
        }

    def __repr__(self) -> str:
        return f"Sector(id={self._id!r}, name={self._name!r}, planets={len(self._planet_ids)})"


class GalaxyMap:
    """
    Graph of planets grouped into sectors.

    Adjacency is always symmetric: connect_planets inserts both directions
    in the same call. Accessors hand out read-only mappings and tuples so
    callers cannot corrupt the adjacency table.
    """

    def __init__(self):
        self._sectors: Dict[str, Sector] = {}
        self._planets: Dict[str, Planet] = {}
        self._adjacency: Dict[str, Dict[str, None]] = {}
        # Lanes in creation order, keyed by their unordered endpoint pair
        self._lanes: Dict[FrozenSet[str], Tuple[str, str]] = {}

    def reset(self) -> None:
        """Clear all sectors, planets and lanes so the map can be regenerated."""
        for sector in self._sectors.values():
            sector._galaxy_map = None
        self._sectors.clear()
        self._planets.clear()
        self._adjacency.clear()
        self._lanes.clear()

    # Registration

    def add_sector(self, sector: Sector) -> None:
        """
        Register an empty sector. Re-adding a known sector id is a no-op.

        Raises:
            GraphError: If the sector already lists planets or belongs to
                another map
        """
        if not isinstance(sector, Sector):
            raise TypeError(f"Expected Sector, got {type(sector).__name__}")
        if sector.id in self._sectors:
            return
        if sector.is_bound:
            raise GraphError(f"Sector {sector.id} already belongs to another galaxy map.")
        if sector.planet_ids:
            raise GraphError(
                f"Sector {sector.id} lists planets; register them through the map instead."
            )

        sector._galaxy_map = self
        self._sectors[sector.id] = sector

    def register_planet(self, planet: Planet) -> None:
        """
        Add a planet to the map and to its sector.

        Raises:
            GraphError: If the planet's sector is unknown or the planet id is
                already registered. The map is left unchanged.
        """
        if not isinstance(planet, Planet):
            raise TypeError(f"Expected Planet, got {type(planet).__name__}")

        sector = self._sectors.get(planet.sector_id)
        if sector is None:
            message = f"Planet {planet.id} references unknown sector {planet.sector_id}."
            logger.error("Planet registration failed", planet_id=planet.id, sector_id=planet.sector_id)
            raise GraphError(message)

        if planet.id in self._planets:
            logger.error("Planet registration failed", planet_id=planet.id, reason="duplicate")
            raise GraphError(f"Planet {planet.id} is already registered.")

        self._planets[planet.id] = planet
        self._adjacency.setdefault(planet.id, {})
        sector._add_member(planet.id)

    def connect_planets(self, planet_a_id: str, planet_b_id: str) -> None:
        """Connect two registered planets with a bidirectional space lane."""
        if not planet_a_id or not planet_b_id:
            raise ValueError("Planet ids must be non-empty strings.")

        if planet_a_id not in self._planets or planet_b_id not in self._planets:
            logger.error("Lane creation failed", planet_a=planet_a_id, planet_b=planet_b_id)
            raise GraphError(f"Cannot connect unknown planets {planet_a_id} and {planet_b_id}.")

        if planet_a_id == planet_b_id:
            raise GraphError(f"Cannot connect planet {planet_a_id} to itself.")

        self._adjacency[planet_a_id].setdefault(planet_b_id, None)
        self._adjacency[planet_b_id].setdefault(planet_a_id, None)
        self._lanes.setdefault(frozenset((planet_a_id, planet_b_id)), (planet_a_id, planet_b_id))

    # Queries

    @property
    def sectors(self) -> Mapping[str, Sector]:
        return MappingProxyType(self._sectors)

    @property
    def planets(self) -> Mapping[str, Planet]:
        return MappingProxyType(self._planets)

    def get_sector(self, sector_id: str) -> Optional[Sector]:
        return self._sectors.get(sector_id)

    def get_sectors(self) -> Tuple[Sector, ...]:
        return tuple(self._sectors.values())

    def get_planet(self, planet_id: str) -> Optional[Planet]:
        return self._planets.get(planet_id)

    def has_planet(self, planet_id: str) -> bool:
        return planet_id in self._planets

    def get_planet_ids(self) -> Tuple[str, ...]:
        """All planet ids in registration order."""
        return tuple(self._planets)

    def get_planets_in_sector(self, sector_id: str) -> Tuple[Planet, ...]:
        """Planets of a sector, or an empty tuple for an unknown sector."""
        sector = self._sectors.get(sector_id)
        if sector is None:
            return ()
        return tuple(
            self._planets[planet_id]
            for planet_id in sector.planet_ids
            if planet_id in self._planets
        )

    def get_connected_planets(self, planet_id: str) -> Tuple[str, ...]:
        """Neighbour ids of a planet; empty for isolated or unknown planets."""
        neighbours = self._adjacency.get(planet_id)
        if not neighbours:
            return ()
        return tuple(neighbours)

    def are_connected(self, planet_a_id: str, planet_b_id: str) -> bool:
        return planet_b_id in self._adjacency.get(planet_a_id, {})

    def get_lanes(self) -> Tuple[Tuple[str, str], ...]:
        """Every lane once, in creation order."""
        return tuple(self._lanes.values())

    @property
    def planet_count(self) -> int:
        return len(self._planets)

    @property
    def sector_count(self) -> int:
        return len(self._sectors)

    @property
    def lane_count(self) -> int:
        return len(self._lanes)

    def get_random_planet(self, random_source: RandomSource) -> Optional[Planet]:
        """
        Pick a planet uniformly at random.

        Returns None for an empty map without drawing from the random source.
        """
        if not self._planets:
            return None
        planet_id = random_source.next_choice(tuple(self._planets))
        return self._planets[planet_id]

    def to_dict(self) -> dict:
        """Serializable view of the sector layout."""
        return {"sectors": [sector.to_dict() for sector in self._sectors.values()]}
