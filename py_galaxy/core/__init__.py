"""
Core galaxy generation functionality.
"""

from .seeded_random import RandomSource, RandomState, hash_seed
from .planet import Continent, Planet, PlanetStatus, ResourceSpecialization
from .galaxy_map import GalaxyMap, GraphError, Position, Sector
from .name_generator import NameGenerator, SyllableSet
from .galaxy_generator import GalaxyGenerator
from .territory import ClaimStatus, Territory, TerritoryLedger
from .realm_generator import RealmGenerator, TerritoryError
from .pipeline import GenerationResult, generate_galaxy

__all__ = ['RandomSource', 'RandomState', 'hash_seed',
           'Continent', 'Planet', 'PlanetStatus', 'ResourceSpecialization',
           'GalaxyMap', 'GraphError', 'Position', 'Sector',
           'NameGenerator', 'SyllableSet', 'GalaxyGenerator',
           'ClaimStatus', 'Territory', 'TerritoryLedger',
           'RealmGenerator', 'TerritoryError',
           'GenerationResult', 'generate_galaxy']
