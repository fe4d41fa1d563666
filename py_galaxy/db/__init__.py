"""
Database utilities and models.

This package provides:
- SQLAlchemy models for generated galaxies
- Database connection management
- Export and reload of generation results
"""

from .connection import Database, db
from .export import GalaxyExporter, export_galaxy_to_db, load_galaxy
from .models import Base, Claim, Galaxy, Lane, Planet, Realm, Sector

__all__ = [
    # Connection management
    'Database', 'db',

    # Export functionality
    'GalaxyExporter', 'export_galaxy_to_db', 'load_galaxy',

    # Models
    'Base', 'Galaxy', 'Sector', 'Planet', 'Lane', 'Realm', 'Claim'
]
