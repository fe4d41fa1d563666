"""
Configuration for galaxy generation and the surrounding services.
"""

from .config import Settings, settings
from .logging_config import configure_logging
from .options import GalaxyGenOptions, GenerationConfig, RealmOptions, SpatialDistribution

__all__ = [
    'Settings', 'settings', 'configure_logging',
    'GalaxyGenOptions', 'RealmOptions', 'SpatialDistribution', 'GenerationConfig',
]
