# planet_generator/__init__.py

"""
A deterministic procedural planet generator.

Build a `World` from a seed and query terrain, climate, weather, hydrology,
geology, astronomy, soils and biomes at any longitude/latitude.
"""

from .batch import BatchResult, DataType, Location
from .settings import ConfigError, WorldConfig, load_config
from .types import (
    BiomeType,
    PrecipitationType,
    SoilType,
    biome_name,
    compass_point,
    precipitation_type_name,
    soil_type_name,
)
from .world import World

__all__ = [
    "World",
    "WorldConfig",
    "ConfigError",
    "load_config",
    "DataType",
    "Location",
    "BatchResult",
    "BiomeType",
    "PrecipitationType",
    "SoilType",
    "biome_name",
    "precipitation_type_name",
    "soil_type_name",
    "compass_point",
]
