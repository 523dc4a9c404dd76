# planet_generator/types.py

"""Closed enumerations produced by the classifiers, and their display names."""

from enum import IntEnum


class BiomeType(IntEnum):
    # Cold biomes
    TUNDRA = 0
    TAIGA = 1

    # Temperate biomes
    GRASSLAND = 2
    TEMPERATE_DECIDUOUS_FOREST = 3
    TEMPERATE_RAINFOREST = 4

    # Warm/Hot biomes
    SAVANNA = 5
    TROPICAL_SEASONAL_FOREST = 6
    TROPICAL_RAINFOREST = 7

    # Dry biomes
    COLD_DESERT = 8
    DESERT = 9

    # Special biomes
    OCEAN = 10
    DEEP_OCEAN = 11
    BEACH = 12
    SNOW = 13
    ICE = 14

    # Mountain variants
    MOUNTAIN_TUNDRA = 15
    MOUNTAIN_FOREST = 16
    MOUNTAIN_PEAK = 17


class PrecipitationType(IntEnum):
    NONE = 0
    RAIN = 1
    SNOW = 2
    SLEET = 3


class SoilType(IntEnum):
    NONE = 0
    PERMAFROST = 1
    PEAT = 2
    ROCKY = 3
    SAND = 4
    LOAM = 5
    CLAY = 6
    SILT = 7


BIOME_NAMES = {
    BiomeType.TUNDRA: "Tundra",
    BiomeType.TAIGA: "Taiga",
    BiomeType.GRASSLAND: "Grassland",
    BiomeType.TEMPERATE_DECIDUOUS_FOREST: "Temperate Deciduous Forest",
    BiomeType.TEMPERATE_RAINFOREST: "Temperate Rainforest",
    BiomeType.SAVANNA: "Savanna",
    BiomeType.TROPICAL_SEASONAL_FOREST: "Tropical Seasonal Forest",
    BiomeType.TROPICAL_RAINFOREST: "Tropical Rainforest",
    BiomeType.COLD_DESERT: "Cold Desert",
    BiomeType.DESERT: "Desert",
    BiomeType.OCEAN: "Ocean",
    BiomeType.DEEP_OCEAN: "Deep Ocean",
    BiomeType.BEACH: "Beach",
    BiomeType.SNOW: "Snow",
    BiomeType.ICE: "Ice",
    BiomeType.MOUNTAIN_TUNDRA: "Mountain Tundra",
    BiomeType.MOUNTAIN_FOREST: "Mountain Forest",
    BiomeType.MOUNTAIN_PEAK: "Mountain Peak",
}

PRECIPITATION_TYPE_NAMES = {
    PrecipitationType.NONE: "None",
    PrecipitationType.RAIN: "Rain",
    PrecipitationType.SNOW: "Snow",
    PrecipitationType.SLEET: "Sleet",
}

SOIL_TYPE_NAMES = {
    SoilType.NONE: "None",
    SoilType.PERMAFROST: "Permafrost",
    SoilType.PEAT: "Peat",
    SoilType.ROCKY: "Rocky",
    SoilType.SAND: "Sand",
    SoilType.LOAM: "Loam",
    SoilType.CLAY: "Clay",
    SoilType.SILT: "Silt",
}

COMPASS_POINTS = ("N", "NE", "E", "SE", "S", "SW", "W", "NW")


def biome_name(biome) -> str:
    return BIOME_NAMES.get(biome, "Unknown")


def precipitation_type_name(precipitation_type) -> str:
    return PRECIPITATION_TYPE_NAMES.get(precipitation_type, "Unknown")


def soil_type_name(soil_type) -> str:
    return SOIL_TYPE_NAMES.get(soil_type, "Unknown")


def compass_point(bearing_deg: float) -> str:
    """Eight-point compass name for a bearing in degrees (0 = North, clockwise)."""
    index = int(((bearing_deg % 360.0) + 22.5) // 45.0) % 8
    return COMPASS_POINTS[index]
