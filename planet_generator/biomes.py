# planet_generator/biomes.py

"""
================================================================================
BIOME CLASSIFIER & VEGETATION
================================================================================
Classifies locations into BiomeType values with a fixed decision order
(ocean, beach, ice/snow, altitude bands, then a simplified Whittaker grid on
temperature and moisture), and derives vegetation density from the biome and
the local climate.

Data Contract:
---------------
- Inputs:
    - bank (FieldBank), longitude, latitude (degrees), altitude (meters).
    - terrain_height (optional): Pre-computed terrain heights.
- Outputs:
    - Integer arrays of BiomeType values; vegetation density in [0, 1].
- Side Effects: None.
- Invariants: A location is OCEAN or DEEP_OCEAN exactly when its terrain
  height is below sea level.
================================================================================
"""

import numpy as np

from . import climate
from . import config as DEFAULTS
from . import terrain
from .projection import geo_to_world
from .types import BiomeType

# --- Vegetation Constants ---
# Base vegetation density per biome before climate modulation.
VEGETATION_BASE = {
    BiomeType.TUNDRA: 0.2,
    BiomeType.TAIGA: 0.7,
    BiomeType.GRASSLAND: 0.5,
    BiomeType.TEMPERATE_DECIDUOUS_FOREST: 0.85,
    BiomeType.TEMPERATE_RAINFOREST: 0.95,
    BiomeType.SAVANNA: 0.4,
    BiomeType.TROPICAL_SEASONAL_FOREST: 0.85,
    BiomeType.TROPICAL_RAINFOREST: 1.0,
    BiomeType.COLD_DESERT: 0.1,
    BiomeType.DESERT: 0.05,
    BiomeType.OCEAN: 0.0,
    BiomeType.DEEP_OCEAN: 0.0,
    BiomeType.BEACH: 0.1,
    BiomeType.SNOW: 0.05,
    BiomeType.ICE: 0.0,
    BiomeType.MOUNTAIN_TUNDRA: 0.2,
    BiomeType.MOUNTAIN_FOREST: 0.6,
    BiomeType.MOUNTAIN_PEAK: 0.0,
}
_VEGETATION_LUT = np.array([VEGETATION_BASE[b] for b in sorted(BiomeType)])

VEGETATION_NOISE_JITTER = 0.15


def whittaker_biome(temperature_c, moisture):
    """The temperature/moisture grid used once special cases are ruled out."""
    t = np.asarray(temperature_c, dtype=np.float64)
    m = np.asarray(moisture, dtype=np.float64)

    cold = np.where(m < 0.3, BiomeType.COLD_DESERT, BiomeType.TUNDRA)
    cool = np.select(
        [m < 0.3, m < 0.6],
        [BiomeType.COLD_DESERT, BiomeType.GRASSLAND],
        default=BiomeType.TAIGA,
    )
    temperate = np.select(
        [m < 0.3, m < 0.6],
        [BiomeType.GRASSLAND, BiomeType.TEMPERATE_DECIDUOUS_FOREST],
        default=BiomeType.TEMPERATE_RAINFOREST,
    )
    hot = np.select(
        [m < 0.2, m < 0.5, m < 0.7],
        [BiomeType.DESERT, BiomeType.SAVANNA, BiomeType.TROPICAL_SEASONAL_FOREST],
        default=BiomeType.TROPICAL_RAINFOREST,
    )
    return np.select([t < 0.0, t < 10.0, t < 20.0], [cold, cool, temperate], default=hot)


def classify(bank, longitude, latitude, altitude, terrain_height=None):
    """BiomeType values (as ints) for the given locations."""
    if terrain_height is None:
        terrain_height = terrain.height(bank, longitude, latitude)
    altitude = np.asarray(altitude, dtype=np.float64)
    temp = climate.temperature(bank, longitude, latitude, altitude)
    moist = climate.moisture(bank, longitude, latitude)

    h = terrain_height
    conditions = [
        h < bank.config.sea_level,
        h < DEFAULTS.BEACH_MAX_HEIGHT_M,
        temp < -15.0,
        altitude > 4000.0,
        altitude > 2500.0,
    ]
    choices = [
        np.where(h < DEFAULTS.DEEP_OCEAN_DEPTH_M, BiomeType.DEEP_OCEAN, BiomeType.OCEAN),
        BiomeType.BEACH,
        np.where(h < 100.0, BiomeType.ICE, BiomeType.SNOW),
        BiomeType.MOUNTAIN_PEAK,
        np.where(temp < 0.0, BiomeType.MOUNTAIN_TUNDRA, BiomeType.MOUNTAIN_FOREST),
    ]
    return np.select(conditions, choices, default=whittaker_biome(temp, moist)).astype(int)


def vegetation_density(bank, longitude, latitude, altitude, terrain_height=None, biome=None):
    """Vegetation cover [0, 1]."""
    if terrain_height is None:
        terrain_height = terrain.height(bank, longitude, latitude)
    if biome is None:
        biome = classify(bank, longitude, latitude, altitude, terrain_height)
    altitude = np.asarray(altitude, dtype=np.float64)

    base = _VEGETATION_LUT[np.asarray(biome, dtype=int)]

    temp = climate.temperature(bank, longitude, latitude, altitude)
    precip = climate.precipitation(bank, longitude, latitude, altitude, terrain_height, temperature_c=temp)
    precip_factor = np.clip(precip / 1500.0, 0.3, 1.2)

    temp_factor = np.select(
        [temp < 0.0, temp > 35.0],
        [np.maximum(0.2, 1.0 + temp / 20.0), np.maximum(0.3, 1.0 - (temp - 35.0) / 15.0)],
        default=1.0,
    )
    altitude_factor = np.select([altitude > 3000.0, altitude > 2000.0], [0.5, 0.75], default=1.0)

    x, y, z = geo_to_world(longitude, latitude)
    # Rotated moisture sample gives patchiness uncorrelated with the biome itself.
    jitter = 1.0 + bank.moisture.sample(y, z, x) * VEGETATION_NOISE_JITTER

    return np.clip(base * precip_factor * temp_factor * altitude_factor * jitter, 0.0, 1.0)
