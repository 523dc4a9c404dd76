# planet_generator/soil.py

"""
================================================================================
SOIL MODEL
================================================================================
Soil type and its properties, layered on the biome and climate.

Each property starts from a per-soil-type base value and is then modulated by:
- vegetation density (organic input),
- a temperature-driven decomposition factor,
- a precipitation-driven leaching factor,
- altitude-driven erosion.

Data Contract:
---------------
- Inputs: bank (FieldBank), longitude, latitude (degrees), altitude (meters).
- Outputs: SoilType values (ints); fertility and organic matter in [0, 1];
  pH in [4, 9].
- Side Effects: None.
================================================================================
"""

import numpy as np

from . import biomes
from . import climate
from . import terrain
from .types import BiomeType, SoilType

# --- Base Soil Properties ---
FERTILITY_BASE = {
    SoilType.NONE: 0.0,
    SoilType.PERMAFROST: 0.1,
    SoilType.PEAT: 0.5,
    SoilType.ROCKY: 0.15,
    SoilType.SAND: 0.25,
    SoilType.LOAM: 0.85,
    SoilType.CLAY: 0.6,
    SoilType.SILT: 0.75,
}
PH_BASE = {
    SoilType.NONE: 7.0,
    SoilType.PERMAFROST: 6.0,
    SoilType.PEAT: 4.5,
    SoilType.ROCKY: 7.0,
    SoilType.SAND: 6.5,
    SoilType.LOAM: 6.8,
    SoilType.CLAY: 7.2,
    SoilType.SILT: 6.9,
}
ORGANIC_MATTER_BASE = {
    SoilType.NONE: 0.0,
    SoilType.PERMAFROST: 0.4,
    SoilType.PEAT: 0.9,
    SoilType.ROCKY: 0.05,
    SoilType.SAND: 0.1,
    SoilType.LOAM: 0.5,
    SoilType.CLAY: 0.35,
    SoilType.SILT: 0.4,
}


def _lut(table):
    return np.array([table[s] for s in sorted(SoilType)])


_FERTILITY_LUT = _lut(FERTILITY_BASE)
_PH_LUT = _lut(PH_BASE)
_ORGANIC_LUT = _lut(ORGANIC_MATTER_BASE)

PH_MIN = 4.0
PH_MAX = 9.0


def classify(bank, longitude, latitude, altitude, terrain_height=None, biome=None):
    """SoilType values (as ints) for the given locations."""
    if terrain_height is None:
        terrain_height = terrain.height(bank, longitude, latitude)
    if biome is None:
        biome = biomes.classify(bank, longitude, latitude, altitude, terrain_height)
    altitude = np.asarray(altitude, dtype=np.float64)
    biome = np.asarray(biome, dtype=int)

    temp = climate.temperature(bank, longitude, latitude, altitude)
    precip = climate.precipitation(bank, longitude, latitude, altitude, terrain_height, temperature_c=temp)

    frozen = np.isin(biome, [BiomeType.ICE, BiomeType.SNOW, BiomeType.MOUNTAIN_PEAK]) | (temp < -5.0)
    peat = (precip > 2000.0) & (altitude < 100.0)
    rocky = (altitude > 3000.0) | np.isin(biome, [BiomeType.MOUNTAIN_TUNDRA, BiomeType.MOUNTAIN_PEAK])
    sandy = np.isin(biome, [BiomeType.DESERT, BiomeType.COLD_DESERT])
    loam = np.isin(biome, [BiomeType.GRASSLAND, BiomeType.SAVANNA]) & (precip > 500.0) & (precip < 1500.0)
    clay = (precip > 1200.0) & (temp > 5.0) & (temp < 25.0)
    silt = (precip > 600.0) & (precip < 1200.0)

    return np.select(
        [altitude < 0.0, altitude > 5000.0, frozen, peat, rocky, sandy, loam, clay, silt],
        [SoilType.NONE, SoilType.ROCKY, SoilType.PERMAFROST, SoilType.PEAT, SoilType.ROCKY,
         SoilType.SAND, SoilType.LOAM, SoilType.CLAY, SoilType.SILT],
        default=SoilType.SAND,
    ).astype(int)


def _soil_factors(bank, longitude, latitude, altitude, terrain_height):
    """Soil type plus the shared environmental modifiers."""
    if terrain_height is None:
        terrain_height = terrain.height(bank, longitude, latitude)
    altitude = np.asarray(altitude, dtype=np.float64)
    biome = biomes.classify(bank, longitude, latitude, altitude, terrain_height)
    soil = classify(bank, longitude, latitude, altitude, terrain_height, biome)

    temp = climate.temperature(bank, longitude, latitude, altitude)
    precip = climate.precipitation(bank, longitude, latitude, altitude, terrain_height, temperature_c=temp)
    vegetation = biomes.vegetation_density(bank, longitude, latitude, altitude, terrain_height, biome)

    factors = {
        'vegetation': vegetation,
        # Warm soils cycle nutrients faster.
        'decomposition': np.clip(0.5 + temp / 40.0, 0.5, 1.2),
        # 0 below 1500mm/yr, up to 0.4 at 4500mm/yr.
        'leaching': np.clip((precip - 1500.0) / 3000.0, 0.0, 0.4),
        # 0 below 1000m, up to 0.5 at 3000m.
        'erosion': np.clip((altitude - 1000.0) / 4000.0, 0.0, 0.5),
        'temperature': temp,
        'precipitation': precip,
    }
    return soil, factors


def fertility(bank, longitude, latitude, altitude, terrain_height=None):
    soil, f = _soil_factors(bank, longitude, latitude, altitude, terrain_height)
    value = (
        _FERTILITY_LUT[soil]
        * (0.7 + 0.3 * f['vegetation'])
        * f['decomposition']
        * (1.0 - f['leaching'])
        * (1.0 - f['erosion'])
    )
    return np.where(soil == SoilType.NONE, 0.0, np.clip(value, 0.0, 1.0))


def ph(bank, longitude, latitude, altitude, terrain_height=None):
    """
    Soil pH. Wet climates leach bases and acidify, dry climates accumulate
    carbonates, organic acids from dense vegetation lower pH, and erosion
    exposes fresh, less weathered mineral soil.
    """
    soil, f = _soil_factors(bank, longitude, latitude, altitude, terrain_height)
    moisture_shift = np.clip((f['precipitation'] - 1000.0) / 1000.0, -1.0, 1.5) * 0.8
    value = (
        _PH_LUT[soil]
        - moisture_shift
        - f['vegetation'] * 0.3
        - (f['decomposition'] - 0.5) * 0.3
        + f['erosion'] * 0.4
    )
    return np.where(soil == SoilType.NONE, PH_BASE[SoilType.NONE], np.clip(value, PH_MIN, PH_MAX))


def organic_matter(bank, longitude, latitude, altitude, terrain_height=None):
    soil, f = _soil_factors(bank, longitude, latitude, altitude, terrain_height)
    # Cold slows decomposition, so organic matter builds up.
    retention = np.clip(1.3 - f['temperature'] / 40.0, 0.6, 1.3)
    value = (
        _ORGANIC_LUT[soil]
        * (0.5 + 0.5 * f['vegetation'])
        * retention
        * (1.0 - 0.5 * f['leaching'])
        * (1.0 - f['erosion'])
    )
    return np.where(soil == SoilType.NONE, 0.0, np.clip(value, 0.0, 1.0))
