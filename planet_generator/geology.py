# planet_generator/geology.py

"""
================================================================================
GEOLOGY MODEL
================================================================================
Mineral deposit concentrations. Each deposit is a suitability noise shaped by
an exponent (which controls how rare rich deposits are), multiplied by an
elevation window and deposit-specific secondary factors, clamped to [0, 1].

- Coal: ancient swamps. Lowland, wet, mid-latitude.
- Iron: ridged banded formations, enriched around volcanoes.
- Oil: sedimentary basins (cellular), including the continental shelf.
================================================================================
"""

import numpy as np

from . import climate
from . import terrain
from .projection import geo_to_world, normalize

COAL_EXPONENT = 0.7
COAL_MULTIPLIER = 1.3
COAL_MAX_ELEVATION_M = 2000.0

IRON_VOLCANO_BONUS = 0.25
IRON_MULTIPLIER = 0.8

OIL_EXPONENT = 1.3
OIL_MULTIPLIER = 1.2
OIL_BASIN_RADIUS = 0.6
OIL_MIN_ELEVATION_M = -200.0
OIL_MAX_ELEVATION_M = 1500.0


def coal_deposit(bank, longitude, latitude, terrain_height=None):
    lon, lat = normalize(longitude, latitude)
    if terrain_height is None:
        terrain_height = terrain.height(bank, lon, lat)
    x, y, z = geo_to_world(lon, lat)

    suitability = np.clip(bank.coal.sample(x, y, z), 0.0, 1.0) ** COAL_EXPONENT

    # Plateau up to 1000m, fading out by 2000m.
    elevation_window = np.clip(1.0 - (terrain_height - 1000.0) / 1000.0, 0.0, 1.0)

    surface = terrain.surface_altitude(bank, lon, lat, terrain_height)
    precip = climate.precipitation(bank, lon, lat, surface, terrain_height)
    precip_factor = np.clip(precip / 1500.0, 0.2, 1.0)

    # Best between 20 and 60 degrees, falling to 0.4 twenty degrees outside.
    abs_lat = np.abs(lat)
    outside = np.maximum(20.0 - abs_lat, 0.0) + np.maximum(abs_lat - 60.0, 0.0)
    lat_factor = 0.4 + 0.6 * np.clip(1.0 - outside / 20.0, 0.0, 1.0)

    deposit = np.clip(suitability * elevation_window * precip_factor * lat_factor * COAL_MULTIPLIER, 0.0, 1.0)
    excluded = (terrain_height < bank.config.sea_level) | (terrain_height > COAL_MAX_ELEVATION_M)
    return np.where(excluded, 0.0, deposit)


def iron_deposit(bank, longitude, latitude, terrain_height=None, volcano=None):
    lon, lat = normalize(longitude, latitude)
    base_noise = None
    if terrain_height is None or volcano is None:
        base_noise = terrain.terrain_noise(bank, lon, lat)
    if terrain_height is None:
        terrain_height = terrain.height(bank, lon, lat, base_noise=base_noise)
    x, y, z = geo_to_world(lon, lat)

    suitability = bank.iron.sample01(x, y, z) ** 2
    elevation_factor = np.where(terrain_height < 1000.0, 1.0, 0.6)
    if volcano is None:
        volcano = terrain.is_volcano(bank, lon, lat, base_noise=base_noise)
    volcano_bonus = np.where(volcano, IRON_VOLCANO_BONUS, 0.0)

    deposit = np.clip((suitability * elevation_factor + volcano_bonus) * IRON_MULTIPLIER, 0.0, 1.0)
    return np.where(terrain_height < bank.config.sea_level, 0.0, deposit)


def _oil_elevation_window(terrain_height):
    h = terrain_height
    declining = 1.0 - 0.8 * np.clip((h - 800.0) / (OIL_MAX_ELEVATION_M - 800.0), 0.0, 1.0)
    return np.select(
        [h < 0.0, h < 100.0, h <= 800.0],
        [0.6, 0.7, 1.0],
        default=declining,
    )


def oil_deposit(bank, longitude, latitude, terrain_height=None):
    lon, lat = normalize(longitude, latitude)
    if terrain_height is None:
        terrain_height = terrain.height(bank, lon, lat)
    x, y, z = geo_to_world(lon, lat)

    basin = np.clip((OIL_BASIN_RADIUS - bank.oil.sample01(x, y, z)) / OIL_BASIN_RADIUS, 0.0, 1.0)
    suitability = basin ** OIL_EXPONENT

    deposit = np.clip(suitability * _oil_elevation_window(terrain_height) * OIL_MULTIPLIER, 0.0, 1.0)
    in_window = (terrain_height >= OIL_MIN_ELEVATION_M) & (terrain_height <= OIL_MAX_ELEVATION_M)
    return np.where(in_window, deposit, 0.0)
