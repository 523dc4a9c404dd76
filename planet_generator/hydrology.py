# planet_generator/hydrology.py

"""
================================================================================
HYDROLOGY MODEL
================================================================================
Approximates drainage from the local terrain around a point rather than
simulating a drainage network. Valleys, wet climates and low, flat land
accumulate flow; a dedicated river noise field breaks the result into
channel-like patterns.

Data Contract:
---------------
- Inputs:
    - bank (FieldBank), longitude, latitude (degrees): scalars or arrays.
    - terrain_height (optional): Pre-computed centre terrain heights.
- Outputs:
    - flow accumulation [0, 1], river flags and widths in meters [0, 500].
- Side Effects: None.
- Invariants: There is no flow in the ocean and rivers only exist on land.
================================================================================
"""

import numpy as np

from . import climate
from . import config as DEFAULTS
from . import terrain
from .projection import geo_to_world, normalize


def _precipitation_factor(bank, longitude, latitude, terrain_height):
    surface = terrain.surface_altitude(bank, longitude, latitude, terrain_height)
    precip = climate.precipitation(bank, longitude, latitude, surface, terrain_height)
    return np.clip(precip / 1500.0, 0.1, 1.5)


def flow_accumulation(bank, longitude, latitude, terrain_height=None):
    """Normalised upstream drainage proxy [0, 1]."""
    lon, lat = normalize(longitude, latitude)
    if terrain_height is None:
        terrain_height = terrain.height(bank, lon, lat)
    step = DEFAULTS.FLOW_SAMPLE_STEP_DEG

    north = terrain.height(bank, lon, lat + step)
    south = terrain.height(bank, lon, lat - step)
    east = terrain.height(bank, lon + step, lat)
    west = terrain.height(bank, lon - step, lat)

    # Points lower than their surroundings collect water.
    avg_neighbor = (north + south + east + west) / 4.0
    valley_factor = np.clip((avg_neighbor - terrain_height) / 50.0, 0.0, 1.0)

    # Slope in meters per degree, like the pressure gradient.
    gradient = np.hypot(east - west, north - south) / (2.0 * step)
    gradient_factor = np.clip(gradient / 500.0, 0.2, 1.5)

    precip_factor = _precipitation_factor(bank, lon, lat, terrain_height)

    x, y, z = geo_to_world(lon, lat)
    noise_factor = bank.river.sample01(x, y, z) ** 2

    flow = (valley_factor * 0.4 + precip_factor * 0.25 + noise_factor * 0.35) * gradient_factor
    elevation_factor = np.select(
        [terrain_height < 100.0, terrain_height < 500.0, terrain_height > 3000.0],
        [2.0, 1.3, 0.4],
        default=1.0,
    )
    flow = np.clip(flow * elevation_factor, 0.0, 1.0)
    return np.where(terrain_height < bank.config.sea_level, 0.0, flow)


def is_river(bank, longitude, latitude, terrain_height=None):
    if terrain_height is None:
        terrain_height = terrain.height(bank, longitude, latitude)
    flow = flow_accumulation(bank, longitude, latitude, terrain_height)
    return (flow > DEFAULTS.RIVER_FLOW_THRESHOLD) & (terrain_height > bank.config.sea_level)


def river_width(bank, longitude, latitude, terrain_height=None):
    """River width in meters; 0 where there is no river."""
    if terrain_height is None:
        terrain_height = terrain.height(bank, longitude, latitude)
    flow = flow_accumulation(bank, longitude, latitude, terrain_height)
    river = (flow > DEFAULTS.RIVER_FLOW_THRESHOLD) & (terrain_height > bank.config.sea_level)

    # Lowland rivers spread out: up to 5x wider at sea level than at 500m.
    elevation_factor = 1.0 + 4.0 * np.clip((500.0 - terrain_height) / 500.0, 0.0, 1.0)
    precip_factor = _precipitation_factor(bank, longitude, latitude, terrain_height)

    strength = (flow - DEFAULTS.RIVER_FLOW_THRESHOLD) / (1.0 - DEFAULTS.RIVER_FLOW_THRESHOLD)
    width = 5.0 + strength ** 2 * 40.0 * elevation_factor * precip_factor
    width = np.clip(width, 0.0, DEFAULTS.MAX_RIVER_WIDTH_M)
    return np.where(river, width, 0.0)
