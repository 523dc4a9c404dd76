# planet_generator/terrain.py

"""
================================================================================
TERRAIN MODEL
================================================================================
Synthesises the height field from the terrain noise, with optional
level-of-detail octaves and a volcano cone overlay.

Data Contract:
---------------
- Inputs:
    - bank (FieldBank): The noise fields and configuration.
    - longitude, latitude: Degrees, scalars or NumPy arrays.
    - detail: Level-of-detail multiplier (>= 1.0).
- Outputs:
    - Height in meters relative to sea level 0 (negative underwater).
- Side Effects: None.
- Invariants: Ocean depth never exceeds 4000m below 0. Volcano cones are only
  ever added on land and never depend on the detail level.
================================================================================
"""

import numpy as np

from . import config as DEFAULTS
from .projection import geo_to_world


def _detail_noise(bank, x, y, z, detail):
    """
    Extra octaves blended into the base noise for detail levels above 1.0.
    Returns zero wherever no extra octaves apply.
    """
    detail = np.maximum(np.asarray(detail, dtype=np.float64), 1.0)
    extra_octaves = np.minimum(
        DEFAULTS.DETAIL_MAX_EXTRA_OCTAVES, np.floor(np.log2(detail))
    ).astype(int)
    weight = np.minimum(1.0, (detail - 1.0) / DEFAULTS.DETAIL_BLEND_RANGE)

    field = bank.terrain
    # The extra octaves continue the fractal series above the configured octaves.
    frequency = field.frequency * field.lacunarity ** field.octaves
    amplitude = DEFAULTS.DETAIL_INITIAL_AMPLITUDE
    total = np.zeros(np.broadcast(x, detail).shape)
    for octave in range(int(np.max(extra_octaves, initial=0))):
        contribution = field.sample_octave(x, y, z, frequency) * amplitude
        total = total + np.where(extra_octaves > octave, contribution, 0.0)
        frequency *= 2.0
        amplitude *= 0.5
    return total * weight


def shape_noise(noise_value):
    """Steep falloff below zero (oceans), gentle power curve above (continents)."""
    n = np.asarray(noise_value, dtype=np.float64)
    ocean = -((n * n) ** 2)
    land = np.power(np.maximum(n, 0.0), DEFAULTS.LAND_SHAPING_EXPONENT)
    return np.where(n < 0.0, ocean, land)


def terrain_noise(bank, longitude, latitude):
    """The raw terrain noise value in [-1, 1] at detail level 1."""
    x, y, z = geo_to_world(longitude, latitude)
    return bank.terrain.sample(x, y, z)


def base_height(bank, longitude, latitude, detail=1.0, base_noise=None):
    """
    Terrain height before the volcano overlay. A pre-computed terrain noise
    value may be passed in to avoid sampling the terrain field again.
    """
    x, y, z = geo_to_world(longitude, latitude)
    noise_value = bank.terrain.sample(x, y, z) if base_noise is None else base_noise
    if np.any(np.asarray(detail) > 1.0):
        noise_value = np.clip(noise_value + _detail_noise(bank, x, y, z, detail), -1.0, 1.0)

    shaped = shape_noise(noise_value)
    return np.where(
        shaped < 0.0,
        shaped * DEFAULTS.OCEAN_FLOOR_DEPTH_M,
        shaped * bank.config.max_terrain_height,
    )


def volcano_cell(bank, longitude, latitude):
    """The volcano cellular field remapped to [0, 1] (0 = at a vent)."""
    x, y, z = geo_to_world(longitude, latitude)
    return bank.volcano.sample01(x, y, z)


def volcano_cone(bank, longitude, latitude, base):
    """Height added by volcano cones on top of a base height."""
    cell = volcano_cell(bank, longitude, latitude)
    threshold = DEFAULTS.VOLCANO_CELL_THRESHOLD
    inside = (cell < threshold) & (base > bank.config.sea_level)

    distance_factor = np.clip(1.0 - cell / threshold, 0.0, 1.0)
    elevation_preference = np.clip((base - 300.0) / 1500.0, 0.2, 1.0)
    cone = distance_factor ** 3 * DEFAULTS.VOLCANO_MAX_CONE_HEIGHT_M * elevation_preference

    # Crater: the summit dips by up to 40% towards the vent.
    crater_start = DEFAULTS.VOLCANO_CRATER_START
    crater_depth = np.clip((distance_factor - crater_start) / (1.0 - crater_start), 0.0, 1.0)
    cone = cone * (1.0 - DEFAULTS.VOLCANO_CRATER_MAX_DIP * crater_depth)

    return np.where(inside, cone, 0.0)


def height(bank, longitude, latitude, detail=1.0, base_noise=None):
    """
    Final terrain height in meters.

    The volcano overlay is placed and sized on the detail-1 base height, so
    a cone keeps its footprint and height at every detail level. Where extra
    octaves push the detailed base below sea level inside a cone footprint,
    the cone is still added on top of the detailed base.
    """
    if base_noise is None:
        base_noise = terrain_noise(bank, longitude, latitude)
    reference = base_height(bank, longitude, latitude, base_noise=base_noise)
    if np.all(np.asarray(detail) <= 1.0):
        base = reference
    else:
        base = base_height(bank, longitude, latitude, detail, base_noise=base_noise)
    return base + volcano_cone(bank, longitude, latitude, reference)


def is_volcano(bank, longitude, latitude, base_noise=None):
    base = base_height(bank, longitude, latitude, base_noise=base_noise)
    cell = volcano_cell(bank, longitude, latitude)
    return (base > bank.config.sea_level) & (cell < DEFAULTS.VOLCANO_CELL_THRESHOLD)


def surface_altitude(bank, longitude, latitude, terrain_height=None):
    """Altitude of the ground or, over the ocean, of the sea surface."""
    if terrain_height is None:
        terrain_height = height(bank, longitude, latitude)
    return np.maximum(terrain_height, bank.config.sea_level)
