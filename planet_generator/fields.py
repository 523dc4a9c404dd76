# planet_generator/fields.py

"""
================================================================================
NOISE FIELD BANK
================================================================================
This module builds the set of independently seeded noise fields that every
domain model samples: one field per domain (terrain, moisture, temperature
variation, wind, river, volcano, coal, iron, oil, cloud, weather, pressure).

Data Contract:
---------------
- Inputs (on build):
    - config (WorldConfig): A validated configuration.
    - logger: A configured Python logging object for runtime messages.
- Outputs:
    - A FieldBank: an immutable value holding the config and all fields.
- Side Effects: Logs messages using the provided logger.
- Invariants: Given the same configuration, every field of the bank produces
  bit-identical output. A bank is never modified after it is built; a new
  configuration always produces a brand new bank.
================================================================================
"""

import logging
import time
from dataclasses import dataclass

import numpy as np

from . import config as DEFAULTS
from . import noise
from .cellular import CellularNoise
from .settings import WorldConfig


def _as_flat_arrays(x, y, z):
    """Broadcasts coordinates and flattens them for the JIT kernels."""
    bx, by, bz = np.broadcast_arrays(
        np.asarray(x, dtype=np.float64),
        np.asarray(y, dtype=np.float64),
        np.asarray(z, dtype=np.float64),
    )
    shape = bx.shape
    flat = tuple(np.ascontiguousarray(a).ravel() for a in (bx, by, bz))
    return shape, flat


class NoiseField:
    """A fractal simplex noise field with its own seed and profile."""

    def __init__(self, seed: int, frequency: float, octaves: int = 1, lacunarity: float = 2.0,
                 gain: float = 0.5, kind: int = noise.FRACTAL_FBM):
        self.seed = seed
        self.frequency = frequency
        self.octaves = octaves
        self.lacunarity = lacunarity
        self.gain = gain
        self.kind = kind
        self._p = noise.make_permutation_table(seed)

    def sample(self, x, y, z):
        """Samples the field. Returns an array shaped like the broadcast inputs, in [-1, 1]."""
        shape, (fx, fy, fz) = _as_flat_arrays(x, y, z)
        values = noise.fractal_noise_3d(
            self._p, fx, fy, fz,
            self.frequency, self.octaves, self.lacunarity, self.gain, self.kind
        )
        return values.reshape(shape)

    def sample_octave(self, x, y, z, frequency: float):
        """Samples a single octave of the same field at an arbitrary frequency."""
        shape, (fx, fy, fz) = _as_flat_arrays(x, y, z)
        values = noise.fractal_noise_3d(self._p, fx, fy, fz, frequency, 1, 2.0, 0.5, noise.FRACTAL_FBM)
        return values.reshape(shape)

    def sample01(self, x, y, z):
        """Samples the field remapped to [0, 1]."""
        return (self.sample(x, y, z) + 1.0) * 0.5


class CellularField:
    """Adapter giving a CellularNoise the same sampling interface as NoiseField."""

    def __init__(self, seed: int, frequency: float):
        self.seed = seed
        self.frequency = frequency
        self._cells = CellularNoise(seed, frequency)

    def sample(self, x, y, z):
        shape, (fx, fy, fz) = _as_flat_arrays(x, y, z)
        return self._cells.sample(fx, fy, fz).reshape(shape)

    def sample01(self, x, y, z):
        return (self.sample(x, y, z) + 1.0) * 0.5


@dataclass(frozen=True)
class FieldBank:
    """Every noise field for one configuration. Built by `build_field_bank`."""
    config: WorldConfig
    terrain: NoiseField
    moisture: NoiseField
    temperature_variation: NoiseField
    wind: NoiseField
    river: NoiseField
    volcano: CellularField
    coal: NoiseField
    iron: NoiseField
    oil: CellularField
    cloud: NoiseField
    weather: NoiseField
    pressure: NoiseField


def _profiled_field(seed: int, profile: tuple, scale: float, kind: int = noise.FRACTAL_FBM) -> NoiseField:
    frequency, octaves, lacunarity, gain = profile
    return NoiseField(seed, frequency * scale, octaves, lacunarity, gain, kind)


def build_field_bank(config: WorldConfig, logger: logging.Logger = None) -> FieldBank:
    """
    Builds a complete, fully initialised bank of noise fields for a config.
    The caller is responsible for validating the config first.
    """
    logger = logger or logging.getLogger(__name__)
    start_time = time.perf_counter()
    seed = config.seed
    scale = config.world_scale

    bank = FieldBank(
        config=config,
        terrain=NoiseField(
            seed + DEFAULTS.TERRAIN_SEED_OFFSET,
            config.terrain_frequency * scale,
            config.terrain_octaves,
            config.terrain_lacunarity,
            config.terrain_gain,
        ),
        moisture=NoiseField(
            seed + DEFAULTS.MOISTURE_SEED_OFFSET,
            config.moisture_frequency * scale,
            config.moisture_octaves,
        ),
        temperature_variation=_profiled_field(
            seed + DEFAULTS.TEMPERATURE_VARIATION_SEED_OFFSET, DEFAULTS.TEMPERATURE_VARIATION_NOISE, scale
        ),
        wind=_profiled_field(seed + DEFAULTS.WIND_SEED_OFFSET, DEFAULTS.WIND_NOISE, scale),
        river=_profiled_field(seed + DEFAULTS.RIVER_SEED_OFFSET, DEFAULTS.RIVER_NOISE, scale),
        volcano=CellularField(seed + DEFAULTS.VOLCANO_SEED_OFFSET, DEFAULTS.VOLCANO_CELL_FREQUENCY * scale),
        coal=_profiled_field(seed + DEFAULTS.COAL_SEED_OFFSET, DEFAULTS.COAL_NOISE, scale),
        iron=_profiled_field(seed + DEFAULTS.IRON_SEED_OFFSET, DEFAULTS.IRON_NOISE, scale, noise.FRACTAL_RIDGED),
        oil=CellularField(seed + DEFAULTS.OIL_SEED_OFFSET, DEFAULTS.OIL_CELL_FREQUENCY * scale),
        cloud=_profiled_field(seed + DEFAULTS.CLOUD_SEED_OFFSET, DEFAULTS.CLOUD_NOISE, scale),
        weather=_profiled_field(seed + DEFAULTS.WEATHER_SEED_OFFSET, DEFAULTS.WEATHER_NOISE, scale),
        pressure=_profiled_field(seed + DEFAULTS.PRESSURE_SEED_OFFSET, DEFAULTS.PRESSURE_NOISE, scale),
    )

    logger.debug(
        f"Cellular fields: volcano={len(bank.volcano._cells.points)} features, "
        f"oil={len(bank.oil._cells.points)} features."
    )
    elapsed = time.perf_counter() - start_time
    logger.info(f"Noise field bank built for seed {seed} (scale {scale}) in {elapsed:.3f}s.")
    return bank
