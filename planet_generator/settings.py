# planet_generator/settings.py

"""
================================================================================
WORLD CONFIGURATION
================================================================================
The immutable parameter set for one generation of a world. Defaults come from
`config.py`; user values are merged over them with `WorldConfig.from_dict`.

Data Contract:
---------------
- Inputs: a dictionary of overrides, a JSON file, or keyword arguments.
- Outputs: a frozen, validated WorldConfig.
- Side Effects: None.
- Invariants: A WorldConfig is never mutated. Use `replace()` to derive a new
  one; hand the result to `World.set_config` to rebuild the noise fields.
================================================================================
"""

import json
import math
import dataclasses
from dataclasses import dataclass, asdict

from . import config as DEFAULTS


class ConfigError(ValueError):
    """Raised when a configuration cannot be used to build a world."""


@dataclass(frozen=True)
class WorldConfig:
    seed: int = DEFAULTS.DEFAULT_SEED
    world_scale: float = DEFAULTS.DEFAULT_WORLD_SCALE
    day_of_year: int = DEFAULTS.DEFAULT_DAY_OF_YEAR

    # Temperature parameters (Celsius)
    equator_temperature: float = DEFAULTS.EQUATOR_TEMPERATURE_C
    pole_temperature: float = DEFAULTS.POLE_TEMPERATURE_C
    temperature_lapse_rate: float = DEFAULTS.TEMPERATURE_LAPSE_RATE_C_PER_KM

    # Terrain parameters (meters)
    sea_level: float = DEFAULTS.SEA_LEVEL_M
    max_terrain_height: float = DEFAULTS.MAX_TERRAIN_HEIGHT_M

    # Noise parameters
    terrain_frequency: float = DEFAULTS.TERRAIN_FREQUENCY
    terrain_octaves: int = DEFAULTS.TERRAIN_OCTAVES
    terrain_lacunarity: float = DEFAULTS.TERRAIN_LACUNARITY
    terrain_gain: float = DEFAULTS.TERRAIN_GAIN

    moisture_frequency: float = DEFAULTS.MOISTURE_FREQUENCY
    moisture_octaves: int = DEFAULTS.MOISTURE_OCTAVES

    @classmethod
    def from_dict(cls, config: dict) -> "WorldConfig":
        """
        Builds a config from user overrides. Missing keys fall back to the
        internal defaults; unknown keys are rejected so typos fail loudly.
        """
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(config) - known)
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")

        return cls(
            seed=config.get('seed', DEFAULTS.DEFAULT_SEED),
            world_scale=config.get('world_scale', DEFAULTS.DEFAULT_WORLD_SCALE),
            day_of_year=config.get('day_of_year', DEFAULTS.DEFAULT_DAY_OF_YEAR),
            equator_temperature=config.get('equator_temperature', DEFAULTS.EQUATOR_TEMPERATURE_C),
            pole_temperature=config.get('pole_temperature', DEFAULTS.POLE_TEMPERATURE_C),
            temperature_lapse_rate=config.get('temperature_lapse_rate', DEFAULTS.TEMPERATURE_LAPSE_RATE_C_PER_KM),
            sea_level=config.get('sea_level', DEFAULTS.SEA_LEVEL_M),
            max_terrain_height=config.get('max_terrain_height', DEFAULTS.MAX_TERRAIN_HEIGHT_M),
            terrain_frequency=config.get('terrain_frequency', DEFAULTS.TERRAIN_FREQUENCY),
            terrain_octaves=config.get('terrain_octaves', DEFAULTS.TERRAIN_OCTAVES),
            terrain_lacunarity=config.get('terrain_lacunarity', DEFAULTS.TERRAIN_LACUNARITY),
            terrain_gain=config.get('terrain_gain', DEFAULTS.TERRAIN_GAIN),
            moisture_frequency=config.get('moisture_frequency', DEFAULTS.MOISTURE_FREQUENCY),
            moisture_octaves=config.get('moisture_octaves', DEFAULTS.MOISTURE_OCTAVES),
        )

    def to_dict(self) -> dict:
        return asdict(self)

    def replace(self, **changes) -> "WorldConfig":
        """Returns a copy of this config with the given fields changed."""
        return dataclasses.replace(self, **changes)

    def validate(self) -> "WorldConfig":
        """
        Checks every parameter and raises ConfigError describing the first
        problem found. Returns self so calls can be chained.
        """
        if isinstance(self.seed, bool) or not isinstance(self.seed, int):
            raise ConfigError(f"seed must be an integer, got {self.seed!r}")
        if not 0 <= self.seed <= DEFAULTS.MAX_SEED:
            raise ConfigError(f"seed must be within [0, 2^64 - 1], got {self.seed}")

        if isinstance(self.day_of_year, bool) or not isinstance(self.day_of_year, int):
            raise ConfigError(f"day_of_year must be an integer, got {self.day_of_year!r}")
        if not 0 <= self.day_of_year < DEFAULTS.DAYS_PER_YEAR:
            raise ConfigError(f"day_of_year must be within [0, 364], got {self.day_of_year}")

        for name in ('terrain_octaves', 'moisture_octaves'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ConfigError(f"{name} must be an integer >= 1, got {value!r}")

        floats = (
            'world_scale', 'equator_temperature', 'pole_temperature',
            'temperature_lapse_rate', 'sea_level', 'max_terrain_height',
            'terrain_frequency', 'terrain_lacunarity', 'terrain_gain',
            'moisture_frequency',
        )
        for name in floats:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
                raise ConfigError(f"{name} must be a finite number, got {value!r}")

        for name in ('world_scale', 'max_terrain_height', 'terrain_frequency',
                     'terrain_lacunarity', 'terrain_gain', 'moisture_frequency'):
            if getattr(self, name) <= 0:
                raise ConfigError(f"{name} must be positive, got {getattr(self, name)}")

        if self.world_scale > DEFAULTS.MAX_WORLD_SCALE:
            raise ConfigError(
                f"world_scale must not exceed {DEFAULTS.MAX_WORLD_SCALE}, got {self.world_scale}"
            )

        if self.temperature_lapse_rate < 0:
            raise ConfigError(
                f"temperature_lapse_rate must not be negative, got {self.temperature_lapse_rate}"
            )
        return self


def load_config(path: str) -> WorldConfig:
    """
    Loads a WorldConfig from a JSON file. The parameters may sit at the top
    level or under a 'world_generation_parameters' key.
    """
    try:
        with open(path, 'r') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Could not parse config file '{path}': {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file '{path}' must contain a JSON object")
    params = data.get('world_generation_parameters', data)
    return WorldConfig.from_dict(params).validate()


__all__ = ["ConfigError", "WorldConfig", "load_config"]
