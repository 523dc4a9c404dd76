# planet_generator/world.py

"""
================================================================================
WORLD QUERY INTERFACE
================================================================================
This module provides the user-facing `World` class, the single entry point for
querying a generated planet. It owns the noise field bank and forwards every
query to the domain models.

Data Contract:
---------------
- Inputs (on initialization):
    - config: A WorldConfig, a dictionary of overrides, or None for defaults.
    - logger: A configured Python logging object for runtime messages.
- Outputs (from methods):
    - Python floats, bools and enum members for scalar arguments. NumPy arrays
      (enum-valued queries give integer arrays) for array arguments.
- Side Effects: Logs messages using the provided logger.
- Invariants:
    - Every query is a pure function of the configuration and its arguments.
    - Each query reads the field bank once, so a concurrent `set_config`
      never exposes a half-built bank. `set_config` must not be called
      concurrently with itself.
================================================================================
"""

import logging

import numpy as np

from . import astronomy
from . import biomes
from . import climate
from . import geology
from . import hydrology
from . import soil
from . import terrain
from . import weather
from .batch import BatchResult, run_batch
from .fields import FieldBank, build_field_bank
from .settings import ConfigError, WorldConfig
from .types import BiomeType, PrecipitationType, SoilType


def _coerce_config(config) -> WorldConfig:
    if config is None:
        return WorldConfig()
    if isinstance(config, WorldConfig):
        return config
    if isinstance(config, dict):
        return WorldConfig.from_dict(config)
    raise ConfigError(f"Expected a WorldConfig or dict, got {type(config).__name__}")


def _number(value):
    value = np.asarray(value)
    return float(value) if value.ndim == 0 else value.astype(np.float64)


def _flag(value):
    value = np.asarray(value)
    return bool(value) if value.ndim == 0 else value.astype(bool)


def _member(enum_type, value):
    value = np.asarray(value)
    return enum_type(int(value)) if value.ndim == 0 else value.astype(int)


class World:
    """
    A deterministic procedural planet. Longitudes wrap and latitudes are
    clamped, so any numeric coordinates are valid.
    """
    def __init__(self, config=None, logger: logging.Logger = None):
        """
        Initializes the world and builds its noise fields.

        Args:
            config (WorldConfig | dict | None): Generation parameters.
            logger (logging.Logger, optional): The logger for all output.

        Raises:
            ConfigError: If the configuration is invalid.
        """
        self.logger = logger or logging.getLogger(__name__)
        config = _coerce_config(config).validate()
        self.logger.info(f"World initializing with seed {config.seed}...")
        self._bank: FieldBank = build_field_bank(config, self.logger)

    # --- Configuration ---

    def get_config(self) -> WorldConfig:
        return self._bank.config

    def set_config(self, config):
        """
        Replaces the configuration and rebuilds every noise field. On failure
        the previous configuration stays active.
        """
        config = _coerce_config(config).validate()
        new_bank = build_field_bank(config, self.logger)
        self._bank = new_bank
        self.logger.info(f"World reconfigured (seed {config.seed}, scale {config.world_scale}).")

    # --- Terrain ---

    def terrain_height(self, longitude, latitude, detail=1.0):
        """Terrain height in meters; negative below sea level."""
        return _number(terrain.height(self._bank, longitude, latitude, detail))

    def surface_altitude(self, longitude, latitude):
        """Altitude of the ground, or of the sea surface over the ocean."""
        return _number(terrain.surface_altitude(self._bank, longitude, latitude))

    def is_volcano(self, longitude, latitude):
        return _flag(terrain.is_volcano(self._bank, longitude, latitude))

    # --- Climate ---

    def moisture(self, longitude, latitude):
        return _number(climate.moisture(self._bank, longitude, latitude))

    def temperature(self, longitude, latitude, altitude):
        """Long-term mean temperature in Celsius."""
        return _number(climate.temperature(self._bank, longitude, latitude, altitude))

    def temperature_at_time(self, longitude, latitude, altitude, hour):
        return _number(weather.temperature_at_time(self._bank, longitude, latitude, altitude, hour))

    def precipitation(self, longitude, latitude, altitude):
        """Annual precipitation in mm/year."""
        return _number(climate.precipitation(self._bank, longitude, latitude, altitude))

    def current_precipitation(self, longitude, latitude, altitude, hour):
        return _number(weather.current_precipitation(self._bank, longitude, latitude, altitude, hour))

    def precipitation_type(self, longitude, latitude, altitude):
        return _member(PrecipitationType, climate.precipitation_type(self._bank, longitude, latitude, altitude))

    def air_pressure(self, longitude, latitude, altitude):
        """Barometric pressure in hPa. Depends on altitude only."""
        pressure = climate.air_pressure(altitude)
        return _number(np.broadcast_to(pressure, np.broadcast(longitude, latitude, pressure).shape))

    def humidity(self, longitude, latitude, altitude):
        return _number(climate.humidity(self._bank, longitude, latitude, altitude))

    def wind_speed(self, longitude, latitude, altitude):
        return _number(climate.wind_speed(self._bank, longitude, latitude, altitude))

    def wind_direction(self, longitude, latitude, altitude):
        """Bearing the prevailing wind blows from, degrees clockwise from North."""
        return _number(climate.wind_direction(self._bank, longitude, latitude, altitude))

    def current_wind_speed(self, longitude, latitude, altitude, hour):
        return _number(weather.current_wind_speed(self._bank, longitude, latitude, altitude, hour))

    def current_wind_direction(self, longitude, latitude, altitude, hour):
        return _number(weather.current_wind_direction(self._bank, longitude, latitude, altitude, hour))

    def cloud_density(self, longitude, latitude, hour):
        return _number(weather.cloud_density(self._bank, longitude, latitude, hour))

    def pressure_at_location(self, longitude, latitude, altitude, hour):
        return _number(weather.pressure_at_location(self._bank, longitude, latitude, altitude, hour))

    def pressure_gradient(self, longitude, latitude, hour):
        """Horizontal pressure gradient magnitude in hPa per degree."""
        return _number(weather.pressure_gradient(self._bank, longitude, latitude, hour))

    def is_storm_front(self, longitude, latitude, hour):
        return _flag(weather.is_storm_front(self._bank, longitude, latitude, hour))

    # --- Hydrology ---

    def is_river(self, longitude, latitude):
        return _flag(hydrology.is_river(self._bank, longitude, latitude))

    def river_width(self, longitude, latitude):
        return _number(hydrology.river_width(self._bank, longitude, latitude))

    def flow_accumulation(self, longitude, latitude):
        return _number(hydrology.flow_accumulation(self._bank, longitude, latitude))

    # --- Geology ---

    def coal_deposit(self, longitude, latitude):
        return _number(geology.coal_deposit(self._bank, longitude, latitude))

    def iron_deposit(self, longitude, latitude):
        return _number(geology.iron_deposit(self._bank, longitude, latitude))

    def oil_deposit(self, longitude, latitude):
        return _number(geology.oil_deposit(self._bank, longitude, latitude))

    # --- Astronomy ---

    def insolation(self, longitude, latitude, hour):
        """Surface insolation in W/m^2 under the local cloud cover."""
        bank = self._bank
        cloud = weather.cloud_density(bank, longitude, latitude, hour)
        return _number(astronomy.insolation(bank, longitude, latitude, hour, cloud))

    def is_daylight(self, longitude, latitude, hour):
        return _flag(astronomy.is_daylight(self._bank, longitude, latitude, hour))

    def solar_angle(self, longitude, latitude, hour):
        """Solar elevation above the horizon in degrees."""
        return _number(astronomy.solar_elevation(self._bank, longitude, latitude, hour))

    def solar_declination(self):
        """Solar declination in degrees for the configured day of year."""
        return _number(astronomy.solar_declination(self._bank.config.day_of_year))

    # --- Biomes & Soils ---

    def biome(self, longitude, latitude, altitude):
        return _member(BiomeType, biomes.classify(self._bank, longitude, latitude, altitude))

    def vegetation_density(self, longitude, latitude, altitude):
        return _number(biomes.vegetation_density(self._bank, longitude, latitude, altitude))

    def soil_type(self, longitude, latitude, altitude):
        return _member(SoilType, soil.classify(self._bank, longitude, latitude, altitude))

    def soil_fertility(self, longitude, latitude, altitude):
        return _number(soil.fertility(self._bank, longitude, latitude, altitude))

    def soil_ph(self, longitude, latitude, altitude):
        return _number(soil.ph(self._bank, longitude, latitude, altitude))

    def soil_organic_matter(self, longitude, latitude, altitude):
        return _number(soil.organic_matter(self._bank, longitude, latitude, altitude))

    # --- Batch ---

    def batch_query(self, locations, types) -> BatchResult:
        """
        Evaluates many locations and data types at once. See `batch.run_batch`
        for the layout of the result.
        """
        return run_batch(self._bank, locations, types, self.logger)
