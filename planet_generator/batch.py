# planet_generator/batch.py

"""
================================================================================
BATCH QUERY ENGINE
================================================================================
Evaluates many locations and many data types in one call. All locations are
processed together as NumPy arrays, so every domain model runs once per
requested type rather than once per location.

Data Contract:
---------------
- Inputs:
    - bank (FieldBank): The bank to read; callers pass one bank for the whole
      batch so the result is consistent even if the world is reconfigured.
    - locations: A sequence of Location values (or tuples in Location field
      order).
    - types: A sequence of DataType values, in the order results are wanted.
    - logger: A configured Python logging object for runtime messages.
- Outputs:
    - A BatchResult. Each requested channel holds N x k entries, where k is the
      number of requested types writing to that channel, ordered by location
      and then by request order. `by_type` holds one N-length sequence per
      requested DataType.
- Side Effects: Logs a debug summary using the provided logger.
- Invariants:
    - Entries equal the single-location queries, with an altitude of 0
      replaced by the surface altitude at that location.
    - The terrain field is sampled once per location and the resulting height
      and volcano mask are shared by every type (river gradients sample
      neighbouring points of their own).
================================================================================
"""

import logging
import time
from dataclasses import dataclass, field
from enum import IntEnum
from functools import cached_property
from typing import Optional

import numpy as np

from . import astronomy
from . import biomes
from . import climate
from . import geology
from . import hydrology
from . import soil
from . import terrain
from . import weather
from .projection import normalize
from .types import BiomeType, PrecipitationType, SoilType


class DataType(IntEnum):
    TERRAIN_HEIGHT = 0
    BIOME = 1
    TEMPERATURE = 2
    TEMPERATURE_AT_TIME = 3
    PRECIPITATION = 4
    CURRENT_PRECIPITATION = 5
    PRECIPITATION_TYPE = 6
    AIR_PRESSURE = 7
    PRESSURE_AT_LOCATION = 8
    HUMIDITY = 9
    WIND_SPEED = 10
    CURRENT_WIND_SPEED = 11
    WIND_DIRECTION = 12
    CURRENT_WIND_DIRECTION = 13
    IS_RIVER = 14
    RIVER_WIDTH = 15
    FLOW_ACCUMULATION = 16
    IS_VOLCANO = 17
    COAL_DEPOSIT = 18
    IRON_DEPOSIT = 19
    OIL_DEPOSIT = 20
    INSOLATION = 21
    IS_DAYLIGHT = 22
    SOLAR_ANGLE = 23
    VEGETATION_DENSITY = 24
    SOIL_TYPE = 25
    SOIL_FERTILITY = 26
    SOIL_PH = 27
    SOIL_ORGANIC_MATTER = 28
    PRESSURE_GRADIENT = 29
    IS_STORM_FRONT = 30
    CLOUD_DENSITY = 31


# Output channel each data type writes to. Time-varying types share the
# channel of their long-term counterpart.
CHANNELS = {
    DataType.TERRAIN_HEIGHT: 'terrain_height',
    DataType.BIOME: 'biome',
    DataType.TEMPERATURE: 'temperature',
    DataType.TEMPERATURE_AT_TIME: 'temperature',
    DataType.PRECIPITATION: 'precipitation',
    DataType.CURRENT_PRECIPITATION: 'precipitation',
    DataType.PRECIPITATION_TYPE: 'precipitation_type',
    DataType.AIR_PRESSURE: 'air_pressure',
    DataType.PRESSURE_AT_LOCATION: 'air_pressure',
    DataType.HUMIDITY: 'humidity',
    DataType.WIND_SPEED: 'wind_speed',
    DataType.CURRENT_WIND_SPEED: 'wind_speed',
    DataType.WIND_DIRECTION: 'wind_direction',
    DataType.CURRENT_WIND_DIRECTION: 'wind_direction',
    DataType.IS_RIVER: 'is_river',
    DataType.RIVER_WIDTH: 'river_width',
    DataType.FLOW_ACCUMULATION: 'flow_accumulation',
    DataType.IS_VOLCANO: 'is_volcano',
    DataType.COAL_DEPOSIT: 'coal_deposit',
    DataType.IRON_DEPOSIT: 'iron_deposit',
    DataType.OIL_DEPOSIT: 'oil_deposit',
    DataType.INSOLATION: 'insolation',
    DataType.IS_DAYLIGHT: 'is_daylight',
    DataType.SOLAR_ANGLE: 'solar_angle',
    DataType.VEGETATION_DENSITY: 'vegetation_density',
    DataType.SOIL_TYPE: 'soil_type',
    DataType.SOIL_FERTILITY: 'soil_fertility',
    DataType.SOIL_PH: 'soil_ph',
    DataType.SOIL_ORGANIC_MATTER: 'soil_organic_matter',
    DataType.PRESSURE_GRADIENT: 'pressure_gradient',
    DataType.IS_STORM_FRONT: 'is_storm_front',
    DataType.CLOUD_DENSITY: 'cloud_density',
}

# Channels not listed here hold float64 arrays.
BOOL_CHANNELS = {'is_river', 'is_volcano', 'is_daylight', 'is_storm_front'}
ENUM_CHANNELS = {
    'biome': BiomeType,
    'precipitation_type': PrecipitationType,
    'soil_type': SoilType,
}


@dataclass
class Location:
    longitude: float
    latitude: float
    altitude: float = 0.0 # 0 = use the surface altitude
    current_time: float = 0.0 # hour of day, 0-24
    detail_level: float = 1.0


@dataclass
class BatchResult:
    """
    Batch output. A channel is None unless a type writing to it was requested.
    Boolean channels are bool arrays, classification channels are lists of
    enum members, everything else is a float64 array.
    """
    count: int = 0
    terrain_height: Optional[np.ndarray] = None
    biome: Optional[list] = None
    temperature: Optional[np.ndarray] = None
    precipitation: Optional[np.ndarray] = None
    precipitation_type: Optional[list] = None
    air_pressure: Optional[np.ndarray] = None
    humidity: Optional[np.ndarray] = None
    wind_speed: Optional[np.ndarray] = None
    wind_direction: Optional[np.ndarray] = None
    is_river: Optional[np.ndarray] = None
    river_width: Optional[np.ndarray] = None
    flow_accumulation: Optional[np.ndarray] = None
    is_volcano: Optional[np.ndarray] = None
    coal_deposit: Optional[np.ndarray] = None
    iron_deposit: Optional[np.ndarray] = None
    oil_deposit: Optional[np.ndarray] = None
    insolation: Optional[np.ndarray] = None
    is_daylight: Optional[np.ndarray] = None
    solar_angle: Optional[np.ndarray] = None
    vegetation_density: Optional[np.ndarray] = None
    soil_type: Optional[list] = None
    soil_fertility: Optional[np.ndarray] = None
    soil_ph: Optional[np.ndarray] = None
    soil_organic_matter: Optional[np.ndarray] = None
    pressure_gradient: Optional[np.ndarray] = None
    is_storm_front: Optional[np.ndarray] = None
    cloud_density: Optional[np.ndarray] = None
    # Unaliased view: one N-length sequence per requested DataType.
    by_type: dict = field(default_factory=dict)


class _BatchInputs:
    """Location columns plus the per-batch memoised intermediates."""

    def __init__(self, bank, locations):
        self.bank = bank
        columns = np.array(
            [(loc.longitude, loc.latitude, loc.altitude, loc.current_time, loc.detail_level)
             for loc in locations],
            dtype=np.float64,
        ).reshape(-1, 5)
        self.longitude, self.latitude = normalize(columns[:, 0], columns[:, 1])
        self.requested_altitude = columns[:, 2]
        self.hour = columns[:, 3]
        self.detail = columns[:, 4]

    @cached_property
    def base_noise(self):
        # The only terrain field sample taken for the batch's own locations.
        return terrain.terrain_noise(self.bank, self.longitude, self.latitude)

    @cached_property
    def terrain_height(self):
        return terrain.height(self.bank, self.longitude, self.latitude, base_noise=self.base_noise)

    @cached_property
    def volcano(self):
        return terrain.is_volcano(self.bank, self.longitude, self.latitude, base_noise=self.base_noise)

    @cached_property
    def altitude(self):
        surface = terrain.surface_altitude(self.bank, self.longitude, self.latitude, self.terrain_height)
        return np.where(self.requested_altitude == 0.0, surface, self.requested_altitude)

    @cached_property
    def biome(self):
        return biomes.classify(self.bank, self.longitude, self.latitude, self.altitude, self.terrain_height)

    @cached_property
    def cloud_density(self):
        return weather.cloud_density(self.bank, self.longitude, self.latitude, self.hour, self.terrain_height)


def _terrain_height(b):
    if np.any(b.detail > 1.0):
        return terrain.height(b.bank, b.longitude, b.latitude, b.detail, base_noise=b.base_noise)
    return b.terrain_height


def _insolation(b):
    return astronomy.insolation(b.bank, b.longitude, b.latitude, b.hour, b.cloud_density)


_EVALUATORS = {
    DataType.TERRAIN_HEIGHT: _terrain_height,
    DataType.BIOME: lambda b: b.biome,
    DataType.TEMPERATURE: lambda b: climate.temperature(b.bank, b.longitude, b.latitude, b.altitude),
    DataType.TEMPERATURE_AT_TIME: lambda b: weather.temperature_at_time(
        b.bank, b.longitude, b.latitude, b.altitude, b.hour, b.terrain_height),
    DataType.PRECIPITATION: lambda b: climate.precipitation(
        b.bank, b.longitude, b.latitude, b.altitude, b.terrain_height),
    DataType.CURRENT_PRECIPITATION: lambda b: weather.current_precipitation(
        b.bank, b.longitude, b.latitude, b.altitude, b.hour, b.terrain_height),
    DataType.PRECIPITATION_TYPE: lambda b: climate.precipitation_type(
        b.bank, b.longitude, b.latitude, b.altitude, b.terrain_height),
    DataType.AIR_PRESSURE: lambda b: climate.air_pressure(b.altitude),
    DataType.PRESSURE_AT_LOCATION: lambda b: weather.pressure_at_location(
        b.bank, b.longitude, b.latitude, b.altitude, b.hour),
    DataType.HUMIDITY: lambda b: climate.humidity(b.bank, b.longitude, b.latitude, b.altitude),
    DataType.WIND_SPEED: lambda b: climate.wind_speed(
        b.bank, b.longitude, b.latitude, b.altitude, b.terrain_height),
    DataType.CURRENT_WIND_SPEED: lambda b: weather.current_wind_speed(
        b.bank, b.longitude, b.latitude, b.altitude, b.hour, b.terrain_height),
    DataType.WIND_DIRECTION: lambda b: climate.wind_direction(b.bank, b.longitude, b.latitude, b.altitude),
    DataType.CURRENT_WIND_DIRECTION: lambda b: weather.current_wind_direction(
        b.bank, b.longitude, b.latitude, b.altitude, b.hour),
    DataType.IS_RIVER: lambda b: hydrology.is_river(b.bank, b.longitude, b.latitude, b.terrain_height),
    DataType.RIVER_WIDTH: lambda b: hydrology.river_width(b.bank, b.longitude, b.latitude, b.terrain_height),
    DataType.FLOW_ACCUMULATION: lambda b: hydrology.flow_accumulation(
        b.bank, b.longitude, b.latitude, b.terrain_height),
    DataType.IS_VOLCANO: lambda b: b.volcano,
    DataType.COAL_DEPOSIT: lambda b: geology.coal_deposit(b.bank, b.longitude, b.latitude, b.terrain_height),
    DataType.IRON_DEPOSIT: lambda b: geology.iron_deposit(
        b.bank, b.longitude, b.latitude, b.terrain_height, volcano=b.volcano),
    DataType.OIL_DEPOSIT: lambda b: geology.oil_deposit(b.bank, b.longitude, b.latitude, b.terrain_height),
    DataType.INSOLATION: _insolation,
    DataType.IS_DAYLIGHT: lambda b: astronomy.is_daylight(b.bank, b.longitude, b.latitude, b.hour),
    DataType.SOLAR_ANGLE: lambda b: astronomy.solar_elevation(b.bank, b.longitude, b.latitude, b.hour),
    DataType.VEGETATION_DENSITY: lambda b: biomes.vegetation_density(
        b.bank, b.longitude, b.latitude, b.altitude, b.terrain_height, b.biome),
    DataType.SOIL_TYPE: lambda b: soil.classify(
        b.bank, b.longitude, b.latitude, b.altitude, b.terrain_height, b.biome),
    DataType.SOIL_FERTILITY: lambda b: soil.fertility(b.bank, b.longitude, b.latitude, b.altitude, b.terrain_height),
    DataType.SOIL_PH: lambda b: soil.ph(b.bank, b.longitude, b.latitude, b.altitude, b.terrain_height),
    DataType.SOIL_ORGANIC_MATTER: lambda b: soil.organic_matter(
        b.bank, b.longitude, b.latitude, b.altitude, b.terrain_height),
    # Gradients are reported at sea level, matching the single-location query.
    DataType.PRESSURE_GRADIENT: lambda b: weather.pressure_gradient(b.bank, b.longitude, b.latitude, b.hour),
    DataType.IS_STORM_FRONT: lambda b: weather.is_storm_front(b.bank, b.longitude, b.latitude, b.hour),
    DataType.CLOUD_DENSITY: lambda b: b.cloud_density,
}


def _as_location(value) -> Location:
    if isinstance(value, Location):
        return value
    return Location(*value)


def _to_channel(channel: str, values: np.ndarray):
    """Converts raw model output to the channel's public representation."""
    if channel in BOOL_CHANNELS:
        return np.asarray(values, dtype=bool)
    if channel in ENUM_CHANNELS:
        enum_type = ENUM_CHANNELS[channel]
        return [enum_type(int(v)) for v in values]
    return np.asarray(values, dtype=np.float64)


def run_batch(bank, locations, types, logger: logging.Logger = None) -> BatchResult:
    """
    Evaluates every requested type for every location against one bank.
    Raises TypeError for anything that is not a DataType. `count` is always
    the number of locations, including when no types are requested.
    """
    logger = logger or logging.getLogger(__name__)
    types = list(types)
    for data_type in types:
        if not isinstance(data_type, DataType):
            raise TypeError(f"Unsupported batch data type: {data_type!r}")

    locations = [_as_location(loc) for loc in locations]
    count = len(locations)
    result = BatchResult(count=count)
    if not types:
        return result

    start_time = time.perf_counter()
    inputs = _BatchInputs(bank, locations)

    values = {}
    for data_type in dict.fromkeys(types):
        if count:
            raw = np.broadcast_to(_EVALUATORS[data_type](inputs), (count,))
        else:
            raw = np.empty(0)
        values[data_type] = raw
        result.by_type[data_type] = _to_channel(CHANNELS[data_type], raw)

    # Group the requests by channel, keeping request order within each.
    channels = {}
    for data_type in types:
        channels.setdefault(CHANNELS[data_type], []).append(values[data_type])

    for channel, columns in channels.items():
        # Location-major: all of location 0's entries, then location 1's, etc.
        interleaved = np.stack([np.asarray(c, dtype=np.float64) for c in columns], axis=1).ravel()
        setattr(result, channel, _to_channel(channel, interleaved))

    elapsed = time.perf_counter() - start_time
    logger.debug(
        f"Batch of {count} locations x {len(types)} types "
        f"({len(channels)} channels) evaluated in {elapsed:.3f}s."
    )
    return result
