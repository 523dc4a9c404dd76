# planet_generator/climate.py

"""
================================================================================
CLIMATE MODEL
================================================================================
Long-term climate quantities: moisture, temperature, humidity, annual
precipitation, prevailing wind and the altitude pressure profile.

Data Contract:
---------------
- Inputs:
    - bank (FieldBank): The noise fields and configuration.
    - longitude, latitude (degrees), altitude (meters): scalars or arrays.
    - terrain_height (optional): Pre-computed terrain heights for the same
      points, to avoid recalculating them.
- Outputs:
    - NumPy arrays (or 0-d arrays for scalar input) in physical units:
      Celsius, mm/year, m/s, compass degrees, hPa, or [0, 1] fractions.
- Side Effects: None.
================================================================================
"""

import numpy as np

from . import config as DEFAULTS
from . import terrain
from .projection import geo_to_world, normalize
from .types import PrecipitationType


def moisture(bank, longitude, latitude):
    """Moisture [0, 1]: noise plus a wetter-towards-the-equator bias."""
    x, y, z = geo_to_world(longitude, latitude)
    _, lat = normalize(longitude, latitude)
    noise01 = bank.moisture.sample01(x, y, z)
    lat_factor = 1.0 - np.abs(lat) / 90.0
    return np.clip(noise01 * 0.7 + lat_factor * 0.3, 0.0, 1.0)


def base_temperature(bank, latitude, altitude):
    """Latitude and altitude temperature in Celsius, without local variation."""
    cfg = bank.config
    lat = np.clip(np.asarray(latitude, dtype=np.float64), -90.0, 90.0)
    lat_factor = np.abs(lat) / 90.0 # 0 at equator, 1 at poles
    base_temp = cfg.equator_temperature - (cfg.equator_temperature - cfg.pole_temperature) * lat_factor
    return base_temp - np.asarray(altitude, dtype=np.float64) / 1000.0 * cfg.temperature_lapse_rate


def temperature(bank, longitude, latitude, altitude):
    x, y, z = geo_to_world(longitude, latitude)
    variation = bank.temperature_variation.sample(x, y, z) * DEFAULTS.TEMPERATURE_VARIATION_C
    return base_temperature(bank, latitude, altitude) + variation


def humidity(bank, longitude, latitude, altitude, temperature_c=None):
    """
    Relative humidity [0, 1]. Cold air holds less water, so the same moisture
    gives a higher relative humidity. Very high altitudes are dry.
    """
    if temperature_c is None:
        temperature_c = temperature(bank, longitude, latitude, altitude)
    altitude = np.asarray(altitude, dtype=np.float64)

    temp_factor = 1.0 - np.clip((temperature_c - 10.0) / 40.0, 0.0, 0.5)
    result = moisture(bank, longitude, latitude) * (0.5 + temp_factor)

    high_altitude_factor = np.clip(1.0 - (altitude - 3000.0) / 5000.0, 0.2, 1.0)
    result = np.where(altitude > 3000.0, result * high_altitude_factor, result)
    return np.clip(result, 0.0, 1.0)


def precipitation(bank, longitude, latitude, altitude, terrain_height=None, temperature_c=None):
    """Annual precipitation in mm/year."""
    if terrain_height is None:
        terrain_height = terrain.height(bank, longitude, latitude)
    if temperature_c is None:
        temperature_c = temperature(bank, longitude, latitude, altitude)
    altitude = np.asarray(altitude, dtype=np.float64)

    base_precip = moisture(bank, longitude, latitude) * 2000.0
    # Warmer air holds more moisture.
    base_precip = base_precip * np.clip((temperature_c + 10.0) / 40.0, 0.1, 1.5)

    # Mountain slopes catch orographic rain; very high altitudes are dry.
    orographic = (terrain_height > 500.0) & (terrain_height < 3000.0)
    base_precip = np.where(
        orographic,
        base_precip * 1.3,
        np.where(altitude > 4000.0, base_precip * 0.5, base_precip),
    )
    return np.clip(base_precip, 0.0, DEFAULTS.MAX_PRECIPITATION_MM)


def precipitation_type(bank, longitude, latitude, altitude, terrain_height=None):
    """PrecipitationType values as an integer array."""
    temp = temperature(bank, longitude, latitude, altitude)
    precip = precipitation(bank, longitude, latitude, altitude, terrain_height, temperature_c=temp)
    return np.select(
        [precip < 100.0, temp < -2.0, temp < 2.0],
        [PrecipitationType.NONE, PrecipitationType.SNOW, PrecipitationType.SLEET],
        default=PrecipitationType.RAIN,
    ).astype(int)


def air_pressure(altitude):
    """Barometric pressure in hPa: P0 * exp(-altitude / scale_height)."""
    altitude = np.asarray(altitude, dtype=np.float64)
    return DEFAULTS.SEA_LEVEL_PRESSURE_HPA * np.exp(-altitude / DEFAULTS.ATMOSPHERE_SCALE_HEIGHT_M)


# --- Prevailing Winds ---

def _band_speed(latitude):
    """Band wind speed, strongest in the middle of each circulation cell."""
    abs_lat = np.abs(latitude)
    speed = np.zeros_like(abs_lat)
    band_start = 0.0
    for band_end, min_speed, max_speed in DEFAULTS.WIND_BANDS:
        in_band = (abs_lat >= band_start) & (abs_lat <= band_end)
        position = np.clip((abs_lat - band_start) / (band_end - band_start), 0.0, 1.0)
        band = min_speed + (max_speed - min_speed) * np.sin(np.pi * position)
        speed = np.where(in_band & (speed == 0.0), band, speed)
        band_start = band_end
    return speed


def _roughness_factor(terrain_height, altitude, sea_level):
    """Surface drag from terrain, fading out and turning into shear with height."""
    roughness = np.select(
        [terrain_height > 2000.0, terrain_height > 500.0],
        [0.6, 0.8],
        default=1.0,
    )
    height_above_ground = np.maximum(altitude - np.maximum(terrain_height, sea_level), 0.0)
    relax = np.clip(height_above_ground / 1000.0, 0.0, 1.0)
    shear = 1.0 + 0.5 * np.clip(height_above_ground / 5000.0, 0.0, 1.0)
    return (roughness + (1.0 - roughness) * relax) * shear


def wind_speed(bank, longitude, latitude, altitude, terrain_height=None):
    """Average wind speed in m/s."""
    if terrain_height is None:
        terrain_height = terrain.height(bank, longitude, latitude)
    _, lat = normalize(longitude, latitude)
    x, y, z = geo_to_world(longitude, latitude)
    altitude = np.asarray(altitude, dtype=np.float64)

    noise_speed = bank.wind.sample01(x, y, z) * DEFAULTS.WIND_NOISE_MAX_SPEED
    speed = _band_speed(lat) * 0.6 + noise_speed * 0.4
    return speed * _roughness_factor(terrain_height, altitude, bank.config.sea_level)


def _band_bearing(latitude):
    """
    Compass bearing the prevailing wind blows from: NE/SE trades, SW/NW
    westerlies and NE/SE polar easterlies depending on hemisphere.
    """
    abs_lat = np.abs(latitude)
    north = latitude >= 0.0
    trades_or_polar = np.where(north, 45.0, 135.0)
    westerlies = np.where(north, 225.0, 315.0)
    in_westerlies = (abs_lat >= 30.0) & (abs_lat < 60.0)
    return np.where(in_westerlies, westerlies, trades_or_polar)


def wind_direction(bank, longitude, latitude, altitude=0.0):
    """Prevailing wind bearing in degrees [0, 360), 0 = North."""
    _, lat = normalize(longitude, latitude)
    x, y, z = geo_to_world(longitude, latitude)
    # Rotated coordinates decorrelate the jitter from the wind speed noise.
    jitter = bank.wind.sample(z, x, y) * DEFAULTS.WIND_DIRECTION_JITTER_DEG
    bearing = np.mod(_band_bearing(lat) + jitter, 360.0)
    return np.broadcast_to(bearing, np.broadcast(bearing, altitude).shape).copy()
