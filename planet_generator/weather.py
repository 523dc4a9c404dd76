# planet_generator/weather.py

"""
================================================================================
WEATHER (TIME-VARYING CLIMATE)
================================================================================
Quantities that change with the hour of day: clouds, current rain, gusting
winds, weather-system pressure, storm fronts and the diurnal temperature.

Weather here is not simulated. Each quantity samples a noise field whose
sampling point drifts along z as time passes, so the pattern moves smoothly
over the surface while staying a pure function of (location, hour).

Data Contract:
---------------
- Inputs:
    - bank (FieldBank), longitude, latitude (degrees), altitude (meters),
      hour (0-24). Scalars or NumPy arrays.
    - terrain_height (optional): Pre-computed terrain heights.
- Outputs:
    - NumPy arrays in physical units.
- Side Effects: None.
================================================================================
"""

import numpy as np

from . import astronomy
from . import climate
from . import config as DEFAULTS
from . import terrain
from .projection import geo_to_world, normalize


def advected_point(longitude, latitude, hour):
    """The projected point shifted along z by the weather drift for an hour."""
    x, y, z = geo_to_world(longitude, latitude)
    return x, y, z + np.asarray(hour, dtype=np.float64) * DEFAULTS.WEATHER_DRIFT_PER_HOUR


def weather_sample01(bank, longitude, latitude, hour):
    x, y, z = advected_point(longitude, latitude, hour)
    return bank.weather.sample01(x, y, z)


def cloud_density(bank, longitude, latitude, hour, terrain_height=None):
    """Cloud cover [0, 1] at the surface below the location."""
    if terrain_height is None:
        terrain_height = terrain.height(bank, longitude, latitude)
    surface = terrain.surface_altitude(bank, longitude, latitude, terrain_height)

    x, y, z = advected_point(longitude, latitude, hour)
    cloud01 = bank.cloud.sample01(x, y, z)

    temp = climate.temperature(bank, longitude, latitude, surface)
    hum = climate.humidity(bank, longitude, latitude, surface, temperature_c=temp)
    precip = climate.precipitation(bank, longitude, latitude, surface, terrain_height, temperature_c=temp)

    density = cloud01 * 0.8 + hum * 0.2
    density = density * 0.6 + np.clip(precip / 3000.0, 0.0, 1.0) * 0.4

    # Very cold air carries little water; warm air convects.
    temp_factor = np.select([temp < -10.0, temp > 25.0], [0.5, 1.2], default=1.0)
    return np.clip(density * temp_factor, 0.0, 1.0)


def current_precipitation(bank, longitude, latitude, altitude, hour, terrain_height=None):
    """Instantaneous precipitation intensity [0, 1]; 0 when it is not raining."""
    precip = climate.precipitation(bank, longitude, latitude, altitude, terrain_height)
    weather01 = weather_sample01(bank, longitude, latitude, hour)

    rain_probability = np.clip(precip / 3000.0, 0.0, 0.8)
    raining = weather01 < rain_probability + DEFAULTS.RAIN_PROBABILITY_BASE
    return np.where(raining, weather01 * weather01, 0.0)


def current_wind_speed(bank, longitude, latitude, altitude, hour, terrain_height=None):
    """Wind speed in m/s including gusts from the moving weather pattern."""
    average = climate.wind_speed(bank, longitude, latitude, altitude, terrain_height)
    return average * (0.5 + weather_sample01(bank, longitude, latitude, hour))


def current_wind_direction(bank, longitude, latitude, altitude, hour):
    """Wind bearing in degrees [0, 360), veering up to +/-45 degrees with the weather."""
    prevailing = climate.wind_direction(bank, longitude, latitude, altitude)
    x, y, z = advected_point(longitude, latitude, hour)
    # A second, rotated sample of the weather field drives the veer.
    shift = bank.weather.sample(y, z, x) * DEFAULTS.CURRENT_WIND_SHIFT_DEG
    return np.mod(prevailing + shift, 360.0)


def pressure_at_location(bank, longitude, latitude, altitude, hour):
    """Surface pressure in hPa: altitude profile plus weather systems and the subtropical high."""
    _, lat = normalize(longitude, latitude)
    x, y, z = advected_point(longitude, latitude, hour)
    weather_systems = bank.pressure.sample(x, y, z) * DEFAULTS.WEATHER_PRESSURE_AMPLITUDE_HPA
    subtropical = np.cos(2.0 * np.radians(lat)) * DEFAULTS.SUBTROPICAL_HIGH_AMPLITUDE_HPA
    return climate.air_pressure(altitude) + weather_systems + subtropical


def pressure_gradient(bank, longitude, latitude, hour, altitude=0.0):
    """Magnitude of the horizontal pressure gradient in hPa per degree."""
    step = DEFAULTS.PRESSURE_GRADIENT_STEP_DEG
    lon, lat = normalize(longitude, latitude)

    north = pressure_at_location(bank, lon, lat + step, altitude, hour)
    south = pressure_at_location(bank, lon, lat - step, altitude, hour)
    east = pressure_at_location(bank, lon + step, lat, altitude, hour)
    west = pressure_at_location(bank, lon - step, lat, altitude, hour)

    d_north = (north - south) / (2.0 * step)
    d_east = (east - west) / (2.0 * step)
    return np.hypot(d_north, d_east)


def is_storm_front(bank, longitude, latitude, hour, altitude=0.0):
    return pressure_gradient(bank, longitude, latitude, hour, altitude) > DEFAULTS.STORM_FRONT_GRADIENT_HPA


def temperature_at_time(bank, longitude, latitude, altitude, hour, terrain_height=None):
    """
    Temperature in Celsius at a given hour. Sunlight warms, clear nights cool,
    and humid air damps both swings.
    """
    base = climate.temperature(bank, longitude, latitude, altitude)
    cloud = cloud_density(bank, longitude, latitude, hour, terrain_height)
    daylight = astronomy.is_daylight(bank, longitude, latitude, hour)

    solar_heating = astronomy.insolation(bank, longitude, latitude, hour, cloud) / 1000.0 * 10.0
    night_cooling = np.where(daylight, 0.0, -5.0 - 10.0 * (1.0 - cloud))
    cloud_cooling = np.where(daylight, -cloud * 5.0, 0.0)

    damping = 0.5 + 0.5 * climate.humidity(bank, longitude, latitude, altitude, temperature_c=base)
    return base + (solar_heating + night_cooling + cloud_cooling) * damping
