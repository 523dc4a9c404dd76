# planet_generator/astronomy.py

"""
================================================================================
ASTRONOMY MODEL
================================================================================
Solar geometry for a location and hour: declination, hour angle, elevation,
daylight and surface insolation.

Data Contract:
---------------
- Inputs:
    - bank (FieldBank): Supplies the configured day of year.
    - longitude, latitude (degrees), hour (0-24, UTC-like world time).
    - cloud_density [0, 1] for insolation.
- Outputs:
    - Angles in degrees, insolation in W/m^2 within [0, 1400].
- Side Effects: None.
- Invariants: Insolation is zero exactly when the sun is at or below the
  horizon.
================================================================================
"""

import numpy as np

from . import config as DEFAULTS
from .projection import normalize


def solar_declination(day_of_year):
    """Solar declination in degrees for a day of the year."""
    day = np.asarray(day_of_year, dtype=np.float64)
    return DEFAULTS.AXIAL_TILT_DEG * np.cos(2.0 * np.pi * (day - 172.0) / DEFAULTS.DAYS_PER_YEAR)


def local_solar_time(longitude, hour):
    """Local solar time in hours [0, 24): 15 degrees of longitude per hour."""
    lon = np.mod(np.asarray(longitude, dtype=np.float64) + 180.0, 360.0) - 180.0
    return np.mod(np.asarray(hour, dtype=np.float64) + lon / 15.0, DEFAULTS.HOURS_PER_DAY)


def hour_angle(longitude, hour):
    """Hour angle in degrees; 0 at local solar noon, negative in the morning."""
    return (local_solar_time(longitude, hour) - 12.0) * 15.0


def solar_elevation(bank, longitude, latitude, hour):
    """Elevation of the sun above the horizon in degrees."""
    lon, lat = normalize(longitude, latitude)
    lat_rad = np.radians(lat)
    dec_rad = np.radians(solar_declination(bank.config.day_of_year))
    ha_rad = np.radians(hour_angle(lon, hour))

    sin_elevation = (
        np.sin(lat_rad) * np.sin(dec_rad)
        + np.cos(lat_rad) * np.cos(dec_rad) * np.cos(ha_rad)
    )
    return np.degrees(np.arcsin(np.clip(sin_elevation, -1.0, 1.0)))


def is_daylight(bank, longitude, latitude, hour):
    return solar_elevation(bank, longitude, latitude, hour) > 0.0


def insolation(bank, longitude, latitude, hour, cloud_density):
    """
    Surface insolation in W/m^2. Top-of-atmosphere flux is attenuated by the
    air mass along the sun's path (clamped to [1, 10] so the horizon does not
    blow up) and by cloud cover.
    """
    elevation = solar_elevation(bank, longitude, latitude, hour)
    sin_elevation = np.sin(np.radians(elevation))

    airmass = np.clip(1.0 / np.maximum(sin_elevation, 1e-6), 1.0, DEFAULTS.MAX_AIRMASS)
    clear_sky = DEFAULTS.SOLAR_CONSTANT_W_M2 * sin_elevation * DEFAULTS.ATMOSPHERIC_TRANSMITTANCE ** airmass
    cloudy = clear_sky * (1.0 - np.asarray(cloud_density) * DEFAULTS.CLOUD_INSOLATION_BLOCKING)

    result = np.clip(cloudy, 0.0, DEFAULTS.MAX_INSOLATION_W_M2)
    return np.where(elevation > 0.0, result, 0.0)
