# planet_generator/projection.py

"""Geographic coordinate sanitising and projection onto the sampling sphere."""

import numpy as np

from . import config as DEFAULTS


def wrap_longitude(longitude):
    """Wraps longitude into [-180, 180)."""
    return np.mod(np.asarray(longitude, dtype=np.float64) + 180.0, 360.0) - 180.0


def clamp_latitude(latitude):
    return np.clip(np.asarray(latitude, dtype=np.float64), -90.0, 90.0)


def normalize(longitude, latitude):
    """Returns (wrapped longitude, clamped latitude) as float arrays."""
    return wrap_longitude(longitude), clamp_latitude(latitude)


def geo_to_world(longitude, latitude, radius: float = DEFAULTS.SPHERE_RADIUS):
    """
    Projects geographic coordinates onto the surface of a sphere so that noise
    sampled in 3D is continuous across the date line and at the poles.
    Works element-wise on scalars and arrays.
    """
    lon, lat = normalize(longitude, latitude)
    lon_rad = np.radians(lon)
    lat_rad = np.radians(lat)

    x = radius * np.cos(lat_rad) * np.cos(lon_rad)
    y = radius * np.cos(lat_rad) * np.sin(lon_rad)
    z = radius * np.sin(lat_rad)
    return x, y, z
