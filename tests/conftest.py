"""Pytest configuration and shared fixtures for planet generator tests."""

import numpy as np
import pytest

from planet_generator import World


@pytest.fixture(scope="session")
def world():
    """A world with the default configuration. Treat as read-only."""
    return World()


@pytest.fixture(scope="session")
def bank(world):
    """The noise field bank of the default world."""
    return world._bank


@pytest.fixture(scope="session")
def grid():
    """
    Flattened (longitudes, latitudes) of a global grid. Every coordinate is
    exactly representable so wrapping never perturbs it.
    """
    lons = np.arange(-180.0, 180.0, 7.5) + 0.25
    lats = np.arange(-86.0, 90.0, 4.0) + 0.5
    lon_grid, lat_grid = np.meshgrid(lons, lats)
    return lon_grid.ravel(), lat_grid.ravel()
