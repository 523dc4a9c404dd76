"""Tests for flow accumulation and rivers."""

import numpy as np

from planet_generator import hydrology, terrain


class TestFlowAccumulation:
    """Tests for the drainage proxy."""

    def test_range(self, bank, grid):
        flow = hydrology.flow_accumulation(bank, *grid)
        assert np.all(flow >= 0.0) and np.all(flow <= 1.0)

    def test_no_flow_in_ocean(self, bank, grid):
        heights = terrain.height(bank, *grid)
        flow = hydrology.flow_accumulation(bank, *grid)
        assert np.all(flow[heights < bank.config.sea_level] == 0.0)

    def test_precomputed_terrain_gives_same_result(self, bank, grid):
        heights = terrain.height(bank, *grid)
        assert np.array_equal(
            hydrology.flow_accumulation(bank, *grid, heights),
            hydrology.flow_accumulation(bank, *grid),
        )


class TestRivers:
    """Tests for river detection and width."""

    def test_rivers_only_on_land(self, bank):
        lons, lats = np.meshgrid(np.arange(-180.0, 180.0, 0.5), np.arange(-60.0, 60.0, 2.0))
        lons, lats = lons.ravel(), lats.ravel()
        rivers = hydrology.is_river(bank, lons, lats)
        heights = terrain.height(bank, lons, lats)
        assert np.all(heights[rivers] > bank.config.sea_level)

    def test_rivers_exist(self, bank):
        lons, lats = np.meshgrid(np.arange(-180.0, 180.0, 0.5), np.arange(-60.0, 60.0, 2.0))
        assert np.any(hydrology.is_river(bank, lons.ravel(), lats.ravel()))

    def test_width_matches_river_flag(self, bank, grid):
        rivers = hydrology.is_river(bank, *grid)
        widths = hydrology.river_width(bank, *grid)
        assert np.all(widths[~rivers] == 0.0)
        assert np.all(widths[rivers] >= 5.0)
        assert np.all(widths <= 500.0)
