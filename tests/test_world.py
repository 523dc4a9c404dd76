"""Tests for the World query interface."""

import logging

import numpy as np
import pytest

from planet_generator import BiomeType, ConfigError, PrecipitationType, SoilType, World, WorldConfig


class TestQueries:
    """Tests for scalar and array queries."""

    def test_scalar_queries_return_python_types(self, world):
        assert isinstance(world.terrain_height(10.0, 20.0), float)
        assert isinstance(world.is_river(10.0, 20.0), bool)
        assert isinstance(world.biome(10.0, 20.0, 0.0), BiomeType)
        assert isinstance(world.soil_type(10.0, 20.0, 0.0), SoilType)
        assert isinstance(world.precipitation_type(10.0, 20.0, 0.0), PrecipitationType)

    def test_array_queries_return_arrays(self, world, grid):
        lons, lats = grid
        assert world.terrain_height(lons, lats).shape == lons.shape
        assert world.is_volcano(lons, lats).dtype == bool
        assert world.biome(lons, lats, 0.0).dtype.kind == 'i'

    def test_deterministic(self, world):
        queries = [
            lambda: world.terrain_height(12.5, -33.0, 2.0),
            lambda: world.temperature_at_time(12.5, -33.0, 100.0, 7.0),
            lambda: world.current_wind_direction(12.5, -33.0, 100.0, 7.0),
            lambda: world.soil_ph(12.5, -33.0, 100.0),
            lambda: world.oil_deposit(12.5, -33.0),
            lambda: world.insolation(12.5, -33.0, 13.0),
        ]
        for query in queries:
            assert query() == query()

    def test_longitude_periodicity(self, world, grid):
        lons, lats = grid
        assert np.allclose(world.terrain_height(lons + 360.0, lats), world.terrain_height(lons, lats), atol=1e-6)
        assert np.allclose(world.terrain_height(lons - 720.0, lats), world.terrain_height(lons, lats), atol=1e-6)

    @pytest.mark.parametrize("query", [
        lambda w, lat: w.terrain_height(30.0, lat),
        lambda w, lat: w.temperature(30.0, lat, 0.0),
        lambda w, lat: w.precipitation(30.0, lat, 0.0),
        lambda w, lat: w.wind_direction(30.0, lat, 0.0),
        lambda w, lat: w.flow_accumulation(30.0, lat),
        lambda w, lat: w.insolation(30.0, lat, 12.0),
        lambda w, lat: w.pressure_gradient(30.0, lat, 12.0),
        lambda w, lat: w.biome(30.0, lat, 0.0),
        lambda w, lat: w.soil_fertility(30.0, lat, 0.0),
    ])
    def test_latitude_clamp(self, world, query):
        assert query(world, 95.0) == query(world, 90.0)
        assert query(world, -95.0) == query(world, -90.0)

    def test_ocean_biome_consistency(self, world, grid):
        lons, lats = grid
        heights = world.terrain_height(lons, lats)
        oceanic = np.isin(world.biome(lons, lats, 0.0), [BiomeType.OCEAN, BiomeType.DEEP_OCEAN])
        assert np.array_equal(oceanic, heights < world.get_config().sea_level)

    def test_river_gating(self, world, grid):
        lons, lats = grid
        rivers = world.is_river(lons, lats)
        assert np.all(world.terrain_height(lons, lats)[rivers] > world.get_config().sea_level)

    def test_air_pressure(self, world):
        assert world.air_pressure(0.0, 0.0, 0.0) == 1013.25
        assert world.air_pressure(45.0, 45.0, 8848.0) == pytest.approx(357.8, abs=1.0)

    def test_insolation_bounds(self, world, grid):
        lons, lats = grid
        for hour in (0.0, 6.0, 12.0, 21.5):
            value = world.insolation(lons, lats, hour)
            assert np.all((value >= 0.0) & (value <= 1400.0))
            assert np.array_equal(value == 0.0, ~world.is_daylight(lons, lats, hour))

    def test_solar_declination_uses_config(self, world):
        assert world.solar_declination() == pytest.approx(23.44)

    def test_surface_altitude(self, world, grid):
        lons, lats = grid
        expected = np.maximum(world.terrain_height(lons, lats), 0.0)
        assert np.array_equal(world.surface_altitude(lons, lats), expected)

    def test_every_query_accepts_scalars(self, world):
        lon, lat, alt, hour = 100.25, -12.5, 250.0, 16.0
        results = [
            world.moisture(lon, lat), world.humidity(lon, lat, alt),
            world.wind_speed(lon, lat, alt), world.current_wind_speed(lon, lat, alt, hour),
            world.current_precipitation(lon, lat, alt, hour), world.cloud_density(lon, lat, hour),
            world.river_width(lon, lat), world.coal_deposit(lon, lat), world.iron_deposit(lon, lat),
            world.solar_angle(lon, lat, hour), world.vegetation_density(lon, lat, alt),
            world.soil_organic_matter(lon, lat, alt), world.pressure_at_location(lon, lat, alt, hour),
        ]
        assert all(isinstance(r, float) and np.isfinite(r) for r in results)
        assert isinstance(world.is_storm_front(lon, lat, hour), bool)


class TestConfiguration:
    """Tests for construction and reconfiguration."""

    def test_accepts_dict_config(self):
        assert World({'seed': 42}).get_config().seed == 42

    def test_invalid_config_raises(self):
        with pytest.raises(ConfigError):
            World({'terrain_frequency': 0.0})
        with pytest.raises(ConfigError):
            World("seed=1")

    def test_seed_sensitivity(self, grid):
        lons, lats = grid
        a = World({'seed': 1}).terrain_height(lons, lats)
        b = World({'seed': 2}).terrain_height(lons, lats)
        assert not np.array_equal(a, b)

    def test_rebuild_equivalence(self, grid):
        lons, lats = grid
        cfg = WorldConfig(seed=777, day_of_year=30, terrain_octaves=4)
        world = World({'seed': 1})
        world.set_config(cfg)
        fresh = World(cfg)

        assert world.get_config() == cfg
        assert np.array_equal(world.terrain_height(lons, lats), fresh.terrain_height(lons, lats))
        assert np.array_equal(world.insolation(lons, lats, 9.0), fresh.insolation(lons, lats, 9.0))
        assert np.array_equal(world.soil_type(lons, lats, 0.0), fresh.soil_type(lons, lats, 0.0))

    def test_failed_set_config_keeps_previous(self, grid):
        lons, lats = grid
        world = World({'seed': 3})
        before = world.terrain_height(lons, lats)

        with pytest.raises(ConfigError):
            world.set_config({'terrain_octaves': 0})
        with pytest.raises(ConfigError):
            world.set_config({'not_a_key': 1})
        with pytest.raises(ConfigError, match="world_scale"):
            world.set_config(WorldConfig(seed=3, world_scale=100.0))

        assert world.get_config().seed == 3
        assert np.array_equal(world.terrain_height(lons, lats), before)

    def test_reconfiguration_is_logged(self, caplog):
        world = World()
        with caplog.at_level(logging.INFO, logger="planet_generator"):
            world.set_config({'seed': 5})
        assert any("reconfigured" in record.message for record in caplog.records)

    def test_custom_logger(self, caplog):
        logger = logging.getLogger("custom.world")
        with caplog.at_level(logging.DEBUG, logger="custom.world"):
            World(logger=logger)
        assert any(record.name == "custom.world" for record in caplog.records)
