"""Tests for world configuration loading and validation."""

import json
import math

import pytest

from planet_generator import config as DEFAULTS
from planet_generator.settings import ConfigError, WorldConfig, load_config


class TestWorldConfigDefaults:
    """Tests for the default configuration."""

    def test_defaults_match_constants(self):
        cfg = WorldConfig()
        assert cfg.seed == 12345
        assert cfg.world_scale == 1.0
        assert cfg.day_of_year == 172
        assert cfg.equator_temperature == 30.0
        assert cfg.pole_temperature == -40.0
        assert cfg.temperature_lapse_rate == 6.5
        assert cfg.sea_level == 0.0
        assert cfg.max_terrain_height == 8848.0
        assert (cfg.terrain_frequency, cfg.terrain_octaves) == (0.001, 6)
        assert (cfg.terrain_lacunarity, cfg.terrain_gain) == (2.0, 0.5)
        assert (cfg.moisture_frequency, cfg.moisture_octaves) == (0.002, 4)

    def test_defaults_are_valid(self):
        assert WorldConfig().validate() == WorldConfig()

    def test_config_is_immutable(self):
        cfg = WorldConfig()
        with pytest.raises(AttributeError):
            cfg.seed = 1

    def test_seed_offsets_keep_shared_values(self):
        """Some fields deliberately share seed offsets."""
        assert DEFAULTS.OIL_SEED_OFFSET == DEFAULTS.RIVER_SEED_OFFSET
        assert DEFAULTS.CLOUD_SEED_OFFSET == DEFAULTS.VOLCANO_SEED_OFFSET
        assert DEFAULTS.WEATHER_SEED_OFFSET == DEFAULTS.COAL_SEED_OFFSET
        assert DEFAULTS.PRESSURE_SEED_OFFSET == DEFAULTS.IRON_SEED_OFFSET


class TestFromDict:
    """Tests for merging user overrides over the defaults."""

    def test_missing_keys_fall_back_to_defaults(self):
        cfg = WorldConfig.from_dict({'seed': 99})
        assert cfg.seed == 99
        assert cfg.terrain_octaves == DEFAULTS.TERRAIN_OCTAVES

    def test_unknown_keys_are_rejected(self):
        with pytest.raises(ConfigError, match="terrain_octavs"):
            WorldConfig.from_dict({'terrain_octavs': 3})

    def test_round_trip_through_dict(self):
        cfg = WorldConfig(seed=7, day_of_year=10)
        assert WorldConfig.from_dict(cfg.to_dict()) == cfg

    def test_replace_returns_new_config(self):
        cfg = WorldConfig()
        changed = cfg.replace(seed=1)
        assert changed.seed == 1
        assert cfg.seed == DEFAULTS.DEFAULT_SEED


class TestValidation:
    """Tests for fail-fast validation."""

    @pytest.mark.parametrize("changes", [
        {'seed': -1},
        {'seed': 2 ** 64},
        {'seed': 1.5},
        {'seed': True},
        {'day_of_year': 365},
        {'day_of_year': -1},
        {'terrain_octaves': 0},
        {'moisture_octaves': 2.0},
        {'terrain_frequency': 0.0},
        {'moisture_frequency': -0.002},
        {'terrain_lacunarity': 0.0},
        {'terrain_gain': -0.5},
        {'world_scale': 0.0},
        {'world_scale': DEFAULTS.MAX_WORLD_SCALE + 0.5},
        {'world_scale': 100.0},
        {'max_terrain_height': -1.0},
        {'temperature_lapse_rate': -0.1},
        {'equator_temperature': math.nan},
        {'sea_level': math.inf},
        {'pole_temperature': "cold"},
    ])
    def test_invalid_values_raise(self, changes):
        with pytest.raises(ConfigError):
            WorldConfig().replace(**changes).validate()

    def test_largest_world_scale_is_valid(self):
        WorldConfig(world_scale=DEFAULTS.MAX_WORLD_SCALE).validate()

    def test_largest_seed_is_valid(self):
        WorldConfig(seed=2 ** 64 - 1).validate()

    def test_config_error_is_value_error(self):
        assert issubclass(ConfigError, ValueError)


class TestLoadConfig:
    """Tests for reading configuration files."""

    def test_top_level_parameters(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({'seed': 5, 'day_of_year': 80}))
        cfg = load_config(str(path))
        assert (cfg.seed, cfg.day_of_year) == (5, 80)

    def test_nested_parameters(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({'world_generation_parameters': {'seed': 8}}))
        assert load_config(str(path)).seed == 8

    def test_invalid_json_raises_config_error(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError):
            load_config(str(path))

    def test_non_object_raises_config_error(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("[1, 2, 3]")
        with pytest.raises(ConfigError):
            load_config(str(path))

    def test_invalid_values_are_validated(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({'terrain_octaves': 0}))
        with pytest.raises(ConfigError):
            load_config(str(path))
