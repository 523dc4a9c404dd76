"""Tests for simplex, fractal and cellular noise and the field bank."""

import math

import numpy as np
import pytest

from planet_generator import noise
from planet_generator.cellular import CellularNoise, generate_feature_points
from planet_generator.fields import CellularField, NoiseField, build_field_bank
from planet_generator.projection import geo_to_world
from planet_generator.settings import WorldConfig


@pytest.fixture(scope="module")
def sphere_points():
    """Points on the sampling sphere."""
    rng = np.random.default_rng(0)
    lons = rng.uniform(-180.0, 180.0, 500)
    lats = rng.uniform(-90.0, 90.0, 500)
    return geo_to_world(lons, lats)


class TestFractalNoise:
    """Tests for the JIT-compiled fractal simplex noise."""

    def test_permutation_table_is_doubled(self):
        perm = noise.make_permutation_table(42)
        assert perm.shape == (512,)
        assert np.array_equal(perm[:256], perm[256:])
        assert sorted(perm[:256]) == list(range(256))

    def test_deterministic_output(self, sphere_points):
        """Same seed and coordinates should produce bit-identical values."""
        a = NoiseField(42, 0.01, octaves=4).sample(*sphere_points)
        b = NoiseField(42, 0.01, octaves=4).sample(*sphere_points)
        assert np.array_equal(a, b)

    def test_different_seeds_produce_different_values(self, sphere_points):
        a = NoiseField(42, 0.01, octaves=4).sample(*sphere_points)
        b = NoiseField(43, 0.01, octaves=4).sample(*sphere_points)
        assert not np.array_equal(a, b)

    @pytest.mark.parametrize("kind", [noise.FRACTAL_FBM, noise.FRACTAL_RIDGED])
    def test_value_range(self, sphere_points, kind):
        values = NoiseField(7, 0.02, octaves=6, kind=kind).sample(*sphere_points)
        assert np.all(values >= -1.0) and np.all(values <= 1.0)
        assert np.std(values) > 0.0

    def test_sample01_range(self, sphere_points):
        values = NoiseField(7, 0.02, octaves=3).sample01(*sphere_points)
        assert np.all(values >= 0.0) and np.all(values <= 1.0)

    def test_output_follows_input_shape(self):
        field = NoiseField(1, 0.01)
        assert field.sample(1.0, 2.0, 3.0).shape == ()
        assert field.sample(np.zeros((3, 4)), 0.0, 0.0).shape == (3, 4)

    def test_single_octave_matches_fractal_with_one_octave(self, sphere_points):
        field = NoiseField(3, 0.01, octaves=1)
        assert np.array_equal(field.sample(*sphere_points), field.sample_octave(*sphere_points, 0.01))


class TestCellularNoise:
    """Tests for the KD-tree backed cellular noise."""

    def test_feature_points_are_deterministic(self):
        assert np.array_equal(generate_feature_points(5, 6.0), generate_feature_points(5, 6.0))

    def test_feature_points_depend_on_seed(self):
        assert not np.array_equal(generate_feature_points(5, 6.0), generate_feature_points(6, 6.0))

    def test_feature_points_hug_the_shell(self):
        points = generate_feature_points(5, 6.0)
        norms = np.linalg.norm(points, axis=1)
        assert np.all(np.abs(norms - 6.0) < 3.0 + math.sqrt(3.0))

    def test_nearest_feature_is_within_one_cell(self, sphere_points):
        cells = CellularNoise(11, 0.008)
        distance = cells.distance(*sphere_points)
        assert np.all(distance >= 0.0)
        assert np.all(distance < math.sqrt(3.0))

    def test_sample_range(self, sphere_points):
        field = CellularField(11, 0.008)
        values = field.sample01(*sphere_points)
        assert np.all(values >= 0.0) and np.all(values <= 1.0)
        # Some points must sit close to a feature point.
        assert np.min(values) < 0.5


class TestFieldBank:
    """Tests for the per-configuration bank of fields."""

    def test_identical_config_gives_identical_fields(self, sphere_points):
        a = build_field_bank(WorldConfig())
        b = build_field_bank(WorldConfig())
        for name in ('terrain', 'moisture', 'iron', 'volcano', 'oil', 'pressure'):
            assert np.array_equal(getattr(a, name).sample(*sphere_points), getattr(b, name).sample(*sphere_points))

    def test_fields_use_offset_seeds(self):
        bank = build_field_bank(WorldConfig(seed=100))
        assert bank.terrain.seed == 100
        assert bank.moisture.seed == 1100
        assert bank.oil.seed == bank.river.seed == 4100
        assert bank.cloud.seed == bank.volcano.seed == 5100

    def test_world_scale_scales_frequencies(self):
        bank = build_field_bank(WorldConfig(world_scale=2.0))
        assert bank.terrain.frequency == pytest.approx(0.002)
        assert bank.moisture.frequency == pytest.approx(0.004)

    def test_bank_is_immutable(self):
        bank = build_field_bank(WorldConfig())
        with pytest.raises(AttributeError):
            bank.terrain = None
