"""Tests for solar geometry and insolation."""

import numpy as np
import pytest

from planet_generator import astronomy
from planet_generator.fields import build_field_bank
from planet_generator.settings import WorldConfig


class TestSolarGeometry:
    """Tests for declination, solar time and elevation."""

    @pytest.mark.parametrize("day, expected", [(172, 23.44), (354.5, -23.44)])
    def test_declination_extremes(self, day, expected):
        assert astronomy.solar_declination(day) == pytest.approx(expected, abs=1e-9)

    def test_declination_near_equinox(self):
        assert abs(astronomy.solar_declination(80)) < 1.0

    def test_local_solar_time(self):
        assert astronomy.local_solar_time(0.0, 12.0) == pytest.approx(12.0)
        assert astronomy.local_solar_time(90.0, 12.0) == pytest.approx(18.0)
        assert astronomy.local_solar_time(-90.0, 3.0) == pytest.approx(21.0)
        assert astronomy.local_solar_time(540.0, 12.0) == pytest.approx(0.0)

    def test_hour_angle_zero_at_noon(self):
        assert astronomy.hour_angle(0.0, 12.0) == pytest.approx(0.0)
        assert astronomy.hour_angle(0.0, 6.0) == pytest.approx(-90.0)

    def test_noon_elevation_on_equator(self, bank):
        # At solar noon on the equator the sun stands at 90 - |declination|.
        expected = 90.0 - astronomy.solar_declination(bank.config.day_of_year)
        assert astronomy.solar_elevation(bank, 0.0, 0.0, 12.0) == pytest.approx(expected)

    def test_polar_day_and_night(self, bank):
        hours = np.arange(0.0, 24.0, 1.0)
        # Default day is the June solstice.
        assert np.all(astronomy.is_daylight(bank, 0.0, 89.5, hours))
        assert not np.any(astronomy.is_daylight(bank, 0.0, -89.5, hours))

    def test_day_of_year_changes_sun(self):
        summer = build_field_bank(WorldConfig(day_of_year=172))
        winter = build_field_bank(WorldConfig(day_of_year=355))
        assert astronomy.solar_elevation(summer, 0.0, 50.0, 12.0) > astronomy.solar_elevation(winter, 0.0, 50.0, 12.0)


class TestInsolation:
    """Tests for surface insolation."""

    def test_bounds_and_night(self, bank, grid):
        lons, lats = grid
        for hour in (0.0, 5.5, 12.0, 18.25):
            for cloud in (0.0, 0.5, 1.0):
                value = astronomy.insolation(bank, lons, lats, hour, cloud)
                daylight = astronomy.is_daylight(bank, lons, lats, hour)
                assert np.all(value >= 0.0) and np.all(value <= 1400.0)
                assert np.array_equal(value == 0.0, ~daylight)

    def test_clouds_reduce_insolation(self, bank):
        clear = astronomy.insolation(bank, 0.0, 0.0, 12.0, 0.0)
        overcast = astronomy.insolation(bank, 0.0, 0.0, 12.0, 1.0)
        assert overcast == pytest.approx(clear * 0.3)

    def test_clear_noon_value(self, bank):
        elevation = astronomy.solar_elevation(bank, 0.0, 0.0, 12.0)
        sin_e = np.sin(np.radians(elevation))
        expected = 1361.0 * sin_e * 0.7 ** (1.0 / sin_e)
        assert astronomy.insolation(bank, 0.0, 0.0, 12.0, 0.0) == pytest.approx(expected)
