"""
tests/test_grid.py
==================
Tests for the NZTM entry points: degrees/metres at the boundary, rounding
to 6 decimals for degrees and whole metres for grid coordinates.
"""

import math
import os
import sys
import warnings

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from nztm.domain.schemas import GeodeticResult, GridResult
from nztm.exceptions import InvalidInputError, OutOfValidRegionWarning, SingularInputError
from nztm.grid import fixed, geodetic_to_grid, get_nztm_projection, grid_to_geodetic
from nztm.models import ConversionConfig


FIXED_POINTS = [
    # easting, northing, latitude, longitude
    (1783295, 5868193, -37.314852, 175.068489),
    (1375175, 5086098, -44.343561, 170.179492),
]

# Scattered over both main islands and Stewart Island
NZ_GRID_POINTS = [
    (1576041, 6188574),
    (1576542, 5515331),
    (1307103, 4826465),
    (1748735, 5427916),
    (1223500, 4780000),
    (1690000, 6100000),
    (2000000, 5700000),
]


class TestFixedPoints:

    @pytest.mark.parametrize("e, n, lat, lon", FIXED_POINTS)
    def test_grid_to_geodetic(self, e, n, lat, lon):
        result = grid_to_geodetic(e, n)
        assert isinstance(result, GeodeticResult)
        assert result.latitude == pytest.approx(lat, abs=1e-9)
        assert result.longitude == pytest.approx(lon, abs=1e-9)

    @pytest.mark.parametrize("e, n, lat, lon", FIXED_POINTS)
    def test_geodetic_to_grid(self, e, n, lat, lon):
        result = geodetic_to_grid(lat, lon)
        assert isinstance(result, GridResult)
        assert result.easting == e
        assert result.northing == n

    def test_origin(self):
        result = geodetic_to_grid(0.0, 173.0)
        assert result.easting == 1600000
        assert result.northing == 10000000

    def test_false_origin(self):
        result = grid_to_geodetic(1600000, 10000000)
        assert result.latitude == 0.0
        assert result.longitude == 173.0


class TestRoundTrip:

    @pytest.mark.parametrize("e, n", NZ_GRID_POINTS)
    def test_grid_round_trip_within_a_metre(self, e, n):
        geod = grid_to_geodetic(e, n)
        grid = geodetic_to_grid(geod.latitude, geod.longitude)
        assert abs(grid.easting - e) <= 1
        assert abs(grid.northing - n) <= 1

    @pytest.mark.parametrize("lat, lon", [
        (-36.848461, 174.763336),
        (-41.286461, 174.776230),
        (-43.532054, 172.636225),
        (-45.878760, 170.502798),
        (-46.900000, 168.100000),
    ])
    def test_geodetic_round_trip_with_metre_places(self, lat, lon):
        config = ConversionConfig(metre_places=3)
        grid = geodetic_to_grid(lat, lon, config=config)
        geod = grid_to_geodetic(grid.easting, grid.northing, config=config)
        assert abs(geod.latitude - lat) <= 1e-6
        assert abs(geod.longitude - lon) <= 1e-6


class TestResultRecords:

    def test_inputs_are_echoed(self):
        result = grid_to_geodetic(1783295, 5868193)
        assert result.easting == 1783295
        assert result.northing == 5868193

        result = geodetic_to_grid(-37.314852, 175.068489)
        assert result.latitude == -37.314852
        assert result.longitude == 175.068489

    def test_grid_values_are_integers_by_default(self):
        result = geodetic_to_grid(-41.0, 174.0)
        assert isinstance(result.easting, int)
        assert isinstance(result.northing, int)

    def test_numeric_strings_are_parsed(self):
        assert grid_to_geodetic("1783295", "5868193") == grid_to_geodetic(1783295, 5868193)
        echoed = grid_to_geodetic("1783295", 5868193).easting
        assert isinstance(echoed, float) and echoed == 1783295.0

    def test_json_dump(self):
        data = grid_to_geodetic(1783295, 5868193).model_dump()
        assert set(data) == {"easting", "northing", "latitude", "longitude"}

    def test_degree_places_configurable(self):
        result = grid_to_geodetic(1783295, 5868193, config=ConversionConfig(degree_places=2))
        assert result.latitude == -37.31
        assert result.longitude == 175.07


class TestFixedRounding:

    @pytest.mark.parametrize("value, places, expected", [
        (0.5, 0, 1),
        (-0.5, 0, -1),
        (2.5, 0, 3),
        (1783294.4999, 0, 1783294),
        (-37.3148525, 6, -37.314853),
        (175.0684884, 6, 175.068488),
    ])
    def test_half_away_from_zero(self, value, places, expected):
        assert fixed(value, places) == expected

    def test_zero_places_returns_int(self):
        assert isinstance(fixed(12.7, 0), int)

    def test_values_beyond_default_decimal_precision(self):
        assert fixed(-2.19e24, 6) == -2.19e24
        assert fixed(-2.19e24, 0) == -2190000000000000000000000
        assert fixed(123456789012345.67, 14) == 123456789012345.67

    def test_non_finite_values_pass_through(self):
        assert fixed(float("inf"), 0) == float("inf")
        assert math.isnan(fixed(float("nan"), 6))


class TestSharedProjection:

    def test_projection_is_built_once(self):
        assert get_nztm_projection() is get_nztm_projection()

    def test_projection_constants(self):
        tm = get_nztm_projection()
        assert tm.a == 6378137.0
        assert tm.rf == 298.257222101
        assert tm.scalef == 0.9996
        assert tm.falsee == 1600000.0
        assert tm.falsen == 10000000.0
        assert tm.utom == 1.0


class TestInvalidInput:

    @pytest.mark.parametrize("e, n", [
        (float("nan"), 5868193),
        (1783295, float("inf")),
        ("east", 5868193),
        (None, 5868193),
    ])
    def test_bad_grid_values(self, e, n):
        with pytest.raises(InvalidInputError):
            grid_to_geodetic(e, n)

    @pytest.mark.parametrize("lat, lon", [
        (float("nan"), 175.0),
        (-37.0, float("-inf")),
        (-90.5, 175.0),
        (91.0, 175.0),
        ("south", 175.0),
    ])
    def test_bad_geodetic_values(self, lat, lon):
        with pytest.raises(InvalidInputError):
            geodetic_to_grid(lat, lon)

    @pytest.mark.parametrize("lat", [90.0, -90.0])
    def test_pole_is_singular(self, lat):
        with pytest.raises(SingularInputError):
            geodetic_to_grid(lat, 173.0)

    def test_far_from_central_meridian_warns(self):
        with pytest.warns(OutOfValidRegionWarning):
            result = geodetic_to_grid(-41.0, 185.5)
        assert result.easting > 1600000

    def test_envelope_is_configurable(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            geodetic_to_grid(-41.0, 185.5, config=ConversionConfig(max_longitude_offset=15.0))
        with pytest.warns(OutOfValidRegionWarning):
            geodetic_to_grid(-41.0, 176.0, config=ConversionConfig(max_longitude_offset=2.0))

    def test_far_out_easting_still_converts(self):
        with pytest.warns(OutOfValidRegionWarning):
            result = grid_to_geodetic(5e9, 5.0e6)
        assert result.easting == 5e9
        assert math.isfinite(result.latitude)
        assert math.isfinite(result.longitude)

    def test_nz_points_do_not_warn(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            for e, n in NZ_GRID_POINTS:
                grid_to_geodetic(e, n)
