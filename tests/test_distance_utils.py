"""Tests for great-circle and closest-point helpers."""

import numpy as np
import pytest

from safety_aware_routing.data.distance_utils import (
    closest_point_on_segment,
    coordinate_distance,
    find_closest_segment_point,
    get_bounds,
    haversine_distance,
    haversine_distance_array
)
from helpers import P1, P2, make_segment


def test_haversine_known_distances():
    assert haversine_distance(49.28, -123.12, 49.28, -123.12) == 0
    # one thousandth of a degree of latitude
    assert haversine_distance(49.280, -123.12, 49.281, -123.12) == pytest.approx(0.1112, abs=1e-3)
    assert coordinate_distance(P1, P2) == coordinate_distance(P2, P1)


def test_haversine_array_matches_scalar():
    lats = np.array([49.281, 49.29, 49.28])
    lons = np.array([-123.119, -123.10, -123.12])
    dists = haversine_distance_array(49.28, -123.12, lats, lons)
    expected = [haversine_distance(49.28, -123.12, la, lo) for la, lo in zip(lats, lons)]
    assert dists == pytest.approx(expected)


def test_closest_point_projects_and_clamps():
    start, end = (0.0, 0.0), (0.0, 2.0)
    assert closest_point_on_segment((1.0, 1.0), start, end) == (0.0, 1.0)
    assert closest_point_on_segment((1.0, -5.0), start, end) == start
    assert closest_point_on_segment((1.0, 9.0), start, end) == end


def test_zero_length_piece_returns_its_point():
    assert closest_point_on_segment((3.0, 4.0), (1.0, 1.0), (1.0, 1.0)) == (1.0, 1.0)


def test_find_closest_segment_point():
    near = make_segment('near', [(49.28, -123.12), (49.28, -123.11)])
    far = make_segment('far', [(49.30, -123.12), (49.30, -123.11)])
    point, segment, dist = find_closest_segment_point((49.281, -123.115), [far, near])
    assert segment.id == 'near'
    assert point == pytest.approx((49.28, -123.115))
    assert dist == pytest.approx(0.1112, abs=1e-3)

    assert find_closest_segment_point(P1, []) == (None, None, float('inf'))


def test_get_bounds():
    assert get_bounds([P1, P2, (49.0, -124.0)]) == {
        'lat_min': 49.0, 'lat_max': 49.281, 'lon_min': -124.0, 'lon_max': -123.119
    }
