"""
Test Spatial Filter (Point-in-Polygon over Restaurants)
=======================================================

Pure geometry: no map surface, no drawing state.

Usage:
    pytest test_spatial_filter.py
"""

import numpy as np
import pytest

from scribble_data.schemas import Restaurant
from scribble_zone.geometry import GeoPoint, GeoRing, SpatialFilter, filter_restaurants

SQUARE = [(-74.0, 40.7), (-73.0, 40.7), (-73.0, 41.0), (-74.0, 41.0)]


def make_restaurants():
    return [
        Restaurant(id="inside", longitude=-73.5, latitude=40.8),
        Restaurant(id="west", longitude=-75.0, latitude=40.8),
        Restaurant(id="no-lat", longitude=-73.5, latitude=None),
        Restaurant(id="corner", longitude=-74.0, latitude=40.7),
        Restaurant(id="nan", longitude=float("nan"), latitude=40.8),
        Restaurant(id="edge", longitude=-73.5, latitude=41.0),
        Restaurant(id="north", longitude=-73.5, latitude=42.0),
    ]


def ids(restaurants):
    return [r.id for r in restaurants]


def test_square_includes_inside_excludes_outside():
    """Point inside the square is kept, point west of it is not."""
    restaurants = [
        Restaurant(id="a", longitude=-73.5, latitude=40.8),
        Restaurant(id="b", longitude=-75.0, latitude=40.8),
    ]
    assert ids(filter_restaurants(restaurants, SQUARE)) == ["a"]


def test_filter_is_idempotent():
    restaurants = make_restaurants()
    first = filter_restaurants(restaurants, SQUARE)
    second = filter_restaurants(restaurants, SQUARE)
    assert first == second
    assert first is not second


@pytest.mark.parametrize("ring", [None, [], [(-74.0, 40.7)], [(-74.0, 40.7), (-73.0, 41.0)]])
def test_short_ring_means_no_filter(ring):
    """Fewer than 3 points: every restaurant with usable coordinates, in order."""
    result = filter_restaurants(make_restaurants(), ring)
    assert ids(result) == ["inside", "west", "corner", "edge", "north"]


def test_orientation_does_not_matter():
    restaurants = make_restaurants()
    ring = GeoRing(points=tuple(SQUARE))
    assert filter_restaurants(restaurants, ring) == filter_restaurants(restaurants, ring.reversed())


def test_first_vertex_is_inside():
    ring = GeoRing(points=tuple(SQUARE))
    assert ring.contains_point(ring.points[0])
    assert ring.reversed().contains_point(ring.points[0])


def test_boundary_points_are_inside():
    ring = GeoRing(points=tuple(SQUARE))
    assert ring.contains_point((-73.5, 40.7))   # bottom edge
    assert ring.contains_point((-73.0, 40.85))  # right edge
    assert ring.contains_point((-73.0, 41.0))   # vertex
    assert not ring.contains_point((-72.9999, 40.85))


def test_missing_or_non_finite_coordinates_excluded():
    """Invalid coordinates never pass, with or without a ring."""
    for ring in (None, SQUARE):
        result = ids(filter_restaurants(make_restaurants(), ring))
        assert "no-lat" not in result
        assert "nan" not in result


def test_output_preserves_input_order():
    restaurants = make_restaurants()
    result = filter_restaurants(restaurants, SQUARE)
    assert ids(result) == ["inside", "corner", "edge"]

    reordered = list(reversed(restaurants))
    assert ids(filter_restaurants(reordered, SQUARE)) == ["edge", "corner", "inside"]


def test_concave_ring_excludes_notch():
    # L-shape: notch at the top-right quadrant
    ring = [(0, 0), (2, 0), (2, 1), (1, 1), (1, 2), (0, 2)]
    restaurants = [
        Restaurant(id="foot", longitude=1.5, latitude=0.5),
        Restaurant(id="notch", longitude=1.5, latitude=1.5),
        Restaurant(id="stem", longitude=0.5, latitude=1.5),
        Restaurant(id="inner-corner", longitude=1.0, latitude=1.0),
    ]
    assert ids(filter_restaurants(restaurants, ring)) == ["foot", "stem", "inner-corner"]


def test_self_intersecting_ring_uses_even_odd():
    # Bow-tie: two triangles meeting at (1, 1)
    ring = [(0, 0), (2, 2), (2, 0), (0, 2)]
    restaurants = [
        Restaurant(id="left", longitude=0.3, latitude=1.0),
        Restaurant(id="right", longitude=1.7, latitude=1.0),
        Restaurant(id="top", longitude=1.0, latitude=1.7),
    ]
    assert ids(filter_restaurants(restaurants, ring)) == ["left", "right"]


def test_detect_returns_mask_aligned_with_input():
    mask = SpatialFilter.detect(SQUARE, make_restaurants())
    assert mask.dtype == bool
    assert mask.tolist() == [True, False, False, True, False, True, False]


def test_detect_empty_input():
    assert SpatialFilter.detect(SQUARE, []).shape == (0,)
    assert filter_restaurants([], SQUARE) == []


def test_ring_drops_duplicate_closing_point():
    ring = GeoRing(points=tuple(SQUARE + [SQUARE[0]]))
    assert len(ring) == 4
    assert ring.closed_vertices().shape == (5, 2)
    assert np.array_equal(ring.closed_vertices()[0], ring.closed_vertices()[-1])


def test_ring_bounding_box():
    bbox = GeoRing(points=tuple(SQUARE)).bounding_box()
    assert (bbox.min_lng, bbox.min_lat, bbox.max_lng, bbox.max_lat) == (-74.0, 40.7, -73.0, 41.0)
    assert bbox.center.lng == -73.5
    assert bbox.center.lat == pytest.approx(40.85)


def test_geo_point_rejects_non_finite():
    with pytest.raises(ValueError):
        GeoPoint(lng=float("inf"), lat=0.0)


@pytest.mark.parametrize("ring", [
    [(-74.0, 40.7), (-73.0, float("nan")), (-73.0, 41.0)],
    [(-74.0, 40.7), (float("inf"), 40.7), (-73.0, 41.0), (-74.0, 41.0)],
    [(-74.0, 40.7), ("east", 40.7), (-73.0, 41.0)],
])
def test_ring_with_unusable_vertex_means_no_filter(ring):
    result = filter_restaurants(make_restaurants(), ring)
    assert ids(result) == ["inside", "west", "corner", "edge", "north"]
