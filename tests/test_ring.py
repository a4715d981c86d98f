"""
Tests for ring normalization
"""

import pytest

from memorial.errors import InsufficientVerticesError
from memorial.geometry.ring import clean_points, normalize_ring


def test_closing_duplicate_is_removed(square_points):
    closed = square_points + [square_points[0]]
    vertices = normalize_ring(closed)
    assert len(vertices) == 4
    assert (vertices[-1].east, vertices[-1].north) == (10.0, 0.0)


def test_near_closing_duplicate_is_removed(square_points):
    closed = square_points + [(0.0005, 0.0)]
    assert len(normalize_ring(closed)) == 4


def test_closing_point_outside_tolerance_is_kept(square_points):
    points = square_points + [(0.01, 0.0)]
    assert len(normalize_ring(points)) == 5


def test_consecutive_micro_edges_are_dropped():
    points = [(0.0, 0.0), (0.0, 10.0), (0.0, 10.0004), (10.0, 10.0), (10.0, 0.0)]
    vertices = normalize_ring(points)
    assert [(v.east, v.north) for v in vertices] == [
        (0.0, 0.0), (0.0, 10.0), (10.0, 10.0), (10.0, 0.0)
    ]


def test_vertices_are_numbered_from_one(square_points):
    vertices = normalize_ring(square_points)
    assert [v.index for v in vertices] == [1, 2, 3, 4]


def test_custom_tolerance():
    points = [(0.0, 0.0), (0.05, 0.0), (0.0, 10.0), (10.0, 10.0)]
    assert len(normalize_ring(points, tolerance=0.1)) == 3


@pytest.mark.parametrize("points", [
    [],
    [(0.0, 0.0)],
    [(0.0, 0.0), (5.0, 5.0)],
    [(0.0, 0.0), (5.0, 5.0), (0.0, 0.0)],
    [(1.0, 1.0), (1.0002, 1.0), (1.0004, 1.0), (1.0, 1.0)],
])
def test_insufficient_vertices(points):
    with pytest.raises(InsufficientVerticesError) as exc_info:
        normalize_ring(points, parcel_name="Lot 99")
    assert exc_info.value.vertex_count < 3
    assert exc_info.value.parcel_name == "Lot 99"
    assert exc_info.value.code == "insufficient_vertices"


def test_clean_points_keeps_order():
    points = [(3.0, 0.0), (3.0, 4.0), (0.0, 4.0), (3.0, 0.0)]
    assert clean_points(points) == ((3.0, 0.0), (3.0, 4.0), (0.0, 4.0))
