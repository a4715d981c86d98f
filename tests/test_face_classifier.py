"""
Tests for face classification
"""

import pytest
from loguru import logger

from memorial.analysis.face_classifier import (
    FaceClassifier,
    classify,
    frontage_side,
    rear_side,
    sides_with_role,
    suggest_frontage_index,
)
from memorial.errors import InvalidFrontageIndexError
from memorial.geometry.ring import normalize_ring
from memorial.geometry.sides import build_sides
from memorial.models import ConfrontantKind, FaceRole, Side


def _sides(points):
    return build_sides(normalize_ring(points))


def _roles(sides):
    return [s.face_role for s in sides]


def test_square_with_frontage_on_first_side(square_vertices):
    classified = classify(build_sides(square_vertices), 0)
    assert _roles(classified) == [
        FaceRole.FRONTAGE, FaceRole.LEFT, FaceRole.REAR, FaceRole.RIGHT
    ]
    assert (classified[2].from_vertex, classified[2].to_vertex) == (3, 4)


def test_square_with_frontage_on_third_side(square_vertices):
    classified = classify(build_sides(square_vertices), 2)
    assert _roles(classified) == [
        FaceRole.REAR, FaceRole.RIGHT, FaceRole.FRONTAGE, FaceRole.LEFT
    ]


def test_at_most_one_frontage_and_rear():
    sides = _sides([(0, 0), (1, 6), (5, 9), (10, 8), (12, 3), (8, -1), (3, -2)])
    for index in range(len(sides)):
        classified = classify(sides, index)
        assert len(sides_with_role(classified, FaceRole.FRONTAGE)) == 1
        assert len(sides_with_role(classified, FaceRole.REAR)) <= 1
        assert FaceRole.UNCLASSIFIED not in _roles(classified)


def test_classification_is_idempotent(square_vertices):
    sides = build_sides(square_vertices)
    first = classify(sides, 1)
    assert classify(sides, 1) == first
    # Feeding classified sides back in gives the same answer
    assert classify(first, 1) == first


def test_reclassification_resets_previous_roles(square_vertices):
    sides = build_sides(square_vertices)
    first = classify(sides, 0)
    second = classify(first, 1)
    assert second == classify(sides, 1)
    assert second[0].face_role == FaceRole.RIGHT
    assert len(sides_with_role(second, FaceRole.FRONTAGE)) == 1


def test_no_qualifying_rear():
    # Hypotenuse runs at ~116.57°, ~63.43° away from the opposite of 0°
    sides = _sides([(0, 0), (0, 10), (20, 0)])
    classified = classify(sides, 0)
    assert rear_side(classified) is None
    assert frontage_side(classified) is classified[0]
    assert _roles(classified) == [FaceRole.FRONTAGE, FaceRole.LEFT, FaceRole.RIGHT]


def test_rear_tolerance_is_configurable():
    sides = _sides([(0, 0), (0, 10), (20, 0)])
    assert rear_side(FaceClassifier(rear_tolerance_deg=63.0).classify(sides, 0)) is None
    classified = FaceClassifier(rear_tolerance_deg=64.0).classify(sides, 0)
    assert rear_side(classified) is classified[1]


def test_rear_tie_keeps_first_in_ring_order():
    sides = (
        Side(from_vertex=1, to_vertex=2, length=1, azimuth_degrees=0.0),
        Side(from_vertex=2, to_vertex=3, length=1, azimuth_degrees=170.0),
        Side(from_vertex=3, to_vertex=4, length=1, azimuth_degrees=190.0),
    )
    classified = classify(sides, 0)
    assert classified[1].face_role == FaceRole.REAR
    # 190° relative to 0° is neither left nor right
    assert classified[2].face_role == FaceRole.OTHER


@pytest.mark.parametrize("azimuth,expected", [
    (44.999, FaceRole.OTHER),
    (45.0, FaceRole.LEFT),
    (134.999, FaceRole.LEFT),
    (135.0, FaceRole.OTHER),
    (224.999, FaceRole.OTHER),
    (225.0, FaceRole.RIGHT),
    (314.999, FaceRole.RIGHT),
    (315.0, FaceRole.OTHER),
])
def test_relative_azimuth_bands(azimuth, expected):
    sides = (
        Side(from_vertex=1, to_vertex=2, length=1, azimuth_degrees=0.0),
        Side(from_vertex=2, to_vertex=3, length=1, azimuth_degrees=azimuth),
        Side(from_vertex=3, to_vertex=1, length=1, azimuth_degrees=90.0),
    )
    # Frontage at 0°; the 90° side keeps the rear slot away from the side under test
    classified = FaceClassifier(rear_tolerance_deg=1.0).classify(sides, 0)
    assert classified[1].face_role == expected


def test_relative_azimuth_wraps_around_north():
    sides = (
        Side(from_vertex=1, to_vertex=2, length=1, azimuth_degrees=350.0),
        Side(from_vertex=2, to_vertex=3, length=1, azimuth_degrees=80.0),
        Side(from_vertex=3, to_vertex=4, length=1, azimuth_degrees=170.0),
        Side(from_vertex=4, to_vertex=1, length=1, azimuth_degrees=260.0),
    )
    assert _roles(classify(sides, 0)) == [
        FaceRole.FRONTAGE, FaceRole.LEFT, FaceRole.REAR, FaceRole.RIGHT
    ]


def test_empty_sides():
    assert classify((), 0) == ()


@pytest.mark.parametrize("index", [-1, 4, 10])
def test_invalid_frontage_index(square_vertices, index):
    with pytest.raises(InvalidFrontageIndexError):
        classify(build_sides(square_vertices), index)


def test_input_sides_are_not_mutated(square_vertices):
    sides = build_sides(square_vertices)
    classify(sides, 0)
    assert all(s.face_role == FaceRole.UNCLASSIFIED for s in sides)


class TestSuggestFrontage:

    def _side(self, confrontant, kind=ConfrontantKind.NEIGHBOR):
        return Side(
            from_vertex=1, to_vertex=2, length=1, azimuth_degrees=0.0,
            confrontant=confrontant, confrontant_kind=kind
        )

    def test_prefers_alignment(self):
        sides = [
            self._side("Lot 02"),
            self._side("Rua das Flores", ConfrontantKind.NEIGHBOR),
            self._side("Main Road", ConfrontantKind.ALIGNMENT),
        ]
        assert suggest_frontage_index(sides, ["RUA"]) == 2

    def test_falls_back_to_street_keyword(self):
        sides = [self._side("Lot 02"), self._side("Avenida Brasil", ConfrontantKind.PUBLIC_SPACE)]
        assert suggest_frontage_index(sides, ["rua", "av"]) == 1

    def test_defaults_to_first_side(self):
        sides = [self._side("Lot 02"), self._side("Lot 03")]
        assert suggest_frontage_index(sides, ["RUA"]) == 0


def test_classification_details_are_logged_at_debug(square_vertices):
    messages = []
    handler_id = logger.add(lambda m: messages.append(m.record), level="DEBUG")
    try:
        classify(build_sides(square_vertices), 0)
    finally:
        logger.remove(handler_id)

    side_lines = [r["message"] for r in messages if "rel=" in r["message"]]
    assert len(side_lines) == 4
    assert all(r["level"].name == "DEBUG" for r in messages)
    assert "-> frontage" in side_lines[0]
