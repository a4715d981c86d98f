"""
Geometry utilities for planar survey coordinates

All coordinates are (east, north) pairs in drawing units.
"""

import math
from typing import Iterator, List, Sequence, Tuple

from shapely.geometry import Polygon

Point2D = Tuple[float, float]

# Segments shorter than this (squared) are treated as a single point
SEGMENT_EPSILON_SQ = 1e-10


class GeometryUtils:
    """Utility functions for geometric operations"""

    @staticmethod
    def distance(p1: Point2D, p2: Point2D) -> float:
        """Euclidean distance between two points"""
        return math.hypot(p2[0] - p1[0], p2[1] - p1[1])

    @staticmethod
    def midpoint(p1: Point2D, p2: Point2D) -> Point2D:
        return ((p1[0] + p2[0]) / 2, (p1[1] + p2[1]) / 2)

    @staticmethod
    def normalize_angle(angle: float) -> float:
        """Map any angle in degrees into [0, 360)"""
        normalized = ((angle % 360.0) + 360.0) % 360.0
        # Tiny negative inputs round up to exactly 360.0
        if normalized >= 360.0:
            normalized = 0.0
        return normalized

    @staticmethod
    def azimuth(start: Point2D, end: Point2D) -> float:
        """
        Bearing from start to end, clockwise from north, in [0, 360)

        atan2 takes (east offset, north offset) so 0 = north, 90 = east.
        """
        dx = end[0] - start[0]
        dy = end[1] - start[1]
        return GeometryUtils.normalize_angle(math.degrees(math.atan2(dx, dy)))

    @staticmethod
    def angular_difference(a: float, b: float) -> float:
        """Smallest circular difference between two bearings, in [0, 180]"""
        d = abs(a - b) % 360.0
        return 360.0 - d if d > 180.0 else d

    @staticmethod
    def distance_point_to_line(
        point: Point2D,
        line_start: Point2D,
        line_end: Point2D
    ) -> float:
        """Distance from point to a line segment (projection clamped to the segment)"""
        px, py = point
        x1, y1 = line_start
        x2, y2 = line_end

        dx = x2 - x1
        dy = y2 - y1
        length_sq = dx * dx + dy * dy

        if length_sq < SEGMENT_EPSILON_SQ:
            # Segment is a point
            return math.hypot(px - x1, py - y1)

        # Parameter t for closest point on line
        t = max(0.0, min(1.0, ((px - x1) * dx + (py - y1) * dy) / length_sq))

        closest_x = x1 + t * dx
        closest_y = y1 + t * dy

        return math.hypot(px - closest_x, py - closest_y)

    @staticmethod
    def distance_point_to_polyline(point: Point2D, polyline: Sequence[Point2D]) -> float:
        """Minimum distance from point to an open polyline"""
        min_dist = float('inf')
        if len(polyline) == 1:
            return GeometryUtils.distance(point, polyline[0])
        for i in range(len(polyline) - 1):
            dist = GeometryUtils.distance_point_to_line(point, polyline[i], polyline[i + 1])
            if dist < min_dist:
                min_dist = dist
        return min_dist

    @staticmethod
    def ring_edges(ring: Sequence[Point2D]) -> Iterator[Tuple[Point2D, Point2D]]:
        """Consecutive point pairs of an implicitly closed ring, wrap-around included"""
        n = len(ring)
        if n < 2:
            return
        for i in range(n):
            yield ring[i], ring[(i + 1) % n]

    @staticmethod
    def polygon_area(ring: Sequence[Point2D]) -> float:
        """Unsigned area of an implicitly closed ring"""
        if len(ring) < 3:
            return 0.0
        return Polygon(ring).area

    @staticmethod
    def polygon_perimeter(ring: Sequence[Point2D]) -> float:
        """Perimeter of an implicitly closed ring"""
        if len(ring) < 2:
            return 0.0
        return sum(GeometryUtils.distance(p1, p2) for p1, p2 in GeometryUtils.ring_edges(ring))

    @staticmethod
    def angle_to_direction(angle: float) -> str:
        """Convert bearing angle to cardinal direction"""
        if angle < 22.5 or angle >= 337.5:
            return "north"
        elif angle < 67.5:
            return "northeast"
        elif angle < 112.5:
            return "east"
        elif angle < 157.5:
            return "southeast"
        elif angle < 202.5:
            return "south"
        elif angle < 247.5:
            return "southwest"
        elif angle < 292.5:
            return "west"
        else:
            return "northwest"


def as_points(coords: Sequence[Sequence[float]]) -> List[Point2D]:
    """Coerce [[x, y], ...] or [(x, y, z), ...] into 2D tuples"""
    return [(float(c[0]), float(c[1])) for c in coords]
