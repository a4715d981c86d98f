"""
Side construction

Derives one oriented side per consecutive vertex pair, wrap-around included.
Degenerate edges are expected to be removed by ring normalization already.
"""

from typing import Sequence, Tuple

from loguru import logger

from ..models import Side, Vertex
from .geometry_utils import GeometryUtils


def build_sides(vertices: Sequence[Vertex]) -> Tuple[Side, ...]:
    """Build unclassified sides with length and azimuth for a vertex ring"""
    n = len(vertices)
    sides = []
    for i in range(n):
        start = vertices[i]
        end = vertices[(i + 1) % n]

        length = GeometryUtils.distance(start.point, end.point)
        azimuth = GeometryUtils.azimuth(start.point, end.point)

        logger.debug(
            f"Side V{start.index}->V{end.index}: length={length:.3f}, "
            f"azimuth={azimuth:.4f}° ({GeometryUtils.angle_to_direction(azimuth)})"
        )

        sides.append(Side(
            from_vertex=start.index,
            to_vertex=end.index,
            length=length,
            azimuth_degrees=azimuth
        ))

    return tuple(sides)


def side_endpoints(
    vertices: Sequence[Vertex],
    side: Side
) -> Tuple[Tuple[float, float], Tuple[float, float]]:
    """Look up the (start, end) points of a side in its vertex ring"""
    by_index = {v.index: v for v in vertices}
    return by_index[side.from_vertex].point, by_index[side.to_vertex].point


def polygon_area(vertices: Sequence[Vertex]) -> float:
    return GeometryUtils.polygon_area([v.point for v in vertices])


def polygon_perimeter(vertices: Sequence[Vertex]) -> float:
    return GeometryUtils.polygon_perimeter([v.point for v in vertices])
