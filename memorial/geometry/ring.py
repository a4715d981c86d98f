"""
Ring normalization

Cleans a raw ordered point sequence into a closed polygon ring:
drops the duplicated closing point and collapses micro-edges.
"""

from typing import Optional, Sequence, Tuple

from loguru import logger

from ..errors import InsufficientVerticesError
from ..models import Vertex
from .geometry_utils import GeometryUtils, Point2D

DEFAULT_CLOSING_TOLERANCE = 0.001


def clean_points(
    points: Sequence[Point2D],
    tolerance: float = DEFAULT_CLOSING_TOLERANCE
) -> Tuple[Point2D, ...]:
    """
    Remove the closing duplicate and consecutive near-duplicates

    Returns the surviving points in their original order; the result is
    implicitly closed (last point connects back to the first).
    """
    kept = []
    dropped = 0
    for point in points:
        p = (float(point[0]), float(point[1]))
        if kept and GeometryUtils.distance(kept[-1], p) < tolerance:
            dropped += 1
            continue
        kept.append(p)

    # Closing point(s) repeating the first vertex
    while len(kept) > 1 and GeometryUtils.distance(kept[0], kept[-1]) < tolerance:
        kept.pop()
        dropped += 1

    if dropped:
        logger.debug(f"Ring normalization dropped {dropped} degenerate point(s)")

    return tuple(kept)


def normalize_ring(
    points: Sequence[Point2D],
    tolerance: float = DEFAULT_CLOSING_TOLERANCE,
    parcel_name: Optional[str] = None
) -> Tuple[Vertex, ...]:
    """
    Build a numbered vertex ring from raw points

    Raises:
        InsufficientVerticesError: fewer than 3 distinct points remain
    """
    cleaned = clean_points(points, tolerance)
    if len(cleaned) < 3:
        raise InsufficientVerticesError(len(cleaned), parcel_name=parcel_name)

    return tuple(
        Vertex(index=i + 1, east=east, north=north)
        for i, (east, north) in enumerate(cleaned)
    )
