"""
Alignment sampling

Turns a named road centerline into an AlignmentCurve sampled at
regular stations along its length
"""

import math
from typing import Sequence

from loguru import logger
from shapely.geometry import LineString

from ..models import AlignmentCurve
from ..geometry.geometry_utils import as_points


def sample_alignment(
    name: str,
    coordinates: Sequence[Sequence[float]],
    interval: float = 1.0,
    min_samples: int = 10
) -> AlignmentCurve:
    """
    Sample a centerline into evenly spaced stations

    The line is split into max(min_samples, length / interval) equal steps,
    so sample spacing never exceeds the interval. Both end stations are
    included.

    Args:
        name: Alignment name (used as confrontant label)
        coordinates: Centerline vertices [[x, y], ...]
        interval: Maximum spacing between samples
        min_samples: Minimum number of steps for short alignments
    """
    points = as_points(coordinates)
    if len(points) < 2:
        logger.warning(f"Alignment '{name}' has fewer than 2 points, keeping it as-is")
        return AlignmentCurve(name=name, samples=tuple(points))

    line = LineString(points)
    length = line.length
    if length == 0:
        return AlignmentCurve(name=name, samples=(points[0],))

    steps = max(min_samples, int(math.ceil(length / interval)))
    step_length = length / steps

    samples = []
    for i in range(steps + 1):
        station = line.interpolate(min(i * step_length, length))
        samples.append((station.x, station.y))

    logger.debug(f"Sampled alignment '{name}': length={length:.2f}, {len(samples)} stations")
    return AlignmentCurve(name=name, samples=tuple(samples))
