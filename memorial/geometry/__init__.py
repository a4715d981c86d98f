"""
Geometry modules for the Parcel Memorial Generator

- RingNormalizer: raw points to a clean, implicitly closed ring
- SideBuilder: oriented sides with length and azimuth
"""

from .geometry_utils import GeometryUtils
from .ring import normalize_ring, clean_points
from .sides import build_sides, polygon_area, polygon_perimeter

__all__ = [
    "GeometryUtils",
    "normalize_ring",
    "clean_points",
    "build_sides",
    "polygon_area",
    "polygon_perimeter",
]
