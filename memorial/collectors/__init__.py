"""
Input adapters for the Parcel Memorial Generator

Host-specific geometry (CAD drawings, GIS files) is converted here into
plain ParcelInput / AlignmentCurve values before the core sees it:
- sample_alignment: centerline -> AlignmentCurve at regular stations
- GeoJSONLoader: FeatureCollection -> parcels + alignments
"""

from .alignment import sample_alignment
from .geojson_loader import GeoJSONLoader, LoadedDrawing, load_geojson, parse_feature_collection

__all__ = [
    "sample_alignment",
    "GeoJSONLoader",
    "LoadedDrawing",
    "load_geojson",
    "parse_feature_collection",
]
