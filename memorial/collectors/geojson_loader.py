"""
GeoJSON input adapter

Converts a FeatureCollection into plain parcel and alignment values:
- Polygon features -> ParcelInput (exterior ring; "name"/"group" properties)
- LineString / MultiLineString features -> sampled AlignmentCurve

Holes and Z values are ignored. Other geometry types are skipped.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from loguru import logger
from shapely.geometry import shape
from shapely.ops import linemerge

from ..config import MemorialConfig, get_config
from ..models import AlignmentCurve, ParcelInput
from ..geometry.geometry_utils import as_points
from .alignment import sample_alignment


@dataclass
class LoadedDrawing:
    """Everything read from one input file"""
    parcels: List[ParcelInput] = field(default_factory=list)
    alignments: List[AlignmentCurve] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)


class GeoJSONLoader:
    """Reads parcels and alignments from GeoJSON"""

    def __init__(self, config: Optional[MemorialConfig] = None):
        self.config = config or get_config()

    def load(self, path: Union[str, Path]) -> LoadedDrawing:
        """Load a GeoJSON file from disk"""
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        logger.info(f"Loaded GeoJSON from {path}")
        return self.parse(data)

    def parse(self, data: Dict[str, Any]) -> LoadedDrawing:
        """Parse a FeatureCollection (or a single Feature) dict"""
        if not isinstance(data, dict):
            raise ValueError(f"Expected a GeoJSON object, got {type(data).__name__}")
        if data.get("type") == "Feature":
            features = [data]
        elif data.get("type") == "FeatureCollection":
            features = data.get("features", [])
        else:
            raise ValueError(f"Unsupported GeoJSON type: {data.get('type')!r}")

        drawing = LoadedDrawing()
        for i, feature in enumerate(features):
            self._parse_feature(feature, i, drawing)

        logger.info(
            f"Parsed {len(drawing.parcels)} parcels and "
            f"{len(drawing.alignments)} alignments ({len(drawing.skipped)} skipped)"
        )
        return drawing

    def _parse_feature(self, feature: Dict[str, Any], index: int, drawing: LoadedDrawing) -> None:
        if not isinstance(feature, dict):
            name = f"Feature {index + 1}"
            logger.warning(f"{name} is not a GeoJSON object, skipping")
            drawing.skipped.append(name)
            return

        properties = feature.get("properties") or {}
        geometry = feature.get("geometry")
        name = str(properties.get("name") or f"Feature {index + 1}")

        if not geometry:
            logger.warning(f"Feature '{name}' has no geometry, skipping")
            drawing.skipped.append(name)
            return

        try:
            geom = shape(geometry)
        except (ValueError, TypeError, AttributeError) as e:
            logger.warning(f"Feature '{name}' has invalid geometry: {e}")
            drawing.skipped.append(name)
            return

        if geom.geom_type == "Polygon":
            # Closing duplicate is left in place; ring normalization removes it
            drawing.parcels.append(ParcelInput(
                name=name,
                group=str(properties.get("group") or ""),
                points=tuple(as_points(geom.exterior.coords)),
            ))
        elif geom.geom_type in ("LineString", "MultiLineString"):
            drawing.alignments.extend(self._alignments_from_lines(name, geom))
        else:
            logger.warning(f"Feature '{name}' has unsupported geometry {geom.geom_type}, skipping")
            drawing.skipped.append(name)

    def _alignments_from_lines(self, name: str, geom) -> List[AlignmentCurve]:
        """One curve per connected line part, all under the same name"""
        if geom.geom_type == "MultiLineString":
            geom = linemerge(geom)
        parts = list(geom.geoms) if geom.geom_type == "MultiLineString" else [geom]

        settings = self.config.alignment
        return [
            sample_alignment(
                name,
                list(part.coords),
                interval=settings.sample_interval,
                min_samples=settings.min_samples
            )
            for part in parts
        ]


def load_geojson(path: Union[str, Path], config: Optional[MemorialConfig] = None) -> LoadedDrawing:
    return GeoJSONLoader(config).load(path)


def parse_feature_collection(
    data: Dict[str, Any],
    config: Optional[MemorialConfig] = None
) -> LoadedDrawing:
    return GeoJSONLoader(config).parse(data)
