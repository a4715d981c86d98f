"""
Confrontant resolution - determines what each side of a parcel borders

Priority per side midpoint:
  1. Road alignments, scanned in caller order; the first one within tolerance wins
  2. Neighbor parcel edges; the globally nearest edge within tolerance wins
  3. Otherwise the side faces unenclosed public space
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from loguru import logger

from ..models import AlignmentCurve, ConfrontantKind, NeighborParcel, Side, Vertex
from ..geometry.geometry_utils import GeometryUtils, Point2D
from ..geometry.sides import side_endpoints

DEFAULT_TOLERANCE = 1.0
DEFAULT_PUBLIC_SPACE_LABEL = "Public Area"


@dataclass(frozen=True)
class ConfrontantMatch:
    """Result of resolving one side midpoint"""
    name: str
    kind: ConfrontantKind
    distance: Optional[float] = None


class ConfrontingResolver:
    """
    Resolve the confrontant of parcel sides

    Alignment order is significant: the first alignment whose polyline
    passes within tolerance is taken even if a later one is closer.
    Neighbor edges, by contrast, are searched for the global minimum and
    ties keep the first edge encountered.
    """

    def __init__(
        self,
        tolerance: float = DEFAULT_TOLERANCE,
        public_space_label: str = DEFAULT_PUBLIC_SPACE_LABEL
    ):
        self.tolerance = tolerance
        self.public_space_label = public_space_label

    def resolve(
        self,
        midpoint: Point2D,
        alignments: Sequence[AlignmentCurve],
        neighbors: Sequence[NeighborParcel]
    ) -> ConfrontantMatch:
        """Resolve the confrontant for a single side midpoint"""
        alignment_match = self._check_alignments(midpoint, alignments)
        if alignment_match:
            return alignment_match

        neighbor_match = self._check_neighbors(midpoint, neighbors)
        if neighbor_match:
            return neighbor_match

        return ConfrontantMatch(
            name=self.public_space_label,
            kind=ConfrontantKind.PUBLIC_SPACE
        )

    def resolve_sides(
        self,
        vertices: Sequence[Vertex],
        sides: Sequence[Side],
        alignments: Sequence[AlignmentCurve],
        neighbors: Sequence[NeighborParcel]
    ) -> Tuple[Side, ...]:
        """Return copies of the sides with confrontant fields filled in"""
        resolved = []
        counts = {kind: 0 for kind in ConfrontantKind}

        for side in sides:
            start, end = side_endpoints(vertices, side)
            match = self.resolve(GeometryUtils.midpoint(start, end), alignments, neighbors)
            counts[match.kind] += 1

            logger.debug(
                f"Side V{side.from_vertex}->V{side.to_vertex} confronts "
                f"{match.name} ({match.kind.value})"
            )

            resolved.append(side.model_copy(update={
                "confrontant": match.name,
                "confrontant_kind": match.kind,
                "confrontant_distance": match.distance,
            }))

        logger.debug(
            f"Resolved {len(resolved)} sides: "
            f"{counts[ConfrontantKind.ALIGNMENT]} alignment, "
            f"{counts[ConfrontantKind.NEIGHBOR]} neighbor, "
            f"{counts[ConfrontantKind.PUBLIC_SPACE]} public space"
        )
        return tuple(resolved)

    def _check_alignments(
        self,
        midpoint: Point2D,
        alignments: Sequence[AlignmentCurve]
    ) -> Optional[ConfrontantMatch]:
        """First alignment in input order within tolerance"""
        for alignment in alignments:
            if not alignment.samples:
                continue
            dist = GeometryUtils.distance_point_to_polyline(midpoint, alignment.samples)
            if dist < self.tolerance:
                return ConfrontantMatch(
                    name=alignment.name,
                    kind=ConfrontantKind.ALIGNMENT,
                    distance=dist
                )
        return None

    def _check_neighbors(
        self,
        midpoint: Point2D,
        neighbors: Sequence[NeighborParcel]
    ) -> Optional[ConfrontantMatch]:
        """Nearest neighbor edge across all neighbors, if within tolerance"""
        closest_neighbor = None
        min_distance = float('inf')

        for neighbor in neighbors:
            ring: List[Point2D] = list(neighbor.points)
            for edge_start, edge_end in GeometryUtils.ring_edges(ring):
                dist = GeometryUtils.distance_point_to_line(midpoint, edge_start, edge_end)
                if dist < min_distance:
                    min_distance = dist
                    closest_neighbor = neighbor

        if closest_neighbor and min_distance < self.tolerance:
            return ConfrontantMatch(
                name=closest_neighbor.name,
                kind=ConfrontantKind.NEIGHBOR,
                distance=min_distance
            )

        return None
