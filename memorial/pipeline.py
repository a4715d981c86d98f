"""
Main Pipeline Orchestrator for Parcel Memorial Generation

Per parcel, end to end:

  1. Normalize the raw ring (drop closing duplicate and micro-edges)
  2. Build oriented sides (length + azimuth)
  3. Resolve confrontants (alignments first, then neighbor parcels)
  4. Classify faces from the chosen frontage side
  5. Build the boundary narrative

All rings are normalized and frozen as neighbor snapshots before any
confrontant is resolved. A failing parcel is reported as a warning and
the rest of the batch continues.
"""

import json
import os
from typing import Dict, List, Optional, Sequence, Tuple

from loguru import logger

from .config import MemorialConfig, get_config
from .errors import InvalidFrontageIndexError, MemorialError
from .models import (
    AlignmentCurve, BatchResult, FaceRole, NeighborParcel, Parcel,
    ParcelInput, ParcelWarning, Vertex
)
from .geometry import build_sides, normalize_ring, polygon_area, polygon_perimeter
from .analysis import (
    ConfrontingResolver, FaceClassifier, build_narrative, rear_side,
    suggest_frontage_index
)


class MemorialPipeline:
    """
    Batch pipeline from raw parcel rings to classified, narrated parcels

    Usage:
        pipeline = MemorialPipeline()
        result = pipeline.run(parcel_inputs, alignments)
        parcel = pipeline.reclassify(result.parcels[0], frontage_index=2)
        pipeline.save(result, "output/memorial.json")
    """

    def __init__(self, config: Optional[MemorialConfig] = None):
        self.config = config or get_config()

        self.resolver = ConfrontingResolver(
            tolerance=self.config.confronting.tolerance,
            public_space_label=self.config.confronting.public_space_label
        )
        self.classifier = FaceClassifier(
            rear_tolerance_deg=self.config.classification.rear_tolerance_deg
        )

    def run(
        self,
        parcel_inputs: Sequence[ParcelInput],
        alignments: Sequence[AlignmentCurve] = (),
        frontage_overrides: Optional[Dict[str, int]] = None
    ) -> BatchResult:
        """
        Process every parcel in the batch

        Args:
            parcel_inputs: Raw parcel rings
            alignments: Road alignments, in priority order
            frontage_overrides: Parcel name -> frontage side index chosen by the user

        Returns:
            BatchResult with the parcels that succeeded plus warnings
        """
        frontage_overrides = frontage_overrides or {}
        warnings: List[ParcelWarning] = []

        logger.info(f"Starting memorial pipeline for {len(parcel_inputs)} parcels, "
                    f"{len(alignments)} alignments")

        # Stage 1: normalize every ring before any resolution reads them
        logger.info("Stage 1: Normalizing parcel rings...")
        rings: List[Tuple[ParcelInput, Tuple[Vertex, ...]]] = []
        for parcel_input in parcel_inputs:
            try:
                vertices = normalize_ring(
                    parcel_input.points,
                    tolerance=self.config.ring.closing_tolerance,
                    parcel_name=parcel_input.name
                )
            except MemorialError as e:
                logger.warning(f"Skipping parcel '{parcel_input.name}': {e}")
                warnings.append(self._warning(parcel_input.name, e))
                continue
            rings.append((parcel_input, vertices))

        snapshots = [
            NeighborParcel(name=p.name, group=p.group, vertices=vertices)
            for p, vertices in rings
        ]

        # Stage 2: sides, confrontants, classification, narrative
        logger.info("Stage 2: Resolving confrontants and classifying faces...")
        parcels: List[Parcel] = []
        for i, (parcel_input, vertices) in enumerate(rings):
            neighbors = snapshots[:i] + snapshots[i + 1:]
            try:
                parcel, parcel_warnings = self._process_parcel(
                    parcel_input, vertices, alignments, neighbors,
                    frontage_overrides.get(parcel_input.name)
                )
            except MemorialError as e:
                logger.warning(f"Skipping parcel '{parcel_input.name}': {e}")
                warnings.append(self._warning(parcel_input.name, e))
                continue
            except Exception as e:
                logger.error(f"Failed to process parcel '{parcel_input.name}': {e}")
                warnings.append(ParcelWarning(
                    parcel_name=parcel_input.name,
                    code=MemorialError.code,
                    message=str(e)
                ))
                continue

            parcels.append(parcel)
            warnings.extend(parcel_warnings)

        result = BatchResult(parcels=tuple(parcels), warnings=tuple(warnings))
        logger.info(f"Pipeline complete: {len(parcels)} parcels processed, "
                    f"{len(parcel_inputs) - len(parcels)} skipped, {len(warnings)} warnings")
        return result

    def reclassify(self, parcel: Parcel, frontage_index: int) -> Parcel:
        """
        Recompute face roles and narrative for a new frontage choice

        Returns a new Parcel; the given one is left untouched.

        Raises:
            InvalidFrontageIndexError: index is outside the side list
        """
        try:
            sides = self.classifier.classify(parcel.sides, frontage_index)
        except InvalidFrontageIndexError as e:
            e.parcel_name = parcel.name
            raise

        logger.debug(f"Reclassified '{parcel.name}' with frontage side {frontage_index}")
        return parcel.model_copy(update={
            "sides": sides,
            "frontage_index": frontage_index,
            "narrative": self._narrative(sides),
        })

    def save(self, result: BatchResult, output_path: str) -> str:
        """Save the batch result to a JSON file"""
        os.makedirs(os.path.dirname(output_path) or ".", exist_ok=True)

        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(result.model_dump(mode="json"), f, indent=2, ensure_ascii=False)

        logger.info(f"Saved memorial result to {output_path}")
        return output_path

    # ============================================================
    # Helper Methods
    # ============================================================

    def _process_parcel(
        self,
        parcel_input: ParcelInput,
        vertices: Tuple[Vertex, ...],
        alignments: Sequence[AlignmentCurve],
        neighbors: Sequence[NeighborParcel],
        frontage_override: Optional[int]
    ) -> Tuple[Parcel, List[ParcelWarning]]:
        warnings: List[ParcelWarning] = []
        name = parcel_input.name

        sides = build_sides(vertices)
        sides = self.resolver.resolve_sides(vertices, sides, alignments, neighbors)

        frontage_index = suggest_frontage_index(
            sides, self.config.classification.street_keywords
        )
        if frontage_override is not None:
            if 0 <= frontage_override < len(sides):
                frontage_index = frontage_override
            else:
                error = InvalidFrontageIndexError(frontage_override, len(sides), parcel_name=name)
                logger.warning(f"Parcel '{name}': {error}, using side {frontage_index}")
                warnings.append(self._warning(name, error))

        sides = self.classifier.classify(sides, frontage_index)

        if rear_side(sides) is None:
            logger.info(f"Parcel '{name}' has no side opposite its frontage, rear left unset")
            warnings.append(ParcelWarning(
                parcel_name=name,
                code="no_rear",
                message=f"No side within {self.classifier.rear_tolerance_deg}° "
                        f"of the frontage's opposite azimuth"
            ))

        parcel = Parcel(
            name=name,
            group=parcel_input.group,
            vertices=vertices,
            sides=sides,
            area=polygon_area(vertices),
            perimeter=polygon_perimeter(vertices),
            frontage_index=frontage_index,
            narrative=self._narrative(sides),
        )

        others = sum(1 for s in sides if s.face_role == FaceRole.OTHER)
        logger.debug(f"Parcel '{name}': {len(sides)} sides, area={parcel.area:.2f}, "
                     f"frontage={frontage_index}, {others} other side(s)")
        return parcel, warnings

    def _narrative(self, sides) -> str:
        settings = self.config.narrative
        return build_narrative(
            sides,
            length_decimals=settings.length_decimals,
            decimal_separator=settings.decimal_separator
        )

    @staticmethod
    def _warning(parcel_name: str, error: MemorialError) -> ParcelWarning:
        return ParcelWarning(parcel_name=parcel_name, code=error.code, message=str(error))
