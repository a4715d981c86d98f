"""
Face classifier

Classifies parcel sides into frontage, rear, left, right and other
using azimuths relative to a chosen frontage side
"""

from typing import List, Optional, Sequence, Tuple

from loguru import logger

from ..errors import InvalidFrontageIndexError
from ..models import ConfrontantKind, FaceRole, Side
from ..geometry.geometry_utils import GeometryUtils

DEFAULT_REAR_TOLERANCE_DEG = 45.0

# Relative-azimuth bands, [start, end)
LEFT_BAND = (45.0, 135.0)
RIGHT_BAND = (225.0, 315.0)


class FaceClassifier:
    """Assigns face roles to parcel sides given a frontage side index"""

    def __init__(self, rear_tolerance_deg: float = DEFAULT_REAR_TOLERANCE_DEG):
        self.rear_tolerance_deg = rear_tolerance_deg

    def classify(
        self,
        sides: Sequence[Side],
        frontage_index: int
    ) -> Tuple[Side, ...]:
        """
        Classify every side from scratch

        Algorithm:
        1. Reset all roles, mark the chosen side as frontage
        2. Rear: the other side whose azimuth is circularly closest to the
           frontage azimuth + 180°, only if that difference is < rear tolerance
        3. Remaining sides, by rel = (azimuth - frontage azimuth) mod 360:
           - [45, 135)  -> left
           - [225, 315) -> right
           - otherwise  -> other

        The heuristic assumes a roughly rectangular lot; irregular shapes
        legitimately end up with several "other" sides. Prior roles on the
        input are ignored, so repeated calls give the same answer.

        Args:
            sides: Sides with azimuths, in ring order
            frontage_index: 0-based index of the frontage side

        Returns:
            New tuple of sides with face roles assigned
        """
        if not sides:
            return ()

        if frontage_index < 0 or frontage_index >= len(sides):
            raise InvalidFrontageIndexError(frontage_index, len(sides))

        roles: List[Optional[FaceRole]] = [None] * len(sides)
        roles[frontage_index] = FaceRole.FRONTAGE
        az_frontage = sides[frontage_index].azimuth_degrees
        az_opposite = (az_frontage + 180.0) % 360.0

        # Step 1: rear selection (strict < keeps the first side on ties)
        rear_index = None
        min_diff = float('inf')
        for i, side in enumerate(sides):
            if i == frontage_index:
                continue
            diff = GeometryUtils.angular_difference(side.azimuth_degrees, az_opposite)
            if diff < min_diff:
                min_diff = diff
                rear_index = i

        if rear_index is not None and min_diff < self.rear_tolerance_deg:
            roles[rear_index] = FaceRole.REAR
        else:
            logger.debug(
                f"No rear side: closest opposite azimuth differs by {min_diff:.2f}° "
                f"(tolerance {self.rear_tolerance_deg}°)"
            )

        # Step 2: left / right / other by relative azimuth
        for i, side in enumerate(sides):
            if roles[i] is not None:
                continue
            rel = GeometryUtils.normalize_angle(side.azimuth_degrees - az_frontage)
            roles[i] = self._role_for_relative_azimuth(rel)

        logger.debug(f"Frontage side {frontage_index}, azimuth {az_frontage:.4f}°")
        for i, side in enumerate(sides):
            rel = GeometryUtils.normalize_angle(side.azimuth_degrees - az_frontage)
            logger.debug(
                f"  Side {i} V{side.from_vertex}->V{side.to_vertex}: "
                f"azimuth={side.azimuth_degrees:.4f}° rel={rel:.4f}° -> {roles[i].value}"
            )

        return tuple(
            side.model_copy(update={"face_role": role})
            for side, role in zip(sides, roles)
        )

    @staticmethod
    def _role_for_relative_azimuth(rel: float) -> FaceRole:
        if LEFT_BAND[0] <= rel < LEFT_BAND[1]:
            return FaceRole.LEFT
        if RIGHT_BAND[0] <= rel < RIGHT_BAND[1]:
            return FaceRole.RIGHT
        return FaceRole.OTHER


def classify(
    sides: Sequence[Side],
    frontage_index: int,
    rear_tolerance_deg: float = DEFAULT_REAR_TOLERANCE_DEG
) -> Tuple[Side, ...]:
    """Pure classification: (sides, frontage index) -> classified sides"""
    return FaceClassifier(rear_tolerance_deg).classify(sides, frontage_index)


def suggest_frontage_index(
    sides: Sequence[Side],
    street_keywords: Sequence[str] = ()
) -> int:
    """
    Pick a default frontage side before the user chooses one

    Prefers the first side confronting an alignment, then the first side
    whose confrontant name contains a street keyword, then side 0.
    """
    for i, side in enumerate(sides):
        if side.confrontant_kind == ConfrontantKind.ALIGNMENT:
            return i

    keywords = [k.upper() for k in street_keywords if k]
    for i, side in enumerate(sides):
        name = side.confrontant.upper()
        if any(k in name for k in keywords):
            return i

    return 0


# ============================================================
# Role queries
# ============================================================

def sides_with_role(sides: Sequence[Side], role: FaceRole) -> List[Side]:
    """All sides carrying a role, in ring order"""
    return [side for side in sides if side.face_role == role]


def first_side_with_role(sides: Sequence[Side], role: FaceRole) -> Optional[Side]:
    for side in sides:
        if side.face_role == role:
            return side
    return None


def frontage_side(sides: Sequence[Side]) -> Optional[Side]:
    return first_side_with_role(sides, FaceRole.FRONTAGE)


def rear_side(sides: Sequence[Side]) -> Optional[Side]:
    return first_side_with_role(sides, FaceRole.REAR)
