"""
Boundary narrative text

Orders classified sides canonically and chains them into a single
descriptive statement that starts and ends at vertex V1.
"""

from typing import List, Sequence

from ..models import FaceRole, Side

# Canonical traversal order; anything else keeps its ring order after these
NARRATIVE_ORDER = [
    FaceRole.FRONTAGE,
    FaceRole.RIGHT,
    FaceRole.REAR,
    FaceRole.LEFT,
    FaceRole.OTHER,
]

HUNDREDTHS_PER_DEGREE = 360000
HUNDREDTHS_PER_MINUTE = 6000


def format_azimuth(degrees: float) -> str:
    """
    Format decimal degrees as DDD°MM'SS.SS"

    The value is rounded to hundredths of a second before it is split,
    so 59.995" carries into the minutes (and minutes into degrees).
    """
    degrees = ((degrees % 360.0) + 360.0) % 360.0
    total = int(round(degrees * HUNDREDTHS_PER_DEGREE)) % (360 * HUNDREDTHS_PER_DEGREE)

    whole_degrees, remainder = divmod(total, HUNDREDTHS_PER_DEGREE)
    minutes, hundredths = divmod(remainder, HUNDREDTHS_PER_MINUTE)
    seconds = hundredths / 100.0

    return f"{whole_degrees:03d}°{minutes:02d}'{seconds:05.2f}\""


def format_length(value: float, decimals: int = 3, decimal_separator: str = ".") -> str:
    text = f"{value:.{decimals}f}"
    if decimal_separator != ".":
        text = text.replace(".", decimal_separator)
    return text


def order_sides(sides: Sequence[Side]) -> List[Side]:
    """Sort sides into narrative order (stable within a role)"""
    def rank(side: Side) -> int:
        if side.face_role in NARRATIVE_ORDER:
            return NARRATIVE_ORDER.index(side.face_role)
        return NARRATIVE_ORDER.index(FaceRole.OTHER)

    return sorted(sides, key=rank)


def build_narrative(
    sides: Sequence[Side],
    length_decimals: int = 3,
    decimal_separator: str = "."
) -> str:
    """
    Build the boundary description

    Example (square lot):
        The description begins at vertex V1; from vertex V1 it proceeds with
        azimuth 000°00'00.00", confronting Main Street, for a length of
        10.000 m, to vertex V2; ... returning to the starting point, vertex V1.
    """
    if not sides:
        return ""

    ordered = order_sides(sides)
    parts = []

    for i, side in enumerate(ordered):
        length = format_length(side.length, length_decimals, decimal_separator)
        segment = (
            f"from vertex V{side.from_vertex} it proceeds with azimuth "
            f"{format_azimuth(side.azimuth_degrees)}, confronting {side.confrontant}, "
            f"for a length of {length} m, "
        )
        if i < len(ordered) - 1:
            segment += f"to vertex V{side.to_vertex}"
        else:
            segment += "returning to the starting point, vertex V1."
        parts.append(segment)

    return "The description begins at vertex V1; " + "; ".join(parts)
