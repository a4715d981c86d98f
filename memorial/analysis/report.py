"""
Tabular views of classified parcels for document renderers

Only plain rows are produced here; word-processor and spreadsheet
writers decide how to lay them out.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from ..models import FaceRole, Parcel, Side
from .face_classifier import first_side_with_role, sides_with_role
from .narrative import format_azimuth, format_length

# Fixed row order of the confrontation table
CONFRONTATION_ORDER = [
    (FaceRole.FRONTAGE, "Frontage"),
    (FaceRole.REAR, "Rear"),
    (FaceRole.RIGHT, "Right"),
    (FaceRole.LEFT, "Left"),
]


def describe_side(side: Side, length_decimals: int = 3, decimal_separator: str = ".") -> str:
    """e.g. '12.000 m with Main Street. Az: 045°30'12.00"'"""
    length = format_length(side.length, length_decimals, decimal_separator)
    return f"{length} m with {side.confrontant}. Az: {format_azimuth(side.azimuth_degrees)}"


def confrontation_rows(
    parcel: Parcel,
    length_decimals: int = 3,
    decimal_separator: str = "."
) -> List[Tuple[str, str]]:
    """Rows of (label, description): named faces, extra sides, then the area"""
    rows = []
    for role, label in CONFRONTATION_ORDER:
        side = first_side_with_role(parcel.sides, role)
        if side is None:
            continue
        rows.append((f"{label}:", describe_side(side, length_decimals, decimal_separator)))

    for side in sides_with_role(parcel.sides, FaceRole.OTHER):
        rows.append(("Side:", describe_side(side, length_decimals, decimal_separator)))

    area = format_length(parcel.area, 2, decimal_separator)
    rows.append(("Area:", f"{area} m²"))
    return rows


def vertex_rows(parcel: Parcel, decimals: int = 3) -> List[Tuple[str, str, str, str]]:
    """Rows of (vertex, east, north, azimuth of the side leaving the vertex)"""
    outgoing = {side.from_vertex: side for side in parcel.sides}
    rows = []
    for vertex in parcel.vertices:
        side = outgoing.get(vertex.index)
        azimuth = format_azimuth(side.azimuth_degrees) if side else "-"
        rows.append((
            f"V{vertex.index}",
            f"{vertex.east:.{decimals}f}",
            f"{vertex.north:.{decimals}f}",
            azimuth,
        ))
    return rows


@dataclass
class ParcelSummary:
    """One summary line per parcel"""
    name: str
    shape: str
    frontage_confrontant: str
    frontage_m: float
    rear_m: float
    right_m: float
    left_m: float
    area: float


@dataclass
class GroupSummary:
    """Parcels sharing a group (block) name"""
    group: str
    parcels: List[ParcelSummary] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.parcels)

    @property
    def total_area(self) -> float:
        return sum(p.area for p in self.parcels)


def _length_of(sides: Sequence[Side], role: FaceRole) -> float:
    side: Optional[Side] = first_side_with_role(sides, role)
    return side.length if side else 0.0


def summarize_parcel(parcel: Parcel) -> ParcelSummary:
    frontage = first_side_with_role(parcel.sides, FaceRole.FRONTAGE)
    return ParcelSummary(
        name=parcel.name,
        shape=parcel.shape,
        frontage_confrontant=frontage.confrontant if frontage else "",
        frontage_m=_length_of(parcel.sides, FaceRole.FRONTAGE),
        rear_m=_length_of(parcel.sides, FaceRole.REAR),
        right_m=_length_of(parcel.sides, FaceRole.RIGHT),
        left_m=_length_of(parcel.sides, FaceRole.LEFT),
        area=parcel.area,
    )


def group_summaries(parcels: Sequence[Parcel]) -> List[GroupSummary]:
    """Group parcels by group name, keeping first-seen group order"""
    groups: Dict[str, GroupSummary] = {}
    for parcel in parcels:
        if parcel.group not in groups:
            groups[parcel.group] = GroupSummary(group=parcel.group)
        groups[parcel.group].parcels.append(summarize_parcel(parcel))
    return list(groups.values())
