"""
Pydantic models for parcel boundary data

Core values are frozen: a computed parcel is never patched in place,
reclassification produces a new value.
"""

from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, computed_field


# ============================================================
# Enums
# ============================================================

class FaceRole(str, Enum):
    """Semantic role of a parcel side"""
    FRONTAGE = "frontage"
    REAR = "rear"
    LEFT = "left"
    RIGHT = "right"
    OTHER = "other"
    UNCLASSIFIED = "unclassified"


class ConfrontantKind(str, Enum):
    """Which rule produced a side's confrontant"""
    ALIGNMENT = "alignment"
    NEIGHBOR = "neighbor"
    PUBLIC_SPACE = "public_space"
    UNRESOLVED = "unresolved"


# ============================================================
# Geometry Values
# ============================================================

class Vertex(BaseModel):
    model_config = ConfigDict(frozen=True)

    index: int = Field(ge=1)  # 1-based position in the ring
    east: float
    north: float

    @property
    def point(self) -> Tuple[float, float]:
        return (self.east, self.north)


class Side(BaseModel):
    model_config = ConfigDict(frozen=True)

    from_vertex: int = Field(ge=1)
    to_vertex: int = Field(ge=1)
    length: float = Field(ge=0)
    azimuth_degrees: float = Field(ge=0, lt=360)
    confrontant: str = ""
    confrontant_kind: ConfrontantKind = ConfrontantKind.UNRESOLVED
    confrontant_distance: Optional[float] = None
    face_role: FaceRole = FaceRole.UNCLASSIFIED


class AlignmentCurve(BaseModel):
    """Named reference polyline, pre-sampled at <= 1 unit intervals"""
    model_config = ConfigDict(frozen=True)

    name: str
    samples: Tuple[Tuple[float, float], ...]


class NeighborParcel(BaseModel):
    """Read-only ring snapshot of another parcel"""
    model_config = ConfigDict(frozen=True)

    name: str
    group: str = ""
    vertices: Tuple[Vertex, ...]

    @property
    def points(self) -> Tuple[Tuple[float, float], ...]:
        return tuple(v.point for v in self.vertices)


class ParcelInput(BaseModel):
    """Raw parcel geometry as handed over by an extraction adapter"""
    model_config = ConfigDict(frozen=True)

    name: str
    group: str = ""
    points: Tuple[Tuple[float, float], ...]


class Parcel(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    group: str = ""
    vertices: Tuple[Vertex, ...]
    sides: Tuple[Side, ...]
    area: float = Field(ge=0)
    perimeter: float = Field(default=0.0, ge=0)
    frontage_index: Optional[int] = None
    narrative: str = ""

    @computed_field
    @property
    def shape(self) -> str:
        return "Regular" if len(self.sides) == 4 else "Irregular"


# ============================================================
# Batch Output
# ============================================================

class ParcelWarning(BaseModel):
    model_config = ConfigDict(frozen=True)

    parcel_name: str
    code: str
    message: str


class BatchResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    parcels: Tuple[Parcel, ...] = ()
    warnings: Tuple[ParcelWarning, ...] = ()

    @computed_field
    @property
    def total_area(self) -> float:
        return sum(p.area for p in self.parcels)

    def get_parcel(self, name: str) -> Optional[Parcel]:
        """Find a processed parcel by name"""
        for parcel in self.parcels:
            if parcel.name == name:
                return parcel
        return None
