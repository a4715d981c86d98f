"""
Parcel Memorial Generator

Parcel boundary analysis for descriptive memorials: ring normalization,
side azimuths, confrontant resolution, face classification and the
boundary narrative.
"""

from .config import MemorialConfig, get_config, load_config
from .errors import MemorialError, InsufficientVerticesError, InvalidFrontageIndexError
from .models import (
    AlignmentCurve, BatchResult, ConfrontantKind, FaceRole, NeighborParcel,
    Parcel, ParcelInput, ParcelWarning, Side, Vertex
)
from .pipeline import MemorialPipeline

__version__ = "1.0.0"

__all__ = [
    "MemorialConfig",
    "get_config",
    "load_config",
    "MemorialError",
    "InsufficientVerticesError",
    "InvalidFrontageIndexError",
    "AlignmentCurve",
    "BatchResult",
    "ConfrontantKind",
    "FaceRole",
    "NeighborParcel",
    "Parcel",
    "ParcelInput",
    "ParcelWarning",
    "Side",
    "Vertex",
    "MemorialPipeline",
]
