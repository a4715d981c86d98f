"""
Analysis modules for the Parcel Memorial Generator
"""

from .confronting import ConfrontingResolver, ConfrontantMatch
from .face_classifier import (
    FaceClassifier,
    classify,
    suggest_frontage_index,
    frontage_side,
    rear_side,
    sides_with_role,
)
from .narrative import build_narrative, format_azimuth
from .report import confrontation_rows, vertex_rows, group_summaries

__all__ = [
    "ConfrontingResolver",
    "ConfrontantMatch",
    "FaceClassifier",
    "classify",
    "suggest_frontage_index",
    "frontage_side",
    "rear_side",
    "sides_with_role",
    "build_narrative",
    "format_azimuth",
    "confrontation_rows",
    "vertex_rows",
    "group_summaries",
]
