"""
Error types for parcel boundary processing

Failures are scoped to a single parcel: the pipeline catches them,
records a warning and keeps going with the rest of the batch.
"""

from typing import Optional


class MemorialError(Exception):
    """Base class for parcel processing errors"""

    code = "processing_error"

    def __init__(self, message: str, parcel_name: Optional[str] = None):
        super().__init__(message)
        self.parcel_name = parcel_name


class InsufficientVerticesError(MemorialError):
    """Raised when fewer than 3 distinct points remain after normalization"""

    code = "insufficient_vertices"

    def __init__(self, vertex_count: int, parcel_name: Optional[str] = None):
        super().__init__(
            f"Ring has {vertex_count} distinct vertices, at least 3 are required",
            parcel_name=parcel_name
        )
        self.vertex_count = vertex_count


class InvalidFrontageIndexError(MemorialError):
    """Raised when a frontage index does not point at an existing side"""

    code = "invalid_frontage"

    def __init__(self, index: int, side_count: int, parcel_name: Optional[str] = None):
        super().__init__(
            f"Frontage index {index} is out of range for {side_count} sides",
            parcel_name=parcel_name
        )
        self.index = index
        self.side_count = side_count
