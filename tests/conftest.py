"""
Shared fixtures for parcel memorial tests
"""

import sys
from pathlib import Path

import pytest
from loguru import logger

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from memorial.models import AlignmentCurve, NeighborParcel, ParcelInput, Vertex


@pytest.fixture(autouse=True)
def quiet_logging():
    """Keep loguru output out of test runs"""
    logger.remove()
    yield


@pytest.fixture
def square_points():
    return [(0.0, 0.0), (0.0, 10.0), (10.0, 10.0), (10.0, 0.0)]


@pytest.fixture
def square_vertices(square_points):
    return tuple(
        Vertex(index=i + 1, east=x, north=y) for i, (x, y) in enumerate(square_points)
    )


@pytest.fixture
def west_street():
    """North-south street running 0.5 units west of the square's west side"""
    samples = tuple((-0.5, float(y)) for y in range(-5, 16))
    return AlignmentCurve(name="West Street", samples=samples)


@pytest.fixture
def east_neighbor():
    """Lot sharing the square's east side"""
    return NeighborParcel(
        name="Lot 02",
        group="Block A",
        vertices=(
            Vertex(index=1, east=10.0, north=0.0),
            Vertex(index=2, east=10.0, north=10.0),
            Vertex(index=3, east=20.0, north=10.0),
            Vertex(index=4, east=20.0, north=0.0),
        ),
    )


@pytest.fixture
def block_inputs():
    """Two adjacent lots in one block, plus a lot in another block"""
    return [
        ParcelInput(
            name="Lot 01",
            group="Block A",
            points=((0.0, 0.0), (0.0, 10.0), (10.0, 10.0), (10.0, 0.0), (0.0, 0.0)),
        ),
        ParcelInput(
            name="Lot 02",
            group="Block A",
            points=((10.0, 0.0), (10.0, 10.0), (20.0, 10.0), (20.0, 0.0)),
        ),
        ParcelInput(
            name="Lot 10",
            group="Block B",
            points=((100.0, 100.0), (100.0, 120.0), (115.0, 120.0), (115.0, 100.0)),
        ),
    ]
