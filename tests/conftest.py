"""
Shared pytest fixtures for all tests.

This module provides common fixtures including:
- Coordinate offset helper (meters -> degrees)
- Sample zones, pipes and emitters
- Sample crops and project snapshot
- FastAPI test client
"""
import math
import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.domain.models import (
    Coordinate,
    Crop,
    IrrigationPoint,
    PipeSegment,
    ProjectSnapshot,
    Zone,
    ZoneCropAssignment,
)
from app.utils.geometry import EARTH_RADIUS_M


# Central Thailand
ORIGIN_LAT = 13.75
ORIGIN_LNG = 100.5

METERS_PER_DEGREE = EARTH_RADIUS_M * math.pi / 180


def offset(north_m: float, east_m: float = 0.0) -> Coordinate:
    """Coordinate displaced from the origin by the given meters on the sphere."""
    lat = ORIGIN_LAT + north_m / METERS_PER_DEGREE
    lng = ORIGIN_LNG + east_m / (METERS_PER_DEGREE * math.cos(math.radians(ORIGIN_LAT)))
    return Coordinate(lat=lat, lng=lng)


def square(south_m: float, west_m: float, size_m: float) -> list[Coordinate]:
    """Open square ring with its south-west corner at the given offset."""
    return [
        offset(south_m, west_m),
        offset(south_m, west_m + size_m),
        offset(south_m + size_m, west_m + size_m),
        offset(south_m + size_m, west_m),
    ]


def north_pipe(
    pipe_id: str,
    length_m: float,
    start_north_m: float = 0.0,
    east_m: float = 0.0,
    **kwargs,
) -> PipeSegment:
    """Straight pipe running north, whose haversine length is exactly length_m."""
    return PipeSegment(
        id=pipe_id,
        coordinates=[offset(start_north_m, east_m), offset(start_north_m + length_m, east_m)],
        **kwargs,
    )


class GeoHelpers:
    """Fixture namespace exposing the coordinate helpers to test modules."""
    offset = staticmethod(offset)
    square = staticmethod(square)
    north_pipe = staticmethod(north_pipe)


# ============================================================
# Sample Data Fixtures
# ============================================================

@pytest.fixture
def geo() -> type[GeoHelpers]:
    """Coordinate helpers: offset(north_m, east_m), square(...), north_pipe(...)."""
    return GeoHelpers


@pytest.fixture
def rice() -> Crop:
    """Rice planted at 25 x 25 cm."""
    return Crop(
        value="rice",
        name="Rice",
        category="cereal",
        row_spacing=25,
        plant_spacing=25,
        water_requirement=4.2,
        yield_per_rai=650,
        price_per_kg=12,
        growth_period=120,
    )


@pytest.fixture
def field_zone() -> Zone:
    """100 m x 100 m zone at the origin."""
    return Zone(id="1", name="Zone A", color="#22c55e", coordinates=square(0, 0, 100))


@pytest.fixture
def neighbour_zone() -> Zone:
    """100 m x 100 m zone east of field_zone."""
    return Zone(id="2", name="Zone B", color="#3b82f6", coordinates=square(0, 150, 100))


@pytest.fixture
def field_pipes() -> list[PipeSegment]:
    """Network inside field_zone: one main, one submain, three laterals."""
    return [
        north_pipe("m1", 90, start_north_m=5, east_m=5, type="main"),
        north_pipe("s1", 80, start_north_m=10, east_m=20, color="green"),
        north_pipe("l1", 50, start_north_m=10, east_m=40, type="lateral"),
        north_pipe("l2", 30, start_north_m=10, east_m=60, type="lateral"),
        north_pipe("l3", 20, start_north_m=10, east_m=80, color="orange"),
    ]


@pytest.fixture
def field_emitters() -> list[IrrigationPoint]:
    """Emitters: five inside field_zone, one in neighbour_zone, one unplaced."""
    inside = [
        ("e1", 20, 40, "sprinkler"),
        ("e2", 40, 40, "Mini-Sprinkler"),
        ("e3", 60, 40, "micro"),
        ("e4", 50, 70, "drip-tape"),
        ("e5", 50, 90, "rotor"),
        ("e6", 50, 200, "sprinkler"),
    ]
    points = [
        IrrigationPoint(id=pid, lat=offset(n, e).lat, lng=offset(n, e).lng, type=kind)
        for pid, n, e, kind in inside
    ]
    points.append(IrrigationPoint(id="e7", type="sprinkler"))
    return points


@pytest.fixture
def sample_snapshot(field_zone, neighbour_zone, field_pipes, field_emitters) -> ProjectSnapshot:
    """Two zones, rice assigned to the first one only."""
    return ProjectSnapshot(
        zones=[field_zone, neighbour_zone],
        pipes=field_pipes,
        irrigation_points=field_emitters,
        assignments=[ZoneCropAssignment(zone_id="1", crop_value="rice")],
        irrigation_assignments={"1": "sprinkler"},
    )


# ============================================================
# FastAPI Test Client Fixtures
# ============================================================

@pytest.fixture
def test_client() -> TestClient:
    """Create a synchronous test client for FastAPI."""
    return TestClient(app)
