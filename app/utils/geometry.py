"""
Geometry kernel for map-drawn irrigation layouts.

Provides:
- Great-circle distance and polyline length
- Polygon area via UTM projection
- Point-in-polygon and vertex-based path containment
- Point-to-segment distance

Every function converts geometry failures into a zero/False result so that a
single malformed shape never aborts a zone's statistics.
"""
import logging
import math
from typing import Sequence

import numpy as np
from shapely.geometry import LineString, Point, Polygon

from app.domain.models import Coordinate
from app.utils.geo_projection import project_to_meters
from app.utils.rounding import round_half_up

logger = logging.getLogger(__name__)

# Mean earth radius used by the planner's map library
EARTH_RADIUS_M = 6371008.8


def _is_valid(coord: Coordinate) -> bool:
    return math.isfinite(coord.lat) and math.isfinite(coord.lng)


def close_ring(ring: Sequence[Coordinate]) -> list[Coordinate]:
    """
    Return a closed copy of a ring.

    The input sequence is never mutated.

    Args:
        ring: Polygon vertices, open or closed

    Returns:
        New list whose last vertex equals its first
    """
    closed = list(ring)
    if closed and closed[0].as_tuple() != closed[-1].as_tuple():
        closed.append(closed[0])
    return closed


def _lnglat_polygon(ring: Sequence[Coordinate]) -> Polygon:
    return Polygon([(c.lng, c.lat) for c in close_ring(ring)])


def distance(a: Coordinate, b: Coordinate) -> float:
    """
    Great-circle (haversine) distance between two coordinates.

    Args:
        a: First coordinate
        b: Second coordinate

    Returns:
        Distance in meters
    """
    lat1, lat2 = math.radians(a.lat), math.radians(b.lat)
    d_lat = lat2 - lat1
    d_lng = math.radians(b.lng - a.lng)
    h = math.sin(d_lat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(d_lng / 2) ** 2
    return 2 * EARTH_RADIUS_M * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def polyline_length(points: Sequence[Coordinate]) -> int:
    """
    Total great-circle length of a polyline.

    Args:
        points: Ordered polyline vertices

    Returns:
        Length in meters, rounded to the nearest meter (0 for < 2 points)
    """
    if len(points) < 2:
        return 0

    try:
        lat = np.radians([p.lat for p in points])
        lng = np.radians([p.lng for p in points])
        d_lat = np.diff(lat)
        d_lng = np.diff(lng)
        h = np.sin(d_lat / 2) ** 2 + np.cos(lat[:-1]) * np.cos(lat[1:]) * np.sin(d_lng / 2) ** 2
        segments = 2 * EARTH_RADIUS_M * np.arctan2(np.sqrt(h), np.sqrt(1 - h))
        total = float(np.nansum(segments))
    except Exception as e:
        logger.warning(f"Failed to measure polyline of {len(points)} points: {e}")
        return 0

    return round_half_up(total)


def polygon_area(ring: Sequence[Coordinate]) -> float:
    """
    Area of a zone ring.

    The ring is closed if open and projected to the UTM zone of its first
    vertex before measuring.

    Args:
        ring: Polygon vertices

    Returns:
        Area in square meters; 0 for fewer than 3 distinct valid vertices
        or when the computation fails
    """
    vertices = [c for c in ring if _is_valid(c)]
    if len({c.as_tuple() for c in vertices}) < 3:
        return 0.0

    try:
        closed = close_ring(vertices)
        projected = project_to_meters([c.as_tuple() for c in closed])
        area = Polygon(projected).area
    except Exception as e:
        logger.warning(f"Failed to compute polygon area: {e}")
        return 0.0

    return float(area) if math.isfinite(area) else 0.0


def point_in_polygon(point: Coordinate, ring: Sequence[Coordinate]) -> bool:
    """
    Check if a coordinate lies inside a zone ring.

    Points exactly on the boundary are reported as outside.

    Args:
        point: Coordinate to test
        ring: Polygon vertices, open or closed

    Returns:
        True if point is inside polygon, False otherwise
    """
    if len(ring) < 3 or not _is_valid(point):
        return False

    try:
        return _lnglat_polygon(ring).contains(Point(point.lng, point.lat))
    except Exception as e:
        logger.warning(f"Point-in-polygon test failed: {e}")
        return False


def segment_distance(
    point: Coordinate,
    seg_start: Coordinate,
    seg_end: Coordinate,
) -> float:
    """
    Distance from a coordinate to the closest point of a segment.

    The projection parameter is clamped to [0, 1], so points beyond either
    end measure to that endpoint.

    Args:
        point: Coordinate to measure from
        seg_start: Segment start
        seg_end: Segment end

    Returns:
        Distance in meters (0 when the computation fails)
    """
    try:
        if seg_start.as_tuple() == seg_end.as_tuple():
            return distance(point, seg_start)

        p, a, b = project_to_meters(
            [point.as_tuple(), seg_start.as_tuple(), seg_end.as_tuple()],
            anchor=seg_start.as_tuple(),
        )
        result = LineString([a, b]).distance(Point(p))
    except Exception as e:
        logger.warning(f"Point-to-segment distance failed: {e}")
        return 0.0

    return float(result) if math.isfinite(result) else 0.0


def path_touches_polygon(path: Sequence[Coordinate], ring: Sequence[Coordinate]) -> bool:
    """
    Check whether any vertex of a path lies inside a ring.

    Only vertices are tested: a pipe that crosses a zone without having a
    vertex inside it does not touch it.

    Args:
        path: Polyline vertices
        ring: Polygon vertices

    Returns:
        True if at least one vertex is inside
    """
    if len(ring) < 3:
        return False

    try:
        polygon = _lnglat_polygon(ring)
        return any(
            polygon.contains(Point(c.lng, c.lat)) for c in path if _is_valid(c)
        )
    except Exception as e:
        logger.warning(f"Path containment test failed: {e}")
        return False
