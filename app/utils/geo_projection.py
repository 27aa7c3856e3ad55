"""
Geospatial projection utilities for coordinate transformations.
"""
from functools import lru_cache
from typing import List, Optional, Tuple

from pyproj import Transformer


def get_utm_zone(longitude: float) -> int:
    """
    Calculate the UTM zone number from longitude.

    Args:
        longitude: Longitude in degrees

    Returns:
        UTM zone number (1-60)
    """
    return min(int((longitude + 180) / 6) + 1, 60)


def get_utm_crs(longitude: float, latitude: float) -> str:
    """
    Get the appropriate UTM CRS (Coordinate Reference System) for a location.

    Args:
        longitude: Longitude in degrees
        latitude: Latitude in degrees

    Returns:
        EPSG code for the UTM zone
    """
    zone = get_utm_zone(longitude)
    # Northern hemisphere: EPSG:326XX, Southern hemisphere: EPSG:327XX
    hemisphere = "6" if latitude >= 0 else "7"
    return f"EPSG:32{hemisphere}{zone:02d}"


@lru_cache(maxsize=16)
def _wgs84_to(crs: str) -> Transformer:
    return Transformer.from_crs("EPSG:4326", crs, always_xy=True)


def project_to_meters(
    coordinates: List[Tuple[float, float]],
    anchor: Optional[Tuple[float, float]] = None,
) -> List[Tuple[float, float]]:
    """
    Project lat/lon coordinates to a planar coordinate system (UTM) in meters.

    All points share the UTM zone of the anchor so that distances and areas
    between them stay consistent, even when a field straddles a zone border.

    Args:
        coordinates: List of (latitude, longitude) tuples in degrees
        anchor: (latitude, longitude) choosing the UTM zone; defaults to the
            first coordinate

    Returns:
        List of (x, y) coordinates in meters
    """
    if not coordinates:
        raise ValueError("Coordinates list cannot be empty")

    lat, lon = anchor if anchor is not None else coordinates[0]
    transformer = _wgs84_to(get_utm_crs(lon, lat))

    projected = []
    for lat, lon in coordinates:
        x, y = transformer.transform(lon, lat)
        projected.append((x, y))

    return projected
