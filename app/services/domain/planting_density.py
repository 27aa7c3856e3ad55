"""
Domain service: planting-point estimation.

Two strategies are available:
- area: plants per square meter from row and plant spacing
- pipes: plants placed along each lateral at plant spacing

The project-level policy picks pipe traversal as soon as the project has any
pipe at all, even for zones without laterals.
"""
import logging
import math
from typing import Iterable, Optional

from app.domain.models import Crop, PipeSegment
from app.utils.geometry import polyline_length

logger = logging.getLogger(__name__)

AREA_STRATEGY = "area"
PIPE_STRATEGY = "pipes"
AUTO_STRATEGY = "auto"


def effective_spacing_m(default_cm: Optional[float], override_cm: Optional[float] = None) -> float:
    """
    Resolve a spacing in meters; a truthy override wins over the crop default.

    Args:
        default_cm: Crop default spacing in cm
        override_cm: Per-zone override in cm

    Returns:
        Spacing in meters (0 when neither value is set)
    """
    spacing_cm = override_cm or default_cm or 0
    return spacing_cm / 100


def area_density(
    zone_area: float,
    crop: Optional[Crop],
    row_override: Optional[float] = None,
    plant_override: Optional[float] = None,
) -> int:
    """
    Estimate planting points from zone area and crop spacing.

    Args:
        zone_area: Zone area in m²
        crop: Assigned crop
        row_override: Row spacing override in cm
        plant_override: Plant spacing override in cm

    Returns:
        floor(area * plants per m²), or 0 when inputs are missing
    """
    if not zone_area or crop is None:
        return 0

    row_m = effective_spacing_m(crop.row_spacing, row_override)
    plant_m = effective_spacing_m(crop.plant_spacing, plant_override)
    if not row_m or not plant_m:
        return 0

    plants_per_sqm = (1 / row_m) * (1 / plant_m)
    return math.floor(zone_area * plants_per_sqm)


def pipe_traversal_density(
    lateral_pipes: Iterable[PipeSegment],
    crop: Optional[Crop],
    spacing_override: Optional[float] = None,
) -> int:
    """
    Estimate planting points along lateral pipes.

    Each lateral holds floor(length / plant spacing) + 1 points.

    Args:
        lateral_pipes: Lateral pipes belonging to the zone
        crop: Assigned crop
        spacing_override: Plant spacing override in cm

    Returns:
        Sum over all laterals, or 0 when inputs are missing
    """
    if crop is None:
        return 0

    plant_m = effective_spacing_m(crop.plant_spacing, spacing_override)
    if not plant_m:
        return 0

    total = 0
    for pipe in lateral_pipes:
        if len(pipe.coordinates) < 2:
            continue
        points_in_pipe = math.floor(polyline_length(pipe.coordinates) / plant_m) + 1
        logger.debug(f"Lateral {pipe.id}: {points_in_pipe} planting points")
        total += points_in_pipe
    return total


def choose_strategy(requested: str, project_has_pipes: bool) -> str:
    """
    Pick the density strategy for a project.

    Args:
        requested: "auto", "area" or "pipes"
        project_has_pipes: Whether the snapshot contains any pipe

    Returns:
        "area" or "pipes"
    """
    if requested == AUTO_STRATEGY:
        return PIPE_STRATEGY if project_has_pipes else AREA_STRATEGY
    if requested not in (AREA_STRATEGY, PIPE_STRATEGY):
        raise ValueError(f"Unknown planting strategy '{requested}'")
    return requested
