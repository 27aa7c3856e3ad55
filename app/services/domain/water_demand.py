"""
Domain service: water demand per zone and per project.
"""
from typing import Iterable, Optional

from app.domain.models import Crop, WaterDemandSummary
from app.utils.rounding import round_half_up, round_to

DAYS_PER_MONTH = 30
DAYS_PER_YEAR = 365
LITERS_PER_M3 = 1000


def zone_water_demand(planting_points: int, crop: Optional[Crop]) -> int:
    """
    Water needed for one irrigation of a zone.

    Args:
        planting_points: Number of planting points in the zone
        crop: Assigned crop

    Returns:
        Liters per irrigation, or 0 when either input is missing/zero
    """
    if not planting_points or crop is None or not crop.water_requirement:
        return 0
    return round_half_up(planting_points * crop.water_requirement)


def liters_to_m3(liters: float) -> float:
    return round_to(liters / LITERS_PER_M3, 3)


def project_water_demand(per_zone_liters: Iterable[int]) -> WaterDemandSummary:
    """
    Aggregate zone demands into per-irrigation, monthly and yearly figures.

    Args:
        per_zone_liters: Liters per irrigation for each zone

    Returns:
        WaterDemandSummary in liters and cubic meters
    """
    per_irrigation = sum(per_zone_liters)
    monthly = per_irrigation * DAYS_PER_MONTH
    yearly = per_irrigation * DAYS_PER_YEAR
    return WaterDemandSummary(
        per_irrigation_liters=per_irrigation,
        per_irrigation_m3=liters_to_m3(per_irrigation),
        monthly_liters=monthly,
        monthly_m3=liters_to_m3(monthly),
        yearly_liters=yearly,
        yearly_m3=liters_to_m3(yearly),
    )
