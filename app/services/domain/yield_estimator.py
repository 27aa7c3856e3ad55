"""
Domain service: yield and income estimates.
"""
from typing import Optional

from app.domain.models import Crop, YieldEstimate
from app.utils.rounding import round_half_up, round_to

SQUARE_METERS_PER_RAI = 1600


def to_rai(area_m2: float) -> float:
    """Convert square meters to rai, rounded to two decimals."""
    return round_to(area_m2 / SQUARE_METERS_PER_RAI, 2)


def zone_yield(zone_area: float, crop: Optional[Crop]) -> YieldEstimate:
    """
    Estimate harvest weight and income for a zone.

    Args:
        zone_area: Zone area in m²
        crop: Assigned crop

    Returns:
        YieldEstimate (kg and currency units); zeros when inputs are missing
    """
    if not zone_area or crop is None:
        return YieldEstimate()

    area_in_rai = zone_area / SQUARE_METERS_PER_RAI
    estimated_yield = round_half_up(area_in_rai * crop.yield_per_rai)
    estimated_price = round_half_up(estimated_yield * crop.price_per_kg)
    return YieldEstimate(estimated_yield=estimated_yield, estimated_price=estimated_price)
