"""
API response models using Pydantic.
"""
from typing import List, Optional
from pydantic import BaseModel, Field

from app.domain.models import Crop, ProjectTotals, ZoneSummary


class ProjectSummaryResponse(BaseModel):
    """Response model for the project summary endpoint."""
    zone_count: int = Field(
        description="Number of zones summarized"
    )
    zones: List[ZoneSummary] = Field(
        description="Per-zone metrics, in snapshot order"
    )
    totals: ProjectTotals = Field(
        description="Sums over all zones plus whole-project pipe statistics"
    )


class CropResponse(BaseModel):
    """Single catalog crop."""
    value: str = Field(examples=["rice"])
    name: str = Field(examples=["Rice"])
    category: Optional[str] = None
    irrigation_needs: Optional[str] = None
    row_spacing_cm: float
    plant_spacing_cm: float
    water_per_plant_liters: float
    yield_per_rai_kg: float
    price_per_kg: float
    growth_period_days: int

    @classmethod
    def from_crop(cls, crop: Crop) -> "CropResponse":
        return cls(
            value=crop.value,
            name=crop.name,
            category=crop.category,
            irrigation_needs=crop.irrigation_needs,
            row_spacing_cm=crop.row_spacing,
            plant_spacing_cm=crop.plant_spacing,
            water_per_plant_liters=crop.water_requirement,
            yield_per_rai_kg=crop.yield_per_rai,
            price_per_kg=crop.price_per_kg,
            growth_period_days=crop.growth_period,
        )


class CropListResponse(BaseModel):
    """Response model for the crop catalog endpoint."""
    count: int
    crops: List[CropResponse]

    class Config:
        json_schema_extra = {
            "example": {
                "count": 1,
                "crops": [
                    {
                        "value": "rice",
                        "name": "Rice",
                        "category": "cereal",
                        "irrigation_needs": "high",
                        "row_spacing_cm": 25,
                        "plant_spacing_cm": 25,
                        "water_per_plant_liters": 4.2,
                        "yield_per_rai_kg": 650,
                        "price_per_kg": 12,
                        "growth_period_days": 120,
                    }
                ]
            }
        }
