"""
Infrastructure layer: built-in crop catalog.

Spacing is in cm, water requirement in liters per plant per irrigation,
yield in kg per rai and price in THB per kg.
"""
from typing import Dict, List, Optional

from app.domain.exceptions import UnknownCropError
from app.domain.models import Crop


CROP_TYPES: List[Crop] = [
    # Cereals
    Crop(value="rice", name="Rice", category="cereal", irrigation_needs="high",
         growth_period=120, water_requirement=4.2, row_spacing=25, plant_spacing=25,
         yield_per_rai=650, price_per_kg=12),
    Crop(value="corn", name="Field Corn", category="cereal", irrigation_needs="medium",
         growth_period=115, water_requirement=2.5, row_spacing=75, plant_spacing=25,
         yield_per_rai=750, price_per_kg=9.5),
    Crop(value="sorghum", name="Sorghum", category="cereal", irrigation_needs="low",
         growth_period=110, water_requirement=1.8, row_spacing=60, plant_spacing=10,
         yield_per_rai=450, price_per_kg=8),

    # Root crops
    Crop(value="cassava", name="Cassava", category="root", irrigation_needs="low",
         growth_period=300, water_requirement=1.5, row_spacing=100, plant_spacing=80,
         yield_per_rai=3500, price_per_kg=3.0),
    Crop(value="sweet_potato", name="Sweet Potato", category="root", irrigation_needs="medium",
         growth_period=110, water_requirement=2.0, row_spacing=80, plant_spacing=30,
         yield_per_rai=2000, price_per_kg=15),

    # Legumes
    Crop(value="soybean", name="Soybean", category="legume", irrigation_needs="medium",
         growth_period=95, water_requirement=2.8, row_spacing=50, plant_spacing=20,
         yield_per_rai=280, price_per_kg=18),
    Crop(value="mung_bean", name="Mung Bean", category="legume", irrigation_needs="low",
         growth_period=70, water_requirement=1.5, row_spacing=50, plant_spacing=10,
         yield_per_rai=150, price_per_kg=25),
    Crop(value="peanut", name="Peanut", category="legume", irrigation_needs="medium",
         growth_period=100, water_requirement=2.2, row_spacing=50, plant_spacing=20,
         yield_per_rai=350, price_per_kg=22),

    # Industrial crops
    Crop(value="sugarcane", name="Sugarcane", category="industrial", irrigation_needs="high",
         growth_period=365, water_requirement=3.5, row_spacing=150, plant_spacing=50,
         yield_per_rai=12000, price_per_kg=1.2),
    Crop(value="pineapple", name="Pineapple", category="industrial", irrigation_needs="medium",
         growth_period=540, water_requirement=2.8, row_spacing=120, plant_spacing=60,
         yield_per_rai=4000, price_per_kg=8.5),
    Crop(value="rubber", name="Rubber", category="industrial", irrigation_needs="medium",
         growth_period=2555, water_requirement=10.0, row_spacing=700, plant_spacing=300,
         yield_per_rai=280, price_per_kg=25),

    # Oilseed crops
    Crop(value="oil_palm", name="Oil Palm", category="oilseed", irrigation_needs="high",
         growth_period=1095, water_requirement=15.0, row_spacing=900, plant_spacing=900,
         yield_per_rai=3000, price_per_kg=5.5),
    Crop(value="sunflower", name="Sunflower", category="oilseed", irrigation_needs="low",
         growth_period=90, water_requirement=2.0, row_spacing=70, plant_spacing=25,
         yield_per_rai=250, price_per_kg=15),
]


class CropCatalog:
    """
    In-memory crop repository.

    Project-specific crop definitions can be layered on top of the
    built-in table with resolve().
    """

    def __init__(self, crops: Optional[List[Crop]] = None):
        self._crops: Dict[str, Crop] = {
            crop.value: crop for crop in (crops if crops is not None else CROP_TYPES)
        }

    def get(self, value: str) -> Crop:
        """
        Look up a crop by its value.

        Raises:
            UnknownCropError: If the value is not in the catalog
        """
        try:
            return self._crops[value]
        except KeyError:
            raise UnknownCropError(value)

    def list(self, category: Optional[str] = None) -> List[Crop]:
        """List crops, optionally restricted to one category."""
        return [
            crop for crop in self._crops.values()
            if category is None or crop.category == category
        ]

    def search(self, term: str) -> List[Crop]:
        """Case-insensitive match on crop name, value or category."""
        needle = term.strip().lower()
        return [
            crop for crop in self._crops.values()
            if needle in crop.name.lower()
            or needle in crop.value.lower()
            or needle in (crop.category or "").lower()
        ]

    def categories(self) -> List[str]:
        """Distinct categories in catalog order."""
        return list(dict.fromkeys(c.category for c in self._crops.values() if c.category))

    def resolve(self, overrides: List[Crop]) -> Dict[str, Crop]:
        """
        Merge project crop definitions over the catalog.

        Args:
            overrides: Crops defined in the project snapshot

        Returns:
            Mapping of crop value to Crop
        """
        merged = dict(self._crops)
        merged.update({crop.value: crop for crop in overrides})
        return merged


# Singleton instance
_crop_catalog: Optional[CropCatalog] = None


def get_crop_catalog() -> CropCatalog:
    """
    Get or create the singleton crop catalog.

    Returns:
        CropCatalog instance
    """
    global _crop_catalog
    if _crop_catalog is None:
        _crop_catalog = CropCatalog()
    return _crop_catalog
