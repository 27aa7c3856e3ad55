"""
Unit tests for water demand and yield estimates.
"""
from app.domain.models import Crop
from app.services.domain.water_demand import (
    liters_to_m3,
    project_water_demand,
    zone_water_demand,
)
from app.services.domain.yield_estimator import to_rai, zone_yield


class TestWaterDemand:
    """Tests for per-zone and project water demand."""

    def test_zone_water_rounds_half_up(self, rice):
        # 5 x 4.2 = 21.0; 403 x 4.2 = 1692.6
        assert zone_water_demand(5, rice) == 21
        assert zone_water_demand(403, rice) == 1693

    def test_zone_water_without_inputs(self, rice):
        assert zone_water_demand(0, rice) == 0
        assert zone_water_demand(100, None) == 0

    def test_project_water(self):
        water = project_water_demand([1000, 500])
        assert water.per_irrigation_liters == 1500
        assert water.monthly_liters == 45000
        assert water.yearly_liters == 547500
        assert water.per_irrigation_m3 == 1.5
        assert water.yearly_m3 == 547.5

    def test_project_water_empty(self):
        assert project_water_demand([]).yearly_liters == 0

    def test_liters_to_m3(self):
        assert liters_to_m3(1693) == 1.693
        assert liters_to_m3(0) == 0


class TestYield:
    """Tests for yield and income."""

    def test_one_rai(self):
        crop = Crop(value="x", name="X", yield_per_rai=1000, price_per_kg=20)
        estimate = zone_yield(1600, crop)
        assert estimate.estimated_yield == 1000
        assert estimate.estimated_price == 20000

    def test_price_uses_rounded_yield(self):
        crop = Crop(value="x", name="X", yield_per_rai=1, price_per_kg=10)
        # 800 m² is half a rai: 0.5 kg rounds up to 1 kg
        assert zone_yield(800, crop).estimated_price == 10

    def test_missing_inputs(self, rice):
        assert zone_yield(0, rice).estimated_yield == 0
        assert zone_yield(1600, None).estimated_price == 0

    def test_to_rai(self):
        assert to_rai(1600) == 1.0
        assert to_rai(10000) == 6.25
        assert to_rai(1000) == 0.63
