"""
Unit tests for the crop catalog and the project service.
"""
import pytest

from app.domain.exceptions import ProjectDataError, UnknownCropError
from app.domain.models import Crop, ProjectSnapshot
from app.infrastructure.crop_catalog import CROP_TYPES, CropCatalog, get_crop_catalog
from app.services.application.project_service import ProjectService
from app.services.domain.zone_stats import SummaryConfig, ZoneStatsAggregator


class TestCropCatalog:
    """Tests for catalog lookups."""

    def test_builtin_crops(self):
        catalog = CropCatalog()
        assert len(catalog.list()) == len(CROP_TYPES) == 13
        assert catalog.get("corn").row_spacing == 75

    def test_unknown_crop(self):
        with pytest.raises(UnknownCropError) as exc_info:
            CropCatalog().get("kiwi")
        assert exc_info.value.value == "kiwi"
        assert "kiwi" in str(exc_info.value)

    def test_list_by_category(self):
        cereals = CropCatalog().list("cereal")
        assert [c.value for c in cereals] == ["rice", "corn", "sorghum"]

    def test_search(self):
        catalog = CropCatalog()
        assert [c.value for c in catalog.search("Potato")] == ["sweet_potato"]
        assert len(catalog.search("oilseed")) == 2

    def test_categories(self):
        assert CropCatalog().categories() == ["cereal", "root", "legume", "industrial", "oilseed"]

    def test_resolve_overrides(self):
        catalog = CropCatalog()
        custom = Crop(value="rice", name="Jasmine Rice", plant_spacing=30)
        extra = Crop(value="durian", name="Durian")
        crops = catalog.resolve([custom, extra])

        assert crops["rice"].name == "Jasmine Rice"
        assert crops["durian"].name == "Durian"
        assert catalog.get("rice").name == "Rice"

    def test_custom_catalog(self, rice):
        catalog = CropCatalog([rice])
        assert catalog.list() == [rice]

    def test_singleton(self):
        assert get_crop_catalog() is get_crop_catalog()

    def test_camel_case_crop(self):
        crop = Crop.model_validate({
            "value": "x",
            "name": "X",
            "rowSpacing": 30,
            "waterRequirement": 1.5,
            "yield": 100,
            "price": 7,
            "growthPeriod": 60,
        })
        assert crop.row_spacing == 30
        assert crop.yield_per_rai == 100
        assert crop.growth_period == 60


class TestProjectService:
    """Tests for the application service."""

    @pytest.fixture
    def service(self) -> ProjectService:
        return ProjectService(CropCatalog(), ZoneStatsAggregator(SummaryConfig()))

    def test_summarize_uses_catalog(self, service, sample_snapshot):
        summary = service.summarize_project(sample_snapshot)
        assert summary.zones[0].crop_name == "Rice"
        assert summary.zones[0].planting_points == 403

    def test_missing_zones(self, service):
        snapshot = ProjectSnapshot.model_construct(zones=None)
        with pytest.raises(ProjectDataError):
            service.summarize_project(snapshot)

    def test_get_crop(self, service):
        assert service.get_crop("peanut").name == "Peanut"
        with pytest.raises(UnknownCropError):
            service.get_crop("kiwi")

    def test_list_crops(self, service):
        assert len(service.list_crops()) == 13
        assert len(service.list_crops("root")) == 2
