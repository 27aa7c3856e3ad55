"""
Dependency injection for FastAPI.
"""
from typing import Annotated
from fastapi import Depends

from app.infrastructure.crop_catalog import CropCatalog, get_crop_catalog
from app.services.domain.zone_stats import ZoneStatsAggregator
from app.services.application.project_service import ProjectService


def get_zone_stats_aggregator() -> ZoneStatsAggregator:
    """
    Dependency factory for ZoneStatsAggregator.

    Returns:
        ZoneStatsAggregator instance
    """
    return ZoneStatsAggregator()


def get_project_service(
    catalog: Annotated[CropCatalog, Depends(get_crop_catalog)],
    aggregator: Annotated[ZoneStatsAggregator, Depends(get_zone_stats_aggregator)],
) -> ProjectService:
    """
    Dependency factory for ProjectService.

    Args:
        catalog: Crop catalog (injected)
        aggregator: Zone statistics aggregator (injected)

    Returns:
        ProjectService instance
    """
    return ProjectService(catalog=catalog, aggregator=aggregator)


# Type aliases for cleaner route signatures
ProjectServiceDep = Annotated[ProjectService, Depends(get_project_service)]
