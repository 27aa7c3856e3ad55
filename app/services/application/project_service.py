"""
Application service: Orchestration layer for project statistics.
"""
from app.domain.exceptions import ProjectDataError
from app.domain.models import Crop, ProjectSnapshot, ProjectSummary
from app.infrastructure.crop_catalog import CropCatalog
from app.services.domain.zone_stats import ZoneStatsAggregator


class ProjectService:
    """
    Application service for project-related operations.

    Resolves crop definitions and hands the snapshot to the domain
    aggregator. No business logic here, only coordination between
    infrastructure and domain layers.
    """

    def __init__(
        self,
        catalog: CropCatalog,
        aggregator: ZoneStatsAggregator,
    ):
        """
        Initialize the service with dependencies.

        Args:
            catalog: Crop catalog
            aggregator: Zone statistics aggregator
        """
        self.catalog = catalog
        self.aggregator = aggregator

    def summarize_project(self, snapshot: ProjectSnapshot) -> ProjectSummary:
        """
        Compute zone summaries and project totals for a snapshot.

        Args:
            snapshot: Project snapshot from the authoring layer

        Returns:
            ProjectSummary

        Raises:
            ProjectDataError: If the snapshot has no zone collection
        """
        if snapshot.zones is None:
            raise ProjectDataError("Project snapshot has no zones")

        crops = self.catalog.resolve(snapshot.crops)
        return self.aggregator.summarize(snapshot, crops)

    def get_crop(self, value: str) -> Crop:
        """
        Look up a catalog crop.

        Raises:
            UnknownCropError: If the value is not in the catalog
        """
        return self.catalog.get(value)

    def list_crops(self, category: str = None) -> list[Crop]:
        return self.catalog.list(category)
