"""
Domain exceptions.
"""


class PlanningError(Exception):
    """Base class for irrigation planning errors."""
    pass


class UnknownCropError(PlanningError):
    """Raised when a crop value is not in the catalog."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Unknown crop '{value}'")


class ProjectDataError(PlanningError):
    """Raised when a project snapshot violates the caller contract."""
    pass
