"""
API router for project statistics endpoints.
"""
import logging
from fastapi import APIRouter, HTTPException

from app.api.dependencies import ProjectServiceDep
from app.api.v1.models.responses import ProjectSummaryResponse
from app.domain.exceptions import PlanningError
from app.domain.models import ProjectSnapshot

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/projects",
    tags=["projects"],
)


@router.post(
    "/summary",
    response_model=ProjectSummaryResponse,
    summary="Compute zone summaries and project totals",
    description="""
    Compute irrigation planning statistics for a project snapshot.

    For every zone this endpoint reports:
    1. Area in square meters and rai
    2. Planting points (from crop spacing, or along lateral pipes when the
       project has pipes)
    3. Estimated yield, income and water demand per irrigation
    4. Main/submain/lateral pipe counts and lengths
    5. Emitter counts per type

    Totals add whole-project pipe statistics and monthly/yearly water demand.
    """,
    responses={
        200: {"description": "Statistics computed"},
        400: {"description": "Snapshot violates the input contract"},
        422: {"description": "Malformed snapshot"},
        429: {"description": "Rate limit exceeded"},
        500: {"description": "Internal server error"},
    }
)
async def summarize_project(
    snapshot: ProjectSnapshot,
    project_service: ProjectServiceDep,
) -> ProjectSummaryResponse:
    """
    Compute statistics for a project snapshot.

    Args:
        snapshot: Zones, pipes, emitters and crop assignments
        project_service: Project service (injected dependency)

    Returns:
        ProjectSummaryResponse with zone summaries and totals

    Raises:
        HTTPException: If the snapshot violates the input contract
    """
    try:
        # Delegate to service layer (no business logic here)
        summary = project_service.summarize_project(snapshot)
    except PlanningError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return ProjectSummaryResponse(
        zone_count=len(summary.zones),
        zones=summary.zones,
        totals=summary.totals,
    )
