"""
API router for the crop catalog.
"""
from typing import Annotated, Optional
from fastapi import APIRouter, HTTPException, Path, Query

from app.api.dependencies import ProjectServiceDep
from app.api.v1.models.responses import CropListResponse, CropResponse
from app.domain.exceptions import UnknownCropError


router = APIRouter(
    prefix="/crops",
    tags=["crops"],
)


@router.get(
    "",
    response_model=CropListResponse,
    summary="List catalog crops",
    responses={429: {"description": "Rate limit exceeded"}},
)
async def list_crops(
    project_service: ProjectServiceDep,
    category: Annotated[Optional[str], Query(description="Restrict to one category")] = None,
) -> CropListResponse:
    """List catalog crops, optionally filtered by category."""
    crops = project_service.list_crops(category)
    return CropListResponse(
        count=len(crops),
        crops=[CropResponse.from_crop(crop) for crop in crops],
    )


@router.get(
    "/{value}",
    response_model=CropResponse,
    summary="Get a catalog crop",
    responses={
        404: {"description": "Crop not found"},
        429: {"description": "Rate limit exceeded"},
    },
)
async def get_crop(
    value: Annotated[str, Path(description="Crop value, e.g. 'rice'")],
    project_service: ProjectServiceDep,
) -> CropResponse:
    """
    Get one catalog crop.

    Raises:
        HTTPException: If the crop is not in the catalog
    """
    try:
        crop = project_service.get_crop(value)
    except UnknownCropError:
        raise HTTPException(
            status_code=404,
            detail=f"Crop '{value}' not found"
        )
    return CropResponse.from_crop(crop)
