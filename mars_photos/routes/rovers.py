"""
Mars Photo API: Rover Route Handlers
======================================

What:  GET /api/v1/rovers, /rovers/{id}, /rovers/{id}/photos and
       /rovers/{id}/latest_photos.
How:   Extracts path/query parameters, delegates to RoverService, returns
       the response envelope. Errors propagate to the global handlers.
Who:   Clients of the reference Mars Rover Photos API.

Query parameter validation:
    FastAPI validates types and ranges (sol ≥ 0, page ≥ 0, 1 ≤ per_page ≤
    max_per_page, earth_date as YYYY-MM-DD). Failures are turned into 400
    responses by the RequestValidationError handler in main.py.
"""

from datetime import date
from typing import Optional

import httpx
from fastapi import APIRouter, Depends, Query

from mars_photos.config import settings
from mars_photos.http_client import get_http_client
from mars_photos.schemas.rover import (
    ErrorResponse,
    LatestPhotoListResponse,
    PhotoListResponse,
    RoverDetailResponse,
    RoverListResponse,
)
from mars_photos.services.rover_service import rover_service

router = APIRouter(prefix="/api/v1/rovers", tags=["Rovers"])


@router.get(
    "",
    response_model=RoverListResponse,
    responses={500: {"description": "Upstream or server error", "model": ErrorResponse}},
    summary="List all rovers",
    description=(
        "Returns every known rover with its latest sol and an approximate total "
        "photo count, estimated by sampling sols across the mission."
    ),
)
async def list_rovers(
    client: httpx.AsyncClient = Depends(get_http_client),
) -> RoverListResponse:
    return await rover_service.list_rovers(client)


@router.get(
    "/{rover_id}",
    response_model=RoverDetailResponse,
    responses={
        400: {"description": "Invalid rover name", "model": ErrorResponse},
        500: {"description": "Upstream or server error", "model": ErrorResponse},
    },
    summary="Get a single rover",
)
async def get_rover(
    rover_id: str,
    client: httpx.AsyncClient = Depends(get_http_client),
) -> RoverDetailResponse:
    return await rover_service.get_rover(client, rover_id)


@router.get(
    "/{rover_id}/photos",
    response_model=PhotoListResponse,
    responses={
        400: {"description": "Invalid rover, sol or earth_date", "model": ErrorResponse},
        501: {"description": "Rover photos not supported", "model": ErrorResponse},
        500: {"description": "Upstream or server error", "model": ErrorResponse},
    },
    summary="Get photos for a sol or Earth date",
    description=(
        "Returns full-resolution photos taken on the given sol, or on the sol "
        "matching the given Earth date. One of sol or earth_date is required; "
        "sol wins when both are supplied. Photo ids are only unique within a "
        "single response."
    ),
)
async def get_photos(
    rover_id: str,
    sol: Optional[int] = Query(default=None, ge=0, description="Mission sol"),
    earth_date: Optional[date] = Query(default=None, description="Earth date (YYYY-MM-DD)"),
    camera: Optional[str] = Query(
        default=None,
        description="Instrument prefix (e.g. CHEMCAM) or category (FHAZ, RHAZ, MAST)",
    ),
    page: int = Query(default=0, ge=0, description="Zero-based page"),
    per_page: int = Query(
        default=settings.default_per_page,
        ge=1,
        le=settings.max_per_page,
        description="Photos requested from the feed per page",
    ),
    client: httpx.AsyncClient = Depends(get_http_client),
) -> PhotoListResponse:
    return await rover_service.get_photos(
        client,
        rover_id,
        sol=sol,
        earth_date=earth_date,
        camera=camera,
        page=page,
        per_page=per_page,
    )


@router.get(
    "/{rover_id}/latest_photos",
    response_model=LatestPhotoListResponse,
    responses={
        400: {"description": "Invalid rover name", "model": ErrorResponse},
        501: {"description": "Rover photos not supported", "model": ErrorResponse},
        500: {"description": "Upstream or server error", "model": ErrorResponse},
    },
    summary="Get photos from the latest sol",
)
async def get_latest_photos(
    rover_id: str,
    camera: Optional[str] = Query(default=None),
    page: int = Query(default=0, ge=0),
    per_page: int = Query(default=settings.default_per_page, ge=1, le=settings.max_per_page),
    client: httpx.AsyncClient = Depends(get_http_client),
) -> LatestPhotoListResponse:
    return await rover_service.get_latest_photos(
        client,
        rover_id,
        camera=camera,
        page=page,
        per_page=per_page,
    )
