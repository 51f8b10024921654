"""
Mars Photo API: Manifest Route Handler
========================================

What:  GET /api/v1/manifests/{rover_id}
How:   Delegates to RoverService.get_manifest().

The manifest's per-sol list is a sample, not the full mission history;
the endpoint description says so explicitly in the OpenAPI docs.
"""

import httpx
from fastapi import APIRouter, Depends

from mars_photos.http_client import get_http_client
from mars_photos.schemas.rover import ErrorResponse, ManifestResponse
from mars_photos.services.rover_service import rover_service

router = APIRouter(prefix="/api/v1/manifests", tags=["Manifests"])


@router.get(
    "/{rover_id}",
    response_model=ManifestResponse,
    responses={
        400: {"description": "Invalid rover name", "model": ErrorResponse},
        501: {"description": "Rover photos not supported", "model": ErrorResponse},
        500: {"description": "Upstream or server error", "model": ErrorResponse},
    },
    summary="Get a rover's mission manifest",
    description=(
        "Returns mission dates, the latest sol, an approximate total photo count "
        "and per-sol summaries for a sample of sols (ascending, ending with the "
        "latest sol). Most sols are omitted."
    ),
)
async def get_manifest(
    rover_id: str,
    client: httpx.AsyncClient = Depends(get_http_client),
) -> ManifestResponse:
    return await rover_service.get_manifest(client, rover_id)
