"""
Mars Photo API: Photo Lookup Route
====================================

What:  GET /api/v1/photos/{photo_id}, which always answers 400.

Photo ids are composites of sol, instrument and the photo's position in
one response. They are not stored anywhere and change between requests,
so a lookup by id cannot be answered. The route exists to say so instead
of returning a 404 that suggests the photo might exist elsewhere.
"""

from fastapi import APIRouter

from mars_photos.exceptions import ValidationError
from mars_photos.schemas.rover import ErrorResponse

router = APIRouter(prefix="/api/v1/photos", tags=["Photos"])

PHOTO_LOOKUP_UNSUPPORTED = (
    "Photo ID lookup not supported without database. "
    "Use /api/v1/rovers/:rover/photos endpoint instead."
)


@router.get(
    "/{photo_id}",
    responses={400: {"description": "Lookup by id is unsupported", "model": ErrorResponse}},
    summary="Photo lookup by id (unsupported)",
)
async def get_photo(photo_id: str) -> None:
    raise ValidationError(
        message=PHOTO_LOOKUP_UNSUPPORTED,
        field="photo_id",
        context={"photo_id": photo_id},
    )
