"""
Mars Photo API: Pydantic Response Schemas
===========================================

What:  Pydantic models defining the JSON contract of every endpoint.
How:   FastAPI serializes route return values through these models and
       generates the OpenAPI document from them.
Who:   Built by the adapters (PhotoResponse) and RoverService (everything
       else); returned by the route handlers.

Field names follow the reference Mars Rover Photos API (snake_case,
`img_src`, `full_name`, `photo_manifest`, ...) so existing clients of
that API can point at this service unchanged. Dates serialize as
YYYY-MM-DD with no time component.
"""

from datetime import date
from typing import List

from pydantic import BaseModel, Field

from mars_photos.models.rover import Rover


# ══════════════════════════════════════════════════════════════════════════
# Building Blocks
# ══════════════════════════════════════════════════════════════════════════


class CameraSchema(BaseModel):
    """Camera reference: instrument code plus human-readable name."""
    name: str = Field(description="Instrument code, e.g. NAVCAM or MAST_LEFT")
    full_name: str = Field(description="Human-readable instrument name")


class PhotoRover(BaseModel):
    """Compact rover summary embedded in every photo."""
    id: int = Field(description="Numeric rover id")
    name: str = Field(description="Rover display name")
    landing_date: date = Field(description="Landing date (sol 0)")
    launch_date: date = Field(description="Launch date from Earth")
    status: str = Field(description="Mission status: active or complete")

    @classmethod
    def from_rover(cls, rover: Rover) -> "PhotoRover":
        return cls(
            id=rover.api_id,
            name=rover.name,
            landing_date=rover.landing_date,
            launch_date=rover.launch_date,
            status=rover.status.value,
        )


# ══════════════════════════════════════════════════════════════════════════
# Resource Models
# ══════════════════════════════════════════════════════════════════════════


class PhotoResponse(BaseModel):
    """
    What:  One full-resolution image, normalized from any upstream feed.

    The id is "{sol}-{instrument}-{index}", where index is the photo's
    position in this response. It identifies the photo within one response
    only; the same image can carry a different id on the next request.
    """
    id: str = Field(description="Synthetic per-response id (not durable)")
    sol: int = Field(ge=0, description="Mission sol the image was taken on")
    camera: CameraSchema = Field(description="Instrument that took the image")
    img_src: str = Field(description="Full-resolution image URL")
    earth_date: date = Field(description="Earth date derived from the sol")
    rover: PhotoRover = Field(description="Rover that took the image")


class RoverSummary(BaseModel):
    """
    What:  Rover metadata plus mission span and estimated photo count.
    Who:   Returned by GET /rovers and GET /rovers/{id}.

    total_photos is an estimate extrapolated from a sample of sols; no
    upstream publishes an exact mission-long count.
    """
    id: int
    name: str
    landing_date: date
    launch_date: date
    status: str
    max_sol: int = Field(ge=0, description="Latest known sol")
    max_date: date = Field(description="Earth date of max_sol")
    total_photos: int = Field(ge=0, description="Approximate total photo count")
    cameras: List[CameraSchema] = Field(description="Camera catalog")


class ManifestSol(BaseModel):
    """Photo activity on one sampled sol."""
    sol: int = Field(ge=0)
    earth_date: date
    total_photos: int = Field(ge=0, description="Full-resolution photos counted on this sol")
    cameras: List[str] = Field(description="Distinct instrument codes seen on this sol")


class PhotoManifest(BaseModel):
    """
    What:  Mission summary with a sampled photo-activity timeline.
    Who:   Returned by GET /manifests/{id}.

    `photos` covers a sample of sols only, sorted ascending by sol, and
    always ends with max_sol. Consumers must not assume every sol is listed.
    """
    name: str
    landing_date: date
    launch_date: date
    status: str
    max_sol: int = Field(ge=0)
    max_date: date
    total_photos: int = Field(ge=0, description="Approximate total photo count")
    photos: List[ManifestSol] = Field(description="Sparse per-sol summaries")


# ══════════════════════════════════════════════════════════════════════════
# Response Envelopes
# ══════════════════════════════════════════════════════════════════════════


class RoverListResponse(BaseModel):
    rovers: List[RoverSummary]


class RoverDetailResponse(BaseModel):
    rover: RoverSummary


class PhotoListResponse(BaseModel):
    photos: List[PhotoResponse]


class LatestPhotoListResponse(BaseModel):
    latest_photos: List[PhotoResponse]


class ManifestResponse(BaseModel):
    photo_manifest: PhotoManifest


# ══════════════════════════════════════════════════════════════════════════
# Error / Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    What:  Error body shared by every endpoint.

    Example:
        {"errors": "Invalid Rover Name"}
    """
    errors: str = Field(description="Human-readable error description")


class HealthResponse(BaseModel):
    status: str = Field(description="Always 'ok' while the process is serving")
    version: str = Field(description="Application version")
    uptime_seconds: float = Field(description="Seconds since service started")
