"""
Mars Photo API: Abstract Upstream Adapter Interface
=====================================================

What:  Abstract base class defining the contract every per-rover feed
       adapter implements, plus the shared fetch/parse plumbing.
How:   Concrete adapters inherit from UpstreamAdapter and implement
       fetch_photos() and fetch_latest_sol(). The HTTP call, JSON decoding
       and payload validation live here so every adapter fails the same way.
Who:   Built per request by services/adapter_factory.py; called by
       RoverService and the estimation layer.

Normalization steps every adapter applies, in order:
    1. Request the rover's feed with its own sol/pagination parameters
    2. Drop anything that is not a full-resolution image
    3. Apply the optional `camera=` filter (camera_classifier.matches)
    4. Map each surviving record to PhotoResponse, numbering them by
       position in the filtered list to build the synthetic id
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from mars_photos.exceptions import UpstreamError
from mars_photos.models.rover import Rover
from mars_photos.schemas.rover import CameraSchema, PhotoResponse, PhotoRover
from mars_photos.services.rover_registry import camera_full_name
from mars_photos.services.sol_calendar import sol_to_earth_date

logger = logging.getLogger(__name__)

FeedT = TypeVar("FeedT", bound=BaseModel)


class UpstreamAdapter(ABC):
    """
    Abstract interface over one rover's upstream image feed.

    Contract:
        - fetch_photos() returns normalized, full-resolution photos only
        - fetch_latest_sol() returns the most recent sol the feed knows about
        - Transport errors, bad statuses and malformed payloads raise
          UpstreamError; nothing is retried and nothing is defaulted
    """

    #: Short feed name used in logs and error context
    source: str = "upstream"

    def __init__(self, rover: Rover, client: httpx.AsyncClient):
        """
        Args:
            rover:  Registry entry this adapter serves.
            client: Request-scoped HTTP client (owned by the caller).
        """
        self.rover = rover
        self.client = client

    @abstractmethod
    async def fetch_photos(
        self,
        sol: int,
        camera: Optional[str] = None,
        page: int = 0,
        per_page: int = 25,
    ) -> List[PhotoResponse]:
        """
        Fetch one page of a sol's images from the feed.

        Args:
            sol:      Mission sol to fetch.
            camera:   Optional filter, instrument prefix or category name.
            page:     Zero-based upstream page.
            per_page: Upstream page size (before filtering).

        Returns:
            Normalized photos; an empty list when the sol has no matching images.

        Raises:
            UpstreamError: The feed was unreachable or returned something
                that does not match its documented shape.
        """
        ...

    @abstractmethod
    async def fetch_latest_sol(self) -> int:
        """
        Most recent sol with published images.

        Raises:
            UpstreamError: The feed could not be queried.
        """
        ...

    # ── Shared plumbing ───────────────────────────────────────────────────

    async def _get_json(self, url: str, params: Dict[str, Any]) -> Any:
        """GET a feed URL and decode the JSON body, translating every failure."""
        start_time = time.perf_counter()
        try:
            response = await self.client.get(url, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                "%s feed returned HTTP %d for %s",
                self.source,
                e.response.status_code,
                e.request.url,
            )
            raise UpstreamError(
                source=self.source,
                context={"status_code": e.response.status_code, "url": str(e.request.url)},
            ) from e
        except httpx.HTTPError as e:
            logger.error("%s feed request failed: %s", self.source, str(e))
            raise UpstreamError(
                source=self.source,
                context={"error_type": type(e).__name__, "url": url},
            ) from e

        duration_ms = (time.perf_counter() - start_time) * 1000
        logger.debug("%s feed responded in %.0fms: %s", self.source, duration_ms, response.url)

        try:
            return response.json()
        except ValueError as e:
            logger.error("%s feed returned a non-JSON body from %s", self.source, response.url)
            raise UpstreamError(
                source=self.source,
                context={"reason": "invalid_json", "url": str(response.url)},
            ) from e

    def _parse(self, model: Type[FeedT], payload: Any) -> FeedT:
        """Validate a decoded payload against the feed's raw schema."""
        try:
            return model.model_validate(payload)
        except PydanticValidationError as e:
            logger.error(
                "%s feed payload did not match %s: %d error(s)",
                self.source,
                model.__name__,
                e.error_count(),
            )
            raise UpstreamError(
                source=self.source,
                context={"reason": "malformed_payload", "errors": e.errors()[:3]},
            ) from e

    def _build_photo(self, sol: int, instrument: str, img_src: str, index: int) -> PhotoResponse:
        """Map one filtered upstream record onto the normalized photo."""
        return PhotoResponse(
            id=f"{sol}-{instrument}-{index}",
            sol=sol,
            camera=CameraSchema(
                name=instrument,
                full_name=camera_full_name(self.rover, instrument),
            ),
            img_src=img_src,
            earth_date=sol_to_earth_date(self.rover.landing_date, sol),
            rover=PhotoRover.from_rover(self.rover),
        )
