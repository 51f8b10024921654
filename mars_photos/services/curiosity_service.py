"""
Mars Photo API: Curiosity Feed Adapter
========================================

What:  Reads Curiosity (MSL) images from the mars.nasa.gov raw image items API.
How:   One paged GET per call, filtered to `condition_2={sol}:sol:in`;
       records are validated with pydantic, filtered, then normalized.

Raw record shape (only the fields we read):
    {
        "items": [
            {
                "sol": 4102,
                "instrument": "NAV_LEFT_B",
                "https_url": "https://mars.nasa.gov/msl-raw-images/...JPG",
                "extended": {"sample_type": "full"}
            }
        ]
    }

Thumbnails and subframes carry sample_type "thumbnail" / "subframe" /
"downsampled"; only "full" survives.
"""

import logging
from typing import List, Optional

from pydantic import BaseModel, Field

from mars_photos.config import settings
from mars_photos.schemas.rover import PhotoResponse
from mars_photos.services.camera_classifier import matches
from mars_photos.services.upstream_base import UpstreamAdapter

logger = logging.getLogger(__name__)

# Newest sol first, then a stable order inside a sol so pages don't overlap
_ORDER = "sol desc,instrument_sort asc,sample_type_sort asc, date_taken desc"
_MISSION_CONDITION = "msl:mission"
_FULL_SAMPLE_TYPE = "full"


# ── Raw payload schema ────────────────────────────────────────────────────

class CuriosityExtended(BaseModel):
    sample_type: Optional[str] = None


class CuriosityImageItem(BaseModel):
    sol: int = Field(ge=0)
    instrument: Optional[str] = None
    https_url: Optional[str] = None
    extended: Optional[CuriosityExtended] = None

    @property
    def is_full_resolution(self) -> bool:
        return self.extended is not None and self.extended.sample_type == _FULL_SAMPLE_TYPE


class CuriosityFeed(BaseModel):
    items: List[CuriosityImageItem] = Field(default_factory=list)


# ── Adapter ───────────────────────────────────────────────────────────────

class CuriosityAdapter(UpstreamAdapter):
    """Adapter for the Curiosity raw image items API."""

    source = "curiosity"

    async def fetch_photos(
        self,
        sol: int,
        camera: Optional[str] = None,
        page: int = 0,
        per_page: int = 25,
    ) -> List[PhotoResponse]:
        params = {
            "order": _ORDER,
            "per_page": per_page,
            "page": page,
            "condition_1": _MISSION_CONDITION,
            "condition_2": f"{sol}:sol:in",
        }
        payload = await self._get_json(settings.curiosity_api_url, params)
        feed = self._parse(CuriosityFeed, payload)

        items = [
            item for item in feed.items
            if item.is_full_resolution
            and item.instrument
            and item.https_url
            and matches(item.instrument, camera)
        ]

        logger.info(
            "Curiosity sol %d page %d: %d raw items, %d full-resolution matches",
            sol,
            page,
            len(feed.items),
            len(items),
        )

        return [
            self._build_photo(item.sol, item.instrument, item.https_url, index)
            for index, item in enumerate(items)
        ]

    async def fetch_latest_sol(self) -> int:
        params = {
            "order": "sol desc",
            "per_page": 1,
            "page": 0,
            "condition_1": _MISSION_CONDITION,
        }
        payload = await self._get_json(settings.curiosity_api_url, params)
        feed = self._parse(CuriosityFeed, payload)
        # An empty feed means no published images yet
        return feed.items[0].sol if feed.items else 0
