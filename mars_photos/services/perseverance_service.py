"""
Mars Photo API: Perseverance Feed Adapter
===========================================

What:  Reads Perseverance (Mars 2020) images from the mars.nasa.gov RSS API
       in JSON mode.
How:   `feed=raw_images&category=mars2020&feedtype=json` plus sol and paging;
       `latest=true` returns the latest sol without images.

Raw record shape (only the fields we read):
    {
        "latest_sol": 1412,
        "images": [
            {
                "sol": 1412,
                "camera": {"instrument": "NAVCAM_LEFT"},
                "sample_type": "Full",
                "image_files": {"large": "https://mars.nasa.gov/.../NLF_...1200.jpg"}
            }
        ]
    }

Note the capitalized "Full" here versus lowercase "full" in the Curiosity
feed; each adapter owns its own definition of full resolution.
"""

import logging
from typing import List, Optional

from pydantic import BaseModel, Field

from mars_photos.config import settings
from mars_photos.schemas.rover import PhotoResponse
from mars_photos.services.camera_classifier import matches
from mars_photos.services.upstream_base import UpstreamAdapter

logger = logging.getLogger(__name__)

_BASE_PARAMS = {
    "feed": "raw_images",
    "category": "mars2020",
    "feedtype": "json",
}
_FULL_SAMPLE_TYPE = "Full"


# ── Raw payload schema ────────────────────────────────────────────────────

class PerseveranceCamera(BaseModel):
    instrument: Optional[str] = None


class PerseveranceImageFiles(BaseModel):
    large: Optional[str] = None
    full_res: Optional[str] = None


class PerseveranceImage(BaseModel):
    sol: int = Field(ge=0)
    camera: Optional[PerseveranceCamera] = None
    sample_type: Optional[str] = None
    image_files: Optional[PerseveranceImageFiles] = None

    @property
    def instrument(self) -> Optional[str]:
        return self.camera.instrument if self.camera else None

    @property
    def img_src(self) -> Optional[str]:
        if not self.image_files:
            return None
        return self.image_files.large or self.image_files.full_res


class PerseveranceFeed(BaseModel):
    latest_sol: Optional[int] = None
    images: List[PerseveranceImage] = Field(default_factory=list)


# ── Adapter ───────────────────────────────────────────────────────────────

class PerseveranceAdapter(UpstreamAdapter):
    """Adapter for the Mars 2020 raw images JSON feed."""

    source = "perseverance"

    async def fetch_photos(
        self,
        sol: int,
        camera: Optional[str] = None,
        page: int = 0,
        per_page: int = 25,
    ) -> List[PhotoResponse]:
        params = {**_BASE_PARAMS, "sol": sol, "num": per_page, "page": page}
        payload = await self._get_json(settings.perseverance_api_url, params)
        feed = self._parse(PerseveranceFeed, payload)

        images = [
            image for image in feed.images
            if image.sample_type == _FULL_SAMPLE_TYPE
            and image.instrument
            and image.img_src
            and matches(image.instrument, camera)
        ]

        logger.info(
            "Perseverance sol %d page %d: %d raw images, %d full-resolution matches",
            sol,
            page,
            len(feed.images),
            len(images),
        )

        return [
            self._build_photo(image.sol, image.instrument, image.img_src, index)
            for index, image in enumerate(images)
        ]

    async def fetch_latest_sol(self) -> int:
        params = {**_BASE_PARAMS, "latest": "true"}
        payload = await self._get_json(settings.perseverance_api_url, params)
        feed = self._parse(PerseveranceFeed, payload)
        return feed.latest_sol or 0
