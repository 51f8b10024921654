"""
Mars Photo API: Rover Service (Aggregator)
============================================

What:  Composes the registry, date conversion, adapters and estimation into
       the public read operations: list rovers, rover detail, photos,
       latest photos and manifest.
How:   Stateless; every method receives the request-scoped httpx client.
Who:   Called by route handlers; calls adapters and the estimation layer.

Request flow (GET /rovers/{id}/photos):
    ┌──────────┐   ┌──────────────┐   ┌──────────────┐   ┌──────────────┐
    │ Registry │──▶│ Resolve sol  │──▶│   Adapter    │──▶│  Normalized  │
    │  lookup  │   │ (sol | date) │   │ fetch+filter │   │    photos    │
    └──────────┘   └──────────────┘   └──────────────┘   └──────────────┘
      400 if         400 if missing     501 if no adapter
      unknown        or before landing  500 on upstream failure

Required vs sampled fetches:
    The photo fetch, the latest-sol lookup and the manifest's latest-sol
    sample are required: any failure ends the request. Every other sampled
    sol is tolerant (see estimation_service). Nothing is retried.
"""

import logging
from datetime import date
from typing import Optional

import httpx

from mars_photos.exceptions import ValidationError
from mars_photos.models.rover import Rover
from mars_photos.schemas.rover import (
    CameraSchema,
    LatestPhotoListResponse,
    ManifestResponse,
    ManifestSol,
    PhotoListResponse,
    PhotoManifest,
    RoverDetailResponse,
    RoverListResponse,
    RoverSummary,
)
from mars_photos.services.adapter_factory import get_adapter, has_adapter
from mars_photos.services.estimation_service import estimation_service, gather_or_cancel
from mars_photos.services.rover_registry import all_rovers, lookup_rover
from mars_photos.services.sol_calendar import earth_date_to_sol, sol_to_earth_date

logger = logging.getLogger(__name__)


class RoverService:
    """
    Business logic layer for rover, photo and manifest reads.

    Error Handling Strategy:
        Input problems raise ValidationError (400) before any upstream call.
        Adapter lookup raises NotSupportedError (501). Adapter failures on
        required fetches propagate as UpstreamError (500).
    """

    # ── Resolution helpers ────────────────────────────────────────────────

    def resolve_rover(self, rover_id: str) -> Rover:
        """
        Registry lookup that fails fast.

        Raises:
            ValidationError: Unknown rover identifier.
        """
        rover = lookup_rover(rover_id)
        if rover is None:
            raise ValidationError(
                message="Invalid Rover Name",
                field="rover_id",
                context={"rover_id": rover_id},
            )
        return rover

    def resolve_sol(
        self,
        rover: Rover,
        sol: Optional[int],
        earth_date: Optional[date],
    ) -> int:
        """
        Target sol from the `sol` or `earth_date` query parameter.

        `sol` wins when both are supplied. An Earth date converts through
        the rover's landing date and must not precede it.

        Raises:
            ValidationError: Neither parameter given, negative sol, or a
                date before landing.
        """
        if sol is not None:
            if sol < 0:
                raise ValidationError(
                    message="Invalid sol. Sol must be a non-negative integer.",
                    field="sol",
                )
            return sol

        if earth_date is not None:
            target = earth_date_to_sol(rover.landing_date, earth_date)
            if target < 0:
                raise ValidationError(
                    message="Invalid earth_date. Date must be after landing date.",
                    field="earth_date",
                    context={"earth_date": earth_date.isoformat(), "landing_date": rover.landing_date.isoformat()},
                )
            return target

        raise ValidationError(
            message="Either sol or earth_date parameter is required",
            field="sol",
        )

    async def latest_sol(self, rover: Rover, client: httpx.AsyncClient) -> int:
        """
        Latest known sol for a rover.

        Rovers with a feed ask it (required fetch, errors propagate).
        Completed missions without a feed report their fixed final sol.
        """
        if has_adapter(rover):
            return await get_adapter(rover, client).fetch_latest_sol()
        return rover.final_sol or 0

    # ── Rover summaries ───────────────────────────────────────────────────

    async def _summarize(self, rover: Rover, client: httpx.AsyncClient) -> RoverSummary:
        max_sol = await self.latest_sol(rover, client)
        total_photos, _ = await estimation_service.estimate(rover, client, max_sol)

        logger.info(
            "%s summary: max_sol=%d, estimated total_photos=%d",
            rover.name,
            max_sol,
            total_photos,
        )

        return RoverSummary(
            id=rover.api_id,
            name=rover.name,
            landing_date=rover.landing_date,
            launch_date=rover.launch_date,
            status=rover.status.value,
            max_sol=max_sol,
            max_date=sol_to_earth_date(rover.landing_date, max_sol),
            total_photos=total_photos,
            cameras=[
                CameraSchema(name=camera.name, full_name=camera.full_name)
                for camera in rover.cameras
            ],
        )

    async def list_rovers(self, client: httpx.AsyncClient) -> RoverListResponse:
        """
        Summaries for every registered rover, computed concurrently.

        Each rover's latest sol and estimate are independent of the others.
        A failed required fetch cancels the other rovers' work before the
        error propagates.
        """
        summaries = await gather_or_cancel(
            [self._summarize(rover, client) for rover in all_rovers()]
        )
        return RoverListResponse(rovers=summaries)

    async def get_rover(self, client: httpx.AsyncClient, rover_id: str) -> RoverDetailResponse:
        rover = self.resolve_rover(rover_id)
        return RoverDetailResponse(rover=await self._summarize(rover, client))

    # ── Photos ────────────────────────────────────────────────────────────

    async def get_photos(
        self,
        client: httpx.AsyncClient,
        rover_id: str,
        sol: Optional[int] = None,
        earth_date: Optional[date] = None,
        camera: Optional[str] = None,
        page: int = 0,
        per_page: int = 25,
    ) -> PhotoListResponse:
        """
        One page of full-resolution photos for a sol.

        Args:
            client:     Request-scoped HTTP client.
            rover_id:   Rover identifier (case-insensitive).
            sol:        Mission sol; takes precedence over earth_date.
            earth_date: Earth date, converted to a sol.
            camera:     Optional instrument prefix or category filter.
            page:       Zero-based upstream page.
            per_page:   Upstream page size.

        Raises:
            ValidationError:   Unknown rover or unresolvable sol (400).
            NotSupportedError: Rover has no feed adapter (501).
            UpstreamError:     Feed fetch failed (500).
        """
        rover = self.resolve_rover(rover_id)
        target_sol = self.resolve_sol(rover, sol, earth_date)
        adapter = get_adapter(rover, client)

        photos = await adapter.fetch_photos(
            sol=target_sol,
            camera=camera,
            page=page,
            per_page=per_page,
        )
        return PhotoListResponse(photos=photos)

    async def get_latest_photos(
        self,
        client: httpx.AsyncClient,
        rover_id: str,
        camera: Optional[str] = None,
        page: int = 0,
        per_page: int = 25,
    ) -> LatestPhotoListResponse:
        """One page of photos from the rover's latest known sol."""
        rover = self.resolve_rover(rover_id)
        adapter = get_adapter(rover, client)
        target_sol = await adapter.fetch_latest_sol()

        photos = await adapter.fetch_photos(
            sol=target_sol,
            camera=camera,
            page=page,
            per_page=per_page,
        )
        return LatestPhotoListResponse(latest_photos=photos)

    # ── Manifest ──────────────────────────────────────────────────────────

    async def get_manifest(self, client: httpx.AsyncClient, rover_id: str) -> ManifestResponse:
        """
        Mission manifest with a sampled per-sol activity list.

        The sampled sols double as the estimation samples, so each sol is
        fetched once. The latest sol's sample is required: if it failed,
        its error is raised (501 for rovers without a feed, 500 for an
        upstream failure). Interior sols are listed only when they
        succeeded and had photos.
        """
        rover = self.resolve_rover(rover_id)
        max_sol = await self.latest_sol(rover, client)
        total_photos, samples = await estimation_service.estimate(rover, client, max_sol)

        latest_sample = samples[-1]
        if not latest_sample.ok:
            raise latest_sample.error

        listed = [
            sample for sample in samples
            if sample.ok and (sample.photo_count > 0 or sample.sol == max_sol)
        ]
        listed.sort(key=lambda sample: sample.sol)

        manifest = PhotoManifest(
            name=rover.name,
            landing_date=rover.landing_date,
            launch_date=rover.launch_date,
            status=rover.status.value,
            max_sol=max_sol,
            max_date=sol_to_earth_date(rover.landing_date, max_sol),
            total_photos=total_photos,
            photos=[
                ManifestSol(
                    sol=sample.sol,
                    earth_date=sol_to_earth_date(rover.landing_date, sample.sol),
                    total_photos=sample.photo_count,
                    cameras=list(sample.cameras),
                )
                for sample in listed
            ],
        )

        logger.info(
            "%s manifest: max_sol=%d, %d of %d sampled sols listed",
            rover.name,
            max_sol,
            len(manifest.photos),
            len(samples),
        )
        return ManifestResponse(photo_manifest=manifest)


# ── Singleton Instance ────────────────────────────────────────────────────
rover_service = RoverService()
