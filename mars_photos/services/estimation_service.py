"""
Mars Photo API: Photo Count Estimation
========================================

What:  Approximates a rover's mission-long photo count by sampling sols.
Why:   No upstream feed publishes an exact total, so every total_photos
       value this service returns is an estimate.
How:   1. Pick up to `max_samples` sols evenly spaced from 0 to the latest
          sol (the latest sol always included)
       2. Fetch one page of each sampled sol, concurrently but bounded
       3. Average the counts of the samples that succeeded
       4. Multiply by the latest sol and round to the nearest integer

Failure model:
    Each sampled fetch produces a SolSample, either a count or the error
    that stopped it. A failed sample is logged and excluded from the
    average; it never aborts the estimate. If every sample fails the
    estimate is 0. A single surviving sample still yields a (crude)
    linear extrapolation.

    samples: [sol 0: 12] [sol 400: ERR] [sol 800: 30] [sol 1200: 18]
    average of successes = (12 + 30 + 18) / 3 = 20
    estimate = round(20 × 1200) = 24000
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, List, Optional, Sequence, Tuple, TypeVar

import httpx

from mars_photos.config import settings
from mars_photos.exceptions import MarsPhotosError
from mars_photos.models.rover import Rover
from mars_photos.services.adapter_factory import get_adapter
from mars_photos.services.sol_calendar import round_half_up

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def gather_or_cancel(aws: Sequence[Awaitable[T]]) -> List[T]:
    """
    Run awaitables concurrently and return their results in order.

    If any of them raises, the rest are cancelled and waited for before the
    error propagates. No work outlives the call, so nothing touches the
    request-scoped HTTP client after it has been closed.
    """
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


@dataclass(frozen=True)
class SolSample:
    """
    Outcome of fetching one sampled sol.

    Exactly one of (photo_count, cameras) or error is meaningful: a
    successful sample has error=None.
    """

    sol: int
    photo_count: int = 0
    cameras: Tuple[str, ...] = ()
    error: Optional[MarsPhotosError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def sample_sols(
    latest_sol: int,
    max_samples: Optional[int] = None,
    intervals: Optional[int] = None,
) -> List[int]:
    """
    Sols to sample for a mission whose latest sol is `latest_sol`.

    Returns:
        Ascending, duplicate-free sols starting at 0 and ending with
        `latest_sol`, at most `max_samples` long.
    """
    max_samples = max_samples or settings.max_samples
    intervals = intervals or settings.sample_intervals
    latest_sol = max(latest_sol, 0)

    step = max(1, latest_sol // intervals)
    sols = list(range(0, latest_sol + 1, step))
    if sols[-1] != latest_sol:
        sols.append(latest_sol)

    if len(sols) > max_samples:
        # Keep the evenly spaced prefix but never drop the latest sol
        sols = sols[: max_samples - 1] + [latest_sol] if max_samples > 1 else [latest_sol]
    return sols


def estimate_total_photos(samples: Sequence[SolSample], latest_sol: int) -> int:
    """Mean count of successful samples × latest sol; 0 if none succeeded."""
    successes = [sample for sample in samples if sample.ok]
    if not successes:
        return 0
    average = sum(sample.photo_count for sample in successes) / len(successes)
    return round_half_up(average * latest_sol)


class EstimationService:
    """
    Runs sampled fetches and turns them into estimates.

    Stateless apart from settings; the HTTP client is passed in per call.
    """

    async def collect_samples(
        self,
        rover: Rover,
        client: httpx.AsyncClient,
        sols: Sequence[int],
        per_page: Optional[int] = None,
    ) -> List[SolSample]:
        """
        Fetch every sampled sol and record each outcome.

        Never raises for upstream or support errors: rovers without an
        adapter produce one failed sample per sol.

        Returns:
            One SolSample per requested sol, in the order given.
        """
        per_page = per_page or settings.sample_per_page

        try:
            adapter = get_adapter(rover, client)
        except MarsPhotosError as e:
            logger.info("No sampling for %s: %s", rover.name, e.message)
            return [SolSample(sol=sol, error=e) for sol in sols]

        semaphore = asyncio.Semaphore(settings.sample_concurrency)

        async def fetch_one(sol: int) -> SolSample:
            async with semaphore:
                try:
                    photos = await adapter.fetch_photos(sol=sol, per_page=per_page)
                except MarsPhotosError as e:
                    logger.warning(
                        "Sample for %s sol %d failed: %s | Context: %s",
                        rover.name,
                        sol,
                        e.message,
                        e.context,
                    )
                    return SolSample(sol=sol, error=e)

            cameras = tuple(dict.fromkeys(photo.camera.name for photo in photos))
            return SolSample(sol=sol, photo_count=len(photos), cameras=cameras)

        samples = await gather_or_cancel([fetch_one(sol) for sol in sols])

        succeeded = sum(1 for sample in samples if sample.ok)
        logger.info(
            "Sampled %d sols for %s: %d succeeded, %d failed",
            len(samples),
            rover.name,
            succeeded,
            len(samples) - succeeded,
        )
        return list(samples)

    async def estimate(
        self,
        rover: Rover,
        client: httpx.AsyncClient,
        latest_sol: int,
    ) -> Tuple[int, List[SolSample]]:
        """
        Sample the mission and estimate its total photo count.

        Returns:
            (estimated total, the samples it was computed from)
        """
        samples = await self.collect_samples(rover, client, sample_sols(latest_sol))
        return estimate_total_photos(samples, latest_sol), samples


# ── Singleton Instance ────────────────────────────────────────────────────
estimation_service = EstimationService()
