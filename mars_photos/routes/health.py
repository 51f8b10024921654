"""
Mars Photo API: Health Check Route
====================================

What:  Liveness endpoint for monitoring and load balancer probes.
How:   Answers from process state only. It does not call the upstream
       feeds, so an upstream outage never marks this service unhealthy.
"""

import time

from fastapi import APIRouter

from mars_photos import __version__
from mars_photos.schemas.rover import HealthResponse

router = APIRouter(tags=["Health"])

# Initialized once when the module loads
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check() -> HealthResponse:
    return HealthResponse(
        status="ok",
        version=__version__,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
