"""
Mars Photo API: Upstream HTTP Client Management
=================================================

What:  Builds the httpx client used to talk to the upstream feeds and
       provides it to route handlers as a FastAPI dependency.
How:   One AsyncClient per request, closed when the request finishes.
Who:   Injected into route handlers via Depends(get_http_client); tests
       override the dependency with a client on httpx.MockTransport.

Client configuration:
    timeout:          settings.upstream_timeout for every phase
    follow_redirects: True (mars.nasa.gov redirects some feed URLs)
    User-Agent:       settings.user_agent

Nothing lives across requests: the client, its connection pool and any
sampled fan-out belong to the request that created them.
"""

from typing import AsyncGenerator, Optional

import httpx

from mars_photos.config import settings


def build_http_client(transport: Optional[httpx.AsyncBaseTransport] = None) -> httpx.AsyncClient:
    """
    Create a configured AsyncClient.

    Args:
        transport: Optional transport override (tests pass httpx.MockTransport).
    """
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.upstream_timeout),
        follow_redirects=True,
        headers={
            "User-Agent": settings.user_agent,
            "Accept": "application/json",
        },
        transport=transport,
    )


async def get_http_client() -> AsyncGenerator[httpx.AsyncClient, None]:
    """
    FastAPI dependency that provides an upstream HTTP client per request.

    Example usage in a route:
        @router.get("/rovers")
        async def list_rovers(client: httpx.AsyncClient = Depends(get_http_client)):
            return await rover_service.list_rovers(client)
    """
    async with build_http_client() as client:
        yield client
