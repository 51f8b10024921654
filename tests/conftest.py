"""
Mars Photo API: Test Configuration (conftest.py)
==================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Upstream feeds are replaced by an in-memory fake served through
       httpx.MockTransport, so no test touches the network.

Fixture Hierarchy:
    Function-scoped:
    ├── fake_feeds:   In-memory Curiosity + Perseverance feeds (mutable per test)
    ├── http_client:  AsyncClient wired to fake_feeds
    └── test_client:  AsyncClient talking to the FastAPI app over ASGITransport,
                      with get_http_client overridden to use fake_feeds
"""

import os
from collections import defaultdict
from typing import Any, Dict, List, Set

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Must be set before mars_photos.config builds its settings singleton
os.environ["CURIOSITY_API_URL"] = "https://curiosity.test/api/v1/raw_image_items/"
os.environ["PERSEVERANCE_API_URL"] = "https://perseverance.test/rss/api/"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["SAMPLE_CONCURRENCY"] = "4"

from mars_photos.http_client import build_http_client, get_http_client  # noqa: E402

CURIOSITY_HOST = "curiosity.test"
PERSEVERANCE_HOST = "perseverance.test"


# ══════════════════════════════════════════════════════════════════════════
# Fake Upstream Feeds
# ══════════════════════════════════════════════════════════════════════════

class FakeFeeds:
    """
    Minimal stand-in for both upstream feeds.

    Tests add records per sol, set the latest sol, and mark sols (or a
    whole feed) as failing. Every request is recorded for assertions.
    """

    def __init__(self):
        self.curiosity_latest_sol = 0
        self.perseverance_latest_sol = 0
        self.curiosity_items: Dict[int, List[Dict[str, Any]]] = defaultdict(list)
        self.perseverance_images: Dict[int, List[Dict[str, Any]]] = defaultdict(list)
        self.failing_sols: Set[int] = set()
        self.failing_hosts: Set[str] = set()
        self.requests: List[httpx.Request] = []

    # ── Record builders ───────────────────────────────────────────────────

    def add_curiosity(self, sol: int, instrument: str, sample_type: str = "full", url: str = None):
        self.curiosity_items[sol].append({
            "sol": sol,
            "instrument": instrument,
            "https_url": url or f"https://img.test/msl/{sol}/{instrument}/{len(self.curiosity_items[sol])}.jpg",
            "extended": {"sample_type": sample_type},
        })

    def add_perseverance(self, sol: int, instrument: str, sample_type: str = "Full"):
        index = len(self.perseverance_images[sol])
        self.perseverance_images[sol].append({
            "sol": sol,
            "camera": {"instrument": instrument},
            "sample_type": sample_type,
            "image_files": {
                "large": f"https://img.test/m20/{sol}/{instrument}/{index}_1200.jpg",
                "full_res": f"https://img.test/m20/{sol}/{instrument}/{index}.png",
            },
        })

    # ── Transport handler ─────────────────────────────────────────────────

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        host = request.url.host
        params = request.url.params

        if host in self.failing_hosts:
            return httpx.Response(503, json={"error": "unavailable"})

        if host == CURIOSITY_HOST:
            condition = params.get("condition_2")
            if condition is None:
                items = [{"sol": self.curiosity_latest_sol}] if self.curiosity_latest_sol else []
                return httpx.Response(200, json={"items": items})
            sol = int(condition.split(":")[0])
            if sol in self.failing_sols:
                return httpx.Response(500, text="Internal Server Error")
            return httpx.Response(200, json={"items": self.curiosity_items.get(sol, [])})

        if host == PERSEVERANCE_HOST:
            if params.get("latest") == "true":
                return httpx.Response(200, json={"latest_sol": self.perseverance_latest_sol, "images": []})
            sol = int(params["sol"])
            if sol in self.failing_sols:
                return httpx.Response(500, text="Internal Server Error")
            return httpx.Response(200, json={"images": self.perseverance_images.get(sol, [])})

        return httpx.Response(404)

    def requests_to(self, host: str) -> List[httpx.Request]:
        return [request for request in self.requests if request.url.host == host]


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def fake_feeds():
    return FakeFeeds()


@pytest_asyncio.fixture
async def http_client(fake_feeds):
    """AsyncClient whose every request is answered by fake_feeds."""
    async with build_http_client(transport=httpx.MockTransport(fake_feeds.handler)) as client:
        yield client


@pytest_asyncio.fixture
async def test_client(fake_feeds):
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from mars_photos.main import app

    async def override_http_client():
        async with build_http_client(transport=httpx.MockTransport(fake_feeds.handler)) as client:
            yield client

    app.dependency_overrides[get_http_client] = override_http_client
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
    finally:
        app.dependency_overrides.clear()
