"""
Mars Photo API: HTTP Endpoint Tests
=====================================

What:  End-to-end tests through the FastAPI app with faked upstream feeds.
How:   test_client (conftest.py) overrides the HTTP client dependency.

What we test:
    ✅ Response envelopes and status codes for every route
    ✅ Error bodies are always {"errors": "..."}
    ✅ Query parameter validation answers 400
    ✅ Unsupported rovers answer 501 naming the rover
    ✅ Upstream failures answer 500 without leaking details
    ✅ X-Request-ID header
"""

import logging

import pytest


class TestHealth:

    @pytest.mark.asyncio
    async def test_health(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["version"] == "1.0.0"
        assert body["uptime_seconds"] >= 0


class TestRoverEndpoints:

    @pytest.mark.asyncio
    async def test_list_rovers(self, fake_feeds, test_client):
        fake_feeds.curiosity_latest_sol = 10
        fake_feeds.perseverance_latest_sol = 5

        response = await test_client.get("/api/v1/rovers")

        assert response.status_code == 200
        rovers = response.json()["rovers"]
        assert [rover["name"] for rover in rovers] == ["Curiosity", "Perseverance", "Opportunity", "Spirit"]
        assert rovers[0]["max_sol"] == 10
        assert rovers[0]["landing_date"] == "2012-08-06"
        assert rovers[2]["max_sol"] == 5111
        assert rovers[2]["total_photos"] == 0

    @pytest.mark.asyncio
    async def test_get_rover_case_insensitive(self, test_client):
        response = await test_client.get("/api/v1/rovers/Perseverance")

        assert response.status_code == 200
        rover = response.json()["rover"]
        assert rover["id"] == 6
        assert rover["status"] == "active"
        assert {"name", "full_name"} <= set(rover["cameras"][0])

    @pytest.mark.asyncio
    async def test_unknown_rover(self, test_client):
        response = await test_client.get("/api/v1/rovers/sojourner")

        assert response.status_code == 400
        assert response.json() == {"errors": "Invalid Rover Name"}

    @pytest.mark.asyncio
    async def test_upstream_failure_is_generic_500(self, fake_feeds, test_client):
        fake_feeds.failing_hosts.add("curiosity.test")

        response = await test_client.get("/api/v1/rovers/curiosity")

        assert response.status_code == 500
        assert response.json() == {"errors": "An internal error occurred. Please try again later."}


class TestPhotoEndpoints:

    @pytest.mark.asyncio
    async def test_photos_by_sol(self, fake_feeds, test_client):
        fake_feeds.add_curiosity(1000, "MAST_LEFT")
        fake_feeds.add_curiosity(1000, "NAVCAM")

        response = await test_client.get("/api/v1/rovers/curiosity/photos", params={"sol": 1000})

        assert response.status_code == 200
        photos = response.json()["photos"]
        assert len(photos) == 2
        assert photos[0]["id"] == "1000-MAST_LEFT-0"
        assert photos[0]["earth_date"] == "2015-05-30"
        assert photos[0]["camera"] == {"name": "MAST_LEFT", "full_name": "Mast Camera - Left"}
        assert photos[0]["rover"]["name"] == "Curiosity"

    @pytest.mark.asyncio
    async def test_photos_camera_filter(self, fake_feeds, test_client):
        fake_feeds.add_curiosity(3, "MAST_LEFT")
        fake_feeds.add_curiosity(3, "NAVCAM")

        response = await test_client.get(
            "/api/v1/rovers/curiosity/photos", params={"sol": 3, "camera": "navcam"}
        )

        assert [photo["camera"]["name"] for photo in response.json()["photos"]] == ["NAVCAM"]

    @pytest.mark.asyncio
    async def test_photos_forward_pagination(self, fake_feeds, test_client):
        await test_client.get(
            "/api/v1/rovers/perseverance/photos", params={"sol": 9, "page": 2, "per_page": 40}
        )

        params = fake_feeds.requests_to("perseverance.test")[-1].url.params
        assert params["page"] == "2"
        assert params["num"] == "40"

    @pytest.mark.asyncio
    async def test_photos_require_sol_or_earth_date(self, test_client):
        response = await test_client.get("/api/v1/rovers/curiosity/photos")

        assert response.status_code == 400
        assert response.json() == {"errors": "Either sol or earth_date parameter is required"}

    @pytest.mark.asyncio
    async def test_earth_date_before_landing(self, test_client):
        response = await test_client.get(
            "/api/v1/rovers/perseverance/photos", params={"earth_date": "2021-02-01"}
        )

        assert response.status_code == 400
        assert response.json() == {"errors": "Invalid earth_date. Date must be after landing date."}

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "params",
        [
            {"sol": -1},
            {"sol": "abc"},
            {"earth_date": "not-a-date"},
            {"sol": 1, "per_page": 0},
            {"sol": 1, "per_page": 201},
            {"sol": 1, "page": -1},
        ],
    )
    async def test_invalid_query_parameters(self, params, test_client):
        response = await test_client.get("/api/v1/rovers/curiosity/photos", params=params)

        assert response.status_code == 400
        assert isinstance(response.json()["errors"], str)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("rover", ["opportunity", "spirit"])
    async def test_unsupported_rover_photos(self, rover, test_client):
        response = await test_client.get(f"/api/v1/rovers/{rover}/photos", params={"sol": 1})

        assert response.status_code == 501
        assert rover.capitalize() in response.json()["errors"]

    @pytest.mark.asyncio
    async def test_latest_photos(self, fake_feeds, test_client):
        fake_feeds.curiosity_latest_sol = 4000
        fake_feeds.add_curiosity(4000, "CHEMCAM_RMI")

        response = await test_client.get("/api/v1/rovers/curiosity/latest_photos")

        assert response.status_code == 200
        latest = response.json()["latest_photos"]
        assert [photo["sol"] for photo in latest] == [4000]

    @pytest.mark.asyncio
    async def test_latest_photos_unsupported_rover(self, test_client):
        response = await test_client.get("/api/v1/rovers/spirit/latest_photos")

        assert response.status_code == 501

    @pytest.mark.asyncio
    async def test_photo_lookup_by_id_unsupported(self, test_client):
        response = await test_client.get("/api/v1/photos/1000-MAST_LEFT-0")

        assert response.status_code == 400
        assert response.json() == {
            "errors": (
                "Photo ID lookup not supported without database. "
                "Use /api/v1/rovers/:rover/photos endpoint instead."
            )
        }


class TestManifestEndpoint:

    @pytest.mark.asyncio
    async def test_manifest(self, fake_feeds, test_client):
        fake_feeds.perseverance_latest_sol = 10
        fake_feeds.add_perseverance(3, "NAVCAM_LEFT")
        fake_feeds.add_perseverance(10, "SKYCAM")

        response = await test_client.get("/api/v1/manifests/perseverance")

        assert response.status_code == 200
        manifest = response.json()["photo_manifest"]
        assert manifest["name"] == "Perseverance"
        assert manifest["landing_date"] == "2021-02-18"
        assert manifest["max_sol"] == 10
        sols = [entry["sol"] for entry in manifest["photos"]]
        assert sols == sorted(sols)
        assert sols == [3, 10]
        assert manifest["photos"][1]["cameras"] == ["SKYCAM"]

    @pytest.mark.asyncio
    async def test_manifest_unknown_rover(self, test_client):
        response = await test_client.get("/api/v1/manifests/zhurong")

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_manifest_unsupported_rover(self, test_client):
        response = await test_client.get("/api/v1/manifests/opportunity")

        assert response.status_code == 501
        assert "Opportunity" in response.json()["errors"]


class TestRequestId:

    @pytest.mark.asyncio
    async def test_generated_request_id(self, test_client):
        response = await test_client.get("/health")

        assert response.headers["X-Request-ID"]

    @pytest.mark.asyncio
    async def test_client_request_id_echoed(self, test_client):
        response = await test_client.get("/health", headers={"X-Request-ID": "abc123"})

        assert response.headers["X-Request-ID"] == "abc123"


class TestAccessLog:

    @pytest.mark.asyncio
    async def test_logs_route_template_and_rover(self, caplog, test_client):
        caplog.set_level(logging.INFO, logger="mars_photos.access")

        await test_client.get("/api/v1/rovers/Curiosity/photos", params={"sol": 5})

        messages = [record.getMessage() for record in caplog.records if record.name == "mars_photos.access"]
        assert len(messages) == 1
        assert messages[0].startswith("GET /api/v1/rovers/{rover_id}/photos rover=curiosity ?sol=5 200")

    @pytest.mark.asyncio
    async def test_client_errors_logged_as_warning(self, caplog, test_client):
        caplog.set_level(logging.INFO, logger="mars_photos.access")

        await test_client.get("/api/v1/manifests/zhurong")

        records = [record for record in caplog.records if record.name == "mars_photos.access"]
        assert records[0].levelno == logging.WARNING
        assert records[0].rover_id == "zhurong"

    @pytest.mark.asyncio
    async def test_health_not_logged(self, caplog, test_client):
        caplog.set_level(logging.INFO, logger="mars_photos.access")

        await test_client.get("/health")

        assert not [record for record in caplog.records if record.name == "mars_photos.access"]
