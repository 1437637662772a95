"""API tests for the spot endpoints."""

from typing import AsyncGenerator
from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from spotmap.database import get_db
from spotmap.main import app
from spotmap.services.spot_lifecycle import ALREADY_REVIEWED, NOT_OWNER
from spotmap.services.spot_query import SPOT_NOT_FOUND
from spotmap.services.tag import TagService
from spotmap.services.validation import INVALID_TITLE


pytestmark = pytest.mark.asyncio


@pytest_asyncio.fixture
async def client(db) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client whose requests share the test session."""

    async def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


def as_user(user) -> dict[str, str]:
    return {"X-User-Id": str(user.id)}


def spot_payload(**overrides) -> dict:
    payload = {
        "title": "Roof Garden",
        "location": {"latitude": 10.0, "longitude": 20.0},
        "floor": "R",
        "tag": "Outdoors",
        "description": "Great at sunset",
        "rating": 5,
    }
    payload.update(overrides)
    return payload


class TestCreateSpotEndpoint:
    async def test_create_spot(self, client, creator):
        response = await client.post("/api/v1/spots", json=spot_payload(), headers=as_user(creator))

        assert response.status_code == 201
        data = response.json()
        assert data["title"] == "Roof Garden"
        assert data["creator_id"] == str(creator.id)
        assert data["location"] == {"latitude": 10.0, "longitude": 20.0}
        assert data["floor"] == "R"
        assert data["rating"] == 5
        assert len(data["review_ids"]) == 1
        assert data["reports"] == []

    async def test_invalid_title_is_bad_request(self, client, creator):
        response = await client.post(
            "/api/v1/spots", json=spot_payload(title="No!"), headers=as_user(creator)
        )

        assert response.status_code == 400
        assert response.json()["detail"] == INVALID_TITLE

    async def test_requires_acting_user(self, client):
        response = await client.post("/api/v1/spots", json=spot_payload())

        assert response.status_code == 422

    async def test_unclassified_failure_is_server_error(self, client, creator):
        with patch.object(
            TagService, "create", AsyncMock(side_effect=RuntimeError("tag store unavailable"))
        ):
            response = await client.post(
                "/api/v1/spots", json=spot_payload(), headers=as_user(creator)
            )

        assert response.status_code == 500
        assert response.json()["detail"] == "tag store unavailable"


class TestReadEndpoints:
    async def test_get_spot_with_reviews(self, client, spot, creator):
        response = await client.get(f"/api/v1/spots/{spot.id}")

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == str(spot.id)
        assert data["reviews"][0]["creator"]["username"] == creator.username

    async def test_get_missing_spot(self, client):
        response = await client.get(f"/api/v1/spots/{uuid4()}")

        assert response.status_code == 404
        assert response.json()["detail"] == SPOT_NOT_FOUND

    async def test_list_spots(self, client, spot):
        response = await client.get("/api/v1/spots")

        assert response.status_code == 200
        data = response.json()
        assert [s["id"] for s in data] == [str(spot.id)]
        assert data[0]["tag"]["label"] == "Study"

    async def test_bounding_box(self, client, spot):
        inside = await client.get(
            "/api/v1/spots",
            params={"min_lat": 40, "max_lat": 41, "min_lng": -75, "max_lng": -74},
        )
        outside = await client.get(
            "/api/v1/spots",
            params={"min_lat": 0, "max_lat": 1, "min_lng": 0, "max_lng": 1},
        )

        assert [s["id"] for s in inside.json()] == [str(spot.id)]
        assert outside.json() == []

    async def test_partial_bounding_box_is_rejected(self, client):
        response = await client.get("/api/v1/spots", params={"min_lat": 0, "max_lat": 1})

        assert response.status_code == 400

    async def test_spots_by_user(self, client, spot, creator):
        response = await client.get(f"/api/v1/users/{creator.id}/spots")

        assert response.status_code == 200
        assert [s["id"] for s in response.json()] == [str(spot.id)]

    async def test_spots_by_tag(self, client, spot):
        response = await client.get("/api/v1/tags/Study/spots")

        assert response.status_code == 200
        assert [s["id"] for s in response.json()] == [str(spot.id)]

    async def test_spots_by_unknown_tag(self, client):
        response = await client.get("/api/v1/tags/Nope/spots")

        assert response.status_code == 404

    async def test_spot_by_review(self, client, spot):
        response = await client.get(f"/api/v1/reviews/{spot.review_ids[0]}/spot")

        assert response.status_code == 200
        assert response.json()["id"] == str(spot.id)


class TestMutationEndpoints:
    async def test_add_review(self, client, spot, reviewer):
        response = await client.post(
            f"/api/v1/spots/{spot.id}/reviews",
            json={"description": "Too crowded", "rating": 2},
            headers=as_user(reviewer),
        )

        assert response.status_code == 201
        data = response.json()
        assert data["spot"]["rating"] == 3.0
        assert data["review"]["creator_id"] == str(reviewer.id)
        assert data["spot"]["review_ids"][-1] == data["review"]["id"]

    async def test_self_review_is_forbidden(self, client, spot, creator):
        response = await client.post(
            f"/api/v1/spots/{spot.id}/reviews",
            json={"description": "Mine is best", "rating": 5},
            headers=as_user(creator),
        )

        assert response.status_code == 403
        assert response.json()["detail"] == ALREADY_REVIEWED

    async def test_report_spot(self, client, spot, reviewer):
        response = await client.post(f"/api/v1/spots/{spot.id}/reports", headers=as_user(reviewer))

        assert response.status_code == 204
        detail = await client.get(f"/api/v1/spots/{spot.id}")
        assert detail.json()["reports"] == [
            {"reporter_id": str(reviewer.id), "reporter_score": reviewer.reputation}
        ]

    async def test_delete_spot(self, client, spot, creator):
        response = await client.delete(f"/api/v1/spots/{spot.id}", headers=as_user(creator))

        assert response.status_code == 204
        missing = await client.get(f"/api/v1/spots/{spot.id}")
        assert missing.status_code == 404

    async def test_delete_someone_elses_spot(self, client, spot, reviewer):
        response = await client.delete(f"/api/v1/spots/{spot.id}", headers=as_user(reviewer))

        assert response.status_code == 403
        assert response.json()["detail"] == NOT_OWNER


class TestHealth:
    async def test_health(self, client):
        response = await client.get("/api/v1/health")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    async def test_single_health_route(self, client):
        health_paths = [route.path for route in app.routes if route.path.endswith("/health")]

        assert health_paths == ["/api/v1/health"]
