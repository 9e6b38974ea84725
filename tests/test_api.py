"""Integration tests for the FastAPI endpoints."""

import pytest
from fastapi.testclient import TestClient
from unittest.mock import Mock
from reviewdesk.api.app import create_app
from reviewdesk.api.routes import get_review_service
from reviewdesk.core.errors import ApprovalStoreError, UpstreamFetchError
from reviewdesk.services.approval_store import JsonFileApprovalStore
from reviewdesk.services.review_service import ReviewService


@pytest.fixture
def service(tmp_path, raw_reviews):
    hostaway = Mock()
    hostaway.fetch_reviews.return_value = raw_reviews
    google = Mock()
    google.enabled = False
    return ReviewService(
        store=JsonFileApprovalStore(tmp_path / "approvals.json"),
        hostaway=hostaway,
        google=google,
    )


@pytest.fixture
def client(service):
    app = create_app()
    app.dependency_overrides[get_review_service] = lambda: service
    return TestClient(app)


class TestHostawayReviewsEndpoint:
    def test_lists_normalized_reviews(self, client):
        response = client.get("/api/reviews/hostaway")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "success"
        assert data["count"] == 3
        assert data["totals"]["all"] == 3
        first = data["result"][0]
        assert first["ratingOverall"] == 4.5
        assert first["listingId"] == "flat-a"
        assert first["submittedAt"] == "2024-01-02T10:00:00.000Z"
        assert first["approved"] is False

    def test_filters_from_query_string(self, client):
        response = client.get("/api/reviews/hostaway", params={"channel": "airbnb", "minRating": "4"})

        data = response.json()
        assert [r["id"] for r in data["result"]] == ["1"]
        assert data["count"] == 1
        assert data["totals"]["all"] == 3

    def test_use_mock_flag(self, client, service):
        client.get("/api/reviews/hostaway", params={"useMock": "true"})
        service.hostaway.fetch_reviews.assert_called_with(use_mock=True)

    def test_store_failure_is_server_error(self, client, service):
        service.store = Mock()
        service.store.read_all.side_effect = ApprovalStoreError("Failed to read approvals: boom")

        response = client.get("/api/reviews/hostaway")

        assert response.status_code == 500
        assert response.json() == {"status": "error", "message": "Failed to read approvals: boom"}


class TestApprovalEndpoints:
    def test_post_then_list(self, client):
        response = client.post("/api/reviews/approvals",
                               json={"reviewId": "1", "approved": True, "listingId": "flat-a"})

        assert response.status_code == 200
        assert response.json()["result"]["approved"] is True
        assert response.json()["result"]["listingId"] == "flat-a"

        approvals = client.get("/api/reviews/approvals").json()
        assert approvals["status"] == "success"
        assert approvals["result"]["1"]["approved"] is True

        reviews = client.get("/api/reviews/hostaway", params={"approvedOnly": "true"}).json()
        assert [r["id"] for r in reviews["result"]] == ["1"]
        assert reviews["totals"]["approved"] == 1

    @pytest.mark.parametrize("body", [
        {"approved": True},
        {"reviewId": "1"},
        {"reviewId": "1", "approved": "yes"},
        {"reviewId": "", "approved": True},
        {"reviewId": 0, "approved": True},
    ])
    def test_post_validation(self, client, body):
        response = client.post("/api/reviews/approvals", json=body)

        assert response.status_code == 400
        assert response.json()["status"] == "error"
        assert response.json()["message"]

    def test_patch_keeps_listing_id(self, client):
        client.post("/api/reviews/approvals", json={"reviewId": "1", "approved": True, "listingId": "flat-a"})

        response = client.patch("/api/reviews/1/approve", json={"approved": False})

        assert response.status_code == 200
        assert response.json()["result"]["approved"] is False
        assert response.json()["result"]["listingId"] == "flat-a"

    def test_patch_requires_boolean(self, client):
        response = client.patch("/api/reviews/1/approve", json={"approved": "false"})
        assert response.status_code == 400
        assert response.json()["status"] == "error"


class TestGoogleEndpoint:
    def test_disabled_without_key(self, client):
        response = client.get("/api/reviews/google", params={"placeId": "abc"})
        assert response.json()["status"] == "disabled"

    def test_place_id_required(self, client, service):
        service.google.enabled = True
        response = client.get("/api/reviews/google")
        assert response.status_code == 400
        assert response.json()["message"] == "placeId is required"

    def test_returns_normalized_reviews(self, client, service):
        service.google.enabled = True
        service.google.get_place_details.return_value = {
            "name": "Flat A", "reviews": [{"time": 1704189600, "rating": 4, "text": "Nice"}],
        }

        data = client.get("/api/reviews/google", params={"placeId": "abc"}).json()

        assert data["count"] == 1
        assert data["result"][0]["channel"] == "google"

    def test_upstream_failure_is_server_error(self, client, service):
        service.google.enabled = True
        service.google.get_place_details.side_effect = UpstreamFetchError("Google Places API error: down")

        response = client.get("/api/reviews/google", params={"placeId": "abc"})

        assert response.status_code == 500
        assert response.json()["status"] == "error"
