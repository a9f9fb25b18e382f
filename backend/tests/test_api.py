from unittest.mock import AsyncMock, Mock, patch

import pytest
from fastapi.testclient import TestClient

from conftest import StubGateway
from travel_guardian import api
from travel_guardian.pipeline.price_check import PriceCheckPipeline

# Create a test client
client = TestClient(api.app)

PAYLOAD = {
    "origin": "NYC",
    "destination": "LAX",
    "start_date": "2024-12-01",
    "end_date": "2024-12-04",
    "total_budget": 2000,
    "flight_budget": 600,
    "hotel_budget_per_night": 200,
    "car_budget_per_day": 60,
}


@pytest.fixture
def gateway(flight_answer):
    return StubGateway({"flight": flight_answer})


@pytest.fixture
def offline_pipeline(gateway):
    pipeline = PriceCheckPipeline(gateway, seed=1)
    with patch.object(api, "pipeline", pipeline):
        yield pipeline


def test_root_and_health(offline_pipeline):
    assert client.get("/").json()["endpoints"]["check_prices"] == "/check-prices"
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["persistence_enabled"] is False


def test_check_prices(offline_pipeline):
    response = client.post("/check-prices", json=PAYLOAD)

    assert response.status_code == 200
    body = response.json()
    assert body["days"] == 3
    assert body["flight"]["price"] == 290
    assert body["flight"]["carrier"] == "Delta"
    assert body["flight"]["source"] == "search"
    assert body["hotel"]["source"] == "fallback"
    assert "search_excerpt" not in body["hotel"]
    assert body["total_cost"] == 290 + 3 * (body["hotel"]["price_per_night"] + body["car"]["price_per_day"])
    assert body["persistence_enabled"] is False
    assert response.headers["x-user-id"] == body["user_id"]
    assert body["session_id"].startswith(f"session-{body['user_id']}-")


def test_check_prices_reuses_user_id_header(offline_pipeline):
    response = client.post("/check-prices", json=PAYLOAD, headers={"x-user-id": "traveller-42"})
    assert response.status_code == 200
    assert response.json()["user_id"] == "traveller-42"
    assert response.headers["x-user-id"] == "traveller-42"


def test_check_prices_with_preferences(offline_pipeline, gateway):
    payload = {
        **PAYLOAD,
        "flight_preferences": {"stops": "direct"},
        "hotel_preferences": {"star_rating": 4, "amenities": ["wifi"]},
    }
    assert client.post("/check-prices", json=payload).status_code == 200
    queries = {category: query for category, query, _ in gateway.calls}
    assert "direct flights only" in queries["flight"]
    assert "4-star rating or better, with free WiFi" in queries["hotel"]


@pytest.mark.parametrize("changes,message", [
    ({"start_date": "2024-13-01"}, "Invalid date format"),
    ({"end_date": "2024-12-01"}, "End date must be after start date"),
    ({"end_date": "2024-11-20"}, "End date must be after start date"),
    ({"total_budget": -5}, "total_budget"),
    ({"origin": "  "}, "Missing required trip details"),
])
def test_invalid_input_is_rejected_before_lookups(offline_pipeline, gateway, changes, message):
    response = client.post("/check-prices", json={**PAYLOAD, **changes})
    assert response.status_code == 400
    assert message in response.json()["detail"]
    assert gateway.calls == []


def test_missing_fields_fail_validation(offline_pipeline):
    payload = {k: v for k, v in PAYLOAD.items() if k != "destination"}
    assert client.post("/check-prices", json=payload).status_code == 422


def test_unexpected_error_returns_500():
    failing = Mock()
    failing.check_prices = AsyncMock(side_effect=RuntimeError("boom"))
    with patch.object(api, "pipeline", failing):
        response = client.post("/check-prices", json=PAYLOAD)
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to check prices", "details": "boom"}


def test_price_history_without_store(offline_pipeline):
    response = client.get("/price-history", params={"user_id": "u1"})
    assert response.status_code == 200
    assert response.json()["success"] is False
    assert response.json()["history"] == []


def test_price_history_returns_saved_reports():
    fake = Mock()
    fake.store.enabled = True
    fake.store.list_price_history.return_value = [{"key": "price-u1-2", "total_cost": 1100}]
    with patch.object(api, "pipeline", fake):
        response = client.get("/price-history", params={"user_id": "u1", "limit": 5})

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "user_id": "u1",
        "count": 1,
        "history": [{"key": "price-u1-2", "total_cost": 1100}],
    }
    fake.store.list_price_history.assert_called_once_with("u1", 5)


def test_price_history_store_error_is_not_fatal():
    fake = Mock()
    fake.store.enabled = True
    fake.store.list_price_history.side_effect = RuntimeError("bucket missing")
    with patch.object(api, "pipeline", fake):
        response = client.get("/price-history", params={"user_id": "u1"})

    assert response.status_code == 200
    assert response.json()["success"] is False
    assert response.json()["error"] == "bucket missing"


def test_price_history_requires_user_id(offline_pipeline):
    assert client.get("/price-history").status_code == 422
