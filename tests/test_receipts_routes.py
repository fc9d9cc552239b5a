from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from receipt_points.api.dependencies import get_receipt_service
from receipt_points.api.main import app
from receipt_points.services.points_store import PointsStoreError
from receipt_points.services.receipt_service import ReceiptService


TARGET_BODY = {
    "retailer": "Target",
    "purchaseDate": "2022-01-01",
    "purchaseTime": "13:01",
    "items": [
        {"shortDescription": "Mountain Dew 12PK", "price": "6.49"},
        {"shortDescription": "Emils Cheese Pizza", "price": "12.25"},
        {"shortDescription": "Knorr Creamy Chicken", "price": "1.26"},
        {"shortDescription": "Doritos Nacho Cheese", "price": "3.35"},
        {"shortDescription": "   Klarbrunn 12-PK 12 FL OZ  ", "price": "12.00"},
    ],
    "total": "35.35",
}

CORNER_MARKET_BODY = {
    "retailer": "M&M Corner Market",
    "purchaseDate": "2022-03-20",
    "purchaseTime": "14:33",
    "items": [{"shortDescription": "Gatorade", "price": "2.25"}] * 4,
    "total": "9.00",
}


class FailingStore:
    def create(self, points):
        raise PointsStoreError("redis unavailable")

    def get(self, point_id):
        raise PointsStoreError("redis unavailable")


@pytest.mark.parametrize("body, expected", [(TARGET_BODY, 28), (CORNER_MARKET_BODY, 109)])
def test_process_then_fetch_points(client, body, expected):
    resp = client.post("/receipts/process", json=body)
    assert resp.status_code == 200
    receipt_id = resp.json()["id"]
    assert receipt_id

    resp = client.get(f"/receipts/{receipt_id}/points")
    assert resp.status_code == 200
    assert resp.json() == {"points": expected}


def test_unknown_receipt_id_is_404(client):
    resp = client.get("/receipts/does-not-exist/points")
    assert resp.status_code == 404
    assert resp.json() == {"error": "No receipt found for that ID."}


@pytest.mark.parametrize(
    "change",
    [
        {"retailer": "Target!"},
        {"purchaseDate": "2022-13-01"},
        {"purchaseDate": "01/01/2022"},
        {"purchaseTime": "1:01"},
        {"purchaseTime": "25:00"},
        {"items": []},
        {"items": [{"shortDescription": "", "price": "1.00"}]},
        {"items": [{"shortDescription": "Gum", "price": "1.0"}]},
        {"total": "35"},
        {"total": "-1.00"},
        {"total": "9.00\n"},
        {"total": "\u0669.\u0660\u0660"},
        {"items": [{"shortDescription": "Gatorade", "price": "2.25\n"}]},
        {"retailer": "Target\u00e9"},
    ],
)
def test_invalid_receipt_is_400(client, change):
    resp = client.post("/receipts/process", json={**TARGET_BODY, **change})
    assert resp.status_code == 400
    body = resp.json()
    assert body["error"] == "The receipt is invalid."
    assert body["details"]


def test_missing_field_is_400(client):
    body = {k: v for k, v in TARGET_BODY.items() if k != "total"}
    resp = client.post("/receipts/process", json=body)
    assert resp.status_code == 400


def test_malformed_json_is_400(client):
    resp = client.post(
        "/receipts/process",
        content="{not json",
        headers={"content-type": "application/json"},
    )
    assert resp.status_code == 400


def test_store_failure_is_500():
    app.dependency_overrides[get_receipt_service] = lambda: ReceiptService(FailingStore())
    try:
        resp = TestClient(app).post("/receipts/process", json=TARGET_BODY)
    finally:
        app.dependency_overrides.pop(get_receipt_service, None)
    assert resp.status_code == 500
    assert resp.json()["error"] == "Internal server error"


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"
