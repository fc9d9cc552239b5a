from __future__ import annotations

from datetime import date, time

import pytest
from fastapi.testclient import TestClient

from receipt_points.api.dependencies import get_receipt_service
from receipt_points.api.main import app
from receipt_points.models.schemas import Item, Receipt
from receipt_points.services.points_store import InMemoryPointsStore
from receipt_points.services.receipt_service import ReceiptService


def make_receipt(
    retailer="Shop",
    purchase_date=date(2022, 1, 2),
    purchase_time=time(9, 0),
    total="1.23",
    items=(),
) -> Receipt:
    return Receipt(
        retailer=retailer,
        purchase_date=purchase_date,
        purchase_time=purchase_time,
        total=total,
        items=tuple(Item(short_description=d, price=p) for d, p in items),
    )


@pytest.fixture
def target_receipt() -> Receipt:
    return make_receipt(
        retailer="Target",
        purchase_date=date(2022, 1, 1),
        purchase_time=time(13, 1),
        total="35.35",
        items=[
            ("Mountain Dew 12PK", "6.49"),
            ("Emils Cheese Pizza", "12.25"),
            ("Knorr Creamy Chicken", "1.26"),
            ("Doritos Nacho Cheese", "3.35"),
            ("   Klarbrunn 12-PK 12 FL OZ  ", "12.00"),
        ],
    )


@pytest.fixture
def corner_market_receipt() -> Receipt:
    return make_receipt(
        retailer="M&M Corner Market",
        purchase_date=date(2022, 3, 20),
        purchase_time=time(14, 33),
        total="9.00",
        items=[("Gatorade", "2.25")] * 4,
    )


@pytest.fixture
def store() -> InMemoryPointsStore:
    return InMemoryPointsStore()


@pytest.fixture
def service(store) -> ReceiptService:
    return ReceiptService(store)


@pytest.fixture
def client(service):
    app.dependency_overrides[get_receipt_service] = lambda: service
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_receipt_service, None)
