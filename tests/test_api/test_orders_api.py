"""Tests for the order HTTP endpoints."""

from datetime import timedelta
from typing import AsyncGenerator
from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from orderdesk.config import Settings
from orderdesk.core.dates import business_today
from orderdesk.main import app, worker_count

CREATE_BODY = {
    "orderFrom": "instagram",
    "customerName": "Test Customer",
    "customerId": "cust-001",
    "items": [
        {"itemId": "itemA", "quantity": 2},
        {"itemId": "itemB", "quantity": 1, "customizationRequest": "Gift wrap"},
    ],
}


async def create(client: AsyncClient, **overrides) -> dict:
    response = await client.post("/api/v1/orders", json={**CREATE_BODY, **overrides})
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.asyncio
async def test_health(test_client: AsyncClient) -> None:
    response = await test_client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_create_order(test_client: AsyncClient) -> None:
    order = await create(test_client, totalPrice=1)

    assert order["total_price"] == "25.00"
    assert order["status"] == "pending"
    assert order["payment_status"] == "unpaid"
    assert order["items"][1]["customization_request"] == "Gift wrap"


@pytest.mark.asyncio
async def test_create_unknown_item_returns_400(test_client: AsyncClient) -> None:
    response = await test_client.post(
        "/api/v1/orders", json={**CREATE_BODY, "items": [{"itemId": "ghost", "quantity": 1}]}
    )

    assert response.status_code == 400
    assert response.json()["detail"] == {
        "message": "Item with id ghost not found",
        "field": "items",
    }


@pytest.mark.asyncio
async def test_create_past_delivery_date_returns_400(test_client: AsyncClient) -> None:
    yesterday = business_today() - timedelta(days=1)

    response = await test_client.post(
        "/api/v1/orders", json={**CREATE_BODY, "expectedDeliveryDate": yesterday.isoformat()}
    )

    assert response.status_code == 400
    assert response.json()["detail"]["field"] == "expected_delivery_date"


@pytest.mark.asyncio
async def test_get_and_list_orders(test_client: AsyncClient) -> None:
    order = await create(test_client)

    fetched = await test_client.get(f"/api/v1/orders/{order['id']}")
    listed = await test_client.get("/api/v1/orders")

    assert fetched.status_code == 200
    assert fetched.json() == order
    assert [entry["id"] for entry in listed.json()] == [order["id"]]


@pytest.mark.asyncio
async def test_get_unknown_order_returns_404(test_client: AsyncClient) -> None:
    response = await test_client.get(f"/api/v1/orders/{uuid4()}")

    assert response.status_code == 404
    assert response.json()["detail"]["message"] == "Order not found"


@pytest.mark.asyncio
async def test_update_order(test_client: AsyncClient) -> None:
    order = await create(test_client, expectedDeliveryDate=business_today().isoformat())

    response = await test_client.put(
        f"/api/v1/orders/{order['id']}",
        json={"paymentStatus": "partially_paid", "paidAmount": 10, "expectedDeliveryDate": None},
    )

    assert response.status_code == 200
    updated = response.json()
    assert updated["payment_status"] == "partially_paid"
    assert updated["paid_amount"] == "10"
    assert updated["expected_delivery_date"] is None
    assert updated["customer_name"] == "Test Customer"


@pytest.mark.asyncio
async def test_update_inconsistent_payment_returns_400(test_client: AsyncClient) -> None:
    order = await create(test_client)

    response = await test_client.put(
        f"/api/v1/orders/{order['id']}",
        json={"paymentStatus": "partially_paid", "paidAmount": 25.00},
    )

    assert response.status_code == 400
    assert response.json()["detail"]["field"] == "paid_amount"
    unchanged = await test_client.get(f"/api/v1/orders/{order['id']}")
    assert unchanged.json()["payment_status"] == "unpaid"


@pytest.mark.asyncio
async def test_update_unknown_order_returns_404(test_client: AsyncClient) -> None:
    response = await test_client.put(f"/api/v1/orders/{uuid4()}", json={"status": "processing"})

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_priority_orders(test_client: AsyncClient) -> None:
    today = business_today()
    await create(test_client, priority=1)
    soon = await create(test_client, expectedDeliveryDate=(today + timedelta(days=1)).isoformat())
    high = await create(test_client, priority=5)

    response = await test_client.get("/api/v1/orders/priority")

    assert response.status_code == 200
    ranked = response.json()
    assert [entry["id"] for entry in ranked] == [soon["id"], high["id"]]
    assert ranked[0]["effective_priority"] == 25
    assert ranked[0]["urgency_tier"] == "medium"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("overrides", "field"),
    [
        ({"priority": True}, "priority"),
        ({"items": [{"itemId": "itemA", "quantity": True}]}, "items"),
        ({"paymentStatus": "paid", "paidAmount": True}, "paid_amount"),
    ],
)
async def test_create_rejects_boolean_numbers(
    test_client: AsyncClient, overrides: dict, field: str
) -> None:
    """Test that JSON booleans are not read as 1 for numeric fields."""
    response = await test_client.post("/api/v1/orders", json={**CREATE_BODY, **overrides})

    assert response.status_code == 400
    assert response.json()["detail"]["field"] == field


@pytest_asyncio.fixture
async def default_client() -> AsyncGenerator[AsyncClient, None]:
    """HTTP client against the app with its own memory-backed service."""
    app.dependency_overrides.clear()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.mark.asyncio
async def test_memory_backend_serves_sample_catalog(default_client: AsyncClient) -> None:
    """Test that the default setup can create and fetch an order."""
    response = await default_client.post(
        "/api/v1/orders",
        json={**CREATE_BODY, "items": [{"itemId": "1", "quantity": 2}]},
    )

    assert response.status_code == 201, response.text
    order = response.json()
    assert order["total_price"] == "37.00"
    fetched = await default_client.get(f"/api/v1/orders/{order['id']}")
    assert fetched.status_code == 200


def test_memory_backend_runs_single_worker(settings: Settings) -> None:
    assert worker_count(settings) == 1
    assert worker_count(settings.model_copy(update={"storage_backend": "redis"})) == settings.api_workers
