"""Tests for the order service wiring."""

from datetime import timedelta
from decimal import Decimal
from uuid import uuid4

import pytest

from orderdesk.core.result import Accepted, Rejected, RejectionKind
from orderdesk.core.service import OrderService
from orderdesk.models.order import LineItemInput, OrderCreate, OrderPatch, OrderStatus
from orderdesk.models.ranking import UrgencyTier
from orderdesk.state.orders import InMemoryOrderStore


@pytest.mark.asyncio
async def test_create_order_saves_order(
    service: OrderService, store: InMemoryOrderStore, create_payload: OrderCreate
) -> None:
    result = await service.create_order(create_payload)

    assert isinstance(result, Accepted)
    assert await store.load(result.value.id) == result.value


@pytest.mark.asyncio
async def test_rejected_create_saves_nothing(
    service: OrderService, store: InMemoryOrderStore, create_payload: OrderCreate
) -> None:
    payload = create_payload.model_copy(update={"items": [LineItemInput(item_id="ghost", quantity=1)]})

    result = await service.create_order(payload)

    assert isinstance(result, Rejected)
    assert result.reason == "Item with id ghost not found"
    assert await store.list_all() == []


@pytest.mark.asyncio
async def test_update_unknown_order_is_not_found(service: OrderService) -> None:
    result = await service.update_order(uuid4(), OrderPatch(status="processing"))

    assert isinstance(result, Rejected)
    assert result.kind == RejectionKind.NOT_FOUND
    assert result.reason == "Order not found"


@pytest.mark.asyncio
async def test_update_saves_merged_order(
    service: OrderService, store: InMemoryOrderStore, create_payload: OrderCreate
) -> None:
    created = await service.create_order(create_payload)
    assert isinstance(created, Accepted)

    result = await service.update_order(
        created.value.id, OrderPatch(payment_status="paid", paid_amount="25")
    )

    assert isinstance(result, Accepted)
    stored = await store.load(created.value.id)
    assert stored.paid_amount == Decimal("25")
    assert stored.customer_name == "Test Customer"


@pytest.mark.asyncio
async def test_rejected_update_leaves_store_untouched(
    service: OrderService, store: InMemoryOrderStore, create_payload: OrderCreate
) -> None:
    created = await service.create_order(create_payload)
    assert isinstance(created, Accepted)

    result = await service.update_order(
        created.value.id,
        OrderPatch(customer_name="Changed", payment_status="partially_paid", paid_amount="25.00"),
    )

    assert isinstance(result, Rejected)
    assert await store.load(created.value.id) == created.value


@pytest.mark.asyncio
async def test_priority_orders_ranks_open_candidates(
    service: OrderService, create_payload: OrderCreate
) -> None:
    """Test that the dashboard shows urgent open orders, most urgent first."""
    today = service.today()
    high = await service.create_order(create_payload.model_copy(update={"priority": 5}))
    due = await service.create_order(
        create_payload.model_copy(update={"expected_delivery_date": today.isoformat()})
    )
    await service.create_order(
        create_payload.model_copy(
            update={"expected_delivery_date": (today + timedelta(days=10)).isoformat()}
        )
    )
    done = await service.create_order(
        create_payload.model_copy(update={"priority": 5, "status": "completed"})
    )
    assert isinstance(done, Accepted) and done.value.status == OrderStatus.COMPLETED

    ranked = await service.priority_orders()

    assert [entry.id for entry in ranked] == [due.value.id, high.value.id]
    assert ranked[0].effective_priority == 50
    assert ranked[0].urgency_tier == UrgencyTier.HIGH
    assert ranked[1].urgency_tier == UrgencyTier.HIGH
