"""Seed the catalog and a few sample orders into Redis."""

import asyncio
from datetime import timedelta

from orderdesk.core.dates import business_today
from orderdesk.core.result import Rejected
from orderdesk.core.service import OrderService
from orderdesk.models.order import LineItemInput, OrderCreate
from orderdesk.state.catalog import SAMPLE_CATALOG, RedisCatalog
from orderdesk.state.manager import StateManager
from orderdesk.state.orders import RedisOrderStore


async def seed_catalog(state_manager: StateManager) -> RedisCatalog:
    """Seed catalog items."""
    print("Seeding catalog...")

    catalog = RedisCatalog(state_manager)
    for item in SAMPLE_CATALOG:
        await catalog.add_item(item)
        print(f"  ✓ Added {item.name} (${item.unit_price})")

    print("✓ Catalog seeded successfully\n")
    return catalog


async def seed_sample_orders(state_manager: StateManager, catalog: RedisCatalog) -> None:
    """Seed sample orders through the order service so they pass validation."""
    print("Seeding sample orders...")

    service = OrderService(catalog.resolve_item, RedisOrderStore(state_manager))
    today = business_today()

    requests = [
        OrderCreate(
            order_from="instagram",
            customer_name="Asha Menon",
            customer_id="@asha.makes",
            items=[LineItemInput(item_id="1", quantity=2, customization_request="Name: Asha")],
            expected_delivery_date=today.isoformat(),
            priority=3,
        ),
        OrderCreate(
            order_from="whatsapp",
            customer_name="Ben Carter",
            customer_id="+15550100",
            items=[
                LineItemInput(item_id="2", quantity=1),
                LineItemInput(item_id="4", quantity=3),
            ],
            expected_delivery_date=(today + timedelta(days=2)).isoformat(),
            payment_status="partially_paid",
            paid_amount="20.00",
        ),
        OrderCreate(
            order_from="call",
            customer_name="Chloe Dubois",
            customer_id="CD-7781",
            items=[LineItemInput(item_id="3", quantity=1)],
            priority=5,
            payment_status="paid",
            paid_amount="32.75",
        ),
        OrderCreate(
            order_from="offline",
            customer_name="Dev Patel",
            customer_id="walk-in",
            items=[LineItemInput(item_id="5", quantity=10)],
            expected_delivery_date=(today + timedelta(days=12)).isoformat(),
        ),
    ]

    for request in requests:
        result = await service.create_order(request)
        if isinstance(result, Rejected):
            print(f"  ✗ {request.customer_name}: {result.reason}")
            continue
        order = result.value
        print(f"  ✓ {order.order_code} for {order.customer_name} (${order.total_price})")

    print("✓ Sample orders seeded successfully\n")


async def main() -> None:
    """Run all seed functions."""
    print("\n" + "=" * 50)
    print("  Seeding Order Desk Data")
    print("=" * 50 + "\n")

    state_manager = StateManager()
    await state_manager.connect()
    try:
        catalog = await seed_catalog(state_manager)
        await seed_sample_orders(state_manager, catalog)
    finally:
        await state_manager.disconnect()

    print("=" * 50)
    print("  ✓ All data seeded successfully!")
    print("=" * 50 + "\n")


if __name__ == "__main__":
    asyncio.run(main())
