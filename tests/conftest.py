"""Pytest configuration and fixtures."""

from datetime import date
from decimal import Decimal
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from orderdesk.api.routes import get_order_service
from orderdesk.config import Settings
from orderdesk.core.composer import ValidationRules
from orderdesk.core.service import OrderService
from orderdesk.main import app
from orderdesk.models.catalog import CatalogItem
from orderdesk.models.order import LineItemInput, Order, OrderCreate, OrderItem, OrderSource
from orderdesk.state.catalog import InMemoryCatalog
from orderdesk.state.orders import InMemoryOrderStore

TODAY = date(2026, 10, 19)


class RecordingCatalog(InMemoryCatalog):
    """In-memory catalog that remembers which ids were looked up."""

    def __init__(self, items: list[CatalogItem] | None = None) -> None:
        super().__init__(items)
        self.lookups: list[str] = []

    async def resolve_item(self, item_id: str) -> CatalogItem | None:
        self.lookups.append(item_id)
        return await super().resolve_item(item_id)


@pytest.fixture
def today() -> date:
    """Fixed business date for pure core tests."""
    return TODAY


@pytest.fixture
def catalog() -> RecordingCatalog:
    """Catalog with a few priced items."""
    return RecordingCatalog(
        [
            CatalogItem(id="itemA", name="Item A", unit_price=Decimal("10.00")),
            CatalogItem(id="itemB", name="Item B", unit_price=Decimal("5.00")),
            CatalogItem(id="itemC", name="Item C", unit_price=Decimal("0.10")),
            CatalogItem(id="itemD", name="Item D", unit_price=Decimal("0.20")),
        ]
    )


@pytest.fixture
def store() -> InMemoryOrderStore:
    return InMemoryOrderStore()


@pytest.fixture
def rules() -> ValidationRules:
    return ValidationRules()


@pytest.fixture
def settings() -> Settings:
    """Settings independent of any local .env file."""
    return Settings(_env_file=None, storage_backend="memory", business_timezone="UTC")


@pytest.fixture
def service(catalog: RecordingCatalog, store: InMemoryOrderStore, settings: Settings) -> OrderService:
    return OrderService(catalog.resolve_item, store, settings)


@pytest.fixture
def create_payload() -> OrderCreate:
    """Valid creation request: 2 x itemA @ 10.00 + 1 x itemB @ 5.00."""
    return OrderCreate(
        order_from="instagram",
        customer_name="Test Customer",
        customer_id="cust-001",
        items=[
            LineItemInput(item_id="itemA", quantity=2),
            LineItemInput(item_id="itemB", quantity=1, customization_request="Gift wrap"),
        ],
    )


@pytest.fixture
def stored_order() -> Order:
    """An order as it would come back from the store."""
    return Order(
        order_code="ORD123456",
        order_from=OrderSource.CALL,
        customer_name="Stored Customer",
        customer_id="cust-002",
        items=[
            OrderItem(item_id="itemA", name="Item A", unit_price=Decimal("10.00"), quantity=2),
            OrderItem(item_id="itemB", name="Item B", unit_price=Decimal("5.00"), quantity=1),
        ],
        total_price=Decimal("25.00"),
    )


@pytest_asyncio.fixture
async def test_client(service: OrderService) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client against the app, wired to the in-memory service."""
    app.dependency_overrides[get_order_service] = lambda: service
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
