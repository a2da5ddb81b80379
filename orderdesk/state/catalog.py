"""Catalog collaborators: look up items by id for order line resolution."""

from decimal import Decimal

from orderdesk.models.catalog import CatalogItem
from orderdesk.state.manager import StateManager

CATALOG_KEY = "orderdesk:catalog"

# Starter catalog for the memory backend and the Redis seed script
SAMPLE_CATALOG = [
    CatalogItem(id="1", name="Hand-painted Mug", unit_price=Decimal("18.50")),
    CatalogItem(id="2", name="Linen Tote Bag", unit_price=Decimal("24.00")),
    CatalogItem(id="3", name="Embroidered Cushion Cover", unit_price=Decimal("32.75")),
    CatalogItem(id="4", name="Scented Soy Candle", unit_price=Decimal("12.99")),
    CatalogItem(id="5", name="Personalised Keyring", unit_price=Decimal("6.50")),
]


class InMemoryCatalog:
    """Catalog held in a dict. Used by tests and the memory backend."""

    def __init__(self, items: list[CatalogItem] | None = None) -> None:
        self._items = {item.id: item for item in items or []}

    def add_item(self, item: CatalogItem) -> None:
        self._items[item.id] = item

    async def resolve_item(self, item_id: str) -> CatalogItem | None:
        """Return the item or None if it does not exist."""
        return self._items.get(item_id)

    async def list_items(self) -> list[CatalogItem]:
        return list(self._items.values())


class RedisCatalog:
    """Catalog stored as one Redis hash of item id to item JSON."""

    def __init__(self, state_manager: StateManager) -> None:
        self.state_manager = state_manager

    async def add_item(self, item: CatalogItem) -> None:
        await self.state_manager.hset(CATALOG_KEY, item.id, item.model_dump_json())

    async def resolve_item(self, item_id: str) -> CatalogItem | None:
        """Return the item or None if it does not exist."""
        raw = await self.state_manager.hget(CATALOG_KEY, item_id)
        if raw is None:
            return None
        return CatalogItem.model_validate_json(raw)

    async def list_items(self) -> list[CatalogItem]:
        raw_items = await self.state_manager.hgetall(CATALOG_KEY)
        return [CatalogItem.model_validate_json(raw) for raw in raw_items.values()]
