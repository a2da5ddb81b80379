"""Order store collaborators: load, save and list whole orders."""

from typing import Protocol
from uuid import UUID

from orderdesk.models.order import Order
from orderdesk.state.manager import StateManager

ORDER_KEY_PREFIX = "orderdesk:order:"
ORDER_INDEX_KEY = "orderdesk:orders:by_created"


class OrderStore(Protocol):
    """What the order service needs from persistence."""

    async def load(self, order_id: UUID) -> Order | None: ...

    async def save(self, order: Order) -> None: ...

    async def list_all(self) -> list[Order]: ...


class InMemoryOrderStore:
    """Orders kept in process memory, keyed by id."""

    def __init__(self) -> None:
        self._orders: dict[UUID, Order] = {}

    async def load(self, order_id: UUID) -> Order | None:
        return self._orders.get(order_id)

    async def save(self, order: Order) -> None:
        self._orders[order.id] = order

    async def list_all(self) -> list[Order]:
        """All orders, newest first."""
        return sorted(self._orders.values(), key=lambda order: order.created_at, reverse=True)


class RedisOrderStore:
    """
    Orders stored as JSON documents in Redis.

    Each order lives under its own key; a sorted set scored by creation time
    keeps the listing order. Saving overwrites the whole document, so line
    items are always replaced as a group.
    """

    def __init__(self, state_manager: StateManager) -> None:
        self.state_manager = state_manager

    @staticmethod
    def _key(order_id: UUID) -> str:
        return f"{ORDER_KEY_PREFIX}{order_id}"

    async def load(self, order_id: UUID) -> Order | None:
        raw = await self.state_manager.get(self._key(order_id))
        if raw is None:
            return None
        return Order.model_validate_json(raw)

    async def save(self, order: Order) -> None:
        await self.state_manager.set(self._key(order.id), order.model_dump_json())
        await self.state_manager.zadd(
            ORDER_INDEX_KEY, {str(order.id): order.created_at.timestamp()}
        )

    async def list_all(self) -> list[Order]:
        """All orders, newest first."""
        order_ids = await self.state_manager.zrange(ORDER_INDEX_KEY, desc=True)
        raw_orders = await self.state_manager.mget(
            [f"{ORDER_KEY_PREFIX}{order_id}" for order_id in order_ids]
        )
        return [Order.model_validate_json(raw) for raw in raw_orders if raw is not None]
