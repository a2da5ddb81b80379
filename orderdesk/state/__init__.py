"""State management modules."""

from orderdesk.state.catalog import InMemoryCatalog, RedisCatalog
from orderdesk.state.manager import StateManager
from orderdesk.state.orders import InMemoryOrderStore, OrderStore, RedisOrderStore

__all__ = [
    "StateManager",
    "InMemoryCatalog",
    "RedisCatalog",
    "OrderStore",
    "InMemoryOrderStore",
    "RedisOrderStore",
]
