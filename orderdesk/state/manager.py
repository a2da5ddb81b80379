"""Redis connection wrapper shared by the catalog and order store."""

import redis.asyncio as redis

from orderdesk.config import get_settings
from orderdesk.utils.logging import get_logger

logger = get_logger(__name__)


class StateManager:
    """Thin async facade over the Redis commands the stores use."""

    def __init__(self, redis_url: str | None = None) -> None:
        self.redis_client: redis.Redis | None = None
        self.redis_url = redis_url or get_settings().redis_url

    async def connect(self) -> None:
        """Establish Redis connection."""
        if self.redis_client is None:
            self.redis_client = redis.from_url(
                self.redis_url,
                encoding="utf-8",
                decode_responses=True,
            )
            logger.info("redis_connected", url=self.redis_url)

    async def disconnect(self) -> None:
        """Close Redis connection."""
        if self.redis_client:
            await self.redis_client.aclose()
            self.redis_client = None
            logger.info("redis_disconnected")

    async def _client(self) -> redis.Redis:
        if self.redis_client is None:
            await self.connect()
        return self.redis_client

    async def set(self, key: str, value: str) -> None:
        client = await self._client()
        await client.set(key, value)
        logger.debug("state_set", key=key)

    async def get(self, key: str) -> str | None:
        client = await self._client()
        return await client.get(key)

    async def mget(self, keys: list[str]) -> list[str | None]:
        """Fetch several keys in one round trip; missing keys come back as None."""
        if not keys:
            return []
        client = await self._client()
        return await client.mget(keys)

    async def hset(self, key: str, field: str, value: str) -> None:
        client = await self._client()
        await client.hset(key, field, value)

    async def hget(self, key: str, field: str) -> str | None:
        client = await self._client()
        return await client.hget(key, field)

    async def hgetall(self, key: str) -> dict[str, str]:
        client = await self._client()
        return await client.hgetall(key)

    async def zadd(self, key: str, mapping: dict[str, float]) -> None:
        """Add members to a sorted set."""
        client = await self._client()
        await client.zadd(key, mapping)

    async def zrange(self, key: str, start: int = 0, end: int = -1, desc: bool = False) -> list[str]:
        """Get members from a sorted set, lowest score first unless ``desc``."""
        client = await self._client()
        return await client.zrange(key, start, end, desc=desc)

    async def delete_prefix(self, prefix: str) -> int:
        """Delete every key starting with ``prefix``. Returns how many were removed."""
        client = await self._client()
        removed = 0
        async for key in client.scan_iter(match=f"{prefix}*"):
            removed += await client.delete(key)
        logger.info("state_prefix_deleted", prefix=prefix, removed=removed)
        return removed


# Global state manager instance
_state_manager: StateManager | None = None


async def get_state_manager() -> StateManager:
    """Get the global state manager instance."""
    global _state_manager
    if _state_manager is None:
        _state_manager = StateManager()
        await _state_manager.connect()
    return _state_manager
