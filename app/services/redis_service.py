from typing import Any

import redis.asyncio as redis
from loguru import logger

from app.core.config import settings


class RedisService:
    """
    Shared async Redis connection.

    Only the weekly digest ledger writes here. Errors are logged and reported
    as "absent" or "not written" so an unreachable Redis never blocks a send.
    """

    def __init__(self, url: str | None = None) -> None:
        self.url = url or settings.REDIS_URL
        self._client: redis.Redis | None = None

    async def get_client(self) -> redis.Redis:
        if self._client is None:
            # Never log credentials embedded in the URL
            logger.info(f"Connecting to Redis at {self.url.rsplit('@', 1)[-1]}")
            self._client = redis.from_url(
                self.url,
                decode_responses=True,
                encoding="utf-8",
                socket_connect_timeout=5,
                socket_timeout=5,
                max_connections=settings.REDIS_MAX_CONNECTIONS,
                health_check_interval=30,
            )
        return self._client

    async def set(self, key: str, value: Any, ttl: int | None = None) -> bool:
        """Write *value* as a string, expiring after *ttl* seconds when given."""
        try:
            client = await self.get_client()
            return bool(await client.set(key, str(value), ex=ttl))
        except (redis.RedisError, OSError) as exc:
            logger.error(f"Redis SET failed for '{key}': {exc}")
            return False

    async def exists(self, key: str) -> bool:
        """True when *key* is present; False when absent or Redis is unreachable."""
        try:
            client = await self.get_client()
            return bool(await client.exists(key))
        except (redis.RedisError, OSError) as exc:
            logger.error(f"Redis EXISTS failed for '{key}': {exc}")
            return False

    async def ping(self) -> bool:
        try:
            client = await self.get_client()
            return bool(await client.ping())
        except (redis.RedisError, OSError) as exc:
            logger.warning(f"Redis ping failed: {exc}")
            return False

    async def close(self) -> None:
        if self._client is not None:
            try:
                await self._client.aclose()
            finally:
                self._client = None


redis_service = RedisService()
