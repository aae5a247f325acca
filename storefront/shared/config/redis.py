# 📄 File: storefront/shared/config/redis.py
#
# 🧭 Purpose (Layman Explanation):
# Connects the shop to Redis, the fast storage that keeps each visitor's session
# between page loads.
#
# 🧪 Purpose (Technical Summary):
# RedisConfig lazily builds one pooled `redis.asyncio` client for the session
# store, with socket timeouts tighter in production, and releases it on
# shutdown. check_redis_health pings the server at startup.
#
# 🔗 Dependencies:
# - redis (redis.asyncio)
# - storefront.shared.config.settings
#
# 🔄 Connected Modules / Calls From:
# - storefront.main (store construction, lifespan startup/shutdown)

from typing import Any, Dict, Optional

from redis.asyncio import ConnectionPool, Redis
from redis.exceptions import RedisError

from .settings import Settings


class RedisConfig:
    """Owns the pooled Redis client used by the session store."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self._pool: Optional[ConnectionPool] = None
        self._client: Optional[Redis] = None

    @property
    def connection_kwargs(self) -> Dict[str, Any]:
        timeout = 5.0 if self.settings.is_production else 10.0
        return {
            "decode_responses": True,
            "max_connections": self.settings.REDIS_MAX_CONNECTIONS,
            "socket_timeout": timeout,
            "socket_connect_timeout": timeout,
            "socket_keepalive": self.settings.is_production,
            "retry_on_timeout": True,
            "health_check_interval": 30,
        }

    def create_redis_client(self) -> Redis:
        """Return the shared client, creating the pool on first use."""
        if self._client is None:
            self._pool = ConnectionPool.from_url(self.settings.REDIS_URL, **self.connection_kwargs)
            self._client = Redis(connection_pool=self._pool)
        return self._client

    async def close_connections(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
        if self._pool is not None:
            await self._pool.disconnect()
            self._pool = None


async def check_redis_health(client: Redis) -> Dict[str, Any]:
    """
    Ping Redis.

    Returns:
        {"status": "healthy"} or {"status": "unhealthy", "error": ...}
    """
    try:
        await client.ping()
    except RedisError as e:
        return {"status": "unhealthy", "error": str(e), "type": type(e).__name__}
    return {"status": "healthy"}
