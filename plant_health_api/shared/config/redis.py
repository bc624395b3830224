# 📄 File: plant_health_api/shared/config/redis.py
#
# 🧭 Purpose (Layman Explanation):
# Configures the Redis cache that remembers expensive answers for a while, such as the
# community-wide statistics or the weather for a spot on the map.
#
# 🧪 Purpose (Technical Summary):
# Redis connection pooling, cache key patterns with TTLs, and a JSON CacheManager that
# degrades to "no cache" (with a warning) when Redis is disabled or unreachable.
#
# 🔗 Dependencies:
# - redis (redis.asyncio)
# - plant_health_api.shared.config.settings
#
# 🔄 Connected Modules / Calls From:
# - Global overview query handler (analytics cache)
# - Weather endpoints (current conditions cache)
# - plant_health_api.main (shutdown), api.v1.health (readiness probe)

import json
import logging
from typing import Any, Dict, Optional

import redis.asyncio as redis
from redis.asyncio import ConnectionPool, Redis

from .settings import get_settings

logger = logging.getLogger(__name__)


# =============================================================================
# REDIS CONFIGURATION CLASS
# =============================================================================

class RedisConfig:
    """Redis configuration class with connection management."""

    def __init__(self):
        self._connection_pool: ConnectionPool | None = None
        self._redis_client: Redis | None = None

    @property
    def connection_kwargs(self) -> Dict[str, Any]:
        settings = get_settings()
        base_config = {
            "encoding": "utf-8",
            "decode_responses": True,
            "retry_on_timeout": True,
            "health_check_interval": 30,
        }
        if settings.is_production:
            base_config.update({"socket_timeout": 5.0, "socket_connect_timeout": 5.0})
        else:
            base_config.update({"socket_timeout": 10.0, "socket_connect_timeout": 10.0})
        return base_config

    def create_redis_client(self) -> Redis:
        """Create Redis client with connection pool."""
        if self._redis_client is None:
            self._connection_pool = ConnectionPool.from_url(
                get_settings().REDIS_URL,
                **self.connection_kwargs
            )
            self._redis_client = Redis(connection_pool=self._connection_pool)
        return self._redis_client

    async def close_connections(self):
        """Close Redis connections and cleanup."""
        if self._redis_client:
            await self._redis_client.aclose()
            self._redis_client = None

        if self._connection_pool:
            await self._connection_pool.disconnect()
            self._connection_pool = None


# =============================================================================
# CACHE CONFIGURATION
# =============================================================================

class CacheConfig:
    """Cache key patterns and their TTL settings."""

    KEY_PATTERNS = {
        "global_overview": "analytics:global:overview",
        "weather_current": "weather:current:{lat}:{lon}",
        "weather_forecast": "weather:forecast:{lat}:{lon}",
    }

    @classmethod
    def get_cache_key(cls, pattern_name: str, **kwargs) -> str:
        """
        Generate cache key from pattern and parameters.

        Args:
            pattern_name: Name of the key pattern
            **kwargs: Parameters to substitute in the pattern

        Returns:
            Formatted cache key string
        """
        if pattern_name not in cls.KEY_PATTERNS:
            raise ValueError(f"Unknown cache key pattern: {pattern_name}")

        try:
            return cls.KEY_PATTERNS[pattern_name].format(**kwargs)
        except KeyError as e:
            raise ValueError(f"Missing parameter {e} for pattern {pattern_name}")

    @classmethod
    def get_ttl(cls, pattern_name: str) -> int:
        settings = get_settings()
        ttl_mappings = {
            "global_overview": settings.GLOBAL_ANALYTICS_CACHE_TTL,
            "weather_current": settings.CACHE_WEATHER_TTL,
            "weather_forecast": settings.CACHE_WEATHER_TTL * 2,
        }
        return ttl_mappings.get(pattern_name, settings.CACHE_DEFAULT_TTL)


# =============================================================================
# CACHE MANAGER
# =============================================================================

class CacheManager:
    """
    JSON cache on top of Redis.

    A manager built without a client is disabled: reads miss and writes are
    no-ops. Redis errors are logged and treated as misses so a cache outage
    never fails a request.
    """

    def __init__(self, client: Optional[Redis] = None):
        self._client = client

    @property
    def enabled(self) -> bool:
        return self._client is not None

    async def get_json(self, key: str) -> Optional[Any]:
        if self._client is None:
            return None
        try:
            raw = await self._client.get(key)
        except redis.RedisError as e:
            logger.warning(f"Cache read failed for {key}: {e}")
            return None
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except (TypeError, ValueError):
            logger.warning(f"Discarding undecodable cache entry {key}")
            return None

    async def set_json(self, key: str, value: Any, ttl: int) -> bool:
        if self._client is None:
            return False
        try:
            await self._client.set(key, json.dumps(value, default=str), ex=ttl)
            return True
        except redis.RedisError as e:
            logger.warning(f"Cache write failed for {key}: {e}")
            return False

    async def delete(self, key: str) -> None:
        if self._client is None:
            return
        try:
            await self._client.delete(key)
        except redis.RedisError as e:
            logger.warning(f"Cache delete failed for {key}: {e}")


# =============================================================================
# GLOBAL INSTANCES
# =============================================================================

redis_config = RedisConfig()
_cache_manager: Optional[CacheManager] = None


def get_cache_manager() -> CacheManager:
    """FastAPI dependency returning the process wide cache manager."""
    global _cache_manager
    if _cache_manager is None:
        if get_settings().CACHE_ENABLED:
            _cache_manager = CacheManager(redis_config.create_redis_client())
        else:
            _cache_manager = CacheManager(None)
    return _cache_manager


async def close_cache() -> None:
    global _cache_manager
    _cache_manager = None
    await redis_config.close_connections()


async def check_redis_health() -> Dict[str, Any]:
    """
    Check Redis connectivity.

    Returns:
        Dict containing Redis health status
    """
    if not get_settings().CACHE_ENABLED:
        return {"status": "disabled"}

    try:
        client = redis_config.create_redis_client()
        await client.ping()
        return {"status": "healthy"}
    except redis.RedisError as e:
        return {"status": "unhealthy", "error": str(e), "type": type(e).__name__}
