"""
Factory for creating cache instances.
Simple, clean factory with singleton caching.
"""

import logging
from enum import Enum

from .status import CacheStatus
from .strategies import CacheStrategy, RedisCache, InMemoryCache, NullCache
from shortlink_app.config import settings

logger = logging.getLogger(__name__)


class CacheBackend(Enum):
    """Available cache backends"""
    REDIS = "redis"
    MEMORY = "memory"
    NULL = "null"


class CacheFactory:
    """
    Simple factory for creating cache instances.

    Uses Singleton Pattern - creates instance once, reuses it.
    Gets configuration from settings (not passed as parameters).

    Creating a cache never fails because the cache endpoint is missing or
    down: the Redis client connects lazily, and no endpoint means NullCache.
    """

    _instance: CacheStrategy = None  # Single cached instance

    @classmethod
    def create(cls, backend: CacheBackend) -> CacheStrategy:
        """
        Create or return cached cache instance.

        Args:
            backend: Type of cache backend (from enum)

        Returns:
            Singleton cache instance
        """
        # Return cached instance if exists
        if cls._instance is not None:
            return cls._instance

        if backend == CacheBackend.REDIS:
            if not settings.redis_url:
                logger.warning("No redis_url configured, running without cache")
                cls._instance = NullCache()
            else:
                from redis import asyncio as aioredis

                redis_client = aioredis.from_url(
                    settings.redis_url,
                    decode_responses=True,
                    socket_connect_timeout=settings.cache_timeout,
                    socket_timeout=settings.cache_timeout,
                )
                cls._instance = RedisCache(
                    redis_client,
                    status=CacheStatus(),
                    reconnect_interval=settings.cache_reconnect_interval,
                )
                logger.info("Redis cache configured")

        elif backend == CacheBackend.MEMORY:
            cls._instance = InMemoryCache()
            logger.info("In-memory cache initialized")

        elif backend == CacheBackend.NULL:
            cls._instance = NullCache()
            logger.info("Null cache initialized")

        else:
            raise ValueError(f"Unknown cache backend: {backend}")

        return cls._instance

    @classmethod
    def clear_instance(cls):
        """Clear cached instance (for testing)"""
        cls._instance = None
