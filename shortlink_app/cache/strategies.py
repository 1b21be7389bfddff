"""
Cache strategies using Strategy Pattern.
Allows switching between different cache backends (Redis, In-Memory, Null).

The cache is never authoritative: every operation is best-effort and
degrades to a miss / no-op instead of raising.
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import Dict, Optional, Tuple

from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError
from redis.exceptions import TimeoutError as RedisTimeoutError

from .status import CacheStatus

logger = logging.getLogger(__name__)

DEFAULT_TTL = 3600  # 1 hour


class CacheStrategy(ABC):
    """
    Abstract base class for cache strategies.

    This is the Strategy Pattern interface - allows multiple cache implementations
    without changing the service layer code.

    All methods are async because cache operations involve I/O (network for Redis).
    None of them may raise: failures turn into misses.
    """

    async def connect(self) -> bool:
        """Open the backend connection if there is one. Returns availability."""
        return self.is_available()

    async def close(self) -> None:
        """Release backend resources"""
        return None

    @abstractmethod
    def is_available(self) -> bool:
        """Cheap liveness check, used to skip calls to a dead backend"""
        pass

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """
        Get value from cache.

        Args:
            key: Cache key

        Returns:
            Cached value, or None on miss, expiry or backend failure
        """
        pass

    @abstractmethod
    async def set(self, key: str, value: str, ttl: int = DEFAULT_TTL) -> bool:
        """
        Set value in cache with TTL (Time To Live).

        Args:
            key: Cache key
            value: Value to cache
            ttl: Time to live in seconds (default: 1 hour)

        Returns:
            True if stored, False if dropped
        """
        pass

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """
        Delete key from cache.

        Returns:
            True if the backend accepted the delete, False if dropped
        """
        pass


class RedisCache(CacheStrategy):
    """
    Redis cache implementation on top of `redis.asyncio`.

    Connection lifecycle drives a shared CacheStatus flag:
    - successful ping -> connected
    - connection error / timeout -> disconnected

    While disconnected, calls return immediately as misses. A reconnect
    ping is attempted at most once per `reconnect_interval` seconds.
    """

    def __init__(
        self,
        redis_client,
        status: Optional[CacheStatus] = None,
        reconnect_interval: float = 30.0,
    ):
        """
        Args:
            redis_client: redis.asyncio.Redis instance (timeouts configured on it)
            status: Shared liveness flag
            reconnect_interval: Seconds between reconnect attempts
        """
        self.redis = redis_client
        self.status = status or CacheStatus()
        self.reconnect_interval = reconnect_interval

    def is_available(self) -> bool:
        return self.status.available

    async def connect(self) -> bool:
        """Ping Redis and update the liveness flag"""
        self.status.mark_attempt()
        try:
            await self.redis.ping()
        except RedisError as e:
            self.status.mark_disconnected(e)
            logger.warning("Redis unavailable, serving without cache: %s", e)
            return False
        self.status.mark_connected()
        return True

    async def close(self) -> None:
        try:
            await self.redis.aclose()
        except RedisError as e:
            logger.warning("Redis close error: %s", e)

    async def _ready(self) -> bool:
        if self.status.available:
            return True
        if self.status.should_retry(self.reconnect_interval):
            return await self.connect()
        return False

    def _on_failure(self, operation: str, error: Exception) -> None:
        if isinstance(error, (RedisConnectionError, RedisTimeoutError)):
            self.status.mark_disconnected(error)
            self.status.mark_attempt()
        logger.warning("Redis %s error: %s", operation, error)

    async def get(self, key: str) -> Optional[str]:
        if not await self._ready():
            return None
        try:
            value = await self.redis.get(key)
        except RedisError as e:
            self._on_failure("get", e)
            return None
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    async def set(self, key: str, value: str, ttl: int = DEFAULT_TTL) -> bool:
        if not await self._ready():
            return False
        try:
            return bool(await self.redis.setex(key, ttl, value))
        except RedisError as e:
            self._on_failure("set", e)
            return False

    async def delete(self, key: str) -> bool:
        if not await self._ready():
            return False
        try:
            await self.redis.delete(key)
            return True
        except RedisError as e:
            self._on_failure("delete", e)
            return False


class InMemoryCache(CacheStrategy):
    """
    In-memory cache implementation using Python dict.

    Entries carry a monotonic-clock deadline and are dropped lazily when
    read after expiry. Not shared between processes and lost on restart.

    Used in development/testing environments.
    Note: Async for interface consistency, but operations are instant.
    """

    def __init__(self, clock=time.monotonic):
        """
        Args:
            clock: Monotonic time source (injectable for tests)
        """
        self._cache: Dict[str, Tuple[str, float]] = {}
        self._clock = clock

    def is_available(self) -> bool:
        return True

    async def get(self, key: str) -> Optional[str]:
        entry = self._cache.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if self._clock() >= expires_at:
            self._cache.pop(key, None)
            return None
        return value

    async def set(self, key: str, value: str, ttl: int = DEFAULT_TTL) -> bool:
        self._cache[key] = (value, self._clock() + ttl)
        return True

    async def delete(self, key: str) -> bool:
        self._cache.pop(key, None)
        return True


class NullCache(CacheStrategy):
    """
    Null Object Pattern - cache that does nothing.

    Stands in for an absent cache (no endpoint configured, or caching
    disabled). Every read is a miss, so every redirect goes to the store.
    """

    def is_available(self) -> bool:
        return False

    async def get(self, key: str) -> Optional[str]:
        return None

    async def set(self, key: str, value: str, ttl: int = DEFAULT_TTL) -> bool:
        return False

    async def delete(self, key: str) -> bool:
        return False
