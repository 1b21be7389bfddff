"""
FastAPI dependencies for dependency injection.

This module provides the singleton cache and the per-request store and
service that are injected into routes.

Pattern: Dependency Injection
- Loose coupling between components
- Easy to test (override get_db / get_cache)
- Flexible (swap cache implementations via config)
"""

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.orm import Session

from shortlink_app.cache.factory import CacheFactory, CacheBackend
from shortlink_app.cache.strategies import CacheStrategy
from shortlink_app.config import settings
from shortlink_app.database.connection import get_db
from shortlink_app.services.url_service import URLService
from shortlink_app.storage.url_store import URLStore


@lru_cache()
def get_cache() -> CacheStrategy:
    """
    Get cache instance (singleton).

    Factory gets config from settings internally.
    @lru_cache ensures this is called only once.

    Returns:
        CacheStrategy instance based on settings
    """
    backend = CacheBackend(settings.cache_backend)
    return CacheFactory.create(backend)


def get_url_store(db: Session = Depends(get_db)) -> URLStore:
    """Store bound to this request's session"""
    return URLStore(db)


def get_url_service(
    store: URLStore = Depends(get_url_store),
    cache: CacheStrategy = Depends(get_cache),
) -> URLService:
    """
    Get URLService with all dependencies injected.

    - Controller depends on service
    - Service depends on infrastructure (store, cache)
    """
    return URLService(store=store, cache=cache)
