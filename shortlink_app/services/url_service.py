import logging
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from shortlink_app.cache.strategies import CacheStrategy, NullCache
from shortlink_app.config import settings
from shortlink_app.exceptions import (
    DuplicateCodeError,
    InvalidURLError,
    ShortCodeGenerationError,
    ShortURLNotFoundError,
)
from shortlink_app.models.url import URL
from shortlink_app.services.short_code_strategies import (
    RandomShortCodeStrategy,
    ShortCodeStrategy,
)
from shortlink_app.services.url_normalizer import normalize_url
from shortlink_app.storage.url_store import URLStore

logger = logging.getLogger(__name__)


def cache_key(code: str) -> str:
    return f"url:{code}"


class URLService:
    """
    URL Service with dependency injection for store, cache and code strategy.

    Orchestrates the two tiers:
    - Store: authoritative, failures propagate
    - Cache: best-effort, failures are invisible (the strategies absorb them)

    Write ordering is always store first, cache second, so the cache can
    never report something the store has not durably done.
    """

    def __init__(
        self,
        store: URLStore,
        cache: Optional[CacheStrategy] = None,
        short_code_strategy: Optional[ShortCodeStrategy] = None,
        max_retries: Optional[int] = None,
        cache_ttl: Optional[int] = None,
    ):
        """
        Initialize URL service with dependencies.

        Args:
            store: Persistent store (required)
            cache: Cache strategy (optional, NullCache when omitted)
            short_code_strategy: Code generator (secure random by default)
            max_retries: Collision retry budget (settings.max_retries by default)
            cache_ttl: Cache entry lifetime in seconds (settings.cache_ttl by default)
        """
        self.store = store
        self.cache = cache if cache is not None else NullCache()
        self.short_code_strategy = short_code_strategy or RandomShortCodeStrategy()
        self.max_retries = max_retries if max_retries is not None else settings.max_retries
        self.cache_ttl = cache_ttl if cache_ttl is not None else settings.cache_ttl

    async def shorten(self, raw_url: str) -> Tuple[URL, bool]:
        """Create a short URL, or return the existing one for the same URL.

        Process:
        1. Normalize (InvalidURLError if that fails)
        2. Dedup on the exact normalized string
        3. Generate codes until one is free and the insert succeeds
           (an insert can still lose a race to a concurrent create, which
           shows up as DuplicateCodeError and is retried)
        4. Pre-warm the cache

        Returns:
            (record, created) - created is False when the URL already existed
        """
        original_url = normalize_url(raw_url)
        if original_url is None:
            raise InvalidURLError(f"Invalid URL: {raw_url!r}")

        existing = self.store.find_by_url(original_url)
        if existing is not None:
            return existing, False

        url = self._insert_with_fresh_code(original_url)
        await self.cache.set(cache_key(url.code), url.original_url, ttl=self.cache_ttl)
        logger.info("Created short code %s for %s", url.code, url.original_url)
        return url, True

    def _insert_with_fresh_code(self, original_url: str) -> URL:
        for attempt in range(1, self.max_retries + 1):
            code = self.short_code_strategy.generate()
            if self.store.find_by_code(code) is not None:
                logger.debug("Short code %s taken (attempt %d)", code, attempt)
                continue
            try:
                return self.store.insert(code, original_url, datetime.now(timezone.utc))
            except DuplicateCodeError:
                logger.info("Short code %s lost an insert race (attempt %d)", code, attempt)

        raise ShortCodeGenerationError(
            f"Could not generate unique short code after {self.max_retries} attempts"
        )

    async def resolve(self, code: str) -> str:
        """
        Get the original URL for a redirect using Cache-Aside pattern.

        Every successful resolve counts a visit, cache hit or not.

        Flow:
        1. Check cache first
        2. On miss, query the store (ShortURLNotFoundError if absent)
        3. Populate cache for next time
        4. Increment the visit counter in the store
        """
        key = cache_key(code)

        cached_url = await self.cache.get(key)
        if cached_url:
            # A deleted code can still hit here until the entry expires;
            # the increment below is then a no-op
            self.store.increment_visits(code)
            return cached_url

        url = self.store.find_by_code(code)
        if url is None:
            raise ShortURLNotFoundError(f"Short code '{code}' not found")

        original_url = url.original_url
        await self.cache.set(key, original_url, ttl=self.cache_ttl)
        self.store.increment_visits(code)
        return original_url

    async def remove(self, code: str) -> None:
        """
        Delete a short URL, then invalidate its cache entry.
        """
        if self.store.delete_by_code(code) == 0:
            raise ShortURLNotFoundError(f"Short code '{code}' not found")

        await self.cache.delete(cache_key(code))
        logger.info("Deleted short code %s", code)

    async def list_all(self) -> List[URL]:
        """All records, straight from the store"""
        return self.store.list_all()

    async def get_one(self, code: str) -> URL:
        """One record, straight from the store (no cache involvement)"""
        url = self.store.find_by_code(code)
        if url is None:
            raise ShortURLNotFoundError(f"Short code '{code}' not found")
        return url
