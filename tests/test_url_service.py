"""
Tests for URLService: dedup, collision retry, cache-aside reads and
store-first deletes.
"""

import asyncio
from unittest.mock import AsyncMock

import pytest

from shortlink_app.cache.strategies import InMemoryCache, NullCache
from shortlink_app.database.connection import SessionLocal
from shortlink_app.exceptions import (
    InvalidURLError,
    ShortCodeGenerationError,
    ShortURLNotFoundError,
)
from shortlink_app.services.short_code_strategies import URL_SAFE_ALPHABET
from shortlink_app.services.url_service import URLService, cache_key
from shortlink_app.storage.url_store import URLStore


class TestShorten:

    def test_creates_record(self, url_service, cache):
        url, created = asyncio.run(url_service.shorten("example.com/path"))

        assert created is True
        assert url.original_url == "https://example.com/path"
        assert url.visits == 0
        assert len(url.code) == 6
        assert set(url.code) <= set(URL_SAFE_ALPHABET)

        # Pre-warmed
        assert asyncio.run(cache.get(cache_key(url.code))) == "https://example.com/path"

    def test_same_url_same_code(self, url_service):
        """Test that the same normalized URL dedups"""
        first, created_first = asyncio.run(url_service.shorten("HTTPS://Example.com:443"))
        second, created_second = asyncio.run(url_service.shorten("example.com"))

        assert created_first is True
        assert created_second is False
        assert first.code == second.code

    def test_dedup_is_exact_string(self, url_service):
        """Trailing-slash variants of a path are different URLs"""
        first, _ = asyncio.run(url_service.shorten("https://example.com/docs"))
        second, _ = asyncio.run(url_service.shorten("https://example.com/docs/"))

        assert first.code != second.code

    def test_invalid_url(self, url_service):
        with pytest.raises(InvalidURLError):
            asyncio.run(url_service.shorten("javascript:alert(1)"))

    def test_many_codes_unique(self, url_service):
        codes = {
            asyncio.run(url_service.shorten(f"https://example.com/{i}"))[0].code
            for i in range(50)
        }
        assert len(codes) == 50


class TestCollisionRetry:

    def test_skips_code_already_in_store(self, store, cache, scripted_codes):
        strategy = scripted_codes(["AAAAAA", "AAAAAA", "BBBBBB"])
        service = URLService(store=store, cache=cache, short_code_strategy=strategy)

        first, _ = asyncio.run(service.shorten("https://one.example/"))
        second, _ = asyncio.run(service.shorten("https://two.example/"))

        assert first.code == "AAAAAA"
        assert second.code == "BBBBBB"
        assert strategy.calls == 3

    def test_retries_when_insert_loses_race(self, db_session, cache, scripted_codes):
        """A concurrent create took the code between the check and the insert"""
        rival = SessionLocal()

        class RacingStore(URLStore):
            raced = False

            def insert(self, code, original_url, created_at):
                if not self.raced:
                    self.raced = True
                    URLStore(rival).insert(code, "https://winner.example/", created_at)
                return super().insert(code, original_url, created_at)

        store = RacingStore(db_session)
        strategy = scripted_codes(["RACE01", "RACE02"])
        service = URLService(store=store, cache=cache, short_code_strategy=strategy)

        try:
            url, created = asyncio.run(service.shorten("https://loser.example/"))
        finally:
            rival.close()

        assert created is True
        assert url.code == "RACE02"
        assert store.find_by_code("RACE01").original_url == "https://winner.example/"
        assert len(store.list_all()) == 2

    def test_gives_up_after_retry_budget(self, store, cache, scripted_codes):
        strategy = scripted_codes(["AAAAAA"] * 4)
        service = URLService(store=store, cache=cache, short_code_strategy=strategy, max_retries=3)
        asyncio.run(service.shorten("https://one.example/"))

        with pytest.raises(ShortCodeGenerationError):
            asyncio.run(service.shorten("https://two.example/"))


class TestResolve:

    def test_resolve_returns_normalized_url(self, url_service):
        url, _ = asyncio.run(url_service.shorten("Example.COM"))
        assert asyncio.run(url_service.resolve(url.code)) == "https://example.com/"

    def test_resolve_counts_every_visit(self, url_service, store):
        url, _ = asyncio.run(url_service.shorten("https://example.com/"))
        code = url.code

        for _ in range(3):
            asyncio.run(url_service.resolve(code))

        assert store.find_by_code(code).visits == 3

    def test_cache_miss_repopulates(self, url_service, cache):
        url, _ = asyncio.run(url_service.shorten("https://example.com/"))
        cache._cache.clear()

        asyncio.run(url_service.resolve(url.code))

        assert asyncio.run(cache.get(cache_key(url.code))) == "https://example.com/"

    def test_cache_hit_skips_store_lookup(self, url_service, store, monkeypatch):
        url, _ = asyncio.run(url_service.shorten("https://example.com/"))
        code = url.code

        def fail(code):
            raise AssertionError("store lookup on cache hit")

        monkeypatch.setattr(store, "find_by_code", fail)
        assert asyncio.run(url_service.resolve(code)) == "https://example.com/"

    def test_unknown_code(self, url_service):
        with pytest.raises(ShortURLNotFoundError):
            asyncio.run(url_service.resolve("nope42"))

    def test_works_without_cache(self, store):
        service = URLService(store=store, cache=NullCache())
        url, _ = asyncio.run(service.shorten("https://example.com/"))

        assert asyncio.run(service.resolve(url.code)) == "https://example.com/"
        assert store.find_by_code(url.code).visits == 1

    def test_cache_failures_are_invisible(self, store):
        broken = AsyncMock(spec=InMemoryCache)
        broken.get.return_value = None
        broken.set.return_value = False
        broken.delete.return_value = False
        service = URLService(store=store, cache=broken)

        url, _ = asyncio.run(service.shorten("https://example.com/"))
        assert asyncio.run(service.resolve(url.code)) == "https://example.com/"
        asyncio.run(service.remove(url.code))

        broken.delete.assert_awaited_once_with(cache_key(url.code))


class TestRemove:

    def test_remove_then_resolve_not_found(self, url_service):
        url, _ = asyncio.run(url_service.shorten("https://example.com/"))
        code = url.code

        asyncio.run(url_service.remove(code))

        with pytest.raises(ShortURLNotFoundError):
            asyncio.run(url_service.resolve(code))

    def test_remove_unknown(self, url_service):
        with pytest.raises(ShortURLNotFoundError):
            asyncio.run(url_service.remove("nope42"))

    def test_store_deleted_before_cache(self, store):
        """The cache entry must not disappear before the row does"""
        events = []

        class RecordingCache(InMemoryCache):
            async def delete(self, key):
                events.append(("cache", store.find_by_code(key.split(":", 1)[1])))
                return await super().delete(key)

        service = URLService(store=store, cache=RecordingCache())
        url, _ = asyncio.run(service.shorten("https://example.com/"))

        asyncio.run(service.remove(url.code))

        assert events == [("cache", None)]

    def test_stale_cache_hit_after_delete_is_harmless(self, store, cache):
        """A racing redirect may serve a deleted URL once; the visit is a no-op"""
        service = URLService(store=store, cache=cache)
        url, _ = asyncio.run(service.shorten("https://example.com/"))
        code = url.code
        store.delete_by_code(code)

        assert asyncio.run(service.resolve(code)) == "https://example.com/"
        assert store.find_by_code(code) is None


class TestStats:

    def test_get_one_and_list_all(self, url_service):
        url, _ = asyncio.run(url_service.shorten("https://example.com/"))

        assert asyncio.run(url_service.get_one(url.code)).code == url.code
        assert [u.code for u in asyncio.run(url_service.list_all())] == [url.code]

    def test_get_one_unknown(self, url_service):
        with pytest.raises(ShortURLNotFoundError):
            asyncio.run(url_service.get_one("nope42"))
