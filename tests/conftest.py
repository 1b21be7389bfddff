"""
Test configuration and fixtures for the FastAPI URL shortener.
This centralizes all test setup, making individual tests clean.
"""

import os

# Must be set before the app modules read settings
os.environ["DATABASE_URL"] = "sqlite:///./test.db"
os.environ["CACHE_BACKEND"] = "memory"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["BASE_URL"] = "http://localhost:3000"

import pytest
from fastapi.testclient import TestClient

from main import app
from shortlink_app.cache.strategies import InMemoryCache
from shortlink_app.database.connection import Base, SessionLocal, engine, get_db
from shortlink_app.dependencies import get_cache
from shortlink_app.services.short_code_strategies import ShortCodeStrategy
from shortlink_app.services.url_service import URLService
from shortlink_app.storage.url_store import URLStore


class ScriptedCodeStrategy(ShortCodeStrategy):
    """Hands out a fixed sequence of codes, to force collisions"""

    def __init__(self, codes):
        self.codes = list(codes)
        self.calls = 0

    def generate(self) -> str:
        code = self.codes[self.calls]
        self.calls += 1
        return code


@pytest.fixture(scope="function")
def db_session():
    """
    Create a fresh database session for each test.
    This ensures tests are isolated and don't affect each other.
    """
    # Create tables
    Base.metadata.create_all(bind=engine)

    # Create session
    db = SessionLocal()

    try:
        yield db
    finally:
        # Cleanup
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def cache():
    """Fresh in-memory cache per test"""
    return InMemoryCache()


@pytest.fixture(scope="function")
def store(db_session):
    return URLStore(db_session)


@pytest.fixture(scope="function")
def url_service(store, cache):
    return URLService(store=store, cache=cache)


@pytest.fixture(scope="function")
def client(db_session, cache):
    """
    Create a test client with database and cache dependencies overridden.
    This is the main fixture that tests will use.
    """
    def override_get_db():
        yield db_session

    # Override the database and cache dependencies
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_cache] = lambda: cache

    # Create test client
    with TestClient(app) as test_client:
        yield test_client

    # Clean up overrides
    app.dependency_overrides.clear()


@pytest.fixture
def scripted_codes():
    """Factory for deterministic code strategies"""
    return ScriptedCodeStrategy
