import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Depends
from slowapi.middleware import SlowAPIMiddleware

from shortlink_app.config import settings
from shortlink_app.logging_config import initialize_logging
from shortlink_app.database.connection import engine, Base
from shortlink_app.api import urls, stats, redirect
from shortlink_app.api.errors import register_exception_handlers
from shortlink_app.api.rate_limit import limiter
from shortlink_app.cache.strategies import CacheStrategy
from shortlink_app.dependencies import get_cache

# Import models to ensure they're registered with Base
from shortlink_app.models import URL  # noqa: F401

initialize_logging(settings.log_level)
logger = logging.getLogger(__name__)

ENDPOINTS = [
    ("POST", "/shorten", "shorten a URL"),
    ("GET", "/<code>", "redirect to original"),
    ("GET", "/stats", "list all URLs"),
    ("GET", "/stats/<code>", "stats for one URL"),
    ("DELETE", "/stats/<code>", "delete a short URL"),
]


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    Base.metadata.create_all(bind=engine)

    cache = get_cache()
    await cache.connect()

    logger.info("%s running at %s", settings.app_name, settings.base_url)
    for method, path, description in ENDPOINTS:
        logger.info("  %-6s %s%s  %s", method, settings.base_url, path, description)

    yield

    await cache.close()


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="A URL shortener service built with FastAPI",
    debug=settings.debug,
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)
register_exception_handlers(app)


@app.get("/")
def read_root():
    """Root endpoint with API information"""
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": settings.app_version,
        "endpoints": [f"{method} {path}" for method, path, _ in ENDPOINTS],
    }


@app.get("/health")
def health_check(cache: CacheStrategy = Depends(get_cache)):
    """Health check endpoint"""
    return {
        "status": "healthy",
        "environment": settings.environment,
        "cache": "up" if cache.is_available() else "down",
    }


######## Include routers
app.include_router(urls.router)
app.include_router(stats.router)
# Catch-all /{code} goes last
app.include_router(redirect.router)


if __name__ == "__main__":
    uvicorn.run("main:app", host=settings.host, port=settings.port, log_level=settings.log_level.lower())
