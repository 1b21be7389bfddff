"""
Exception handlers mapping core exceptions to `{"error": ...}` responses.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from shortlink_app.exceptions import (
    InvalidURLError,
    ShortCodeGenerationError,
    ShortURLNotFoundError,
    StoreUnavailableError,
)

logger = logging.getLogger(__name__)

MISSING_URL = "Missing 'url' in request body"
INVALID_URL = "Invalid URL"
NOT_FOUND = "Short URL not found"
RATE_LIMITED = "Too many requests, try again later"
SHORTEN_RATE_LIMITED = "Too many URLs shortened, try again later"
STORE_UNAVAILABLE = "Service temporarily unavailable"
INTERNAL_ERROR = "Internal server error"


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def request_validation_handler(request: Request, exc: RequestValidationError):
    # The only request body is the shorten payload
    return error_response(status.HTTP_400_BAD_REQUEST, MISSING_URL)


async def invalid_url_handler(request: Request, exc: InvalidURLError):
    return error_response(status.HTTP_400_BAD_REQUEST, INVALID_URL)


async def not_found_handler(request: Request, exc: ShortURLNotFoundError):
    return error_response(status.HTTP_404_NOT_FOUND, NOT_FOUND)


# Sync so the slowapi middleware can call it directly as well
def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    message = SHORTEN_RATE_LIMITED if request.url.path == "/shorten" else RATE_LIMITED
    return error_response(status.HTTP_429_TOO_MANY_REQUESTS, message)


async def store_unavailable_handler(request: Request, exc: StoreUnavailableError):
    logger.error("Store unavailable while serving %s %s", request.method, request.url.path)
    return error_response(status.HTTP_503_SERVICE_UNAVAILABLE, STORE_UNAVAILABLE)


async def code_generation_handler(request: Request, exc: ShortCodeGenerationError):
    logger.error("Short code generation failed: %s", exc)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(InvalidURLError, invalid_url_handler)
    app.add_exception_handler(ShortURLNotFoundError, not_found_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_handler)
    app.add_exception_handler(StoreUnavailableError, store_unavailable_handler)
    app.add_exception_handler(ShortCodeGenerationError, code_generation_handler)
