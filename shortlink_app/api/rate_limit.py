"""
Rate limiting for API endpoints.

Uses slowapi, keyed by client IP:
- an application-wide limit shared by every route
- a stricter limit on URL creation

Both limits come from settings and the limiter can be switched off
(rate_limit_enabled=False), e.g. for tests.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from shortlink_app.config import settings

limiter = Limiter(
    key_func=get_remote_address,
    application_limits=[settings.rate_limit_global],
    enabled=settings.rate_limit_enabled,
)
