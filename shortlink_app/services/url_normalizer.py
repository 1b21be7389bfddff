"""
URL normalization and validation.

Canonicalization is delegated to pydantic's URL type, which parses with the
WHATWG URL rules (lowercased scheme and host, default port dropped, empty
path becomes "/") and only accepts http/https. The canonical string is what
gets stored and compared for dedup.
"""

import re
from typing import Annotated, Optional

from pydantic import AnyUrl, TypeAdapter, UrlConstraints, ValidationError

_HTTP_PREFIX = re.compile(r"^https?://", re.IGNORECASE)

# "name:" that is not "host:port"
_EXPLICIT_SCHEME = re.compile(r"^[a-z][a-z0-9+.\-]*:(?!\d)", re.IGNORECASE)

# No length cap: HttpUrl stops at 2083 characters
_http_url_adapter = TypeAdapter(
    Annotated[AnyUrl, UrlConstraints(allowed_schemes=["http", "https"], host_required=True)]
)


def normalize_url(raw_url: str) -> Optional[str]:
    """
    Normalize a user-submitted URL.

    Input without an http(s):// prefix gets https:// prepended, unless it
    names another scheme (javascript:, data:, ftp:, ...) in which case it is
    rejected outright.

    Returns:
        The canonical absolute URL, or None if the input is not a valid
        http/https URL
    """
    candidate = raw_url.strip()
    if not _HTTP_PREFIX.match(candidate):
        if _EXPLICIT_SCHEME.match(candidate):
            return None
        candidate = f"https://{candidate}"

    try:
        parsed = _http_url_adapter.validate_python(candidate)
    except ValidationError:
        return None

    if parsed.scheme not in ("http", "https"):
        return None
    return str(parsed)
