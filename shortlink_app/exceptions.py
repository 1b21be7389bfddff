"""
Exceptions raised by the URL shortener core.

Only InvalidURLError, ShortURLNotFoundError and store failures cross the
service boundary; the API layer maps them to JSON error responses
(see shortlink_app/api/errors.py). Cache failures never get here, they are
absorbed inside the cache strategies.

Classes:
    ShortLinkError:
        Generic base class for shortener exceptions.

    InvalidURLError:
        Raised when a submitted URL cannot be normalized to an http(s) URL.

    ShortURLNotFoundError:
        Raised when a short code does not exist in the store.

    DuplicateCodeError:
        Raised by the store when inserting a code that already exists.
        The service retries with a fresh code; never surfaced to clients.

    ShortCodeGenerationError:
        Raised when no free short code was found within the retry budget.

    StoreUnavailableError:
        Raised when the persistent store cannot be reached.
"""


class ShortLinkError(Exception):
    """Generic base class for shortener exceptions."""

    pass


class InvalidURLError(ShortLinkError):
    """Exception raised when a URL fails validation/normalization."""

    pass


class ShortURLNotFoundError(ShortLinkError):
    """Exception raised when a short code is unknown."""

    pass


class DuplicateCodeError(ShortLinkError):
    """Exception raised when inserting a short code that is already taken."""

    def __init__(self, code: str):
        super().__init__(f"Short code '{code}' already exists")
        self.code = code


class ShortCodeGenerationError(ShortLinkError):
    """Exception raised when the collision-retry budget is exhausted."""

    pass


class StoreUnavailableError(ShortLinkError):
    """Exception raised when the persistent store is unreachable.

    e.g. the database file is locked, missing or the disk is full.
    """

    pass
