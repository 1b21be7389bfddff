"""
Persistent storage for URL records.

The store is authoritative; the cache module only holds disposable copies.
"""

from .url_store import URLStore

__all__ = [
    "URLStore",
]
