"""
Database models for URL shortener.

A single `urls` table holds the authoritative code → URL mapping and the
visit counter. Cached copies live in the cache layer, never here.
"""

from .url import URL

__all__ = ["URL"]
