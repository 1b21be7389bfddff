"""
Short code generation strategies for URL shortener.
Uses Strategy Pattern to allow different generation algorithms.
"""

import secrets
import string
from abc import ABC, abstractmethod

SHORT_CODE_LENGTH = 6

# 64 URL-safe symbols: 64^6 ~= 6.9e10 possible codes
URL_SAFE_ALPHABET = string.ascii_letters + string.digits + "-_"

# Codes that would shadow a fixed route
RESERVED_CODES = frozenset({"docs", "redoc", "health", "stats", "shorten"})


class ShortCodeStrategy(ABC):
    """Abstract base class for short code generation strategies"""

    @abstractmethod
    def generate(self) -> str:
        """
        Generate a candidate short code.

        Uniqueness is not guaranteed here; the URL service checks the store
        and retries on collision.
        """
        pass


class RandomShortCodeStrategy(ShortCodeStrategy):
    """
    Random generation from a cryptographically strong source.

    Pros: Unpredictable (resists enumeration), no coordination needed
    Cons: Collisions are possible, handled by the caller's retry loop
    """

    def __init__(self, length: int = SHORT_CODE_LENGTH, alphabet: str = URL_SAFE_ALPHABET):
        self.length = length
        self.alphabet = alphabet

    def generate(self) -> str:
        while True:
            code = "".join(secrets.choice(self.alphabet) for _ in range(self.length))
            if code not in RESERVED_CODES:
                return code
