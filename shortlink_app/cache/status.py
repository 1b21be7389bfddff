"""
Process-wide cache liveness flag.

Updated only by connection lifecycle handlers (connected / disconnected)
and read by every request to skip cache calls cheaply. Reads and writes are
unsynchronized; a stale read costs at most one extra failed cache call.
"""

import logging
import time
from typing import Optional

logger = logging.getLogger(__name__)


class CacheStatus:
    """Liveness of the shared cache connection"""

    def __init__(self):
        self.available = False
        self.last_attempt: Optional[float] = None

    def mark_attempt(self) -> None:
        self.last_attempt = time.monotonic()

    def mark_connected(self) -> None:
        if not self.available:
            logger.info("Cache connection ready")
        self.available = True

    def mark_disconnected(self, reason: object = None) -> None:
        if self.available:
            logger.warning("Cache connection lost: %s", reason)
        self.available = False

    def should_retry(self, interval: float) -> bool:
        """True when a reconnect attempt is due"""
        if self.last_attempt is None:
            return True
        return time.monotonic() - self.last_attempt >= interval
