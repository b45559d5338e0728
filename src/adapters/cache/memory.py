"""
In-memory code cache adapter - Implements CodeCache protocol.

Process-local key/value store with per-entry TTL. Nothing is persisted:
pending codes are lost on restart and users request a resend.
"""

import logging
import threading
import time
from collections.abc import Callable

logger = logging.getLogger(__name__)


class InMemoryCodeCache:
    """
    Implements CodeCache protocol with a lock-protected dict.

    Uses structural subtyping - no explicit inheritance from Protocol.
    Expired entries are treated as absent and purged when read.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        """
        Args:
            clock: Monotonic time source in seconds (injectable for tests)
        """
        self._clock = clock
        self._entries: dict[str, tuple[str, float]] = {}
        self._lock = threading.Lock()

    def set(self, key: str, value: str, ttl_seconds: int) -> bool:
        if ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be positive, got {ttl_seconds}")
        expires_at = self._clock() + ttl_seconds
        with self._lock:
            self._entries[key] = (value, expires_at)
        return True

    def get(self, key: str) -> str | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                logger.debug("Cache entry expired: %s", key)
                return None
            return value

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
