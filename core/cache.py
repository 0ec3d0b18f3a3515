# core/cache.py

"""
In-memory TTL cache for tenant override rows.

Entries are per process; a multi-worker deployment sees at most
ROLE_OVERRIDE_CACHE_TTL_SECONDS of staleness after an override changes
on another worker.
"""

import time
from threading import Lock
from typing import Any, Dict, Optional, Tuple

from core.logging_config import logger


class SimpleCache:
    """
    Key -> (expires_at, value) store. Thread-safe.
    """

    def __init__(self):
        self._entries: Dict[str, Tuple[float, Any]] = {}
        self._lock = Lock()

    def get(self, key: str) -> Optional[Any]:
        """Return the cached value, or None if missing or expired."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None

            expires_at, value = entry
            if time.monotonic() >= expires_at:
                del self._entries[key]
                return None

            return value

    def set(self, key: str, value: Any, ttl_seconds: int = 60):
        """Store ``value``; a non-positive TTL stores nothing."""
        if ttl_seconds <= 0:
            return
        with self._lock:
            self._entries[key] = (time.monotonic() + ttl_seconds, value)

    def delete(self, key: str):
        with self._lock:
            self._entries.pop(key, None)

    def clear(self):
        with self._lock:
            self._entries.clear()

    def size(self) -> int:
        with self._lock:
            return len(self._entries)


# Global cache instance
_cache = SimpleCache()


def get_cache() -> SimpleCache:
    return _cache


def cache_get(key: str) -> Optional[Any]:
    value = _cache.get(key)
    if value is not None:
        logger.debug(f"Cache hit: {key}")
    return value


def cache_set(key: str, value: Any, ttl_seconds: int = 60):
    _cache.set(key, value, ttl_seconds)


def cache_delete(key: str):
    _cache.delete(key)


def cache_clear():
    """Clear all cache entries."""
    _cache.clear()
