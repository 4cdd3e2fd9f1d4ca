"""
Services - Cache Service

TTL-based cache for fetched search artifacts ("force-cache" semantics).
"""

from typing import Any, Optional
from cachetools import TTLCache
import threading

from wiki_search.config import get_settings


class CacheService:
    """TTL cache keyed by artifact URL."""

    def __init__(self, settings=None, maxsize: int = 32):
        self.settings = settings or get_settings()
        self._lock = threading.Lock()
        self._cache = TTLCache(maxsize=maxsize, ttl=self.settings.cache.ttl_seconds)

    def get(self, key: str) -> Optional[Any]:
        """
        Get value from cache.

        Args:
            key: Artifact URL

        Returns:
            Cached value or None
        """
        if not self.settings.cache.enabled:
            return None

        with self._lock:
            return self._cache.get(key)

    def set(self, key: str, value: Any) -> None:
        """Store a fetched artifact."""
        if not self.settings.cache.enabled:
            return

        with self._lock:
            self._cache[key] = value
