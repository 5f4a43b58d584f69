"""
Upstream Response Cache - time-bounded LRU cache for decoded upstream payloads.

Keeps a successful GET payload fresh for the resource's cache window so
repeated page loads do not hit the content backend; after the window the
next request revalidates from upstream.
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

from cachetools import TLRUCache

logger = logging.getLogger("content_proxy.upstream_cache")


@dataclass(frozen=True)
class CachedPayload:
    payload: Any
    ttl: float


def _time_to_use(key: str, value: CachedPayload, now: float) -> float:
    return now + value.ttl


class UpstreamResponseCache:
    """
    Per-entry TTL cache for upstream payloads using cachetools.

    Note: This cache is designed for single-threaded async environments (FastAPI/uvicorn).
    All operations are atomic in this context, so no locking is required.
    """

    def __init__(self, max_size: int = 256, timer: Callable[[], float] = time.monotonic):
        """
        Initialize the cache.

        Args:
            max_size: Maximum number of entries (default: 256)
            timer: Clock used for expiry (default: time.monotonic)
        """
        self.max_size = max_size
        self._cache = TLRUCache(maxsize=max_size, ttu=_time_to_use, timer=timer)

        logger.debug(f"UpstreamResponseCache initialized: max_size={max_size}")

    def get(self, url: str) -> Optional[Any]:
        """
        Get a cached payload.

        Returns:
            The decoded payload, or None if not found or expired
        """
        entry = self._cache.get(url)
        return entry.payload if entry is not None else None

    def set(self, url: str, payload: Any, ttl_seconds: float) -> None:
        """Cache a payload for `ttl_seconds`. Non-positive TTLs are ignored."""
        if ttl_seconds <= 0:
            return
        self._cache[url] = CachedPayload(payload=payload, ttl=ttl_seconds)

    def clear(self) -> None:
        """Clear all cache entries."""
        self._cache.clear()
        logger.debug("Cache cleared")

    def __len__(self) -> int:
        return len(self._cache)
