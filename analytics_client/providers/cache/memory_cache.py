"""In-memory cache provider using cachetools.TLRUCache.

Simple, fast cache suitable for development and single-process deployments.
Unlike a plain ``TTLCache`` every entry carries its own expiry, which the
reporting façade needs: standard reports are stored for N minutes while
real-time reports are stored until an absolute instant.
"""

from __future__ import annotations

import math
import time
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, NamedTuple

import structlog
from cachetools import TLRUCache

from analytics_client.interfaces.cache_provider import CacheTTL, ICacheProvider

logger = structlog.get_logger(logger_name=__name__)


class _Entry(NamedTuple):
    value: Any
    expires_at: float


def _time_to_use(_key: str, entry: _Entry, _now: float) -> float:
    return entry.expires_at


class MemoryCacheProvider(ICacheProvider):
    """In-memory cache with per-entry expiry backed by ``cachetools.TLRUCache``.

    Parameters
    ----------
    max_size:
        Maximum number of entries before the least-recently-used entry
        is evicted.
    timer:
        Wall-clock source in epoch seconds.  Overridable for tests.
    """

    def __init__(
        self,
        max_size: int = 1000,
        timer: Callable[[], float] = time.time,
    ) -> None:
        self._timer = timer
        self._cache: TLRUCache[str, _Entry] = TLRUCache(
            maxsize=max_size, ttu=_time_to_use, timer=timer
        )

    def _expires_at(self, ttl: CacheTTL) -> float:
        """Convert any accepted *ttl* form into an epoch timestamp."""
        if ttl is None:
            return math.inf
        if isinstance(ttl, datetime):
            if ttl.tzinfo is None:
                ttl = ttl.replace(tzinfo=timezone.utc)
            return ttl.timestamp()
        if isinstance(ttl, timedelta):
            return self._timer() + ttl.total_seconds()
        return self._timer() + float(ttl)

    # ------------------------------------------------------------------
    # ICacheProvider implementation
    # ------------------------------------------------------------------

    async def get(self, key: str) -> Any | None:
        """Retrieve the cached value for *key*, or ``None`` if missing/expired."""
        entry = self._cache.get(key)
        if entry is None:
            logger.debug("cache_miss", key=key)
            return None
        logger.debug("cache_hit", key=key)
        return entry.value

    async def set(self, key: str, value: Any, ttl: CacheTTL = None) -> None:
        """Store *value* under *key* until *ttl* runs out.

        Entries whose expiry is already in the past are silently dropped.
        """
        expires_at = self._expires_at(ttl)
        self._cache[key] = _Entry(value=value, expires_at=expires_at)
        logger.debug("cache_set", key=key, expires_at=expires_at)

    async def delete(self, key: str) -> None:
        """Remove *key* from the cache (no-op if absent)."""
        self._cache.pop(key, None)
        logger.debug("cache_delete", key=key)

    async def exists(self, key: str) -> bool:
        """Return ``True`` if *key* is present and not expired."""
        return key in self._cache
