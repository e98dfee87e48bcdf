"""Abstract base class for cache service providers.

Defines the key-value contract the reporting façade memoizes responses in.
Implementations may use an in-memory dict, Redis, or any other storage
backend; the façade never knows which.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Any, Union

#: Relative lifetime in seconds, relative ``timedelta``, absolute expiry
#: instant, or ``None`` for "never expires".
CacheTTL = Union[int, float, timedelta, datetime, None]


class ICacheProvider(ABC):
    """Contract for key-value cache services.

    All operations are async to allow for network-backed stores (e.g. Redis)
    without blocking the event loop.
    """

    @abstractmethod
    async def get(self, key: str) -> Any | None:
        """Retrieve the value stored under *key*.

        Parameters
        ----------
        key:
            The cache key to look up.

        Returns
        -------
        Any or None
            The cached value if present and not expired; ``None`` otherwise.
        """

    @abstractmethod
    async def set(self, key: str, value: Any, ttl: CacheTTL = None) -> None:
        """Store *value* under *key* until the entry expires.

        Parameters
        ----------
        key:
            The cache key.
        value:
            The value to store.
        ttl:
            Either a duration (seconds as ``int``/``float``, or a
            ``timedelta``) measured from now, or an absolute ``datetime``
            after which the entry is gone.  ``None`` means the entry does
            not expire automatically.
        """

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove the entry stored under *key*.

        This is a no-op if the key does not exist.
        """

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """Return ``True`` if *key* is present in the cache and not expired."""
