"""Caching façade over an analytics reporting provider.

Forwards standard and real-time report queries to an
:class:`~analytics_client.interfaces.reporting_provider.IReportingProvider`,
memoizing the answers in an optional
:class:`~analytics_client.interfaces.cache_provider.ICacheProvider`, and
resolves public site URLs to vendor site ids.

Caching contract
----------------
Every call computes ``prefix + md5(ordered arguments)`` as its cache key.
Standard and real-time queries use separate prefixes so their keys never
collide.  The cache is only touched when it is configured AND the lifetime
for that query class is positive:

    standard   -> cache_lifetime_in_minutes > 0,        stored for N minutes
    real-time  -> realtime_cache_lifetime_in_seconds > 0, stored until now + N s

Provider and cache failures propagate unchanged.  Concurrent identical
calls are not coalesced; each may reach the provider.

The site directory (url -> ``"ga:<id>"``) is fetched once per instance and
never refreshed, even if the account's sites change afterwards.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Mapping
from datetime import datetime, timedelta, timezone
from typing import Any

from analytics_client.interfaces.cache_provider import CacheTTL, ICacheProvider
from analytics_client.interfaces.reporting_provider import IReportingProvider
from analytics_client.models.report import ReportResult
from analytics_client.utils.cache_keys import determine_cache_key
from analytics_client.utils.errors import SiteNotFoundError
from analytics_client.utils.logging import get_logger

DEFAULT_CACHE_PREFIX = "analytics-client."
DEFAULT_REALTIME_CACHE_PREFIX = "analytics-client.RealTime."
SITE_ID_PREFIX = "ga:"


class ReportingClient:
    """Query façade: cache-aware access to a reporting provider.

    Parameters
    ----------
    provider:
        The external reporting service.
    cache:
        Optional cache backend.  Without one every call is a live
        pass-through.
    cache_lifetime_in_minutes:
        Lifetime of cached standard reports; ``0`` disables caching them.
    realtime_cache_lifetime_in_seconds:
        Lifetime of cached real-time reports; ``0`` disables caching them.
    """

    def __init__(
        self,
        provider: IReportingProvider,
        cache: ICacheProvider | None = None,
        cache_lifetime_in_minutes: int = 0,
        realtime_cache_lifetime_in_seconds: int = 0,
    ) -> None:
        self._provider = provider
        self._cache = cache
        self._cache_lifetime_in_minutes = cache_lifetime_in_minutes
        self._realtime_cache_lifetime_in_seconds = realtime_cache_lifetime_in_seconds
        self._cache_prefix = DEFAULT_CACHE_PREFIX
        self._realtime_cache_prefix = DEFAULT_REALTIME_CACHE_PREFIX

        self._site_ids: dict[str, str] | None = None
        self._site_ids_lock = asyncio.Lock()
        self._logger = get_logger(__name__)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def perform_query(
        self,
        site_id: str,
        start_date: str,
        end_date: str,
        metrics: str,
        options: Mapping[str, Any] | None = None,
    ) -> ReportResult:
        """Run a standard report, served from cache when possible."""
        options = dict(options or {})
        return await self._remember(
            prefix=self._cache_prefix,
            arguments=[site_id, start_date, end_date, metrics, options],
            enabled=self.uses_cache(),
            expiry=lambda: timedelta(minutes=self._cache_lifetime_in_minutes),
            fetch=lambda: self._provider.run_report(
                site_id, start_date, end_date, metrics, options
            ),
        )

    async def perform_realtime_query(
        self,
        site_id: str,
        metrics: str,
        options: Mapping[str, Any] | None = None,
    ) -> ReportResult:
        """Run a real-time report, served from cache when possible.

        Cached entries expire at an absolute instant rather than after a
        relative lifetime.
        """
        options = dict(options or {})
        return await self._remember(
            prefix=self._realtime_cache_prefix,
            arguments=[site_id, metrics, options],
            enabled=self.uses_realtime_cache(),
            expiry=lambda: datetime.now(timezone.utc)
            + timedelta(seconds=self._realtime_cache_lifetime_in_seconds),
            fetch=lambda: self._provider.run_realtime_report(site_id, metrics, options),
        )

    async def _remember(
        self,
        *,
        prefix: str,
        arguments: list[Any],
        enabled: bool,
        expiry: Callable[[], CacheTTL],
        fetch: Callable[[], Awaitable[ReportResult]],
    ) -> ReportResult:
        """Shared read-through path for both query classes."""
        cache_key = determine_cache_key(prefix, arguments)

        if enabled and await self._cache.exists(cache_key):
            cached = await self._cache.get(cache_key)
            # Entry may expire between exists() and get(); treat that as a miss.
            if cached is not None:
                self._logger.debug("report_cache_hit", key=cache_key)
                return cached

        self._logger.debug("report_cache_miss", key=cache_key, cache_enabled=enabled)
        result = await fetch()

        if enabled:
            await self._cache.set(cache_key, result, ttl=expiry())

        return result

    # ------------------------------------------------------------------
    # Site directory
    # ------------------------------------------------------------------

    async def get_site_id_by_url(self, url: str) -> str:
        """Return the site id registered for *url*.

        Raises
        ------
        SiteNotFoundError
            If *url* is not one of the account's sites.
        """
        site_ids = await self.get_all_site_ids()
        try:
            return site_ids[url]
        except KeyError:
            raise SiteNotFoundError(url) from None

    async def get_all_site_ids(self) -> dict[str, str]:
        """Return the url -> site id mapping, listing sites on first use only."""
        if self._site_ids is None:
            async with self._site_ids_lock:
                if self._site_ids is None:
                    sites = await self._provider.list_sites()
                    self._site_ids = {
                        site.url: f"{SITE_ID_PREFIX}{site.id}" for site in sites
                    }
                    self._logger.info(
                        "site_directory_loaded",
                        provider=self._provider.get_provider_name(),
                        site_count=len(self._site_ids),
                    )
        return dict(self._site_ids)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def uses_cache(self) -> bool:
        """Return ``True`` if standard reports are read from and written to cache."""
        return self._cache is not None and self._cache_lifetime_in_minutes > 0

    def uses_realtime_cache(self) -> bool:
        """Return ``True`` if real-time reports are read from and written to cache."""
        return self._cache is not None and self._realtime_cache_lifetime_in_seconds > 0

    @property
    def cache_prefix(self) -> str:
        return self._cache_prefix

    @property
    def realtime_cache_prefix(self) -> str:
        return self._realtime_cache_prefix

    @property
    def cache_lifetime_in_minutes(self) -> int:
        return self._cache_lifetime_in_minutes

    @property
    def realtime_cache_lifetime_in_seconds(self) -> int:
        return self._realtime_cache_lifetime_in_seconds

    def set_cache_prefix(self, cache_prefix: str | None = None) -> ReportingClient:
        """Set the standard-report key prefix; empty values are ignored."""
        if cache_prefix:
            self._cache_prefix = cache_prefix
        return self

    def set_realtime_cache_prefix(self, cache_prefix: str | None = None) -> ReportingClient:
        """Set the real-time key prefix; empty values are ignored."""
        if cache_prefix:
            self._realtime_cache_prefix = cache_prefix
        return self

    def set_cache_lifetime_in_minutes(self, minutes: int) -> ReportingClient:
        self._cache_lifetime_in_minutes = minutes
        return self

    def set_realtime_cache_lifetime_in_seconds(self, seconds: int) -> ReportingClient:
        self._realtime_cache_lifetime_in_seconds = seconds
        return self
