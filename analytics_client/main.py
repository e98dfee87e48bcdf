"""Application wiring for analytics-client.

Assembles the reporting provider, the response cache, the caching façade
and the convenience service from ``config/config.yaml`` plus environment
settings.  ``build_components`` is what the CLI and embedding applications
call; the ``_build_*`` helpers are split out so each choice can be tested
alone.
"""

from __future__ import annotations

from typing import Any

import httpx

from analytics_client.config.loader import load_config
from analytics_client.config.settings import Settings
from analytics_client.interfaces.cache_provider import ICacheProvider
from analytics_client.interfaces.reporting_provider import IReportingProvider
from analytics_client.providers.cache.memory_cache import MemoryCacheProvider
from analytics_client.providers.reporting.google_analytics_provider import (
    GoogleAnalyticsProvider,
)
from analytics_client.services.analytics_service import AnalyticsService
from analytics_client.services.reporting_client import ReportingClient
from analytics_client.utils.errors import ConfigurationError
from analytics_client.utils.logging import configure_logging, get_logger

_logger = get_logger(__name__)


def _build_cache(app_config: dict[str, Any]) -> ICacheProvider | None:
    """Return a memory cache when any cache lifetime is positive, else ``None``."""
    cache_config = app_config["cache"]
    if cache_config["lifetime_in_minutes"] <= 0 and cache_config["realtime_lifetime_in_seconds"] <= 0:
        return None
    return MemoryCacheProvider(max_size=int(cache_config["max_size"]))


def _require_access_token(app_config: dict[str, Any]) -> str:
    access_token = app_config["reporting"].get("access_token")
    if not access_token:
        raise ConfigurationError(
            message="GOOGLE_ACCESS_TOKEN is not set",
            provider_name="google_analytics",
        )
    return access_token


def _build_reporting_provider(
    app_config: dict[str, Any], http_client: httpx.AsyncClient
) -> IReportingProvider:
    reporting = app_config["reporting"]
    return GoogleAnalyticsProvider(
        http_client=http_client,
        access_token=_require_access_token(app_config),
        base_url=reporting["base_url"],
        page_size=int(reporting["page_size"]),
        timeout=float(reporting["timeout"]),
    )


def _build_reporting_client(
    app_config: dict[str, Any],
    provider: IReportingProvider,
    cache: ICacheProvider | None,
) -> ReportingClient:
    cache_config = app_config["cache"]
    return (
        ReportingClient(
            provider=provider,
            cache=cache,
            cache_lifetime_in_minutes=int(cache_config["lifetime_in_minutes"]),
            realtime_cache_lifetime_in_seconds=int(cache_config["realtime_lifetime_in_seconds"]),
        )
        .set_cache_prefix(cache_config["prefix"])
        .set_realtime_cache_prefix(cache_config["realtime_prefix"])
    )


def build_components(
    custom_settings: Settings | None = None,
    config_path: str = "config/config.yaml",
    http_client: httpx.AsyncClient | None = None,
) -> dict[str, Any]:
    """Build every component from configuration.

    Returns a dict with ``settings``, ``config``, ``http_client``,
    ``provider``, ``cache``, ``client`` and ``service`` (``None`` when no
    default site id is configured).  Close it with :func:`close_components`.

    Raises:
        ConfigurationError: If no access token is configured.
    """
    app_settings = custom_settings or Settings()
    app_config = load_config(config_path, settings=app_settings)

    configure_logging(
        log_level=app_config["logging"]["level"],
        json_output=(app_config["app"]["env"] == "production"),
    )

    _require_access_token(app_config)
    http_client = http_client or httpx.AsyncClient()
    provider = _build_reporting_provider(app_config, http_client)
    cache = _build_cache(app_config)
    client = _build_reporting_client(app_config, provider, cache)

    site_id = app_config["reporting"].get("site_id")
    service = AnalyticsService(client, site_id) if site_id else None

    _logger.info(
        "analytics_client_ready",
        cache_enabled=cache is not None,
        cache_lifetime_in_minutes=client.cache_lifetime_in_minutes,
        realtime_cache_lifetime_in_seconds=client.realtime_cache_lifetime_in_seconds,
        default_site=site_id or None,
    )

    return {
        "settings": app_settings,
        "config": app_config,
        "http_client": http_client,
        "provider": provider,
        "cache": cache,
        "client": client,
        "service": service,
    }


async def close_components(components: dict[str, Any]) -> None:
    """Release the HTTP connection pool held by *components*."""
    http_client: httpx.AsyncClient | None = components.get("http_client")
    if http_client is not None:
        await http_client.aclose()
