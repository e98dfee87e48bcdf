"""Public interface definitions for external collaborators.

The reporting API and the cache backend are reached exclusively through the
abstract base classes defined here.  Concrete adapters live in
``analytics_client/providers/`` and are wired up in ``analytics_client/main.py``.

    Interface            ->  Concrete implementations
    ----------------------------------------------------------
    IReportingProvider   ->  GoogleAnalyticsProvider
    ICacheProvider       ->  MemoryCacheProvider
"""

from analytics_client.interfaces.cache_provider import CacheTTL, ICacheProvider
from analytics_client.interfaces.reporting_provider import IReportingProvider

__all__ = [
    "CacheTTL",
    "ICacheProvider",
    "IReportingProvider",
]
