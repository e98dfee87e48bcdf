"""Cache providers.

MemoryCacheProvider is a dict-based cache: fast but not shared across
processes.  For multi-worker deployments, swap in a Redis adapter
implementing ICacheProvider without changing the reporting façade.
"""

from analytics_client.providers.cache.memory_cache import MemoryCacheProvider

__all__ = ["MemoryCacheProvider"]
