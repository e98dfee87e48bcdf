"""Utility modules for analytics-client.

- **cache_keys** -- canonical argument serialization and prefixed md5 keys
  shared by the standard and real-time query paths.
- **errors** -- exception hierarchy rooted at AnalyticsClientError.
- **logging** -- structlog setup with console output in development and
  JSON in production.
"""

from analytics_client.utils.cache_keys import determine_cache_key, serialize_arguments
from analytics_client.utils.errors import (
    AnalyticsClientError,
    ConfigurationError,
    RateLimitError,
    ReportingError,
    SiteNotFoundError,
)
from analytics_client.utils.logging import configure_logging, get_logger

__all__ = [
    "AnalyticsClientError",
    "ConfigurationError",
    "RateLimitError",
    "ReportingError",
    "SiteNotFoundError",
    "configure_logging",
    "determine_cache_key",
    "get_logger",
    "serialize_arguments",
]
