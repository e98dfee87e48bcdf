"""Caching client for analytics reporting APIs."""

from analytics_client.services.analytics_service import AnalyticsService
from analytics_client.services.reporting_client import ReportingClient
from analytics_client.utils.errors import AnalyticsClientError, SiteNotFoundError

__version__ = "0.1.0"

__all__ = [
    "AnalyticsClientError",
    "AnalyticsService",
    "ReportingClient",
    "SiteNotFoundError",
    "__version__",
]
