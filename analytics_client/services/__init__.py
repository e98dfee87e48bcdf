"""Business logic: the caching report façade and the reports built on it."""

from analytics_client.services.analytics_service import AnalyticsService
from analytics_client.services.reporting_client import ReportingClient

__all__ = ["AnalyticsService", "ReportingClient"]
