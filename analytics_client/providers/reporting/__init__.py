"""Reporting providers."""

from analytics_client.providers.reporting.google_analytics_provider import (
    GoogleAnalyticsProvider,
)

__all__ = ["GoogleAnalyticsProvider"]
