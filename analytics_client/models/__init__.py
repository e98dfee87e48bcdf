"""Data models for analytics-client."""

from analytics_client.models.report import ColumnHeader, ReportResult, Site

__all__ = ["ColumnHeader", "ReportResult", "Site"]
