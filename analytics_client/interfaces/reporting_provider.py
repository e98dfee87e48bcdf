"""Abstract base class for analytics reporting providers.

Defines the contract for the external service that actually computes
reports.  The caching façade (:class:`~analytics_client.services.reporting_client.ReportingClient`)
only forwards calls through this interface, so a different vendor, or a
fake in tests, can be swapped in without touching the caching logic.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any

from analytics_client.models.report import ReportResult, Site


class IReportingProvider(ABC):
    """Contract for analytics reporting services.

    Implementations must propagate their own failures as exceptions; the
    façade performs no retry or translation on top.
    """

    @abstractmethod
    async def run_report(
        self,
        site_id: str,
        start_date: str,
        end_date: str,
        metrics: str,
        options: Mapping[str, Any],
    ) -> ReportResult:
        """Run a historical report for *site_id* over a date range.

        Parameters
        ----------
        site_id:
            Vendor-scoped site identifier, e.g. ``"ga:123456"``.
        start_date, end_date:
            Dates in the vendor's format (``YYYY-MM-DD`` or relative forms
            such as ``"7daysAgo"``).  Not validated here.
        metrics:
            Comma-separated metric expression, e.g. ``"ga:sessions"``.
        options:
            Extra query parameters (``dimensions``, ``sort``, ``filters``,
            ``max-results``, ...).
        """

    @abstractmethod
    async def run_realtime_report(
        self,
        site_id: str,
        metrics: str,
        options: Mapping[str, Any],
    ) -> ReportResult:
        """Run a report over currently in-flight session data."""

    @abstractmethod
    async def list_sites(self) -> Sequence[Site]:
        """Return every site the authenticated account can access.

        Pagination, if the vendor needs it, is handled here.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier for logs and error messages."""
