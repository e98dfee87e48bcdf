"""Shared pytest fixtures for the analytics-client test suite."""

from __future__ import annotations

import time
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from analytics_client.interfaces.cache_provider import ICacheProvider
from analytics_client.interfaces.reporting_provider import IReportingProvider
from analytics_client.models.report import ReportResult, Site
from analytics_client.providers.cache.memory_cache import MemoryCacheProvider


class FakeClock:
    """Settable wall clock for cache expiry tests."""

    def __init__(self, start: float | None = None) -> None:
        self.now = time.time() if start is None else start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# ---------------------------------------------------------------------------
# Sample payloads
# ---------------------------------------------------------------------------


@pytest.fixture
def sessions_payload() -> dict[str, Any]:
    """A ``data/ga`` body for sessions per day."""
    return {
        "kind": "analytics#gaData",
        "columnHeaders": [
            {"name": "ga:date", "columnType": "DIMENSION", "dataType": "STRING"},
            {"name": "ga:sessions", "columnType": "METRIC", "dataType": "INTEGER"},
        ],
        "rows": [["20240101", "12"], ["20240102", "30"]],
        "totalsForAllResults": {"ga:sessions": "42"},
        "totalResults": 2,
        "containsSampledData": False,
    }


@pytest.fixture
def sample_report(sessions_payload: dict[str, Any]) -> ReportResult:
    return ReportResult.from_api(sessions_payload)


@pytest.fixture
def realtime_report() -> ReportResult:
    return ReportResult.from_api(
        {
            "kind": "analytics#realtimeData",
            "columnHeaders": [
                {"name": "rt:activeUsers", "columnType": "METRIC", "dataType": "INTEGER"}
            ],
            "rows": [["7"]],
            "totalsForAllResults": {"rt:activeUsers": "7"},
            "totalResults": 1,
        }
    )


@pytest.fixture
def sample_sites() -> list[Site]:
    return [
        Site(id="123", url="https://known.example", name="Known"),
        Site(id="456", url="https://other.example", name="Other"),
    ]


# ---------------------------------------------------------------------------
# Collaborators
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_reporting_provider(
    sample_report: ReportResult,
    realtime_report: ReportResult,
    sample_sites: list[Site],
) -> IReportingProvider:
    """Mock IReportingProvider answering every call with sample data."""
    mock = MagicMock(spec=IReportingProvider)
    mock.get_provider_name.return_value = "mock-analytics"
    mock.run_report = AsyncMock(return_value=sample_report)
    mock.run_realtime_report = AsyncMock(return_value=realtime_report)
    mock.list_sites = AsyncMock(return_value=sample_sites)
    return mock


@pytest.fixture
def mock_cache_provider() -> ICacheProvider:
    """Return a MagicMock(spec=ICacheProvider) that always misses."""
    mock = MagicMock(spec=ICacheProvider)
    mock.get = AsyncMock(return_value=None)
    mock.set = AsyncMock(return_value=None)
    mock.delete = AsyncMock(return_value=None)
    mock.exists = AsyncMock(return_value=False)
    return mock


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def memory_cache(clock: FakeClock) -> MemoryCacheProvider:
    return MemoryCacheProvider(max_size=100, timer=clock)
