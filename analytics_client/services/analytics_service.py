"""Ready-made analytics reports for a single site.

Thin helpers over :class:`ReportingClient` for the questions people ask most
often (visitors per day, top referrers, most visited pages, active users).
Each helper is one cached query plus row shaping; nothing here talks to the
provider directly, so the façade's caching rules apply unchanged.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from analytics_client.services.reporting_client import ReportingClient

_DATE_FORMAT = "%Y-%m-%d"
_GA_DATE_FORMAT = "%Y%m%d"
_UNSET_KEYWORDS = ("(not set)", "(not provided)")


def _format_date(value: date) -> str:
    return value.strftime(_DATE_FORMAT)


def _to_int(value: str) -> int:
    return int(float(value or 0))


class AnalyticsService:
    """Convenience reports for one site id.

    Parameters
    ----------
    client:
        The caching façade every query goes through.
    site_id:
        Vendor site id, e.g. ``"ga:123456"``.
    """

    def __init__(self, client: ReportingClient, site_id: str) -> None:
        self._client = client
        self._site_id = site_id

    @classmethod
    async def for_site_url(cls, client: ReportingClient, url: str) -> AnalyticsService:
        """Build a service for the site registered under *url*."""
        site_id = await client.get_site_id_by_url(url)
        return cls(client, site_id)

    @property
    def site_id(self) -> str:
        return self._site_id

    def set_site_id(self, site_id: str) -> AnalyticsService:
        self._site_id = site_id
        return self

    async def _report(
        self,
        start_date: date,
        end_date: date,
        metrics: str,
        options: dict[str, Any],
    ) -> list[list[str]]:
        result = await self._client.perform_query(
            self._site_id,
            _format_date(start_date),
            _format_date(end_date),
            metrics,
            options,
        )
        return result.rows

    # ------------------------------------------------------------------
    # Reports
    # ------------------------------------------------------------------

    async def get_visitors_and_page_views(
        self,
        start_date: date,
        end_date: date,
        group_by: str = "date",
    ) -> list[dict[str, Any]]:
        """Visitors and page views per *group_by* dimension value.

        ``group_by="date"`` yields ``datetime.date`` keys; any other
        dimension (``"yearMonth"``, ``"country"``...) keeps the raw string.
        """
        rows = await self._report(
            start_date,
            end_date,
            "ga:users,ga:pageviews",
            {"dimensions": f"ga:{group_by}"},
        )
        visitor_data: list[dict[str, Any]] = []
        for dimension, visitors, page_views in rows:
            if group_by == "date":
                key: Any = datetime.strptime(dimension, _GA_DATE_FORMAT).date()
            else:
                key = dimension
            visitor_data.append(
                {group_by: key, "visitors": _to_int(visitors), "page_views": _to_int(page_views)}
            )
        return visitor_data

    async def get_top_keywords(
        self, start_date: date, end_date: date, max_results: int = 30
    ) -> list[dict[str, Any]]:
        """Search keywords by sessions, excluding placeholder values."""
        filters = ";".join(f"ga:keyword!={keyword}" for keyword in _UNSET_KEYWORDS)
        rows = await self._report(
            start_date,
            end_date,
            "ga:sessions",
            {
                "dimensions": "ga:keyword",
                "sort": "-ga:sessions",
                "max-results": max_results,
                "filters": filters,
            },
        )
        return [{"keyword": keyword, "sessions": _to_int(sessions)} for keyword, sessions in rows]

    async def get_top_referrers(
        self, start_date: date, end_date: date, max_results: int = 20
    ) -> list[dict[str, Any]]:
        rows = await self._report(
            start_date,
            end_date,
            "ga:pageviews",
            {"dimensions": "ga:fullReferrer", "sort": "-ga:pageviews", "max-results": max_results},
        )
        return [{"url": url, "page_views": _to_int(views)} for url, views in rows]

    async def get_top_browsers(
        self, start_date: date, end_date: date, max_results: int = 5
    ) -> list[dict[str, Any]]:
        """Browsers by sessions; everything past *max_results* becomes ``"Other"``."""
        rows = await self._report(
            start_date,
            end_date,
            "ga:sessions",
            {"dimensions": "ga:browser", "sort": "-ga:sessions"},
        )
        browsers = [{"browser": browser, "sessions": _to_int(sessions)} for browser, sessions in rows]
        if len(browsers) <= max_results:
            return browsers

        top = browsers[: max_results - 1] if max_results > 1 else []
        other = sum(entry["sessions"] for entry in browsers[len(top):])
        top.append({"browser": "Other", "sessions": other})
        return top

    async def get_most_visited_pages(
        self, start_date: date, end_date: date, max_results: int = 20
    ) -> list[dict[str, Any]]:
        rows = await self._report(
            start_date,
            end_date,
            "ga:pageviews",
            {"dimensions": "ga:pagePath", "sort": "-ga:pageviews", "max-results": max_results},
        )
        return [{"url": path, "page_views": _to_int(views)} for path, views in rows]

    async def get_active_users(self, options: dict[str, Any] | None = None) -> int:
        """Number of users on the site right now."""
        result = await self._client.perform_realtime_query(
            self._site_id, "rt:activeUsers", options or {}
        )
        total = result.totals_for_all_results.get("rt:activeUsers")
        if total is not None:
            return _to_int(total)
        if not result.rows:
            return 0
        return _to_int(result.rows[0][-1])
