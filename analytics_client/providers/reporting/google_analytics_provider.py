"""Google Analytics reporting provider over the v3 REST API.

Implements :class:`IReportingProvider` with plain ``httpx`` calls against the
Core Reporting (``data/ga``), Real Time Reporting (``data/realtime``) and
Management (``management/.../profiles``) endpoints.  Authentication is a
pre-issued OAuth access token sent as a bearer header; obtaining or
refreshing that token is the caller's job.

Failures are surfaced as :class:`ReportingError` (or :class:`RateLimitError`
for quota responses) tagged with ``provider_name="google_analytics"``.
There is no retry here.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx

from analytics_client.interfaces.reporting_provider import IReportingProvider
from analytics_client.models.report import ReportResult, Site
from analytics_client.utils.errors import RateLimitError, ReportingError
from analytics_client.utils.logging import get_logger

DEFAULT_BASE_URL = "https://www.googleapis.com/analytics/v3"
_PROVIDER_NAME = "google_analytics"
_DEFAULT_TIMEOUT = 30.0
_DEFAULT_PAGE_SIZE = 1000
_PROFILES_PATH = "management/accounts/~all/webproperties/~all/profiles"

# 403 reasons the API uses for quota exhaustion rather than permissions.
_RATE_LIMIT_REASONS = frozenset(
    {"rateLimitExceeded", "userRateLimitExceeded", "quotaExceeded", "dailyLimitExceeded"}
)


class GoogleAnalyticsProvider(IReportingProvider):
    """Reporting provider backed by the Google Analytics v3 REST API.

    Parameters
    ----------
    http_client:
        Injected ``httpx.AsyncClient`` for testability and connection pooling.
    access_token:
        OAuth 2.0 access token with the ``analytics.readonly`` scope.
    base_url:
        API root, overridable for proxies and tests.
    page_size:
        ``max-results`` used when paging through the profile listing.
    timeout:
        Per-request timeout in seconds.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        access_token: str,
        base_url: str = DEFAULT_BASE_URL,
        page_size: int = _DEFAULT_PAGE_SIZE,
        timeout: float = _DEFAULT_TIMEOUT,
    ) -> None:
        self._http = http_client
        self._access_token = access_token
        self._base_url = base_url.rstrip("/")
        self._page_size = page_size
        self._timeout = timeout
        self._logger = get_logger(__name__)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._access_token}",
            "Accept": "application/json",
        }

    @staticmethod
    def _error_details(response: httpx.Response) -> tuple[str, set[str]]:
        """Pull the message and reason codes out of an API error body."""
        try:
            error = response.json().get("error") or {}
        except ValueError:
            return response.text[:200], set()
        if not isinstance(error, dict):
            return str(error), set()
        reasons = {
            item.get("reason", "")
            for item in error.get("errors") or []
            if isinstance(item, dict)
        }
        return str(error.get("message", "")), reasons

    async def _get(self, path: str, params: Mapping[str, Any]) -> dict[str, Any]:
        """GET ``{base_url}/{path}`` and return the decoded JSON body."""
        url = f"{self._base_url}/{path}"
        try:
            response = await self._http.get(
                url,
                params=dict(params),
                headers=self._headers(),
                timeout=self._timeout,
            )
        except httpx.HTTPError as exc:
            self._logger.error("google_analytics_request_failed", path=path, error=str(exc))
            raise ReportingError(
                message=f"Request to {path} failed: {exc}",
                provider_name=_PROVIDER_NAME,
            ) from exc

        if response.status_code >= 400:
            message, reasons = self._error_details(response)
            self._logger.warning(
                "google_analytics_error_response",
                path=path,
                status=response.status_code,
                reasons=sorted(reasons),
            )
            if response.status_code == 429 or reasons & _RATE_LIMIT_REASONS:
                raise RateLimitError(
                    message=f"Rate limit exceeded on {path}: {message}",
                    provider_name=_PROVIDER_NAME,
                )
            raise ReportingError(
                message=f"{path} returned HTTP {response.status_code}: {message}",
                provider_name=_PROVIDER_NAME,
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise ReportingError(
                message=f"{path} returned a non-JSON body",
                provider_name=_PROVIDER_NAME,
            ) from exc
        if not isinstance(payload, dict):
            raise ReportingError(
                message=f"{path} returned an unexpected payload",
                provider_name=_PROVIDER_NAME,
            )
        return payload

    # ------------------------------------------------------------------
    # IReportingProvider implementation
    # ------------------------------------------------------------------

    async def run_report(
        self,
        site_id: str,
        start_date: str,
        end_date: str,
        metrics: str,
        options: Mapping[str, Any],
    ) -> ReportResult:
        """Run a Core Reporting query; *options* become extra query params."""
        params: dict[str, Any] = {
            "ids": site_id,
            "start-date": start_date,
            "end-date": end_date,
            "metrics": metrics,
            **options,
        }
        payload = await self._get("data/ga", params)
        result = ReportResult.from_api(payload)
        self._logger.info(
            "google_analytics_report_complete",
            site_id=site_id,
            metrics=metrics,
            row_count=len(result.rows),
        )
        return result

    async def run_realtime_report(
        self,
        site_id: str,
        metrics: str,
        options: Mapping[str, Any],
    ) -> ReportResult:
        """Run a Real Time Reporting query."""
        params: dict[str, Any] = {"ids": site_id, "metrics": metrics, **options}
        payload = await self._get("data/realtime", params)
        return ReportResult.from_api(payload)

    async def list_sites(self) -> list[Site]:
        """Page through every profile visible to the token's account."""
        sites: list[Site] = []
        start_index = 1
        while True:
            payload = await self._get(
                _PROFILES_PATH,
                {"start-index": start_index, "max-results": self._page_size},
            )
            items = payload.get("items") or []
            for item in items:
                sites.append(
                    Site(
                        id=str(item.get("id", "")),
                        url=item.get("websiteUrl") or "",
                        name=item.get("name") or "",
                    )
                )
            total = int(payload.get("totalResults") or 0)
            start_index += len(items)
            if not items or start_index > total:
                break

        self._logger.info("google_analytics_sites_listed", site_count=len(sites))
        return sites

    def get_provider_name(self) -> str:
        return _PROVIDER_NAME
