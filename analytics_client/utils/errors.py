"""Custom exception hierarchy for analytics-client.

All application exceptions inherit from :class:`AnalyticsClientError`, which
carries an optional ``provider_name`` so error handlers can identify which
external service (e.g. "google_analytics") caused the failure.

    AnalyticsClientError  (base -- catch-all for any analytics-client error)
    +-- SiteNotFoundError    (url is not an accessible site for the account)
    +-- ReportingError       (reporting API call failed or was malformed)
    +-- RateLimitError       (provider rate-limit exceeded)
    +-- ConfigurationError   (startup / missing config)

The caching façade only ever raises :class:`SiteNotFoundError` itself.
Everything else comes from provider adapters or cache backends and is
propagated to the caller untouched.
"""


class AnalyticsClientError(Exception):
    """Base exception for all analytics-client errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``provider_name``.  ``__str__`` prefixes the provider name in brackets,
    e.g. ``[google_analytics] Rate limit exceeded``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Façade errors
# ---------------------------------------------------------------------------

class SiteNotFoundError(AnalyticsClientError):
    """Raised when a site URL is absent from the account's site directory.

    This is a user-facing, non-retryable condition: the url is simply not
    a site the authenticated account can access.
    """

    def __init__(self, url: str) -> None:
        self._url = url
        super().__init__(message=f"Site {url} is not present in your Analytics account.")

    @property
    def url(self) -> str:
        return self._url


# ---------------------------------------------------------------------------
# External service / provider errors
# ---------------------------------------------------------------------------

class ReportingError(AnalyticsClientError):
    """Raised when a reporting API call fails or returns an unusable response."""

    def __init__(
        self,
        message: str = "Reporting API call failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class RateLimitError(AnalyticsClientError):
    """Raised when the reporting API answers with a rate-limit status."""

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Configuration errors
# ---------------------------------------------------------------------------

class ConfigurationError(AnalyticsClientError):
    """Raised when configuration is invalid or missing at startup."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
