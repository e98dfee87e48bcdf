"""Application settings loaded from environment variables via pydantic-settings.

Values are read from (highest priority first) environment variables and a
``.env`` file in the working directory.  Field ``google_access_token`` maps
to env var ``GOOGLE_ACCESS_TOKEN`` and so on.

A lifetime of ``0`` disables caching for that query class.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

from analytics_client.services.reporting_client import (
    DEFAULT_CACHE_PREFIX,
    DEFAULT_REALTIME_CACHE_PREFIX,
)


class Settings(BaseSettings):
    """analytics-client settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # === Reporting API ===
    # Empty string = "not configured"; the factories refuse to build a client.
    google_access_token: str = ""
    analytics_site_id: str = ""  # Default site for AnalyticsService, e.g. "ga:123456"

    # === Response cache ===
    cache_lifetime_in_minutes: int = 0
    realtime_cache_lifetime_in_seconds: int = 0
    cache_prefix: str = DEFAULT_CACHE_PREFIX
    realtime_cache_prefix: str = DEFAULT_REALTIME_CACHE_PREFIX

    # === App Config ===
    app_env: str = "development"
    log_level: str = "INFO"
