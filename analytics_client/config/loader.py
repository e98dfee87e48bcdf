"""YAML configuration loader with environment variable overrides.

Configuration is loaded in layers (later layers override earlier):

  1. config/config.yaml  -- static defaults checked into the repo
                            (API base URL, timeouts, page and cache sizes)
  2. .env file           -- local overrides, not committed
  3. Environment vars    -- deploy-time values (token, cache lifetimes)

``load_config()`` reads the YAML file first, then deep-merges the
environment-backed :class:`Settings` values on top.
"""

from pathlib import Path

import yaml

from analytics_client.config.settings import Settings

_DEFAULTS: dict = {
    "reporting": {
        "base_url": "https://www.googleapis.com/analytics/v3",
        "timeout": 30.0,
        "page_size": 1000,
    },
    "cache": {
        "max_size": 1000,
    },
}


def load_config(path: str = "config/config.yaml", settings: Settings | None = None) -> dict:
    """Load YAML config and merge with environment-based Settings.

    Args:
        path: Path to the YAML configuration file.  A missing file falls back
              to built-in defaults.
        settings: Settings to merge; read from the environment when omitted.

    Returns:
        Fully resolved configuration dictionary.
    """
    config: dict = _deep_copy(_DEFAULTS)

    config_path = Path(path)
    if config_path.exists():
        with open(config_path) as f:
            _deep_merge(config, yaml.safe_load(f) or {})

    if settings is None:
        settings = Settings()
    env_overrides = {
        "app": {
            "env": settings.app_env,
        },
        "reporting": {
            "access_token": settings.google_access_token,
            "site_id": settings.analytics_site_id,
        },
        "cache": {
            "lifetime_in_minutes": settings.cache_lifetime_in_minutes,
            "realtime_lifetime_in_seconds": settings.realtime_cache_lifetime_in_seconds,
            "prefix": settings.cache_prefix,
            "realtime_prefix": settings.realtime_cache_prefix,
        },
        "logging": {
            "level": settings.log_level,
        },
    }

    _deep_merge(config, env_overrides)
    return config


def _deep_copy(source: dict) -> dict:
    return {
        key: _deep_copy(value) if isinstance(value, dict) else value
        for key, value in source.items()
    }


def _deep_merge(base: dict, overrides: dict) -> None:
    """Recursively merge *overrides* into *base* in place.

    Nested dicts are merged key by key; any other value in *overrides*
    replaces the one in *base*.
    """
    for key, value in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
