"""Configuration module: exports Settings and load_config."""

from analytics_client.config.loader import load_config
from analytics_client.config.settings import Settings

__all__ = ["Settings", "load_config"]
