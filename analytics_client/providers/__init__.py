"""Concrete adapters for the interfaces in ``analytics_client.interfaces``."""
