"""Command-line tools for analytics-client.

- ``python -m analytics_client.cli`` -- run standard and real-time reports,
  list sites, and resolve site URLs (see ``query.py``).

Uses argparse and builds its dependencies through
``analytics_client.main.build_components``.
"""
