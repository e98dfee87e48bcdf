"""Allow ``python -m analytics_client.cli`` execution."""

from analytics_client.cli.query import main

main()
