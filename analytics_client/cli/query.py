# =============================================================================
# analytics_client/cli/query.py: Query the reporting API from a shell
# =============================================================================
#
# Operator tool over the same factory embedding applications use, so cache
# lifetimes, prefixes and the access token come from .env / environment.
#
#   python -m analytics_client.cli report ga:123 2024-01-01 2024-01-31 ga:sessions
#   python -m analytics_client.cli report https://example.com 7daysAgo today \
#       ga:pageviews --dimensions ga:pagePath --sort=-ga:pageviews --max-results 10
#   python -m analytics_client.cli realtime ga:123 rt:activeUsers
#   python -m analytics_client.cli sites
#   python -m analytics_client.cli site-id https://example.com
#
# SITE arguments starting with http:// or https:// are resolved through the
# account's site directory first.  Results go to stdout as JSON; logs go to
# stderr.
# =============================================================================

"""Command-line access to the caching reporting client."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any

from analytics_client.main import build_components, close_components
from analytics_client.models.report import ReportResult
from analytics_client.services.reporting_client import ReportingClient
from analytics_client.utils.errors import AnalyticsClientError


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _parse_option(raw: str) -> tuple[str, str]:
    """argparse type for ``--option KEY=VALUE``."""
    key, sep, value = raw.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"expected KEY=VALUE, got '{raw}'")
    return key, value


def _collect_options(args: argparse.Namespace) -> dict[str, Any]:
    """Merge the named query flags and free-form ``--option`` pairs."""
    options: dict[str, Any] = dict(args.option or [])
    for flag, param in (
        ("dimensions", "dimensions"),
        ("sort", "sort"),
        ("filters", "filters"),
        ("max_results", "max-results"),
    ):
        value = getattr(args, flag, None)
        if value is not None:
            options[param] = value
    return options


async def _resolve_site(client: ReportingClient, site: str) -> str:
    if site.startswith(("http://", "https://")):
        return await client.get_site_id_by_url(site)
    return site


def _report_to_json(result: ReportResult) -> dict[str, Any]:
    return {
        "columns": result.column_names,
        "rows": result.rows,
        "totals": result.totals_for_all_results,
        "total_results": result.total_results,
        "contains_sampled_data": result.contains_sampled_data,
    }


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------


async def _dispatch(args: argparse.Namespace, client: ReportingClient) -> Any:
    if args.command == "report":
        site_id = await _resolve_site(client, args.site)
        result = await client.perform_query(
            site_id, args.start_date, args.end_date, args.metrics, _collect_options(args)
        )
        return _report_to_json(result)

    if args.command == "realtime":
        site_id = await _resolve_site(client, args.site)
        result = await client.perform_realtime_query(
            site_id, args.metrics, _collect_options(args)
        )
        return _report_to_json(result)

    if args.command == "sites":
        return await client.get_all_site_ids()

    if args.command == "site-id":
        return {"url": args.url, "site_id": await client.get_site_id_by_url(args.url)}

    raise ValueError(f"Unknown command: {args.command}")


async def _run(args: argparse.Namespace) -> int:
    try:
        components = build_components(config_path=args.config)
    except AnalyticsClientError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    try:
        output = await _dispatch(args, components["client"])
    except AnalyticsClientError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    finally:
        await close_components(components)

    print(json.dumps(output, indent=2, ensure_ascii=False))
    return 0


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


def _add_query_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--dimensions", help="e.g. ga:date,ga:country")
    parser.add_argument("--sort", help="e.g. --sort=-ga:sessions (use = for descending sorts)")
    parser.add_argument("--filters", help="e.g. ga:country==Poland")
    parser.add_argument("--max-results", dest="max_results", type=int)
    parser.add_argument(
        "--option",
        action="append",
        type=_parse_option,
        metavar="KEY=VALUE",
        help="Extra query parameter passed through verbatim (repeatable)",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m analytics_client.cli",
        description="Run cached analytics reports from the command line.",
    )
    parser.add_argument(
        "--config",
        default="config/config.yaml",
        help="Path to the YAML config file (default: config/config.yaml)",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    report_parser = subparsers.add_parser("report", help="Run a standard report")
    report_parser.add_argument("site", help="Site id (ga:123) or site URL")
    report_parser.add_argument("start_date", help="YYYY-MM-DD or e.g. 30daysAgo")
    report_parser.add_argument("end_date", help="YYYY-MM-DD or e.g. today")
    report_parser.add_argument("metrics", help="e.g. ga:sessions,ga:pageviews")
    _add_query_flags(report_parser)

    realtime_parser = subparsers.add_parser("realtime", help="Run a real-time report")
    realtime_parser.add_argument("site", help="Site id (ga:123) or site URL")
    realtime_parser.add_argument("metrics", help="e.g. rt:activeUsers")
    _add_query_flags(realtime_parser)

    subparsers.add_parser("sites", help="List accessible sites (url -> site id)")

    site_id_parser = subparsers.add_parser("site-id", help="Resolve a site URL to its id")
    site_id_parser.add_argument("url", help="Site URL as registered in Analytics")

    return parser


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entry point; exits 0 on success and 1 on any error."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    sys.exit(asyncio.run(_run(args)))


if __name__ == "__main__":
    main()
