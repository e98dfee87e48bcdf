"""Unit tests for the analytics_client.cli.query command-line tool."""

from __future__ import annotations

import argparse
import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from analytics_client.cli.query import _build_parser, _collect_options, _parse_option, main
from analytics_client.services.reporting_client import ReportingClient
from analytics_client.utils.errors import ConfigurationError, SiteNotFoundError


@pytest.fixture()
def mock_client(sample_report, realtime_report) -> ReportingClient:
    client = MagicMock(spec=ReportingClient)
    client.perform_query = AsyncMock(return_value=sample_report)
    client.perform_realtime_query = AsyncMock(return_value=realtime_report)
    client.get_all_site_ids = AsyncMock(return_value={"https://known.example": "ga:123"})
    client.get_site_id_by_url = AsyncMock(return_value="ga:123")
    return client


@pytest.fixture()
def components(mock_client) -> dict:
    return {"client": mock_client, "http_client": None}


def _run_main(argv: list[str], components: dict) -> int:
    with patch("analytics_client.cli.query.build_components", return_value=components):
        with pytest.raises(SystemExit) as exc_info:
            main(argv)
    return exc_info.value.code


# ======================================================================
# Argument helpers
# ======================================================================


class TestArgumentParsing:
    def test_parse_option(self) -> None:
        assert _parse_option("segment=gaid::-1") == ("segment", "gaid::-1")

    @pytest.mark.parametrize("raw", ["novalue", "=value"])
    def test_parse_option_rejects_malformed(self, raw) -> None:
        with pytest.raises(argparse.ArgumentTypeError):
            _parse_option(raw)

    def test_collect_options_merges_flags(self) -> None:
        args = _build_parser().parse_args(
            [
                "report", "ga:1", "2024-01-01", "2024-01-31", "ga:sessions",
                "--dimensions", "ga:date",
                "--max-results", "10",
                "--option", "samplingLevel=HIGHER_PRECISION",
            ]
        )

        assert _collect_options(args) == {
            "dimensions": "ga:date",
            "max-results": 10,
            "samplingLevel": "HIGHER_PRECISION",
        }

    def test_no_command_prints_help_and_fails(self, capsys) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 1
        assert "report" in capsys.readouterr().out


# ======================================================================
# Commands
# ======================================================================


class TestCommands:
    def test_report(self, components, mock_client, capsys) -> None:
        code = _run_main(
            ["report", "ga:123", "2024-01-01", "2024-01-31", "ga:sessions", "--sort=-ga:sessions"],
            components,
        )

        assert code == 0
        mock_client.perform_query.assert_awaited_once_with(
            "ga:123", "2024-01-01", "2024-01-31", "ga:sessions", {"sort": "-ga:sessions"}
        )
        output = json.loads(capsys.readouterr().out)
        assert output["columns"] == ["ga:date", "ga:sessions"]
        assert output["totals"] == {"ga:sessions": "42"}

    def test_report_resolves_site_url(self, components, mock_client) -> None:
        code = _run_main(
            ["report", "https://known.example", "7daysAgo", "today", "ga:users"], components
        )

        assert code == 0
        mock_client.get_site_id_by_url.assert_awaited_once_with("https://known.example")
        assert mock_client.perform_query.await_args.args[0] == "ga:123"

    def test_realtime(self, components, mock_client, capsys) -> None:
        code = _run_main(["realtime", "ga:123", "rt:activeUsers"], components)

        assert code == 0
        mock_client.perform_realtime_query.assert_awaited_once_with("ga:123", "rt:activeUsers", {})
        assert json.loads(capsys.readouterr().out)["rows"] == [["7"]]

    def test_sites(self, components, capsys) -> None:
        assert _run_main(["sites"], components) == 0
        assert json.loads(capsys.readouterr().out) == {"https://known.example": "ga:123"}

    def test_site_id(self, components, capsys) -> None:
        assert _run_main(["site-id", "https://known.example"], components) == 0
        assert json.loads(capsys.readouterr().out) == {
            "url": "https://known.example",
            "site_id": "ga:123",
        }

    def test_unknown_site_exits_1(self, components, mock_client, capsys) -> None:
        mock_client.get_site_id_by_url.side_effect = SiteNotFoundError("https://unknown.example")

        assert _run_main(["site-id", "https://unknown.example"], components) == 1
        assert "https://unknown.example" in capsys.readouterr().err

    def test_configuration_error_exits_1(self, capsys) -> None:
        with patch(
            "analytics_client.cli.query.build_components",
            side_effect=ConfigurationError("GOOGLE_ACCESS_TOKEN is not set"),
        ):
            with pytest.raises(SystemExit) as exc_info:
                main(["sites"])

        assert exc_info.value.code == 1
        assert "GOOGLE_ACCESS_TOKEN" in capsys.readouterr().err
