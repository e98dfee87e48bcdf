"""Pydantic v2 models for reporting API responses.

All models use frozen config (immutable).  They mirror the subset of the
Google Analytics v3 response shape the rest of the package reads; the
untouched payload is kept on ``ReportResult.raw`` for callers that need
fields we do not model.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ColumnHeader(BaseModel):
    """One column of a report table."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Column name, e.g. 'ga:date' or 'rt:activeUsers'.")
    column_type: str = Field(default="", description="DIMENSION or METRIC.")
    data_type: str = Field(default="", description="STRING, INTEGER, PERCENT, TIME, ...")


class ReportResult(BaseModel):
    """A standard or real-time report as returned by the reporting API.

    ``rows`` keeps the API's string cells; convert at the point of use.
    """

    model_config = ConfigDict(frozen=True)

    column_headers: list[ColumnHeader] = Field(default_factory=list)
    rows: list[list[str]] = Field(default_factory=list)
    totals_for_all_results: dict[str, str] = Field(default_factory=dict)
    total_results: int = 0
    contains_sampled_data: bool = False
    raw: dict[str, Any] = Field(default_factory=dict, repr=False)

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> ReportResult:
        """Build a result from a decoded ``data/ga`` or ``data/realtime`` body.

        The API omits ``rows`` entirely when a report is empty.
        """
        headers = [
            ColumnHeader(
                name=header.get("name", ""),
                column_type=header.get("columnType", ""),
                data_type=header.get("dataType", ""),
            )
            for header in payload.get("columnHeaders") or []
        ]
        rows = [[str(cell) for cell in row] for row in payload.get("rows") or []]
        totals = {
            str(name): str(value)
            for name, value in (payload.get("totalsForAllResults") or {}).items()
        }
        return cls(
            column_headers=headers,
            rows=rows,
            totals_for_all_results=totals,
            total_results=int(payload.get("totalResults") or len(rows)),
            contains_sampled_data=bool(payload.get("containsSampledData", False)),
            raw=payload,
        )

    @property
    def column_names(self) -> list[str]:
        return [header.name for header in self.column_headers]

    def records(self) -> list[dict[str, str]]:
        """Return rows as dicts keyed by column name."""
        names = self.column_names
        return [dict(zip(names, row)) for row in self.rows]


class Site(BaseModel):
    """A site (view/profile) the authenticated account can report on."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Raw vendor profile id, without the 'ga:' prefix.")
    url: str = Field(description="Public website URL registered for the profile.")
    name: str = Field(default="", description="Display name of the profile.")
