"""Formatting option, provenance and result models.

FormatOptions is the explicit configuration object passed into every
formatting call. FormattedTable is what a call returns: the typed frame
plus side-tables for column display labels, the provenance record of the
options applied, and a diagnostic report of cells that were set missing.
"""

from __future__ import annotations

from enum import StrEnum

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field

from rcformat.models.events import EventMap


class EventNameMode(StrEnum):
    """Requested translation of the ``redcap_event_name`` column."""

    NONE = "none"
    LABEL = "label"
    RAW = "raw"


class EventSource(StrEnum):
    """Representation the event column is currently in."""

    RAW = "raw"
    LABEL = "label"


class FormatOptions(BaseModel):
    """Options controlling a single formatting call.

    Defaults match the usual analysis setup: categorical fields as labeled
    factors, column labels attached, dates parsed, checkboxes as
    Unchecked/Checked.
    """

    factors: bool = Field(
        default=True, description="Return choice fields as labeled categoricals"
    )
    labels: bool = Field(default=True, description="Attach column display labels")
    dates: bool = Field(default=True, description="Parse date/datetime validated fields")
    checkbox_labels: bool = Field(
        default=False,
        description="Represent checked boxes by their choice label instead of Checked/1",
    )
    event_names: EventNameMode = Field(
        default=EventNameMode.NONE, description="Event column translation mode"
    )
    event_source: EventSource | None = Field(
        default=None,
        description="Override the detected representation of the event column",
    )
    strip: bool = Field(default=False, description="Drop all-missing rows and columns")
    event_map: EventMap | None = Field(
        default=None, description="Event definitions, required for event translation"
    )


class FormattingRecord(BaseModel):
    """Provenance record of the flags a table was formatted with."""

    factors: bool
    labels: bool
    dates: bool
    checkbox_labels: bool

    @classmethod
    def from_options(cls, options: FormatOptions) -> FormattingRecord:
        return cls(
            factors=options.factors,
            labels=options.labels,
            dates=options.dates,
            checkbox_labels=options.checkbox_labels,
        )


class FormatReport(BaseModel):
    """Per-column counts of cells that were set missing during formatting.

    ``cast_failures`` counts cells whose date/number parse failed;
    ``unknown_levels`` counts categorical or event values with no matching
    code or label.
    """

    cast_failures: dict[str, int] = Field(default_factory=dict)
    unknown_levels: dict[str, int] = Field(default_factory=dict)

    def add_cast_failures(self, column: str, count: int) -> None:
        if count:
            self.cast_failures[column] = self.cast_failures.get(column, 0) + count

    def add_unknown_levels(self, column: str, count: int) -> None:
        if count:
            self.unknown_levels[column] = self.unknown_levels.get(column, 0) + count

    @property
    def total_affected(self) -> int:
        """Total number of cells set missing."""
        return sum(self.cast_failures.values()) + sum(self.unknown_levels.values())


class FormattedTable(BaseModel):
    """A formatted records table with its label and provenance side-tables."""

    data: pd.DataFrame = Field(..., description="Typed records")
    column_labels: dict[str, str] = Field(
        default_factory=dict, description="Column name -> display label"
    )
    formatting: FormattingRecord = Field(..., description="Options the table was built with")
    report: FormatReport = Field(default_factory=FormatReport)

    model_config = ConfigDict(arbitrary_types_allowed=True)

    def label(self, column: str) -> str | None:
        """Display label attached to ``column``, if any."""
        return self.column_labels.get(column)
