"""Tests for formatting option, provenance and result models."""

from __future__ import annotations

import pandas as pd

from rcformat.models import (
    EventDefinition,
    EventMap,
    EventNameMode,
    FormatOptions,
    FormatReport,
    FormattedTable,
    FormattingRecord,
)


class TestFormatOptions:
    def test_defaults(self) -> None:
        options = FormatOptions()
        assert options.factors is True
        assert options.labels is True
        assert options.dates is True
        assert options.checkbox_labels is False
        assert options.event_names == EventNameMode.NONE
        assert options.event_source is None
        assert options.strip is False
        assert options.event_map is None

    def test_from_json(self) -> None:
        options = FormatOptions.model_validate_json(
            '{"factors": false, "event_names": "label", '
            '"event_map": {"events": [{"unique_event_name": "v1", "event_name": "Visit 1"}]}}'
        )
        assert options.factors is False
        assert options.event_names == EventNameMode.LABEL
        assert options.event_map is not None
        assert options.event_map.event_names == ["Visit 1"]


class TestFormattingRecord:
    def test_from_options(self) -> None:
        record = FormattingRecord.from_options(FormatOptions(dates=False, strip=True))
        assert record.model_dump() == {
            "factors": True,
            "labels": True,
            "dates": False,
            "checkbox_labels": False,
        }


class TestFormatReport:
    def test_counts_accumulate(self) -> None:
        report = FormatReport()
        report.add_cast_failures("d", 2)
        report.add_cast_failures("d", 1)
        report.add_unknown_levels("sex", 1)
        assert report.cast_failures == {"d": 3}
        assert report.total_affected == 4

    def test_zero_counts_not_recorded(self) -> None:
        report = FormatReport()
        report.add_unknown_levels("sex", 0)
        assert report.unknown_levels == {}
        assert report.total_affected == 0


class TestFormattedTable:
    def test_label_lookup(self) -> None:
        table = FormattedTable(
            data=pd.DataFrame({"a": [1]}),
            column_labels={"a": "Alpha"},
            formatting=FormattingRecord.from_options(FormatOptions()),
        )
        assert table.label("a") == "Alpha"
        assert table.label("b") is None


class TestEventMap:
    def test_names_in_order(self) -> None:
        events = EventMap(
            events=[
                EventDefinition(unique_event_name="b_arm_1", event_name="B"),
                EventDefinition(unique_event_name="a_arm_1", event_name="A"),
            ]
        )
        assert events.unique_event_names == ["b_arm_1", "a_arm_1"]
        assert events.event_names == ["B", "A"]
        assert len(events) == 2
