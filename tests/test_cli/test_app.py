"""Tests for the rcformat CLI application."""

from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest
from typer.testing import CliRunner

from rcformat.cli.app import app

runner = CliRunner()

_DICTIONARY = (
    "field_name,form_name,field_type,field_label,select_choices_or_calculations,"
    "text_validation_type_or_show_slider_number\n"
    "record_id,demo,text,Record ID,,\n"
    'symptoms,demo,checkbox,Symptoms,"1, Fever | 2, Cough",\n'
    'sex,demo,radio,Sex,"1, Male | 2, Female",\n'
    "visit_date,demo,text,Visit date,,date_ymd\n"
    "bmi,demo,calc,BMI,[w]/[h],\n"
)

_RECORDS = (
    "record_id,redcap_event_name,symptoms___1,symptoms___2,sex,visit_date\n"
    "1,baseline_arm_1,1,,1,2020-01-15\n"
    "2,week_4_arm_1,,1,2,2020-02-30\n"
)

_EVENTS = "unique_event_name,event_name\nbaseline_arm_1,Baseline\nweek_4_arm_1,Week 4\n"


@pytest.fixture
def project(tmp_path: Path) -> dict[str, Path]:
    paths = {
        "dictionary": tmp_path / "dictionary.csv",
        "records": tmp_path / "records.csv",
        "events": tmp_path / "events.csv",
    }
    paths["dictionary"].write_text(_DICTIONARY)
    paths["records"].write_text(_RECORDS)
    paths["events"].write_text(_EVENTS)
    return paths


class TestVersionCommand:
    def test_version_exits_zero(self) -> None:
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert "rcformat" in result.output


class TestFormatCommand:
    def test_format_exits_zero(self, project: dict[str, Path]) -> None:
        result = runner.invoke(
            app, ["format", str(project["records"]), "--dictionary", str(project["dictionary"])]
        )
        assert result.exit_code == 0
        assert "Formatted Records" in result.output

    def test_format_reports_missing_cells(self, project: dict[str, Path]) -> None:
        result = runner.invoke(
            app, ["format", str(project["records"]), "--dictionary", str(project["dictionary"])]
        )
        assert result.exit_code == 0
        assert "Cells Set Missing" in result.output
        assert "visit_date" in result.output

    def test_format_writes_output(self, project: dict[str, Path], tmp_path: Path) -> None:
        out = tmp_path / "formatted.csv"
        result = runner.invoke(
            app,
            [
                "format",
                str(project["records"]),
                "--dictionary",
                str(project["dictionary"]),
                "--no-factors",
                "--output",
                str(out),
            ],
        )
        assert result.exit_code == 0
        df = pd.read_csv(out)
        assert list(df["symptoms___1"]) == [1, 0]
        assert list(df["sex"]) == [1, 2]

    def test_format_event_labels(self, project: dict[str, Path], tmp_path: Path) -> None:
        out = tmp_path / "formatted.csv"
        result = runner.invoke(
            app,
            [
                "format",
                str(project["records"]),
                "-d",
                str(project["dictionary"]),
                "--events",
                str(project["events"]),
                "--event-names",
                "label",
                "-o",
                str(out),
            ],
        )
        assert result.exit_code == 0
        assert list(pd.read_csv(out)["redcap_event_name"]) == ["Baseline", "Week 4"]

    def test_event_source_overrides_detection(
        self, project: dict[str, Path], tmp_path: Path
    ) -> None:
        # week 4 is labeled with the unique name of baseline, so detection guesses "label"
        project["events"].write_text(
            "unique_event_name,event_name\nbaseline_arm_1,Baseline\nweek_4_arm_1,baseline_arm_1\n"
        )
        out = tmp_path / "formatted.csv"
        result = runner.invoke(
            app,
            [
                "format",
                str(project["records"]),
                "-d",
                str(project["dictionary"]),
                "--events",
                str(project["events"]),
                "--event-names",
                "label",
                "--event-source",
                "raw",
                "-o",
                str(out),
            ],
        )
        assert result.exit_code == 0
        assert list(pd.read_csv(out)["redcap_event_name"]) == ["Baseline", "baseline_arm_1"]

    def test_event_names_without_events_fails(self, project: dict[str, Path]) -> None:
        result = runner.invoke(
            app,
            [
                "format",
                str(project["records"]),
                "-d",
                str(project["dictionary"]),
                "--event-names",
                "label",
            ],
        )
        assert result.exit_code != 0
        assert "Error" in result.output

    def test_options_file(self, project: dict[str, Path], tmp_path: Path) -> None:
        options = tmp_path / "options.json"
        options.write_text('{"checkbox_labels": true, "factors": false}')
        out = tmp_path / "formatted.csv"
        result = runner.invoke(
            app,
            [
                "format",
                str(project["records"]),
                "-d",
                str(project["dictionary"]),
                "--options",
                str(options),
                "-o",
                str(out),
            ],
        )
        assert result.exit_code == 0
        df = pd.read_csv(out, keep_default_na=False)
        assert list(df["symptoms___1"]) == ["Fever", ""]

    def test_missing_records_file(self, project: dict[str, Path]) -> None:
        result = runner.invoke(
            app, ["format", "/nonexistent/records.csv", "-d", str(project["dictionary"])]
        )
        assert result.exit_code != 0
        assert "Error" in result.output


class TestFieldNamesCommand:
    def test_lists_checkbox_columns(self, project: dict[str, Path]) -> None:
        result = runner.invoke(app, ["field-names", str(project["dictionary"])])
        assert result.exit_code == 0
        assert "symptoms___1" in result.output
        assert "symptoms___2" in result.output
        assert "bmi" not in result.output

    def test_field_filter(self, project: dict[str, Path]) -> None:
        result = runner.invoke(app, ["field-names", str(project["dictionary"]), "-f", "sex"])
        assert result.exit_code == 0
        assert "symptoms___1" not in result.output
        assert "1 export columns" in result.output

    def test_unknown_field(self, project: dict[str, Path]) -> None:
        result = runner.invoke(app, ["field-names", str(project["dictionary"]), "-f", "nope"])
        assert result.exit_code != 0
        assert "Non-existent" in result.output
