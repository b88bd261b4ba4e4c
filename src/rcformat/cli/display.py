"""Rich display helpers for terminal output."""

from __future__ import annotations

import pandas as pd
from rich.console import Console
from rich.table import Table

from rcformat.models.formatting import FormattedTable


def display_format_summary(table: FormattedTable, console: Console) -> None:
    """Print column types and labels of a formatted table.

    Columns: Column, Type, Missing, Label
    """
    data = table.data
    summary = Table(title="Formatted Records", show_lines=False)
    summary.add_column("Column", style="bold cyan", no_wrap=True)
    summary.add_column("Type", style="green")
    summary.add_column("Missing", justify="right")
    summary.add_column("Label", style="dim")

    for column in data.columns:
        n_missing = int(data[column].isna().sum())
        summary.add_row(
            str(column),
            str(data[column].dtype),
            f"[yellow]{n_missing}[/yellow]" if n_missing else "0",
            table.label(str(column)) or "",
        )

    console.print(summary)
    flags = table.formatting
    console.print(
        f"[bold]{len(data)}[/bold] rows x [bold]{len(data.columns)}[/bold] columns "
        f"(factors={flags.factors}, labels={flags.labels}, dates={flags.dates}, "
        f"checkbox_labels={flags.checkbox_labels})"
    )


def display_format_report(table: FormattedTable, console: Console) -> None:
    """Print cells set missing during formatting, per column."""
    report = table.report
    if not report.total_affected:
        console.print("[green]No cells were set missing.[/green]")
        return

    issues = Table(title="Cells Set Missing", show_lines=False)
    issues.add_column("Column", style="bold cyan", no_wrap=True)
    issues.add_column("Cast failures", justify="right", style="yellow")
    issues.add_column("Unknown levels", justify="right", style="yellow")

    for column in sorted(set(report.cast_failures) | set(report.unknown_levels)):
        issues.add_row(
            column,
            str(report.cast_failures.get(column, 0)),
            str(report.unknown_levels.get(column, 0)),
        )
    console.print(issues)


def display_export_field_names(df: pd.DataFrame, console: Console) -> None:
    """Print the export field name table."""
    names = Table(title="Export Field Names", show_lines=False)
    names.add_column("Field", style="bold cyan", no_wrap=True)
    names.add_column("Choice", justify="right")
    names.add_column("Export Field Name", style="green")

    for rec in df.to_dict("records"):
        choice = rec["choice_value"]
        names.add_row(
            rec["original_field_name"],
            "" if choice is None or pd.isna(choice) else str(choice),
            rec["export_field_name"],
        )
    console.print(names)
    console.print(f"[bold]{len(df)}[/bold] export columns")
