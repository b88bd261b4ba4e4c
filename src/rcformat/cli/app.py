"""rcformat CLI application entry point.

Formats raw REDCap record exports (CSV) with the project's data dictionary
and lists export field names.

Usage:
    rcformat format <records.csv> --dictionary <metadata.csv>
    rcformat field-names <metadata.csv>
    rcformat version
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from rcformat.models.formatting import EventNameMode, EventSource

app = typer.Typer(
    name="rcformat",
    help="Format raw REDCap record exports using the project data dictionary.",
    no_args_is_help=True,
)

console = Console()


@app.command()
def version() -> None:
    """Show the current version."""
    from rcformat import __version__

    console.print(f"rcformat {__version__}")


@app.command("format")
def format_command(
    records_path: Annotated[
        Path,
        typer.Argument(help="Raw record export (CSV)"),
    ],
    dictionary_path: Annotated[
        Path,
        typer.Option("--dictionary", "-d", help="Data dictionary / metadata export (CSV)"),
    ],
    events_path: Annotated[
        Path | None,
        typer.Option("--events", "-e", help="Event export (CSV) for event name translation"),
    ] = None,
    options_path: Annotated[
        Path | None,
        typer.Option("--options", help="JSON file with FormatOptions; flags below override it"),
    ] = None,
    factors: Annotated[
        bool | None,
        typer.Option("--factors/--no-factors", help="Choice fields as labeled categoricals"),
    ] = None,
    labels: Annotated[
        bool | None,
        typer.Option("--labels/--no-labels", help="Attach column labels"),
    ] = None,
    dates: Annotated[
        bool | None,
        typer.Option("--dates/--no-dates", help="Parse date and datetime fields"),
    ] = None,
    checkbox_labels: Annotated[
        bool | None,
        typer.Option(
            "--checkbox-labels/--no-checkbox-labels",
            help="Checked boxes as their choice label",
        ),
    ] = None,
    event_names: Annotated[
        EventNameMode | None,
        typer.Option("--event-names", help="Translate redcap_event_name to label or raw"),
    ] = None,
    event_source: Annotated[
        EventSource | None,
        typer.Option(
            "--event-source",
            help="Current form of redcap_event_name (raw or label); detected if omitted",
        ),
    ] = None,
    strip: Annotated[
        bool | None,
        typer.Option("--strip/--no-strip", help="Drop all-missing rows and columns"),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write formatted records to this CSV file"),
    ] = None,
) -> None:
    """Format a raw record export.

    Reads the records and data dictionary, casts every field by its declared
    type, and displays column types, labels and any cells set missing.
    """
    from rcformat.cli.display import display_format_report, display_format_summary
    from rcformat.errors import RCFormatError
    from rcformat.execution.formatter import RecordFormatter
    from rcformat.io.csv_reader import read_data_dictionary, read_event_map, read_records_csv
    from rcformat.models.formatting import FormatOptions

    try:
        options = (
            FormatOptions.model_validate_json(options_path.read_text())
            if options_path is not None
            else FormatOptions()
        )
        overrides = {
            "factors": factors,
            "labels": labels,
            "dates": dates,
            "checkbox_labels": checkbox_labels,
            "event_names": event_names,
            "event_source": event_source,
            "strip": strip,
        }
        if events_path is not None:
            overrides["event_map"] = read_event_map(events_path)
        overrides = {k: v for k, v in overrides.items() if v is not None}

        records = read_records_csv(records_path)
        dictionary = read_data_dictionary(dictionary_path)
        table = RecordFormatter(dictionary).format(records, options, **overrides)
    except (FileNotFoundError, KeyError, ValueError, RCFormatError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(code=1) from e

    console.print()
    display_format_summary(table, console)
    display_format_report(table, console)

    if output is not None:
        table.data.to_csv(output, index=False)
        console.print(f"\n[green]Formatted records written to {output}[/green]")


@app.command("field-names")
def field_names(
    dictionary_path: Annotated[
        Path,
        typer.Argument(help="Data dictionary / metadata export (CSV)"),
    ],
    field: Annotated[
        list[str] | None,
        typer.Option("--field", "-f", help="Restrict to this field (repeatable)"),
    ] = None,
) -> None:
    """List the export field names of a project.

    Checkbox fields expand to one column per choice (field___code); calc,
    file and descriptive fields are left out.
    """
    from rcformat.cli.display import display_export_field_names
    from rcformat.errors import RCFormatError
    from rcformat.io.csv_reader import read_data_dictionary
    from rcformat.metadata.export_names import export_field_names_frame

    try:
        dictionary = read_data_dictionary(dictionary_path)
        names = export_field_names_frame(dictionary, field or None)
    except (FileNotFoundError, KeyError, RCFormatError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(code=1) from e

    display_export_field_names(names, console)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
