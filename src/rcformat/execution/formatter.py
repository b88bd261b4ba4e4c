"""Record formatting pipeline.

Provides RecordFormatter, which takes raw all-string records and a data
dictionary and produces a FormattedTable: columns retyped per field, column
display labels, optional event name translation, optional stripping of
empty rows/columns, and a provenance record of the options used.

Step order is fixed:
    exclude calc/file/descriptive fields -> validate choices -> cast fields
    -> repeat columns to character -> column labels -> event names -> strip
"""

from __future__ import annotations

from typing import Any

import pandas as pd
from loguru import logger

from rcformat.errors import MissingEventMapError
from rcformat.metadata.dictionary import DataDictionary
from rcformat.metadata.export_names import column_labels
from rcformat.models.dictionary import EXCLUDED_FIELD_TYPES
from rcformat.models.formatting import (
    EventNameMode,
    FormatOptions,
    FormatReport,
    FormattedTable,
    FormattingRecord,
)
from rcformat.transforms.casting import cast_fields, cast_repeat_columns
from rcformat.transforms.events import translate_event_names
from rcformat.transforms.strip import strip_empty


def resolve_options(options: FormatOptions | None = None, **overrides: Any) -> FormatOptions:
    """Merge keyword overrides into ``options`` (defaults when None), re-validating."""
    base = options if options is not None else FormatOptions()
    if not overrides:
        return base
    unknown = sorted(set(overrides) - set(FormatOptions.model_fields))
    if unknown:
        raise TypeError(f"Unknown format option(s): {', '.join(unknown)}")
    return FormatOptions(**{**dict(base), **overrides})


class RecordFormatter:
    """Formats raw record exports using one project's data dictionary.

    The dictionary is only read. One formatter can serve any number of
    independent ``format`` calls, including concurrent ones.
    """

    def __init__(self, dictionary: DataDictionary) -> None:
        self.dictionary = dictionary
        self._castable = dictionary.excluding_types(EXCLUDED_FIELD_TYPES)

    def format(
        self,
        records: pd.DataFrame | FormattedTable,
        options: FormatOptions | None = None,
        **overrides: Any,
    ) -> FormattedTable:
        """Format ``records``.

        Args:
            records: Raw export (all-string cells, "" for missing) or a
                previously formatted table, which is re-formatted from its data.
            options: Formatting options. Defaults to FormatOptions().
            **overrides: Individual FormatOptions fields overriding ``options``.

        Returns:
            FormattedTable with typed data, column labels (when
            ``options.labels``), the provenance record and a diagnostic report.

        Raises:
            MissingEventMapError: If event translation is requested without
                ``options.event_map``.
            ChoiceParseError: If any castable field's choice string is malformed.
        """
        options = resolve_options(options, **overrides)
        if isinstance(records, FormattedTable):
            records = records.data

        # Fatal conditions are all raised before any column is touched
        if options.event_names != EventNameMode.NONE and options.event_map is None:
            msg = (
                f"event_names='{options.event_names.value}' requires an event map "
                "(FormatOptions.event_map)"
            )
            raise MissingEventMapError(msg)
        self._castable.validate_choices()

        report = FormatReport()
        data = cast_fields(records, self._castable, options, report)
        data = cast_repeat_columns(data)

        labels: dict[str, str] = {}
        if options.labels:
            all_labels = column_labels(self._castable)
            labels = {c: all_labels[c] for c in data.columns if c in all_labels}

        if options.event_names != EventNameMode.NONE:
            data = translate_event_names(
                data,
                options.event_map,
                options.event_names,
                source=options.event_source,
                report=report,
            )

        if options.strip:
            data = strip_empty(data)
            labels = {c: label for c, label in labels.items() if c in data.columns}

        if report.total_affected:
            logger.warning(
                "{} cell(s) set missing while formatting ({} column(s) affected)",
                report.total_affected,
                len(set(report.cast_failures) | set(report.unknown_levels)),
            )
        logger.info("Formatted records: {} rows x {} columns", len(data), len(data.columns))

        return FormattedTable(
            data=data,
            column_labels=labels,
            formatting=FormattingRecord.from_options(options),
            report=report,
        )


def format_records(
    records: pd.DataFrame | FormattedTable,
    dictionary: DataDictionary,
    options: FormatOptions | None = None,
    **overrides: Any,
) -> FormattedTable:
    """Format raw records with ``dictionary``; see RecordFormatter.format.

    Examples:
        >>> table = format_records(raw_df, dictionary, factors=False)  # doctest: +SKIP
        >>> table.formatting.factors  # doctest: +SKIP
        False
    """
    return RecordFormatter(dictionary).format(records, options, **overrides)
