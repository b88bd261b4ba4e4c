"""Metadata-driven formatting of REDCap record exports.

Turns raw all-string record exports into typed, labeled DataFrames using
the project's data dictionary:
    from rcformat import format_records, DataDictionary, FormatOptions
"""

from rcformat.execution.formatter import RecordFormatter, format_records
from rcformat.metadata.dictionary import DataDictionary
from rcformat.models.events import EventMap
from rcformat.models.formatting import (
    EventNameMode,
    EventSource,
    FormatOptions,
    FormattedTable,
)

__version__ = "0.4.0"

__all__ = [
    "__version__",
    "DataDictionary",
    "EventMap",
    "EventNameMode",
    "EventSource",
    "FormatOptions",
    "FormattedTable",
    "RecordFormatter",
    "format_records",
]
