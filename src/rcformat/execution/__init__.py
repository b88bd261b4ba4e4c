"""Record formatting pipeline.

Re-exports key classes for convenient imports:
    from rcformat.execution import RecordFormatter, format_records
"""

from rcformat.execution.formatter import RecordFormatter, format_records, resolve_options

__all__ = [
    "RecordFormatter",
    "format_records",
    "resolve_options",
]
