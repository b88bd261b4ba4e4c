"""Data dictionary access, choice parsing and checkbox expansion.

Re-exports for convenient imports:
    from rcformat.metadata import DataDictionary, parse_choices, export_field_names
"""

from rcformat.metadata.choices import field_choices, parse_choices
from rcformat.metadata.dictionary import DataDictionary
from rcformat.metadata.export_names import (
    ExportFieldName,
    column_labels,
    expand_field,
    export_field_names,
    export_field_names_frame,
    export_suffix,
)

__all__ = [
    "DataDictionary",
    "parse_choices",
    "field_choices",
    "ExportFieldName",
    "expand_field",
    "export_field_names",
    "export_field_names_frame",
    "export_suffix",
    "column_labels",
]
