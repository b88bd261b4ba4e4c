"""Checkbox expansion: declared fields -> physical export columns.

In a record export every checkbox choice is its own column, named
``field_name + "___" + converted coded value``. Every other field exports
under its declared name. Calc, file and descriptive fields are never part
of the export field name table.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

import pandas as pd
from loguru import logger
from pydantic import BaseModel, Field

from rcformat.errors import FieldNotFoundError
from rcformat.metadata.choices import field_choices
from rcformat.metadata.dictionary import DataDictionary
from rcformat.models.dictionary import (
    EXCLUDED_FIELD_TYPES,
    Choice,
    FieldDefinition,
    FieldType,
)

CHECKBOX_SEPARATOR = "___"
LABEL_SEPARATOR = ": "

_NON_EXPORT_CHARS = re.compile(r"[^a-z0-9_]")


class ExportFieldName(BaseModel):
    """One physical export column and the declared field it belongs to."""

    original_field_name: str
    choice_value: str | None = Field(
        default=None, description="Raw coded value for checkbox choices, else None"
    )
    export_field_name: str
    label: str = Field(default="", description="Display label for the column")
    choice_label: str | None = Field(
        default=None, description="Choice label for checkbox choices, else None"
    )


def export_suffix(code: str) -> str:
    """Convert a checkbox coded value into its export column suffix.

    Examples:
        >>> export_suffix("1")
        '1'
        >>> export_suffix("-1")
        '_1'
        >>> export_suffix("A.b")
        'a_b'
    """
    return _NON_EXPORT_CHARS.sub("_", code.strip().lower())


def checkbox_column(field_name: str, choice: Choice) -> str:
    return f"{field_name}{CHECKBOX_SEPARATOR}{export_suffix(choice.code)}"


def expand_field(field: FieldDefinition) -> list[ExportFieldName]:
    """Return the physical export columns of a single field.

    Raises:
        ChoiceParseError: If a checkbox field's choice string is malformed.
    """
    if field.field_type != FieldType.CHECKBOX:
        return [
            ExportFieldName(
                original_field_name=field.field_name,
                export_field_name=field.field_name,
                label=field.field_label,
            )
        ]

    return [
        ExportFieldName(
            original_field_name=field.field_name,
            choice_value=choice.code,
            export_field_name=checkbox_column(field.field_name, choice),
            label=f"{field.field_label}{LABEL_SEPARATOR}{choice.label}",
            choice_label=choice.label,
        )
        for choice in field_choices(field)
    ]


def export_field_names(dictionary: DataDictionary) -> list[ExportFieldName]:
    """Expand every field of ``dictionary`` into its export columns, in order."""
    names: list[ExportFieldName] = []
    for field in dictionary:
        names.extend(expand_field(field))
    return names


def column_labels(dictionary: DataDictionary) -> dict[str, str]:
    """Map every export column name to its display label."""
    return {n.export_field_name: n.label for n in export_field_names(dictionary)}


def export_field_names_frame(
    dictionary: DataDictionary,
    fields: Iterable[str] | None = None,
) -> pd.DataFrame:
    """Build the export field name table.

    Args:
        dictionary: Project data dictionary.
        fields: Optional field names to restrict the table to.

    Returns:
        DataFrame with ``original_field_name``, ``choice_value`` (missing for
        non-checkbox fields) and ``export_field_name`` columns.

    Raises:
        FieldNotFoundError: If any requested field is not in the dictionary.
    """
    view = dictionary.excluding_types(EXCLUDED_FIELD_TYPES)

    if fields is not None:
        requested = list(fields)
        bad_fields = [f for f in requested if f not in dictionary]
        if bad_fields:
            msg = f"Non-existent field(s): {', '.join(bad_fields)}"
            raise FieldNotFoundError(msg)
        wanted = set(requested)
        view = DataDictionary(f for f in view if f.field_name in wanted)

    names = export_field_names(view)
    logger.debug("Expanded {} fields into {} export columns", len(view), len(names))
    return pd.DataFrame(
        {
            "original_field_name": [n.original_field_name for n in names],
            "choice_value": [n.choice_value for n in names],
            "export_field_name": [n.export_field_name for n in names],
        },
        columns=["original_field_name", "choice_value", "export_field_name"],
    )
