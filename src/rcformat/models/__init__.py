"""Pydantic data models shared across rcformat components.

All models are re-exported here for convenient imports:
    from rcformat.models import FieldDefinition, EventMap, FormatOptions
"""

from rcformat.models.dictionary import (
    CHOICE_FIELD_TYPES,
    EXCLUDED_FIELD_TYPES,
    CastCategory,
    Choice,
    FieldDefinition,
    FieldType,
)
from rcformat.models.events import EventDefinition, EventMap
from rcformat.models.formatting import (
    EventNameMode,
    EventSource,
    FormatOptions,
    FormatReport,
    FormattedTable,
    FormattingRecord,
)

__all__ = [
    # dictionary
    "FieldType",
    "CastCategory",
    "EXCLUDED_FIELD_TYPES",
    "CHOICE_FIELD_TYPES",
    "Choice",
    "FieldDefinition",
    # events
    "EventDefinition",
    "EventMap",
    # formatting
    "EventNameMode",
    "EventSource",
    "FormatOptions",
    "FormattingRecord",
    "FormatReport",
    "FormattedTable",
]
