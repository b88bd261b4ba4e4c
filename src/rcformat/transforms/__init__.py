"""Column casting, event translation and table stripping.

Re-exports key transform functions for convenient imports:
    from rcformat.transforms import cast_fields, translate_event_names, strip_empty
"""

from rcformat.transforms.casting import (
    CAST_HANDLERS,
    cast_checkbox,
    cast_choice,
    cast_date,
    cast_fields,
    cast_numeric,
    cast_repeat_columns,
    cast_text,
    resolve_category,
)
from rcformat.transforms.events import (
    EVENT_COLUMN,
    detect_event_source,
    translate_event_names,
)
from rcformat.transforms.strip import strip_empty

__all__ = [
    # casting
    "CAST_HANDLERS",
    "cast_fields",
    "cast_checkbox",
    "cast_choice",
    "cast_date",
    "cast_numeric",
    "cast_text",
    "cast_repeat_columns",
    "resolve_category",
    # events
    "EVENT_COLUMN",
    "detect_event_source",
    "translate_event_names",
    # strip
    "strip_empty",
]
