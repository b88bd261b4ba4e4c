"""Exceptions raised by the formatting engine.

Only fatal conditions are raised. Per-cell problems (unparseable dates,
unknown choice codes) are logged and counted in the FormatReport instead.
"""

from __future__ import annotations


class RCFormatError(Exception):
    """Base class for rcformat errors."""


class MalformedDictionaryError(RCFormatError):
    """Raised when the data dictionary cannot drive formatting.

    Duplicate field names and unparseable choice strings both land here.
    """


class ChoiceParseError(MalformedDictionaryError):
    """Raised when a field's choice string has a malformed segment."""

    def __init__(self, field_name: str, segment: str, reason: str = "") -> None:
        self.field_name = field_name
        self.segment = segment
        detail = f" ({reason})" if reason else ""
        super().__init__(
            f"Cannot parse choice segment '{segment}' of field '{field_name}'{detail}"
        )


class FieldNotFoundError(RCFormatError, KeyError):
    """Raised when a field name is not present in the data dictionary."""

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return str(self.args[0]) if self.args else ""


class MissingEventMapError(RCFormatError):
    """Raised when event name translation is requested without an event map."""
