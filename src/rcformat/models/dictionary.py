"""Data dictionary models.

These models represent one row of a REDCap project's metadata export (the
"data dictionary") and the decoded choice pairs of choice-bearing fields.
The cast category derived from a field's type and validation drives how
the formatting engine converts that field's raw string column.
"""

from __future__ import annotations

import math
from enum import StrEnum

from pydantic import BaseModel, Field, field_validator


class FieldType(StrEnum):
    """Field types a REDCap data dictionary may declare."""

    TEXT = "text"
    NOTES = "notes"
    CALC = "calc"
    FILE = "file"
    DESCRIPTIVE = "descriptive"
    CHECKBOX = "checkbox"
    RADIO = "radio"
    DROPDOWN = "dropdown"
    YESNO = "yesno"
    TRUEFALSE = "truefalse"
    SLIDER = "slider"
    SQL = "sql"


class CastCategory(StrEnum):
    """How a field's physical column(s) are converted during formatting."""

    EXCLUDED = "excluded"
    CHECKBOX = "checkbox"
    CHOICE = "choice"
    DATE = "date"
    DATETIME = "datetime"
    DATETIME_SECONDS = "datetime_seconds"
    NUMERIC = "numeric"
    TEXT = "text"


# Fields of these types carry no castable data and never reach column matching
EXCLUDED_FIELD_TYPES: frozenset[str] = frozenset(
    {FieldType.CALC, FieldType.FILE, FieldType.DESCRIPTIVE}
)

CHOICE_FIELD_TYPES: frozenset[str] = frozenset(
    {FieldType.RADIO, FieldType.DROPDOWN, FieldType.YESNO, FieldType.TRUEFALSE}
)

_DATE_VALIDATIONS = frozenset({"date_ymd", "date_mdy", "date_dmy"})
_DATETIME_VALIDATIONS = frozenset({"datetime_ymd", "datetime_mdy", "datetime_dmy"})
_DATETIME_SECONDS_VALIDATIONS = frozenset(
    {"datetime_seconds_ymd", "datetime_seconds_mdy", "datetime_seconds_dmy"}
)


class Choice(BaseModel):
    """A single (code, label) pair decoded from a field's choice string."""

    code: str = Field(..., min_length=1, description="Raw coded value (e.g., '1')")
    label: str = Field(..., min_length=1, description="Display label (e.g., 'Fever')")


class FieldDefinition(BaseModel):
    """One row of the data dictionary.

    Only the columns the formatting engine reads are modeled. Missing
    values coming from a CSV read (None/NaN) are normalized to "".
    """

    field_name: str = Field(..., min_length=1, description="Unique variable name")
    form_name: str = Field(default="", description="Instrument the field belongs to")
    field_type: str = Field(..., description="Declared field type (e.g., 'radio')")
    field_label: str = Field(default="", description="Display label")
    select_choices_or_calculations: str = Field(
        default="", description="Encoded choice list, calculation or slider labels"
    )
    text_validation_type_or_show_slider_number: str = Field(
        default="", description="Validation type refining text fields (e.g., 'date_ymd')"
    )

    @field_validator(
        "form_name",
        "field_label",
        "select_choices_or_calculations",
        "text_validation_type_or_show_slider_number",
        mode="before",
    )
    @classmethod
    def missing_to_empty(cls, v: object) -> object:
        if v is None or (isinstance(v, float) and math.isnan(v)):
            return ""
        return v

    @field_validator("field_name", "field_type")
    @classmethod
    def strip_identifier(cls, v: str) -> str:
        return v.strip()

    @field_validator("field_type")
    @classmethod
    def lowercase_type(cls, v: str) -> str:
        return v.lower()

    @property
    def validation(self) -> str:
        """Normalized validation type ("" when none)."""
        return self.text_validation_type_or_show_slider_number.strip().lower()

    @property
    def cast_category(self) -> CastCategory:
        """Cast path for this field, from its type and validation."""
        if self.field_type in EXCLUDED_FIELD_TYPES:
            return CastCategory.EXCLUDED
        if self.field_type == FieldType.CHECKBOX:
            return CastCategory.CHECKBOX
        if self.field_type in CHOICE_FIELD_TYPES:
            return CastCategory.CHOICE
        if self.field_type == FieldType.SLIDER:
            return CastCategory.NUMERIC

        validation = self.validation
        if validation in _DATE_VALIDATIONS:
            return CastCategory.DATE
        if validation in _DATETIME_VALIDATIONS:
            return CastCategory.DATETIME
        if validation in _DATETIME_SECONDS_VALIDATIONS:
            return CastCategory.DATETIME_SECONDS
        if validation == "integer" or validation.startswith("number"):
            return CastCategory.NUMERIC
        return CastCategory.TEXT
