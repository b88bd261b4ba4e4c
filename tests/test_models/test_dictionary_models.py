"""Tests for data dictionary models."""

from __future__ import annotations

import math

import pytest
from pydantic import ValidationError

from rcformat.models import CastCategory, Choice, FieldDefinition


def _field(field_type: str, validation: str = "") -> FieldDefinition:
    return FieldDefinition(
        field_name="f",
        field_type=field_type,
        text_validation_type_or_show_slider_number=validation,
    )


class TestFieldDefinition:
    def test_defaults(self) -> None:
        field = FieldDefinition(field_name="age", field_type="text")
        assert field.field_label == ""
        assert field.select_choices_or_calculations == ""
        assert field.validation == ""

    def test_nan_normalized(self) -> None:
        field = FieldDefinition(field_name="age", field_type="text", field_label=math.nan)
        assert field.field_label == ""

    def test_field_type_normalized(self) -> None:
        assert FieldDefinition(field_name="a", field_type=" Radio ").field_type == "radio"

    def test_rejects_empty_field_name(self) -> None:
        with pytest.raises(ValidationError):
            FieldDefinition(field_name="", field_type="text")


class TestCastCategory:
    @pytest.mark.parametrize("field_type", ["calc", "file", "descriptive"])
    def test_excluded(self, field_type: str) -> None:
        assert _field(field_type).cast_category == CastCategory.EXCLUDED

    @pytest.mark.parametrize("field_type", ["radio", "dropdown", "yesno", "truefalse"])
    def test_choice(self, field_type: str) -> None:
        assert _field(field_type).cast_category == CastCategory.CHOICE

    def test_checkbox(self) -> None:
        assert _field("checkbox").cast_category == CastCategory.CHECKBOX

    @pytest.mark.parametrize(
        ("validation", "expected"),
        [
            ("date_ymd", CastCategory.DATE),
            ("date_dmy", CastCategory.DATE),
            ("datetime_mdy", CastCategory.DATETIME),
            ("datetime_seconds_ymd", CastCategory.DATETIME_SECONDS),
            ("integer", CastCategory.NUMERIC),
            ("number_2dp", CastCategory.NUMERIC),
            ("email", CastCategory.TEXT),
            ("time", CastCategory.TEXT),
            ("", CastCategory.TEXT),
        ],
    )
    def test_text_validation(self, validation: str, expected: CastCategory) -> None:
        assert _field("text", validation).cast_category == expected

    def test_notes_and_unknown_types_are_text(self) -> None:
        assert _field("notes").cast_category == CastCategory.TEXT
        assert _field("sql").cast_category == CastCategory.TEXT
        assert _field("signature_pad").cast_category == CastCategory.TEXT


class TestChoice:
    def test_requires_code_and_label(self) -> None:
        with pytest.raises(ValidationError):
            Choice(code="", label="x")
