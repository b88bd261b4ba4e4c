"""Parser for REDCap encoded choice lists.

A choice string looks like ``"1, Fever | 2, Cough | 3, Other, please specify"``:
pipe-separated segments, each split on its FIRST comma into code and label.
The order of appearance is the canonical level order of the field.
"""

from __future__ import annotations

from rcformat.errors import ChoiceParseError
from rcformat.models.dictionary import Choice, FieldDefinition, FieldType

# Implicit choices of the two boolean field types, in level order
YESNO_CHOICES: tuple[Choice, ...] = (
    Choice(code="0", label="No"),
    Choice(code="1", label="Yes"),
)
TRUEFALSE_CHOICES: tuple[Choice, ...] = (
    Choice(code="0", label="False"),
    Choice(code="1", label="True"),
)

_PARSED_TYPES = frozenset({FieldType.CHECKBOX, FieldType.RADIO, FieldType.DROPDOWN})


def parse_choices(raw: str | None, field_name: str = "") -> list[Choice]:
    """Parse an encoded choice string into ordered (code, label) pairs.

    Args:
        raw: Encoded choice list. None or blank yields an empty list.
        field_name: Owning field, used in error messages.

    Returns:
        Choices in order of appearance.

    Raises:
        ChoiceParseError: If a segment does not split into a non-empty code
            and label, or a code appears twice.

    Examples:
        >>> [(c.code, c.label) for c in parse_choices("1, Fever | 2, Cough")]
        [('1', 'Fever'), ('2', 'Cough')]
    """
    if raw is None or not raw.strip():
        return []

    choices: list[Choice] = []
    seen: set[str] = set()
    for segment in raw.split("|"):
        code, sep, label = segment.partition(",")
        code = code.strip()
        label = label.strip()
        if not sep or not code or not label:
            raise ChoiceParseError(field_name, segment.strip(), "expected 'code, label'")
        if code in seen:
            raise ChoiceParseError(field_name, segment.strip(), f"duplicate code '{code}'")
        seen.add(code)
        choices.append(Choice(code=code, label=label))
    return choices


def field_choices(field: FieldDefinition) -> list[Choice]:
    """Return the choices of a field, including the implicit yesno/truefalse sets.

    Fields whose type carries no choice list (text, calc, slider, ...) return
    an empty list; their ``select_choices_or_calculations`` is not parsed.
    """
    if field.field_type == FieldType.YESNO:
        return list(YESNO_CHOICES)
    if field.field_type == FieldType.TRUEFALSE:
        return list(TRUEFALSE_CHOICES)
    if field.field_type in _PARSED_TYPES:
        return parse_choices(field.select_choices_or_calculations, field.field_name)
    return []
