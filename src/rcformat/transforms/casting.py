"""Metadata-driven type casting of raw record columns.

Each declared field is converted according to its CastCategory (derived from
``field_type`` and the text validation type) and the caller's FormatOptions.
Cast handlers are registered in the CAST_HANDLERS dispatch dictionary.

All handlers share the signature:
    (series: pd.Series, field: FieldDefinition, *, options, report, choice=None)
        -> pd.Series

Cells that cannot be cast become missing and are counted in the FormatReport;
they never abort formatting.

Checkbox representations:

    factors  checkbox_labels  output
    False    False            0 / 1
    False    True             "" / choice label
    True     False            Unchecked / Checked   (categorical)
    True     True             "" / choice label     (categorical)
"""

from __future__ import annotations

from collections.abc import Callable

import pandas as pd
from loguru import logger
from pandas.api.types import is_bool_dtype, is_datetime64_any_dtype, is_numeric_dtype

from rcformat.metadata.choices import field_choices
from rcformat.metadata.dictionary import DataDictionary
from rcformat.metadata.export_names import checkbox_column
from rcformat.models.dictionary import CastCategory, Choice, FieldDefinition
from rcformat.models.formatting import FormatOptions, FormatReport
from rcformat.transforms.values import as_factor, normalized_values, sample

CHECKED = "Checked"
UNCHECKED = "Unchecked"

# Repeating instrument bookkeeping columns, always returned as character
REPEAT_COLUMNS: tuple[str, ...] = ("redcap_repeat_instrument", "redcap_repeat_instance")

_DATE_FORMATS: dict[CastCategory, str] = {
    CastCategory.DATE: "%Y-%m-%d",
    CastCategory.DATETIME: "%Y-%m-%d %H:%M",
    CastCategory.DATETIME_SECONDS: "%Y-%m-%d %H:%M:%S",
}

CastHandler = Callable[..., pd.Series]


def resolve_category(field: FieldDefinition, options: FormatOptions) -> CastCategory:
    """Cast category of ``field`` under ``options`` (dates=False keeps dates as text)."""
    category = field.cast_category
    if category in _DATE_FORMATS and not options.dates:
        return CastCategory.TEXT
    return category


def _warn_missing(column: object, count: int, what: str, values: list[str]) -> None:
    logger.warning(
        "Column '{}': {} cell(s) {}, set missing: {}",
        column,
        count,
        what,
        sample(values),
    )


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


def cast_checkbox(
    series: pd.Series,
    field: FieldDefinition,
    *,
    options: FormatOptions,
    report: FormatReport,
    choice: Choice | None = None,
) -> pd.Series:
    """Cast one physical checkbox column (one choice of a checkbox field).

    Empty cells are unchecked, never missing. Checked cells may be "1",
    "Checked" or the choice label, so already formatted columns are accepted.
    """
    if choice is None:
        msg = f"Checkbox column '{series.name}' of field '{field.field_name}' needs a choice"
        raise ValueError(msg)

    checked_tokens = {"1", CHECKED, choice.label}
    unchecked_tokens = {"0", UNCHECKED}

    states: list[bool | None] = []
    unknown: list[str] = []
    for value in normalized_values(series):
        if value is None:
            states.append(False)
            continue
        token = value.strip()
        if token in checked_tokens:
            states.append(True)
        elif token in unchecked_tokens:
            states.append(False)
        else:
            states.append(None)
            unknown.append(token)

    if unknown:
        report.add_unknown_levels(str(series.name), len(unknown))
        _warn_missing(series.name, len(unknown), "are not a checkbox state", unknown)

    if options.checkbox_labels:
        labeled = [None if s is None else (choice.label if s else "") for s in states]
        if options.factors:
            return as_factor(labeled, ["", choice.label], series)
        return pd.Series(labeled, index=series.index, name=series.name, dtype=object)

    if options.factors:
        named = [None if s is None else (CHECKED if s else UNCHECKED) for s in states]
        return as_factor(named, [UNCHECKED, CHECKED], series)

    return pd.Series(
        pd.array([None if s is None else int(s) for s in states], dtype="Int64"),
        index=series.index,
        name=series.name,
    )


def _numeric_codes(codes: list[str | None], choices: list[Choice], like: pd.Series) -> pd.Series:
    """Codes as a nullable numeric Series, or strings if any code is not a number.

    Both the declared choice codes and the kept cell values must parse;
    codes outside the choice set count too.
    """
    kept = [c for c in codes if c is not None]
    try:
        numbers = [float(c) for c in [*(ch.code for ch in choices), *kept]]
    except ValueError:
        return pd.Series(codes, index=like.index, name=like.name, dtype=object)

    if all(n.is_integer() for n in numbers):
        values = [None if c is None else int(float(c)) for c in codes]
        dtype = "Int64"
    else:
        values = [None if c is None else float(c) for c in codes]
        dtype = "Float64"
    return pd.Series(pd.array(values, dtype=dtype), index=like.index, name=like.name)


def cast_choice(
    series: pd.Series,
    field: FieldDefinition,
    *,
    options: FormatOptions,
    report: FormatReport,
    choice: Choice | None = None,
) -> pd.Series:
    """Cast a radio/dropdown/yesno/truefalse column.

    Cells may hold codes or labels; both resolve to the code first. Codes are
    matched before labels, and a label shared by several codes resolves to
    the first of them. Without factors, values outside the choice set pass
    through as codes; only factor output treats them as unknown levels.
    """
    choices = field_choices(field)
    codes = {c.code for c in choices}
    label_to_code: dict[str, str] = {}
    for c in choices:
        label_to_code.setdefault(c.label, c.code)
    code_to_label = {c.code: c.label for c in choices}

    resolved: list[str | None] = []
    unknown: list[str] = []
    for value in normalized_values(series):
        if value is None:
            resolved.append(None)
            continue
        token = value.strip()
        if not token:
            resolved.append(None)
        elif token in codes:
            resolved.append(token)
        elif token in label_to_code:
            resolved.append(label_to_code[token])
        elif not options.factors:
            resolved.append(token)
        else:
            resolved.append(None)
            unknown.append(token)

    if unknown:
        report.add_unknown_levels(str(series.name), len(unknown))
        _warn_missing(series.name, len(unknown), "match no choice code or label", unknown)

    if options.factors:
        labels = [None if c is None else code_to_label[c] for c in resolved]
        return as_factor(labels, [c.label for c in choices], series)
    return _numeric_codes(resolved, choices, series)


def cast_date(
    series: pd.Series,
    field: FieldDefinition,
    *,
    options: FormatOptions,
    report: FormatReport,
    choice: Choice | None = None,
) -> pd.Series:
    """Parse date/datetime text; unparseable cells (e.g. 2020-02-30) become NaT."""
    if is_datetime64_any_dtype(series):
        return series.copy()

    fmt = _DATE_FORMATS[field.cast_category]
    values = [None if v is None else v.strip() for v in normalized_values(series)]
    parsed = pd.to_datetime(
        pd.Series(values, index=series.index, name=series.name, dtype=object),
        format=fmt,
        errors="coerce",
    )

    failed = [v for v, p in zip(values, parsed, strict=True) if v is not None and pd.isna(p)]
    if failed:
        report.add_cast_failures(str(series.name), len(failed))
        _warn_missing(series.name, len(failed), f"do not match '{fmt}'", failed)
    return parsed


def cast_numeric(
    series: pd.Series,
    field: FieldDefinition,
    *,
    options: FormatOptions,
    report: FormatReport,
    choice: Choice | None = None,
) -> pd.Series:
    """Convert integer/number/slider text to numbers."""
    if is_numeric_dtype(series) and not is_bool_dtype(series):
        return series.copy()

    comma_decimal = "comma_decimal" in field.validation
    values: list[str | None] = []
    for v in normalized_values(series):
        if v is None:
            values.append(None)
        else:
            v = v.strip()
            values.append(v.replace(",", ".") if comma_decimal else v)

    numbers = pd.to_numeric(
        pd.Series(values, index=series.index, name=series.name, dtype=object),
        errors="coerce",
    )

    failed = [v for v, n in zip(values, numbers, strict=True) if v is not None and pd.isna(n)]
    if failed:
        report.add_cast_failures(str(series.name), len(failed))
        _warn_missing(series.name, len(failed), "are not numbers", failed)
    return numbers


def cast_text(
    series: pd.Series,
    field: FieldDefinition | None = None,
    *,
    options: FormatOptions | None = None,
    report: FormatReport | None = None,
    choice: Choice | None = None,
) -> pd.Series:
    """Character column with empty strings as missing; values are otherwise unchanged."""
    return pd.Series(
        normalized_values(series), index=series.index, name=series.name, dtype=object
    )


CAST_HANDLERS: dict[CastCategory, CastHandler] = {
    CastCategory.CHECKBOX: cast_checkbox,
    CastCategory.CHOICE: cast_choice,
    CastCategory.DATE: cast_date,
    CastCategory.DATETIME: cast_date,
    CastCategory.DATETIME_SECONDS: cast_date,
    CastCategory.NUMERIC: cast_numeric,
    CastCategory.TEXT: cast_text,
}


# ---------------------------------------------------------------------------
# Table-level entry point
# ---------------------------------------------------------------------------


def cast_fields(
    df: pd.DataFrame,
    dictionary: DataDictionary,
    options: FormatOptions,
    report: FormatReport | None = None,
) -> pd.DataFrame:
    """Cast every dictionary field present in ``df``.

    Fields with no matching physical column are skipped; columns that are not
    export columns of any field are returned unchanged.

    Args:
        df: Raw records. Not modified.
        dictionary: Data dictionary, normally already without calc, file and
            descriptive fields (excluded fields are skipped regardless).
        options: Formatting options (factors, dates, checkbox_labels are used).
        report: Optional report that collects per-column missing counts.

    Returns:
        New DataFrame with the same rows and columns, retyped.

    Raises:
        ChoiceParseError: If a checkbox or choice field's choices are malformed.
    """
    report = report if report is not None else FormatReport()
    result = df.copy()
    n_cast = 0

    for field in dictionary:
        category = resolve_category(field, options)
        if category == CastCategory.EXCLUDED:
            continue
        handler = CAST_HANDLERS[category]

        if category == CastCategory.CHECKBOX:
            for choice in field_choices(field):
                column = checkbox_column(field.field_name, choice)
                if column in result.columns:
                    result[column] = handler(
                        result[column], field, options=options, report=report, choice=choice
                    )
                    n_cast += 1
            continue

        if field.field_name not in result.columns:
            logger.debug("Field '{}' not in records, skipping", field.field_name)
            continue
        result[field.field_name] = handler(
            result[field.field_name], field, options=options, report=report
        )
        n_cast += 1

    logger.debug("Cast {} of {} columns", n_cast, len(result.columns))
    return result


def cast_repeat_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Return ``df`` with the repeat-instrument columns as character columns."""
    present = [c for c in REPEAT_COLUMNS if c in df.columns]
    if not present:
        return df
    result = df.copy()
    for column in present:
        result[column] = cast_text(result[column])
    return result
