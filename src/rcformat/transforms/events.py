"""Translation of the ``redcap_event_name`` column between unique names and labels.

The current representation of the column is detected before translating:
if ANY value matches a known event label the column is treated as labeled,
otherwise as unique names. This keeps translation idempotent, but a unique
event name that is textually identical to some event label makes the
detection pick the label set. Pass ``source`` explicitly to override it.

Events sharing a label across arms (e.g. "Baseline" in two arms) all
translate back to the first arm's unique name, so a label -> raw round
trip is lossy for them.
"""

from __future__ import annotations

import pandas as pd
from loguru import logger

from rcformat.errors import MissingEventMapError
from rcformat.models.events import EventMap
from rcformat.models.formatting import EventNameMode, EventSource, FormatReport
from rcformat.transforms.values import as_factor, normalized_values, sample

EVENT_COLUMN = "redcap_event_name"


def detect_event_source(series: pd.Series, event_map: EventMap) -> EventSource:
    """Guess whether ``series`` holds event labels or unique event names."""
    labels = set(event_map.event_names)
    for value in normalized_values(series):
        if value is not None and value.strip() in labels:
            return EventSource.LABEL
    return EventSource.RAW


def translate_event_names(
    df: pd.DataFrame,
    event_map: EventMap | None,
    mode: EventNameMode | str,
    *,
    source: EventSource | str | None = None,
    column: str = EVENT_COLUMN,
    report: FormatReport | None = None,
) -> pd.DataFrame:
    """Translate the event column to labels (``label``) or unique names (``raw``).

    Args:
        df: Records containing the event column. Not modified.
        event_map: Project event definitions.
        mode: ``none`` returns ``df`` unchanged.
        source: Representation the column is in. Detected when None.
        column: Name of the event column.
        report: Optional report that collects unknown-event counts.

    Returns:
        New DataFrame whose event column is an ordered categorical with the
        target names as levels, in event map order. Values outside the
        source name set become missing.

    Raises:
        MissingEventMapError: If translation is requested without an event map.
        KeyError: If the event column is not in ``df``.
    """
    mode = EventNameMode(mode)
    if mode == EventNameMode.NONE:
        return df
    if event_map is None:
        msg = f"An event map is required to translate '{column}' to {mode.value} names"
        raise MissingEventMapError(msg)
    if column not in df.columns:
        raise KeyError(f"Missing required column: '{column}'")

    series = df[column]
    source = EventSource(source) if source is not None else detect_event_source(series, event_map)

    source_names = (
        event_map.event_names if source == EventSource.LABEL else event_map.unique_event_names
    )
    target_names = (
        event_map.event_names if mode == EventNameMode.LABEL else event_map.unique_event_names
    )
    translation: dict[str, str] = {}
    for src, dst in zip(source_names, target_names, strict=True):
        translation.setdefault(src, dst)

    translated: list[str | None] = []
    unmatched: list[str] = []
    for value in normalized_values(series):
        if value is None:
            translated.append(None)
            continue
        token = value.strip()
        if token in translation:
            translated.append(translation[token])
        else:
            translated.append(None)
            unmatched.append(token)

    if unmatched:
        if report is not None:
            report.add_unknown_levels(column, len(unmatched))
        logger.warning(
            "Unmatched {} event values ({}): {}",
            source.value,
            len(unmatched),
            sample(unmatched),
        )

    logger.debug("Translated '{}' from {} to {} names", column, source.value, mode.value)
    result = df.copy()
    result[column] = as_factor(translated, target_names, series)
    return result
