"""CSV readers for record, metadata and event exports.

All cells are read as strings with no NA inference, so an empty cell stays
"" and "NA" stays "NA". Deciding what is missing is the formatter's job.
"""

from __future__ import annotations

from pathlib import Path

import pandas as pd
from loguru import logger

from rcformat.metadata.dictionary import DataDictionary
from rcformat.models.events import EventDefinition, EventMap

_EVENT_COLUMNS = ("unique_event_name", "event_name")


def _read_string_csv(filepath: str | Path) -> pd.DataFrame:
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"CSV file not found: {filepath}")
    df = pd.read_csv(filepath, dtype=str, keep_default_na=False, na_filter=False)
    logger.info("Read {}: {} rows x {} cols", filepath.name, len(df), len(df.columns))
    return df


def read_records_csv(filepath: str | Path) -> pd.DataFrame:
    """Read a raw record export as an all-string DataFrame."""
    return _read_string_csv(filepath)


def read_data_dictionary(filepath: str | Path) -> DataDictionary:
    """Read a metadata export into a DataDictionary.

    Raises:
        FileNotFoundError: If the file does not exist.
        KeyError: If ``field_name`` or ``field_type`` is missing.
        MalformedDictionaryError: If field names are not unique.
    """
    return DataDictionary.from_frame(_read_string_csv(filepath))


def read_event_map(filepath: str | Path) -> EventMap:
    """Read an event export (unique_event_name, event_name[, arm_num]) into an EventMap.

    Raises:
        FileNotFoundError: If the file does not exist.
        KeyError: If a required column is missing.
    """
    df = _read_string_csv(filepath)
    missing = [c for c in _EVENT_COLUMNS if c not in df.columns]
    if missing:
        raise KeyError(f"Event file is missing required column(s): {missing}")

    events: list[EventDefinition] = []
    for rec in df.to_dict("records"):
        arm = str(rec.get("arm_num", "")).strip()
        events.append(
            EventDefinition(
                unique_event_name=rec["unique_event_name"].strip(),
                event_name=rec["event_name"].strip(),
                arm_num=int(arm) if arm.isdigit() else None,
            )
        )
    return EventMap(events=events)
