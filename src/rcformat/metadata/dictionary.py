"""Read-only view over a project's data dictionary.

Usage:
    dictionary = DataDictionary.from_frame(metadata_df)
    field = dictionary.lookup("symptoms")
    castable = dictionary.excluding_types(EXCLUDED_FIELD_TYPES)
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Iterator

import pandas as pd
from loguru import logger

from rcformat.errors import FieldNotFoundError, MalformedDictionaryError
from rcformat.metadata.choices import field_choices
from rcformat.models.dictionary import Choice, FieldDefinition

_REQUIRED_COLUMNS = ("field_name", "field_type")


class DataDictionary:
    """Ordered, read-only collection of FieldDefinitions keyed by field name."""

    def __init__(self, fields: Iterable[FieldDefinition]) -> None:
        self._fields: tuple[FieldDefinition, ...] = tuple(fields)

        counts = Counter(f.field_name for f in self._fields)
        duplicates = sorted(name for name, n in counts.items() if n > 1)
        if duplicates:
            msg = f"Duplicate field_name(s) in data dictionary: {', '.join(duplicates)}"
            raise MalformedDictionaryError(msg)

        self._by_name: dict[str, FieldDefinition] = {f.field_name: f for f in self._fields}

    @classmethod
    def from_frame(cls, df: pd.DataFrame) -> DataDictionary:
        """Build a dictionary from a metadata export DataFrame.

        Args:
            df: Metadata table with at least ``field_name`` and ``field_type``
                columns. Other FieldDefinition columns are optional; extra
                columns (branching logic, notes, ...) are ignored.

        Raises:
            KeyError: If a required column is missing.
            MalformedDictionaryError: If field names are not unique.
        """
        missing = [c for c in _REQUIRED_COLUMNS if c not in df.columns]
        if missing:
            msg = f"Data dictionary is missing required column(s): {missing}"
            raise KeyError(msg)

        known = set(FieldDefinition.model_fields)
        columns = [c for c in df.columns if c in known]
        records = df[columns].astype(object).where(df[columns].notna(), None)
        fields = [FieldDefinition(**rec) for rec in records.to_dict("records")]

        logger.debug("Loaded data dictionary with {} fields", len(fields))
        return cls(fields)

    @classmethod
    def from_records(cls, records: Iterable[dict[str, object]]) -> DataDictionary:
        """Build a dictionary from an iterable of row dicts."""
        return cls(FieldDefinition(**rec) for rec in records)

    @property
    def fields(self) -> tuple[FieldDefinition, ...]:
        """Field definitions in dictionary order."""
        return self._fields

    @property
    def field_names(self) -> list[str]:
        return [f.field_name for f in self._fields]

    def lookup(self, name: str) -> FieldDefinition:
        """Return the definition of ``name``.

        Raises:
            FieldNotFoundError: If the field is not in the dictionary.
        """
        try:
            return self._by_name[name]
        except KeyError:
            raise FieldNotFoundError(f"Field '{name}' not found in data dictionary") from None

    def excluding_types(self, types: Iterable[str]) -> DataDictionary:
        """Return a new view without fields of the given types."""
        excluded = {t.lower() for t in types}
        return DataDictionary(f for f in self._fields if f.field_type not in excluded)

    def choices(self, name: str) -> list[Choice]:
        """Parsed choices of ``name`` (empty for fields without a choice set)."""
        return field_choices(self.lookup(name))

    def validate_choices(self) -> None:
        """Parse every choice-bearing field, raising the first ChoiceParseError."""
        for f in self._fields:
            field_choices(f)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[FieldDefinition]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"DataDictionary({len(self._fields)} fields)"
