"""Removal of all-missing rows and columns."""

from __future__ import annotations

from collections.abc import Iterable

import pandas as pd
from loguru import logger


def strip_empty(
    df: pd.DataFrame,
    *,
    ignore_columns: Iterable[str] = (),
) -> pd.DataFrame:
    """Drop rows and columns whose values are all missing.

    Args:
        df: Table to strip. Not modified.
        ignore_columns: Columns that are always kept and do not count when
            deciding whether a row is empty (e.g. the record identifier).

    Returns:
        Copy of ``df`` with the remaining rows and columns in their original
        order and a fresh RangeIndex.
    """
    ignored = set(ignore_columns)
    missing = df.isna()

    considered = [c for c in df.columns if c not in ignored]
    if considered:
        keep_rows = ~missing[considered].all(axis=1)
    else:
        keep_rows = pd.Series(True, index=df.index)
    keep_columns = [c for c in df.columns if c in ignored or not missing[c].all()]

    result = df.loc[keep_rows, keep_columns].copy().reset_index(drop=True)

    dropped_rows = len(df) - len(result)
    dropped_columns = len(df.columns) - len(keep_columns)
    if dropped_rows or dropped_columns:
        logger.info(
            "Stripped {} empty row(s) and {} empty column(s)",
            dropped_rows,
            dropped_columns,
        )
    return result
