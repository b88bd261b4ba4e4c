"""Cell-level helpers shared by the casting and event transforms."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

import pandas as pd


def normalize_cell(value: object) -> str | None:
    """Return a cell as a string, or None when it is missing.

    Empty strings are missing. Integral numbers lose their trailing ``.0`` so
    that previously cast code columns (1.0) compare equal to raw codes ("1").

    Examples:
        >>> normalize_cell("")
        >>> normalize_cell(2.0)
        '2'
        >>> normalize_cell(" a ")
        ' a '
    """
    if value is None:
        return None
    if isinstance(value, str):
        return value if value != "" else None
    if isinstance(value, bool):
        return "1" if value else "0"
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        pass
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    if hasattr(value, "item"):
        # numpy scalars
        return normalize_cell(value.item())  # type: ignore[union-attr]
    return str(value)


def normalized_values(series: pd.Series) -> list[str | None]:
    """Normalize every cell of ``series``."""
    return [normalize_cell(v) for v in series.tolist()]


def as_factor(
    values: Sequence[str | None],
    levels: Iterable[str],
    like: pd.Series,
) -> pd.Series:
    """Build an ordered categorical Series aligned with ``like``.

    Repeated levels are collapsed onto their first occurrence. Values not in
    ``levels`` become missing.
    """
    categories = list(dict.fromkeys(levels))
    return pd.Series(
        pd.Categorical(values, categories=categories, ordered=True),
        index=like.index,
        name=like.name,
    )


def sample(values: Iterable[str], limit: int = 10) -> list[str]:
    """Sorted sample of distinct values, for log messages."""
    return sorted(set(values))[:limit]
