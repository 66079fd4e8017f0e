"""Free-text row matching for the grid search box.

A row matches a search term when any column's value, rendered as text and
case-folded, contains the case-folded term. Values are rendered the way a
browser would print them (``true``/``false`` for booleans, ``30`` rather than
``30.0`` for integral floats) so typed search behaves the same regardless of
whether the data came from JSON or from Python objects.
"""

from __future__ import annotations

import math
from typing import Any, Iterable, List, Optional, Sequence

from datagrid.models import ColumnDefinition, Row

__all__ = ["to_text", "matches", "filter_rows"]


def to_text(value: Any) -> str:
    """Render a cell value as search text. Never raises."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return str(int(value))
        return repr(value)
    try:
        return str(value)
    except Exception:  # malformed values degrade to empty text
        return ""


def matches(row: Row, columns: Sequence[ColumnDefinition], term: Optional[str]) -> bool:
    if not term:
        return True
    needle = term.casefold()
    for col in columns:
        if needle in to_text(row.get(col.field)).casefold():
            return True
    return False


def filter_rows(
    rows: Iterable[Row], columns: Sequence[ColumnDefinition], term: Optional[str]
) -> List[Row]:
    if not term:
        return list(rows)
    return [r for r in rows if matches(r, columns, term)]
