"""Row ordering for grid columns.

Provides the value comparator used by header sorting, the header toggle
cycle (unsorted -> ascending -> descending -> unsorted) and a stable
multi-key sorter. Sorting is stable: rows comparing equal keep their
filtered order, which keeps repeated renders reproducible.

Values of different runtime types (e.g. a number next to a string, or a
missing field) have no natural order. They fall back to a fixed type rank
instead of raising: missing < numbers < strings < anything else.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cmp_to_key
from numbers import Number
from typing import Any, Iterable, List, Optional, Sequence

from datagrid.models import Row, SortConfig, SortDirection

__all__ = [
    "compare_values",
    "compare_rows",
    "sort_rows",
    "next_sort",
    "SortKey",
    "MultiColumnSorter",
]


def _rank(value: Any) -> int:
    if value is None:
        return 0
    if isinstance(value, Number):
        return 1
    if isinstance(value, str):
        return 2
    return 3


def compare_values(a: Any, b: Any) -> int:
    """Three-way comparison in natural order; -1, 0 or 1."""
    try:
        if a < b:
            return -1
        if a > b:
            return 1
        return 0
    except TypeError:
        pass
    ra, rb = _rank(a), _rank(b)
    if ra != rb:
        return -1 if ra < rb else 1
    if ra == 3:
        ta, tb = str(a), str(b)
        return (ta > tb) - (ta < tb)
    return 0


def compare_rows(a: Row, b: Row, key: str, direction: SortDirection = SortDirection.ASC) -> int:
    result = compare_values(a.get(key), b.get(key))
    return -result if direction is SortDirection.DESC else result


@dataclass(frozen=True)
class SortKey:
    field: str
    ascending: bool = True

    @classmethod
    def from_config(cls, config: SortConfig) -> "SortKey":
        return cls(config.key, config.ascending)


class MultiColumnSorter:
    """Stable multi-key sort over grid rows.

    Usage:
        sorter = MultiColumnSorter(rows)
        rows_sorted = sorter.sort([
            SortKey("points", ascending=False),
            SortKey("name"),
        ])
    """

    def __init__(self, rows: Iterable[Row]):
        self._rows: List[Row] = list(rows)

    def sort(self, keys: Sequence[SortKey]) -> List[Row]:
        # Apply from lowest precedence to highest for stability
        result = list(self._rows)
        for sk in reversed(keys):
            direction = SortDirection.ASC if sk.ascending else SortDirection.DESC
            result.sort(
                key=cmp_to_key(lambda a, b, f=sk.field, d=direction: compare_rows(a, b, f, d))
            )
        return result


def sort_rows(rows: Iterable[Row], sort: Optional[SortConfig]) -> List[Row]:
    if sort is None:
        return list(rows)
    return MultiColumnSorter(rows).sort([SortKey.from_config(sort)])


def next_sort(current: Optional[SortConfig], field: str) -> Optional[SortConfig]:
    """Header click transition for ``field``."""
    if current is None or current.key != field:
        return SortConfig(field, SortDirection.ASC)
    if current.direction is SortDirection.ASC:
        return SortConfig(field, SortDirection.DESC)
    return None
