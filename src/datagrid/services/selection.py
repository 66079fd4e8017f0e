"""Row selection tracking.

Selection is an insertion-ordered set of rows. Which rows count as "the same
row" is decided by an identity policy:

``value_identity`` (default)
    Two rows are the same when their full field mappings are equal, key
    order ignored. Duplicate-valued rows form a single selectable unit.
``field_identity(field)``
    Rows are identified by a caller-supplied stable key field, so rows with
    identical values but different keys are selected independently.

"Select all" is scoped to the whole filtered and sorted result (the
universe), while the indeterminate header state is scoped to the visible
page.
"""

from __future__ import annotations

import json
import math
from collections.abc import Hashable, Mapping
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence

from datagrid.models import HeaderCheckState, Row

__all__ = [
    "RowIdentity",
    "value_identity",
    "field_identity",
    "SelectionTracker",
]

RowIdentity = Callable[[Row], Hashable]
SelectionCallback = Callable[[List[Row]], None]


def _canonical(value: Any) -> Any:
    # 30 and 30.0 are the same number; True stays distinct from 1
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return int(value)
    if isinstance(value, Mapping):
        return {str(k): _canonical(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_canonical(v) for v in value]
    return value


def value_identity(row: Row) -> Hashable:
    return json.dumps(_canonical(row), sort_keys=True, default=repr)


def field_identity(field: str) -> RowIdentity:
    def _identity(row: Row) -> Hashable:
        value: Any = row.get(field)
        return value if isinstance(value, Hashable) else repr(value)

    return _identity


class SelectionTracker:
    def __init__(
        self,
        on_change: Optional[SelectionCallback] = None,
        *,
        identity: RowIdentity = value_identity,
    ) -> None:
        self._identity = identity
        self._on_change = on_change
        self._selected: Dict[Hashable, Row] = {}

    # Mutation ---------------------------------------------------------
    def toggle(self, row: Row) -> None:
        key = self._identity(row)
        if key in self._selected:
            del self._selected[key]
        else:
            self._selected[key] = row
        self._notify()

    def toggle_all(self, universe: Sequence[Row]) -> None:
        if self._keys() == {self._identity(r) for r in universe}:
            self._selected = {}
        else:
            self._selected = self._index(universe)
        self._notify()

    def select(self, rows: Iterable[Row]) -> None:
        self._selected = self._index(rows)
        self._notify()

    def clear(self) -> None:
        self._selected = {}
        self._notify()

    # Queries ----------------------------------------------------------
    @property
    def count(self) -> int:
        return len(self._selected)

    def selected_rows(self) -> List[Row]:
        return list(self._selected.values())

    def is_selected(self, row: Row) -> bool:
        return self._identity(row) in self._selected

    def is_all_selected(self, universe: Sequence[Row]) -> bool:
        wanted = {self._identity(r) for r in universe}
        if not wanted:
            return False
        return len(self._selected) == len(wanted) and all(k in self._selected for k in wanted)

    def is_partially_selected(self, page_slice: Sequence[Row], universe: Sequence[Row]) -> bool:
        hits = sum(1 for r in page_slice if self.is_selected(r))
        if hits == 0 or hits == len(page_slice):
            return False
        return not self.is_all_selected(universe)

    def header_state(self, page_slice: Sequence[Row], universe: Sequence[Row]) -> HeaderCheckState:
        if self.is_all_selected(universe):
            return HeaderCheckState.CHECKED
        if self.is_partially_selected(page_slice, universe):
            return HeaderCheckState.PARTIAL
        return HeaderCheckState.UNCHECKED

    # Internal ---------------------------------------------------------
    def _keys(self) -> set:
        return set(self._selected)

    def _index(self, rows: Iterable[Row]) -> Dict[Hashable, Row]:
        out: Dict[Hashable, Row] = {}
        for row in rows:
            out.setdefault(self._identity(row), row)
        return out

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change(self.selected_rows())
