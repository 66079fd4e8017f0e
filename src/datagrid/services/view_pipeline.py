"""View pipeline: raw rows + view state -> rows to render and footer counts.

The pipeline is a pure function. It is recomputed on every state change
rather than cached, so there is no derived state to invalidate.

    raw --filter(search)--> filtered --sort--> sorted --page--> visible
"""

from __future__ import annotations

from typing import Sequence

from datagrid.models import ColumnDefinition, DerivedView, EmptyState, Row, ViewState
from datagrid.services.multi_column_sort import sort_rows
from datagrid.services.paginator import paginate, total_pages
from datagrid.services.row_matcher import filter_rows

__all__ = ["compute", "classify_empty_state"]


def classify_empty_state(
    raw: Sequence[Row], columns: Sequence[ColumnDefinition], result: Sequence[Row]
) -> EmptyState:
    if not raw:
        return EmptyState.NO_DATA_SOURCE
    if not columns:
        return EmptyState.NO_COLUMNS
    if not result:
        return EmptyState.NO_MATCHES
    return EmptyState.NONE


def compute(
    raw: Sequence[Row],
    columns: Sequence[ColumnDefinition],
    state: ViewState,
    *,
    searchable: bool = True,
) -> DerivedView:
    filtered = filter_rows(raw, columns, state.search_term) if searchable else list(raw)
    ordered = sort_rows(filtered, state.sort)
    page = max(1, state.current_page)
    size = max(1, state.rows_per_page)
    visible = paginate(ordered, page, size)
    if visible:
        start_index = (page - 1) * size + 1
        end_index = min(page * size, len(ordered))
    else:
        start_index = end_index = 0
    return DerivedView(
        filtered=filtered,
        sorted=ordered,
        visible=visible,
        total_pages=total_pages(len(ordered), size),
        current_page=page,
        start_index=start_index,
        end_index=end_index,
        total_filtered=len(ordered),
        total_raw=len(raw),
        empty_state=classify_empty_state(raw, columns, ordered),
    )
