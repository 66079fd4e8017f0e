"""ViewModel for the data grid.

Owns the raw rows, column definitions, options, view state and selection.
Every mutating operation recomputes the derived view synchronously through
``view_pipeline.compute`` and publishes it on the event bus before returning,
so whatever renders the grid only ever reads a fresh ``DerivedView``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional, Union

from datagrid.models import (
    ColumnDefinition,
    DerivedView,
    HeaderCheckState,
    Row,
    SortConfig,
    SortDirection,
    ViewState,
)
from datagrid.services.event_bus import EventBus, GridEvent
from datagrid.services.export_service import (
    ExportResult,
    ExportService,
    UnsupportedExportFormatError,
)
from datagrid.services.grid_options import GridOptions, parse_columns, parse_rows
from datagrid.services.multi_column_sort import next_sort
from datagrid.services.paginator import clamp_page, page_window
from datagrid.services.selection import (
    RowIdentity,
    SelectionCallback,
    SelectionTracker,
    value_identity,
)
from datagrid.services.view_pipeline import compute

__all__ = ["DataGridViewModel", "GridSummary"]

_logger = logging.getLogger(__name__)

ColumnLike = Union[ColumnDefinition, Mapping[str, Any]]

SORT_INDICATORS = {None: "↕", SortDirection.ASC: "↑", SortDirection.DESC: "↓"}


@dataclass
class GridSummary:
    start_index: int = 0
    end_index: int = 0
    total_filtered: int = 0
    total_raw: int = 0
    search_active: bool = False
    selected_count: int = 0

    def as_text(self) -> str:
        text = f"Showing {self.start_index} to {self.end_index} of {self.total_filtered} entries"
        if self.search_active:
            text += f" (filtered from {self.total_raw} total entries)"
        if self.selected_count:
            text += f" • {self.selected_count} selected"
        return text


def _coerce_columns(columns: Iterable[ColumnLike]) -> List[ColumnDefinition]:
    out: List[ColumnDefinition] = []
    for col in columns:
        out.append(col if isinstance(col, ColumnDefinition) else ColumnDefinition.from_mapping(col))
    return out


class DataGridViewModel:
    def __init__(
        self,
        rows: Optional[Iterable[Row]] = None,
        columns: Optional[Iterable[ColumnLike]] = None,
        options: Optional[GridOptions] = None,
        *,
        event_bus: Optional[EventBus] = None,
        export_service: Optional[ExportService] = None,
        on_selection_change: Optional[SelectionCallback] = None,
        row_identity: RowIdentity = value_identity,
    ):
        self.options = options or GridOptions()
        self.bus = event_bus or EventBus()
        self._export_service = export_service or ExportService()
        self._on_selection_change = on_selection_change
        self._raw: List[Row] = list(rows or [])
        self._columns: List[ColumnDefinition] = _coerce_columns(columns or [])
        default_sort = (
            SortConfig(self.options.default_sort_key) if self.options.default_sort_key else None
        )
        self.state = ViewState(sort=default_sort, rows_per_page=self.options.initial_rows_per_page)
        self.selection = SelectionTracker(self._selection_changed, identity=row_identity)
        self._view = self._recompute(publish=False)

    # Data ---------------------------------------------------------------
    @property
    def rows(self) -> List[Row]:
        return list(self._raw)

    @property
    def columns(self) -> List[ColumnDefinition]:
        return list(self._columns)

    def set_data(self, rows: Iterable[Row]) -> DerivedView:
        """Replace the data source; selection and page are reset."""
        self._raw = list(rows)
        self.state.current_page = 1
        if self.selection.count:
            self.selection.clear()
        self.bus.publish(GridEvent.DATA_CHANGED, len(self._raw))
        return self._recompute()

    def set_columns(self, columns: Iterable[ColumnLike]) -> DerivedView:
        self._columns = _coerce_columns(columns)
        return self._recompute()

    def load_json(
        self, data: Optional[str] = None, columns: Optional[str] = None
    ) -> DerivedView:
        """Load rows and/or columns from JSON text; malformed text loads as empty."""
        if columns is not None:
            self._columns = parse_columns(columns)
        if data is not None:
            return self.set_data(parse_rows(data))
        return self._recompute()

    def column(self, field: str) -> Optional[ColumnDefinition]:
        return next((c for c in self._columns if c.field == field), None)

    # Search / sort -------------------------------------------------------
    def set_search_term(self, term: str) -> DerivedView:
        term = term or ""
        if term == self.state.search_term:
            return self._view
        self.state.search_term = term
        self.state.current_page = 1
        return self._recompute()

    def toggle_sort(self, field: str) -> DerivedView:
        col = self.column(field)
        if col is None or not col.sortable:
            _logger.debug("Ignoring sort request for %r", field)
            return self._view
        self.state.sort = next_sort(self.state.sort, field)
        return self._recompute()

    def sort_indicator(self, field: str) -> str:
        sort = self.state.sort
        if sort is None or sort.key != field:
            return SORT_INDICATORS[None]
        return SORT_INDICATORS[sort.direction]

    # Pagination --------------------------------------------------------
    def set_rows_per_page(self, size: int) -> DerivedView:
        if not isinstance(size, int) or isinstance(size, bool) or size < 1:
            _logger.warning("Ignoring invalid rows per page %r", size)
            return self._view
        self.state.rows_per_page = size
        self.state.current_page = 1
        return self._recompute()

    def go_to_page(self, page: int) -> DerivedView:
        target = clamp_page(page, self._view.total_pages)
        if target == self.state.current_page:
            return self._view
        self.state.current_page = target
        return self._recompute()

    def first_page(self) -> DerivedView:
        return self.go_to_page(1)

    def previous_page(self) -> DerivedView:
        return self.go_to_page(self.state.current_page - 1)

    def next_page(self) -> DerivedView:
        return self.go_to_page(self.state.current_page + 1)

    def last_page(self) -> DerivedView:
        return self.go_to_page(self._view.total_pages)

    @property
    def can_go_previous(self) -> bool:
        return self.state.current_page > 1

    @property
    def can_go_next(self) -> bool:
        return self.state.current_page < self._view.total_pages

    def page_numbers(self) -> List[int]:
        return page_window(self.state.current_page, self._view.total_pages)

    # Selection -----------------------------------------------------------
    def toggle_row(self, row: Row) -> DerivedView:
        if self._selection_enabled():
            self.selection.toggle(row)
        return self._view

    def toggle_all(self) -> DerivedView:
        if self._selection_enabled():
            self.selection.toggle_all(self._view.sorted)
        return self._view

    def clear_selection(self) -> DerivedView:
        if self._selection_enabled():
            self.selection.clear()
        return self._view

    def is_selected(self, row: Row) -> bool:
        return self.selection.is_selected(row)

    def selected_rows(self) -> List[Row]:
        return self.selection.selected_rows()

    def header_state(self) -> HeaderCheckState:
        return self.selection.header_state(self._view.visible, self._view.sorted)

    # View ----------------------------------------------------------------
    def view(self) -> DerivedView:
        return self._view

    def summary(self) -> GridSummary:
        v = self._view
        return GridSummary(
            start_index=v.start_index,
            end_index=v.end_index,
            total_filtered=v.total_filtered,
            total_raw=v.total_raw,
            search_active=bool(self.options.searchable and self.state.search_term),
            selected_count=self.selection.count,
        )

    # Export --------------------------------------------------------------
    def export_rows(self) -> List[Row]:
        """Rows an export covers: the selection if any, else the whole result."""
        selected = self.selection.selected_rows()
        return selected if selected else list(self._view.sorted)

    def export(self, fmt: str) -> Optional[ExportResult]:
        try:
            if fmt not in self.options.export_formats:
                raise UnsupportedExportFormatError(f"Export format not enabled: {fmt}")
            result = self._export_service.export(self.export_rows(), self._columns, fmt)
        except UnsupportedExportFormatError as exc:
            _logger.warning("Export failed: %s", exc)
            self.bus.publish(GridEvent.EXPORT_FAILED, {"format": fmt, "error": str(exc)})
            return None
        self.bus.publish(
            GridEvent.EXPORT_COMPLETED, {"format": fmt, "rows": result.row_count}
        )
        return result

    def export_file_name(self, result: ExportResult) -> str:
        return f"{self.options.export_file_name}{result.suggested_extension}"

    # Internal ------------------------------------------------------------
    def _selection_enabled(self) -> bool:
        if not self.options.enable_selection:
            _logger.debug("Selection disabled; ignoring selection change")
            return False
        return True

    def _selection_changed(self, rows: List[Row]) -> None:
        if self._on_selection_change is not None:
            self._on_selection_change(rows)
        self.bus.publish(GridEvent.SELECTION_CHANGED, rows)

    def _compute(self) -> DerivedView:
        return compute(self._raw, self._columns, self.state, searchable=self.options.searchable)

    def _recompute(self, *, publish: bool = True) -> DerivedView:
        view = self._compute()
        if self.state.current_page > view.total_pages:
            # Result shrank under the current page
            self.state.current_page = 1
            view = self._compute()
        self._view = view
        if publish:
            self.bus.publish(GridEvent.VIEW_CHANGED, view)
        return view
