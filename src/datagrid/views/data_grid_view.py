"""DataGridView

QTableWidget-based presentation of a `DataGridViewModel`. The view holds no
grid state of its own: user actions are forwarded to the view model, and the
table is repopulated whenever the model publishes a recomputed view, and
check marks are updated in place on selection changes.
"""

from __future__ import annotations

from functools import partial
from typing import Dict, List, Optional

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QComboBox,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QLineEdit,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from datagrid.components.empty_state import EmptyStateWidget
from datagrid.models import ColumnDefinition, ColumnKind, EmptyState, HeaderCheckState, Row
from datagrid.services.event_bus import Event, GridEvent
from datagrid.services.row_matcher import to_text
from datagrid.viewmodels.data_grid_viewmodel import DataGridViewModel

__all__ = ["DataGridView"]

HEADER_CHECK_TEXT = {
    HeaderCheckState.UNCHECKED: "☐",
    HeaderCheckState.PARTIAL: "◪",
    HeaderCheckState.CHECKED: "☑",
}


class DataGridView(QWidget):
    exportCompleted = pyqtSignal(object)  # ExportResult

    def __init__(
        self, viewmodel: Optional[DataGridViewModel] = None, parent: Optional[QWidget] = None
    ):
        super().__init__(parent)
        self.viewmodel = viewmodel or DataGridViewModel()
        self._visible: List[Row] = []
        self._populating = False
        self._subscriptions = [
            self.viewmodel.bus.subscribe(GridEvent.VIEW_CHANGED, self._on_model_event),
            self.viewmodel.bus.subscribe(GridEvent.SELECTION_CHANGED, self._on_model_event),
        ]
        self._build_ui()
        self.refresh()

    # UI ---------------------------------------------------------------
    def _build_ui(self):
        options = self.viewmodel.options
        self.setObjectName("smartDataGrid")
        self.setProperty("theme", options.theme)
        root = QVBoxLayout(self)

        self.title_label = QLabel(options.title or "")
        self.title_label.setObjectName("gridTitle")
        self.title_label.setVisible(bool(options.title))
        root.addWidget(self.title_label)

        controls = QHBoxLayout()
        self.search_input = QLineEdit()
        self.search_input.setPlaceholderText("Search...")
        self.search_input.textChanged.connect(self.viewmodel.set_search_term)  # type: ignore
        self.search_input.setVisible(options.searchable)
        controls.addWidget(self.search_input)
        controls.addStretch(1)
        controls.addWidget(QLabel("Show"))
        self.rows_combo = QComboBox()
        for size in options.pagination_options:
            self.rows_combo.addItem(str(size), size)
        self.rows_combo.currentIndexChanged.connect(self._on_rows_per_page_changed)  # type: ignore
        controls.addWidget(self.rows_combo)
        controls.addWidget(QLabel("entries"))
        self.export_buttons: Dict[str, QPushButton] = {}
        if options.enable_export:
            for fmt in options.export_formats:
                btn = QPushButton(fmt.upper())
                btn.clicked.connect(partial(self.export, fmt))  # type: ignore
                controls.addWidget(btn)
                self.export_buttons[fmt] = btn
        root.addLayout(controls)

        selection_bar = QHBoxLayout()
        self.selection_label = QLabel("")
        self.clear_selection_button = QPushButton("Clear")
        self.clear_selection_button.clicked.connect(self.viewmodel.clear_selection)  # type: ignore
        selection_bar.addWidget(self.selection_label)
        selection_bar.addWidget(self.clear_selection_button)
        selection_bar.addStretch(1)
        root.addLayout(selection_bar)

        self.table = QTableWidget(0, 0)
        self.table.verticalHeader().setVisible(False)
        self.table.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)
        header = self.table.horizontalHeader()
        header.setSectionResizeMode(QHeaderView.ResizeMode.ResizeToContents)
        header.setStretchLastSection(True)
        header.sectionClicked.connect(self._on_header_clicked)  # type: ignore
        self.table.itemChanged.connect(self._on_item_changed)  # type: ignore
        root.addWidget(self.table)

        self.empty_state = EmptyStateWidget()
        self.empty_state.actionRequested.connect(lambda _key: self.search_input.clear())  # type: ignore
        root.addWidget(self.empty_state)

        footer = QHBoxLayout()
        self.info_label = QLabel("")
        self.info_label.setObjectName("gridInfo")
        footer.addWidget(self.info_label)
        footer.addStretch(1)
        self.first_button = QPushButton("⏮")
        self.prev_button = QPushButton("◀")
        self.next_button = QPushButton("▶")
        self.last_button = QPushButton("⏭")
        self.first_button.clicked.connect(self.viewmodel.first_page)  # type: ignore
        self.prev_button.clicked.connect(self.viewmodel.previous_page)  # type: ignore
        self.next_button.clicked.connect(self.viewmodel.next_page)  # type: ignore
        self.last_button.clicked.connect(self.viewmodel.last_page)  # type: ignore
        self._page_layout = QHBoxLayout()
        self.page_buttons: List[QPushButton] = []
        footer.addWidget(self.first_button)
        footer.addWidget(self.prev_button)
        footer.addLayout(self._page_layout)
        footer.addWidget(self.next_button)
        footer.addWidget(self.last_button)
        root.addLayout(footer)

    # Rendering ----------------------------------------------------------
    def refresh(self):
        vm = self.viewmodel
        view = vm.view()
        self._visible = list(view.visible)
        self._populate(vm.columns)
        self.empty_state.set_state(view.empty_state)
        self._refresh_selection_info()
        self._refresh_pagination()

    def sync_selection(self):
        """Update check marks in place; the rows themselves are unchanged."""
        vm = self.viewmodel
        if vm.options.enable_selection:
            self._populating = True
            try:
                for r, row in enumerate(self._visible):
                    item = self.table.item(r, 0)
                    if item is not None:
                        item.setCheckState(
                            Qt.CheckState.Checked if vm.is_selected(row) else Qt.CheckState.Unchecked
                        )
                header_item = self.table.horizontalHeaderItem(0)
                if header_item is not None:
                    header_item.setText(HEADER_CHECK_TEXT[vm.header_state()])
            finally:
                self._populating = False
        self._refresh_selection_info()

    def _refresh_selection_info(self):
        vm = self.viewmodel
        self.info_label.setText(vm.summary().as_text())
        count = vm.selection.count
        selection_visible = vm.options.enable_selection and count > 0
        self.selection_label.setText(f"{count} row(s) selected")
        self.selection_label.setVisible(selection_visible)
        self.clear_selection_button.setVisible(selection_visible)

    def _populate(self, columns: List[ColumnDefinition]):
        vm = self.viewmodel
        offset = 1 if vm.options.enable_selection else 0
        self._populating = True
        try:
            self.table.clear()
            self.table.setColumnCount(len(columns) + offset)
            headers = [HEADER_CHECK_TEXT[vm.header_state()]] if offset else []
            for col in columns:
                headers.append(
                    f"{col.header} {vm.sort_indicator(col.field)}" if col.sortable else col.header
                )
            self.table.setHorizontalHeaderLabels(headers)
            self.table.setRowCount(len(self._visible))
            for r, row in enumerate(self._visible):
                if offset:
                    check = QTableWidgetItem()
                    check.setFlags(Qt.ItemFlag.ItemIsUserCheckable | Qt.ItemFlag.ItemIsEnabled)
                    check.setCheckState(
                        Qt.CheckState.Checked if vm.is_selected(row) else Qt.CheckState.Unchecked
                    )
                    self.table.setItem(r, 0, check)
                for c, col in enumerate(columns, start=offset):
                    text = to_text(row.get(col.field))
                    if col.shows_action(row):
                        btn = QPushButton(text)
                        btn.setObjectName(
                            "linkButton" if col.kind is ColumnKind.LINK else "actionButton"
                        )
                        btn.clicked.connect(partial(self._activate, col, row))  # type: ignore
                        self.table.setCellWidget(r, c, btn)
                    else:
                        self.table.setItem(r, c, QTableWidgetItem(text))
        finally:
            self._populating = False

    def _refresh_pagination(self):
        vm = self.viewmodel
        for btn in self.page_buttons:
            self._page_layout.removeWidget(btn)
            btn.deleteLater()
        self.page_buttons = []
        for number in vm.page_numbers():
            btn = QPushButton(str(number))
            btn.setCheckable(True)
            btn.setChecked(number == vm.state.current_page)
            btn.clicked.connect(partial(self._go_to_page, number))  # type: ignore
            self._page_layout.addWidget(btn)
            self.page_buttons.append(btn)
        self.first_button.setEnabled(vm.can_go_previous)
        self.prev_button.setEnabled(vm.can_go_previous)
        self.next_button.setEnabled(vm.can_go_next)
        self.last_button.setEnabled(vm.can_go_next)

    # Callbacks ----------------------------------------------------------
    def _on_model_event(self, event: Event):
        if event.name == GridEvent.SELECTION_CHANGED.value:
            self.sync_selection()
        else:
            self.refresh()

    def _on_header_clicked(self, logical_index: int):
        vm = self.viewmodel
        if vm.options.enable_selection:
            if logical_index == 0:
                vm.toggle_all()
                return
            logical_index -= 1
        columns = vm.columns
        if 0 <= logical_index < len(columns):
            vm.toggle_sort(columns[logical_index].field)

    def _on_item_changed(self, item: QTableWidgetItem):
        if self._populating or not self.viewmodel.options.enable_selection:
            return
        if item.column() != 0 or item.row() >= len(self._visible):
            return
        self.viewmodel.toggle_row(self._visible[item.row()])

    def _on_rows_per_page_changed(self, index: int):
        size = self.rows_combo.itemData(index)
        if size is not None:
            self.viewmodel.set_rows_per_page(int(size))

    def _go_to_page(self, number: int, _checked: bool = False):
        self.viewmodel.go_to_page(number)

    def _activate(self, column: ColumnDefinition, row: Row, _checked: bool = False):
        column.activate(row)

    # API ----------------------------------------------------------------
    def export(self, fmt: str, _checked: bool = False):
        result = self.viewmodel.export(fmt)
        if result is not None:
            self.exportCompleted.emit(result)
        return result

    def header_check_state(self) -> HeaderCheckState:
        return self.viewmodel.header_state()

    def visible_texts(self, column: int) -> List[str]:
        """Cell texts of one table column, top to bottom."""
        out: List[str] = []
        for r in range(self.table.rowCount()):
            item = self.table.item(r, column)
            widget = self.table.cellWidget(r, column)
            if isinstance(widget, QPushButton):
                out.append(widget.text())
            else:
                out.append(item.text() if item else "")
        return out

    def is_empty_state_active(self) -> bool:
        return self.empty_state.state() is not EmptyState.NONE

    def closeEvent(self, event):  # pragma: no cover - UI teardown
        for sub in self._subscriptions:
            self.viewmodel.bus.unsubscribe(sub)
        super().closeEvent(event)
