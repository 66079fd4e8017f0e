import pytest

pytest.importorskip("PyQt6.QtWidgets")

from PyQt6.QtCore import Qt  # noqa: E402
from PyQt6.QtWidgets import QPushButton  # noqa: E402

from datagrid.components.empty_state import (  # noqa: E402
    EmptyStateRegistry,
    EmptyStateTemplate,
    EmptyStateWidget,
)
from datagrid.models import EmptyState, HeaderCheckState  # noqa: E402
from datagrid.services.grid_options import GridOptions  # noqa: E402
from datagrid.viewmodels.data_grid_viewmodel import DataGridViewModel  # noqa: E402
from datagrid.views.data_grid_view import DataGridView  # noqa: E402
from tests.factories import (  # noqa: E402
    action_columns,
    numbered_columns,
    numbered_rows,
    people,
    people_columns,
)


def _view(rows=None, columns=None, **options):
    vm = DataGridViewModel(
        people() if rows is None else rows,
        people_columns() if columns is None else columns,
        GridOptions.from_mapping(options),
    )
    return DataGridView(vm)


def test_renders_visible_rows(qapp):
    view = _view()
    assert view.table.rowCount() == 3
    assert view.table.columnCount() == 3
    assert view.visible_texts(0) == ["Alice", "Bob", "Charlie"]
    assert view.info_label.text() == "Showing 1 to 3 of 3 entries"
    assert not view.is_empty_state_active()


def test_header_shows_sort_indicator_and_click_sorts(qapp):
    view = _view()
    assert view.table.horizontalHeaderItem(1).text() == "Age ↕"
    view._on_header_clicked(1)
    assert view.visible_texts(0) == ["Bob", "Alice", "Charlie"]
    assert view.table.horizontalHeaderItem(1).text() == "Age ↑"
    view._on_header_clicked(1)
    assert view.visible_texts(0) == ["Charlie", "Alice", "Bob"]


def test_search_box_filters(qapp):
    view = _view()
    view.search_input.setText("ali")
    assert view.visible_texts(0) == ["Alice"]
    assert "(filtered from 3 total entries)" in view.info_label.text()


def test_no_matches_shows_empty_state_and_clear_action(qapp):
    view = _view()
    view.search_input.setText("nobody")
    assert view.table.rowCount() == 0
    assert view.is_empty_state_active()
    assert not view.empty_state.isHidden()
    assert view.empty_state.title_label.text() == "No data available"
    view.empty_state.action_button.click()
    assert view.search_input.text() == ""
    assert view.table.rowCount() == 3
    assert view.empty_state.isHidden()


def test_missing_data_and_columns_messages(qapp):
    no_data = _view(rows=[])
    assert no_data.empty_state.title_label.text() == "No data source provided"
    no_columns = _view(columns=[])
    assert no_columns.empty_state.title_label.text() == "No columns defined"


def test_pagination_buttons(qapp):
    view = _view(numbered_rows(25), numbered_columns(), pagination_options=[10, 20])
    assert [b.text() for b in view.page_buttons] == ["1", "2", "3"]
    assert not view.prev_button.isEnabled()
    view.next_button.click()
    assert view.viewmodel.state.current_page == 2
    assert view.visible_texts(0)[0] == "11"
    view.page_buttons[2].click()
    assert view.visible_texts(0) == ["21", "22", "23", "24", "25"]
    assert not view.last_button.isEnabled()
    assert view.info_label.text() == "Showing 21 to 25 of 25 entries"


def test_rows_per_page_combo(qapp):
    view = _view(numbered_rows(25), numbered_columns(), pagination_options=[10, 20])
    view.rows_combo.setCurrentIndex(1)
    assert view.viewmodel.state.rows_per_page == 20
    assert view.table.rowCount() == 20


def test_checkbox_toggles_selection(qapp):
    view = _view(enable_selection=True)
    assert view.table.columnCount() == 4
    view.table.item(1, 0).setCheckState(Qt.CheckState.Checked)
    assert view.viewmodel.selected_rows() == [people()[1]]
    assert view.header_check_state() is HeaderCheckState.PARTIAL
    assert view.table.horizontalHeaderItem(0).text() == "◪"
    assert "1 selected" in view.info_label.text()
    assert not view.clear_selection_button.isHidden()


def test_header_checkbox_selects_all(qapp):
    view = _view(numbered_rows(15), numbered_columns(), enable_selection=True)
    view._on_header_clicked(0)
    assert view.viewmodel.selection.count == 15
    assert view.table.horizontalHeaderItem(0).text() == "☑"
    assert all(
        view.table.item(r, 0).checkState() == Qt.CheckState.Checked
        for r in range(view.table.rowCount())
    )
    view.clear_selection_button.click()
    assert view.viewmodel.selection.count == 0
    assert view.clear_selection_button.isHidden()


def test_header_click_with_selection_sorts_shifted_column(qapp):
    view = _view(enable_selection=True)
    view._on_header_clicked(2)  # checkbox column is index 0
    assert view.viewmodel.state.sort.key == "age"


def test_action_buttons_follow_show_condition(qapp):
    clicks = []
    view = _view(columns=action_columns(clicks))
    delete_buttons = [view.table.cellWidget(r, 3) for r in range(3)]
    # Only Alice and Charlie are older than 26
    assert isinstance(delete_buttons[0], QPushButton)
    assert delete_buttons[1] is None
    view.table.cellWidget(0, 2).click()
    delete_buttons[2].click()
    assert [c["name"] for c in clicks] == ["Alice", "Charlie"]


def test_export_emits_result(qapp):
    view = _view(enable_export=True, export_formats=["csv"])
    assert list(view.export_buttons) == ["csv"]
    results = []
    view.exportCompleted.connect(results.append)
    view.export_buttons["csv"].click()
    assert len(results) == 1
    assert results[0].content.startswith("Name,Age,Role")
    assert view.export("json") is None


def test_title_visibility(qapp):
    assert not _view(title="People").title_label.isHidden()
    assert _view().title_label.isHidden()


def test_empty_state_widget_templates(qapp):
    widget = EmptyStateWidget()
    assert widget.isHidden()
    widget.set_state(EmptyState.NO_COLUMNS)
    assert not widget.isHidden()
    assert widget.action_button.isHidden()
    widget.set_state(EmptyState.NO_MATCHES)
    assert widget.action_button.text() == "Clear search"
    requested = []
    widget.actionRequested.connect(requested.append)
    widget.action_button.click()
    assert requested == ["no_matches"]
    widget.set_state(EmptyState.NONE)
    assert widget.isHidden()


def test_empty_state_registry_override(qapp):
    registry = EmptyStateRegistry()
    registry.register(EmptyStateTemplate(EmptyState.NO_DATA_SOURCE, "Nothing yet", "Load a file"))
    widget = EmptyStateWidget(registry)
    widget.set_state(EmptyState.NO_DATA_SOURCE)
    assert widget.title_label.text() == "Nothing yet"
    assert widget.desc_label.text() == "Load a file"
