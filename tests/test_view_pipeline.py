from datagrid.models import EmptyState, SortConfig, SortDirection, ViewState
from datagrid.services.view_pipeline import compute
from tests.factories import numbered_columns, numbered_rows, people, people_columns


def test_search_scenario():
    view = compute(people(), people_columns(), ViewState(search_term="ali"))
    assert [r["name"] for r in view.visible] == ["Alice"]
    assert view.total_filtered == 1
    assert view.total_raw == 3


def test_sort_and_page_scenario():
    state = ViewState(sort=SortConfig("age"), current_page=2, rows_per_page=1)
    view = compute(people(), people_columns(), state)
    assert [r["name"] for r in view.sorted] == ["Bob", "Alice", "Charlie"]
    assert [r["name"] for r in view.visible] == ["Alice"]
    assert view.total_pages == 3
    assert (view.start_index, view.end_index) == (2, 2)


def test_visible_never_exceeds_page_size():
    rows = numbered_rows(23)
    for size in (1, 5, 10, 50):
        for page in range(1, 6):
            view = compute(rows, numbered_columns(), ViewState(current_page=page, rows_per_page=size))
            assert len(view.visible) <= size


def test_recompute_is_idempotent():
    state = ViewState(search_term="row-01", sort=SortConfig("id", SortDirection.DESC))
    rows, cols = numbered_rows(30), numbered_columns()
    assert compute(rows, cols, state) == compute(rows, cols, state)


def test_empty_term_keeps_all_rows():
    rows = numbered_rows(5)
    view = compute(rows, numbered_columns(), ViewState())
    assert view.filtered == rows
    assert view.sorted == rows


def test_search_disabled_ignores_term():
    view = compute(people(), people_columns(), ViewState(search_term="zzz"), searchable=False)
    assert view.total_filtered == 3
    assert view.empty_state is EmptyState.NONE


def test_counts_on_last_partial_page():
    view = compute(numbered_rows(23), numbered_columns(), ViewState(current_page=3, rows_per_page=10))
    assert (view.start_index, view.end_index) == (21, 23)
    assert [r["id"] for r in view.visible] == [21, 22, 23]


def test_page_past_end_is_empty_with_zero_counts():
    view = compute(numbered_rows(5), numbered_columns(), ViewState(current_page=4, rows_per_page=2))
    assert view.visible == []
    assert (view.start_index, view.end_index) == (0, 0)
    assert view.total_pages == 3


def test_three_distinct_empty_states():
    no_data = compute([], people_columns(), ViewState())
    no_columns = compute(people(), [], ViewState())
    no_matches = compute(people(), people_columns(), ViewState(search_term="nobody"))
    assert no_data.empty_state is EmptyState.NO_DATA_SOURCE
    assert no_columns.empty_state is EmptyState.NO_COLUMNS
    assert no_matches.empty_state is EmptyState.NO_MATCHES
    assert no_matches.total_pages == 1


def test_sorted_is_permutation_of_filtered():
    state = ViewState(search_term="1", sort=SortConfig("label", SortDirection.DESC))
    view = compute(numbered_rows(40), numbered_columns(), state)
    assert sorted(r["id"] for r in view.sorted) == sorted(r["id"] for r in view.filtered)
