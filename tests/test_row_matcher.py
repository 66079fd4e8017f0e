from datagrid.models import ColumnDefinition
from datagrid.services.row_matcher import filter_rows, matches, to_text
from tests.factories import people, people_columns


def test_empty_term_matches_everything():
    cols = people_columns()
    assert all(matches(r, cols, "") for r in people())
    assert all(matches(r, cols, None) for r in people())


def test_case_insensitive_substring():
    cols = people_columns()
    rows = filter_rows(people(), cols, "ALI")
    assert [r["name"] for r in rows] == ["Alice"]


def test_numbers_match_by_decimal_text():
    cols = people_columns()
    assert [r["name"] for r in filter_rows(people(), cols, "25")] == ["Bob"]
    assert matches({"name": "x", "age": 30.0}, cols, "30")
    assert not matches({"name": "x", "age": 30.0}, cols, "30.0")


def test_booleans_match_literal_form():
    cols = [ColumnDefinition("active", "Active")]
    assert matches({"active": True}, cols, "tru")
    assert matches({"active": False}, cols, "false")


def test_missing_and_none_values_are_empty_text():
    cols = [ColumnDefinition("nickname", "Nickname")]
    assert not matches({}, cols, "none")
    assert not matches({"nickname": None}, cols, "none")
    assert matches({"nickname": None}, cols, "")


def test_only_column_fields_are_searched():
    cols = [ColumnDefinition("name", "Name")]
    assert not matches({"name": "Bob", "secret": "alice"}, cols, "alice")


def test_to_text_degrades_for_broken_str():
    class Broken:
        def __str__(self):
            raise RuntimeError("boom")

    assert to_text(Broken()) == ""
    assert to_text(None) == ""
    assert to_text(2.5) == "2.5"
    assert to_text(7) == "7"


def test_filter_preserves_order_and_is_subset():
    cols = people_columns()
    raw = people()
    rows = filter_rows(raw, cols, "e")
    assert [r["name"] for r in rows] == ["Alice", "Bob", "Charlie"]
    assert all(r in raw for r in rows)
