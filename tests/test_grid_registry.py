import pytest

from datagrid.services.grid_registry import (
    GridAlreadyRegisteredError,
    GridNotRegisteredError,
    GridRegistry,
    register_default_grids,
)
from datagrid.settings import GRID_TAG
from datagrid.viewmodels.data_grid_viewmodel import DataGridViewModel
from tests.factories import people, people_columns


def test_register_and_create():
    registry = GridRegistry()
    registry.register("grid", lambda **kw: kw)
    assert registry.create("grid", rows=[1]) == {"rows": [1]}


def test_double_register_raises():
    registry = GridRegistry()
    registry.register("grid", dict)
    with pytest.raises(GridAlreadyRegisteredError):
        registry.register("grid", list)
    registry.register("grid", list, allow_override=True)
    assert registry.factory("grid") is list


def test_missing_tag_raises():
    with pytest.raises(GridNotRegisteredError):
        GridRegistry().create("nope")


def test_unregister_and_list():
    registry = GridRegistry()
    registry.register("a", dict)
    registry.register("b", dict)
    registry.unregister("a")
    assert registry.list_tags() == ["b"]


def test_override_context_restores():
    registry = GridRegistry()
    registry.register("grid", dict)
    with registry.override_context(grid=list, extra=tuple):
        assert registry.factory("grid") is list
        assert registry.is_registered("extra")
    assert registry.factory("grid") is dict
    assert not registry.is_registered("extra")


def test_registries_are_isolated():
    first, second = GridRegistry(), GridRegistry()
    register_default_grids(first)
    assert first.is_registered(GRID_TAG)
    assert not second.is_registered(GRID_TAG)


def test_default_grid_factory_builds_viewmodel():
    registry = GridRegistry()
    register_default_grids(registry)
    register_default_grids(registry)  # idempotent
    vm = registry.create(GRID_TAG, rows=people(), columns=people_columns())
    assert isinstance(vm, DataGridViewModel)
    assert vm.view().total_raw == 3
