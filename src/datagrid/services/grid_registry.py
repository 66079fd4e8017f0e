"""Grid registry.

An explicit, host-owned registry mapping grid tags (``"smart-data-grid"``)
to factories. The host creates one registry at startup, registers the grids
it wants, and creates instances through it; nothing is registered
implicitly at import time.

Usage pattern:
    registry = GridRegistry()
    register_default_grids(registry)
    vm = registry.create("smart-data-grid", rows=rows, columns=columns)

In tests:
    with registry.override_context(**{"smart-data-grid": fake_factory}):
        ...
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from threading import RLock
from typing import Any, Callable, Dict, Generator, List

__all__ = [
    "GridRegistry",
    "GridAlreadyRegisteredError",
    "GridNotRegisteredError",
    "register_default_grids",
]

GridFactory = Callable[..., Any]


class GridAlreadyRegisteredError(RuntimeError):
    """Raised when attempting to register an existing tag without allow_override."""


class GridNotRegisteredError(KeyError):
    """Raised when a requested grid tag is not present."""


@dataclass
class GridRecord:
    tag: str
    factory: GridFactory
    origin: str | None = None  # optional metadata (e.g., module path)


class GridRegistry:
    """Thread-safe tag -> factory registry."""

    def __init__(self) -> None:
        self._lock = RLock()
        self._grids: Dict[str, GridRecord] = {}

    def register(
        self,
        tag: str,
        factory: GridFactory,
        *,
        allow_override: bool = False,
        origin: str | None = None,
    ) -> None:
        with self._lock:
            if tag in self._grids and not allow_override:
                raise GridAlreadyRegisteredError(f"Grid '{tag}' already registered")
            self._grids[tag] = GridRecord(tag=tag, factory=factory, origin=origin)

    def is_registered(self, tag: str) -> bool:
        with self._lock:
            return tag in self._grids

    def factory(self, tag: str) -> GridFactory:
        with self._lock:
            record = self._grids.get(tag)
            if record is None:
                raise GridNotRegisteredError(tag)
            return record.factory

    def create(self, tag: str, **kwargs: Any) -> Any:
        return self.factory(tag)(**kwargs)

    def unregister(self, tag: str) -> None:
        with self._lock:
            self._grids.pop(tag, None)

    def list_tags(self) -> List[str]:
        with self._lock:
            return list(self._grids)

    @contextmanager
    def override_context(self, **overrides: GridFactory) -> Generator[None, None, None]:
        """Temporarily replace factories; previous entries are restored on exit."""
        previous: Dict[str, GridRecord | None] = {}
        with self._lock:
            for tag, factory in overrides.items():
                previous[tag] = self._grids.get(tag)
                self._grids[tag] = GridRecord(tag=tag, factory=factory, origin="override")
        try:
            yield
        finally:
            with self._lock:
                for tag, prior in previous.items():
                    if prior is None:
                        self._grids.pop(tag, None)
                    else:
                        self._grids[tag] = prior


def register_default_grids(registry: GridRegistry) -> None:
    """Register the built-in grid under its standard tag."""
    from datagrid.settings import GRID_TAG
    from datagrid.viewmodels.data_grid_viewmodel import DataGridViewModel

    if not registry.is_registered(GRID_TAG):
        registry.register(GRID_TAG, DataGridViewModel, origin=__name__)
