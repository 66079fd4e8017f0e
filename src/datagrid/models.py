"""Grid-facing lightweight models: rows, columns, view state and derived view."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional

from .settings import DEFAULT_ROWS_PER_PAGE

__all__ = [
    "Row",
    "ColumnKind",
    "ColumnDefinition",
    "SortDirection",
    "SortConfig",
    "ViewState",
    "EmptyState",
    "HeaderCheckState",
    "DerivedView",
]

_logger = logging.getLogger(__name__)

Row = Mapping[str, Any]
RowPredicate = Callable[[Row], bool]
RowCallback = Callable[[Row], None]


class ColumnKind(str, Enum):
    TEXT = "text"
    LINK = "link"
    BUTTON = "button"


@dataclass(frozen=True)
class ColumnDefinition:
    field: str
    header: str
    kind: ColumnKind = ColumnKind.TEXT
    sortable: bool = True
    show_condition: Optional[RowPredicate] = None
    click_handler: Optional[RowCallback] = None

    @property
    def is_actionable(self) -> bool:
        """Link and button columns carry an action rather than data."""
        return self.kind in (ColumnKind.LINK, ColumnKind.BUTTON)

    def shows_action(self, row: Row) -> bool:
        if not self.is_actionable:
            return False
        if self.show_condition is None:
            return True
        return bool(self.show_condition(row))

    def activate(self, row: Row) -> None:
        if self.click_handler is not None:
            self.click_handler(row)

    @classmethod
    def from_mapping(cls, obj: Mapping[str, Any]) -> "ColumnDefinition":
        field_name = str(obj["field"])
        raw_kind = obj.get("type") or obj.get("kind") or ColumnKind.TEXT.value
        try:
            kind = ColumnKind(str(raw_kind).lower())
        except ValueError:
            _logger.warning("Unknown column type %r for field %r; using text", raw_kind, field_name)
            kind = ColumnKind.TEXT
        sortable = obj.get("sortable", True)
        return cls(
            field=field_name,
            header=str(obj.get("header") or obj.get("label") or field_name),
            kind=kind,
            sortable=True if sortable is None else bool(sortable),
            show_condition=obj.get("show_condition"),
            click_handler=obj.get("click_handler"),
        )


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class SortConfig:
    key: str
    direction: SortDirection = SortDirection.ASC

    @property
    def ascending(self) -> bool:
        return self.direction is SortDirection.ASC


@dataclass
class ViewState:
    search_term: str = ""
    sort: Optional[SortConfig] = None
    current_page: int = 1
    rows_per_page: int = DEFAULT_ROWS_PER_PAGE


class EmptyState(str, Enum):
    NONE = "none"
    NO_DATA_SOURCE = "no_data_source"
    NO_COLUMNS = "no_columns"
    NO_MATCHES = "no_matches"


class HeaderCheckState(str, Enum):
    UNCHECKED = "unchecked"
    PARTIAL = "partial"
    CHECKED = "checked"


@dataclass(frozen=True)
class DerivedView:
    filtered: List[Row] = field(default_factory=list)
    sorted: List[Row] = field(default_factory=list)
    visible: List[Row] = field(default_factory=list)
    total_pages: int = 1
    current_page: int = 1
    start_index: int = 0
    end_index: int = 0
    total_filtered: int = 0
    total_raw: int = 0
    empty_state: EmptyState = EmptyState.NO_DATA_SOURCE

    @property
    def is_empty(self) -> bool:
        return self.empty_state is not EmptyState.NONE

    def as_dict(self) -> Dict[str, Any]:
        return {
            "visible": len(self.visible),
            "total_pages": self.total_pages,
            "current_page": self.current_page,
            "start_index": self.start_index,
            "end_index": self.end_index,
            "total_filtered": self.total_filtered,
            "total_raw": self.total_raw,
            "empty_state": self.empty_state.value,
        }
