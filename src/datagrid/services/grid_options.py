"""Grid options and loose-input parsing.

Hosts often hand the grid JSON text (element attributes, config files) rather
than Python objects. Everything here is forgiving: malformed JSON or values
of the wrong type fall back to defaults with a logged warning and never
raise, so a bad attribute degrades to an empty grid instead of a crash.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from datagrid.models import ColumnDefinition, Row
from datagrid.settings import (
    DEFAULT_EXPORT_FILE_NAME,
    DEFAULT_PAGINATION_OPTIONS,
    DEFAULT_ROWS_PER_PAGE,
    DEFAULT_THEME,
    EXPORT_FORMATS,
    THEMES,
)

__all__ = ["GridOptions", "parse_rows", "parse_columns"]

_logger = logging.getLogger(__name__)

# Attribute spellings used by web hosts
_ALIASES = {
    "defaultSortKey": "default_sort_key",
    "paginationOptions": "pagination_options",
    "enableSelection": "enable_selection",
    "enableExport": "enable_export",
    "exportFormats": "export_formats",
    "exportFileName": "export_file_name",
}


@dataclass
class GridOptions:
    default_sort_key: Optional[str] = None
    pagination_options: Tuple[int, ...] = DEFAULT_PAGINATION_OPTIONS
    enable_selection: bool = False
    searchable: bool = True
    theme: str = DEFAULT_THEME
    title: Optional[str] = None
    enable_export: bool = False
    export_formats: Tuple[str, ...] = EXPORT_FORMATS
    export_file_name: str = DEFAULT_EXPORT_FILE_NAME
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def initial_rows_per_page(self) -> int:
        if not self.pagination_options:
            return DEFAULT_ROWS_PER_PAGE
        return self.pagination_options[0]

    def to_json_obj(self) -> Dict[str, Any]:
        return {
            "default_sort_key": self.default_sort_key,
            "pagination_options": list(self.pagination_options),
            "enable_selection": self.enable_selection,
            "searchable": self.searchable,
            "theme": self.theme,
            "title": self.title,
            "enable_export": self.enable_export,
            "export_formats": list(self.export_formats),
            "export_file_name": self.export_file_name,
        }

    @classmethod
    def from_mapping(cls, obj: Mapping[str, Any]) -> "GridOptions":
        obj = {_ALIASES.get(k, k): v for k, v in obj.items()}
        opts = cls()
        known = set(opts.to_json_obj())
        opts.extra = {k: v for k, v in obj.items() if k not in known}

        sort_key = obj.get("default_sort_key")
        if isinstance(sort_key, str) and sort_key:
            opts.default_sort_key = sort_key

        sizes = obj.get("pagination_options")
        if sizes is not None:
            valid = _positive_ints(sizes)
            if valid:
                opts.pagination_options = valid
            else:
                _logger.warning("Ignoring invalid pagination_options %r", sizes)

        for flag in ("enable_selection", "searchable", "enable_export"):
            if flag in obj:
                value = obj[flag]
                if isinstance(value, bool):
                    setattr(opts, flag, value)
                else:
                    _logger.warning("Ignoring non-boolean %s=%r", flag, value)

        theme = obj.get("theme")
        if theme is not None:
            if theme in THEMES:
                opts.theme = theme
            else:
                _logger.warning("Unknown theme %r; using %s", theme, DEFAULT_THEME)

        title = obj.get("title")
        if isinstance(title, str):
            opts.title = title

        formats = obj.get("export_formats")
        if isinstance(formats, (list, tuple)):
            opts.export_formats = tuple(f for f in formats if isinstance(f, str))

        name = obj.get("export_file_name")
        if isinstance(name, str) and name.strip():
            opts.export_file_name = name.strip()
        return opts

    @classmethod
    def from_json(cls, text: Optional[str]) -> "GridOptions":
        obj = _load_json(text, "options")
        if not isinstance(obj, dict):
            if obj is not None:
                _logger.warning("Grid options must be a JSON object; using defaults")
            return cls()
        return cls.from_mapping(obj)


def _positive_ints(values: Any) -> Tuple[int, ...]:
    if not isinstance(values, (list, tuple)):
        return ()
    return tuple(v for v in values if isinstance(v, int) and not isinstance(v, bool) and v > 0)


def _load_json(text: Optional[str], what: str) -> Any:
    if not text:
        return None
    try:
        return json.loads(text)
    except (TypeError, ValueError):
        _logger.warning("Invalid %s JSON; falling back to empty", what)
        return None


def parse_rows(text: Optional[str]) -> List[Row]:
    obj = _load_json(text, "data")
    if not isinstance(obj, list):
        return []
    return [r for r in obj if isinstance(r, dict)]


def parse_columns(text: Optional[str]) -> List[ColumnDefinition]:
    obj = _load_json(text, "columns")
    if not isinstance(obj, list):
        return []
    columns: List[ColumnDefinition] = []
    for item in obj:
        if not isinstance(item, dict) or not item.get("field"):
            # Legacy element attributes used {"key": ..., "label": ...}
            if isinstance(item, dict) and item.get("key"):
                item = {**item, "field": item["key"]}
            else:
                _logger.warning("Skipping column without a field: %r", item)
                continue
        columns.append(ColumnDefinition.from_mapping(item))
    return columns
