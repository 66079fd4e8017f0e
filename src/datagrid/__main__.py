"""Module entrypoint for `python -m datagrid`.

Opens a demo window with a sample dataset, or rows/columns loaded from JSON
files given on the command line.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from datagrid.models import ColumnKind
from datagrid.services.grid_options import GridOptions
from datagrid.services.grid_registry import GridRegistry, register_default_grids
from datagrid.services.logging_service import LoggingService
from datagrid.settings import GRID_TAG

_logger = logging.getLogger("datagrid.demo")

SAMPLE_ROWS = [
    {"name": "Alice", "age": 30, "role": "Developer", "profile": "Open"},
    {"name": "Bob", "age": 25, "role": "Designer", "profile": "Open"},
    {"name": "Charlie", "age": 35, "role": "Manager", "profile": "Open"},
    {"name": "Dana", "age": 41, "role": "Developer", "profile": "Open"},
    {"name": "Eve", "age": 29, "role": "Security", "profile": "Open"},
    {"name": "Frank", "age": 52, "role": "Manager", "profile": "Open"},
]

SAMPLE_COLUMNS = [
    {"field": "name", "header": "Name"},
    {"field": "age", "header": "Age"},
    {"field": "role", "header": "Role"},
    {
        "field": "profile",
        "header": "Profile",
        "type": ColumnKind.LINK.value,
        "sortable": False,
        "click_handler": lambda row: _logger.info("Open profile of %s", row.get("name")),
    },
]


def _read(path: str | None) -> str | None:
    if not path:
        return None
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        _logger.warning("Cannot read %s: %s", path, exc)
        return ""


def main(argv: list[str] | None = None) -> int:  # pragma: no cover - runtime UI
    parser = argparse.ArgumentParser(prog="datagrid", description="Data grid demo")
    parser.add_argument("--data", help="JSON file with an array of row objects")
    parser.add_argument("--columns", help="JSON file with an array of column definitions")
    parser.add_argument("--options", help="JSON file with grid options")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    log_service = LoggingService()
    log_service.attach()

    from PyQt6.QtWidgets import QApplication

    from datagrid.views.data_grid_view import DataGridView

    app = QApplication.instance() or QApplication(sys.argv)
    options_text = _read(args.options)
    options = (
        GridOptions.from_json(options_text)
        if options_text is not None
        else GridOptions(title="Team", enable_selection=True, enable_export=True,
                         pagination_options=(5, 10, 20))
    )
    registry = GridRegistry()
    register_default_grids(registry)
    vm = registry.create(GRID_TAG, rows=SAMPLE_ROWS, columns=SAMPLE_COLUMNS, options=options)
    if args.data or args.columns:
        vm.load_json(data=_read(args.data), columns=_read(args.columns))
    view = DataGridView(vm)
    view.exportCompleted.connect(  # type: ignore
        lambda result: Path(vm.export_file_name(result)).write_text(result.content, encoding="utf-8")
    )
    view.resize(900, 480)
    view.show()
    return app.exec()


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
