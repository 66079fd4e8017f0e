"""Export Service

Turns grid rows into CSV / JSON / spreadsheet text.

Export works in two steps:
 - ``project_rows`` flattens rows through the column list, dropping action
   columns (links and buttons) which carry no exportable data.
 - ``ExportService.export`` serializes the projection for a format tag.

Which rows are exported (selection or the whole filtered result) is decided
by the caller. The ``excel`` format produces an HTML table, which spreadsheet
applications open directly as an ``.xls`` file.
"""

from __future__ import annotations

import csv
import html
import json
from dataclasses import dataclass
from io import StringIO
from typing import AbstractSet, Any, Dict, List, Sequence

from datagrid.models import ColumnDefinition, ColumnKind, Row
from datagrid.services.row_matcher import to_text

__all__ = [
    "ExportFormat",
    "ExportResult",
    "ExportService",
    "UnsupportedExportFormatError",
    "export_columns",
    "project_rows",
]

ACTION_KINDS: AbstractSet[ColumnKind] = frozenset({ColumnKind.BUTTON, ColumnKind.LINK})


class ExportFormat:
    CSV = "csv"
    JSON = "json"
    EXCEL = "excel"

    ALL = (CSV, JSON, EXCEL)


class UnsupportedExportFormatError(ValueError):
    """Raised for a format tag the export service does not know."""


@dataclass
class ExportResult:
    format: str
    content: str
    suggested_extension: str
    row_count: int = 0


def export_columns(
    columns: Sequence[ColumnDefinition],
    exclude_kinds: AbstractSet[ColumnKind] = ACTION_KINDS,
) -> List[ColumnDefinition]:
    return [c for c in columns if c.kind not in exclude_kinds]


def project_rows(
    rows: Sequence[Row],
    columns: Sequence[ColumnDefinition],
    *,
    key_by: str = "header",
    exclude_kinds: AbstractSet[ColumnKind] = ACTION_KINDS,
) -> List[Dict[str, Any]]:
    """Flatten ``rows`` to dicts keyed by column header or by field name."""
    if key_by not in ("header", "field"):
        raise ValueError(f"key_by must be 'header' or 'field', not {key_by!r}")
    cols = export_columns(columns, exclude_kinds)
    out: List[Dict[str, Any]] = []
    for row in rows:
        flat: Dict[str, Any] = {}
        for col in cols:
            value = row.get(col.field)
            flat[getattr(col, key_by)] = "" if value is None else value
        out.append(flat)
    return out


def _cell_texts(row: Row, columns: Sequence[ColumnDefinition]) -> List[str]:
    # Read by field; headers need not be unique
    return [to_text(row.get(col.field)) for col in columns]


class ExportService:
    """Facade for converting grid rows to serialized text.

    Usage:
        result = ExportService().export(rows, columns, ExportFormat.CSV)
        path.write_text(result.content, encoding='utf-8')
    """

    def export(
        self, rows: Sequence[Row], columns: Sequence[ColumnDefinition], fmt: str
    ) -> ExportResult:
        if fmt == ExportFormat.CSV:
            return self._export_csv(rows, columns)
        if fmt == ExportFormat.JSON:
            return self._export_json(rows, columns)
        if fmt == ExportFormat.EXCEL:
            return self._export_excel(rows, columns)
        raise UnsupportedExportFormatError(f"Unsupported export format: {fmt}")

    # CSV -----------------------------------------------------------------
    def _export_csv(self, rows: Sequence[Row], columns: Sequence[ColumnDefinition]) -> ExportResult:
        cols = export_columns(columns)
        headers = [c.header for c in cols]
        sio = StringIO()
        writer = csv.writer(sio)
        if headers:
            writer.writerow(headers)
        for row in rows:
            writer.writerow(_cell_texts(row, cols))
        return ExportResult(
            format=ExportFormat.CSV,
            content=sio.getvalue(),
            suggested_extension=".csv",
            row_count=len(rows),
        )

    # JSON ----------------------------------------------------------------
    def _export_json(self, rows: Sequence[Row], columns: Sequence[ColumnDefinition]) -> ExportResult:
        payload = project_rows(rows, columns, key_by="field")
        content = json.dumps(payload, ensure_ascii=False, indent=2, default=str)
        return ExportResult(
            format=ExportFormat.JSON,
            content=content,
            suggested_extension=".json",
            row_count=len(rows),
        )

    # Excel (HTML table) --------------------------------------------------
    def _export_excel(
        self, rows: Sequence[Row], columns: Sequence[ColumnDefinition]
    ) -> ExportResult:
        cols = export_columns(columns)
        headers = [c.header for c in cols]
        lines = [
            "<html>",
            '<head><meta charset="utf-8"></head>',
            "<body>",
            "<table>",
            "<thead><tr>" + "".join(f"<th>{html.escape(h)}</th>" for h in headers) + "</tr></thead>",
            "<tbody>",
        ]
        for row in rows:
            cells = "".join(f"<td>{html.escape(text)}</td>" for text in _cell_texts(row, cols))
            lines.append(f"<tr>{cells}</tr>")
        lines.extend(["</tbody>", "</table>", "</body>", "</html>"])
        return ExportResult(
            format=ExportFormat.EXCEL,
            content="\n".join(lines) + "\n",
            suggested_extension=".xls",
            row_count=len(rows),
        )
