"""Smart data grid public API.

Curated, intentionally small surface for hosts embedding the grid. The
Qt-free core (models, services, view model) is re-exported here; the PyQt6
view lives in ``datagrid.views`` and is imported explicitly so headless
callers never pull in Qt.
"""

from __future__ import annotations

from .models import (  # noqa: F401
    ColumnDefinition,
    ColumnKind,
    DerivedView,
    EmptyState,
    HeaderCheckState,
    SortConfig,
    SortDirection,
    ViewState,
)
from .services.event_bus import Event, EventBus, GridEvent  # noqa: F401
from .services.export_service import (  # noqa: F401
    ExportFormat,
    ExportResult,
    ExportService,
    UnsupportedExportFormatError,
)
from .services.grid_options import GridOptions  # noqa: F401
from .services.grid_registry import GridRegistry, register_default_grids  # noqa: F401
from .services.selection import SelectionTracker, field_identity, value_identity  # noqa: F401
from .services.view_pipeline import compute  # noqa: F401
from .viewmodels.data_grid_viewmodel import DataGridViewModel, GridSummary  # noqa: F401

__version__ = "0.1.0"
