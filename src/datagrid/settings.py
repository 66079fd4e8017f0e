"""Global configuration and constants for the data grid."""

from __future__ import annotations

import os
from typing import Final

GRID_TAG: Final = "smart-data-grid"

DEFAULT_PAGINATION_OPTIONS: Final = (10, 20, 30, 50, 100)
DEFAULT_ROWS_PER_PAGE: Final = 10
PAGE_WINDOW_SIZE: Final = 5  # page number buttons shown in the footer

THEMES: Final = ("modern", "classic", "dark")
DEFAULT_THEME: Final = "modern"

EXPORT_FORMATS: Final = ("csv", "json", "excel")
DEFAULT_EXPORT_FILE_NAME: Final = "data-export"

# Ring buffer size for the in-process log capture
LOG_CAPACITY: Final = int(os.environ.get("DATAGRID_LOG_CAPACITY", "200"))
