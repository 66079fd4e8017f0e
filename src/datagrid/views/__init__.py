"""PyQt6 views for the data grid (import requires PyQt6)."""
