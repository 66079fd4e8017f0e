"""Reusable PyQt6 widgets used by grid views."""
