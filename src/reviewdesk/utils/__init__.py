"""Utility modules for ReviewDesk."""

from .data_prep import export_to_json, format_rating, prepare_export, sort_newest_first

__all__ = [
    "export_to_json",
    "format_rating",
    "prepare_export",
    "sort_newest_first",
]
