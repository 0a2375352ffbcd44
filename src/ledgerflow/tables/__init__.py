"""Tabular input and output."""
from .reader import read_rows, rows_from_records
from .writer import ReportWriter, select_window

__all__ = ["read_rows", "rows_from_records", "ReportWriter", "select_window"]
