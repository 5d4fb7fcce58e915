"""HTML table ingestion."""

from .table_parser import RawTable, TableRow, load_table, parse_table_markup, read_table, table_to_series

__all__ = ["RawTable", "TableRow", "load_table", "parse_table_markup", "read_table", "table_to_series"]
