"""Parsing of HTML data tables into chart series (BeautifulSoup).

Expected layout::

    <table id="sales">
      <thead><tr><th>Month</th><th>Jan</th><th>Feb</th></tr></thead>
      <tbody>
        <tr><th>Revenue</th><td>1,200</td><td>950</td></tr>
      </tbody>
    </table>

The first header cell titles the category axis; the remaining header cells
become point labels. Each body row is one series named by its ``th`` cell.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional

from bs4 import BeautifulSoup, Tag

from ..charting.interaction import plain_number
from ..charting.types import DataPoint, Series
from ..errors import DataShapeError

log = logging.getLogger(__name__)


@dataclass
class TableRow:
    title: str
    items: List[float] = field(default_factory=list)


@dataclass
class RawTable:
    title: str = ""
    headers: List[str] = field(default_factory=list)
    rows: List[TableRow] = field(default_factory=list)


def _parse_cell(text: str, *, row: int, column: int) -> float:
    cleaned = text.replace(",", "").strip()
    try:
        value = float(cleaned)
    except ValueError:
        value = math.nan
    if not math.isfinite(value):
        raise DataShapeError(
            f"Table cell is not a finite number: {text!r}",
            context={"row": row, "column": column, "text": text},
        )
    return value


def read_table(table: Tag) -> RawTable:
    """Extract header labels and numeric body rows from a ``<table>`` tag."""
    raw = RawTable()
    header_cells = table.select("thead > tr:first-child > th")
    for index, cell in enumerate(header_cells):
        text = cell.get_text(strip=True)
        if index == 0:
            raw.title = text
        else:
            raw.headers.append(text)

    for row_index, tr in enumerate(table.select("tbody > tr")):
        row = TableRow(title="")
        column = 0
        for cell in tr.find_all(["th", "td"], recursive=False):
            if cell.name == "th":
                row.title = cell.get_text(strip=True)
                continue
            row.items.append(_parse_cell(cell.get_text(), row=row_index, column=column))
            column += 1
        raw.rows.append(row)
    return raw


def table_to_series(raw: RawTable) -> List[Series]:
    """Pair header labels with row values; one series per body row."""
    out: List[Series] = []
    for row_index, row in enumerate(raw.rows):
        if len(row.items) < len(raw.headers):
            raise DataShapeError(
                f"Row {row.title!r} has {len(row.items)} values for {len(raw.headers)} columns",
                context={"row": row_index, "column": len(row.items)},
            )
        points = [
            DataPoint(
                label=header,
                value=value,
                tooltip=f"{row.title} {header}: {plain_number(value)}",
            )
            for header, value in zip(raw.headers, row.items)
        ]
        out.append(Series(name=row.title, data=points))
    return out


def parse_table_markup(table: Tag | str) -> List[Series]:
    """Parse a table tag (or markup containing one table) into series."""
    if isinstance(table, str):
        soup = BeautifulSoup(table, "html.parser")
        found = soup.find("table")
        if found is None:
            raise DataShapeError("Markup does not contain a <table> element")
        table = found
    return table_to_series(read_table(table))


def load_table(soup: BeautifulSoup, table_id: str) -> Optional[List[Series]]:
    """Series from the table with ``id=table_id``; ``None`` when absent."""
    table = soup.find("table", id=table_id)
    if table is None:
        log.debug("table %s not present in document", table_id)
        return None
    return parse_table_markup(table)


__all__ = ["TableRow", "RawTable", "read_table", "table_to_series", "parse_table_markup", "load_table"]
