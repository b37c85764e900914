"""
Sparse row/column storage behind a console table.

Rows are kept in a mapping from row index to ``DataRow`` or ``RULE`` and
cells in a mapping from column index to value, so data can be written out
of order or with gaps. The bounds ``max_rows`` and ``max_cols`` are
re-derived after every mutation; missing cells are only filled in when a
render takes a snapshot.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from .models import RULE, Align, DataRow, Row, Rule

logger = logging.getLogger(__name__)


def as_cells(cells: Iterable[Any]) -> list[Any]:
    """Return cell values in order; mappings contribute their values."""
    if isinstance(cells, Mapping):
        return list(cells.values())
    return list(cells)


class Grid:
    """
    Headers, sparse rows, bounds and per-column alignment of a table.

    Attributes:
        headers: Header lines, each a mapping of column index to cell
        rows: Mapping of row index to DataRow or RULE
        max_cols: One more than the highest column index seen
        max_rows: One more than the highest row index present
        col_align: Alignment per column, extended as columns appear
    """

    def __init__(self, default_align: Align = Align.LEFT) -> None:
        self.default_align = default_align
        self.headers: list[dict[int, Any]] = []
        self.rows: dict[int, Row] = {}
        self.max_cols = 0
        self.max_rows = 0
        self.col_align: dict[int, Align] = {}

    # -------------------------------------------------------------------------
    # Headers
    # -------------------------------------------------------------------------

    def set_headers(self, cells: Iterable[Any]) -> None:
        """Replace all header lines with a single line."""
        values = as_cells(cells)
        self.headers = [dict(enumerate(values))]
        self._update_bounds(len(values))

    def add_header_line(self, cells: Iterable[Any]) -> None:
        """Append another header line below the existing ones."""
        values = as_cells(cells)
        self.headers.append(dict(enumerate(values)))
        self._update_bounds(len(values))

    # -------------------------------------------------------------------------
    # Rows
    # -------------------------------------------------------------------------

    def add_row(self, cells: Iterable[Any], append: bool = True) -> None:
        """Append a row after the last one, or prepend it at index 0."""
        values = as_cells(cells)
        row = DataRow(dict(enumerate(values)))
        if append:
            self.rows[self.max_rows] = row
        else:
            self._shift_rows(0)
            self.rows[0] = row
        logger.debug("Added row with %d cells (append=%s)", len(values), append)
        self._update_bounds(len(values))

    def insert_row(self, cells: Iterable[Any], at_index: int = 0) -> None:
        """Insert a row at ``at_index``, moving that row and later ones down by one."""
        values = as_cells(cells)
        self._shift_rows(at_index)
        self.rows[at_index] = DataRow(dict(enumerate(values)))
        logger.debug("Inserted row with %d cells at %d", len(values), at_index)
        self._update_bounds(len(values))

    def add_separator(self) -> None:
        """Append a horizontal rule."""
        self.rows[self.max_rows] = RULE
        self._update_bounds()

    # -------------------------------------------------------------------------
    # Overlays
    # -------------------------------------------------------------------------

    def add_col(self, cells: Iterable[Any], col_index: int = 0, start_row: int = 0) -> None:
        """Write one cell per value down ``col_index``, creating rows as needed."""
        row_index = start_row
        for value in as_cells(cells):
            self._data_row(row_index).cells[col_index] = value
            row_index += 1
        logger.debug("Added column %d over rows %d..%d", col_index, start_row, row_index - 1)
        self._update_bounds(col_index + 1)

    def add_data(
        self, rows: Iterable[Iterable[Any] | Rule], start_col: int = 0, start_row: int = 0
    ) -> None:
        """
        Overlay a block of rows starting at (``start_row``, ``start_col``).

        ``RULE`` entries replace the row at their position with a separator.
        """
        row_index = start_row
        widest = 0
        for entry in rows:
            if entry is RULE:
                self.rows[row_index] = RULE
            else:
                values = as_cells(entry)
                row = self._data_row(row_index)
                for offset, value in enumerate(values):
                    row.cells[start_col + offset] = value
                widest = max(widest, start_col + len(values))
            row_index += 1
        logger.debug("Added data block over rows %d..%d", start_row, row_index - 1)
        self._update_bounds(widest)

    # -------------------------------------------------------------------------
    # Alignment
    # -------------------------------------------------------------------------

    def set_align(self, col_index: int, align: Align) -> None:
        """Set the alignment of one column."""
        self.col_align[col_index] = align

    def align_for(self, col_index: int) -> Align:
        """Alignment of a column, falling back to the table default."""
        return self.col_align.get(col_index, self.default_align)

    # -------------------------------------------------------------------------
    # Snapshots
    # -------------------------------------------------------------------------

    def snapshot(self) -> Grid:
        """Copy headers and rows so a render can reshape them freely."""
        copy = Grid(self.default_align)
        copy.headers = [dict(line) for line in self.headers]
        copy.rows = {
            index: row if row is RULE else row.copy() for index, row in self.rows.items()
        }
        copy.max_cols = self.max_cols
        copy.max_rows = self.max_rows
        copy.col_align = dict(self.col_align)
        return copy

    def update_bounds(self, cell_count: int = 0) -> None:
        """Re-derive ``max_rows``/``max_cols`` after rows were added from outside."""
        self._update_bounds(cell_count)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _data_row(self, row_index: int) -> DataRow:
        row = self.rows.get(row_index)
        if not isinstance(row, DataRow):
            row = DataRow()
            self.rows[row_index] = row
        return row

    def _shift_rows(self, from_index: int) -> None:
        self.rows = {
            (index + 1 if index >= from_index else index): row
            for index, row in self.rows.items()
        }

    def _update_bounds(self, cell_count: int = 0) -> None:
        self.max_cols = max(self.max_cols, cell_count)
        self.max_rows = max(self.rows) + 1 if self.rows else 0
        for col_index in range(self.max_cols):
            self.col_align.setdefault(col_index, self.default_align)
