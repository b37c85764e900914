"""
Render-time passes that turn a sparse grid into a rectangular layout.

The passes run on a snapshot of the table's grid, in this order:

1. filters: per-column transforms, in registration order
2. totals: a rule plus a row of column sums
3. normalization: fill every (row, column) slot, measure row heights
4. splitting: one line per newline-delimited segment of multi-line rows
5. sizing: widest display width per column
"""

from __future__ import annotations

import logging
import numbers
import re
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from .grid import Grid
from .models import RULE, Align, DataRow, Rule
from .width import WidthProvider, strip_ansi

logger = logging.getLogger(__name__)

LINE_BREAK_RE = re.compile(r"\r\n|\n|\r")

Line = list[str]
Filter = tuple[int, Callable[[Any], Any]]


@dataclass
class Layout:
    """
    A table ready to be drawn.

    Attributes:
        headers: Single-line header rows, one string per column
        rows: Single-line data rows, or RULE for separators
        widths: Display width of each column
        aligns: Alignment of each column
        heights: Pre-split height of each header line (keys -1, -2, ...)
            and data row (keys 0, 1, ...)
    """

    headers: list[Line] = field(default_factory=list)
    rows: list[Line | Rule] = field(default_factory=list)
    widths: list[int] = field(default_factory=list)
    aligns: list[Align] = field(default_factory=list)
    heights: dict[int, int] = field(default_factory=dict)

    @property
    def column_count(self) -> int:
        return len(self.widths)


# ---------------------------------------------------------------------------
# Filters & Totals
# ---------------------------------------------------------------------------


def apply_filters(grid: Grid, filters: Sequence[Filter]) -> None:
    """Run each filter over its column in every data row."""
    for col_index, callback in filters:
        for row in grid.rows.values():
            if row is RULE:
                continue
            row.cells[col_index] = callback(row.cells.get(col_index, ""))
        grid.update_bounds(col_index + 1)


def to_number(value: Any) -> int | float:
    """
    Coerce a cell into a number for totals.

    Ints and floats (not bools) are used unchanged and other real numbers
    such as Decimal or Fraction become floats, so every total adds up as
    int or float. Strings are parsed as int, then float. Anything else,
    including empty and unparseable strings, counts as 0.
    """
    if not isinstance(value, bool):
        if isinstance(value, (int, float)):
            return value
        if isinstance(value, (numbers.Real, Decimal)):
            return float(value)
    if isinstance(value, str):
        text = strip_ansi(value).strip()
        for parse in (int, float):
            try:
                return parse(text)
            except ValueError:
                continue
    if value not in (None, ""):
        logger.debug("Non-numeric cell %r counted as 0 in totals", value)
    return 0


def calculate_totals(grid: Grid, columns: Iterable[int]) -> None:
    """Append a rule and a row holding the sum of each total column."""
    columns = list(columns)
    if not columns:
        return

    totals: dict[int, int | float] = {col_index: 0 for col_index in columns}
    for row_index in sorted(grid.rows):
        row = grid.rows[row_index]
        if row is RULE:
            continue
        for col_index in columns:
            totals[col_index] += to_number(row.cells.get(col_index))

    grid.add_separator()
    grid.rows[grid.max_rows] = DataRow(dict(totals))
    grid.update_bounds(max(columns) + 1)
    logger.debug("Calculated totals for columns %s", columns)


# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------


def to_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def cell_height(text: str) -> int:
    """Number of newline-delimited segments in a cell."""
    return len(LINE_BREAK_RE.split(text))


def line_height(line: Line) -> int:
    return max((cell_height(cell) for cell in line), default=1)


def _column_count(grid: Grid) -> int:
    widest = grid.max_cols
    for cells in grid.headers:
        if cells:
            widest = max(widest, max(cells) + 1)
    for row in grid.rows.values():
        if row is not RULE and row.cells:
            widest = max(widest, max(row.cells) + 1)
    return widest


def normalize(grid: Grid) -> tuple[list[Line], list[Line | Rule], dict[int, int]]:
    """
    Fill the grid into rectangular lists and measure row heights.

    Missing cells become empty strings and missing rows become empty data
    rows. Heights are measured here, before any splitting.

    Returns:
        (header lines, data rows, heights keyed by row index; header
        lines use -1, -2, ...)
    """
    max_cols = _column_count(grid)
    grid.update_bounds(max_cols)

    heights: dict[int, int] = {}
    headers: list[Line] = []
    for offset, cells in enumerate(grid.headers):
        line = [to_text(cells.get(col_index)) for col_index in range(max_cols)]
        heights[-1 - offset] = line_height(line)
        headers.append(line)

    rows: list[Line | Rule] = []
    for row_index in range(grid.max_rows):
        row = grid.rows.get(row_index)
        if row is RULE:
            heights[row_index] = 1
            rows.append(RULE)
            continue
        cells = row.cells if row is not None else {}
        line = [to_text(cells.get(col_index)) for col_index in range(max_cols)]
        heights[row_index] = line_height(line)
        rows.append(line)

    return headers, rows, heights


# ---------------------------------------------------------------------------
# Multiline Splitting
# ---------------------------------------------------------------------------


def split_line(line: Line, height: int) -> list[Line]:
    """Split one line into ``height`` lines, one segment per column each."""
    segments = [LINE_BREAK_RE.split(cell) for cell in line]
    return [
        [parts[k] if k < len(parts) else "" for parts in segments] for k in range(height)
    ]


def split_multiline(
    lines: Sequence[Line | Rule], heights: Sequence[int]
) -> list[Line | Rule]:
    """
    Replace every line taller than one with its single-line pieces.

    ``heights[i]`` is the pre-split height of ``lines[i]``. Rules pass
    through untouched.
    """
    result: list[Line | Rule] = []
    for line, height in zip(lines, heights):
        if line is RULE or height <= 1:
            result.append(line)
        else:
            result.extend(split_line(line, height))
    return result


# ---------------------------------------------------------------------------
# Sizing
# ---------------------------------------------------------------------------


def column_widths(
    headers: Iterable[Line],
    rows: Iterable[Line | Rule],
    column_count: int,
    provider: WidthProvider,
) -> list[int]:
    """Widest display width of each column over headers and data rows."""
    widths = [0] * column_count
    for line in [*headers, *rows]:
        if line is RULE:
            continue
        for col_index, cell in enumerate(line):
            widths[col_index] = max(widths[col_index], provider.width(strip_ansi(cell)))
    return widths


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


def build_layout(
    grid: Grid,
    filters: Sequence[Filter],
    totals: Iterable[int] | None,
    provider: WidthProvider,
) -> Layout:
    """
    Run every render-time pass over a snapshot of ``grid``.

    The grid passed in is left untouched.
    """
    work = grid.snapshot()
    apply_filters(work, filters)
    if totals:
        calculate_totals(work, totals)

    headers, rows, heights = normalize(work)
    header_heights = [heights[-1 - offset] for offset in range(len(headers))]
    row_heights = [heights[row_index] for row_index in range(len(rows))]

    split_headers = split_multiline(headers, header_heights)
    split_rows = split_multiline(rows, row_heights)
    if len(split_headers) != len(headers) or len(split_rows) != len(rows):
        logger.debug(
            "Split multi-line cells: %d -> %d header lines, %d -> %d rows",
            len(headers),
            len(split_headers),
            len(rows),
            len(split_rows),
        )

    widths = column_widths(split_headers, split_rows, work.max_cols, provider)
    aligns = [work.align_for(col_index) for col_index in range(work.max_cols)]
    logger.debug("Column widths: %s", widths)

    return Layout(
        headers=split_headers,  # type: ignore[arg-type]
        rows=split_rows,
        widths=widths,
        aligns=aligns,
        heights=heights,
    )
