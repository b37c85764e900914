"""
ConsoleTable: build a table incrementally, then render it as text.

Example:
    from console_table import Align, ConsoleTable

    table = ConsoleTable()
    table.set_headers(["Name", "Score"])
    table.add_row(["Alice", 10])
    table.add_row(["Bob", 7])
    table.set_align(1, Align.RIGHT)
    table.calculate_totals_for([1])
    print(table)
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import replace
from typing import Any

from .exceptions import InvalidInputError
from .grid import Grid
from .layout import Filter, Layout, build_layout
from .models import RULE, Align, Border, Rule, TableOptions
from .render import TableRenderer
from .width import WidthProvider, get_width_provider

logger = logging.getLogger(__name__)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


class ConsoleTable:
    """
    A text table with borders, alignment, filters and totals.

    Rows and columns may be added in any order and with gaps; missing
    cells render empty. Rendering never modifies the stored data, so a
    table can be rendered repeatedly and changed between renders.
    """

    HORIZONTAL_RULE = RULE

    def __init__(
        self,
        align: Align | str | int = Align.LEFT,
        border: Border | str | None = "ascii",
        padding: int = 1,
        encoding: str = "utf-8",
        line_terminator: str = "\r\n",
        width_provider: WidthProvider | None = None,
    ) -> None:
        """
        Initialize an empty table.

        Args:
            align: Default alignment for columns (Align, name or -1/0/1)
            border: ``"ascii"``, a single border character, or None for none
            padding: Spaces on each side of every cell
            encoding: Text encoding used to measure display width
            line_terminator: Appended to every rendered line
            width_provider: Custom width measurement; overrides ``encoding``

        Raises:
            ConfigurationError: If any option is invalid
        """
        options = TableOptions(
            align=Align.parse(align),
            border=Border.parse(border),
            padding=padding,
            encoding=encoding,
            line_terminator=line_terminator,
        )
        self._init(options, width_provider)

    @classmethod
    def from_options(
        cls, options: TableOptions, width_provider: WidthProvider | None = None
    ) -> ConsoleTable:
        """Create an empty table from a TableOptions bundle."""
        table = cls.__new__(cls)
        table._init(options, width_provider)
        return table

    def _init(self, options: TableOptions, width_provider: WidthProvider | None) -> None:
        self._options = options
        self._width_provider = width_provider or get_width_provider(options.encoding)
        self._grid = Grid(options.align)
        self._filters: list[Filter] = []
        self._totals: list[int] = []

    @classmethod
    def from_array(
        cls,
        headers: Sequence[Any],
        data: Sequence[Sequence[Any] | Rule],
        return_object: bool = False,
    ) -> ConsoleTable | str:
        """
        Build a table from headers and a list of rows.

        Args:
            headers: Header cells
            data: Rows of cells; ``RULE`` entries become separators
            return_object: Return the table instead of its rendered text

        Raises:
            InvalidInputError: If headers, data or a row is not a sequence
        """
        if not _is_sequence(headers):
            raise InvalidInputError("headers", headers)
        if not _is_sequence(data):
            raise InvalidInputError("data", data)

        table = cls()
        table.set_headers(headers)
        for row in data:
            if row is RULE:
                table.add_separator()
            elif _is_sequence(row) or isinstance(row, Mapping):
                table.add_row(row)
            else:
                raise InvalidInputError("row", row)

        return table if return_object else table.get_table()

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def options(self) -> TableOptions:
        return self._options

    @property
    def width_provider(self) -> WidthProvider:
        return self._width_provider

    @property
    def max_cols(self) -> int:
        """Number of columns seen so far."""
        return self._grid.max_cols

    @property
    def max_rows(self) -> int:
        """One more than the highest row index holding data or a rule."""
        return self._grid.max_rows

    @property
    def headers(self) -> list[list[Any]]:
        """Header lines as lists, gaps filled with None."""
        return [
            [line.get(i) for i in range(max(line) + 1)] if line else []
            for line in self._grid.headers
        ]

    # -------------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------------

    def set_encoding(self, encoding: str) -> None:
        """Switch the text encoding and the width measurement that goes with it."""
        self._width_provider = get_width_provider(encoding)
        self._options = replace(self._options, encoding=encoding)

    def set_align(self, col_index: int, align: Align | str | int = Align.LEFT) -> None:
        """Set the alignment of one column."""
        self._grid.set_align(col_index, Align.parse(align))

    def add_filter(self, col_index: int, callback: Callable[[Any], Any]) -> None:
        """
        Register a transform for one column.

        Filters run at render time, in the order they were added, on every
        data row present at that moment. The callback receives the cell
        value and returns its replacement.
        """
        self._filters.append((col_index, callback))

    def calculate_totals_for(self, columns: Iterable[int]) -> None:
        """Add a totals row below the data, summing the given columns."""
        self._totals = list(columns)

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def set_headers(self, headers: Iterable[Any]) -> None:
        """Replace the header with a single line."""
        self._grid.set_headers(headers)

    def add_header_line(self, headers: Iterable[Any]) -> None:
        """Add another header line below the current ones."""
        self._grid.add_header_line(headers)

    def add_row(self, row: Iterable[Any], append: bool = True) -> None:
        """Add a row at the end, or at the top when ``append`` is False."""
        self._grid.add_row(row, append)

    def insert_row(self, row: Iterable[Any], row_index: int = 0) -> None:
        """Insert a row before the row currently at ``row_index``."""
        self._grid.insert_row(row, row_index)

    def add_col(self, col_data: Iterable[Any], col_index: int = 0, row_index: int = 0) -> None:
        """Fill column ``col_index`` downwards from ``row_index``."""
        self._grid.add_col(col_data, col_index, row_index)

    def add_data(
        self,
        data: Iterable[Iterable[Any] | Rule],
        col_index: int = 0,
        row_index: int = 0,
    ) -> None:
        """Write a block of rows with its top-left cell at (``row_index``, ``col_index``)."""
        self._grid.add_data(data, col_index, row_index)

    def add_separator(self) -> None:
        """Add a horizontal rule after the last row."""
        self._grid.add_separator()

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def layout(self) -> Layout:
        """Run filters, totals, normalization, splitting and sizing."""
        return build_layout(self._grid, self._filters, self._totals, self._width_provider)

    def get_table(self) -> str:
        """Render the table as text."""
        renderer = TableRenderer(
            self._width_provider,
            border=self._options.border,
            padding=self._options.padding,
            line_terminator=self._options.line_terminator,
        )
        output = renderer.render(self.layout())
        logger.debug("Rendered table: %d characters", len(output))
        return output

    render = get_table

    def __str__(self) -> str:
        return self.get_table()
