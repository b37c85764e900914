"""
Text renderer for laid-out tables.

This module provides a TableRenderer class that draws a ``Layout`` with
borders, cell padding and per-column alignment.
"""

from __future__ import annotations

from .layout import Layout, Line
from .models import RULE, Border
from .width import WidthProvider


class TableRenderer:
    """Render a layout as a bordered text block.

    Example output:
        +--------+-------+--------+
        | Name   | Count | Status |
        +--------+-------+--------+
        | item-1 |    10 | active |
        | item-2 |     5 | paused |
        +--------+-------+--------+
    """

    def __init__(
        self,
        width_provider: WidthProvider,
        border: Border | None = None,
        padding: int = 1,
        line_terminator: str = "\r\n",
    ) -> None:
        """Initialize the table renderer.

        Args:
            width_provider: Measures and pads cell text
            border: Border characters (ASCII when omitted)
            padding: Spaces on each side of every cell
            line_terminator: Appended to every output line
        """
        self._width = width_provider
        self._border = border if border is not None else Border.ascii()
        self._padding = padding
        self._eol = line_terminator

    def render(self, layout: Layout) -> str:
        """Render the layout as a string.

        Returns:
            The table, one terminator after every line, or an empty string
            when there are neither header lines nor data rows
        """
        if not layout.headers and not layout.rows:
            return ""

        separator = self.separator(layout.widths)
        lines: list[str] = []

        if separator is not None:
            lines.append(separator)
        for header in layout.headers:
            lines.append(self.row(header, layout))
        if layout.headers and separator is not None:
            lines.append(separator)

        for row in layout.rows:
            if row is RULE:
                if separator is not None:
                    lines.append(separator)
            else:
                lines.append(self.row(row, layout))

        if separator is not None:
            lines.append(separator)

        return "".join(line + self._eol for line in lines)

    def separator(self, widths: list[int]) -> str | None:
        """Build a horizontal separator line, or None when the border is disabled."""
        if not self._border.enabled:
            return None
        rule, corner = self._border.rule, self._border.corner
        pad = rule * self._padding
        return corner + pad + (pad + corner + pad).join(rule * w for w in widths) + pad + corner

    def row(self, cells: Line, layout: Layout) -> str:
        """Build one header or data line with every cell padded to its column."""
        padded = [
            self._width.pad(cell, width, " ", align)
            for cell, width, align in zip(cells, layout.widths, layout.aligns)
        ]
        vertical = self._border.vertical
        pad = " " * self._padding
        return vertical + pad + (pad + vertical + pad).join(padded) + pad + vertical
