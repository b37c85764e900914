"""
console-table: fixed-width, border-drawn text tables.

This library renders tabular data for terminals and monospaced output:
- Sparse, self-healing grid (rows and columns in any order, with gaps)
- Display-width aware sizing and padding (wide characters, ANSI colors)
- Multi-line cells split into synchronized lines
- Per-column alignment, filters and totals
- ASCII, single-character or no borders

Example:
    from console_table import ConsoleTable

    print(ConsoleTable.from_array(["Name", "Score"], [["Alice", "10"], ["Bob", "7"]]))

    +-------+-------+
    | Name  | Score |
    +-------+-------+
    | Alice | 10    |
    | Bob   | 7     |
    +-------+-------+
"""

from .exceptions import (
    ConfigurationError,
    ConsoleTableError,
    DocumentError,
    InvalidAlignmentError,
    InvalidInputError,
)
from .layout import Layout
from .manifest import TableDocument
from .models import RULE, Align, Border, DataRow, Rule, TableOptions
from .render import TableRenderer
from .table import ConsoleTable
from .width import (
    CodecWidthProvider,
    WcwidthProvider,
    WidthProvider,
    get_width_provider,
    strip_ansi,
)

try:
    from ._version import __version__  # type: ignore[import-not-found]
except ImportError:
    __version__ = "0.0.0+unknown"

__all__ = [
    # Version
    "__version__",
    # Main classes
    "ConsoleTable",
    "TableDocument",
    "TableRenderer",
    "Layout",
    # Models
    "Align",
    "Border",
    "DataRow",
    "Rule",
    "RULE",
    "TableOptions",
    # Width measurement
    "WidthProvider",
    "WcwidthProvider",
    "CodecWidthProvider",
    "get_width_provider",
    "strip_ansi",
    # Exceptions
    "ConsoleTableError",
    "ConfigurationError",
    "InvalidAlignmentError",
    "InvalidInputError",
    "DocumentError",
]
