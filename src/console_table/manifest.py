"""YAML, JSON and CSV table documents."""

from __future__ import annotations

import csv
import io
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .exceptions import ConfigurationError, DocumentError
from .models import RULE, Align, Rule, TableOptions
from .table import ConsoleTable

RULE_MARKER = "---"
"""A row written as this string (or as null) is drawn as a separator."""

FORMATS = ("auto", "yaml", "json", "csv")

_SUFFIX_FORMATS = {
    ".yaml": "yaml",
    ".yml": "yaml",
    ".json": "json",
    ".csv": "csv",
}


def _parse_row(row: Any, source: str) -> list[Any] | Rule:
    if row is None or row == RULE_MARKER:
        return RULE
    if isinstance(row, list):
        return row
    raise DocumentError(source, f"rows must be lists, got {type(row).__name__}")


def _parse_headers(headers: Any, source: str) -> list[list[Any]]:
    if headers is None:
        return []
    if not isinstance(headers, list):
        raise DocumentError(source, "headers must be a list")
    if not headers:
        return [[]]
    nested = [isinstance(h, list) for h in headers]
    if all(nested):
        return headers
    if any(nested):
        raise DocumentError(source, "headers must be all cells or all lists of cells")
    return [headers]


@dataclass(frozen=True)
class TableDocument:
    """
    Parsed table document.

    Example YAML:
        headers: [Name, Score]
        rows:
          - [Alice, 10]
          - ---
          - [Bob, 7]
        totals: [1]
        align: {1: right}
        options:
          border: ascii
          padding: 1
    """

    headers: list[list[Any]] = field(default_factory=list)
    rows: list[list[Any] | Rule] = field(default_factory=list)
    totals: list[int] = field(default_factory=list)
    align: dict[int, Align] = field(default_factory=dict)
    options: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, d: Any, source: str = "<data>") -> TableDocument:
        if not isinstance(d, dict):
            raise DocumentError(source, "top level must be a mapping")

        rows = d.get("rows") or []
        if not isinstance(rows, list):
            raise DocumentError(source, "rows must be a list")

        totals = d.get("totals") or []
        align = d.get("align") or {}
        options = d.get("options") or {}
        if not isinstance(totals, list) or not isinstance(align, dict):
            raise DocumentError(source, "totals must be a list and align a mapping")
        if not isinstance(options, dict):
            raise DocumentError(source, "options must be a mapping")

        try:
            return cls(
                headers=_parse_headers(d.get("headers"), source),
                rows=[_parse_row(row, source) for row in rows],
                totals=[int(col) for col in totals],
                align={int(col): Align.parse(value) for col, value in align.items()},
                options=dict(options),
            )
        except (TypeError, ValueError) as e:
            raise DocumentError(source, str(e)) from e
        except ConfigurationError as e:
            raise DocumentError(source, str(e)) from e

    @classmethod
    def from_csv(cls, text: str, source: str = "<csv>") -> TableDocument:
        """First record is the header line, the rest are rows."""
        try:
            records = list(csv.reader(io.StringIO(text)))
        except csv.Error as e:
            raise DocumentError(source, str(e)) from e
        if not records:
            return cls()
        return cls(headers=[records[0]], rows=list(records[1:]))

    @classmethod
    def loads(cls, text: str, fmt: str = "auto", source: str = "<string>") -> TableDocument:
        """
        Parse a document from text.

        ``auto`` reads YAML, which also accepts JSON.
        """
        if fmt == "csv":
            return cls.from_csv(text, source)
        try:
            if fmt == "json":
                data = json.loads(text)
            elif fmt in ("yaml", "auto"):
                data = yaml.safe_load(text)
            else:
                raise DocumentError(source, f"unknown format {fmt!r}")
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise DocumentError(source, str(e)) from e
        return cls.from_dict(data, source)

    @classmethod
    def load(cls, path: str | Path, fmt: str = "auto") -> TableDocument:
        """Read a document from a file, picking the format from its suffix when ``auto``."""
        path = Path(path)
        if fmt == "auto":
            fmt = _SUFFIX_FORMATS.get(path.suffix.lower(), "auto")
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise DocumentError(str(path), e.strerror or str(e)) from e
        return cls.loads(text, fmt, str(path))

    def table_options(self, base: TableOptions | None = None) -> TableOptions:
        """Options from the document layered over ``base``."""
        return TableOptions.from_dict(self.options, base)

    def build(self, options: TableOptions | None = None) -> ConsoleTable:
        """Create a populated ConsoleTable from this document."""
        table = ConsoleTable.from_options(options or self.table_options())
        for offset, line in enumerate(self.headers):
            if offset == 0:
                table.set_headers(line)
            else:
                table.add_header_line(line)
        for row in self.rows:
            if row is RULE:
                table.add_separator()
            else:
                table.add_row(row)
        for col_index, align in self.align.items():
            table.set_align(col_index, align)
        if self.totals:
            table.calculate_totals_for(self.totals)
        return table
