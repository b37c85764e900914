"""Core models for console-table."""

import codecs
import os
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Union

from .exceptions import ConfigurationError


class Align(Enum):
    """Padding direction for a column whose cell is narrower than the column."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"

    @classmethod
    def parse(cls, value: Any) -> "Align":
        """
        Coerce a user supplied alignment into an Align.

        Accepts Align members, the names ``left``/``center``/``right``
        (any case), their one-letter forms ``l``/``c``/``r`` and the
        integers -1, 0 and 1 (left, center, right).

        Raises:
            ConfigurationError: If the value names no alignment
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            by_int = {-1: cls.LEFT, 0: cls.CENTER, 1: cls.RIGHT}
            if value in by_int:
                return by_int[value]
        if isinstance(value, str):
            key = value.strip().lower()
            by_name = {
                "left": cls.LEFT,
                "l": cls.LEFT,
                "center": cls.CENTER,
                "centre": cls.CENTER,
                "c": cls.CENTER,
                "right": cls.RIGHT,
                "r": cls.RIGHT,
            }
            if key in by_name:
                return by_name[key]
        raise ConfigurationError("alignment", value, "expected left, center or right")


@dataclass(frozen=True)
class Border:
    """
    Characters used to draw table borders.

    Attributes:
        rule: Horizontal character repeated across separator lines
        corner: Character where separator lines meet column boundaries
        vertical: Character between cells of a data or header line
    """

    rule: str
    corner: str
    vertical: str

    @property
    def enabled(self) -> bool:
        """True if separator lines should be drawn at all."""
        return bool(self.rule)

    @classmethod
    def ascii(cls) -> "Border":
        """The default ``-``/``+``/``|`` border."""
        return cls(rule="-", corner="+", vertical="|")

    @classmethod
    def none(cls) -> "Border":
        """No separator lines and no vertical bars."""
        return cls(rule="", corner="", vertical="")

    @classmethod
    def custom(cls, char: str) -> "Border":
        """A border drawn entirely with one character."""
        if not isinstance(char, str) or len(char) != 1:
            raise ConfigurationError("border", char, "custom borders must be a single character")
        return cls(rule=char, corner=char, vertical=char)

    @classmethod
    def parse(cls, value: Any) -> "Border":
        """
        Coerce a border specifier into a Border.

        ``"ascii"`` selects the default border, ``"none"``, ``""`` and
        ``None`` disable it, and any other single character is used for
        every part of the border.

        Raises:
            ConfigurationError: If the specifier is longer than one character
        """
        if isinstance(value, cls):
            return value
        if value is None or value == "":
            return cls.none()
        if isinstance(value, str):
            if value.lower() == "ascii":
                return cls.ascii()
            if value.lower() == "none":
                return cls.none()
        return cls.custom(value)


class Rule(Enum):
    """Marker for a row rendered as a horizontal separator."""

    RULE = "rule"

    def __repr__(self) -> str:
        return "RULE"


RULE = Rule.RULE


@dataclass
class DataRow:
    """A sparse row of cells keyed by column index."""

    cells: dict[int, Any] = field(default_factory=dict)

    def copy(self) -> "DataRow":
        """Return a row with its own cell mapping."""
        return DataRow(dict(self.cells))


Row = Union[DataRow, Rule]

DEFAULT_ENCODING = "utf-8"
DEFAULT_LINE_TERMINATOR = "\r\n"

ENV_PREFIX = "CONSOLE_TABLE_"
"""Prefix of the environment variables read by ``TableOptions.from_environment()``."""


def _decode_escapes(value: str) -> str:
    return value.replace("\\r", "\r").replace("\\n", "\n")


def _parse_padding(value: Any) -> int:
    if isinstance(value, bool):
        raise ConfigurationError("padding", value, "must be a non-negative integer")
    try:
        padding = int(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError("padding", value, "must be a non-negative integer") from e
    if padding < 0:
        raise ConfigurationError("padding", value, "must be a non-negative integer")
    return padding


@dataclass(frozen=True)
class TableOptions:
    """
    Table-wide rendering options.

    Attributes:
        align: Alignment for columns without an explicit setting
        border: Border characters (ASCII by default)
        padding: Spaces placed on both sides of every cell
        encoding: Text encoding; selects how display width is measured
        line_terminator: String placed after every output line
    """

    align: Align = Align.LEFT
    border: Border = field(default_factory=Border.ascii)
    padding: int = 1
    encoding: str = DEFAULT_ENCODING
    line_terminator: str = DEFAULT_LINE_TERMINATOR

    def __post_init__(self) -> None:
        if not isinstance(self.align, Align):
            raise ConfigurationError("alignment", self.align, "expected an Align member")
        if not isinstance(self.border, Border):
            raise ConfigurationError("border", self.border, "expected a Border")
        if not isinstance(self.padding, int) or isinstance(self.padding, bool) or self.padding < 0:
            raise ConfigurationError("padding", self.padding, "must be a non-negative integer")
        try:
            codecs.lookup(self.encoding)
        except (LookupError, TypeError) as e:
            raise ConfigurationError("encoding", self.encoding, "unknown text encoding") from e

    @classmethod
    def from_dict(cls, data: dict[str, Any], base: "TableOptions | None" = None) -> "TableOptions":
        """
        Build options from a mapping, such as the ``options`` block of a table document.

        Keys that are absent keep the value from ``base`` (or the defaults).
        """
        options = base or cls()
        changes: dict[str, Any] = {}
        if "align" in data:
            changes["align"] = Align.parse(data["align"])
        if "border" in data:
            changes["border"] = Border.parse(data["border"])
        if "padding" in data:
            changes["padding"] = _parse_padding(data["padding"])
        if "encoding" in data:
            changes["encoding"] = str(data["encoding"])
        if "line_terminator" in data:
            changes["line_terminator"] = _decode_escapes(str(data["line_terminator"]))
        return replace(options, **changes)

    @classmethod
    def from_environment(cls) -> "TableOptions":
        """Create TableOptions from ``CONSOLE_TABLE_*`` environment variables."""
        data: dict[str, Any] = {}
        for key in ("align", "border", "padding", "encoding", "line_terminator"):
            value = os.environ.get(ENV_PREFIX + key.upper())
            if value is not None:
                data[key] = value
        return cls.from_dict(data)
