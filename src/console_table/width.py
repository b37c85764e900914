"""
Display width measurement and width-aware padding.

Cell content is measured in terminal cells rather than characters, so
wide (CJK, emoji) and zero-width (combining) characters line up in
monospaced output. ANSI escape sequences are never counted.

A provider is chosen once per table from its text encoding:

- UTF-8 tables use ``WcwidthProvider`` (backed by the ``wcwidth`` library)
- any other codec uses ``CodecWidthProvider``, which counts encoded code
  units. That is exact for single-byte charsets and a degraded
  approximation for multi-byte ones.
"""

from __future__ import annotations

import codecs
import math
import re
from abc import ABC, abstractmethod
from typing import Protocol

import wcwidth

from .exceptions import ConfigurationError, InvalidAlignmentError
from .models import Align

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")

# codecs that prefix every encoded string with a byte-order mark
_BOM_FREE_CODECS = {
    "utf-8-sig": "utf-8",
    "utf-16": "utf-16-le",
    "utf-32": "utf-32-le",
}


def strip_ansi(text: str) -> str:
    """Remove ANSI escape sequences (colors, cursor movement) from text."""
    return ANSI_ESCAPE_RE.sub("", text)


class WidthProvider(Protocol):
    """Protocol for display width measurement."""

    def width(self, text: str) -> int:
        """Return the number of terminal cells ``text`` occupies, ignoring ANSI codes."""
        ...

    def pad(
        self, text: str, width: int, pad_char: str = " ", align: Align = Align.LEFT
    ) -> str:
        """Pad ``text`` to at least ``width`` cells."""
        ...

    def slice(self, text: str, start: int, length: int | None = None) -> str:
        """Return the part of ``text`` covering cells ``start`` to ``start + length``."""
        ...


class _CellWidthProvider(ABC):
    """Shared pad/slice logic for providers defined by a per-character width."""

    @abstractmethod
    def char_width(self, char: str) -> int:
        """Cells taken by a single character."""

    def width(self, text: str) -> int:
        return sum(self.char_width(char) for char in strip_ansi(text))

    def pad(
        self, text: str, width: int, pad_char: str = " ", align: Align = Align.LEFT
    ) -> str:
        """
        Pad text to a display width.

        Left alignment pads on the right, right alignment on the left and
        center alignment on both sides, with the odd cell going to the right.
        Text that is already wide enough is returned unchanged.

        Args:
            text: Text to pad
            width: Target width in cells
            pad_char: Fill text, repeated and trimmed to fit
            align: Align.LEFT, Align.CENTER or Align.RIGHT

        Raises:
            InvalidAlignmentError: If align is not an Align member
        """
        if not isinstance(align, Align):
            raise InvalidAlignmentError(align)

        missing = width - self.width(text)
        if missing <= 0:
            return text

        if align is Align.RIGHT:
            return self._fill(pad_char, missing) + text
        if align is Align.CENTER:
            left = missing // 2
            return self._fill(pad_char, left) + text + self._fill(pad_char, missing - left)
        return text + self._fill(pad_char, missing)

    def slice(self, text: str, start: int, length: int | None = None) -> str:
        """
        Cut text by display cells.

        A wide character that would straddle either edge of the range is
        dropped. ANSI sequences inside the range are kept as-is.
        """
        end = None if length is None else start + length
        out: list[str] = []
        col = 0
        i = 0
        while i < len(text):
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                if col >= start and (end is None or col < end):
                    out.append(match.group(0))
                i = match.end()
                continue
            char = text[i]
            w = self.char_width(char)
            if end is not None and col + w > end:
                break
            if col >= start:
                out.append(char)
            col += w
            i += 1
        return "".join(out)

    def _fill(self, pad_char: str, cells: int) -> str:
        if cells <= 0:
            return ""
        unit = self.width(pad_char)
        if unit <= 0:
            raise ConfigurationError("pad character", pad_char, "must have a visible width")
        fill = self.slice(pad_char * math.ceil(cells / unit), 0, cells)
        # a wide pad character can leave one cell short
        return fill + " " * (cells - self.width(fill))


class WcwidthProvider(_CellWidthProvider):
    """Unicode-aware widths from the wcwidth library."""

    def char_width(self, char: str) -> int:
        # wcwidth returns -1 for non-printable characters, treat as 0
        return max(wcwidth.wcwidth(char), 0)


class CodecWidthProvider(_CellWidthProvider):
    """
    Widths measured as encoded length in a given codec.

    Lengths count code units: bytes for 8-bit codecs, 2-byte units for
    UTF-16 and 4-byte units for UTF-32. Byte-order marks are never counted.
    """

    def __init__(self, encoding: str) -> None:
        self.encoding = codecs.lookup(encoding).name
        self._encoder = codecs.getencoder(_BOM_FREE_CODECS.get(self.encoding, self.encoding))
        self._unit = max(len(self._encoder(" ")[0]), 1)

    def char_width(self, char: str) -> int:
        return len(self._encoder(char, "replace")[0]) // self._unit

    def width(self, text: str) -> int:
        return len(self._encoder(strip_ansi(text), "replace")[0]) // self._unit


def get_width_provider(encoding: str = "utf-8") -> WidthProvider:
    """
    Select the width provider for a text encoding.

    Args:
        encoding: Any codec name known to Python

    Returns:
        WcwidthProvider for UTF-8 (with or without a BOM), CodecWidthProvider
        otherwise

    Raises:
        ConfigurationError: If the codec does not exist
    """
    try:
        name = codecs.lookup(encoding).name
    except (LookupError, TypeError) as e:
        raise ConfigurationError("encoding", encoding, "unknown text encoding") from e
    if name in ("utf-8", "utf-8-sig"):
        return WcwidthProvider()
    return CodecWidthProvider(name)
