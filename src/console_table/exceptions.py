"""Exceptions for console-table."""

from __future__ import annotations

from typing import Any

# ---------------------------------------------------------------------------
# Base Exception
# ---------------------------------------------------------------------------


class ConsoleTableError(Exception):
    """
    Base exception for all console-table errors.

    All exceptions raised by this library inherit from this class,
    allowing callers to catch all library-specific errors with a single
    except clause.
    """

    pass


# ---------------------------------------------------------------------------
# Configuration Exceptions
# ---------------------------------------------------------------------------


class ConfigurationError(ConsoleTableError):
    """
    Raised when a table option has an unusable value.

    Covers alignment names, border specifiers, padding widths and
    text encodings, whether they come from keyword arguments, environment
    variables or a table document.

    Attributes:
        option: Name of the offending option
        value: The rejected value
        reason: Human readable explanation
    """

    def __init__(self, option: str, value: Any, reason: str) -> None:
        self.option = option
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {option} {value!r}: {reason}")


class InvalidAlignmentError(ConfigurationError):
    """Raised when a pad operation is given an alignment mode it does not know."""

    def __init__(self, value: Any) -> None:
        super().__init__("alignment", value, "expected one of left, center, right")


# ---------------------------------------------------------------------------
# Input Exceptions
# ---------------------------------------------------------------------------


class InvalidInputError(ConsoleTableError):
    """
    Raised when headers or data are not sequences at all.

    Sparse or ragged rows are fine and get filled in at render time;
    this error is reserved for input that cannot be read as a table.
    """

    def __init__(self, name: str, value: Any) -> None:
        self.name = name
        self.value = value
        super().__init__(
            f"{name} must be a sequence, got {type(value).__name__}"
        )


class DocumentError(ConsoleTableError):
    """Raised when a table document cannot be read or has the wrong shape."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Cannot load table document {source}: {reason}")
